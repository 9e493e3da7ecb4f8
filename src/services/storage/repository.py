"""
CRUD repository for the ``transactions`` table.

``TransactionRepository`` receives an ``AsyncSession`` and provides all
data-access methods.  It calls ``flush()`` rather than ``commit()`` so
that transaction boundaries are controlled by the caller (typically
:func:`get_session`).

Records are only ever changed through these methods; callers never mutate
ORM objects they were handed.
"""

import logging
import uuid
from collections.abc import Iterable
from datetime import UTC, datetime

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import InvalidUpdateError, TransactionNotFoundError
from src.services.ledger import append_note
from src.services.storage.models_db import Transaction

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset({"notes"})


class TransactionRepository:
    """Data-access layer for poker transactions.

    All methods use ``flush()`` instead of ``commit()`` so transaction
    boundaries are controlled by the caller (typically ``get_session()``
    context manager which commits on clean exit).

    Args:
        session: An active SQLAlchemy ``AsyncSession``.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_transaction(
        self,
        amount: int,
        date: datetime | None = None,
    ) -> Transaction:
        """Insert and return a new transaction with empty notes."""
        transaction = Transaction(
            id=str(uuid.uuid4()),
            amount=amount,
            date=date or datetime.now(UTC),
            notes="",
        )
        self._session.add(transaction)
        await self._session.flush()
        logger.info("Created transaction %s (amount=%d)", transaction.id, amount)
        return transaction

    async def get_transaction(self, transaction_id: str) -> Transaction:
        """Return a transaction by ID or raise :class:`TransactionNotFoundError`."""
        transaction = await self._session.get(Transaction, transaction_id)
        if transaction is None:
            raise TransactionNotFoundError(transaction_id)
        return transaction

    async def list_transactions(self) -> list[Transaction]:
        """Return every transaction, newest first."""
        stmt = select(Transaction).order_by(Transaction.date.desc())
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def count_transactions(self) -> int:
        result = await self._session.execute(select(func.count()).select_from(Transaction))
        return result.scalar_one()

    async def get_total(self) -> int:
        """Sum of all amounts, computed by the database on every call."""
        result = await self._session.execute(select(func.coalesce(func.sum(Transaction.amount), 0)))
        return int(result.scalar_one())

    async def update_transaction(self, transaction_id: str, **fields) -> Transaction:
        """Apply an explicit field update.

        Only ``notes`` may change; ``id``, ``amount`` and ``date`` are fixed at
        creation.

        Raises:
            InvalidUpdateError: If any other field is passed.
            TransactionNotFoundError: If the ID is unknown.
        """
        rejected = set(fields) - _UPDATABLE_FIELDS
        if rejected:
            raise InvalidUpdateError(list(rejected))
        transaction = await self.get_transaction(transaction_id)
        for name, value in fields.items():
            setattr(transaction, name, value)
        await self._session.flush()
        return transaction

    async def append_notes(self, transaction_id: str, text: str) -> Transaction:
        """Append transcribed text to the transaction's notes."""
        transaction = await self.get_transaction(transaction_id)
        return await self.update_transaction(
            transaction_id, notes=append_note(transaction.notes, text)
        )

    async def delete_transaction(self, transaction_id: str) -> None:
        """Delete a single transaction; there is no undo."""
        transaction = await self.get_transaction(transaction_id)
        await self._session.delete(transaction)
        await self._session.flush()
        logger.info("Deleted transaction %s", transaction_id)

    async def delete_transactions(self, transaction_ids: Iterable[str]) -> list[str]:
        """Delete several transactions at once. Unknown IDs are skipped.

        Returns:
            IDs of the rows actually removed.
        """
        ids = list(dict.fromkeys(transaction_ids))
        if not ids:
            return []
        found = await self._session.execute(
            select(Transaction.id).where(Transaction.id.in_(ids))
        )
        existing = list(found.scalars().all())
        if existing:
            await self._session.execute(delete(Transaction).where(Transaction.id.in_(existing)))
            await self._session.flush()
        logger.info("Deleted %d of %d requested transactions", len(existing), len(ids))
        return existing
