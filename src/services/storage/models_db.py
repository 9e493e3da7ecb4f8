"""
SQLAlchemy ORM models for the Poker Tracker schema.

Tables: ``transactions``.
"""

from datetime import UTC, datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.services.storage.database import Base


class Transaction(Base):
    """A single buy-in (negative amount) or exit (positive amount)."""

    __tablename__ = "transactions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    amount: Mapped[int] = mapped_column()
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), index=True
    )
    notes: Mapped[str] = mapped_column(Text, default="")

    def __repr__(self) -> str:
        return f"<Transaction id={self.id} amount={self.amount}>"
