"""
Transaction REST endpoints.

CRUD for buy-ins and exits, the running total, and voice-note
transcription appended to a transaction's notes. Data access is delegated
to ``TransactionRepository``; the voice-note cycle to ``AnnotationWorkflow``.
"""

import logging

from fastapi import APIRouter, File, UploadFile

from src.core.config import get_settings
from src.core.models import (
    BatchDeleteRequest,
    BatchDeleteResponse,
    TotalResponse,
    TransactionCreate,
    TransactionKind,
    TransactionListResponse,
    TransactionResponse,
    TransactionUpdate,
    TranscriptionResponse,
)
from src.services import annotation
from src.services.audio.capture import discard_recording
from src.services.ledger import compute_total, is_exit, signed_amount
from src.services.storage.database import get_session
from src.services.storage.repository import TransactionRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["transactions"])

_UPLOAD_CHUNK_SIZE = 64 * 1024


def _to_response(transaction) -> TransactionResponse:
    """Convert an ORM Transaction object to its API response model."""
    return TransactionResponse(
        id=transaction.id,
        amount=transaction.amount,
        kind=TransactionKind.exit if is_exit(transaction.amount) else TransactionKind.buy_in,
        date=transaction.date,
        notes=transaction.notes,
    )


def _forget_audio(transaction_id: str) -> None:
    settings = get_settings()
    annotation.release_workflow(transaction_id)
    if discard_recording(settings.recordings_dir, transaction_id, settings.audio_extension):
        logger.debug("Removed voice note for %s", transaction_id)


@router.get("", response_model=TransactionListResponse)
async def list_transactions():
    """List all transactions newest first, with the running total."""
    async with get_session() as session:
        repo = TransactionRepository(session)
        transactions = await repo.list_transactions()
    return TransactionListResponse(
        transactions=[_to_response(t) for t in transactions],
        total=compute_total(t.amount for t in transactions),
    )


@router.post("", response_model=TransactionResponse)
async def create_transaction(body: TransactionCreate):
    """Record a buy-in (stored negative) or an exit (stored positive)."""
    async with get_session() as session:
        repo = TransactionRepository(session)
        transaction = await repo.create_transaction(
            amount=signed_amount(body.amount, body.is_buy_in)
        )
    return _to_response(transaction)


@router.get("/total", response_model=TotalResponse)
async def get_total():
    """Return the sum of all amounts and the number of transactions."""
    async with get_session() as session:
        repo = TransactionRepository(session)
        total = await repo.get_total()
        count = await repo.count_transactions()
    return TotalResponse(total=total, count=count)


@router.post("/delete", response_model=BatchDeleteResponse)
async def delete_transactions(body: BatchDeleteRequest):
    """Delete several transactions at once; unknown IDs are ignored."""
    async with get_session() as session:
        repo = TransactionRepository(session)
        deleted = await repo.delete_transactions(body.ids)
    for transaction_id in deleted:
        _forget_audio(transaction_id)
    return BatchDeleteResponse(deleted=len(deleted))


@router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(transaction_id: str):
    async with get_session() as session:
        repo = TransactionRepository(session)
        transaction = await repo.get_transaction(transaction_id)
    return _to_response(transaction)


@router.patch("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(transaction_id: str, body: TransactionUpdate):
    """Replace the notes of a transaction."""
    async with get_session() as session:
        repo = TransactionRepository(session)
        transaction = await repo.update_transaction(
            transaction_id, **body.model_dump(exclude_unset=True)
        )
    return _to_response(transaction)


@router.delete("/{transaction_id}", response_model=BatchDeleteResponse)
async def delete_transaction(transaction_id: str):
    """Delete one transaction and its voice note, if any."""
    async with get_session() as session:
        repo = TransactionRepository(session)
        await repo.delete_transaction(transaction_id)
    _forget_audio(transaction_id)
    return BatchDeleteResponse(deleted=1)


@router.post("/{transaction_id}/transcribe", response_model=TranscriptionResponse)
async def transcribe_voice_note(transaction_id: str, file: UploadFile = File(...)):
    """Store an uploaded voice note, transcribe it, and append the text to the notes.

    On any failure the notes are left untouched and the error envelope carries
    the user-facing message.
    """
    async with get_session() as session:
        repo = TransactionRepository(session)
        await repo.get_transaction(transaction_id)

    workflow = annotation.get_workflow(transaction_id)
    if not workflow.start_recording():
        raise workflow.error

    try:
        while chunk := await file.read(_UPLOAD_CHUNK_SIZE):
            workflow.write(chunk)
    except Exception:
        workflow.abort()
        raise

    notes = await workflow.stop_and_transcribe()
    if notes is None:
        raise workflow.error

    async with get_session() as session:
        repo = TransactionRepository(session)
        transaction = await repo.get_transaction(transaction_id)
    return TranscriptionResponse(transaction=_to_response(transaction), text=workflow.last_text)
