"""
Pydantic v2 request / response models used across the API layer.
"""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """GET /health response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: datetime


# ---------------------------------------------------------------------------
# Transaction
# ---------------------------------------------------------------------------


class TransactionKind(StrEnum):
    """Direction of money for a transaction, derived from the amount sign."""

    buy_in = "buy_in"
    exit = "exit"


class TransactionCreate(BaseModel):
    """POST /transactions request body.

    ``amount`` is a magnitude; its sign is ignored and replaced by the one
    implied by ``is_buy_in``.
    """

    amount: int
    is_buy_in: bool = True


class TransactionUpdate(BaseModel):
    """PATCH /transactions/{id} request body."""

    model_config = ConfigDict(extra="forbid")

    notes: str


class TransactionResponse(BaseModel):
    """Standard transaction representation returned by the API."""

    id: str
    amount: int
    kind: TransactionKind
    date: datetime
    notes: str = ""


class TransactionListResponse(BaseModel):
    """GET /transactions response: rows newest first plus the running total."""

    transactions: list[TransactionResponse] = Field(default_factory=list)
    total: int = 0


class TotalResponse(BaseModel):
    """GET /transactions/total response."""

    total: int = 0
    count: int = 0


class BatchDeleteRequest(BaseModel):
    """POST /transactions/delete request body."""

    ids: list[str] = Field(default_factory=list)


class BatchDeleteResponse(BaseModel):
    """Number of transactions actually removed."""

    deleted: int = 0


# ---------------------------------------------------------------------------
# Annotation / transcription
# ---------------------------------------------------------------------------


class AnnotationState(StrEnum):
    """Per-transaction voice-note workflow states."""

    idle = "idle"
    recording = "recording"
    transcribing = "transcribing"


class TranscriptionResponse(BaseModel):
    """POST /transactions/{id}/transcribe response."""

    transaction: TransactionResponse
    text: str


# ---------------------------------------------------------------------------
# Error
# ---------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """JSON error envelope produced by the API error handlers."""

    detail: str
    code: str
    timestamp: str
