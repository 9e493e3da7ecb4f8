"""
Poker Tracker exception hierarchy.

All application-specific exceptions inherit from PokerTrackerError,
enabling centralized error handling in the API middleware layer.
``detail`` is always safe to show to the user as-is.
"""

from datetime import UTC, datetime


class PokerTrackerError(Exception):
    """Base exception for all Poker Tracker errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "POKER_TRACKER_ERROR",
        status_code: int = 500,
    ) -> None:
        self.detail = detail
        self.code = code
        self.status_code = status_code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


class TransactionNotFoundError(PokerTrackerError):
    """Raised when a transaction ID does not exist."""

    def __init__(self, transaction_id: str) -> None:
        super().__init__(
            detail=f"Transaction not found: {transaction_id}",
            code="TRANSACTION_NOT_FOUND",
            status_code=404,
        )


class InvalidUpdateError(PokerTrackerError):
    """Raised when an update touches a field that may not change."""

    def __init__(self, fields: list[str]) -> None:
        super().__init__(
            detail=f"Fields cannot be updated: {', '.join(sorted(fields))}",
            code="INVALID_UPDATE",
            status_code=422,
        )


class StoreInitializationError(PokerTrackerError):
    """Raised when the record store cannot be opened at startup."""

    def __init__(self, detail: str = "Could not open the transaction store") -> None:
        super().__init__(detail=detail, code="STORE_INIT_ERROR", status_code=500)


class AudioSessionError(PokerTrackerError):
    """Raised when the audio input session cannot be configured."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            detail=f"Audio session error: {reason}",
            code="AUDIO_SESSION_ERROR",
            status_code=500,
        )


class RecordingStartError(PokerTrackerError):
    """Raised when audio capture fails to start."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            detail=f"Recording failed: {reason}",
            code="RECORDING_START_ERROR",
            status_code=500,
        )


class AnnotationBusyError(PokerTrackerError):
    """Raised when a recording or transcription is already in flight."""

    def __init__(self, transaction_id: str, state: str) -> None:
        super().__init__(
            detail=f"Transaction {transaction_id} is busy ({state})",
            code="ANNOTATION_BUSY",
            status_code=409,
        )


class TranscriptionError(PokerTrackerError):
    """Raised when STT processing fails."""

    def __init__(
        self,
        detail: str = "Transcription failed",
        code: str = "TRANSCRIPTION_ERROR",
        status_code: int = 502,
    ) -> None:
        super().__init__(detail=detail, code=code, status_code=status_code)


class TranscriptionNetworkError(TranscriptionError):
    """Raised when the transcription request cannot be completed."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            detail=f"Transcription error: {reason}",
            code="TRANSCRIPTION_NETWORK_ERROR",
        )


class TranscriptionResponseError(TranscriptionError):
    """Raised when the transcription response has no usable text."""

    def __init__(self) -> None:
        super().__init__(detail="Invalid response", code="TRANSCRIPTION_INVALID_RESPONSE")


class MissingCredentialError(TranscriptionError):
    """Raised when no API key is configured for the transcription service."""

    def __init__(self, name: str = "OPENAI_API_KEY") -> None:
        super().__init__(
            detail=f"Missing {name}: set it in the environment or .env file",
            code="MISSING_CREDENTIAL",
            status_code=503,
        )
