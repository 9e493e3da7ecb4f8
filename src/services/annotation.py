"""Voice-note annotation workflow for a single transaction.

Usage::

    from src.services.annotation import get_workflow

    workflow = get_workflow(transaction_id)
    workflow.start_recording()
    workflow.write(audio_bytes)
    notes = await workflow.stop_and_transcribe()
    if notes is None:
        show(workflow.error_message)

States: idle -> recording -> transcribing -> idle. Success and failure
both return to idle; only one cycle per transaction may be in flight and
an in-flight transcription cannot be cancelled.
"""

import logging
from collections.abc import Awaitable, Callable

from src.core.config import get_settings
from src.core.exceptions import (
    AnnotationBusyError,
    AudioSessionError,
    PokerTrackerError,
    RecordingStartError,
)
from src.core.models import AnnotationState
from src.services.audio.capture import AudioCapture, FileAudioCapture
from src.services.storage.database import get_session
from src.services.storage.repository import TransactionRepository
from src.services.transcription import create_stt
from src.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)

AppendText = Callable[[str], Awaitable[str]]


class AnnotationWorkflow:
    """Drives capture -> transcription -> notes append for one transaction.

    Args:
        transaction_id: The transaction being annotated; also names the audio file.
        capture: Audio capture backend.
        stt: Transcription provider.
        append_text: Async callback that persists the text and returns the new notes.
    """

    def __init__(
        self,
        transaction_id: str,
        capture: AudioCapture,
        stt: BaseSTT,
        append_text: AppendText,
    ) -> None:
        self.transaction_id = transaction_id
        self._capture = capture
        self._stt = stt
        self._append_text = append_text
        self.state = AnnotationState.idle
        self.error: PokerTrackerError | None = None
        self.last_text: str | None = None

    @property
    def error_message(self) -> str | None:
        """User-facing text for the last failure, cleared when a transcription starts."""
        return self.error.detail if self.error is not None else None

    @property
    def is_busy(self) -> bool:
        return self.state is not AnnotationState.idle

    def _require(self, state: AnnotationState) -> None:
        if self.state is not state:
            raise AnnotationBusyError(self.transaction_id, self.state.value)

    def start_recording(self) -> bool:
        """Begin capturing audio. Returns False (and sets ``error_message``) on failure."""
        self._require(AnnotationState.idle)
        try:
            self._capture.prepare()
        except AudioSessionError as exc:
            self.error = exc
            logger.warning("Transaction %s: %s", self.transaction_id, exc.detail)
            return False

        try:
            self._capture.start(self.transaction_id)
        except RecordingStartError as exc:
            self.error = exc
            logger.warning("Transaction %s: %s", self.transaction_id, exc.detail)
            return False

        self.state = AnnotationState.recording
        return True

    def write(self, data: bytes) -> None:
        self._require(AnnotationState.recording)
        self._capture.write(data)

    def abort(self) -> None:
        """Stop an unfinished capture without transcribing it."""
        self._require(AnnotationState.recording)
        self._capture.stop()
        self.state = AnnotationState.idle

    async def stop_and_transcribe(self) -> str | None:
        """Stop capture, transcribe, and append the text to the notes.

        Returns:
            The updated notes, or ``None`` on failure (see ``error_message``).
        """
        self._require(AnnotationState.recording)
        audio_path = self._capture.stop()
        self.state = AnnotationState.transcribing
        self.error = None
        try:
            text = await self._stt.transcribe(audio_path)
            notes = await self._append_text(text)
        except PokerTrackerError as exc:
            self.error = exc
            logger.warning("Annotation failed for %s: %s", self.transaction_id, exc.detail)
            return None
        finally:
            self.state = AnnotationState.idle

        self.last_text = text
        logger.info("Appended %d characters to transaction %s", len(text), self.transaction_id)
        return notes


# ---------------------------------------------------------------------------
# Per-transaction registry
# ---------------------------------------------------------------------------

_workflows: dict[str, AnnotationWorkflow] = {}
_stt: BaseSTT | None = None


def _get_stt() -> BaseSTT:
    global _stt
    if _stt is None:
        _stt = create_stt()
    return _stt


def _store_appender(transaction_id: str) -> AppendText:
    async def append(text: str) -> str:
        async with get_session() as session:
            repo = TransactionRepository(session)
            transaction = await repo.append_notes(transaction_id, text)
            return transaction.notes

    return append


def get_workflow(transaction_id: str) -> AnnotationWorkflow:
    """Return the workflow for ``transaction_id``, creating it on first use."""
    workflow = _workflows.get(transaction_id)
    if workflow is None:
        settings = get_settings()
        workflow = AnnotationWorkflow(
            transaction_id,
            capture=FileAudioCapture(settings.recordings_dir, settings.audio_extension),
            stt=_get_stt(),
            append_text=_store_appender(transaction_id),
        )
        _workflows[transaction_id] = workflow
    return workflow


def release_workflow(transaction_id: str) -> None:
    """Forget an idle workflow (e.g. after its transaction is deleted)."""
    workflow = _workflows.get(transaction_id)
    if workflow is not None and not workflow.is_busy:
        del _workflows[transaction_id]


async def cleanup() -> None:
    """Drop all workflows and close the shared STT client."""
    global _stt
    _workflows.clear()
    if _stt is not None:
        await _stt.aclose()
        _stt = None
