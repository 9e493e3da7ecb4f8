"""Audio capture to per-transaction files.

Audio is recorded by the client (the browser microphone widget) and arrives
as encoded bytes. ``FileAudioCapture`` streams those bytes into
``<recordings_dir>/<transaction id><ext>`` so recordings for different
transactions never share a file.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO

from src.core.exceptions import AudioSessionError, RecordingStartError

logger = logging.getLogger(__name__)


class AudioCapture(ABC):
    """Start/stop interface for one capture at a time."""

    @abstractmethod
    def prepare(self) -> None:
        """Acquire the audio input session.

        Raises:
            AudioSessionError: If the session cannot be configured.
        """

    @abstractmethod
    def start(self, transaction_id: str) -> Path:
        """Begin capturing audio for ``transaction_id`` and return the target path.

        Raises:
            RecordingStartError: If capture cannot begin.
        """

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Append captured audio bytes."""

    @abstractmethod
    def stop(self) -> Path:
        """Finish capturing and return the audio file path."""


class FileAudioCapture(AudioCapture):
    """Writes client-supplied audio bytes to a file under ``recordings_dir``.

    Args:
        recordings_dir: Directory for audio files; created on ``prepare()``.
        extension: Audio file suffix, including the dot.
    """

    def __init__(self, recordings_dir: str | Path, extension: str = ".wav") -> None:
        self._recordings_dir = Path(recordings_dir)
        self._extension = extension
        self._file: BinaryIO | None = None
        self._path: Path | None = None
        self._bytes_written = 0

    def prepare(self) -> None:
        try:
            self._recordings_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise AudioSessionError(str(exc)) from exc

    def start(self, transaction_id: str) -> Path:
        if self._file is not None:
            raise RecordingStartError("a capture is already running")
        path = recording_path(self._recordings_dir, transaction_id, self._extension)
        try:
            self._file = open(path, "wb")  # noqa: SIM115
        except OSError as exc:
            raise RecordingStartError(str(exc)) from exc
        self._path = path
        self._bytes_written = 0
        logger.debug("Capturing audio to %s", path)
        return path

    def write(self, data: bytes) -> None:
        if self._file is None:
            raise RuntimeError("write() called before start()")
        self._file.write(data)
        self._bytes_written += len(data)

    def stop(self) -> Path:
        if self._file is None or self._path is None:
            raise RuntimeError("stop() called before start()")
        self._file.close()
        self._file = None
        logger.debug("Captured %d bytes to %s", self._bytes_written, self._path)
        return self._path


def recording_path(recordings_dir: str | Path, transaction_id: str, extension: str = ".wav") -> Path:
    """Return the audio file path reserved for ``transaction_id``."""
    return Path(recordings_dir) / f"{transaction_id}{extension}"


def discard_recording(recordings_dir: str | Path, transaction_id: str, extension: str = ".wav") -> bool:
    """Remove a transaction's audio file if present. Returns True if removed."""
    path = recording_path(recordings_dir, transaction_id, extension)
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True
