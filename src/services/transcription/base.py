"""
Abstract base class for Speech-to-Text providers.

All STT implementations must implement this interface, enabling
provider-agnostic transcription in the annotation workflow.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class BaseSTT(ABC):
    """Interface that every STT provider must implement."""

    @abstractmethod
    async def transcribe(self, audio_path: str | Path) -> str:
        """Transcribe an audio file to text.

        Args:
            audio_path: Path to the captured audio file.

        Returns:
            The recognised text.

        Raises:
            TranscriptionError: On transport, response or credential failures.
        """

    async def aclose(self) -> None:
        """Release any network resources held by the provider."""
