"""OpenAI audio transcription provider.

Uploads one captured audio file per call as ``multipart/form-data`` to the
configured transcription endpoint and returns the ``text`` field of the JSON
reply. A single attempt is made; failures surface as ``TranscriptionError``
subclasses carrying a user-facing message.
"""

import logging
from pathlib import Path

import httpx

from src.core.config import Settings, get_settings
from src.core.exceptions import (
    MissingCredentialError,
    TranscriptionNetworkError,
    TranscriptionResponseError,
)
from src.services.transcription.base import BaseSTT

logger = logging.getLogger(__name__)


class OpenAITranscriber(BaseSTT):
    """Speech-to-text provider backed by the OpenAI transcriptions API.

    Args:
        api_key: Bearer credential. Defaults to ``settings.openai_api_key``.
        model: Value sent in the ``model`` form field.
        settings: Optional Settings instance (defaults to get_settings()).
        client: Optional ``httpx.AsyncClient`` (tests inject a mock transport).
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._api_key = api_key if api_key is not None else self._settings.openai_api_key
        self._model = model or self._settings.transcription_model
        self._url = self._settings.transcription_url
        self._mime_type = self._settings.audio_mime_type
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=self._settings.transcription_timeout)

    def _headers(self) -> dict[str, str]:
        if not self._api_key:
            raise MissingCredentialError()
        return {"Authorization": f"Bearer {self._api_key}"}

    @staticmethod
    def _extract_text(response: httpx.Response) -> str:
        """Pull the ``text`` field out of the reply, whatever the status code."""
        try:
            payload = response.json()
        except ValueError:
            raise TranscriptionResponseError() from None
        if not isinstance(payload, dict):
            raise TranscriptionResponseError()
        text = payload.get("text")
        if not isinstance(text, str):
            raise TranscriptionResponseError()
        return text

    async def transcribe(self, audio_path: str | Path) -> str:
        """Upload ``audio_path`` and return the transcribed text."""
        headers = self._headers()
        path = Path(audio_path)
        try:
            audio = path.read_bytes()
        except OSError as exc:
            raise TranscriptionNetworkError(f"cannot read {path.name}: {exc}") from exc

        logger.info("Transcribing %s (%d bytes) with %s", path.name, len(audio), self._model)
        try:
            response = await self._client.post(
                self._url,
                headers=headers,
                files={"file": (path.name, audio, self._mime_type)},
                data={"model": self._model},
            )
        except httpx.HTTPError as exc:
            logger.warning("Transcription request failed: %s", exc)
            raise TranscriptionNetworkError(str(exc) or exc.__class__.__name__) from exc

        try:
            return self._extract_text(response)
        except TranscriptionResponseError:
            logger.warning(
                "Unusable transcription response (status=%d)", response.status_code
            )
            raise

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
