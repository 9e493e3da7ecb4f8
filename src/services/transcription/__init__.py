"""
Transcription module - Speech-to-text abstraction layer.

Factory function for creating STT instances based on provider configuration.
"""

from .base import BaseSTT

__all__ = ["BaseSTT", "create_stt"]


def create_stt(provider: str | None = None, **kwargs) -> BaseSTT:
    """
    Factory function to create STT instance based on provider.

    Args:
        provider: STT provider name ("openai"). Defaults to settings.
        **kwargs: Provider-specific configuration

    Returns:
        BaseSTT implementation instance

    Raises:
        ValueError: If provider is unknown
    """
    if provider is None:
        from src.core.config import get_settings

        provider = get_settings().stt_provider
    if provider == "openai":
        from .openai import OpenAITranscriber
        return OpenAITranscriber(**kwargs)
    else:
        raise ValueError(f"Unknown STT provider: {provider}")
