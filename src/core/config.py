"""
Application configuration via pydantic-settings.

Loads values from .env file with sensible defaults for local development.
Use ``get_settings()`` to obtain the cached singleton instance.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Poker Tracker settings loaded from environment / .env file.

    All settings can be overridden via environment variables or a `.env` file.
    Field names map directly to env var names (case-insensitive).

    Attributes:
        openai_api_key: Bearer credential for the transcription endpoint.
        transcription_url: Full URL of the speech-to-text endpoint.
        database_url: Async SQLAlchemy connection string for SQLite.
        recordings_dir: Directory holding one audio file per transaction.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    # --- Transcription ---
    # Remote speech-to-text (OpenAI audio transcriptions API)
    stt_provider: str = "openai"
    openai_api_key: str = ""  # Required before the first transcription
    transcription_url: str = "https://api.openai.com/v1/audio/transcriptions"
    transcription_model: str = "whisper-1"
    transcription_timeout: float = 60.0  # Seconds
    audio_mime_type: str = "audio/wav"  # st.audio_input records WAV
    audio_extension: str = ".wav"

    # --- Application ---
    log_level: str = "INFO"  # Python logging level
    cors_origins: list[str] = [
        "http://localhost:8501",  # Streamlit
    ]

    # --- Frontend ---
    api_base_url: str = "http://localhost:8000"  # Backend URL used by Streamlit

    # --- Storage ---
    # Paths are relative to the project root; absolute paths also supported
    database_url: str = "sqlite+aiosqlite:///data/poker_tracker.db"
    recordings_dir: str = "data/recordings"  # Voice-note storage directory


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.
    Subsequent calls return the same ``Settings`` instance.

    Returns:
        Settings: The application-wide configuration object.
    """
    return Settings()
