"""Application configuration loaded from environment variables."""

import os
from pathlib import Path
from dotenv import load_dotenv

from bff.errors import ConfigurationError

# Load .env from the backend directory
_backend_dir = Path(__file__).resolve().parent.parent
load_dotenv(_backend_dir / ".env")


def _optional_float(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else None


class Settings:
    API_KEY: str | None = os.getenv("API_KEY") or os.getenv("GEMINI_API_KEY")
    CORS_ORIGINS: list[str] = [
        o.strip()
        for o in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
        if o.strip()
    ]
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # ── Cache / retry ───────────────────────────────────────
    CACHE_TTL_SECONDS: float = float(os.getenv("CACHE_TTL_SECONDS", "3600"))
    RETRY_MAX_ATTEMPTS: int = int(os.getenv("RETRY_MAX_ATTEMPTS", "3"))
    RETRY_INITIAL_DELAY_MS: int = int(os.getenv("RETRY_INITIAL_DELAY_MS", "1000"))

    # ── Provider ────────────────────────────────────────────
    TEXT_MODEL: str = os.getenv("TEXT_MODEL", "gemini-2.5-flash")
    TTS_MODEL: str = os.getenv("TTS_MODEL", "gemini-2.5-flash-preview-tts")
    PROVIDER_TIMEOUT_SECONDS: float | None = _optional_float("PROVIDER_TIMEOUT_SECONDS")

    BASE_LANGUAGE: str = os.getenv("BASE_LANGUAGE", "English")

    def require_api_key(self) -> str:
        """Return the provider credential, failing loudly when it is missing."""
        if not self.API_KEY:
            raise ConfigurationError("API_KEY environment variable not set")
        return self.API_KEY


settings = Settings()
