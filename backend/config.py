"""
Lumina configuration — all environment variables in one place.

Read from environment at runtime. Never hardcode secrets.
"""

from __future__ import annotations

import os


class Settings:
    """Application settings from environment variables."""

    # Storage (key-value, one JSON document per key)
    STORAGE_KEY: str = os.environ.get("STORAGE_KEY", "lumina_current_page")
    STORAGE_DIR: str = os.environ.get("STORAGE_DIR", ".lumina")

    # Suggestion collaborator (empty key disables suggestions)
    ANTHROPIC_API_KEY: str = os.environ.get("ANTHROPIC_API_KEY", "")
    SUGGESTION_MODEL: str = os.environ.get("SUGGESTION_MODEL", "claude-3-5-haiku-20241022")
    SUGGESTION_MAX_TOKENS: int = int(os.environ.get("SUGGESTION_MAX_TOKENS", "256"))

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    @property
    def SUGGESTIONS_ENABLED(self) -> bool:
        return bool(self.ANTHROPIC_API_KEY)


# Singleton instance
settings = Settings()
