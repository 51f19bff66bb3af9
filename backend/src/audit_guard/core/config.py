"""
Configuration management using Pydantic settings.
Loads environment variables from .env file and provides type-safe access.
"""
from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import SettingsError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Gemini API
    google_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("GOOGLE_API_KEY", "API_KEY"),
        description="Credential for the scoring capability; empty means unreachable",
    )
    gemini_model: str = Field(default="gemini-2.5-flash", min_length=1)
    gemini_temperature: float = Field(default=0.1, ge=0, le=2)
    gemini_timeout_seconds: float = Field(default=30.0, gt=0)

    # Ledger
    currency: str = Field(default="IDR", min_length=3, max_length=3)
    seed_path: Optional[Path] = Field(
        default=None,
        description="JSON file of transactions used to seed a session (built-in mock data when unset)",
    )

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def has_credentials(self) -> bool:
        return bool(self.google_api_key.strip())


_CACHED_SETTINGS: Optional[Settings] = None


def load_settings(force_reload: bool = False) -> Settings:
    """Load application settings and cache the result."""

    global _CACHED_SETTINGS

    if _CACHED_SETTINGS is not None and not force_reload:
        return _CACHED_SETTINGS

    try:
        settings = Settings()
    except ValidationError as exc:
        raise SettingsError(f"Invalid configuration: {exc}") from exc

    _CACHED_SETTINGS = settings
    return settings


__all__ = [
    "Settings",
    "SettingsError",
    "load_settings",
]
