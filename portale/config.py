"""Application configuration via pydantic-settings.

Values are loaded from environment variables (.env file).
Settings are organized into logical groups and composed into a single Settings object.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_REPO_ROOT = Path(__file__).resolve().parent.parent


class CadastralSettings(BaseSettings):
    """Cadastral code registry (codici catastali) location and sync source."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="CADASTRAL_", extra="ignore")

    data_path: Path = Field(
        default=_REPO_ROOT / "data" / "codici_catastali.json",
        description="JSON file mapping cadastral code -> {nome, provincia, cap}",
    )
    source_url: str = Field(
        default="https://raw.githubusercontent.com/matteocontrini/comuni-json/master/comuni.json",
        description="Upstream comuni dataset used to regenerate the registry",
    )
    fetch_timeout: float = Field(default=30.0, description="Download timeout in seconds")
    search_limit: int = Field(default=20, ge=1, description="Default max results for comune search")


class Settings(BaseSettings):
    """Root settings composing all sub-settings.

    Usage:
        settings = Settings()
        settings.cadastral.data_path
        settings.log_level
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Composed settings (loaded from same .env)
    cadastral: CadastralSettings = Field(default_factory=CadastralSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid:
            msg = f"Invalid log level: {v}. Must be one of {valid}"
            raise ValueError(msg)
        return upper

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


# Module-level singleton; import this wherever settings are needed.
settings = Settings()
