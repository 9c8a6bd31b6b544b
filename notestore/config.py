"""
NoteStore — Application Configuration
======================================

What:  Configuration for a single server process using Pydantic Settings.
Why:   Type-safe loading with validation; a missing bind host, port, or store
       directory is reported before the server starts.
How:   `Settings` reads NOTESTORE_* environment variables (or a .env file).
       Explicit keyword arguments, such as those supplied by the CLI, take
       precedence over the environment.
Who:   Built once by notestore.cli and handed to create_app(), which passes
       the store directory on to NoteStore.

Design Decision:
    There is no module-level settings singleton. The value is constructed at
    process start and passed down explicitly, so tests can build as many
    independently configured apps as they need.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Server settings.

    The three server values have no defaults: a process cannot start without
    knowing where to bind and which directory holds the notes.
    """

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(description="Address the HTTP server binds to")
    port: int = Field(ge=1, le=65535, description="TCP port the HTTP server binds to")

    # ── Note Storage ──────────────────────────────────────────────────────
    # What: Directory holding one file per note (filename = note name)
    # Created recursively at startup when absent
    cache_dir: Path = Field(description="Store root directory")

    # ── Logging ───────────────────────────────────────────────────────────
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Rejects a blank host, which would otherwise bind to all interfaces silently."""
        if not v.strip():
            raise ValueError("host must not be empty")
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    model_config = SettingsConfigDict(
        env_prefix="NOTESTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"
