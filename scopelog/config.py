"""Runtime settings — env-driven defaults for scopelog and its bundled sinks.

Uses pydantic-settings for environment variable support.  Reads from a
.env file and SCOPELOG_* environment variables.

Sink configuration itself is not read from here; it is passed to
``LogDispatcher.config`` as data.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Level names the stdlib ``logging`` module accepts
DIAGNOSTIC_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class LogSettings(BaseSettings):
    """Library settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export SCOPELOG_LOG_LEVEL=DEBUG
        export SCOPELOG_LOG_PATH=/var/log/myapp
        export SCOPELOG_CONSOLE_STDERR=false
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SCOPELOG_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Level for scopelog's own diagnostics (stdlib logging), used by the CLI
    log_level: str = "WARNING"

    # FileSink default directory
    log_path: Path = Path("logs")

    # ConsoleSink defaults
    console_stderr: bool = True
    console_markup: bool = False

    @field_validator("log_level", mode="before")
    @classmethod
    def _check_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().upper()
            if value not in DIAGNOSTIC_LEVELS:
                raise ValueError(
                    f"log_level must be one of {', '.join(DIAGNOSTIC_LEVELS)}"
                )
        return value


# Module-level singleton, import as `from scopelog.config import settings`
settings = LogSettings()
