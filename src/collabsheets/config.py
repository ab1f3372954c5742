"""Configuration management.

Settings come from environment variables prefixed with ``COLLABSHEETS_``
(for example ``COLLABSHEETS_LOG_FILE``). Uses pydantic-settings for
validation and env var overriding.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from collabsheets.diagnostics import DEFAULT_LOG_FILE


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="COLLABSHEETS_")

    log_file: Optional[Path] = Path(DEFAULT_LOG_FILE)  # empty disables the diagnostic file
    log_level: str = "INFO"
    view_rows: int = Field(default=3, gt=0)
    view_cols: int = Field(default=3, gt=0)
    access_control: bool = False  # start in restricted mode

    @field_validator("log_file", mode="before")
    @classmethod
    def _empty_disables_file(cls, v: object) -> object:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


def setup_logging(level: str = "INFO") -> None:
    """Configure console logging for the interactive front-end.

    Notifications received by users are reported at INFO level, so they show
    up on the console with the default level.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )
