"""Runtime configuration loaded from environment variables."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["RuntimeSettings", "runtime_settings"]


def _default_home() -> Path:
    """Return the default SajuEngine home directory."""

    if os.name == "nt":
        base = Path(os.environ.get("LOCALAPPDATA", Path.home() / "AppData" / "Local"))
        return base / "SajuEngine"
    return Path.home() / ".sajuengine"


class RuntimeSettings(BaseSettings):
    """Runtime configuration resolved from the process environment."""

    model_config = SettingsConfigDict(extra="ignore")

    sajuengine_home: Path = Field(default_factory=_default_home, alias="SAJUENGINE_HOME")
    settings_file: Path | None = Field(default=None, alias="SAJUENGINE_SETTINGS_FILE")
    se_ephe_path: Path | None = Field(default=None, alias="SE_EPHE_PATH")

    @field_validator("sajuengine_home", mode="before")
    @classmethod
    def _validate_home(cls, value: Path | str | None) -> Path:
        if value is None or value == "":
            return _default_home()
        return Path(value).expanduser()

    @field_validator("settings_file", "se_ephe_path", mode="before")
    @classmethod
    def _expand_optional_path(cls, value: Path | str | None) -> Path | None:
        if value in {None, ""}:
            return None
        return Path(value).expanduser()


def runtime_settings() -> RuntimeSettings:
    """Return a fresh snapshot of the environment-driven settings."""

    return RuntimeSettings()
