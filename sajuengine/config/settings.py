"""Configuration models and helpers for SajuEngine settings."""

from __future__ import annotations

import logging
from copy import deepcopy
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from ..almanac.locations import DEFAULT_CITY, REFERENCE_CITIES
from ..runtime_config import runtime_settings

LOG = logging.getLogger(__name__)

CURRENT_SETTINGS_SCHEMA_VERSION = 2

# -------------------- Settings Schema --------------------


class LocationCfg(BaseModel):
    """Reference location and local solar time correction."""

    reference_city: str = DEFAULT_CITY.name
    reference_meridian: float = 135.0
    local_time_correction: bool = True

    @field_validator("reference_city")
    @classmethod
    def _known_city(cls, value: str) -> str:
        names = {city.name for city in REFERENCE_CITIES}
        english = {city.english.casefold(): city.name for city in REFERENCE_CITIES}
        if value in names:
            return value
        if value.casefold() in english:
            return english[value.casefold()]
        raise ValueError(f"Unknown reference city: {value!r}")

    @field_validator("reference_meridian", mode="before")
    @classmethod
    def _check_meridian(cls, value: float) -> float:
        numeric = float(value)
        if not -180.0 <= numeric <= 180.0:
            raise ValueError("reference_meridian must lie within [-180, 180]")
        return numeric


class CalendarCfg(BaseModel):
    """Calendar conventions for the year pillar."""

    year_boundary: Literal["gregorian", "lichun"] = "gregorian"


class FortunesCfg(BaseModel):
    """Twelve Fortunes behaviour."""

    apply_overrides: bool = True


class SpiritsCfg(BaseModel):
    """Twelve Spirits behaviour."""

    apply_known_exceptions: bool = True


class EphemerisCfg(BaseModel):
    """Ephemeris source configuration."""

    mode: Literal["moshier", "swiss"] = "moshier"
    path: Optional[str] = None


class Settings(BaseModel):
    """Top-level settings model persisted on disk."""

    schema_version: int = Field(
        default=CURRENT_SETTINGS_SCHEMA_VERSION,
        ge=1,
        description="Version marker for persisted configuration payloads.",
    )
    location: LocationCfg = Field(default_factory=LocationCfg)
    calendar: CalendarCfg = Field(default_factory=CalendarCfg)
    fortunes: FortunesCfg = Field(default_factory=FortunesCfg)
    spirits: SpiritsCfg = Field(default_factory=SpiritsCfg)
    ephemeris: EphemerisCfg = Field(default_factory=EphemerisCfg)


# -------------------- I/O Helpers --------------------

CONFIG_FILENAME = "config.yaml"


def get_config_home() -> Path:
    """Return the directory where settings should be stored."""

    return runtime_settings().sajuengine_home


def config_path() -> Path:
    """Return the full path to the configuration file, creating directories as needed."""

    override = runtime_settings().settings_file
    if override is not None:
        override.parent.mkdir(parents=True, exist_ok=True)
        return override
    home = get_config_home()
    home.mkdir(parents=True, exist_ok=True)
    return home / CONFIG_FILENAME


def default_settings() -> Settings:
    """Instantiate a Settings object populated with defaults."""

    return Settings()


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    """Persist the given settings to disk as YAML."""

    target_path = Path(path) if path else config_path()
    target_path.parent.mkdir(parents=True, exist_ok=True)
    data = settings.model_dump()
    with target_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False, allow_unicode=True)
    LOG.debug("Settings written to %s", target_path)
    return target_path


def _coerce_schema_version(raw: object) -> int:
    """Return a normalised schema version value with sane bounds."""

    try:
        value = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 1
    return max(1, value)


def _upgrade_settings_payload(
    data: dict[str, object], *, schema_version: int
) -> tuple[dict[str, object], bool]:
    """Apply in-place upgrades required for older settings payloads."""

    upgraded = deepcopy(data)
    version = max(1, schema_version)
    changed = False

    if version < 2:
        # v1 stored the reference city as a flat ``city`` key.
        city = upgraded.pop("city", None)
        if city is not None:
            location = dict(upgraded.get("location") or {})  # type: ignore[arg-type]
            location.setdefault("reference_city", city)
            upgraded["location"] = location
        version = 2
        changed = True

    if upgraded.get("schema_version") != version:
        upgraded["schema_version"] = version
        changed = True

    return upgraded, changed


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from disk, creating defaults if missing."""

    source_path = Path(path) if path else config_path()
    if not source_path.exists():
        settings = default_settings()
        save_settings(settings, source_path)
        return settings
    with source_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict):
        raw = {}
    schema_version = _coerce_schema_version(raw.get("schema_version"))
    data, upgraded = _upgrade_settings_payload(raw, schema_version=schema_version)
    settings = Settings(**data)
    if upgraded:
        LOG.info("Upgraded settings at %s to schema v%d", source_path, settings.schema_version)
        save_settings(settings, source_path)
    return settings


def ensure_default_config() -> Path:
    """Ensure a configuration file exists on disk and return its path."""

    target = config_path()
    if not target.exists():
        save_settings(default_settings(), target)
    return target


@lru_cache(maxsize=1)
def active_settings() -> Settings:
    """Return the process-wide settings, read once from disk when present."""

    target = config_path()
    if target.exists():
        return load_settings(target)
    return default_settings()


def reset_active_settings() -> None:
    """Forget the memoised settings (used by tests and after ``config init``)."""

    active_settings.cache_clear()
