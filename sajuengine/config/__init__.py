"""Configuration helpers exposed at :mod:`sajuengine.config`."""

from __future__ import annotations

from .settings import (
    CalendarCfg,
    EphemerisCfg,
    FortunesCfg,
    LocationCfg,
    Settings,
    SpiritsCfg,
    active_settings,
    config_path,
    default_settings,
    ensure_default_config,
    get_config_home,
    load_settings,
    reset_active_settings,
    save_settings,
)

__all__ = [
    "Settings",
    "LocationCfg",
    "CalendarCfg",
    "FortunesCfg",
    "SpiritsCfg",
    "EphemerisCfg",
    "active_settings",
    "config_path",
    "get_config_home",
    "default_settings",
    "load_settings",
    "save_settings",
    "ensure_default_config",
    "reset_active_settings",
]
