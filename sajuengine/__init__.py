"""SajuEngine package bootstrap and curated public API surface."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version as _get_version

from .engine import BirthInput, DailyPillar, SajuResult, compute, compute_many, daily_pillar
from .errors import (
    DateOutOfRangeError,
    EphemerisUnavailableError,
    InvalidBirthInputError,
    SajuError,
    TableInvariantError,
    UnknownLocationError,
)
from .pillars.four_pillars import FourPillars, Pillar

LOG = logging.getLogger(__name__)

try:
    __version__ = _get_version("sajuengine")
except PackageNotFoundError:  # pragma: no cover - metadata may be unavailable in source checkouts
    __version__ = "0.0.0"


def get_version() -> str:
    """Return the resolved SajuEngine package version."""

    return __version__


__all__ = [
    "__version__",
    "get_version",
    "BirthInput",
    "SajuResult",
    "DailyPillar",
    "FourPillars",
    "Pillar",
    "compute",
    "compute_many",
    "daily_pillar",
    "SajuError",
    "InvalidBirthInputError",
    "DateOutOfRangeError",
    "UnknownLocationError",
    "EphemerisUnavailableError",
    "TableInvariantError",
]
