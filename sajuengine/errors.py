"""Exception hierarchy raised by :mod:`sajuengine`."""

from __future__ import annotations

__all__ = [
    "SajuError",
    "InvalidBirthInputError",
    "DateOutOfRangeError",
    "UnknownLocationError",
    "EphemerisUnavailableError",
    "TableInvariantError",
]


class SajuError(Exception):
    """Base class for every error raised by the engine."""


class InvalidBirthInputError(SajuError, ValueError):
    """Raised when a birth input fails validation before any calculation runs."""


class DateOutOfRangeError(SajuError, ValueError):
    """Raised when a date falls outside a bounded table (e.g. lunar data)."""


class UnknownLocationError(SajuError, ValueError):
    """Raised when a reference city name cannot be resolved."""


class EphemerisUnavailableError(SajuError, RuntimeError):
    """Raised when the Swiss Ephemeris cannot be imported or fails a call."""


class TableInvariantError(SajuError, RuntimeError):
    """Raised on a lookup-table miss that the closed symbol domains rule out."""
