"""True local solar time correction from longitude."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Final

__all__ = [
    "DEFAULT_REFERENCE_MERIDIAN",
    "LocalMoment",
    "longitude_offset_minutes",
    "correct_local_time",
    "to_universal_time",
]

LOG = logging.getLogger(__name__)

DEFAULT_REFERENCE_MERIDIAN: Final[float] = 135.0
_MINUTES_PER_DEGREE: Final[float] = 4.0


@dataclass(frozen=True)
class LocalMoment:
    """Wall-clock moment shifted to true local solar time."""

    wall_clock: datetime
    corrected: datetime
    offset_minutes: int
    longitude: float
    reference_meridian: float

    @property
    def day_rolled(self) -> int:
        """Return ``-1``, ``0`` or ``1`` when the correction crossed midnight."""

        return (self.corrected.date() - self.wall_clock.date()).days

    def to_dict(self) -> dict[str, object]:
        return {
            "wall_clock": self.wall_clock.isoformat(),
            "corrected": self.corrected.isoformat(),
            "offset_minutes": self.offset_minutes,
            "longitude": self.longitude,
            "reference_meridian": self.reference_meridian,
        }


def longitude_offset_minutes(
    longitude: float, reference_meridian: float = DEFAULT_REFERENCE_MERIDIAN
) -> int:
    """Return the whole-minute offset between ``longitude`` and the meridian."""

    return int(round((longitude - reference_meridian) * _MINUTES_PER_DEGREE))


def correct_local_time(
    moment: datetime,
    longitude: float,
    *,
    reference_meridian: float = DEFAULT_REFERENCE_MERIDIAN,
    enabled: bool = True,
) -> LocalMoment:
    """Shift the naive wall-clock ``moment`` to true local solar time.

    The wall clock is read as standard time of the ``reference_meridian``
    zone. Offsets crossing midnight move the calendar date with them, which
    is what the day and hour pillars need.
    """

    if moment.tzinfo is not None:
        raise ValueError("correct_local_time expects a naive wall-clock datetime")
    offset = longitude_offset_minutes(longitude, reference_meridian) if enabled else 0
    corrected = moment + timedelta(minutes=offset)
    LOG.debug(
        "Local time correction: %s at %.2f° -> %s (%+d min)",
        moment.isoformat(),
        longitude,
        corrected.isoformat(),
        offset,
    )
    return LocalMoment(
        wall_clock=moment,
        corrected=corrected,
        offset_minutes=offset,
        longitude=float(longitude),
        reference_meridian=float(reference_meridian),
    )


def to_universal_time(local: LocalMoment) -> datetime:
    """Return the naive UT instant matching ``local``.

    The wall clock sits ``reference_meridian × 4`` minutes ahead of UT;
    subtracting the same amount from the wall clock is equivalent to
    subtracting ``longitude × 4`` from the corrected time.
    """

    zone_minutes = local.reference_meridian * _MINUTES_PER_DEGREE
    return local.wall_clock - timedelta(minutes=zone_minutes)
