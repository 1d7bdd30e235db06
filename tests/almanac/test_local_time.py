from __future__ import annotations

from datetime import datetime, timezone

import pytest

from sajuengine.almanac import (
    DEFAULT_CITY,
    correct_local_time,
    longitude_offset_minutes,
    resolve_location,
    to_universal_time,
)
from sajuengine.errors import UnknownLocationError


def test_offset_is_four_minutes_per_degree() -> None:
    """Each degree east of the reference meridian adds four minutes."""

    assert longitude_offset_minutes(135.0) == 0
    assert longitude_offset_minutes(139.77) == 19
    assert longitude_offset_minutes(126.98) == -32
    assert longitude_offset_minutes(126.98, reference_meridian=120.0) == 28


def test_correction_rolls_the_calendar_day() -> None:
    """Corrections across midnight move the date as well as the time."""

    local = correct_local_time(datetime(2023, 10, 15, 0, 10), 126.98)
    assert local.corrected == datetime(2023, 10, 14, 23, 38)
    assert local.day_rolled == -1

    late = correct_local_time(datetime(2023, 10, 15, 23, 50), 139.77)
    assert late.corrected == datetime(2023, 10, 16, 0, 9)
    assert late.day_rolled == 1


def test_disabled_correction_is_identity() -> None:
    """Turning the correction off leaves the wall clock untouched."""

    moment = datetime(2000, 1, 1, 12, 0)
    local = correct_local_time(moment, 126.98, enabled=False)
    assert local.corrected == moment
    assert local.offset_minutes == 0


def test_aware_datetimes_are_rejected() -> None:
    """Only naive wall-clock values are accepted."""

    with pytest.raises(ValueError):
        correct_local_time(datetime(2000, 1, 1, tzinfo=timezone.utc), 135.0)


def test_universal_time_subtracts_the_zone() -> None:
    """The UT instant depends on the zone meridian, not the birth longitude."""

    tokyo = correct_local_time(datetime(2023, 10, 15, 12, 0), 139.77)
    seoul = correct_local_time(datetime(2023, 10, 15, 12, 0), 126.98)
    assert to_universal_time(tokyo) == datetime(2023, 10, 15, 3, 0)
    assert to_universal_time(seoul) == to_universal_time(tokyo)
    assert tokyo.to_dict()["offset_minutes"] == 19


def test_resolve_location_accepts_native_and_english_names() -> None:
    """Reference cities resolve by either spelling."""

    assert resolve_location("ソウル").english == "Seoul"
    assert resolve_location("  seoul ").name == "ソウル"
    assert resolve_location("Tokyo") == DEFAULT_CITY
    with pytest.raises(UnknownLocationError):
        resolve_location("Atlantis")
    with pytest.raises(UnknownLocationError):
        resolve_location("   ")
