"""Chinese lunisolar calendar conversion for 1900-2099.

Month lengths and leap months come from the Hong Kong Observatory
"LunarInfo" tabulation. Each entry packs one lunar year:

* bits 0-3: the leap month (0 when the year has none),
* bits 4-15: month lengths for months 12..1 (set bit = 30 days),
* bit 16: length of the leap month (set bit = 30 days).

The lunar date is informational: no pillar calculation depends on it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Final, Iterator

from ..errors import DateOutOfRangeError

__all__ = [
    "LunarDate",
    "LUNAR_INFO",
    "FIRST_SUPPORTED_DATE",
    "LAST_SUPPORTED_DATE",
    "lunar_from_gregorian",
    "lunar_date_or_none",
    "gregorian_from_lunar",
    "leap_month",
]

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class LunarDate:
    """Chinese lunisolar date."""

    year: int
    month: int
    day: int
    is_leap_month: bool = False

    def to_dict(self) -> dict[str, object]:
        return {
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "is_leap_month": self.is_leap_month,
        }


# Lunar new year of 1900.
BASE_DATE: Final[date] = date(1900, 1, 31)
FIRST_SUPPORTED_DATE: Final[date] = BASE_DATE
LAST_SUPPORTED_DATE: Final[date] = date(2099, 12, 31)

_FIRST_YEAR: Final[int] = 1900
_LAST_YEAR: Final[int] = 2099

LUNAR_INFO: Final[tuple[int, ...]] = (
    0x04BD8, 0x04AE0, 0x0A570, 0x054D5, 0x0D260, 0x0D950, 0x16554, 0x056A0, 0x09AD0, 0x055D2,  # 1900-1909
    0x04AE0, 0x0A5B6, 0x0A4D0, 0x0D250, 0x1D255, 0x0B540, 0x0D6A0, 0x0ADA2, 0x095B0, 0x14977,  # 1910-1919
    0x04970, 0x0A4B0, 0x0B4B5, 0x06A50, 0x06D40, 0x1AB54, 0x02B60, 0x09570, 0x052F2, 0x04970,  # 1920-1929
    0x06566, 0x0D4A0, 0x0EA50, 0x06E95, 0x05AD0, 0x02B60, 0x186E3, 0x092E0, 0x1C8D7, 0x0C950,  # 1930-1939
    0x0D4A0, 0x1D8A6, 0x0B550, 0x056A0, 0x1A5B4, 0x025D0, 0x092D0, 0x0D2B2, 0x0A950, 0x0B557,  # 1940-1949
    0x06CA0, 0x0B550, 0x15355, 0x04DA0, 0x0A5D0, 0x14573, 0x052D0, 0x0A9A8, 0x0E950, 0x06AA0,  # 1950-1959
    0x0AEA6, 0x0AB50, 0x04B60, 0x0AAE4, 0x0A570, 0x05260, 0x0F263, 0x0D950, 0x05B57, 0x056A0,  # 1960-1969
    0x096D0, 0x04DD5, 0x04AD0, 0x0A4D0, 0x0D4D4, 0x0D250, 0x0D558, 0x0B540, 0x0B5A0, 0x195A6,  # 1970-1979
    0x095B0, 0x049B0, 0x0A974, 0x0A4B0, 0x0B27A, 0x06A50, 0x06D40, 0x0AF46, 0x0AB60, 0x09570,  # 1980-1989
    0x04AF5, 0x04970, 0x064B0, 0x074A3, 0x0EA50, 0x06B58, 0x05AC0, 0x0AB60, 0x096D5, 0x092E0,  # 1990-1999
    0x0C960, 0x0D954, 0x0D4A0, 0x0DA50, 0x07552, 0x056A0, 0x0ABB7, 0x025D0, 0x092D0, 0x0CAB5,  # 2000-2009
    0x0A950, 0x0B4A0, 0x0BAA4, 0x0AD50, 0x055D9, 0x04BA0, 0x0A5B0, 0x15176, 0x052B0, 0x0A930,  # 2010-2019
    0x07954, 0x06AA0, 0x0AD50, 0x05B52, 0x04B60, 0x0A6E6, 0x0A4E0, 0x0D260, 0x0EA65, 0x0D530,  # 2020-2029
    0x05AA0, 0x076A3, 0x096D0, 0x04AFB, 0x04AD0, 0x0A4D0, 0x1D0B6, 0x0D250, 0x0D520, 0x0DD45,  # 2030-2039
    0x0B5A0, 0x056D0, 0x055B2, 0x049B0, 0x0A577, 0x0A4B0, 0x0AA50, 0x1B255, 0x06D20, 0x0ADA0,  # 2040-2049
    0x14B63, 0x09370, 0x049F8, 0x04970, 0x064B0, 0x168A6, 0x0EA50, 0x06AA0, 0x1A6C4, 0x0AAE0,  # 2050-2059
    0x092E0, 0x0D2E3, 0x0C960, 0x0D557, 0x0D4A0, 0x0DA50, 0x05D55, 0x056A0, 0x0A6D0, 0x055D4,  # 2060-2069
    0x052D0, 0x0A9B8, 0x0A950, 0x0B4A0, 0x0B6A6, 0x0AD50, 0x055A0, 0x0ABA4, 0x0A5B0, 0x052B0,  # 2070-2079
    0x0B273, 0x06930, 0x07337, 0x06AA0, 0x0AD50, 0x14B55, 0x04B60, 0x0A570, 0x054E4, 0x0D160,  # 2080-2089
    0x0E968, 0x0D520, 0x0DAA0, 0x16AA6, 0x056D0, 0x04AE0, 0x0A9D4, 0x0A2D0, 0x0D150, 0x0F252,  # 2090-2099
)


def _year_info(year: int) -> int:
    if not _FIRST_YEAR <= year <= _LAST_YEAR:
        raise DateOutOfRangeError(
            f"Lunar year {year} outside supported {_FIRST_YEAR}-{_LAST_YEAR} range"
        )
    return LUNAR_INFO[year - _FIRST_YEAR]


def leap_month(year: int) -> int:
    """Return the leap month of lunar ``year`` (``0`` when there is none)."""

    return _year_info(year) & 0xF


def _months(year: int) -> Iterator[tuple[int, bool, int]]:
    """Yield ``(month, is_leap, days)`` for every month of lunar ``year``."""

    info = _year_info(year)
    leap = info & 0xF
    for month in range(1, 13):
        yield month, False, 30 if info & (0x10000 >> month) else 29
        if month == leap:
            yield month, True, 30 if info & 0x10000 else 29


def _year_days(year: int) -> int:
    return sum(days for _, _, days in _months(year))


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError("expected a date or datetime instance")


def lunar_from_gregorian(gregorian: date | datetime) -> LunarDate:
    """Convert a Gregorian date to its Chinese lunisolar representation.

    Raises
    ------
    DateOutOfRangeError
        When ``gregorian`` precedes the 1900 lunar new year or follows 2099.
    """

    target = _as_date(gregorian)
    if not FIRST_SUPPORTED_DATE <= target <= LAST_SUPPORTED_DATE:
        raise DateOutOfRangeError(
            f"{target.isoformat()} outside supported lunar range "
            f"{FIRST_SUPPORTED_DATE.isoformat()}..{LAST_SUPPORTED_DATE.isoformat()}"
        )

    offset = (target - BASE_DATE).days
    year = _FIRST_YEAR
    while offset >= (length := _year_days(year)):
        offset -= length
        year += 1

    for month, is_leap, days in _months(year):
        if offset < days:
            return LunarDate(year, month, offset + 1, is_leap)
        offset -= days

    raise RuntimeError("Failed to resolve Chinese lunar date")  # pragma: no cover


def lunar_date_or_none(gregorian: date | datetime) -> LunarDate | None:
    """Return the lunar date for ``gregorian`` or ``None`` outside the table span."""

    try:
        return lunar_from_gregorian(gregorian)
    except DateOutOfRangeError as exc:
        LOG.warning("Lunar date omitted: %s", exc)
        return None


def gregorian_from_lunar(lunar: LunarDate) -> date:
    """Convert a Chinese lunar date back to the Gregorian calendar."""

    year, month, day = lunar.year, lunar.month, lunar.day
    is_leap = bool(lunar.is_leap_month)

    leap = leap_month(year)
    if not 1 <= month <= 12:
        raise ValueError("Lunar month must be between 1 and 12")
    if is_leap and leap == 0:
        raise ValueError(f"Year {year} has no leap month")
    if is_leap and month != leap:
        raise ValueError(f"Leap month for {year} is {leap}")

    offset = sum(_year_days(yr) for yr in range(_FIRST_YEAR, year))
    for current_month, current_is_leap, days in _months(year):
        if current_month == month and current_is_leap == is_leap:
            if not 1 <= day <= days:
                raise ValueError("Day out of range for lunar month")
            result = BASE_DATE + timedelta(days=offset + day - 1)
            if result > LAST_SUPPORTED_DATE:
                raise DateOutOfRangeError("Resulting date exceeds supported range")
            return result
        offset += days

    raise RuntimeError("Requested lunar month not present in year")  # pragma: no cover
