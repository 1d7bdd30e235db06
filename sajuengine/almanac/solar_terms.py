"""Solar terms (節氣) derived from the apparent solar longitude.

The 24 terms sit every 15° of apparent geocentric solar longitude starting
with 立春 at 315°. Month pillars change at the twelve "sectional" terms
(立春, 驚蟄, 清明, ...), i.e. every 30° from 315°, so a month period is
simply ``floor(((λ - 315) mod 360) / 30)``.

Positions come from the Swiss Ephemeris. The default Moshier mode needs no
data files and covers 3000 BCE to 3000 CE.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Final, Literal

from ..ephemeris import swe
from ..errors import EphemerisUnavailableError

__all__ = [
    "SOLAR_TERMS",
    "SolarTermInfo",
    "SolarTermInstant",
    "julian_day",
    "datetime_from_julian_day",
    "sun_longitude",
    "term_index_for_longitude",
    "period_for_longitude",
    "solar_term",
    "solar_term_period",
    "solar_term_info",
    "term_instants",
]

LOG = logging.getLogger(__name__)

EphemerisMode = Literal["moshier", "swiss"]

SOLAR_TERMS: Final[tuple[str, ...]] = (
    "立春",
    "雨水",
    "驚蟄",
    "春分",
    "清明",
    "穀雨",
    "立夏",
    "小満",
    "芒種",
    "夏至",
    "小暑",
    "大暑",
    "立秋",
    "処暑",
    "白露",
    "秋分",
    "寒露",
    "霜降",
    "立冬",
    "小雪",
    "大雪",
    "冬至",
    "小寒",
    "大寒",
)

_SPRING_START_LONGITUDE: Final[float] = 315.0
_TERM_SPAN_DEG: Final[float] = 15.0
_PERIOD_SPAN_DEG: Final[float] = 30.0
# A month period never lasts longer than 32 days.
_PERIOD_SEARCH_BACK_DAYS: Final[float] = 35.0


@dataclass(frozen=True)
class SolarTermInfo:
    """Active solar term and the bounds of the month period containing a moment."""

    name: str
    index: int
    period: int
    sun_longitude: float
    starts_at: datetime
    ends_at: datetime

    @property
    def period_term(self) -> str:
        """Return the sectional term that opened the month period."""

        return SOLAR_TERMS[self.period * 2]

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "index": self.index,
            "period": self.period,
            "period_term": self.period_term,
            "sun_longitude": round(self.sun_longitude, 6),
            "starts_at": self.starts_at.isoformat(),
            "ends_at": self.ends_at.isoformat(),
        }


@dataclass(frozen=True)
class SolarTermInstant:
    """UT instant at which the Sun reaches a solar term longitude."""

    name: str
    index: int
    longitude: float
    moment: datetime

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "index": self.index,
            "longitude": self.longitude,
            "moment": self.moment.isoformat(),
        }


def _flags(mode: EphemerisMode) -> int:
    if mode == "swiss":
        return int(swe.FLG_SWIEPH)
    return int(swe.FLG_MOSEPH)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def julian_day(moment_ut: datetime) -> float:
    """Return the Julian Day (UT) for ``moment_ut``; naive values are read as UT."""

    moment = _as_utc(moment_ut)
    hour = (
        moment.hour
        + moment.minute / 60.0
        + moment.second / 3600.0
        + moment.microsecond / 3.6e9
    )
    return float(swe.julday(moment.year, moment.month, moment.day, hour))


def datetime_from_julian_day(jd_ut: float) -> datetime:
    """Convert a Julian Day in UT back to a timezone-aware datetime."""

    year, month, day, hour = swe.revjul(jd_ut, swe.GREG_CAL)
    base = datetime(int(year), int(month), int(day), tzinfo=UTC)
    return base + timedelta(seconds=round(hour * 3600.0))


def sun_longitude(jd_ut: float, *, mode: EphemerisMode = "moshier") -> float:
    """Return the apparent geocentric ecliptic longitude of the Sun in degrees."""

    try:
        values, ret_flag = swe.calc_ut(jd_ut, swe.SUN, _flags(mode))
    except EphemerisUnavailableError:
        raise
    except Exception as exc:
        raise EphemerisUnavailableError(
            f"Swiss ephemeris failed for the Sun at JD {jd_ut}: {exc}"
        ) from exc
    if ret_flag < 0:
        raise EphemerisUnavailableError(f"Swiss ephemeris returned error code {ret_flag}")
    return float(values[0]) % 360.0


def _offset_from_spring(longitude: float) -> float:
    return (longitude - _SPRING_START_LONGITUDE) % 360.0


def term_index_for_longitude(longitude: float) -> int:
    """Return the 0-23 solar term index (0 = 立春) for a solar longitude."""

    return int(math.floor(_offset_from_spring(longitude) / _TERM_SPAN_DEG)) % 24


def period_for_longitude(longitude: float) -> int:
    """Return the 0-11 month period (0 = 寅 month opened by 立春)."""

    return int(math.floor(_offset_from_spring(longitude) / _PERIOD_SPAN_DEG)) % 12


def solar_term(moment_ut: datetime, *, mode: EphemerisMode = "moshier") -> str:
    """Return the name of the solar term active at ``moment_ut``."""

    longitude = sun_longitude(julian_day(moment_ut), mode=mode)
    return SOLAR_TERMS[term_index_for_longitude(longitude)]


def solar_term_period(moment_ut: datetime, *, mode: EphemerisMode = "moshier") -> int:
    """Return the month period index active at ``moment_ut``."""

    longitude = sun_longitude(julian_day(moment_ut), mode=mode)
    return period_for_longitude(longitude)


def _crossing(longitude: float, jd_start: float, mode: EphemerisMode) -> float:
    try:
        return float(swe.solcross_ut(longitude, jd_start, _flags(mode)))
    except EphemerisUnavailableError:
        raise
    except Exception as exc:
        raise EphemerisUnavailableError(
            f"Solar crossing of {longitude}° after JD {jd_start} failed: {exc}"
        ) from exc


def solar_term_info(
    moment_ut: datetime, *, mode: EphemerisMode = "moshier"
) -> SolarTermInfo:
    """Return the active solar term and the enclosing month-period bounds."""

    jd = julian_day(moment_ut)
    longitude = sun_longitude(jd, mode=mode)
    period = period_for_longitude(longitude)
    start_lon = (_SPRING_START_LONGITUDE + period * _PERIOD_SPAN_DEG) % 360.0
    end_lon = (start_lon + _PERIOD_SPAN_DEG) % 360.0

    start_jd = _crossing(start_lon, jd - _PERIOD_SEARCH_BACK_DAYS, mode)
    end_jd = _crossing(end_lon, jd, mode)
    index = term_index_for_longitude(longitude)
    LOG.debug(
        "Solar term at JD %.5f: λ=%.4f term=%s period=%d", jd, longitude, SOLAR_TERMS[index], period
    )
    return SolarTermInfo(
        name=SOLAR_TERMS[index],
        index=index,
        period=period,
        sun_longitude=longitude,
        starts_at=datetime_from_julian_day(start_jd),
        ends_at=datetime_from_julian_day(end_jd),
    )


def term_instants(year: int, *, mode: EphemerisMode = "moshier") -> list[SolarTermInstant]:
    """Return the 24 solar-term instants falling in Gregorian ``year`` (UT), in order."""

    jd_start = julian_day(datetime(year, 1, 1, tzinfo=UTC))
    instants: list[SolarTermInstant] = []
    for index, name in enumerate(SOLAR_TERMS):
        longitude = (_SPRING_START_LONGITUDE + index * _TERM_SPAN_DEG) % 360.0
        jd = _crossing(longitude, jd_start, mode)
        instants.append(
            SolarTermInstant(
                name=name,
                index=index,
                longitude=longitude,
                moment=datetime_from_julian_day(jd),
            )
        )
    instants.sort(key=lambda item: item.moment)
    return instants
