"""Calendar conversions feeding the pillar calculators."""

from __future__ import annotations

from .local_time import (
    DEFAULT_REFERENCE_MERIDIAN,
    LocalMoment,
    correct_local_time,
    longitude_offset_minutes,
    to_universal_time,
)
from .locations import DEFAULT_CITY, REFERENCE_CITIES, ReferenceCity, resolve_location
from .lunar import (
    LunarDate,
    gregorian_from_lunar,
    leap_month,
    lunar_date_or_none,
    lunar_from_gregorian,
)
from .solar_terms import (
    SOLAR_TERMS,
    SolarTermInfo,
    SolarTermInstant,
    solar_term,
    solar_term_info,
    solar_term_period,
    term_instants,
)

__all__ = [
    "DEFAULT_REFERENCE_MERIDIAN",
    "LocalMoment",
    "correct_local_time",
    "longitude_offset_minutes",
    "to_universal_time",
    "DEFAULT_CITY",
    "REFERENCE_CITIES",
    "ReferenceCity",
    "resolve_location",
    "LunarDate",
    "gregorian_from_lunar",
    "leap_month",
    "lunar_date_or_none",
    "lunar_from_gregorian",
    "SOLAR_TERMS",
    "SolarTermInfo",
    "SolarTermInstant",
    "solar_term",
    "solar_term_info",
    "solar_term_period",
    "term_instants",
]
