"""Reference cities used when a birth input carries no coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from ..errors import UnknownLocationError

__all__ = [
    "ReferenceCity",
    "REFERENCE_CITIES",
    "DEFAULT_CITY",
    "resolve_location",
]


@dataclass(frozen=True)
class ReferenceCity:
    """Named location with the coordinates used for local time correction."""

    name: str
    english: str
    longitude: float
    latitude: float


REFERENCE_CITIES: Final[tuple[ReferenceCity, ...]] = (
    ReferenceCity("東京", "Tokyo", 139.77, 35.68),
    ReferenceCity("ソウル", "Seoul", 126.98, 37.57),
    ReferenceCity("京都", "Kyoto", 135.77, 35.02),
    ReferenceCity("大阪", "Osaka", 135.50, 34.70),
    ReferenceCity("名古屋", "Nagoya", 136.91, 35.18),
    ReferenceCity("福岡", "Fukuoka", 130.40, 33.60),
    ReferenceCity("札幌", "Sapporo", 141.35, 43.07),
    ReferenceCity("那覇", "Naha", 127.68, 26.22),
    ReferenceCity("北京", "Beijing", 116.41, 39.90),
    ReferenceCity("上海", "Shanghai", 121.47, 31.23),
)

DEFAULT_CITY: Final[ReferenceCity] = REFERENCE_CITIES[0]


def resolve_location(name: str) -> ReferenceCity:
    """Return the reference city matching ``name``.

    Both the native spelling (``ソウル``) and the English name (``seoul``,
    case insensitive) are accepted.

    Raises
    ------
    UnknownLocationError
        If ``name`` is blank or not tabulated.
    """

    trimmed = name.strip()
    if not trimmed:
        raise UnknownLocationError("Location name must not be empty.")
    lowered = trimmed.casefold()
    for city in REFERENCE_CITIES:
        if trimmed == city.name or lowered == city.english.casefold():
            return city
    known = ", ".join(city.english for city in REFERENCE_CITIES)
    raise UnknownLocationError(f"Unknown location {name!r}; expected one of: {known}")
