"""High level entry points assembling a complete Four Pillars reading."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from typing import Final, Iterable, Mapping, cast

from .almanac.local_time import LocalMoment
from .almanac.locations import resolve_location
from .almanac.lunar import LunarDate, lunar_date_or_none
from .almanac.solar_terms import SolarTermInfo
from .analysis.elements import ElementProfile, element_profile
from .analysis.fortunes import fortunes_for_pillars
from .analysis.spirits import twelve_spirits
from .analysis.ten_gods import branch_ten_god, hidden_stem_ten_gods, ten_god
from .config.settings import Settings, active_settings
from .ephemeris import use_ephemeris_path
from .errors import InvalidBirthInputError, UnknownLocationError
from .pillars.constants import BRANCH_ELEMENT, BRANCH_POLARITY, STEM_ELEMENT, STEM_POLARITY
from .pillars.four_pillars import (
    FourPillars,
    Pillar,
    compute_four_pillars,
    day_pillar,
)

__all__ = [
    "BirthInput",
    "SajuResult",
    "DailyPillar",
    "compute",
    "compute_many",
    "daily_pillar",
]

LOG = logging.getLogger(__name__)

DEFAULT_HOUR: Final[int] = 12
MIN_SUPPORTED_YEAR: Final[int] = 2
MAX_SUPPORTED_YEAR: Final[int] = 2999
_GENDERS: Final[frozenset[str | None]] = frozenset({"M", "F", None})
_TEN_GOD_POSITIONS: Final[tuple[str, ...]] = ("year", "month", "hour")


@dataclass(frozen=True)
class BirthInput:
    """Birth data supplied by the caller.

    ``date`` may be a :class:`datetime.date` or an ISO ``YYYY-MM-DD``
    string. When neither coordinates nor ``location`` are given the
    configured reference city is used.
    """

    date: date | str
    hour: int = DEFAULT_HOUR
    minute: int = 0
    longitude: float | None = None
    latitude: float | None = None
    location: str | None = None
    gender: str | None = None

    def to_dict(self) -> dict[str, object]:
        raw_date = self.date.isoformat() if isinstance(self.date, date) else self.date
        return {
            "date": raw_date,
            "hour": self.hour,
            "minute": self.minute,
            "longitude": self.longitude,
            "latitude": self.latitude,
            "location": self.location,
            "gender": self.gender,
        }


@dataclass(frozen=True)
class SajuResult:
    """Complete reading for one :class:`BirthInput`."""

    input: BirthInput
    four_pillars: FourPillars
    lunar_date: LunarDate | None
    solar_term: SolarTermInfo
    ten_gods: Mapping[str, str]
    branch_ten_gods: Mapping[str, str]
    hidden_stem_ten_gods: Mapping[str, tuple[tuple[str, str], ...]]
    element_profile: ElementProfile
    twelve_fortunes: Mapping[str, str]
    twelve_spirits: Mapping[str, str]
    local_time: LocalMoment
    gender: str | None = None
    provenance: Mapping[str, object] = field(default_factory=dict)

    @property
    def day_master(self) -> str:
        return self.four_pillars.day_master

    def to_dict(self) -> dict[str, object]:
        """Return the JSON-ready payload of the reading."""

        return {
            "input": self.input.to_dict(),
            "four_pillars": self.four_pillars.to_dict(),
            "day_master": self.day_master,
            "ten_gods": dict(self.ten_gods),
            "branch_ten_gods": dict(self.branch_ten_gods),
            "hidden_stem_ten_gods": {
                position: [list(pair) for pair in pairs]
                for position, pairs in self.hidden_stem_ten_gods.items()
            },
            "twelve_fortunes": dict(self.twelve_fortunes),
            "twelve_spirits": dict(self.twelve_spirits),
            "element_profile": self.element_profile.to_dict(),
            "lunar_date": self.lunar_date.to_dict() if self.lunar_date else None,
            "solar_term": self.solar_term.to_dict(),
            "local_time": self.local_time.to_dict(),
            "gender": self.gender,
            "provenance": dict(self.provenance),
        }


@dataclass(frozen=True)
class DailyPillar:
    """Day pillar of a calendar date with its element and polarity."""

    day: date
    pillar: Pillar

    @property
    def stem_element(self) -> str:
        return STEM_ELEMENT[self.pillar.stem]

    @property
    def branch_element(self) -> str:
        return BRANCH_ELEMENT[self.pillar.branch]

    @property
    def polarity(self) -> str:
        return STEM_POLARITY[self.pillar.stem]

    @property
    def branch_polarity(self) -> str:
        return BRANCH_POLARITY[self.pillar.branch]

    def to_dict(self) -> dict[str, object]:
        return {
            "date": self.day.isoformat(),
            "stem": self.pillar.stem,
            "branch": self.pillar.branch,
            "label": self.pillar.label,
            "stem_element": self.stem_element,
            "branch_element": self.branch_element,
            "polarity": self.polarity,
            "branch_polarity": self.branch_polarity,
        }


# ---------------------------------------------------------------------------
# Validation


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _coerce_date(value: object) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as exc:
            raise InvalidBirthInputError(f"Invalid birth date {value!r}: {exc}") from exc
    raise InvalidBirthInputError(
        f"Birth date must be a date or ISO string, got {type(value).__name__}"
    )


def _check_coordinate(name: str, value: object, limit: float) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidBirthInputError(f"{name} must be a number, got {value!r}")
    numeric = float(value)
    if not -limit <= numeric <= limit:
        raise InvalidBirthInputError(f"{name} must lie within [-{limit:g}, {limit:g}]")
    return numeric


def _validate(birth: BirthInput) -> BirthInput:
    """Return ``birth`` with a parsed date, raising on any malformed field."""

    birth_date = _coerce_date(birth.date)
    if not MIN_SUPPORTED_YEAR <= birth_date.year <= MAX_SUPPORTED_YEAR:
        raise InvalidBirthInputError(
            f"Birth year {birth_date.year} outside supported range "
            f"{MIN_SUPPORTED_YEAR}-{MAX_SUPPORTED_YEAR}"
        )
    if not _is_int(birth.hour) or not 0 <= birth.hour <= 23:
        raise InvalidBirthInputError(f"Hour must be an integer in 0-23, got {birth.hour!r}")
    if not _is_int(birth.minute) or not 0 <= birth.minute <= 59:
        raise InvalidBirthInputError(
            f"Minute must be an integer in 0-59, got {birth.minute!r}"
        )
    if birth.gender not in _GENDERS:
        raise InvalidBirthInputError(f"Gender must be 'M', 'F' or None, got {birth.gender!r}")
    longitude = _check_coordinate("Longitude", birth.longitude, 180.0)
    latitude = _check_coordinate("Latitude", birth.latitude, 90.0)
    return replace(birth, date=birth_date, longitude=longitude, latitude=latitude)


def _resolve_coordinates(birth: BirthInput, settings: Settings) -> tuple[float, float | None]:
    if birth.longitude is not None:
        return birth.longitude, birth.latitude
    name = birth.location or settings.location.reference_city
    try:
        city = resolve_location(name)
    except UnknownLocationError as exc:
        if birth.location is not None:
            raise InvalidBirthInputError(str(exc)) from exc
        raise
    latitude = birth.latitude if birth.latitude is not None else city.latitude
    return city.longitude, latitude


# ---------------------------------------------------------------------------
# Public API


def compute(birth: BirthInput, *, settings: Settings | None = None) -> SajuResult:
    """Compute the Four Pillars reading for ``birth``.

    Raises
    ------
    InvalidBirthInputError
        If any field of ``birth`` is malformed or out of range. Nothing is
        computed in that case.
    """

    birth = _validate(birth)
    if settings is None:
        settings = active_settings()
    longitude, latitude = _resolve_coordinates(birth, settings)
    use_ephemeris_path(settings.ephemeris.path)

    moment = datetime.combine(cast(date, birth.date), time(birth.hour, birth.minute))
    chart = compute_four_pillars(
        moment,
        longitude,
        reference_meridian=settings.location.reference_meridian,
        local_time_correction=settings.location.local_time_correction,
        year_boundary=settings.calendar.year_boundary,
        ephemeris_mode=settings.ephemeris.mode,
    )
    pillars = chart.pillars

    fortunes = fortunes_for_pillars(pillars, apply_overrides=settings.fortunes.apply_overrides)
    spirits = twelve_spirits(
        pillars, apply_known_exceptions=settings.spirits.apply_known_exceptions
    )
    labelled = FourPillars(
        **{
            position: pillar.with_labels(
                life_stage=fortunes[position], spirit=spirits[position]
            )
            for position, pillar in pillars.items()
        }
    )

    master = labelled.day_master
    ten_gods = {
        position: ten_god(master, labelled[position].stem) for position in _TEN_GOD_POSITIONS
    }
    branch_gods = {
        position: branch_ten_god(master, pillar.branch) for position, pillar in labelled.items()
    }
    hidden_gods = {
        position: hidden_stem_ten_gods(master, pillar.branch)
        for position, pillar in labelled.items()
    }

    provenance = dict(chart.provenance)
    provenance.update({"longitude": longitude, "latitude": latitude})
    LOG.debug("Computed %s for %s", "".join(labelled.labels()), birth.date)

    return SajuResult(
        input=birth,
        four_pillars=labelled,
        lunar_date=lunar_date_or_none(chart.local_time.corrected.date()),
        solar_term=chart.solar_term,
        ten_gods=ten_gods,
        branch_ten_gods=branch_gods,
        hidden_stem_ten_gods=hidden_gods,
        element_profile=element_profile(labelled),
        twelve_fortunes=fortunes,
        twelve_spirits=spirits,
        local_time=chart.local_time,
        gender=birth.gender,
        provenance=provenance,
    )


def compute_many(
    inputs: Iterable[BirthInput], *, settings: Settings | None = None
) -> list[SajuResult]:
    """Compute a reading for every birth input, sharing one settings object."""

    resolved = settings if settings is not None else active_settings()
    return [compute(birth, settings=resolved) for birth in inputs]


def daily_pillar(day: date | str) -> DailyPillar:
    """Return the day pillar of the calendar ``day`` (no time correction)."""

    parsed = _coerce_date(day)
    return DailyPillar(day=parsed, pillar=day_pillar(parsed))
