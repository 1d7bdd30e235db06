"""Four Pillars (四柱) computation logic."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Final, Iterator, Literal, Mapping

from ..almanac.local_time import (
    DEFAULT_REFERENCE_MERIDIAN,
    LocalMoment,
    correct_local_time,
    to_universal_time,
)
from ..almanac.solar_terms import EphemerisMode, SolarTermInfo, solar_term_info
from .constants import (
    BRANCHES,
    EARTHLY_BRANCHES,
    HEAVENLY_STEMS,
    STEMS,
    EarthlyBranch,
    HeavenlyStem,
    hidden_stems,
)
from .sexagenary import (
    day_cycle_index,
    hour_stem_branch,
    month_stem_branch,
    sexagenary_entry_for_index,
    solar_term_year,
    year_cycle_index,
)

__all__ = [
    "PILLAR_POSITIONS",
    "YearBoundary",
    "Pillar",
    "FourPillars",
    "FourPillarsChart",
    "build_pillar",
    "year_pillar",
    "month_pillar",
    "day_pillar",
    "hour_pillar",
    "compute_four_pillars",
]

LOG = logging.getLogger(__name__)

PILLAR_POSITIONS: Final[tuple[str, ...]] = ("year", "month", "day", "hour")

YearBoundary = Literal["gregorian", "lichun"]


@dataclass(frozen=True)
class Pillar:
    """A single pillar made up of a Heavenly Stem and Earthly Branch."""

    stem: str
    branch: str
    hidden_stems: tuple[str, ...]
    life_stage: str | None = None
    spirit: str | None = None

    @property
    def label(self) -> str:
        return f"{self.stem}{self.branch}"

    @property
    def heavenly_stem(self) -> HeavenlyStem:
        return HEAVENLY_STEMS[STEMS.index(self.stem)]

    @property
    def earthly_branch(self) -> EarthlyBranch:
        return EARTHLY_BRANCHES[BRANCHES.index(self.branch)]

    @property
    def cycle_index(self) -> int | None:
        """Return the 0-59 sexagenary index, or ``None`` for a mixed-parity pair."""

        stem_idx = STEMS.index(self.stem)
        branch_idx = BRANCHES.index(self.branch)
        if stem_idx % 2 != branch_idx % 2:
            return None
        return (6 * stem_idx - 5 * branch_idx) % 60

    def with_labels(
        self, *, life_stage: str | None = None, spirit: str | None = None
    ) -> "Pillar":
        return replace(
            self,
            life_stage=life_stage if life_stage is not None else self.life_stage,
            spirit=spirit if spirit is not None else self.spirit,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "stem": self.stem,
            "branch": self.branch,
            "label": self.label,
            "hidden_stems": list(self.hidden_stems),
            "life_stage": self.life_stage,
            "spirit": self.spirit,
        }


@dataclass(frozen=True)
class FourPillars:
    """Container for the year, month, day, and hour pillars."""

    year: Pillar
    month: Pillar
    day: Pillar
    hour: Pillar

    @property
    def day_master(self) -> str:
        """Return the day stem, the pivot of every derived label."""

        return self.day.stem

    def __getitem__(self, position: str) -> Pillar:
        if position not in PILLAR_POSITIONS:
            raise KeyError(position)
        return getattr(self, position)

    def items(self) -> Iterator[tuple[str, Pillar]]:
        for position in PILLAR_POSITIONS:
            yield position, getattr(self, position)

    def labels(self) -> tuple[str, str, str, str]:
        return (self.year.label, self.month.label, self.day.label, self.hour.label)

    def stems(self) -> tuple[str, str, str, str]:
        return (self.year.stem, self.month.stem, self.day.stem, self.hour.stem)

    def branches(self) -> tuple[str, str, str, str]:
        return (self.year.branch, self.month.branch, self.day.branch, self.hour.branch)

    def to_dict(self) -> dict[str, dict[str, object]]:
        return {position: pillar.to_dict() for position, pillar in self.items()}


@dataclass(frozen=True)
class FourPillarsChart:
    """Pillars together with the corrected moment and solar term they came from."""

    pillars: FourPillars
    local_time: LocalMoment
    solar_term: SolarTermInfo
    provenance: Mapping[str, object]


def build_pillar(stem_index: int, branch_index: int) -> Pillar:
    branch = BRANCHES[branch_index % 12]
    return Pillar(
        stem=STEMS[stem_index % 10],
        branch=branch,
        hidden_stems=hidden_stems(branch),
    )


def _pillar_for_cycle(index: int) -> Pillar:
    entry = sexagenary_entry_for_index(index)
    return build_pillar(entry.stem_index, entry.branch_index)


def year_pillar(year: int) -> Pillar:
    """Return the year pillar of the proleptic Gregorian ``year``."""

    return _pillar_for_cycle(year_cycle_index(year))


def month_pillar(period: int, year_stem: str) -> Pillar:
    """Return the month pillar for solar-term ``period`` under ``year_stem``."""

    stem_idx, branch_idx = month_stem_branch(period, STEMS.index(year_stem))
    return build_pillar(stem_idx, branch_idx)


def day_pillar(day: date) -> Pillar:
    """Return the day pillar of the civil (already corrected) ``day``."""

    return _pillar_for_cycle(day_cycle_index(day))


def hour_pillar(hour: int, day_stem: str) -> Pillar:
    """Return the hour pillar for the clock ``hour`` on a day with ``day_stem``."""

    stem_idx, branch_idx = hour_stem_branch(hour, STEMS.index(day_stem))
    return build_pillar(stem_idx, branch_idx)


def compute_four_pillars(
    moment: datetime,
    longitude: float,
    *,
    reference_meridian: float = DEFAULT_REFERENCE_MERIDIAN,
    local_time_correction: bool = True,
    year_boundary: YearBoundary = "gregorian",
    ephemeris_mode: EphemerisMode = "moshier",
) -> FourPillarsChart:
    """Compute the Four Pillars for the naive wall-clock ``moment``.

    Parameters
    ----------
    moment:
        Naive datetime read as standard time of ``reference_meridian``.
    longitude:
        Birth longitude in degrees east; drives the local time correction.
    year_boundary:
        ``"gregorian"`` switches the year pillar on 1 January, ``"lichun"``
        on the Start of Spring solar term.
    ephemeris_mode:
        Swiss Ephemeris backend used for the solar-term lookup.
    """

    local = correct_local_time(
        moment,
        longitude,
        reference_meridian=reference_meridian,
        enabled=local_time_correction,
    )
    corrected = local.corrected
    term = solar_term_info(to_universal_time(local), mode=ephemeris_mode)

    term_year = solar_term_year(corrected.year, corrected.month, term.period)
    pillar_year = term_year if year_boundary == "lichun" else corrected.year

    year = year_pillar(pillar_year)
    month = month_pillar(term.period, year_pillar(term_year).stem)
    day = day_pillar(corrected.date())
    hour = hour_pillar(corrected.hour, day.stem)

    LOG.debug(
        "Pillars for %s: %s %s %s %s (period=%d, term year=%d)",
        corrected.isoformat(),
        year.label,
        month.label,
        day.label,
        hour.label,
        term.period,
        term_year,
    )

    provenance: dict[str, object] = {
        "year_boundary": year_boundary,
        "pillar_year": pillar_year,
        "solar_term_year": term_year,
        "solar_term_period": term.period,
        "day_cycle_index": day_cycle_index(corrected.date()),
        "ephemeris_mode": ephemeris_mode,
    }
    return FourPillarsChart(
        pillars=FourPillars(year=year, month=month, day=day, hour=hour),
        local_time=local,
        solar_term=term,
        provenance=provenance,
    )
