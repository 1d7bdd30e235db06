"""Utilities for working with the sixty Jia-Zi combinations.

Every pillar calculator reduces to arithmetic on stem (mod 10) and branch
(mod 12) indices:

* year: closed form anchored on 4 CE (甲子),
* month: solar-term period plus the "Five Tigers" stem offset,
* day: continuous count from the 1949-10-01 甲子 reference day,
* hour: whole-hour double hours plus the "Five Rats" stem offset.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Final

from ..errors import TableInvariantError
from .constants import (
    BRANCHES,
    EARTHLY_BRANCHES,
    HEAVENLY_STEMS,
    STEMS,
    EarthlyBranch,
    HeavenlyStem,
)

SEXAGENARY_CYCLE_LENGTH: Final[int] = 60

# Reference day: 1949-10-01 is a 甲子 day in every published almanac.
DAY_CYCLE_EPOCH: Final[date] = date(1949, 10, 1)
_DAY_CYCLE_EPOCH_INDEX: Final[int] = 0

_YEAR_CYCLE_OFFSET: Final[int] = 4  # 4 CE is a 甲子 year.

# Solar-term period 0 (the 立春 month) carries branch 寅.
_MONTH_BRANCH_OFFSET: Final[int] = 2


@dataclass(frozen=True)
class SexagenaryCycleEntry:
    """Pairing of a Heavenly Stem and Earthly Branch."""

    index: int
    stem_index: int
    branch_index: int

    @property
    def stem(self) -> HeavenlyStem:
        return HEAVENLY_STEMS[self.stem_index]

    @property
    def branch(self) -> EarthlyBranch:
        return EARTHLY_BRANCHES[self.branch_index]

    def label(self) -> str:
        """Return the stem-branch label (e.g., ``甲子``)."""

        return f"{self.stem.symbol}{self.branch.symbol}"

    def romanized(self) -> str:
        """Return a romanised label (e.g., ``Jia-Zi``)."""

        return f"{self.stem.name}-{self.branch.name}"


_FIRST_MONTH_STEM_INDEX: Final[dict[int, int]] = {
    0: 2,  # 甲 year -> 丙寅 month
    5: 2,  # 己
    1: 4,  # 乙/庚 -> 戊寅
    6: 4,
    2: 6,  # 丙/辛 -> 庚寅
    7: 6,
    3: 8,  # 丁/壬 -> 壬寅
    8: 8,
    4: 0,  # 戊/癸 -> 甲寅
    9: 0,
}

_FIRST_HOUR_STEM_INDEX: Final[dict[int, int]] = {
    0: 0,  # 甲/己 day -> 甲子 hour
    5: 0,
    1: 2,  # 乙/庚 day -> 丙子 hour
    6: 2,
    2: 4,  # 丙/辛 -> 戊子
    7: 4,
    3: 6,  # 丁/壬 -> 庚子
    8: 6,
    4: 8,  # 戊/癸 -> 壬子
    9: 8,
}

# Clock hour -> branch index. 子 takes 23, 0 and 1; hour 5 belongs to 卯.
_HOUR_BRANCH_INDEX: Final[tuple[int, ...]] = (
    0, 0,  # 0-1 子
    1, 1,  # 2-3 丑
    2,  # 4 寅
    3, 3, 3,  # 5-7 卯
    4, 4,  # 8-9 辰
    5, 5,  # 10-11 巳
    6, 6,  # 12-13 午
    7, 7,  # 14-15 未
    8, 8,  # 16-17 申
    9, 9,  # 18-19 酉
    10, 10,  # 20-21 戌
    11,  # 22 亥
    0,  # 23 子
)


def sexagenary_entry_for_index(index: int) -> SexagenaryCycleEntry:
    """Return the cycle entry for ``index`` (0-59)."""

    idx = index % SEXAGENARY_CYCLE_LENGTH
    return SexagenaryCycleEntry(index=idx, stem_index=idx % 10, branch_index=idx % 12)


def sexagenary_index(stem_index: int, branch_index: int) -> int:
    """Return the 0-59 index for the provided stem/branch combination."""

    target_stem = stem_index % 10
    target_branch = branch_index % 12
    for idx in range(SEXAGENARY_CYCLE_LENGTH):
        if idx % 10 == target_stem and idx % 12 == target_branch:
            return idx
    msg = f"Invalid stem/branch pairing: stem={stem_index}, branch={branch_index}"
    raise ValueError(msg)


def sexagenary_index_for_label(label: str) -> int:
    """Return the 0-59 index for a two-glyph label such as ``丙午``."""

    if len(label) != 2 or label[0] not in STEMS or label[1] not in BRANCHES:
        raise ValueError(f"Not a stem-branch label: {label!r}")
    return sexagenary_index(STEMS.index(label[0]), BRANCHES.index(label[1]))


def year_cycle_index(year: int) -> int:
    """Return the sexagenary index for the solar ``year``."""

    return (year - _YEAR_CYCLE_OFFSET) % SEXAGENARY_CYCLE_LENGTH


def solar_term_year(year: int, month: int, period: int) -> int:
    """Return the year whose 立春 opened the solar-term ``period``.

    Periods 10 (子) and 11 (丑) straddle the new year; when they are observed
    in January or February they still belong to the previous year's sequence.
    """

    if month <= 2 and period >= 10:
        return year - 1
    return year


def month_stem_branch(period: int, year_stem_index: int) -> tuple[int, int]:
    """Return ``(stem_index, branch_index)`` for a solar-term month period."""

    if not 0 <= period < 12:
        raise TableInvariantError(f"Solar-term period out of range: {period}")
    try:
        first_stem = _FIRST_MONTH_STEM_INDEX[year_stem_index % 10]
    except KeyError as exc:  # pragma: no cover - the modulus keeps the key in range
        raise TableInvariantError(f"No month stem start for {year_stem_index}") from exc
    stem = (first_stem + period) % 10
    branch = (period + _MONTH_BRANCH_OFFSET) % 12
    return stem, branch


def day_cycle_index(day: date) -> int:
    """Return the sexagenary index for the civil ``day``."""

    delta_days = (day - DAY_CYCLE_EPOCH).days
    return (_DAY_CYCLE_EPOCH_INDEX + delta_days) % SEXAGENARY_CYCLE_LENGTH


def hour_branch_index(hour: int) -> int:
    """Return the branch index of the double hour (時辰) for the clock ``hour``.

    Double hours follow the whole clock hour: 子 covers 23, 0 and 1, then
    two hours per branch. The almanac tradition this engine follows moves
    hour 5 into 卯, so 卯 covers 5-7 and 寅 only hour 4.
    """

    if not 0 <= hour <= 23:
        raise TableInvariantError(f"Clock hour out of range: {hour}")
    return _HOUR_BRANCH_INDEX[hour]


def hour_stem_branch(hour: int, day_stem_index: int) -> tuple[int, int]:
    """Return ``(stem_index, branch_index)`` of the hour pillar.

    The late 子 hour (23) keeps the current day's Five Rats start stem.
    """

    branch = hour_branch_index(hour)
    first_stem = _FIRST_HOUR_STEM_INDEX[day_stem_index % 10]
    return (first_stem + branch) % 10, branch


__all__ = [
    "SexagenaryCycleEntry",
    "SEXAGENARY_CYCLE_LENGTH",
    "DAY_CYCLE_EPOCH",
    "sexagenary_entry_for_index",
    "sexagenary_index",
    "sexagenary_index_for_label",
    "year_cycle_index",
    "solar_term_year",
    "month_stem_branch",
    "day_cycle_index",
    "hour_branch_index",
    "hour_stem_branch",
]
