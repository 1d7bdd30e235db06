"""Stem/branch tables and the four pillar calculators."""

from __future__ import annotations

from .constants import (
    BRANCHES,
    CONTROLS,
    EARTHLY_BRANCHES,
    GENERATES,
    HEAVENLY_STEMS,
    HIDDEN_STEMS,
    STEMS,
    EarthlyBranch,
    HeavenlyStem,
)
from .four_pillars import (
    PILLAR_POSITIONS,
    FourPillars,
    FourPillarsChart,
    Pillar,
    compute_four_pillars,
    day_pillar,
    hour_pillar,
    month_pillar,
    year_pillar,
)
from .sexagenary import SexagenaryCycleEntry, sexagenary_entry_for_index, sexagenary_index

__all__ = [
    "BRANCHES",
    "CONTROLS",
    "EARTHLY_BRANCHES",
    "GENERATES",
    "HEAVENLY_STEMS",
    "HIDDEN_STEMS",
    "STEMS",
    "EarthlyBranch",
    "HeavenlyStem",
    "PILLAR_POSITIONS",
    "FourPillars",
    "FourPillarsChart",
    "Pillar",
    "compute_four_pillars",
    "day_pillar",
    "hour_pillar",
    "month_pillar",
    "year_pillar",
    "SexagenaryCycleEntry",
    "sexagenary_entry_for_index",
    "sexagenary_index",
]
