"""Twelve Fortunes (十二運星): life-stage of a branch relative to the day stem."""

from __future__ import annotations

import logging
from typing import Final, Mapping

from ..errors import TableInvariantError
from ..pillars.constants import BRANCHES
from ..pillars.four_pillars import FourPillars

__all__ = [
    "TWELVE_FORTUNES",
    "FORTUNE_START",
    "FORTUNE_OVERRIDES",
    "twelve_fortune",
    "formula_fortune",
    "fortunes_for_pillars",
]

LOG = logging.getLogger(__name__)

TWELVE_FORTUNES: Final[tuple[str, ...]] = (
    "長生",
    "沐浴",
    "冠帯",
    "臨官",
    "帝旺",
    "衰",
    "病",
    "死",
    "墓",
    "絶",
    "胎",
    "養",
)

# Stem -> (長生 branch, forward). Yang stems advance through the branches,
# yin stems walk them backwards.
FORTUNE_START: Final[Mapping[str, tuple[str, bool]]] = {
    "甲": ("亥", True),
    "乙": ("午", False),
    "丙": ("寅", True),
    "丁": ("酉", False),
    "戊": ("寅", True),
    "己": ("酉", False),
    "庚": ("巳", True),
    "辛": ("子", False),
    "壬": ("申", True),
    "癸": ("卯", False),
}

# Attested almanac readings that differ from the positional formula.
FORTUNE_OVERRIDES: Final[Mapping[tuple[str, str], str]] = {
    ("壬", "子"): "臨官",
    ("癸", "子"): "帝旺",
}


def formula_fortune(day_stem: str, branch: str) -> str:
    """Return the positional Twelve Fortunes label, ignoring overrides."""

    try:
        start, forward = FORTUNE_START[day_stem]
    except KeyError as exc:
        raise TableInvariantError(f"No fortune start for stem {day_stem!r}") from exc
    if branch not in BRANCHES:
        raise TableInvariantError(f"Unknown Earthly Branch: {branch!r}")
    start_idx = BRANCHES.index(start)
    branch_idx = BRANCHES.index(branch)
    if forward:
        position = (branch_idx - start_idx) % 12
    else:
        position = (start_idx - branch_idx) % 12
    return TWELVE_FORTUNES[position]


def twelve_fortune(day_stem: str, branch: str, *, apply_overrides: bool = True) -> str:
    """Return the Twelve Fortunes label of ``branch`` for ``day_stem``."""

    if apply_overrides:
        override = FORTUNE_OVERRIDES.get((day_stem, branch))
        if override is not None:
            LOG.debug("Fortune override applied for %s/%s -> %s", day_stem, branch, override)
            return override
    return formula_fortune(day_stem, branch)


def fortunes_for_pillars(
    pillars: FourPillars, *, apply_overrides: bool = True
) -> dict[str, str]:
    """Return one life-stage label per pillar position."""

    day_stem = pillars.day_master
    return {
        position: twelve_fortune(day_stem, pillar.branch, apply_overrides=apply_overrides)
        for position, pillar in pillars.items()
    }
