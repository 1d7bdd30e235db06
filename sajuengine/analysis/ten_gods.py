"""Ten Gods (十神): how a stem relates to the day master.

The relation is read from the Five-Element generate/control cycles and the
polarity of the two stems. Every (day master, stem) pair maps to exactly one
of the ten labels.
"""

from __future__ import annotations

from typing import Final, Mapping

from ..errors import TableInvariantError
from ..pillars.constants import (
    CONTROLS,
    GENERATES,
    STEM_ELEMENT,
    STEM_POLARITY,
    hidden_stems,
)

__all__ = [
    "TEN_GODS",
    "TEN_GOD_KOREAN",
    "SELF_LABEL",
    "ten_god",
    "branch_ten_god",
    "hidden_stem_ten_gods",
    "korean_name",
]

TEN_GODS: Final[tuple[str, ...]] = (
    "比肩",
    "劫財",
    "食神",
    "傷官",
    "偏財",
    "正財",
    "偏官",
    "正官",
    "偏印",
    "正印",
)

TEN_GOD_KOREAN: Final[Mapping[str, str]] = {
    "比肩": "비견",
    "劫財": "겁재",
    "食神": "식신",
    "傷官": "상관",
    "偏財": "편재",
    "正財": "정재",
    "偏官": "편관",
    "正官": "정관",
    "偏印": "편인",
    "正印": "정인",
}

# The day pillar compared against itself.
SELF_LABEL: Final[str] = TEN_GODS[0]

# (same polarity, opposite polarity) per element relation.
_RELATION_LABELS: Final[Mapping[str, tuple[str, str]]] = {
    "peer": ("比肩", "劫財"),
    "output": ("食神", "傷官"),
    "wealth": ("偏財", "正財"),
    "authority": ("偏官", "正官"),
    "resource": ("偏印", "正印"),
}


def _relation(day_element: str, other_element: str) -> str:
    if day_element == other_element:
        return "peer"
    if GENERATES[day_element] == other_element:
        return "output"
    if CONTROLS[day_element] == other_element:
        return "wealth"
    if CONTROLS[other_element] == day_element:
        return "authority"
    if GENERATES[other_element] == day_element:
        return "resource"
    raise TableInvariantError(
        f"No element relation between {day_element!r} and {other_element!r}"
    )


def ten_god(day_master: str, other: str) -> str:
    """Return the Ten God label of ``other`` seen from ``day_master``."""

    try:
        day_element = STEM_ELEMENT[day_master]
        other_element = STEM_ELEMENT[other]
    except KeyError as exc:
        raise TableInvariantError(f"Unknown Heavenly Stem: {exc.args[0]!r}") from exc
    same, opposite = _RELATION_LABELS[_relation(day_element, other_element)]
    if STEM_POLARITY[day_master] == STEM_POLARITY[other]:
        return same
    return opposite


def branch_ten_god(day_master: str, branch: str) -> str:
    """Return the Ten God of ``branch`` through its main hidden stem."""

    return ten_god(day_master, hidden_stems(branch)[0])


def hidden_stem_ten_gods(day_master: str, branch: str) -> tuple[tuple[str, str], ...]:
    """Return ``(hidden stem, Ten God)`` pairs for every stem hidden in ``branch``."""

    return tuple((stem, ten_god(day_master, stem)) for stem in hidden_stems(branch))


def korean_name(label: str) -> str:
    return TEN_GOD_KOREAN[label]
