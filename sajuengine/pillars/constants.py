"""Lookup tables for Heavenly Stems, Earthly Branches and the Five Elements."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Mapping

from ..errors import TableInvariantError

__all__ = [
    "HeavenlyStem",
    "EarthlyBranch",
    "HEAVENLY_STEMS",
    "EARTHLY_BRANCHES",
    "STEMS",
    "BRANCHES",
    "ELEMENTS",
    "YIN",
    "YANG",
    "STEM_ELEMENT",
    "STEM_POLARITY",
    "BRANCH_ELEMENT",
    "BRANCH_POLARITY",
    "HIDDEN_STEMS",
    "GENERATES",
    "CONTROLS",
    "SEXAGENARY_LABELS",
    "stem_index",
    "branch_index",
    "hidden_stems",
]


@dataclass(frozen=True)
class HeavenlyStem:
    """Representation of one of the ten Heavenly Stems (天干)."""

    symbol: str
    name: str
    element: str
    polarity: str


@dataclass(frozen=True)
class EarthlyBranch:
    """Representation of one of the twelve Earthly Branches (地支)."""

    symbol: str
    name: str
    animal: str
    element: str
    polarity: str


YIN: Final[str] = "陰"
YANG: Final[str] = "陽"

ELEMENTS: Final[tuple[str, ...]] = ("木", "火", "土", "金", "水")


HEAVENLY_STEMS: Final[tuple[HeavenlyStem, ...]] = (
    HeavenlyStem("甲", "Jia", "木", YANG),
    HeavenlyStem("乙", "Yi", "木", YIN),
    HeavenlyStem("丙", "Bing", "火", YANG),
    HeavenlyStem("丁", "Ding", "火", YIN),
    HeavenlyStem("戊", "Wu", "土", YANG),
    HeavenlyStem("己", "Ji", "土", YIN),
    HeavenlyStem("庚", "Geng", "金", YANG),
    HeavenlyStem("辛", "Xin", "金", YIN),
    HeavenlyStem("壬", "Ren", "水", YANG),
    HeavenlyStem("癸", "Gui", "水", YIN),
)


EARTHLY_BRANCHES: Final[tuple[EarthlyBranch, ...]] = (
    EarthlyBranch("子", "Zi", "Rat", "水", YANG),
    EarthlyBranch("丑", "Chou", "Ox", "土", YIN),
    EarthlyBranch("寅", "Yin", "Tiger", "木", YANG),
    EarthlyBranch("卯", "Mao", "Rabbit", "木", YIN),
    EarthlyBranch("辰", "Chen", "Dragon", "土", YANG),
    EarthlyBranch("巳", "Si", "Snake", "火", YIN),
    EarthlyBranch("午", "Wu", "Horse", "火", YANG),
    EarthlyBranch("未", "Wei", "Goat", "土", YIN),
    EarthlyBranch("申", "Shen", "Monkey", "金", YANG),
    EarthlyBranch("酉", "You", "Rooster", "金", YIN),
    EarthlyBranch("戌", "Xu", "Dog", "土", YANG),
    EarthlyBranch("亥", "Hai", "Pig", "水", YIN),
)

STEMS: Final[tuple[str, ...]] = tuple(stem.symbol for stem in HEAVENLY_STEMS)
BRANCHES: Final[tuple[str, ...]] = tuple(branch.symbol for branch in EARTHLY_BRANCHES)

STEM_ELEMENT: Final[Mapping[str, str]] = {s.symbol: s.element for s in HEAVENLY_STEMS}
STEM_POLARITY: Final[Mapping[str, str]] = {s.symbol: s.polarity for s in HEAVENLY_STEMS}
BRANCH_ELEMENT: Final[Mapping[str, str]] = {
    b.symbol: b.element for b in EARTHLY_BRANCHES
}
BRANCH_POLARITY: Final[Mapping[str, str]] = {
    b.symbol: b.polarity for b in EARTHLY_BRANCHES
}

# Main stem first; the remaining entries are the residual and minor qi.
HIDDEN_STEMS: Final[Mapping[str, tuple[str, ...]]] = {
    "子": ("癸",),
    "丑": ("己", "癸", "辛"),
    "寅": ("甲", "丙", "戊"),
    "卯": ("乙",),
    "辰": ("戊", "乙", "癸"),
    "巳": ("丙", "庚", "戊"),
    "午": ("丁", "己"),
    "未": ("己", "丁", "乙"),
    "申": ("庚", "壬", "戊"),
    "酉": ("辛",),
    "戌": ("戊", "辛", "丁"),
    "亥": ("壬", "甲"),
}

GENERATES: Final[Mapping[str, str]] = {
    "木": "火",
    "火": "土",
    "土": "金",
    "金": "水",
    "水": "木",
}

CONTROLS: Final[Mapping[str, str]] = {
    "木": "土",
    "土": "水",
    "水": "火",
    "火": "金",
    "金": "木",
}

SEXAGENARY_LABELS: Final[tuple[str, ...]] = tuple(
    STEMS[idx % 10] + BRANCHES[idx % 12] for idx in range(60)
)


def stem_index(stem: str) -> int:
    """Return the 0-9 index of ``stem`` (either the glyph or its romanised name)."""

    for idx, entry in enumerate(HEAVENLY_STEMS):
        if stem in (entry.symbol, entry.name):
            return idx
    raise TableInvariantError(f"Unknown Heavenly Stem: {stem!r}")


def branch_index(branch: str) -> int:
    """Return the 0-11 index of ``branch`` (either the glyph or its romanised name)."""

    for idx, entry in enumerate(EARTHLY_BRANCHES):
        if branch in (entry.symbol, entry.name):
            return idx
    raise TableInvariantError(f"Unknown Earthly Branch: {branch!r}")


def hidden_stems(branch: str) -> tuple[str, ...]:
    try:
        return HIDDEN_STEMS[branch]
    except KeyError as exc:
        raise TableInvariantError(f"No hidden stems tabulated for {branch!r}") from exc
