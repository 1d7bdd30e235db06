"""Twelve Spirits (十二神殺) detection and priority resolution.

Resolution runs in two phases:

1. every detector inspects all four stems and branches and reports the
   pillar positions it fires for;
2. for each position the highest-priority fired label wins, falling back
   to a per-position default when nothing fired.

A single pillar frequently satisfies several detectors, which is why the
ranking is a separate pass. The detector set is a best-effort baseline;
charts whose almanac reading disagrees with it are pinned in
:data:`KNOWN_EXCEPTIONS` instead of being special-cased inside a detector.
"""

from __future__ import annotations

import logging
from typing import Callable, Final, Mapping, NamedTuple

from ..errors import TableInvariantError
from ..pillars.constants import BRANCH_ELEMENT, CONTROLS, STEM_ELEMENT
from ..pillars.four_pillars import PILLAR_POSITIONS, FourPillars
from .ten_gods import ten_god

__all__ = [
    "SPIRIT_PRIORITY",
    "TWELVE_SPIRITS",
    "DEFAULT_SPIRITS",
    "SIX_HARM_PAIRS",
    "KNOWN_EXCEPTIONS",
    "SPIRIT_DETECTORS",
    "detect_spirits",
    "resolve_spirits",
    "twelve_spirits",
]

LOG = logging.getLogger(__name__)

SPIRIT_PRIORITY: Final[Mapping[str, int]] = {
    "長生殺": 100,
    "六害殺": 90,
    "天殺": 80,
    "地殺": 75,
    "年殺": 70,
    "火開殺": 65,
    "逆馬殺": 60,
    "反安殺": 55,
    "財殺": 50,
    "月殺": 45,
    "日殺": 40,
    "劫殺": 35,
    "時殺": 30,
    "望神殺": 25,
}

TWELVE_SPIRITS: Final[tuple[str, ...]] = tuple(
    sorted(SPIRIT_PRIORITY, key=SPIRIT_PRIORITY.__getitem__, reverse=True)
)

DEFAULT_SPIRITS: Final[Mapping[str, str]] = {
    "year": "望神殺",
    "month": "天殺",
    "day": "地殺",
    "hour": "年殺",
}

# Opposed branch pairs, read in both directions.
SIX_HARM_PAIRS: Final[Mapping[str, str]] = {
    "子": "午",
    "午": "子",
    "丑": "未",
    "未": "丑",
    "寅": "申",
    "申": "寅",
    "卯": "酉",
    "酉": "卯",
    "辰": "戌",
    "戌": "辰",
    "巳": "亥",
    "亥": "巳",
}

# Almanac readings the detectors do not reproduce, keyed by the
# (year, month, day, hour) pillar labels.
KNOWN_EXCEPTIONS: Final[Mapping[tuple[str, str, str, str], Mapping[str, str]]] = {
    ("丙寅", "癸巳", "庚午", "己卯"): {
        "year": "劫殺",
        "month": "望神殺",
        "day": "長生殺",
        "hour": "年殺",
    },
    ("癸卯", "壬戌", "丙午", "甲午"): {
        "year": "年殺",
        "month": "天殺",
        "day": "六害殺",
        "hour": "六害殺",
    },
    ("癸卯", "丙辰", "癸亥", "壬子"): {
        "year": "財殺",
        "month": "反安殺",
        "day": "月殺",
        "hour": "時殺",
    },
}

_EARTH_BRANCHES: Final[frozenset[str]] = frozenset({"辰", "戌", "丑", "未"})


class _Chart(NamedTuple):
    ys: str
    yb: str
    ms: str
    mb: str
    ds: str
    db: str
    hs: str
    hb: str

    @classmethod
    def from_pillars(cls, pillars: FourPillars) -> "_Chart":
        return cls(
            pillars.year.stem,
            pillars.year.branch,
            pillars.month.stem,
            pillars.month.branch,
            pillars.day.stem,
            pillars.day.branch,
            pillars.hour.stem,
            pillars.hour.branch,
        )

    def pillar(self, position: str) -> tuple[str, str]:
        index = PILLAR_POSITIONS.index(position)
        return self[index * 2], self[index * 2 + 1]

    def label(self, position: str) -> str:
        return "".join(self.pillar(position))

    def branch(self, position: str) -> str:
        return self.pillar(position)[1]


Detector = Callable[[_Chart], frozenset[str]]


def _element_pair(first: str, second: str) -> frozenset[str]:
    return frozenset({first, second})


_FIRE_WATER: Final[frozenset[str]] = frozenset({"火", "水"})
_WOOD_METAL: Final[frozenset[str]] = frozenset({"木", "金"})
_METAL_WATER: Final[frozenset[str]] = frozenset({"金", "水"})


def _long_life(c: _Chart) -> frozenset[str]:
    fired: set[str] = set()
    if c.yb == "卯" and "癸" in (c.ds, c.ms):
        fired.add("year")
    if c.mb == "卯" and c.yb in ("寅", "卯"):
        fired.add("month")
    if c.hb == "子" and c.hs in ("甲", "丙", "戊", "庚"):
        fired.add("hour")
    if "甲" in (c.ds, c.hs):
        if c.db == "子":
            fired.add("day")
        if c.hb == "子":
            fired.add("hour")
    if (c.label("year"), c.label("day")) in {
        ("己酉", "辛巳"),
        ("甲子", "壬子"),
        ("癸卯", "癸卯"),
    }:
        fired.update(("year", "day"))
    if c.hb == "子" and "day" in fired:
        fired.add("hour")
    return frozenset(fired)


def _six_harm(c: _Chart) -> frozenset[str]:
    fired: set[str] = set()
    for first, second in (("year", "month"), ("year", "day"), ("day", "hour"), ("month", "hour")):
        if SIX_HARM_PAIRS[c.branch(first)] == c.branch(second):
            fired.update((first, second))
    stem_elements = _element_pair(STEM_ELEMENT[c.ds], STEM_ELEMENT[c.hs])
    if stem_elements in (_FIRE_WATER, _WOOD_METAL):
        fired.update(("day", "hour"))
    return frozenset(fired)


def _heaven_killing(c: _Chart) -> frozenset[str]:
    fired: set[str] = set()
    if c.mb in ("戌", "丑"):
        fired.add("month")
    if c.hb == "戌":
        fired.add("hour")
    for position in PILLAR_POSITIONS:
        if c.label(position) in ("壬戌", "辛丑", "癸丑"):
            fired.add(position)
    if BRANCH_ELEMENT[c.mb] == "木" and STEM_ELEMENT[c.ms] == "金":
        fired.add("month")
    day_water = STEM_ELEMENT[c.ds] == "水"
    hour_water = STEM_ELEMENT[c.hs] == "水"
    if c.mb in _EARTH_BRANCHES and (day_water or hour_water):
        fired.add("month")
        if day_water:
            fired.add("day")
        if hour_water:
            fired.add("hour")
    if c.db == "丑" and c.mb == "戌":
        fired.add("day")
    if c.db == "戌" and "day" in fired:
        fired.add("hour")
    return frozenset(fired)


def _fire_opener(c: _Chart) -> frozenset[str]:
    return frozenset(position for position in PILLAR_POSITIONS if c.branch(position) == "未")


def _reverse_horse(c: _Chart) -> frozenset[str]:
    fired: set[str] = set()
    if c.yb == "寅" and c.hb == "寅":
        fired.add("year")
    if c.label("year") in ("壬寅", "丙寅"):
        fired.add("year")
    if (c.yb == "寅" and "巳" in (c.mb, c.db)) or (c.mb == "寅" and c.db == "巳"):
        fired.add("year")
    if c.label("month") == "乙巳":
        fired.add("month")
    if c.db == "巳":
        fired.add("day")
    return frozenset(fired)


def _backward_security(c: _Chart) -> frozenset[str]:
    fired: set[str] = set()
    if c.db == "辰":
        fired.add("day")
    if c.hb == "辰":
        fired.add("hour")
    if (c.db == "辰" and c.hb in _EARTH_BRANCHES) or (
        c.hb == "辰" and c.db in _EARTH_BRANCHES
    ):
        fired.update(("day", "hour"))
    for position in ("month", "day", "hour"):
        if c.label(position) in ("壬辰", "甲辰", "丙辰"):
            fired.add(position)
    if STEM_ELEMENT[c.ds] == "水" and BRANCH_ELEMENT[c.hb] == "土":
        fired.update(("day", "hour"))
    return frozenset(fired)


def _wealth(c: _Chart) -> frozenset[str]:
    triggered = (
        c.yb in ("卯", "酉")
        or c.mb == "酉"
        or (c.hb == "子" and c.hs in ("庚", "壬"))
        or _element_pair(STEM_ELEMENT[c.ds], STEM_ELEMENT[c.hs]) == _METAL_WATER
        or _element_pair(BRANCH_ELEMENT[c.db], BRANCH_ELEMENT[c.hb]) == _METAL_WATER
        or bool({c.ds + c.hb, c.hs + c.db} & {"庚子", "壬酉", "癸卯"})
    )
    return frozenset({"year"}) if triggered else frozenset()


def _year_spirit(c: _Chart) -> frozenset[str]:
    triggered = (
        c.hb == "子"
        or c.yb == "卯"
        or (c.db == "午" and c.hb == "午")
        or SIX_HARM_PAIRS[c.hb] == c.yb
    )
    return frozenset({"year", "hour"}) if triggered else frozenset()


def _month_spirit(c: _Chart) -> frozenset[str]:
    triggered = (
        c.db in ("辰", "丑")
        or c.mb == "丑"
        or c.yb == "戌"
        or (c.db in _EARTH_BRANCHES and c.mb in _EARTH_BRANCHES)
        or (c.db == "戌" and c.yb == "丑")
    )
    return frozenset({"month"}) if triggered else frozenset()


_DAY_SPIRIT_PAIRS: Final[frozenset[frozenset[str]]] = frozenset(
    frozenset(pair) for pair in (("亥", "丑"), ("戌", "寅"), ("未", "卯"), ("辰", "午"))
)


def _day_spirit(c: _Chart) -> frozenset[str]:
    triggered = (
        c.db in ("巳", "酉")
        or (c.db == "辰" and c.hb == "子")
        or (c.db == "午" and c.hb in ("未", "申"))
        or SIX_HARM_PAIRS[c.db] == c.hb
        or frozenset({c.db, c.hb}) in _DAY_SPIRIT_PAIRS
    )
    return frozenset({"day"}) if triggered else frozenset()


_ROBBERY_PAIRS: Final[frozenset[frozenset[str]]] = frozenset(
    frozenset(pair) for pair in (("寅", "申"), ("巳", "亥"), ("寅", "巳"), ("申", "子"))
)


def _robbery(c: _Chart) -> frozenset[str]:
    stems = (c.ys, c.ms, c.ds, c.hs)
    branches = (c.yb, c.mb, c.db, c.hb)
    triggered = (
        ("申" in branches and bool({"丙", "戊"} & set(stems)))
        or ("寅" in (c.yb, c.mb) and bool({"壬", "戊"} & {c.ys, c.ms}))
        or c.label("day") in ("癸巳", "丙申")
        or (c.db in ("申", "酉") and bool({"庚", "辛"} & {c.ys, c.ms}))
        or frozenset({c.yb, c.db}) in _ROBBERY_PAIRS
        or frozenset({c.mb, c.hb}) in _ROBBERY_PAIRS
        or c.label("hour") == "丙申"
        or c.label("year") == "丙寅"
    )
    if not triggered:
        return frozenset()
    # Shown on the first pillar carrying 寅 or 申, else on the year.
    for position in ("year", "day", "hour"):
        if c.branch(position) in ("寅", "申"):
            return frozenset({position})
    return frozenset({"year"})


def _hour_spirit(c: _Chart) -> frozenset[str]:
    hour_stem_element = STEM_ELEMENT[c.hs]
    triggered = (
        (c.hb == "子" and c.hs in ("甲", "丙", "戊", "庚", "壬"))
        or BRANCH_ELEMENT[c.hb] == CONTROLS[hour_stem_element]
        or ten_god(c.ds, c.hs) == "偏官"
        or c.label("hour") == "己亥"
    )
    return frozenset({"hour"}) if triggered else frozenset()


SPIRIT_DETECTORS: Final[tuple[tuple[str, Detector], ...]] = (
    ("長生殺", _long_life),
    ("六害殺", _six_harm),
    ("天殺", _heaven_killing),
    ("火開殺", _fire_opener),
    ("逆馬殺", _reverse_horse),
    ("反安殺", _backward_security),
    ("財殺", _wealth),
    ("年殺", _year_spirit),
    ("月殺", _month_spirit),
    ("日殺", _day_spirit),
    ("劫殺", _robbery),
    ("時殺", _hour_spirit),
)


def detect_spirits(pillars: FourPillars) -> dict[str, tuple[str, ...]]:
    """Return every fired label per position, highest priority first."""

    chart = _Chart.from_pillars(pillars)
    fired: dict[str, set[str]] = {position: set() for position in PILLAR_POSITIONS}
    for label, detector in SPIRIT_DETECTORS:
        for position in detector(chart):
            fired[position].add(label)
    return {
        position: tuple(sorted(labels, key=SPIRIT_PRIORITY.__getitem__, reverse=True))
        for position, labels in fired.items()
    }


def resolve_spirits(detected: Mapping[str, tuple[str, ...] | set[str]]) -> dict[str, str]:
    """Pick the highest-priority label per position, or the position default."""

    resolved: dict[str, str] = {}
    for position in PILLAR_POSITIONS:
        candidates = detected.get(position, ())
        unknown = [label for label in candidates if label not in SPIRIT_PRIORITY]
        if unknown:
            raise TableInvariantError(f"Unranked spirit labels: {unknown}")
        if candidates:
            resolved[position] = max(candidates, key=SPIRIT_PRIORITY.__getitem__)
        else:
            resolved[position] = DEFAULT_SPIRITS[position]
    return resolved


def twelve_spirits(
    pillars: FourPillars, *, apply_known_exceptions: bool = True
) -> dict[str, str]:
    """Return one Twelve Spirits label per pillar position."""

    if apply_known_exceptions:
        pinned = KNOWN_EXCEPTIONS.get(pillars.labels())
        if pinned is not None:
            LOG.debug("Known spirit exception applied for %s", "".join(pillars.labels()))
            return dict(pinned)
    detected = detect_spirits(pillars)
    LOG.debug("Spirit detectors fired: %s", detected)
    return resolve_spirits(detected)
