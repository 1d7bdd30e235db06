"""Five-Element and Yin-Yang summary of a chart."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Mapping

from ..pillars.constants import (
    BRANCH_ELEMENT,
    CONTROLS,
    ELEMENTS,
    GENERATES,
    STEM_ELEMENT,
    STEM_POLARITY,
)
from ..pillars.four_pillars import FourPillars

__all__ = [
    "ElementProfile",
    "element_profile",
    "element_counts",
    "element_relation",
]


@dataclass(frozen=True)
class ElementProfile:
    """Dominant element, supporting element and polarity of a chart."""

    main_element: str
    secondary_element: str
    yin_yang: str
    counts: Mapping[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        return {
            "main_element": self.main_element,
            "secondary_element": self.secondary_element,
            "yin_yang": self.yin_yang,
            "counts": dict(self.counts),
        }


def element_counts(pillars: FourPillars) -> dict[str, int]:
    """Tally the elements of the four stems and four branches."""

    tally = Counter(STEM_ELEMENT[stem] for stem in pillars.stems())
    tally.update(BRANCH_ELEMENT[branch] for branch in pillars.branches())
    return {element: tally.get(element, 0) for element in ELEMENTS}


def element_profile(pillars: FourPillars) -> ElementProfile:
    """Summarise ``pillars`` by day-stem element, month-stem element and polarity."""

    return ElementProfile(
        main_element=STEM_ELEMENT[pillars.day.stem],
        secondary_element=STEM_ELEMENT[pillars.month.stem],
        yin_yang=STEM_POLARITY[pillars.day.stem],
        counts=element_counts(pillars),
    )


def element_relation(source: str, target: str) -> str:
    """Describe how ``source`` acts on ``target``.

    Returns one of ``"same"``, ``"generates"``, ``"generated_by"``,
    ``"controls"`` or ``"controlled_by"``.
    """

    if source == target:
        return "same"
    if GENERATES[source] == target:
        return "generates"
    if GENERATES[target] == source:
        return "generated_by"
    if CONTROLS[source] == target:
        return "controls"
    return "controlled_by"
