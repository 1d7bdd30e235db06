"""Labels derived from the four pillars and the day master."""

from __future__ import annotations

from .elements import ElementProfile, element_counts, element_profile, element_relation
from .fortunes import TWELVE_FORTUNES, fortunes_for_pillars, twelve_fortune
from .spirits import (
    DEFAULT_SPIRITS,
    KNOWN_EXCEPTIONS,
    SPIRIT_PRIORITY,
    TWELVE_SPIRITS,
    detect_spirits,
    resolve_spirits,
    twelve_spirits,
)
from .ten_gods import (
    SELF_LABEL,
    TEN_GODS,
    branch_ten_god,
    hidden_stem_ten_gods,
    korean_name,
    ten_god,
)

__all__ = [
    "ElementProfile",
    "element_counts",
    "element_profile",
    "element_relation",
    "TWELVE_FORTUNES",
    "fortunes_for_pillars",
    "twelve_fortune",
    "DEFAULT_SPIRITS",
    "KNOWN_EXCEPTIONS",
    "SPIRIT_PRIORITY",
    "TWELVE_SPIRITS",
    "detect_spirits",
    "resolve_spirits",
    "twelve_spirits",
    "SELF_LABEL",
    "TEN_GODS",
    "branch_ten_god",
    "hidden_stem_ten_gods",
    "korean_name",
    "ten_god",
]
