from __future__ import annotations

import pytest

from sajuengine.analysis import (
    SELF_LABEL,
    TEN_GODS,
    branch_ten_god,
    hidden_stem_ten_gods,
    korean_name,
    ten_god,
)
from sajuengine.errors import TableInvariantError
from sajuengine.pillars.constants import STEMS


@pytest.mark.parametrize(
    ("other", "expected"),
    [
        ("丙", "比肩"),
        ("丁", "劫財"),
        ("戊", "食神"),
        ("己", "傷官"),
        ("庚", "偏財"),
        ("辛", "正財"),
        ("壬", "偏官"),
        ("癸", "正官"),
        ("甲", "偏印"),
        ("乙", "正印"),
    ],
)
def test_ten_gods_for_bing_day(other: str, expected: str) -> None:
    """A 丙 day master sees every stem under a distinct label."""

    assert ten_god("丙", other) == expected


def test_ten_gods_table_is_total() -> None:
    """Every ordered stem pair resolves, and each master sees all ten labels."""

    for master in STEMS:
        labels = {ten_god(master, other) for other in STEMS}
        assert labels == set(TEN_GODS)
        assert ten_god(master, master) == SELF_LABEL


def test_branch_ten_gods_use_hidden_stems() -> None:
    """Branch labels come from the main hidden stem; all hidden stems are listed."""

    assert branch_ten_god("丙", "子") == "正官"
    assert branch_ten_god("丙", "午") == "劫財"
    assert hidden_stem_ten_gods("丙", "寅") == (("甲", "偏印"), ("丙", "比肩"), ("戊", "食神"))


def test_korean_display_names() -> None:
    """Korean readings are available for every label."""

    assert korean_name("正官") == "정관"
    assert all(korean_name(label) for label in TEN_GODS)


def test_unknown_stems_raise() -> None:
    """Symbols outside the ten stems are an invariant violation, not a default."""

    with pytest.raises(TableInvariantError):
        ten_god("丙", "X")
