from __future__ import annotations

from datetime import date, datetime, time

import pytest

from sajuengine.pillars import (
    FourPillars,
    Pillar,
    compute_four_pillars,
    day_pillar,
    hour_pillar,
    month_pillar,
    year_pillar,
)

TOKYO_LONGITUDE = 139.77


def test_reference_year_pillars() -> None:
    """Year pillars reproduce the published almanac values."""

    assert year_pillar(1986).label == "丙寅"
    assert year_pillar(2023).label == "癸卯"
    assert year_pillar(1984).label == "甲子"


def test_reference_day_pillars() -> None:
    """Day pillars match the almanac for known days."""

    assert day_pillar(date(1949, 10, 1)).label == "甲子"
    assert day_pillar(date(2023, 10, 15)).label == "丙午"
    assert day_pillar(date(2023, 5, 5)).label == "癸亥"


def test_reference_hour_pillars() -> None:
    """Hour pillars for a 丙 day follow the Five Rats table."""

    assert hour_pillar(1, "丙").label == "戊子"
    assert hour_pillar(13, "丙").label == "甲午"
    assert hour_pillar(23, "丙").label == "戊子"
    assert hour_pillar(5, "庚").label == "己卯"


def test_month_pillar_from_period() -> None:
    """Month pillars combine the period branch with the Five Tigers stem."""

    assert month_pillar(0, "甲").label == "丙寅"
    assert month_pillar(11, "壬").label == "癸丑"


def test_pillar_metadata() -> None:
    """Pillars expose hidden stems, symbol records and their cycle index."""

    pillar = day_pillar(date(2023, 10, 15))
    assert pillar.hidden_stems == ("丁", "己")
    assert pillar.heavenly_stem.name == "Bing"
    assert pillar.earthly_branch.animal == "Horse"
    assert pillar.cycle_index == 42
    assert Pillar("甲", "丑", ("己", "癸", "辛")).cycle_index is None


def test_with_labels_keeps_existing_values() -> None:
    """Attaching one label leaves the other untouched."""

    pillar = year_pillar(2023).with_labels(life_stage="長生")
    labelled = pillar.with_labels(spirit="年殺")
    assert labelled.life_stage == "長生"
    assert labelled.spirit == "年殺"
    assert labelled.to_dict()["label"] == "癸卯"


@pytest.mark.parametrize(
    ("day", "expected"),
    [
        (date(2023, 2, 3), "癸丑"),
        (date(2023, 2, 4), "甲寅"),
        (date(2023, 5, 5), "丙辰"),
        (date(2023, 8, 7), "己未"),
        (date(2023, 10, 15), "壬戌"),
        (date(2023, 11, 7), "壬戌"),
        (date(2023, 12, 21), "甲子"),
        (date(1986, 5, 26), "癸巳"),
    ],
)
def test_month_pillars_follow_solar_terms(day: date, expected: str) -> None:
    """Month pillars change at the sectional solar terms, not on the 1st."""

    chart = compute_four_pillars(datetime.combine(day, time(12, 0)), TOKYO_LONGITUDE)
    assert chart.pillars.month.label == expected


def test_month_changes_within_a_solar_term_day() -> None:
    """Two times on the 立春 day fall on either side of the term instant."""

    before = compute_four_pillars(datetime(2023, 2, 4, 8, 0), TOKYO_LONGITUDE)
    after = compute_four_pillars(datetime(2023, 2, 4, 12, 0), TOKYO_LONGITUDE)
    assert before.pillars.month.label == "癸丑"
    assert after.pillars.month.label == "甲寅"
    assert before.pillars.day.label == after.pillars.day.label


def test_full_chart_reference() -> None:
    """2023-10-15 at noon in Tokyo yields the reference chart."""

    chart = compute_four_pillars(datetime(2023, 10, 15, 12, 0), TOKYO_LONGITUDE)
    assert chart.pillars.labels() == ("癸卯", "壬戌", "丙午", "甲午")
    assert chart.pillars.day_master == "丙"
    assert chart.local_time.offset_minutes == 19
    assert chart.solar_term.name == "寒露"
    assert chart.provenance["solar_term_period"] == 8


def test_gregorian_and_lichun_year_boundaries() -> None:
    """The year pillar switches on 1 January unless the 立春 boundary is chosen."""

    moment = datetime(2023, 2, 3, 12, 0)
    gregorian = compute_four_pillars(moment, TOKYO_LONGITUDE)
    lichun = compute_four_pillars(moment, TOKYO_LONGITUDE, year_boundary="lichun")
    assert gregorian.pillars.year.label == "癸卯"
    assert lichun.pillars.year.label == "壬寅"
    assert gregorian.pillars.month.label == lichun.pillars.month.label == "癸丑"

    assert compute_four_pillars(
        datetime(1970, 1, 1, 12, 0), TOKYO_LONGITUDE, year_boundary="lichun"
    ).pillars.year.label == "己酉"


def test_four_pillars_container() -> None:
    """FourPillars iterates in canonical order and rejects unknown positions."""

    chart = compute_four_pillars(datetime(1986, 5, 26, 6, 0), TOKYO_LONGITUDE)
    pillars: FourPillars = chart.pillars
    assert [position for position, _ in pillars.items()] == ["year", "month", "day", "hour"]
    assert pillars["hour"].label == "己卯"
    assert set(pillars.to_dict()) == {"year", "month", "day", "hour"}
    with pytest.raises(KeyError):
        pillars["minute"]


def test_corrected_time_drives_day_and_hour() -> None:
    """A correction crossing midnight moves the day pillar with it."""

    chart = compute_four_pillars(datetime(2023, 10, 15, 0, 10), 126.98)
    assert chart.local_time.day_rolled == -1
    assert chart.pillars.day.label == day_pillar(date(2023, 10, 14)).label
    assert chart.pillars.hour.label == "丙子"


def test_correction_can_be_disabled() -> None:
    """Without correction the wall clock is used unchanged."""

    chart = compute_four_pillars(
        datetime(2023, 10, 15, 0, 10), 126.98, local_time_correction=False
    )
    assert chart.local_time.offset_minutes == 0
    assert chart.pillars.day.label == "丙午"
    assert chart.pillars.hour.label == "戊子"
