from __future__ import annotations

from datetime import date

import pytest

from sajuengine import (
    BirthInput,
    InvalidBirthInputError,
    compute,
    compute_many,
    daily_pillar,
)
from sajuengine.config import CalendarCfg, FortunesCfg, Settings, SpiritsCfg

pytest.importorskip("swisseph")


def test_reference_reading() -> None:
    """2023-10-15 at noon in Tokyo reproduces the reference chart and labels."""

    result = compute(BirthInput(date=date(2023, 10, 15), hour=12))
    pillars = result.four_pillars
    assert pillars.labels() == ("癸卯", "壬戌", "丙午", "甲午")
    assert result.day_master == "丙"
    assert result.ten_gods == {"year": "正官", "month": "偏官", "hour": "偏印"}
    assert result.branch_ten_gods["day"] == "劫財"
    assert result.hidden_stem_ten_gods["day"] == (("丁", "劫財"), ("己", "傷官"))
    assert result.twelve_fortunes == {"year": "沐浴", "month": "墓", "day": "帝旺", "hour": "帝旺"}
    assert result.twelve_spirits == {
        "year": "年殺",
        "month": "天殺",
        "day": "六害殺",
        "hour": "六害殺",
    }
    assert pillars.day.life_stage == "帝旺"
    assert pillars.day.spirit == "六害殺"
    assert result.element_profile.main_element == "火"
    assert (result.lunar_date.month, result.lunar_date.day) == (9, 1)
    assert result.solar_term.name == "寒露"


def test_year_golden_for_1986() -> None:
    """The 1986 reference date carries a 丙寅 year pillar."""

    result = compute(BirthInput(date=date(1986, 5, 26), hour=5))
    assert result.four_pillars.year.label == "丙寅"
    assert result.four_pillars.month.label == "癸巳"
    assert result.four_pillars.day.label == "庚午"
    assert result.four_pillars.hour.label == "己卯"


def test_known_exception_applies_through_compute() -> None:
    """A chart in the exception table returns its pinned spirits."""

    result = compute(BirthInput(date=date(1986, 5, 26), hour=5))
    assert result.four_pillars.labels() == ("丙寅", "癸巳", "庚午", "己卯")
    assert result.twelve_spirits == {
        "year": "劫殺",
        "month": "望神殺",
        "day": "長生殺",
        "hour": "年殺",
    }


def test_to_dict_contract() -> None:
    """The JSON payload exposes every documented section."""

    payload = compute(BirthInput(date="2023-10-15", gender="F")).to_dict()
    assert set(payload["four_pillars"]) == {"year", "month", "day", "hour"}
    assert set(payload["four_pillars"]["day"]) == {
        "stem",
        "branch",
        "label",
        "hidden_stems",
        "life_stage",
        "spirit",
    }
    assert set(payload["ten_gods"]) == {"year", "month", "hour"}
    assert len(payload["twelve_fortunes"]) == 4
    assert len(payload["twelve_spirits"]) == 4
    assert set(payload["element_profile"]) == {
        "main_element",
        "secondary_element",
        "yin_yang",
        "counts",
    }
    assert payload["lunar_date"] == {"year": 2023, "month": 9, "day": 1, "is_leap_month": False}
    assert payload["gender"] == "F"
    assert payload["input"]["date"] == "2023-10-15"
    assert payload["local_time"]["offset_minutes"] == 19


def test_compute_is_idempotent() -> None:
    """Two computations of the same input agree exactly."""

    birth = BirthInput(date=date(2001, 5, 23), hour=7, minute=45, longitude=126.98)
    assert compute(birth).to_dict() == compute(birth).to_dict()


def test_location_name_resolves_coordinates() -> None:
    """A named city supplies the longitude used for correction."""

    result = compute(BirthInput(date=date(2023, 10, 15), hour=12, location="Seoul"))
    assert result.local_time.offset_minutes == -32
    assert result.provenance["longitude"] == pytest.approx(126.98)


def test_lunar_date_is_omitted_outside_the_table() -> None:
    """Dates beyond the lunar table still compute, without a lunar date."""

    result = compute(BirthInput(date=date(1850, 6, 1)))
    assert result.lunar_date is None
    assert result.to_dict()["lunar_date"] is None


def test_settings_drive_the_calculation() -> None:
    """Calendar, fortune and spirit switches flow from the settings object."""

    settings = Settings(
        calendar=CalendarCfg(year_boundary="lichun"),
        fortunes=FortunesCfg(apply_overrides=False),
        spirits=SpiritsCfg(apply_known_exceptions=False),
    )
    result = compute(BirthInput(date=date(2023, 2, 3)), settings=settings)
    assert result.four_pillars.year.label == "壬寅"
    assert result.provenance["year_boundary"] == "lichun"


@pytest.mark.parametrize(
    "birth",
    [
        BirthInput(date="2023-02-30"),
        BirthInput(date="yesterday"),
        BirthInput(date=20231015),  # type: ignore[arg-type]
        BirthInput(date=date(1, 1, 1)),
        BirthInput(date=date(3000, 1, 1)),
        BirthInput(date=date(2023, 1, 1), hour=24),
        BirthInput(date=date(2023, 1, 1), hour=-1),
        BirthInput(date=date(2023, 1, 1), hour=True),  # type: ignore[arg-type]
        BirthInput(date=date(2023, 1, 1), hour=12.5),  # type: ignore[arg-type]
        BirthInput(date=date(2023, 1, 1), minute=60),
        BirthInput(date=date(2023, 1, 1), gender="X"),
        BirthInput(date=date(2023, 1, 1), longitude=181.0),
        BirthInput(date=date(2023, 1, 1), longitude=130.0, latitude=-91.0),
        BirthInput(date=date(2023, 1, 1), location="Atlantis"),
    ],
)
def test_invalid_inputs_are_rejected(birth: BirthInput) -> None:
    """Malformed fields raise instead of being clamped or defaulted."""

    with pytest.raises(InvalidBirthInputError):
        compute(birth)


def test_invalid_input_is_a_value_error() -> None:
    """Callers catching ValueError also catch input errors."""

    with pytest.raises(ValueError):
        compute(BirthInput(date=date(2023, 1, 1), minute=-5))


def test_compute_many_preserves_order() -> None:
    """Batch computation returns one result per input in order."""

    births = [BirthInput(date=date(2023, 10, 15)), BirthInput(date=date(1986, 5, 26))]
    results = compute_many(births)
    assert [r.four_pillars.day.label for r in results] == ["丙午", "庚午"]


def test_daily_pillar() -> None:
    """The daily pillar carries the day label with its element and polarity."""

    day = daily_pillar("2023-10-15")
    assert day.pillar.label == "丙午"
    assert day.stem_element == "火"
    assert day.branch_element == "火"
    assert day.polarity == "陽"
    assert day.branch_polarity == "陽"
    assert day.to_dict()["date"] == "2023-10-15"
    with pytest.raises(InvalidBirthInputError):
        daily_pillar("2023-13-01")
