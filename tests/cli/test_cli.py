from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from sajuengine.cli import app
from sajuengine.config import reset_active_settings
from sajuengine.ephemeris import reset_swe

runner = CliRunner()


def test_compute_json_payload() -> None:
    """``compute --json`` emits the full reading."""

    pytest.importorskip("swisseph")
    result = runner.invoke(app, ["compute", "2023-10-15", "--hour", "12", "--json"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["four_pillars"]["day"]["label"] == "丙午"
    assert payload["four_pillars"]["year"]["label"] == "癸卯"
    assert payload["ten_gods"]["month"] == "偏官"


def test_compute_table_output() -> None:
    """The default output is a readable table."""

    pytest.importorskip("swisseph")
    result = runner.invoke(app, ["compute", "2023-10-15", "--location", "Tokyo"])
    assert result.exit_code == 0, result.output
    assert "丙午" in result.stdout
    assert "Term    : 寒露" in result.stdout


@pytest.mark.parametrize(
    "args",
    [
        ["compute", "2023-13-40"],
        ["compute", "2023-10-15", "--hour", "24"],
        ["compute", "2023-10-15", "--gender", "x"],
        ["compute", "2023-10-15", "--location", "Atlantis"],
        ["day", "tomorrow"],
    ],
)
def test_bad_input_exits_with_usage_error(args: list[str]) -> None:
    """Malformed arguments exit with code 2."""

    result = runner.invoke(app, args)
    assert result.exit_code == 2


def test_day_command() -> None:
    """``day`` prints the day pillar of a date."""

    result = runner.invoke(app, ["day", "2023-10-15"])
    assert result.exit_code == 0
    assert "丙午" in result.stdout

    as_json = runner.invoke(app, ["day", "2023-10-15", "--json"])
    assert json.loads(as_json.stdout)["polarity"] == "陽"


def test_lunar_command() -> None:
    """``lunar`` converts dates and fails outside the table."""

    result = runner.invoke(app, ["lunar", "2001-05-23", "--json"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {
        "year": 2001,
        "month": 4,
        "day": 1,
        "is_leap_month": True,
    }
    text = runner.invoke(app, ["lunar", "2001-05-23"])
    assert text.stdout.strip() == "2001-04-01 (leap)"

    missing = runner.invoke(app, ["lunar", "1850-01-01"])
    assert missing.exit_code == 1


def test_terms_command() -> None:
    """``terms`` lists the 24 solar-term instants of a year."""

    pytest.importorskip("swisseph")
    result = runner.invoke(app, ["terms", "2023", "--json"])
    assert result.exit_code == 0, result.output
    instants = json.loads(result.stdout)
    assert len(instants) == 24
    assert instants[0]["name"] == "小寒"


def test_terms_command_applies_the_ephemeris_path(monkeypatch: pytest.MonkeyPatch) -> None:
    """``terms`` points swisseph at ``SE_EPHE_PATH`` like ``compute`` does."""

    swisseph = pytest.importorskip("swisseph")
    applied: list[str] = []
    monkeypatch.setattr(swisseph, "set_ephe_path", applied.append)
    monkeypatch.setenv("SE_EPHE_PATH", "/srv/ephe")
    reset_swe()
    try:
        result = runner.invoke(app, ["terms", "2023"])
        assert result.exit_code == 0, result.output
        assert applied == ["/srv/ephe"]
    finally:
        reset_swe()


def test_config_init_and_show(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """``config init`` writes defaults that ``config show`` prints back."""

    monkeypatch.setenv("SAJUENGINE_HOME", str(tmp_path))
    reset_active_settings()
    try:
        created = runner.invoke(app, ["config", "init"])
        assert created.exit_code == 0
        assert (tmp_path / "config.yaml").exists()

        again = runner.invoke(app, ["config", "init"])
        assert "already present" in again.stdout

        shown = runner.invoke(app, ["config", "show"])
        assert shown.exit_code == 0
        assert yaml.safe_load(shown.stdout)["location"]["reference_city"] == "東京"
    finally:
        reset_active_settings()


def test_no_command_prints_help() -> None:
    """Invoking the bare app shows the help text."""

    result = runner.invoke(app, [])
    assert result.exit_code == 0
    assert "compute" in result.stdout
