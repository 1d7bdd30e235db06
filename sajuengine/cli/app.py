"""Primary Typer application for the SajuEngine CLI."""

from __future__ import annotations

import json
from datetime import date
from typing import Optional

import typer
import yaml

from sajuengine.almanac.lunar import lunar_from_gregorian
from sajuengine.almanac.solar_terms import term_instants
from sajuengine.boot import configure_logging
from sajuengine.config.settings import (
    active_settings,
    config_path,
    default_settings,
    reset_active_settings,
    save_settings,
)
from sajuengine.engine import BirthInput, SajuResult, compute, daily_pillar
from sajuengine.ephemeris import use_ephemeris_path
from sajuengine.errors import (
    DateOutOfRangeError,
    EphemerisUnavailableError,
    InvalidBirthInputError,
    UnknownLocationError,
)
from sajuengine.pillars.four_pillars import PILLAR_POSITIONS

app = typer.Typer(help="SajuEngine command line interface.")
config_app = typer.Typer(help="Inspect or initialise the settings file.")

_POSITION_TITLES = {"year": "Year", "month": "Month", "day": "Day", "hour": "Hour"}


def _resolve_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise typer.BadParameter("Use ISO-8601 formatted dates (YYYY-MM-DD)") from exc


def _emit_json(payload: object) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


def _result_table(result: SajuResult) -> str:
    header = f"{'':<6}{'Pillar':<8}{'Ten God':<10}{'Fortune':<8}{'Spirit':<8}Hidden"
    rows = [header]
    for position in PILLAR_POSITIONS:
        pillar = result.four_pillars[position]
        god = result.ten_gods.get(position, "-")
        rows.append(
            f"{_POSITION_TITLES[position]:<6}"
            f"{pillar.label:<8}"
            f"{god:<10}"
            f"{pillar.life_stage or '-':<8}"
            f"{pillar.spirit or '-':<8}"
            f"{''.join(pillar.hidden_stems)}"
        )
    profile = result.element_profile
    rows.append("")
    rows.append(
        f"Elements: main={profile.main_element} secondary={profile.secondary_element} "
        f"polarity={profile.yin_yang}"
    )
    if result.lunar_date is not None:
        lunar = result.lunar_date
        leap = " (leap)" if lunar.is_leap_month else ""
        rows.append(f"Lunar   : {lunar.year}-{lunar.month:02d}-{lunar.day:02d}{leap}")
    rows.append(f"Term    : {result.solar_term.name} (period {result.solar_term.period})")
    rows.append(
        f"Local   : {result.local_time.corrected.isoformat(timespec='minutes')} "
        f"({result.local_time.offset_minutes:+d} min)"
    )
    return "\n".join(rows)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Configure logging before executing subcommands."""

    configure_logging()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("compute")
def cli_compute(
    birth_date: str = typer.Argument(..., metavar="DATE", help="Birth date (YYYY-MM-DD)."),
    hour: int = typer.Option(12, "--hour", help="Birth hour on the local wall clock (0-23)."),
    minute: int = typer.Option(0, "--minute", help="Birth minute (0-59)."),
    longitude: Optional[float] = typer.Option(
        None, "--longitude", help="Birth longitude in degrees east."
    ),
    latitude: Optional[float] = typer.Option(None, "--latitude", help="Birth latitude."),
    location: Optional[str] = typer.Option(
        None, "--location", help="Reference city name (e.g. Tokyo, ソウル)."
    ),
    gender: Optional[str] = typer.Option(None, "--gender", help="M or F."),
    json_output: bool = typer.Option(False, "--json", help="Emit the reading as JSON."),
) -> None:
    """Compute the Four Pillars reading for a birth date."""

    birth = BirthInput(
        date=_resolve_date(birth_date),
        hour=hour,
        minute=minute,
        longitude=longitude,
        latitude=latitude,
        location=location,
        gender=gender.upper() if gender else None,
    )
    try:
        result = compute(birth)
    except (InvalidBirthInputError, UnknownLocationError) as exc:
        raise typer.BadParameter(str(exc)) from exc
    except EphemerisUnavailableError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc

    if json_output:
        _emit_json(result.to_dict())
        return
    typer.echo(_result_table(result))


@app.command("day")
def cli_day(
    day: str = typer.Argument(..., metavar="DATE", help="Calendar date (YYYY-MM-DD)."),
    json_output: bool = typer.Option(False, "--json", help="Emit the pillar as JSON."),
) -> None:
    """Show the day pillar of a calendar date."""

    pillar = daily_pillar(_resolve_date(day))
    if json_output:
        _emit_json(pillar.to_dict())
        return
    typer.echo(
        f"{pillar.day.isoformat()}: {pillar.pillar.label} "
        f"({pillar.stem_element}/{pillar.branch_element}, {pillar.polarity})"
    )


@app.command("lunar")
def cli_lunar(
    day: str = typer.Argument(..., metavar="DATE", help="Gregorian date (YYYY-MM-DD)."),
    json_output: bool = typer.Option(False, "--json", help="Emit the lunar date as JSON."),
) -> None:
    """Convert a Gregorian date to the Chinese lunisolar calendar."""

    try:
        lunar = lunar_from_gregorian(_resolve_date(day))
    except DateOutOfRangeError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc

    if json_output:
        _emit_json(lunar.to_dict())
        return
    leap = " (leap)" if lunar.is_leap_month else ""
    typer.echo(f"{lunar.year}-{lunar.month:02d}-{lunar.day:02d}{leap}")


@app.command("terms")
def cli_terms(
    year: int = typer.Argument(..., help="Gregorian year."),
    json_output: bool = typer.Option(False, "--json", help="Emit the instants as JSON."),
) -> None:
    """List the 24 solar-term instants (UT) falling in a year."""

    if not 2 <= year <= 2999:
        raise typer.BadParameter("Year must lie within 2-2999")
    try:
        ephemeris = active_settings().ephemeris
        use_ephemeris_path(ephemeris.path)
        instants = term_instants(year, mode=ephemeris.mode)
    except EphemerisUnavailableError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc

    if json_output:
        _emit_json([instant.to_dict() for instant in instants])
        return
    for instant in instants:
        typer.echo(
            f"{instant.name:<4}{instant.longitude:>7.1f}°  "
            f"{instant.moment.isoformat(timespec='minutes')}"
        )


@config_app.command("show")
def cli_config_show() -> None:
    """Print the active settings as YAML."""

    payload = active_settings().model_dump()
    typer.echo(yaml.safe_dump(payload, sort_keys=False, allow_unicode=True).rstrip())


@config_app.command("init")
def cli_config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite an existing settings file."),
) -> None:
    """Write the default settings file."""

    target = config_path()
    if target.exists() and not force:
        typer.echo(f"Settings already present at {target}")
        return
    save_settings(default_settings(), target)
    reset_active_settings()
    typer.secho(f"Wrote default settings to {target}", fg=typer.colors.GREEN)


app.add_typer(config_app, name="config")


__all__ = [
    "app",
]
