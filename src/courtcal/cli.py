"""CLI interface for courtcal — click-based commands."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from pathlib import Path

import click

from courtcal.clock import facility_today
from courtcal.config import CourtCalConfig, generate_config_toml, load_config
from courtcal.config.models import DEFAULT_CONFIG_PATH
from courtcal.models import CalendarFilters, EventSource, EventStatus, ViewMode
from courtcal.pipeline import Pipeline

AVAILABLE_SOURCES = {s.value for s in EventSource}
AVAILABLE_STATUSES = {s.value for s in EventStatus}


def parse_date_arg(value: str, today: date | None = None) -> date:
    """Parse a date argument.

    Supports: 'today', 'tomorrow', 'YYYY-MM-DD'
    """
    value = value.strip().lower()
    today = today or facility_today()
    if value == "today":
        return today
    if value == "tomorrow":
        return date.fromordinal(today.toordinal() + 1)
    try:
        return date.fromisoformat(value)
    except ValueError:
        msg = f"Invalid date: '{value}'. Use 'today', 'tomorrow', or YYYY-MM-DD."
        raise click.BadParameter(msg) from None


def _parse_csv(value: str, available: set[str], kind: str) -> set[str]:
    items = {s.strip().lower() for s in value.split(",") if s.strip()}
    invalid = items - available
    if invalid:
        msg = (
            f"Invalid {kind}(s): {', '.join(sorted(invalid))}. "
            f"Available {kind}s: {', '.join(sorted(available))}"
        )
        raise click.BadParameter(msg)
    return items


def parse_source_arg(value: str) -> set[str]:
    """Parse comma-separated source names and validate against AVAILABLE_SOURCES."""
    return _parse_csv(value, AVAILABLE_SOURCES, "source")


def parse_status_arg(value: str) -> set[str]:
    """Parse comma-separated statuses and validate against AVAILABLE_STATUSES."""
    return _parse_csv(value, AVAILABLE_STATUSES, "status")


def _build_filters(
    config: CourtCalConfig,
    include: str | None,
    exclude: str | None,
    status: str | None,
    courts: tuple[str, ...],
) -> CalendarFilters:
    """Overlay CLI flags on the configured default filters."""
    if include and exclude:
        msg = "Cannot use both --include and --exclude"
        raise click.UsageError(msg)

    defaults = config.filters.to_filters()
    sources = {s.value for s in defaults.sources}
    if include:
        sources = parse_source_arg(include)
    elif exclude:
        sources = sources - parse_source_arg(exclude)

    statuses = parse_status_arg(status) if status else {s.value for s in defaults.statuses}
    court_ids = set(courts) if courts else set(defaults.court_ids)

    return CalendarFilters(
        sources={EventSource(s) for s in sources},
        statuses={EventStatus(s) for s in statuses},
        court_ids=court_ids,
    )


@click.group()
@click.version_option(package_name="courtcal")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to config.toml",
)
@click.option("-v", "--verbose", is_flag=True, help="Log skipped rows and pipeline details")
@click.pass_context
def cli(ctx: click.Context, config_path: Path, verbose: bool) -> None:
    """courtcal — unified court calendar across CourtReserve and Tripleseat.

    Normalizes reservations, programs, events and leads into one calendar,
    flags double-booked courts, and shows the result.

    Run 'courtcal init' to set up your configuration.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@cli.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Create default configuration at ~/.courtcal/config.toml."""
    config_path: Path = ctx.obj["config_path"]
    if config_path.exists() and not click.confirm(
        f"Config already exists at {config_path}. Overwrite?"
    ):
        return

    config = CourtCalConfig()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(generate_config_toml(config))

    click.echo(f"✓ Config created at: {config_path}")
    click.echo("Edit to set the snapshot path, locations and default filters.")


@cli.command()
@click.argument("date_str", default="today")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in ViewMode]),
    default=ViewMode.DAY.value,
    help="Day, week (Monday-Sunday) or agenda view",
)
@click.option("--location", type=str, default=None, help="Location code, e.g. ORL")
@click.option(
    "--include",
    type=str,
    default=None,
    help=(
        "Show only these sources (csv). "
        "courtreserve, courtreserve_event, tripleseat_event, tripleseat_lead"
    ),
)
@click.option("--exclude", type=str, default=None, help="Hide these sources (csv)")
@click.option(
    "--status",
    type=str,
    default=None,
    help="Show only these statuses (csv). confirmed, tentative, prospect, cancelled",
)
@click.option("--court", "courts", multiple=True, help="Court mapping id to show (repeatable)")
@click.option("--group-by", type=click.Choice(["flat", "court"]), default=None)
@click.option("--json", "as_json", is_flag=True, help="Print the JSON payload instead")
@click.pass_context
def show(
    ctx: click.Context,
    date_str: str,
    mode: str,
    location: str | None,
    include: str | None,
    exclude: str | None,
    status: str | None,
    courts: tuple[str, ...],
    group_by: str | None,
    as_json: bool,
) -> None:
    """Show the court calendar with conflicts flagged.

    DATE can be 'today', 'tomorrow', or YYYY-MM-DD.
    """
    config = _load_config(ctx.obj["config_path"])
    anchor = parse_date_arg(date_str, facility_today(config.timezone))
    filters = _build_filters(config, include, exclude, status, courts)
    if group_by:
        config.stdout.group_by = group_by

    pipeline = Pipeline(config, as_json=as_json)
    _run(lambda: pipeline.show(anchor, ViewMode(mode), filters=filters, location=location))


@cli.command()
@click.option("--days", type=int, default=None, help="Days forward to scan (config default: 14)")
@click.option("--from", "from_str", type=str, default="today", help="First date to scan")
@click.option("--location", type=str, default=None, help="Location code, e.g. ORL")
@click.option("--json", "as_json", is_flag=True, help="Print the JSON payload instead")
@click.pass_context
def conflicts(
    ctx: click.Context,
    days: int | None,
    from_str: str,
    location: str | None,
    as_json: bool,
) -> None:
    """List double-booked courts across a forward-looking window."""
    if days is not None and days < 0:
        raise click.BadParameter("--days must be >= 0")
    config = _load_config(ctx.obj["config_path"])
    start = parse_date_arg(from_str, facility_today(config.timezone))

    pipeline = Pipeline(config, as_json=as_json)
    _run(lambda: pipeline.conflicts(start, days=days, location=location))


def _run(action: Callable[[], object]) -> None:
    """Run a pipeline action, turning data errors into CLI errors."""
    try:
        action()
    except FileNotFoundError as e:
        raise click.ClickException(str(e)) from None
    except KeyError as e:
        raise click.ClickException(e.args[0] if e.args else str(e)) from None
    except ValueError as e:
        raise click.ClickException(str(e)) from None


def _load_config(path: Path) -> CourtCalConfig:
    """Load config, with helpful error message if missing."""
    try:
        return load_config(path)
    except FileNotFoundError as e:
        raise click.ClickException(str(e)) from None
    except ValueError as e:
        raise click.ClickException(str(e)) from None
