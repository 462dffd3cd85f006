"""TOML serialization for courtcal configuration."""

from __future__ import annotations

from zoneinfo import ZoneInfo

from courtcal.config.models import CourtCalConfig


def _format_list(values: list[str]) -> str:
    return "[" + ", ".join(f'"{v}"' for v in values) + "]"


def generate_config_toml(config: CourtCalConfig) -> str:
    """Generate TOML string from config for writing to file."""
    tz_name = ""
    if isinstance(config.timezone, ZoneInfo):
        tz_name = str(config.timezone)

    locations_toml = ""
    for code, uuid in config.locations.items():
        locations_toml += f'{code} = "{uuid}"\n'

    return f"""[general]
timezone = "{tz_name}"
snapshot_path = "{str(config.snapshot_path).replace(chr(92), chr(92) * 2)}"
location = "{config.location}"

[locations]
{locations_toml}
[filters]
sources = {_format_list(config.filters.sources)}
statuses = {_format_list(config.filters.statuses)}
court_ids = {_format_list(config.filters.court_ids)}

[conflicts]
days = {config.conflicts.days}
max_days = {config.conflicts.max_days}

[exporters.stdout]
enabled = {str(config.stdout.enabled).lower()}
group_by = "{config.stdout.group_by}"
"""
