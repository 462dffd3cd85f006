"""Load and validate courtcal configuration from TOML files."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from courtcal.clock import FACILITY_TIMEZONE
from courtcal.config.models import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_LOCATION,
    DEFAULT_SNAPSHOT_PATH,
    ConflictScanConfig,
    CourtCalConfig,
    FilterConfig,
    StdoutExporterConfig,
)
from courtcal.config.validation import ConfigValidator


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> CourtCalConfig:
    """Load config from TOML file, validate, and return."""
    if not path.exists():
        msg = f"Config not found at {path}. Run 'courtcal init' to create one."
        raise FileNotFoundError(msg)

    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = _from_dict(data)

    validator = ConfigValidator()
    errors = validator.validate(config)
    if errors:
        error_msgs = "\n".join(f"  {e.path}: {e.message}" for e in errors)
        msg = f"Config validation failed:\n{error_msgs}"
        raise ValueError(msg)

    return config


def _from_dict(data: dict[str, Any]) -> CourtCalConfig:
    """Convert TOML dict to CourtCalConfig dataclass."""
    general = data.get("general", {})
    filters_data = data.get("filters", {})
    conflicts_data = data.get("conflicts", {})
    stdout_data = data.get("exporters", {}).get("stdout", {})

    tz_str = general.get("timezone", "")
    try:
        tz = ZoneInfo(tz_str) if tz_str else FACILITY_TIMEZONE
    except ZoneInfoNotFoundError:
        msg = f"Config validation failed:\n  general.timezone: Unknown timezone {tz_str!r}"
        raise ValueError(msg) from None

    snapshot_str = general.get("snapshot_path", str(DEFAULT_SNAPSHOT_PATH))
    snapshot_path = Path(snapshot_str).expanduser()

    defaults = FilterConfig()

    return CourtCalConfig(
        snapshot_path=snapshot_path,
        timezone=tz,
        location=general.get("location", DEFAULT_LOCATION),
        locations={str(k).upper(): v for k, v in data.get("locations", {}).items()},
        filters=FilterConfig(
            sources=filters_data.get("sources", defaults.sources),
            statuses=filters_data.get("statuses", defaults.statuses),
            court_ids=filters_data.get("court_ids", []),
        ),
        conflicts=ConflictScanConfig(
            days=conflicts_data.get("days", 14),
            max_days=conflicts_data.get("max_days", 60),
        ),
        stdout=StdoutExporterConfig(
            enabled=stdout_data.get("enabled", True),
            group_by=stdout_data.get("group_by", "flat"),
        ),
    )
