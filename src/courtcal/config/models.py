"""Configuration dataclasses for courtcal."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import tzinfo
from pathlib import Path

from courtcal.clock import FACILITY_TIMEZONE
from courtcal.models import DEFAULT_FILTERS, CalendarFilters, EventSource, EventStatus

DEFAULT_CONFIG_DIR = Path.home() / ".courtcal"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"
DEFAULT_SNAPSHOT_PATH = DEFAULT_CONFIG_DIR / "snapshot.json"
DEFAULT_LOCATION = "ORL"


@dataclass
class FilterConfig:
    """Default visibility filters for calendar views."""

    sources: list[str] = field(
        default_factory=lambda: [s.value for s in EventSource if s in DEFAULT_FILTERS.sources]
    )
    statuses: list[str] = field(
        default_factory=lambda: [s.value for s in EventStatus if s in DEFAULT_FILTERS.statuses]
    )
    court_ids: list[str] = field(default_factory=list)

    def to_filters(self) -> CalendarFilters:
        return CalendarFilters(
            sources={EventSource(s) for s in self.sources},
            statuses={EventStatus(s) for s in self.statuses},
            court_ids=set(self.court_ids),
        )


@dataclass
class ConflictScanConfig:
    """Forward-looking conflict scan window."""

    days: int = 14
    max_days: int = 60


@dataclass
class StdoutExporterConfig:
    """Stdout exporter configuration."""

    enabled: bool = True
    group_by: str = "flat"


@dataclass
class CourtCalConfig:
    """Main courtcal configuration."""

    snapshot_path: Path = field(default_factory=lambda: DEFAULT_SNAPSHOT_PATH)
    timezone: tzinfo = field(default_factory=lambda: FACILITY_TIMEZONE)
    location: str = DEFAULT_LOCATION
    # location code → location UUID in the booking data
    locations: dict[str, str] = field(default_factory=dict)
    filters: FilterConfig = field(default_factory=FilterConfig)
    conflicts: ConflictScanConfig = field(default_factory=ConflictScanConfig)
    stdout: StdoutExporterConfig = field(default_factory=StdoutExporterConfig)

    def location_id(self, code: str | None = None) -> str | None:
        """UUID for a location code, or None when locations are not configured."""
        code = (code or self.location).upper()
        if not self.locations:
            return None
        if code not in self.locations:
            valid = ", ".join(sorted(self.locations))
            msg = f"Unknown location code: {code}. Valid codes: {valid}"
            raise KeyError(msg)
        return self.locations[code]
