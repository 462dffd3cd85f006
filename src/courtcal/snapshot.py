"""JSON snapshot of raw booking rows, as stored by the ingestion job."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import date, tzinfo
from pathlib import Path
from typing import Any, Self, TypeVar

from courtcal.clock import FACILITY_TIMEZONE, local_date, strip_offset, utc_to_local
from courtcal.models import CourtMapping, CREvent, CRReservation, DateRange, TSEvent, TSLead

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT")

SNAPSHOT_KEYS = ("court_mappings", "cr_reservations", "cr_events", "ts_events", "ts_leads")


@dataclass(frozen=True)
class Snapshot:
    """All raw rows the pipeline consumes, grouped by table."""

    court_mappings: list[CourtMapping] = field(default_factory=list)
    cr_reservations: list[CRReservation] = field(default_factory=list)
    cr_events: list[CREvent] = field(default_factory=list)
    ts_events: list[TSEvent] = field(default_factory=list)
    ts_leads: list[TSLead] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Build from the decoded JSON document. Missing tables are empty.

        Rows that cannot be read are logged and skipped; the rest still load.
        """
        return cls(
            court_mappings=_read_rows(data, "court_mappings", CourtMapping.from_row),
            cr_reservations=_read_rows(data, "cr_reservations", CRReservation.from_row),
            cr_events=_read_rows(data, "cr_events", CREvent.from_row),
            ts_events=_read_rows(data, "ts_events", TSEvent.from_row),
            ts_leads=_read_rows(data, "ts_leads", TSLead.from_row),
        )

    @property
    def row_count(self) -> int:
        return (
            len(self.cr_reservations)
            + len(self.cr_events)
            + len(self.ts_events)
            + len(self.ts_leads)
        )

    def for_location(self, location_id: str | None) -> Snapshot:
        """Rows belonging to one location. ``None`` keeps everything."""
        if location_id is None:
            return self
        return Snapshot(
            court_mappings=[m for m in self.court_mappings if m.location_id == location_id],
            cr_reservations=[r for r in self.cr_reservations if r.location_id == location_id],
            cr_events=[r for r in self.cr_events if r.location_id == location_id],
            ts_events=[r for r in self.ts_events if r.location_id == location_id],
            ts_leads=[r for r in self.ts_leads if r.location_id == location_id],
        )

    def within(self, date_range: DateRange, tz: tzinfo = FACILITY_TIMEZONE) -> Snapshot:
        """Rows whose booking date falls in the range. Court mappings are kept whole.

        Rows with no determinable date are left out, matching a database
        range query on a null date column.
        """

        def keep(d: date | None) -> bool:
            return d is not None and date_range.contains(d)

        return replace(
            self,
            cr_reservations=[
                r for r in self.cr_reservations if keep(_iso_date(r.reservation_date))
            ],
            cr_events=[r for r in self.cr_events if keep(_program_date(r))],
            ts_events=[
                r for r in self.ts_events if keep(_utc_row_date(r.event_date, r.event_start, tz))
            ],
            ts_leads=[
                r
                for r in self.ts_leads
                if keep(_utc_row_date(r.desired_date, r.desired_start, tz))
            ],
        )


def load_snapshot(path: Path) -> Snapshot:
    """Read a snapshot file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a JSON object
    """
    if not path.exists():
        msg = f"Snapshot not found at {path}. Export rows from the ingestion store first."
        raise FileNotFoundError(msg)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        msg = f"Snapshot {path} is not valid JSON: {e}"
        raise ValueError(msg) from e

    if not isinstance(data, dict):
        msg = f"Snapshot {path} must be a JSON object with keys: {', '.join(SNAPSHOT_KEYS)}"
        raise ValueError(msg)

    return Snapshot.from_dict(data)


def _read_rows(
    data: dict[str, Any],
    table: str,
    from_row: Callable[[dict[str, Any]], RowT],
) -> list[RowT]:
    rows: list[RowT] = []
    for index, raw in enumerate(data.get(table) or []):
        try:
            rows.append(from_row(raw))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping malformed %s row %d: %r", table, index, e)
    return rows


def _iso_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def _program_date(row: CREvent) -> date | None:
    if not row.start_datetime:
        return None
    return local_date(strip_offset(row.start_datetime))


def _utc_row_date(stored: str | None, start: str | None, tz: tzinfo) -> date | None:
    if stored:
        return _iso_date(stored)
    if not start:
        return None
    try:
        return utc_to_local(start, tz)[0]
    except ValueError:
        return None
