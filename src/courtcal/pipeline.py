"""Pipeline orchestrator — transform → merge → detect conflicts → filter → export."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, tzinfo

import click

from courtcal.clock import FACILITY_TIMEZONE
from courtcal.config import CourtCalConfig
from courtcal.conflicts import detect_conflicts, find_conflict_groups
from courtcal.exporters.base import CalendarView, ConflictReport, Exporter
from courtcal.exporters.payload import JsonExporter
from courtcal.exporters.stdout import StdoutExporter
from courtcal.filters import apply_filters
from courtcal.models import (
    CalendarEvent,
    CalendarFilters,
    CourtMapping,
    CREvent,
    CRReservation,
    DateRange,
    TSEvent,
    TSLead,
    ViewMode,
)
from courtcal.snapshot import Snapshot, load_snapshot
from courtcal.transformer import CourtDirectory, Transformer


def build_calendar_events(
    reservations: Sequence[CRReservation],
    programs: Sequence[CREvent],
    venue_events: Sequence[TSEvent],
    leads: Sequence[TSLead],
    court_mappings: Iterable[CourtMapping],
    filters: CalendarFilters | None = None,
    timezone: tzinfo = FACILITY_TIMEZONE,
) -> list[CalendarEvent]:
    """Build the unified, conflict-annotated event list.

    Conflicts are detected on the full transformed set before any filter is
    applied; a filter can only remove events, never their flags. Without
    filters the full annotated set is returned, in transform order.
    """
    transformer = Transformer(court_mappings, timezone=timezone)
    events = transformer.transform(reservations, programs, venue_events, leads)
    with_conflicts = detect_conflicts(events)
    if filters is None:
        return with_conflicts
    return apply_filters(with_conflicts, filters)


class Pipeline:
    def __init__(
        self,
        config: CourtCalConfig,
        snapshot: Snapshot | None = None,
        as_json: bool = False,
    ) -> None:
        self._config = config
        self._snapshot = snapshot
        self._quiet = as_json
        self._exporters = self._build_exporters(as_json)

    def _build_exporters(self, as_json: bool) -> Sequence[Exporter]:
        if as_json:
            return [JsonExporter()]
        exporters: list[Exporter] = []
        if self._config.stdout.enabled:
            exporters.append(StdoutExporter())
        return exporters

    def _echo(self, message: str) -> None:
        # Progress goes to stderr so JSON on stdout stays parseable
        if not self._quiet:
            click.echo(message, err=True)

    def load(self, location: str | None = None) -> Snapshot:
        """Load the snapshot and scope it to one location."""
        if self._snapshot is None:
            self._echo(f"  Loading {self._config.snapshot_path}...")
            self._snapshot = load_snapshot(self._config.snapshot_path)
        location_id = self._config.location_id(location)
        return self._snapshot.for_location(location_id)

    def build(
        self,
        date_range: DateRange,
        filters: CalendarFilters | None = None,
        location: str | None = None,
    ) -> tuple[list[CalendarEvent], Snapshot, CourtDirectory]:
        """Scope rows to the window, then run the full event pipeline."""
        scoped = self.load(location).within(date_range, self._config.timezone)
        courts = CourtDirectory(scoped.court_mappings).active()
        self._echo(
            f"  {scoped.row_count} rows in window: "
            f"{len(scoped.cr_reservations)} reservations, {len(scoped.cr_events)} programs, "
            f"{len(scoped.ts_events)} events, {len(scoped.ts_leads)} leads"
        )
        events = build_calendar_events(
            scoped.cr_reservations,
            scoped.cr_events,
            scoped.ts_events,
            scoped.ts_leads,
            courts,
            filters=filters,
            timezone=self._config.timezone,
        )
        return events, scoped, courts

    def _location_code(self, location: str | None) -> str:
        return (location or self._config.location).upper()

    def show(
        self,
        anchor: date,
        mode: ViewMode = ViewMode.DAY,
        filters: CalendarFilters | None = None,
        location: str | None = None,
    ) -> CalendarView:
        """Build and export the calendar for the view around ``anchor``."""
        date_range = DateRange.for_view(anchor, mode)
        filters = filters if filters is not None else self._config.filters.to_filters()
        events, scoped, courts = self.build(date_range, filters=filters, location=location)

        view = CalendarView(
            date_range=date_range,
            mode=mode,
            events=events,
            courts=courts,
            filters=filters,
            row_counts={
                "crReservations": len(scoped.cr_reservations),
                "crEvents": len(scoped.cr_events),
                "tsEvents": len(scoped.ts_events),
                "tsLeads": len(scoped.ts_leads),
            },
            location=self._location_code(location),
        )
        for exporter in self._exporters:
            exporter.export_calendar(view, self._config)
        return view

    def conflicts(
        self,
        start: date,
        days: int | None = None,
        location: str | None = None,
    ) -> ConflictReport:
        """Scan a forward window for conflicts and export the grouped report."""
        scan_days = self._config.conflicts.days if days is None else days
        if scan_days > self._config.conflicts.max_days:
            self._echo(
                click.style(
                    f"  ⚠️  Scan window capped at {self._config.conflicts.max_days} days",
                    fg="yellow",
                )
            )
            scan_days = self._config.conflicts.max_days

        date_range = DateRange.forward(start, scan_days)
        events, _, courts = self.build(
            date_range,
            filters=self._config.filters.to_filters(),
            location=location,
        )

        report = ConflictReport(
            date_range=date_range,
            groups=find_conflict_groups(events),
            courts=courts,
            location=self._location_code(location),
        )
        for exporter in self._exporters:
            exporter.export_conflicts(report, self._config)
        return report
