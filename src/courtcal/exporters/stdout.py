"""Terminal/stdout exporter — display the court calendar in the terminal."""

from __future__ import annotations

import click

from courtcal.clock import format_duration, minutes_to_ampm
from courtcal.config import CourtCalConfig
from courtcal.exporters.base import CalendarView, ConflictReport, Exporter
from courtcal.models import CalendarEvent, EventSource, EventStatus
from courtcal.transformer.classifier import EventKind, classify_event, is_pro_staffed
from courtcal.transformer.courts import CourtDirectory

SOURCE_LABELS: dict[EventSource, str] = {
    EventSource.COURTRESERVE: "CR",
    EventSource.COURTRESERVE_EVENT: "CR-EV",
    EventSource.TRIPLESEAT_EVENT: "TS",
    EventSource.TRIPLESEAT_LEAD: "LEAD",
}

KIND_COLORS: dict[EventKind, str] = {
    EventKind.CONFIRMED_EVENT: "green",
    EventKind.PROSPECT_EVENT: "magenta",
    EventKind.MAINTENANCE: "bright_black",
    EventKind.LESSON: "cyan",
    EventKind.LEAGUE: "blue",
    EventKind.RESERVATION: "white",
    EventKind.MOVABLE: "yellow",
}

STATUS_COLORS: dict[EventStatus, str] = {
    EventStatus.CONFIRMED: "green",
    EventStatus.TENTATIVE: "yellow",
    EventStatus.PROSPECT: "magenta",
    EventStatus.CANCELLED: "bright_black",
}


def _sorted(events: list[CalendarEvent]) -> list[CalendarEvent]:
    return sorted(events, key=lambda e: (e.date, e.start_minutes, e.end_minutes, e.id))


class StdoutExporter(Exporter):
    def export_calendar(self, view: CalendarView, config: CourtCalConfig) -> None:
        self._print_header(view)

        if not view.events:
            click.echo(click.style("  (no events)", dim=True))
            click.echo()
            return

        if config.stdout.group_by == "court":
            self._export_by_court(view)
        else:
            self._export_flat(view)
        click.echo()

    def _export_flat(self, view: CalendarView) -> None:
        """Chronological list, one block per day."""
        by_day: dict[object, list[CalendarEvent]] = {}
        for event in _sorted(view.events):
            by_day.setdefault(event.date, []).append(event)

        for day, events in by_day.items():
            if view.date_range.days > 1:
                click.echo(click.style(f"  {day:%a %b %d}", bold=True))
            for event in events:
                self._print_event(event, view.courts)

    def _export_by_court(self, view: CalendarView) -> None:
        """One section per court; unassigned events last."""
        events = _sorted(view.events)
        for mapping in view.courts.sorted_by_number():
            court_events = [e for e in events if mapping.id in e.court_mapping_ids]
            label = view.courts.label(mapping.id)
            click.echo(click.style(f"  {label} ", bold=True) + click.style("─" * 40, dim=True))
            if court_events:
                for event in court_events:
                    self._print_event(event, view.courts, show_court=False)
            else:
                click.echo(click.style("    (open)", dim=True))

        unassigned = [e for e in events if not e.court_mapping_ids]
        if unassigned:
            click.echo(click.style("  Unassigned ", bold=True) + click.style("─" * 40, dim=True))
            for event in unassigned:
                self._print_event(event, view.courts, show_court=False)

    def _print_header(self, view: CalendarView) -> None:
        """Print date header with counts."""
        date_range = view.date_range
        if date_range.days == 1:
            header = f"{date_range.start.isoformat()} — {date_range.start:%A}"
        else:
            header = f"{date_range.start.isoformat()} to {date_range.end.isoformat()}"

        click.echo()
        click.echo(click.style(f"  {header}", bold=True))
        click.echo(click.style(f"  {'═' * len(header)}", dim=True))

        if view.filters is not None:
            sources = ", ".join(sorted(s.value for s in view.filters.sources))
            statuses = ", ".join(sorted(s.value for s in view.filters.statuses))
            click.echo(click.style(f"  Showing: {sources} ({statuses})", dim=True))

        summary = f"  {len(view.events)} events"
        if view.conflict_count:
            summary += "  " + click.style(f"{view.conflict_count} in conflict", fg="red", bold=True)
        click.echo(summary)
        click.echo()

    def _print_event(
        self, event: CalendarEvent, courts: CourtDirectory, show_court: bool = True
    ) -> None:
        """Print a single event line with colors."""
        kind = classify_event(event)
        time_styled = click.style(f"{event.start_time}–{event.end_time}", dim=True)
        source_styled = click.style(f"[{SOURCE_LABELS[event.source]}]", fg=KIND_COLORS[kind])
        title_styled = click.style(event.title, fg="bright_white", bold=True)
        status_styled = click.style(event.status.value, fg=STATUS_COLORS[event.status])

        parts = [f"    {time_styled}  {source_styled} {title_styled} ({status_styled})"]
        if show_court:
            if event.court_mapping_ids:
                parts.append(" · ".join(courts.label(c) for c in event.court_mapping_ids))
            else:
                parts.append(click.style("unassigned", dim=True))
        parts.append(click.style(format_duration(event.duration_minutes), dim=True))
        if is_pro_staffed(event):
            parts.append(click.style("PRO", fg="cyan", bold=True))
        if event.has_conflict:
            parts.append(click.style("⚠ CONFLICT", fg="red", bold=True))

        click.echo("  ".join(parts))

    def export_conflicts(self, report: ConflictReport, config: CourtCalConfig) -> None:
        start, end = report.date_range.start, report.date_range.end
        header = f"Conflicts {start.isoformat()} to {end.isoformat()}"
        click.echo()
        click.echo(click.style(f"  {header}", bold=True))
        click.echo(click.style(f"  {'═' * len(header)}", dim=True))

        if not report.groups:
            click.echo(click.style("  No conflicts found", fg="green"))
            click.echo()
            return

        for group in report.groups:
            label = report.courts.label(group.court_mapping_id)
            window = (
                f"{minutes_to_ampm(group.overlap_start_minutes)} – "
                f"{minutes_to_ampm(group.overlap_end_minutes)}"
            )
            click.echo(
                click.style(f"  {group.date:%a %b %d}  {label}", bold=True)
                + "  "
                + click.style(f"{window} ({format_duration(group.overlap_minutes)})", fg="red")
            )
            for event in group.events:
                self._print_event(event, report.courts, show_court=False)
            click.echo()

        click.echo(f"  {report.total_conflicts} conflicting events in {len(report.groups)} groups")
        click.echo()
