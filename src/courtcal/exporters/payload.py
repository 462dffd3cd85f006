"""JSON exporter — the payload shape scheduling UIs consume."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any

import click

from courtcal.clock import minutes_to_ampm
from courtcal.config import CourtCalConfig
from courtcal.exporters.base import CalendarView, ConflictReport, Exporter
from courtcal.transformer.courts import CourtDirectory


def _courts_payload(courts: CourtDirectory) -> list[dict[str, Any]]:
    return [asdict(m) for m in courts.sorted_by_number()]


def calendar_payload(view: CalendarView, config: CourtCalConfig) -> dict[str, Any]:
    return {
        "dates": [d.isoformat() for d in view.date_range.iter_days()],
        "courtMappings": _courts_payload(view.courts),
        "events": [e.to_dict() for e in view.events],
        "meta": {
            "location": view.location or config.location,
            "fromDate": view.date_range.start.isoformat(),
            "toDate": view.date_range.end.isoformat(),
            "mode": view.mode.value,
            "counts": {
                "courts": len(view.courts),
                **view.row_counts,
                "eventsAfterTransform": len(view.events),
                "conflicts": view.conflict_count,
            },
        },
    }


def conflicts_payload(report: ConflictReport, config: CourtCalConfig) -> dict[str, Any]:
    return {
        "fromDate": report.date_range.start.isoformat(),
        "toDate": report.date_range.end.isoformat(),
        "totalConflicts": report.total_conflicts,
        "conflictGroups": [
            {
                "date": g.date.isoformat(),
                "courtMappingId": g.court_mapping_id,
                "events": [e.to_dict() for e in g.events],
                "overlapStart": minutes_to_ampm(g.overlap_start_minutes),
                "overlapEnd": minutes_to_ampm(g.overlap_end_minutes),
                "overlapMinutes": g.overlap_minutes,
            }
            for g in report.groups
        ],
        "courtMappings": _courts_payload(report.courts),
        "meta": {
            "location": report.location or config.location,
            "scanWindowDays": report.date_range.days - 1,
        },
    }


class JsonExporter(Exporter):
    def __init__(self, indent: int | None = 2) -> None:
        self._indent = indent

    def export_calendar(self, view: CalendarView, config: CourtCalConfig) -> None:
        click.echo(json.dumps(calendar_payload(view, config), indent=self._indent))

    def export_conflicts(self, report: ConflictReport, config: CourtCalConfig) -> None:
        click.echo(json.dumps(conflicts_payload(report, config), indent=self._indent))
