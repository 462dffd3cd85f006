"""Visibility filtering of conflict-annotated calendar events."""

from __future__ import annotations

from collections.abc import Sequence

from courtcal.models import CalendarEvent, CalendarFilters


def matches(event: CalendarEvent, filters: CalendarFilters) -> bool:
    if event.source not in filters.sources:
        return False
    if event.status not in filters.statuses:
        return False
    if not filters.court_ids:
        return True
    return any(court_id in filters.court_ids for court_id in event.court_mapping_ids)


def apply_filters(events: Sequence[CalendarEvent], filters: CalendarFilters) -> list[CalendarEvent]:
    """Keep matching events, in order. Conflict flags pass through untouched."""
    return [event for event in events if matches(event, filters)]
