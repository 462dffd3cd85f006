"""courtcal — unified, conflict-annotated court calendar."""

from __future__ import annotations

from courtcal.conflicts import detect_conflicts
from courtcal.filters import apply_filters
from courtcal.models import CalendarEvent, CalendarFilters, EventSource, EventStatus
from courtcal.pipeline import build_calendar_events

__all__ = [
    "CalendarEvent",
    "CalendarFilters",
    "EventSource",
    "EventStatus",
    "apply_filters",
    "build_calendar_events",
    "detect_conflicts",
]
