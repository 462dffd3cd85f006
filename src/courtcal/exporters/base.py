"""Abstract base class for exporters, plus the views they render."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from courtcal.config import CourtCalConfig
from courtcal.models import CalendarEvent, CalendarFilters, ConflictGroup, DateRange, ViewMode
from courtcal.transformer.courts import CourtDirectory


@dataclass(frozen=True)
class CalendarView:
    """Conflict-annotated, filtered events for a date window."""

    date_range: DateRange
    mode: ViewMode
    events: list[CalendarEvent]
    courts: CourtDirectory
    filters: CalendarFilters | None = None
    row_counts: dict[str, int] = field(default_factory=dict)
    location: str | None = None

    @property
    def conflict_count(self) -> int:
        return sum(1 for e in self.events if e.has_conflict)


@dataclass(frozen=True)
class ConflictReport:
    """Conflict groups found across a forward-looking window."""

    date_range: DateRange
    groups: list[ConflictGroup]
    courts: CourtDirectory
    location: str | None = None

    @property
    def total_conflicts(self) -> int:
        return sum(len(g.events) for g in self.groups)


class Exporter(ABC):
    """Base class for all output exporters."""

    @abstractmethod
    def export_calendar(self, view: CalendarView, config: CourtCalConfig) -> None:
        """Export a calendar view."""
        ...

    @abstractmethod
    def export_conflicts(self, report: ConflictReport, config: CourtCalConfig) -> None:
        """Export a conflict report."""
        ...
