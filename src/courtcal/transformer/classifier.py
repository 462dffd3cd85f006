"""Operational classification of calendar events for display.

Classification is by operational meaning, not by vendor. First match wins:
confirmed event → prospect event → maintenance → lesson → league →
reservation → movable.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from courtcal.models import CalendarEvent, EventSource, EventStatus


class EventKind(str, Enum):
    CONFIRMED_EVENT = "confirmed-event"
    PROSPECT_EVENT = "prospect-event"
    MAINTENANCE = "maintenance"
    LESSON = "lesson"
    LEAGUE = "league"
    RESERVATION = "reservation"
    MOVABLE = "movable"


# Kept tight so open play and drop-in categories fall through
LESSON_KEYWORDS: tuple[str, ...] = (
    "lesson",
    "clinic",
    "drill",
    "guided play",
    "shot specific",
    "introductory class",
)
LEAGUE_KEYWORDS: tuple[str, ...] = ("league", "round robin", "tournament", "interclub")
MAINTENANCE_KEYWORDS: tuple[str, ...] = (
    "maintenance",
    "closed",
    "repair",
    "out of order",
    "resurfacing",
    "hold",
)


def _haystack(event: CalendarEvent) -> str:
    return " ".join(part for part in (event.category, event.title) if part).lower()


def _mentions(keywords: tuple[str, ...]) -> Callable[[CalendarEvent], bool]:
    return lambda event: any(kw in _haystack(event) for kw in keywords)


def _is_confirmed_event(event: CalendarEvent) -> bool:
    return event.source is EventSource.TRIPLESEAT_EVENT and event.status is EventStatus.CONFIRMED


def _is_prospect_event(event: CalendarEvent) -> bool:
    if event.source is EventSource.TRIPLESEAT_LEAD:
        return True
    return event.source is EventSource.TRIPLESEAT_EVENT and event.status in (
        EventStatus.PROSPECT,
        EventStatus.TENTATIVE,
    )


def _is_program(event: CalendarEvent) -> bool:
    return event.source is EventSource.COURTRESERVE_EVENT


def _is_lesson(event: CalendarEvent) -> bool:
    return _is_program(event) and _mentions(LESSON_KEYWORDS)(event)


@dataclass(frozen=True)
class ClassificationRule:
    """A classification rule: matcher function + resulting kind."""

    kind: EventKind
    matcher: Callable[[CalendarEvent], bool]


RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(EventKind.CONFIRMED_EVENT, _is_confirmed_event),
    ClassificationRule(EventKind.PROSPECT_EVENT, _is_prospect_event),
    ClassificationRule(EventKind.MAINTENANCE, _mentions(MAINTENANCE_KEYWORDS)),
    ClassificationRule(EventKind.LESSON, _is_lesson),
    ClassificationRule(
        EventKind.LEAGUE, lambda e: _is_program(e) and _mentions(LEAGUE_KEYWORDS)(e)
    ),
    ClassificationRule(EventKind.RESERVATION, lambda e: e.source is EventSource.COURTRESERVE),
)


def classify_event(event: CalendarEvent) -> EventKind:
    for rule in RULES:
        if rule.matcher(event):
            return rule.kind
    return EventKind.MOVABLE


def is_pro_staffed(event: CalendarEvent) -> bool:
    """Lessons carry a staff badge in the grid, whatever kind they classify as."""
    return _is_lesson(event)
