"""Double-booking detection over normalized calendar events.

Two events conflict when they fall on the same date, share a court and
their half-open spans overlap. Leads and prospects never create a hard
conflict, in either direction.

Always run detection on the full event set before any visibility filter:
filtering first drops the counterpart of a real conflict and hides it.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from dataclasses import replace
from datetime import date
from itertools import combinations

from courtcal.models import CalendarEvent, ConflictGroup, EventSource, EventStatus


def blocks_court(event: CalendarEvent) -> bool:
    """Whether an event holds its courts firmly enough to conflict."""
    if event.source is EventSource.TRIPLESEAT_LEAD:
        return False
    return event.status is not EventStatus.PROSPECT


def overlaps(a: CalendarEvent, b: CalendarEvent) -> bool:
    return a.start_minutes < b.end_minutes and a.end_minutes > b.start_minutes


def is_conflict(a: CalendarEvent, b: CalendarEvent) -> bool:
    """Pairwise conflict test; symmetric in ``a`` and ``b``."""
    if a.date != b.date:
        return False
    if not blocks_court(a) or not blocks_court(b):
        return False
    if not set(a.court_mapping_ids) & set(b.court_mapping_ids):
        return False
    return overlaps(a, b)


def detect_conflicts(events: Sequence[CalendarEvent]) -> list[CalendarEvent]:
    """Return copies of ``events`` (same order) with conflict flags recomputed.

    Incoming flags are ignored. Events are bucketed by (date, court) and
    pairs are only compared within a bucket; pairs in different buckets
    share no court or date and can never conflict, so the result equals a
    full pairwise scan.
    """
    buckets: dict[tuple[date, str], list[int]] = defaultdict(list)
    for index, event in enumerate(events):
        if not blocks_court(event):
            continue
        for court_id in dict.fromkeys(event.court_mapping_ids):
            buckets[(event.date, court_id)].append(index)

    flagged: set[int] = set()
    for indices in buckets.values():
        for i, j in combinations(indices, 2):
            if overlaps(events[i], events[j]):
                flagged.add(i)
                flagged.add(j)

    return [replace(event, has_conflict=index in flagged) for index, event in enumerate(events)]


def find_conflict_groups(events: Sequence[CalendarEvent]) -> list[ConflictGroup]:
    """Group flagged events by date and primary court, with their common window.

    The overlap window is the intersection of every span in the group
    (latest start, earliest end), so a group whose members only overlap
    pairwise can report zero overlap minutes.
    """
    grouped: dict[tuple[date, str | None], list[CalendarEvent]] = {}
    for event in events:
        if not event.has_conflict:
            continue
        court_id = event.court_mapping_ids[0] if event.court_mapping_ids else None
        grouped.setdefault((event.date, court_id), []).append(event)

    groups: list[ConflictGroup] = []
    for (day, court_id), members in grouped.items():
        groups.append(
            ConflictGroup(
                date=day,
                court_mapping_id=court_id,
                events=tuple(members),
                overlap_start_minutes=max(e.start_minutes for e in members),
                overlap_end_minutes=min(e.end_minutes for e in members),
            )
        )
    return sorted(groups, key=lambda g: (g.date, g.overlap_start_minutes, g.court_mapping_id or ""))
