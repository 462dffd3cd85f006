"""Core data models for the calendar pipeline: raw rows → calendar events → conflicts."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Any, Self

from courtcal.clock import minutes_to_hhmm

MINUTES_PER_DAY = 24 * 60


class EventSource(str, Enum):
    COURTRESERVE = "courtreserve"
    COURTRESERVE_EVENT = "courtreserve_event"
    TRIPLESEAT_EVENT = "tripleseat_event"
    TRIPLESEAT_LEAD = "tripleseat_lead"


class EventStatus(str, Enum):
    CONFIRMED = "confirmed"
    TENTATIVE = "tentative"
    PROSPECT = "prospect"
    CANCELLED = "cancelled"


class ViewMode(str, Enum):
    DAY = "day"
    WEEK = "week"
    AGENDA = "agenda"


@dataclass(frozen=True)
class DateRange:
    """Inclusive date range for scoping a calendar query."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            msg = f"start ({self.start}) must be <= end ({self.end})"
            raise ValueError(msg)

    @classmethod
    def for_date(cls, d: date) -> Self:
        return cls(start=d, end=d)

    @classmethod
    def for_view(cls, anchor: date, mode: ViewMode) -> Self:
        """Dates visible in a calendar view anchored on ``anchor``.

        Day and agenda views show the anchor only. Week views run Monday
        through Sunday around the anchor.

        Example:
            >>> DateRange.for_view(date(2026, 2, 21), ViewMode.WEEK)  # Feb 16-22
        """
        if mode is not ViewMode.WEEK:
            return cls.for_date(anchor)
        monday = anchor - timedelta(days=anchor.weekday())
        return cls(start=monday, end=monday + timedelta(days=6))

    @classmethod
    def forward(cls, start: date, days: int) -> Self:
        """Forward-looking window: ``start`` through ``start + days``."""
        if days < 0:
            msg = f"days must be >= 0, got {days}"
            raise ValueError(msg)
        return cls(start=start, end=start + timedelta(days=days))

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end

    def iter_days(self) -> Iterator[date]:
        current = self.start
        while current <= self.end:
            yield current
            current += timedelta(days=1)


# ── Raw rows ─────────────────────────────────────────────────────
# Shapes written by the ingestion job. Read-only to the pipeline.


def _int_list(value: Any) -> list[int]:
    return [int(v) for v in value or [] if v is not None]


def _str_list(value: Any) -> list[str]:
    return [str(v) for v in value or [] if v is not None]


@dataclass(frozen=True)
class CourtMapping:
    """One physical court, with its identifiers in each booking system."""

    id: str
    location_id: str = ""
    court_number: int | None = None
    court_name: str = ""
    courtreserve_court_id: int | None = None
    tripleseat_room_id: int | None = None
    is_active: bool = True

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Self:
        return cls(
            id=str(row["id"]),
            location_id=str(row.get("location_id") or ""),
            court_number=row.get("court_number"),
            court_name=row.get("court_name") or "",
            courtreserve_court_id=row.get("courtreserve_court_id"),
            tripleseat_room_id=row.get("tripleseat_room_id"),
            is_active=bool(row.get("is_active", True)),
        )


@dataclass(frozen=True)
class CRReservation:
    """CourtReserve court reservation. Times are local wall-clock strings."""

    id: str
    courtreserve_reservation_id: str
    location_id: str = ""
    court_id: int | None = None
    court_mapping_id: str | None = None
    category: str | None = None
    title: str | None = None
    reservation_date: str | None = None  # YYYY-MM-DD
    start_time: str | None = None  # e.g. "2026-02-21T13:00:00"
    end_time: str | None = None
    member_name: str | None = None
    member_email: str | None = None
    instructor_name: str | None = None
    status: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Self:
        return cls(
            id=str(row["id"]),
            courtreserve_reservation_id=str(row.get("courtreserve_reservation_id") or row["id"]),
            location_id=str(row.get("location_id") or ""),
            court_id=row.get("court_id"),
            court_mapping_id=row.get("court_mapping_id"),
            category=row.get("category"),
            title=row.get("title"),
            reservation_date=row.get("reservation_date"),
            start_time=row.get("start_time"),
            end_time=row.get("end_time"),
            member_name=row.get("member_name"),
            member_email=row.get("member_email"),
            instructor_name=row.get("instructor_name"),
            status=row.get("status"),
        )


@dataclass(frozen=True)
class CREvent:
    """CourtReserve program (lesson, league, open play).

    Start/end carry a UTC marker added on storage, but the clock digits are
    already facility-local.
    """

    id: str
    courtreserve_event_id: int
    location_id: str = ""
    event_name: str | None = None
    event_category_name: str | None = None
    start_datetime: str | None = None
    end_datetime: str | None = None
    court_ids: list[int] = field(default_factory=list)
    court_mapping_ids: list[str] = field(default_factory=list)
    max_registrants: int | None = None
    registered_count: int | None = None
    waitlist_count: int | None = None
    is_canceled: bool = False
    is_public: bool = False
    public_event_url: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Self:
        return cls(
            id=str(row["id"]),
            courtreserve_event_id=row.get("courtreserve_event_id", row["id"]),
            location_id=str(row.get("location_id") or ""),
            event_name=row.get("event_name"),
            event_category_name=row.get("event_category_name"),
            start_datetime=row.get("start_datetime"),
            end_datetime=row.get("end_datetime"),
            court_ids=_int_list(row.get("court_ids")),
            court_mapping_ids=_str_list(row.get("court_mapping_ids")),
            max_registrants=row.get("max_registrants"),
            registered_count=row.get("registered_count"),
            waitlist_count=row.get("waitlist_count"),
            is_canceled=bool(row.get("is_canceled", False)),
            is_public=bool(row.get("is_public", False)),
            public_event_url=row.get("public_event_url"),
        )


@dataclass(frozen=True)
class TSEvent:
    """Tripleseat booked event. Start/end are true UTC instants."""

    id: str
    tripleseat_event_id: int
    location_id: str = ""
    event_name: str | None = None
    event_type: str | None = None
    status: str | None = None
    contact_name: str | None = None
    contact_email: str | None = None
    event_date: str | None = None  # YYYY-MM-DD, facility-local
    event_start: str | None = None
    event_end: str | None = None
    guest_count: int | None = None
    room_ids: list[int] = field(default_factory=list)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Self:
        return cls(
            id=str(row["id"]),
            tripleseat_event_id=row.get("tripleseat_event_id", row["id"]),
            location_id=str(row.get("location_id") or ""),
            event_name=row.get("event_name"),
            event_type=row.get("event_type"),
            status=row.get("status"),
            contact_name=row.get("contact_name"),
            contact_email=row.get("contact_email"),
            event_date=row.get("event_date"),
            event_start=row.get("event_start"),
            event_end=row.get("event_end"),
            guest_count=row.get("guest_count"),
            room_ids=_int_list(row.get("room_ids")),
        )


@dataclass(frozen=True)
class TSLead:
    """Tripleseat lead: an unconfirmed inquiry. Start/end are UTC."""

    id: str
    tripleseat_lead_id: int
    location_id: str = ""
    lead_name: str | None = None
    lead_type: str | None = None
    status: str | None = None
    contact_name: str | None = None
    desired_date: str | None = None
    desired_start: str | None = None
    desired_end: str | None = None
    guest_count: int | None = None
    room_ids: list[int] = field(default_factory=list)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Self:
        return cls(
            id=str(row["id"]),
            tripleseat_lead_id=row.get("tripleseat_lead_id", row["id"]),
            location_id=str(row.get("location_id") or ""),
            lead_name=row.get("lead_name"),
            lead_type=row.get("lead_type"),
            status=row.get("status"),
            contact_name=row.get("contact_name"),
            desired_date=row.get("desired_date"),
            desired_start=row.get("desired_start"),
            desired_end=row.get("desired_end"),
            guest_count=row.get("guest_count"),
            room_ids=_int_list(row.get("room_ids")),
        )


# ── Unified calendar event ───────────────────────────────────────


@dataclass(frozen=True)
class CalendarEvent:
    """Normalized, conflict-annotated calendar event — the unit every view renders.

    All times are facility-local wall clock. ``has_conflict`` is only ever set
    by conflict detection, which returns copies rather than mutating.
    """

    id: str  # "{source prefix}-{record id}", unique across sources
    original_record_id: str
    source: EventSource
    status: EventStatus
    date: date
    start_time: str  # "HH:MM" 24h
    end_time: str
    start_minutes: int
    end_minutes: int
    title: str
    court_mapping_ids: tuple[str, ...] = ()
    court_number: int | None = None  # display label when a single court applies
    category: str | None = None
    has_conflict: bool = False
    member_name: str | None = None
    member_email: str | None = None
    instructor_name: str | None = None
    guest_count: int | None = None
    room_ids: tuple[int, ...] = ()
    contact_name: str | None = None
    contact_email: str | None = None
    event_type: str | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.start_minutes < MINUTES_PER_DAY:
            msg = f"start_minutes out of range: {self.start_minutes}"
            raise ValueError(msg)
        if not 0 < self.end_minutes <= MINUTES_PER_DAY:
            msg = f"end_minutes out of range: {self.end_minutes}"
            raise ValueError(msg)
        if self.end_minutes <= self.start_minutes:
            msg = f"end ({self.end_time}) must be after start ({self.start_time})"
            raise ValueError(msg)

    @property
    def duration_minutes(self) -> int:
        return self.end_minutes - self.start_minutes

    @property
    def is_multi_court(self) -> bool:
        return len(set(self.court_mapping_ids)) > 1

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready shape served to scheduling UIs."""
        return {
            "id": self.id,
            "originalRecordId": self.original_record_id,
            "source": self.source.value,
            "courtMappingIds": list(self.court_mapping_ids),
            "courtNumber": self.court_number,
            "isMultiCourt": self.is_multi_court,
            "title": self.title,
            "category": self.category,
            "status": self.status.value,
            "hasConflict": self.has_conflict,
            "date": self.date.isoformat(),
            "startTime": self.start_time,
            "endTime": self.end_time,
            "startMinutes": self.start_minutes,
            "endMinutes": self.end_minutes,
            "durationMinutes": self.duration_minutes,
            "memberName": self.member_name,
            "memberEmail": self.member_email,
            "instructorName": self.instructor_name,
            "guestCount": self.guest_count,
            "roomIds": list(self.room_ids),
            "contactName": self.contact_name,
            "contactEmail": self.contact_email,
            "eventType": self.event_type,
        }


@dataclass(frozen=True)
class CalendarFilters:
    """Visibility filters applied after conflict detection."""

    sources: frozenset[EventSource]
    statuses: frozenset[EventStatus]
    court_ids: frozenset[str]  # empty means every court

    def __init__(
        self,
        sources: set[EventSource] | list[EventSource] | frozenset[EventSource],
        statuses: set[EventStatus] | list[EventStatus] | frozenset[EventStatus],
        court_ids: set[str] | list[str] | frozenset[str] = frozenset(),
    ) -> None:
        object.__setattr__(self, "sources", frozenset(EventSource(s) for s in sources))
        object.__setattr__(self, "statuses", frozenset(EventStatus(s) for s in statuses))
        object.__setattr__(self, "court_ids", frozenset(court_ids))


DEFAULT_FILTERS = CalendarFilters(
    sources=set(EventSource),
    statuses={EventStatus.CONFIRMED, EventStatus.TENTATIVE, EventStatus.PROSPECT},
)


@dataclass(frozen=True)
class ConflictGroup:
    """Conflicting events sharing a court on one date, with their common window."""

    date: date
    court_mapping_id: str | None
    events: tuple[CalendarEvent, ...]
    overlap_start_minutes: int
    overlap_end_minutes: int

    @property
    def overlap_minutes(self) -> int:
        return max(0, self.overlap_end_minutes - self.overlap_start_minutes)

    @property
    def overlap_start(self) -> str:
        return minutes_to_hhmm(self.overlap_start_minutes)

    @property
    def overlap_end(self) -> str:
        return minutes_to_hhmm(self.overlap_end_minutes)
