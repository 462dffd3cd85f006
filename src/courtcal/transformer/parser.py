"""Source-specific parsing of raw booking rows into calendar events.

Every parser is partial: a row that cannot become a valid event yields
``None`` and the batch carries on. The checks run in the same order for
every source: required times, raw cancellation, civil time, positive
duration, courts, descriptive fields.
"""

from __future__ import annotations

import logging
from datetime import date, tzinfo

from courtcal.clock import (
    FACILITY_TIMEZONE,
    local_date,
    local_to_hhmm,
    strip_offset,
    to_minutes,
    utc_to_local,
)
from courtcal.models import (
    CalendarEvent,
    CREvent,
    CRReservation,
    EventSource,
    EventStatus,
    TSEvent,
    TSLead,
)
from courtcal.transformer.courts import CourtDirectory
from courtcal.transformer.status import (
    map_lead_status,
    map_reservation_status,
    map_venue_event_status,
)

logger = logging.getLogger(__name__)


def _first_set(*values: str | None) -> str:
    """First value that is not None. Empty strings count as set."""
    return next(v for v in values if v is not None)


class _Span:
    """Civil start/end of one row, in both text and minutes."""

    __slots__ = ("start_time", "end_time", "start_minutes", "end_minutes")

    def __init__(self, start_time: str, end_time: str) -> None:
        self.start_time = start_time
        self.end_time = end_time
        self.start_minutes = to_minutes(start_time)
        self.end_minutes = to_minutes(end_time)

    @property
    def is_positive(self) -> bool:
        return self.end_minutes > self.start_minutes


class Parser:
    """Parse source-specific raw rows into calendar events."""

    def __init__(self, timezone: tzinfo = FACILITY_TIMEZONE) -> None:
        self._tz = timezone

    def parse_reservation(
        self,
        row: CRReservation,
        courts: CourtDirectory,
    ) -> CalendarEvent | None:
        """Transform a CourtReserve reservation. Times are already local."""
        if not row.start_time or not row.end_time or not row.reservation_date:
            return self._drop(row.id, "missing start, end or date")

        try:
            span = _Span(local_to_hhmm(row.start_time), local_to_hhmm(row.end_time))
            day = date.fromisoformat(row.reservation_date)
        except ValueError as e:
            return self._drop(row.id, str(e))

        if not span.is_positive:
            return self._drop(row.id, f"non-positive span {span.start_time}-{span.end_time}")

        mapping = courts.get(row.court_mapping_id) or courts.for_courtreserve_court(row.court_id)

        return CalendarEvent(
            id=f"cr-{row.courtreserve_reservation_id}",
            original_record_id=row.id,
            source=EventSource.COURTRESERVE,
            status=map_reservation_status(row.status),
            date=day,
            start_time=span.start_time,
            end_time=span.end_time,
            start_minutes=span.start_minutes,
            end_minutes=span.end_minutes,
            title=_first_set(row.title, row.category, "Reservation"),
            court_mapping_ids=(mapping.id,) if mapping else (),
            court_number=mapping.court_number if mapping else None,
            category=row.category,
            has_conflict=False,
            member_name=row.member_name,
            member_email=row.member_email,
            instructor_name=row.instructor_name,
        )

    def parse_program(
        self,
        row: CREvent,
        courts: CourtDirectory,
    ) -> CalendarEvent | None:
        """Transform a CourtReserve program (lesson, league, open play).

        Stored start/end carry a UTC marker, but the clock digits are local,
        so the marker is stripped and the digits used as-is.
        """
        if not row.start_datetime or not row.end_datetime:
            return self._drop(row.id, "missing start or end")
        if row.is_canceled:
            return self._drop(row.id, "canceled at source")

        local_start = strip_offset(row.start_datetime)
        local_end = strip_offset(row.end_datetime)

        try:
            span = _Span(local_to_hhmm(local_start), local_to_hhmm(local_end))
        except ValueError as e:
            return self._drop(row.id, str(e))

        if not span.is_positive:
            return self._drop(row.id, f"non-positive span {span.start_time}-{span.end_time}")

        day = local_date(local_start)
        if day is None:
            return self._drop(row.id, f"no date in {row.start_datetime!r}")

        # Pre-resolved upstream; no lookup needed beyond the display label
        court_ids = tuple(dict.fromkeys(row.court_mapping_ids))

        return CalendarEvent(
            # Same program id recurs at different times, so the start is part of the id
            id=f"cr-event-{row.courtreserve_event_id}-{local_start}",
            original_record_id=row.id,
            source=EventSource.COURTRESERVE_EVENT,
            status=EventStatus.CONFIRMED,
            date=day,
            start_time=span.start_time,
            end_time=span.end_time,
            start_minutes=span.start_minutes,
            end_minutes=span.end_minutes,
            title=_first_set(row.event_name, row.event_category_name, "Event"),
            court_mapping_ids=court_ids,
            court_number=courts.court_number(court_ids[0]) if court_ids else None,
            category=row.event_category_name,
            has_conflict=False,
            guest_count=row.registered_count,
            event_type=row.event_category_name,
        )

    def parse_venue_event(
        self,
        row: TSEvent,
        courts: CourtDirectory,
    ) -> CalendarEvent | None:
        """Transform a Tripleseat event. Times are UTC and converted to local."""
        if not row.event_start or not row.event_end:
            return self._drop(row.id, "missing start or end")

        try:
            start_day, start_time = utc_to_local(row.event_start, self._tz)
            _, end_time = utc_to_local(row.event_end, self._tz)
            span = _Span(start_time, end_time)
            day = date.fromisoformat(row.event_date) if row.event_date else start_day
        except ValueError as e:
            return self._drop(row.id, str(e))

        if not span.is_positive:
            return self._drop(row.id, f"non-positive span {span.start_time}-{span.end_time}")

        mappings = courts.resolve_rooms(row.room_ids)

        return CalendarEvent(
            id=f"ts-event-{row.tripleseat_event_id}",
            original_record_id=row.id,
            source=EventSource.TRIPLESEAT_EVENT,
            status=map_venue_event_status(row.status),
            date=day,
            start_time=span.start_time,
            end_time=span.end_time,
            start_minutes=span.start_minutes,
            end_minutes=span.end_minutes,
            title=_first_set(row.event_name, "Event"),
            court_mapping_ids=tuple(m.id for m in mappings),
            court_number=mappings[0].court_number if len(mappings) == 1 else None,
            category=row.event_type,
            has_conflict=False,
            guest_count=row.guest_count,
            room_ids=tuple(row.room_ids),
            contact_name=row.contact_name,
            contact_email=row.contact_email,
            event_type=row.event_type,
        )

    def parse_lead(
        self,
        row: TSLead,
        courts: CourtDirectory,
    ) -> CalendarEvent | None:
        """Transform a Tripleseat lead. Always a prospect; never blocks a court."""
        if not row.desired_start or not row.desired_end:
            return self._drop(row.id, "missing start or end")

        try:
            start_day, start_time = utc_to_local(row.desired_start, self._tz)
            _, end_time = utc_to_local(row.desired_end, self._tz)
            span = _Span(start_time, end_time)
            day = date.fromisoformat(row.desired_date) if row.desired_date else start_day
        except ValueError as e:
            return self._drop(row.id, str(e))

        if not span.is_positive:
            return self._drop(row.id, f"non-positive span {span.start_time}-{span.end_time}")

        mappings = courts.resolve_rooms(row.room_ids)

        return CalendarEvent(
            id=f"ts-lead-{row.tripleseat_lead_id}",
            original_record_id=row.id,
            source=EventSource.TRIPLESEAT_LEAD,
            status=map_lead_status(row.status),
            date=day,
            start_time=span.start_time,
            end_time=span.end_time,
            start_minutes=span.start_minutes,
            end_minutes=span.end_minutes,
            title=_first_set(row.lead_name, "Lead Inquiry"),
            court_mapping_ids=tuple(m.id for m in mappings),
            court_number=mappings[0].court_number if len(mappings) == 1 else None,
            category=row.lead_type,
            has_conflict=False,
            guest_count=row.guest_count,
            room_ids=tuple(row.room_ids),
            contact_name=row.contact_name,
            event_type=row.lead_type,
        )

    @staticmethod
    def _drop(record_id: str, reason: str) -> None:
        logger.debug("Skipping row %s: %s", record_id, reason)
        return None
