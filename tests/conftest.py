"""Shared test fixtures."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

from courtcal.config import CourtCalConfig
from courtcal.models import (
    CalendarEvent,
    CourtMapping,
    CREvent,
    CRReservation,
    EventSource,
    EventStatus,
    TSEvent,
    TSLead,
)
from courtcal.transformer.courts import CourtDirectory

LOCATION_ID = "ff344bbf-3e47-43b8-b3f7-49d38583970d"


def make_reservation(
    reservation_id: str = "5001",
    court_mapping_id: str | None = "court-3",
    start: str | None = "2026-02-21T13:00:00",
    end: str | None = "2026-02-21T14:00:00",
    reservation_date: str | None = "2026-02-21",
    status: str | None = "Active",
    **extra,
) -> CRReservation:
    """Helper to create a CourtReserve reservation row."""
    return CRReservation(
        id=f"row-{reservation_id}",
        courtreserve_reservation_id=reservation_id,
        location_id=LOCATION_ID,
        court_mapping_id=court_mapping_id,
        reservation_date=reservation_date,
        start_time=start,
        end_time=end,
        status=status,
        **extra,
    )


def make_program(
    event_id: int = 700,
    court_mapping_ids: list[str] | None = None,
    start: str | None = "2026-02-21T09:00:00+00:00",
    end: str | None = "2026-02-21T11:00:00+00:00",
    is_canceled: bool = False,
    **extra,
) -> CREvent:
    """Helper to create a CourtReserve program row."""
    return CREvent(
        id=f"prog-{event_id}",
        courtreserve_event_id=event_id,
        location_id=LOCATION_ID,
        start_datetime=start,
        end_datetime=end,
        court_mapping_ids=court_mapping_ids if court_mapping_ids is not None else ["court-1"],
        is_canceled=is_canceled,
        **extra,
    )


def make_venue_event(
    event_id: int = 900,
    room_ids: list[int] | None = None,
    start: str | None = "2026-02-21T18:00:00Z",  # 13:00 EST
    end: str | None = "2026-02-21T19:00:00Z",
    status: str | None = "DEFINITE",
    event_date: str | None = "2026-02-21",
    **extra,
) -> TSEvent:
    """Helper to create a Tripleseat event row."""
    return TSEvent(
        id=f"ts-{event_id}",
        tripleseat_event_id=event_id,
        location_id=LOCATION_ID,
        event_start=start,
        event_end=end,
        status=status,
        event_date=event_date,
        room_ids=room_ids if room_ids is not None else [103],
        **extra,
    )


def make_lead(
    lead_id: int = 300,
    room_ids: list[int] | None = None,
    start: str | None = "2026-02-21T18:00:00Z",
    end: str | None = "2026-02-21T19:00:00Z",
    desired_date: str | None = "2026-02-21",
    **extra,
) -> TSLead:
    """Helper to create a Tripleseat lead row."""
    return TSLead(
        id=f"lead-{lead_id}",
        tripleseat_lead_id=lead_id,
        location_id=LOCATION_ID,
        desired_start=start,
        desired_end=end,
        desired_date=desired_date,
        room_ids=room_ids if room_ids is not None else [103],
        **extra,
    )


def make_event(
    event_id: str,
    start: str,
    end: str,
    courts: tuple[str, ...] = ("court-3",),
    source: EventSource = EventSource.COURTRESERVE,
    status: EventStatus = EventStatus.CONFIRMED,
    day: date = date(2026, 2, 21),
    has_conflict: bool = False,
) -> CalendarEvent:
    """Helper to create an already-normalized calendar event."""
    sh, sm = (int(p) for p in start.split(":"))
    eh, em = (int(p) for p in end.split(":"))
    return CalendarEvent(
        id=event_id,
        original_record_id=f"row-{event_id}",
        source=source,
        status=status,
        date=day,
        start_time=start,
        end_time=end,
        start_minutes=sh * 60 + sm,
        end_minutes=eh * 60 + em,
        title=event_id,
        court_mapping_ids=courts,
        has_conflict=has_conflict,
    )


@pytest.fixture
def court_mappings() -> list[CourtMapping]:
    """Four courts, each bookable in both systems."""
    return [
        CourtMapping(
            id=f"court-{n}",
            location_id=LOCATION_ID,
            court_number=n,
            court_name=f"Court {n}",
            courtreserve_court_id=40 + n,
            tripleseat_room_id=100 + n,
        )
        for n in range(1, 5)
    ]


@pytest.fixture
def courts(court_mappings) -> CourtDirectory:
    return CourtDirectory(court_mappings)


@pytest.fixture
def snapshot_data(court_mappings) -> dict:
    """Snapshot document with one conflict on court-3 and a harmless lead."""
    return {
        "court_mappings": [
            {
                "id": m.id,
                "location_id": m.location_id,
                "court_number": m.court_number,
                "court_name": m.court_name,
                "courtreserve_court_id": m.courtreserve_court_id,
                "tripleseat_room_id": m.tripleseat_room_id,
                "is_active": True,
            }
            for m in court_mappings
        ],
        "cr_reservations": [
            {
                "id": "row-1",
                "location_id": LOCATION_ID,
                "courtreserve_reservation_id": "1",
                "court_mapping_id": "court-3",
                "title": "Open Play",
                "reservation_date": "2026-02-21",
                "start_time": "2026-02-21T13:00:00",
                "end_time": "2026-02-21T14:00:00",
                "member_name": "Pat Doe",
                "status": "Active",
            },
            {
                "id": "row-2",
                "location_id": LOCATION_ID,
                "courtreserve_reservation_id": "2",
                "court_mapping_id": "court-3",
                "title": "Doubles",
                "reservation_date": "2026-02-21",
                "start_time": "2026-02-21T13:30:00",
                "end_time": "2026-02-21T14:30:00",
                "status": "Active",
            },
            {
                "id": "row-3",
                "location_id": LOCATION_ID,
                "courtreserve_reservation_id": "3",
                "court_mapping_id": "court-1",
                "reservation_date": "2026-03-02",
                "start_time": "2026-03-02T10:00:00",
                "end_time": "2026-03-02T11:00:00",
                "status": "Active",
            },
        ],
        "cr_events": [
            {
                "id": "prog-1",
                "location_id": LOCATION_ID,
                "courtreserve_event_id": 77,
                "event_name": "Beginner Clinic",
                "event_category_name": "Clinic",
                "start_datetime": "2026-02-21T09:00:00+00:00",
                "end_datetime": "2026-02-21T10:30:00+00:00",
                "court_mapping_ids": ["court-1", "court-2"],
                "registered_count": 8,
                "is_canceled": False,
            }
        ],
        "ts_events": [],
        "ts_leads": [
            {
                "id": "lead-1",
                "location_id": LOCATION_ID,
                "tripleseat_lead_id": 55,
                "lead_name": "Birthday Party",
                "desired_date": "2026-02-21",
                "desired_start": "2026-02-21T18:00:00Z",
                "desired_end": "2026-02-21T19:00:00Z",
                "room_ids": [103],
            }
        ],
    }


@pytest.fixture
def snapshot_path(tmp_path, snapshot_data) -> Path:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot_data))
    return path


@pytest.fixture
def config(snapshot_path) -> CourtCalConfig:
    """Test config pointing at the temp snapshot."""
    return CourtCalConfig(snapshot_path=snapshot_path)
