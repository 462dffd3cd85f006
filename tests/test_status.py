"""Tests for status vocabulary mapping."""

import pytest

from courtcal.models import EventStatus
from courtcal.transformer.status import (
    map_lead_status,
    map_reservation_status,
    map_venue_event_status,
)


class TestReservationStatus:
    @pytest.mark.parametrize("raw", ["Cancelled", "CANCELED", "cancelled by member", "Late Cancel"])
    def test_cancel_keyword(self, raw):
        assert map_reservation_status(raw) is EventStatus.CANCELLED

    @pytest.mark.parametrize("raw", ["Active", "Confirmed", "Checked In", "", None])
    def test_everything_else_confirmed(self, raw):
        assert map_reservation_status(raw) is EventStatus.CONFIRMED


class TestVenueEventStatus:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("DEFINITE", EventStatus.CONFIRMED),
            ("TENTATIVE", EventStatus.TENTATIVE),
            ("PROSPECT", EventStatus.PROSPECT),
            ("CANCELLED", EventStatus.CANCELLED),
            ("LOST", EventStatus.CANCELLED),
        ],
    )
    def test_known_values(self, raw, expected):
        assert map_venue_event_status(raw) is expected

    def test_case_insensitive(self):
        assert map_venue_event_status("definite") is EventStatus.CONFIRMED
        assert map_venue_event_status(" Tentative ") is EventStatus.TENTATIVE

    def test_unknown_falls_back_to_prospect(self):
        assert map_venue_event_status("ON_HOLD") is EventStatus.PROSPECT

    def test_missing_falls_back_to_prospect(self):
        assert map_venue_event_status(None) is EventStatus.PROSPECT


class TestLeadStatus:
    def test_always_prospect(self):
        assert map_lead_status() is EventStatus.PROSPECT
        assert map_lead_status("WON") is EventStatus.PROSPECT
