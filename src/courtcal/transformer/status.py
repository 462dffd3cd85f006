"""Map each booking system's native status vocabulary to EventStatus."""

from __future__ import annotations

from types import MappingProxyType

from courtcal.models import EventStatus

# CourtReserve: anything mentioning cancellation is cancelled, everything else is live
CANCELLATION_KEYWORDS: tuple[str, ...] = ("cancel",)

# Tripleseat event statuses (matched case-insensitively)
TRIPLESEAT_EVENT_STATUS = MappingProxyType(
    {
        "DEFINITE": EventStatus.CONFIRMED,
        "TENTATIVE": EventStatus.TENTATIVE,
        "PROSPECT": EventStatus.PROSPECT,
        "CANCELLED": EventStatus.CANCELLED,
        "LOST": EventStatus.CANCELLED,
    }
)

# Unknown vendor values surface as unconfirmed rather than hidden or confirmed
TRIPLESEAT_EVENT_FALLBACK = EventStatus.PROSPECT

LEAD_STATUS = EventStatus.PROSPECT


def map_reservation_status(raw: str | None) -> EventStatus:
    if not raw:
        return EventStatus.CONFIRMED
    lowered = raw.lower()
    if any(keyword in lowered for keyword in CANCELLATION_KEYWORDS):
        return EventStatus.CANCELLED
    return EventStatus.CONFIRMED


def map_venue_event_status(raw: str | None) -> EventStatus:
    if not raw:
        return TRIPLESEAT_EVENT_FALLBACK
    return TRIPLESEAT_EVENT_STATUS.get(raw.strip().upper(), TRIPLESEAT_EVENT_FALLBACK)


def map_lead_status(raw: str | None = None) -> EventStatus:
    """Leads have no vocabulary worth mapping: always a prospect."""
    return LEAD_STATUS
