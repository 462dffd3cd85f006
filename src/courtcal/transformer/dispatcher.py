"""Main transformer orchestrator - runs each source parser over its rows."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import tzinfo
from typing import TypeVar

from courtcal.clock import FACILITY_TIMEZONE
from courtcal.models import CalendarEvent, CourtMapping, CREvent, CRReservation, TSEvent, TSLead
from courtcal.transformer.courts import CourtDirectory
from courtcal.transformer.parser import Parser

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT")


class Transformer:
    """Orchestrate transformation of raw rows to calendar events."""

    def __init__(
        self,
        court_mappings: Iterable[CourtMapping],
        timezone: tzinfo = FACILITY_TIMEZONE,
        parser: Parser | None = None,
    ) -> None:
        """Initialize transformer with court mappings and optional parser override."""
        self._courts = CourtDirectory(court_mappings)
        self._parser = parser or Parser(timezone)

    @property
    def courts(self) -> CourtDirectory:
        return self._courts

    def transform(
        self,
        reservations: Sequence[CRReservation] = (),
        programs: Sequence[CREvent] = (),
        venue_events: Sequence[TSEvent] = (),
        leads: Sequence[TSLead] = (),
    ) -> list[CalendarEvent]:
        """Transform every source, concatenated in a fixed source order."""
        return [
            *self._transform_all("courtreserve", reservations, self._parser.parse_reservation),
            *self._transform_all("courtreserve_event", programs, self._parser.parse_program),
            *self._transform_all("tripleseat_event", venue_events, self._parser.parse_venue_event),
            *self._transform_all("tripleseat_lead", leads, self._parser.parse_lead),
        ]

    def _transform_all(
        self,
        source: str,
        rows: Sequence[RowT],
        parse: Callable[[RowT, CourtDirectory], CalendarEvent | None],
    ) -> list[CalendarEvent]:
        events: list[CalendarEvent] = []
        for row in rows:
            transformed = parse(row, self._courts)
            if transformed:
                events.append(transformed)
        if len(events) < len(rows):
            logger.info("[%s] %d of %d rows skipped", source, len(rows) - len(events), len(rows))
        return events
