"""Court mapping lookups: foreign court/room ids → internal court ids → labels."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from courtcal.models import CourtMapping


class CourtDirectory:
    """Index court mappings by every identifier the booking systems use."""

    def __init__(self, mappings: Iterable[CourtMapping]) -> None:
        """Build lookup tables. Later duplicates never override earlier entries."""
        self._mappings: list[CourtMapping] = list(mappings)
        self._by_id: dict[str, CourtMapping] = {}
        self._by_room: dict[int, CourtMapping] = {}
        self._by_cr_court: dict[int, CourtMapping] = {}
        for mapping in self._mappings:
            self._by_id.setdefault(mapping.id, mapping)
            if mapping.tripleseat_room_id is not None:
                self._by_room.setdefault(mapping.tripleseat_room_id, mapping)
            if mapping.courtreserve_court_id is not None:
                self._by_cr_court.setdefault(mapping.courtreserve_court_id, mapping)

    def __len__(self) -> int:
        return len(self._mappings)

    def __iter__(self) -> Iterator[CourtMapping]:
        return iter(self._mappings)

    def get(self, court_mapping_id: str | None) -> CourtMapping | None:
        if not court_mapping_id:
            return None
        return self._by_id.get(court_mapping_id)

    def for_room(self, room_id: int) -> CourtMapping | None:
        return self._by_room.get(room_id)

    def for_courtreserve_court(self, court_id: int | None) -> CourtMapping | None:
        if court_id is None:
            return None
        return self._by_cr_court.get(court_id)

    def resolve_rooms(self, room_ids: Iterable[int]) -> list[CourtMapping]:
        """Map Tripleseat room ids to courts, dropping unknown rooms and repeats."""
        resolved: list[CourtMapping] = []
        seen: set[str] = set()
        for room_id in room_ids:
            mapping = self.for_room(room_id)
            if mapping is None or mapping.id in seen:
                continue
            seen.add(mapping.id)
            resolved.append(mapping)
        return resolved

    def court_number(self, court_mapping_id: str | None) -> int | None:
        mapping = self.get(court_mapping_id)
        return mapping.court_number if mapping else None

    def label(self, court_mapping_id: str | None) -> str:
        """Display label: court name, else "Court N", else "Unassigned"."""
        mapping = self.get(court_mapping_id)
        if mapping is None:
            return "Unassigned"
        if mapping.court_name:
            return mapping.court_name
        if mapping.court_number is not None:
            return f"Court {mapping.court_number}"
        return mapping.id

    def active(self) -> CourtDirectory:
        return CourtDirectory(m for m in self._mappings if m.is_active)

    def sorted_by_number(self) -> list[CourtMapping]:
        return sorted(
            self._mappings,
            key=lambda m: (m.court_number is None, m.court_number or 0, m.court_name),
        )
