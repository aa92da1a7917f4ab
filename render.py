from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Sequence

from timeutil import format_for_display, from_iso_utc

TABLE_HEADERS = ("#", "Train", "Origin", "Destination", "Depart", "Arrive", "Notes", "")


@dataclass(frozen=True)
class TripRow:
    """
    One table row.

    number:   1-based, what the user sees
    position: 0-based list index the row's Delete button acts on
    """
    number: int
    position: int
    train: str
    origin: str
    destination: str
    depart: str
    arrive: str
    notes: str


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _when(record: dict, field: str) -> str:
    point = record.get(field)
    if not isinstance(point, dict):
        return ""
    # "isoUtc" is what older browser-made exports call the instant.
    instant = point.get("instant") or point.get("isoUtc")
    return format_for_display(from_iso_utc(instant))


def trip_rows(trips: Sequence[Any]) -> List[TripRow]:
    """
    Build the table from scratch. Stored records aren't validated on load,
    so anything that isn't the expected shape shows up as blank cells.
    """
    rows = []
    for position, record in enumerate(trips):
        if not isinstance(record, dict):
            record = {}
        rows.append(
            TripRow(
                number=position + 1,
                position=position,
                train=_text(record.get("train")),
                origin=_text(record.get("origin")),
                destination=_text(record.get("destination")),
                depart=_when(record, "depart"),
                arrive=_when(record, "arrive"),
                notes=_text(record.get("notes")),
            )
        )
    return rows
