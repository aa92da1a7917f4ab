from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from timeutil import to_iso_utc

# A trip as it sits in storage / the export file (plain JSON object).
TripRecord = Dict[str, Any]


@dataclass(frozen=True)
class WallClock:
    """
    A date/time pair exactly as the user typed it, plus the UTC instant it
    resolved to ("" when it didn't resolve).
    """
    date: str = ""
    time: str = ""
    instant: str = ""

    @classmethod
    def from_parts(cls, date: str, time: str, instant: Optional[datetime]) -> "WallClock":
        return cls(
            date=date or "",
            time=time or "",
            instant=to_iso_utc(instant) if instant is not None else "",
        )

    def to_record(self) -> Dict[str, str]:
        return {"date": self.date, "time": self.time, "instant": self.instant}


@dataclass(frozen=True)
class Trip:
    """
    One leg of the itinerary. Built once from the add form, never edited.

    train / origin / destination are trimmed and non-empty when built by
    Itinerary.add; nothing re-checks them afterwards.
    """
    train: str
    origin: str
    destination: str
    depart: WallClock
    arrive: WallClock
    notes: str
    created_at: str

    def to_record(self) -> TripRecord:
        return {
            "train": self.train,
            "origin": self.origin,
            "destination": self.destination,
            "depart": self.depart.to_record(),
            "arrive": self.arrive.to_record(),
            "notes": self.notes,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class TripForm:
    """Raw values of the eight inputs on the add form."""
    train: str = ""
    origin: str = ""
    destination: str = ""
    depart_date: str = ""
    depart_time: str = ""
    arrive_date: str = ""
    arrive_time: str = ""
    notes: str = ""
