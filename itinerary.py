from __future__ import annotations

import copy
from datetime import datetime, tzinfo
from typing import List, Optional, Tuple

from logger_config import setup_logger
from models import Trip, TripForm, TripRecord, WallClock
from storage import STORAGE_KEY, KeyValueStore, load_trips, save_trips
from timeutil import to_instant, to_iso_utc, utc_now

logger = setup_logger(__name__)

REQUIRED_FIELDS = ("train", "origin", "destination")
REQUIRED_MESSAGE = "Train, Origin, and Destination are required."


class ValidationError(ValueError):
    """Input rejected before anything was changed."""


def build_trip(form: TripForm, now: Optional[datetime] = None, zone: Optional[tzinfo] = None) -> Trip:
    """
    Turn raw form values into a Trip.

    Raises ValidationError if train, origin or destination is blank.
    Dates/times that don't parse are kept as typed with an empty instant.
    """
    if not all((getattr(form, name) or "").strip() for name in REQUIRED_FIELDS):
        raise ValidationError(REQUIRED_MESSAGE)

    return Trip(
        train=form.train.strip(),
        origin=form.origin.strip(),
        destination=form.destination.strip(),
        depart=WallClock.from_parts(
            form.depart_date,
            form.depart_time,
            to_instant(form.depart_date, form.depart_time, zone),
        ),
        arrive=WallClock.from_parts(
            form.arrive_date,
            form.arrive_time,
            to_instant(form.arrive_date, form.arrive_time, zone),
        ),
        notes=(form.notes or "").strip(),
        created_at=to_iso_utc(now if now is not None else utc_now()),
    )


class Itinerary:
    """
    Owns the ordered trip list for one user/device.

    Order is insertion order and doubles as the row number on screen.
    Trips have no id: delete() goes by current position. Every change is
    written to `store` in full.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str = STORAGE_KEY,
        zone: Optional[tzinfo] = None,
    ) -> None:
        self.store = store
        self.key = key
        self.zone = zone
        self._trips: List[TripRecord] = []

    @property
    def trips(self) -> Tuple[TripRecord, ...]:
        """Copies of the records; changing them doesn't touch the itinerary."""
        return tuple(copy.deepcopy(self._trips))

    def __len__(self) -> int:
        return len(self._trips)

    def load(self) -> int:
        """Replace the list with what's in storage, if storage holds a list."""
        stored = load_trips(self.store, self.key)
        if stored is not None:
            self._trips = stored
        return len(self._trips)

    def add(self, form: TripForm, now: Optional[datetime] = None) -> TripRecord:
        record = build_trip(form, now=now, zone=self.zone).to_record()
        self._trips = self._trips + [record]
        logger.info(
            "Added trip %s %s -> %s (%d total)",
            record["train"],
            record["origin"],
            record["destination"],
            len(self._trips),
        )
        save_trips(self.store, self._trips, self.key)
        return copy.deepcopy(record)

    def delete(self, index: object) -> bool:
        """
        Remove the trip at `index`. Returns False (and changes nothing) if
        the index isn't a non-negative int within range.
        """
        if isinstance(index, bool) or not isinstance(index, int):
            return False
        if not 0 <= index < len(self._trips):
            return False

        self._trips = self._trips[:index] + self._trips[index + 1:]
        logger.info("Deleted trip at position %d (%d left)", index, len(self._trips))
        save_trips(self.store, self._trips, self.key)
        return True
