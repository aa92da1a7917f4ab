from __future__ import annotations

import io
import json
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterator, Optional, Sequence

from logger_config import setup_logger
from timeutil import timestamp_token

logger = setup_logger(__name__)

SNAPSHOT_MIME = "application/json"
EMPTY_MESSAGE = "No trips to save yet."


class EmptyItineraryError(ValueError):
    """Nothing to export."""


@dataclass(frozen=True)
class Snapshot:
    filename: str
    buffer: io.BytesIO
    mime: str = SNAPSHOT_MIME


def snapshot_filename(now: Optional[datetime] = None) -> str:
    return f"itin-{timestamp_token(now)}.json"


def snapshot_payload(trips: Sequence[Any]) -> str:
    return json.dumps({"trips": list(trips)}, indent=2)


@contextmanager
def open_snapshot(trips: Sequence[Any], now: Optional[datetime] = None) -> Iterator[Snapshot]:
    """
    Hand out the export file as an in-memory buffer for a single use.

    Raises EmptyItineraryError before creating anything if there are no
    trips. The buffer is closed when the block exits, whatever happens
    inside it.
    """
    if not trips:
        raise EmptyItineraryError(EMPTY_MESSAGE)

    snapshot = Snapshot(
        filename=snapshot_filename(now),
        buffer=io.BytesIO(snapshot_payload(trips).encode("utf-8")),
    )
    logger.info("Prepared %s with %d trips", snapshot.filename, len(trips))
    try:
        yield snapshot
    finally:
        snapshot.buffer.close()
