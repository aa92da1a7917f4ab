import os

# Keep test runs from writing itinerary.log into the checkout.
os.environ.setdefault("ITINERARY_LOG_FILE", "")

import pytest
from dateutil import tz

from storage import MemoryStore


@pytest.fixture
def pacific():
    return tz.gettz("America/Los_Angeles")


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()
