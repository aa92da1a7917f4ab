"""Tests for the Streamlit itinerary page."""

from datetime import date, time
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from storage import FileStore, load_trips, save_trips

APP_PATH = str(Path(__file__).resolve().parent.parent / "streamlit_app.py")


def _trip(train: str, origin: str, destination: str) -> dict:
    return {
        "train": train,
        "origin": origin,
        "destination": destination,
        "depart": {"date": "2024-06-01", "time": "08:00", "instant": "2024-06-01T15:00:00.000Z"},
        "arrive": {"date": "2024-06-01", "time": "10:30", "instant": "2024-06-01T17:30:00.000Z"},
        "notes": "",
        "createdAt": "2024-05-20T18:04:11.532Z",
    }


@pytest.fixture
def app(monkeypatch: pytest.MonkeyPatch) -> AppTest:
    """Page backed by memory-only storage."""
    monkeypatch.setenv("ITINERARY_STORAGE_DIR", "")
    monkeypatch.delenv("ITINERARY_PARSE_TIMEZONE", raising=False)
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.run()
    assert not at.exception
    return at


def _button(at: AppTest, label: str):
    return next(b for b in at.button if b.label == label)


def test_empty_page_shows_placeholder(app: AppTest) -> None:
    """Given no stored trips, when the page loads, then the empty notice is shown."""
    assert [i.value for i in app.info] == ["No trips yet."]
    assert len(app.session_state["itinerary"]) == 0


def test_add_appends_row_and_clears_form(app: AppTest) -> None:
    """Given a filled-in form, when Add is clicked, then the trip is listed and the inputs are empty."""
    app.text_input(key="in_train").input("14")
    app.text_input(key="in_origin").input("SJC")
    app.text_input(key="in_dest").input("SAC")
    app.date_input(key="in_depart_date").set_value(date(2024, 6, 1))
    app.time_input(key="in_depart_time").set_value(time(8, 0))
    app.date_input(key="in_arrive_date").set_value(date(2024, 6, 1))
    app.time_input(key="in_arrive_time").set_value(time(10, 30))
    app.text_input(key="in_notes").input("  window  ")
    _button(app, "Add").click().run()

    assert not app.exception
    (trip,) = app.session_state["itinerary"].trips
    assert (trip["train"], trip["origin"], trip["destination"], trip["notes"]) == ("14", "SJC", "SAC", "window")
    assert trip["depart"]["date"] == "2024-06-01"
    assert trip["depart"]["time"] == "08:00"
    assert trip["depart"]["instant"].endswith("Z")
    assert trip["arrive"]["time"] == "10:30"

    for key in ("in_train", "in_origin", "in_dest", "in_notes"):
        assert app.text_input(key=key).value == ""
    assert app.date_input(key="in_depart_date").value is None
    assert app.time_input(key="in_arrive_time").value is None
    assert len(app.error) == 0


def test_add_with_blank_origin_is_refused(app: AppTest) -> None:
    """Given an empty origin, when Add is clicked, then an error is shown and nothing is added."""
    app.text_input(key="in_train").input("14")
    app.text_input(key="in_dest").input("SAC")
    _button(app, "Add").click().run()

    assert [e.value for e in app.error] == ["Train, Origin, and Destination are required."]
    assert len(app.session_state["itinerary"]) == 0
    assert app.text_input(key="in_train").value == "14"


def test_save_with_no_trips_shows_error(app: AppTest) -> None:
    """Given an empty itinerary, when Save is clicked, then an error is shown and no download offered."""
    _button(app, "Save itinerary").click().run()

    assert [e.value for e in app.error] == ["No trips to save yet."]
    assert not any(b.label.startswith("Download") for b in app.button)


def test_delete_buttons_follow_current_rows(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Given three stored trips, when deleting row 1 twice, then each click removes the row shown there."""
    save_trips(FileStore(tmp_path), [_trip("14", "SJC", "SAC"), _trip("11", "SAC", "LAX"), _trip("5", "LAX", "SEA")])
    monkeypatch.setenv("ITINERARY_STORAGE_DIR", str(tmp_path))
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.run()

    at.button(key="del_0").click().run()
    assert [t["train"] for t in at.session_state["itinerary"].trips] == ["11", "5"]

    at.button(key="del_0").click().run()
    assert [t["train"] for t in at.session_state["itinerary"].trips] == ["5"]
    assert [t["train"] for t in load_trips(FileStore(tmp_path))] == ["5"]

    at.button(key="del_0").click().run()
    assert not at.exception
    assert [i.value for i in at.info] == ["No trips yet."]
    assert load_trips(FileStore(tmp_path)) == []
