from datetime import date, time

import streamlit as st

from config import load_settings
from export import EmptyItineraryError, open_snapshot
from itinerary import Itinerary, ValidationError
from logger_config import setup_logger
from models import TripForm
from render import TABLE_HEADERS, trip_rows
from storage import FileStore, MemoryStore
from timeutil import DISPLAY_TZ_NAME

logger = setup_logger(__name__)

settings = load_settings()

FORM_KEYS = {
    "train": "in_train",
    "origin": "in_origin",
    "destination": "in_dest",
    "depart_date": "in_depart_date",
    "depart_time": "in_depart_time",
    "arrive_date": "in_arrive_date",
    "arrive_time": "in_arrive_time",
    "notes": "in_notes",
}
COLUMN_WIDTHS = [0.5, 1, 1.3, 1.3, 2, 2, 2, 1]


# -------------------------
# PAGE CONFIG
# -------------------------
st.set_page_config(page_title="Train Itinerary", page_icon="🚆", layout="wide")

st.markdown(
    """
    <style>
    /* Hide Streamlit's "Press Enter to submit form" hint */
    div[data-testid="InputInstructions"] {
        display: none !important;
    }

    div[data-testid="stButton"] > button {
        border-radius: 999px !important;
    }

    .mono {
        font-family: ui-monospace, SFMono-Regular, Menlo, monospace;
    }
    </style>
    """,
    unsafe_allow_html=True,
)


# -------------------------
# STATE (one itinerary per browser session)
# -------------------------
def _open_itinerary() -> Itinerary:
    store = FileStore(settings.storage_dir) if settings.storage_dir else MemoryStore()
    itinerary = Itinerary(store, key=settings.storage_key, zone=settings.parse_zone())
    count = itinerary.load()
    logger.info("Loaded %d trips", count)
    return itinerary


if "itinerary" not in st.session_state:
    st.session_state.itinerary = _open_itinerary()

itinerary: Itinerary = st.session_state.itinerary


# -------------------------
# CALLBACKS
# Run before the rerun that redraws the page, so each click is one whole
# add/delete and widget values can still be reset.
# -------------------------
def _as_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, time):
        return value.strftime("%H:%M")
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _read_form() -> TripForm:
    return TripForm(**{field: _as_text(st.session_state.get(key)) for field, key in FORM_KEYS.items()})


def _clear_form() -> None:
    for key in FORM_KEYS.values():
        if key.endswith("_date") or key.endswith("_time"):
            st.session_state[key] = None
        else:
            st.session_state[key] = ""


def _on_add() -> None:
    try:
        itinerary.add(_read_form())
    except ValidationError as e:
        st.session_state["flash"] = ("error", str(e))
        return
    _clear_form()


def _on_delete(position: int) -> None:
    itinerary.delete(position)


# -------------------------
# HEADER
# -------------------------
st.title("🚆 Train Itinerary")
st.caption(f"Times are entered in your local time and shown in Pacific time ({DISPLAY_TZ_NAME}).")

if "flash" in st.session_state:
    kind, msg = st.session_state.pop("flash")
    if kind == "error":
        st.error(msg)
    else:
        st.info(msg)


# -------------------------
# 1. ADD A LEG
# -------------------------
st.header("1. Add a leg")

with st.form("add_trip_form"):
    col1, col2, col3 = st.columns(3)
    col1.text_input("Train", key=FORM_KEYS["train"], placeholder="14")
    col2.text_input("Origin", key=FORM_KEYS["origin"], placeholder="SJC")
    col3.text_input("Destination", key=FORM_KEYS["destination"], placeholder="SAC")

    col1, col2, col3, col4 = st.columns(4)
    col1.date_input("Depart date", value=None, key=FORM_KEYS["depart_date"])
    col2.time_input("Depart time", value=None, key=FORM_KEYS["depart_time"])
    col3.date_input("Arrive date", value=None, key=FORM_KEYS["arrive_date"])
    col4.time_input("Arrive time", value=None, key=FORM_KEYS["arrive_time"])

    st.text_input("Notes", key=FORM_KEYS["notes"], placeholder="Coach car, seat 42…")
    st.form_submit_button("Add", on_click=_on_add)


# -------------------------
# 2. ITINERARY
# -------------------------
st.header("2. Your itinerary")

rows = trip_rows(itinerary.trips)

if rows:
    for col, label in zip(st.columns(COLUMN_WIDTHS), TABLE_HEADERS):
        col.markdown(f"**{label}**")

    for row in rows:
        cols = st.columns(COLUMN_WIDTHS)
        cols[0].write(row.number)
        cols[1].write(row.train)
        cols[2].write(row.origin)
        cols[3].write(row.destination)
        cols[4].markdown(f"<span class='mono'>{row.depart}</span>", unsafe_allow_html=True)
        cols[5].markdown(f"<span class='mono'>{row.arrive}</span>", unsafe_allow_html=True)
        cols[6].write(row.notes)
        cols[7].button(
            "Delete",
            key=f"del_{row.position}",
            on_click=_on_delete,
            args=(row.position,),
        )
else:
    st.info("No trips yet.")


# -------------------------
# 3. SAVE
# -------------------------
st.header("3. Save a copy")

if st.button("Save itinerary"):
    try:
        with open_snapshot(itinerary.trips) as snapshot:
            st.download_button(
                f"Download {snapshot.filename}",
                data=snapshot.buffer.getvalue(),
                file_name=snapshot.filename,
                mime=snapshot.mime,
            )
    except EmptyItineraryError as e:
        st.error(str(e))


# -------------------------
# DEV DEBUG
# -------------------------
if settings.show_dev_details:
    with st.expander("🐞 Developer debug: stored records"):
        st.write(f"Storage: `{settings.storage_dir or '(memory)'}` / `{settings.storage_key}`")
        st.json(list(itinerary.trips))
