import logging
import time

import streamlit as st
from streamlit_folium import st_folium

from config import ConfigError, load_config
from data_loader import DataLoadError, load_record_store
from map_layers import build_map
from map_session import MapSession
from playback import MAX_SPEED, MIN_SPEED, Playback, SPEED_STEP
from time_window import CONTINUOUS, LOADING_LABEL, WEEK

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Page configuration
st.set_page_config(
    page_title="Turtle & Vessel Map",
    page_icon="🐢",
    layout="wide"
)

st.title("🐢 Leatherback Turtle Sightings & Vessel Presence")
st.markdown("Weekly turtle sightings, predicted movement trend and fishing vessel presence, "
            "with an alert when a vessel comes within the proximity threshold of a turtle.")

st.markdown("---")


def get_config():
    """Load config.yaml once per browser session"""
    if 'config' not in st.session_state:
        try:
            st.session_state.config = load_config()
        except ConfigError as e:
            st.error(f"Error loading configuration: {e}")
            st.stop()
    return st.session_state.config


def get_session(config):
    """Create the map session and load all three data sources once"""
    if 'map_session' not in st.session_state:
        st.session_state.map_session = MapSession(
            threshold_degrees=config.threshold_degrees,
            playback=Playback(speed=config.default_speed,
                              ticks_per_second=config.ticks_per_second),
        )

    session = st.session_state.map_session
    if not session.is_loaded and not st.session_state.get('load_failed'):
        try:
            with st.spinner("Loading turtle and vessel data..."):
                session.load(load_record_store(config))
        except DataLoadError as e:
            # No retry: the page stays in its loading state
            st.session_state.load_failed = str(e)
    return session


# Widget callbacks write straight into the session before the next run
def on_cursor_change():
    st.session_state.map_session.set_cursor(st.session_state.cursor_slider)


def on_mode_change():
    mode = WEEK if st.session_state.mode_radio == "Week" else CONTINUOUS
    st.session_state.map_session.set_mode(mode)


def on_speed_change():
    st.session_state.map_session.playback.set_speed(st.session_state.speed_slider)


def on_play_toggle():
    st.session_state.map_session.playback.toggle()


def on_step_week(delta):
    st.session_state.map_session.step_week(delta)


config = get_config()
session = get_session(config)

if not session.is_loaded:
    st.info(f"⏳ {LOADING_LABEL}")
    if st.session_state.get('load_failed'):
        st.error(f"Error loading data: {st.session_state.load_failed}")
    st.stop()

snapshot = session.snapshot()

col1, col2 = st.columns([3, 1])

with col2:
    st.subheader("🕒 Time")

    st.radio("Cursor", ["Continuous", "Week"], key='mode_radio',
             index=0 if session.mode == CONTINUOUS else 1,
             horizontal=True, on_change=on_mode_change)

    st.markdown(f"**Selected Time:** {snapshot.label}")

    upper = session.max_cursor
    if upper <= 0:
        st.caption("Only one window of data available")
    elif session.mode == CONTINUOUS:
        st.session_state.cursor_slider = float(session.cursor)
        st.slider("Day", min_value=0.0, max_value=float(upper), step=1 / 3.0,
                  key='cursor_slider', on_change=on_cursor_change)
    else:
        st.session_state.cursor_slider = int(session.cursor)
        st.slider("Week", min_value=0, max_value=int(upper), step=1,
                  key='cursor_slider', on_change=on_cursor_change)
        prev_col, next_col = st.columns(2)
        prev_col.button("◀ Previous week", on_click=on_step_week, args=(-1,),
                        use_container_width=True)
        next_col.button("Next week ▶", on_click=on_step_week, args=(1,),
                        use_container_width=True)

    st.subheader("▶️ Playback")
    st.button("⏸️ Pause" if session.playback.is_playing else "▶️ Play",
              on_click=on_play_toggle, use_container_width=True)
    st.session_state.speed_slider = float(session.playback.speed)
    st.slider("Speed", min_value=MIN_SPEED, max_value=MAX_SPEED, step=SPEED_STEP,
              key='speed_slider', format="%.1fx", on_change=on_speed_change)

    st.markdown("---")
    st.subheader("⚠️ Proximity Alert")
    if snapshot.alert:
        st.error(f"### 🔴 Vessel within {session.threshold_degrees}° of a turtle")
    else:
        st.success("### 🟢 No vessels near turtles")

    st.metric("Points in Week", snapshot.points_in_window)
    st.markdown(f"""
    - 🟠 **Sightings:** {len(snapshot.layers.sightings)}
    - 🔵 **Trend points:** {len(snapshot.layers.trends)}
    - 🔴 **Vessel records:** {len(snapshot.layers.vessels)}
    """)

with col1:
    st.subheader("📍 Map")
    m = build_map(snapshot, config)
    st_folium(m, height=600, use_container_width=True, returned_objects=[])

    store = session.store
    st.info(f"""
    **📊 Data:** {len(store.sightings):,} sightings, {len(store.trends):,} trend points and
    {len(store.vessels):,} vessel records from {store.min_date.isoformat()}
    (day 0) to day {store.max_time_index}.
    """)

# Footer
st.markdown("---")
cursor_unit = "weeks" if session.mode == WEEK else "days"
st.markdown(f"""
**Notes:**
- Each window covers 7 days starting at the selected day.
- Proximity uses flat distance in degrees (threshold {session.threshold_degrees}°), not great-circle distance; it is an advisory signal only.
- Playback assumes {config.ticks_per_second:g} ticks per second; one tick always moves the cursor by speed / {config.ticks_per_second:g} {cursor_unit}.
""")

# Animation tick: advance one step and rerun the script
if session.playback.is_playing:
    time.sleep(1.0 / config.ticks_per_second)
    session.tick()
    st.rerun()
