"""Streamlit web application for planning YouTube playlists day by day."""

import streamlit as st
import sys
from pathlib import Path

# Add the project root to the path so we can import ytplan modules
project_root = Path(__file__).parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from ytplan.client import load_playlist
from ytplan.config import Config
from ytplan.errors import InvalidInputError
from ytplan.plans import PlanStore, current_day, plan_to_dict, progress_percentage
from ytplan.scheduler import schedule
from ytplan.timeconv import format_minutes
from ytplan.writers.txt_writer import format_segment, render_plan
import json


# Page configuration
st.set_page_config(
    page_title="YouTube Playlist Planner",
    page_icon="📅",
    layout="wide",
    initial_sidebar_state="expanded"
)


def load_streamlit_secrets():
    """Load secrets from Streamlit Cloud into Config."""
    try:
        if not hasattr(st, 'secrets') or not st.secrets:
            return
        if 'YOUTUBE_API_KEY' in st.secrets:
            Config.YOUTUBE_API_KEY = st.secrets['YOUTUBE_API_KEY']
        if 'BACKEND_API_URLS' in st.secrets:
            Config.BACKEND_API_URLS = st.secrets['BACKEND_API_URLS']
        if 'PLANS_FILE' in st.secrets:
            Config.PLANS_FILE = Path(st.secrets['PLANS_FILE']).resolve()
    except (AttributeError, TypeError, KeyError, ValueError, FileNotFoundError):
        # No secrets file - keep .env values
        pass

load_streamlit_secrets()

st.markdown("""
    <style>
    .main-header {
        font-size: 2.5rem;
        font-weight: bold;
        text-align: center;
        margin-bottom: 2rem;
    }
    .stButton>button {
        width: 100%;
    }
    </style>
""", unsafe_allow_html=True)

# Initialize session state
if 'playlist' not in st.session_state:
    st.session_state.playlist = None

store = PlanStore(Config.PLANS_FILE)


def handle_fetch(url: str):
    """Fetch the playlist behind ``url`` into session state."""
    if not url:
        st.error("Please enter a playlist URL")
        return
    with st.spinner("Fetching playlist..."):
        try:
            st.session_state.playlist = load_playlist(url)
        except Exception as e:
            st.session_state.playlist = None
            st.error(f"Error: {str(e)}")


def handle_generate(daily_minutes: float):
    """Schedule the fetched playlist and save it as a new plan."""
    playlist = st.session_state.playlist
    if playlist is None:
        st.error("Please fetch a playlist first")
        return
    try:
        days = schedule(playlist.videos, daily_minutes)
    except InvalidInputError as e:
        st.error(f"Error generating plan: {e}")
        return
    if not days:
        st.error("Could not generate plan. Please check your inputs.")
        return

    plan = store.create_plan(playlist, daily_minutes, days)
    store.set_active_plan(plan.id)
    # Rerun so the sidebar and the Active Plan tab pick up the new plan
    st.rerun()


def render_day_card(plan, day):
    """One day with its segments and a completion checkbox."""
    with st.container(border=True):
        col1, col2 = st.columns([4, 1])
        with col1:
            st.markdown(f"**Day {day.index}**")
        with col2:
            st.caption(format_minutes(day.total_minutes))

        for segment in day.segments:
            st.text(format_segment(segment))

        checked = st.checkbox(
            "Mark as completed",
            value=day.completed,
            key=f"done_{plan.id}_{day.index}",
        )
        if checked != day.completed:
            store.set_day_completed(plan.id, day.index, checked)
            st.rerun()


def main():
    """Main Streamlit application."""
    st.markdown('<div class="main-header">📅 YouTube Playlist Planner</div>', unsafe_allow_html=True)

    plans = store.get_all_plans()
    active = store.get_active_plan()

    # Sidebar: saved plans
    with st.sidebar:
        st.header("📚 Saved Plans")
        if plans:
            for plan in plans:
                is_active = active is not None and plan.id == active.id
                label = f"{plan.title[:40]} ({progress_percentage(plan)}%)"
                if is_active:
                    st.markdown(f"**{label}** (Active)")
                elif st.button(f"📋 {label}", key=f"activate_{plan.id}", use_container_width=True):
                    store.set_active_plan(plan.id)
                    st.rerun()

            st.divider()
            if active is not None and st.button("🗑️ Delete active plan", use_container_width=True):
                store.delete_plan(active.id)
                st.rerun()
            if st.button("♻️ Reset all plans", use_container_width=True):
                store.clear()
                st.session_state.playlist = None
                st.rerun()
        else:
            st.caption("No saved plans yet")

    tab1, tab2 = st.tabs(["📥 New Plan", "📅 Active Plan"])

    with tab1:
        st.header("Plan a Playlist")
        url = st.text_input(
            "YouTube Playlist URL",
            placeholder="https://www.youtube.com/playlist?list=...",
        )
        if st.button("🔍 Fetch Playlist", type="primary"):
            handle_fetch(url)

        playlist = st.session_state.playlist
        if playlist is not None:
            st.divider()
            st.subheader(playlist.title)
            col1, col2 = st.columns(2)
            col1.metric("Videos", playlist.video_count)
            col2.metric("Total duration", format_minutes(playlist.total_minutes))

            daily_minutes = st.number_input("Daily watch time (minutes)", min_value=1, value=60, step=5)
            if st.button("📅 Generate Plan"):
                handle_generate(float(daily_minutes))

    with tab2:
        if active is None:
            st.info("👆 Generate a plan in the 'New Plan' tab first.")
            return

        st.header(active.title)
        st.caption(
            f"{format_minutes(active.daily_minutes)} per day · {active.total_days} days · "
            f"Day {current_day(active)} · {progress_percentage(active)}% completed"
        )
        st.progress(progress_percentage(active) / 100)

        col1, col2, col3 = st.columns([1, 1, 4])
        with col1:
            st.download_button(
                "📄 Download TXT",
                render_plan(active.days, title=active.title),
                file_name="plan.txt",
                mime="text/plain",
            )
        with col2:
            st.download_button(
                "🧾 Download JSON",
                json.dumps(plan_to_dict(active), indent=2, ensure_ascii=False),
                file_name="plan.json",
                mime="application/json",
            )

        for day in active.days:
            render_day_card(active, day)


main()
