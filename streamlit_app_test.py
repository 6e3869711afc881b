"""Minimal diagnostic page for startup issues of the planner app."""

import streamlit as st
import sys
import traceback
from pathlib import Path

st.set_page_config(
    page_title="YouTube Playlist Planner - Diagnostics",
    page_icon="📅",
    layout="wide"
)

st.title("🔍 Diagnostic Test")

st.success("✓ Streamlit is working")

project_root = Path(__file__).parent
st.write(f"Project root: {project_root}")

# .env is optional; the app runs on defaults without it
try:
    from dotenv import load_dotenv
    env_path = project_root / '.env'
    if env_path.exists():
        load_dotenv(env_path, override=False)
        st.success(f"✓ .env file found at {env_path}")
    else:
        st.info(f"ℹ️ No .env file at {env_path}, using defaults")
except ImportError as e:
    st.error(f"✗ python-dotenv is not installed: {e}")

sys.path.insert(0, str(project_root))
try:
    from ytplan.config import Config
    st.success("✓ Config imported successfully")
except ImportError as e:
    st.error(f"✗ Error importing Config: {e}")
    st.code(traceback.format_exc())
    st.stop()

try:
    Config.validate()
    st.success("✓ Numeric settings are valid")
except ValueError as e:
    st.error(f"✗ Configuration Error: {e}")

if Config.YOUTUBE_API_KEY:
    st.success("✓ YOUTUBE_API_KEY set, playlists are read from the Data API")
else:
    st.info("ℹ️ YOUTUBE_API_KEY not set, playlists are read with yt-dlp")

if Config.backend_urls():
    st.write("Backend endpoints (tried in order):")
    for url in Config.backend_urls():
        st.write(f"- {url}")

# The plan store must be writable for check-off to persist
plans_dir = Config.PLANS_FILE.parent
try:
    plans_dir.mkdir(parents=True, exist_ok=True)
    probe = plans_dir / ".write_test"
    probe.write_text("ok", encoding="utf-8")
    probe.unlink()
    st.success(f"✓ Plan store directory is writable: {plans_dir}")
except OSError as e:
    st.error(f"✗ Cannot write plans to {plans_dir}: {e}")

modules_to_test = [
    'ytplan.scheduler',
    'ytplan.fetcher',
    'ytplan.client',
    'ytplan.plans',
]

for module_name in modules_to_test:
    try:
        __import__(module_name)
        st.success(f"✓ {module_name} imported")
    except ImportError as e:
        st.error(f"✗ {module_name} failed: {e}")
        st.code(traceback.format_exc())

st.info("If you see all checkmarks, the main app should work. If any fail, that's the issue.")
