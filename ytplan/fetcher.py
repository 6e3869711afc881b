"""YouTube playlist metadata fetcher using yt-dlp or the Data API."""

import re
from pathlib import Path
from typing import Dict, List, Optional
import yt_dlp
from tqdm import tqdm

from ytplan.config import Config
from ytplan.errors import (
    EmptyPlaylistError,
    InvalidPlaylistError,
    PlaylistNotFoundError,
    UpstreamError,
)
from ytplan.models import Playlist, Video
from ytplan.timeconv import seconds_to_minutes
from ytplan.youtube_api import fetch_playlist_api

_PLAYLIST_ID_RE = re.compile(r'^[A-Za-z0-9_-]+$')
_LIST_PARAM_RE = re.compile(r'[?&]list=([A-Za-z0-9_-]+)')

# Entries yt-dlp reports for removed videos
_UNAVAILABLE_TITLES = {'[Private video]', '[Deleted video]'}


def is_valid_playlist_id(playlist_id: Optional[str]) -> bool:
    """Check the playlist id looks like one YouTube would issue."""
    if not playlist_id or not isinstance(playlist_id, str):
        return False
    return bool(_PLAYLIST_ID_RE.match(playlist_id)) and 10 < len(playlist_id) < 100


def extract_playlist_id(url: Optional[str]) -> Optional[str]:
    """
    Extract the playlist id from a YouTube URL.

    Supports:
        https://www.youtube.com/playlist?list=PLxxx
        https://www.youtube.com/watch?v=abc&list=PLxxx
        youtube.com/playlist?list=PLxxx
        PLxxx (bare id)

    Returns None if no playlist id is present.
    """
    if not url:
        return None
    url = url.strip()

    match = _LIST_PARAM_RE.search(url)
    if match:
        return match.group(1)

    if is_valid_playlist_id(url):
        return url
    return None


def playlist_url(playlist_id: str) -> str:
    return f"https://www.youtube.com/playlist?list={playlist_id}"


def _ydl_options() -> Dict:
    ydl_opts = {
        'quiet': True,
        'no_warnings': True,
        'skip_download': True,
        'extract_flat': 'in_playlist',  # List entries without resolving each video
        'ignoreerrors': True,
        'retries': Config.MAX_RETRIES,
    }

    cookies_path = Config.YOUTUBE_COOKIES_TXT
    if cookies_path and Path(cookies_path).exists():
        ydl_opts['cookiefile'] = cookies_path
        print(f"Using YouTube cookies from: {cookies_path}")

    return ydl_opts


def _resolve_missing_durations(ydl, entries: List[Dict]) -> None:
    """Look up durations that the flat listing did not include."""
    missing = [entry for entry in entries if entry.get('duration') is None]
    if not missing:
        return

    for entry in tqdm(missing, desc="Resolving durations", unit="video", ncols=80, leave=False):
        video_url = f"https://www.youtube.com/watch?v={entry['id']}"
        try:
            info = ydl.extract_info(video_url, download=False)
        except yt_dlp.utils.DownloadError as e:
            print(f"⚠ Could not read video {entry['id']}: {e}")
            continue
        if info:
            entry['duration'] = info.get('duration')
            entry['title'] = entry.get('title') or info.get('title')


def fetch_playlist_ytdlp(playlist_id: str) -> Playlist:
    """
    Read playlist metadata with yt-dlp (no API key needed, nothing downloaded).

    Args:
        playlist_id: YouTube playlist id

    Returns:
        Playlist with videos in playlist order
    """
    url = playlist_url(playlist_id)

    try:
        with yt_dlp.YoutubeDL(_ydl_options()) as ydl:
            info = ydl.extract_info(url, download=False)
            if not info:
                raise PlaylistNotFoundError("Playlist not found or is private")

            entries = [
                entry for entry in (info.get('entries') or [])
                if entry and entry.get('id') and entry.get('title') not in _UNAVAILABLE_TITLES
            ]
            if not entries:
                raise EmptyPlaylistError("Playlist is empty")

            _resolve_missing_durations(ydl, entries)
    except yt_dlp.utils.DownloadError as e:
        error_str = str(e)
        if "does not exist" in error_str or "private" in error_str.lower():
            raise PlaylistNotFoundError("Playlist not found or is private") from e
        raise UpstreamError(f"Failed to fetch playlist: {error_str}") from e

    videos = [
        Video(
            id=entry['id'],
            title=entry.get('title') or entry['id'],
            duration_minutes=seconds_to_minutes(entry.get('duration')),
        )
        for entry in entries
    ]

    return Playlist(
        id=playlist_id,
        title=info.get('title') or playlist_id,
        videos=videos,
        url=url,
    )


def fetch_playlist(playlist_id: str) -> Playlist:
    """
    Fetch complete playlist data with all videos and durations.

    Uses the YouTube Data API when YOUTUBE_API_KEY is configured, otherwise
    yt-dlp.
    """
    if not is_valid_playlist_id(playlist_id):
        raise InvalidPlaylistError("Invalid playlist ID format")

    if Config.YOUTUBE_API_KEY:
        playlist = fetch_playlist_api(playlist_id, Config.YOUTUBE_API_KEY)
        playlist.url = playlist_url(playlist_id)
    else:
        playlist = fetch_playlist_ytdlp(playlist_id)

    print(f"✓ Fetched playlist '{playlist.title}' ({playlist.video_count} videos)")
    return playlist
