"""Client for the playlist proxy backend."""

from typing import List, Optional

import requests

from ytplan.config import Config
from ytplan.errors import InvalidPlaylistError, UpstreamError
from ytplan.fetcher import extract_playlist_id, fetch_playlist, playlist_url
from ytplan.models import Playlist, Video


def fetch_playlist_data(
    playlist_id: str,
    endpoints: Optional[List[str]] = None,
    timeout: Optional[float] = None,
) -> Playlist:
    """
    Fetch playlist data from the first backend endpoint that answers.

    Args:
        playlist_id: YouTube playlist id
        endpoints: playlist-info URLs tried in order (default: BACKEND_API_URLS)
        timeout: Seconds per endpoint (default: REQUEST_TIMEOUT)

    Returns:
        Playlist with videos in playlist order
    """
    endpoints = endpoints if endpoints is not None else Config.backend_urls()
    timeout = timeout or Config.REQUEST_TIMEOUT
    last_error = None

    for url in endpoints:
        try:
            response = requests.get(url, params={'playlistId': playlist_id}, timeout=timeout)
            if not response.ok:
                try:
                    message = response.json().get('error')
                except ValueError:
                    message = None
                raise UpstreamError(
                    message or f"Failed to fetch playlist data ({response.status_code})",
                    response.status_code,
                )

            data = response.json()
            videos = [
                Video(id=v['id'], title=v['title'], duration_minutes=v['durationMinutes'])
                for v in data.get('videos', [])
            ]
            return Playlist(
                id=playlist_id,
                title=data.get('title', ''),
                videos=videos,
                url=playlist_url(playlist_id),
            )
        except (requests.RequestException, UpstreamError, ValueError, KeyError) as e:
            print(f"⚠ Endpoint failed: {url} ({e})")
            last_error = e

    raise UpstreamError(
        "Could not reach backend. Ensure your server is running or update BACKEND_API_URLS."
    ) from last_error


def load_playlist(url_or_id: str) -> Playlist:
    """
    Resolve a playlist URL (or bare id) to playlist data.

    Goes through the backend when BACKEND_API_URLS is configured, otherwise
    fetches from YouTube directly.
    """
    playlist_id = extract_playlist_id(url_or_id)
    if not playlist_id:
        raise InvalidPlaylistError(
            "Invalid playlist URL. Use format: https://www.youtube.com/playlist?list=..."
        )

    if Config.backend_urls():
        return fetch_playlist_data(playlist_id)
    return fetch_playlist(playlist_id)
