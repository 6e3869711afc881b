"""YouTube Data API v3 playlist reader."""

from typing import Dict, List

import requests

from ytplan.config import Config
from ytplan.errors import ConfigurationError, EmptyPlaylistError, PlaylistNotFoundError, UpstreamError
from ytplan.models import Playlist, Video
from ytplan.timeconv import parse_iso8601_duration

YOUTUBE_API_BASE = "https://www.googleapis.com/youtube/v3"
BATCH_SIZE = 50  # API maximum for maxResults and for ids per videos call


def _error_message(response: requests.Response, fallback: str) -> str:
    """Pull the most useful message out of an API error response."""
    try:
        data = response.json()
        error = data.get("error") if isinstance(data, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        return str(data)
    except ValueError:
        return response.text or fallback


def _get(endpoint: str, params: Dict, api_key: str, fallback_message: str) -> Dict:
    try:
        response = requests.get(
            f"{YOUTUBE_API_BASE}/{endpoint}",
            params={**params, "key": api_key},
            timeout=Config.REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        raise UpstreamError(f"{fallback_message}: {e}") from e

    if not response.ok:
        message = _error_message(response, fallback_message)
        print(f"✗ YouTube API {endpoint} failed ({response.status_code}): {message}")
        raise UpstreamError(message or fallback_message, response.status_code)

    return response.json()


def fetch_playlist_title(playlist_id: str, api_key: str) -> str:
    data = _get("playlists", {"part": "snippet", "id": playlist_id}, api_key, "Failed to fetch playlist")
    items = data.get("items") or []
    if not items:
        raise PlaylistNotFoundError("Playlist not found or is private")
    return items[0]["snippet"]["title"]


def fetch_video_ids(playlist_id: str, api_key: str) -> List[str]:
    """Collect every video id in the playlist, following page tokens."""
    video_ids: List[str] = []
    page_token = None

    while True:
        params = {
            "part": "contentDetails",
            "playlistId": playlist_id,
            "maxResults": BATCH_SIZE,
        }
        if page_token:
            params["pageToken"] = page_token

        data = _get("playlistItems", params, api_key, "Failed to fetch playlist items")
        for item in data.get("items", []):
            video_id = item.get("contentDetails", {}).get("videoId")
            if video_id:
                video_ids.append(video_id)

        page_token = data.get("nextPageToken")
        if not page_token:
            break

    return video_ids


def fetch_videos(video_ids: List[str], api_key: str) -> List[Video]:
    """Fetch titles and durations in batches, preserving playlist order."""
    found: Dict[str, Video] = {}

    for start in range(0, len(video_ids), BATCH_SIZE):
        batch = video_ids[start:start + BATCH_SIZE]
        data = _get(
            "videos",
            {"part": "snippet,contentDetails", "id": ",".join(batch)},
            api_key,
            "Failed to fetch video details",
        )
        for item in data.get("items", []):
            found[item["id"]] = Video(
                id=item["id"],
                title=item["snippet"]["title"],
                duration_minutes=parse_iso8601_duration(item["contentDetails"].get("duration")),
            )

    # Deleted or private videos are missing from the response
    return [found[video_id] for video_id in video_ids if video_id in found]


def fetch_playlist_api(playlist_id: str, api_key: str) -> Playlist:
    """
    Fetch a playlist with all videos and durations from the Data API.

    Args:
        playlist_id: YouTube playlist id
        api_key: YouTube Data API key

    Returns:
        Playlist with videos in playlist order
    """
    if not api_key:
        raise ConfigurationError("Server configuration error: YOUTUBE_API_KEY is not set")

    title = fetch_playlist_title(playlist_id, api_key)

    video_ids = fetch_video_ids(playlist_id, api_key)
    if not video_ids:
        raise EmptyPlaylistError("Playlist is empty")

    videos = fetch_videos(video_ids, api_key)
    if not videos:
        raise EmptyPlaylistError("Playlist has no available videos")

    return Playlist(id=playlist_id, title=title, videos=videos)
