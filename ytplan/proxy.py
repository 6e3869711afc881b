"""Caching and rate limiting in front of the playlist fetcher.

All state lives on explicit objects created per process (or per test), each
with an injectable clock and backing dict.
"""

import logging
import threading
import time
from typing import Any, Callable, Dict, List, Optional

from ytplan.config import Config
from ytplan.errors import InvalidPlaylistError, RateLimitExceededError
from ytplan.fetcher import fetch_playlist, is_valid_playlist_id
from ytplan.models import Playlist

logger = logging.getLogger(__name__)

# Idle clients are purged from the rate limiter every this many checks
PRUNE_EVERY = 100


class TTLCache:
    """Key/value cache whose entries expire ``ttl_seconds`` after being set."""

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        store: Optional[Dict[str, tuple]] = None,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._store = store if store is not None else {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._store.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._store[key]
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        self._store[key] = (self._clock() + self.ttl_seconds, value)

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)


class RateLimiter:
    """Sliding-window request counter per client key."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
        store: Optional[Dict[str, List[float]]] = None,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._store = store if store is not None else {}
        self._checks = 0

    def allow(self, key: str) -> bool:
        """Record a request for ``key``; False if the budget is already used up."""
        now = self._clock()
        window_start = now - self.window_seconds

        requests = [t for t in self._store.get(key, []) if t > window_start]
        allowed = len(requests) < self.max_requests
        if allowed:
            requests.append(now)
        self._store[key] = requests

        self._checks += 1
        if self._checks % PRUNE_EVERY == 0:
            self.prune()

        return allowed

    def prune(self) -> None:
        """Drop timestamps outside the window and clients with none left."""
        window_start = self._clock() - self.window_seconds
        for key in list(self._store):
            active = [t for t in self._store[key] if t > window_start]
            if active:
                self._store[key] = active
            else:
                del self._store[key]

    def __len__(self) -> int:
        return len(self._store)


def playlist_payload(playlist: Playlist) -> Dict[str, Any]:
    """Wire format returned by the playlist-info endpoint."""
    return {
        'title': playlist.title,
        'videoCount': playlist.video_count,
        'videos': [
            {
                'id': video.id,
                'title': video.title,
                'durationMinutes': video.duration_minutes,
            }
            for video in playlist.videos
        ],
    }


class PlaylistService:
    """Rate-limited, cached playlist lookups for the HTTP proxy."""

    def __init__(
        self,
        fetch: Callable[[str], Playlist] = fetch_playlist,
        cache: Optional[TTLCache] = None,
        limiter: Optional[RateLimiter] = None,
    ):
        self._fetch = fetch
        self.cache = cache if cache is not None else TTLCache(Config.CACHE_TTL_SECONDS)
        self.limiter = limiter if limiter is not None else RateLimiter(Config.MAX_REQUESTS_PER_MINUTE)
        # Request handlers run in a thread pool; the fetch itself runs unlocked
        self._lock = threading.Lock()

    def playlist_info(self, playlist_id: Optional[str], client_key: str) -> Dict[str, Any]:
        """
        Return playlist metadata for ``playlist_id``.

        Raises:
            RateLimitExceededError: ``client_key`` made too many requests
            InvalidPlaylistError: The id is missing or malformed
        """
        with self._lock:
            allowed = self.limiter.allow(client_key)
        if not allowed:
            raise RateLimitExceededError("Too many requests. Please wait a moment and try again.")

        if not playlist_id:
            raise InvalidPlaylistError("Missing required parameter: playlistId")
        if not is_valid_playlist_id(playlist_id):
            raise InvalidPlaylistError("Invalid playlist ID format")

        cache_key = f"playlist_{playlist_id}"
        with self._lock:
            cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info("Cache hit for playlist: %s", playlist_id)
            return cached

        logger.info("Fetching playlist: %s", playlist_id)
        payload = playlist_payload(self._fetch(playlist_id))
        with self._lock:
            self.cache.set(cache_key, payload)
        return payload
