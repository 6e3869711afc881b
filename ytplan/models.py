"""Data models for playlists, videos and day-wise watch plans."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Video:
    """A single playlist video."""
    id: str
    title: str
    duration_minutes: float  # Total length in minutes


@dataclass
class Segment:
    """A slice of one video assigned to one day."""
    video_id: str
    title: str
    start_offset: float     # Minutes into the video where watching starts
    end_offset: float       # Minutes into the video where watching stops
    video_duration: float   # Full length of the video in minutes

    @property
    def duration(self) -> float:
        return self.end_offset - self.start_offset

    @property
    def starts_at_beginning(self) -> bool:
        return self.start_offset <= 0

    @property
    def ends_at_end(self) -> bool:
        return self.end_offset >= self.video_duration

    @property
    def is_partial(self) -> bool:
        """True if the segment does not cover the whole video."""
        return not (self.starts_at_beginning and self.ends_at_end)


@dataclass
class Day:
    """One day of the plan."""
    index: int  # 1-based
    segments: list[Segment] = field(default_factory=list)
    completed: bool = False

    @property
    def total_minutes(self) -> float:
        return sum(segment.duration for segment in self.segments)


@dataclass
class Playlist:
    """Playlist metadata with its videos in watch order."""
    id: str
    title: str
    videos: list[Video] = field(default_factory=list)
    url: Optional[str] = None

    @property
    def video_count(self) -> int:
        return len(self.videos)

    @property
    def total_minutes(self) -> float:
        return sum(video.duration_minutes for video in self.videos)


@dataclass
class Plan:
    """A saved watch plan for one playlist."""
    id: str
    title: str
    playlist_id: str
    daily_minutes: float
    created_at: int  # Epoch milliseconds
    playlist_url: str = ""
    total_videos: int = 0
    days: list[Day] = field(default_factory=list)

    @property
    def total_days(self) -> int:
        return len(self.days)
