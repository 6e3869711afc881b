"""Day-wise watch plan generation.

Videos are assigned to days in playlist order. When a video does not fit in
what is left of the current day, the part that fits is watched today and the
rest carries over to the following day(s).
"""

import math
import numbers
from typing import Sequence

from ytplan.errors import InvalidInputError
from ytplan.models import Day, Segment, Video

# Remaining time at or below this many minutes counts as zero. Absorbs float
# drift from chained fractional durations; it is not a clock precision.
EPSILON = 0.01


def _to_minutes(value) -> float:
    """Convert a numeric value to float minutes, rejecting non-numbers."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeError(f"expected a number, got {type(value).__name__}")
    return float(value)


def _validate_videos(videos: Sequence[Video]) -> None:
    for position, video in enumerate(videos):
        try:
            minutes = _to_minutes(video.duration_minutes)
        except TypeError as e:
            raise InvalidInputError(
                f"Video {video.id!r} at position {position} has a non-numeric duration: {e}"
            ) from e
        if not math.isfinite(minutes) or minutes < 0:
            raise InvalidInputError(
                f"Video {video.id!r} at position {position} has invalid duration {video.duration_minutes!r}; "
                "durations must be finite and >= 0"
            )


def _capacity(daily_minutes) -> float:
    try:
        capacity = _to_minutes(daily_minutes)
    except TypeError as e:
        raise InvalidInputError(f"Daily watch time must be a number: {e}") from e
    if math.isnan(capacity):
        raise InvalidInputError("Daily watch time is NaN")
    return capacity


def schedule(videos: Sequence[Video], daily_minutes: float, epsilon: float = EPSILON) -> list[Day]:
    """
    Split a playlist into days of at most ``daily_minutes`` of watching.

    Args:
        videos: Videos in watch order (never reordered or modified)
        daily_minutes: Minutes available per day
        epsilon: Tolerance used to decide "day full" / "video finished"

    Returns:
        Days in order, numbered from 1. Empty when there are no videos or
        the daily time is not a positive finite number.

    Raises:
        InvalidInputError: A video duration is negative, non-finite or not a
            number, or ``daily_minutes`` is NaN or not a number.
    """
    if not videos:
        return []

    _validate_videos(videos)
    capacity = _capacity(daily_minutes)
    if capacity <= 0 or math.isinf(capacity):
        return []

    days: list[Day] = []
    day_index = 1
    day_segments: list[Segment] = []
    day_remaining = capacity
    last = len(videos) - 1
    # Position of the last video with any watch time, -1 if there is none
    last_content = max((i for i, v in enumerate(videos) if float(v.duration_minutes) > 0), default=-1)

    for i, video in enumerate(videos):
        total = float(video.duration_minutes)
        video_remaining = total
        position = 0.0

        # Trailing zero-length videos never open a day of their own: right
        # after the last day closes they join that day.
        if total == 0 and not day_segments and days and i > last_content:
            days[-1].segments.append(Segment(
                video_id=video.id,
                title=video.title,
                start_offset=0.0,
                end_offset=total,
                video_duration=total,
            ))
            continue

        # Every video yields at least one segment, so zero-length videos
        # still show up in the plan.
        while True:
            watchable = min(video_remaining, day_remaining)
            video_remaining -= watchable
            video_done = video_remaining <= epsilon
            # The final segment of a video ends exactly at its duration
            end = total if video_done else position + watchable
            day_segments.append(Segment(
                video_id=video.id,
                title=video.title,
                start_offset=position,
                end_offset=end,
                video_duration=total,
            ))

            day_remaining -= end - position
            position = end

            if day_remaining <= epsilon or (video_done and i == last):
                days.append(Day(index=day_index, segments=day_segments))
                day_index += 1
                day_segments = []
                day_remaining = capacity

            if video_done:
                break

    if day_segments:
        days.append(Day(index=day_index, segments=day_segments))

    return days
