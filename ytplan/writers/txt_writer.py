"""Writer for the plain-text day-by-day plan."""

from pathlib import Path
from typing import List, Optional
from ytplan.models import Day, Segment
from ytplan.timeconv import format_minutes, format_offset


def format_segment(segment: Segment) -> str:
    """
    One line per segment.

    Format: • title (start - end) [duration]
    The range is only shown for partial segments.
    """
    text = f"• {segment.title}"
    if segment.is_partial:
        start = "0:00" if segment.starts_at_beginning else format_offset(segment.start_offset)
        end = "end" if segment.ends_at_end else format_offset(segment.end_offset)
        text += f" ({start} - {end})"
    text += f" [{format_minutes(segment.duration)}]"
    return text


def render_plan(days: List[Day], title: Optional[str] = None) -> str:
    """Render the whole plan as text."""
    lines = []
    if title:
        lines.append(title)
        lines.append("=" * 60)
        lines.append("")

    for day in days:
        check = "[x]" if day.completed else "[ ]"
        lines.append(f"{check} Day {day.index} - {format_minutes(day.total_minutes)}")
        for segment in day.segments:
            lines.append(f"    {format_segment(segment)}")
        lines.append("")

    return "\n".join(lines)


def write_txt(days: List[Day], output_path: Path, title: Optional[str] = None) -> None:
    """Write the plan to a TXT file."""
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(render_plan(days, title))
