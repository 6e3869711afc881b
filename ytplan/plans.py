"""Saved watch plans, stored as a single JSON document.

Layout::

    {
      "plans": [...],
      "active_plan_id": "plan-..."
    }
"""

import json
import os
import time
import uuid
from pathlib import Path
from typing import Callable, Dict, List, Optional

from ytplan.models import Day, Plan, Playlist, Segment


def segment_to_dict(segment: Segment) -> Dict:
    return {
        'id': segment.video_id,
        'title': segment.title,
        'startOffset': segment.start_offset,
        'endOffset': segment.end_offset,
        'videoDuration': segment.video_duration,
        'duration': segment.duration,
        'isPartial': segment.is_partial,
    }


def segment_from_dict(data: Dict) -> Segment:
    # duration and isPartial are derived, so they are not read back
    return Segment(
        video_id=data['id'],
        title=data.get('title', ''),
        start_offset=data['startOffset'],
        end_offset=data['endOffset'],
        video_duration=data['videoDuration'],
    )


def day_to_dict(day: Day) -> Dict:
    return {
        'day': day.index,
        'videos': [segment_to_dict(segment) for segment in day.segments],
        'totalTime': day.total_minutes,
        'completed': day.completed,
    }


def day_from_dict(data: Dict) -> Day:
    return Day(
        index=data['day'],
        segments=[segment_from_dict(s) for s in data.get('videos', [])],
        completed=bool(data.get('completed', False)),
    )


def plan_to_dict(plan: Plan) -> Dict:
    return {
        'id': plan.id,
        'title': plan.title,
        'playlistId': plan.playlist_id,
        'playlistUrl': plan.playlist_url,
        'totalVideos': plan.total_videos,
        'dailyMinutes': plan.daily_minutes,
        'createdAt': plan.created_at,
        'totalDays': plan.total_days,
        'planData': [day_to_dict(day) for day in plan.days],
    }


def plan_from_dict(data: Dict) -> Plan:
    return Plan(
        id=data['id'],
        title=data.get('title', ''),
        playlist_id=data.get('playlistId', ''),
        playlist_url=data.get('playlistUrl', ''),
        total_videos=data.get('totalVideos', 0),
        daily_minutes=data['dailyMinutes'],
        created_at=data.get('createdAt', 0),
        days=[day_from_dict(d) for d in data.get('planData', [])],
    )


def progress_percentage(plan: Optional[Plan]) -> int:
    """Share of days marked completed, 0-100."""
    if not plan or not plan.days:
        return 0
    completed = sum(1 for day in plan.days if day.completed)
    return round(completed / len(plan.days) * 100)


def current_day(plan: Optional[Plan]) -> int:
    """Index of the first day not yet completed (the last day if all are)."""
    if not plan or not plan.days:
        return 1
    for day in plan.days:
        if not day.completed:
            return day.index
    return plan.days[-1].index


class PlanStore:
    """Multiple saved plans plus the id of the active one."""

    def __init__(self, path: Path, clock: Callable[[], float] = time.time):
        self.path = Path(path)
        self._clock = clock

    def _load(self) -> Dict:
        if not self.path.exists():
            return {'plans': [], 'active_plan_id': None}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, ValueError):
            print(f"⚠ Plan store {self.path} is corrupted, starting fresh")
            return {'plans': [], 'active_plan_id': None}
        if not isinstance(data, dict):
            return {'plans': [], 'active_plan_id': None}
        data.setdefault('plans', [])
        data.setdefault('active_plan_id', None)
        return data

    def _save(self, data: Dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # The store file is only ever replaced whole
        tmp_path = self.path.with_name(self.path.name + '.tmp')
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()

    def _new_id(self) -> str:
        return f"plan-{int(self._clock() * 1000)}-{uuid.uuid4().hex[:9]}"

    def create_plan(self, playlist: Playlist, daily_minutes: float, days: List[Day]) -> Plan:
        """Save a freshly generated plan; the first plan saved becomes active."""
        data = self._load()

        plan = Plan(
            id=self._new_id(),
            title=playlist.title,
            playlist_id=playlist.id,
            playlist_url=playlist.url or '',
            total_videos=playlist.video_count,
            daily_minutes=daily_minutes,
            created_at=int(self._clock() * 1000),
            days=days,
        )
        data['plans'].append(plan_to_dict(plan))
        if not data['active_plan_id']:
            data['active_plan_id'] = plan.id

        self._save(data)
        return plan

    def get_all_plans(self) -> List[Plan]:
        return [plan_from_dict(p) for p in self._load()['plans']]

    def get_plan(self, plan_id: str) -> Optional[Plan]:
        for p in self._load()['plans']:
            if p.get('id') == plan_id:
                return plan_from_dict(p)
        return None

    def get_active_plan(self) -> Optional[Plan]:
        active_id = self._load()['active_plan_id']
        if not active_id:
            return None
        return self.get_plan(active_id)

    def set_active_plan(self, plan_id: str) -> bool:
        data = self._load()
        if not any(p.get('id') == plan_id for p in data['plans']):
            return False
        data['active_plan_id'] = plan_id
        self._save(data)
        return True

    def delete_plan(self, plan_id: str) -> bool:
        data = self._load()
        remaining = [p for p in data['plans'] if p.get('id') != plan_id]
        if len(remaining) == len(data['plans']):
            return False

        data['plans'] = remaining
        if data['active_plan_id'] == plan_id:
            data['active_plan_id'] = remaining[0]['id'] if remaining else None
        self._save(data)
        return True

    def update_days(self, plan_id: str, days: List[Day]) -> bool:
        data = self._load()
        for p in data['plans']:
            if p.get('id') == plan_id:
                p['planData'] = [day_to_dict(day) for day in days]
                p['totalDays'] = len(days)
                self._save(data)
                return True
        return False

    def set_day_completed(self, plan_id: str, day_index: int, completed: bool) -> bool:
        """Mark one day (by its 1-based index) as completed or not."""
        plan = self.get_plan(plan_id)
        if plan is None:
            return False
        for day in plan.days:
            if day.index == day_index:
                day.completed = completed
                return self.update_days(plan_id, plan.days)
        return False

    def clear(self) -> None:
        """Delete every saved plan."""
        if self.path.exists():
            self.path.unlink()
