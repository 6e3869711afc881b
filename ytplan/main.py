"""Interactive main entry point for the playlist planner."""

import re
import sys
from pathlib import Path
from typing import Optional
from ytplan.client import load_playlist
from ytplan.config import Config
from ytplan.errors import InvalidInputError
from ytplan.models import Plan, Playlist
from ytplan.plans import PlanStore, current_day, progress_percentage
from ytplan.scheduler import schedule
from ytplan.timeconv import format_minutes
from ytplan.writers.json_writer import write_json
from ytplan.writers.txt_writer import render_plan, write_txt


def slugify(text: str) -> str:
    """Convert a playlist title to a filesystem-safe folder name."""
    if not text:
        return ""
    text = text.replace(': ', ' - ').replace(':', '-')
    text = re.sub(r'[<>"/\\|?*]', '', text)
    text = re.sub(r'\s+', ' ', text)
    return text.strip()[:80]


def get_output_dir(playlist_id: str, title: Optional[str] = None) -> Path:
    """Export folder for a playlist, named after its title with the id as suffix."""
    slug = slugify(title) if title else ""
    folder_name = f"{slug} - {playlist_id}" if slug else playlist_id
    return Config.OUT_DIR / folder_name


def ask_daily_minutes() -> Optional[float]:
    raw = input("How many minutes can you watch per day? ").strip()
    try:
        minutes = float(raw)
    except ValueError:
        print("✗ Please enter a number of minutes.")
        return None
    if minutes <= 0:
        print("✗ Please enter a valid daily watch time.")
        return None
    return minutes


def export_plan(plan: Plan) -> Path:
    """Write the TXT and JSON versions of a plan; returns the folder."""
    output_dir = get_output_dir(plan.playlist_id, plan.title)
    output_dir.mkdir(parents=True, exist_ok=True)
    write_txt(plan.days, output_dir / "plan.txt", title=plan.title)
    write_json(plan, output_dir / "plan.json")
    return output_dir


def plan_playlist(url: str, daily_minutes: float, store: PlanStore) -> Plan:
    """
    Fetch a playlist, schedule it and save the plan.

    Args:
        url: YouTube playlist URL or id
        daily_minutes: Minutes available per day
        store: Where the plan is saved

    Returns:
        The saved plan
    """
    playlist: Playlist = load_playlist(url)
    days = schedule(playlist.videos, daily_minutes)
    if not days:
        raise InvalidInputError("Could not generate plan. Please check your inputs.")
    return store.create_plan(playlist, daily_minutes, days)


def show_active_plan(store: PlanStore) -> None:
    plan = store.get_active_plan()
    if plan is None:
        return
    print(f"Active plan: {plan.title}")
    print(f"  Day {current_day(plan)} of {plan.total_days} - {progress_percentage(plan)}% completed")


def main():
    """Interactive main function."""
    print("=" * 60)
    print("YouTube Playlist Planner")
    print("=" * 60)
    print()

    try:
        Config.validate()
    except ValueError as e:
        print(f"✗ Configuration Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    Config.OUT_DIR.mkdir(parents=True, exist_ok=True)
    store = PlanStore(Config.PLANS_FILE)
    show_active_plan(store)

    while True:
        print()
        print("-" * 60)
        url = input("Please paste the URL of the YouTube playlist you want to plan: ").strip()

        if not url:
            print("No URL provided. Exiting...")
            break

        daily_minutes = ask_daily_minutes()
        if daily_minutes is None:
            continue

        print()
        print("Fetching playlist...")
        try:
            plan = plan_playlist(url, daily_minutes, store)
            output_dir = export_plan(plan)

            total = sum(day.total_minutes for day in plan.days)
            print()
            print("=" * 60)
            print(f"✓ {plan.title}: {plan.total_videos} videos, {format_minutes(total)} total")
            print(f"✓ {plan.total_days} days at {format_minutes(daily_minutes)} per day")
            print("=" * 60)
            print(render_plan(plan.days))
            print(f"Files saved to: {output_dir}")
        except Exception as e:
            print()
            print("=" * 60)
            print(f"✗ Failed to plan playlist: {str(e)}")
            print("=" * 60)

        print()
        another = input("Would you like to plan another playlist? (y/n): ").strip().lower()
        if another not in ('y', 'yes'):
            break

    print()
    print("Happy watching!")


if __name__ == "__main__":
    main()
