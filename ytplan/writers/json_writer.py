"""Writer for JSON format."""

import json
from pathlib import Path
from ytplan.models import Plan
from ytplan.plans import plan_to_dict


def write_json(plan: Plan, output_path: Path) -> None:
    """Write a plan to a JSON file."""
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(plan_to_dict(plan), f, indent=2, ensure_ascii=False)
