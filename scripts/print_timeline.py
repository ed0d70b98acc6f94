#!/usr/bin/env python3
"""
Print a training-cycle timeline from an exported payload.

Usage:
    python scripts/print_timeline.py payload.json --start 2024-01-01 --end 2024-01-31
    python scripts/print_timeline.py payload.json --start 2024-01-01 --end 2024-01-31 --json

The payload holds {"matches": [...], "training_sessions": [...]}.
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from trainingcycle.errors import ParseError
from trainingcycle.timeline import timeline_from_payload, to_records
from trainingcycle.timeline.formatters import format_date_display, format_day_label


def format_line(entry) -> str:
    badge = format_day_label(entry.daysBeforeMatch) or ''
    return f"{format_date_display(entry.date)}  {badge:<5} {entry.label}"


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Print a player's training-cycle timeline")
    parser.add_argument('payload', help='JSON file with matches and training_sessions')
    parser.add_argument('--start', required=True, help='Window start (YYYY-MM-DD)')
    parser.add_argument('--end', required=True, help='Window end (YYYY-MM-DD)')
    parser.add_argument('--json', action='store_true', help='Print JSON records instead of text')
    args = parser.parse_args(argv)

    try:
        with open(args.payload, 'r', encoding='utf-8') as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"ERROR: Could not read {args.payload}: {e}", file=sys.stderr)
        return 1
    if not isinstance(payload, dict):
        print(f"ERROR: {args.payload} must contain a JSON object", file=sys.stderr)
        return 1

    try:
        entries = timeline_from_payload(payload, args.start, args.end)
    except ParseError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(to_records(entries), indent=2, ensure_ascii=False))
        return 0

    if not entries:
        print("No training sessions or matches found in this period")
        return 0

    for entry in entries:
        print(format_line(entry))
    return 0


if __name__ == '__main__':
    sys.exit(main())
