"""Print the unified occurrence stream of a calendar view from a state blob."""

from __future__ import annotations

import argparse
import json
import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from timehub_engine.adapters import csv_adapter, json_adapter
from timehub_engine.config import configure_logging
from timehub_engine.unify import unify
from timehub_engine.views import VIEW_MODES, padded_range, view_range
from timehub_engine.weeks import iso_week_number


def main() -> None:
    parser = argparse.ArgumentParser(description="Show the unified calendar of a tracker state file")
    parser.add_argument("--state", required=True, help="Path to the JSON state blob")
    parser.add_argument("--view", choices=VIEW_MODES, default="Week")
    parser.add_argument("--date", type=date.fromisoformat, default=date.today(), help="Selected date (YYYY-MM-DD)")
    parser.add_argument("--course-weeks", choices=["current", "window"], default=None)
    parser.add_argument("--no-padding", action="store_true", help="Do not widen the view window")
    parser.add_argument("--csv", help="Also export the occurrences to this CSV file")
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args()

    configure_logging(args.log_level)

    state = json_adapter.parse(args.state)
    start, end = view_range(args.view, args.date)
    if not args.no_padding:
        start, end = padded_range(start, end)

    occurrences = unify(state, start, end, course_weeks=args.course_weeks)
    report = {
        "view": args.view,
        "iso_week": iso_week_number(args.date),
        "window": {"start": start.isoformat(), "end": end.isoformat()},
        "occurrences": [json_adapter.occurrence_payload(occurrence) for occurrence in occurrences],
    }
    print(json.dumps(report, indent=2))

    if args.csv:
        csv_adapter.write_occurrences(occurrences, args.csv)
        print(f"Saved {len(occurrences)} occurrences to {args.csv}")


if __name__ == "__main__":
    main()
