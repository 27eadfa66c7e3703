#!/usr/bin/env python3
"""
Vitals Analytics CLI.

Runs the analytics over a JSON export of measurement records and prints the
results as JSON. The export holds ``sleep``, ``activities`` and
``bloodPressure`` record lists.

Usage:
    vitals-analytics sleep-score export.json --today 2024-03-15
    vitals-analytics stats export.json --domain sleep --range 1m
    vitals-analytics load export.json --days 14
    vitals-analytics streak export.json
    vitals-analytics bp export.json --guideline aha2017
    vitals-analytics health export.json --date 2024-03-15
    vitals-analytics activity export.json --range 1m
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import get_settings
from .dates import filter_by_window, parse_date, resolve_range
from .exceptions import ErrorCode, VitalsAnalyticsError
from .metrics.activity import group_activities_by_day
from .metrics.blood_pressure import (
    BP_GUIDELINES,
    calculate_bp_stats,
    calculate_full_stats,
    get_bp_trend,
    get_guideline,
)
from .metrics.comparison import compare_periods, filter_by_time_of_day
from .metrics.health_score import calculate_health_score
from .metrics.load import calculate_training_load, training_load_series
from .metrics.scoring import daily_sleep_score
from .metrics.sleep import calculate_sleep_stats
from .metrics.streaks import calculate_streak
from .models import HealthExport

logger = logging.getLogger(__name__)


def load_export(path: Path, strict: bool = False) -> HealthExport:
    """Read and parse a JSON export file.

    Raises:
        VitalsAnalyticsError: If the file cannot be read or is not a JSON object
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise VitalsAnalyticsError(
            f"Cannot read export file {path}: {e}",
            code=ErrorCode.VALIDATION_ERROR,
        ) from e
    if not isinstance(data, dict):
        raise VitalsAnalyticsError(
            "Export file must hold a JSON object",
            code=ErrorCode.VALIDATION_ERROR,
        )
    return HealthExport.from_dict(data, strict=strict)


def _reference_day(value: Optional[str]) -> date:
    if value is None:
        return date.today()
    day = parse_date(value)
    if day is None:
        raise VitalsAnalyticsError(
            f"Invalid date '{value}', expected YYYY-MM-DD",
            code=ErrorCode.VALIDATION_ERROR,
        )
    return day


def _range_token(value: str) -> Any:
    return int(value) if value.isdigit() else value


def cmd_sleep_score(args, export: HealthExport, today: date) -> Dict[str, Any]:
    """Score the night logged on --date against all other nights."""
    day = _reference_day(args.date) if args.date else today
    score = daily_sleep_score(day, export.sleep)
    return {
        "date": day.isoformat(),
        "score": score.to_dict() if score else None,
    }


def cmd_stats(args, export: HealthExport, today: date) -> Dict[str, Any]:
    """Current vs previous period statistics for one domain."""
    token = _range_token(args.range)
    if args.domain == "sleep":
        comparison = compare_periods(export.sleep, token, today, calculate_sleep_stats)
    else:
        comparison = compare_periods(export.blood_pressure, token, today, calculate_full_stats)
    return {"domain": args.domain, "range": args.range, **comparison.to_dict()}


def cmd_load(args, export: HealthExport, today: date) -> Dict[str, Any]:
    """Training load on today plus the daily series."""
    state = calculate_training_load(today, export.activities)
    series = training_load_series(export.activities, today, args.days)
    return {
        "date": today.isoformat(),
        "load": state.to_dict(),
        "series": [point.to_dict() for point in series],
    }


def cmd_streak(args, export: HealthExport, today: date) -> Dict[str, Any]:
    """Current weekly activity streak."""
    return {"date": today.isoformat(), **calculate_streak(export.activities, today).to_dict()}


def cmd_bp(args, export: HealthExport, today: date) -> Dict[str, Any]:
    """Blood pressure summary under a guideline."""
    guideline = get_guideline(args.guideline or get_settings().default_bp_guideline)
    readings = filter_by_time_of_day(export.blood_pressure, args.time_of_day)
    comparison = compare_periods(
        readings,
        _range_token(args.range),
        today,
        lambda selected: calculate_bp_stats(selected, guideline.key),
    )
    trend = get_bp_trend(readings)
    return {
        "guideline": guideline.key,
        "range": args.range,
        "time_of_day": args.time_of_day,
        **comparison.to_dict(),
        "trend": trend.to_dict() if trend else None,
    }


def cmd_health(args, export: HealthExport, today: date) -> Dict[str, Any]:
    """Composite health score for one day."""
    day = _reference_day(args.date) if args.date else today
    readings = [r for r in export.blood_pressure if r.date == day]
    nights = [e for e in export.sleep if e.date == day]
    score = calculate_health_score(readings, nights, export.sleep)
    return {"date": day.isoformat(), **score.to_dict()}


def cmd_activity(args, export: HealthExport, today: date) -> Dict[str, Any]:
    """Daily activity scores over a range."""
    window = resolve_range(_range_token(args.range), today)
    days = group_activities_by_day(filter_by_window(export.activities, window), export.activities)
    return {
        "range": args.range,
        "window": window.to_dict(),
        "days": [day.to_dict() for day in days],
    }


COMMANDS = {
    "sleep-score": cmd_sleep_score,
    "stats": cmd_stats,
    "load": cmd_load,
    "streak": cmd_streak,
    "bp": cmd_bp,
    "health": cmd_health,
    "activity": cmd_activity,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vitals-analytics",
        description="Vitals Analytics - personal sleep, activity and blood pressure analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  vitals-analytics sleep-score export.json --today 2024-03-15
  vitals-analytics stats export.json --domain bp --range 3m
  vitals-analytics load export.json --days 14
  vitals-analytics streak export.json
  vitals-analytics health export.json
        """,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("export", type=Path, help="JSON export file")
    common.add_argument("--today", help="Reference day (YYYY-MM-DD), defaults to the current date")
    common.add_argument("--strict", action="store_true", help="Fail on invalid records instead of skipping them")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Sleep score command
    score_p = subparsers.add_parser("sleep-score", parents=[common], help="Score one night")
    score_p.add_argument("--date", help="Night to score (YYYY-MM-DD), defaults to --today")

    # Stats command
    stats_p = subparsers.add_parser("stats", parents=[common], help="Period statistics")
    stats_p.add_argument("--domain", choices=["sleep", "bp"], default="sleep", help="Data domain")
    stats_p.add_argument("--range", "-r", default="1w", help="Range: 1w, 1m, 3m, all or a day count")

    # Load command
    load_p = subparsers.add_parser("load", parents=[common], help="Training load")
    load_p.add_argument("--days", "-d", type=int, default=7, help="Number of days in the series")

    # Streak command
    subparsers.add_parser("streak", parents=[common], help="Weekly activity streak")

    # BP command
    bp_p = subparsers.add_parser("bp", parents=[common], help="Blood pressure summary")
    bp_p.add_argument("--guideline", "-g", choices=sorted(BP_GUIDELINES), help="Classification guideline")
    bp_p.add_argument("--range", "-r", default="1m", help="Range: 1w, 1m, 3m, all or a day count")
    bp_p.add_argument(
        "--time-of-day",
        choices=["all", "morning", "afternoon", "evening"],
        default="all",
        help="Only use readings taken at this time of day",
    )

    # Health command
    health_p = subparsers.add_parser("health", parents=[common], help="Composite health score")
    health_p.add_argument("--date", help="Day to score (YYYY-MM-DD), defaults to --today")

    # Activity command
    activity_p = subparsers.add_parser("activity", parents=[common], help="Daily activity scores")
    activity_p.add_argument("--range", "-r", default="1w", help="Range: 1w, 1m, 3m, all or a day count")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return 1

    try:
        today = _reference_day(args.today)
        export = load_export(args.export, strict=args.strict)
        result = command(args, export, today)
    except VitalsAnalyticsError as e:
        logger.debug(f"{args.command} failed: {e!r}")
        print(json.dumps(e.to_dict(), indent=2), file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
