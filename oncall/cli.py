"""Command-line interface for the on-call scheduler."""

from __future__ import annotations

import argparse
import logging
import sys

import pandas as pd

from .config import SchedulerConfig, load_config
from .domain.errors import SchedulerError
from .engine.orchestrator import OnCallScheduler
from .io.export_csv import export_schedule_csv, export_when_to_work_csv
from .io.import_csv import import_preferences_csv, import_roster_csv
from .validator import summarize_schedule, validate_schedule, validate_schedule_frame


def _print_warnings(warnings: list[str], limit: int = 5) -> None:
    for w in warnings[:limit]:
        print(f"[WARN] {w}")
    if len(warnings) > limit:
        print(f"[WARN] ...and {len(warnings) - limit} more")


def _cmd_generate(args: argparse.Namespace) -> None:
    try:
        cfg = load_config(args.config) if args.config else SchedulerConfig()
        scheduler = OnCallScheduler(cfg)
        if args.primary is not None or args.secondary is not None:
            scheduler.set_shift_counts(
                args.primary if args.primary is not None else cfg.primary_count,
                args.secondary if args.secondary is not None else cfg.secondary_count,
            )

        roster_result = import_roster_csv(scheduler.roster, args.roster)
        print(f"[INFO] Loaded {roster_result.imported} people from {args.roster}")
        _print_warnings(roster_result.warnings)

        if args.preferences:
            pref_result = import_preferences_csv(scheduler.roster, args.preferences)
            print(f"[INFO] Imported {pref_result.imported} preference rows")
            _print_warnings(pref_result.warnings)

        scheduler.set_date_range(args.start, args.end)
        result = scheduler.generate_schedule()
    except SchedulerError as e:
        print(f"[ERROR] Scheduling failed: {e}")
        raise SystemExit(1)

    try:
        validate_schedule(result.schedule, scheduler.people)
    except ValueError as e:
        print(f"[WARN] {e}")

    export_schedule_csv(result.schedule, args.out)
    print(f"[OK] Schedule written to {args.out}")
    if args.w2w_out:
        export_when_to_work_csv(
            result.schedule, args.when_to_work or cfg.team_name, cfg.shift_start, args.w2w_out
        )
        print(f"[OK] WhenToWork export written to {args.w2w_out}")

    overrides = sum(1 for s in result.schedule if s.coverage_override)
    if overrides:
        print(f"[WARN] {overrides} slot(s) assigned despite unavailable dates")
    print(f"[INFO] Fairness score: {result.fairness_report.fairness_score}")
    print(summarize_schedule(pd.read_csv(args.out)))


def _cmd_validate(args: argparse.Namespace) -> None:
    schedule = pd.read_csv(args.schedule)
    validate_schedule_frame(schedule)
    print("Validation passed.")


def _cmd_summarize(args: argparse.Namespace) -> None:
    schedule = pd.read_csv(args.schedule)
    print(summarize_schedule(schedule))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="oncall")
    parser.add_argument("--verbose", action="store_true", help="Log engine progress")
    sub = parser.add_subparsers(dest="command", required=True)

    g = sub.add_parser("generate", help="Generate a duty schedule")
    g.add_argument("--roster", required=True, help="CSV with name and email columns")
    g.add_argument("--preferences", help="CSV with email, preferred and unavailable columns")
    g.add_argument("--start", required=True)
    g.add_argument("--end", required=True)
    g.add_argument("--config")
    g.add_argument("--primary", type=int)
    g.add_argument("--secondary", type=int)
    g.add_argument("--out", required=True)
    g.add_argument("--when-to-work", dest="when_to_work", help="Team name for the WhenToWork export")
    g.add_argument("--w2w-out", dest="w2w_out")
    g.set_defaults(func=_cmd_generate)

    v = sub.add_parser("validate", help="Validate a schedule CSV")
    v.add_argument("--schedule", required=True)
    v.set_defaults(func=_cmd_validate)

    s = sub.add_parser("summarize", help="Summarize a schedule CSV")
    s.add_argument("--schedule", required=True)
    s.set_defaults(func=_cmd_summarize)

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.INFO, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")
    args.func(args)


if __name__ == "__main__":
    main()
