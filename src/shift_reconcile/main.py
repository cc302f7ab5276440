"""
Main entry point for the schedule reconciliation CLI.
"""

import sys
import json
import argparse

from .aggregator import MonthlyAggregator
from .builder import ShiftRecordBuilder
from .config import ConfigLoader
from .diff import DiffEngine
from .errors import (
    ConfigurationError,
    InvalidDate,
    InvalidDayOfMonth,
    InvalidTimeFormat,
    StoreError,
)
from .exporters import DifferencesCSVExporter, MonthlySummaryCSVExporter
from .merge import MergeApplier
from .models import ReconcileConfig
from .reporter import ReconciliationReporter
from .schedule import restrict_to_employee, slot_map
from .store import JsonScheduleStore, differences_to_json, load_entries


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shift-reconcile",
        description="Reconcile an authoritative shift schedule with extracted shifts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show differences for one employee's extracted report
  shift-reconcile compare schedule.json report.json --month 1 --year 2024 --employee A

  # Import two of the reported differences
  shift-reconcile import schedule.json report.json --month 1 --year 2024 \\
      --employee A --select 2024-01-08-morning --select 2024-01-09-evening

  # Monthly hours for an employee, exported to CSV
  shift-reconcile summary schedule.json --employee A --export-csv summary.csv
        """,
    )
    parser.add_argument("--config", type=str, help="Path to YAML configuration file")

    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("compare", "Compare extracted shifts against the schedule"),
        ("import", "Apply selected differences to the schedule"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("store", type=str, help="Path to the schedule JSON file")
        cmd.add_argument("entries", type=str, help="Path to extracted entries JSON file")
        cmd.add_argument("--month", type=int, help="Month of the entries (1-12)")
        cmd.add_argument("--year", type=int, help="Year of the entries")
        cmd.add_argument("--employee", type=str, help="Employee the entries belong to")
        cmd.add_argument("--export-csv", type=str, help="Export differences to CSV file")

    sub.choices["compare"].add_argument(
        "--json", type=str, help="Write differences as JSON to this file"
    )
    select = sub.choices["import"].add_mutually_exclusive_group(required=True)
    select.add_argument(
        "--select", action="append", default=[], help="Difference id to apply (repeatable)"
    )
    select.add_argument(
        "--all", action="store_true", help="Apply every added/changed difference"
    )

    summary = sub.add_parser("summary", help="Monthly shift summary for an employee")
    summary.add_argument("store", type=str, help="Path to the schedule JSON file")
    summary.add_argument("--employee", type=str, required=True, help="Employee id")
    summary.add_argument("--export-csv", type=str, help="Export contributing shifts to CSV")

    return parser


def _load_config(path: str | None) -> ReconcileConfig:
    if not path:
        return ReconcileConfig()
    loader = ConfigLoader(path)
    config = loader.load()
    print("✓ Configuration loaded successfully")
    print(loader.get_summary())
    print()
    return config


def _context_value(cli_value, payload, key):
    """Command-line value if given, else the entries file's."""
    return cli_value if cli_value is not None else payload.get(key)


def _as_int(value, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be an integer, got: {value!r}") from None


def _compare(args, config: ReconcileConfig, reporter: ReconciliationReporter):
    """Build the external schedule and diff it against the store."""
    payload = load_entries(args.entries)
    month = _context_value(args.month, payload, "month")
    year = _context_value(args.year, payload, "year")
    employee = _context_value(args.employee, payload, "employee")
    if month is None or year is None or not employee:
        raise ConfigurationError(
            "month, year and employee must be given on the command line "
            "or in the entries file"
        )

    build = ShiftRecordBuilder(config).build_report(
        payload["entries"], _as_int(month, "month"), _as_int(year, "year"), str(employee)
    )
    print(f"✓ Built {len(slot_map(build.schedule))} shifts for {employee} "
          f"({build.skipped} incomplete entries skipped)")
    reporter.print_collisions(build.collisions)

    store = JsonScheduleStore(args.store)
    authoritative = store.get()
    differences = DiffEngine(config).compare(
        restrict_to_employee(authoritative, str(employee)), build.schedule
    )
    return store, authoritative, build.schedule, str(employee), differences


def run_compare(args, config: ReconcileConfig) -> int:
    reporter = ReconciliationReporter(config)
    _, _, _, _, differences = _compare(args, config, reporter)

    reporter.print_differences(differences)

    if args.export_csv:
        DifferencesCSVExporter(differences, config).export(args.export_csv)
    if args.json:
        with open(args.json, "w", encoding="utf-8") as f:
            json.dump(differences_to_json(differences, config.day_names), f,
                      indent=2, ensure_ascii=False)
        print(f"\n✓ Differences written to {args.json}")
    return 0


def run_import(args, config: ReconcileConfig) -> int:
    reporter = ReconciliationReporter(config)
    store, authoritative, external, employee, differences = _compare(args, config, reporter)

    selected = {d.id for d in differences} if args.all else set(args.select)
    unknown = selected - {d.id for d in differences}
    for diff_id in sorted(unknown):
        print(f"Warning: no difference with id '{diff_id}'", file=sys.stderr)

    result = MergeApplier().apply(authoritative, differences, selected)
    for diff_id in result.skipped_ids:
        print(f"Skipped {diff_id}: removed shifts are never imported")

    if result.applied_count == 0:
        print("No shifts imported. They may already be up to date.")
        return 0

    store.put(result.updated)
    print(f"✓ Imported {result.applied_count} shifts into {args.store}")

    remaining = DiffEngine(config).compare(
        restrict_to_employee(result.updated, employee), external
    )
    reporter.print_differences(remaining)

    if args.export_csv:
        DifferencesCSVExporter(remaining, config).export(args.export_csv)
    return 0


def run_summary(args, config: ReconcileConfig) -> int:
    schedule = JsonScheduleStore(args.store, strict=False).get()
    summaries = MonthlyAggregator().aggregate(schedule, args.employee)

    ReconciliationReporter(config).print_monthly_summary(summaries, args.employee)

    if args.export_csv:
        MonthlySummaryCSVExporter(summaries, config).export(args.export_csv)
    return 0


COMMANDS = {
    "compare": run_compare,
    "import": run_import,
    "summary": run_summary,
}


def main(argv=None):
    """Main entry point for the CLI."""
    args = build_parser().parse_args(argv)

    try:
        config = _load_config(args.config)
        sys.exit(COMMANDS[args.command](args, config))

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    except (InvalidDate, InvalidDayOfMonth) as e:
        print(f"Date Error: {e}", file=sys.stderr)
        print("\n Tip: Use ISO 8601 format (YYYY-MM-DD) for all dates.", file=sys.stderr)
        sys.exit(1)

    except InvalidTimeFormat as e:
        print(f"Time Format Error: {e}", file=sys.stderr)
        print("\n Tip: Use HH:MM or HH:MM:SS (24-hour) for shift times.", file=sys.stderr)
        sys.exit(1)

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        sys.exit(1)

    except StoreError as e:
        print(f"Store Error: {e}", file=sys.stderr)
        sys.exit(1)

    except ValueError as e:
        print(f"Validation Error: {e}", file=sys.stderr)
        sys.exit(1)

    except Exception as e:
        print(f"Unexpected Error: {e}", file=sys.stderr)
        import traceback

        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
