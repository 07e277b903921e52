"""Command-line interface for the staff rostering engine."""

from __future__ import annotations

import argparse
import logging

from roster.config import load_config
from roster.domain.db import get_session, init_database, reset_database
from roster.domain.repositories import ScheduleRepository, StaffRepository, UnavailabilityRepository
from roster.io.export_csv import export_schedule_csv, export_staff_csv
from roster.io.import_csv import (
    import_schedule_csv,
    import_shift_requests_csv,
    import_staff_csv,
    import_unavailability_csv,
)
from roster.services.scheduling import delete_schedule, generate_schedule
from roster.timekeys import parse_date
from roster.validator import summarize_schedule, validate_schedule


def _setup(args: argparse.Namespace):
    cfg = load_config(getattr(args, "config", None))
    logging.basicConfig(level=cfg.log_level, format="%(levelname)s %(name)s: %(message)s")
    db_url = args.db or cfg.db_url
    return cfg, db_url


def _cmd_init_db(args: argparse.Namespace) -> None:
    """Initialize the database."""
    _, db_url = _setup(args)
    if args.reset:
        reset_database(db_url)
        print(f"[WARN] Database reset: {db_url}")
    else:
        init_database(db_url)
    print(f"[OK] Database initialized: {db_url}")


def _cmd_import_csv(args: argparse.Namespace) -> None:
    """Import CSV data into database."""
    _, db_url = _setup(args)
    session = get_session(db_url)

    try:
        if args.staff:
            count = import_staff_csv(session, args.staff)
            print(f"[OK] Imported {count} staff")

        if args.unavailability:
            count = import_unavailability_csv(session, args.unavailability)
            print(f"[OK] Imported {count} unavailability records")

        if args.requests:
            count = import_shift_requests_csv(session, args.requests)
            print(f"[OK] Imported {count} shift requests")

        if args.schedule:
            count = import_schedule_csv(session, args.schedule)
            print(f"[OK] Imported {count} schedule entries")

        session.close()
        print("[OK] CSV import complete")

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Import failed: {e}")
        raise


def _cmd_generate(args: argparse.Namespace) -> None:
    """Generate the schedule for a date range."""
    cfg, db_url = _setup(args)
    session = get_session(db_url)

    try:
        result = generate_schedule(session, args.start, args.end, cfg, persist=not args.dry_run)

        for shortfall in result.shortfalls:
            print(
                f"[WARN] {shortfall.date} {shortfall.role} ({shortfall.kind}): "
                f"{shortfall.assigned}/{shortfall.target}"
            )
        for outcome in result.unhonored_requests:
            req = outcome.request
            print(f"[INFO] Request not honored: staff {req.staff_id} {req.date} {req.shift} ({outcome.reason})")

        if args.out and not args.dry_run:
            export_schedule_csv(session, args.out, parse_date(args.start), parse_date(args.end))

        session.close()
        print(f"[OK] {result.message} Assigned {result.assigned_shift_count} shifts for {args.start}..{args.end}")

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Generation failed: {e}")
        raise


def _cmd_delete(args: argparse.Namespace) -> None:
    """Delete stored schedule entries in a date range."""
    _, db_url = _setup(args)
    session = get_session(db_url)

    try:
        count = delete_schedule(session, args.start, args.end)
        session.close()
        print(f"[OK] Deleted {count} schedule entries")

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Deletion failed: {e}")
        raise


def _cmd_export(args: argparse.Namespace) -> None:
    """Export data from database to CSV."""
    _, db_url = _setup(args)
    session = get_session(db_url)

    try:
        if args.schedule:
            start = parse_date(args.start) if args.start else None
            end = parse_date(args.end) if args.end else None
            count = export_schedule_csv(session, args.schedule, start, end)
            print(f"[OK] Exported {count} schedule entries to {args.schedule}")

        if args.staff:
            count = export_staff_csv(session, args.staff)
            print(f"[OK] Exported {count} staff to {args.staff}")

        session.close()

    except Exception as e:
        session.close()
        print(f"[ERROR] Export failed: {e}")
        raise


def _load_range(session, start: str, end: str):
    entries = [e.to_record() for e in ScheduleRepository.get_between(session, parse_date(start), parse_date(end))]
    staff = [s.to_record() for s in StaffRepository.get_all(session)]
    return entries, staff


def _cmd_validate(args: argparse.Namespace) -> None:
    """Validate stored schedule entries for a date range."""
    cfg, db_url = _setup(args)
    session = get_session(db_url)

    try:
        entries, staff = _load_range(session, args.start, args.end)
        unavailability = [u.to_record() for u in UnavailabilityRepository.get_all(session)]
        validate_schedule(entries, staff, unavailability, cfg)

        session.close()
        print(f"[OK] Validation passed for {args.start}..{args.end} ({len(entries)} entries)")

    except Exception as e:
        session.close()
        print(f"[ERROR] Validation failed: {e}")
        raise


def _cmd_summarize(args: argparse.Namespace) -> None:
    """Print coverage and hours for a date range."""
    _, db_url = _setup(args)
    session = get_session(db_url)
    try:
        entries, staff = _load_range(session, args.start, args.end)
        print(summarize_schedule(entries, staff))
    finally:
        session.close()


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="roster",
        description="Staff shift rostering: greedy schedule generation with rest and hour rules",
    )

    # Global options
    parser.add_argument("--db", help="Database URL (default: db_url from config, sqlite:///roster.db)")

    sub = parser.add_subparsers(dest="command", required=True)

    # init-db command
    init = sub.add_parser("init-db", help="Initialize database")
    init.add_argument("--config", help="Path to config YAML/JSON")
    init.add_argument("--reset", action="store_true", help="Drop and recreate all tables")
    init.set_defaults(func=_cmd_init_db)

    # import-csv command
    imp = sub.add_parser("import-csv", help="Import CSV data into database")
    imp.add_argument("--config", help="Path to config YAML/JSON")
    imp.add_argument("--staff", help="Path to staff CSV")
    imp.add_argument("--unavailability", help="Path to unavailability CSV")
    imp.add_argument("--requests", help="Path to shift requests CSV")
    imp.add_argument("--schedule", help="Path to existing schedule CSV")
    imp.set_defaults(func=_cmd_import_csv)

    # generate command
    gen = sub.add_parser("generate", help="Generate schedule for a date range")
    gen.add_argument("--start", required=True, help="First date (YYYY-MM-DD)")
    gen.add_argument("--end", required=True, help="Last date, inclusive (YYYY-MM-DD)")
    gen.add_argument("--config", help="Path to config YAML/JSON")
    gen.add_argument("--out", help="Optional: export generated schedule to CSV")
    gen.add_argument("--dry-run", action="store_true", help="Generate without saving")
    gen.set_defaults(func=_cmd_generate)

    # delete command
    dele = sub.add_parser("delete", help="Delete schedule entries in a date range")
    dele.add_argument("--start", required=True)
    dele.add_argument("--end", required=True)
    dele.add_argument("--config", help="Path to config YAML/JSON")
    dele.set_defaults(func=_cmd_delete)

    # export command
    exp = sub.add_parser("export", help="Export data from database to CSV")
    exp.add_argument("--config", help="Path to config YAML/JSON")
    exp.add_argument("--schedule", help="Path to export schedule CSV")
    exp.add_argument("--staff", help="Path to export staff CSV")
    exp.add_argument("--start", help="First date to export (optional)")
    exp.add_argument("--end", help="Last date to export (optional)")
    exp.set_defaults(func=_cmd_export)

    # validate command
    val = sub.add_parser("validate", help="Validate schedule for a date range")
    val.add_argument("--start", required=True)
    val.add_argument("--end", required=True)
    val.add_argument("--config", help="Path to config YAML/JSON")
    val.set_defaults(func=_cmd_validate)

    # summarize command
    summ = sub.add_parser("summarize", help="Summarize schedule for a date range")
    summ.add_argument("--start", required=True)
    summ.add_argument("--end", required=True)
    summ.add_argument("--config", help="Path to config YAML/JSON")
    summ.set_defaults(func=_cmd_summarize)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
