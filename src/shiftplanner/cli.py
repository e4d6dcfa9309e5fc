"""Command-line interface for the shift planner."""

import argparse
import logging
import sys
from datetime import date, timedelta
from typing import Optional

from shiftplanner.domain.clock import week_start_for
from shiftplanner.domain.models import Schedule, Weekday, Worker
from shiftplanner.errors import SchedulingError
from shiftplanner.output.pdf_generator import PDFGenerator
from shiftplanner.output.text_generator import TextReportGenerator
from shiftplanner.scheduling.scheduler import Scheduler
from shiftplanner.storage.json_store import JsonFileStore
from shiftplanner.storage.repositories import InMemoryWorkerRepository
from shiftplanner.validation.validator import ScheduleValidator, validate_worker

logger = logging.getLogger(__name__)


def create_sample_workers(count: int = 8, week_start: Optional[date] = None) -> list[Worker]:
    """Create sample workers for demos.

    Args:
        count: Number of workers to create.
        week_start: Week used to place a sample holiday. If None, uses the
            current week.
    """
    if week_start is None:
        week_start = week_start_for(date.today())

    names = [
        "Alice", "Bob", "Carol", "David", "Eve", "Frank", "Grace", "Henry",
        "Ivy", "Jack", "Kate", "Leo", "Mia", "Noah", "Olivia", "Paul",
    ]
    percentages = [100, 100, 80, 60, 100, 50, 80, 40]

    workers = []
    for i in range(count):
        name = names[i % len(names)]
        if i >= len(names):
            name = f"{name}{i // len(names) + 1}"

        available = set(Weekday)
        # Some workers have fixed days off
        if i % 4 == 1:
            available -= {Weekday.MONDAY, Weekday.TUESDAY}
        if i % 4 == 3:
            available -= {Weekday.SATURDAY, Weekday.SUNDAY}
        if i % 5 == 2:
            available -= {Weekday.WEDNESDAY}

        holidays = set()
        if i % 6 == 5:
            holidays.add(week_start + timedelta(days=3))

        workers.append(
            Worker(
                id=f"W{i + 1:03d}",
                name=name,
                work_percentage=percentages[i % len(percentages)],
                available_days=available,
                holidays=holidays,
            )
        )

    return workers


def scheduler_for_store(store: JsonFileStore) -> Scheduler:
    """Scheduler backed by a JSON store, using its store hours when it has any."""
    store_hours = store.list_store_hours()
    if store_hours is None:
        return Scheduler(store, store)
    return Scheduler(store, store, store_hours=store_hours)


def print_schedule_report(
    scheduler: Scheduler,
    schedule: Schedule,
    workers: list[Worker],
    output_path: Optional[str] = None,
    text_path: Optional[str] = None,
) -> bool:
    """Print totals and validation, and write the optional PDF and text files.

    Returns:
        True when the schedule passed validation.
    """
    stats = scheduler.get_schedule_stats(schedule)
    hours = scheduler.calculate_weekly_hours(schedule)

    print(f"\nSchedule generated for week of {schedule.week_start}")
    print(f"  Shifts: {stats.assigned_shifts}/{stats.total_shifts} assigned")
    print(f"  Total hours: {stats.total_hours:.1f}")
    print(f"  Workers used: {stats.worker_count} (avg {stats.avg_hours_per_worker:.1f}h)")

    for day in scheduler.consolidate_for_display(schedule, workers):
        for warning in day.coverage_gaps:
            print(f"  {day.weekday} {day.day_date}: {warning}")

    result = ScheduleValidator(scheduler.staffing_policy).validate(
        schedule, {w.id: w for w in workers}
    )
    if result.is_valid:
        print("\n  Validation: PASSED")
    else:
        print(f"\n  Validation: FAILED ({len(result.errors)} errors)")
        for error in result.errors[:5]:
            print(f"    - {error}")
        if len(result.errors) > 5:
            print(f"    ... and {len(result.errors) - 5} more errors")

    if output_path:
        print(f"\nGenerating PDF: {output_path}")
        PDFGenerator().generate(schedule, workers, output_path, weekly_hours=hours)
        print("  PDF created successfully!")

    if text_path:
        TextReportGenerator().generate(schedule, workers, text_path, weekly_hours=hours)
        print(f"  Text report written to {text_path}")

    return result.is_valid


def run_demo(
    worker_count: int = 8,
    week: Optional[str] = None,
    output_path: Optional[str] = None,
    text_path: Optional[str] = None,
) -> int:
    """Run a demo schedule generation with sample workers."""
    week_start = week_start_for(week or date.today())
    print(f"Generating demo schedule for {worker_count} workers...")

    workers = create_sample_workers(worker_count, week_start)
    scheduler = Scheduler(InMemoryWorkerRepository(workers))

    check = scheduler.can_generate_schedule(week_start)
    for issue in check.issues:
        print(f"  Note: {issue}")
    if not check.can_generate:
        return 1

    schedule = scheduler.generate_schedule(week_start)
    print_schedule_report(scheduler, schedule, workers, output_path, text_path)
    return 0


def run_generate(
    input_path: str,
    week: Optional[str] = None,
    output_path: Optional[str] = None,
    text_path: Optional[str] = None,
    save: bool = False,
) -> int:
    """Generate a schedule from a JSON worker file."""
    store = JsonFileStore(input_path)
    workers = store.list_workers()

    invalid = False
    for worker in workers:
        for error in validate_worker(worker, workers):
            print(f"  Worker {worker.id} {error.field}: {error.message}")
            invalid = True
    if invalid:
        logger.warning("Worker data in %s has validation errors", input_path)

    scheduler = scheduler_for_store(store)

    week_start = week_start_for(week or date.today())
    check = scheduler.can_generate_schedule(week_start)
    for issue in check.issues:
        print(f"  Note: {issue}")
    if not check.can_generate:
        return 1

    schedule = scheduler.generate_schedule(week_start)
    print_schedule_report(scheduler, schedule, workers, output_path, text_path)

    if save:
        existing = scheduler.get_schedule_for_week(week_start)
        if not scheduler.save_schedule(schedule):
            print(f"  Could not save schedule to {input_path}")
            return 1
        # The previous week is only dropped once the new one is stored.
        if existing is not None and existing.id != schedule.id:
            scheduler.delete_schedule(existing.id)
        print(f"  Saved schedule {schedule.id} to {input_path}")

    return 0


def run_check(input_path: str, week: Optional[str] = None) -> int:
    """Report staffing issues for a week without generating."""
    scheduler = scheduler_for_store(JsonFileStore(input_path))
    week_start = week_start_for(week or date.today())
    check = scheduler.can_generate_schedule(week_start)

    print(f"Week of {week_start}: {'ready' if check.can_generate else 'cannot generate'}")
    for issue in check.issues:
        print(f"  - {issue}")
    return 0 if check.can_generate else 1


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Shift Planner - Weekly Retail Scheduling Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s demo                            Run demo with 8 sample workers
  %(prog)s demo --count 12 --week 2024-01-01
  %(prog)s demo --output week.pdf          Generate PDF output

  %(prog)s generate --input staff.json     Generate from a worker file
  %(prog)s generate -i staff.json --save   Generate and store the schedule

  %(prog)s check --input staff.json        Report staffing issues only
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Run demo schedule generation")
    demo_parser.add_argument(
        "--count", "-c",
        type=int,
        default=8,
        help="Number of sample workers (default: 8)",
    )

    # Generate command
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate a schedule from a JSON worker file",
    )
    generate_parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="JSON file with workers (and optionally store hours)",
    )
    generate_parser.add_argument(
        "--save",
        action="store_true",
        help="Store the generated schedule in the input file",
    )

    # Check command
    check_parser = subparsers.add_parser("check", help="Check whether a week can be staffed")
    check_parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="JSON file with workers",
    )

    for sub in (demo_parser, generate_parser, check_parser):
        sub.add_argument(
            "--week", "-w",
            type=str,
            help="Any date in the target week, YYYY-MM-DD (default: this week)",
        )
    for sub in (demo_parser, generate_parser):
        sub.add_argument(
            "--output", "-o",
            type=str,
            help="Output PDF file path",
        )
        sub.add_argument(
            "--text", "-t",
            type=str,
            help="Output text report path",
        )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "demo":
            return run_demo(args.count, args.week, args.output, args.text)
        elif args.command == "generate":
            return run_generate(args.input, args.week, args.output, args.text, args.save)
        elif args.command == "check":
            return run_check(args.input, args.week)
        else:
            parser.print_help()
            return 1
    except SchedulingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
