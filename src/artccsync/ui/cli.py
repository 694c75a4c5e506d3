from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from artccsync.app import (
    ACTIVITY_FULL_JOB,
    ACTIVITY_ONLINE_JOB,
    NO_SHOW_SWEEP_JOB,
    ROSTER_FULL_JOB,
    ROSTER_PARTIAL_JOB,
    SOLO_SWEEP_JOB,
    activity_report,
    run_job,
    run_scheduler,
)
from artccsync.config import configure_logging
from artccsync.domain.time_windows import parse_month_key

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from artccsync.domain.activity_report import ControllerActivity

log = logging.getLogger(__name__)

JOB_COMMANDS: dict[str, str] = {
    ROSTER_FULL_JOB: "Sync the full roster from VATUSA",
    ROSTER_PARTIAL_JOB: "Process queued single-controller roster syncs",
    ACTIVITY_FULL_JOB: "Rebuild controlling activity from the VATSIM stats API",
    ACTIVITY_ONLINE_JOB: "Update this month's activity for controllers online now",
    SOLO_SWEEP_JOB: "Remove expired solo certifications",
    NO_SHOW_SWEEP_JOB: "Remove no-show entries older than six months",
}


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Keep facility records in sync with VATUSA/VATSIM")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("run", help="Run all jobs on their schedules until interrupted")
    for name, help_text in JOB_COMMANDS.items():
        subparsers.add_parser(name, help=help_text)

    report = subparsers.add_parser("report", help="Print the activity report")
    report.add_argument(
        "--month",
        dest="months",
        action="append",
        required=True,
        help="Month as YYYY-MM; repeat for several, most recent first",
    )

    return parser.parse_args(list(argv))


def _print_report(rows: Sequence[ControllerActivity], months: Sequence[str]) -> None:
    header = ["CID", "OI", "Name", *months, "Violation"]
    print("\t".join(header))  # noqa: T201
    for row in rows:
        cells = [
            str(row.cid),
            row.operating_initials or "",
            row.name,
            *(str(minutes) for minutes in row.minutes),
            "yes" if row.violation else "",
        ]
        print("\t".join(cells))  # noqa: T201


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        months: list[str] = []
        if parsed_args.command == "report":
            months = [parse_month_key(value) for value in parsed_args.months]
    except ValueError:
        configure_logging()
        log.exception("CLI validation error")
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.debug else logging.INFO)

    try:
        if parsed_args.command == "run":
            run_scheduler()
        elif parsed_args.command in JOB_COMMANDS:
            run_job(parsed_args.command)
        elif parsed_args.command == "report":
            _print_report(activity_report(months), months)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error in %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
