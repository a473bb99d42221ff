"""Run a simulated loto draw from the command line.

Missing options are asked for interactively.

Usage:
  python scripts/run_draw.py --tickets 10000 --date 24-12-2025 --quiet
  python scripts/run_draw.py --tickets 200000 --date 24-12-25 --quiet --workers 4 --seed 42
  python scripts/run_draw.py            # prompts for everything
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from threading import Lock
from collections.abc import Callable, Sequence

from dotenv import load_dotenv
from tqdm import tqdm

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from loto.errors import AppError
from loto.logging_config import configure_logging
from loto.services.report_service import ReportService, format_winning
from loto.services.settlement_service import TICKET_COUNT_MAX, TICKET_COUNT_MIN, SimulationService
from loto.utils.dates import is_valid_draw_date


logger = logging.getLogger(__name__)


def _ask_ticket_count(ask: Callable[[str], str]) -> int:
    while True:
        raw = ask(f"Number of tickets to create ({TICKET_COUNT_MIN} to {TICKET_COUNT_MAX}): ").strip()
        try:
            count = int(raw)
        except ValueError:
            continue
        if TICKET_COUNT_MIN <= count <= TICKET_COUNT_MAX:
            return count


def _ask_draw_date(ask: Callable[[str], str]) -> str:
    while True:
        raw = ask("Draw date (dd-mm-yyyy): ").strip()
        if is_valid_draw_date(raw):
            return raw


def _ask_verbose(ask: Callable[[str], str]) -> bool:
    while True:
        raw = ask("Verbose mode (y/n)? ").strip().lower()
        if raw[:1] in ("y", "o"):
            return True
        if raw[:1] == "n":
            return False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Simulate a loto draw and settle its prize pools")
    parser.add_argument("--tickets", dest="tickets", type=int, default=None)
    parser.add_argument("--date", dest="draw_date", type=str, default=None, help="dd-mm-yyyy or dd-mm-yy")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", dest="verbose", action="store_true", default=None, help="Print every ticket")
    verbosity.add_argument("--quiet", dest="verbose", action="store_false", help="Only print the summary")
    parser.add_argument("--workers", dest="workers", type=int, default=1)
    parser.add_argument("--seed", dest="seed", type=int, default=None)
    parser.add_argument("--log-level", dest="log_level", type=str, default="WARNING")
    return parser


def main(argv: Sequence[str] | None = None, ask: Callable[[str], str] = input) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    print("========== LOTO ==========")
    ticket_count = args.tickets if args.tickets is not None else _ask_ticket_count(ask)
    draw_date = args.draw_date if args.draw_date is not None else _ask_draw_date(ask)
    if not is_valid_draw_date(draw_date):
        logger.error("Invalid draw date: %s", draw_date)
        return 2
    verbose = args.verbose if args.verbose is not None else _ask_verbose(ask)

    service = SimulationService()
    report = ReportService()

    progress = None if verbose else tqdm(total=ticket_count, desc="Tickets", unit="ticket", disable=None)

    progress_lock = Lock()

    def _on_ticket(ticket) -> None:  # type: ignore[no-untyped-def]
        # Shards report from pool threads.
        if progress is not None:
            with progress_lock:
                progress.update(1)

    try:
        result = service.run(
            ticket_count,
            draw_date=draw_date,
            verbose=verbose,
            workers=args.workers,
            seed=args.seed,
            on_ticket=_on_ticket,
        )
    except AppError as exc:
        logger.error("%s: %s (%s)", exc.code, exc.message, exc.details)
        return 2
    finally:
        if progress is not None:
            progress.close()

    if verbose:
        print(format_winning(result.winning))
        print(report.render_tickets(result), end="")

    print(report.render(result), end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
