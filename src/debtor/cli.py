from __future__ import annotations

import argparse
import sys
import time
from typing import Optional, Sequence

from debtor.config import get_settings
from debtor.ledger import open_ledger, read_ledger, write_plan
from debtor.logging import configure_logging, get_logger
from debtor.models import Intractable, MalformedRecord
from debtor.services.balances import aggregate_balances
from debtor.services.mode import SolveMode
from debtor.services.plan import compute_plan


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="debtor",
        description="Compute the fewest transfers that settle a ledger of historical transactions.",
    )
    parser.add_argument("path", metavar="PATH", help="the ledger containing historical transactions ('-' for stdin)")
    modes = parser.add_mutually_exclusive_group()
    modes.add_argument(
        "-a", "--approx", dest="mode", action="store_const", const=SolveMode.APPROX,
        help="guarantee a fast solution (may be suboptimal)",
    )
    modes.add_argument(
        "-x", "--exact", dest="mode", action="store_const", const=SolveMode.EXACT,
        help="guarantee an exact solution (may be slow)",
    )
    parser.add_argument(
        "-t", "--threshold", type=positive_int, default=None,
        help="largest number of unsettled people solved exactly by default",
    )
    parser.add_argument("-v", dest="verbosity", action="count", default=0, help="increase the level of verbosity")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(args.verbosity, settings.log_format)
    log = get_logger(__name__)

    forced = args.mode or settings.mode
    threshold = args.threshold if args.threshold is not None else settings.exact_threshold

    try:
        started = time.perf_counter()
        with open_ledger(args.path) as stream:
            balances = aggregate_balances(read_ledger(stream))
        log.info("ledger.read", path=args.path, seconds=round(time.perf_counter() - started, 3))

        plan = compute_plan(balances, forced=forced, threshold=threshold)
    except MalformedRecord as exc:
        print(f"debtor: {args.path}: {exc}", file=sys.stderr)
        return 1
    except Intractable as exc:
        print(f"debtor: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"debtor: {exc}", file=sys.stderr)
        return 1

    write_plan(plan.transactions, sys.stdout)
    log.info("plan.written", transactions=len(plan), mode=plan.mode.value)
    return 0


def run() -> None:
    sys.exit(main())
