"""CLI wrapper for the reward queries.

This module provides a command-line interface over ``RewardsService``.
All reward logic is in rewards_core.api and the modules it composes.

Usage:
    rewards-core points --data data/transactions.json
    rewards-core customer u1 --months 6
    rewards-core transactions --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from rewards_core.api import RewardsService
from rewards_core.config import DEFAULT_MONTHS_BACK, RewardsConfig
from rewards_core.exceptions import CustomerNotFoundError, RewardsAPIError
from rewards_core.formatters.console import (
    format_detail_for_console,
    format_points_for_console,
    format_transactions_for_console,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_FOUND = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rewards-core",
        description="Customer reward points over a trailing window.",
    )
    parser.add_argument(
        "--data",
        type=str,
        default="data/transactions.json",
        help="Path to the transactions.json ledger (default: data/transactions.json)",
    )
    parser.add_argument(
        "--months",
        type=int,
        default=DEFAULT_MONTHS_BACK,
        help=f"Lookback window in months (default: {DEFAULT_MONTHS_BACK})",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the API JSON payload instead of a table",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("points", help="Points summary for every customer")
    customer = subparsers.add_parser("customer", help="Transaction history for one customer")
    customer.add_argument("customer_id", help="Customer ID")
    subparsers.add_parser("transactions", help="Every transaction with points, no window")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Returns:
        0 on success, 1 on ledger/config errors, 2 when the customer is not found.
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = RewardsConfig(data_file=Path(args.data), months_back=args.months)
        service = RewardsService.from_config(config)

        if args.command == "points":
            summaries = service.get_customer_points()
            if args.json:
                output = json.dumps([s.to_dict() for s in summaries], indent=2)
            else:
                output = format_points_for_console(summaries, config.months_back)
        elif args.command == "customer":
            detail = service.get_customer_transactions(args.customer_id)
            output = json.dumps(detail.to_dict(), indent=2) if args.json else format_detail_for_console(detail)
        else:
            transactions = service.get_all_transactions()
            if args.json:
                output = json.dumps([t.to_dict() for t in transactions], indent=2)
            else:
                output = format_transactions_for_console(transactions)
    except CustomerNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_NOT_FOUND
    except RewardsAPIError as e:
        logger.error("Query failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    print(output)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
