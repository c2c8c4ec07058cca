#!/usr/bin/env python
"""Value an investor's portfolio as of a reference date from the CSV feed."""
from __future__ import annotations

import argparse
import json
import logging
from typing import Callable, Optional, Sequence

from .config import Settings
from .loader import load_ledger
from .logging_utils import configure_logging
from .portfolio import PortfolioAggregator
from .reporting import breakdown_to_dict, render_report
from .validators import MalformedInputError, to_date
from .valuation import ValuationEngine

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MISSING_INPUT = 1
EXIT_MALFORMED_INPUT = 2


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("investor_id", nargs="?", help="Investor to value, e.g. Investor0 (prompted when omitted)")
    parser.add_argument("reference_date", nargs="?", help="Reference date YYYY-MM-DD (prompted when omitted)")
    parser.add_argument("data_dir", nargs="?", help="Directory holding Investments.csv, Transactions.csv and Quotes.csv")
    parser.add_argument("--json", action="store_true", help="Print the breakdown as JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging output")
    return parser.parse_args(args=argv)


def run(argv: Optional[Sequence[str]] = None, input_fn: Callable[[str], str] = input) -> int:
    options = parse_args(argv)
    settings = Settings.load()
    configure_logging(logging.DEBUG if options.verbose else settings.log_level)

    data_dir = options.data_dir or settings.data_dir
    try:
        ledger = load_ledger(data_dir)
        investor_id = (options.investor_id or input_fn("Enter investor id (e.g. Investor0): ")).strip()
        raw_date = options.reference_date or input_fn("Enter reference date (YYYY-MM-DD): ")
        reference_date = to_date(raw_date, "reference_date")
    except MalformedInputError as exc:
        LOGGER.error("%s", exc)
        return EXIT_MALFORMED_INPUT
    except OSError as exc:
        LOGGER.error("Cannot read the feed in %s: %s", data_dir, exc)
        return EXIT_MISSING_INPUT
    except EOFError:
        LOGGER.error("Input ended before an investor id and reference date were given")
        return EXIT_MISSING_INPUT

    engine = ValuationEngine(ledger, fund_share_places=settings.fund_share_places)
    breakdown = PortfolioAggregator(ledger, engine).evaluate(investor_id, reference_date)

    if options.json:
        print(json.dumps(breakdown_to_dict(investor_id, reference_date, breakdown, settings.display_places), indent=2))
    else:
        print()
        print(render_report(investor_id, reference_date, breakdown, settings.display_places))
    return EXIT_OK


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":  # pragma: no cover
    main()
