"""
__main__.py
-----------
Run the credit model from the command line.

Usage
-----
    python -m credit_model                      # seed deal
    python -m credit_model deal_model.json      # assumptions block or saved-model envelope
    python -m credit_model deal_model.json --strict --json
"""

import argparse
import json
import logging
import sys

import pandas as pd

from credit_model.analysis.credit_metrics import covenant_headroom_df
from credit_model.analysis.scenarios import run_scenarios
from credit_model.model.assumptions import AssumptionsError, base_case
from credit_model.model.payload import (
    assumptions_from_dict,
    assumptions_from_model_payload,
    result_to_dict,
)
from credit_model.model.projection import run_projection
from credit_model.model.statements import (
    cash_flow_df,
    credit_summary_df,
    debt_schedule_df,
    income_statement_df,
)


def load_assumptions(path: str):
    with open(path, "r", encoding="utf-8") as fh:
        payload = json.load(fh)
    if isinstance(payload, dict) and "assumptions" in payload:
        return assumptions_from_model_payload(payload)
    return assumptions_from_dict(payload)


def _print_section(title: str, df: pd.DataFrame) -> None:
    print(f"\n{title}\n{'-' * len(title)}")
    print(df.to_string())


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="credit_model",
        description="Five-year leveraged-finance projection for a single senior tranche.",
    )
    parser.add_argument("path", nargs="?", help="JSON assumptions file (default: seed deal)")
    parser.add_argument("--strict", action="store_true",
                        help="reject per-year arrays that are not exactly five long")
    parser.add_argument("--json", action="store_true", help="print the result as JSON")
    parser.add_argument("--scenarios", action="store_true",
                        help="also print the downside / base / upside comparison")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        assumptions = load_assumptions(args.path) if args.path else base_case()
        result = run_projection(assumptions, strict=args.strict)
        scenarios = run_scenarios(assumptions, strict=args.strict) if args.scenarios else None
    except AssumptionsError as exc:
        for problem in exc.errors:
            print(f"invalid assumptions: {problem}", file=sys.stderr)
        return 2
    except (OSError, json.JSONDecodeError) as exc:
        print(f"could not read {args.path}: {exc}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(result_to_dict(result), indent=2))
        return 0

    with pd.option_context("display.float_format", "{:,.2f}".format, "display.width", 160):
        _print_section("Income Statement", income_statement_df(result))
        _print_section("Cash Flow", cash_flow_df(result))
        _print_section("Debt Schedule", debt_schedule_df(result))
        _print_section("Credit Metrics", credit_summary_df(result))
        _print_section("Covenants", covenant_headroom_df(result))
        if scenarios:
            _print_section("Scenarios", scenarios["comparison_df"])

    s = result.summary
    print(f"\nEntry leverage {s.entry_leverage:.2f}x -> exit {s.exit_leverage:.2f}x | "
          f"paydown {s.total_paydown:,.0f} ({s.paydown_pct:.1f}%) | avg DSCR {s.average_dscr:.2f}x")
    return 0


if __name__ == "__main__":
    sys.exit(main())
