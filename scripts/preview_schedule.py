#!/usr/bin/env python3
"""
Monthly Payment Schedule Preview

Builds the schedule a contract would get, without touching the database.

Usage:
    python scripts/preview_schedule.py 2024-01-15 2024-04-15 12000
    python scripts/preview_schedule.py 2024-01-31 2024-12-31 10000.01 --as-of 2024-06-01
    python scripts/preview_schedule.py 2024-01-15 2024-04-15 12000 --json

Arguments:
    start_date: First day covered by the contract (YYYY-MM-DD)
    end_date: Last day covered by the contract (YYYY-MM-DD)
    total_value: Contract total
    --as-of: Date used to derive overdue rows (default: today)
    --json: Output raw JSON instead of formatted text
"""
import argparse
import json
import os
import sys
from datetime import date
from decimal import Decimal, InvalidOperation

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from domain.exceptions import ValidationError
from domain.services import build_schedule, summarize_payments


def format_result(payments, summary, as_of: date) -> str:
    """Format schedule for human-readable output."""
    lines = []

    lines.append("=" * 60)
    lines.append("MONTHLY PAYMENT SCHEDULE")
    lines.append("=" * 60)

    lines.append(f"\n{'Period':<10}{'Due date':<14}{'Amount':>14}  Status")
    for p in payments:
        lines.append(f"{p.reference_period:<10}{p.due_date.isoformat():<14}{p.amount:>14,.2f}  {p.effective_status(as_of)}")

    lines.append("\n--- Summary ---")
    lines.append(f"Months: {summary['total_months']}")
    lines.append(f"Total: {summary['total_amount']:,.2f}")
    lines.append(f"Overdue as of {as_of.isoformat()}: {summary['overdue_months']}")

    lines.append("\n" + "=" * 60)

    return "\n".join(lines)


def main():
    parser = argparse.ArgumentParser(
        description="Preview the monthly payment schedule of a contract"
    )
    parser.add_argument("start_date", type=date.fromisoformat, help="First day covered (YYYY-MM-DD)")
    parser.add_argument("end_date", type=date.fromisoformat, help="Last day covered (YYYY-MM-DD)")
    parser.add_argument("total_value", help="Contract total")
    parser.add_argument(
        "--as-of",
        type=date.fromisoformat,
        default=None,
        help="Date used to derive overdue rows (default: today)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output raw JSON"
    )

    args = parser.parse_args()

    try:
        total_value = Decimal(args.total_value)
    except InvalidOperation:
        print(f"Error: Invalid total value: {args.total_value}")
        sys.exit(1)

    try:
        payments = build_schedule("preview", args.start_date, args.end_date, total_value)
    except ValidationError as e:
        print(f"Error: {e}")
        sys.exit(1)

    as_of = args.as_of or date.today()
    summary = summarize_payments(payments, as_of)

    if args.json:
        output = {
            "payments": [
                {
                    "reference_period": p.reference_period,
                    "due_date": p.due_date.isoformat(),
                    "amount": str(p.amount),
                    "status": p.effective_status(as_of),
                }
                for p in payments
            ],
            "summary": summary,
        }
        print(json.dumps(output, indent=2, default=str))
    else:
        print(format_result(payments, summary, as_of))


if __name__ == "__main__":
    main()
