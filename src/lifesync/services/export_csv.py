"""CSV export helpers for payoff projections."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable

from ..models import DebtSchedule, StrategyResult

SCHEDULE_HEADERS = ["debt_id", "month", "payment", "principal", "interest", "remaining_balance"]
COMPARISON_HEADERS = [
    "strategy",
    "name",
    "total_payments",
    "total_interest",
    "months_to_payoff",
    "interest_saved",
    "complete",
]


def _serialize_value(value):
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def export_schedule_csv(*, schedules: Iterable[DebtSchedule], output_path: Path) -> Path:
    """Write one row per debt per month to ``output_path``.

    Columns are deterministic: debt_id, month, payment, principal, interest,
    remaining_balance. Returns the path written.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(
            fh, fieldnames=SCHEDULE_HEADERS, extrasaction="ignore", quoting=csv.QUOTE_MINIMAL
        )
        writer.writeheader()
        for schedule in schedules:
            for entry in schedule.entries:
                row = {key: _serialize_value(value) for key, value in entry.as_row().items()}
                row["debt_id"] = _serialize_value(schedule.debt_id)
                writer.writerow(row)

    return output_path


def export_comparison_csv(*, results: Iterable[StrategyResult], output_path: Path) -> Path:
    """Write one summary row per strategy to ``output_path``."""

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=COMPARISON_HEADERS, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        for result in results:
            writer.writerow(
                {
                    "strategy": result.strategy.value,
                    "name": result.name,
                    "total_payments": _serialize_value(result.total_payments),
                    "total_interest": _serialize_value(result.total_interest),
                    "months_to_payoff": _serialize_value(result.months_to_payoff),
                    "interest_saved": _serialize_value(result.interest_saved),
                    "complete": _serialize_value(result.is_complete),
                }
            )

    return output_path


__all__ = ["COMPARISON_HEADERS", "SCHEDULE_HEADERS", "export_comparison_csv", "export_schedule_csv"]
