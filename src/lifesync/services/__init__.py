"""Service module exports."""

from . import amortization, debts, export_csv, import_csv, liabilities, reports

__all__ = [
    "amortization",
    "debts",
    "export_csv",
    "import_csv",
    "liabilities",
    "reports",
]
