"""CSV ingestion of debt accounts."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Iterable, Mapping

import pandas as pd

from ..errors import DebtImportError, InvalidDebtInput
from ..logging_config import get_logger
from ..models import DebtAccount, DebtId, ensure_unique_ids

logger = get_logger(__name__)

# Header spellings accepted for each field, checked in order.
COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id", "debt_id", "account_id"),
    "balance": ("balance", "current_balance"),
    "annual_interest_rate": ("annual_interest_rate", "interest_rate", "apr", "rate"),
    "minimum_payment": ("minimum_payment", "min_payment", "minimum"),
    "credit_limit": ("credit_limit", "limit"),
    "name": ("name", "account_name", "label"),
    "debt_type": ("type", "debt_type"),
}

_REQUIRED = ("id", "balance", "annual_interest_rate", "minimum_payment")


@dataclass(slots=True)
class DebtColumnMapping:
    """Maps DebtAccount fields to CSV headers."""

    id: str
    balance: str
    annual_interest_rate: str
    minimum_payment: str
    credit_limit: str | None = None
    name: str | None = None
    debt_type: str | None = None


def normalize_frame(*, file_path: Path, encoding: str = "utf-8") -> pd.DataFrame:
    """Load a CSV file into a DataFrame of strings with consistent column casing."""

    try:
        # Read as text so amounts are parsed by Decimal rather than float.
        frame = pd.read_csv(file_path, encoding=encoding, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError as exc:
        raise DebtImportError(f"{file_path} is empty") from exc
    frame.columns = [str(c).strip().lower() for c in frame.columns]
    return frame


def resolve_mapping(columns: Iterable[str]) -> DebtColumnMapping:
    """Match headers against known aliases; required fields must be present."""

    available = {c.strip().lower() for c in columns}
    resolved: dict[str, str | None] = {}
    for field_name, aliases in COLUMN_ALIASES.items():
        resolved[field_name] = next((a for a in aliases if a in available), None)

    missing = [name for name in _REQUIRED if resolved[name] is None]
    if missing:
        raise DebtImportError(f"Missing required column(s): {', '.join(missing)}")
    return DebtColumnMapping(**resolved)  # type: ignore[arg-type]


def parse_debt_id(raw: str) -> DebtId:
    """Digits become int ids; anything else stays a string."""
    text = raw.strip()
    return int(text) if text.isdigit() else text


def _cell(row: Mapping, column: str | None) -> str:
    if column is None:
        return ""
    value = row.get(column)
    if value is None:
        return ""
    return str(value).strip()


def parse_debt_rows(*, rows: Iterable[Mapping], mapping: DebtColumnMapping) -> list[DebtAccount]:
    """Convert dict-like rows into DebtAccounts.

    Blank optional cells fall back to defaults. Any invalid row stops the
    import with a DebtImportError naming the 1-based data row.
    """

    debts: list[DebtAccount] = []
    for row_number, row in enumerate(rows, start=1):
        try:
            limit = _cell(row, mapping.credit_limit)
            debts.append(
                DebtAccount(
                    id=parse_debt_id(_cell(row, mapping.id)),
                    balance=_cell(row, mapping.balance),
                    annual_interest_rate=_cell(row, mapping.annual_interest_rate),
                    minimum_payment=_cell(row, mapping.minimum_payment),
                    credit_limit=limit or None,
                    name=_cell(row, mapping.name),
                    debt_type=_cell(row, mapping.debt_type),
                )
            )
        except InvalidDebtInput as exc:
            raise DebtImportError(str(exc), row=row_number) from exc

    try:
        ensure_unique_ids(debts)
    except InvalidDebtInput as exc:
        raise DebtImportError(str(exc)) from exc
    return debts


def load_debts_csv(csv_path: Path, *, mapping: DebtColumnMapping | None = None) -> list[DebtAccount]:
    """Parse a debts CSV into DebtAccounts."""

    frame = normalize_frame(file_path=Path(csv_path))
    mapping = mapping or resolve_mapping(frame.columns)
    columns = [getattr(mapping, f.name) for f in fields(mapping)]
    for column in columns:
        if column is not None and column not in frame.columns:
            raise DebtImportError(f"Column {column!r} not found in {csv_path}")

    rows = frame.to_dict(orient="records")
    debts = parse_debt_rows(rows=rows, mapping=mapping)
    logger.info("Debts imported", extra={"path": str(csv_path), "count": len(debts)})
    return debts


__all__ = [
    "COLUMN_ALIASES",
    "DebtColumnMapping",
    "load_debts_csv",
    "normalize_frame",
    "parse_debt_id",
    "parse_debt_rows",
    "resolve_mapping",
]
