"""Tests for loading debts from CSV files."""

from __future__ import annotations

from decimal import Decimal

import pytest

from lifesync.errors import DebtImportError
from lifesync.models import DebtType
from lifesync.services.import_csv import (
    DebtColumnMapping,
    load_debts_csv,
    normalize_frame,
    parse_debt_id,
    parse_debt_rows,
    resolve_mapping,
)


def _write(tmp_path, text, name="debts.csv"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_load_demo_portfolio(debts_csv):
    debts = load_debts_csv(debts_csv)

    assert [d.id for d in debts] == [1, 2, 3]
    visa, store, loan = debts
    assert visa.balance == Decimal("5420.50")
    assert visa.annual_interest_rate == Decimal("18.99")
    assert visa.credit_limit == Decimal("8000.00")
    assert store.debt_type is DebtType.CREDIT_CARD
    assert loan.credit_limit is None
    assert loan.debt_type is DebtType.STUDENT_LOAN
    assert loan.name == "Student Loan"


def test_headers_are_normalized(tmp_path):
    path = _write(tmp_path, " ID ,Balance,Interest_Rate,Min_Payment\nabc,100,5,10\n")

    frame = normalize_frame(file_path=path)
    debts = load_debts_csv(path)

    assert list(frame.columns) == ["id", "balance", "interest_rate", "min_payment"]
    assert debts[0].id == "abc"
    assert debts[0].debt_type is DebtType.OTHER


def test_resolve_mapping_prefers_first_alias():
    mapping = resolve_mapping(["id", "balance", "apr", "rate", "minimum"])

    assert mapping.annual_interest_rate == "apr"
    assert mapping.minimum_payment == "minimum"
    assert mapping.credit_limit is None


def test_missing_required_column(tmp_path):
    path = _write(tmp_path, "id,balance,apr\n1,100,5\n")

    with pytest.raises(DebtImportError, match="Missing required column"):
        load_debts_csv(path)


def test_bad_row_names_row_number(tmp_path):
    path = _write(tmp_path, "id,balance,apr,minimum_payment\n1,100,5,10\n2,abc,5,10\n")

    with pytest.raises(DebtImportError, match="Row 2") as excinfo:
        load_debts_csv(path)

    assert excinfo.value.row == 2


def test_negative_balance_is_rejected(tmp_path):
    path = _write(tmp_path, "id,balance,apr,minimum_payment\n1,-100,5,10\n")

    with pytest.raises(DebtImportError, match="negative"):
        load_debts_csv(path)


def test_duplicate_ids_are_rejected(tmp_path):
    path = _write(tmp_path, "id,balance,apr,minimum_payment\n1,100,5,10\n1,200,5,10\n")

    with pytest.raises(DebtImportError, match="Duplicate"):
        load_debts_csv(path)


def test_empty_file(tmp_path):
    path = _write(tmp_path, "")

    with pytest.raises(DebtImportError, match="empty"):
        load_debts_csv(path)


def test_header_only_file_has_no_debts(tmp_path):
    path = _write(tmp_path, "id,balance,apr,minimum_payment\n")

    assert load_debts_csv(path) == []


def test_explicit_mapping_must_match_columns(debts_csv):
    mapping = DebtColumnMapping(
        id="id", balance="balance", annual_interest_rate="interest", minimum_payment="minimum_payment"
    )

    with pytest.raises(DebtImportError, match="'interest' not found"):
        load_debts_csv(debts_csv, mapping=mapping)


def test_parse_rows_from_dicts():
    mapping = DebtColumnMapping(
        id="id",
        balance="bal",
        annual_interest_rate="rate",
        minimum_payment="min",
        credit_limit="limit",
    )
    rows = [{"id": "7", "bal": "250.456", "rate": "19.9", "min": "25", "limit": ""}]

    debts = parse_debt_rows(rows=rows, mapping=mapping)

    assert debts[0].id == 7
    assert debts[0].balance == Decimal("250.46")
    assert debts[0].credit_limit is None


@pytest.mark.parametrize("raw,expected", [("12", 12), (" 3 ", 3), ("visa", "visa"), ("a1", "a1")])
def test_parse_debt_id(raw, expected):
    assert parse_debt_id(raw) == expected
