"""Tests for money helpers and debt value objects."""

from __future__ import annotations

import dataclasses
from decimal import Decimal

import pytest

from lifesync.errors import InvalidDebtInput
from lifesync.models import (
    Allocation,
    DebtAccount,
    DebtType,
    Strategy,
    ensure_unique_ids,
    format_money,
    to_money,
    to_rate,
)


class TestMoney:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            (18.99, "18.99"),
            ("1000", "1000.00"),
            (" 12.345 ", "12.35"),
            (Decimal("0.005"), "0.01"),
            (7, "7.00"),
        ],
    )
    def test_to_money_rounds_half_up(self, raw, expected):
        assert to_money(raw) == Decimal(expected)

    @pytest.mark.parametrize("raw", [True, "abc", None, "NaN", "Infinity"])
    def test_to_money_rejects_non_numbers(self, raw):
        with pytest.raises(InvalidDebtInput):
            to_money(raw, field="balance")

    def test_to_rate_keeps_precision(self):
        assert to_rate("18.999") == Decimal("18.999")

    def test_format_money(self):
        assert format_money(Decimal("36770.5")) == "$36,770.50"
        assert format_money(Decimal("0")) == "$0.00"


class TestDebtAccount:
    def test_coerces_inputs(self):
        debt = DebtAccount(id=1, balance=1000.456, annual_interest_rate="19.9", minimum_payment=25)

        assert debt.balance == Decimal("1000.46")
        assert debt.annual_interest_rate == Decimal("19.9")
        assert debt.minimum_payment == Decimal("25.00")
        assert debt.credit_limit is None
        assert debt.debt_type is DebtType.OTHER

    def test_is_frozen(self, debt_factory):
        debt = debt_factory()

        with pytest.raises(dataclasses.FrozenInstanceError):
            debt.balance = Decimal("1")

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"balance": "-1"}, "balance cannot be negative"),
            ({"annual_interest_rate": "-0.5"}, "interest rate cannot be negative"),
            ({"minimum_payment": "0"}, "minimum payment must be positive"),
            ({"credit_limit": "0"}, "credit limit must be positive"),
            ({"id": "  "}, "Debt id is required"),
            ({"debt_type": "timeshare"}, "Unknown debt type"),
        ],
    )
    def test_validation(self, overrides, message):
        values = {"id": "a", "balance": "100", "annual_interest_rate": "5", "minimum_payment": "10"}
        values.update(overrides)

        with pytest.raises(InvalidDebtInput, match=message):
            DebtAccount(**values)

    def test_invalid_input_is_a_value_error(self):
        with pytest.raises(ValueError):
            DebtAccount(id=1, balance="lots", annual_interest_rate=5, minimum_payment=10)

    def test_zero_balance_is_allowed(self, debt_factory):
        assert debt_factory(balance="0").balance == 0

    def test_label_falls_back_to_type_and_id(self, debt_factory):
        assert debt_factory(id=4, debt_type="mortgage").label == "Mortgage 4"
        assert debt_factory(name="  Car  ").label == "Car"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Personal Loan", DebtType.LOAN),
        ("credit_card", DebtType.CREDIT_CARD),
        (" STUDENT LOAN ", DebtType.STUDENT_LOAN),
        ("", DebtType.OTHER),
        (None, DebtType.OTHER),
        (DebtType.MORTGAGE, DebtType.MORTGAGE),
    ],
)
def test_debt_type_parse(raw, expected):
    assert DebtType.parse(raw) is expected


def test_ensure_unique_ids(debt_factory):
    ensure_unique_ids([debt_factory(id=1), debt_factory(id="1")])

    with pytest.raises(InvalidDebtInput, match="Duplicate debt id"):
        ensure_unique_ids([debt_factory(id=2), debt_factory(id=2)])


def test_strategy_parse():
    assert Strategy.parse(" Avalanche ") is Strategy.AVALANCHE
    assert Strategy.AVALANCHE.display_name == "Debt Avalanche"
    with pytest.raises(InvalidDebtInput, match="Invalid debt payoff strategy"):
        Strategy.parse("fastest")


def test_allocation_parse():
    assert Allocation.parse("ROLLOVER") is Allocation.ROLLOVER
    with pytest.raises(InvalidDebtInput, match="Invalid allocation mode"):
        Allocation.parse("cascade")


@pytest.mark.parametrize("raw", ["1e30", Decimal("1E+27")])
def test_to_money_rejects_amounts_beyond_cent_precision(raw):
    with pytest.raises(InvalidDebtInput, match="balance is out of range"):
        to_money(raw, field="balance")


def test_huge_balance_is_invalid_input():
    with pytest.raises(InvalidDebtInput, match="out of range"):
        DebtAccount(id=1, balance="1e30", annual_interest_rate="5", minimum_payment="10")
