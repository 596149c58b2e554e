"""Pytest configuration and shared fixtures for LifeSync tests.

This module provides debt factories, a canonical portfolio and helper
utilities for testing the payoff engine without touching the real data
directory.
"""

from __future__ import annotations

import logging
from decimal import Decimal

import pytest

from lifesync.models import DebtAccount, DebtType

_ENV_VARS = (
    "LIFESYNC_DATA_DIR",
    "LIFESYNC_DEV_MODE",
    "LIFESYNC_LOG_LEVEL",
    "LIFESYNC_STRATEGIES",
    "LIFESYNC_EXTRA_PAYMENT",
    "LIFESYNC_ALLOCATION",
)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Point config at a temp data dir and drop handlers left by setup_logging."""

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LIFESYNC_DATA_DIR", str(tmp_path / "instance"))
    monkeypatch.setenv("LIFESYNC_DEV_MODE", "false")

    yield

    logger = logging.getLogger("lifesync")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def debt_factory():
    """Factory for creating DebtAccount instances with sensible defaults.

    Returns:
        Callable: Function that builds DebtAccount values
    """

    counter = {"next": 1}

    def _create_debt(
        balance: object = "1000.00",
        annual_interest_rate: object = "18.0",
        minimum_payment: object = "25.00",
        *,
        id: object | None = None,
        credit_limit: object | None = None,
        name: str = "",
        debt_type: DebtType | str = DebtType.OTHER,
    ) -> DebtAccount:
        """Create a debt; ids auto-increment from 1 unless given.

        Args:
            balance: Current outstanding balance
            annual_interest_rate: APR as a percentage (18.0 for 18%)
            minimum_payment: Minimum monthly payment
        """
        if id is None:
            id = counter["next"]
            counter["next"] += 1
        return DebtAccount(
            id=id,
            balance=balance,
            annual_interest_rate=annual_interest_rate,
            minimum_payment=minimum_payment,
            credit_limit=credit_limit,
            name=name,
            debt_type=debt_type,
        )

    return _create_debt


@pytest.fixture
def household_debts() -> list[DebtAccount]:
    """Two credit cards and a student loan, the LifeSync demo portfolio."""

    return [
        DebtAccount(
            id="1",
            balance="5420.50",
            annual_interest_rate="18.99",
            minimum_payment="125.00",
            credit_limit="8000",
            name="Visa",
            debt_type=DebtType.CREDIT_CARD,
        ),
        DebtAccount(
            id="2",
            balance="2850.00",
            annual_interest_rate="24.99",
            minimum_payment="85.00",
            credit_limit="5000",
            name="Store Card",
            debt_type=DebtType.CREDIT_CARD,
        ),
        DebtAccount(
            id="3",
            balance="28500.00",
            annual_interest_rate="6.5",
            minimum_payment="310.00",
            name="Student Loan",
            debt_type=DebtType.STUDENT_LOAN,
        ),
    ]


DEBTS_CSV = """id,balance,apr,minimum_payment,credit_limit,name,type
1,5420.50,18.99,125,8000,Visa,credit_card
2,2850.00,24.99,85,5000,Store Card,Credit Card
3,28500,6.5,310,,Student Loan,student_loan
"""


@pytest.fixture
def debts_csv(tmp_path):
    """Write the demo portfolio as CSV and return its path."""

    path = tmp_path / "debts.csv"
    path.write_text(DEBTS_CSV, encoding="utf-8")
    return path


# =============================================================================
# Helper Utilities
# =============================================================================


def assert_money_equal(actual, expected, tolerance: str = "0.01"):
    """Assert two amounts match within ``tolerance`` (one cent by default).

    Args:
        actual: Actual value (Decimal, float or str)
        expected: Expected value
        tolerance: Maximum allowed difference

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    diff = abs(Decimal(str(actual)) - Decimal(str(expected)))
    assert diff <= Decimal(tolerance), f"Expected {expected}, got {actual} (diff: {diff})"
