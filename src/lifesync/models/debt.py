"""Debt account value objects."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Union

from ..errors import InvalidDebtInput
from .money import ZERO, to_money, to_rate

DebtId = Union[int, str]


class DebtType(str, Enum):
    """Kinds of liability a user can track."""

    CREDIT_CARD = "credit_card"
    STUDENT_LOAN = "student_loan"
    MORTGAGE = "mortgage"
    LOAN = "loan"
    OTHER = "other"

    @property
    def label(self) -> str:
        return _DEBT_TYPE_LABELS[self]

    @classmethod
    def parse(cls, value: object) -> "DebtType":
        """Resolve a raw value (enum, code or label) to a DebtType."""

        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        if not text:
            return cls.OTHER
        for member in cls:
            if text in (member.value, member.label.lower()):
                return member
        raise InvalidDebtInput(f"Unknown debt type: {value!r}")


_DEBT_TYPE_LABELS = {
    DebtType.CREDIT_CARD: "Credit Card",
    DebtType.STUDENT_LOAN: "Student Loan",
    DebtType.MORTGAGE: "Mortgage",
    DebtType.LOAN: "Personal Loan",
    DebtType.OTHER: "Other Debt",
}


@dataclass(frozen=True, slots=True)
class DebtAccount:
    """Represents a liability input for payoff projections.

    Amounts are coerced to cents on construction so callers may pass floats,
    strings or Decimals. ``annual_interest_rate`` is a percentage (18.99 means
    18.99% per year).
    """

    id: DebtId
    balance: Decimal
    annual_interest_rate: Decimal
    minimum_payment: Decimal
    credit_limit: Decimal | None = None
    name: str = ""
    debt_type: DebtType = DebtType.OTHER

    def __post_init__(self) -> None:
        if self.id is None or (isinstance(self.id, str) and not self.id.strip()):
            raise InvalidDebtInput("Debt id is required")

        balance = to_money(self.balance, field="balance")
        rate = to_rate(self.annual_interest_rate)
        minimum = to_money(self.minimum_payment, field="minimum_payment")
        limit = None
        if self.credit_limit is not None:
            limit = to_money(self.credit_limit, field="credit_limit")

        if balance < ZERO:
            raise InvalidDebtInput(f"Debt {self.id}: balance cannot be negative")
        if rate < ZERO:
            raise InvalidDebtInput(f"Debt {self.id}: interest rate cannot be negative")
        if minimum <= ZERO:
            raise InvalidDebtInput(f"Debt {self.id}: minimum payment must be positive")
        if limit is not None and limit <= ZERO:
            raise InvalidDebtInput(f"Debt {self.id}: credit limit must be positive")

        object.__setattr__(self, "balance", balance)
        object.__setattr__(self, "annual_interest_rate", rate)
        object.__setattr__(self, "minimum_payment", minimum)
        object.__setattr__(self, "credit_limit", limit)
        object.__setattr__(self, "debt_type", DebtType.parse(self.debt_type))
        object.__setattr__(self, "name", (self.name or "").strip())

    @property
    def label(self) -> str:
        """Name for display, falling back to the type label and id."""

        return self.name or f"{self.debt_type.label} {self.id}"


def ensure_unique_ids(debts: list[DebtAccount]) -> None:
    """Reject batches where two accounts share an id."""

    seen: set[DebtId] = set()
    for debt in debts:
        if debt.id in seen:
            raise InvalidDebtInput(f"Duplicate debt id: {debt.id!r}")
        seen.add(debt.id)


__all__ = ["DebtAccount", "DebtId", "DebtType", "ensure_unique_ids"]
