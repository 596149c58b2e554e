"""Payoff schedule and strategy result value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Iterator

from ..errors import InvalidDebtInput
from .debt import DebtId
from .money import ZERO

# Schedules stop after 30 years; hitting this is reported, not hidden.
MAX_MONTHS = 360


class ScheduleStatus(str, Enum):
    """Outcome of projecting a single debt."""

    PAID_OFF = "paid_off"
    NON_CONVERGENT = "non_convergent"
    CAP_REACHED = "cap_reached"


class Strategy(str, Enum):
    """Ordering rules for choosing which debt receives the extra payment."""

    SNOWBALL = "snowball"
    AVALANCHE = "avalanche"
    CUSTOM = "custom"

    @property
    def display_name(self) -> str:
        return {
            Strategy.SNOWBALL: "Debt Snowball",
            Strategy.AVALANCHE: "Debt Avalanche",
            Strategy.CUSTOM: "Custom Strategy",
        }[self]

    @classmethod
    def parse(cls, value: object) -> "Strategy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise InvalidDebtInput(f"Invalid debt payoff strategy: {value!r}") from exc


class Allocation(str, Enum):
    """How the extra payment moves between debts over time.

    ``FIXED`` keeps the extra on the first debt in priority order for that
    debt's whole schedule. ``ROLLOVER`` hands the extra, plus minimums freed
    by cleared debts, to the next debt once one is paid off.
    """

    FIXED = "fixed"
    ROLLOVER = "rollover"

    @classmethod
    def parse(cls, value: object) -> "Allocation":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise InvalidDebtInput(f"Invalid allocation mode: {value!r}") from exc


@dataclass(frozen=True, slots=True)
class PaymentScheduleEntry:
    """One month of a debt's payoff schedule."""

    month: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    remaining_balance: Decimal

    def as_row(self) -> dict[str, object]:
        return {
            "month": self.month,
            "payment": self.payment,
            "principal": self.principal,
            "interest": self.interest,
            "remaining_balance": self.remaining_balance,
        }


@dataclass(frozen=True, slots=True)
class DebtSchedule:
    """Month-by-month projection for one debt and how it ended."""

    debt_id: DebtId
    monthly_payment: Decimal
    starting_balance: Decimal
    entries: tuple[PaymentScheduleEntry, ...]
    status: ScheduleStatus

    def __iter__(self) -> Iterator[PaymentScheduleEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def months(self) -> int:
        return len(self.entries)

    @property
    def total_interest(self) -> Decimal:
        return sum((e.interest for e in self.entries), ZERO)

    @property
    def total_paid(self) -> Decimal:
        return sum((e.payment for e in self.entries), ZERO)

    @property
    def total_principal(self) -> Decimal:
        return sum((e.principal for e in self.entries), ZERO)

    @property
    def remaining_balance(self) -> Decimal:
        if not self.entries:
            return self.starting_balance
        return self.entries[-1].remaining_balance

    @property
    def is_paid_off(self) -> bool:
        return self.status is ScheduleStatus.PAID_OFF


@dataclass(frozen=True, slots=True)
class StrategyResult:
    """Aggregated outcome of paying a set of debts under one strategy."""

    strategy: Strategy
    total_payments: Decimal
    total_interest: Decimal
    months_to_payoff: int
    order: tuple[DebtId, ...] = ()
    schedules: tuple[DebtSchedule, ...] = ()
    allocation: Allocation = Allocation.FIXED
    interest_saved: Decimal = ZERO
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def name(self) -> str:
        return self.strategy.display_name

    @property
    def non_convergent_ids(self) -> tuple[DebtId, ...]:
        return tuple(
            s.debt_id for s in self.schedules if s.status is ScheduleStatus.NON_CONVERGENT
        )

    @property
    def capped_ids(self) -> tuple[DebtId, ...]:
        return tuple(s.debt_id for s in self.schedules if s.status is ScheduleStatus.CAP_REACHED)

    @property
    def is_complete(self) -> bool:
        """True when every debt reaches a zero balance within the horizon."""

        return all(s.is_paid_off for s in self.schedules)

    def schedule_for(self, debt_id: DebtId) -> DebtSchedule:
        for schedule in self.schedules:
            if schedule.debt_id == debt_id:
                return schedule
        raise KeyError(debt_id)


__all__ = [
    "Allocation",
    "DebtSchedule",
    "MAX_MONTHS",
    "PaymentScheduleEntry",
    "ScheduleStatus",
    "Strategy",
    "StrategyResult",
]
