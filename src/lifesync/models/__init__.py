"""Domain value objects for debt payoff projections."""

from .debt import DebtAccount, DebtId, DebtType, ensure_unique_ids
from .money import CENT, ZERO, format_money, to_money, to_rate
from .schedule import (
    MAX_MONTHS,
    Allocation,
    DebtSchedule,
    PaymentScheduleEntry,
    ScheduleStatus,
    Strategy,
    StrategyResult,
)

__all__ = [
    "Allocation",
    "CENT",
    "DebtAccount",
    "DebtId",
    "DebtSchedule",
    "DebtType",
    "MAX_MONTHS",
    "PaymentScheduleEntry",
    "ScheduleStatus",
    "Strategy",
    "StrategyResult",
    "ZERO",
    "ensure_unique_ids",
    "format_money",
    "to_money",
    "to_rate",
]
