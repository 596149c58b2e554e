"""LifeSync debt payoff planning package."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .errors import DebtImportError, InvalidDebtInput, LifeSyncError
from .models import (
    Allocation,
    DebtAccount,
    DebtSchedule,
    DebtType,
    PaymentScheduleEntry,
    ScheduleStatus,
    Strategy,
    StrategyResult,
)
from .services.amortization import compute_schedule
from .services.debts import compare_strategies, recommend_strategy, run_strategy

__all__ = [
    "Allocation",
    "BaseConfig",
    "DebtAccount",
    "DebtImportError",
    "DebtSchedule",
    "DebtType",
    "DevConfig",
    "InvalidDebtInput",
    "LifeSyncError",
    "PaymentScheduleEntry",
    "ScheduleStatus",
    "Strategy",
    "StrategyResult",
    "compare_strategies",
    "compute_schedule",
    "recommend_strategy",
    "run_strategy",
]
