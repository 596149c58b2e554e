"""Portfolio-level views of a user's debts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable

from ..errors import InvalidDebtInput
from ..models import ZERO, DebtAccount, DebtId, ScheduleStatus
from .amortization import compute_schedule

HIGH_INTEREST_RATE = Decimal("20")
LOW_INTEREST_RATE = Decimal("10")
HIGH_UTILIZATION = Decimal("80")
MODERATE_UTILIZATION = Decimal("30")

_TWO_PLACES = Decimal("0.01")


def _percent(value: Decimal, *, what: str) -> Decimal:
    try:
        return value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise InvalidDebtInput(f"{what} is out of range") from exc


@dataclass(frozen=True, slots=True)
class PortfolioSummary:
    """Headline numbers across every tracked debt."""

    total_balance: Decimal
    total_minimum_payments: Decimal
    weighted_average_rate: Decimal
    highest_rate_debt_id: DebtId | None
    debt_count: int


@dataclass(frozen=True, slots=True)
class DebtInsight:
    """A short recommendation attached to a single debt."""

    code: str
    title: str
    detail: str
    severity: str  # "warning" or "positive"


@dataclass(frozen=True, slots=True)
class PayoffTimeline:
    """How long a debt takes when only the minimum is paid."""

    months: int
    total_interest: Decimal
    status: ScheduleStatus
    payoff_date: date | None = None

    @property
    def years(self) -> int:
        return self.months // 12

    @property
    def remaining_months(self) -> int:
        return self.months % 12


def portfolio_summary(debts: Iterable[DebtAccount]) -> PortfolioSummary:
    """Summarize balances, minimums and the balance-weighted APR."""

    debt_list = list(debts)
    total_balance = sum((d.balance for d in debt_list), ZERO)
    total_minimums = sum((d.minimum_payment for d in debt_list), ZERO)

    weighted = ZERO
    if total_balance > ZERO:
        weighted = sum((d.annual_interest_rate * d.balance for d in debt_list), ZERO) / total_balance
    weighted = _percent(weighted, what="Average interest rate")

    highest_id: DebtId | None = None
    highest_rate: Decimal | None = None
    for debt in debt_list:
        # Strictly greater keeps the first debt on ties.
        if highest_rate is None or debt.annual_interest_rate > highest_rate:
            highest_rate = debt.annual_interest_rate
            highest_id = debt.id

    return PortfolioSummary(
        total_balance=total_balance,
        total_minimum_payments=total_minimums,
        weighted_average_rate=weighted,
        highest_rate_debt_id=highest_id,
        debt_count=len(debt_list),
    )


def credit_utilization(debt: DebtAccount) -> Decimal:
    """Percent of the credit limit in use; 0 when the debt has no limit."""

    if debt.credit_limit is None or debt.credit_limit <= ZERO:
        return ZERO
    return _percent(debt.balance / debt.credit_limit * 100, what=f"Debt {debt.id}: credit utilization")


def utilization_band(utilization: Decimal) -> str:
    """Bucket a utilization percentage into low / moderate / high."""

    if utilization > HIGH_UTILIZATION:
        return "high"
    if utilization > MODERATE_UTILIZATION:
        return "moderate"
    return "low"


def debt_insights(debt: DebtAccount) -> list[DebtInsight]:
    insights: list[DebtInsight] = []
    if debt.annual_interest_rate > HIGH_INTEREST_RATE:
        insights.append(
            DebtInsight(
                code="high_interest",
                title="High Interest Rate",
                detail="Consider balance transfer or aggressive payoff",
                severity="warning",
            )
        )
    if credit_utilization(debt) > HIGH_UTILIZATION:
        insights.append(
            DebtInsight(
                code="high_utilization",
                title="High Utilization",
                detail="May impact credit score",
                severity="warning",
            )
        )
    if debt.annual_interest_rate < LOW_INTEREST_RATE:
        insights.append(
            DebtInsight(
                code="low_interest",
                title="Low Interest Rate",
                detail="Consider minimum payments",
                severity="positive",
            )
        )
    return insights


def _add_months(start: date, months: int) -> date:
    """Return the first of the month ``months`` months after ``start``."""

    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    return date(year, month, 1)


def minimum_payment_timeline(debt: DebtAccount, *, today: date | None = None) -> PayoffTimeline:
    """Project a debt paid at its minimum and date the final payment."""

    schedule = compute_schedule(debt, debt.minimum_payment)
    payoff_date = None
    if schedule.is_paid_off:
        payoff_date = _add_months(today or date.today(), schedule.months)
    return PayoffTimeline(
        months=schedule.months,
        total_interest=schedule.total_interest,
        status=schedule.status,
        payoff_date=payoff_date,
    )


def rank_by_interest_rate(debts: Iterable[DebtAccount]) -> list[DebtAccount]:
    """Debts ordered from highest to lowest APR, ties in input order."""

    return sorted(debts, key=lambda d: d.annual_interest_rate, reverse=True)


__all__ = [
    "DebtInsight",
    "PayoffTimeline",
    "PortfolioSummary",
    "credit_utilization",
    "debt_insights",
    "minimum_payment_timeline",
    "portfolio_summary",
    "rank_by_interest_rate",
    "utilization_band",
]
