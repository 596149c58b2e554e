"""Single-debt amortization schedules.

Pure functions: Decimal in, dataclass out. No I/O.

All money is held in cents. Each month's interest is rounded half-up to the
cent before it is charged; the final month's principal is capped at the
remaining balance and its payment shrinks to ``principal + interest``.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from ..errors import InvalidDebtInput
from ..logging_config import get_logger
from ..models import (
    CENT,
    MAX_MONTHS,
    ZERO,
    DebtAccount,
    DebtSchedule,
    PaymentScheduleEntry,
    ScheduleStatus,
    to_money,
)

logger = get_logger(__name__)

_MONTHS_PER_YEAR = Decimal(12)
_PERCENT = Decimal(100)


def monthly_rate(debt: DebtAccount) -> Decimal:
    """Return the periodic rate for a debt's APR (18.0 -> 0.015)."""

    return debt.annual_interest_rate / _PERCENT / _MONTHS_PER_YEAR


def monthly_interest(balance: Decimal, rate: Decimal) -> Decimal:
    """Interest accrued on ``balance`` for one month, rounded to cents."""

    try:
        return (balance * rate).quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise InvalidDebtInput(f"Monthly interest is out of range for balance {balance}") from exc


def compute_schedule(debt: DebtAccount, monthly_payment: object) -> DebtSchedule:
    """Project a debt month by month at a fixed payment.

    Stops when the balance reaches zero, when the payment can no longer
    reduce principal (``NON_CONVERGENT``), or after ``MAX_MONTHS`` months
    (``CAP_REACHED``). Partial schedules are returned in both failure cases.
    """

    payment = to_money(monthly_payment, field="monthly_payment")
    if payment <= ZERO:
        raise InvalidDebtInput(f"Debt {debt.id}: monthly payment must be positive")

    rate = monthly_rate(debt)
    remaining = debt.balance
    entries: list[PaymentScheduleEntry] = []
    status = ScheduleStatus.PAID_OFF
    month = 1

    while remaining > ZERO:
        if month > MAX_MONTHS:
            status = ScheduleStatus.CAP_REACHED
            break

        interest = monthly_interest(remaining, rate)
        principal = min(payment - interest, remaining)
        if principal <= ZERO:
            status = ScheduleStatus.NON_CONVERGENT
            break

        remaining -= principal
        entries.append(
            PaymentScheduleEntry(
                month=month,
                payment=principal + interest,
                principal=principal,
                interest=interest,
                remaining_balance=remaining,
            )
        )
        month += 1

    schedule = DebtSchedule(
        debt_id=debt.id,
        monthly_payment=payment,
        starting_balance=debt.balance,
        entries=tuple(entries),
        status=status,
    )

    if status is ScheduleStatus.NON_CONVERGENT:
        logger.warning(
            "Payment too low to reduce balance",
            extra={"debt_id": debt.id, "monthly_payment": payment, "month": month},
        )
    elif status is ScheduleStatus.CAP_REACHED:
        logger.warning(
            "Debt not paid off within %d months",
            MAX_MONTHS,
            extra={"debt_id": debt.id, "remaining_balance": remaining},
        )
    else:
        logger.debug(
            "Schedule computed",
            extra={"debt_id": debt.id, "months": len(entries), "total_interest": schedule.total_interest},
        )
    return schedule


def payoff_months(debt: DebtAccount, monthly_payment: object) -> int | None:
    """Months needed to clear ``debt`` at ``monthly_payment``, or None if it never clears."""

    schedule = compute_schedule(debt, monthly_payment)
    return schedule.months if schedule.is_paid_off else None


__all__ = ["compute_schedule", "monthly_interest", "monthly_rate", "payoff_months"]
