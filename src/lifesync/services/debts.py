"""Debt payoff strategy planning (snowball, avalanche, custom)."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Protocol, Sequence

from ..errors import InvalidDebtInput
from ..logging_config import get_logger
from ..models import (
    MAX_MONTHS,
    ZERO,
    Allocation,
    DebtAccount,
    DebtId,
    DebtSchedule,
    PaymentScheduleEntry,
    ScheduleStatus,
    Strategy,
    StrategyResult,
    ensure_unique_ids,
    to_money,
)
from .amortization import compute_schedule, monthly_interest, monthly_rate

logger = get_logger(__name__)

DEFAULT_STRATEGIES = (Strategy.SNOWBALL, Strategy.AVALANCHE)


class AmortizationWriter(Protocol):
    """Persists payoff projections for later retrieval."""

    def write_schedule(
        self, *, debt_id: DebtId, rows: list[dict]
    ) -> None:  # pragma: no cover - interface
        ...


def _normalize_extra(extra_monthly_payment: object) -> Decimal:
    extra = to_money(extra_monthly_payment, field="extra_monthly_payment")
    if extra < ZERO:
        raise InvalidDebtInput("Extra monthly payment cannot be negative")
    return extra


def order_debts(
    debts: Iterable[DebtAccount],
    strategy: Strategy | str,
    *,
    custom_order: Sequence[DebtId] | None = None,
) -> list[DebtAccount]:
    """Return debts in payoff priority order for ``strategy``.

    Sorting is stable, so ties keep their input order. For ``custom`` the ids
    in ``custom_order`` come first in the order given; any debt not listed
    follows in input order.
    """

    strategy = Strategy.parse(strategy)
    debt_list = list(debts)

    if strategy is Strategy.SNOWBALL:
        return sorted(debt_list, key=lambda d: d.balance)
    if strategy is Strategy.AVALANCHE:
        return sorted(debt_list, key=lambda d: d.annual_interest_rate, reverse=True)

    if not custom_order:
        return debt_list
    known = {d.id for d in debt_list}
    positions: dict[DebtId, int] = {}
    for position, debt_id in enumerate(custom_order):
        if debt_id not in known:
            raise InvalidDebtInput(f"Custom order references unknown debt id: {debt_id!r}")
        if debt_id in positions:
            raise InvalidDebtInput(f"Custom order lists debt id twice: {debt_id!r}")
        positions[debt_id] = position
    unlisted = len(positions)
    return sorted(debt_list, key=lambda d: positions.get(d.id, unlisted))


def allocate_payments(
    ordered: Sequence[DebtAccount], extra_monthly_payment: object = 0
) -> list[tuple[DebtAccount, Decimal]]:
    """Pair each debt with its monthly payment.

    The first debt receives its minimum plus the whole extra; every other
    debt pays exactly its minimum.
    """

    extra = _normalize_extra(extra_monthly_payment)
    allocations: list[tuple[DebtAccount, Decimal]] = []
    for index, debt in enumerate(ordered):
        payment = debt.minimum_payment + (extra if index == 0 else ZERO)
        allocations.append((debt, payment))
    return allocations


def _fixed_schedules(ordered: Sequence[DebtAccount], extra: Decimal) -> list[DebtSchedule]:
    return [compute_schedule(debt, payment) for debt, payment in allocate_payments(ordered, extra)]


def _rollover_schedules(ordered: Sequence[DebtAccount], extra: Decimal) -> list[DebtSchedule]:
    """Simulate all debts together, cascading freed money down the priority list.

    Each month the pool (extra + minimums of cleared debts) goes to the first
    active debt; whatever is left after a final payment moves on to the next
    active debt in the same month. A debt whose payment falls short of its
    interest carries the unpaid interest forward while freed money may still
    reach it. It is frozen as non-convergent only once the whole budget that
    could ever flow to it (extra plus every minimum not already frozen)
    cannot cover its interest; a frozen debt's minimum is not freed.
    """

    count = len(ordered)
    balances = [debt.balance for debt in ordered]
    rates = [monthly_rate(debt) for debt in ordered]
    entries: list[list[PaymentScheduleEntry]] = [[] for _ in ordered]
    statuses: list[ScheduleStatus | None] = [None] * count
    initial_payments = [payment for _, payment in allocate_payments(ordered, extra)]

    freed = ZERO
    for index, debt in enumerate(ordered):
        if debt.balance <= ZERO:
            statuses[index] = ScheduleStatus.PAID_OFF
            freed += debt.minimum_payment

    month = 1
    while any(status is None for status in statuses):
        if month > MAX_MONTHS:
            for index in range(count):
                if statuses[index] is None:
                    statuses[index] = ScheduleStatus.CAP_REACHED
            break

        pool = extra + freed
        freed_this_month = ZERO
        for index, debt in enumerate(ordered):
            if statuses[index] is not None:
                continue
            available = debt.minimum_payment + pool
            interest = monthly_interest(balances[index], rates[index])
            if available <= interest:
                budget = extra + sum(
                    (
                        other.minimum_payment
                        for other, status in zip(ordered, statuses)
                        if status is not ScheduleStatus.NON_CONVERGENT
                    ),
                    ZERO,
                )
                if budget <= interest:
                    statuses[index] = ScheduleStatus.NON_CONVERGENT
                    logger.warning(
                        "Payment too low to reduce balance",
                        extra={"debt_id": debt.id, "monthly_payment": budget, "month": month},
                    )
                    continue

            # Negative principal when the payment only covers part of the interest.
            principal = min(available - interest, balances[index])
            payment = principal + interest
            balances[index] -= principal
            pool = available - payment
            entries[index].append(
                PaymentScheduleEntry(
                    month=month,
                    payment=payment,
                    principal=principal,
                    interest=interest,
                    remaining_balance=balances[index],
                )
            )
            if balances[index] <= ZERO:
                statuses[index] = ScheduleStatus.PAID_OFF
                freed_this_month += debt.minimum_payment

        freed += freed_this_month
        month += 1

    return [
        DebtSchedule(
            debt_id=debt.id,
            monthly_payment=initial_payments[index],
            starting_balance=debt.balance,
            entries=tuple(entries[index]),
            status=statuses[index] or ScheduleStatus.PAID_OFF,
        )
        for index, debt in enumerate(ordered)
    ]


def _schedule_warnings(ordered: Sequence[DebtAccount], schedules: Sequence[DebtSchedule]) -> tuple[str, ...]:
    warnings: list[str] = []
    for debt, schedule in zip(ordered, schedules):
        if schedule.status is ScheduleStatus.NON_CONVERGENT:
            warnings.append(f"{debt.label}: payment too low to reduce balance")
        elif schedule.status is ScheduleStatus.CAP_REACHED:
            warnings.append(f"{debt.label}: not paid off within {MAX_MONTHS // 12} years")
    return tuple(warnings)


def minimum_payment_interest(debts: Iterable[DebtAccount]) -> Decimal:
    """Total interest paid when every debt only ever receives its minimum."""

    return sum(
        (compute_schedule(debt, debt.minimum_payment).total_interest for debt in debts), ZERO
    )


def _run(
    debt_list: list[DebtAccount],
    strategy: Strategy,
    extra: Decimal,
    *,
    custom_order: Sequence[DebtId] | None,
    allocation: Allocation,
    baseline_interest: Decimal,
) -> StrategyResult:
    ordered = order_debts(debt_list, strategy, custom_order=custom_order)
    if allocation is Allocation.ROLLOVER:
        schedules = _rollover_schedules(ordered, extra)
    else:
        schedules = _fixed_schedules(ordered, extra)

    total_payments = sum((s.total_paid for s in schedules), ZERO)
    total_interest = sum((s.total_interest for s in schedules), ZERO)
    months = max((s.months for s in schedules), default=0)
    if any(s.status is ScheduleStatus.NON_CONVERGENT for s in schedules):
        # Partial totals stay, but the payoff date is reported as the horizon.
        months = MAX_MONTHS

    result = StrategyResult(
        strategy=strategy,
        total_payments=total_payments,
        total_interest=total_interest,
        months_to_payoff=months,
        order=tuple(d.id for d in ordered),
        schedules=tuple(schedules),
        allocation=allocation,
        interest_saved=baseline_interest - total_interest,
        warnings=_schedule_warnings(ordered, schedules),
    )
    logger.info(
        "Strategy projected",
        extra={
            "strategy": strategy.value,
            "allocation": allocation.value,
            "debts": len(ordered),
            "months_to_payoff": months,
            "total_interest": total_interest,
            "complete": result.is_complete,
        },
    )
    return result


def run_strategy(
    debts: Iterable[DebtAccount],
    strategy: Strategy | str,
    extra_monthly_payment: object = 0,
    *,
    custom_order: Sequence[DebtId] | None = None,
    allocation: Allocation | str = Allocation.FIXED,
) -> StrategyResult:
    """Project every debt under one strategy and aggregate the totals."""

    debt_list = list(debts)
    ensure_unique_ids(debt_list)
    extra = _normalize_extra(extra_monthly_payment)
    return _run(
        debt_list,
        Strategy.parse(strategy),
        extra,
        custom_order=custom_order,
        allocation=Allocation.parse(allocation),
        baseline_interest=minimum_payment_interest(debt_list),
    )


def compare_strategies(
    debts: Iterable[DebtAccount],
    extra_monthly_payment: object = 0,
    strategies: Iterable[Strategy | str] = DEFAULT_STRATEGIES,
    *,
    custom_order: Sequence[DebtId] | None = None,
    allocation: Allocation | str = Allocation.FIXED,
) -> list[StrategyResult]:
    """Return one StrategyResult per requested strategy, in request order.

    Duplicate strategy names are computed once. Debts whose payment cannot
    reduce their balance are flagged on the result instead of aborting the
    comparison.
    """

    debt_list = list(debts)
    ensure_unique_ids(debt_list)
    extra = _normalize_extra(extra_monthly_payment)
    mode = Allocation.parse(allocation)

    requested: list[Strategy] = []
    for raw in strategies:
        strategy = Strategy.parse(raw)
        if strategy not in requested:
            requested.append(strategy)

    baseline = minimum_payment_interest(debt_list)
    return [
        _run(
            debt_list,
            strategy,
            extra,
            custom_order=custom_order,
            allocation=mode,
            baseline_interest=baseline,
        )
        for strategy in requested
    ]


def recommend_strategy(results: Sequence[StrategyResult]) -> StrategyResult | None:
    """Pick the cheapest plan: lowest total interest, then fewest months.

    Plans that leave a debt unpaid are only considered when no plan pays
    everything off.
    """

    if not results:
        return None
    candidates = [r for r in results if r.is_complete] or list(results)
    return min(candidates, key=lambda r: (r.total_interest, r.months_to_payoff))


def snowball_schedule(*, debts: Iterable[DebtAccount], surplus: object = 0) -> StrategyResult:
    """Return the payoff projection prioritizing smallest balances first."""
    return run_strategy(debts, Strategy.SNOWBALL, surplus)


def avalanche_schedule(*, debts: Iterable[DebtAccount], surplus: object = 0) -> StrategyResult:
    """Return the payoff projection prioritizing highest APR first."""
    return run_strategy(debts, Strategy.AVALANCHE, surplus)


def persist_projection(
    *,
    writer: AmortizationWriter,
    debts: Iterable[DebtAccount],
    strategy: Strategy | str,
    surplus: object = 0,
    custom_order: Sequence[DebtId] | None = None,
    allocation: Allocation | str = Allocation.FIXED,
) -> StrategyResult:
    """Compute the schedule for the desired strategy and hand each debt's rows to the writer."""

    result = run_strategy(
        debts, strategy, surplus, custom_order=custom_order, allocation=allocation
    )
    for schedule in result.schedules:
        writer.write_schedule(
            debt_id=schedule.debt_id, rows=[entry.as_row() for entry in schedule.entries]
        )
    return result


__all__ = [
    "AmortizationWriter",
    "DEFAULT_STRATEGIES",
    "allocate_payments",
    "avalanche_schedule",
    "compare_strategies",
    "minimum_payment_interest",
    "order_debts",
    "persist_projection",
    "recommend_strategy",
    "run_strategy",
    "snowball_schedule",
]
