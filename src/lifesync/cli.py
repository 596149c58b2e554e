"""Command line entry points for the LifeSync debt planner."""

from __future__ import annotations

from pathlib import Path

import click

from .config import BaseConfig
from .errors import LifeSyncError
from .logging_config import get_logger, setup_logging
from .models import Allocation, ScheduleStatus, Strategy, format_money
from .services.debts import compare_strategies, recommend_strategy
from .services.import_csv import load_debts_csv, parse_debt_id

logger = get_logger(__name__)

_CSV_PATH = click.Path(exists=True, dir_okay=False, path_type=Path)
_OUT_PATH = click.Path(dir_okay=False, writable=True, path_type=Path)


def _status_note(status: ScheduleStatus) -> str:
    if status is ScheduleStatus.NON_CONVERGENT:
        return "payment too low to reduce balance"
    if status is ScheduleStatus.CAP_REACHED:
        return "not paid off within 30 years"
    return "paid off"


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for logs (defaults to LIFESYNC_DATA_DIR).",
)
@click.pass_context
def main(ctx: click.Context, data_dir: Path | None) -> None:
    """Plan debt payoff with snowball, avalanche or custom ordering."""

    try:
        config = BaseConfig(data_dir=data_dir)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    setup_logging(config)
    ctx.obj = config


@main.command("compare")
@click.argument("csv_path", type=_CSV_PATH)
@click.option("--extra", default=None, help="Extra monthly payment on top of the minimums.")
@click.option(
    "--strategy",
    "strategies",
    multiple=True,
    type=click.Choice([s.value for s in Strategy]),
    help="Strategy to project; repeat for several.",
)
@click.option("--order", default=None, help="Comma-separated debt ids for the custom strategy.")
@click.option(
    "--allocation",
    type=click.Choice([a.value for a in Allocation]),
    default=None,
    help="Keep the extra on the first debt (fixed) or roll it to the next (rollover).",
)
@click.option("--export", "export_path", type=_OUT_PATH, default=None, help="Write a comparison CSV.")
@click.option("--chart", "chart_path", type=_OUT_PATH, default=None, help="Write a comparison PNG.")
@click.pass_obj
def compare(
    config: BaseConfig,
    csv_path: Path,
    extra: str | None,
    strategies: tuple[str, ...],
    order: str | None,
    allocation: str | None,
    export_path: Path | None,
    chart_path: Path | None,
) -> None:
    """Compare payoff strategies for the debts in CSV_PATH."""

    requested = strategies or config.DEFAULT_STRATEGIES
    custom_order = None
    if order:
        if Strategy.CUSTOM.value not in requested:
            raise click.UsageError("--order only applies to the custom strategy; add --strategy custom")
        custom_order = [parse_debt_id(part) for part in order.split(",") if part.strip()]

    try:
        debts = load_debts_csv(csv_path)
        results = compare_strategies(
            debts,
            extra if extra is not None else config.EXTRA_PAYMENT,
            requested,
            custom_order=custom_order,
            allocation=allocation or config.ALLOCATION,
        )
    except LifeSyncError as exc:
        logger.warning("Comparison rejected: %s", exc, extra={"path": str(csv_path)})
        raise click.ClickException(str(exc)) from exc

    for result in results:
        click.echo(
            f"{result.name}: {result.months_to_payoff} months, "
            f"interest {format_money(result.total_interest)}, "
            f"paid {format_money(result.total_payments)}, "
            f"saves {format_money(result.interest_saved)} vs minimums"
        )
        for warning in result.warnings:
            click.echo(f"  ! {warning}")

    best = recommend_strategy(results)
    if best is not None:
        click.echo(f"Recommended: {best.name}")

    if export_path is not None:
        from .services.export_csv import export_comparison_csv

        export_comparison_csv(results=results, output_path=export_path)
        click.echo(f"Comparison written: {export_path}")
    if chart_path is not None:
        from .services.reports import build_comparison_chart, export_chart_png

        export_chart_png(build_comparison_chart(results), output_path=chart_path)
        click.echo(f"Chart written: {chart_path}")


@main.command("schedule")
@click.argument("csv_path", type=_CSV_PATH)
@click.argument("debt_id")
@click.option("--payment", default=None, help="Monthly payment (defaults to the debt's minimum).")
@click.option("--export", "export_path", type=_OUT_PATH, default=None, help="Write the schedule as CSV.")
def schedule(csv_path: Path, debt_id: str, payment: str | None, export_path: Path | None) -> None:
    """Print the month-by-month schedule for one debt."""

    from .services.amortization import compute_schedule

    try:
        debts = {d.id: d for d in load_debts_csv(csv_path)}
        target = parse_debt_id(debt_id)
        if target not in debts:
            raise click.ClickException(f"No debt with id {debt_id!r} in {csv_path}")
        debt = debts[target]
        result = compute_schedule(debt, payment if payment is not None else debt.minimum_payment)
    except LifeSyncError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"{debt.label} at {format_money(result.monthly_payment)}/month")
    click.echo(f"{'Month':>5}  {'Payment':>12}  {'Principal':>12}  {'Interest':>12}  {'Balance':>14}")
    for entry in result:
        click.echo(
            f"{entry.month:>5}  {format_money(entry.payment):>12}  {format_money(entry.principal):>12}  "
            f"{format_money(entry.interest):>12}  {format_money(entry.remaining_balance):>14}"
        )
    click.echo(
        f"{result.months} months, interest {format_money(result.total_interest)}: "
        f"{_status_note(result.status)}"
    )

    if export_path is not None:
        from .services.export_csv import export_schedule_csv

        export_schedule_csv(schedules=[result], output_path=export_path)
        click.echo(f"Schedule written: {export_path}")


@main.command("summary")
@click.argument("csv_path", type=_CSV_PATH)
def summary(csv_path: Path) -> None:
    """Summarize the debts in CSV_PATH with per-debt recommendations."""

    from .services.liabilities import (
        credit_utilization,
        debt_insights,
        minimum_payment_timeline,
        portfolio_summary,
        rank_by_interest_rate,
    )

    try:
        debts = load_debts_csv(csv_path)
        totals = portfolio_summary(debts)
        rows = [
            (
                debt,
                credit_utilization(debt) if debt.credit_limit is not None else None,
                minimum_payment_timeline(debt),
                debt_insights(debt),
            )
            for debt in rank_by_interest_rate(debts)
        ]
    except LifeSyncError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Total debt: {format_money(totals.total_balance)}")
    click.echo(f"Minimum payments: {format_money(totals.total_minimum_payments)}/month")
    click.echo(f"Average interest rate: {totals.weighted_average_rate}%")
    click.echo(f"Debt accounts: {totals.debt_count}")

    for debt, utilization, timeline, insights in rows:
        line = f"- {debt.label}: {format_money(debt.balance)} at {debt.annual_interest_rate}% APR"
        if utilization is not None:
            line += f", {utilization}% of limit used"
        click.echo(line)
        if timeline.status is ScheduleStatus.PAID_OFF:
            click.echo(
                f"    minimum only: {timeline.years} years, {timeline.remaining_months} months, "
                f"interest {format_money(timeline.total_interest)}"
            )
        else:
            click.echo(f"    minimum only: {_status_note(timeline.status)}")
        for insight in insights:
            click.echo(f"    * {insight.title}: {insight.detail}")


if __name__ == "__main__":  # pragma: no cover
    main()
