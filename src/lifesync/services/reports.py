"""Chart rendering for payoff projections."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
from matplotlib.figure import Figure

from ..models import DebtSchedule, StrategyResult


class ReportRenderer(Protocol):
    """Protocol describing renderer behavior."""

    def render(self, figure: Figure, *, output_path: Path) -> None:  # pragma: no cover - interface
        ...


def _balance_at(schedule: DebtSchedule, month: int) -> float:
    if month == 0:
        return float(schedule.starting_balance)
    if month <= schedule.months:
        return float(schedule.entries[month - 1].remaining_balance)
    # Past the end: cleared debts sit at zero, stalled ones keep their balance.
    return 0.0 if schedule.is_paid_off else float(schedule.remaining_balance)


def remaining_balance_series(result: StrategyResult) -> list[float]:
    """Total remaining balance across all debts, starting at month 0."""

    if not result.schedules:
        return []
    horizon = max(s.months for s in result.schedules)
    return [
        sum(_balance_at(schedule, month) for schedule in result.schedules)
        for month in range(horizon + 1)
    ]


def build_payoff_chart(result: StrategyResult) -> Figure:
    """Line chart of total remaining debt with 50%, 75% and debt-free markers."""

    totals = remaining_balance_series(result)
    fig, ax = plt.subplots(figsize=(10, 6))

    if len(totals) > 1:
        x_vals = list(range(len(totals)))
        ax.plot(x_vals, totals, color="#4F46E5", linewidth=2.5)
        ax.fill_between(x_vals, totals, color="#E0E7FF", alpha=0.5)

        initial = totals[0]
        if initial > 0:
            for fraction, label, color in ((0.5, "50% Paid!", "#22C55E"), (0.25, "75% Paid!", "#16A34A")):
                for i, total in enumerate(totals):
                    if total <= initial * fraction:
                        ax.axvline(x=i, color=color, linestyle="--", alpha=0.6, linewidth=1.5)
                        ax.annotate(label, (i, total), xytext=(10, 25), textcoords="offset points",
                                    fontsize=9, color=color, fontweight="bold")
                        break

        if totals[-1] < 1:
            ax.scatter([x_vals[-1]], [0], s=200, c="gold", marker="*", zorder=5, edgecolors="#F59E0B")
            ax.annotate("DEBT FREE!", (x_vals[-1], 0), xytext=(0, 25), textcoords="offset points",
                        ha="center", fontsize=12, fontweight="bold", color="#16A34A")

        ax.grid(True, linestyle="--", alpha=0.3)
        ax.set_axisbelow(True)
        ax.set_title(f"{result.name} Payoff Projection", fontsize=14, fontweight="bold", pad=15)
        ax.set_ylabel("Remaining Balance ($)", fontsize=11)
        ax.set_xlabel("Month", fontsize=11)
        ax.yaxis.set_major_formatter(mticker.FuncFormatter(lambda x, p: f"${x:,.0f}"))

        textstr = (
            f"Starting Debt: ${initial:,.0f}\n"
            f"Months to Payoff: {result.months_to_payoff}\n"
            f"Total Interest: ${float(result.total_interest):,.0f}"
        )
        props = dict(boxstyle="round", facecolor="lavender", alpha=0.8)
        ax.text(0.98, 0.98, textstr, transform=ax.transAxes, fontsize=9,
                verticalalignment="top", horizontalalignment="right", bbox=props)
    else:
        ax.text(0.5, 0.5, "No payoff schedule", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")

    plt.tight_layout()
    return fig


def build_comparison_chart(results: Sequence[StrategyResult]) -> Figure:
    """Bar chart of total interest per strategy."""

    fig, ax = plt.subplots(figsize=(8, 5))
    if results:
        names = [r.name for r in results]
        interest = [float(r.total_interest) for r in results]
        colors = ["#4F46E5" if r.is_complete else "#F97316" for r in results]
        bars = ax.bar(names, interest, color=colors)
        for bar, result in zip(bars, results):
            ax.annotate(f"{result.months_to_payoff} mo", (bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        xytext=(0, 4), textcoords="offset points", ha="center", fontsize=9)
        ax.set_title("Total Interest by Strategy", fontsize=14, fontweight="bold", pad=15)
        ax.set_ylabel("Total Interest ($)")
        ax.yaxis.set_major_formatter(mticker.FuncFormatter(lambda x, p: f"${x:,.0f}"))
        ax.grid(True, axis="y", linestyle="--", alpha=0.3)
        ax.set_axisbelow(True)
    else:
        ax.text(0.5, 0.5, "No strategies to compare", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")

    plt.tight_layout()
    return fig


def export_chart_png(
    figure: Figure,
    *,
    output_path: Path,
    renderer: ReportRenderer | None = None,
) -> Path:
    """Write ``figure`` to PNG, close it and return the path."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    if renderer is not None:
        renderer.render(figure, output_path=output_path)
    else:
        figure.savefig(output_path, bbox_inches="tight", dpi=120)
    plt.close(figure)
    return output_path


__all__ = [
    "ReportRenderer",
    "build_comparison_chart",
    "build_payoff_chart",
    "export_chart_png",
    "remaining_balance_series",
]
