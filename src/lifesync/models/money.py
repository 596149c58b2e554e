"""Decimal helpers for monetary amounts and rates."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from ..errors import InvalidDebtInput

CENT = Decimal("0.01")
ZERO = Decimal("0")


def _to_decimal(value: object, *, field: str) -> Decimal:
    if isinstance(value, bool):
        raise InvalidDebtInput(f"{field} must be a number, got {value!r}")
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            # str() keeps floats like 18.99 from carrying binary artifacts
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError, TypeError) as exc:
            raise InvalidDebtInput(f"{field} must be a number, got {value!r}") from exc
    if not amount.is_finite():
        raise InvalidDebtInput(f"{field} must be finite, got {value!r}")
    return amount


def to_money(value: object, *, field: str = "amount") -> Decimal:
    """Coerce ``value`` to a Decimal rounded half-up to cents."""

    amount = _to_decimal(value, field=field)
    try:
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise InvalidDebtInput(f"{field} is out of range, got {value!r}") from exc


def to_rate(value: object, *, field: str = "annual_interest_rate") -> Decimal:
    """Coerce a percentage rate to Decimal without rounding it."""

    return _to_decimal(value, field=field)


def format_money(amount: Decimal) -> str:
    """Render an amount as ``$1,234.56``."""

    return f"${amount:,.2f}"


__all__ = ["CENT", "ZERO", "format_money", "to_money", "to_rate"]
