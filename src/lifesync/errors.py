"""Exception types raised at the LifeSync call boundary."""

from __future__ import annotations


class LifeSyncError(Exception):
    """Base class for errors surfaced to callers of the debt engine."""


class InvalidDebtInput(LifeSyncError, ValueError):
    """Raised when debts, payments or planner options break the input contract."""


class DebtImportError(LifeSyncError, ValueError):
    """Raised when a debt file cannot be parsed into accounts."""

    def __init__(self, message: str, *, row: int | None = None):
        if row is not None:
            message = f"Row {row}: {message}"
        super().__init__(message)
        self.row = row


__all__ = ["LifeSyncError", "InvalidDebtInput", "DebtImportError"]
