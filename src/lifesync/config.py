"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from decimal import Decimal, InvalidOperation
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

_VALID_STRATEGIES = ("snowball", "avalanche", "custom")
_VALID_ALLOCATIONS = ("fixed", "rollover")


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(part.strip().lower() for part in raw.split(",") if part.strip())


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "LifeSync"
    LOG_FILENAME = "lifesync.log"
    LOG_MAX_BYTES = 10 * 1024 * 1024
    LOG_BACKUP_COUNT = 5

    def __init__(self, *, data_dir: Path | str | None = None) -> None:
        self.DATA_DIR = self._resolve_data_dir(data_dir)
        self.DEV_MODE = _env_bool("LIFESYNC_DEV_MODE", default=True)
        self.LOG_LEVEL = os.getenv("LIFESYNC_LOG_LEVEL", "INFO").strip().upper()
        self.DEFAULT_STRATEGIES = _env_list("LIFESYNC_STRATEGIES", "snowball,avalanche")
        self.EXTRA_PAYMENT = self._resolve_extra_payment()
        self.ALLOCATION = os.getenv("LIFESYNC_ALLOCATION", "fixed").strip().lower()

        unknown = [s for s in self.DEFAULT_STRATEGIES if s not in _VALID_STRATEGIES]
        if unknown or not self.DEFAULT_STRATEGIES:
            raise ValueError(
                f"LIFESYNC_STRATEGIES must list any of {', '.join(_VALID_STRATEGIES)}; "
                f"got {os.getenv('LIFESYNC_STRATEGIES')!r}"
            )
        if self.ALLOCATION not in _VALID_ALLOCATIONS:
            raise ValueError(
                f"LIFESYNC_ALLOCATION must be 'fixed' or 'rollover'; got {self.ALLOCATION!r}"
            )

    def _resolve_data_dir(self, override: Path | str | None = None) -> Path:
        """Return the directory where logs and exports live."""

        data_root = override if override is not None else os.getenv("LIFESYNC_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _resolve_extra_payment(self) -> Decimal:
        raw = os.getenv("LIFESYNC_EXTRA_PAYMENT", "0")
        try:
            value = Decimal(raw.strip())
        except InvalidOperation as exc:
            raise ValueError(f"LIFESYNC_EXTRA_PAYMENT must be a number; got {raw!r}") from exc
        if not value.is_finite() or value < 0:
            raise ValueError(f"LIFESYNC_EXTRA_PAYMENT must be zero or more; got {raw!r}")
        return value


class DevConfig(BaseConfig):
    """Development configuration with verbose console logging."""

    DEBUG = True
    TESTING = False


class TestConfig(BaseConfig):
    """Configuration for test runs."""

    __test__ = False  # not a pytest test class
    DEBUG = False
    TESTING = True
