"""Tests for environment-driven configuration."""

from __future__ import annotations

from decimal import Decimal

import pytest

from lifesync.config import BaseConfig, DevConfig, TestConfig


def test_defaults(tmp_path):
    config = BaseConfig()

    assert config.DATA_DIR == (tmp_path / "instance").resolve()
    assert config.DATA_DIR.is_dir()
    assert config.DEV_MODE is False
    assert config.LOG_LEVEL == "INFO"
    assert config.DEFAULT_STRATEGIES == ("snowball", "avalanche")
    assert config.EXTRA_PAYMENT == Decimal("0")
    assert config.ALLOCATION == "fixed"


def test_data_dir_override(tmp_path):
    config = BaseConfig(data_dir=tmp_path / "elsewhere")

    assert config.DATA_DIR == (tmp_path / "elsewhere").resolve()
    assert config.DATA_DIR.exists()


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LIFESYNC_STRATEGIES", " Avalanche, custom ")
    monkeypatch.setenv("LIFESYNC_EXTRA_PAYMENT", "150.50")
    monkeypatch.setenv("LIFESYNC_ALLOCATION", "ROLLOVER")
    monkeypatch.setenv("LIFESYNC_DEV_MODE", "yes")

    config = BaseConfig()

    assert config.DEFAULT_STRATEGIES == ("avalanche", "custom")
    assert config.EXTRA_PAYMENT == Decimal("150.50")
    assert config.ALLOCATION == "rollover"
    assert config.DEV_MODE is True


@pytest.mark.parametrize(
    "name,value,message",
    [
        ("LIFESYNC_STRATEGIES", "snowball,fastest", "LIFESYNC_STRATEGIES"),
        ("LIFESYNC_STRATEGIES", " , ", "LIFESYNC_STRATEGIES"),
        ("LIFESYNC_ALLOCATION", "cascade", "LIFESYNC_ALLOCATION"),
        ("LIFESYNC_EXTRA_PAYMENT", "-5", "LIFESYNC_EXTRA_PAYMENT"),
        ("LIFESYNC_EXTRA_PAYMENT", "lots", "LIFESYNC_EXTRA_PAYMENT"),
    ],
)
def test_invalid_environment(monkeypatch, name, value, message):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError, match=message):
        BaseConfig()


def test_environment_specific_flags():
    assert DevConfig.DEBUG is True
    assert TestConfig.TESTING is True
    assert TestConfig().APP_NAME == "LifeSync"
