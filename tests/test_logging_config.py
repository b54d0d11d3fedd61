"""Tests for log level selection."""

import logging

import pytest

from streameo.logging_config import LOG_LEVEL_ENV, log_level_from_env


@pytest.mark.parametrize(
    "value, level",
    [
        ("DEBUG", logging.DEBUG),
        ("warning", logging.WARNING),
        (" error ", logging.ERROR),
        ("verbose", logging.INFO),
        ("", logging.INFO),
    ],
)
def test_log_level_from_env(value: str, level: int, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test known names map to levels and unknown ones fall back to INFO."""
    monkeypatch.setenv(LOG_LEVEL_ENV, value)

    assert log_level_from_env() == level


def test_log_level_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)

    assert log_level_from_env() == logging.INFO
