from __future__ import annotations

import logging

import pytest

from sajuengine.boot import configure_logging
from sajuengine.boot.logging import _coerce_level


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, logging.INFO),
        ("", logging.INFO),
        ("debug", logging.DEBUG),
        ("WARNING", logging.WARNING),
        ("15", 15),
        (logging.ERROR, logging.ERROR),
        ("nonsense", logging.INFO),
    ],
)
def test_coerce_level(raw: str | int | None, expected: int) -> None:
    assert _coerce_level(raw) == expected


def test_configure_logging_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """LOG_LEVEL applies when no explicit level is passed."""

    monkeypatch.delenv("SAJUENGINE_LOG_LEVEL", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "warning")
    assert configure_logging() == logging.WARNING
    assert logging.getLogger().level == logging.WARNING
    assert configure_logging(level="DEBUG") == logging.DEBUG


def test_package_level_variable_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    """SAJUENGINE_LOG_LEVEL takes precedence over the generic LOG_LEVEL."""

    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.setenv("SAJUENGINE_LOG_LEVEL", "error")
    assert configure_logging() == logging.ERROR
