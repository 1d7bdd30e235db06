"""Logging helpers for SajuEngine entry points."""

from __future__ import annotations

import logging
import os
from typing import Any

__all__ = ["configure_logging"]

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"
_LEVEL_VARIABLES = ("SAJUENGINE_LOG_LEVEL", "LOG_LEVEL")


def _coerce_level(value: str | int | None) -> int:
    """Return a logging level derived from ``value``.

    Accepts standard level names (case insensitive) or numeric levels.
    Anything else resolves to :data:`logging.INFO`.
    """

    if value is None:
        return logging.INFO

    if isinstance(value, int):
        return value

    candidate = value.strip()
    if not candidate:
        return logging.INFO

    if candidate.isdigit():
        return int(candidate)

    resolved = logging.getLevelName(candidate.upper())
    if isinstance(resolved, int):
        return resolved

    return logging.INFO


def configure_logging(*, level: str | int | None = None, **kwargs: Any) -> int:
    """Configure the root logger for the CLI and other entry points.

    ``level`` overrides ``SAJUENGINE_LOG_LEVEL``, which in turn overrides
    the generic ``LOG_LEVEL``. Remaining ``kwargs`` go to
    :func:`logging.basicConfig`. Returns the effective level.
    """

    raw_level = level
    if raw_level is None:
        raw_level = next(
            (os.environ[name] for name in _LEVEL_VARIABLES if os.environ.get(name)), None
        )
    effective_level = _coerce_level(raw_level)

    logging.basicConfig(
        level=effective_level,
        format=kwargs.pop("format", _DEFAULT_FORMAT),
        datefmt=kwargs.pop("datefmt", _DEFAULT_DATEFMT),
        force=kwargs.pop("force", True),
        **kwargs,
    )

    return effective_level
