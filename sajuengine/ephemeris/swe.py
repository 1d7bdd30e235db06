"""Lazy access to the Swiss Ephemeris bindings.

Solar-term lookups only touch ``swisseph`` when a chart is computed, so the
module is imported on first use and a missing install surfaces as
:class:`~sajuengine.errors.EphemerisUnavailableError` at that point.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
from pathlib import Path
from typing import Any

from ..errors import EphemerisUnavailableError
from ..runtime_config import runtime_settings

__all__ = ["swe", "reset_swe", "has_swe", "use_ephemeris_path"]

LOG = logging.getLogger(__name__)

_swisseph: Any | None = None
_ephemeris_path: str | None = None


def _load_swisseph() -> Any:
    global _swisseph
    if _swisseph is None:
        try:
            _swisseph = importlib.import_module("swisseph")
        except ImportError as exc:  # pragma: no cover - depends on the environment
            raise EphemerisUnavailableError(
                "Solar terms need the Swiss Ephemeris bindings: pip install pyswisseph"
            ) from exc
    return _swisseph


class _SwissEphemeris:
    """Module stand-in resolving ``swisseph`` attributes on access."""

    def __call__(self) -> Any:
        return _load_swisseph()

    def __getattr__(self, item: str) -> Any:
        return getattr(_load_swisseph(), item)


swe = _SwissEphemeris()


def use_ephemeris_path(path: str | Path | None = None) -> str | None:
    """Point ``swisseph`` at ``path`` or, failing that, ``SE_EPHE_PATH``.

    Returns the directory in effect. Moshier charts ignore it, so ``None``
    is a valid outcome.
    """

    global _ephemeris_path
    resolved = path or runtime_settings().se_ephe_path
    if not resolved:
        return _ephemeris_path
    directory = str(resolved)
    if directory != _ephemeris_path:
        LOG.debug("Swiss Ephemeris data directory: %s", directory)
        swe.set_ephe_path(directory)
        _ephemeris_path = directory
    return _ephemeris_path


def reset_swe() -> None:
    """Drop the cached module and data directory (used by tests)."""

    global _swisseph, _ephemeris_path
    _swisseph = None
    _ephemeris_path = None


def has_swe() -> bool:
    if _swisseph is not None:
        return True
    return importlib.util.find_spec("swisseph") is not None
