"""Swiss Ephemeris access for :mod:`sajuengine`."""

from __future__ import annotations

from .swe import has_swe, reset_swe, swe, use_ephemeris_path

__all__ = ["swe", "reset_swe", "has_swe", "use_ephemeris_path"]
