"""Entry point for ``python -m sajuengine.cli``."""

from __future__ import annotations

from .app import app

if __name__ == "__main__":  # pragma: no cover
    app(prog_name="sajuengine")
