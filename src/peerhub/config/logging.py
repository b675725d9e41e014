"""Shared logging helpers for peerhub."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure root logging for CLI runs.

    Engine and HTTP client loggers stay at WARNING so per-record import lines are
    not buried. ``force=True`` replaces handlers installed earlier, e.g. by pytest.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
