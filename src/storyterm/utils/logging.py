"""Logging helpers for storyterm."""
from __future__ import annotations

import logging
import sys
from typing import Optional

DEFAULT_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: int = logging.WARNING, format: Optional[str] = None) -> None:
    """Ensure the root logger is configured exactly once.

    Logs go to stderr so they never interleave with the story on stdout.
    """
    if logging.getLogger().handlers:
        return

    logging.basicConfig(
        level=level,
        format=format or DEFAULT_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )
