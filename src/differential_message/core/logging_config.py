"""Process-wide logging setup for the entry points."""

from __future__ import annotations

import logging
import os


def configure_logging() -> None:
    """Configure a reasonable default logging setup.

    Entry points log to stderr; keeping logs concise makes them easier to consume.
    """
    level_name = os.getenv("DIFF_MESSAGE_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
