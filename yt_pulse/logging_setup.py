"""Logging configuration with a Rich handler on stderr."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_NOISY_LOGGERS = ("googleapiclient", "googleapiclient.discovery_cache", "httpx", "google_genai")


def setup_logging(log_level: str = "WARNING") -> None:
    level = getattr(logging, (log_level or "WARNING").upper(), logging.WARNING)

    logging.root.handlers.clear()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
