"""Logging setup for command-line runs."""
from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    handler = RichHandler(
        console=console or Console(stderr=True), show_path=False, markup=False
    )
    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if isinstance(existing, RichHandler):
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
