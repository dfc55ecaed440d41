"""Logging setup: standard logging routed through rich on stderr."""

import logging

from rich.console import Console
from rich.logging import RichHandler

_configured = False


def setup_logging(level: str = "WARNING") -> None:
    """Configure the root fintrack logger once.

    Args:
        level: Level name such as "DEBUG" or "INFO". Unknown names fall back to WARNING.
    """
    global _configured

    logger = logging.getLogger("fintrack")
    resolved = logging.getLevelName(level.upper())
    logger.setLevel(resolved if isinstance(resolved, int) else logging.WARNING)

    if _configured:
        return

    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    _configured = True
