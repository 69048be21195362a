"""Logging configuration."""
from __future__ import annotations

import logging
import sys

_NOISY_LOGGERS = ("aiohttp", "web3", "urllib3", "mcp")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging to stderr.

    stdout is reserved for the MCP stdio transport.
    """
    numeric = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric, int):
        numeric = logging.INFO

    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )
    logging.getLogger().setLevel(numeric)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
