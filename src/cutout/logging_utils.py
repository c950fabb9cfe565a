"""
Logging setup for the command-line tool.

All modules log through ``logging.getLogger(__name__)`` under the
``cutout`` namespace; the CLI attaches one stderr handler to that logger.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "cutout"


def configure_cli_logging(verbose: bool = False, stream: Optional[TextIO] = None) -> logging.Handler:
    """
    Attach a plain-message stderr handler to the package logger.

    Args:
        verbose: DEBUG level if True, INFO otherwise.
        stream: Destination stream. Defaults to sys.stderr at call time.

    Returns:
        The attached handler (for later removal).
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return handler


def detach_cli_logging(handler: logging.Handler) -> None:
    """Remove a handler added by configure_cli_logging."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.removeHandler(handler)
    handler.close()
