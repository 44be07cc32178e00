"""Logging setup for the ``serf_members`` logger tree.

Modules log through ``logging.getLogger(__name__)``; only the CLI calls
:func:`configure_logging`, once per run.  Records always go to stderr so
that stdout carries nothing but member output.
"""

from __future__ import annotations

import logging
import sys

ROOT_LOGGER: str = "serf_members"

_PLAIN_FORMAT = "%(asctime)s [%(levelname)s] - %(message)s"
_PLAIN_DATEFMT = "%H:%M:%S"


def _build_handler() -> logging.Handler:
    """Rich handler on stderr, or a plain stream handler without Rich."""
    try:
        from rich.console import Console
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT, datefmt=_PLAIN_DATEFMT))
        return handler
    return RichHandler(console=Console(stderr=True), show_path=False)


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    DEBUG when *verbose*, WARNING otherwise.  Calling it again replaces
    the previous handler instead of stacking another one.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(_build_handler())
    logger.propagate = False
    return logger
