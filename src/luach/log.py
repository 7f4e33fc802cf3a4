"""Console logging for the luach command line.

Library modules only create loggers (`logging.getLogger(__name__)`); handlers
are installed here, by the CLI, and nowhere else.
"""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PROJECT_PREFIX = "luach"


def level_for(verbosity: int) -> int:
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def console_handler(level: int = logging.WARNING, color: bool = True) -> RichHandler:
    """RichHandler on stderr; debug level adds logger names and source paths."""
    debug_mode = level <= logging.DEBUG
    console = Console(color_system="auto" if color else None, stderr=True)
    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    fmt = "%(name)s: %(message)s" if debug_mode else "%(message)s"
    handler.setFormatter(logging.Formatter(fmt=fmt))
    return handler


def setup_logging(verbosity: int = 0, *, color: bool = True, root: Optional[logging.Logger] = None) -> RichHandler:
    """Attach a console handler for the luach loggers; replaces one installed earlier."""
    level = level_for(verbosity)
    logger = root or logging.getLogger(PROJECT_PREFIX)
    for h in list(logger.handlers):
        if isinstance(h, RichHandler):
            logger.removeHandler(h)
    handler = console_handler(level, color=color)
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
