"""
Logging setup for the crudgen pipeline.

Modules log through ``logging.getLogger(__name__)``; everything lives under
the ``crudgen`` logger. The CLI calls configure_logging() once.
"""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "crudgen"


def configure_logging(verbose: bool = False, quiet: bool = False, console: Optional[Console] = None) -> None:
    """
    Configure the crudgen logger hierarchy.

    Levels:
        verbose -> DEBUG   (locator candidates, type resolution misses)
        default -> INFO    (parsed entities, written/skipped files, summary)
        quiet   -> WARNING (failures only)
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    root_logger = logging.getLogger(_LOGGER_NAME)
    root_logger.setLevel(level)

    # called again from tests / repeated CLI runs
    for h in root_logger.handlers:
        h.setLevel(level)
    if root_logger.handlers:
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
    root_logger.propagate = False
