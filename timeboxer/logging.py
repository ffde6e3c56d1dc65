"""Logging setup shared by the CLI and the daemon.

Modules log through ``logging.getLogger(__name__)``; entry points call
configure_logging() once so everything under the ``timeboxer`` logger ends up
in a single Rich handler on stderr.
"""

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "timeboxer"

_handler: Optional[RichHandler] = None


def configure_logging(
    level: Union[int, str] = logging.INFO,
    console: Optional[Console] = None,
) -> logging.Logger:
    """Attach a RichHandler to the package logger and set its level.

    Calling this again replaces the previous handler instead of stacking a
    second one. Unknown level names fall back to INFO.
    """
    global _handler

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger(ROOT_LOGGER)
    if _handler is not None:
        root.removeHandler(_handler)

    _handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    _handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root.addHandler(_handler)
    root.setLevel(level)
    root.propagate = False
    return root
