"""User-facing console output.

One emit_* function per message level (info, success, warning, error). Each
prints escaped text in that level's style on a shared Rich console, which
tests can swap out with set_console().
"""

from enum import Enum
from typing import Dict, Optional

from rich.console import Console
from rich.markup import escape as escape_rich_markup


class MessageLevel(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    SUCCESS = "success"
    INFO = "info"


DEFAULT_STYLES: Dict[MessageLevel, str] = {
    MessageLevel.ERROR: "bold red",
    MessageLevel.WARNING: "yellow",
    MessageLevel.SUCCESS: "green",
    MessageLevel.INFO: "white",
}

_console: Optional[Console] = None


def get_console() -> Console:
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Optional[Console]) -> None:
    """Swap the console (tests pass one with ``record=True``)."""
    global _console
    _console = console


def emit(level: MessageLevel, text: str) -> None:
    get_console().print(escape_rich_markup(text), style=DEFAULT_STYLES[level])


def emit_info(text: str) -> None:
    emit(MessageLevel.INFO, text)


def emit_success(text: str) -> None:
    emit(MessageLevel.SUCCESS, text)


def emit_warning(text: str) -> None:
    emit(MessageLevel.WARNING, text)


def emit_error(text: str) -> None:
    emit(MessageLevel.ERROR, text)
