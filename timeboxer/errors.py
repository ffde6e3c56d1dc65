"""Exception types raised across timeboxer."""

from typing import Optional


class TimeboxerError(Exception):
    """Base class for all timeboxer errors."""


class CommandError(TimeboxerError, ValueError):
    """A command was configured with an invalid step or interval."""


class HandlerError(TimeboxerError):
    """A handler could not perform its side effect."""


class ConfigError(TimeboxerError):
    """The configuration file is missing, malformed or invalid."""


class ExecutorError(TimeboxerError):
    """An OS command exited unsuccessfully.

    The combined stdout/stderr of the process is kept on ``output`` so
    handlers can surface what the command printed.
    """

    def __init__(self, message: str, output: bytes = b"", returncode: Optional[int] = None):
        super().__init__(message)
        self.output = output
        self.returncode = returncode
