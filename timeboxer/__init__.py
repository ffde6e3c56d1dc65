import importlib.metadata

try:
    _detected_version = importlib.metadata.version("timeboxer")
    __version__ = _detected_version if _detected_version else "0.0.0-dev"
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.0.0-dev"

from timeboxer.clock import Clock, ManualClock, SystemClock
from timeboxer.errors import (
    CommandError,
    ConfigError,
    ExecutorError,
    HandlerError,
    TimeboxerError,
)
from timeboxer.ticker import ZERO_TIME, Command, CommandStats, Handler, Ticker, quantize

__all__ = [
    "__version__",
    # Clocks
    "Clock",
    "ManualClock",
    "SystemClock",
    # Scheduling
    "Command",
    "CommandStats",
    "Handler",
    "Ticker",
    "ZERO_TIME",
    "quantize",
    # Errors
    "TimeboxerError",
    "CommandError",
    "ConfigError",
    "ExecutorError",
    "HandlerError",
]
