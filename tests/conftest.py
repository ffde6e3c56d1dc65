"""Pytest configuration and fixtures for timeboxer tests."""

import logging
import os
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from timeboxer import messaging
from timeboxer.clock import ManualClock
from timeboxer.settings import clear_settings_cache


@pytest.fixture(autouse=True)
def isolate_environment(tmp_path_factory):
    """Keep TIMEBOXER_* variables and the user's home out of the tests."""
    home = tmp_path_factory.mktemp("home")
    env = {k: v for k, v in os.environ.items() if not k.startswith("TIMEBOXER_")}
    env.pop("XDG_CONFIG_HOME", None)
    env.pop("XDG_CACHE_HOME", None)
    env["HOME"] = str(home)

    with patch.dict(os.environ, env, clear=True):
        clear_settings_cache()
        yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def reset_logging_and_console():
    """Undo configure_logging() and console swaps made by a test."""
    yield
    root = logging.getLogger("timeboxer")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.propagate = True
    root.setLevel(logging.NOTSET)
    messaging.set_console(None)


@pytest.fixture
def start():
    """Midnight UTC on 2000-01-01, a bucket boundary for every step used in tests."""
    return datetime(2000, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def clock(start):
    return ManualClock(start)
