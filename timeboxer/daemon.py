"""Foreground polling loop for timeboxer.

Builds a Ticker from the config file and polls it at a fixed cadence until
SIGINT/SIGTERM. All timing is plain sleep-then-poll; there are no timers or
background threads.
"""

import logging
import os
import signal
import time
from typing import Optional

from timeboxer.clock import Clock
from timeboxer.handlers.executor import CommandExecutor, default_command_executor
from timeboxer.handlers.log import LogHandler
from timeboxer.handlers.macos import (
    AnnouncementHandler,
    MenuBarHandler,
    WallpaperHandler,
    desktop_size,
)
from timeboxer.handlers.wallpaper import WallpaperGenerator
from timeboxer.settings import Config
from timeboxer.ticker import Command, Ticker

logger = logging.getLogger(__name__)

# Global flag for graceful shutdown
_shutdown_requested = False


def build_ticker(
    config: Config,
    executor: CommandExecutor = default_command_executor,
    clock: Optional[Clock] = None,
    work_dir: Optional[str] = None,
) -> Ticker:
    """Create a ticker with one command per enabled config section.

    Commands are registered in a fixed order: wallpaper, menu_bar,
    announcement, log.
    """
    ticker = Ticker(clock=clock)
    work_dir = work_dir or config.work_dir or "."

    if config.wallpaper.enabled:
        c = config.wallpaper
        generator = WallpaperGenerator(c.foreground, c.background, c.times, clock=clock)
        ticker.add(
            Command(
                name="wallpaper",
                step=c.step,
                interval=c.interval,
                handler=WallpaperHandler(
                    executor, desktop_size, generator, os.path.join(work_dir, "wallpaper")
                ),
            )
        )

    if config.menu_bar.enabled:
        c = config.menu_bar
        ticker.add(
            Command(
                name="menu_bar",
                step=c.step,
                interval=c.interval,
                handler=MenuBarHandler(executor),
            )
        )

    if config.announcement.enabled:
        c = config.announcement
        ticker.add(
            Command(
                name="announcement",
                step=c.step,
                interval=c.interval,
                handler=AnnouncementHandler(executor, clock=clock, voice=c.voice),
            )
        )

    if config.log.enabled:
        c = config.log
        ticker.add(
            Command(
                name="log",
                step=c.step,
                interval=c.interval,
                handler=LogHandler(),
            )
        )

    return ticker


def request_shutdown() -> None:
    global _shutdown_requested
    _shutdown_requested = True


def signal_handler(signum, frame):
    """Handle shutdown signals."""
    logger.info(f"Received signal {signum}, shutting down...")
    request_shutdown()


def run_loop(ticker: Ticker, tick_interval: float = 1.0) -> None:
    """Poll ``ticker`` every ``tick_interval`` seconds until shutdown."""
    global _shutdown_requested
    if tick_interval <= 0:
        raise ValueError(f"tick interval must be positive, got {tick_interval}")
    _shutdown_requested = False

    logger.debug(f"Poll interval: {tick_interval}s")

    while not _shutdown_requested:
        try:
            fired = ticker.poll()
            if fired:
                logger.debug(f"Poll fired {fired} handler(s)")
        except Exception as e:
            logger.error(f"Error in loop: {e}")

        if _shutdown_requested:
            break
        time.sleep(tick_interval)

    logger.info("Timeboxer stopped")


def start_daemon(ticker: Ticker, tick_interval: float = 1.0) -> None:
    """Install signal handlers and run the loop in the foreground."""
    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    run_loop(ticker, tick_interval)
