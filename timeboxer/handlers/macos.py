"""Handlers that drive the macOS desktop through AppleScript.

Each handler runs its script through a CommandExecutor and turns any
failure into a HandlerError whose message says which step failed.
"""

import os
import re
from datetime import datetime
from typing import Callable, Optional, Tuple

from timeboxer.clock import Clock, SystemClock
from timeboxer.errors import ExecutorError, HandlerError
from timeboxer.handlers.executor import CommandExecutor

OSASCRIPT_PATH = "/usr/bin/osascript"
SAY_PATH = "/usr/bin/say"

SET_WALLPAPER_SCRIPT = """
tell application "Finder"
  set desktop picture to POSIX file "{path}"
end tell
""".strip()

DESKTOP_SIZE_SCRIPT = """
tell application "Finder"
  get bounds of window of desktop
end tell
""".strip()

# Toggles dark mode every half second for 30 seconds.
FLASH_DARK_MODE_SCRIPT = """
tell application "System Events"
  tell appearance preferences
    repeat 30 times
      set dark mode to true
      delay 0.5
      set dark mode to false
      delay 0.5
    end repeat
  end tell
end tell
""".strip()

DISPLAY_NOTIFICATION_SCRIPT = 'display notification "{message}" with title "Timeboxer"'

_BOUNDS = re.compile(r"^\d+, \d+, (\d+), (\d+)")

DesktopSizer = Callable[[CommandExecutor], Tuple[int, int]]
Generator = Callable[[str, int, int, float], None]


def _output(e: ExecutorError) -> str:
    return e.output.decode(errors="replace").strip() or str(e)


def desktop_size(executor: CommandExecutor) -> Tuple[int, int]:
    """Return ``(width, height)`` of the desktop as reported by Finder."""
    try:
        out = executor(OSASCRIPT_PATH, None, DESKTOP_SIZE_SCRIPT)
    except ExecutorError as e:
        raise HandlerError(f"exec: {_output(e)}") from e

    text = out.decode(errors="replace")
    m = _BOUNDS.match(text)
    if not m:
        raise HandlerError(f"unexpected exec output: {text}")
    return int(m.group(1)), int(m.group(2))


def format_clock_time(t: datetime) -> str:
    """Format like ``3:04pm``."""
    hour = t.hour % 12 or 12
    suffix = "am" if t.hour < 12 else "pm"
    return f"{hour}:{t.minute:02d}{suffix}"


class WallpaperHandler:
    """Shows progress through the interval as the desktop wallpaper.

    Images are cached under ``path`` by screen size and step, so a change of
    resolution produces a fresh image on the next step.
    """

    def __init__(
        self,
        executor: CommandExecutor,
        sizer: DesktopSizer,
        generator: Generator,
        path: str,
    ):
        self.executor = executor
        self.sizer = sizer
        self.generator = generator
        self.path = path

    def image_path(self, width: int, height: int, step_index: int, step_count: int) -> str:
        name = f"wallpaper_{width:04d}_{height:04d}_{step_index:02d}_{step_count:02d}.png"
        return os.path.join(self.path, name)

    def __call__(self, step_index: int, step_count: int) -> None:
        try:
            w, h = self.sizer(self.executor)
        except Exception as e:
            raise HandlerError(f"desktop size: {e}") from e

        imgpath = self.image_path(w, h, step_index, step_count)
        if not os.path.exists(imgpath):
            try:
                self.generator(imgpath, w, h, step_index / step_count)
            except Exception as e:
                raise HandlerError(f"generate wallpaper: {e}") from e

        try:
            self.executor(OSASCRIPT_PATH, None, SET_WALLPAPER_SCRIPT.format(path=imgpath))
        except ExecutorError as e:
            raise HandlerError(f"exec: {_output(e)}") from e


class MenuBarHandler:
    """Flashes the menu bar by toggling dark mode."""

    def __init__(self, executor: CommandExecutor):
        self.executor = executor

    def __call__(self, step_index: int, step_count: int) -> None:
        try:
            self.executor(OSASCRIPT_PATH, None, FLASH_DARK_MODE_SCRIPT)
        except ExecutorError as e:
            raise HandlerError(f"exec flash: {_output(e)}") from e


class AnnouncementHandler:
    """Announces the current time as a notification, and out loud if a voice is set."""

    def __init__(
        self,
        executor: CommandExecutor,
        clock: Optional[Clock] = None,
        voice: str = "",
    ):
        self.executor = executor
        self.clock = clock or SystemClock()
        self.voice = voice

    def __call__(self, step_index: int, step_count: int) -> None:
        text = format_clock_time(self.clock.now().astimezone())

        if self.voice:
            try:
                self.executor(SAY_PATH, ["-v", self.voice, f"It is {text}"], "")
            except ExecutorError as e:
                raise HandlerError(f"exec say: {_output(e)}") from e

        try:
            self.executor(
                OSASCRIPT_PATH, None, DISPLAY_NOTIFICATION_SCRIPT.format(message=text)
            )
        except ExecutorError as e:
            raise HandlerError(f"exec display notification: {_output(e)}") from e
