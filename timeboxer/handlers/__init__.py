"""Built-in handlers and the pieces they are made of."""

from timeboxer.handlers.color import RGBA, parse_color, transpose_color
from timeboxer.handlers.executor import CommandExecutor, default_command_executor
from timeboxer.handlers.log import LogHandler
from timeboxer.handlers.macos import (
    AnnouncementHandler,
    MenuBarHandler,
    WallpaperHandler,
    desktop_size,
)
from timeboxer.handlers.wallpaper import WallpaperGenerator

__all__ = [
    "RGBA",
    "parse_color",
    "transpose_color",
    "CommandExecutor",
    "default_command_executor",
    "LogHandler",
    "AnnouncementHandler",
    "MenuBarHandler",
    "WallpaperHandler",
    "desktop_size",
    "WallpaperGenerator",
]
