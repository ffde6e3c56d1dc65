"""
Configuration for timeboxer.

Two layers:

- RuntimeSettings: process-level knobs (poll cadence, paths, log level)
  loaded by pydantic-settings from ``TIMEBOXER_*`` environment variables.
- Config: which commands to run and how, read from a TOML file:

    work_dir = "/tmp/timeboxer"

    [wallpaper]
    enabled    = true
    step       = "1m"
    interval   = "15m"
    foreground = ["#534B4D", "#202020"]
    background = "#9AC97C"
    times      = ["08:00", "20:00"]

    [menu_bar]
    enabled  = true
    step     = "5m"
    interval = "15m"

    [announcement]
    enabled  = true
    interval = "1h"
    voice    = "Alex"

Usage:
    from timeboxer.settings import get_settings, load_config

    settings = get_settings()
    config = load_config(settings.config_file)
"""

from __future__ import annotations

import os
import re
import tomllib
from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from timeboxer.errors import ConfigError
from timeboxer.handlers.color import parse_color
from timeboxer.handlers.wallpaper import parse_time_of_day

# =============================================================================
# Durations
# =============================================================================

_DURATION_UNITS = {
    "ms": timedelta(milliseconds=1),
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "d": timedelta(days=1),
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ms|s|m|h|d)")


def parse_duration(text: str) -> timedelta:
    """Parse a duration like '90s', '15m', '1h30m' or '1.5h' into a timedelta.

    A bare '0' is accepted as the zero duration.
    """
    s = text.strip().lower()
    if s == "0":
        return timedelta(0)
    if not s:
        raise ValueError(f"invalid duration: {text!r}")

    total = timedelta(0)
    pos = 0
    while pos < len(s):
        match = _DURATION_PART.match(s, pos)
        if not match:
            raise ValueError(f"invalid duration: {text!r}")
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    return total


def format_duration(d: timedelta) -> str:
    """Render a timedelta the way parse_duration reads it ('1h30m', '45s')."""
    if not d:
        return "0s"
    ms = d // timedelta(milliseconds=1)
    sign = "-" if ms < 0 else ""
    ms = abs(ms)
    hours, ms = divmod(ms, 3_600_000)
    minutes, ms = divmod(ms, 60_000)
    seconds, ms = divmod(ms, 1000)

    parts = []
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if seconds:
        parts.append(f"{seconds}s")
    if ms:
        parts.append(f"{ms}ms")
    return sign + "".join(parts)


def _coerce_duration(value: Any) -> Any:
    if isinstance(value, str):
        return parse_duration(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return timedelta(seconds=value)
    return value


# =============================================================================
# Paths
# =============================================================================


def _get_xdg_dir(env_var: str) -> Path:
    """XDG directory if ``env_var`` is set, otherwise ~/.timeboxer."""
    xdg_base = os.getenv(env_var)
    if xdg_base:
        return Path(xdg_base) / "timeboxer"
    return Path.home() / ".timeboxer"


# =============================================================================
# Runtime Settings
# =============================================================================


class RuntimeSettings(BaseSettings):
    """Process-level settings, overridable through TIMEBOXER_* variables."""

    model_config = SettingsConfigDict(
        env_prefix="TIMEBOXER_",
        extra="ignore",
        case_sensitive=False,
    )

    tick_interval: float = Field(
        default=1.0,
        gt=0,
        description="Seconds to sleep between polls",
    )
    config_file: Optional[Path] = Field(
        default=None,
        description="Path to the TOML config file",
    )
    work_dir: Optional[Path] = Field(
        default=None,
        description="Where generated files (wallpapers) are written",
    )
    log_level: str = Field(default="INFO", description="Logging level")

    @property
    def config_dir(self) -> Path:
        return _get_xdg_dir("XDG_CONFIG_HOME")

    @property
    def cache_dir(self) -> Path:
        return _get_xdg_dir("XDG_CACHE_HOME")

    @property
    def resolved_config_file(self) -> Path:
        return self.config_file or self.config_dir / "timeboxer.toml"


@lru_cache(maxsize=1)
def get_settings() -> RuntimeSettings:
    """Get the cached settings singleton. Call clear_settings_cache() to reload."""
    return RuntimeSettings()


def clear_settings_cache() -> None:
    get_settings.cache_clear()


# =============================================================================
# Command Configuration (TOML)
# =============================================================================


class CommandConfig(BaseModel):
    """Shared schedule fields of every [section]."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = False
    step: timedelta = timedelta(0)
    interval: timedelta = timedelta(minutes=15)

    @field_validator("step", "interval", mode="before")
    @classmethod
    def _parse_duration(cls, value: Any) -> Any:
        return _coerce_duration(value)

    @model_validator(mode="after")
    def _check_schedule(self) -> "CommandConfig":
        if self.interval <= timedelta(0):
            raise ValueError("interval must be positive")
        if self.step < timedelta(0):
            raise ValueError("step must not be negative")
        if self.step > self.interval:
            raise ValueError("step must not be larger than interval")
        return self


def _as_list(value: Any) -> Any:
    if isinstance(value, str):
        return [value]
    return value


class WallpaperConfig(CommandConfig):
    step: timedelta = timedelta(minutes=1)
    interval: timedelta = timedelta(minutes=15)
    foreground: List[str] = Field(default_factory=lambda: ["#534B4D"])
    background: List[str] = Field(default_factory=lambda: ["#9AC97C"])
    times: List[str] = Field(default_factory=list)

    @field_validator("foreground", "background", mode="before")
    @classmethod
    def _wrap_color(cls, value: Any) -> Any:
        return _as_list(value)

    @field_validator("foreground", "background")
    @classmethod
    def _check_colors(cls, value: List[str]) -> List[str]:
        if not 1 <= len(value) <= 2:
            raise ValueError("expected one or two colors")
        for c in value:
            parse_color(c)
        return value

    @field_validator("times")
    @classmethod
    def _check_times(cls, value: List[str]) -> List[str]:
        if len(value) > 2:
            raise ValueError("too many times specified")
        seconds = [parse_time_of_day(t) for t in value]
        if seconds != sorted(seconds):
            raise ValueError("times are out of order")
        return value


class MenuBarConfig(CommandConfig):
    step: timedelta = timedelta(minutes=5)
    interval: timedelta = timedelta(minutes=15)


class AnnouncementConfig(CommandConfig):
    interval: timedelta = timedelta(hours=1)
    voice: str = "Alex"


class LogConfig(CommandConfig):
    step: timedelta = timedelta(minutes=1)
    interval: timedelta = timedelta(minutes=15)


class Config(BaseModel):
    """Contents of the TOML config file."""

    model_config = ConfigDict(extra="forbid")

    work_dir: Optional[str] = None
    wallpaper: WallpaperConfig = Field(default_factory=WallpaperConfig)
    menu_bar: MenuBarConfig = Field(default_factory=MenuBarConfig)
    announcement: AnnouncementConfig = Field(default_factory=AnnouncementConfig)
    log: LogConfig = Field(default_factory=LogConfig)


def _validate(data: dict[str, Any], source: str) -> Config:
    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid config {source}: {e}") from e


def parse_config(text: str) -> Config:
    """Parse TOML text into a Config."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"cannot parse config: {e}") from e
    return _validate(data, "<string>")


def load_config(path: Optional[Union[str, Path]] = None) -> Config:
    """Load the config file, defaulting to the settings' config path."""
    path = Path(path) if path else get_settings().resolved_config_file
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        raise ConfigError(f"config file not found: {path}") from None
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"cannot parse config {path}: {e}") from e
    return _validate(data, str(path))
