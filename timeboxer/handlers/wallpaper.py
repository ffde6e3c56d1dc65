"""Progress-bar wallpaper images.

The wallpaper is a solid background with the top ``pct`` of the screen
painted in the foreground colour. Both colours may drift between two values
over the course of the day (e.g. bright in the morning, dim at night).
"""

import os
from datetime import time, timedelta, tzinfo
from typing import Optional, Sequence, Tuple, Union

import numpy as np
from matplotlib import image as mpimg

from timeboxer.clock import Clock, SystemClock
from timeboxer.handlers.color import RGBA, parse_color, transpose_color

DAY_SECONDS = 24 * 60 * 60

ColorLike = Union[RGBA, str]
TimeLike = Union[time, str]


def parse_time_of_day(value: TimeLike) -> int:
    """Return seconds since midnight for ``"HH:MM"``, ``"HH:MM:SS"`` or a time."""
    if isinstance(value, str):
        try:
            value = time.fromisoformat(value)
        except ValueError:
            raise ValueError(f"cannot parse time of day: {value!r}") from None
    return value.hour * 3600 + value.minute * 60 + value.second


def _normalize_colors(colors: Sequence[ColorLike], kind: str) -> Tuple[RGBA, RGBA]:
    colors = [c if isinstance(c, RGBA) else parse_color(c) for c in colors]
    if not colors:
        raise ValueError(f"{kind} color required")
    if len(colors) > 2:
        raise ValueError(f"too many {kind} colors specified")
    if len(colors) == 1:
        colors.append(colors[0])
    return colors[0], colors[1]


def _normalize_times(times: Sequence[TimeLike]) -> Tuple[int, int]:
    if len(times) == 0:
        return 0, DAY_SECONDS
    if len(times) == 1:
        return parse_time_of_day(times[0]), DAY_SECONDS
    if len(times) == 2:
        start, end = parse_time_of_day(times[0]), parse_time_of_day(times[1])
        if start > end:
            raise ValueError("times are out of order")
        return start, end
    raise ValueError("too many times specified")


class WallpaperGenerator:
    """Writes a PNG wallpaper for a given size and progress fraction.

    Args:
        foregrounds: One or two colours; with two, the colour moves from the
            first to the second across the ``times`` range.
        backgrounds: Same as ``foregrounds`` for the unfilled area.
        times: Zero, one or two times of day bounding the colour transition.
            None means the whole day, one means from then until midnight.
        clock: Source of the current time of day.
        tz: Timezone the times of day are expressed in (local by default).
    """

    def __init__(
        self,
        foregrounds: Sequence[ColorLike],
        backgrounds: Sequence[ColorLike],
        times: Sequence[TimeLike] = (),
        clock: Optional[Clock] = None,
        tz: Optional[tzinfo] = None,
    ):
        self.foregrounds = _normalize_colors(foregrounds, "foreground")
        self.backgrounds = _normalize_colors(backgrounds, "background")
        self.start, self.end = _normalize_times(times)
        self.clock = clock or SystemClock()
        self.tz = tz

    def transition(self) -> float:
        """Fraction of the way through the colour transition right now."""
        now = self.clock.now().astimezone(self.tz)
        t = (now - now.replace(hour=0, minute=0, second=0, microsecond=0)) / timedelta(seconds=1)
        if t < self.start:
            return 0.0
        if t > self.end or self.end == self.start:
            return 1.0
        return (t - self.start) / (self.end - self.start)

    def colors(self) -> Tuple[RGBA, RGBA]:
        """Current ``(foreground, background)`` pair."""
        pct = self.transition()
        return (
            transpose_color(self.foregrounds[0], self.foregrounds[1], pct),
            transpose_color(self.backgrounds[0], self.backgrounds[1], pct),
        )

    def render(self, width: int, height: int, pct: float) -> np.ndarray:
        """Return the wallpaper as a ``height x width x 4`` uint8 array."""
        fg, bg = self.colors()
        img = np.empty((height, width, 4), dtype=np.uint8)
        img[:, :] = bg
        img[: int(height * pct), :] = fg
        return img

    def __call__(self, path: str, width: int, height: int, pct: float) -> None:
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        mpimg.imsave(path, self.render(width, height, pct), format="png")
