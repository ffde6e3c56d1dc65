"""Hex colour parsing and interpolation."""

import re
from typing import NamedTuple

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")


class RGBA(NamedTuple):
    r: int
    g: int
    b: int
    a: int = 0xFF

    def hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


def parse_color(s: str) -> RGBA:
    """Parse ``"#RRGGBB"`` or ``"RRGGBB"`` into an opaque RGBA."""
    m = _HEX_COLOR.match(s)
    if not m:
        raise ValueError(f'cannot parse color: "{s}"')
    return RGBA(int(m.group(1), 16), int(m.group(2), 16), int(m.group(3), 16))


def _transpose_channel(a: int, b: int, pct: float) -> int:
    v = a + (b - a) * pct
    if v < 0:
        return 0
    if v > 0xFF:
        return 0xFF
    return int(v)


def transpose_color(a: RGBA, b: RGBA, pct: float) -> RGBA:
    """Return the colour ``pct`` of the way from ``a`` to ``b``."""
    return RGBA(*(_transpose_channel(x, y, pct) for x, y in zip(a, b)))
