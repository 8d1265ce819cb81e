"""Packed 24-bit RGB colors and label shading."""

import math

DEFAULT_CURRENT_BG = 0x405D7E
DEFAULT_INCOMING_BG = 0x314753
DEFAULT_ANCESTOR_BG = 0x68217A

DEFAULT_SHADE_AMOUNT = 60


def split_rgb(color: int) -> tuple[int, int, int]:
    """Decompose a packed color into (r, g, b)."""
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def join_rgb(r: int, g: int, b: int) -> int:
    """Pack (r, g, b) channels into one integer."""
    return (r << 16) | (g << 8) | b


def shade(color: int, amount: int = DEFAULT_SHADE_AMOUNT) -> int:
    """Darken a packed color by amount percent.

    Each channel becomes floor(c * (100 - amount) / 100), kept within
    0..255. amount=0 returns the color unchanged and amount=100
    returns black.
    """
    def scale(channel: int) -> int:
        value = math.floor(channel * (100 - amount) / 100)
        return min(max(value, 0), 0xFF)

    r, g, b = split_rgb(color)
    return join_rgb(scale(r), scale(g), scale(b))


def to_hex(color: int) -> str:
    """Format a packed color as #rrggbb."""
    return f"#{color & 0xFFFFFF:06x}"


def parse_color(value: int | str) -> int:
    """Convert an int, "#rrggbb" or "0xRRGGBB" value to a packed color.

    Raises:
        ValueError: If the value is not a 24-bit color
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a color: {value!r}")
    if isinstance(value, int):
        color = value
    else:
        text = value.strip()
        if text.startswith("#"):
            text = text[1:]
        elif text.lower().startswith("0x"):
            text = text[2:]
        if len(text) != 6:
            raise ValueError(f"Not a color: {value!r}")
        try:
            color = int(text, 16)
        except ValueError:
            raise ValueError(f"Not a color: {value!r}") from None

    if not 0 <= color <= 0xFFFFFF:
        raise ValueError(f"Color out of range: {value!r}")
    return color
