"""
Color Module

Packed color helpers. A packed color is an int with alpha in bits 24-31,
red in 16-23, green in 8-15 and blue in 0-7.
"""

import logging
import math
from typing import Tuple

import numpy as np

from ..constants import (
    ALPHA_SHIFT,
    RED_SHIFT,
    GREEN_SHIFT,
    BLUE_SHIFT,
    CHANNEL_MASK,
    MAX_CHANNEL_VALUE,
    LUMINANCE_RED_WEIGHT,
    LUMINANCE_GREEN_WEIGHT,
    LUMINANCE_BLUE_WEIGHT,
    COMPATIBLE_LUMINANCE_DELTA,
)

logger = logging.getLogger(__name__)


def pack_rgb(r: int, g: int, b: int, alpha: int = MAX_CHANNEL_VALUE) -> int:
    """Pack 8-bit channels into a single color int."""
    for name, value in (("alpha", alpha), ("red", r), ("green", g), ("blue", b)):
        if not 0 <= value <= MAX_CHANNEL_VALUE:
            raise ValueError(f"{name} must be between 0 and {MAX_CHANNEL_VALUE}: {value}")
    return (
        (alpha << ALPHA_SHIFT)
        | (r << RED_SHIFT)
        | (g << GREEN_SHIFT)
        | (b << BLUE_SHIFT)
    )


def alpha(color: int) -> int:
    return (color >> ALPHA_SHIFT) & CHANNEL_MASK


def red(color: int) -> int:
    return (color >> RED_SHIFT) & CHANNEL_MASK


def green(color: int) -> int:
    return (color >> GREEN_SHIFT) & CHANNEL_MASK


def blue(color: int) -> int:
    return (color >> BLUE_SHIFT) & CHANNEL_MASK


def unpack(color: int) -> Tuple[int, int, int, int]:
    """Split a packed color into (alpha, red, green, blue)."""
    return alpha(color), red(color), green(color), blue(color)


def intensity(color: int) -> float:
    """
    Monochrome luminance of a color using Y = 0.299r + 0.587g + 0.114b.

    Shades of gray (r == g == b) return the exact channel value so there
    is no floating-point roundoff.

    Args:
        color: Packed color

    Returns:
        Luminance between 0.0 and 255.0
    """
    r, g, b = red(color), green(color), blue(color)
    if r == g == b:
        return float(r)
    return LUMINANCE_RED_WEIGHT * r + LUMINANCE_GREEN_WEIGHT * g + LUMINANCE_BLUE_WEIGHT * b


def to_gray(color: int) -> int:
    """Grayscale version of a color, rounded half up. Alpha is kept."""
    y = int(math.floor(intensity(color) + 0.5))
    return pack_rgb(y, y, y, alpha(color))


def are_compatible(a: int, b: int) -> bool:
    """Two colors are compatible if their luminances differ by at least 128."""
    return abs(intensity(a) - intensity(b)) >= COMPATIBLE_LUMINANCE_DELTA


def format_hex(color: int) -> str:
    """Format the RGB part of a color as #RRGGBB."""
    return f"#{color & 0xFFFFFF:06X}"


def parse_color(text: str) -> int:
    """
    Parse '#RRGGBB', '0xRRGGBB' or '0xAARRGGBB' into a packed color.

    Six-digit forms are opaque.

    Raises:
        ValueError: If the text is not a hex color
    """
    value = text.strip()
    if value.startswith("#"):
        digits = value[1:]
    elif value.lower().startswith("0x"):
        digits = value[2:]
    else:
        raise ValueError(f"Invalid color: {text}")

    if len(digits) not in (6, 8):
        raise ValueError(f"Invalid color: {text}")

    try:
        color = int(digits, 16)
    except ValueError:
        raise ValueError(f"Invalid color: {text}")

    if len(digits) == 6:
        color |= MAX_CHANNEL_VALUE << ALPHA_SHIFT
    logger.debug(f"Parsed color {text!r} as {color:#010x}")
    return color


# =============================================================================
# WHOLE-BUFFER HELPERS
# =============================================================================

def split_channels(pixels: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Split a packed uint32 buffer into four int64 channel arrays.

    Args:
        pixels: Packed colors, any shape

    Returns:
        Tuple of (alpha, red, green, blue) arrays with the input's shape
    """
    packed = pixels.astype(np.int64)
    return (
        (packed >> ALPHA_SHIFT) & CHANNEL_MASK,
        (packed >> RED_SHIFT) & CHANNEL_MASK,
        (packed >> GREEN_SHIFT) & CHANNEL_MASK,
        (packed >> BLUE_SHIFT) & CHANNEL_MASK,
    )


def merge_channels(a: np.ndarray, r: np.ndarray, g: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Pack four channel arrays back into a uint32 buffer."""
    packed = (
        (a.astype(np.int64) << ALPHA_SHIFT)
        | (r.astype(np.int64) << RED_SHIFT)
        | (g.astype(np.int64) << GREEN_SHIFT)
        | (b.astype(np.int64) << BLUE_SHIFT)
    )
    return packed.astype(np.uint32)


def intensity_array(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Vectorised intensity(): exact for gray pixels, NTSC weights otherwise."""
    weighted = (
        LUMINANCE_RED_WEIGHT * r
        + LUMINANCE_GREEN_WEIGHT * g
        + LUMINANCE_BLUE_WEIGHT * b
    )
    is_gray = (r == g) & (g == b)
    return np.where(is_gray, r.astype(np.float64), weighted)
