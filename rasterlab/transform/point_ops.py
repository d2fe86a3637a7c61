"""
Point Operations Module

Per-pixel transforms on packed (H, W) uint32 buffers in top-left order.
Alpha passes through unchanged.
"""

import logging

import numpy as np

from ..constants import (
    MAX_CHANNEL_VALUE,
    POSTERIZE_LOW_MAX,
    POSTERIZE_MID_MAX,
    POSTERIZE_LOW_LEVEL,
    POSTERIZE_MID_LEVEL,
    POSTERIZE_HIGH_LEVEL,
)
from ..core.color import split_channels, merge_channels, intensity_array
from ..core.quadrilateral import Quadrilateral

logger = logging.getLogger(__name__)


def to_grayscale(pixels: np.ndarray) -> np.ndarray:
    """
    Replace every pixel by (Y, Y, Y), Y the luminance rounded half up.

    Args:
        pixels: Packed color buffer

    Returns:
        Grayscale packed buffer
    """
    a, r, g, b = split_channels(pixels)
    y = np.floor(intensity_array(r, g, b) + 0.5).astype(np.int64)
    return merge_channels(a, y, y, y)


def keep_red(pixels: np.ndarray) -> np.ndarray:
    """Zero the green and blue channels."""
    a, r, _, _ = split_channels(pixels)
    zeros = np.zeros_like(r)
    return merge_channels(a, r, zeros, zeros)


def mirror(pixels: np.ndarray) -> np.ndarray:
    """Reverse the column order: out[x, y] = in[W-1-x, y]."""
    return pixels[:, ::-1].copy()


def negate(pixels: np.ndarray) -> np.ndarray:
    """Each channel becomes 255 - value."""
    a, r, g, b = split_channels(pixels)
    return merge_channels(
        a,
        MAX_CHANNEL_VALUE - r,
        MAX_CHANNEL_VALUE - g,
        MAX_CHANNEL_VALUE - b,
    )


def posterize_channel(channel: np.ndarray) -> np.ndarray:
    """
    Map a channel to three levels.

    [0, 64] -> 32, (64, 128] -> 96, (128, 255] -> 222.
    """
    return np.where(
        channel <= POSTERIZE_LOW_MAX,
        POSTERIZE_LOW_LEVEL,
        np.where(channel <= POSTERIZE_MID_MAX, POSTERIZE_MID_LEVEL, POSTERIZE_HIGH_LEVEL),
    )


def posterize(pixels: np.ndarray) -> np.ndarray:
    a, r, g, b = split_channels(pixels)
    return merge_channels(a, posterize_channel(r), posterize_channel(g), posterize_channel(b))


def clip(pixels: np.ndarray, box: Quadrilateral) -> np.ndarray:
    """Sub-buffer covered by box. The caller checks that the box fits."""
    return pixels[
        box.y_top_left:box.y_bottom_right + 1,
        box.x_top_left:box.x_bottom_right + 1,
    ].copy()
