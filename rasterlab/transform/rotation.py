"""
Rotation Module

Rotates a packed buffer about its center with nearest-pixel sampling.
"""

import logging
import math
from typing import Tuple

import numpy as np

from ..constants import ROTATION_BACKGROUND

logger = logging.getLogger(__name__)


def rotated_canvas_size(width: int, height: int, degrees: float) -> Tuple[int, int]:
    """
    Size of the box that holds a width x height picture rotated by degrees.

    Args:
        width: Source width
        height: Source height
        degrees: Rotation angle

    Returns:
        Tuple of (new_width, new_height), each at least 1
    """
    theta = degrees * math.pi / 180
    cos = abs(math.cos(theta))
    sin = abs(math.sin(theta))
    new_width = int(cos * width + sin * height)
    new_height = int(sin * width + cos * height)
    return max(1, new_width), max(1, new_height)


def source_coordinates(
    width: int,
    height: int,
    new_width: int,
    new_height: int,
    degrees: float
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Map every destination pixel back to a source pixel.

    Both pictures share their center ((w // 2, h // 2) in each). The inverse
    rotation is applied and the result truncated toward zero.

    Returns:
        Tuple of (source_x, source_y) int arrays of shape (new_height, new_width)
    """
    theta = degrees * math.pi / 180
    cos = math.cos(theta)
    sin = math.sin(theta)

    dx = (np.arange(new_width) - new_width // 2)[np.newaxis, :].astype(np.float64)
    dy = (np.arange(new_height) - new_height // 2)[:, np.newaxis].astype(np.float64)

    source_x = np.trunc(dx * cos + dy * sin + width // 2).astype(np.int64)
    source_y = np.trunc(-dx * sin + dy * cos + height // 2).astype(np.int64)
    return source_x, source_y


def rotate(pixels: np.ndarray, degrees: float) -> np.ndarray:
    """
    Rotate clockwise (y pointing down) by degrees about the center.

    The canvas is large enough to hold the whole rotated source. Pixels that
    map outside the source stay white.

    Args:
        pixels: Packed color buffer
        degrees: Rotation angle

    Returns:
        Rotated packed buffer
    """
    height, width = pixels.shape
    new_width, new_height = rotated_canvas_size(width, height, degrees)

    source_x, source_y = source_coordinates(width, height, new_width, new_height, degrees)
    inside = (
        (source_x >= 0)
        & (source_y >= 0)
        & (source_x < width)
        & (source_y < height)
    )

    rotated = np.full((new_height, new_width), ROTATION_BACKGROUND, dtype=np.uint32)
    rotated[inside] = pixels[source_y[inside], source_x[inside]]

    logger.debug(
        f"Rotated {width}x{height} by {degrees} deg -> {new_width}x{new_height}, "
        f"{int(inside.sum())} pixels sampled"
    )
    return rotated
