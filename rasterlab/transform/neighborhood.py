"""
Neighborhood Filter Module

Window and block filters on packed (H, W) uint32 buffers.

Windows are read from the source buffer only. Neighbors outside the picture
are excluded from a window, so edge and corner windows hold fewer samples.
"""

import logging
from typing import Callable

import cv2
import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from ..constants import MAX_CHANNEL_VALUE, NEIGHBORHOOD_RADIUS
from ..core.color import split_channels, merge_channels

logger = logging.getLogger(__name__)


def neighborhood_windows(channel: np.ndarray, radius: int = NEIGHBORHOOD_RADIUS) -> np.ndarray:
    """
    Collect the (2r+1)x(2r+1) window around every pixel of one channel.

    Positions outside the picture are NaN.

    Args:
        channel: (H, W) channel values
        radius: Window radius

    Returns:
        (H, W, (2r+1)^2) float array of samples
    """
    size = 2 * radius + 1
    padded = np.pad(
        channel.astype(np.float64),
        radius,
        mode="constant",
        constant_values=np.nan,
    )
    windows = sliding_window_view(padded, (size, size))
    return windows.reshape(channel.shape[0], channel.shape[1], size * size)


def apply_channel_filter(
    pixels: np.ndarray,
    reducer: Callable[[np.ndarray], np.ndarray],
    radius: int = NEIGHBORHOOD_RADIUS
) -> np.ndarray:
    """
    Reduce the window of each pixel, per color channel.

    Args:
        pixels: Packed color buffer
        reducer: Maps (H, W, n) samples (NaN = absent) to (H, W) values
        radius: Window radius

    Returns:
        Filtered packed buffer; alpha of each pixel is kept
    """
    a, r, g, b = split_channels(pixels)
    filtered = []
    for channel in (r, g, b):
        values = reducer(neighborhood_windows(channel, radius))
        # Truncate toward zero; all values are non-negative
        filtered.append(np.floor(values).astype(np.int64))
    return merge_channels(a, *filtered)


def _median(windows: np.ndarray) -> np.ndarray:
    # Even sample counts give the mean of the two central values
    return np.nanmedian(windows, axis=-1)


def median_filter(pixels: np.ndarray) -> np.ndarray:
    """3x3 median per channel (denoise)."""
    return apply_channel_filter(pixels, _median)


def minimum_filter(pixels: np.ndarray) -> np.ndarray:
    """
    3x3 minimum per channel (weather). The minima may come from different pixels.

    Erodes each channel with a square kernel. The constant 255 border never
    wins the minimum, so only neighbors inside the picture count.
    """
    size = 2 * NEIGHBORHOOD_RADIUS + 1
    kernel = cv2.getStructuringElement(cv2.MORPH_RECT, (size, size))
    a, r, g, b = split_channels(pixels)
    eroded = [
        cv2.erode(
            channel.astype(np.uint8),
            kernel,
            borderType=cv2.BORDER_CONSTANT,
            borderValue=MAX_CHANNEL_VALUE,
        )
        for channel in (r, g, b)
    ]
    return merge_channels(a, *eroded)


def block_average(pixels: np.ndarray, box_size: int) -> np.ndarray:
    """
    Replace each box_size x box_size block by its per-channel average.

    Blocks tile the picture from (0, 0). Blocks on the right and bottom
    edges are clipped to the picture and averaged over the pixels they
    actually contain. Averages are truncated to int.

    Args:
        pixels: Packed color buffer
        box_size: Block edge, >= 1

    Returns:
        Box-painted packed buffer
    """
    height, width = pixels.shape
    a, r, g, b = split_channels(pixels)
    channels = [r, g, b]
    painted = [channel.copy() for channel in channels]
    block_count = 0

    for top in range(0, height, box_size):
        bottom = min(top + box_size, height)
        for left in range(0, width, box_size):
            right = min(left + box_size, width)
            count = (bottom - top) * (right - left)
            for source, target in zip(channels, painted):
                total = int(source[top:bottom, left:right].sum())
                target[top:bottom, left:right] = total // count
            block_count += 1

    logger.debug(f"Box paint averaged {block_count} blocks of size {box_size}")
    return merge_channels(a, *painted)
