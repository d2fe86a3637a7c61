"""
Region Segmenter Module

Finds connected regions of one exact color and uses the largest of them to
composite a background picture over a color screen ("green screen").

Regions are 8-connected: pixels touching by an edge or a corner belong to
the same region. Pixels are identified by (row, col) tuples.
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterator, List, Optional, Tuple

import cv2
import numpy as np

from ..core.picture import RasterImage
from ..core.quadrilateral import Quadrilateral
from ..errors import require

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class ConnectedRegion:
    """A maximal 8-connected set of pixels sharing one color."""
    color: int
    pixels: FrozenSet[Coordinate]  # (row, col) pairs
    top: int
    left: int
    bottom: int
    right: int

    @property
    def size(self) -> int:
        return len(self.pixels)

    @property
    def bounding_box(self) -> Quadrilateral:
        return Quadrilateral(self.left, self.top, self.right, self.bottom)

    def contains(self, row: int, col: int) -> bool:
        return (row, col) in self.pixels


def label_regions(mask: np.ndarray) -> Tuple[np.ndarray, np.ndarray, List[int]]:
    """
    Label the 8-connected True cells of mask.

    OpenCV numbers components in its own scan order, so the labels are
    re-ordered by the raster position of each component's first pixel.

    Args:
        mask: (H, W) boolean array of matching pixels

    Returns:
        Tuple of (labels, stats, order): the label image, the
        connectedComponentsWithStats stats table, and the foreground labels
        in raster order of their first pixel
    """
    _, labels, stats, _ = cv2.connectedComponentsWithStats(
        mask.astype(np.uint8), connectivity=8
    )

    found, first_index = np.unique(labels.ravel(), return_index=True)
    # Label 0 is the background (non-matching pixels)
    order = [int(label) for _, label in sorted(zip(first_index, found)) if label != 0]
    return labels, stats, order


def _build_region(color: int, labels: np.ndarray, stats: np.ndarray, label: int) -> ConnectedRegion:
    left = int(stats[label, cv2.CC_STAT_LEFT])
    top = int(stats[label, cv2.CC_STAT_TOP])
    width = int(stats[label, cv2.CC_STAT_WIDTH])
    height = int(stats[label, cv2.CC_STAT_HEIGHT])
    members = frozenset((int(row), int(col)) for row, col in np.argwhere(labels == label))
    return ConnectedRegion(
        color=color,
        pixels=members,
        top=top,
        left=left,
        bottom=top + height - 1,
        right=left + width - 1,
    )


def _color_mask(image: RasterImage, color: int) -> Tuple[int, np.ndarray]:
    require(image, "picture")
    require(color, "color")
    target = image.normalize_color(color)
    return target, image.pixels() == target


def find_connected_regions(image: RasterImage, color: int) -> Iterator[ConnectedRegion]:
    """
    Yield every connected region of exactly color.

    Regions come in raster-scan order of their first pixel.

    Args:
        image: Picture to search
        color: Packed color, matched as the picture reports it

    Yields:
        ConnectedRegion objects
    """
    target, mask = _color_mask(image, color)
    labels, stats, order = label_regions(mask)
    for label in order:
        yield _build_region(target, labels, stats, label)


def largest_region(image: RasterImage, color: int) -> Optional[ConnectedRegion]:
    """
    The largest connected region of color; the first one found wins ties.

    Returns:
        ConnectedRegion, or None if the color does not occur
    """
    target, mask = _color_mask(image, color)
    labels, stats, order = label_regions(mask)

    best = None
    for label in order:
        if best is None or stats[label, cv2.CC_STAT_AREA] > stats[best, cv2.CC_STAT_AREA]:
            best = label

    if best is None:
        return None

    logger.debug(
        f"Found {len(order)} regions of {target:#010x}, "
        f"largest has {int(stats[best, cv2.CC_STAT_AREA])} pixels"
    )
    return _build_region(target, labels, stats, best)


def tile(background: np.ndarray, height: int, width: int) -> np.ndarray:
    """
    Repeat background to cover height x width, anchored at its top-left.

    Args:
        background: (h, w) packed colors
        height: Rows to cover
        width: Columns to cover

    Returns:
        (height, width) packed colors
    """
    bg_height, bg_width = background.shape
    rows = (np.arange(height) % bg_height)[:, np.newaxis]
    cols = (np.arange(width) % bg_width)[np.newaxis, :]
    return background[rows, cols]


def green_screen(
    image: RasterImage,
    screen_color: int,
    background: RasterImage
) -> RasterImage:
    """
    Replace the largest screen-colored region with a background picture.

    The background is aligned with the top-left corner of the region's
    bounding rectangle and tiled if smaller. Inside that rectangle every
    pixel of screen_color is replaced; all other pixels are kept.

    Args:
        image: Source picture (not modified)
        screen_color: Packed color of the screen
        background: Picture shown through the screen

    Returns:
        New composited picture
    """
    require(image, "picture")
    require(screen_color, "screen color")
    require(background, "background picture")

    region = largest_region(image, screen_color)
    if region is None:
        logger.info(f"Screen color {screen_color:#010x} not found, picture unchanged")
        return RasterImage.copy_of(image)

    target = image.normalize_color(screen_color)
    pixels = image.pixels()
    window = pixels[region.top:region.bottom + 1, region.left:region.right + 1]
    screen = window == target
    tiles = tile(background.pixels(), window.shape[0], window.shape[1])
    window[screen] = tiles[screen]

    logger.info(
        f"Green screen: region {region.size} px, box {region.bounding_box.to_tuple()}, "
        f"{int(screen.sum())} px replaced"
    )
    return RasterImage.from_array(pixels, has_alpha=image.has_alpha)


class RegionSegmenter:
    """Connected-region queries bound to one picture."""

    def __init__(self, image: RasterImage):
        self.image = require(image, "picture")

    def regions(self, color: int) -> List[ConnectedRegion]:
        return list(find_connected_regions(self.image, color))

    def largest_region(self, color: int) -> Optional[ConnectedRegion]:
        return largest_region(self.image, color)

    def green_screen(self, screen_color: int, background: RasterImage) -> RasterImage:
        return green_screen(self.image, screen_color, background)
