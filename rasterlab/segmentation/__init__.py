# Connected-region segmentation and screen compositing

from .region_segmenter import (
    ConnectedRegion,
    label_regions,
    RegionSegmenter,
    find_connected_regions,
    largest_region,
    tile,
    green_screen,
)

__all__ = [
    "ConnectedRegion",
    "RegionSegmenter",
    "label_regions",
    "find_connected_regions",
    "largest_region",
    "tile",
    "green_screen",
]
