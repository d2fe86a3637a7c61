# Picture data types and color helpers

from .color import (
    pack_rgb,
    unpack,
    alpha,
    red,
    green,
    blue,
    intensity,
    to_gray,
    are_compatible,
    format_hex,
    parse_color,
    split_channels,
    merge_channels,
    intensity_array,
)

from .picture import RasterImage

from .quadrilateral import Quadrilateral

__all__ = [
    # Color
    "pack_rgb",
    "unpack",
    "alpha",
    "red",
    "green",
    "blue",
    "intensity",
    "to_gray",
    "are_compatible",
    "format_hex",
    "parse_color",
    "split_channels",
    "merge_channels",
    "intensity_array",
    # Picture
    "RasterImage",
    # Regions
    "Quadrilateral",
]
