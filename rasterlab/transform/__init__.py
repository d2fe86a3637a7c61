# Picture transformation module

from .point_ops import (
    to_grayscale,
    keep_red,
    mirror,
    negate,
    posterize,
    posterize_channel,
    clip,
)

from .neighborhood import (
    neighborhood_windows,
    apply_channel_filter,
    median_filter,
    minimum_filter,
    block_average,
)

from .rotation import (
    rotated_canvas_size,
    source_coordinates,
    rotate,
)

from .convertor import ImageTransformer

__all__ = [
    # Point operations
    "to_grayscale",
    "keep_red",
    "mirror",
    "negate",
    "posterize",
    "posterize_channel",
    "clip",
    # Neighborhood filters
    "neighborhood_windows",
    "apply_channel_filter",
    "median_filter",
    "minimum_filter",
    "block_average",
    # Rotation
    "rotated_canvas_size",
    "source_coordinates",
    "rotate",
    # Transformer
    "ImageTransformer",
]
