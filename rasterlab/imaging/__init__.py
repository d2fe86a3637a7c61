# Image file decoding and encoding

from .reader import (
    ImageIOError,
    ImageReadError,
    ImageWriteError,
    load_image,
    save_image,
)

__all__ = [
    "ImageIOError",
    "ImageReadError",
    "ImageWriteError",
    "load_image",
    "save_image",
]
