"""
Image File Module

Decodes image files into RasterImage objects and encodes them back.
"""

import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..constants import READABLE_SUFFIXES, WRITABLE_SUFFIXES, OPAQUE_SUFFIXES
from ..core.picture import RasterImage
from ..errors import require

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ImageIOError(Exception):
    """Raised when an image file cannot be read or written."""
    pass


class ImageReadError(ImageIOError):
    """Raised when an image file cannot be decoded."""
    pass


class ImageWriteError(ImageIOError):
    """Raised when a picture cannot be encoded to a file."""
    pass


def _has_alpha_band(image: Image.Image) -> bool:
    return "A" in image.getbands() or "transparency" in image.info


def load_image(filepath: PathLike) -> RasterImage:
    """
    Read a PNG, JPEG, GIF or BMP file.

    Args:
        filepath: Path to the image file

    Returns:
        RasterImage with top-left origin; has_alpha if the file has transparency

    Raises:
        ImageReadError: If the file is missing, not a file, or not decodable
    """
    require(filepath, "file path")
    path = Path(filepath)

    if not path.exists():
        raise ImageReadError(f"File not found: {filepath}")

    if not path.is_file():
        raise ImageReadError(f"Path is not a file: {filepath}")

    if path.suffix.lower() not in READABLE_SUFFIXES:
        logger.debug(f"Unrecognized suffix {path.suffix}, trying to decode anyway")

    try:
        with Image.open(path) as image:
            has_alpha = _has_alpha_band(image)
            converted = image.convert("RGBA" if has_alpha else "RGB")
            array = np.asarray(converted, dtype=np.uint8)
    except (UnidentifiedImageError, OSError) as e:
        raise ImageReadError(f"Cannot decode image: {filepath}. Error: {e}")

    picture = RasterImage.from_array(array, has_alpha=has_alpha)
    logger.info(f"Loaded image: {filepath} ({picture.width()}x{picture.height()})")
    return picture


def save_image(picture: RasterImage, filepath: PathLike) -> Path:
    """
    Write a picture as PNG or JPEG, chosen by the file suffix.

    JPEG files never carry alpha.

    Args:
        picture: Picture to save
        filepath: Destination ending in .png, .jpg or .jpeg

    Returns:
        Path written

    Raises:
        ImageWriteError: If the suffix is unsupported or writing fails
    """
    require(picture, "picture")
    require(filepath, "file path")
    path = Path(filepath)
    suffix = path.suffix.lower()

    if suffix not in WRITABLE_SUFFIXES:
        raise ImageWriteError(
            f"Filename must end in one of {', '.join(WRITABLE_SUFFIXES)}: {filepath}"
        )

    include_alpha = picture.has_alpha and suffix not in OPAQUE_SUFFIXES
    array = picture.to_rgb_array(include_alpha=include_alpha)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.fromarray(array).save(path)
    except (OSError, ValueError) as e:
        raise ImageWriteError(f"Cannot write image: {filepath}. Error: {e}")

    logger.info(f"Saved image: {path}")
    return path
