"""
Picture Module

RasterImage: a fixed-size, mutable grid of packed colors.

Pixel (col, row) is column col and row row. By default (0, 0) is the
top-left pixel; set_origin_lower_left() moves the origin to the bottom-left
corner. Only the row-to-storage mapping changes with the origin.
"""

import logging
from typing import Optional

import numpy as np

from ..constants import (
    RGB_MASK,
    OPAQUE_ALPHA,
    Origin,
)
from ..errors import InvalidDimension, IndexOutOfRange, NullInput, require
from .color import format_hex, split_channels, merge_channels

logger = logging.getLogger(__name__)

_MAX_PACKED = 0xFFFFFFFF


class RasterImage:
    """
    A width-by-height picture of packed colors.

    Images without an alpha band keep only the 24 RGB bits and report every
    pixel as opaque. Images with an alpha band keep all 32 bits.
    """

    # Mutable, so not hashable
    __hash__ = None

    def __init__(self, width: int, height: int, has_alpha: bool = False):
        """
        Create a blank (black) picture.

        Args:
            width: Number of columns, > 0
            height: Number of rows, > 0
            has_alpha: Whether the alpha bits are stored

        Raises:
            InvalidDimension: If width or height is not a positive int
        """
        _check_dimension("width", width)
        _check_dimension("height", height)

        self._width = int(width)
        self._height = int(height)
        self._has_alpha = bool(has_alpha)
        self._origin = Origin.UPPER_LEFT
        self._data = np.zeros((self._height, self._width), dtype=np.uint32)

    # -------------------------------------------------------------------------
    # Construction helpers
    # -------------------------------------------------------------------------

    @classmethod
    def copy_of(cls, other: "RasterImage") -> "RasterImage":
        """Deep copy of another picture, keeping its origin and alpha policy."""
        require(other, "picture")
        image = cls(other.width(), other.height(), has_alpha=other.has_alpha)
        image._origin = other._origin
        image._data = other._data.copy()
        return image

    @classmethod
    def from_array(cls, array: np.ndarray, has_alpha: bool = False) -> "RasterImage":
        """
        Build a top-left-origin picture from a numpy array.

        Args:
            array: (H, W) packed colors, or (H, W, 3) RGB / (H, W, 4) RGBA uint8
            has_alpha: Whether to keep alpha bits (implied for RGBA input)

        Returns:
            New RasterImage

        Raises:
            NullInput: If array is None
            InvalidDimension: If the array shape is not usable
        """
        require(array, "array")
        array = np.asarray(array)

        if array.ndim == 2:
            if array.size and (array.min() < 0 or array.max() > _MAX_PACKED):
                raise ValueError("packed colors must fit in 32 bits")
            packed = array.astype(np.uint32)
        elif array.ndim == 3 and array.shape[2] in (3, 4):
            channels = array.astype(np.int64)
            r, g, b = channels[..., 0], channels[..., 1], channels[..., 2]
            if array.shape[2] == 4:
                a = channels[..., 3]
                has_alpha = True
            else:
                a = np.full(r.shape, 0xFF, dtype=np.int64)
            packed = merge_channels(a, r, g, b)
        else:
            raise InvalidDimension(f"Unsupported array shape for picture: {array.shape}")

        if packed.ndim != 2 or packed.shape[0] == 0 or packed.shape[1] == 0:
            raise InvalidDimension(f"Picture array must be non-empty: {array.shape}")

        height, width = packed.shape
        image = cls(width, height, has_alpha=has_alpha)
        image._data = image._store(packed)
        return image

    # -------------------------------------------------------------------------
    # Dimensions and conventions
    # -------------------------------------------------------------------------

    def width(self) -> int:
        return self._width

    def height(self) -> int:
        return self._height

    @property
    def has_alpha(self) -> bool:
        return self._has_alpha

    @property
    def origin(self) -> str:
        return self._origin

    def set_origin_upper_left(self):
        """Set the origin to the upper-left pixel (the default)."""
        self._origin = Origin.UPPER_LEFT

    def set_origin_lower_left(self):
        """Set the origin to the lower-left pixel."""
        self._origin = Origin.LOWER_LEFT

    # -------------------------------------------------------------------------
    # Pixel access
    # -------------------------------------------------------------------------

    def get_pixel(self, col: int, row: int) -> int:
        """
        Return the packed color of pixel (col, row).

        Raises:
            IndexOutOfRange: Unless 0 <= col < width and 0 <= row < height
        """
        self._validate_column(col)
        self._validate_row(row)
        return self._load(int(self._data[self._storage_row(row), col]))

    def set_pixel(self, col: int, row: int, color: int):
        """
        Set pixel (col, row) to a packed color.

        Raises:
            IndexOutOfRange: Unless 0 <= col < width and 0 <= row < height
            NullInput: If color is None
        """
        self._validate_column(col)
        self._validate_row(row)
        require(color, "color")
        color = int(color)
        if not 0 <= color <= _MAX_PACKED:
            raise ValueError(f"color must fit in 32 bits: {color:#x}")
        self._data[self._storage_row(row), col] = self._store(color)

    def normalize_color(self, color: int) -> int:
        """Return color as get_pixel() would report it for this picture."""
        require(color, "color")
        return self._load(self._store(int(color)))

    def pixels(self) -> np.ndarray:
        """
        Copy of all packed colors as get_pixel() reports them.

        Returns:
            (height, width) uint32 array; element [row, col] is pixel (col, row)
        """
        data = self._data if self._origin == Origin.UPPER_LEFT else self._data[::-1]
        return self._load(data.copy())

    def to_rgb_array(self, include_alpha: Optional[bool] = None) -> np.ndarray:
        """
        Channel array in top-left order.

        Args:
            include_alpha: Add an alpha band (defaults to has_alpha)

        Returns:
            (H, W, 3) RGB or (H, W, 4) RGBA uint8 array
        """
        if include_alpha is None:
            include_alpha = self._has_alpha
        a, r, g, b = split_channels(self.pixels())
        bands = [r, g, b, a] if include_alpha else [r, g, b]
        return np.stack(bands, axis=-1).astype(np.uint8)

    # -------------------------------------------------------------------------
    # Comparison and display
    # -------------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        if other is self:
            return True
        if not isinstance(other, RasterImage):
            return NotImplemented
        if self._width != other._width or self._height != other._height:
            return False
        return bool(np.array_equal(self.pixels(), other.pixels()))

    def __str__(self) -> str:
        lines = [f"{self._width}-by-{self._height} picture (RGB values given in hex)"]
        for row in self.pixels():
            lines.append(" ".join(format_hex(int(value)) for value in row))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"RasterImage(width={self._width}, height={self._height}, "
            f"has_alpha={self._has_alpha})"
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _storage_row(self, row: int) -> int:
        if self._origin == Origin.UPPER_LEFT:
            return row
        return self._height - row - 1

    def _store(self, value):
        if self._has_alpha:
            return value
        return value & RGB_MASK

    def _load(self, value):
        if self._has_alpha:
            return value
        return value | OPAQUE_ALPHA

    def _validate_row(self, row: int):
        if not _is_index(row) or not 0 <= row < self._height:
            raise IndexOutOfRange(
                f"row index must be between 0 and {self._height - 1}: {row}"
            )

    def _validate_column(self, col: int):
        if not _is_index(col) or not 0 <= col < self._width:
            raise IndexOutOfRange(
                f"column index must be between 0 and {self._width - 1}: {col}"
            )


def _is_index(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def _check_dimension(name: str, value):
    if not _is_index(value) or value <= 0:
        raise InvalidDimension(f"{name} must be positive: {value}")
