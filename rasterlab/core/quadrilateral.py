"""
Quadrilateral Module

Axis-aligned rectangular regions used to clip pictures.
"""

from dataclasses import dataclass

from ..errors import InvalidDimension


@dataclass(frozen=True)
class Quadrilateral:
    """
    Inclusive rectangle given by its top-left and bottom-right pixels.

    Quadrilateral(0, 0, 9, 4) covers columns 0..9 and rows 0..4.
    """
    x_top_left: int
    y_top_left: int
    x_bottom_right: int
    y_bottom_right: int

    def __post_init__(self):
        if self.x_bottom_right < self.x_top_left:
            raise InvalidDimension(
                f"x_bottom_right ({self.x_bottom_right}) is left of "
                f"x_top_left ({self.x_top_left})"
            )
        if self.y_bottom_right < self.y_top_left:
            raise InvalidDimension(
                f"y_bottom_right ({self.y_bottom_right}) is above "
                f"y_top_left ({self.y_top_left})"
            )

    @classmethod
    def from_size(cls, left: int, top: int, width: int, height: int) -> "Quadrilateral":
        """Build a region from its top-left pixel and its size."""
        if width <= 0 or height <= 0:
            raise InvalidDimension(f"Region size must be positive: {width}x{height}")
        return cls(left, top, left + width - 1, top + height - 1)

    @property
    def width(self) -> int:
        return self.x_bottom_right - self.x_top_left + 1

    @property
    def height(self) -> int:
        return self.y_bottom_right - self.y_top_left + 1

    def fits_within(self, width: int, height: int) -> bool:
        """True if the region lies entirely inside a width x height picture."""
        return (
            self.x_top_left >= 0
            and self.y_top_left >= 0
            and self.x_bottom_right < width
            and self.y_bottom_right < height
        )

    def to_tuple(self):
        return (self.x_top_left, self.y_top_left, self.x_bottom_right, self.y_bottom_right)
