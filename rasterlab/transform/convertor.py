"""
Image Transformer Module

ImageTransformer binds one source picture and produces transformed copies.
The source picture is never modified.
"""

import logging

from ..constants import DEFAULT_BOX_SIZE, MIN_BOX_SIZE, DFT_METHOD_DIRECT
from ..core.picture import RasterImage
from ..core.quadrilateral import Quadrilateral
from ..errors import InvalidDimension, RegionOutOfBounds, require
from ..segmentation.region_segmenter import green_screen
from . import point_ops
from .neighborhood import median_filter, minimum_filter, block_average
from .rotation import rotate

logger = logging.getLogger(__name__)


class ImageTransformer:
    """
    Produces transformed versions of a picture.

    Every operation returns a new RasterImage (or a derived value) and
    leaves the bound picture untouched.
    """

    def __init__(self, image: RasterImage):
        self.image = require(image, "picture")
        self.width = image.width()
        self.height = image.height()

    def _new_image(self, pixels) -> RasterImage:
        return RasterImage.from_array(pixels, has_alpha=self.image.has_alpha)

    # -------------------------------------------------------------------------
    # Point transforms
    # -------------------------------------------------------------------------

    def grayscale(self) -> RasterImage:
        """Grayscale version using NTSC luminance."""
        return self._new_image(point_ops.to_grayscale(self.image.pixels()))

    def red_channel(self) -> RasterImage:
        """Version with only the red channel kept."""
        return self._new_image(point_ops.keep_red(self.image.pixels()))

    def mirror(self) -> RasterImage:
        """Left-right mirror image."""
        return self._new_image(point_ops.mirror(self.image.pixels()))

    def negative(self) -> RasterImage:
        """(r, g, b) -> (255 - r, 255 - g, 255 - b)."""
        return self._new_image(point_ops.negate(self.image.pixels()))

    def posterize(self) -> RasterImage:
        """
        Posterized version; each channel maps independently.

        [0, 64] -> 32, (64, 128] -> 96, (128, 255] -> 222.
        """
        return self._new_image(point_ops.posterize(self.image.pixels()))

    def clip(self, clipping_box: Quadrilateral) -> RasterImage:
        """
        Keep only the region covered by clipping_box.

        Args:
            clipping_box: Inclusive region to retain

        Returns:
            Picture of size clipping_box.width x clipping_box.height

        Raises:
            NullInput: If clipping_box is None
            RegionOutOfBounds: If the box does not fit inside the picture
        """
        require(clipping_box, "clipping box")
        if not clipping_box.fits_within(self.width, self.height):
            raise RegionOutOfBounds(
                f"clipping box {clipping_box.to_tuple()} does not fit in "
                f"{self.width}x{self.height} picture"
            )
        return self._new_image(point_ops.clip(self.image.pixels(), clipping_box))

    # -------------------------------------------------------------------------
    # Neighborhood and block filters
    # -------------------------------------------------------------------------

    def denoise(self) -> RasterImage:
        """Replace each pixel by the per-channel median of its 3x3 neighborhood."""
        return self._new_image(median_filter(self.image.pixels()))

    def weather(self) -> RasterImage:
        """Replace each pixel by the per-channel minimum of its 3x3 neighborhood."""
        return self._new_image(minimum_filter(self.image.pixels()))

    def box_paint(self, box_size: int = DEFAULT_BOX_SIZE) -> RasterImage:
        """
        Replace every box_size x box_size block by its average color.

        When the picture is not a multiple of box_size, the bottom rows and
        right columns are averaged over the smaller blocks that remain.

        Raises:
            InvalidDimension: If box_size < 1
        """
        if isinstance(box_size, bool) or not isinstance(box_size, int) or box_size < MIN_BOX_SIZE:
            raise InvalidDimension(f"box size must be an int >= {MIN_BOX_SIZE}: {box_size}")
        return self._new_image(block_average(self.image.pixels(), box_size))

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    def rotate(self, degrees: float) -> RasterImage:
        """
        Rotate clockwise by degrees about the picture center.

        New regions are white (#FFFFFF, alpha 255).
        """
        require(degrees, "degrees")
        return self._new_image(rotate(self.image.pixels(), float(degrees)))

    # -------------------------------------------------------------------------
    # Analysis and compositing
    # -------------------------------------------------------------------------

    def dft(self, method: str = DFT_METHOD_DIRECT):
        """Amplitude and phase of the picture's spatial DFT, as a DFTOutput."""
        # spectral depends on the point operations in this package
        from ..spectral.dft import SpectralAnalyzer

        return SpectralAnalyzer(self.image).dft(method)

    def green_screen(self, screen_color: int, background: RasterImage) -> RasterImage:
        """Composite background over the largest region of screen_color."""
        return green_screen(self.image, screen_color, background)
