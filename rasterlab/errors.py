"""
Errors Module

Exceptions raised for contract violations by callers of the raster core.
"""


class RasterError(Exception):
    """Base class for all raster core errors."""
    pass


class InvalidDimension(RasterError, ValueError):
    """Raised when a width, height or block size is not positive."""
    pass


class NullInput(RasterError, TypeError):
    """Raised when a required image or color argument is None."""
    pass


class IndexOutOfRange(RasterError, IndexError):
    """Raised when a pixel access falls outside the image."""
    pass


class RegionOutOfBounds(RasterError, ValueError):
    """Raised when a clip region does not fit inside the source image."""
    pass


class DimensionMismatch(RasterError, ValueError):
    """Raised when two images or matrices that must match in size do not."""
    pass


def require(value, name: str):
    """
    Return value, raising NullInput if it is None.

    Args:
        value: Argument to check
        name: Argument name used in the error message

    Returns:
        The value unchanged
    """
    if value is None:
        raise NullInput(f"{name} argument is None")
    return value
