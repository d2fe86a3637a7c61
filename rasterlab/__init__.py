# Raster Lab: pixel-level picture transforms and analyses

from .errors import (
    RasterError,
    InvalidDimension,
    NullInput,
    IndexOutOfRange,
    RegionOutOfBounds,
    DimensionMismatch,
)
from .core import RasterImage, Quadrilateral
from .transform import ImageTransformer
from .spectral import NestedMatrix, DFTOutput, SpectralAnalyzer
from .segmentation import RegionSegmenter, ConnectedRegion
from .similarity import SimilarityScorer, cosine_similarity

__version__ = "0.1.0"

__all__ = [
    # Errors
    "RasterError",
    "InvalidDimension",
    "NullInput",
    "IndexOutOfRange",
    "RegionOutOfBounds",
    "DimensionMismatch",
    # Data types
    "RasterImage",
    "Quadrilateral",
    "NestedMatrix",
    "DFTOutput",
    "ConnectedRegion",
    # Components
    "ImageTransformer",
    "SpectralAnalyzer",
    "RegionSegmenter",
    "SimilarityScorer",
    "cosine_similarity",
]
