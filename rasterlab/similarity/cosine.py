"""
Cosine Similarity Module

Scores how alike two equally sized pictures are from their grayscale
intensities.
"""

import logging
import math

import numpy as np

from ..constants import SIMILARITY_BOTH_ZERO, SIMILARITY_ONE_ZERO
from ..core.color import split_channels
from ..core.picture import RasterImage
from ..errors import DimensionMismatch, require
from ..transform.point_ops import to_grayscale

logger = logging.getLogger(__name__)


def intensity_vector(image: RasterImage) -> np.ndarray:
    """
    Grayscale intensities in row-major order.

    Args:
        image: Source picture

    Returns:
        1-D int64 array of length width * height
    """
    require(image, "picture")
    _, r, _, _ = split_channels(to_grayscale(image.pixels()))
    return r.ravel()


def cosine_similarity(image_a: RasterImage, image_b: RasterImage) -> float:
    """
    Cosine similarity between the intensity vectors of two pictures.

    The dot product sums |a_i * b_i|. If both vectors are all zero the
    similarity is 1.0; if exactly one is, it is 0.0.

    Args:
        image_a: First picture
        image_b: Second picture, same size as image_a

    Returns:
        Similarity in [0, 1]

    Raises:
        NullInput: If either picture is None
        DimensionMismatch: If the pictures differ in size
    """
    require(image_a, "first picture")
    require(image_b, "second picture")
    if image_a.width() != image_b.width() or image_a.height() != image_b.height():
        raise DimensionMismatch(
            f"pictures must have the same size: {image_a.width()}x{image_a.height()} "
            f"vs {image_b.width()}x{image_b.height()}"
        )

    vector_a = intensity_vector(image_a)
    vector_b = intensity_vector(image_b)

    dot_product = int(np.abs(vector_a * vector_b).sum())
    sum_of_squares_a = int((vector_a * vector_a).sum())
    sum_of_squares_b = int((vector_b * vector_b).sum())

    if sum_of_squares_a == 0 and sum_of_squares_b == 0:
        return SIMILARITY_BOTH_ZERO
    if sum_of_squares_a == 0 or sum_of_squares_b == 0:
        return SIMILARITY_ONE_ZERO

    similarity = dot_product / math.sqrt(sum_of_squares_a * sum_of_squares_b)
    logger.debug(f"Cosine similarity over {vector_a.size} pixels: {similarity:.6f}")
    return similarity


class SimilarityScorer:
    """Compares pictures against a fixed reference."""

    def __init__(self, reference: RasterImage):
        self.reference = require(reference, "reference picture")

    def score(self, other: RasterImage) -> float:
        return cosine_similarity(self.reference, other)
