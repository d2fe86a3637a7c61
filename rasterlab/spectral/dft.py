"""
Spatial DFT Module

Computes the discrete Fourier transform of a picture's luminance and reports
it as an amplitude matrix and a phase matrix.

For every frequency pair (u, v):

    Real(u, v) = sum_x sum_y cos(2 pi (u x / W + v y / H)) * I(x, y)
    Imag(u, v) = sum_x sum_y sin(2 pi (u x / W + v y / H)) * I(x, y)
    amplitude  = sqrt(Real^2 + Imag^2)
    phase      = atan(Imag / Real)

The phase uses the single-argument arctangent. Where Real is 0 the ratio is
infinite or undefined, so the phase there is +/- pi/2 or NaN.
"""

import logging
import math
from typing import Sequence, Union

import numpy as np

from ..constants import (
    DFT_METHOD_DIRECT,
    DFT_METHOD_FFT,
    DFT_METHODS,
    DFT_COMPARE_TOLERANCE,
)
from ..core.color import split_channels
from ..core.picture import RasterImage
from ..errors import DimensionMismatch, InvalidDimension, require
from ..transform.point_ops import to_grayscale

logger = logging.getLogger(__name__)

MatrixLike = Union["NestedMatrix", np.ndarray, Sequence[Sequence[float]]]


class NestedMatrix:
    """Immutable rows x columns matrix of floats."""

    def __init__(self, values: MatrixLike):
        require(values, "values")
        if isinstance(values, NestedMatrix):
            array = values._values
        else:
            try:
                array = np.array(values, dtype=np.float64)
            except ValueError:
                raise InvalidDimension("matrix rows must all have the same length")

        if array.ndim != 2 or array.shape[0] == 0 or array.shape[1] == 0:
            raise InvalidDimension(f"matrix must be non-empty and 2-D: shape {array.shape}")

        self._values = array.copy()
        self._values.setflags(write=False)
        self.rows, self.columns = self._values.shape

    def __getitem__(self, index):
        row, column = index
        return float(self._values[row, column])

    def as_array(self) -> np.ndarray:
        """Read-only view of the values."""
        return self._values

    def to_list(self):
        return self._values.tolist()

    def same_shape(self, other: "NestedMatrix") -> bool:
        return self.rows == other.rows and self.columns == other.columns

    def allclose(self, other: "NestedMatrix", tolerance: float = DFT_COMPARE_TOLERANCE) -> bool:
        """
        Element-wise comparison within an absolute tolerance.

        NaN entries compare equal to NaN.

        Raises:
            DimensionMismatch: If the matrices differ in size
        """
        require(other, "other")
        if not self.same_shape(other):
            raise DimensionMismatch(
                f"matrix sizes differ: {self.rows}x{self.columns} vs "
                f"{other.rows}x{other.columns}"
            )
        return bool(np.allclose(
            self._values, other._values, rtol=0.0, atol=tolerance, equal_nan=True
        ))

    def __eq__(self, other) -> bool:
        if not isinstance(other, NestedMatrix):
            return NotImplemented
        return self.same_shape(other) and bool(
            np.array_equal(self._values, other._values, equal_nan=True)
        )

    def __hash__(self) -> int:
        # -0.0 and NaN must hash like 0.0 and each other
        normalized = np.round(np.nan_to_num(self._values), 6) + 0.0
        return hash((self.rows, self.columns, normalized.tobytes()))

    def __repr__(self) -> str:
        return f"NestedMatrix(rows={self.rows}, columns={self.columns})"


class DFTOutput:
    """
    Amplitude and phase matrices of a spatial DFT.

    Both matrices are indexed [u][v]: rows follow the horizontal frequency u,
    columns the vertical frequency v.
    """

    def __init__(self, amplitude: MatrixLike, phase: MatrixLike):
        self._amplitude = NestedMatrix(amplitude)
        self._phase = NestedMatrix(phase)
        if not self._amplitude.same_shape(self._phase):
            raise DimensionMismatch(
                "amplitude and phase matrices should have the same dimensions"
            )

    @property
    def amplitude(self) -> NestedMatrix:
        return self._amplitude

    @property
    def phase(self) -> NestedMatrix:
        return self._phase

    @property
    def rows(self) -> int:
        return self._amplitude.rows

    @property
    def columns(self) -> int:
        return self._amplitude.columns

    def allclose(self, other: "DFTOutput", tolerance: float = DFT_COMPARE_TOLERANCE) -> bool:
        """
        Compare amplitude and phase within a tolerance.

        Raises:
            DimensionMismatch: If the outputs differ in size
        """
        require(other, "other")
        return (
            self._amplitude.allclose(other._amplitude, tolerance)
            and self._phase.allclose(other._phase, tolerance)
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, DFTOutput):
            return NotImplemented
        return self._amplitude == other._amplitude and self._phase == other._phase

    def __hash__(self) -> int:
        return hash(self._amplitude)

    def __repr__(self) -> str:
        return f"DFTOutput(rows={self.rows}, columns={self.columns})"


def intensity_matrix(image: RasterImage) -> np.ndarray:
    """
    Grayscale intensities indexed [x, y].

    Args:
        image: Source picture

    Returns:
        (W, H) float array
    """
    gray = to_grayscale(image.pixels())
    _, r, _, _ = split_channels(gray)
    return r.T.astype(np.float64)


def dft_direct(intensities: np.ndarray):
    """
    Evaluate the DFT sums term by term. Cost is O(W^2 H^2).

    Args:
        intensities: (W, H) array indexed [x, y]

    Returns:
        Tuple of (real, imag) arrays indexed [u, v]
    """
    width, height = intensities.shape
    xs = np.arange(width, dtype=np.float64)[:, np.newaxis]
    ys = np.arange(height, dtype=np.float64)[np.newaxis, :]

    real = np.zeros((width, height), dtype=np.float64)
    imag = np.zeros((width, height), dtype=np.float64)

    for u in range(width):
        for v in range(height):
            angle = 2 * math.pi * (u * xs / width + v * ys / height)
            real[u, v] = np.sum(np.cos(angle) * intensities)
            imag[u, v] = np.sum(np.sin(angle) * intensities)

    return real, imag


def dft_fft(intensities: np.ndarray):
    """
    Same sums as dft_direct() computed with numpy.fft.

    sum e^{+i angle} I = W * H * ifft2(I)
    """
    width, height = intensities.shape
    spectrum = width * height * np.fft.ifft2(intensities)
    return spectrum.real.copy(), spectrum.imag.copy()


def amplitude_and_phase(real: np.ndarray, imag: np.ndarray) -> DFTOutput:
    amplitude = np.sqrt(real ** 2 + imag ** 2)
    with np.errstate(divide="ignore", invalid="ignore"):
        phase = np.arctan(imag / real)
    return DFTOutput(amplitude, phase)


class SpectralAnalyzer:
    """Computes the spatial DFT of one picture's luminance."""

    def __init__(self, image: RasterImage):
        self.image = require(image, "picture")

    def dft(self, method: str = DFT_METHOD_DIRECT) -> DFTOutput:
        """
        Compute the DFT of the grayscale version of the picture.

        Args:
            method: "direct" (term-by-term sums) or "fft"

        Returns:
            DFTOutput with W x H amplitude and phase matrices

        Raises:
            ValueError: If method is unknown
        """
        if method not in DFT_METHODS:
            raise ValueError(f"Unknown DFT method '{method}', expected one of {DFT_METHODS}")

        intensities = intensity_matrix(self.image)
        if method == DFT_METHOD_FFT:
            real, imag = dft_fft(intensities)
        else:
            real, imag = dft_direct(intensities)

        output = amplitude_and_phase(real, imag)
        logger.info(
            f"DFT ({method}) of {self.image.width()}x{self.image.height()} picture, "
            f"DC amplitude {output.amplitude[0, 0]:.2f}"
        )
        return output
