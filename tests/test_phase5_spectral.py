"""
Phase 5 Tests: Spatial DFT

Tests for NestedMatrix, DFTOutput and SpectralAnalyzer.
"""

import math
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import numpy as np
import pytest

from rasterlab.core import RasterImage
from rasterlab.spectral import NestedMatrix, DFTOutput, SpectralAnalyzer
from rasterlab.spectral.dft import intensity_matrix, dft_direct, dft_fft
from rasterlab.transform import ImageTransformer
from rasterlab.errors import DimensionMismatch, InvalidDimension, NullInput

SQRT3 = math.sqrt(3)

# 3x3 picture with I(x, y) = 1 + x + 3y, indexed [u][v]
GRID_AMPLITUDE = [
    [45.0, 9 * SQRT3, 9 * SQRT3],
    [3 * SQRT3, 0.0, 0.0],
    [3 * SQRT3, 0.0, 0.0],
]
# Cells (1, 1), (1, 2), (2, 1) and (2, 2) have zero amplitude, so their
# phase is numerically undefined and not checked
GRID_PHASE = {
    (0, 0): 0.0,
    (0, 1): math.pi / 6,
    (0, 2): -math.pi / 6,
    (1, 0): math.pi / 6,
    (2, 0): -math.pi / 6,
}


def create_gray_image(rows) -> RasterImage:
    """Create a gray picture from a list of rows of intensities."""
    values = np.array(rows, dtype=np.uint8)
    return RasterImage.from_array(np.stack([values] * 3, axis=-1))


def create_grid_image() -> RasterImage:
    return create_gray_image([[1, 2, 3], [4, 5, 6], [7, 8, 9]])


def create_random_image(width: int, height: int, seed: int = 7) -> RasterImage:
    rng = np.random.default_rng(seed)
    return RasterImage.from_array(rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8))


class TestNestedMatrix:
    """Tests for the immutable matrix type."""

    def test_shape_and_access(self):
        matrix = NestedMatrix([[1, 2, 3], [4, 5, 6]])
        assert (matrix.rows, matrix.columns) == (2, 3)
        assert matrix[1, 2] == 6.0
        assert matrix.to_list() == [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]
        print("  [PASS] Shape and element access")

    def test_ragged_rows(self):
        with pytest.raises(InvalidDimension):
            NestedMatrix([[1, 2], [3]])
        print("  [PASS] Ragged rows rejected")

    def test_empty(self):
        with pytest.raises(InvalidDimension):
            NestedMatrix([])
        with pytest.raises(InvalidDimension):
            NestedMatrix([[]])
        with pytest.raises(NullInput):
            NestedMatrix(None)
        print("  [PASS] Empty matrices rejected")

    def test_immutable(self):
        source = np.array([[1.0, 2.0]])
        matrix = NestedMatrix(source)
        source[0, 0] = 99.0
        assert matrix[0, 0] == 1.0
        with pytest.raises(ValueError):
            matrix.as_array()[0, 0] = 5.0
        print("  [PASS] Values cannot change")

    def test_equality_and_hash(self):
        a = NestedMatrix([[1.0, float("nan")]])
        b = NestedMatrix([[1.0, float("nan")]])
        assert a == b
        assert hash(a) == hash(b)
        assert a != NestedMatrix([[1.0, 2.0]])
        assert NestedMatrix([[0.0]]) == NestedMatrix([[-0.0]])
        assert hash(NestedMatrix([[0.0]])) == hash(NestedMatrix([[-0.0]]))
        print("  [PASS] Equality and hash agree")

    def test_allclose(self):
        a = NestedMatrix([[1.0, 2.0]])
        assert a.allclose(NestedMatrix([[1.0 + 1e-9, 2.0]]))
        assert not a.allclose(NestedMatrix([[1.1, 2.0]]))
        with pytest.raises(DimensionMismatch):
            a.allclose(NestedMatrix([[1.0], [2.0]]))
        print("  [PASS] Tolerance comparison")


class TestDFTOutput:
    """Tests for the amplitude/phase pair."""

    def test_mismatched_matrices(self):
        with pytest.raises(DimensionMismatch):
            DFTOutput([[1.0, 2.0]], [[1.0], [2.0]])
        print("  [PASS] Amplitude and phase must match")

    def test_equality(self):
        a = DFTOutput([[1.0, 2.0]], [[0.0, 0.5]])
        b = DFTOutput([[1.0, 2.0]], [[0.0, 0.5]])
        assert a == b
        assert hash(a) == hash(b)
        assert a != DFTOutput([[1.0, 2.0]], [[0.0, 0.6]])
        print("  [PASS] Equal outputs")

    def test_allclose_size_mismatch(self):
        a = DFTOutput([[1.0, 2.0]], [[0.0, 0.5]])
        b = DFTOutput([[1.0], [2.0]], [[0.0], [0.5]])
        with pytest.raises(DimensionMismatch):
            a.allclose(b)
        print("  [PASS] Different sizes cannot be compared")


class TestSpectralAnalyzer:
    """Tests for the DFT of a picture."""

    def test_grid_amplitude(self):
        output = SpectralAnalyzer(create_grid_image()).dft()

        assert (output.rows, output.columns) == (3, 3)
        for u in range(3):
            for v in range(3):
                assert output.amplitude[u, v] == pytest.approx(GRID_AMPLITUDE[u][v], abs=1e-9)
        print("  [PASS] Amplitude of the 3x3 grid")

    def test_grid_phase(self):
        output = SpectralAnalyzer(create_grid_image()).dft()

        for (u, v), expected in GRID_PHASE.items():
            assert output.phase[u, v] == pytest.approx(expected, abs=1e-9)
        print("  [PASS] Phase where amplitude is non-zero")

    def test_flat_picture(self):
        image = create_gray_image([[7] * 4] * 3)
        output = SpectralAnalyzer(image).dft()

        assert output.amplitude[0, 0] == pytest.approx(4 * 3 * 7)
        amplitude = output.amplitude.as_array().copy()
        amplitude[0, 0] = 0.0
        assert np.all(np.abs(amplitude) < 1e-9)
        print("  [PASS] Flat picture has only a DC term")

    def test_layout_is_width_by_height(self):
        output = SpectralAnalyzer(create_random_image(4, 3)).dft()
        assert output.rows == 4
        assert output.columns == 3
        print("  [PASS] Rows follow u, columns follow v")

    def test_intensity_matrix(self):
        intensities = intensity_matrix(create_grid_image())
        assert intensities.shape == (3, 3)
        assert intensities[2, 0] == 3.0
        assert intensities[0, 2] == 7.0
        print("  [PASS] Intensities indexed [x, y]")

    def test_fft_matches_direct(self):
        intensities = intensity_matrix(create_random_image(5, 7))
        real_direct, imag_direct = dft_direct(intensities)
        real_fft, imag_fft = dft_fft(intensities)

        assert np.allclose(real_direct, real_fft, rtol=0.0, atol=1e-6)
        assert np.allclose(imag_direct, imag_fft, rtol=0.0, atol=1e-6)
        print("  [PASS] fft method agrees with direct sums")

    def test_fft_method_output(self):
        image = create_grid_image()
        direct = SpectralAnalyzer(image).dft("direct")
        fast = SpectralAnalyzer(image).dft("fft")
        assert direct.amplitude.allclose(fast.amplitude)
        print("  [PASS] fft method amplitudes")

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            SpectralAnalyzer(create_grid_image()).dft("wavelet")
        print("  [PASS] Unknown method rejected")

    def test_none_picture(self):
        with pytest.raises(NullInput):
            SpectralAnalyzer(None)
        print("  [PASS] None picture rejected")

    def test_transformer_dft(self):
        image = create_random_image(4, 4)
        assert ImageTransformer(image).dft() == SpectralAnalyzer(image).dft()
        print("  [PASS] ImageTransformer.dft delegates")

    def test_source_unchanged(self):
        image = create_random_image(4, 4)
        before = RasterImage.copy_of(image)
        SpectralAnalyzer(image).dft()
        assert image == before
        print("  [PASS] Source picture untouched")


def run_all_tests():
    """Run all Phase 5 tests."""
    print("\n" + "=" * 60)
    print("Phase 5 Tests: Spatial DFT")
    print("=" * 60)

    all_passed = True
    for test_class in (TestNestedMatrix, TestDFTOutput, TestSpectralAnalyzer):
        print(f"\n{test_class.__doc__}")
        tests = test_class()
        for name in sorted(n for n in dir(tests) if n.startswith("test_")):
            try:
                getattr(tests, name)()
            except AssertionError as e:
                print(f"  [FAIL] {name}: {e}")
                all_passed = False

    print("\n" + "=" * 60)
    print("ALL PHASE 5 TESTS PASSED" if all_passed else "SOME TESTS FAILED")
    print("=" * 60)
    return all_passed


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
