"""
Phase 2 Tests: Point Transforms and Clipping

Tests for grayscale, red channel, mirror, negative, posterize and clip.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import cv2
import numpy as np
import pytest

from rasterlab.core import RasterImage, Quadrilateral, pack_rgb, unpack
from rasterlab.transform import ImageTransformer
from rasterlab.errors import NullInput, RegionOutOfBounds


def create_random_image(width: int = 10, height: int = 8, seed: int = 0) -> RasterImage:
    """Create a picture of random colors."""
    rng = np.random.default_rng(seed)
    array = rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
    return RasterImage.from_array(array)


def create_shapes_image() -> RasterImage:
    """Create a 40x30 picture with a filled rectangle and circle."""
    array = np.full((30, 40, 3), 240, dtype=np.uint8)
    cv2.rectangle(array, (5, 5), (18, 20), (200, 30, 30), -1)
    cv2.circle(array, (28, 15), 8, (20, 160, 90), -1)
    return RasterImage.from_array(array)


def create_row_image(colors) -> RasterImage:
    """Create a one-row picture from packed colors."""
    return RasterImage.from_array(np.array([colors], dtype=np.uint32))


class TestGrayscale:
    """Tests for grayscale conversion."""

    def test_weighted_luminance(self):
        image = create_row_image([pack_rgb(10, 20, 30)])
        gray = ImageTransformer(image).grayscale()
        assert gray.get_pixel(0, 0) == pack_rgb(18, 18, 18)
        print("  [PASS] Weighted luminance")

    def test_gray_is_fixed_point(self):
        image = create_row_image([pack_rgb(v, v, v) for v in (0, 1, 127, 128, 255)])
        assert ImageTransformer(image).grayscale() == image
        print("  [PASS] Gray pixels unchanged")

    def test_grayscale_is_idempotent(self):
        once = ImageTransformer(create_shapes_image()).grayscale()
        twice = ImageTransformer(once).grayscale()
        assert once == twice
        print("  [PASS] Grayscale idempotent")

    def test_keeps_alpha(self):
        image = RasterImage(1, 1, has_alpha=True)
        image.set_pixel(0, 0, pack_rgb(10, 20, 30, 77))
        gray = ImageTransformer(image).grayscale()
        assert gray.has_alpha
        assert gray.get_pixel(0, 0) == pack_rgb(18, 18, 18, 77)
        print("  [PASS] Alpha passed through")


class TestRedChannel:
    """Tests for keeping only the red channel."""

    def test_red_only(self):
        image = create_row_image([pack_rgb(10, 20, 30), pack_rgb(255, 255, 255)])
        red = ImageTransformer(image).red_channel()
        assert red.get_pixel(0, 0) == pack_rgb(10, 0, 0)
        assert red.get_pixel(1, 0) == pack_rgb(255, 0, 0)
        print("  [PASS] Green and blue zeroed")

    def test_keeps_alpha(self):
        image = RasterImage(1, 1, has_alpha=True)
        image.set_pixel(0, 0, pack_rgb(10, 20, 30, 128))
        assert ImageTransformer(image).red_channel().get_pixel(0, 0) == pack_rgb(10, 0, 0, 128)
        print("  [PASS] Alpha passed through")


class TestMirror:
    """Tests for left-right mirroring."""

    def test_reverses_columns(self):
        a, b, c = pack_rgb(1, 0, 0), pack_rgb(0, 2, 0), pack_rgb(0, 0, 3)
        mirrored = ImageTransformer(create_row_image([a, b, c])).mirror()
        assert [mirrored.get_pixel(col, 0) for col in range(3)] == [c, b, a]
        print("  [PASS] Columns reversed")

    def test_involution(self):
        image = create_random_image()
        twice = ImageTransformer(ImageTransformer(image).mirror()).mirror()
        assert twice == image
        print("  [PASS] mirror(mirror(I)) == I")

    def test_pixel_mapping(self):
        image = create_random_image(7, 5)
        mirrored = ImageTransformer(image).mirror()
        for row in range(5):
            for col in range(7):
                assert mirrored.get_pixel(col, row) == image.get_pixel(6 - col, row)
        print("  [PASS] mirror(I)(x, y) == I(W-1-x, y)")


class TestNegative:
    """Tests for color negation."""

    def test_inverts_channels(self):
        negative = ImageTransformer(create_row_image([pack_rgb(10, 20, 30)])).negative()
        assert negative.get_pixel(0, 0) == pack_rgb(245, 235, 225)
        print("  [PASS] Channels inverted")

    def test_black_and_white(self):
        black = RasterImage(2, 2)
        white = ImageTransformer(black).negative()
        assert white.get_pixel(1, 1) == 0xFFFFFFFF
        print("  [PASS] Black <-> white")

    def test_involution(self):
        image = create_shapes_image()
        twice = ImageTransformer(ImageTransformer(image).negative()).negative()
        assert twice == image
        print("  [PASS] negative(negative(I)) == I")

    def test_keeps_alpha(self):
        image = RasterImage(1, 1, has_alpha=True)
        image.set_pixel(0, 0, pack_rgb(0, 0, 0, 40))
        assert ImageTransformer(image).negative().get_pixel(0, 0) == pack_rgb(255, 255, 255, 40)
        print("  [PASS] Alpha passed through")


class TestPosterize:
    """Tests for three-level posterization."""

    def test_band_boundaries(self):
        values = [0, 64, 65, 128, 129, 255]
        image = create_row_image([pack_rgb(v, v, v) for v in values])
        posterized = ImageTransformer(image).posterize()
        result = [unpack(posterized.get_pixel(col, 0))[1] for col in range(len(values))]
        assert result == [32, 32, 96, 96, 222, 222]
        print("  [PASS] Band boundaries")

    def test_channels_independent(self):
        image = create_row_image([pack_rgb(10, 100, 200)])
        posterized = ImageTransformer(image).posterize()
        assert posterized.get_pixel(0, 0) == pack_rgb(32, 96, 222)
        print("  [PASS] Channels posterized independently")

    def test_idempotent(self):
        once = ImageTransformer(create_random_image()).posterize()
        twice = ImageTransformer(once).posterize()
        assert once == twice
        print("  [PASS] posterize(posterize(I)) == posterize(I)")

    def test_source_unchanged(self):
        image = create_random_image()
        before = RasterImage.copy_of(image)
        ImageTransformer(image).posterize()
        assert image == before
        print("  [PASS] Source picture untouched")


class TestClip:
    """Tests for clipping to a region."""

    def test_exact_region(self):
        image = create_random_image(10, 8)
        clipped = ImageTransformer(image).clip(Quadrilateral(2, 1, 5, 4))

        assert clipped.width() == 4
        assert clipped.height() == 4
        for row in range(4):
            for col in range(4):
                assert clipped.get_pixel(col, row) == image.get_pixel(col + 2, row + 1)
        print("  [PASS] clip(I, box)(j, i) == I(x1 + j, y1 + i)")

    def test_whole_picture(self):
        image = create_random_image(10, 8)
        assert ImageTransformer(image).clip(Quadrilateral(0, 0, 9, 7)) == image
        print("  [PASS] Full-size clip is a copy")

    def test_single_pixel(self):
        image = create_random_image(10, 8)
        clipped = ImageTransformer(image).clip(Quadrilateral(9, 7, 9, 7))
        assert clipped.width() == 1 and clipped.height() == 1
        assert clipped.get_pixel(0, 0) == image.get_pixel(9, 7)
        print("  [PASS] Single pixel clip")

    def test_too_large(self):
        transformer = ImageTransformer(create_random_image(10, 8))
        with pytest.raises(RegionOutOfBounds):
            transformer.clip(Quadrilateral(0, 0, 10, 7))
        with pytest.raises(RegionOutOfBounds):
            transformer.clip(Quadrilateral(0, 0, 9, 8))
        print("  [PASS] Oversized box rejected")

    def test_outside_picture(self):
        transformer = ImageTransformer(create_random_image(10, 8))
        with pytest.raises(RegionOutOfBounds):
            transformer.clip(Quadrilateral(8, 0, 11, 3))
        with pytest.raises(RegionOutOfBounds):
            transformer.clip(Quadrilateral(-1, 0, 2, 3))
        print("  [PASS] Box past the edge rejected")

    def test_none_box(self):
        with pytest.raises(NullInput):
            ImageTransformer(create_random_image()).clip(None)
        print("  [PASS] None box rejected")


class TestTransformerInput:
    """Tests for the bound picture."""

    def test_none_picture(self):
        with pytest.raises(NullInput):
            ImageTransformer(None)
        print("  [PASS] None picture rejected")

    def test_results_are_new_pictures(self):
        image = create_random_image()
        transformer = ImageTransformer(image)
        for result in (transformer.mirror(), transformer.negative(), transformer.grayscale()):
            assert result is not image
        print("  [PASS] New picture per operation")


def run_all_tests():
    """Run all Phase 2 tests."""
    print("\n" + "=" * 60)
    print("Phase 2 Tests: Point Transforms and Clipping")
    print("=" * 60)

    all_passed = True
    for test_class in (
        TestGrayscale,
        TestRedChannel,
        TestMirror,
        TestNegative,
        TestPosterize,
        TestClip,
        TestTransformerInput,
    ):
        print(f"\n{test_class.__doc__}")
        tests = test_class()
        for name in sorted(n for n in dir(tests) if n.startswith("test_")):
            try:
                getattr(tests, name)()
            except AssertionError as e:
                print(f"  [FAIL] {name}: {e}")
                all_passed = False

    print("\n" + "=" * 60)
    print("ALL PHASE 2 TESTS PASSED" if all_passed else "SOME TESTS FAILED")
    print("=" * 60)
    return all_passed


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
