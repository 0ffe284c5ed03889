"""
Grayscale Sampler Tests
=======================
Dimensions, rounding, luma/alpha policy, box filtering and error mapping.
"""

import unittest
from unittest.mock import patch

import numpy as np
from PIL import Image

from textify.errors import (
    ContextCreationError,
    ImageTooLargeError,
    InvalidImageError,
    ProcessingFailedError,
)
from textify.sampler import ImageSampler, grayscale_pixels, target_height


def gray_image(width, height, value=128):
    return np.full((height, width), value, dtype=np.uint8)


class TestDimensions(unittest.TestCase):

    def setUp(self):
        self.sampler = ImageSampler()

    def test_square_image(self):
        buffer = self.sampler.grayscale_pixels(gray_image(100, 100), 50, 0.5)
        self.assertEqual((buffer.width, buffer.height), (50, 25))

    def test_small_output_width(self):
        buffer = self.sampler.grayscale_pixels(gray_image(100, 100), 10, 0.5)
        self.assertEqual((buffer.width, buffer.height), (10, 5))

    def test_non_square_image(self):
        # (100 / 200) * 80 * 0.5 = 20
        buffer = self.sampler.grayscale_pixels(gray_image(200, 100), 80, 0.5)
        self.assertEqual((buffer.width, buffer.height), (80, 20))

    def test_sample_count_matches_rounded_height(self):
        for src_w, src_h, width, aspect in [
            (53, 37, 20, 0.5),
            (640, 480, 80, 0.5),
            (300, 900, 33, 0.45),
            (7, 3, 100, 1.0),
        ]:
            buffer = self.sampler.grayscale_pixels(gray_image(src_w, src_h), width, aspect)
            expected_height = max(1, round(width * (src_h / src_w) * aspect))
            self.assertEqual(buffer.height, expected_height)
            self.assertEqual(buffer.samples.size, width * expected_height)

    def test_height_rounds_half_to_even(self):
        # 10 * (20 / 40) * 0.5 = 2.5 -> 2
        self.assertEqual(target_height(40, 20, 10, 0.5), 2)
        # 14 * (20 / 40) * 0.5 = 3.5 -> 4
        self.assertEqual(target_height(40, 20, 14, 0.5), 4)

    def test_height_is_at_least_one(self):
        buffer = self.sampler.grayscale_pixels(gray_image(1000, 1), 10, 0.5)
        self.assertEqual(buffer.height, 1)

    def test_pillow_input(self):
        image = Image.new("RGB", (40, 20), (0, 0, 0))
        buffer = self.sampler.grayscale_pixels(image, 10, 0.5)
        self.assertEqual((buffer.width, buffer.height), (10, 2))

    def test_module_level_wrapper(self):
        buffer = grayscale_pixels(gray_image(100, 100), 20, 0.5)
        self.assertEqual((buffer.width, buffer.height), (20, 10))


class TestLuminance(unittest.TestCase):

    def setUp(self):
        self.sampler = ImageSampler()

    def sample_one(self, pixel):
        image = np.array([[pixel]], dtype=np.uint8)
        return self.sampler.grayscale_pixels(image, 1, 1.0).pixel(0, 0)

    def test_uniform_gray_is_preserved(self):
        buffer = self.sampler.grayscale_pixels(gray_image(10, 10, 200), 10, 1.0)
        self.assertTrue(np.all(buffer.samples == 200))

    def test_black_and_white_extremes(self):
        black = self.sampler.grayscale_pixels(gray_image(30, 30, 0), 10, 0.5)
        white = self.sampler.grayscale_pixels(gray_image(30, 30, 255), 10, 0.5)
        self.assertTrue(np.all(black.samples == 0))
        self.assertTrue(np.all(white.samples == 255))

    def test_bt601_weights(self):
        self.assertEqual(self.sample_one((255, 0, 0)), 76)
        self.assertEqual(self.sample_one((0, 255, 0)), 150)
        self.assertEqual(self.sample_one((0, 0, 255)), 29)

    def test_transparent_pixels_become_white(self):
        image = np.zeros((8, 8, 4), dtype=np.uint8)
        buffer = self.sampler.grayscale_pixels(image, 4, 1.0)
        self.assertTrue(np.all(buffer.samples == 255))

    def test_opaque_alpha_is_ignored(self):
        self.assertEqual(self.sample_one((0, 0, 0, 255)), 0)

    def test_half_alpha_blends_with_white(self):
        value = self.sample_one((0, 0, 0, 128))
        self.assertIn(value, (127, 128))

    def test_pillow_rgba_matches_array(self):
        array = np.zeros((6, 6, 4), dtype=np.uint8)
        array[:, :3] = (10, 200, 90, 255)
        array[:, 3:] = (0, 0, 0, 0)
        from_array = self.sampler.grayscale_pixels(array, 6, 1.0)
        from_pillow = self.sampler.grayscale_pixels(Image.fromarray(array), 6, 1.0)
        self.assertEqual(from_array, from_pillow)

    def test_uint16_and_float_inputs(self):
        wide = np.full((4, 4), 65535, dtype=np.uint16)
        floats = np.full((4, 4), 1.0, dtype=np.float32)
        self.assertTrue(np.all(self.sampler.grayscale_pixels(wide, 2, 1.0).samples == 255))
        self.assertTrue(np.all(self.sampler.grayscale_pixels(floats, 2, 1.0).samples == 255))

    def test_sixteen_bit_pillow_matches_array(self):
        wide = np.full((4, 4), 32768, dtype=np.uint16)
        from_array = self.sampler.grayscale_pixels(wide, 2, 1.0)
        from_pillow = self.sampler.grayscale_pixels(Image.fromarray(wide), 2, 1.0)
        self.assertEqual(from_array.pixel(0, 0), 128)
        self.assertEqual(from_array, from_pillow)

    def test_pillow_int_mode_scales_by_sixteen_bits(self):
        image = Image.new("I", (4, 4), 32768)
        buffer = self.sampler.grayscale_pixels(image, 2, 1.0)
        self.assertTrue(np.all(buffer.samples == 128))

        white = self.sampler.grayscale_pixels(Image.new("I", (4, 4), 65535), 2, 1.0)
        self.assertTrue(np.all(white.samples == 255))

    def test_pillow_float_mode_reads_unit_range(self):
        image = Image.fromarray(np.full((4, 4), 0.5, dtype=np.float32))
        self.assertEqual(image.mode, "F")
        buffer = self.sampler.grayscale_pixels(image, 2, 1.0)
        self.assertTrue(np.all(np.isin(buffer.samples, (127, 128))))

    def test_box_filter_averages_checkerboard(self):
        checker = (np.indices((100, 100)).sum(axis=0) % 2 * 255).astype(np.uint8)
        buffer = self.sampler.grayscale_pixels(checker, 10, 1.0)
        self.assertTrue(np.all(np.abs(buffer.samples.astype(int) - 128) <= 1))


class TestValidation(unittest.TestCase):

    def setUp(self):
        self.sampler = ImageSampler()

    def test_zero_dimension_image(self):
        with self.assertRaises(InvalidImageError):
            self.sampler.grayscale_pixels(np.zeros((0, 10), dtype=np.uint8), 5, 0.5)

    def test_unsupported_inputs(self):
        for image in ("not an image", np.zeros((4, 4, 2)), np.zeros((2, 2, 2, 2)),
                      np.array([["a"]])):
            with self.assertRaises(InvalidImageError):
                self.sampler.grayscale_pixels(image, 5, 0.5)

    def test_non_finite_floats_rejected(self):
        nan = np.full((4, 4), np.nan, dtype=np.float32)
        partly_inf = np.zeros((4, 4, 3), dtype=np.float64)
        partly_inf[1, 2, 0] = np.inf
        for image in (nan, partly_inf, Image.fromarray(nan)):
            with self.assertRaises(InvalidImageError):
                self.sampler.grayscale_pixels(image, 2, 1.0)

    def test_invalid_arguments(self):
        image = gray_image(10, 10)
        with self.assertRaises(ValueError):
            self.sampler.grayscale_pixels(image, 0, 0.5)
        with self.assertRaises(ValueError):
            self.sampler.grayscale_pixels(image, 10, 0.0)
        with self.assertRaises(ValueError):
            self.sampler.grayscale_pixels(image, 10, float("nan"))

    def test_oversize_rejected_before_allocation(self):
        sampler = ImageSampler(max_dimension=100)
        # 100 * (300 / 100) * 0.5 = 150 rows
        with patch("textify.sampler.to_rgba") as to_rgba:
            with self.assertRaises(ImageTooLargeError) as ctx:
                sampler.grayscale_pixels(gray_image(100, 300), 100, 0.5)
            to_rgba.assert_not_called()
        error = ctx.exception
        self.assertEqual((error.width, error.height, error.max_dimension), (100, 150, 100))

    def test_oversize_width(self):
        sampler = ImageSampler(max_dimension=50)
        with self.assertRaises(ImageTooLargeError) as ctx:
            sampler.grayscale_pixels(gray_image(10, 10), 51, 0.1)
        self.assertEqual(ctx.exception.width, 51)

    def test_per_call_limit_overrides_default(self):
        with self.assertRaises(ImageTooLargeError) as ctx:
            self.sampler.grayscale_pixels(gray_image(100, 100), 80, 0.5, max_dimension=64)
        self.assertEqual(ctx.exception.max_dimension, 64)

    def test_exact_limit_is_allowed(self):
        sampler = ImageSampler(max_dimension=100)
        buffer = sampler.grayscale_pixels(gray_image(100, 200), 100, 0.5)
        self.assertEqual((buffer.width, buffer.height), (100, 100))

    def test_resize_failure_becomes_processing_failed(self):
        with patch("textify.sampler.cv2.resize", side_effect=RuntimeError("boom")):
            with self.assertRaises(ProcessingFailedError) as ctx:
                self.sampler.grayscale_pixels(gray_image(10, 10), 5, 0.5)
        self.assertIn("boom", ctx.exception.reason)
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)

    def test_memory_error_becomes_context_creation_failed(self):
        with patch("textify.sampler.cv2.resize", side_effect=MemoryError()):
            with self.assertRaises(ContextCreationError):
                self.sampler.grayscale_pixels(gray_image(10, 10), 5, 0.5)

    def test_does_not_mutate_source(self):
        image = gray_image(20, 20, 77)
        before = image.copy()
        self.sampler.grayscale_pixels(image, 5, 0.5)
        np.testing.assert_array_equal(image, before)


if __name__ == "__main__":
    unittest.main()
