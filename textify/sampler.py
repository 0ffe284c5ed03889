"""
Grayscale Sampler

Converts a decoded image (Pillow Image or numpy array) into a
GrayscalePixelBuffer scaled to a target width and an aspect-corrected height.

Policy:
- Luminance uses ITU-R BT.601 weights, the same as Pillow's "L" mode
- Alpha is composited over white, so transparent pixels read as the
  lightest value
- Downscaling uses OpenCV area (box) filtering
- Output height and samples both round half-to-even
"""

import logging
import time
from typing import Optional, Protocol, Tuple, Union

import cv2
import numpy as np
from PIL import Image

from .buffer import GrayscalePixelBuffer
from .errors import (
    ContextCreationError,
    ImageProcessingError,
    ImageTooLargeError,
    InvalidImageError,
    ProcessingFailedError,
)
from .options import DEFAULT_MAX_DIMENSION, validate_aspect_correction, validate_width


logger = logging.getLogger(__name__)

ImageSource = Union[Image.Image, np.ndarray]

LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float32)
WIDE_GRAY_MAX = 65535.0      # Full scale of Pillow "I" / "I;16*" images


class GrayscaleSampling(Protocol):
    """Anything that can turn an image into a grayscale buffer."""

    def grayscale_pixels(
        self,
        image: ImageSource,
        width: int,
        aspect_correction: float,
        max_dimension: Optional[int] = None,
    ) -> GrayscalePixelBuffer:
        ...


# =============================================================================
# Helpers
# =============================================================================

def source_size(image: ImageSource) -> Tuple[int, int]:
    """
    (width, height) of a pixel source without touching its pixel data.

    Raises:
        InvalidImageError: unsupported type/shape or a zero dimension
    """
    if isinstance(image, Image.Image):
        width, height = image.size
    elif isinstance(image, np.ndarray):
        if image.ndim == 3 and image.shape[2] not in (1, 3, 4):
            raise InvalidImageError(f"unsupported channel count {image.shape[2]}")
        if image.ndim not in (2, 3):
            raise InvalidImageError(f"unsupported array shape {image.shape}")
        if image.dtype.kind not in "uif" and image.dtype != np.bool_:
            raise InvalidImageError(f"unsupported array dtype {image.dtype}")
        height, width = image.shape[:2]
    else:
        raise InvalidImageError(f"unsupported image type {type(image).__name__}")

    if width <= 0 or height <= 0:
        raise InvalidImageError(f"image has zero dimension ({width}x{height})")
    return width, height


def target_height(source_width: int, source_height: int, width: int, aspect_correction: float) -> int:
    """Aspect-corrected output rows, at least 1."""
    return max(1, round(width * (source_height / source_width) * aspect_correction))


def to_rgba(image: ImageSource) -> np.ndarray:
    """
    Float32 (H, W, 4) array in [0, 1].

    Pillow's RGBA conversion clips 16-bit and float modes to 0-255, so
    those are read as arrays and scaled like numpy input instead.

    Raises:
        InvalidImageError: float data with NaN or infinite values
    """
    if isinstance(image, Image.Image):
        if image.mode == "F":
            image = np.asarray(image, dtype=np.float32)
        elif image.mode == "I" or image.mode.startswith("I;"):
            # 16-bit grayscale decodes as I or I;16*
            image = np.asarray(image).astype(np.float32) / WIDE_GRAY_MAX
        else:
            return np.asarray(image.convert("RGBA"), dtype=np.float32) / 255.0

    if image.dtype == np.bool_:
        data = image.astype(np.float32)
    elif image.dtype.kind in "ui":
        data = image.astype(np.float32) / np.iinfo(image.dtype).max
    else:
        if not np.isfinite(image).all():
            raise InvalidImageError("image contains NaN or infinite values")
        data = np.clip(image.astype(np.float32), 0.0, 1.0)

    if data.ndim == 3 and data.shape[2] == 1:
        data = data[:, :, 0]

    if data.ndim == 2:
        opaque = np.ones_like(data)
        return np.stack([data, data, data, opaque], axis=-1)
    if data.shape[2] == 3:
        opaque = np.ones(data.shape[:2] + (1,), dtype=np.float32)
        return np.concatenate([data, opaque], axis=-1)
    return data


def luminance(rgba: np.ndarray) -> np.ndarray:
    """Luma in [0, 1] with alpha composited over white."""
    luma = rgba[..., :3] @ LUMA_WEIGHTS
    alpha = rgba[..., 3]
    return luma * alpha + (1.0 - alpha)


# =============================================================================
# Sampler
# =============================================================================

class ImageSampler:
    """
    Stateless image-to-grayscale sampler.

    Example:
        >>> sampler = ImageSampler(max_dimension=1024)
        >>> buffer = sampler.grayscale_pixels(image, width=80, aspect_correction=0.5)
        >>> buffer.width, buffer.height
    """

    def __init__(self, max_dimension: int = DEFAULT_MAX_DIMENSION):
        """
        Args:
            max_dimension: Largest output width or height accepted
        """
        if max_dimension < 1:
            raise ValueError(f"max_dimension must be positive, got {max_dimension}")
        self.max_dimension = max_dimension

    def grayscale_pixels(
        self,
        image: ImageSource,
        width: int,
        aspect_correction: float,
        max_dimension: Optional[int] = None,
    ) -> GrayscalePixelBuffer:
        """
        Sample ``image`` down to ``width`` columns of grayscale.

        Args:
            image: Pillow Image or (H, W[, 1|3|4]) numpy array
            width: Output columns, >= 1
            aspect_correction: Height factor for non-square glyph cells
            max_dimension: Overrides the sampler's limit for this call

        Returns:
            GrayscalePixelBuffer of ``width`` x aspect-corrected height

        Raises:
            InvalidImageError: image is empty or not a pixel source
            ImageTooLargeError: output would exceed the dimension limit
            ContextCreationError: the sampling buffer could not be allocated
            ProcessingFailedError: any other failure
        """
        validate_width(width)
        aspect_correction = validate_aspect_correction(aspect_correction)
        limit = self.max_dimension if max_dimension is None else max_dimension

        src_width, src_height = source_size(image)
        out_height = target_height(src_width, src_height, width, aspect_correction)

        # Reject before allocating anything output-sized
        if width > limit or out_height > limit:
            logger.info(
                "Rejecting %dx%d output (max dimension %d)", width, out_height, limit
            )
            raise ImageTooLargeError(width, out_height, limit)

        start = time.perf_counter()
        try:
            luma = luminance(to_rgba(image))
            resized = cv2.resize(
                np.ascontiguousarray(luma, dtype=np.float32),
                (width, out_height),
                interpolation=cv2.INTER_AREA,
            )
            samples = np.clip(np.rint(resized * 255.0), 0, 255).astype(np.uint8)
            buffer = GrayscalePixelBuffer(samples.reshape(-1), width, out_height)
        except ImageProcessingError:
            raise
        except MemoryError as e:
            logger.exception("Out of memory sampling %dx%d image", src_width, src_height)
            raise ContextCreationError(f"out of memory for {width}x{out_height} output") from e
        except Exception as e:
            logger.exception("Sampling failed for %dx%d image", src_width, src_height)
            raise ProcessingFailedError(f"{type(e).__name__}: {e}") from e

        logger.debug(
            "Sampled %dx%d -> %dx%d in %.1fms",
            src_width, src_height, width, out_height,
            (time.perf_counter() - start) * 1000,
        )
        return buffer


_default_sampler = ImageSampler()


def grayscale_pixels(
    image: ImageSource,
    width: int,
    aspect_correction: float,
    max_dimension: Optional[int] = None,
) -> GrayscalePixelBuffer:
    """Convenience wrapper around a default ``ImageSampler``."""
    return _default_sampler.grayscale_pixels(image, width, aspect_correction, max_dimension)
