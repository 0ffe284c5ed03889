"""
Text Art Generator

Runs the two-stage pipeline: sample the image to grayscale, then quantize
every sample to a palette glyph and assemble rows top to bottom.

Cancellation is cooperative: pass any object with ``is_set()`` (usually a
``threading.Event``) and it is checked before sampling and before every
batch of rows. A cancelled call never returns partial art.
"""

import logging
import time
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Deque, List, Optional, Protocol

import numpy as np

from .buffer import GrayscalePixelBuffer
from .errors import (
    GenerationCancelledError,
    GenerationFailedError,
    ImageProcessingError,
    ImageProcessingFailedError,
    InvalidPaletteError,
    TextArtGenerationError,
)
from .options import ProcessingOptions
from .palettes import CharacterPalette
from .quantize import palette_indices
from .result import TextArt
from .sampler import GrayscaleSampling, ImageSampler, ImageSource


logger = logging.getLogger(__name__)

ROW_BATCH = 64      # Rows quantized between cancellation checks


class CancelToken(Protocol):
    def is_set(self) -> bool:
        ...


class TextArtGenerating(Protocol):
    """Anything that can turn an image and palette into text art."""

    def generate(
        self,
        image: ImageSource,
        palette: CharacterPalette,
        options: Optional[ProcessingOptions] = None,
        cancel_event: Optional[CancelToken] = None,
    ) -> TextArt:
        ...


def _check_cancelled(cancel_event: Optional[CancelToken]):
    if cancel_event is not None and cancel_event.is_set():
        raise GenerationCancelledError()


class TextArtGenerator:
    """
    Text art generator over a pluggable sampler.

    Example:
        >>> generator = TextArtGenerator()
        >>> art = generator.generate(image, get_palette("standard"))
        >>> print(art)
    """

    def __init__(self, sampler: Optional[GrayscaleSampling] = None):
        """
        Args:
            sampler: Grayscale sampler to use (default: ImageSampler())
        """
        self.sampler = sampler if sampler is not None else ImageSampler()

    def generate(
        self,
        image: ImageSource,
        palette: CharacterPalette,
        options: Optional[ProcessingOptions] = None,
        cancel_event: Optional[CancelToken] = None,
    ) -> TextArt:
        """
        Generate text art from an image.

        Args:
            image: Decoded image (Pillow Image or numpy array)
            palette: Glyphs ordered darkest to lightest
            options: Processing options (default: ProcessingOptions())
            cancel_event: Optional cancellation token

        Returns:
            TextArt with one row per sampled image row

        Raises:
            InvalidPaletteError: palette is empty
            ImageProcessingFailedError: the sampler failed
            GenerationCancelledError: cancel_event was set
            GenerationFailedError: any other failure
        """
        options = options or ProcessingOptions()

        if not palette.is_valid:
            raise InvalidPaletteError()
        _check_cancelled(cancel_event)

        start = time.perf_counter()
        try:
            buffer = self.sampler.grayscale_pixels(
                image,
                options.target_width,
                options.aspect_correction,
                options.max_dimension,
            )
        except ImageProcessingError as e:
            raise ImageProcessingFailedError(e) from e
        except Exception as e:
            logger.exception("Sampler raised an unclassified error")
            raise GenerationFailedError(f"{type(e).__name__}: {e}") from e

        try:
            rows = self._assemble_rows(buffer, palette, options, cancel_event)
            art = TextArt(rows, source_characters=palette.as_string())
        except TextArtGenerationError:
            raise
        except Exception as e:
            logger.exception("Row assembly failed")
            raise GenerationFailedError(f"{type(e).__name__}: {e}") from e

        logger.debug(
            "Generated %dx%d text art in %.1fms",
            art.width, art.height, (time.perf_counter() - start) * 1000,
        )
        return art

    def _assemble_rows(
        self,
        buffer: GrayscalePixelBuffer,
        palette: CharacterPalette,
        options: ProcessingOptions,
        cancel_event: Optional[CancelToken],
    ) -> List[str]:
        grid = buffer.as_array()
        glyphs = np.array(palette.characters)
        batches = [
            grid[top:top + ROW_BATCH] for top in range(0, buffer.height, ROW_BATCH)
        ]

        def convert(batch: np.ndarray) -> List[str]:
            indices = palette_indices(
                batch, len(glyphs), invert=options.invert, contrast=options.contrast
            )
            return ["".join(row) for row in glyphs[indices]]

        chunks: List[List[str]] = []
        if options.workers > 1 and len(batches) > 1:
            with ThreadPoolExecutor(max_workers=options.workers) as executor:
                # At most `workers` batches in flight; results are taken in
                # submission order so rows stay top to bottom
                in_flight: Deque[Future] = deque()
                for batch in batches:
                    _check_cancelled(cancel_event)
                    if len(in_flight) >= options.workers:
                        chunks.append(in_flight.popleft().result())
                    in_flight.append(executor.submit(convert, batch))
                chunks.extend(future.result() for future in in_flight)
        else:
            for batch in batches:
                _check_cancelled(cancel_event)
                chunks.append(convert(batch))

        return [row for chunk in chunks for row in chunk]


_default_generator = TextArtGenerator()


def generate(
    image: ImageSource,
    palette: CharacterPalette,
    options: Optional[ProcessingOptions] = None,
    cancel_event: Optional[CancelToken] = None,
) -> TextArt:
    """Convenience wrapper around a default ``TextArtGenerator``."""
    return _default_generator.generate(image, palette, options, cancel_event)
