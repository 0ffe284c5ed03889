"""
Image-to-Text-Art Converter

A two-stage pipeline for turning raster images into text art:
- Grayscale sampling with box-filtered downscaling and aspect correction
- Monotone luminance-to-glyph quantization over an ordered palette

For debug logging, enable with:
    import logging
    logging.basicConfig(level=logging.DEBUG)
"""

import logging

__version__ = "0.4.0"

# Package logger - silent unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

from .buffer import GrayscalePixelBuffer
from .errors import (
    ContextCreationError,
    GenerationCancelledError,
    GenerationFailedError,
    ImageProcessingError,
    ImageProcessingFailedError,
    ImageTooLargeError,
    InvalidImageError,
    InvalidPaletteError,
    ProcessingFailedError,
    TextArtGenerationError,
)
from .generator import TextArtGenerating, TextArtGenerator, generate
from .options import ProcessingOptions
from .palettes import CharacterPalette, get_palette, list_palettes
from .quantize import palette_index, palette_indices
from .result import TextArt
from .sampler import GrayscaleSampling, ImageSampler, grayscale_pixels

__all__ = [
    "GrayscalePixelBuffer",
    "CharacterPalette",
    "get_palette",
    "list_palettes",
    "ProcessingOptions",
    "TextArt",
    "palette_index",
    "palette_indices",
    "GrayscaleSampling",
    "ImageSampler",
    "grayscale_pixels",
    "TextArtGenerating",
    "TextArtGenerator",
    "generate",
    "ImageProcessingError",
    "InvalidImageError",
    "ImageTooLargeError",
    "ContextCreationError",
    "ProcessingFailedError",
    "TextArtGenerationError",
    "InvalidPaletteError",
    "ImageProcessingFailedError",
    "GenerationCancelledError",
    "GenerationFailedError",
]
