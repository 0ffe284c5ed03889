"""
Error Taxonomy

Two levels of failure:
- ImageProcessingError: the sampler could not turn the image into a buffer
- TextArtGenerationError: generation failed; wraps sampler errors instead of
  flattening them, so callers can tell a bad image from a bad palette
"""

from typing import Optional


# =============================================================================
# IMAGE PROCESSING
# =============================================================================

class ImageProcessingError(Exception):
    """Base class for failures while sampling an image to grayscale."""


class InvalidImageError(ImageProcessingError):
    """The image has zero dimensions or is not a supported pixel source."""

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        super().__init__(detail or "invalid image")


class ImageTooLargeError(ImageProcessingError):
    """The requested output exceeds the configured maximum dimension."""

    def __init__(self, width: int, height: int, max_dimension: int):
        self.width = width
        self.height = height
        self.max_dimension = max_dimension
        super().__init__(
            f"output {width}x{height} exceeds max dimension {max_dimension}"
        )


class ContextCreationError(ImageProcessingError):
    """The resampling surface could not be allocated."""

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        super().__init__(detail or "could not allocate sampling buffer")


class ProcessingFailedError(ImageProcessingError):
    """Any other sampling failure. Carries a diagnostic string only."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"image processing failed: {reason}")


# =============================================================================
# GENERATION
# =============================================================================

class TextArtGenerationError(Exception):
    """Base class for failures while generating text art."""


class InvalidPaletteError(TextArtGenerationError):
    def __init__(self):
        super().__init__("character palette is empty")


class ImageProcessingFailedError(TextArtGenerationError):
    """The sampler failed. The original error is kept on ``error``."""

    def __init__(self, error: ImageProcessingError):
        self.error = error
        super().__init__(f"image processing failed: {error}")


class GenerationCancelledError(TextArtGenerationError):
    def __init__(self):
        super().__init__("generation cancelled")


class GenerationFailedError(TextArtGenerationError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"generation failed: {reason}")
