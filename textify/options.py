"""
Processing Options

Validated, immutable configuration for a single generation call.
"""

import math
from dataclasses import dataclass
from typing import Optional


DEFAULT_WIDTH = 80
DEFAULT_ASPECT_CORRECTION = 0.5     # glyph cells are ~2x taller than wide
DEFAULT_MAX_DIMENSION = 4096
MAX_CONTRAST = 2.0


def validate_width(width) -> int:
    if isinstance(width, bool) or not isinstance(width, int) or width < 1:
        raise ValueError(f"width must be a positive integer, got {width!r}")
    return width


def validate_aspect_correction(aspect_correction) -> float:
    if isinstance(aspect_correction, bool) or not isinstance(aspect_correction, (int, float)):
        raise ValueError(f"aspect_correction must be a number, got {aspect_correction!r}")
    if not math.isfinite(aspect_correction) or aspect_correction <= 0:
        raise ValueError(
            f"aspect_correction must be positive and finite, got {aspect_correction!r}"
        )
    return float(aspect_correction)


@dataclass(frozen=True)
class ProcessingOptions:
    """Configuration for text art generation."""
    target_width: int = DEFAULT_WIDTH           # Output columns
    aspect_correction: float = DEFAULT_ASPECT_CORRECTION
    max_dimension: Optional[int] = None         # None = sampler's own limit
    invert: bool = False                        # Light samples -> dense glyphs
    contrast: float = 1.0                       # 1.0 = none, around midpoint 127.5
    workers: int = 1                            # Threads for row quantization

    def __post_init__(self):
        validate_width(self.target_width)
        object.__setattr__(
            self, "aspect_correction", validate_aspect_correction(self.aspect_correction)
        )

        if self.max_dimension is not None:
            if isinstance(self.max_dimension, bool) or not isinstance(self.max_dimension, int) \
                    or self.max_dimension < 1:
                raise ValueError(
                    f"max_dimension must be a positive integer, got {self.max_dimension!r}"
                )

        if not isinstance(self.contrast, (int, float)) or isinstance(self.contrast, bool) \
                or not 0.0 <= self.contrast <= MAX_CONTRAST:
            raise ValueError(f"contrast must be in [0, {MAX_CONTRAST}], got {self.contrast!r}")
        object.__setattr__(self, "contrast", float(self.contrast))

        if isinstance(self.workers, bool) or not isinstance(self.workers, int) or self.workers < 1:
            raise ValueError(f"workers must be a positive integer, got {self.workers!r}")

        object.__setattr__(self, "invert", bool(self.invert))
