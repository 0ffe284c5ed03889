"""
Grayscale Pixel Buffer

Immutable row-major luminance samples produced by the sampler.
0 = black, 255 = white.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass(frozen=True, eq=False)
class GrayscalePixelBuffer:
    """
    Grayscale samples for a ``width`` x ``height`` image.

    Attributes:
        samples: Flat uint8 array in row-major order, origin top-left
        width: Number of columns
        height: Number of rows
    """
    samples: np.ndarray
    width: int
    height: int

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Buffer dimensions must be positive, got {self.width}x{self.height}"
            )

        raw = np.asarray(self.samples)
        if raw.size and (raw.min() < 0 or raw.max() > 255):
            raise ValueError("Samples must be in range 0-255")

        # Own a read-only copy so the caller's array can't alias it
        samples = np.array(raw, dtype=np.uint8).reshape(-1)
        if samples.size != self.width * self.height:
            raise ValueError(
                f"Expected {self.width * self.height} samples, got {samples.size}"
            )
        samples.flags.writeable = False
        object.__setattr__(self, "samples", samples)

    def pixel(self, x: int, y: int) -> Optional[int]:
        """Sample at column ``x``, row ``y``, or None if out of bounds."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        return int(self.samples[y * self.width + x])

    def row(self, y: int) -> Optional[np.ndarray]:
        """Row ``y`` as a read-only view, or None if out of bounds."""
        if not 0 <= y < self.height:
            return None
        return self.as_array()[y]

    def as_array(self) -> np.ndarray:
        """Read-only (height, width) view of the samples."""
        return self.samples.reshape(self.height, self.width)

    def __eq__(self, other) -> bool:
        if not isinstance(other, GrayscalePixelBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.samples, other.samples)
        )

    def __hash__(self) -> int:
        return hash((self.width, self.height, self.samples.tobytes()))

    def __repr__(self) -> str:
        return f"GrayscalePixelBuffer(width={self.width}, height={self.height})"
