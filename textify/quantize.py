"""
Luminance Quantization

Maps 0-255 samples to palette indices. Kept free of any sampler or
generator so it can be tested on its own.

Mapping (L = palette length):
    idx = floor(s / 255 * (L - 1)), clamped to [0, L - 1]
    idx = (L - 1) - idx              when inverted

The mapping is monotone: a darker sample never selects a higher index than
a lighter one (the reverse when inverted).
"""

import numpy as np


MIDPOINT = 127.5


def apply_contrast(samples: np.ndarray, contrast: float) -> np.ndarray:
    """Scale samples around the midpoint and clamp back to 0-255."""
    values = np.asarray(samples, dtype=np.float64)
    if contrast != 1.0:
        values = MIDPOINT + (values - MIDPOINT) * contrast
    return np.clip(values, 0.0, 255.0)


def palette_indices(
    samples: np.ndarray,
    palette_length: int,
    invert: bool = False,
    contrast: float = 1.0,
) -> np.ndarray:
    """
    Vectorized quantization of samples to palette indices.

    Args:
        samples: Array of 0-255 luminance values (any shape)
        palette_length: Number of glyphs, must be >= 1
        invert: Reverse the dark/light mapping
        contrast: Contrast factor applied before quantization

    Returns:
        intp array of the same shape as ``samples``
    """
    if palette_length < 1:
        raise ValueError("palette_length must be at least 1")

    last = palette_length - 1
    normalized = apply_contrast(samples, contrast) / 255.0
    indices = np.floor(normalized * last).astype(np.intp)
    # s == 255 must land exactly on the last index, never past it
    indices = np.clip(indices, 0, last)

    if invert:
        indices = last - indices
    return indices


def palette_index(
    sample: int,
    palette_length: int,
    invert: bool = False,
    contrast: float = 1.0,
) -> int:
    """Scalar form of ``palette_indices``."""
    return int(palette_indices(np.array([sample]), palette_length, invert, contrast)[0])
