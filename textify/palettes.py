"""
Character Palette Definitions

A palette is an ordered run of glyphs from darkest/densest (index 0) to
lightest/sparsest (last index). Presets:
- standard: classic 10-glyph ramp
- blocks: Unicode shade blocks (█▓▒░)
- minimal: three glyphs for a stylized look
- dense: 70-glyph ramp for smooth gradients
- dots, digits, binary
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple, Union

from .quantize import palette_index


# ============================================================================
# PRESET RAMPS (dark to light)
# ============================================================================

PALETTE_STANDARD = "@%#*+=-:. "

PALETTE_BLOCKS = "█▓▒░ "

PALETTE_MINIMAL = "@. "

PALETTE_DENSE = "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~<>i!lI;:,\"^`'. "

PALETTE_DOTS = "●◉○◌ "

PALETTE_DIGITS = "0123456789 "

PALETTE_BINARY = "# "


@dataclass(frozen=True)
class CharacterPalette:
    """
    Ordered glyphs used to encode luminance.

    An empty palette can be built but is not valid input for generation;
    use ``is_valid`` or let the generator reject it.
    """
    characters: Tuple[str, ...]

    def __init__(self, characters: Union[str, Iterable[str]]):
        chars = tuple(characters)
        for char in chars:
            if not isinstance(char, str) or len(char) != 1:
                raise ValueError(f"Palette entries must be single characters, got {char!r}")
        object.__setattr__(self, "characters", chars)

    @classmethod
    def custom(cls, text: str) -> "CharacterPalette":
        """
        Build a palette from user text.

        Duplicates are dropped keeping first occurrence; empty text gives
        a single space.
        """
        unique = list(dict.fromkeys(text))
        return cls(unique or [" "])

    @property
    def is_valid(self) -> bool:
        return len(self.characters) > 0

    def character_for_brightness(self, brightness: int) -> str:
        """Glyph for a 0-255 sample (0 = darkest glyph)."""
        if not self.is_valid:
            raise ValueError("Cannot map brightness with an empty palette")
        return self.characters[palette_index(brightness, len(self.characters))]

    def as_string(self) -> str:
        return "".join(self.characters)

    def __len__(self) -> int:
        return len(self.characters)

    def __iter__(self):
        return iter(self.characters)


# ============================================================================
# PRESET REGISTRY
# ============================================================================

_PRESETS: Dict[str, str] = {
    "standard": PALETTE_STANDARD,
    "blocks": PALETTE_BLOCKS,
    "minimal": PALETTE_MINIMAL,
    "dense": PALETTE_DENSE,
    "dots": PALETTE_DOTS,
    "digits": PALETTE_DIGITS,
    "binary": PALETTE_BINARY,
}


def get_palette(name: str = "standard") -> CharacterPalette:
    """
    Get a preset palette by name.

    Args:
        name: One of ``list_palettes()``

    Returns:
        CharacterPalette instance
    """
    if name not in _PRESETS:
        raise ValueError(f"Unknown palette: {name}. Available: {list_palettes()}")
    return CharacterPalette(_PRESETS[name])


def list_palettes() -> List[str]:
    """List all preset palette names."""
    return list(_PRESETS)
