"""
Text Art Result Container

Read-only grid of glyph rows produced by the generator.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple


@dataclass(frozen=True)
class TextArt:
    """
    Generated text art.

    Attributes:
        rows: One string per output row, top to bottom; all the same length
        source_characters: The palette the art was generated from
    """
    rows: Tuple[str, ...]
    source_characters: str = ""

    def __init__(self, rows: Iterable[str], source_characters: str = ""):
        rows = tuple(rows)
        if len({len(row) for row in rows}) > 1:
            raise ValueError("All text art rows must have the same length")
        object.__setattr__(self, "rows", rows)
        object.__setattr__(self, "source_characters", source_characters)

    @property
    def width(self) -> int:
        """Width in characters."""
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        """Height in rows."""
        return len(self.rows)

    def as_string(self) -> str:
        return "\n".join(self.rows)

    def save(self, path: str):
        """Write the art to ``path`` as UTF-8 text."""
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.as_string())
            f.write("\n")

    def get_stats(self) -> Dict[str, Any]:
        """Get statistics about the text art."""
        return {
            "width": self.width,
            "height": self.height,
            "total_characters": self.width * self.height,
            "unique_characters": len(set("".join(self.rows))),
        }

    def __repr__(self) -> str:
        return f"TextArt(width={self.width}, height={self.height})"

    def __str__(self) -> str:
        return self.as_string()
