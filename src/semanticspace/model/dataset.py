"""
Labeled Points (Data Model)
===========================
The records plotted in the semantic space and the built-in example dataset.

Classes:
    LabeledPoint: One word/phrase placed at an (x, y, z) coordinate.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

WHITE = 0xFFFFFF

ColorLike = Union[int, str, None]


def parse_color(value: ColorLike) -> int:
    """
    Normalize a color to a packed 0xRRGGBB integer.

    Accepts None (white), an integer in [0, 0xFFFFFF], or a string in the
    form "#RRGGBB" or "0xRRGGBB".

    Raises:
        ValueError: If the value cannot be interpreted as a color.
    """
    if value is None:
        return WHITE

    # bool is an int subclass, but True is not a color
    if isinstance(value, bool):
        raise ValueError(f"Invalid color: {value!r}")

    if isinstance(value, int):
        if not 0 <= value <= WHITE:
            raise ValueError(f"Color out of range: {value:#x}")
        return value

    if isinstance(value, str):
        text = value.strip().lower()
        if text.startswith("#"):
            digits = text[1:]
        elif text.startswith("0x"):
            digits = text[2:]
        else:
            raise ValueError(f"Invalid color string: {value!r}")

        if len(digits) != 6:
            raise ValueError(f"Invalid color string: {value!r}")
        try:
            return int(digits, 16)
        except ValueError:
            raise ValueError(f"Invalid color string: {value!r}") from None

    raise ValueError(f"Invalid color: {value!r}")


def hex_to_rgb(color: int) -> Tuple[float, float, float]:
    """Convert a packed 0xRRGGBB integer to an (r, g, b) triple in [0, 1]."""
    r = (color >> 16) & 0xFF
    g = (color >> 8) & 0xFF
    b = color & 0xFF
    return r / 255.0, g / 255.0, b / 255.0


@dataclass(frozen=True)
class LabeledPoint:
    """
    One word placed in the semantic space.

    `text` is not required to be unique: the same word may appear at several
    positions to show different senses of it.
    """
    text: str
    x: float
    y: float
    z: float
    color: Optional[int] = None

    @property
    def position(self) -> Tuple[float, float, float]:
        return self.x, self.y, self.z

    @property
    def resolved_color(self) -> int:
        """Packed color, white when unset."""
        return WHITE if self.color is None else self.color

    @property
    def rgb(self) -> Tuple[float, float, float]:
        return hex_to_rgb(self.resolved_color)


# Axes of the example:
#   X: scope of authority, Y: source/nature of power, Z: sentiment/connotation
DEFAULT_DATASET: Tuple[LabeledPoint, ...] = (
    # Leadership roles
    LabeledPoint("King", 4, 4, 1, 0xFFD700),
    LabeledPoint("Queen", 3.8, 3.9, 1, 0xFFD700),
    LabeledPoint("President", 4, -2, 0.8, 0x007BFF),
    LabeledPoint("CEO", -2, -3, 0, 0x28A745),
    LabeledPoint("Manager", -3, -3.5, 0, 0x17A2B8),
    LabeledPoint("Leader", 0, 0, 2, 0xFFFFFF),
    LabeledPoint("Boss", -2.5, -3.2, -1, 0x6C757D),
    LabeledPoint("Tyrant", 3.5, 3, -4, 0xDC3545),

    # Animals and the adjectives that sit close to them
    LabeledPoint("Dog", -5, 5, 3, 0x8B4513),
    LabeledPoint("Cat", -4.5, 4.5, 2.5, 0xA9A9A9),
    LabeledPoint("Loyal", -5.2, 5.2, 3.5, 0x00FF00),
    LabeledPoint("Fierce", -4.3, 4.3, -2, 0xFF0000),

    # Homonyms: same word, different context
    LabeledPoint("Apple (Fruit)", 5, -5, 2, 0x90EE90),
    LabeledPoint("Apple (Tech)", 5.5, -5.5, 1, 0xD3D3D3),
)
