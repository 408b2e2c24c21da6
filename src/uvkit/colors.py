"""Fixed color palette used for debug lines and default materials."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class Color(Enum):
    """Palette colors as 24-bit ``0xRRGGBB`` integers.

    ``PITCH_BLACK`` shares its value with ``ABSOLUTE_BLACK`` and is
    therefore an alias of it.
    """

    ABSOLUTE_BLACK = 0x000000
    BLACK = 0x021919
    PITCH_BLACK = 0x000000
    BLUE = 0x2D8BF6
    DARK_BLUE = 0x0B477A
    AQUA_BLUE = 0x00A6FF
    AQUA_BLUE_LIGHT = 0x7EB3F7
    LIGHT_BLUE = 0x8EC0F8
    BROWN = 0xAE4902
    LIGHT_BROWN = 0xCD853F
    DARK_BROWN = 0x7D591D
    DEEP_BROWN = 0x422605
    TAN = 0xD0AE57
    LIGHT_TAN = 0xE3CE9A
    GREY = 0x999999
    DARK_GREY = 0x505557
    LIGHT_GREY = 0xEDEDED
    GREEN = 0x70F62F
    GREEN_DARK = 0x00BE00
    MENARDS_GREEN = 0x009A3D
    MENARDS_GREEN_LIGHT = 0x35C45F
    MENARDS_YELLOW = 0xF7CD09
    DARK_YELLOW = 0xAA9120
    RED = 0xFF0000
    LIGHT_RED = 0xFF3333
    WHITE = 0xF5F4F2
    PURE_WHITE = 0xFFFFFF

    @classmethod
    def fromValue(cls, value: int) -> Optional["Color"]:
        """Return the palette color with ``value``, or ``None``."""
        try:
            return cls(value)
        except ValueError:
            return None

    def hex(self) -> str:
        """``#rrggbb`` form of the color."""
        return "#{:06x}".format(self.value)
