"""Named uniform sets for the two multi-texture shader programs.

The shader programs themselves belong to the renderer.  These classes
only gather the values they read, under the names the programs use, and
emit them in the ``{name: {"type": code, "value": v}}`` layout that a
WebGL-style material expects.  Textures are opaque handles passed
through untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from uvkit.colors import Color
from uvkit.errors import InvalidArgument

RGB = Tuple[float, float, float]


def rgb(color: Color | int) -> RGB:
    """Return the ``(r, g, b)`` floats in ``[0, 1]`` for a palette color
    or a ``0xRRGGBB`` integer."""
    value = color.value if isinstance(color, Color) else color
    if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 0xFFFFFF:
        raise InvalidArgument(f"not a 24-bit color: {color!r}")
    return ((value >> 16) / 255.0, ((value >> 8) & 0xFF) / 255.0, (value & 0xFF) / 255.0)


@dataclass
class MultiLayerUniforms:
    """Base texture blended with a secondary texture and tinted.

    The base texture is sampled at ``uv / (repeatX, repeatY)`` and the
    blend texture at ``uv / repeatY``.
    """

    texture: Any = None
    texture2: Any = None
    color: Color | int = Color.PURE_WHITE
    repeatX: float = 1.0
    repeatY: float = 1.0
    uvMultiply: bool = False

    def asdict(self) -> Dict[str, Dict[str, Any]]:
        if not self.repeatX or not self.repeatY:
            raise InvalidArgument("texture repeat values must be non-zero")
        return {
            "texture": {"type": "t", "value": self.texture},
            "texture2": {"type": "t", "value": self.texture2},
            "color": {"type": "c", "value": rgb(self.color)},
            "repeatX": {"type": "f", "value": float(self.repeatX)},
            "repeatY": {"type": "f", "value": float(self.repeatY)},
            "uvMultiply": {"type": "b", "value": bool(self.uvMultiply)},
        }


@dataclass
class BasicMultiUniforms:
    """Two textures sharing one repeat factor, multiplied into or
    divided out of the UVs depending on ``uvMultiply``."""

    tOne: Any = None
    tSec: Any = None
    uvMultiply: bool = True
    textureRepeat: float = 1.0
    extra: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def asdict(self) -> Dict[str, Dict[str, Any]]:
        if not self.uvMultiply and not self.textureRepeat:
            raise InvalidArgument("texture repeat must be non-zero when dividing UVs")
        uniforms = {
            "tOne": {"type": "t", "value": self.tOne},
            "tSec": {"type": "t", "value": self.tSec},
            "uvMultiply": {"type": "b", "value": bool(self.uvMultiply)},
            "textureRepeat": {"type": "f", "value": float(self.textureRepeat)},
        }
        uniforms.update(self.extra)
        return uniforms
