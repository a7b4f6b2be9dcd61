from __future__ import annotations

import math
from dataclasses import dataclass
from functools import cached_property
from typing import Optional, Tuple

from coloraide import Color as _BaseColor
from coloraide.spaces.hct import HCT

# ============================================================
# coloraide setup
# ============================================================


class Color(_BaseColor):
    """coloraide Color with the HCT space registered."""


Color.register(HCT())

# Hue and tone are kept, chroma is reduced to land in sRGB.
HCT_FIT = {"method": "raytrace", "pspace": "hct"}

ACHROMATIC_CHROMA = 1e-4


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def norm_hex(h: str) -> str:
    return str(h).strip().lower()


def _hue_or_none(h: float, c: float) -> Optional[float]:
    if math.isnan(h) or c < ACHROMATIC_CHROMA:
        return None
    return float(h) % 360.0


# ============================================================
# Perceptual color value
# ============================================================


@dataclass(frozen=True)
class PerceptualColor:
    """
    Immutable sRGB color with HCT (hue/chroma/tone) and OKLCH views.

    Tone is CIELAB L*, so for a fixed background the WCAG contrast of a
    color moves monotonically with its tone on either side of the
    background's own tone.
    """

    hex: str

    @classmethod
    def from_hex(cls, value: str) -> "PerceptualColor":
        return cls(Color(norm_hex(value)).convert("srgb").to_string(hex=True))

    @classmethod
    def from_hct(cls, hue: float, chroma: float, tone: float) -> "PerceptualColor":
        h = float(hue) % 360.0
        t = clamp(float(tone), 0.0, 100.0)
        c = max(0.0, float(chroma))
        out = Color("hct", [h, c, t]).convert("srgb").to_string(hex=True, fit=HCT_FIT)
        return cls(out)

    @cached_property
    def _hct(self) -> Tuple[float, float, float]:
        hct = Color(self.hex).convert("hct")
        c = float(hct["c"])
        h = _hue_or_none(float(hct["h"]), c)
        return (0.0 if h is None else h, c, float(hct["t"]))

    @property
    def hue(self) -> float:
        """HCT hue in [0, 360); 0 for achromatic colors."""
        return self._hct[0]

    @property
    def chroma(self) -> float:
        return self._hct[1]

    @property
    def tone(self) -> float:
        return clamp(self._hct[2], 0.0, 100.0)

    @cached_property
    def oklch(self) -> Tuple[float, float, Optional[float]]:
        """(lightness 0..1, chroma, hue or None when achromatic)."""
        lch = Color(self.hex).convert("oklch")
        l, c = float(lch["l"]), float(lch["c"])
        return (l, c, _hue_or_none(float(lch["h"]), c))

    def contrast_against(self, other: "PerceptualColor") -> float:
        return float(Color(self.hex).contrast(Color(other.hex), method="wcag21"))

    def __str__(self) -> str:
        return self.hex


def as_color(value) -> PerceptualColor:
    if isinstance(value, PerceptualColor):
        return value
    return PerceptualColor.from_hex(value)


def is_light_background(background: PerceptualColor) -> bool:
    return background.oklch[0] > 0.5


__all__ = [
    "Color",
    "PerceptualColor",
    "as_color",
    "clamp",
    "is_light_background",
    "norm_hex",
]
