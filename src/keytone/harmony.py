from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .catalog import Token
from .color import PerceptualColor
from .hues import DEFAULT_PRIMARY_HUE, HueMapper, normalize_hue
from .steps import SelectionContext, select_step

# ============================================================
# Harmony schemes
# ============================================================

HARMONY_OFFSETS: Dict[str, Tuple[float, ...]] = {
    "complementary": (180.0,),
    "triadic": (120.0, 240.0),
    "analogous": (30.0, -30.0),
    "split_complementary": (150.0, 210.0),
    "tetradic": (60.0, 180.0, 240.0),
    "square": (90.0, 180.0, 270.0),
}

HARMONY_ROLES: Dict[str, Tuple[str, ...]] = {
    "complementary": ("secondary",),
    "triadic": ("secondary", "accent"),
    "analogous": ("secondary", "accent"),
    "split_complementary": ("secondary", "accent"),
    "tetradic": ("secondary", "accent", "accent"),
    "square": ("secondary", "accent", "accent"),
}

HARMONY_SCHEMES = tuple(HARMONY_OFFSETS)


@dataclass(frozen=True)
class HarmonyColor:
    token: Token
    role: str
    hue_offset: float
    actual_hue: float


@dataclass(frozen=True)
class HarmonyPaletteResult:
    primary_hue: float
    colors: List[HarmonyColor] = field(default_factory=list)

    def token_ids(self) -> List[str]:
        return [c.token.id for c in self.colors]


# ============================================================
# Selector
# ============================================================


class HarmonySelector:
    """
    Builds harmony palettes out of catalog tokens.

    Each offset from the primary hue is snapped to a hue family, then a
    mid-scale step of that family is chosen. One palette never repeats a
    token; offsets whose family is exhausted are left out.
    """

    def __init__(
        self,
        tokens: Iterable[Token],
        mapper: Optional[HueMapper] = None,
        default_hue: float = DEFAULT_PRIMARY_HUE,
    ):
        self.tokens = list(tokens)
        if not self.tokens:
            raise ValueError("HarmonySelector requires at least one token")
        self.mapper = mapper or HueMapper()
        self.default_hue = default_hue

    def primary_hue(self, primary_hex: str) -> float:
        h = PerceptualColor.from_hex(primary_hex).oklch[2]
        return self.default_hue if h is None else h

    def _generate(
        self,
        primary_hex: str,
        offsets: Sequence[float],
        roles: Sequence[str],
    ) -> HarmonyPaletteResult:
        primary_hue = self.primary_hue(primary_hex)
        used_ids: Set[str] = set()
        colors = []

        for i, offset in enumerate(offsets):
            role = roles[i] if i < len(roles) else "accent"
            mapping = self.mapper.nearest(normalize_hue(primary_hue + offset))
            token = select_step(
                mapping.family,
                SelectionContext(role=role, lightness="mid"),
                self.tokens,
                used_ids,
            )
            if token is None:
                continue

            used_ids.add(token.id)
            actual = PerceptualColor.from_hex(token.hex).oklch[2]
            colors.append(
                HarmonyColor(
                    token=token,
                    role=role,
                    hue_offset=offset,
                    actual_hue=mapping.center if actual is None else actual,
                )
            )

        return HarmonyPaletteResult(primary_hue=primary_hue, colors=colors)

    def generate(self, primary_hex: str, scheme: str) -> HarmonyPaletteResult:
        if scheme not in HARMONY_OFFSETS:
            raise ValueError(
                f"Unknown harmony scheme {scheme!r}; expected one of {', '.join(HARMONY_SCHEMES)}"
            )
        return self._generate(primary_hex, HARMONY_OFFSETS[scheme], HARMONY_ROLES[scheme])

    def complementary(self, primary_hex: str) -> HarmonyPaletteResult:
        return self.generate(primary_hex, "complementary")

    def triadic(self, primary_hex: str) -> HarmonyPaletteResult:
        return self.generate(primary_hex, "triadic")

    def analogous(self, primary_hex: str) -> HarmonyPaletteResult:
        return self.generate(primary_hex, "analogous")

    def split_complementary(self, primary_hex: str) -> HarmonyPaletteResult:
        return self.generate(primary_hex, "split_complementary")

    def tetradic(self, primary_hex: str) -> HarmonyPaletteResult:
        return self.generate(primary_hex, "tetradic")

    def square(self, primary_hex: str) -> HarmonyPaletteResult:
        return self.generate(primary_hex, "square")


__all__ = [
    "HARMONY_OFFSETS",
    "HARMONY_ROLES",
    "HARMONY_SCHEMES",
    "HarmonyColor",
    "HarmonyPaletteResult",
    "HarmonySelector",
]
