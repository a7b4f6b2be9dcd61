from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Set

from .catalog import Token, TokenCatalog
from .color import PerceptualColor, as_color, clamp, is_light_background
from .config import DEFAULT_CONFIG, DerivationConfig
from .hues import CatalogHue, HueMapper, parse_catalog_hue, to_catalog_hue
from .solver import Direction, find_tone_for_contrast
from .steps import select_step_for_contrast

# ============================================================
# Results
# ============================================================


@dataclass(frozen=True)
class PrimaryColor:
    color: PerceptualColor
    tone: float
    contrast_ratio: float


@dataclass(frozen=True)
class DerivedColor:
    color: PerceptualColor
    tone: float
    contrast_ratio: float
    direction: Direction
    step: Optional[int] = None
    token_id: Optional[str] = None


@dataclass(frozen=True)
class DerivedColorSet:
    primary: PrimaryColor
    secondary: DerivedColor
    tertiary: DerivedColor
    shared_hue: float
    shared_chroma: float
    background_mode: str


# ============================================================
# Catalog-constrained mode
# ============================================================


class CatalogMode:
    """
    Restricts secondary / tertiary to steps of one catalog hue.

    ``hue`` takes a CatalogHue, a HueFamily or a display name such as
    "Light Blue". Left as None it is inferred from the primary's hue.
    """

    def __init__(
        self,
        tokens: Iterable[Token],
        hue=None,
        primary_step: Optional[int] = None,
    ):
        self.catalog = tokens if isinstance(tokens, TokenCatalog) else TokenCatalog(tokens)
        self.hue = None if hue is None else parse_catalog_hue(hue)
        self.primary_step = primary_step

    def resolve_hue(self, primary: PerceptualColor, mapper: HueMapper) -> CatalogHue:
        if self.hue is not None:
            return self.hue
        h = primary.oklch[2]
        return to_catalog_hue(mapper.nearest(primary.hue if h is None else h).family)


# ============================================================
# Direction rules
# ============================================================


def secondary_direction(
    light_background: bool, primary_contrast: float, target: float
) -> Direction:
    # "lighter" lowers contrast on a light background and raises it on a dark one
    needs_lower = primary_contrast >= target
    if light_background == needs_lower:
        return "lighter"
    return "darker"


def tertiary_direction(
    light_background: bool, secondary: Direction, policy: str
) -> Direction:
    if policy == "opposite":
        return "darker" if secondary == "lighter" else "lighter"
    return "lighter" if light_background else "darker"


def fallback_color(
    hue: float,
    chroma: float,
    base_tone: float,
    direction: Direction,
    background: PerceptualColor,
    offset: float,
) -> DerivedColor:
    tone = clamp(base_tone + (offset if direction == "lighter" else -offset), 0.0, 100.0)
    color = PerceptualColor.from_hct(hue, chroma, tone)
    return DerivedColor(
        color=color,
        tone=tone,
        contrast_ratio=color.contrast_against(background),
        direction=direction,
    )


# ============================================================
# Derivation
# ============================================================


def _solve(hue, chroma, background, target, direction, start_tone, cfg) -> DerivedColor:
    r = find_tone_for_contrast(hue, chroma, background, target, direction, start_tone)
    if r is None:
        return fallback_color(
            hue, chroma, start_tone, direction, background, cfg.fallback_tone_offset
        )
    return DerivedColor(
        color=r.color, tone=r.tone, contrast_ratio=r.contrast, direction=direction
    )


def _from_candidate(candidate, direction: Direction) -> DerivedColor:
    color = PerceptualColor.from_hex(candidate.token.hex)
    return DerivedColor(
        color=color,
        tone=color.tone,
        contrast_ratio=candidate.contrast,
        direction=direction,
        step=candidate.token.step,
        token_id=candidate.token.id,
    )


def derive_key_colors(
    primary,
    background,
    *,
    secondary_target: Optional[float] = None,
    tertiary_target: Optional[float] = None,
    catalog_mode: Optional[CatalogMode] = None,
    config: Optional[DerivationConfig] = None,
    mapper: Optional[HueMapper] = None,
) -> DerivedColorSet:
    """
    Derive secondary and tertiary colors that share the primary's hue and
    chroma and differ only in tone.

    The secondary heads for ``secondary_target`` contrast against the
    background; the tertiary starts from the secondary's tone. With
    ``catalog_mode`` both are picked from discrete catalog steps instead.
    """
    cfg = (config or DEFAULT_CONFIG).with_overrides(
        secondary_target=secondary_target, tertiary_target=tertiary_target
    )
    primary_color = as_color(primary)
    bg = as_color(background)

    hue, chroma, primary_tone = primary_color.hue, primary_color.chroma, primary_color.tone
    light = is_light_background(bg)
    primary_contrast = primary_color.contrast_against(bg)

    sec_dir = secondary_direction(light, primary_contrast, cfg.secondary_target)
    ter_dir = tertiary_direction(light, sec_dir, cfg.tertiary_policy)

    if catalog_mode is None:
        secondary = _solve(hue, chroma, bg, cfg.secondary_target, sec_dir, primary_tone, cfg)
        tertiary = _solve(hue, chroma, bg, cfg.tertiary_target, ter_dir, secondary.tone, cfg)
    else:
        cat_hue = catalog_mode.resolve_hue(primary_color, mapper or HueMapper())
        catalog = catalog_mode.catalog

        used_ids: Set[str] = set()
        if catalog_mode.primary_step is not None:
            own = catalog.get(cat_hue, catalog_mode.primary_step)
            if own is not None:
                used_ids.add(own.id)

        sec_c = select_step_for_contrast(cat_hue, catalog, bg, cfg.secondary_target, used_ids)
        if sec_c is not None:
            used_ids.add(sec_c.token.id)
            secondary = _from_candidate(sec_c, sec_dir)
        else:
            secondary = fallback_color(
                hue, chroma, primary_tone, sec_dir, bg, cfg.fallback_tone_offset
            )

        ter_c = select_step_for_contrast(cat_hue, catalog, bg, cfg.tertiary_target, used_ids)
        if ter_c is not None:
            tertiary = _from_candidate(ter_c, ter_dir)
        else:
            tertiary = fallback_color(
                hue, chroma, secondary.tone, ter_dir, bg, cfg.fallback_tone_offset
            )

    return DerivedColorSet(
        primary=PrimaryColor(primary_color, primary_tone, primary_contrast),
        secondary=secondary,
        tertiary=tertiary,
        shared_hue=hue,
        shared_chroma=chroma,
        background_mode="light" if light else "dark",
    )


__all__ = [
    "CatalogMode",
    "DerivedColor",
    "DerivedColorSet",
    "PrimaryColor",
    "derive_key_colors",
    "fallback_color",
    "secondary_direction",
    "tertiary_direction",
]
