from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Sequence

# ============================================================
# Hue vocabularies
# ============================================================


class HueFamily(Enum):
    """Hue buckets used by the harmony / offset math."""

    BLUE = "blue"
    CYAN = "cyan"
    TEAL = "teal"
    GREEN = "green"
    LIME = "lime"
    YELLOW = "yellow"
    ORANGE = "orange"
    RED = "red"
    MAGENTA = "magenta"
    PURPLE = "purple"


class CatalogHue(Enum):
    """Hue names as they appear in the token catalog."""

    BLUE = "blue"
    LIGHT_BLUE = "light-blue"
    CYAN = "cyan"
    GREEN = "green"
    LIME = "lime"
    YELLOW = "yellow"
    ORANGE = "orange"
    RED = "red"
    MAGENTA = "magenta"
    PURPLE = "purple"


# Two names differ between the vocabularies: the harmony "cyan" bucket is the
# catalog's "light-blue" and the harmony "teal" bucket is the catalog's "cyan".
CATALOG_HUE_BY_FAMILY: Dict[HueFamily, CatalogHue] = {
    HueFamily.BLUE: CatalogHue.BLUE,
    HueFamily.CYAN: CatalogHue.LIGHT_BLUE,
    HueFamily.TEAL: CatalogHue.CYAN,
    HueFamily.GREEN: CatalogHue.GREEN,
    HueFamily.LIME: CatalogHue.LIME,
    HueFamily.YELLOW: CatalogHue.YELLOW,
    HueFamily.ORANGE: CatalogHue.ORANGE,
    HueFamily.RED: CatalogHue.RED,
    HueFamily.MAGENTA: CatalogHue.MAGENTA,
    HueFamily.PURPLE: CatalogHue.PURPLE,
}

CATALOG_HUE_DISPLAY_NAMES: Dict[CatalogHue, str] = {
    CatalogHue.BLUE: "Blue",
    CatalogHue.LIGHT_BLUE: "Light Blue",
    CatalogHue.CYAN: "Cyan",
    CatalogHue.GREEN: "Green",
    CatalogHue.LIME: "Lime",
    CatalogHue.YELLOW: "Yellow",
    CatalogHue.ORANGE: "Orange",
    CatalogHue.RED: "Red",
    CatalogHue.MAGENTA: "Magenta",
    CatalogHue.PURPLE: "Purple",
}

_CATALOG_HUE_BY_DISPLAY = {v: k for k, v in CATALOG_HUE_DISPLAY_NAMES.items()}


def to_catalog_hue(hue) -> CatalogHue:
    """Resolve either vocabulary to the catalog one."""
    if isinstance(hue, CatalogHue):
        return hue
    if isinstance(hue, HueFamily):
        return CATALOG_HUE_BY_FAMILY[hue]
    raise TypeError(f"Expected HueFamily or CatalogHue, got {hue!r}")


def catalog_hue_from_display_name(name: str) -> Optional[CatalogHue]:
    return _CATALOG_HUE_BY_DISPLAY.get(name)


def parse_catalog_hue(value) -> CatalogHue:
    """
    Accept a CatalogHue, a HueFamily, a catalog value ("light-blue") or a
    display name ("Light Blue").
    """
    if isinstance(value, (CatalogHue, HueFamily)):
        return to_catalog_hue(value)
    s = str(value).strip()
    by_display = catalog_hue_from_display_name(s)
    if by_display is not None:
        return by_display
    try:
        return CatalogHue(s.lower())
    except ValueError:
        raise ValueError(f"Unknown catalog hue: {value!r}") from None


# ============================================================
# Hue arithmetic
# ============================================================


def normalize_hue(angle: float) -> float:
    h = ((float(angle) % 360.0) + 360.0) % 360.0
    # folds -0.0 and float round-up to 360.0
    return 0.0 if h == 0.0 or h >= 360.0 else h


def hue_distance(a: float, b: float) -> float:
    d = abs(normalize_hue(a) - normalize_hue(b))
    return min(d, 360.0 - d)


# ============================================================
# Hue mapper
# ============================================================


@dataclass(frozen=True)
class HueCenter:
    family: HueFamily
    angle: float


@dataclass(frozen=True)
class HueMapping:
    family: HueFamily
    center: float
    distance: float


# Scan order doubles as tie-break order.
HUE_CENTERS: tuple[HueCenter, ...] = (
    HueCenter(HueFamily.BLUE, 266.0),
    HueCenter(HueFamily.CYAN, 251.0),
    HueCenter(HueFamily.TEAL, 216.0),
    HueCenter(HueFamily.GREEN, 157.0),
    HueCenter(HueFamily.LIME, 128.0),
    HueCenter(HueFamily.YELLOW, 88.0),
    HueCenter(HueFamily.ORANGE, 41.0),
    HueCenter(HueFamily.RED, 27.0),
    HueCenter(HueFamily.MAGENTA, 328.0),
    HueCenter(HueFamily.PURPLE, 299.0),
)

DEFAULT_PRIMARY_HUE = 266.0


class HueMapper:
    """Snaps any hue angle onto the nearest of a fixed set of hue centers."""

    def __init__(self, centers: Sequence[HueCenter] = HUE_CENTERS):
        if not centers:
            raise ValueError("HueMapper requires at least one hue center")
        self.centers = tuple(centers)

    def nearest(self, angle: float) -> HueMapping:
        target = normalize_hue(angle)
        best = None
        for center in self.centers:
            d = hue_distance(target, center.angle)
            # strict < keeps the first minimum
            if best is None or d < best.distance:
                best = HueMapping(center.family, center.angle, d)
        return best

    def families(self) -> list[HueFamily]:
        return [c.family for c in self.centers]

    def center_of(self, family: HueFamily) -> Optional[float]:
        for c in self.centers:
            if c.family is family:
                return c.angle
        return None


DEFAULT_MAPPER = HueMapper()


def nearest_hue(angle: float) -> HueMapping:
    return DEFAULT_MAPPER.nearest(angle)


def hue_family_names() -> list[str]:
    return [f.value for f in DEFAULT_MAPPER.families()]


def hue_center(family: HueFamily) -> Optional[float]:
    return DEFAULT_MAPPER.center_of(family)


__all__ = [
    "CATALOG_HUE_BY_FAMILY",
    "CATALOG_HUE_DISPLAY_NAMES",
    "CatalogHue",
    "DEFAULT_MAPPER",
    "DEFAULT_PRIMARY_HUE",
    "HUE_CENTERS",
    "HueCenter",
    "HueFamily",
    "HueMapper",
    "HueMapping",
    "catalog_hue_from_display_name",
    "hue_center",
    "hue_distance",
    "hue_family_names",
    "nearest_hue",
    "normalize_hue",
    "parse_catalog_hue",
    "to_catalog_hue",
]
