"""
Colour-vision-deficiency checks for derived palettes.

These sit downstream of derivation: they take finished hex colors and
report whether pairs stay distinguishable under each simulated vision type.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

import colour
import numpy as np
import pandas as pd

from .color import norm_hex

CVD_TYPES = ("protanopia", "deuteranopia", "tritanopia", "achromatopsia")

# Machado 2009 names the full-severity dichromacies after the anomalies.
MACHADO_DEFICIENCY = {
    "protanopia": "Protanomaly",
    "deuteranopia": "Deuteranomaly",
    "tritanopia": "Tritanomaly",
}

REC709_LUMA = np.array([0.2126, 0.7152, 0.0722])

# OKLab distance x100 at which two colors read as two colors.
DISTINGUISHABILITY_THRESHOLD = 5.0

# ============================================================
# Simulation
# ============================================================


def _hex_to_rgb(hex_color: str) -> np.ndarray:
    return np.asarray(colour.notation.HEX_to_RGB(norm_hex(hex_color)), dtype=float)


def _rgb_to_hex(rgb: np.ndarray) -> str:
    return norm_hex(colour.notation.RGB_to_HEX(np.clip(rgb, 0.0, 1.0)))


def simulate_cvd(hex_color: str, cvd_type: str) -> str:
    if cvd_type not in CVD_TYPES:
        raise ValueError(f"Unknown CVD type {cvd_type!r}")

    linear = colour.cctf_decoding(_hex_to_rgb(hex_color), function="sRGB")
    if cvd_type == "achromatopsia":
        y = float(np.dot(REC709_LUMA, linear))
        sim = np.array([y, y, y])
    else:
        m = colour.blindness.matrix_cvd_Machado2009(MACHADO_DEFICIENCY[cvd_type], 1.0)
        sim = m @ linear

    sim = np.clip(sim, 0.0, 1.0)
    return _rgb_to_hex(colour.cctf_encoding(sim, function="sRGB"))


def simulate_all(hex_color: str) -> Dict[str, str]:
    return {t: simulate_cvd(hex_color, t) for t in CVD_TYPES}


# ============================================================
# Color difference
# ============================================================


def hex_to_oklab(hex_color: str) -> np.ndarray:
    xyz = colour.sRGB_to_XYZ(_hex_to_rgb(hex_color))
    return colour.XYZ_to_Oklab(xyz)


def simple_delta_e(hex1: str, hex2: str) -> float:
    """Euclidean OKLab distance, scaled by 100."""
    d = hex_to_oklab(hex1) - hex_to_oklab(hex2)
    return float(np.sqrt(np.dot(d, d)) * 100.0)


# ============================================================
# Checks
# ============================================================


@dataclass(frozen=True)
class DistinguishabilityResult:
    pair: tuple
    colors: tuple
    cvd_type: str
    normal_delta_e: float
    simulated_delta_e: float
    is_distinguishable: bool
    severity: str


@dataclass
class PaletteDistinguishability:
    results: List[DistinguishabilityResult] = field(default_factory=list)
    problematic_pairs: List[DistinguishabilityResult] = field(default_factory=list)
    issues_by_type: Dict[str, int] = field(default_factory=dict)
    pass_rate: float = 100.0

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [
                {
                    "color1": r.pair[0],
                    "color2": r.pair[1],
                    "hex1": r.colors[0],
                    "hex2": r.colors[1],
                    "cvd_type": r.cvd_type,
                    "normal_delta_e": r.normal_delta_e,
                    "simulated_delta_e": r.simulated_delta_e,
                    "distinguishable": r.is_distinguishable,
                    "severity": r.severity,
                }
                for r in self.results
            ]
        )


def check_distinguishability(
    color1: str,
    color2: str,
    name1: str,
    name2: str,
    cvd_type: str,
    *,
    threshold: float = 3.0,
    warning_threshold: float = DISTINGUISHABILITY_THRESHOLD,
) -> DistinguishabilityResult:
    normal = simple_delta_e(color1, color2)
    simulated = simple_delta_e(simulate_cvd(color1, cvd_type), simulate_cvd(color2, cvd_type))

    if simulated >= warning_threshold:
        severity = "ok"
    elif simulated >= threshold:
        severity = "warning"
    else:
        severity = "error"

    return DistinguishabilityResult(
        pair=(name1, name2),
        colors=(norm_hex(color1), norm_hex(color2)),
        cvd_type=cvd_type,
        normal_delta_e=normal,
        simulated_delta_e=simulated,
        is_distinguishable=simulated >= threshold,
        severity=severity,
    )


def check_palette_distinguishability(
    colors: Dict[str, str],
    *,
    cvd_types: Sequence[str] = CVD_TYPES,
    threshold: float = 3.0,
    warning_threshold: float = DISTINGUISHABILITY_THRESHOLD,
) -> PaletteDistinguishability:
    out = PaletteDistinguishability(issues_by_type={t: 0 for t in cvd_types})

    for (n1, c1), (n2, c2) in itertools.combinations(colors.items(), 2):
        for t in cvd_types:
            r = check_distinguishability(
                c1, c2, n1, n2, t, threshold=threshold, warning_threshold=warning_threshold
            )
            out.results.append(r)
            if not r.is_distinguishable:
                out.problematic_pairs.append(r)
                out.issues_by_type[t] += 1

    if out.results:
        passed = sum(r.is_distinguishable for r in out.results)
        out.pass_rate = passed / len(out.results) * 100.0
    return out


__all__ = [
    "CVD_TYPES",
    "DISTINGUISHABILITY_THRESHOLD",
    "DistinguishabilityResult",
    "PaletteDistinguishability",
    "check_distinguishability",
    "check_palette_distinguishability",
    "simple_delta_e",
    "simulate_all",
    "simulate_cvd",
]
