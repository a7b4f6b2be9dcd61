from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from .color import PerceptualColor, clamp

Direction = Literal["lighter", "darker"]

# ============================================================
# Search constants
# ============================================================

MAX_ITERATIONS = 25
CONTRAST_TOLERANCE = 0.1
TONE_EPSILON = 0.01

MIN_SEARCH_RANGE = 2.0  # below this the range is degenerate
DEGENERATE_EXTENSION = 20.0
NARROW_SEARCH_RANGE = 5.0
NARROW_EXTENSION = 10.0


@dataclass(frozen=True)
class ToneResult:
    tone: float
    color: PerceptualColor
    contrast: float


def search_interval(direction: Direction, start_tone: float) -> tuple[float, float]:
    """
    Tone interval to search in ``direction`` from ``start_tone``.

    When the primary already sits at an extreme the interval is widened
    into the opposite side, never past [0, 100].
    """
    start = clamp(start_tone, 0.0, 100.0)
    low, high = (0.0, start) if direction == "darker" else (start, 100.0)

    width = high - low
    if width < MIN_SEARCH_RANGE:
        ext = DEGENERATE_EXTENSION
    elif width < NARROW_SEARCH_RANGE:
        ext = NARROW_EXTENSION
    else:
        return low, high

    if direction == "darker":
        high = min(start + ext, 100.0)
    else:
        low = max(start - ext, 0.0)
    return low, high


def find_tone_for_contrast(
    hue: float,
    chroma: float,
    background: PerceptualColor,
    target: float,
    direction: Direction,
    start_tone: float,
) -> Optional[ToneResult]:
    """
    Bisect the tone axis for the tone whose contrast against ``background``
    is closest to ``target``, keeping hue and chroma fixed.

    If the target lies outside the contrasts of the interval endpoints the
    closer endpoint is returned without searching. The best candidate seen
    is always returned; callers compare ``contrast`` with the target to
    detect a miss.
    """

    def evaluate(tone: float) -> ToneResult:
        color = PerceptualColor.from_hct(hue, chroma, tone)
        return ToneResult(tone, color, color.contrast_against(background))

    low, high = search_interval(direction, start_tone)
    lo_r, hi_r = evaluate(low), evaluate(high)

    best = min((lo_r, hi_r), key=lambda r: abs(r.contrast - target))
    lo_c, hi_c = sorted((lo_r.contrast, hi_r.contrast))
    if not lo_c <= target <= hi_c:
        return best

    # Which end of the interval raises contrast.
    rising_with_tone = hi_r.contrast >= lo_r.contrast

    # closest candidate at or above target, for the floor bias
    floor = None
    for r in (lo_r, hi_r):
        if r.contrast >= target and r.contrast - target < CONTRAST_TOLERANCE:
            if floor is None or r.contrast < floor.contrast:
                floor = r

    for _ in range(MAX_ITERATIONS):
        if floor is not None or high - low < TONE_EPSILON:
            break

        mid = (low + high) / 2.0
        r = evaluate(mid)
        diff = abs(r.contrast - target)
        if diff < abs(best.contrast - target):
            best = r
        if r.contrast >= target and diff < CONTRAST_TOLERANCE:
            floor = r

        if (r.contrast < target) == rising_with_tone:
            low = mid
        else:
            high = mid

    return floor if floor is not None else best


__all__ = [
    "CONTRAST_TOLERANCE",
    "MAX_ITERATIONS",
    "ToneResult",
    "find_tone_for_contrast",
    "search_interval",
]
