from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Literal, Optional, Sequence, Set, Tuple

from .catalog import Token, tokens_by_hue
from .color import PerceptualColor

# ============================================================
# Step preferences
# ============================================================

Role = Literal["primary", "secondary", "accent"]
LightnessPreference = Literal["light", "mid", "dark"]

# Primary choice first, then its neighbours.
STEP_PREFERENCES: Dict[str, List[int]] = {
    "light": [300, 200, 400, 100, 500],
    "mid": [600, 500, 700, 400, 800],
    "dark": [900, 800, 1000, 700, 1100],
}

# Every step, ordered by closeness to the middle of the scale.
FALLBACK_STEPS: List[int] = [
    600,
    500,
    700,
    400,
    800,
    300,
    900,
    200,
    1000,
    100,
    1100,
    50,
    1200,
]


@dataclass(frozen=True)
class SelectionContext:
    # role is carried for callers; step choice only reads lightness
    role: Role = "primary"
    lightness: LightnessPreference = "mid"


# ============================================================
# Preference-ordered selection
# ============================================================


def _first_unused(
    steps: Iterable[int], by_step: Dict[int, Token], used_ids: Set[str]
) -> Optional[Token]:
    for step in steps:
        token = by_step.get(step)
        if token is not None and token.id not in used_ids:
            return token
    return None


def select_step(
    hue,
    context: SelectionContext,
    tokens: Iterable[Token],
    used_ids: Set[str],
) -> Optional[Token]:
    """
    Pick one token of ``hue`` whose id is not in ``used_ids``.

    Preferred steps for ``context.lightness`` are tried first, then every
    step from the middle of the scale outwards. Returns None once the hue
    is exhausted. ``used_ids`` is only read; callers add the result.
    """
    hue_tokens = tokens_by_hue(tokens, hue)
    if not hue_tokens:
        return None

    by_step = {t.step: t for t in hue_tokens}

    token = _first_unused(STEP_PREFERENCES[context.lightness], by_step, used_ids)
    if token is not None:
        return token
    return _first_unused(FALLBACK_STEPS, by_step, used_ids)


def select_multiple_steps(
    selections: Sequence[Tuple[object, SelectionContext]],
    tokens: Sequence[Token],
) -> List[Optional[Token]]:
    """Run several selections without repeating a token; None marks a miss."""
    used_ids: Set[str] = set()
    out: List[Optional[Token]] = []
    for hue, context in selections:
        token = select_step(hue, context, tokens, used_ids)
        if token is not None:
            used_ids.add(token.id)
        out.append(token)
    return out


# ============================================================
# Contrast-driven selection
# ============================================================


@dataclass(frozen=True)
class StepCandidate:
    token: Token
    contrast: float
    diff: float

    @property
    def step(self) -> int:
        return self.token.step


def select_step_for_contrast(
    hue,
    tokens: Iterable[Token],
    background: PerceptualColor,
    target: float,
    used_ids: Set[str],
) -> Optional[StepCandidate]:
    """
    Pick the unused step of ``hue`` whose contrast against ``background``
    best matches ``target``.

    Steps that reach the target win over steps that fall short, smallest
    excess first. Only when none reaches it is the closest step returned.
    """
    candidates = []
    for token in tokens_by_hue(tokens, hue):
        if token.id in used_ids:
            continue
        contrast = PerceptualColor.from_hex(token.hex).contrast_against(background)
        candidates.append(StepCandidate(token, contrast, abs(contrast - target)))

    if not candidates:
        return None

    meets = [c for c in candidates if c.contrast >= target]
    if meets:
        return min(meets, key=lambda c: (c.contrast - target, c.diff))
    return min(candidates, key=lambda c: c.diff)


__all__ = [
    "FALLBACK_STEPS",
    "STEP_PREFERENCES",
    "SelectionContext",
    "StepCandidate",
    "select_multiple_steps",
    "select_step",
    "select_step_for_contrast",
]
