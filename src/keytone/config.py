from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path

TERTIARY_POLICIES = ("background", "opposite")


@dataclass(frozen=True)
class DerivationConfig:
    """
    Knobs for secondary / tertiary derivation.

    tertiary_policy:
      - "background": tertiary always moves toward the background
      - "opposite":   tertiary moves opposite to the secondary
    """

    secondary_target: float = 3.0
    tertiary_target: float = 3.0
    tertiary_policy: str = "background"
    fallback_tone_offset: float = 15.0

    def __post_init__(self):
        if self.tertiary_policy not in TERTIARY_POLICIES:
            raise ValueError(
                f"Unknown tertiary_policy {self.tertiary_policy!r}; "
                f"expected one of {', '.join(TERTIARY_POLICIES)}"
            )
        for name in ("secondary_target", "tertiary_target"):
            if float(getattr(self, name)) < 1.0:
                raise ValueError(f"{name} must be a contrast ratio >= 1.0")

    def with_overrides(self, **overrides) -> "DerivationConfig":
        kept = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **kept) if kept else self

    def to_dict(self) -> dict:
        return asdict(self)


DEFAULT_CONFIG = DerivationConfig()


def config_from_dict(data: dict) -> DerivationConfig:
    known = {f.name for f in fields(DerivationConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    return DerivationConfig(**data)


def load_config(path: str | Path) -> DerivationConfig:
    with open(path) as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: config must be a JSON object")
    return config_from_dict(data)


__all__ = [
    "DEFAULT_CONFIG",
    "DerivationConfig",
    "TERTIARY_POLICIES",
    "config_from_dict",
    "load_config",
]
