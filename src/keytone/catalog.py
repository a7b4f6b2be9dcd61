from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

import pandas as pd

from .color import norm_hex
from .hues import CatalogHue, parse_catalog_hue, to_catalog_hue

# ============================================================
# Scale steps
# ============================================================

# Light to dark.
SCALE_STEPS: tuple[int, ...] = (
    50,
    100,
    200,
    300,
    400,
    500,
    600,
    700,
    800,
    900,
    1000,
    1100,
    1200,
)

REQUIRED_COLUMNS = ["id", "hex", "hue", "step"]


# ============================================================
# Tokens
# ============================================================


@dataclass(frozen=True)
class Token:
    id: str
    hex: str
    hue: CatalogHue
    step: int
    name: str = ""


def tokens_by_hue(tokens: Iterable[Token], hue) -> List[Token]:
    target = to_catalog_hue(hue)
    return [t for t in tokens if t.hue is target]


class TokenCatalog:
    """
    Read-only collection of tokens, at most one per (hue, step).

    Steps may be missing for a hue; nothing here fills gaps.
    """

    def __init__(self, tokens: Iterable[Token]):
        self._tokens = tuple(tokens)
        if not self._tokens:
            raise ValueError("TokenCatalog requires at least one token")

        self._by_key: Dict[tuple, Token] = {}
        for t in self._tokens:
            key = (t.hue, t.step)
            if key in self._by_key:
                raise ValueError(
                    f"Duplicate token for {t.hue.value} {t.step}: "
                    f"{self._by_key[key].id} and {t.id}"
                )
            self._by_key[key] = t

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def by_hue(self, hue) -> List[Token]:
        return tokens_by_hue(self._tokens, hue)

    def scale(self, hue) -> Dict[int, Token]:
        return {t.step: t for t in self.by_hue(hue)}

    def get(self, hue, step: int) -> Optional[Token]:
        return self._by_key.get((to_catalog_hue(hue), int(step)))

    def hues(self) -> List[CatalogHue]:
        seen = []
        for t in self._tokens:
            if t.hue not in seen:
                seen.append(t.hue)
        return seen

    def find_by_hex(self, hex_value: str) -> Optional[Token]:
        h = norm_hex(hex_value)
        for t in self._tokens:
            if norm_hex(t.hex) == h:
                return t
        return None


# ============================================================
# CSV provider
# ============================================================


def catalog_from_frame(df: pd.DataFrame) -> TokenCatalog:
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Catalog is missing required columns: {', '.join(missing)}")

    tokens = []
    for r in df.to_dict("records"):
        name = r.get("name")
        tokens.append(
            Token(
                id=str(r["id"]).strip(),
                hex=norm_hex(r["hex"]),
                hue=parse_catalog_hue(r["hue"]),
                step=int(r["step"]),
                name="" if pd.isna(name) else str(name),
            )
        )
    return TokenCatalog(tokens)


def load_catalog_csv(path: str | Path) -> TokenCatalog:
    """
    Load a token table with columns id, hex, hue, step (and optional name).
    """
    df = pd.read_csv(Path(path), dtype={"id": str, "hex": str, "hue": str})
    return catalog_from_frame(df)


def catalog_to_frame(tokens: Iterable[Token]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"id": t.id, "hex": t.hex, "hue": t.hue.value, "step": t.step, "name": t.name}
            for t in tokens
        ],
        columns=REQUIRED_COLUMNS + ["name"],
    )


__all__ = [
    "SCALE_STEPS",
    "Token",
    "TokenCatalog",
    "catalog_from_frame",
    "catalog_to_frame",
    "load_catalog_csv",
    "tokens_by_hue",
]
