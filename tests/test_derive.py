import pytest

from factories import build_tokens, make_token

from keytone.color import PerceptualColor
from keytone.config import DerivationConfig
from keytone.derive import (
    CatalogMode,
    derive_key_colors,
    fallback_color,
    secondary_direction,
    tertiary_direction,
)
from keytone.hues import CatalogHue, hue_distance
from keytone.steps import select_step_for_contrast

WHITE = "#ffffff"
NEAR_BLACK = "#1a1a1a"


# ------------------------------------------------------------
# Direction rules
# ------------------------------------------------------------


@pytest.mark.parametrize(
    "light,contrast,expected",
    [
        (True, 5.3, "lighter"),
        (True, 3.0, "lighter"),
        (True, 2.0, "darker"),
        (False, 5.3, "darker"),
        (False, 2.0, "lighter"),
    ],
)
def test_secondary_direction(light, contrast, expected):
    assert secondary_direction(light, contrast, 3.0) == expected


@pytest.mark.parametrize("secondary", ["lighter", "darker"])
def test_tertiary_moves_toward_background(secondary):
    assert tertiary_direction(True, secondary, "background") == "lighter"
    assert tertiary_direction(False, secondary, "background") == "darker"


def test_tertiary_opposite_policy():
    assert tertiary_direction(True, "lighter", "opposite") == "darker"
    assert tertiary_direction(True, "darker", "opposite") == "lighter"


def test_fallback_is_clamped():
    bg = PerceptualColor.from_hex(WHITE)
    d = fallback_color(250.0, 30.0, 95.0, "lighter", bg, 15.0)
    assert d.tone == 100.0
    assert d.direction == "lighter"
    assert d.contrast_ratio == pytest.approx(d.color.contrast_against(bg))

    d = fallback_color(250.0, 30.0, 40.0, "darker", bg, 15.0)
    assert d.tone == pytest.approx(25.0)


# ------------------------------------------------------------
# Freeform derivation
# ------------------------------------------------------------


def test_high_contrast_primary_goes_lighter():
    result = derive_key_colors("#3366cc", WHITE)
    assert result.primary.contrast_ratio > 3.0
    assert result.background_mode == "light"
    assert result.secondary.direction == "lighter"
    assert result.secondary.tone > result.primary.tone
    assert result.secondary.contrast_ratio == pytest.approx(3.0, abs=0.1)
    assert result.secondary.contrast_ratio >= 3.0


def test_low_contrast_primary_goes_darker():
    result = derive_key_colors("#99bbff", WHITE)
    assert result.primary.contrast_ratio < 3.0
    assert result.secondary.direction == "darker"
    assert result.secondary.tone < result.primary.tone
    assert result.secondary.contrast_ratio >= 3.0


def test_dark_background():
    result = derive_key_colors("#6699ff", NEAR_BLACK)
    assert result.background_mode == "dark"
    assert result.primary.contrast_ratio > 3.0
    assert result.secondary.direction == "darker"
    assert result.secondary.tone < result.primary.tone
    assert result.secondary.contrast_ratio >= 3.0
    assert result.tertiary.direction == "darker"


def test_tertiary_chains_from_secondary():
    result = derive_key_colors("#3366cc", WHITE, tertiary_target=1.5)
    assert result.tertiary.direction == "lighter"
    assert result.tertiary.tone >= result.secondary.tone
    assert result.tertiary.contrast_ratio == pytest.approx(1.5, abs=0.1)


def test_opposite_policy():
    cfg = DerivationConfig(tertiary_target=4.5, tertiary_policy="opposite")
    result = derive_key_colors("#3366cc", WHITE, config=cfg)
    assert result.secondary.direction == "lighter"
    assert result.tertiary.direction == "darker"
    assert result.tertiary.tone < result.secondary.tone
    assert result.tertiary.contrast_ratio >= 4.5


def test_target_override_wins_over_config():
    cfg = DerivationConfig(secondary_target=7.0)
    result = derive_key_colors("#3366cc", WHITE, secondary_target=4.5, config=cfg)
    assert result.secondary.contrast_ratio == pytest.approx(4.5, abs=0.1)


@pytest.mark.parametrize(
    "primary,background",
    [
        ("#3366cc", WHITE),
        ("#2e8b57", WHITE),
        ("#cc3366", NEAR_BLACK),
        ("#b8860b", "#000000"),
    ],
)
def test_roles_share_hue(primary, background):
    result = derive_key_colors(primary, background)
    p = result.primary.color
    assert result.shared_hue == p.hue
    assert result.shared_chroma == p.chroma
    for d in (result.secondary, result.tertiary):
        if d.color.chroma > 15:
            assert hue_distance(d.color.hue, p.hue) < 10


@pytest.mark.parametrize(
    "primary,background",
    [
        ("#112233", "#000000"),
        ("#ccddff", WHITE),
        ("#ffffff", WHITE),
        ("#000000", "#000000"),
        ("#808080", "#808080"),
    ],
)
def test_extremes_stay_in_range(primary, background):
    result = derive_key_colors(primary, background)
    for d in (result.secondary, result.tertiary):
        assert 0.0 <= d.tone <= 100.0
        assert d.color.hex.startswith("#")


def test_very_light_primary_on_white():
    result = derive_key_colors("#ccddff", WHITE)
    assert result.secondary.direction == "darker"
    assert result.secondary.tone < 70.0


def test_accepts_color_instances():
    p = PerceptualColor.from_hex("#3366cc")
    bg = PerceptualColor.from_hex(WHITE)
    assert derive_key_colors(p, bg) == derive_key_colors("#3366cc", WHITE)


# ------------------------------------------------------------
# Catalog-constrained derivation
# ------------------------------------------------------------


def test_catalog_mode_requires_tokens():
    with pytest.raises(ValueError):
        CatalogMode([])


def test_catalog_mode_rejects_unknown_hue(tokens):
    with pytest.raises(ValueError):
        CatalogMode(tokens, hue="chartreuse")


def test_catalog_mode_picks_distinct_steps(tokens):
    primary = next(t for t in tokens if t.id == "dads-blue-600")
    mode = CatalogMode(tokens, hue="blue", primary_step=600)
    result = derive_key_colors(primary.hex, WHITE, catalog_mode=mode)

    ids = {result.secondary.token_id, result.tertiary.token_id}
    assert None not in ids
    assert len(ids) == 2
    assert primary.id not in ids
    assert result.secondary.step is not None
    assert result.secondary.contrast_ratio == pytest.approx(
        result.secondary.color.contrast_against(PerceptualColor.from_hex(WHITE))
    )


def test_catalog_mode_matches_contrast_selector(tokens):
    primary = next(t for t in tokens if t.id == "dads-blue-600")
    mode = CatalogMode(tokens, hue=CatalogHue.BLUE, primary_step=600)
    result = derive_key_colors(primary.hex, WHITE, catalog_mode=mode)

    bg = PerceptualColor.from_hex(WHITE)
    expected = select_step_for_contrast(CatalogHue.BLUE, tokens, bg, 3.0, {primary.id})
    assert result.secondary.token_id == expected.token.id

    expected = select_step_for_contrast(
        CatalogHue.BLUE, tokens, bg, 3.0, {primary.id, expected.token.id}
    )
    assert result.tertiary.token_id == expected.token.id


def test_catalog_mode_infers_hue(tokens):
    primary = next(t for t in tokens if t.id == "dads-green-600")
    result = derive_key_colors(primary.hex, WHITE, catalog_mode=CatalogMode(tokens))
    assert result.secondary.token_id.startswith("dads-green-")
    assert result.tertiary.token_id.startswith("dads-green-")


def test_catalog_mode_falls_back_when_exhausted():
    only = [make_token(CatalogHue.BLUE, 600, "#3366cc")]
    mode = CatalogMode(only, hue=CatalogHue.BLUE, primary_step=600)
    result = derive_key_colors("#3366cc", WHITE, catalog_mode=mode)

    assert result.secondary.token_id is None
    assert result.tertiary.token_id is None
    assert result.secondary.tone == pytest.approx(
        min(100.0, result.primary.tone + 15.0)
    )


def test_catalog_mode_secondary_only():
    two = build_tokens(steps=(600, 800), hues={CatalogHue.RED})
    primary = two[0]
    mode = CatalogMode(two, hue=CatalogHue.RED, primary_step=primary.step)
    result = derive_key_colors(primary.hex, WHITE, catalog_mode=mode)

    assert result.secondary.token_id == "dads-red-800"
    assert result.tertiary.token_id is None
