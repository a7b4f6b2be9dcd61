import json

import pytest

from keytone.config import DEFAULT_CONFIG, DerivationConfig, config_from_dict, load_config


def test_defaults():
    assert DEFAULT_CONFIG.secondary_target == 3.0
    assert DEFAULT_CONFIG.tertiary_target == 3.0
    assert DEFAULT_CONFIG.tertiary_policy == "background"
    assert DEFAULT_CONFIG.fallback_tone_offset == 15.0


def test_rejects_unknown_policy():
    with pytest.raises(ValueError, match="tertiary_policy"):
        DerivationConfig(tertiary_policy="sideways")


@pytest.mark.parametrize("field", ["secondary_target", "tertiary_target"])
def test_rejects_sub_unity_targets(field):
    with pytest.raises(ValueError, match=field):
        DerivationConfig(**{field: 0.5})


def test_with_overrides_skips_none():
    cfg = DEFAULT_CONFIG.with_overrides(secondary_target=None, tertiary_target=1.5)
    assert cfg.secondary_target == 3.0
    assert cfg.tertiary_target == 1.5
    assert DEFAULT_CONFIG.with_overrides(secondary_target=None) is DEFAULT_CONFIG


def test_config_from_dict_round_trip():
    cfg = DerivationConfig(tertiary_target=1.5, tertiary_policy="opposite")
    assert config_from_dict(cfg.to_dict()) == cfg


def test_config_from_dict_unknown_keys():
    with pytest.raises(ValueError, match="bogus"):
        config_from_dict({"secondary_target": 4.5, "bogus": 1})


def test_load_config(tmp_path):
    path = tmp_path / "keytone.json"
    path.write_text(json.dumps({"tertiary_target": 1.5, "tertiary_policy": "opposite"}))
    cfg = load_config(path)
    assert cfg.tertiary_target == 1.5
    assert cfg.tertiary_policy == "opposite"
    assert cfg.secondary_target == 3.0


def test_load_config_requires_object(tmp_path):
    path = tmp_path / "keytone.json"
    path.write_text("[1, 2]")
    with pytest.raises(ValueError, match="JSON object"):
        load_config(path)
