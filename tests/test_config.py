import pytest

from mandel.config import CENTERED, OFFSET, GridConfig, get_preset


def test_defaults_and_presets():
    assert GridConfig() == CENTERED
    assert CENTERED.mapping == "centered" and CENTERED.max_iterations == 64
    assert OFFSET.mapping == "offset" and OFFSET.max_iterations == 96
    assert OFFSET.width == 1920 and OFFSET.height == 1080
    assert CENTERED.size == 1920 * 1080
    assert get_preset("OFFSET") is OFFSET


@pytest.mark.parametrize(
    "kwargs",
    [
        {"width": 0},
        {"height": -1},
        {"max_iterations": 0},
        {"max_iterations": 256},
        {"mapping": "zoomed"},
    ],
)
def test_invalid_config_rejected(kwargs):
    with pytest.raises(ValueError):
        GridConfig(**kwargs)


def test_with_overrides_ignores_none():
    cfg = OFFSET.with_overrides(width=32, height=None, max_iterations=None, mapping=None)
    assert cfg.width == 32
    assert cfg.height == OFFSET.height
    assert cfg.max_iterations == 96
    assert cfg.mapping == "offset"


def test_unknown_preset():
    with pytest.raises(ValueError):
        get_preset("nope")
