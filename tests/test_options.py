"""
test_options.py
---------------
Unit tests for RenderOptions defaults, validation and cloning.
"""

import math

import pytest

from roughstroke.jitter import draw
from roughstroke.options import RenderOptions


def test_defaults():
    o = RenderOptions()
    assert o.roughness == 1.0
    assert o.bowing == 1.0
    assert o.curve_tightness == 0.0
    assert o.curve_step_count == 9
    assert o.curve_fitting == 0.95
    assert o.max_randomness_offset == 2.0
    assert o.simplification == 0.0
    assert o.seed == 0
    assert o.fill_style == "hachure"
    assert o.randomizer is None


@pytest.mark.parametrize("kwargs", [
    {"roughness": -0.1},
    {"max_randomness_offset": -1},
    {"simplification": -2},
    {"roughness": "rough"},
    {"curve_step_count": 0},
    {"curve_step_count": -3},
    {"curve_step_count": math.inf},
    {"curve_step_count": math.nan},
    {"curve_fitting": 1.5},
    {"curve_fitting": -0.1},
])
def test_invalid_values_raise_value_error(kwargs):
    with pytest.raises(ValueError):
        RenderOptions(**kwargs)


@pytest.mark.parametrize("seed", ["1", 1.0, None])
def test_non_integer_seed_raises_type_error(seed):
    with pytest.raises(TypeError):
        RenderOptions(seed=seed)


def test_copy_drops_randomizer():
    o = RenderOptions(seed=3, roughness=2)
    draw(o)
    assert o.randomizer is not None
    c = o.copy()
    assert c.randomizer is None
    assert c.roughness == 2
    assert c == o  # randomizer excluded from comparison


def test_copy_applies_changes():
    o = RenderOptions(seed=3)
    c = o.copy(bowing=0.5)
    assert c.bowing == 0.5
    assert o.bowing == 1.0


def test_with_seed():
    o = RenderOptions(seed=3)
    c = o.with_seed(11)
    assert c.seed == 11
    assert o.seed == 3


def test_as_dict_excludes_randomizer():
    o = RenderOptions(seed=5)
    draw(o)
    d = o.as_dict()
    assert "randomizer" not in d
    assert d["seed"] == 5
    assert d["fill_style"] == "hachure"
