"""
Tests for the configuration dataclasses.
"""

import pytest

from doublependulum.configs import AnimationConfig, SimulationConfig, SliderRanges


def test_simulation_defaults():
    config = SimulationConfig()
    assert config.dt == 0.01
    assert config.n_steps == 1000
    assert config.duration == pytest.approx(10.0)


def test_copy_with_overrides_leaves_original():
    base = SimulationConfig(dt=0.01)
    fine = base.copy(dt=0.001)
    assert fine.dt == 0.001
    assert fine.n_steps == base.n_steps
    assert base.dt == 0.01


def test_copy_rejects_unknown_parameter():
    with pytest.raises(ValueError, match="Unknown parameter"):
        AnimationConfig().copy(zoom=2.0)


def test_presets():
    fine, coarse = SimulationConfig.fine(), SimulationConfig.coarse()
    assert fine.dt < SimulationConfig().dt < coarse.dt
    assert SimulationConfig.fine().duration == pytest.approx(10.0)


def test_animation_defaults():
    config = AnimationConfig()
    assert config.scale == 100.0
    assert config.pivot_height == 100.0
    assert config.bob_radius == 10.0


def test_slider_ranges_cover_every_parameter():
    ranges = SliderRanges()
    assert ranges.names() == ("g", "m1", "m2", "l1", "l2")
    for name in ("m1", "m2", "l1", "l2"):
        low, high = ranges[name]
        assert 0.0 < low < high


def test_slider_ranges_copy_is_independent():
    ranges = SliderRanges()
    other = ranges.copy()
    other.ranges["g"] = (0.0, 50.0)
    assert ranges["g"] == (0.0, 20.0)
