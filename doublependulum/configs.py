"""
Configuration objects for simulation runs and the animation front-ends.

The physics itself takes no configuration: parameters live on
physics.DoublePendulum and states are passed explicitly.
"""

import copy
from dataclasses import dataclass, field
from typing import Dict, Tuple


class _Copyable:
    def copy(self, **overrides):
        """
        Create a copy with optional parameter overrides.

        Example:
            >>> base = SimulationConfig(dt=0.01)
            >>> fine = base.copy(dt=0.001)
        """
        new_config = copy.deepcopy(self)
        for key, value in overrides.items():
            if hasattr(new_config, key):
                setattr(new_config, key, value)
            else:
                raise ValueError(f"Unknown parameter: {key}")
        return new_config


@dataclass
class SimulationConfig(_Copyable):
    """
    Fixed-step run settings for batch simulation.

    Attributes:
        dt: RK4 step size [s].
        n_steps: Number of steps to take.
    """

    dt: float = 0.01
    n_steps: int = 1000

    @property
    def duration(self) -> float:
        return self.dt * self.n_steps

    @classmethod
    def fine(cls) -> "SimulationConfig":
        """Preset for accurate short runs."""
        return cls(dt=0.001, n_steps=10000)

    @classmethod
    def coarse(cls) -> "SimulationConfig":
        """Preset for quick previews."""
        return cls(dt=0.04, n_steps=250)


@dataclass
class AnimationConfig(_Copyable):
    """
    Drawing settings for the real-time animation.

    Attributes:
        scale: Length-to-pixel factor applied to rod lengths.
        interval_ms: Requested delay between frames.
        trail_len: Number of past outer-bob positions drawn.
        bob_radius: Bob marker radius in pixels.
        pivot_height: Vertical offset of the pivot in pixels.
        max_frame_dt: Frames slower than this [s] are logged as hitches.
    """

    scale: float = 100.0
    interval_ms: int = 16
    trail_len: int = 100
    bob_radius: float = 10.0
    pivot_height: float = 100.0
    max_frame_dt: float = 0.1


def _default_ranges() -> Dict[str, Tuple[float, float]]:
    return {
        "g": (0.0, 20.0),
        "m1": (0.1, 10.0),
        "m2": (0.1, 10.0),
        "l1": (0.1, 2.0),
        "l2": (0.1, 2.0),
    }


@dataclass
class SliderRanges(_Copyable):
    """(min, max) bounds of each parameter slider, keyed by field name."""

    ranges: Dict[str, Tuple[float, float]] = field(default_factory=_default_ranges)

    def __getitem__(self, name: str) -> Tuple[float, float]:
        return self.ranges[name]

    def names(self) -> Tuple[str, ...]:
        return tuple(self.ranges)
