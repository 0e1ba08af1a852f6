"""
visualisation.py

Real-time matplotlib front-ends and diagnostic plots for the Double Pendulum.
Both front-ends drive the same physics.DoublePendulum; no physics is done here.
"""

import logging
import time
from collections import deque
from typing import Deque, Dict, Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.widgets import Slider

from . import core
from .configs import AnimationConfig, SliderRanges
from .physics import DoublePendulum, State

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_STATE = State(2.0, 2.0, 0.0, 0.0)


# --- 1. Model owned by the front-end ---


class PendulumModel:
    """
    Holds one DoublePendulum and one State and advances them once per frame
    by the elapsed wall-clock time.
    """

    def __init__(
        self,
        system: Optional[DoublePendulum] = None,
        state: Optional[State] = None,
        config: Optional[AnimationConfig] = None,
    ):
        self.system = system if system is not None else DoublePendulum()
        self.state = state if state is not None else DEFAULT_INITIAL_STATE
        self.config = config if config is not None else AnimationConfig()
        self._last_time: Optional[float] = None
        self._warned_non_finite = False

    def advance(self, dt: float) -> State:
        """Replaces the stored state with one RK4 step of size dt."""
        if dt > self.config.max_frame_dt:
            logger.warning("Frame hitch: integrating %.3fs in one step", dt)
        self.state = self.system.step(self.state, dt)
        if not self._warned_non_finite and not self.is_finite():
            logger.warning(
                "Non-finite state %s with parameters %s", self.state, self.system
            )
            self._warned_non_finite = True
        return self.state

    def tick(self, now: Optional[float] = None) -> State:
        """
        Advances by the time elapsed since the previous tick.
        The first tick only starts the clock.
        """
        now = time.perf_counter() if now is None else now
        if self._last_time is not None:
            self.advance(now - self._last_time)
        self._last_time = now
        return self.state

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.state.as_array())))

    def joint_positions(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Pivot, inner bob and outer bob in pixel coordinates.
        Joints hang from the pivot in the negated projection direction.
        """
        scale = self.config.scale
        pivot = np.array([0.0, self.config.pivot_height])
        top = np.array(self.system.top_joint(self.state, scale))
        bottom = np.array(self.system.bottom_joint(self.state, scale))
        inner = pivot - top
        outer = inner - bottom
        return pivot, inner, outer


class PendulumArtist:
    """Rods, bobs and outer-bob trail drawn on a single Axes."""

    def __init__(self, ax: plt.Axes, config: AnimationConfig):
        self.config = config
        marker = 2 * config.bob_radius * 72.0 / ax.figure.dpi
        (self.rods,) = ax.plot([], [], "-", lw=2, c="royalblue")
        (self.bobs,) = ax.plot([], [], "o", markersize=marker, c="red", zorder=3)
        (self.trail,) = ax.plot([], [], "-", lw=1, c="firebrick", alpha=0.4)
        self._trail: Deque[np.ndarray] = deque(maxlen=max(1, config.trail_len))

    def update(self, model: PendulumModel) -> Tuple:
        pivot, inner, outer = model.joint_positions()
        self.rods.set_data(
            [pivot[0], inner[0], outer[0]], [pivot[1], inner[1], outer[1]]
        )
        self.bobs.set_data([inner[0], outer[0]], [inner[1], outer[1]])

        self._trail.append(outer)
        trail = np.array(self._trail)
        self.trail.set_data(trail[:, 0], trail[:, 1])
        return self.rods, self.bobs, self.trail


def _setup_axes(ax: plt.Axes, reach: float, config: AnimationConfig) -> None:
    lim = reach * config.scale * 1.1
    ax.set_xlim(-lim, lim)
    ax.set_ylim(config.pivot_height - lim, config.pivot_height + lim)
    ax.set_aspect("equal")
    ax.set_facecolor("black")
    ax.set_xticks([])
    ax.set_yticks([])


# --- 2. Front-ends ---


def animate_pendulum(
    system: Optional[DoublePendulum] = None,
    state: Optional[State] = None,
    config: Optional[AnimationConfig] = None,
) -> FuncAnimation:
    """
    Plain window: integrates the real elapsed time between frames.

    Returns:
        The running FuncAnimation; keep a reference to it.
    """
    model = PendulumModel(system, state, config)

    fig, ax = plt.subplots(figsize=(6, 6))
    _setup_axes(ax, model.system.l1 + model.system.l2, model.config)
    ax.set_title("Double Pendulum")
    artist = PendulumArtist(ax, model.config)

    def update(_frame):
        model.tick()
        return artist.update(model)

    return FuncAnimation(
        fig,
        update,
        interval=model.config.interval_ms,
        blit=True,
        cache_frame_data=False,
    )


def animate_with_controls(
    system: Optional[DoublePendulum] = None,
    state: Optional[State] = None,
    config: Optional[AnimationConfig] = None,
    ranges: Optional[SliderRanges] = None,
) -> Tuple[FuncAnimation, Dict[str, Slider]]:
    """
    Animation with one slider per physical constant. Sliders assign the
    constants directly on the shared DoublePendulum between steps.

    Returns:
        (animation, sliders keyed by parameter name); keep both alive.
    """
    model = PendulumModel(system, state, config)
    ranges = ranges if ranges is not None else SliderRanges()

    fig = plt.figure(figsize=(7, 9))
    ax = fig.add_axes([0.05, 0.3, 0.9, 0.65])
    reach = ranges["l1"][1] + ranges["l2"][1]
    _setup_axes(ax, reach, model.config)
    ax.set_title("Double Pendulum")
    artist = PendulumArtist(ax, model.config)

    sliders: Dict[str, Slider] = {}
    for i, name in enumerate(ranges.names()):
        slider_ax = fig.add_axes([0.2, 0.22 - 0.04 * i, 0.65, 0.03])
        vmin, vmax = ranges[name]
        slider = Slider(
            slider_ax, name, vmin, vmax, valinit=getattr(model.system, name)
        )

        def on_changed(value, name=name):
            setattr(model.system, name, float(value))
            logger.info("Set %s = %s", name, value)

        slider.on_changed(on_changed)
        sliders[name] = slider

    def update(_frame):
        model.tick()
        return artist.update(model)

    anim = FuncAnimation(
        fig,
        update,
        interval=model.config.interval_ms,
        blit=False,
        cache_frame_data=False,
    )
    return anim, sliders


# --- 3. Diagnostics ---


def plot_energy_drift(
    t_points: np.ndarray, energies: np.ndarray, ax: Optional[plt.Axes] = None
) -> plt.Axes:
    """
    Plots the relative drift (E(t) - E(0)) / |E(0)| of total energy.
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 4))

    e0 = energies[0]
    drift = (energies - e0) / abs(e0) if e0 != 0 else energies - e0

    ax.plot(t_points, drift, "b-", lw=1.5)
    ax.set_xlabel("Time [s]")
    ax.set_ylabel("Relative energy drift")
    ax.set_title("RK4 Energy Drift")
    ax.grid(True, alpha=0.3)
    return ax


def plot_sensitivity_divergence(
    t_points: np.ndarray,
    traj_ref: np.ndarray,
    traj_pert: np.ndarray,
    system: Optional[DoublePendulum] = None,
    title: str = "Sensitivity to Initial Conditions",
) -> plt.Figure:
    """
    Compares two trajectories of the same pendulum started a hair apart.

    Panels:
        1. Both rod angles (wrapped for display) for each run.
        2. Log-scale separation, split into angles and angular velocities.
        3. Total energy of each run, only when system is given.

    Args:
        t_points: Time array.
        traj_ref: Reference trajectory (4, N_time).
        traj_pert: Perturbed trajectory (4, N_time).
        system: Pendulum that produced both runs, for the energy panel.

    Returns:
        The matplotlib Figure.
    """
    n_panels = 3 if system is not None else 2
    fig, axes = plt.subplots(n_panels, 1, figsize=(10, 3.5 * n_panels), sharex=True)
    ax_ang, ax_sep = axes[0], axes[1]

    for idx, colour in ((0, "royalblue"), (1, "firebrick")):
        label = rf"$\theta_{idx + 1}$"
        ax_ang.plot(
            t_points, core.wrap_angle(traj_ref[idx]), "-", c=colour, label=label
        )
        ax_ang.plot(
            t_points, core.wrap_angle(traj_pert[idx]), "--", c=colour, alpha=0.7
        )
    ax_ang.set_ylabel("Angle [rad]")
    ax_ang.set_title(f"{title} (solid: reference, dashed: perturbed)")
    ax_ang.legend(loc="upper right")
    ax_ang.grid(True, alpha=0.3)

    diff = traj_ref - traj_pert
    # Zero separation would break the log axis
    floor = np.finfo(float).tiny
    ax_sep.semilogy(
        t_points,
        np.maximum(np.linalg.norm(diff[:2], axis=0), floor),
        "k-",
        label="angles",
    )
    ax_sep.semilogy(
        t_points,
        np.maximum(np.linalg.norm(diff[2:], axis=0), floor),
        "g-",
        label="angular velocities",
    )
    ax_sep.set_ylabel("Separation (Log Scale)")
    ax_sep.legend(loc="lower right")
    ax_sep.grid(True, which="both", alpha=0.3)

    if system is not None:
        ax_energy = axes[2]
        runs = ((traj_ref, "k-", "reference"), (traj_pert, "r--", "perturbed"))
        for traj, style, label in runs:
            energies = [system.total_energy(State.from_array(y)) for y in traj.T]
            ax_energy.plot(t_points, energies, style, label=label)
        ax_energy.set_ylabel("Total energy [J]")
        ax_energy.legend(loc="upper right")
        ax_energy.grid(True, alpha=0.3)

    axes[-1].set_xlabel("Time [s]")
    plt.tight_layout()
    plt.show()
    return fig
