"""
physics.py

Lagrangian dynamics, display projections and energies for the planar
Double Pendulum (4D state space).

State vector: y = [theta1, theta2, omega1, omega2]
Convention: 0 is vertically DOWN. Angles are never wrapped.
"""

from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np

from . import core

G_EARTH = 9.80665

Scalar = Union[float, np.ndarray]


@dataclass(frozen=True)
class State:
    """
    Instantaneous configuration of the double pendulum.

    Attributes:
        theta1: Angle of the inner rod from vertical [rad].
        theta2: Angle of the outer rod from vertical [rad].
        omega1: Angular velocity of the inner rod [rad/s].
        omega2: Angular velocity of the outer rod [rad/s].
    """

    theta1: float
    theta2: float
    omega1: float
    omega2: float

    def as_array(self) -> np.ndarray:
        """State vector [theta1, theta2, omega1, omega2] as float64."""
        return np.array(
            [self.theta1, self.theta2, self.omega1, self.omega2], dtype=np.float64
        )

    @classmethod
    def from_array(cls, y: np.ndarray) -> "State":
        """Inverse of as_array; y must hold exactly four values."""
        y = np.asarray(y, dtype=np.float64)
        if y.shape != (4,):
            raise ValueError(f"State vector must have 4 entries, got shape {y.shape}.")
        return cls(float(y[0]), float(y[1]), float(y[2]), float(y[3]))


# --- 1. Equations of Motion ---


def deriv(
    theta1: Scalar,
    theta2: Scalar,
    omega1: Scalar,
    omega2: Scalar,
    g: float,
    m1: float,
    m2: float,
    l1: float,
    l2: float,
) -> Tuple[Scalar, Scalar, Scalar, Scalar]:
    """
    Equations of motion for the double pendulum.

    Broadcasts over numpy arrays. Degenerate parameters (e.g. zero masses)
    yield NaN/Inf rather than an exception.

    Args:
        theta1, theta2: Rod angles.
        omega1, omega2: Angular velocities.
        g: Gravitational acceleration.
        m1, m2: Inner and outer bob masses.
        l1, l2: Inner and outer rod lengths.

    Returns:
        (dtheta1, dtheta2, domega1, domega2)
    """
    delta = np.subtract(theta1, theta2, dtype=np.float64)
    c, s = np.cos(delta), np.sin(delta)
    den = 2 * m1 + m2 - m2 * np.cos(2 * delta)

    num1 = (
        -g * (2 * m1 + m2) * np.sin(theta1)
        - m2 * g * np.sin(theta1 - 2 * theta2)
        - 2 * s * m2 * (omega2**2 * l2 + omega1**2 * l1 * c)
    )
    num2 = (
        2
        * s
        * (
            omega1**2 * l1 * (m1 + m2)
            + g * (m1 + m2) * np.cos(theta1)
            + omega2**2 * l2 * m2 * c
        )
    )

    return omega1, omega2, num1 / (l1 * den), num2 / (l2 * den)


def eom(
    t: float,
    y: np.ndarray,
    g: float = G_EARTH,
    m1: float = 1.0,
    m2: float = 1.0,
    l1: float = 1.0,
    l2: float = 1.0,
) -> np.ndarray:
    """
    Right-hand side f(t, y) of the equations of motion.
    Compatible with core.rk4_step, core.solve_trajectory and solve_ivp.
    """
    th1, th2, w1, w2 = y
    return np.array(deriv(th1, th2, w1, w2, g, m1, m2, l1, l2), dtype=np.float64)


def get_coords(
    th1: Scalar, th2: Scalar, l1: float = 1.0, l2: float = 1.0
) -> Tuple[Scalar, ...]:
    """
    Converts angles to Cartesian coordinates for both bobs.
    Convention: (0,0) is the pivot, +y is Up, +x is Right.
    """
    x1 = l1 * np.sin(th1)
    y1 = -l1 * np.cos(th1)
    x2 = x1 + l2 * np.sin(th2)
    y2 = y1 - l2 * np.cos(th2)
    return x1, y1, x2, y2


# --- 2. The Pendulum System ---


@dataclass
class DoublePendulum:
    """
    Physical constants of a double pendulum and its RK4 time stepper.

    Fields may be reassigned between calls to step(); a step reads them
    once and never writes them.
    """

    g: float = G_EARTH
    m1: float = 1.0
    m2: float = 1.0
    l1: float = 1.0
    l2: float = 1.0

    @property
    def params(self) -> Tuple[float, float, float, float, float]:
        """Parameter tuple (g, m1, m2, l1, l2) in the order eom expects."""
        return (self.g, self.m1, self.m2, self.l1, self.l2)

    def validate(self) -> None:
        """
        Raises ValueError if a parameter makes the equations ill-defined.
        Never called by step().
        """
        for name, value in zip(("g", "m1", "m2", "l1", "l2"), self.params):
            if not np.isfinite(value):
                raise ValueError(f"Parameter {name} must be finite, got {value}.")
        for name in ("m1", "m2", "l1", "l2"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"Parameter {name} must be positive, got {value}.")

    def eom(self, t: float, y: np.ndarray) -> np.ndarray:
        """Right-hand side f(t, y) at the current parameters, for solve_ivp."""
        return eom(t, y, *self.params)

    def derivative(self, state: State) -> State:
        """Time derivative of the state, packaged as a State of rates."""
        return State(
            *(
                float(v)
                for v in deriv(
                    state.theta1,
                    state.theta2,
                    state.omega1,
                    state.omega2,
                    *self.params,
                )
            )
        )

    def step(self, state: State, dt: float) -> State:
        """
        Advances the state by exactly dt using a single RK4 step.

        Large dt is neither clamped nor subdivided.

        Raises:
            core.IntegrationError: If the step could not be computed.
        """
        y = core.rk4_step(eom, 0.0, state.as_array(), dt, args=self.params)
        return State.from_array(y)

    def simulate(self, state: State, dt: float, n_steps: int) -> np.ndarray:
        """
        Repeated step() from state.

        Returns:
            Trajectory of shape (4, n_steps + 1), first column is state.
        """
        return core.integrate_fixed_step(
            eom, state.as_array(), dt, n_steps, args=self.params
        )

    # --- Display Projections ---

    def top_joint(self, state: State, scale: float = 1.0) -> Tuple[float, float]:
        """Inner bob relative to the fixed pivot."""
        return (
            self.l1 * np.sin(state.theta1) * scale,
            self.l1 * np.cos(state.theta1) * scale,
        )

    def bottom_joint(self, state: State, scale: float = 1.0) -> Tuple[float, float]:
        """Outer bob relative to the inner bob."""
        return (
            self.l2 * np.sin(state.theta2) * scale,
            self.l2 * np.cos(state.theta2) * scale,
        )

    # --- Energies ---

    def kinetic_energy(self, state: State) -> float:
        m1, m2, l1, l2 = self.m1, self.m2, self.l1, self.l2
        w1, w2 = state.omega1, state.omega2
        return (
            0.5 * (m1 + m2) * (l1 * w1) ** 2
            + 0.5 * m2 * (l2 * w2) ** 2
            + m2 * l1 * l2 * w1 * w2 * np.cos(state.theta1 - state.theta2)
        )

    def potential_energy(self, state: State) -> float:
        """Gravitational potential, zero at pivot height, +y up."""
        _, y1, _, y2 = get_coords(state.theta1, state.theta2, self.l1, self.l2)
        return self.g * (self.m1 * y1 + self.m2 * y2)

    def total_energy(self, state: State) -> float:
        return self.kinetic_energy(state) + self.potential_energy(state)
