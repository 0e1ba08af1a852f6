"""
core.py

A dimension-agnostic engine for fixed-step numerical integration of
autonomous or time-dependent ODE systems dy/dt = f(t, y, *args).
"""

import logging
from typing import Any, Callable, Tuple, Union

import numpy as np
from scipy.integrate import solve_ivp

logger = logging.getLogger(__name__)


class IntegrationError(RuntimeError):
    """Raised when an integration step cannot produce a next state."""


# --- Math Utilities ---


def wrap_angle(theta: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """
    Wraps an angle or array of angles to the interval [-pi, pi).

    Args:
        theta: Input angle(s) in radians.

    Returns:
        The wrapped angle(s) in [-pi, pi).
    """
    return (theta + np.pi) % (2 * np.pi) - np.pi


# --- Fixed-Step Solvers ---


def _evaluate(
    eom_func: Callable[..., Any], t: float, y: np.ndarray, args: Tuple
) -> np.ndarray:
    dy = np.asarray(eom_func(t, y, *args), dtype=np.float64)
    if dy.shape != y.shape:
        raise IntegrationError(
            f"Right-hand side returned shape {dy.shape}, expected {y.shape}."
        )
    return dy


def rk4_step(
    eom_func: Callable[..., Any],
    t: float,
    y: np.ndarray,
    dt: float,
    args: Tuple = (),
) -> np.ndarray:
    """
    Advances y by exactly one classical 4th-order Runge-Kutta step.

    The step is never subdivided, so dt is taken as given.

    Args:
        eom_func: The Equation of Motion function f(t, y, *args) -> dy/dt.
        t: Time at the start of the step.
        y: State vector at time t.
        dt: Step size.
        args: Tuple of extra arguments to pass to eom_func.

    Returns:
        The state vector at time t + dt.

    Raises:
        IntegrationError: If eom_func does not return a vector shaped like y.
    """
    y = np.asarray(y, dtype=np.float64)
    half = 0.5 * dt

    k1 = _evaluate(eom_func, t, y, args)
    k2 = _evaluate(eom_func, t + half, y + half * k1, args)
    k3 = _evaluate(eom_func, t + half, y + half * k2, args)
    k4 = _evaluate(eom_func, t + dt, y + dt * k3, args)

    return y + (dt / 6.0) * (k1 + 2.0 * k2 + 2.0 * k3 + k4)


def integrate_fixed_step(
    eom_func: Callable[..., Any],
    y0: np.ndarray,
    dt: float,
    n_steps: int,
    args: Tuple = (),
    t0: float = 0.0,
) -> np.ndarray:
    """
    Integrates a single trajectory with n_steps RK4 steps of size dt.

    Returns:
        Solution array of shape (n_dim, n_steps + 1), first column is y0.
    """
    y = np.asarray(y0, dtype=np.float64)
    trajectory = np.empty((y.size, n_steps + 1))
    trajectory[:, 0] = y

    logger.debug("Fixed-step integration: dt=%s, n_steps=%s", dt, n_steps)

    t = t0
    for i in range(n_steps):
        y = rk4_step(eom_func, t, y, dt, args)
        t += dt
        trajectory[:, i + 1] = y

    return trajectory


def solve_ensemble(
    eom_func: Callable[..., Any],
    initial_conditions: np.ndarray,
    dt: float,
    n_steps: int,
    args: Tuple = (),
) -> np.ndarray:
    """
    Propagates an ensemble of particles forward with fixed RK4 steps.

    Args:
        eom_func: The Equation of Motion function.
        initial_conditions: Array of shape (n_samples, n_dim).
        dt: Step size.
        n_steps: Number of steps.
        args: Physics arguments passed to eom_func.

    Returns:
        Trajectories array of shape (n_samples, n_dim, n_steps + 1).
    """
    initial_conditions = np.atleast_2d(initial_conditions)
    n_samples, n_dim = initial_conditions.shape
    trajectories = np.zeros((n_samples, n_dim, n_steps + 1))

    logger.debug("Propagating %s particles (%sD system)", n_samples, n_dim)

    for i in range(n_samples):
        trajectories[i] = integrate_fixed_step(
            eom_func, initial_conditions[i], dt, n_steps, args=args
        )

    return trajectories


# --- Adaptive Reference Solver ---


def solve_trajectory(
    eom_func: Callable[..., Any],
    y0: np.ndarray,
    t_points: np.ndarray,
    args: Tuple = (),
    rtol: float = 1e-9,
    atol: float = 1e-12,
    method: str = "RK45",
) -> np.ndarray:
    """
    Integrates a single ODE trajectory with scipy's adaptive solvers.

    Used as a high-accuracy reference for the fixed-step integrator.

    Args:
        eom_func: The Equation of Motion function f(t, y, *args) -> dy/dt.
        y0: Initial state vector of shape (n_dim,).
        t_points: Array of time points to evaluate at.
        args: Tuple of extra arguments to pass to eom_func.
        rtol: Relative tolerance for solver.
        atol: Absolute tolerance for solver.
        method: Integration method (e.g., 'RK45', 'DOP853').

    Returns:
        Solution array of shape (n_dim, n_times).

    Raises:
        IntegrationError: If the solver does not reach the final time.
    """
    t_span = (t_points[0], t_points[-1])
    sol = solve_ivp(
        eom_func,
        t_span,
        y0,
        t_eval=t_points,
        method=method,
        rtol=rtol,
        atol=atol,
        args=args,
    )
    if not sol.success:
        logger.error("solve_ivp failed: %s", sol.message)
        raise IntegrationError(sol.message)
    return sol.y
