import logging

import pytest
import numpy as np

import doublependulum.core as core


def harmonic(t, y, omega=1.0):
    """Simple harmonic oscillator y = [x, v]."""
    return np.array([y[1], -(omega**2) * y[0]])


# --- 1. Math Utilities ---


def test_wrap_angle():
    """Test angle wrapping to [-pi, pi)."""
    assert np.isclose(core.wrap_angle(0.1), 0.1)
    assert np.isclose(core.wrap_angle(np.pi + 0.1), -np.pi + 0.1)
    # Boundary case: 3*pi maps to -pi
    assert np.isclose(core.wrap_angle(3 * np.pi), -np.pi)


# --- 2. RK4 ---


def test_rk4_is_fourth_order():
    """Halving dt should cut the global error by ~2^4."""
    y0 = np.array([1.0, 0.0])

    def final_error(dt):
        n_steps = int(round(1.0 / dt))
        traj = core.integrate_fixed_step(harmonic, y0, dt, n_steps)
        return np.abs(traj[:, -1] - [np.cos(1.0), -np.sin(1.0)]).max()

    ratio = final_error(0.1) / final_error(0.05)
    assert 12.0 < ratio < 20.0


def test_rk4_step_passes_args():
    y = np.array([1.0, 0.0])
    slow = core.rk4_step(harmonic, 0.0, y, 0.1, args=(1.0,))
    fast = core.rk4_step(harmonic, 0.0, y, 0.1, args=(3.0,))
    assert fast[1] < slow[1] < 0.0


def test_rk4_step_uses_time_argument():
    """dy/dt = t integrates to t^2 / 2 exactly for a polynomial of degree 2."""

    def ramp(t, y):
        return np.array([t])

    y1 = core.rk4_step(ramp, 1.0, np.array([0.0]), 0.5)
    np.testing.assert_allclose(y1, [(1.5**2 - 1.0) / 2])


def test_rk4_step_rejects_malformed_rhs():
    def broken(t, y):
        return [0.0, 0.0, 0.0]

    with pytest.raises(core.IntegrationError):
        core.rk4_step(broken, 0.0, np.zeros(4), 0.01)


def test_integrate_fixed_step_includes_initial_state():
    y0 = np.array([0.5, -0.1])
    traj = core.integrate_fixed_step(harmonic, y0, 0.01, 25)
    assert traj.shape == (2, 26)
    np.testing.assert_array_equal(traj[:, 0], y0)


def test_zero_steps_returns_initial_state():
    traj = core.integrate_fixed_step(harmonic, [1.0, 2.0], 0.1, 0)
    np.testing.assert_array_equal(traj, [[1.0], [2.0]])


# --- 3. Ensembles & Reference Solver ---


def test_ensemble_propagation():
    """Ensure we can propagate a batch of particles."""
    n_particles = 10
    rng = np.random.default_rng(0)
    y0_ensemble = rng.random((n_particles, 2)) * 0.1 + 0.05

    trajs = core.solve_ensemble(harmonic, y0_ensemble, 0.05, 20)

    assert trajs.shape == (n_particles, 2, 21)
    np.testing.assert_array_equal(trajs[:, :, 0], y0_ensemble)
    # Check that they moved from initial state
    assert not np.allclose(trajs[:, :, -1], trajs[:, :, 0])


def test_solve_trajectory_matches_analytic():
    t_points = np.linspace(0, 2 * np.pi, 50)
    sol = core.solve_trajectory(harmonic, [1.0, 0.0], t_points)
    assert sol.shape == (2, 50)
    np.testing.assert_allclose(sol[0], np.cos(t_points), atol=1e-7)


def test_solve_trajectory_raises_on_blow_up(caplog):
    """dy/dt = y^2 from y(0) = 1 diverges at t = 1."""

    def blow_up(t, y):
        return y**2

    with caplog.at_level(logging.ERROR, logger="doublependulum.core"):
        with pytest.raises(core.IntegrationError):
            core.solve_trajectory(blow_up, [1.0], np.linspace(0, 2, 5))

    assert "solve_ivp failed" in caplog.text
    assert caplog.records[-1].levelno == logging.ERROR
