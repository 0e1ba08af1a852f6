import numpy as np
import matplotlib.pyplot as plt

from doublependulum import DoublePendulum, SimulationConfig, State
from doublependulum.visualisation import plot_energy_drift, plot_sensitivity_divergence

# Set the pendulum and the run length.
system = DoublePendulum()
config = SimulationConfig(dt=0.005, n_steps=4000)
t_points = np.arange(config.n_steps + 1) * config.dt

# Two initial conditions a micro-radian apart.
ref = State(2.0, 2.0, 0.0, 0.0)
pert = State(2.0 + 1e-6, 2.0, 0.0, 0.0)

traj_ref = system.simulate(ref, config.dt, config.n_steps)
traj_pert = system.simulate(pert, config.dt, config.n_steps)

# Energy along the reference run.
energies = np.array([system.total_energy(State.from_array(y)) for y in traj_ref.T])
plot_energy_drift(t_points, energies)

plot_sensitivity_divergence(t_points, traj_ref, traj_pert, system=system)
plt.show()
