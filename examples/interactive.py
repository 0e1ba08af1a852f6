import logging

import matplotlib.pyplot as plt

from doublependulum import DoublePendulum, State, AnimationConfig
from doublependulum.visualisation import animate_pendulum, animate_with_controls

logging.basicConfig(level=logging.INFO)

# Set to False for the plain window without sliders.
with_controls = True

# Set the pendulum and the initial condition.
system = DoublePendulum()
state = State(2.0, 2.0, 0.0, 0.0)
config = AnimationConfig(trail_len=200)

if with_controls:
    anim, sliders = animate_with_controls(system, state, config)
else:
    anim = animate_pendulum(system, state, config)

plt.show()
