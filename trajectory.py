# trajectory.py

import math
import logging
from collections import namedtuple

import numba
import numpy as np

logger = logging.getLogger("fireworks")

# A simulated position at an absolute timestamp (milliseconds).
PathPoint = namedtuple('PathPoint', ['x', 'y', 'time'])


# --- JIT-Compiled Physics Functions ---
# Kept outside the TrajectoryGenerator class and operating only on scalars and
# NumPy arrays, as required by Numba's nopython mode.

@numba.jit(nopython=True)
def _sample_trajectory_jit(x0, y0, vx0, vy0, drag, gravity, interval_s, num_samples, xs, ys):
    """
    Numba-accelerated closed-form sampling of drag-damped projectile motion.

    x(t) = x0 + (vx0/k)(1 - e^(-kt))
    y(t) = y0 - [((vy0*k + g)/k^2)(1 - e^(-kt)) - (g/k)t]

    The vertical term is subtracted because the screen's y axis grows
    downward. Fills xs and ys in place.
    """
    vertical_scale = (vy0 * drag + gravity) / (drag * drag)
    terminal = gravity / drag
    for i in range(num_samples):
        t = i * interval_s
        decay = 1.0 - math.exp(-drag * t)
        xs[i] = x0 + (vx0 / drag) * decay
        ys[i] = y0 - (vertical_scale * decay - terminal * t)


class TrajectoryGenerator:
    """
    Produces the time-stamped flight path of a single firework particle.

    Data Contract:
    - Inputs:
        - config (dict): The 'simulation' section of the config file.
        - rng (np.random.Generator): The master seeded random number generator.
    - Outputs: tuples of PathPoint, one per sampling interval.
    - Invariants: Every path holds at least the t=0 sample, and consecutive
      timestamps differ by exactly time_interval_ms.
    """
    def __init__(self, config: dict, rng: np.random.Generator):
        self.rng = rng
        self.gravity = config['gravity']
        self.drag = config['drag_coefficient']
        self.interval_ms = config['time_interval_ms']
        self.min_speed = config['min_initial_speed']
        self.speed_increment = config['initial_speed_increment']
        self.duration_s = config['path_duration_s']

        # Integer stepping keeps the timestamps free of accumulated float error.
        self.num_samples = max(1, int(math.ceil(self.duration_s * 1000 / self.interval_ms)))

        logger.info(
            f"TrajectoryGenerator created: k={self.drag}, g={self.gravity}, "
            f"dt={self.interval_ms}ms, {self.num_samples} samples per path."
        )

    def launch_speed(self, elevation: float) -> float:
        """
        Draws the initial speed for a launch at the given elevation (radians).
        Steeper elevations launch slower, approximating foreshortening.
        """
        return self.min_speed * math.cos(elevation) + self.rng.random() * self.speed_increment

    def compute_path(self, x0: float, y0: float, t0: float, vx0: float, vy0: float) -> tuple:
        """
        Samples the trajectory for an already-resolved initial velocity.
        Deterministic: no random draws happen here.
        """
        xs = np.empty(self.num_samples, dtype=np.float64)
        ys = np.empty(self.num_samples, dtype=np.float64)
        _sample_trajectory_jit(
            float(x0), float(y0), float(vx0), float(vy0),
            float(self.drag), float(self.gravity),
            self.interval_ms / 1000.0, self.num_samples, xs, ys
        )
        return tuple(
            PathPoint(float(xs[i]), float(ys[i]), t0 + i * self.interval_ms)
            for i in range(self.num_samples)
        )

    def generate(self, x0: float, y0: float, t0: float, angle: float, elevation: float) -> tuple:
        """
        Generates the path of one particle launched from (x0, y0) at time t0.

        - angle (float): Emission direction within the screen plane, radians.
        - elevation (float): Out-of-plane launch angle, radians. 0 means the
          plane perpendicular to the viewer.
        """
        speed = self.launch_speed(elevation)
        return self.compute_path(x0, y0, t0, speed * math.cos(angle), speed * math.sin(angle))

    def path_velocity(self, vx0: float, vy0: float, t: float) -> tuple:
        """
        World-frame velocity (y up) at simulated time t seconds.
        The vertical component tends to terminal_velocity() as t grows.
        """
        decay = math.exp(-self.drag * t)
        vx = vx0 * decay
        vy = ((vy0 * self.drag + self.gravity) / self.drag) * decay - self.gravity / self.drag
        return vx, vy

    def terminal_velocity(self) -> float:
        """Vertical terminal velocity under linear drag, -g/k."""
        return -self.gravity / self.drag
