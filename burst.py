# burst.py

import math
import logging

import numpy as np

import constants
from color_utils import burst_palette, random_hue
from particle import ParticleBundle

logger = logging.getLogger("fireworks")


def mode_settings(mode: int) -> tuple:
    """
    Looks up (particles per elevation, elevation angles in degrees, discipline)
    for a burst mode.
    """
    try:
        return constants.MODE_TABLE[mode]
    except KeyError:
        raise ValueError(f"Unknown burst mode {mode!r}; expected one of {sorted(constants.MODE_TABLE)}") from None


class BurstSpawner:
    """
    Turns a click into a ring (or stacked rings) of ParticleBundles.

    Every elevation spawns its own full ring of N particles. Emission angles
    are spread by 1/cos(elevation) so rings launched at shallow angles keep an
    even apparent spacing after projection. All bundles of one click share a
    single hue family.

    Data Contract:
    - Inputs:
        - generator (TrajectoryGenerator): Produces each bundle's path.
        - scheduler (AnimationScheduler): Receives the bundles; its mode
          selects the particle count and elevations.
        - rng (np.random.Generator): The master seeded random number generator.
    - Outputs: The list of bundles spawned by each trigger.
    """
    def __init__(self, generator, scheduler, rng: np.random.Generator):
        self.generator = generator
        self.scheduler = scheduler
        self.rng = rng

    def build_burst(self, x0: float, y0: float, t0: float, mode: int) -> list:
        count, elevations, _ = mode_settings(mode)
        sector_angle = 2 * math.pi / count

        hue = random_hue(self.rng)
        trail_color, halo_color, highlight_color = burst_palette(hue)

        bundles = []
        for elevation_deg in elevations:
            elevation = math.radians(elevation_deg)
            for i in range(count):
                # Jitter spans one full sector either side of the slot angle.
                angle = i * sector_angle / math.cos(elevation) + (self.rng.random() * 2 - 1) * sector_angle
                path_points = self.generator.generate(x0, y0, t0, angle, elevation)
                bundles.append(ParticleBundle(path_points, t0, trail_color, halo_color, highlight_color))

        logger.info(
            f"Burst at ({x0:.0f}, {y0:.0f}), t={t0:.1f}ms: mode {mode}, hue {hue}, "
            f"{len(bundles)} bundles over {len(elevations)} elevation(s)."
        )
        return bundles

    def trigger(self, x0: float, y0: float, t0: float = None) -> list:
        """Spawns a burst at (x0, y0) using the scheduler's current mode and clock."""
        if t0 is None:
            t0 = self.scheduler.clock()
        bundles = self.build_burst(x0, y0, t0, self.scheduler.mode)
        self.scheduler.spawn(bundles)
        return bundles
