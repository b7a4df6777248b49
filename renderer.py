# renderer.py

import math
import logging

import numba
import numpy as np
import pygame

import constants
from color_utils import with_alpha

logger = logging.getLogger("fireworks")


@numba.jit(nopython=True)
def _point_to_line_distance_jit(xs, ys, x1, y1, x2, y2):
    """
    Perpendicular distance from each (xs[i], ys[i]) to the line through
    (x1, y1) and (x2, y2). Falls back to the distance to (x1, y1) when the
    two line points coincide.
    """
    out = np.empty(xs.shape[0])
    dx = x2 - x1
    dy = y2 - y1
    length = math.sqrt(dx * dx + dy * dy)
    for i in range(xs.shape[0]):
        if length == 0.0:
            out[i] = math.sqrt((xs[i] - x1) ** 2 + (ys[i] - y1) ** 2)
        else:
            out[i] = abs(dy * xs[i] - dx * ys[i] + x2 * y1 - y2 * x1) / length
    return out


def _interpolate_stops(stops, offset: float):
    """
    Calculates a smooth RGBA color by linearly interpolating between gradient stops.
    """
    for i in range(len(stops) - 1):
        pos1, color1 = stops[i]
        pos2, color2 = stops[i + 1]

        if pos1 <= offset <= pos2:
            if pos2 == pos1:
                return color2
            local_t = (offset - pos1) / (pos2 - pos1)
            return tuple(int(c1 * (1 - local_t) + c2 * local_t) for c1, c2 in zip(color1, color2))

    # Outside the stop range: clamp to the nearest end.
    return stops[0][1] if offset < stops[0][0] else stops[-1][1]


class SurfaceBackend:
    """
    The drawing primitives the firework renderer needs. Colors are (R, G, B, A)
    tuples in 0-255; coordinates and sizes are floats in pixels.
    """
    def clear(self):
        raise NotImplementedError

    def fill_circle(self, x, y, radius, rgba):
        raise NotImplementedError

    def fill_radial_gradient(self, x, y, radius, stops):
        """stops is a sequence of (offset in 0-1, rgba) sorted by offset."""
        raise NotImplementedError

    def stroke_line(self, x1, y1, x2, y2, width, rgba):
        raise NotImplementedError

    def set_blur(self, radius):
        """Soft-blur filter applied to subsequent gradient fills; 0 turns it off."""
        raise NotImplementedError


class PygameBackend(SurfaceBackend):
    """
    SurfaceBackend drawing onto a pygame.Surface.

    pygame's draw functions ignore alpha on an opaque target, so translucent
    primitives are drawn onto a small SRCALPHA scratch surface and blitted.
    Blur reuses the bloom trick: smoothscale down, then back up.
    """
    def __init__(self, surface: pygame.Surface, background=constants.BLACK):
        self.surface = surface
        self.background = background
        self.blur_radius = 0

    def set_surface(self, surface: pygame.Surface):
        """Swaps the target, e.g. after the window was resized."""
        self.surface = surface
        logger.info(f"Render surface set to {surface.get_width()}x{surface.get_height()}.")

    def clear(self):
        self.surface.fill(self.background)

    def set_blur(self, radius):
        self.blur_radius = max(0, int(radius))

    def fill_circle(self, x, y, radius, rgba):
        if rgba[3] == 0 or radius <= 0:
            return
        if rgba[3] == 255:
            pygame.draw.circle(self.surface, rgba[:3], (x, y), radius)
            return
        size = int(math.ceil(radius)) * 2 + 2
        scratch = pygame.Surface((size, size), pygame.SRCALPHA)
        pygame.draw.circle(scratch, rgba, (size / 2, size / 2), radius)
        self.surface.blit(scratch, (x - size / 2, y - size / 2))

    def stroke_line(self, x1, y1, x2, y2, width, rgba):
        if rgba[3] == 0:
            return
        line_width = max(1, int(round(width)))
        pad = line_width + 1
        left, top = min(x1, x2) - pad, min(y1, y2) - pad
        size = (int(abs(x2 - x1)) + 2 * pad + 1, int(abs(y2 - y1)) + 2 * pad + 1)
        scratch = pygame.Surface(size, pygame.SRCALPHA)
        pygame.draw.line(scratch, rgba, (x1 - left, y1 - top), (x2 - left, y2 - top), line_width)
        self.surface.blit(scratch, (left, top))

    def fill_radial_gradient(self, x, y, radius, stops):
        if radius <= 0:
            return
        pad = self.blur_radius + 1
        size = int(math.ceil(radius)) * 2 + 2 * pad
        center = size / 2
        scratch = pygame.Surface((size, size), pygame.SRCALPHA)

        # Concentric discs from the rim inward; each overwrites the pixels it covers.
        ring = float(radius)
        while ring > 0:
            color = _interpolate_stops(stops, ring / radius)
            pygame.draw.circle(scratch, color, (center, center), ring)
            ring -= 1.0

        if self.blur_radius > 0:
            scale = self.blur_radius + 1
            scaled_size = (max(1, size // scale), max(1, size // scale))
            scratch = pygame.transform.smoothscale(scratch, scaled_size)
            scratch = pygame.transform.smoothscale(scratch, (size, size))

        self.surface.blit(scratch, (x - center, y - center))


class RenderAdapter:
    """
    Decides the geometry, opacity and width of every firework element and
    feeds them to a SurfaceBackend.

    Data Contract:
    - Inputs:
        - config (dict): The 'simulation' section of the config file.
        - backend (SurfaceBackend): The drawing target.
        - rng (np.random.Generator): Source of flicker, jitter and sparks.
    - Side Effects: Issues draw calls on the backend only.
    - Invariants: Never raises on bad colors; every color goes through with_alpha.
    """
    def __init__(self, config: dict, backend: SurfaceBackend, rng: np.random.Generator):
        self.backend = backend
        self.rng = rng
        self.visible_duration = config['visible_duration_ms']
        self.trail_duration = config['trail_duration_ms']
        self.max_trail_width = config.get('max_trail_width', 4)
        self.min_trail_width = config.get('min_trail_width', 1)
        self.max_spark_distance = config.get('max_spark_distance', 5)
        self.spark_attempts = config.get('spark_attempts', 5)

    def clear(self):
        self.backend.clear()

    def draw_highlight(self, x: float, y: float, color: tuple, fade: float):
        radius = constants.HIGHLIGHT_BASE_RADIUS + self.rng.random()
        self.backend.fill_circle(x, y, radius, with_alpha(color, fade))

    def draw_halo(self, x: float, y: float, color: tuple, fade: float):
        """
        Soft radial glow. The sin(x/100) wobble varies size and brightness
        across the screen; the random term makes it flicker between frames.
        """
        wobble = math.sin(x / 100)
        radius = constants.HALO_BASE_RADIUS + wobble * 2
        start_opacity = 0.4 + self.rng.random() * 0.2 + wobble * 0.1
        stops = (
            (0.0, with_alpha(color, 1.0 * fade)),
            (0.3, with_alpha(color, start_opacity * fade)),
            (0.6, with_alpha(color, start_opacity * 0.3 * fade)),
            (1.0, with_alpha(color, 0.0)),
        )
        self.backend.set_blur(constants.HALO_BLUR_RADIUS)
        try:
            self.backend.fill_radial_gradient(x, y, radius, stops)
        finally:
            self.backend.set_blur(0)

    def draw_free_running_trail(self, path_points, cursor: int, now: float, color: tuple, fade: float):
        """
        Trail behind a free-running particle: every revealed segment fades
        linearly from 0.8 to 0 over the visible window, measured from the
        segment's own timestamp. Nothing is drawn once now passes the last point.
        """
        if not path_points or now > path_points[-1].time:
            return
        for j in range(min(cursor, len(path_points) - 1)):
            point, next_point = path_points[j], path_points[j + 1]
            elapsed = now - point.time
            if elapsed >= self.visible_duration:
                continue
            opacity = constants.FREE_RUNNING_TRAIL_OPACITY - elapsed / self.visible_duration
            self.backend.stroke_line(
                point.x, point.y, next_point.x, next_point.y,
                constants.FREE_RUNNING_TRAIL_WIDTH, with_alpha(color, opacity * fade)
            )

    def draw_fixed_interval_trail(self, trail_points, now: float, color: tuple, fade: float):
        """
        Trail behind a fixed-interval particle. Segments darken, thin out and
        flicker with age, and shed small sparks near the line.
        """
        spark_rgba = with_alpha(constants.SPARK_COLOR, 0.8 * fade - 0.2)
        max_distance = self.max_spark_distance

        for j in range(len(trail_points) - 1):
            point, next_point = trail_points[j], trail_points[j + 1]
            age = (now - point.time) / self.trail_duration

            # Darken-then-fade: the global fade subtracts directly from the segment opacity.
            opacity = (1 - age * 0.8) - 1 + fade
            width = self.max_trail_width - (self.max_trail_width - self.min_trail_width) * age
            width = max(self.min_trail_width, width)

            # Endpoint flicker, redrawn every frame.
            jitter = (self.rng.random(4) - 0.5) * 2
            x1, y1 = point.x + jitter[0], point.y + jitter[1]
            x2, y2 = next_point.x + jitter[2], next_point.y + jitter[3]
            self.backend.stroke_line(x1, y1, x2, y2, width, with_alpha(color, opacity))

            # Sparks: acceptance falls off with distance from the jittered line.
            draws = self.rng.random((self.spark_attempts, 5))
            spark_xs = point.x + (next_point.x - point.x) * draws[:, 0] + (draws[:, 1] - 0.5) * 2 * max_distance
            spark_ys = point.y + (next_point.y - point.y) * draws[:, 2] + (draws[:, 3] - 0.5) * 2 * max_distance
            distances = _point_to_line_distance_jit(spark_xs, spark_ys, x1, y1, x2, y2)
            accepted = draws[:, 4] < 1 - distances / max_distance
            for sx, sy in zip(spark_xs[accepted], spark_ys[accepted]):
                self.backend.fill_circle(float(sx), float(sy), constants.SPARK_RADIUS, spark_rgba)
