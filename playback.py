# playback.py

"""
Playback disciplines: how the current time maps to the part of a bundle's
path that is on screen.

Each discipline answers two questions per bundle per frame: which points are
visible now (a FrameView), and how far the cursor may advance. Fading and
retirement are shared and live in the scheduler.
"""

import math
from collections import namedtuple

import constants


# trail_points: points whose segments form the trail this frame.
# head_points: points that get a halo and a highlight this frame.
# target_cursor: where the cursor should move to after rendering.
FrameView = namedtuple('FrameView', ['trail_points', 'head_points', 'target_cursor'])


def _clamp_index(index: int, length: int) -> int:
    return min(max(index, 0), length)


class PlaybackDiscipline:
    """Base class. Subclasses supply frame_view() and draw_trail()."""
    name = None

    def frame_view(self, bundle, now: float) -> FrameView:
        raise NotImplementedError

    def draw_trail(self, renderer, bundle, view: FrameView, now: float, fade: float):
        raise NotImplementedError


class FreeRunningReveal(PlaybackDiscipline):
    """
    Reveals exactly one more point per frame, regardless of how much
    wall-clock time passed. Fast machines play the burst back faster.
    """
    name = constants.FREE_RUNNING

    def frame_view(self, bundle, now: float) -> FrameView:
        if bundle.is_exhausted:
            return FrameView((), (), bundle.cursor)
        cursor = bundle.cursor
        return FrameView((), (bundle.path_points[cursor],), cursor + 1)

    def draw_trail(self, renderer, bundle, view: FrameView, now: float, fade: float):
        if not view.head_points:
            return
        renderer.draw_free_running_trail(bundle.path_points, bundle.cursor, now, bundle.trail_color, fade)


class FixedIntervalReveal(PlaybackDiscipline):
    """
    Derives the visible points from the time elapsed since launch, using the
    same sampling interval as the trajectory generator.

    Two sliding windows are computed each frame:
    - trail window: points younger than highlight_duration + trail_duration.
    - highlight window: points younger than highlight_duration.
    Indices are clamped to [0, len(path_points)].
    """
    name = constants.FIXED_INTERVAL

    def __init__(self, config: dict):
        self.interval = config['time_interval_ms']
        self.highlight_duration = config['highlight_duration_ms']
        self.trail_duration = config['trail_duration_ms']

    def windows(self, bundle, now: float) -> tuple:
        """Returns (trail_begin, trail_end, head_begin, head_end) as clamped indices."""
        length = len(bundle.path_points)
        age = now - bundle.launch_time
        leading = _clamp_index(math.floor(age / self.interval), length)
        trail_begin = _clamp_index(
            math.floor((age - self.highlight_duration - self.trail_duration) / self.interval), length
        )
        head_begin = _clamp_index(math.floor((age - self.highlight_duration) / self.interval), length)
        return trail_begin, leading, head_begin, leading

    def frame_view(self, bundle, now: float) -> FrameView:
        trail_begin, trail_end, head_begin, head_end = self.windows(bundle, now)
        points = bundle.path_points
        heads = tuple(
            point for point in points[head_begin:head_end]
            if now - point.time <= self.highlight_duration
        )
        return FrameView(points[trail_begin:trail_end], heads, head_end)

    def draw_trail(self, renderer, bundle, view: FrameView, now: float, fade: float):
        if len(view.trail_points) < 2:
            return
        renderer.draw_fixed_interval_trail(view.trail_points, now, bundle.trail_color, fade)


def build_disciplines(config: dict) -> dict:
    """One instance of each discipline, keyed by name."""
    return {
        constants.FREE_RUNNING: FreeRunningReveal(),
        constants.FIXED_INTERVAL: FixedIntervalReveal(config),
    }
