# particle.py


class ParticleBundle:
    """
    Represents one colored streak from a single firework launch.

    The path is generated once at spawn time and never changes afterwards.
    The scheduler only moves the cursor forward.

    Data Contract:
    - Inputs:
        - path_points (sequence of PathPoint): strictly increasing timestamps.
        - launch_time (float): Absolute spawn time in milliseconds.
        - trail_color, halo_color, highlight_color (tuple): RGB triples.
    - Invariants: 0 <= cursor <= len(path_points), cursor never decreases.
    """
    __slots__ = ('path_points', 'cursor', 'launch_time', 'trail_color', 'halo_color', 'highlight_color')

    def __init__(self, path_points, launch_time: float, trail_color: tuple, halo_color: tuple, highlight_color: tuple):
        self.path_points = tuple(path_points)
        self.cursor = 0
        self.launch_time = launch_time
        self.trail_color = trail_color
        self.halo_color = halo_color
        self.highlight_color = highlight_color

    def __len__(self):
        return len(self.path_points)

    def __repr__(self):
        return f"ParticleBundle(cursor={self.cursor}/{len(self.path_points)}, launch_time={self.launch_time:.1f})"

    @property
    def is_exhausted(self) -> bool:
        """True once every point has been revealed. An empty path is exhausted from the start."""
        return self.cursor >= len(self.path_points)

    @property
    def last_point_time(self):
        if not self.path_points:
            return None
        return self.path_points[-1].time

    def advance_to(self, index: int):
        """Moves the cursor forward to index, clamped to the path length. Never moves it back."""
        self.cursor = max(self.cursor, min(int(index), len(self.path_points)))

    def fade_out_opacity(self, fade_out_speed: float) -> float:
        """
        Global opacity multiplier driving the late-life fade.

        Stays at 1 until the cursor enters the final 1/fade_out_speed of the
        path, then falls linearly to 0 at the end.
        """
        if not self.path_points:
            return 0.0
        progress = self.cursor / len(self.path_points)
        return min(1.0, max(0.0, (1.0 - progress) * fade_out_speed))

    def is_expired(self, now: float, visible_duration: float) -> bool:
        """
        True once the cursor reached the end and the last point is older than
        the visibility window.
        """
        last_time = self.last_point_time
        if last_time is None:
            return True
        return self.is_exhausted and now - last_time > visible_duration
