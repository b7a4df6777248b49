# scheduler.py

import time
import logging

import constants
from burst import mode_settings
from playback import build_disciplines
from registry import ParticleRegistry

logger = logging.getLogger("fireworks")


def monotonic_ms() -> float:
    """Monotonic timestamp in milliseconds, unaffected by wall-clock changes."""
    return time.perf_counter() * 1000.0


class FrameQueue:
    """
    Holds at most one pending frame callback until the host loop runs it.

    The pygame loop calls run_pending() once per display refresh; tests call
    it directly to step frames deterministically.
    """
    def __init__(self):
        self._pending = None

    def __call__(self, callback):
        self._pending = callback

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def run_pending(self) -> bool:
        """Runs the pending callback, if any. Returns True when one ran."""
        callback, self._pending = self._pending, None
        if callback is None:
            return False
        callback()
        return True


class AnimationScheduler:
    """
    Per-frame driver for all live firework bundles.

    Owns the particle registry and the run flag. While running, exactly one
    frame callback is outstanding; the loop goes idle as soon as a frame
    leaves the registry empty.

    Data Contract:
    - Inputs:
        - config (dict): The 'simulation' section of the config file.
        - renderer (RenderAdapter): Turns bundle state into draw calls.
        - request_frame (callable): Schedules a callback for the next frame.
        - clock (callable): Returns the current time in milliseconds.
        - on_status (callable, optional): Receives a status line every frame.
    - Side Effects: Draws through the renderer and mutates bundle cursors.
    - Invariants: Render order per bundle is trail, halo, highlight. A bundle
      leaves the registry only once exhausted and past the visible window.
    """
    def __init__(self, config: dict, renderer, request_frame, clock=monotonic_ms, on_status=None):
        self.config = config
        self.renderer = renderer
        self.request_frame = request_frame
        self.clock = clock
        self.on_status = on_status

        self.registry = ParticleRegistry()
        self.running = False
        self.frame_count = 0

        self.visible_duration = config['visible_duration_ms']
        self.fade_out_speed = config['fade_out_speed']
        self.disciplines = build_disciplines(config)

        self.mode = None
        self.discipline = None
        self.set_mode(config.get('default_mode', 1))

    def set_mode(self, mode: int):
        """Selects the burst mode. The matching discipline applies to every live bundle from the next frame."""
        _, _, discipline_name = mode_settings(mode)
        self.mode = mode
        self.discipline = self.disciplines[discipline_name]
        logger.info(f"Mode set to {mode} ({discipline_name} playback).")

    def spawn(self, bundles):
        """Adds bundles to the registry and starts the loop if it is idle."""
        self.registry.extend(bundles)
        self.start()

    def start(self):
        if self.running:
            logger.debug("Animation loop already running; start ignored.")
            return
        if not self.registry:
            return
        self.running = True
        logger.info(f"Animation loop started with {len(self.registry)} bundles.")
        self.request_frame(self.step)

    def step(self):
        """Processes one frame, then reschedules itself or goes idle."""
        self.renderer.clear()
        now = self.clock()
        self.frame_count += 1

        try:
            if self.on_status is not None:
                self.on_status(f"Current Time: {now:.2f} ms")

            removed = self.registry.sweep(lambda bundle: self._process_bundle(bundle, now))
            if removed:
                logger.debug(f"Retired {removed} bundle(s). {len(self.registry)} still live.")

            if self.frame_count % constants.FRAME_LOG_INTERVAL == 0:
                logger.debug(f"Frame={self.frame_count}, Time={now:.2f}ms, LiveBundles={len(self.registry)}")
        finally:
            # A failed frame still reschedules, so the run flag never outlives the loop.
            if self.registry:
                self.request_frame(self.step)
            else:
                self.running = False
                logger.info(f"Animation loop idle after frame {self.frame_count}.")

    def _process_bundle(self, bundle, now: float) -> bool:
        """Renders and advances one bundle. Returns True when it should be retired."""
        fade = bundle.fade_out_opacity(self.fade_out_speed)
        view = self.discipline.frame_view(bundle, now)

        self.discipline.draw_trail(self.renderer, bundle, view, now, fade)
        for point in view.head_points:
            self.renderer.draw_halo(point.x, point.y, bundle.halo_color, fade)
            # Drawn last so the bright point sits on top of its halo.
            self.renderer.draw_highlight(point.x, point.y, bundle.highlight_color, fade)

        bundle.advance_to(view.target_cursor)
        return bundle.is_expired(now, self.visible_duration)
