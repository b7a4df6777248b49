# main.py

import pygame
import constants
import json
import logging
import logger_setup
import numpy as np
from burst import BurstSpawner
from renderer import PygameBackend, RenderAdapter
from scheduler import AnimationScheduler, FrameQueue, monotonic_ms
from trajectory import TrajectoryGenerator

# Get the application's dedicated logger
logger = logging.getLogger("fireworks")

MODE_KEYS = {pygame.K_1: 1, pygame.K_2: 2, pygame.K_3: 3}


def run_event_loop(scheduler, spawner, backend, frame_queue, clock):
    """
    The main loop. Input is handled between frames, so a burst spawned here is
    fully visible to the next frame the scheduler renders.
    """
    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key in MODE_KEYS:
                    scheduler.set_mode(MODE_KEYS[event.key])
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                spawner.trigger(*event.pos)
            elif event.type == pygame.VIDEORESIZE:
                backend.set_surface(pygame.display.get_surface())

        # --- Drawing ---
        if frame_queue.run_pending():
            pygame.display.flip()
        clock.tick(constants.FPS)


def main():
    """
    Main function to initialize and run the fireworks display.
    """
    # --- Setup ---
    with open('config.json', 'r') as f:
        config = json.load(f)
    logger_setup.setup_logging(config)
    sim_config = config['simulation']

    logger.info("Application starting...")
    logger.info(f"Loaded configuration: {config}")

    # Initialize the master random number generator (RNG)
    rng = np.random.default_rng(config['master_seed'])
    logger.info(f"Master RNG initialized with seed: {config['master_seed']}")

    # --- Initialization ---
    pygame.init()
    screen = pygame.display.set_mode((constants.WIDTH, constants.HEIGHT), pygame.RESIZABLE)
    pygame.display.set_caption(constants.TITLE)
    clock = pygame.time.Clock()

    backend = PygameBackend(screen)
    backend.clear()
    pygame.display.flip()

    frame_queue = FrameQueue()

    def show_status(status):
        pygame.display.set_caption(f"{constants.TITLE} | Mode {scheduler.mode} | {status}")

    scheduler = AnimationScheduler(
        config=sim_config,
        renderer=RenderAdapter(sim_config, backend, rng),
        request_frame=frame_queue,
        clock=monotonic_ms,
        on_status=show_status
    )
    spawner = BurstSpawner(TrajectoryGenerator(sim_config, rng), scheduler, rng)

    logger.info("Click to launch a burst. Keys 1-3 select the mode, Esc quits.")
    run_event_loop(scheduler, spawner, backend, frame_queue, clock)

    logger.info("Application shutting down.")
    pygame.quit()


if __name__ == "__main__":
    main()
