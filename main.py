# main.py

import pygame
import constants
import logging
import logger_setup
import numpy as np
from particle_system import make_fire
from simulation import SimulationContext, advance_frame, draw_overlay, frame_rate, handle_pointer, tick_clock

# Get the application's dedicated logger
logger = logging.getLogger(logger_setup.LOGGER_NAME)


def run_loop(context: SimulationContext, screen: pygame.Surface, clock: pygame.time.Clock,
             font: pygame.font.Font, log_interval: int):
    """
    The main animation loop. Runs until the window is closed.
    """
    running = True
    context.last_time_ms = pygame.time.get_ticks()

    while running:
        # Event handling
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.MOUSEBUTTONUP:
                handle_pointer(context, event.button, event.pos)

        # --- Frame timing ---
        fps = frame_rate(tick_clock(context, pygame.time.get_ticks()))

        # --- Update & Draw ---
        advance_frame(context, screen)
        draw_overlay(screen, font, fps)

        # --- Logging (throttled) ---
        if log_interval and context.frame_count % log_interval == 0:
            logger.debug(
                f"Frame={context.frame_count}, "
                f"FPS={fps}, "
                f"FireParticles={len(context.fire.particles)}, "
                f"ActiveExplosions={len(context.explosions)}"
            )

        pygame.display.flip()
        clock.tick(constants.FPS)


def main():
    """
    Main function to initialize and run the fire demo.
    """
    # --- Setup ---
    config = logger_setup.load_config()
    logger_setup.setup_logging(config)
    sim_config = config['simulation']

    logger.info("Application starting...")
    logger.info(f"Loaded configuration: {config}")

    # Initialize the master random number generator (RNG)
    rng = np.random.default_rng(config['master_seed'])
    logger.info(f"Master RNG initialized with seed: {config['master_seed']}")

    # --- Initialization ---
    pygame.init()
    try:
        screen = pygame.display.set_mode((constants.WIDTH, constants.HEIGHT))
        pygame.display.set_caption(constants.TITLE)
        clock = pygame.time.Clock()
        font = pygame.font.SysFont(constants.FONT_NAME, constants.FONT_SIZE)

        # Default spawn location: bottom middle of the screen
        spawn_location = (constants.WIDTH / 2, constants.HEIGHT - constants.FIRE_BOTTOM_OFFSET)
        fire = make_fire(spawn_location, rng, sim_config['fire_particle_count'])

        context = SimulationContext(
            fire=fire,
            rng=rng,
            explosion_particles=sim_config['explosion_particle_count'],
        )

        run_loop(context, screen, clock, font, sim_config.get('log_interval', 0))
    except Exception:
        logger.exception("Unhandled error in the animation loop.")
        raise
    finally:
        logger.info("Application shutting down.")
        pygame.quit()


if __name__ == "__main__":
    main()
