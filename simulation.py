# simulation.py

"""
Frame-level state and logic for the fire demo.

Everything that changes between frames lives on a SimulationContext owned by
the frame driver. The functions here take the context explicitly; there is
no module-level mutable state.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional
import numpy as np
import pygame
import constants
from logger_setup import LOGGER_NAME
from particle_system import ParticleSystem, make_explosion

logger = logging.getLogger(LOGGER_NAME)


@dataclass
class SimulationContext:
    """
    Everything the animation carries from one frame to the next.

    Data Contract:
    - Owner: the frame driver (main.run_loop). Only the functions in this
      module and the driver mutate it.
    - Fields:
        - fire (ParticleSystem): The perpetual emitter. Relocated, never replaced.
        - rng (np.random.Generator): The master seeded random number generator,
          handed to every explosion created from pointer input.
        - explosion_particles (int): Capacity of each new explosion.
        - explosions (list): Active explosions, oldest first.
        - last_time_ms, delta_ms (int): Frame timing, see tick_clock().
        - frame_count (int): Frames completed by advance_frame().
        - particle_layer (pygame.Surface | None): SRCALPHA layer that all
          particles are drawn onto each frame. Created lazily, reused while
          the screen size is unchanged.
    - Invariants: every entry of `explosions` is not done at the end of a frame.
    """
    fire: ParticleSystem
    rng: np.random.Generator
    explosion_particles: int = constants.EXPLOSION_PARTICLES
    explosions: List[ParticleSystem] = field(default_factory=list)
    last_time_ms: int = 0
    delta_ms: int = 0
    frame_count: int = 0
    particle_layer: Optional[pygame.Surface] = None


def frame_rate(delta_ms: float) -> int:
    """Instantaneous frames per second for a frame that took `delta_ms`."""
    if delta_ms <= 0:
        return 0
    return int(1000 // delta_ms)


def tick_clock(context: SimulationContext, now_ms: int) -> int:
    """Records the time elapsed since the previous frame and returns it."""
    context.delta_ms = now_ms - context.last_time_ms
    context.last_time_ms = now_ms
    return context.delta_ms


def advance_frame(context: SimulationContext, screen: pygame.Surface):
    """
    Runs one frame: update and draw the fire, then every live explosion.

    Explosions are walked from the most recent to the oldest so that a
    finished one can be deleted at its index without skipping the next.
    A finished explosion is removed before it would be drawn.

    Particles are drawn onto one shared SRCALPHA layer, which is then
    blitted over the background in a single pass.
    """
    screen.fill(constants.BACKGROUND)
    layer = _particle_layer(context, screen)

    context.fire.update()
    context.fire.draw(layer)

    for i in range(len(context.explosions) - 1, -1, -1):
        explosion = context.explosions[i]
        explosion.update()

        if explosion.done:
            del context.explosions[i]
            continue

        explosion.draw(layer)

    screen.blit(layer, (0, 0))
    context.frame_count += 1


def _particle_layer(context: SimulationContext, screen: pygame.Surface) -> pygame.Surface:
    layer = context.particle_layer
    if layer is None or layer.get_size() != screen.get_size():
        layer = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        context.particle_layer = layer
    else:
        layer.fill((0, 0, 0, 0))
    return layer


def handle_pointer(context: SimulationContext, button: int, pos) -> bool:
    """
    Reacts to a released mouse button at screen position `pos`.
    Returns True if the button was one the simulation cares about.
    """
    if button == constants.MIDDLE_BUTTON:
        context.explosions.append(make_explosion(pos, context.rng, context.explosion_particles))
        logger.debug(f"Explosion placed at {pos}. Active explosions: {len(context.explosions)}")
        return True
    if button == constants.PRIMARY_BUTTON:
        context.fire.relocate(pos)
        logger.debug(f"Fire moved to {pos}")
        return True
    return False


def draw_overlay(screen: pygame.Surface, font: pygame.font.Font, fps: int):
    """Frame rate counter and usage hints in the top-left corner."""
    lines = [
        f"FPS: {fps}",
        "M1 to move the fire",
        "M3 to place an explosion",
    ]
    for row, text in enumerate(lines, start=1):
        rendered = font.render(text, True, constants.TEXT_COLOR)
        rendered.set_alpha(constants.TEXT_ALPHA)
        # Offsets mirror a baseline-anchored layout: one padding per row.
        screen.blit(rendered, (constants.TEXT_PADDING, constants.TEXT_PADDING * row - rendered.get_height()))
