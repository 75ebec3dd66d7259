# particle_system.py

import enum
import logging
from dataclasses import dataclass
from typing import Callable
import numpy as np
import pygame
import constants
from logger_setup import LOGGER_NAME
from particle import Particle, fire_color, rotate

logger = logging.getLogger(LOGGER_NAME)


class DeathMode(enum.Enum):
    """What an emitter does with a particle once it has died."""
    REPLACE = "replace"
    REMOVE = "remove"


@dataclass(frozen=True)
class SpawnPolicy:
    """
    Decides how an emitter spawns particles and handles their death.

    - spawn: builds one particle at the given location using the given rng.
    - death_mode: REPLACE keeps the emitter at full capacity forever,
      REMOVE lets it drain and eventually report itself as done.
    """
    name: str
    spawn: Callable[[np.ndarray, np.random.Generator], Particle]
    death_mode: DeathMode


# --- Spawn functions ---

def spawn_fire_particle(location: np.ndarray, rng: np.random.Generator) -> Particle:
    return Particle(
        location,
        rng,
        turbulence=rng.uniform(*constants.FIRE_TURBULENCE),
        fading=rng.uniform(*constants.FIRE_FADING),
        diameter=rng.uniform(*constants.FIRE_DIAMETER),
        rising_speed=constants.FIRE_RISING_SPEED,
        color_function=fire_color,
    )


def spawn_explosion_particle(location: np.ndarray, rng: np.random.Generator) -> Particle:
    # Radial scatter: a downward push of random strength, turned to a random heading.
    push = np.array([0.0, rng.uniform(*constants.EXPLOSION_FORCE)])
    return Particle(
        location,
        rng,
        turbulence=rng.uniform(*constants.EXPLOSION_TURBULENCE),
        fading=rng.uniform(*constants.EXPLOSION_FADING),
        diameter=rng.uniform(*constants.EXPLOSION_DIAMETER),
        color_function=fire_color,
        base_acceleration=rotate(push, rng.uniform(*constants.EXPLOSION_ANGLE)),
    )


FIRE_POLICY = SpawnPolicy("fire", spawn_fire_particle, DeathMode.REPLACE)
EXPLOSION_POLICY = SpawnPolicy("explosion", spawn_explosion_particle, DeathMode.REMOVE)


class ParticleSystem:
    """
    A fixed-capacity collection of particles anchored at a location.

    Data Contract:
    - Inputs:
        - location (array-like | None): Spawn anchor. Copied. Defaults to the
          center of the screen.
        - policy (SpawnPolicy): Spawn parameters and death handling.
        - rng (np.random.Generator): The master seeded random number generator.
        - max_particles (int): Capacity, filled eagerly at construction.
    - Outputs: None. This class modifies its internal state.
    - Invariants:
        - REPLACE systems always hold exactly max_particles particles and
          never become done.
        - REMOVE systems only ever shrink, and are done as soon as they
          are empty (immediately, for a capacity of zero).
    """
    def __init__(self, location, policy: SpawnPolicy, rng: np.random.Generator,
                 max_particles: int = constants.FIRE_PARTICLES):
        if max_particles < 0:
            raise ValueError(f"max_particles must be non-negative, got {max_particles}")

        if location is None:
            location = (constants.WIDTH / 2, constants.HEIGHT / 2)
        self.location = np.array(location, dtype=float)
        self.policy = policy
        self.rng = rng
        self.max_particles = max_particles
        self.done = False

        self.particles = [self.create_particle() for _ in range(max_particles)]
        self._check_done()

        logger.debug(f"{policy.name} system created at {self.location} with {max_particles} particles.")

    def create_particle(self) -> Particle:
        return self.policy.spawn(self.location, self.rng)

    def relocate(self, new_location):
        """Moves the spawn anchor. Particles already alive keep their positions."""
        self.location = np.array(new_location, dtype=float)

    def update(self):
        """
        Ages every particle by one tick and applies the death policy.

        Particles are visited from the highest index down, so that removing
        or replacing the particle at index i never shifts a particle that is
        still waiting to be visited.
        """
        replace = self.policy.death_mode is DeathMode.REPLACE

        for i in range(len(self.particles) - 1, -1, -1):
            particle = self.particles[i]
            particle.update()

            if particle.dead:
                if replace:
                    self.particles[i] = self.create_particle()
                else:
                    del self.particles[i]

        self._check_done()

    def _check_done(self):
        if self.done or self.policy.death_mode is DeathMode.REPLACE:
            return
        if not self.particles:
            self.done = True
            logger.debug(f"{self.policy.name} system at {self.location} is done.")

    def draw(self, screen: pygame.Surface):
        for particle in self.particles:
            particle.draw(screen)


def make_fire(location, rng: np.random.Generator, max_particles: int = constants.FIRE_PARTICLES) -> ParticleSystem:
    """A perpetual emitter that respawns each particle the moment it dies."""
    return ParticleSystem(location, FIRE_POLICY, rng, max_particles)


def make_explosion(location, rng: np.random.Generator,
                   max_particles: int = constants.EXPLOSION_PARTICLES) -> ParticleSystem:
    """A one-shot burst that drains and reports done once every particle has died."""
    return ParticleSystem(location, EXPLOSION_POLICY, rng, max_particles)
