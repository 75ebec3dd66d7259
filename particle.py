# particle.py

import math
import pygame
import numpy as np
import constants


def limit(vector: np.ndarray, max_magnitude: float) -> np.ndarray:
    """Scales `vector` in place so its length does not exceed `max_magnitude`."""
    magnitude = np.hypot(vector[0], vector[1])
    if magnitude > max_magnitude:
        vector *= max_magnitude / magnitude
    return vector


def rotate(vector: np.ndarray, angle: float) -> np.ndarray:
    """Returns a copy of `vector` rotated by `angle` radians."""
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    return np.array([
        vector[0] * cos_a - vector[1] * sin_a,
        vector[0] * sin_a + vector[1] * cos_a,
    ], dtype=float)


def default_color(particle: "Particle") -> tuple:
    """Translucent white, faded by the particle's remaining lifetime."""
    return (*constants.WHITE, particle.lifetime)


def fire_color(particle: "Particle") -> tuple:
    """
    Maps a particle's age onto the fire ramp.

    Age runs from 0 (just born) to 1 (about to die). The hue is picked from
    the keyframe table in constants, white for the youngest particles down to
    smoke for the oldest. The alpha channel is the raw lifetime, so the
    particle fades out independently of its hue.

    - Inputs: particle (Particle)
    - Outputs: (R, G, B, A) tuple. A is not clamped.
    """
    age = 1 - particle.lifetime / constants.INITIAL_LIFETIME

    rgb = constants.FIRE_RAMP_FALLBACK
    for upper_bound, stop_color in constants.FIRE_RAMP_KEYFRAMES:
        if age < upper_bound:
            rgb = stop_color
            break

    return (*rgb, particle.lifetime)


class Particle:
    """
    A single point of a particle emitter.

    Motion is integrated in two stages. Forces accumulate into
    `pending_acceleration` for one tick only; they are folded into
    `integrated_motion`, which persists across ticks, is clamped to
    MAX_ACCELERATION and is what actually moves the particle.

    Data Contract:
    - Inputs:
        - location (array-like): Spawn position. Copied, never aliased.
        - rng (np.random.Generator): Source of the turbulence jitter.
        - turbulence, fading, diameter, rising_speed (float): Motion and look.
        - color_function (callable | None): Maps the particle to an RGBA tuple.
        - base_acceleration (array-like | None): Initial integrated motion.
    - Invariants: `lifetime` never increases. `dead` is only set by update()
      and a dead particle is never updated again.
    """
    def __init__(self, location, rng: np.random.Generator, turbulence: float = 0.0,
                 fading: float = constants.DEFAULT_FADING, diameter: float = constants.DEFAULT_DIAMETER,
                 rising_speed: float = 0.0, color_function=None, base_acceleration=None):
        self.rng = rng
        self.position = np.array(location, dtype=float)
        self.turbulence = turbulence
        self.fade_rate = fading
        self.diameter = diameter
        self.rising_speed = rising_speed
        self.color_function = color_function

        if base_acceleration is None:
            self.integrated_motion = np.zeros(2, dtype=float)
        else:
            self.integrated_motion = np.array(base_acceleration, dtype=float)
        self.pending_acceleration = np.zeros(2, dtype=float)

        self.lifetime = constants.INITIAL_LIFETIME
        self.dead = False

    def apply_force(self, x: float, y: float):
        self.pending_acceleration += (x, y)

    def update(self):
        """
        Advances the particle by one tick.
        Jitter is biased upwards by rising_speed (screen y grows downwards).
        """
        if self.dead:
            return

        self.apply_force(
            self.rng.uniform(-self.turbulence, self.turbulence),
            self.rng.uniform(-self.turbulence - self.rising_speed, self.turbulence),
        )

        self.integrated_motion += self.pending_acceleration
        limit(self.integrated_motion, constants.MAX_ACCELERATION)
        self.pending_acceleration.fill(0.0)
        self.position += self.integrated_motion

        self.lifetime -= self.fade_rate
        if self.lifetime <= 0:
            self.dead = True

    @property
    def color(self):
        if self.color_function is not None:
            return self.color_function(self)
        return default_color(self)

    def draw(self, surface: pygame.Surface):
        """
        Draws the particle as a filled, outline-free circle.
        The RGBA color is written into `surface` unblended. Draw onto an
        SRCALPHA layer and blit the layer to fade particles over a background.
        """
        r, g, b, a = self.color
        alpha = int(min(max(a, 0), 255))

        pygame.draw.circle(
            surface,
            (int(r), int(g), int(b), alpha),
            (float(self.position[0]), float(self.position[1])),
            self.diameter / 2
        )

    def __repr__(self):
        return (f"Particle(pos=({self.position[0]:.2f}, {self.position[1]:.2f}), "
                f"lifetime={self.lifetime:.1f}, dead={self.dead})")
