# constants.py

"""
Application Constants

This module defines static configuration values for the application's framework.
These are not expected to change between simulation runs.

Data Contract:
- All values are immutable constants.
- Units are specified in comments where applicable.
"""

import math

# Screen dimensions
WIDTH = 1280  # Pixels
HEIGHT = 720  # Pixels

# Framerate
FPS = 60  # Frames per second

# Colors (RGB)
BACKGROUND = (17, 17, 17)  # #111
WHITE = (255, 255, 255)
YELLOW = (255, 216, 0)     # #ffd800
ORANGE = (255, 116, 14)    # #ff740e
RED = (217, 14, 14)        # #d90e0e
SMOKE = (51, 51, 51)       # #333

# Window Title
TITLE = "Fire Particles"

# Fire color ramp.
# Each keyframe is a tuple: (age_upper_bound, (R, G, B) color), sorted ascending.
# A particle whose age is past the last bound is drawn as smoke.
FIRE_RAMP_KEYFRAMES = [
    (0.1, WHITE),
    (0.2, YELLOW),
    (0.3, ORANGE),
    (0.5, RED),
]
FIRE_RAMP_FALLBACK = SMOKE

# Particle physics
INITIAL_LIFETIME = 255.0  # Doubles as the alpha channel of the particle.
MAX_ACCELERATION = 3.0    # Pixels per tick.
DEFAULT_DIAMETER = 16.0   # Pixels
DEFAULT_FADING = 1.0      # Lifetime lost per tick.

# Fire spawn parameters. Ranges are (low, high) for uniform draws.
FIRE_TURBULENCE = (0.2, 0.5)
FIRE_FADING = (3.0, 6.0)
FIRE_DIAMETER = (10.0, 15.0)
FIRE_RISING_SPEED = 1.0
FIRE_PARTICLES = 100

# Explosion spawn parameters.
EXPLOSION_TURBULENCE = (0.6, 1.0)
EXPLOSION_FADING = (4.0, 9.0)
EXPLOSION_DIAMETER = (10.0, 15.0)
EXPLOSION_FORCE = (10.0, 15.0)
EXPLOSION_ANGLE = (0.0, 2 * math.pi)  # Radians
EXPLOSION_PARTICLES = 50

# Initial fire placement, measured up from the bottom edge.
FIRE_BOTTOM_OFFSET = 50  # Pixels

# Mouse buttons as reported by pygame.
PRIMARY_BUTTON = 1
MIDDLE_BUTTON = 2

# Diagnostics overlay
TEXT_PADDING = 20  # Pixels between text lines and the border
TEXT_COLOR = (240, 240, 240)
TEXT_ALPHA = 200
FONT_NAME = "monospace"
FONT_SIZE = 16
