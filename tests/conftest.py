"""
Shared fixtures. pygame runs headless during tests.
"""

import os
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pygame
import pytest


@pytest.fixture(scope="session", autouse=True)
def pygame_session():
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def rng():
    """Seeded generator so every test run draws the same particles."""
    return np.random.default_rng(1234)


@pytest.fixture
def screen():
    return pygame.Surface((200, 200))
