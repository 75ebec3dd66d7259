"""
Tests for emitters: fire (continuous) and explosion (burst)
"""

import dataclasses
import math
import numpy as np
import pytest
import constants
from particle import fire_color
from particle_system import (
    DeathMode, EXPLOSION_POLICY, FIRE_POLICY, ParticleSystem, make_explosion, make_fire,
)

# Slowest fade is 4 per tick, so no explosion particle outlives this.
MAX_EXPLOSION_TICKS = math.ceil(constants.INITIAL_LIFETIME / constants.EXPLOSION_FADING[0])


def test_fire_fills_to_capacity(rng):
    fire = make_fire((10, 20), rng, 30)
    assert len(fire.particles) == 30
    assert fire.done is False
    assert fire.policy is FIRE_POLICY


def test_fire_particle_parameters(rng):
    """Test fire particles are drawn from the fire ranges."""
    fire = make_fire((10, 20), rng, 200)
    for p in fire.particles:
        assert constants.FIRE_TURBULENCE[0] <= p.turbulence <= constants.FIRE_TURBULENCE[1]
        assert constants.FIRE_FADING[0] <= p.fade_rate <= constants.FIRE_FADING[1]
        assert constants.FIRE_DIAMETER[0] <= p.diameter <= constants.FIRE_DIAMETER[1]
        assert p.rising_speed == constants.FIRE_RISING_SPEED
        assert p.color_function is fire_color
        np.testing.assert_array_equal(p.position, [10.0, 20.0])


def test_explosion_particle_parameters(rng):
    """Test explosion particles scatter radially with the explosion ranges."""
    explosion = make_explosion((0, 0), rng, 200)
    headings = []
    for p in explosion.particles:
        assert constants.EXPLOSION_TURBULENCE[0] <= p.turbulence <= constants.EXPLOSION_TURBULENCE[1]
        assert constants.EXPLOSION_FADING[0] <= p.fade_rate <= constants.EXPLOSION_FADING[1]
        assert constants.EXPLOSION_DIAMETER[0] <= p.diameter <= constants.EXPLOSION_DIAMETER[1]
        assert p.rising_speed == 0
        assert p.color_function is fire_color
        force = np.linalg.norm(p.integrated_motion)
        assert constants.EXPLOSION_FORCE[0] - 1e-9 <= force <= constants.EXPLOSION_FORCE[1] + 1e-9
        headings.append(math.atan2(p.integrated_motion[1], p.integrated_motion[0]))

    # Every quadrant gets some particles.
    quadrants = {int((h + math.pi) // (math.pi / 2)) % 4 for h in headings}
    assert quadrants == {0, 1, 2, 3}


def test_particles_do_not_share_vectors(rng):
    explosion = make_explosion((0, 0), rng, 5)
    first, second = explosion.particles[0], explosion.particles[1]
    assert first.position is not second.position
    assert first.position is not explosion.location
    first.position += 10
    np.testing.assert_array_equal(second.position, [0.0, 0.0])


def test_default_location_is_screen_center(rng):
    system = ParticleSystem(None, FIRE_POLICY, rng, 1)
    np.testing.assert_array_equal(system.location, [constants.WIDTH / 2, constants.HEIGHT / 2])


def test_negative_capacity_rejected(rng):
    with pytest.raises(ValueError):
        make_explosion((0, 0), rng, -1)


def test_fire_size_invariant(rng):
    """Test a fire always holds exactly its capacity and never finishes."""
    fire = make_fire((100, 300), rng, 25)
    originals = list(fire.particles)

    for _ in range(200):
        fire.update()
        assert len(fire.particles) == 25
        assert fire.done is False
        assert not any(p.dead for p in fire.particles)

    # Slowest fire particle dies within 255 / 3 ticks, so all have been replaced.
    assert all(p.dead for p in originals)
    assert not any(p is q for p in originals for q in fire.particles)


def test_fire_replaces_at_current_location(rng):
    fire = make_fire((0, 0), rng, 10)
    fire.relocate((500, 400))
    fresh = fire.create_particle()
    np.testing.assert_array_equal(fresh.position, [500.0, 400.0])


def test_empty_fire_stays_empty_and_running(rng):
    fire = make_fire((0, 0), rng, 0)
    for _ in range(5):
        fire.update()
    assert fire.particles == []
    assert fire.done is False


def test_empty_explosion_is_done_immediately(rng):
    explosion = make_explosion((0, 0), rng, 0)
    assert explosion.done is True
    explosion.update()
    assert explosion.done is True


def test_explosion_terminates(rng):
    """Test a burst drains monotonically and finishes within the worst case."""
    explosion = make_explosion((0, 0), rng, 20)
    previous = len(explosion.particles)

    for _ in range(MAX_EXPLOSION_TICKS):
        explosion.update()
        assert len(explosion.particles) <= previous
        previous = len(explosion.particles)

    assert explosion.done is True
    assert explosion.particles == []


def test_explosion_end_to_end(rng):
    """Test done flips exactly when the last of 50 particles has died, never before."""
    explosion = make_explosion((100, 100), rng, 50)
    originals = list(explosion.particles)
    assert explosion.policy.death_mode is DeathMode.REMOVE

    previous = len(explosion.particles)
    ticks = 0
    while not explosion.done:
        explosion.update()
        ticks += 1

        assert len(explosion.particles) <= previous
        previous = len(explosion.particles)

        all_dead = all(p.lifetime <= 0 for p in originals)
        assert explosion.done == all_dead
        assert len(explosion.particles) == sum(1 for p in originals if not p.dead)
        assert ticks <= MAX_EXPLOSION_TICKS

    assert explosion.particles == []


def test_relocate_copies_location(rng):
    """Test mutating the caller's vector after relocate does not move the emitter."""
    fire = make_fire((0, 0), rng, 3)
    target = np.array([42.0, 24.0])
    fire.relocate(target)
    target[:] = (-1.0, -1.0)
    np.testing.assert_array_equal(fire.location, [42.0, 24.0])


def test_construct_copies_location(rng):
    origin = np.array([7.0, 8.0])
    explosion = make_explosion(origin, rng, 3)
    origin[0] = 0.0
    np.testing.assert_array_equal(explosion.location, [7.0, 8.0])


def test_relocate_leaves_live_particles(rng):
    fire = make_fire((0, 0), rng, 5)
    positions = [p.position.copy() for p in fire.particles]
    fire.relocate((300, 300))
    for p, before in zip(fire.particles, positions):
        np.testing.assert_array_equal(p.position, before)


def test_draw_renders_particles(rng, screen):
    screen.fill(constants.BACKGROUND)
    fire = make_fire((100, 100), rng, 10)
    fire.draw(screen)
    assert tuple(screen.get_at((100, 100)))[:3] != constants.BACKGROUND


def test_policies_are_distinct():
    assert FIRE_POLICY.death_mode is DeathMode.REPLACE
    assert EXPLOSION_POLICY.death_mode is DeathMode.REMOVE
    with pytest.raises(dataclasses.FrozenInstanceError):
        FIRE_POLICY.death_mode = DeathMode.REMOVE
