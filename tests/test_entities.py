"""
Tests for the game entities.

These tests verify:
    - Screen wrapping (with and without margin)
    - Ship steering, thrust and frame-rate independent drag
    - Asteroid construction randomness, outlines and splitting
    - Projectile and particle lifetimes
"""

import math

import pytest
import numpy as np
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import Config
from src.game.controls import AimMode, InputState
from src.game.entities import Ship, Asteroid, Projectile, Particle, wrap


def keyboard(**intents) -> InputState:
    """Keyboard-aim input with the given intents held."""
    return InputState(aim_mode=AimMode.KEYBOARD, **intents)


@pytest.fixture
def ship(config):
    return Ship(config.SCREEN_WIDTH / 2, config.SCREEN_HEIGHT / 2, config)


class TestWrap:
    """Test the coordinate wrapping helper."""

    @pytest.mark.parametrize("value", [-1000.5, -0.001, 0.0, 400.0, 799.999, 800.0, 1650.0])
    def test_wrap_stays_in_bounds(self, value):
        """Any coordinate wraps into [0, limit)."""
        wrapped = wrap(value, 800)
        assert 0 <= wrapped < 800

    def test_wrap_preserves_overshoot(self):
        """Leaving one edge re-enters the same distance past the other."""
        assert wrap(805.0, 800) == pytest.approx(5.0)
        assert wrap(-5.0, 800) == pytest.approx(795.0)

    def test_wrap_tiny_negative(self):
        """Float rounding never produces the upper bound."""
        assert wrap(-1e-20, 800) < 800

    @pytest.mark.parametrize("value", [-200.0, -60.0, 0.0, 859.9, 860.0, 1000.0])
    def test_wrap_with_margin(self, value):
        """With a margin the bounds grow by the margin on each side."""
        wrapped = wrap(value, 800, 60)
        assert -60 <= wrapped < 860


class TestShip:
    """Test ship steering and physics."""

    def test_reset_state(self, ship):
        """Reset puts the ship stationary and facing up."""
        ship.vx, ship.vy, ship.angle = 10, 20, 1.0
        ship.reset(100, 200)
        assert (ship.x, ship.y) == (100, 200)
        assert (ship.vx, ship.vy) == (0.0, 0.0)
        assert ship.angle == pytest.approx(-math.pi / 2)

    def test_rotate_left(self, ship, config):
        """Left input turns counter-clockwise at rotation speed."""
        initial = ship.angle
        ship.update(0.1, keyboard(rotate_left=True), config.SCREEN_WIDTH, config.SCREEN_HEIGHT)
        assert ship.angle == pytest.approx(initial - config.SHIP_ROTATION_SPEED * 0.1)

    def test_rotate_right(self, ship, config):
        """Right input turns clockwise at rotation speed."""
        initial = ship.angle
        ship.update(0.1, keyboard(rotate_right=True), config.SCREEN_WIDTH, config.SCREEN_HEIGHT)
        assert ship.angle == pytest.approx(initial + config.SHIP_ROTATION_SPEED * 0.1)

    def test_rotation_ignored_in_pointer_mode(self, ship, config):
        """Pointer aim overrides rotate keys."""
        controls = InputState(rotate_left=True, pointer=(ship.x + 100, ship.y),
                              aim_mode=AimMode.POINTER)
        ship.update(0.1, controls, config.SCREEN_WIDTH, config.SCREEN_HEIGHT)
        assert ship.angle == pytest.approx(0.0)

    def test_pointer_aim_faces_cursor(self, ship, config):
        """Ship faces the pointer bearing."""
        controls = InputState(pointer=(ship.x, ship.y + 50), aim_mode=AimMode.POINTER)
        ship.update(0.01, controls, config.SCREEN_WIDTH, config.SCREEN_HEIGHT)
        assert ship.angle == pytest.approx(math.pi / 2)

    def test_thrust_accelerates_along_facing(self, ship, config):
        """Thrust adds velocity in the facing direction (up by default)."""
        ship.update(0.1, keyboard(thrust=True), config.SCREEN_WIDTH, config.SCREEN_HEIGHT)
        assert ship.thrusting is True
        assert ship.vy < 0
        assert abs(ship.vx) < 1e-9

    def test_thrusting_flag_follows_input(self, ship, config):
        """Thrust flag is re-derived every frame."""
        ship.update(0.1, keyboard(thrust=True), config.SCREEN_WIDTH, config.SCREEN_HEIGHT)
        ship.update(0.1, keyboard(), config.SCREEN_WIDTH, config.SCREEN_HEIGHT)
        assert ship.thrusting is False

    def test_drag_slows_ship(self, ship, config):
        """Velocity decays without thrust."""
        ship.vx = 100.0
        ship.update(1 / 60, keyboard(), config.SCREEN_WIDTH, config.SCREEN_HEIGHT)
        assert ship.vx == pytest.approx(100.0 * config.SHIP_FRICTION)

    @pytest.mark.parametrize("dt", [1 / 30, 1 / 60, 1 / 144, 0.25])
    def test_drag_is_frame_rate_invariant(self, config, dt):
        """One step of dt matches two steps of dt/2 for velocity."""
        one = Ship(400, 300, config)
        two = Ship(400, 300, config)
        for s in (one, two):
            s.vx, s.vy = 120.0, -80.0

        one.update(dt, keyboard(), config.SCREEN_WIDTH, config.SCREEN_HEIGHT)
        two.update(dt / 2, keyboard(), config.SCREEN_WIDTH, config.SCREEN_HEIGHT)
        two.update(dt / 2, keyboard(), config.SCREEN_WIDTH, config.SCREEN_HEIGHT)

        assert one.vx == pytest.approx(two.vx, rel=1e-12)
        assert one.vy == pytest.approx(two.vy, rel=1e-12)

    def test_ship_wraps_right_edge(self, ship, config):
        """Ship crossing the right edge reappears on the left."""
        ship.x = config.SCREEN_WIDTH - 1
        ship.vx = 600.0
        ship.update(0.1, keyboard(), config.SCREEN_WIDTH, config.SCREEN_HEIGHT)
        assert 0 <= ship.x < config.SCREEN_WIDTH
        assert ship.x < 100

    def test_ship_wraps_top_edge(self, ship, config):
        """Ship crossing the top edge reappears at the bottom."""
        ship.y = 1
        ship.vy = -600.0
        ship.update(0.1, keyboard(), config.SCREEN_WIDTH, config.SCREEN_HEIGHT)
        assert 0 <= ship.y < config.SCREEN_HEIGHT
        assert ship.y > config.SCREEN_HEIGHT - 100

    def test_nose_is_one_radius_ahead(self, ship):
        """Bullets leave from the nose."""
        nose_x, nose_y = ship.nose()
        assert nose_x == pytest.approx(ship.x)
        assert nose_y == pytest.approx(ship.y - ship.radius)

    def test_vertices_rotate_with_ship(self, ship):
        """First vertex is the nose."""
        verts = ship.get_vertices()
        assert len(verts) == 4
        assert verts[0] == pytest.approx(ship.nose())


class TestAsteroid:
    """Test asteroid construction, movement and splitting."""

    def test_speed_in_range(self, config):
        """Speed is between 50 and 100 px/s."""
        for _ in range(50):
            a = Asteroid(0, 0, 60, config)
            speed = math.hypot(a.vx, a.vy)
            assert config.ASTEROID_MIN_SPEED - 1e-9 <= speed <= config.ASTEROID_MAX_SPEED + 1e-9

    def test_spin_in_range(self, config):
        """Spin is between -1 and 1 rad/s."""
        for _ in range(50):
            a = Asteroid(0, 0, 60, config)
            assert -1.0 <= a.rotation_speed <= 1.0

    def test_outline_vertex_count(self, config):
        """Outline has 8 to 12 vertices and both ends of the range occur."""
        counts = {len(Asteroid(0, 0, 60, config).vertices) for _ in range(300)}
        assert counts <= set(range(8, 13))
        assert 8 in counts and 12 in counts

    def test_outline_vertex_radius(self, config):
        """Every vertex lies between 70% and 100% of the radius."""
        a = Asteroid(0, 0, 60, config)
        for vx, vy in a.vertices:
            r = math.hypot(vx, vy)
            assert 0.7 * 60 - 1e-9 <= r <= 60 + 1e-9

    def test_outline_evenly_spaced(self, config):
        """Vertex angles are evenly spaced so the outline never self-intersects."""
        a = Asteroid(0, 0, 60, config)
        n = len(a.vertices)
        for i, (vx, vy) in enumerate(a.vertices):
            expected = (i / n) * 2 * math.pi
            angle = math.atan2(vy, vx) % (2 * math.pi)
            assert angle == pytest.approx(expected % (2 * math.pi), abs=1e-9)

    def test_outline_is_immutable(self, config):
        """Outline is a tuple fixed at construction."""
        a = Asteroid(0, 0, 60, config)
        assert isinstance(a.vertices, tuple)
        before = a.vertices
        a.update(0.5, config.SCREEN_WIDTH, config.SCREEN_HEIGHT)
        assert a.vertices == before

    def test_update_moves_and_spins(self, config):
        """Position and angle integrate by dt."""
        a = Asteroid(400, 300, 60, config)
        a.vx, a.vy, a.rotation_speed = 50.0, -20.0, 0.5
        angle = a.angle
        a.update(0.1, config.SCREEN_WIDTH, config.SCREEN_HEIGHT)
        assert a.x == pytest.approx(405.0)
        assert a.y == pytest.approx(298.0)
        assert a.angle == pytest.approx(angle + 0.05)

    def test_wrap_uses_radius_margin(self, config):
        """An asteroid leaving past its radius reappears fully off-screen opposite."""
        a = Asteroid(config.SCREEN_WIDTH + 59.9, 300, 60, config)
        a.vx, a.vy = 50.0, 0.0
        a.update(0.1, config.SCREEN_WIDTH, config.SCREEN_HEIGHT)
        assert a.x == pytest.approx(-60 + 4.9)

    def test_asteroid_can_sit_off_screen(self, config):
        """Within the margin the asteroid is not wrapped."""
        a = Asteroid(-30, 300, 60, config)
        a.vx, a.vy = 0.0, 0.0
        a.update(0.1, config.SCREEN_WIDTH, config.SCREEN_HEIGHT)
        assert a.x == pytest.approx(-30)

    @pytest.mark.parametrize("radius,children", [(60, 30), (30, 15)])
    def test_split_large(self, config, radius, children):
        """Radius above 20 splits into two half-size children at the same spot."""
        a = Asteroid(123, 456, radius, config)
        pieces = a.split(config.SPLIT_THRESHOLD, config)
        assert len(pieces) == 2
        for piece in pieces:
            assert piece.radius == children
            assert (piece.x, piece.y) == (123, 456)

    def test_split_children_are_independent(self, config):
        """Children get their own random velocity and spin."""
        a = Asteroid(100, 100, 60, config)
        first, second = a.split(config.SPLIT_THRESHOLD, config)
        assert (first.vx, first.vy) != (second.vx, second.vy)
        assert first.rotation_speed != second.rotation_speed

    @pytest.mark.parametrize("radius", [20, 15, 7.5])
    def test_split_small(self, config, radius):
        """Radius at or below 20 yields no children."""
        a = Asteroid(100, 100, radius, config)
        assert a.split(config.SPLIT_THRESHOLD, config) == []


class TestProjectile:
    """Test projectile flight and expiry."""

    def test_velocity_locked_to_angle(self, config):
        """Speed is fixed along the firing angle."""
        p = Projectile(100, 100, math.pi / 2, config)
        assert p.vx == pytest.approx(0.0, abs=1e-9)
        assert p.vy == pytest.approx(config.PROJECTILE_SPEED)

    def test_expires_after_lifespan(self, config):
        """Projectile expires once age reaches one second."""
        p = Projectile(100, 100, 0.0, config)
        p.update(0.5, config.SCREEN_WIDTH, config.SCREEN_HEIGHT)
        assert not p.is_expired()
        p.update(0.5, config.SCREEN_WIDTH, config.SCREEN_HEIGHT)
        assert p.is_expired()

    def test_projectile_wraps(self, config):
        """Projectiles wrap like the ship."""
        p = Projectile(config.SCREEN_WIDTH - 5, 100, 0.0, config)
        p.update(0.1, config.SCREEN_WIDTH, config.SCREEN_HEIGHT)
        assert 0 <= p.x < config.SCREEN_WIDTH
        assert p.x == pytest.approx(45.0)


class TestParticle:
    """Test particle debris."""

    def test_random_ranges(self, config):
        """Speed, radius and lifespan fall in their configured ranges."""
        for _ in range(100):
            p = Particle(0, 0, (255, 255, 255), config)
            speed = math.hypot(p.vx, p.vy)
            assert 50 - 1e-9 <= speed <= 200 + 1e-9
            assert 1 <= p.radius <= 3
            assert 0.5 <= p.lifespan <= 1.0

    def test_no_wrapping(self, config):
        """Particles may leave the screen."""
        p = Particle(config.SCREEN_WIDTH - 1, 300, (255, 255, 255), config)
        p.vx, p.vy = 200.0, 0.0
        p.update(0.1)
        assert p.x > config.SCREEN_WIDTH

    def test_alpha_fades_linearly(self, config):
        """Alpha is 1 at birth, 0.5 at half life, 0 at the end."""
        p = Particle(0, 0, (255, 255, 255), config)
        assert p.alpha == pytest.approx(1.0)
        p.age = p.lifespan / 2
        assert p.alpha == pytest.approx(0.5)
        p.age = p.lifespan
        assert p.alpha == pytest.approx(0.0)

    def test_expiry(self, config):
        """Particle expires at its own lifespan."""
        p = Particle(0, 0, (255, 255, 255), config)
        p.update(p.lifespan * 0.9)
        assert not p.is_expired()
        p.update(p.lifespan * 0.2)
        assert p.is_expired()
