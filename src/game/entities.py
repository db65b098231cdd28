"""
Game Entities
=============

The four kinds of objects that live in an Asteroids session:

    Ship       - The player's spaceship (one per session, reset on respawn)
    Asteroid   - Drifting rock with an irregular polygon outline
    Projectile - Bullet fired from the ship's nose
    Particle   - Cosmetic explosion debris

Every entity moves in pixels per second and is advanced by update(dt) with
dt in seconds. No entity references another entity; interactions are
resolved by src.game.collisions.
"""

import math
from typing import Tuple, List, Optional

import numpy as np

from config import Config
from .controls import InputState, AimMode


def wrap(value: float, limit: float, margin: float = 0.0) -> float:
    """
    Wrap a coordinate into [-margin, limit + margin).

    Overshoot is preserved, so an entity leaving one edge reappears the same
    distance inside the opposite edge.
    """
    span = limit + 2 * margin
    wrapped = (value + margin) % span - margin
    # Float modulo of a tiny negative number can round up to the span itself
    if wrapped >= limit + margin:
        wrapped = -margin
    return wrapped


class Ship:
    """The player's spaceship."""

    def __init__(self, x: float, y: float, config: Optional[Config] = None):
        cfg = config or Config()
        self.radius = cfg.SHIP_RADIUS

        # Movement constants
        self.rotation_speed = cfg.SHIP_ROTATION_SPEED
        self.thrust_power = cfg.SHIP_THRUST_POWER
        self.friction = cfg.SHIP_FRICTION

        self.thrusting = False
        self.reset(x, y)

    def reset(self, x: float, y: float) -> None:
        """Place the ship at (x, y), stationary and pointing up."""
        self.x = x
        self.y = y
        self.vx = 0.0
        self.vy = 0.0
        self.angle = -math.pi / 2
        self.thrusting = False

    def update(self, dt: float, controls: InputState, width: int, height: int) -> None:
        """Steer, thrust, apply drag and move the ship."""
        if controls.aim_mode is AimMode.POINTER:
            px, py = controls.pointer
            self.angle = math.atan2(py - self.y, px - self.x)
        else:
            if controls.rotate_left:
                self.angle -= self.rotation_speed * dt
            if controls.rotate_right:
                self.angle += self.rotation_speed * dt

        self.thrusting = controls.thrust
        if self.thrusting:
            self.vx += math.cos(self.angle) * self.thrust_power * dt
            self.vy += math.sin(self.angle) * self.thrust_power * dt

        # Friction is tuned per frame at 60fps
        drag = self.friction ** (dt * 60)
        self.vx *= drag
        self.vy *= drag

        self.x = wrap(self.x + self.vx * dt, width)
        self.y = wrap(self.y + self.vy * dt, height)

    def nose(self) -> Tuple[float, float]:
        """Gun position: one radius ahead of the centre along the facing."""
        return (
            self.x + math.cos(self.angle) * self.radius,
            self.y + math.sin(self.angle) * self.radius,
        )

    def get_vertices(self) -> List[Tuple[float, float]]:
        """Get the vertices of the ship outline in world coordinates."""
        cos_a = math.cos(self.angle)
        sin_a = math.sin(self.angle)
        size = self.radius

        # Arrowhead pointing along +x before rotation
        points = [
            (size, 0),                    # Nose
            (-size * 0.7, -size * 0.6),   # Left wing
            (-size * 0.4, 0),             # Rear notch
            (-size * 0.7, size * 0.6),    # Right wing
        ]

        return [
            (px * cos_a - py * sin_a + self.x, px * sin_a + py * cos_a + self.y)
            for px, py in points
        ]


class Asteroid:
    """An asteroid that can be destroyed (and split if large enough)."""

    def __init__(self, x: float, y: float, radius: float, config: Optional[Config] = None):
        cfg = config or Config()
        self.x = x
        self.y = y
        self.radius = radius

        heading = np.random.uniform(0, 2 * np.pi)
        speed = np.random.uniform(cfg.ASTEROID_MIN_SPEED, cfg.ASTEROID_MAX_SPEED)
        self.vx = math.cos(heading) * speed
        self.vy = math.sin(heading) * speed

        self.angle = np.random.uniform(0, 2 * np.pi)
        self.rotation_speed = np.random.uniform(-cfg.ASTEROID_MAX_SPIN, cfg.ASTEROID_MAX_SPIN)

        self.vertices = self._generate_shape(cfg)

    def _generate_shape(self, cfg: Config) -> Tuple[Tuple[float, float], ...]:
        """Generate an irregular star-shaped polygon around the centre."""
        num_vertices = np.random.randint(cfg.ASTEROID_MIN_VERTICES, cfg.ASTEROID_MAX_VERTICES + 1)
        vertices = []

        for i in range(num_vertices):
            angle = (i / num_vertices) * 2 * np.pi
            r = self.radius * np.random.uniform(cfg.ASTEROID_MIN_VERTEX_SCALE, 1.0)
            vertices.append((math.cos(angle) * r, math.sin(angle) * r))

        return tuple(vertices)

    def update(self, dt: float, width: int, height: int) -> None:
        """Drift, spin and wrap with a margin of one radius."""
        self.angle += self.rotation_speed * dt
        self.x = wrap(self.x + self.vx * dt, width, self.radius)
        self.y = wrap(self.y + self.vy * dt, height, self.radius)

    def get_world_vertices(self) -> List[Tuple[float, float]]:
        """Get vertices in world coordinates."""
        cos_a = math.cos(self.angle)
        sin_a = math.sin(self.angle)

        return [
            (vx * cos_a - vy * sin_a + self.x, vx * sin_a + vy * cos_a + self.y)
            for vx, vy in self.vertices
        ]

    def split(self, threshold: float, config: Optional[Config] = None) -> List['Asteroid']:
        """Two half-size children at this position, or none at or below threshold."""
        if self.radius <= threshold:
            return []
        child_radius = self.radius / 2
        return [Asteroid(self.x, self.y, child_radius, config) for _ in range(2)]


class Projectile:
    """A bullet fired by the ship."""

    def __init__(self, x: float, y: float, angle: float, config: Optional[Config] = None):
        cfg = config or Config()
        self.x = x
        self.y = y
        self.vx = math.cos(angle) * cfg.PROJECTILE_SPEED
        self.vy = math.sin(angle) * cfg.PROJECTILE_SPEED
        self.radius = cfg.PROJECTILE_RADIUS
        self.lifespan = cfg.PROJECTILE_LIFESPAN
        self.age = 0.0

    def update(self, dt: float, width: int, height: int) -> None:
        self.x = wrap(self.x + self.vx * dt, width)
        self.y = wrap(self.y + self.vy * dt, height)
        self.age += dt

    def is_expired(self) -> bool:
        return self.age >= self.lifespan


class Particle:
    """A single piece of explosion debris."""

    def __init__(self, x: float, y: float, color: Tuple[int, int, int],
                 config: Optional[Config] = None):
        cfg = config or Config()
        self.x = x
        self.y = y

        heading = np.random.uniform(0, 2 * np.pi)
        speed = np.random.uniform(cfg.PARTICLE_MIN_SPEED, cfg.PARTICLE_MAX_SPEED)
        self.vx = math.cos(heading) * speed
        self.vy = math.sin(heading) * speed

        self.radius = np.random.uniform(cfg.PARTICLE_MIN_RADIUS, cfg.PARTICLE_MAX_RADIUS)
        self.color = color
        self.lifespan = np.random.uniform(cfg.PARTICLE_MIN_LIFESPAN, cfg.PARTICLE_MAX_LIFESPAN)
        self.age = 0.0

    def update(self, dt: float) -> None:
        # No wrapping: debris leaving the screen just expires
        self.x += self.vx * dt
        self.y += self.vy * dt
        self.age += dt

    def is_expired(self) -> bool:
        return self.age >= self.lifespan

    @property
    def alpha(self) -> float:
        """Linear fade from 1 at birth to 0 at end of life."""
        return max(0.0, min(1.0, 1.0 - self.age / self.lifespan))
