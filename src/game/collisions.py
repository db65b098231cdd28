"""
Collision Resolution
====================

Circle-vs-circle overlap between the session's entity collections.

resolve_collisions() runs once per simulation step and mutates the asteroid
and projectile lists in place:

    1. Projectiles vs asteroids: each projectile destroys at most one
       asteroid; destroyed asteroids award points by tier, request an
       explosion and split if large enough.
    2. Ship vs asteroids: skipped while the ship is invulnerable; the first
       hit requests a ship explosion and is reported to the caller.
"""

import math
from dataclasses import dataclass, field
from typing import List, Tuple, Optional

from config import Config
from .entities import Ship, Asteroid, Projectile


@dataclass
class Explosion:
    """A request for a particle burst (and matching sound) at a position."""
    x: float
    y: float
    count: int
    color: Tuple[int, int, int]
    radius: float
    ship: bool = False


@dataclass
class CollisionReport:
    """Outcome of one collision pass."""
    score: int = 0
    asteroids_destroyed: int = 0
    explosions: List[Explosion] = field(default_factory=list)
    ship_hit: bool = False


def circle_collision(a, b) -> bool:
    """True when two circles overlap. Touching edges do not count."""
    distance = math.hypot(a.x - b.x, a.y - b.y)
    return distance < a.radius + b.radius


def score_for(radius: float, config: Config) -> int:
    """Points for destroying an asteroid of this radius (smaller is worth more)."""
    if radius >= 50:
        return config.SCORE_LARGE
    if radius >= 25:
        return config.SCORE_MEDIUM
    return config.SCORE_SMALL


def explosion_size(radius: float) -> int:
    """Number of debris particles for an asteroid of this radius."""
    if radius > 40:
        return 15
    if radius > 20:
        return 10
    return 5


def resolve_collisions(
    ship: Ship,
    asteroids: List[Asteroid],
    projectiles: List[Projectile],
    ship_vulnerable: bool = True,
    config: Optional[Config] = None,
) -> CollisionReport:
    """
    Resolve all collisions for one step.

    Args:
        ship: The player's ship
        asteroids: Live asteroids (mutated: removals and split children)
        projectiles: Live projectiles (mutated: removals)
        ship_vulnerable: False while the ship is invincible
        config: Game configuration

    Returns:
        CollisionReport with score gained, explosions requested and whether
        the ship was hit
    """
    cfg = config or Config()
    report = CollisionReport()

    # Projectile-asteroid collisions (newest first so removal keeps indices valid)
    for i in range(len(projectiles) - 1, -1, -1):
        projectile = projectiles[i]
        for j in range(len(asteroids) - 1, -1, -1):
            asteroid = asteroids[j]
            if not circle_collision(projectile, asteroid):
                continue

            del projectiles[i]
            del asteroids[j]

            report.score += score_for(asteroid.radius, cfg)
            report.asteroids_destroyed += 1
            report.explosions.append(Explosion(
                asteroid.x, asteroid.y,
                explosion_size(asteroid.radius),
                cfg.COLOR_ASTEROID_DEBRIS,
                asteroid.radius,
            ))

            asteroids.extend(asteroid.split(cfg.SPLIT_THRESHOLD, cfg))
            break

    # Ship-asteroid collision
    if ship_vulnerable:
        for asteroid in asteroids:
            if circle_collision(ship, asteroid):
                report.ship_hit = True
                report.explosions.append(Explosion(
                    ship.x, ship.y,
                    cfg.SHIP_EXPLOSION_PARTICLES,
                    cfg.COLOR_SHIP_DEBRIS,
                    ship.radius,
                    ship=True,
                ))
                break

    return report
