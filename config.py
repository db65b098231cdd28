"""
Configuration file for Vector Asteroids
=======================================

All gameplay constants, display settings, audio and persistence options are
centralized here. Modify these values to experiment with different tunings.

Usage:
    from config import Config
    cfg = Config()
    print(cfg.SHIP_THRUST_POWER)
"""

from dataclasses import dataclass, field
from typing import List, Tuple, Optional


@dataclass
class Config:
    """
    Central configuration for the entire project.

    Sections:
    1. Screen Settings - Window size and frame rate
    2. Ship - Player ship physics
    3. Asteroids - Size tiers, speeds and outline generation
    4. Projectiles & Particles - Bullets and explosion debris
    5. Session - Lives, levels, timers and scoring
    6. Visualization - Colors and fonts
    7. Audio - Sound effect synthesis
    8. System - Persistence, logging and seeding
    """

    # =========================================================================
    # SCREEN SETTINGS
    # =========================================================================

    SCREEN_WIDTH: int = 800
    SCREEN_HEIGHT: int = 600

    # Target frame rate for the render loop (simulation uses real elapsed time)
    FPS: int = 60

    # =========================================================================
    # SHIP SETTINGS
    # =========================================================================

    SHIP_RADIUS: float = 20.0
    SHIP_ROTATION_SPEED: float = 5.0    # Radians per second
    SHIP_THRUST_POWER: float = 300.0    # Pixels per second squared

    # Velocity multiplier per frame at 60fps. Applied as FRICTION ** (dt * 60)
    # so the feel is identical at any frame rate.
    SHIP_FRICTION: float = 0.99

    # =========================================================================
    # ASTEROID SETTINGS
    # =========================================================================

    # Radius of each size tier in pixels
    ASTEROID_LARGE: float = 60.0
    ASTEROID_MEDIUM: float = 30.0
    ASTEROID_SMALL: float = 15.0

    # Asteroids larger than this split in two when destroyed
    SPLIT_THRESHOLD: float = 20.0

    ASTEROID_MIN_SPEED: float = 50.0
    ASTEROID_MAX_SPEED: float = 100.0
    ASTEROID_MAX_SPIN: float = 1.0      # Radians per second, either direction

    # Irregular outline: vertex count range (inclusive) and radius jitter
    ASTEROID_MIN_VERTICES: int = 8
    ASTEROID_MAX_VERTICES: int = 12
    ASTEROID_MIN_VERTEX_SCALE: float = 0.7

    # =========================================================================
    # PROJECTILE & PARTICLE SETTINGS
    # =========================================================================

    PROJECTILE_SPEED: float = 500.0
    PROJECTILE_RADIUS: float = 3.0
    PROJECTILE_LIFESPAN: float = 1.0    # Seconds

    # Seconds between shots while fire is held
    SHOOT_DELAY: float = 0.15

    PARTICLE_MIN_SPEED: float = 50.0
    PARTICLE_MAX_SPEED: float = 200.0
    PARTICLE_MIN_RADIUS: float = 1.0
    PARTICLE_MAX_RADIUS: float = 3.0
    PARTICLE_MIN_LIFESPAN: float = 0.5
    PARTICLE_MAX_LIFESPAN: float = 1.0

    # Particles in a ship explosion (asteroid bursts are sized by tier)
    SHIP_EXPLOSION_PARTICLES: int = 20

    # =========================================================================
    # SESSION SETTINGS
    # =========================================================================

    MAX_LIVES: int = 3
    INITIAL_ASTEROIDS: int = 4
    MAX_LEVEL_ASTEROIDS: int = 12

    # Seconds of invincibility after respawn
    INVINCIBLE_DURATION: float = 3.0

    # Seconds before restart is allowed after game over
    GAME_OVER_DELAY: float = 3.0

    # Points by asteroid tier (smaller is worth more)
    SCORE_LARGE: int = 20
    SCORE_MEDIUM: int = 50
    SCORE_SMALL: int = 100

    # =========================================================================
    # VISUALIZATION SETTINGS
    # =========================================================================

    COLOR_BACKGROUND: Tuple[int, int, int] = (0, 0, 0)
    COLOR_FOREGROUND: Tuple[int, int, int] = (255, 255, 255)
    COLOR_DIM: Tuple[int, int, int] = (187, 187, 187)
    COLOR_CROSSHAIR: Tuple[int, int, int] = (136, 136, 136)
    COLOR_FLAME: Tuple[int, int, int] = (255, 136, 0)
    COLOR_HIGHLIGHT: Tuple[int, int, int] = (255, 255, 0)
    COLOR_ASTEROID_DEBRIS: Tuple[int, int, int] = (255, 255, 255)
    COLOR_SHIP_DEBRIS: Tuple[int, int, int] = (255, 136, 0)

    # Optional TTF font (e.g. Hyperspace). None uses pygame's default font.
    FONT_PATH: Optional[str] = None
    FONT_SIZES: List[int] = field(default_factory=lambda: [16, 20, 36])

    # =========================================================================
    # AUDIO SETTINGS
    # =========================================================================

    AUDIO_ENABLED: bool = True
    AUDIO_SAMPLE_RATE: int = 44100
    AUDIO_BUFFER: int = 512
    AUDIO_VOLUME: float = 1.0

    # =========================================================================
    # SYSTEM SETTINGS
    # =========================================================================

    # Durable high score (JSON)
    HIGH_SCORE_PATH: str = '~/.vector-asteroids/highscore.json'

    # Logging
    LOG_DIR: str = 'logs'
    LOG_LEVEL: str = 'INFO'
    LOG_TO_FILE: bool = True

    # Random seed for reproducibility (None for random)
    SEED: Optional[int] = None

    def __post_init__(self):
        """Validation of gameplay invariants."""
        assert self.SCREEN_WIDTH > 0 and self.SCREEN_HEIGHT > 0, "Screen size must be positive"
        assert self.FPS > 0, "FPS must be positive"
        assert 0 < self.SHIP_FRICTION <= 1, "Ship friction must be in (0, 1]"
        assert self.MAX_LIVES >= 1, "Need at least one life"
        assert self.INITIAL_ASTEROIDS >= 1, "Need at least one asteroid per level"
        assert self.MAX_LEVEL_ASTEROIDS >= self.INITIAL_ASTEROIDS, \
            "Level asteroid cap must be >= initial asteroid count"
        assert self.ASTEROID_MIN_VERTICES >= 3, "Asteroid outline needs at least 3 vertices"
        assert self.ASTEROID_MIN_VERTICES <= self.ASTEROID_MAX_VERTICES, \
            "Asteroid vertex range is inverted"
        assert self.ASTEROID_MIN_SPEED <= self.ASTEROID_MAX_SPEED, "Asteroid speed range is inverted"
        assert self.PARTICLE_MIN_LIFESPAN > 0, "Particle lifespan must be positive"
        assert self.PROJECTILE_LIFESPAN > 0, "Projectile lifespan must be positive"
        assert len(self.FONT_SIZES) == 3, "FONT_SIZES needs small, medium and large sizes"
        assert self.LOG_LEVEL in ('DEBUG', 'INFO', 'WARNING', 'ERROR'), \
            f"Unknown log level: {self.LOG_LEVEL}"


# Global config instance for easy importing
config = Config()


if __name__ == "__main__":
    # Print configuration summary
    cfg = Config()
    print("=" * 60)
    print("Vector Asteroids - Configuration Summary")
    print("=" * 60)
    print(f"\nScreen: {cfg.SCREEN_WIDTH}x{cfg.SCREEN_HEIGHT} @ {cfg.FPS} fps")
    print(f"\nShip:")
    print(f"   Thrust: {cfg.SHIP_THRUST_POWER} px/s^2")
    print(f"   Rotation: {cfg.SHIP_ROTATION_SPEED} rad/s")
    print(f"   Friction: {cfg.SHIP_FRICTION} per frame @ 60fps")
    print(f"\nAsteroids: {cfg.ASTEROID_LARGE}/{cfg.ASTEROID_MEDIUM}/{cfg.ASTEROID_SMALL} px")
    print(f"   Points: {cfg.SCORE_LARGE}/{cfg.SCORE_MEDIUM}/{cfg.SCORE_SMALL}")
    print(f"\nLives: {cfg.MAX_LIVES}, start asteroids: {cfg.INITIAL_ASTEROIDS}")
    print(f"High score file: {cfg.HIGH_SCORE_PATH}")
    print("=" * 60)
