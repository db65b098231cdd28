"""
Game Module
===========

Vector Asteroids: simulation core plus the pygame-backed collaborators.

Core (no display or mixer needed):
    Session           - State machine, counters and entity collections
    Ship, Asteroid, Projectile, Particle - Entity models
    resolve_collisions - Per-step collision pass
    spawn_edge        - Off-screen asteroid spawning
    FrameDriver       - Update-then-render frame loop

Collaborators:
    InputController   - pygame events -> polled InputState + triggers
    Renderer          - Vector drawing of every game state
    SoundEffects      - Synthesized sound effects via pygame.mixer
    HighScoreStore    - JSON high score persistence
"""

from .state import GameState, InvalidTransitionError
from .entities import Ship, Asteroid, Projectile, Particle
from .collisions import circle_collision, resolve_collisions, CollisionReport, Explosion
from .spawner import spawn_edge
from .controls import AimMode, InputState, InputController
from .audio import SoundEffect, SoundEffects, NullAudio
from .storage import HighScoreStore, MemoryHighScoreStore, ScoreStore
from .session import Session
from .frame_driver import FrameDriver
from .renderer import Renderer


__all__ = [
    # State machine
    'GameState',
    'InvalidTransitionError',
    'Session',
    # Entities
    'Ship',
    'Asteroid',
    'Projectile',
    'Particle',
    # Rules
    'circle_collision',
    'resolve_collisions',
    'CollisionReport',
    'Explosion',
    'spawn_edge',
    # Loop and collaborators
    'FrameDriver',
    'AimMode',
    'InputState',
    'InputController',
    'SoundEffect',
    'SoundEffects',
    'NullAudio',
    'HighScoreStore',
    'MemoryHighScoreStore',
    'ScoreStore',
    'Renderer',
]
