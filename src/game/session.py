"""
Game Session
============

The Session owns everything that changes while the game runs: the state
machine, score/lives/level counters, the ship and the asteroid, projectile
and particle collections.

Game Rules:
- Destroy all asteroids to clear the level; each level adds one more
  asteroid (up to 12)
- Asteroids split: large (60) -> medium (30) -> small (15) -> destroyed
- Smaller asteroids are worth more: 20 / 50 / 100 points
- Colliding with an asteroid costs a life; the ship respawns at the centre
  with 3 seconds of invincibility
- After game over, restart is locked out for 3 seconds

State machine (see src.game.state):
    LOADING -> TITLE -> PLAYING <-> GAME_OVER, and PLAYING/GAME_OVER -> TITLE
"""

import math
from typing import List, Optional

from config import Config
from src.utils.logger import get_logger, log_game_result, log_session_event
from .audio import AudioSink, NullAudio, SoundEffect
from .collisions import Explosion, resolve_collisions
from .controls import InputState
from .entities import Ship, Asteroid, Projectile, Particle
from .spawner import spawn_edge
from .state import GameState, InvalidTransitionError, can_transition
from .storage import MemoryHighScoreStore, ScoreStore

logger = get_logger(__name__)


class Session:
    """
    A single game session and its state machine.

    Example:
        >>> session = Session(config, audio=NullAudio(), store=HighScoreStore(path))
        >>> session.finish_loading()
        >>> session.start()
        >>> session.step(1 / 60, InputState(thrust=True))
    """

    def __init__(self, config: Optional[Config] = None,
                 audio: Optional[AudioSink] = None, store: Optional[ScoreStore] = None):
        self.config = config or Config()
        self.audio = audio or NullAudio()
        self.store = store or MemoryHighScoreStore()

        self.width = self.config.SCREEN_WIDTH
        self.height = self.config.SCREEN_HEIGHT

        self.state = GameState.LOADING

        # Entities
        self.ship = Ship(self.width / 2, self.height / 2, self.config)
        self.asteroids: List[Asteroid] = []
        self.projectiles: List[Projectile] = []
        self.particles: List[Particle] = []

        # Counters
        self.score = 0
        self.high_score = self.store.load()
        self.level = 1
        self.lives = self.config.MAX_LIVES

        # Timers (seconds)
        self.invincible = False
        self.invincible_timer = 0.0
        self.game_over_timer = 0.0
        self.shoot_cooldown = 0.0

        logger.info(f"Session created (high score {self.high_score})")

    # =========================================================================
    # STATE TRANSITIONS
    # =========================================================================

    def _transition(self, target: GameState) -> None:
        if not can_transition(self.state, target):
            raise InvalidTransitionError(self.state, target)
        log_session_event('STATE', source=self.state.name, target=target.name)
        self.state = target

    def finish_loading(self) -> bool:
        """Assets are ready: leave the loading screen."""
        if self.state is not GameState.LOADING:
            return False
        self._transition(GameState.TITLE)
        return True

    def start(self) -> bool:
        """
        Start (or restart) a game.

        Accepted from the title screen, or from game over once the restart
        delay has elapsed. Returns False when ignored.
        """
        if self.state is GameState.GAME_OVER and self.game_over_timer > 0:
            return False
        if not can_transition(self.state, GameState.PLAYING):
            return False

        self._transition(GameState.PLAYING)
        self._new_game()
        return True

    def abort(self) -> bool:
        """Return to the title screen, discarding the current game."""
        if not can_transition(self.state, GameState.TITLE):
            return False

        self._transition(GameState.TITLE)
        self._clear_entities()
        self.invincible = False
        self.invincible_timer = 0.0
        self.game_over_timer = 0.0
        return True

    def _clear_entities(self) -> None:
        self.asteroids.clear()
        self.projectiles.clear()
        self.particles.clear()

    def _new_game(self) -> None:
        """Reset counters and entities and spawn the first wave."""
        self.score = 0
        self.level = 1
        self.lives = self.config.MAX_LIVES
        self.invincible = False
        self.invincible_timer = 0.0
        self.game_over_timer = 0.0
        self.shoot_cooldown = 0.0

        self._clear_entities()
        self.ship.reset(self.width / 2, self.height / 2)

        self.asteroids.extend(spawn_edge(
            self.config.INITIAL_ASTEROIDS, self.config.ASTEROID_LARGE,
            self.width, self.height, self.config,
        ))
        log_session_event('NEW GAME', asteroids=len(self.asteroids))

    # =========================================================================
    # SIMULATION
    # =========================================================================

    def step(self, dt: float, controls: InputState) -> None:
        """
        Advance the simulation by dt seconds.

        Only the game over timer runs outside of PLAYING.
        """
        if self.game_over_timer > 0:
            self.game_over_timer = max(0.0, self.game_over_timer - dt)

        if self.state is not GameState.PLAYING:
            return

        self.ship.update(dt, controls, self.width, self.height)
        for asteroid in self.asteroids:
            asteroid.update(dt, self.width, self.height)

        if self.invincible:
            self.invincible_timer = max(0.0, self.invincible_timer - dt)
            if self.invincible_timer <= 0:
                self.invincible = False

        if self.shoot_cooldown > 0:
            self.shoot_cooldown = max(0.0, self.shoot_cooldown - dt)
        if controls.fire and self.shoot_cooldown <= 0:
            self._fire()

        for projectile in self.projectiles:
            projectile.update(dt, self.width, self.height)
        self.projectiles = [p for p in self.projectiles if not p.is_expired()]

        for particle in self.particles:
            particle.update(dt)
        self.particles = [p for p in self.particles if not p.is_expired()]

        self._resolve_collisions()

        if self.state is GameState.PLAYING and not self.asteroids:
            self._next_level()

    def _fire(self) -> None:
        """Fire a projectile from the ship's nose."""
        nose_x, nose_y = self.ship.nose()
        self.projectiles.append(Projectile(nose_x, nose_y, self.ship.angle, self.config))
        self.shoot_cooldown = self.config.SHOOT_DELAY
        self.audio.play(SoundEffect.SHOOT)

    def _resolve_collisions(self) -> None:
        report = resolve_collisions(
            self.ship, self.asteroids, self.projectiles,
            ship_vulnerable=not self.invincible,
            config=self.config,
        )
        self.score += report.score

        for explosion in report.explosions:
            self._explode(explosion)

        if report.ship_hit:
            self._ship_destroyed()

    def _explode(self, explosion: Explosion) -> None:
        """Spawn debris and play the matching sound."""
        self.particles.extend(
            Particle(explosion.x, explosion.y, explosion.color, self.config)
            for _ in range(explosion.count)
        )
        if explosion.ship:
            self.audio.play(SoundEffect.SHIP_DEATH)
        else:
            self.audio.play(SoundEffect.EXPLOSION, size=explosion.radius)

    def _ship_destroyed(self) -> None:
        self.lives = max(0, self.lives - 1)
        if self.lives <= 0:
            self._game_over()
            return
        log_session_event('SHIP LOST', lives=self.lives, score=self.score)
        self._respawn_ship()

    def _respawn_ship(self) -> None:
        self.ship.reset(self.width / 2, self.height / 2)
        self.invincible = True
        self.invincible_timer = self.config.INVINCIBLE_DURATION

    def _game_over(self) -> None:
        self._transition(GameState.GAME_OVER)
        self.game_over_timer = self.config.GAME_OVER_DELAY
        self.audio.play(SoundEffect.GAME_OVER)

        new_record = self.score > self.high_score
        if new_record:
            self.high_score = self.score
            self.store.save(self.high_score)

        log_game_result(self.score, self.level, self.high_score, new_record)

    def _next_level(self) -> None:
        self.level += 1
        count = min(self.config.INITIAL_ASTEROIDS + self.level - 1,
                    self.config.MAX_LEVEL_ASTEROIDS)
        self.asteroids.extend(spawn_edge(
            count, self.config.ASTEROID_LARGE, self.width, self.height, self.config,
        ))
        log_session_event('LEVEL', level=self.level, asteroids=count)

    # =========================================================================
    # QUERIES
    # =========================================================================

    def ship_visible(self) -> bool:
        """Invincibility blink: hidden on odd tenths of a second."""
        if not self.invincible:
            return True
        return math.floor(self.invincible_timer * 10) % 2 == 0

    @property
    def is_new_high_score(self) -> bool:
        return self.score > 0 and self.score >= self.high_score

    def get_info(self) -> dict:
        """Get current game information."""
        return {
            'state': self.state.name,
            'score': self.score,
            'high_score': self.high_score,
            'lives': self.lives,
            'level': self.level,
            'asteroids_remaining': len(self.asteroids),
        }
