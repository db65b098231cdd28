"""
Renderer
========

Vector-style pygame drawing for every game state:

    LOADING    - "LOADING..." while fonts are prepared
    TITLE      - Game name, high score and controls
    PLAYING    - Ship, asteroids, bullets, debris, HUD and aim crosshair
    GAME_OVER  - Final score and high score

Rendering only reads the session; it never changes game state.
"""

import math
from typing import Dict, Optional, Tuple

import numpy as np
import pygame

from config import Config
from src.utils.logger import get_logger
from .controls import AimMode, InputState
from .session import Session
from .state import GameState

logger = get_logger(__name__)

Color = Tuple[int, int, int]


def fade(color: Color, alpha: float) -> Color:
    """Darken a color towards black (the background) by alpha in [0, 1]."""
    alpha = max(0.0, min(1.0, alpha))
    return (int(color[0] * alpha), int(color[1] * alpha), int(color[2] * alpha))


class Renderer:
    """Draws a Session onto a pygame surface."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        self.width = self.config.SCREEN_WIDTH
        self.height = self.config.SCREEN_HEIGHT

        pygame.font.init()
        # Default font is always available; used until load_fonts() runs
        self._fallback_font = pygame.font.Font(None, 28)
        self._fonts: Dict[str, pygame.font.Font] = {}
        self.fonts_loaded = False

        # Cosmetic randomness (flame flicker) kept off the gameplay RNG
        self._rng = np.random.default_rng()

    # =========================================================================
    # ASSETS
    # =========================================================================

    def load_fonts(self) -> None:
        """Load the configured font in small/medium/large sizes."""
        small, medium, large = sorted(self.config.FONT_SIZES)
        path = self.config.FONT_PATH

        for name, size in (('small', small), ('medium', medium), ('large', large)):
            font = None
            if path:
                try:
                    font = pygame.font.Font(path, size)
                except (OSError, pygame.error) as e:
                    logger.warning(f"Could not load font {path}, using default: {e}")
                    path = None
            if font is None:
                # pygame's default font renders smaller than most TTFs
                font = pygame.font.Font(None, int(size * 1.4))
            self._fonts[name] = font

        self.fonts_loaded = True
        logger.info(f"Fonts loaded ({self.config.FONT_PATH or 'default'})")

    def _font(self, name: str) -> pygame.font.Font:
        return self._fonts.get(name, self._fallback_font)

    # =========================================================================
    # FRAME
    # =========================================================================

    def render(self, screen: pygame.Surface, session: Session,
               controls: Optional[InputState] = None) -> None:
        """Render one frame for the session's current state."""
        screen.fill(self.config.COLOR_BACKGROUND)

        if session.state is GameState.LOADING:
            self._draw_loading(screen)
        elif session.state is GameState.TITLE:
            self._draw_title(screen, session)
        elif session.state is GameState.PLAYING:
            self._draw_game(screen, session, controls)
        elif session.state is GameState.GAME_OVER:
            self._draw_game_over(screen, session)

    def _text(self, screen: pygame.Surface, text: str, font: pygame.font.Font,
              color: Color, **position) -> None:
        surface = font.render(text, True, color)
        screen.blit(surface, surface.get_rect(**position))

    # =========================================================================
    # SCREENS
    # =========================================================================

    def _draw_loading(self, screen: pygame.Surface) -> None:
        self._text(screen, "LOADING...", self._fallback_font, self.config.COLOR_FOREGROUND,
                   center=(self.width // 2, self.height // 2))

    def _draw_title(self, screen: pygame.Surface, session: Session) -> None:
        fg = self.config.COLOR_FOREGROUND
        cx, cy = self.width // 2, self.height // 2

        self._text(screen, "ASTEROIDS", self._font('large'), fg, center=(cx, cy - 50))
        if session.high_score > 0:
            self._text(screen, f"HIGH SCORE: {session.high_score}", self._font('small'),
                       self.config.COLOR_DIM, center=(cx, cy - 10))

        self._text(screen, "PRESS SPACE TO START", self._font('medium'), fg, center=(cx, cy + 30))

        help_lines = [
            "W TO THRUST, SPACE TO SHOOT",
            "M TO TOGGLE AIM MODE",
            "AIM WITH MOUSE OR A/D KEYS",
        ]
        for i, line in enumerate(help_lines):
            self._text(screen, line, self._font('small'), fg, center=(cx, cy + 70 + i * 25))

    def _draw_game_over(self, screen: pygame.Surface, session: Session) -> None:
        fg = self.config.COLOR_FOREGROUND
        cx, cy = self.width // 2, self.height // 2

        self._text(screen, "GAME OVER", self._font('large'), fg, center=(cx, cy - 50))
        self._text(screen, f"SCORE: {session.score}", self._font('medium'), fg, center=(cx, cy))

        if session.is_new_high_score:
            self._text(screen, "NEW HIGH SCORE!", self._font('medium'),
                       self.config.COLOR_HIGHLIGHT, center=(cx, cy + 35))
        else:
            self._text(screen, f"HIGH SCORE: {session.high_score}", self._font('medium'),
                       self.config.COLOR_DIM, center=(cx, cy + 35))

        # Restart prompt appears once restart is allowed
        if session.game_over_timer <= 0:
            self._text(screen, "PRESS SPACE TO RESTART", self._font('small'), fg,
                       center=(cx, cy + 75))

    def _draw_game(self, screen: pygame.Surface, session: Session,
                   controls: Optional[InputState]) -> None:
        if session.ship_visible():
            self._draw_ship(screen, session)

        for asteroid in session.asteroids:
            pygame.draw.polygon(screen, self.config.COLOR_FOREGROUND,
                                asteroid.get_world_vertices(), 2)

        for projectile in session.projectiles:
            pygame.draw.circle(screen, self.config.COLOR_FOREGROUND,
                               (int(projectile.x), int(projectile.y)), int(projectile.radius))

        for particle in session.particles:
            pygame.draw.circle(screen, fade(particle.color, particle.alpha),
                               (int(particle.x), int(particle.y)), max(1, int(particle.radius)))

        self._draw_hud(screen, session)

        if controls is not None and controls.aim_mode is AimMode.POINTER:
            self._draw_crosshair(screen, controls.pointer)

    # =========================================================================
    # ELEMENTS
    # =========================================================================

    def _draw_ship(self, screen: pygame.Surface, session: Session) -> None:
        ship = session.ship
        pygame.draw.polygon(screen, self.config.COLOR_FOREGROUND, ship.get_vertices(), 2)

        if ship.thrusting:
            # Flickering flame out of the rear notch
            size = ship.radius
            flame_length = size * (0.6 + self._rng.uniform(0, 0.4))
            cos_a, sin_a = math.cos(ship.angle), math.sin(ship.angle)
            local = [
                (-size * 0.4, -size * 0.3),
                (-size * 0.4 - flame_length, 0),
                (-size * 0.4, size * 0.3),
            ]
            points = [(px * cos_a - py * sin_a + ship.x, px * sin_a + py * cos_a + ship.y)
                      for px, py in local]
            pygame.draw.lines(screen, self.config.COLOR_FLAME, False, points, 2)

    def _draw_hud(self, screen: pygame.Surface, session: Session) -> None:
        fg = self.config.COLOR_FOREGROUND
        self._text(screen, f"SCORE: {session.score}", self._font('medium'), fg, topleft=(20, 22))
        self._text(screen, f"LEVEL: {session.level}", self._font('medium'), fg, topleft=(20, 52))
        self._text(screen, f"HIGH: {session.high_score}", self._font('small'), fg, topleft=(20, 82))

        # Remaining lives as mini ships pointing up
        for i in range(session.lives):
            cx = self.width - 30 - i * 30
            cy = 30
            icon = [(0, -10), (-6, 7), (0, 4), (6, 7)]
            pygame.draw.polygon(screen, fg, [(cx + x, cy + y) for x, y in icon], 2)

    def _draw_crosshair(self, screen: pygame.Surface, pointer: Tuple[float, float]) -> None:
        color = self.config.COLOR_CROSSHAIR
        x, y = int(pointer[0]), int(pointer[1])
        size = 10
        pygame.draw.line(screen, color, (x - size, y), (x + size, y), 1)
        pygame.draw.line(screen, color, (x, y - size), (x, y + size), 1)
        pygame.draw.circle(screen, color, (x, y), 3, 1)
