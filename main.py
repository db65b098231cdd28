#!/usr/bin/env python3
"""
Vector Asteroids - Main Entry Point
===================================

Classic vector-graphics Asteroids: fly the ship, shoot the rocks, survive
the levels and beat the high score.

Usage:
    # Play with default settings
    python main.py

    # Keyboard steering instead of mouse aim
    python main.py --aim keyboard

    # No sound, custom high score file
    python main.py --mute --high-score-file ~/.asteroids.json

    # Use the Hyperspace arcade font
    python main.py --font fonts/Hyperspace.ttf

Press:
    - W / Up: Thrust
    - Space: Shoot (start / restart on menus)
    - A, D / Left, Right: Rotate (keyboard aim)
    - M: Toggle mouse / keyboard aim
    - ESC: Back to title (quit from title)
"""

# Suppress pygame's pkg_resources deprecation warning (pygame issue #4557)
# This is a known issue - pygame hasn't migrated to importlib.resources yet
import warnings
warnings.filterwarnings("ignore", category=UserWarning, module="pygame.pkgdata")

import argparse

import numpy as np
import pygame

from config import Config
from src.game import (
    AimMode,
    FrameDriver,
    HighScoreStore,
    InputController,
    NullAudio,
    Renderer,
    Session,
    SoundEffects,
)
from src.game.state import GameState
from src.utils.logger import LogLevel, get_log_path, get_logger, setup_logging, shutdown_logging


class GameApp:
    """
    Wires the pygame window, input, audio and persistence around a Session
    and drives it with a FrameDriver.
    """

    def __init__(self, config: Config, args: argparse.Namespace):
        self.config = config
        self.logger = get_logger('app')

        pygame.init()
        self.screen = pygame.display.set_mode((config.SCREEN_WIDTH, config.SCREEN_HEIGHT))
        pygame.display.set_caption("Asteroids")
        self.clock = pygame.time.Clock()

        self.audio = NullAudio() if args.mute else SoundEffects(config)
        self.store = HighScoreStore(config.HIGH_SCORE_PATH)
        self.session = Session(config, audio=self.audio, store=self.store)

        self.controls = InputController(
            pointer=(config.SCREEN_WIDTH / 2, config.SCREEN_HEIGHT / 2),
            aim_mode=AimMode(args.aim),
        )
        self.renderer = Renderer(config)

        self.driver = FrameDriver(
            step=self._step,
            render=self._render,
            before_frame=self._pump_events,
            after_frame=self._end_frame,
        )

    def _pump_events(self) -> None:
        for event in pygame.event.get():
            self.controls.handle_event(event, self.session)

    def _step(self, dt: float) -> None:
        self.session.step(dt, self.controls.poll())

    def _render(self) -> None:
        self.renderer.render(self.screen, self.session, self.controls.poll())

    def _end_frame(self) -> None:
        pygame.display.flip()

        # The loading screen has been shown once; now load assets
        if self.session.state is GameState.LOADING and not self.renderer.fonts_loaded:
            self.renderer.load_fonts()
            self.session.finish_loading()

        self.clock.tick(self.config.FPS)

    def run(self) -> None:
        """Run until the window is closed."""
        self.driver.run(lambda: not self.controls.quit_requested)

    def close(self) -> None:
        self.audio.close()
        self.logger.info(f"Exiting (high score {self.session.high_score})")


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Vector Asteroids - classic arcade shooter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        '--fps', type=int, default=None,
        help='Target frame rate (default: 60)'
    )
    parser.add_argument(
        '--aim', choices=[mode.value for mode in AimMode], default=AimMode.POINTER.value,
        help='Initial aim mode: follow the mouse pointer or rotate with A/D (toggle with M)'
    )
    parser.add_argument(
        '--mute', action='store_true',
        help='Disable sound effects'
    )
    parser.add_argument(
        '--font', type=str, default=None, metavar='TTF_PATH',
        help='Font file for all text (default: pygame font)'
    )
    parser.add_argument(
        '--high-score-file', type=str, default=None, metavar='PATH',
        help='Where to persist the high score (default: ~/.vector-asteroids/highscore.json)'
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='Random seed for reproducible asteroid fields'
    )
    parser.add_argument(
        '--log-level', choices=[level.name for level in LogLevel], default=None,
        help='Logging verbosity (default: INFO)'
    )
    parser.add_argument(
        '--no-log-file', action='store_true',
        help='Log to the console only'
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    """Apply CLI overrides to the default config."""
    config = Config()
    if args.fps is not None:
        config.FPS = args.fps
    if args.font:
        config.FONT_PATH = args.font
    if args.high_score_file:
        config.HIGH_SCORE_PATH = args.high_score_file
    if args.mute:
        config.AUDIO_ENABLED = False
    if args.seed is not None:
        config.SEED = args.seed
    if args.log_level:
        config.LOG_LEVEL = args.log_level
    if args.no_log_file:
        config.LOG_TO_FILE = False
    # Re-validate after overrides
    config.__post_init__()
    return config


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    config = build_config(args)

    setup_logging(
        log_dir=config.LOG_DIR,
        level=LogLevel[config.LOG_LEVEL],
        file_output=config.LOG_TO_FILE,
    )
    logger = get_logger('main')
    log_path = get_log_path()
    if log_path:
        logger.info(f"Logging to {log_path}")

    if config.SEED is not None:
        np.random.seed(config.SEED)
        logger.info(f"Random seed: {config.SEED}")

    app = None
    try:
        app = GameApp(config, args)
        app.run()
    except KeyboardInterrupt:
        print("\nInterrupted by user")
    finally:
        if app:
            app.close()
        pygame.quit()
        shutdown_logging()


if __name__ == "__main__":
    main()
