"""
Logging for Vector Asteroids.

Every module logs through a child of the ``asteroids`` logger:

    from src.utils.logger import get_logger

    logger = get_logger(__name__)     # -> 'asteroids.game.session'
    logger.info("New game: 4 asteroids")
    logger.warning("Audio unavailable, continuing silently")

main.py calls setup_logging() once with the level and file settings from
Config / the CLI. Anything imported before that (or in tests) gets a
console-only default that the explicit call replaces.

Levels:
    DEBUG    - Per-event detail (sound playback failures, font sizes)
    INFO     - State changes, levels, game results (default)
    WARNING  - Degraded features: no audio, missing font, bad high score file
    ERROR    - High score could not be written

Game-specific helpers keep the one-line formats greppable:
    log_session_event('LEVEL', level=3, asteroids=6)
    log_game_result(score=1250, level=3, high_score=1250, new_record=True)
"""

import logging
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional


class LogLevel(Enum):
    """Log levels accepted by setup_logging (and --log-level)."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


ROOT_LOGGER_NAME = 'asteroids'
LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
CONSOLE_DATE_FORMAT = '%H:%M:%S'

# Module-level state
_initialized = False
_auto_initialized = False
_file_handler: Optional[logging.FileHandler] = None


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name on a TTY."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, fmt: str, datefmt: Optional[str] = None, use_colors: bool = True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return super().format(record)
        # Color a copy: the same record also reaches the file handler
        colored = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def _close_file_handler(root_logger: logging.Logger) -> None:
    global _file_handler
    if _file_handler is not None:
        root_logger.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None


def setup_logging(
    log_dir: str = 'logs',
    level: LogLevel = LogLevel.INFO,
    console_output: bool = True,
    file_output: bool = True,
    log_filename: Optional[str] = None,
) -> None:
    """
    Configure the ``asteroids`` logger tree.

    Only the first explicit call takes effect; it replaces the console-only
    default installed by get_logger().

    Args:
        log_dir: Directory for log files
        level: Minimum level for the console (the file captures everything)
        console_output: Log to stdout
        file_output: Log to a file in log_dir
        log_filename: Custom file name (default: game_YYYYMMDD_HHMMSS.log)
    """
    global _initialized, _auto_initialized, _file_handler

    if _initialized and not _auto_initialized:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    _close_file_handler(root_logger)
    root_logger.handlers.clear()

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level.value)
        console_handler.setFormatter(ColoredFormatter(LOG_FORMAT, CONSOLE_DATE_FORMAT))
        root_logger.addHandler(console_handler)

    if file_output:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        if log_filename is None:
            log_filename = f"game_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

        _file_handler = logging.FileHandler(log_path / log_filename, mode='a', encoding='utf-8')
        _file_handler.setLevel(logging.DEBUG)
        _file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(_file_handler)

    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())

    # The file handler wants DEBUG even when the console is quieter
    root_logger.setLevel(logging.DEBUG if file_output else level.value)

    _initialized = True
    _auto_initialized = False
    root_logger.debug(f"Logging initialized (level={level.name}, file={file_output})")


def shutdown_logging() -> None:
    """Flush and close the log file, if any."""
    _close_file_handler(logging.getLogger(ROOT_LOGGER_NAME))


def get_logger(name: str) -> logging.Logger:
    """
    Get the logger for a module.

    Args:
        name: Module name (typically __name__); a leading 'src.' is dropped

    Returns:
        Child logger of ``asteroids``
    """
    global _auto_initialized

    if not _initialized:
        setup_logging(file_output=False)
        _auto_initialized = True

    if name.startswith('src.'):
        name = name[4:]

    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')


def get_log_path() -> Optional[Path]:
    """Path of the current log file, or None when logging to the console only."""
    if _file_handler is not None:
        return Path(_file_handler.baseFilename)
    return None


def log_session_event(event: str, **context) -> None:
    """
    Log a session milestone as ``EVENT | key=value | ...``.

    Args:
        event: Short upper-case tag ('STATE', 'NEW GAME', 'LEVEL', 'SHIP LOST')
        **context: Values to append
    """
    logger = get_logger('session')

    fields = [event.upper()] + [f"{key}={value}" for key, value in context.items()]
    logger.info(" | ".join(fields))


def log_game_result(
    score: int,
    level: int,
    high_score: int,
    new_record: bool = False,
) -> None:
    """
    Log a finished game.

    Args:
        score: Final score
        level: Level reached
        high_score: High score after this game
        new_record: Whether this game set the high score
    """
    if new_record:
        log_session_event('GAME OVER', score=score, level=level, high=high_score, record='NEW')
    else:
        log_session_event('GAME OVER', score=score, level=level, high=high_score)
