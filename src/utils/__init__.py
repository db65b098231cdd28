"""Shared utilities."""

from .logger import (
    get_logger, setup_logging, shutdown_logging, get_log_path,
    LogLevel, log_session_event, log_game_result,
)

__all__ = [
    'get_logger', 'setup_logging', 'shutdown_logging', 'get_log_path',
    'LogLevel', 'log_session_event', 'log_game_result',
]
