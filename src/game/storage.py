"""
High Score Persistence
======================

A single durable integer stored as JSON:

    {"high_score": 1250}

Missing, unreadable or malformed files count as a high score of 0. Failing
to write is logged and otherwise ignored: losing a high score must never
interrupt the game.
"""

import json
from pathlib import Path
from typing import Protocol, Union

from src.utils.logger import get_logger

logger = get_logger(__name__)

HIGH_SCORE_KEY = 'high_score'


class ScoreStore(Protocol):
    """Anything that can load and save the high score."""

    def load(self) -> int:
        ...

    def save(self, score: int) -> bool:
        ...


class HighScoreStore:
    """Reads and writes the persisted high score."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def load(self) -> int:
        """Stored high score, or 0 if absent or unparsable."""
        if not self.path.exists():
            return 0

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable high score file {self.path}: {e}")
            return 0

        value = data.get(HIGH_SCORE_KEY) if isinstance(data, dict) else None
        # bool is an int subclass but never a valid score
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            logger.warning(f"Ignoring malformed high score in {self.path}: {value!r}")
            return 0

        return value

    def save(self, score: int) -> bool:
        """Persist the high score. Returns False if it could not be written."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump({HIGH_SCORE_KEY: int(score)}, f, indent=2)
        except OSError as e:
            logger.error(f"Failed to save high score to {self.path}: {e}")
            return False

        logger.info(f"High score saved: {score}")
        return True


class MemoryHighScoreStore:
    """In-memory store for tests and sessions without persistence."""

    def __init__(self, value: int = 0):
        self.value = value
        self.saves = 0

    def load(self) -> int:
        return self.value

    def save(self, score: int) -> bool:
        self.value = int(score)
        self.saves += 1
        return True
