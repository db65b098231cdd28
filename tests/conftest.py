"""
Pytest configuration for the test suite.

This file is automatically loaded by pytest and applies configuration
to all tests in the tests/ directory.
"""

import os
import sys

# Headless pygame: no window or audio device needed
os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
import pytest

from config import Config
from src.utils.logger import setup_logging

# Keep test output clean and avoid writing log files
setup_logging(console_output=False, file_output=False)


class RecordingAudio:
    """Audio sink that remembers every requested effect."""

    def __init__(self):
        self.played = []

    def play(self, effect, **params):
        self.played.append((effect, params))

    def effects(self):
        return [effect for effect, _ in self.played]

    def close(self):
        pass


@pytest.fixture(autouse=True)
def seeded_random():
    """Deterministic numpy randomness for every test."""
    np.random.seed(1234)
    yield


@pytest.fixture
def config():
    """Create a test configuration."""
    return Config()


@pytest.fixture
def audio():
    """Recording audio sink."""
    return RecordingAudio()


@pytest.fixture
def store():
    """In-memory high score store starting at 0."""
    from src.game.storage import MemoryHighScoreStore
    return MemoryHighScoreStore()


@pytest.fixture
def session(config, audio, store):
    """A session that has finished loading and sits on the title screen."""
    from src.game.session import Session
    s = Session(config, audio=audio, store=store)
    s.finish_loading()
    return s


@pytest.fixture
def playing(session):
    """A session with a freshly started game."""
    session.start()
    return session
