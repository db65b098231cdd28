"""
Game States
===========

The session moves through a fixed set of states:

    LOADING -> TITLE -> PLAYING <-> GAME_OVER
                 ^         |            |
                 +---------+------------+   (abort to title)
"""

from enum import Enum, auto
from typing import Dict, FrozenSet


class GameState(Enum):
    """Top-level mode of the session."""
    LOADING = auto()
    TITLE = auto()
    PLAYING = auto()
    GAME_OVER = auto()


ALLOWED_TRANSITIONS: Dict[GameState, FrozenSet[GameState]] = {
    GameState.LOADING: frozenset({GameState.TITLE}),
    GameState.TITLE: frozenset({GameState.PLAYING}),
    GameState.PLAYING: frozenset({GameState.GAME_OVER, GameState.TITLE}),
    GameState.GAME_OVER: frozenset({GameState.PLAYING, GameState.TITLE}),
}


class InvalidTransitionError(RuntimeError):
    """Raised when the session is asked to follow an edge that does not exist."""

    def __init__(self, current: GameState, target: GameState):
        super().__init__(f"Cannot transition from {current.name} to {target.name}")
        self.current = current
        self.target = target


def can_transition(current: GameState, target: GameState) -> bool:
    """Whether current -> target is an edge of the state machine."""
    return target in ALLOWED_TRANSITIONS[current]
