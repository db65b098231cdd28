"""
Player Input
============

Input is polled once per frame as an InputState snapshot. Key presses and
releases arrive as pygame events and are folded into held-key state by the
InputController, which also fires the discrete triggers (start/restart,
abort to title, aim-mode toggle) on the session.

Human Controls:
    A / Left arrow:   Rotate left (keyboard aim)
    D / Right arrow:  Rotate right (keyboard aim)
    W / Up arrow:     Thrust
    Space:            Shoot / start / restart
    M:                Toggle aim mode (mouse pointer vs keyboard)
    Escape:           Return to title (quit from the title screen)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Set, Tuple

import pygame

from .state import GameState


class AimMode(Enum):
    """How the ship's facing is chosen."""
    POINTER = 'pointer'    # Ship faces the mouse cursor
    KEYBOARD = 'keyboard'  # Ship rotates with left/right keys

    def toggled(self) -> 'AimMode':
        return AimMode.KEYBOARD if self is AimMode.POINTER else AimMode.POINTER


@dataclass(frozen=True)
class InputState:
    """Snapshot of the player's intents for one frame."""
    rotate_left: bool = False
    rotate_right: bool = False
    thrust: bool = False
    fire: bool = False
    pointer: Tuple[float, float] = (0.0, 0.0)
    aim_mode: AimMode = AimMode.POINTER


# Key bindings
LEFT_KEYS = (pygame.K_a, pygame.K_LEFT)
RIGHT_KEYS = (pygame.K_d, pygame.K_RIGHT)
THRUST_KEYS = (pygame.K_w, pygame.K_UP)
FIRE_KEYS = (pygame.K_SPACE,)
START_KEY = pygame.K_SPACE
ABORT_KEY = pygame.K_ESCAPE
TOGGLE_AIM_KEY = pygame.K_m


class InputController:
    """
    Folds pygame events into polled input state and session triggers.

    Example:
        >>> controller = InputController(pointer=(400, 300))
        >>> for event in pygame.event.get():
        ...     controller.handle_event(event, session)
        >>> session.step(dt, controller.poll())
    """

    def __init__(self, pointer: Tuple[float, float] = (0.0, 0.0),
                 aim_mode: AimMode = AimMode.POINTER):
        self.held: Set[int] = set()
        self.pointer = pointer
        self.aim_mode = aim_mode
        self.quit_requested = False

    def handle_event(self, event: pygame.event.Event, session) -> None:
        """Apply one pygame event to held keys, pointer and session triggers."""
        if event.type == pygame.QUIT:
            self.quit_requested = True
        elif event.type == pygame.MOUSEMOTION:
            self.pointer = (float(event.pos[0]), float(event.pos[1]))
        elif event.type == pygame.KEYDOWN:
            self._key_down(event.key, session)
        elif event.type == pygame.KEYUP:
            self.held.discard(event.key)

    def _key_down(self, key: int, session) -> None:
        state = session.state

        # Ignore input until assets are ready
        if state is GameState.LOADING:
            return

        # Space starts from the menus without also counting as a held fire key
        if key == START_KEY and state in (GameState.TITLE, GameState.GAME_OVER):
            session.start()
            return

        if key == ABORT_KEY:
            if state in (GameState.PLAYING, GameState.GAME_OVER):
                session.abort()
            else:
                self.quit_requested = True
            return

        if key == TOGGLE_AIM_KEY:
            self.aim_mode = self.aim_mode.toggled()
            return

        self.held.add(key)

    def _any_held(self, keys: Tuple[int, ...]) -> bool:
        return any(k in self.held for k in keys)

    def poll(self) -> InputState:
        """Current intents as an immutable snapshot."""
        return InputState(
            rotate_left=self._any_held(LEFT_KEYS),
            rotate_right=self._any_held(RIGHT_KEYS),
            thrust=self._any_held(THRUST_KEYS),
            fire=self._any_held(FIRE_KEYS),
            pointer=self.pointer,
            aim_mode=self.aim_mode,
        )
