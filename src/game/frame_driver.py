"""
Frame Driver
============

Runs the game one frame at a time: measure elapsed wall-clock time, step the
simulation, then render. Strictly sequential, single-threaded.

The first frame has no previous timestamp, so its simulation step is skipped
(render still happens) to avoid a time-integration spike.
"""

import time
from typing import Callable, Optional

from src.utils.logger import get_logger

logger = get_logger(__name__)


class FrameDriver:
    """
    Calls step(dt) then render() every frame.

    Args:
        step: Simulation callback receiving elapsed seconds
        render: Drawing callback (must not mutate game state)
        time_source: Monotonic clock in seconds
        before_frame: Optional hook run first in each frame (input pumping)
        after_frame: Optional hook run last in each frame (display flip, pacing)

    Example:
        >>> driver = FrameDriver(step=lambda dt: session.step(dt, controls.poll()),
        ...                      render=lambda: renderer.render(screen, session))
        >>> driver.run(lambda: not controls.quit_requested)
    """

    def __init__(
        self,
        step: Callable[[float], None],
        render: Callable[[], None],
        time_source: Callable[[], float] = time.perf_counter,
        before_frame: Optional[Callable[[], None]] = None,
        after_frame: Optional[Callable[[], None]] = None,
    ):
        self.step = step
        self.render = render
        self.time_source = time_source
        self.before_frame = before_frame
        self.after_frame = after_frame

        self._last_time: Optional[float] = None
        self.frames = 0

    def tick(self) -> Optional[float]:
        """
        Run one frame.

        Returns:
            The dt passed to step, or None if the step was skipped
        """
        if self.before_frame:
            self.before_frame()

        now = self.time_source()
        dt = None if self._last_time is None else now - self._last_time
        self._last_time = now

        if dt is not None and dt > 0:
            self.step(dt)
        else:
            dt = None

        self.render()
        self.frames += 1

        if self.after_frame:
            self.after_frame()

        return dt

    def run(self, keep_running: Callable[[], bool]) -> int:
        """Tick until keep_running() is False. Returns frames rendered."""
        logger.info("Frame loop started")
        while keep_running():
            self.tick()
        logger.info(f"Frame loop stopped after {self.frames} frames")
        return self.frames
