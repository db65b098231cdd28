"""Asteroid spawning at the screen edges."""

from typing import List, Optional

import numpy as np

from config import Config
from .entities import Asteroid

# Edge indices
TOP, RIGHT, BOTTOM, LEFT = range(4)


def spawn_edge(count: int, size: float, width: int, height: int,
               config: Optional[Config] = None) -> List[Asteroid]:
    """
    Create asteroids just off-screen along a random edge.

    Each asteroid picks one of the four edges uniformly, a uniform position
    along it, and is pushed outward by its own radius so it drifts in
    without popping into view.

    Args:
        count: Number of asteroids to create
        size: Radius of every new asteroid
        width: Screen width
        height: Screen height
        config: Game configuration

    Returns:
        List of new asteroids
    """
    asteroids = []

    for _ in range(count):
        edge = np.random.randint(4)
        if edge == TOP:
            x = np.random.uniform(0, width)
            y = -size
        elif edge == RIGHT:
            x = width + size
            y = np.random.uniform(0, height)
        elif edge == BOTTOM:
            x = np.random.uniform(0, width)
            y = height + size
        else:  # LEFT
            x = -size
            y = np.random.uniform(0, height)

        asteroids.append(Asteroid(x, y, size, config))

    return asteroids
