"""
Vector Asteroids - Source Package
=================================

Modules:
    game/   - Simulation core, input, rendering, audio and persistence
    utils/  - Logging
"""

__version__ = "1.0.0"
