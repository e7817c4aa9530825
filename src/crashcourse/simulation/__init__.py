"""
Simulation module - Tick loop, collisions and session flow.

This module contains:
- Simulator: Fixed-order tick loop for one run
- World: Car, obstacles, road and clock
- CollisionDetector: Car versus obstacle hits
"""

from crashcourse.simulation.collision import CollisionDetector, CollisionEvent
from crashcourse.simulation.simulator import Simulator, SimulatorConfig, TickResult
from crashcourse.simulation.world import World

__all__ = [
    "CollisionDetector",
    "CollisionEvent",
    "Simulator",
    "SimulatorConfig",
    "TickResult",
    "World",
]
