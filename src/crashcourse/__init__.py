"""
CrashCourse - Simulation core of an arcade tree-smashing driving game.

This package provides:
- Procedurally generated roads with straight start and finish zones
- An arcade car model driven by four logical inputs
- Destructible roadside obstacles that topple or shatter
- Collision detection against the car's front bumper
- Speed and combo based scoring
"""

__version__ = "0.1.0"

from crashcourse.simulation.simulator import Simulator
from crashcourse.simulation.session import GameSession
from crashcourse.car.car import Car, CarInputs
from crashcourse.track.curve import RoadCurve

__all__ = ["Simulator", "GameSession", "Car", "CarInputs", "RoadCurve", "__version__"]
