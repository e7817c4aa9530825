"""
Car module - Arcade vehicle model.

This module contains:
- Car: Speed, heading and steering integration
- CarInputs: Logical driver inputs per tick
- CarState: Mutable kinematic state
"""

from crashcourse.car.car import Car, CarConfig, CarInputs, CarState

__all__ = [
    "Car",
    "CarConfig",
    "CarInputs",
    "CarState",
]
