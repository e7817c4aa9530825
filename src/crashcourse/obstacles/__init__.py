"""
Obstacles module - Destructible roadside obstacles.

This module contains:
- Obstacle: Single obstacle with intact/toppled/shattered states
- ObstacleField: Placement, destruction and cleanup
"""

from crashcourse.obstacles.obstacle import (
    Obstacle,
    ObstacleConfig,
    RigidBody,
    Intact,
    Toppled,
    Shattered,
)
from crashcourse.obstacles.field import ObstacleField, ObstacleFieldConfig

__all__ = [
    "Obstacle",
    "ObstacleConfig",
    "RigidBody",
    "Intact",
    "Toppled",
    "Shattered",
    "ObstacleField",
    "ObstacleFieldConfig",
]
