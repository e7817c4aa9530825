"""
Collision detection - Car front bumper against intact obstacles.

Provides:
- Broad-phase distance cutoff
- Exact planar overlap test
- Collision events for scoring and feedback layers
"""

from dataclasses import dataclass
from typing import List
import logging
import numpy as np

from crashcourse.car.car import Car
from crashcourse.obstacles.field import ObstacleField
from crashcourse.obstacles.obstacle import Obstacle


logger = logging.getLogger(__name__)


@dataclass
class CollisionConfig:
    """Collision detection configuration."""
    min_speed: float = 2.0           # Slower than this never counts as a crash
    broad_phase_radius: float = 50.0
    impact_slowdown: float = 0.88    # Speed multiplier per hit, compounds


@dataclass(frozen=True)
class CollisionEvent:
    """A single car-obstacle hit."""
    obstacle: Obstacle
    impact_speed: float
    time: float = 0.0


class CollisionDetector:
    """Finds obstacles the car drives into.

    The front point, direction and impact speed are sampled once per
    call, so every hit in the same tick reports the speed the car had
    before any of them slowed it down.
    """

    def __init__(self, config: CollisionConfig | None = None):
        """Initialize detector.

        Args:
            config: Collision configuration
        """
        self.config = config or CollisionConfig()

    def detect(
        self,
        car: Car,
        field: ObstacleField,
        time: float = 0.0,
    ) -> List[CollisionEvent]:
        """Check for hits, destroy hit obstacles and slow the car.

        Args:
            car: The player car
            field: Obstacle field to test against
            time: Current simulation time, stamped on events

        Returns:
            One event per obstacle hit this tick (possibly empty)
        """
        impact_speed = abs(car.speed)
        if impact_speed < self.config.min_speed:
            return []

        front = car.front_position
        forward = car.forward_vector
        broad_sq = self.config.broad_phase_radius ** 2

        events = []
        for obstacle in field.active_obstacles():
            dx = front[0] - obstacle.position[0]
            dz = front[2] - obstacle.position[2]
            dist_sq = dx * dx + dz * dz

            if dist_sq > broad_sq:
                continue

            hit_distance = car.config.collision_radius + obstacle.collision_radius
            if np.sqrt(dist_sq) < hit_distance:
                field.destroy(obstacle, forward, impact_speed)
                car.apply_impact_slowdown(self.config.impact_slowdown)
                events.append(CollisionEvent(obstacle, impact_speed, time))

        if events:
            logger.debug("%d collision(s) at t=%.2f, speed %.1f", len(events), time, impact_speed)

        return events
