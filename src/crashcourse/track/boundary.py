"""
Track boundary - Soft pull that keeps the car near the road.

Provides:
- Distance from the approximate nearest road point
- Spring-like corrective displacement beyond a free-roam radius
"""

from dataclasses import dataclass
import numpy as np

from crashcourse.car.car import Car
from crashcourse.track.curve import RoadCurve


@dataclass
class BoundaryConfig:
    """Track boundary configuration."""
    max_distance: float = 25.0   # Free-roam radius around the road point
    pull_strength: float = 2.0   # Displacement per unit overshoot per second

    # Keep the lookup off the exact spline ends
    min_progress: float = 0.001
    max_progress: float = 0.999


class TrackBoundary:
    """Soft boundary around the road centerline.

    Not a wall: the correction grows with how far past ``max_distance``
    the car is, so a fast car can still overshoot for a few ticks.
    """

    def __init__(self, config: BoundaryConfig | None = None):
        """Initialize boundary.

        Args:
            config: Boundary configuration
        """
        self.config = config or BoundaryConfig()
        self._last_distance: float = 0.0

    @property
    def last_distance(self) -> float:
        """Distance measured on the most recent apply()."""
        return self._last_distance

    def nearest_track_point(self, curve: RoadCurve, position: np.ndarray) -> np.ndarray:
        """Approximate nearest road point using z-based progress.

        Args:
            curve: Road curve
            position: World position [x, y, z]

        Returns:
            Road centerline point
        """
        progress = curve.progress_from_position(position[2])
        t = float(np.clip(progress, self.config.min_progress, self.config.max_progress))
        return curve.point_at(t)

    def apply(self, car: Car, curve: RoadCurve, dt: float) -> float:
        """Pull the car back toward the road if it strayed too far.

        Args:
            car: Car to correct (position mutated in place)
            curve: Road curve
            dt: Time step in seconds

        Returns:
            Planar distance from the road point before correction
        """
        position = car.state.position
        track_point = self.nearest_track_point(curve, position)

        dx = position[0] - track_point[0]
        dz = position[2] - track_point[2]
        distance = float(np.hypot(dx, dz))
        self._last_distance = distance

        if distance > self.config.max_distance:
            pull = (distance - self.config.max_distance) * self.config.pull_strength * max(dt, 0.0)
            position[0] -= dx / distance * pull
            position[2] -= dz / distance * pull

        return distance

    def is_outside(self, distance: float) -> bool:
        """Check whether a distance is beyond the free-roam radius."""
        return distance > self.config.max_distance

    def reset(self) -> None:
        """Reset measured state."""
        self._last_distance = 0.0
