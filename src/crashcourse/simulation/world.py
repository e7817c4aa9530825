"""
World - State container for one run.

Manages:
- Road curve reference
- The player car
- The obstacle field
- Simulation clock
"""

from typing import Optional

from crashcourse.car.car import Car
from crashcourse.obstacles.field import ObstacleField
from crashcourse.track.curve import RoadCurve


class World:
    """World state container for simulation.

    Holds every piece of mutable core state so a restart can discard and
    rebuild it in one place.
    """

    def __init__(
        self,
        car: Car | None = None,
        obstacles: ObstacleField | None = None,
        track: RoadCurve | None = None,
    ):
        """Initialize world.

        Args:
            car: Player car (default car if None)
            obstacles: Obstacle field (empty default field if None)
            track: Road curve (can be set later)
        """
        self.car = car or Car()
        self.obstacles = obstacles or ObstacleField()
        self.track: Optional[RoadCurve] = track

        self._time: float = 0.0
        self._frame: int = 0

    @property
    def time(self) -> float:
        """Current simulation time in seconds."""
        return self._time

    @property
    def frame(self) -> int:
        """Current frame number."""
        return self._frame

    @property
    def progress(self) -> float:
        """Car progress along the road in [0, 1]."""
        if self.track is None:
            return 0.0
        return self.track.progress_from_position(self.car.position[2])

    def set_track(self, track: RoadCurve) -> None:
        """Set the road curve.

        Args:
            track: Road to drive on
        """
        self.track = track

    def advance_time(self, dt: float) -> None:
        """Advance simulation time.

        Args:
            dt: Time step in seconds
        """
        self._time += dt
        self._frame += 1

    def reset(self) -> None:
        """Reset car, obstacles and clock. The road is kept."""
        self.car.reset()
        self.obstacles.reset()
        self._time = 0.0
        self._frame = 0

    def get_state(self) -> dict:
        """Get world state.

        Returns:
            Dictionary containing world state
        """
        return {
            "time": self._time,
            "frame": self._frame,
            "progress": self.progress,
            "car": self.car.get_telemetry(),
            "obstacles": self.obstacles.get_state(),
            "track": self.track.get_state() if self.track else None,
        }
