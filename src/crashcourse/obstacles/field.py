"""
Obstacle field - Placement and lifecycle of roadside obstacles.

Manages:
- Randomized placement along both road edges
- Destruction of hit obstacles
- Per-tick motion and cleanup of destroyed obstacles
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional
import logging
import numpy as np

from crashcourse.errors import InvalidConfiguration
from crashcourse.obstacles.obstacle import Obstacle, ObstacleConfig
from crashcourse.track.curve import RoadCurve


logger = logging.getLogger(__name__)


@dataclass
class ObstacleFieldConfig:
    """Obstacle placement configuration."""
    obstacle: ObstacleConfig = field(default_factory=ObstacleConfig)

    # Sampling along the road
    samples: int = 200
    start_margin: float = 0.02      # No obstacles before this progress
    end_margin: float = 0.97        # No obstacles after this progress
    keep_probability: float = 0.8   # Chance a sample gets obstacles

    # Lateral placement beyond the road edge
    min_edge_offset: float = 1.0
    max_edge_offset: float = 12.0

    # Clusters
    cluster_probability: float = 0.3
    min_cluster_size: int = 2
    max_cluster_size: int = 3
    cluster_jitter: float = 2.0

    # Random seed (None for random)
    seed: int | None = None


class ObstacleField:
    """Collection of destructible obstacles along the road.

    The field owns its obstacles: it creates them in ``populate()``,
    destroys them on request and drops them once their debris has
    expired. Render consumers key visuals on ``obstacle_id``.

    Usage:
        field = ObstacleField()
        field.populate(curve)
        for obstacle in field.active_obstacles():
            ...
        expired = field.tick(dt)
    """

    def __init__(self, config: ObstacleFieldConfig | None = None):
        """Initialize empty field.

        Args:
            config: Field configuration. Uses defaults if None.
        """
        self.config = config or ObstacleFieldConfig()
        self._rng = np.random.default_rng(self.config.seed)

        self._obstacles: Dict[int, Obstacle] = {}
        self._next_id: int = 0
        self._initial_count: int = 0
        self._destroyed_count: int = 0

    @property
    def obstacles(self) -> List[Obstacle]:
        """All live obstacles, intact or destroyed."""
        return list(self._obstacles.values())

    @property
    def initial_count(self) -> int:
        """Number of obstacles placed by the last populate()."""
        return self._initial_count

    @property
    def destroyed_count(self) -> int:
        """Obstacles destroyed since the last reset, expired ones included."""
        return self._destroyed_count

    def __len__(self) -> int:
        return len(self._obstacles)

    def get(self, obstacle_id: int) -> Optional[Obstacle]:
        """Get obstacle by ID.

        Args:
            obstacle_id: Obstacle ID

        Returns:
            Obstacle if still live
        """
        return self._obstacles.get(obstacle_id)

    def add(self, position, scale: float | None = None) -> Obstacle:
        """Place a single obstacle.

        Args:
            position: World position [x, y, z]
            scale: Size factor (random in the configured range if None)

        Returns:
            The new obstacle
        """
        cfg = self.config.obstacle
        if scale is None:
            scale = self._rng.uniform(cfg.min_scale, cfg.max_scale)

        obstacle = Obstacle(self._next_id, position, scale, cfg)
        self._obstacles[obstacle.obstacle_id] = obstacle
        self._next_id += 1
        return obstacle

    def populate(
        self,
        curve: RoadCurve,
        road_half_width: float | None = None,
    ) -> List[Obstacle]:
        """Scatter obstacles along both sides of the road.

        Args:
            curve: Road curve to follow
            road_half_width: Half road width (curve's value if None)

        Returns:
            Newly placed obstacles

        Raises:
            InvalidConfiguration: If placement parameters are unusable
        """
        cfg = self.config
        half_width = curve.road_half_width if road_half_width is None else road_half_width

        if cfg.samples <= 0:
            raise InvalidConfiguration(f"samples must be positive, got {cfg.samples}")
        if half_width < 0:
            raise InvalidConfiguration(f"road_half_width must be >= 0, got {half_width}")

        placed = []
        for i in range(cfg.samples):
            t = i / cfg.samples

            if t < cfg.start_margin or t > cfg.end_margin:
                continue

            # Vary density
            if self._rng.random() > cfg.keep_probability:
                continue

            point = curve.point_at(t)
            right = curve.right_vector_at(t)

            for side in (-1, 1):
                offset = half_width + self._rng.uniform(cfg.min_edge_offset, cfg.max_edge_offset)
                x = point[0] + right[0] * side * offset
                z = point[2] + right[2] * side * offset

                cluster_size = 1
                if self._rng.random() < cfg.cluster_probability:
                    cluster_size = int(self._rng.integers(cfg.min_cluster_size, cfg.max_cluster_size + 1))

                for c in range(cluster_size):
                    cx, cz = x, z
                    if c > 0:
                        cx += self._rng.uniform(-cfg.cluster_jitter, cfg.cluster_jitter)
                        cz += self._rng.uniform(-cfg.cluster_jitter, cfg.cluster_jitter)
                    placed.append(self.add(np.array([cx, 0.0, cz])))

        self._initial_count += len(placed)
        logger.info("Placed %d obstacles along %.0f m of road", len(placed), curve.total_length)
        return placed

    def destroy(
        self,
        obstacle: Obstacle,
        forward: np.ndarray,
        impact_speed: float,
    ) -> bool:
        """Destroy an obstacle hit by the car.

        Args:
            obstacle: Obstacle that was hit
            forward: Unit direction of the car
            impact_speed: Car speed magnitude at impact

        Returns:
            True if the obstacle was destroyed by this call
        """
        if not obstacle.destroy(forward, impact_speed, self._rng):
            return False

        self._destroyed_count += 1
        logger.debug(
            "Obstacle %d destroyed at speed %.1f (%d fragments)",
            obstacle.obstacle_id, impact_speed, obstacle.fragment_count,
        )
        return True

    def tick(self, dt: float) -> List[Obstacle]:
        """Move destroyed obstacles and drop expired ones.

        Args:
            dt: Time step in seconds

        Returns:
            Obstacles removed this tick
        """
        expired = []
        for obstacle in list(self._obstacles.values()):
            if not obstacle.destroyed:
                continue
            obstacle.update(dt)
            if obstacle.is_expired():
                expired.append(obstacle)
                del self._obstacles[obstacle.obstacle_id]

        return expired

    def active_obstacles(self) -> Iterator[Obstacle]:
        """Iterate intact obstacles.

        Iterates over a snapshot, so destroying obstacles while looping
        is safe.

        Returns:
            Iterator of obstacles that can still be hit
        """
        return (o for o in list(self._obstacles.values()) if not o.destroyed)

    def reset(self) -> None:
        """Remove all obstacles, zero counters and restart the configured seed."""
        self._rng = np.random.default_rng(self.config.seed)
        self._obstacles.clear()
        self._next_id = 0
        self._initial_count = 0
        self._destroyed_count = 0

    def reseed(self, seed: int | None) -> None:
        """Replace the random generator.

        Args:
            seed: New seed (None for random)
        """
        self._rng = np.random.default_rng(seed)

    def get_state(self) -> dict:
        """Get field summary.

        Returns:
            Dictionary with counts
        """
        return {
            "live": len(self._obstacles),
            "active": sum(1 for o in self._obstacles.values() if not o.destroyed),
            "initial_count": self._initial_count,
            "destroyed_count": self._destroyed_count,
        }
