"""
Road generator - Procedural road centerline generation.

Generates:
- Organic lateral curvature from layered sine waves
- Gentle elevation changes
- Straight spawn and finish zones
"""

from dataclasses import dataclass
from typing import Tuple
import logging
import numpy as np

from crashcourse.errors import InvalidConfiguration
from crashcourse.track.curve import RoadCurve


logger = logging.getLogger(__name__)

# Fewer points leave no curved section between the straight end zones
MIN_SEGMENT_COUNT = 8


@dataclass
class RoadGeneratorConfig:
    """Configuration for procedural road generation."""
    # Road dimensions
    segment_count: int = 30
    track_length: float = 800.0
    road_half_width: float = 6.0

    # Points within this many segments of either end stay on x=0
    straight_segments: int = 3

    # Lateral shape: (amplitude, frequency per point index, phase)
    lateral_waves: Tuple[Tuple[float, float, float], ...] = (
        (35.0, 0.3, 0.0),
        (18.0, 0.7, 1.0),
        (10.0, 1.4, 2.0),
    )

    # Elevation
    elevation_amplitude: float = 2.0
    elevation_frequency: float = 0.15

    # Max extra phase per wave drawn from a seed
    phase_jitter: float = np.pi

    # Arc-length lookup resolution
    arc_length_divisions: int = 2000

    # Random seed (None for the canonical layout)
    seed: int | None = None


class RoadGenerator:
    """Procedural road generator.

    Places ``segment_count + 1`` control points evenly along -z and offsets
    the interior ones sideways with three sine waves of different
    frequency. The same seed always produces the same road; no seed gives
    the canonical layout.

    Usage:
        generator = RoadGenerator()
        curve = generator.generate()
        curve = generator.generate_with_seed(42)
    """

    def __init__(self, config: RoadGeneratorConfig | None = None):
        """Initialize generator with optional configuration.

        Args:
            config: Generator configuration. Uses defaults if None.
        """
        self.config = config or RoadGeneratorConfig()

    def generate(
        self,
        segment_count: int | None = None,
        track_length: float | None = None,
        seed: int | None = None,
    ) -> RoadCurve:
        """Generate a new road curve.

        Args:
            segment_count: Number of spline segments (config default if None)
            track_length: Start-to-finish length (config default if None)
            seed: Layout seed (config seed if None)

        Returns:
            Generated RoadCurve

        Raises:
            InvalidConfiguration: If the parameters cannot form a road
        """
        segment_count = self.config.segment_count if segment_count is None else segment_count
        track_length = self.config.track_length if track_length is None else track_length
        seed = self.config.seed if seed is None else seed

        if segment_count < MIN_SEGMENT_COUNT:
            raise InvalidConfiguration(
                f"segment_count must be at least {MIN_SEGMENT_COUNT}, got {segment_count}"
            )
        if track_length <= 0:
            raise InvalidConfiguration(f"track_length must be positive, got {track_length}")
        if self.config.road_half_width <= 0:
            raise InvalidConfiguration(
                f"road_half_width must be positive, got {self.config.road_half_width}"
            )

        phases = self._phase_offsets(seed)
        points = self._control_points(segment_count, track_length, phases)

        curve = RoadCurve(
            points,
            track_length=track_length,
            road_half_width=self.config.road_half_width,
            arc_length_divisions=self.config.arc_length_divisions,
        )

        logger.info(
            "Generated road: %d segments, %.0f m nominal, %.1f m arc length (seed=%s)",
            segment_count, track_length, curve.total_length, seed,
        )
        return curve

    def generate_with_seed(self, seed: int) -> RoadCurve:
        """Generate road with specific seed.

        Args:
            seed: Random seed

        Returns:
            Generated road curve
        """
        return self.generate(seed=seed)

    def _phase_offsets(self, seed: int | None) -> np.ndarray:
        """Per-wave phase offsets for a seed.

        Args:
            seed: Layout seed, None for the canonical layout

        Returns:
            One phase offset per lateral wave
        """
        count = len(self.config.lateral_waves)
        if seed is None:
            return np.zeros(count)
        rng = np.random.default_rng(seed)
        return rng.uniform(-self.config.phase_jitter, self.config.phase_jitter, count)

    def _control_points(
        self,
        segment_count: int,
        track_length: float,
        phases: np.ndarray,
    ) -> np.ndarray:
        """Build the control point array.

        Args:
            segment_count: Number of segments
            track_length: Start-to-finish length
            phases: Per-wave phase offsets

        Returns:
            Array of shape (segment_count + 1, 3)
        """
        index = np.arange(segment_count + 1, dtype=float)
        segment_length = track_length / segment_count

        x = np.zeros_like(index)
        for (amplitude, frequency, phase), offset in zip(self.config.lateral_waves, phases):
            x += amplitude * np.sin(index * frequency + phase + offset)

        # Straight start and finish zones
        straight = self.config.straight_segments
        interior = (index > straight) & (index < segment_count - straight)
        x = np.where(interior, x, 0.0)

        y = self.config.elevation_amplitude * np.sin(index * self.config.elevation_frequency)
        z = -index * segment_length

        return np.column_stack([x, y, z])
