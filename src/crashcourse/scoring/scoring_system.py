"""
Scoring system - Points and combos for destroyed obstacles.

Provides:
- Speed-scaled points per hit
- Time-windowed combo streaks
- Session statistics
"""

from dataclasses import dataclass
from typing import Dict, Any
import logging
import math


logger = logging.getLogger(__name__)


@dataclass
class ScoringConfig:
    """Scoring configuration."""
    base_points: int = 100
    max_speed_bonus: float = 4.0     # Extra multiplier at full speed
    combo_window_s: float = 1.5      # Max gap between hits to keep a combo
    max_combo_multiplier: int = 10


@dataclass
class HitResult:
    """Outcome of scoring a single hit."""
    points: int
    combo_multiplier: int
    speed_multiplier: float


@dataclass
class ScoreState:
    """Session scoring counters."""
    score: int = 0
    destroyed_count: int = 0
    combo_count: int = 0
    max_combo: int = 0
    last_hit_time: float | None = None


class ScoringSystem:
    """Score and combo tracker.

    All timing uses the simulation clock passed in by the caller, never
    wall-clock time.

    Usage:
        scoring = ScoringSystem()
        result = scoring.register_hit(impact_speed=40.0, max_speed=50.0, now=12.3)
        scoring.tick(now=14.0)
    """

    def __init__(self, config: ScoringConfig | None = None):
        """Initialize scoring system.

        Args:
            config: Scoring configuration
        """
        self.config = config or ScoringConfig()
        self.state = ScoreState()

    @property
    def score(self) -> int:
        """Total score."""
        return self.state.score

    @property
    def combo_count(self) -> int:
        """Current combo streak."""
        return self.state.combo_count

    @property
    def max_combo(self) -> int:
        """Longest streak this session."""
        return self.state.max_combo

    @property
    def destroyed_count(self) -> int:
        """Obstacles scored this session."""
        return self.state.destroyed_count

    def _within_window(self, now: float) -> bool:
        last = self.state.last_hit_time
        return last is not None and now - last < self.config.combo_window_s

    def register_hit(
        self,
        impact_speed: float,
        max_speed: float,
        now: float,
    ) -> HitResult:
        """Score a hit.

        Args:
            impact_speed: Car speed at impact
            max_speed: Car's top speed, used to normalize
            now: Simulation time of the hit in seconds

        Returns:
            Points and multipliers for this hit
        """
        state = self.state

        if self._within_window(now):
            state.combo_count += 1
        else:
            state.combo_count = 1
        state.last_hit_time = now

        if state.combo_count > state.max_combo:
            state.max_combo = state.combo_count

        speed_ratio = abs(impact_speed) / max_speed if max_speed > 0 else 0.0
        speed_multiplier = 1.0 + speed_ratio * self.config.max_speed_bonus
        combo_multiplier = min(state.combo_count, self.config.max_combo_multiplier)

        # Round half up
        points = int(math.floor(self.config.base_points * speed_multiplier * combo_multiplier + 0.5))

        state.score += points
        state.destroyed_count += 1

        logger.debug(
            "Hit scored %d (speed x%.2f, combo x%d)", points, speed_multiplier, combo_multiplier,
        )
        return HitResult(points, combo_multiplier, speed_multiplier)

    def tick(self, now: float) -> bool:
        """Expire the combo once the window has passed.

        Args:
            now: Current simulation time

        Returns:
            True if the combo expired on this call
        """
        state = self.state
        if state.combo_count == 0 or state.last_hit_time is None:
            return False

        if now - state.last_hit_time > self.config.combo_window_s:
            state.combo_count = 0
            return True
        return False

    def reset(self) -> None:
        """Zero all session counters."""
        self.state = ScoreState()

    def get_state(self) -> Dict[str, Any]:
        """Get scoring state.

        Returns:
            Dictionary with all counters
        """
        return {
            "score": self.state.score,
            "destroyed_count": self.state.destroyed_count,
            "combo_count": self.state.combo_count,
            "max_combo": self.state.max_combo,
            "last_hit_time": self.state.last_hit_time,
        }

    def get_metrics(self) -> Dict[str, Any]:
        """Get derived session metrics.

        Returns:
            Dictionary of metrics
        """
        hits = self.state.destroyed_count
        return {
            "score": self.state.score,
            "hits": hits,
            "average_points_per_hit": self.state.score / hits if hits else 0.0,
            "max_combo": self.state.max_combo,
            "combo_active": self.state.combo_count > 0,
        }
