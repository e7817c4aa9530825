"""
Scoring module - Points, combos and session statistics.

This module contains:
- ScoringSystem: Hit scoring with time-windowed combos
- HitResult: Points and multipliers of one hit
- ScoreState: Session counters
"""

from crashcourse.scoring.scoring_system import (
    ScoringSystem,
    ScoringConfig,
    HitResult,
    ScoreState,
)

__all__ = [
    "ScoringSystem",
    "ScoringConfig",
    "HitResult",
    "ScoreState",
]
