"""
Track module - Procedural road generation and road queries.

This module contains:
- RoadCurve: Arc-length sampled spline centerline
- RoadGenerator: Procedural road generation
- TrackBoundary: Soft pull back toward the road
"""

from crashcourse.track.curve import RoadCurve
from crashcourse.track.generator import RoadGenerator, RoadGeneratorConfig
from crashcourse.track.boundary import TrackBoundary, BoundaryConfig

__all__ = [
    "RoadCurve",
    "RoadGenerator",
    "RoadGeneratorConfig",
    "TrackBoundary",
    "BoundaryConfig",
]
