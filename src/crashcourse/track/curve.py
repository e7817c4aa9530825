"""
Road curve - Smooth 3D centerline of the road.

Provides:
- Centripetal Catmull-Rom interpolation through control points
- Arc-length parameterized sampling (position, tangent, right vector)
- Approximate progress lookup from a world position
"""

from typing import Tuple
import numpy as np

from crashcourse.errors import InvalidConfiguration


# World up axis (y-up, road runs along -z)
UP = np.array([0.0, 1.0, 0.0])


class RoadCurve:
    """Immutable spline through the road's control points.

    Sampling uses a normalized arc-length parameter ``t`` in [0, 1]:
    ``t = 0.5`` is halfway along the road measured in world units, not
    halfway through the control point list. Values outside [0, 1] are
    clamped.

    Usage:
        curve = RoadCurve(points, track_length=800.0)
        pos = curve.point_at(0.5)
        right = curve.right_vector_at(0.5)
    """

    def __init__(
        self,
        control_points: np.ndarray,
        track_length: float,
        road_half_width: float = 6.0,
        arc_length_divisions: int = 2000,
    ):
        """Build the spline and its arc-length table.

        Args:
            control_points: Array of shape (N, 3), N >= 2
            track_length: Nominal start-to-finish length along -z
            road_half_width: Half of the paved road width
            arc_length_divisions: Samples used for arc-length lookup
        """
        points = np.array(control_points, dtype=float)
        if points.ndim != 2 or points.shape[1] != 3 or len(points) < 2:
            raise InvalidConfiguration(
                f"Road curve needs at least 2 control points of shape (N, 3), got {points.shape}"
            )
        if track_length <= 0:
            raise InvalidConfiguration(f"Track length must be positive, got {track_length}")

        points.flags.writeable = False
        self._points = points
        self.track_length = float(track_length)
        self.road_half_width = float(road_half_width)

        self._coefficients = self._build_coefficients(points)

        # Arc-length table: cumulative length at evenly spaced spline parameters
        self._u_samples = np.linspace(0.0, 1.0, max(arc_length_divisions, 1) + 1)
        samples = self._evaluate(self._u_samples)
        step_lengths = np.linalg.norm(np.diff(samples, axis=0), axis=1)
        self._cumulative = np.concatenate([[0.0], np.cumsum(step_lengths)])
        self._total_length = float(self._cumulative[-1])

    @staticmethod
    def _build_coefficients(points: np.ndarray) -> np.ndarray:
        """Precompute cubic coefficients for every spline segment.

        Args:
            points: Control points (N, 3)

        Returns:
            Array of shape (N-1, 4, 3) holding c0..c3 per segment
        """
        # Phantom end points mirror the first/last pair
        start = 2 * points[0] - points[1]
        end = 2 * points[-1] - points[-2]
        padded = np.vstack([start, points, end])

        p0 = padded[:-3]
        p1 = padded[1:-2]
        p2 = padded[2:-1]
        p3 = padded[3:]

        # Centripetal parameterization: knot spacing is sqrt of chord length
        dt0 = np.linalg.norm(p1 - p0, axis=1) ** 0.5
        dt1 = np.linalg.norm(p2 - p1, axis=1) ** 0.5
        dt2 = np.linalg.norm(p3 - p2, axis=1) ** 0.5

        # Guard repeated points
        dt1 = np.where(dt1 < 1e-4, 1.0, dt1)
        dt0 = np.where(dt0 < 1e-4, dt1, dt0)
        dt2 = np.where(dt2 < 1e-4, dt1, dt2)

        dt0 = dt0[:, None]
        dt1 = dt1[:, None]
        dt2 = dt2[:, None]

        t1 = (p1 - p0) / dt0 - (p2 - p0) / (dt0 + dt1) + (p2 - p1) / dt1
        t2 = (p2 - p1) / dt1 - (p3 - p1) / (dt1 + dt2) + (p3 - p2) / dt2

        # Rescale tangents to the [0, 1] segment parameter
        t1 = t1 * dt1
        t2 = t2 * dt1

        c0 = p1
        c1 = t1
        c2 = -3 * p1 + 3 * p2 - 2 * t1 - t2
        c3 = 2 * p1 - 2 * p2 + t1 + t2

        return np.stack([c0, c1, c2, c3], axis=1)

    def _locate(self, u: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Map spline parameters to (segment index, local weight)."""
        segments = len(self._coefficients)
        scaled = np.clip(u, 0.0, 1.0) * segments
        index = np.clip(np.floor(scaled).astype(int), 0, segments - 1)
        return index, scaled - index

    def _evaluate(self, u: np.ndarray) -> np.ndarray:
        """Evaluate spline positions at raw spline parameters."""
        index, w = self._locate(u)
        c = self._coefficients[index]
        w = w[:, None]
        return c[:, 0] + c[:, 1] * w + c[:, 2] * w**2 + c[:, 3] * w**3

    def _derivative(self, u: np.ndarray) -> np.ndarray:
        """Evaluate spline first derivative at raw spline parameters."""
        index, w = self._locate(u)
        c = self._coefficients[index]
        w = w[:, None]
        return c[:, 1] + 2 * c[:, 2] * w + 3 * c[:, 3] * w**2

    def _u_from_t(self, t) -> np.ndarray:
        """Convert arc-length fractions into spline parameters."""
        t = np.clip(np.atleast_1d(np.asarray(t, dtype=float)), 0.0, 1.0)
        return np.interp(t * self._total_length, self._cumulative, self._u_samples)

    @property
    def control_points(self) -> np.ndarray:
        """Read-only control points (N, 3)."""
        return self._points

    @property
    def num_segments(self) -> int:
        """Number of spline segments between control points."""
        return len(self._points) - 1

    @property
    def total_length(self) -> float:
        """Arc length of the spline."""
        return self._total_length

    def points_at(self, ts) -> np.ndarray:
        """Positions at several arc-length fractions.

        Args:
            ts: Sequence of fractions in [0, 1]

        Returns:
            Array of shape (len(ts), 3)
        """
        return self._evaluate(self._u_from_t(ts))

    def point_at(self, t: float) -> np.ndarray:
        """Position on the road centerline.

        Args:
            t: Arc-length fraction in [0, 1]

        Returns:
            World position [x, y, z]
        """
        return self.points_at(t)[0]

    def tangent_at(self, t: float) -> np.ndarray:
        """Unit forward direction of the road.

        Args:
            t: Arc-length fraction in [0, 1]

        Returns:
            Unit vector [x, y, z]
        """
        derivative = self._derivative(self._u_from_t(t))[0]
        norm = np.linalg.norm(derivative)
        if norm < 1e-12:
            return np.array([0.0, 0.0, -1.0])
        return derivative / norm

    def right_vector_at(self, t: float) -> np.ndarray:
        """Unit vector perpendicular to the road, in the ground plane.

        Args:
            t: Arc-length fraction in [0, 1]

        Returns:
            normalize(cross(tangent, up))
        """
        right = np.cross(self.tangent_at(t), UP)
        norm = np.linalg.norm(right)
        if norm < 1e-12:
            return np.array([1.0, 0.0, 0.0])
        return right / norm

    def progress_from_position(self, world_z: float) -> float:
        """Approximate progress along the road from a world z coordinate.

        The road runs from z=0 to z=-track_length and is mostly
        z-monotonic, so this ignores x entirely. It is not a nearest-point
        projection and drifts on sharply curved sections.

        Args:
            world_z: World z coordinate

        Returns:
            Progress in [0, 1]
        """
        return float(np.clip(-world_z / self.track_length, 0.0, 1.0))

    @property
    def start_position(self) -> np.ndarray:
        """Centerline point at the start of the road."""
        return self.point_at(0.0)

    @property
    def start_heading(self) -> float:
        """Yaw of the road at the start (0 = +z, pi = -z)."""
        tangent = self.tangent_at(0.0)
        return float(np.arctan2(tangent[0], tangent[2]))

    def get_state(self) -> dict:
        """Get curve description.

        Returns:
            Dictionary with curve geometry summary
        """
        return {
            "num_control_points": len(self._points),
            "track_length": self.track_length,
            "total_length": self._total_length,
            "road_half_width": self.road_half_width,
            "max_lateral_offset": float(np.max(np.abs(self._points[:, 0]))),
        }
