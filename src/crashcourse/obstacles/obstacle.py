"""
Obstacle - Destructible roadside obstacle.

Defines:
- Destruction states (intact, toppled as one body, shattered into fragments)
- Free-fall kinematics for destroyed pieces
- Expiry rules
"""

from dataclasses import dataclass, field
from typing import List, Union
import numpy as np


@dataclass
class ObstacleConfig:
    """Obstacle tuning."""
    # Size
    collision_radius: float = 1.2
    min_scale: float = 0.8
    max_scale: float = 1.4

    # Single-body impulse
    impact_force_factor: float = 6.0      # Impulse per unit impact speed
    lift_factor: float = 0.5              # Vertical share of impulse
    lift_min: float = 5.0
    lift_max: float = 15.0
    spin_limits: tuple[float, float, float] = (3.0, 2.0, 3.0)
    spin_reference_speed: float = 30.0

    # Fragmentation
    fragment_speed_threshold: float = 40.0        # Above this: 2 fragments
    extra_fragment_speed_threshold: float = 70.0  # Above this: 3 fragments
    fragment_force_factor: float = 4.0
    fragment_jitter: float = 10.0
    fragment_lift_min: float = 8.0
    fragment_lift_max: float = 25.0
    fragment_spin_limits: tuple[float, float, float] = (5.0, 3.0, 5.0)
    fragment_spacing: float = 2.0         # Vertical offset between pieces

    # Motion and expiry
    gravity: float = 25.0
    ground_expiry_depth: float = -20.0
    fragment_lifetime_s: float = 5.0


@dataclass
class RigidBody:
    """Kinematic state of a flying piece."""
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.zeros(3))  # Euler angles
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    angular_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def integrate(self, dt: float, gravity: float) -> None:
        """Euler step under gravity.

        Args:
            dt: Time step
            gravity: Downward acceleration
        """
        self.velocity[1] -= gravity * dt
        self.position += self.velocity * dt
        self.rotation += self.angular_velocity * dt


@dataclass(frozen=True)
class Intact:
    """Obstacle still standing."""


@dataclass
class Toppled:
    """Destroyed obstacle flying as one body."""
    body: RigidBody


@dataclass
class Shattered:
    """Destroyed obstacle split into independent fragments."""
    fragments: List[RigidBody]
    elapsed: float = 0.0


DestructionState = Union[Intact, Toppled, Shattered]


class Obstacle:
    """A destructible roadside obstacle.

    Starts ``Intact``. ``destroy()`` moves it once and for all into
    ``Toppled`` or ``Shattered`` depending on impact speed; later calls
    do nothing.
    """

    def __init__(
        self,
        obstacle_id: int,
        position: np.ndarray,
        scale: float = 1.0,
        config: ObstacleConfig | None = None,
    ):
        """Create an intact obstacle.

        Args:
            obstacle_id: Identity within the field
            position: World position [x, y, z]
            scale: Uniform size factor
            config: Obstacle tuning
        """
        self.config = config or ObstacleConfig()
        self.obstacle_id = obstacle_id
        self.position = np.array(position, dtype=float)
        self.scale = float(scale)
        self.state: DestructionState = Intact()

    @property
    def destroyed(self) -> bool:
        """Whether the obstacle has been hit."""
        return not isinstance(self.state, Intact)

    @property
    def collision_radius(self) -> float:
        """Collision radius including scale."""
        return self.config.collision_radius * self.scale

    @property
    def fragment_count(self) -> int:
        """Number of fragments, 0 unless shattered."""
        if isinstance(self.state, Shattered):
            return len(self.state.fragments)
        return 0

    def destroy(
        self,
        forward: np.ndarray,
        impact_speed: float,
        rng: np.random.Generator,
    ) -> bool:
        """Knock the obstacle over.

        Args:
            forward: Unit direction of the car
            impact_speed: Car speed magnitude at impact
            rng: Random generator for impulse perturbation

        Returns:
            True if this call destroyed it, False if already destroyed
        """
        if self.destroyed:
            return False

        if impact_speed > self.config.fragment_speed_threshold:
            self.state = Shattered(fragments=self._split(forward, impact_speed, rng))
        else:
            self.state = Toppled(body=self._launch(forward, impact_speed, rng))

        return True

    def _launch(
        self,
        forward: np.ndarray,
        impact_speed: float,
        rng: np.random.Generator,
    ) -> RigidBody:
        """Build the single flying body for a low-speed hit."""
        cfg = self.config
        force = impact_speed * cfg.impact_force_factor
        spin_scale = impact_speed / cfg.spin_reference_speed

        return RigidBody(
            position=self.position.copy(),
            velocity=np.array([
                forward[0] * force,
                force * cfg.lift_factor + rng.uniform(cfg.lift_min, cfg.lift_max),
                forward[2] * force,
            ]),
            angular_velocity=np.array([
                rng.uniform(-limit, limit) * spin_scale for limit in cfg.spin_limits
            ]),
        )

    def _split(
        self,
        forward: np.ndarray,
        impact_speed: float,
        rng: np.random.Generator,
    ) -> List[RigidBody]:
        """Build fragments for a high-speed hit."""
        cfg = self.config
        count = 3 if impact_speed > cfg.extra_fragment_speed_threshold else 2
        force = impact_speed * cfg.fragment_force_factor

        fragments = []
        for i in range(count):
            position = self.position.copy()
            position[1] += i * cfg.fragment_spacing

            fragments.append(RigidBody(
                position=position,
                velocity=np.array([
                    forward[0] * force + rng.uniform(-cfg.fragment_jitter, cfg.fragment_jitter),
                    rng.uniform(cfg.fragment_lift_min, cfg.fragment_lift_max),
                    forward[2] * force + rng.uniform(-cfg.fragment_jitter, cfg.fragment_jitter),
                ]),
                angular_velocity=np.array([
                    rng.uniform(-limit, limit) for limit in cfg.fragment_spin_limits
                ]),
            ))

        return fragments

    def update(self, dt: float) -> None:
        """Advance destroyed pieces under gravity.

        Args:
            dt: Time step in seconds
        """
        gravity = self.config.gravity

        if isinstance(self.state, Toppled):
            self.state.body.integrate(dt, gravity)
            self.position = self.state.body.position.copy()
        elif isinstance(self.state, Shattered):
            self.state.elapsed += dt
            for fragment in self.state.fragments:
                fragment.integrate(dt, gravity)

    def is_expired(self) -> bool:
        """Check whether the destroyed obstacle can be discarded.

        Returns:
            True once a single body falls below the ground depth or
            fragments outlive their lifetime
        """
        if isinstance(self.state, Toppled):
            return self.state.body.position[1] < self.config.ground_expiry_depth
        if isinstance(self.state, Shattered):
            return self.state.elapsed > self.config.fragment_lifetime_s
        return False

    def get_state(self) -> dict:
        """Get obstacle state.

        Returns:
            Dictionary for render or debug consumers
        """
        if isinstance(self.state, Toppled):
            status = "toppled"
        elif isinstance(self.state, Shattered):
            status = "shattered"
        else:
            status = "intact"

        return {
            "obstacle_id": self.obstacle_id,
            "position": self.position.tolist(),
            "scale": self.scale,
            "status": status,
            "fragment_count": self.fragment_count,
        }

    def __repr__(self) -> str:
        return f"Obstacle(id={self.obstacle_id}, state={type(self.state).__name__})"
