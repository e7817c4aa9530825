"""
Car - Arcade vehicle model.

Integrates:
- Throttle, brake and drag along the heading
- Self-centering steering
- Speed-scaled turn rate (no spinning in place)
- Top speed tracking
"""

from dataclasses import dataclass, field
from typing import Dict, Any
import numpy as np


# m/s to km/h for display values
KPH_PER_MPS = 3.6


@dataclass
class CarConfig:
    """Car tuning.

    Defaults are tuned for arcade feel rather than
    anything physically measured.
    """
    # Longitudinal
    acceleration: float = 25.0       # Speed gained per second on throttle
    brake_force: float = 40.0        # Speed lost per second on brake
    max_speed: float = 50.0
    max_reverse_speed: float = 10.0
    drag: float = 0.4                # Fraction of speed lost per second

    # Steering
    steer_speed: float = 2.5         # Steer angle gained per second of input
    steer_decay: float = 0.90        # Per-tick multiplier toward center
    turn_reference_speed: float = 25.0  # Speed at which turning reaches full rate

    # Body
    ride_height: float = 0.5
    collision_radius: float = 2.0
    front_offset: float = 2.2        # Distance from center to front bumper

    # Spawn
    spawn_position: tuple[float, float, float] = (0.0, 0.5, -5.0)
    spawn_heading: float = np.pi     # Facing -z, down the road


@dataclass
class CarInputs:
    """Logical driver inputs for one tick."""
    forward: bool = False
    brake: bool = False
    left: bool = False
    right: bool = False
    confirm: bool = False            # Edge-triggered, session-level only


@dataclass
class CarState:
    """Current car state for integration."""
    # World position [x, y, z]
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))

    # Yaw about the vertical axis (0 = +z, pi = -z)
    heading: float = 0.0

    # Signed speed along heading, forward positive
    speed: float = 0.0

    # Signed steering deflection, positive turns left
    steer_angle: float = 0.0


class Car:
    """Arcade car.

    A simplified longitudinal + steering integrator tuned for feel. The
    car has no mass, tires or slip; speed is a scalar along the heading.

    Usage:
        car = Car()
        car.step(CarInputs(forward=True), dt=0.016)
        print(car.speed_kph)
    """

    def __init__(self, config: CarConfig | None = None):
        """Initialize car with optional configuration.

        Args:
            config: Car configuration. Uses defaults if None.
        """
        self.config = config or CarConfig()
        self.state = CarState()
        self.top_speed_kph: float = 0.0

        self.reset()

    def reset(self) -> None:
        """Restore the canonical spawn state."""
        self.state = CarState(
            position=np.array(self.config.spawn_position, dtype=float),
            heading=float(self.config.spawn_heading),
        )
        self.top_speed_kph = 0.0

    @property
    def speed(self) -> float:
        """Signed speed."""
        return self.state.speed

    @property
    def speed_kph(self) -> float:
        """Speed magnitude in km/h."""
        return abs(self.state.speed) * KPH_PER_MPS

    @property
    def position(self) -> np.ndarray:
        """Current world position."""
        return self.state.position

    @property
    def heading(self) -> float:
        """Current heading in radians."""
        return self.state.heading

    @property
    def max_speed(self) -> float:
        """Configured forward speed cap."""
        return self.config.max_speed

    @property
    def forward_vector(self) -> np.ndarray:
        """Unit vector along the heading, in the ground plane."""
        return np.array([np.sin(self.state.heading), 0.0, np.cos(self.state.heading)])

    @property
    def front_position(self) -> np.ndarray:
        """World position of the front bumper."""
        return self.state.position + self.forward_vector * self.config.front_offset

    @property
    def turn_rate(self) -> float:
        """Current yaw rate in rad/s."""
        speed_factor = min(abs(self.state.speed) / self.config.turn_reference_speed, 1.0)
        return self.state.steer_angle * speed_factor

    def step(self, inputs: CarInputs, dt: float) -> CarState:
        """Advance car by one tick.

        Args:
            inputs: Driver inputs
            dt: Time step in seconds (negative values treated as 0)

        Returns:
            Updated car state
        """
        dt = max(dt, 0.0)
        cfg = self.config
        state = self.state

        # Throttle / brake, then drag
        if inputs.forward:
            state.speed += cfg.acceleration * dt
        elif inputs.brake:
            state.speed -= cfg.brake_force * dt

        state.speed *= 1.0 - cfg.drag * dt
        state.speed = float(np.clip(state.speed, -cfg.max_reverse_speed, cfg.max_speed))

        # Steering with self-centering
        if inputs.left:
            state.steer_angle += cfg.steer_speed * dt
        if inputs.right:
            state.steer_angle -= cfg.steer_speed * dt
        state.steer_angle *= cfg.steer_decay

        # Turning needs speed
        state.heading += self.turn_rate * dt

        # Move along heading
        state.position[0] += np.sin(state.heading) * state.speed * dt
        state.position[2] += np.cos(state.heading) * state.speed * dt
        state.position[1] = max(cfg.ride_height, state.position[1])

        if self.speed_kph > self.top_speed_kph:
            self.top_speed_kph = self.speed_kph

        return state

    def apply_impact_slowdown(self, factor: float = 0.85) -> None:
        """Scale speed after hitting something.

        Args:
            factor: Speed multiplier, expected below 1
        """
        self.state.speed *= factor

    def get_telemetry(self) -> Dict[str, Any]:
        """Get car telemetry.

        Returns:
            Dictionary of current car values
        """
        return {
            "x": float(self.state.position[0]),
            "y": float(self.state.position[1]),
            "z": float(self.state.position[2]),
            "heading_rad": self.state.heading,
            "heading_deg": float(np.degrees(self.state.heading)),
            "speed": self.state.speed,
            "speed_kph": self.speed_kph,
            "steer_angle": self.state.steer_angle,
            "turn_rate": self.turn_rate,
            "top_speed_kph": self.top_speed_kph,
        }
