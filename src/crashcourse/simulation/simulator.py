"""
Simulator - Fixed-order tick loop for one run.

Provides:
- Delta-time clamping
- Car, boundary, collision, scoring and obstacle updates in order
- Collision event queue and listeners
- Slow motion after big hits
"""

from dataclasses import dataclass, field
from typing import Callable, List
import logging
import numpy as np

from crashcourse.car.car import Car, CarConfig, CarInputs
from crashcourse.obstacles.field import ObstacleField, ObstacleFieldConfig
from crashcourse.obstacles.obstacle import Obstacle
from crashcourse.scoring.scoring_system import ScoringSystem, ScoringConfig, HitResult
from crashcourse.simulation.collision import CollisionDetector, CollisionConfig, CollisionEvent
from crashcourse.simulation.world import World
from crashcourse.track.boundary import TrackBoundary, BoundaryConfig
from crashcourse.track.curve import RoadCurve
from crashcourse.track.generator import RoadGenerator, RoadGeneratorConfig


logger = logging.getLogger(__name__)


@dataclass
class SimulatorConfig:
    """Simulator configuration."""
    # Time stepping
    max_dt: float = 0.05             # Clamp for frame hitches

    # Slow motion after big hits
    slow_motion_speed: float = 60.0  # Impact speed that triggers it
    slow_motion_scale: float = 0.3
    slow_motion_duration_s: float = 0.2  # Real (unscaled) seconds

    # Component configs
    generator: RoadGeneratorConfig | None = None
    car: CarConfig | None = None
    boundary: BoundaryConfig | None = None
    obstacles: ObstacleFieldConfig | None = None
    collision: CollisionConfig | None = None
    scoring: ScoringConfig | None = None


@dataclass
class TickResult:
    """Everything that happened during one tick."""
    dt: float                        # Scaled time step actually simulated
    time: float                      # Simulation time after the tick
    progress: float
    boundary_distance: float
    events: List[CollisionEvent] = field(default_factory=list)
    hits: List[HitResult] = field(default_factory=list)
    expired: List[Obstacle] = field(default_factory=list)
    combo_expired: bool = False

    @property
    def finished(self) -> bool:
        """Whether the car reached the end of the road."""
        return self.progress >= 1.0


HitListener = Callable[[CollisionEvent, HitResult], None]


class Simulator:
    """Single-run arcade simulation.

    Each ``step()`` runs, in this order: car integration, boundary pull,
    collision detection (with scoring of every hit), obstacle debris
    motion, combo expiry. Everything is synchronous and single-threaded.

    Usage:
        sim = Simulator()
        sim.start_run(seed=42)
        while True:
            result = sim.step(CarInputs(forward=True), dt=frame_time)
            if result.finished:
                break
    """

    def __init__(self, config: SimulatorConfig | None = None):
        """Initialize simulator.

        Args:
            config: Simulator configuration. Uses defaults if None.
        """
        self.config = config or SimulatorConfig()

        self.generator = RoadGenerator(self.config.generator)
        self.boundary = TrackBoundary(self.config.boundary)
        self.collision = CollisionDetector(self.config.collision)
        self.scoring = ScoringSystem(self.config.scoring)
        self.world = World(
            car=Car(self.config.car),
            obstacles=ObstacleField(self.config.obstacles),
        )

        # Collision event queue
        self._pending_events: List[CollisionEvent] = []
        self._hit_listeners: List[HitListener] = []

        # Slow motion
        self._time_scale: float = 1.0
        self._slow_motion_timer: float = 0.0

    @property
    def car(self) -> Car:
        """The player car."""
        return self.world.car

    @property
    def obstacles(self) -> ObstacleField:
        """The obstacle field."""
        return self.world.obstacles

    @property
    def track(self) -> RoadCurve | None:
        """Current road curve."""
        return self.world.track

    @property
    def time(self) -> float:
        """Current simulation time."""
        return self.world.time

    @property
    def time_scale(self) -> float:
        """Current time scale (below 1 during slow motion)."""
        return self._time_scale

    @property
    def progress(self) -> float:
        """Car progress along the road in [0, 1]."""
        return self.world.progress

    def add_hit_listener(self, listener: HitListener) -> None:
        """Register a sink for collision events.

        Listeners run after the tick has finished, once per event. They
        must not mutate simulation state.

        Args:
            listener: Function taking (event, hit_result)
        """
        self._hit_listeners.append(listener)

    def drain_events(self) -> List[CollisionEvent]:
        """Take all queued collision events.

        Returns:
            Events since the last drain, oldest first
        """
        events = self._pending_events
        self._pending_events = []
        return events

    def start_run(self, seed: int | None = None) -> RoadCurve:
        """Discard all state and set up a fresh run.

        Args:
            seed: Road and obstacle seed (component config seeds if None)

        Returns:
            The newly generated road
        """
        # Also restarts the obstacle field at its configured seed
        self.reset()

        track = self.generator.generate(seed=seed)
        self.world.set_track(track)

        if seed is not None:
            self.world.obstacles.reseed(seed)
        self.world.obstacles.populate(track)

        logger.info(
            "Run started: %.0f m road, %d obstacles",
            track.total_length, self.world.obstacles.initial_count,
        )
        return track

    def clamp_dt(self, dt: float) -> float:
        """Clamp a frame delta to [0, max_dt].

        Args:
            dt: Raw frame time in seconds

        Returns:
            Clamped time step
        """
        return float(np.clip(dt, 0.0, self.config.max_dt))

    def step(self, inputs: CarInputs | None = None, dt: float = 1 / 60) -> TickResult:
        """Advance the simulation by one tick.

        Args:
            inputs: Driver inputs (nothing pressed if None)
            dt: Raw frame time in seconds

        Returns:
            Tick summary

        Raises:
            RuntimeError: If no road has been set
        """
        track = self.world.track
        if track is None:
            raise RuntimeError("No track set")

        inputs = inputs or CarInputs()
        scaled_dt = self._advance_time_scale(dt)
        car = self.world.car
        now = self.world.time + scaled_dt

        car.step(inputs, scaled_dt)
        distance = self.boundary.apply(car, track, scaled_dt)

        events = self.collision.detect(car, self.world.obstacles, now)
        hits = []
        for event in events:
            hits.append(self.scoring.register_hit(event.impact_speed, car.max_speed, now))
            if event.impact_speed > self.config.slow_motion_speed:
                self._time_scale = self.config.slow_motion_scale
                self._slow_motion_timer = self.config.slow_motion_duration_s

        expired = self.world.obstacles.tick(scaled_dt)
        combo_expired = self.scoring.tick(now)

        self.world.advance_time(scaled_dt)

        self._pending_events.extend(events)
        for event, hit in zip(events, hits):
            for listener in self._hit_listeners:
                listener(event, hit)

        return TickResult(
            dt=scaled_dt,
            time=self.world.time,
            progress=self.world.progress,
            boundary_distance=distance,
            events=events,
            hits=hits,
            expired=expired,
            combo_expired=combo_expired,
        )

    def _advance_time_scale(self, raw_dt: float) -> float:
        """Update slow motion and return the scaled step.

        Args:
            raw_dt: Unclamped frame time

        Returns:
            Clamped and scaled time step
        """
        if self._slow_motion_timer > 0:
            self._slow_motion_timer -= max(raw_dt, 0.0)
            if self._slow_motion_timer <= 0:
                self._time_scale = 1.0

        return self.clamp_dt(raw_dt) * self._time_scale

    def reset(self) -> None:
        """Reset car, obstacles, scoring and clock. The road is kept."""
        self.world.reset()
        self.scoring.reset()
        self.boundary.reset()
        self._pending_events = []
        self._time_scale = 1.0
        self._slow_motion_timer = 0.0

    def get_state(self) -> dict:
        """Get complete simulation state.

        Returns:
            Dictionary containing simulation state
        """
        return {
            "config": {
                "max_dt": self.config.max_dt,
                "slow_motion_speed": self.config.slow_motion_speed,
            },
            "time_scale": self._time_scale,
            "boundary_distance": self.boundary.last_distance,
            "world": self.world.get_state(),
            "scoring": self.scoring.get_state(),
        }
