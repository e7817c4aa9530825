"""
Game session - Menu, play and results flow around the simulator.

Manages:
- Session state transitions driven by the confirm input
- Fresh road and obstacles on every start
- End-of-run results
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import logging
import numpy as np

from crashcourse.car.car import CarInputs
from crashcourse.config import GameConfig
from crashcourse.simulation.simulator import Simulator, TickResult


logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Top-level session states."""
    MENU = "menu"
    PLAYING = "playing"
    RESULTS = "results"


@dataclass
class SessionResults:
    """Summary of a finished run."""
    score: int
    obstacles_destroyed: int
    obstacles_total: int
    top_speed_kph: float
    max_combo: int
    elapsed_time: float


class GameSession:
    """Drives a simulator through menu, play and results.

    ``confirm`` in MENU or RESULTS starts a new run. While PLAYING every
    update advances the simulator; reaching the end of the road switches
    to RESULTS.

    Usage:
        session = GameSession()
        session.update(CarInputs(confirm=True), dt)
        while session.state is SessionState.PLAYING:
            session.update(read_inputs(), dt)
        print(session.results)
    """

    def __init__(self, config: GameConfig | None = None):
        """Initialize session in the menu.

        Args:
            config: Game configuration
        """
        self.config = config or GameConfig()
        self.simulator = Simulator(self.config.simulator)
        self.state = SessionState.MENU

        self._rng = np.random.default_rng(self.config.seed)
        self._results: Optional[SessionResults] = None
        self._run_count: int = 0

    @property
    def results(self) -> Optional[SessionResults]:
        """Results of the last finished run."""
        return self._results

    @property
    def run_count(self) -> int:
        """Number of runs started."""
        return self._run_count

    def update(self, inputs: CarInputs, dt: float) -> Optional[TickResult]:
        """Process one frame.

        Args:
            inputs: Driver inputs for this frame
            dt: Raw frame time in seconds

        Returns:
            Tick result while playing, None otherwise
        """
        if self.state is SessionState.PLAYING:
            result = self.simulator.step(inputs, dt)
            if result.finished:
                self.finish()
            return result

        if inputs.confirm:
            self.start()
        return None

    def start(self) -> None:
        """Start (or restart) a run with a fresh road."""
        seed = int(self._rng.integers(0, 2**31 - 1))
        self.simulator.start_run(seed=seed)
        self._results = None
        self._run_count += 1
        self.state = SessionState.PLAYING
        logger.info("Run %d started (seed=%d)", self._run_count, seed)

    def finish(self) -> SessionResults:
        """End the current run and compute results.

        Returns:
            Results of the run
        """
        sim = self.simulator
        self._results = SessionResults(
            score=sim.scoring.score,
            obstacles_destroyed=sim.scoring.destroyed_count,
            obstacles_total=sim.obstacles.initial_count,
            top_speed_kph=sim.car.top_speed_kph,
            max_combo=sim.scoring.max_combo,
            elapsed_time=sim.time,
        )
        self.state = SessionState.RESULTS
        logger.info(
            "Run %d finished: score %d, %d/%d obstacles, top speed %.0f km/h, max combo x%d",
            self._run_count,
            self._results.score,
            self._results.obstacles_destroyed,
            self._results.obstacles_total,
            self._results.top_speed_kph,
            self._results.max_combo,
        )
        return self._results
