"""Tests for the CrashCourse simulation module."""

import pytest
import numpy as np

from crashcourse.car.car import CarConfig, CarInputs
from crashcourse.obstacles.field import ObstacleFieldConfig
from crashcourse.simulation.simulator import Simulator, SimulatorConfig
from crashcourse.simulation.world import World
from crashcourse.track import RoadGenerator, RoadGeneratorConfig


def started(config: SimulatorConfig | None = None, seed: int = 1) -> Simulator:
    sim = Simulator(config)
    sim.start_run(seed=seed)
    return sim


def with_single_obstacle(sim: Simulator, speed: float) -> None:
    """Replace the populated field with one obstacle ahead of the car."""
    sim.obstacles.reset()
    sim.obstacles.add([0.0, 0.0, -9.0], scale=1.0)
    sim.car.state.speed = speed


class TestWorld:
    """Test world state management."""

    def test_world_creation(self):
        """World starts at time zero with no road."""
        world = World()

        assert world.time == 0.0
        assert world.frame == 0
        assert world.track is None
        assert world.progress == 0.0

    def test_advance_time(self):
        """Clock and frame counter advance together."""
        world = World()
        world.advance_time(0.05)
        world.advance_time(0.05)

        assert world.time == pytest.approx(0.1)
        assert world.frame == 2

    def test_reset_keeps_track(self):
        """Reset clears the run but keeps the road."""
        track = RoadGenerator().generate()
        world = World(track=track)
        world.advance_time(1.0)
        world.car.state.position[2] = -400.0

        world.reset()

        assert world.track is track
        assert world.time == 0.0
        assert world.progress == pytest.approx(5.0 / 800.0)


class TestSimulatorSetup:
    """Test run setup and time stepping."""

    def test_step_without_run(self):
        """Stepping before a road exists is an error."""
        with pytest.raises(RuntimeError):
            Simulator().step(CarInputs(), 0.016)

    def test_start_run_builds_world(self):
        """A run has a road and obstacles."""
        sim = started()

        assert sim.track is not None
        assert sim.obstacles.initial_count > 0
        assert sim.time == 0.0
        assert sim.progress == pytest.approx(5.0 / 800.0)

    def test_same_seed_same_run(self):
        """Seeded runs are reproducible."""
        a = started(seed=9)
        b = started(seed=9)

        assert np.array_equal(a.track.control_points, b.track.control_points)
        positions_a = np.array([o.position for o in a.obstacles.obstacles])
        positions_b = np.array([o.position for o in b.obstacles.obstacles])
        assert np.array_equal(positions_a, positions_b)

    def test_configured_seeds_repeat_on_restart(self):
        """Without a run seed, every start uses the configured seeds."""
        sim = Simulator(SimulatorConfig(
            generator=RoadGeneratorConfig(seed=7),
            obstacles=ObstacleFieldConfig(seed=7),
        ))
        sim.start_run()
        first = np.array([o.position for o in sim.obstacles.obstacles])
        for _ in range(20):
            sim.step(CarInputs(forward=True), 0.05)

        sim.start_run()
        second = np.array([o.position for o in sim.obstacles.obstacles])

        assert np.array_equal(first, second)

    def test_restart_discards_state(self):
        """Starting again resets car, score and clock."""
        sim = started()
        for _ in range(100):
            sim.step(CarInputs(forward=True), 0.05)

        sim.start_run(seed=2)

        assert sim.time == 0.0
        assert sim.car.speed == 0.0
        assert sim.scoring.score == 0
        assert sim.obstacles.destroyed_count == 0

    @pytest.mark.parametrize("raw,expected", [
        (1.0, 0.05),
        (0.05, 0.05),
        (0.016, 0.016),
        (0.0, 0.0),
        (-0.1, 0.0),
    ])
    def test_dt_clamped(self, raw, expected):
        """Frame deltas are clamped to [0, 0.05]."""
        sim = started()

        result = sim.step(CarInputs(), raw)

        assert result.dt == pytest.approx(expected)
        assert sim.time == pytest.approx(expected)

    def test_zero_dt_changes_nothing(self):
        """A zero step leaves the car where it was."""
        sim = started()
        sim.car.state.speed = 20.0
        before = sim.car.position.copy()

        sim.step(CarInputs(forward=True), 0.0)

        assert np.array_equal(sim.car.position, before)
        assert sim.car.speed == 20.0


class TestSimulatorCollisions:
    """Test hits flowing through scoring and events."""

    def test_hit_scores_points(self):
        """Driving into an obstacle destroys and scores it."""
        sim = started()
        with_single_obstacle(sim, 30.0)

        result = sim.step(CarInputs(), 0.016)

        # Drag leaves 29.808 at impact: 100 * (1 + 0.59616 * 4)
        assert len(result.events) == 1
        assert result.hits[0].points == 338
        assert sim.scoring.score == 338
        assert sim.obstacles.destroyed_count == 1
        assert sim.car.speed == pytest.approx(30.0 * (1 - 0.4 * 0.016) * 0.88)

    def test_event_time_is_tick_time(self):
        """Events are stamped with the simulation time of the tick."""
        sim = started()
        with_single_obstacle(sim, 30.0)

        result = sim.step(CarInputs(), 0.016)

        assert result.events[0].time == pytest.approx(0.016)
        assert sim.scoring.state.last_hit_time == pytest.approx(0.016)

    def test_listeners_and_queue(self):
        """Events reach listeners and the drainable queue."""
        sim = started()
        with_single_obstacle(sim, 30.0)
        received = []
        sim.add_hit_listener(lambda event, hit: received.append((event, hit)))

        sim.step(CarInputs(), 0.016)

        assert len(received) == 1
        assert received[0][1].points == 338
        drained = sim.drain_events()
        assert [e.obstacle for e in drained] == [received[0][0].obstacle]
        assert sim.drain_events() == []

    def test_no_event_without_hit(self):
        """Quiet ticks produce no events."""
        sim = started()
        sim.obstacles.reset()

        result = sim.step(CarInputs(forward=True), 0.016)

        assert result.events == []
        assert sim.drain_events() == []

    def test_debris_expires_through_ticks(self):
        """Destroyed obstacles are eventually removed."""
        sim = started()
        with_single_obstacle(sim, 30.0)
        sim.step(CarInputs(), 0.016)

        expired = []
        for _ in range(400):
            expired.extend(sim.step(CarInputs(brake=True), 0.05).expired)

        assert len(expired) == 1
        assert len(sim.obstacles) == 0

    def test_combo_expires_through_ticks(self):
        """The combo drops back to zero after the window."""
        sim = started()
        with_single_obstacle(sim, 30.0)
        sim.step(CarInputs(), 0.016)
        assert sim.scoring.combo_count == 1

        flags = [sim.step(CarInputs(brake=True), 0.05).combo_expired for _ in range(40)]

        assert flags.count(True) == 1
        assert sim.scoring.combo_count == 0


class TestSlowMotion:
    """Test time scaling after big hits."""

    def test_big_hit_triggers_slow_motion(self):
        """A hit above the threshold slows time, then it recovers."""
        sim = started(SimulatorConfig(car=CarConfig(max_speed=80.0)))
        with_single_obstacle(sim, 75.0)

        result = sim.step(CarInputs(), 0.05)
        assert result.events[0].impact_speed > 60.0
        assert sim.time_scale == pytest.approx(0.3)

        result = sim.step(CarInputs(), 0.05)
        assert result.dt == pytest.approx(0.015)

        for _ in range(5):
            sim.step(CarInputs(), 0.05)
        assert sim.time_scale == 1.0

    def test_small_hit_no_slow_motion(self):
        """Ordinary hits keep normal time."""
        sim = started()
        with_single_obstacle(sim, 30.0)

        sim.step(CarInputs(), 0.016)

        assert sim.time_scale == 1.0

    def test_reset_clears_slow_motion(self):
        """Reset returns to normal time."""
        sim = started(SimulatorConfig(car=CarConfig(max_speed=80.0)))
        with_single_obstacle(sim, 75.0)
        sim.step(CarInputs(), 0.05)

        sim.reset()

        assert sim.time_scale == 1.0


class TestSimulatorRun:
    """Test progress, boundary and finishing."""

    def test_finish_past_end(self):
        """Passing the end of the road finishes the run."""
        sim = started()
        sim.car.state.position = np.array([0.0, 0.5, -801.0])

        result = sim.step(CarInputs(), 0.016)

        assert result.progress == 1.0
        assert result.finished

    def test_not_finished_at_start(self):
        """A fresh run is not finished."""
        sim = started()

        assert not sim.step(CarInputs(), 0.016).finished

    def test_boundary_pull(self):
        """A car far off the road drifts back every tick."""
        sim = started()
        sim.obstacles.reset()
        sim.car.state.position = np.array([-70.0, 0.5, -5.0])

        distances = [sim.step(CarInputs(), 0.05).boundary_distance for _ in range(30)]

        assert all(b < a for a, b in zip(distances, distances[1:]))
        assert sim.get_state()["boundary_distance"] == distances[-1]

    def test_drive_to_finish(self):
        """Holding the throttle reaches the end of the road."""
        sim = started(seed=4)

        for _ in range(5000):
            result = sim.step(CarInputs(forward=True), 0.05)
            if result.finished:
                break

        assert result.finished
        assert sim.car.top_speed_kph > 100.0

    def test_reset_is_idempotent(self):
        """Resetting twice equals resetting once."""
        sim = started()
        for _ in range(50):
            sim.step(CarInputs(forward=True, left=True), 0.05)

        sim.reset()
        first = sim.get_state()
        sim.reset()
        second = sim.get_state()

        assert first["scoring"] == second["scoring"]
        assert first["world"]["time"] == second["world"]["time"] == 0.0
        assert first["world"]["car"] == second["world"]["car"]
        assert first["world"]["obstacles"] == second["world"]["obstacles"]
