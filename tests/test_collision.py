"""Tests for collision detection."""

import pytest
import numpy as np

from crashcourse.car.car import Car
from crashcourse.obstacles.field import ObstacleField, ObstacleFieldConfig
from crashcourse.simulation.collision import CollisionDetector, CollisionConfig, CollisionEvent


@pytest.fixture
def car():
    car = Car()
    car.state.speed = 30.0
    return car


@pytest.fixture
def field():
    return ObstacleField(ObstacleFieldConfig(seed=0))


class TestCollisionDetector:
    """Test car versus obstacle hits."""

    def test_hit_in_front(self, car, field):
        """An obstacle at the front bumper is hit."""
        obstacle = field.add([0.0, 0.0, -8.0], scale=1.0)

        events = CollisionDetector().detect(car, field, time=3.0)

        assert events == [CollisionEvent(obstacle, 30.0, 3.0)]
        assert obstacle.destroyed
        assert car.speed == pytest.approx(30.0 * 0.88)

    def test_far_obstacle_missed(self, car, field):
        """Obstacles beyond the combined radius are left alone."""
        obstacle = field.add([0.0, 0.0, -20.0], scale=1.0)

        events = CollisionDetector().detect(car, field)

        assert events == []
        assert not obstacle.destroyed
        assert car.speed == 30.0

    def test_too_slow(self, car, field):
        """Below the minimum speed nothing counts as a crash."""
        car.state.speed = 1.5
        obstacle = field.add([0.0, 0.0, -7.2], scale=1.0)

        assert CollisionDetector().detect(car, field) == []
        assert not obstacle.destroyed

    def test_reverse_speed_uses_magnitude(self, car, field):
        """Impact speed is the speed magnitude."""
        car.state.speed = -8.0
        field.add([0.0, 0.0, -7.2], scale=1.0)

        events = CollisionDetector().detect(car, field)

        assert len(events) == 1
        assert events[0].impact_speed == 8.0

    def test_scale_grows_radius(self, car, field):
        """Larger obstacles are hit from further away."""
        # Front bumper at z=-7.2; 3.5 away
        small = field.add([3.5, 0.0, -7.2], scale=1.0)
        large = field.add([-3.5, 0.0, -7.2], scale=1.4)

        events = CollisionDetector().detect(car, field)

        assert [e.obstacle for e in events] == [large]
        assert not small.destroyed

    def test_multiple_hits_compound_slowdown(self, car, field):
        """Every obstacle hit in one tick is reported and slows the car."""
        first = field.add([0.5, 0.0, -7.5], scale=1.0)
        second = field.add([-0.5, 0.0, -7.5], scale=1.0)

        events = CollisionDetector().detect(car, field)

        assert {e.obstacle.obstacle_id for e in events} == {first.obstacle_id, second.obstacle_id}
        assert all(e.impact_speed == 30.0 for e in events)
        assert car.speed == pytest.approx(30.0 * 0.88 * 0.88)

    def test_destroyed_not_hit_again(self, car, field):
        """Destroyed obstacles are out of play."""
        field.add([0.0, 0.0, -8.0], scale=1.0)
        detector = CollisionDetector()

        assert len(detector.detect(car, field)) == 1
        assert detector.detect(car, field) == []

    def test_broad_phase_radius(self, car, field):
        """Obstacles beyond the broad-phase radius are never tested."""
        field.add([0.0, 0.0, -8.0], scale=1.0)
        detector = CollisionDetector(CollisionConfig(broad_phase_radius=0.1))

        assert detector.detect(car, field) == []

    def test_impulse_follows_car(self, car, field):
        """The hit obstacle is launched along the car's direction."""
        obstacle = field.add([0.0, 0.0, -8.0], scale=1.0)

        CollisionDetector().detect(car, field)

        velocity = obstacle.state.body.velocity
        assert velocity[2] == pytest.approx(-30.0 * 6.0)
        assert abs(velocity[0]) < 1e-9

    def test_no_obstacles(self, car, field):
        """An empty field is a normal empty result."""
        assert CollisionDetector().detect(car, field) == []
        assert np.allclose(car.position, [0.0, 0.5, -5.0])
