#!/usr/bin/env python3
"""
Basic Simulation Example

This example demonstrates how to:
1. Start a game session and confirm past the menu
2. Drive down the road with scripted inputs
3. Listen for obstacle hits
4. Read the end-of-run results

Run with: python run_simulation.py
"""

from crashcourse import GameSession, CarInputs
from crashcourse.config import GameConfig, configure_logging
from crashcourse.simulation.session import SessionState


FRAME_TIME = 1 / 60


def scripted_inputs(step: int) -> CarInputs:
    """Full throttle with a slow weave across the road."""
    phase = (step // 90) % 4
    return CarInputs(forward=True, left=phase == 1, right=phase == 3)


def main():
    config = GameConfig(seed=42)
    configure_logging(config.log_level, config.log_file)

    print("=" * 60)
    print("CrashCourse Basic Simulation Example")
    print("=" * 60)

    session = GameSession(config)
    sim = session.simulator

    hits = []
    sim.add_hit_listener(lambda event, hit: hits.append((event.impact_speed, hit.points)))

    # Step 1: Leave the menu
    print("\n1. Starting run...")
    session.update(CarInputs(confirm=True), FRAME_TIME)

    print(f"   Road length: {sim.track.total_length:.0f} m")
    print(f"   Obstacles: {sim.obstacles.initial_count}")

    # Step 2: Drive until the finish
    print("\n2. Driving...")
    step = 0
    while session.state is SessionState.PLAYING:
        result = session.update(scripted_inputs(step), FRAME_TIME)
        step += 1

        if step % 300 == 0:
            print(f"   t={result.time:5.1f}s  progress {result.progress:5.1%}  "
                  f"speed {sim.car.speed_kph:5.1f} km/h  score {sim.scoring.score}")

    # Step 3: Results
    results = session.results
    print("\n3. Results:")
    print(f"   Score: {results.score}")
    print(f"   Destroyed: {results.obstacles_destroyed} / {results.obstacles_total}")
    print(f"   Top speed: {results.top_speed_kph:.0f} km/h")
    print(f"   Max combo: x{results.max_combo}")
    print(f"   Time: {results.elapsed_time:.1f} s")

    if hits:
        best_speed, best_points = max(hits, key=lambda h: h[1])
        print(f"   Best hit: {best_points} points at {best_speed * 3.6:.0f} km/h")

    print("\n" + "=" * 60)
    print("Simulation complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
