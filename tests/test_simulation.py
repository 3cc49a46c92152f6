"""
Unit tests for simulation execution.

Tests the TruckSimulator step loop and recorded histories.
"""

import logging

import numpy as np
import pytest

from truck.dynamics import FORCE_NAMES
from truck.state import VehicleState
from truck_simulation import EnvironmentParams, TruckParams, TruckSimulator


class TestSimulation:
    """Test suite for simulation execution"""

    @pytest.fixture
    def params(self) -> TruckParams:
        """Create default truck parameters for testing"""
        return TruckParams()

    @pytest.fixture
    def environment(self) -> EnvironmentParams:
        """Create calm, flat conditions"""
        return EnvironmentParams(terrain_type="flat", wind_speed=0.0)

    @pytest.fixture
    def simulator(self, params: TruckParams, environment: EnvironmentParams) -> TruckSimulator:
        """Create simulator with the truck resting on its suspension"""
        return TruckSimulator(params, environment, seed=0, initial_state=VehicleState.at_rest(z=2.25))

    def test_simulation_returns_time_and_state(self, simulator: TruckSimulator) -> None:
        """Test that simulate returns time, state and force arrays"""
        t, state, forces = simulator.simulate(duration=1.0)

        assert isinstance(t, np.ndarray)
        assert isinstance(state, np.ndarray)
        assert isinstance(forces, np.ndarray)
        assert len(t) > 0

    def test_shapes_match_time(self, simulator: TruckSimulator) -> None:
        """Test that histories have one row per recorded time"""
        t, state, forces = simulator.simulate(duration=1.0, dt=0.01)

        assert len(t) == 101
        assert state.shape == (101, 15)
        assert forces.shape == (101, len(FORCE_NAMES), 3)

    def test_time_array_matches_duration(self, simulator: TruckSimulator) -> None:
        """Test that the time array covers the full duration"""
        t, _, _ = simulator.simulate(duration=2.0, dt=0.01)

        assert abs(t[0]) < 1e-12
        assert abs(t[-1] - 2.0) < 1e-9
        assert np.allclose(np.diff(t), 0.01)

    def test_initial_state_row(self, simulator: TruckSimulator) -> None:
        """Test that the first row is the starting state"""
        _, state, _ = simulator.simulate(duration=0.5)

        assert np.allclose(state[0], VehicleState.at_rest(z=2.25).as_array())

    def test_truck_moves_forward(self, simulator: TruckSimulator) -> None:
        """Test that the truck drives along its heading"""
        _, state, _ = simulator.simulate(duration=2.0)

        x = state[:, 0]
        assert x[-1] > x[0]
        assert state[-1, 3] > 0  # vx

    def test_results_stay_finite(self, simulator: TruckSimulator) -> None:
        """Test that a short run at 60 Hz stays numerically finite"""
        _, state, forces = simulator.simulate(duration=5.0)

        assert np.all(np.isfinite(state))
        assert np.all(np.isfinite(forces))

    def test_step_advances_time_and_state(self, simulator: TruckSimulator) -> None:
        """Test that one step replaces the state and advances the clock"""
        before = simulator.state
        forces = simulator.step(1.0 / 60.0)

        assert simulator.state is not before
        assert abs(simulator.time - 1.0 / 60.0) < 1e-12
        assert np.linalg.norm(forces.traction) > 0

    def test_wheels_follow_state(self, simulator: TruckSimulator) -> None:
        """Test that wheel world positions are refreshed after each step"""
        simulator.simulate(duration=1.0)
        center = simulator.state.position

        for wheel in simulator.vehicle.wheels:
            distance = np.linalg.norm(wheel.world_position - center)
            assert abs(distance - np.linalg.norm(wheel.local_position)) < 1e-9

    def test_same_seed_replays_identically(self, params: TruckParams) -> None:
        """Test that two sessions with equal seeds produce identical histories"""
        env = EnvironmentParams(terrain_type="hilly")
        a = TruckSimulator(params, env, seed=11).simulate(duration=1.0)
        b = TruckSimulator(params, env, seed=11).simulate(duration=1.0)

        for x, y in zip(a, b):
            assert np.array_equal(x, y)

    def test_reset_restores_initial_state(self, simulator: TruckSimulator) -> None:
        """Test that reset rewinds time and state"""
        simulator.simulate(duration=1.0)
        simulator.reset()

        assert simulator.time == 0.0
        assert np.array_equal(simulator.state.as_array(), VehicleState.at_rest(z=2.25).as_array())

    def test_invalid_dt_rejected(self, simulator: TruckSimulator) -> None:
        """Test that non-positive timesteps are refused"""
        with pytest.raises(ValueError):
            simulator.simulate(duration=1.0, dt=0.0)
        with pytest.raises(ValueError):
            simulator.step(-0.01)

    def test_negative_duration_rejected(self, simulator: TruckSimulator) -> None:
        """Test that a negative duration is refused"""
        with pytest.raises(ValueError):
            simulator.simulate(duration=-1.0)

    def test_large_dt_warns(self, simulator: TruckSimulator, caplog: pytest.LogCaptureFixture) -> None:
        """Test that a large timestep is accepted with a warning"""
        with caplog.at_level(logging.WARNING, logger="truck.simulator"):
            t, _, _ = simulator.simulate(duration=0.2, dt=0.1)

        assert len(t) == 3
        assert any("unstable" in record.message for record in caplog.records)

    def test_parameter_update_rebuilds_wheels(self, simulator: TruckSimulator) -> None:
        """Test that geometry changes reach the simulated vehicle"""
        simulator.update_parameters(TruckParams(axle_count=2))

        assert len(simulator.vehicle.wheels) == 4
        simulator.step()

    def test_terrain_heights_for_renderer(self, params: TruckParams) -> None:
        """Test that terrain can be sampled on a render grid"""
        simulator = TruckSimulator(params, EnvironmentParams(terrain_type="hilly"), seed=5)
        xs, ys = np.meshgrid(np.linspace(-100, 100, 11), np.linspace(-100, 100, 11))
        heights = simulator.terrain_heights(xs, ys)

        assert heights.shape == (11, 11)
        assert np.all(np.isfinite(heights))
        assert np.array_equal(heights, simulator.terrain_heights(xs, ys))

    def test_traction_limit_history(self, simulator: TruckSimulator) -> None:
        """Test traction limit series is positive and one value per sample"""
        t, _, _ = simulator.simulate(duration=1.0)
        limits = simulator.traction_limit_history(t)

        assert limits.shape == t.shape
        assert np.all(limits > 0)
