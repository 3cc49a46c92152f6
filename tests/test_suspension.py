"""
Unit tests for suspension force calculations.

Tests the SuspensionModel spring-damper contact between wheels and terrain.
"""

import numpy as np
import pytest

from truck.environment import EnvironmentModel, Terrain
from truck.geometry import WheelLayout, update_wheel_world_positions, vector
from truck.params import TruckParams
from truck.state import VehicleState
from truck.suspension import SuspensionModel


def flat_terrain(height: float = 0.0) -> Terrain:
    """Level terrain at a constant height"""
    return Terrain(
        noise=EnvironmentModel(seed=0).noise,
        base_height=height,
        amplitude=0.0,
        frequency=0.01,
        time=0.0,
    )


class TestSuspension:
    """Test suite for suspension forces"""

    @pytest.fixture
    def model(self) -> SuspensionModel:
        """Create suspension with reference stiffness and damping"""
        return SuspensionModel()

    @pytest.fixture
    def params(self) -> TruckParams:
        """Create default truck parameters"""
        return TruckParams()

    def place(self, params: TruckParams, state: VehicleState):
        return update_wheel_world_positions(state, WheelLayout(params).create_wheels())

    def test_default_constants(self, model: SuspensionModel) -> None:
        """Test default stiffness, damping and rest length"""
        assert model.stiffness == 100000.0
        assert model.damping == 10000.0
        assert model.rest_length == 0.5

    def test_no_force_when_clear_of_ground(self, model: SuspensionModel, params: TruckParams) -> None:
        """Test zero force when all wheels are above rest length"""
        # Wheels hang 2m below center; center at 3m leaves 1m clearance
        state = VehicleState.at_rest(z=3.0)
        force = model.calculate_force(state, self.place(params, state), flat_terrain())

        assert np.array_equal(force, np.zeros(3))

    def test_compression_at_ground_contact(self, model: SuspensionModel, params: TruckParams) -> None:
        """Test compression when wheels are 0.3m above ground"""
        state = VehicleState.at_rest(z=2.3)
        compressions = model.compressions(self.place(params, state), flat_terrain())

        assert compressions.shape == (6,)
        assert np.allclose(compressions, 0.2)

    def test_spring_force_sums_over_wheels(self, model: SuspensionModel, params: TruckParams) -> None:
        """Test total vertical force is six wheels of k * compression"""
        state = VehicleState.at_rest(z=2.3)
        force = model.calculate_force(state, self.place(params, state), flat_terrain())

        assert abs(force[2] - 6 * 100000.0 * 0.2) < 1e-6
        assert force[0] == 0.0
        assert force[1] == 0.0

    def test_damping_opposes_vertical_velocity(self, model: SuspensionModel, params: TruckParams) -> None:
        """Test that downward velocity increases the upward force"""
        still = VehicleState.at_rest(z=2.3)
        falling = VehicleState(position=vector(0.0, 0.0, 2.3), velocity=vector(0.0, 0.0, -1.0))
        wheels = self.place(params, still)

        f_still = model.calculate_force(still, wheels, flat_terrain())[2]
        f_falling = model.calculate_force(falling, wheels, flat_terrain())[2]

        assert abs((f_falling - f_still) - 6 * 10000.0) < 1e-6

    def test_terrain_height_shifts_contact(self, model: SuspensionModel, params: TruckParams) -> None:
        """Test that raised terrain compresses the springs"""
        state = VehicleState.at_rest(z=12.3)
        wheels = self.place(params, state)

        assert np.allclose(model.compressions(wheels, flat_terrain(10.0)), 0.2)
        assert np.allclose(model.compressions(wheels, flat_terrain(0.0)), 0.0)

    def test_custom_stiffness(self, params: TruckParams) -> None:
        """Test that force scales with stiffness"""
        soft = SuspensionModel(stiffness=50000.0)
        stiff = SuspensionModel(stiffness=200000.0)
        state = VehicleState.at_rest(z=2.3)
        wheels = self.place(params, state)

        f_soft = soft.calculate_force(state, wheels, flat_terrain())[2]
        f_stiff = stiff.calculate_force(state, wheels, flat_terrain())[2]

        assert abs(f_stiff - 4 * f_soft) < 1e-6
