"""
Truck model: parameters, wheel geometry and current state
"""

import logging
from typing import List, Optional

from truck.geometry import Wheel, WheelLayout, update_wheel_world_positions
from truck.params import TruckParams
from truck.state import VehicleState

logger = logging.getLogger(__name__)

MAX_SPEED = 100.0  # m/s, where the torque curve reaches zero
MIN_FORCE_SPEED = 0.1  # m/s, denominator floor so force stays finite at rest


def engine_force(
    state: VehicleState, engine_power: float, transmission_efficiency: float
) -> float:
    """
    Forward drive force from engine power on a simplified torque-speed curve

    force = P * eta * (1 - (v / v_max)²) / max(v, 0.1)

    The 0.1 m/s floor is a numerical approximation that caps the force near
    standstill, not a physical constant. Above v_max the force turns negative.

    Args:
        state: Current vehicle state
        engine_power: Engine power (W)
        transmission_efficiency: Drivetrain efficiency (0-1)

    Returns:
        Drive force magnitude (N)
    """
    speed = state.speed
    force_curve = 1 - (speed / MAX_SPEED) ** 2
    return engine_power * transmission_efficiency * force_curve / max(speed, MIN_FORCE_SPEED)


class Vehicle:
    """A truck instance: parameters, wheels and the latest state"""

    def __init__(self, params: TruckParams, state: Optional[VehicleState] = None) -> None:
        """
        Initialize vehicle

        Args:
            params: Truck physical parameters
            state: Initial state (defaults to at rest at the origin)
        """
        self.params = params
        self.state = state if state is not None else VehicleState.at_rest()
        self.wheels: List[Wheel] = WheelLayout(params).create_wheels()
        self.wheels = update_wheel_world_positions(self.state, self.wheels)

    def update_parameters(self, params: TruckParams) -> None:
        """
        Replace parameters, rebuilding wheels when the geometry changed

        Args:
            params: New truck parameters
        """
        rebuild = params.geometry_key() != self.params.geometry_key()
        self.params = params
        if rebuild:
            logger.debug("Truck geometry changed, rebuilding %d wheels", 2 * params.axle_count)
            self.wheels = update_wheel_world_positions(
                self.state, WheelLayout(params).create_wheels()
            )

    def update_state(self, state: VehicleState) -> None:
        """Replace the state and recompute wheel world positions"""
        self.state = state
        self.wheels = update_wheel_world_positions(state, self.wheels)

    def engine_force(self) -> float:
        return engine_force(self.state, self.params.engine_power, self.params.transmission_efficiency)
