"""
Suspension contact model for wheels on terrain
"""

from typing import List, TYPE_CHECKING
import numpy as np

from truck.geometry import Wheel, vector

if TYPE_CHECKING:
    from truck.environment import Terrain
    from truck.state import VehicleState


class SuspensionModel:
    """Models linear spring-damper contact between each wheel and the terrain"""

    def __init__(
        self,
        stiffness: float = 100000.0,
        damping: float = 10000.0,
        rest_length: float = 0.5
    ) -> None:
        """
        Initialize suspension model

        Args:
            stiffness: Spring stiffness per wheel (N/m)
            damping: Damping per wheel (N·s/m)
            rest_length: Suspension length at which the spring is unloaded (m)
        """
        self.stiffness = stiffness
        self.damping = damping
        self.rest_length = rest_length

    def compressions(self, wheels: List[Wheel], terrain: "Terrain") -> np.ndarray:
        """
        Spring compression for each wheel

        Args:
            wheels: Wheels with current world positions
            terrain: Terrain to sample under each wheel

        Returns:
            Array of compressions (m), zero for wheels clear of the ground
        """
        compressions = np.zeros(len(wheels))
        for i, wheel in enumerate(wheels):
            x, y, z = wheel.world_position
            clearance = z - terrain.height_at(x, y)
            compressions[i] = max(0.0, self.rest_length - clearance)
        return compressions

    def wheel_forces(
        self, state: "VehicleState", wheels: List[Wheel], terrain: "Terrain"
    ) -> np.ndarray:
        """
        Vertical force at each wheel: k * compression + c * (-vertical velocity)

        No per-wheel torque distribution; every wheel sees the body's vertical
        velocity.
        """
        compression = self.compressions(wheels, terrain)
        vertical_velocity = float(state.velocity[2])
        return self.stiffness * compression + self.damping * (-vertical_velocity)

    def calculate_force(
        self, state: "VehicleState", wheels: List[Wheel], terrain: "Terrain"
    ) -> np.ndarray:
        """
        Total suspension force on the body

        Returns:
            Force vector (N) with only a vertical component
        """
        return vector(0.0, 0.0, float(np.sum(self.wheel_forces(state, wheels, terrain))))
