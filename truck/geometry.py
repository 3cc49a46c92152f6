"""
Vector helpers, body rotation and truck wheel layout
"""

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, List
import numpy as np

from truck.params import TruckParams

if TYPE_CHECKING:
    from truck.state import VehicleState


def vector(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> np.ndarray:
    """
    Build a read-only 3-vector

    Args:
        x, y, z: Components (m, m/s or N depending on context)

    Returns:
        Float64 array of shape (3,) that cannot be written in place
    """
    v = np.array([x, y, z], dtype=float)
    v.flags.writeable = False
    return v


def freeze(values: np.ndarray) -> np.ndarray:
    """Return a read-only float copy of an array-like 3-vector"""
    v = np.array(values, dtype=float).reshape(3)
    v.flags.writeable = False
    return v


ZERO = vector()


def rotation_matrix(pitch: float, yaw: float, roll: float) -> np.ndarray:
    """
    Combined body-to-world rotation matrix

    The entries are the closed-form product of the yaw, pitch and roll
    contributions written out as a single matrix.

    Args:
        pitch: Pitch angle (rad)
        yaw: Yaw angle (rad)
        roll: Roll angle (rad)

    Returns:
        3x3 rotation matrix
    """
    cp, sp = np.cos(pitch), np.sin(pitch)
    cy, sy = np.cos(yaw), np.sin(yaw)
    cr, sr = np.cos(roll), np.sin(roll)
    return np.array([
        [cy * cr, -cy * sr, sy],
        [sp * sy * cr + cp * sr, -sp * sy * sr + cp * cr, -sp * cy],
        [-cp * sy * cr + sp * sr, cp * sy * sr + sp * cr, cp * cy],
    ])


@dataclass(frozen=True, eq=False)
class Wheel:
    """Point-contact wheel fixed to the truck body"""

    local_position: np.ndarray  # m, relative to body center
    radius: float  # m
    width: float  # m
    world_position: np.ndarray  # m, recomputed every state update

    def with_world_position(self, world_position: np.ndarray) -> "Wheel":
        return replace(self, world_position=freeze(world_position))


class WheelLayout:
    """Calculates wheel positions from the truck geometry"""

    def __init__(self, params: TruckParams) -> None:
        """
        Initialize wheel layout calculator

        Args:
            params: Truck physical parameters
        """
        self.params = params

        # Axles evenly spaced along the length, wheels at the body sides,
        # hanging half the body height below center
        n = params.axle_count
        self.axle_x = np.array([
            -params.length / 2 + (i + 1) * params.length / (n + 1) for i in range(n)
        ])
        self.left_y = -params.width / 2
        self.right_y = params.width / 2
        self.wheel_z = -params.height / 2

    @property
    def wheel_count(self) -> int:
        return 2 * self.params.axle_count

    def create_wheels(self) -> List[Wheel]:
        """
        Build the wheel list, left then right for each axle from rear to front

        Returns:
            List of 2 * axle_count wheels with world position equal to local
            position (truck at origin, level)
        """
        wheels: List[Wheel] = []
        for x in self.axle_x:
            for y in (self.left_y, self.right_y):
                local = vector(float(x), y, self.wheel_z)
                wheels.append(Wheel(
                    local_position=local,
                    radius=self.params.wheel_radius,
                    width=self.params.wheel_width,
                    world_position=local,
                ))
        return wheels


def update_wheel_world_positions(state: "VehicleState", wheels: List[Wheel]) -> List[Wheel]:
    """
    Rotate each wheel's local position by the body orientation and translate
    by the body position

    Args:
        state: Current vehicle state
        wheels: Wheels to place

    Returns:
        New wheel list with updated world positions
    """
    orientation = state.orientation
    rotation = rotation_matrix(orientation.pitch, orientation.yaw, orientation.roll)
    return [
        wheel.with_world_position(state.position + rotation @ wheel.local_position)
        for wheel in wheels
    ]
