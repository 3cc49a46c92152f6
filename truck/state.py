"""
Vehicle state representation
"""

import math
from dataclasses import dataclass, field
from typing import NamedTuple
import numpy as np

from truck.geometry import ZERO, freeze, vector


class Orientation(NamedTuple):
    """Body orientation angles (rad)"""

    pitch: float = 0.0
    yaw: float = 0.0
    roll: float = 0.0


@dataclass(frozen=True, eq=False)
class VehicleState:
    """Kinematic state of the truck; each simulation step produces a new value"""

    position: np.ndarray = field(default_factory=lambda: ZERO)  # m
    velocity: np.ndarray = field(default_factory=lambda: ZERO)  # m/s
    acceleration: np.ndarray = field(default_factory=lambda: ZERO)  # m/s², result of the last step
    orientation: Orientation = Orientation()  # rad
    angular_velocity: np.ndarray = field(default_factory=lambda: ZERO)  # rad/s (roll, pitch, yaw axes)

    def __post_init__(self) -> None:
        for name in ("position", "velocity", "acceleration", "angular_velocity"):
            object.__setattr__(self, name, freeze(getattr(self, name)))
        object.__setattr__(self, "orientation", Orientation(*self.orientation))

    @classmethod
    def at_rest(
        cls, x: float = 0.0, y: float = 0.0, z: float = 0.0, yaw: float = 0.0
    ) -> "VehicleState":
        """Stationary state at a position with the given heading"""
        return cls(position=vector(x, y, z), orientation=Orientation(yaw=yaw))

    @property
    def speed(self) -> float:
        """Magnitude of velocity (m/s)"""
        return float(np.linalg.norm(self.velocity))

    @property
    def heading(self) -> np.ndarray:
        """Unit vector of the current yaw in the ground plane"""
        return vector(math.cos(self.orientation.yaw), math.sin(self.orientation.yaw), 0.0)

    def as_array(self) -> np.ndarray:
        """
        Flatten to a 15-element vector for history recording

        Layout: [x, y, z, vx, vy, vz, ax, ay, az, pitch, yaw, roll, wx, wy, wz]
        """
        return np.concatenate([
            self.position,
            self.velocity,
            self.acceleration,
            np.array(self.orientation, dtype=float),
            self.angular_velocity,
        ])

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.as_array())))
