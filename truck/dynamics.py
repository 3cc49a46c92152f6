"""
Truck dynamics: force composition and explicit Euler integration
"""

import math
from dataclasses import dataclass, fields
from typing import Dict, List, Optional, Tuple, TYPE_CHECKING
import numpy as np

from truck.geometry import ZERO, Wheel, WheelLayout, update_wheel_world_positions, vector
from truck.params import TruckParams
from truck.state import Orientation, VehicleState
from truck.suspension import SuspensionModel
from truck.vehicle import engine_force

if TYPE_CHECKING:
    from truck.environment import EnvironmentSnapshot


@dataclass(frozen=True, eq=False)
class ForceSet:
    """Force components acting on the truck during one step (N)"""

    gravity: np.ndarray
    drag: np.ndarray
    rolling: np.ndarray
    traction: np.ndarray
    lateral: np.ndarray
    suspension: np.ndarray

    def total(self) -> np.ndarray:
        """Net linear force"""
        return self.gravity + self.drag + self.rolling + self.traction + self.lateral + self.suspension

    def as_dict(self) -> Dict[str, np.ndarray]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def as_array(self) -> np.ndarray:
        """Stack components into a (6, 3) array in FORCE_NAMES order"""
        return np.stack([getattr(self, name) for name in FORCE_NAMES])

    @classmethod
    def zero(cls) -> "ForceSet":
        return cls(ZERO, ZERO, ZERO, ZERO, ZERO, ZERO)


FORCE_NAMES: Tuple[str, ...] = tuple(f.name for f in fields(ForceSet))


class PhysicsEngine:
    """Truck force and motion calculations; holds no per-step state"""

    def __init__(self, suspension: Optional[SuspensionModel] = None) -> None:
        """
        Initialize physics engine

        Args:
            suspension: Suspension contact model (default stiffness/damping
                if omitted)
        """
        self.suspension = suspension if suspension is not None else SuspensionModel()

    def normal_force(self, params: TruckParams, environment: "EnvironmentSnapshot") -> float:
        """Gravity component perpendicular to the road (N)"""
        return params.mass * environment.gravity * math.cos(environment.terrain.slope)

    def traction_limit(self, params: TruckParams, environment: "EnvironmentSnapshot") -> float:
        """Largest forward force the road can transmit (N)"""
        return environment.road.friction_coefficient * self.normal_force(params, environment)

    def gravity_force(self, params: TruckParams, environment: "EnvironmentSnapshot") -> np.ndarray:
        slope = environment.terrain.slope
        weight = params.mass * environment.gravity
        return vector(0.0, -weight * math.sin(slope), -weight * math.cos(slope))

    def drag_force(
        self, state: VehicleState, params: TruckParams, environment: "EnvironmentSnapshot"
    ) -> np.ndarray:
        """Quadratic aerodynamic drag opposing velocity relative to the wind"""
        relative_velocity = state.velocity - environment.wind
        speed = float(np.linalg.norm(relative_velocity))
        if speed == 0.0:
            return ZERO
        magnitude = (
            0.5 * environment.air_density * params.drag_coefficient * params.frontal_area * speed**2
        )
        return vector(*(-magnitude * relative_velocity / speed))

    def rolling_resistance(
        self, state: VehicleState, params: TruckParams, environment: "EnvironmentSnapshot"
    ) -> np.ndarray:
        """Rolling resistance opposing the direction of travel"""
        speed = state.speed
        if speed == 0.0:
            return ZERO
        magnitude = params.rolling_resistance_coefficient * self.normal_force(params, environment)
        return vector(*(-magnitude * state.velocity / speed))

    def traction_force(
        self, state: VehicleState, params: TruckParams, environment: "EnvironmentSnapshot"
    ) -> np.ndarray:
        """
        Drive force along the heading, limited by available grip

        The engine force is clipped to ±friction * normal force, so the grip
        limit also bounds the braking force the engine gives above top speed.
        """
        requested = engine_force(state, params.engine_power, params.transmission_efficiency)
        limit = self.traction_limit(params, environment)
        magnitude = max(-limit, min(requested, limit))
        yaw = state.orientation.yaw
        slope = environment.terrain.slope
        return vector(
            magnitude * math.cos(yaw) * math.cos(slope),
            magnitude * math.sin(yaw) * math.cos(slope),
            magnitude * math.sin(slope),
        )

    def lateral_force(
        self, state: VehicleState, params: TruckParams, environment: "EnvironmentSnapshot"
    ) -> np.ndarray:
        """Centripetal force m * vx² / R perpendicular to the heading"""
        lateral_acceleration = float(state.velocity[0]) ** 2 / environment.road_radius
        magnitude = params.mass * lateral_acceleration
        yaw = state.orientation.yaw
        return vector(-magnitude * math.sin(yaw), magnitude * math.cos(yaw), 0.0)

    def compute_forces(
        self,
        state: VehicleState,
        params: TruckParams,
        environment: "EnvironmentSnapshot",
        wheels: Optional[List[Wheel]] = None
    ) -> ForceSet:
        """
        Compute every force acting on the truck

        Args:
            state: Current vehicle state
            params: Truck physical parameters
            environment: Environment snapshot for this step
            wheels: Wheels with world positions for this state; derived from
                the parameters and state when omitted

        Returns:
            Force decomposition
        """
        if wheels is None:
            wheels = update_wheel_world_positions(state, WheelLayout(params).create_wheels())

        return ForceSet(
            gravity=self.gravity_force(params, environment),
            drag=self.drag_force(state, params, environment),
            rolling=self.rolling_resistance(state, params, environment),
            traction=self.traction_force(state, params, environment),
            lateral=self.lateral_force(state, params, environment),
            suspension=self.suspension.calculate_force(state, wheels, environment.terrain),
        )

    def angular_acceleration(self, forces: ForceSet, params: TruckParams) -> np.ndarray:
        """
        Angular acceleration about the roll, pitch and yaw axes (rad/s²)

        Torques use a moment arm of half the body height: lateral z-force for
        roll, traction minus drag along x for pitch, lateral x-force for yaw.
        """
        arm = params.height / 2
        torque = np.array([
            forces.lateral[2] * arm,
            (forces.traction[0] - forces.drag[0]) * arm,
            forces.lateral[0] * arm,
        ])
        return torque / np.array(params.moments_of_inertia)

    def integrate(
        self, state: VehicleState, forces: ForceSet, params: TruckParams, dt: float
    ) -> VehicleState:
        """
        Advance the state by one explicit Euler step

        Velocity is updated first and the position advanced with it; angular
        velocity and orientation follow the same order. dt is not clamped:
        large steps are the caller's responsibility.

        Args:
            state: Current vehicle state (not modified)
            forces: Forces computed for this state
            params: Truck physical parameters
            dt: Time step (s)

        Returns:
            New vehicle state
        """
        acceleration = forces.total() / params.mass
        velocity = state.velocity + acceleration * dt
        position = state.position + velocity * dt

        alpha = self.angular_acceleration(forces, params)
        angular_velocity = state.angular_velocity + alpha * dt
        wx, wy, wz = angular_velocity
        orientation = Orientation(
            pitch=state.orientation.pitch + wy * dt,
            yaw=state.orientation.yaw + wz * dt,
            roll=state.orientation.roll + wx * dt,
        )

        return VehicleState(
            position=position,
            velocity=velocity,
            acceleration=acceleration,
            orientation=orientation,
            angular_velocity=angular_velocity,
        )

    def step(
        self,
        state: VehicleState,
        params: TruckParams,
        environment: "EnvironmentSnapshot",
        dt: float,
        wheels: Optional[List[Wheel]] = None
    ) -> Tuple[VehicleState, ForceSet]:
        """Compute forces and integrate once, returning the new state and the forces used"""
        forces = self.compute_forces(state, params, environment, wheels)
        return self.integrate(state, forces, params, dt), forces
