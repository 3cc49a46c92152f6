"""
Truck Dynamics Simulation

This package simulates a heavy truck as a single rigid body with point-contact
wheels, driven by engine power over procedurally generated terrain under
changing weather, wind and atmospheric conditions.
"""

from truck.params import EnvironmentParams, TruckParams, degrees_to_radians
from truck.state import Orientation, VehicleState
from truck.geometry import Wheel, WheelLayout, update_wheel_world_positions
from truck.environment import EnvironmentModel, EnvironmentSnapshot
from truck.dynamics import ForceSet, PhysicsEngine
from truck.vehicle import Vehicle, engine_force
from truck.simulator import TruckSimulator
from truck.analysis import RunAnalyzer
from truck.condition_analysis import run_condition_analysis

__all__ = [
    "TruckParams",
    "EnvironmentParams",
    "degrees_to_radians",
    "Orientation",
    "VehicleState",
    "Wheel",
    "WheelLayout",
    "update_wheel_world_positions",
    "EnvironmentModel",
    "EnvironmentSnapshot",
    "ForceSet",
    "PhysicsEngine",
    "Vehicle",
    "engine_force",
    "TruckSimulator",
    "RunAnalyzer",
    "run_condition_analysis",
]
