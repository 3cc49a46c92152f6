"""
Main truck simulator class
"""

import logging
from typing import Optional, Tuple
import numpy as np

from truck.dynamics import FORCE_NAMES, ForceSet, PhysicsEngine
from truck.environment import EnvironmentModel, EnvironmentSnapshot
from truck.params import EnvironmentParams, TruckParams
from truck.state import VehicleState
from truck.suspension import SuspensionModel
from truck.vehicle import Vehicle

logger = logging.getLogger(__name__)

DEFAULT_DT = 1.0 / 60.0  # s, one display frame at 60 Hz
STABLE_DT_LIMIT = 0.05  # s, larger steps are accepted but tend to diverge


class TruckSimulator:
    """Drives the environment → forces → integrate loop for one truck"""

    def __init__(
        self,
        truck_params: TruckParams,
        environment_params: Optional[EnvironmentParams] = None,
        seed: Optional[int] = 0,
        initial_state: Optional[VehicleState] = None,
        suspension: Optional[SuspensionModel] = None
    ) -> None:
        """
        Initialize simulator

        Args:
            truck_params: Truck physical parameters
            environment_params: Environmental inputs (defaults if omitted)
            seed: Terrain noise seed, fixed for the whole session
            initial_state: Starting state (at rest at the origin if omitted)
            suspension: Suspension model passed to the physics engine
        """
        self.environment_params = environment_params if environment_params is not None else EnvironmentParams()
        self.initial_state = initial_state if initial_state is not None else VehicleState.at_rest()
        self.environment_model = EnvironmentModel(seed=seed)
        self.physics = PhysicsEngine(suspension)
        self.vehicle = Vehicle(truck_params, self.initial_state)
        self.time = 0.0

    @property
    def params(self) -> TruckParams:
        return self.vehicle.params

    @property
    def state(self) -> VehicleState:
        return self.vehicle.state

    def update_parameters(self, params: TruckParams) -> None:
        """Replace truck parameters (wheels are rebuilt if geometry changed)"""
        self.vehicle.update_parameters(params)

    def update_environment(self, environment_params: EnvironmentParams) -> None:
        self.environment_params = environment_params

    def environment(self) -> EnvironmentSnapshot:
        """Environment snapshot at the current simulation time"""
        return self.environment_model.snapshot(self.params, self.environment_params, self.time)

    def terrain_heights(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """Terrain elevation at the current time, for render mesh displacement"""
        return self.environment().terrain.heights(xs, ys)

    def step(self, dt: float = DEFAULT_DT) -> ForceSet:
        """
        Advance the simulation by one timestep

        Args:
            dt: Time step (s)

        Returns:
            Forces applied during the step
        """
        if dt <= 0:
            raise ValueError(f"dt must be positive, got {dt}")

        environment = self.environment()
        new_state, forces = self.physics.step(
            self.vehicle.state, self.params, environment, dt, self.vehicle.wheels
        )
        if not new_state.is_finite():
            logger.warning("Non-finite truck state at t=%.3fs (dt=%.4fs)", self.time, dt)
        self.vehicle.update_state(new_state)
        self.time += dt
        return forces

    def simulate(
        self, duration: float = 10.0, dt: float = DEFAULT_DT
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Run simulation from the current state

        Args:
            duration: Simulated time to cover (s)
            dt: Time step (s)

        Returns:
            Tuple of (time_array, state_history, force_history); states are
            rows of VehicleState.as_array(), forces are the (6, 3) blocks in
            FORCE_NAMES order acting at each recorded state. The first row
            is the starting point
        """
        if dt <= 0:
            raise ValueError(f"dt must be positive, got {dt}")
        if duration < 0:
            raise ValueError(f"duration must be non-negative, got {duration}")
        if dt > STABLE_DT_LIMIT:
            logger.warning("dt=%.3fs exceeds %.3fs; explicit Euler may become unstable", dt, STABLE_DT_LIMIT)

        n_steps = int(round(duration / dt))
        logger.debug("Simulating %d steps of %.4fs", n_steps, dt)

        t = np.zeros(n_steps + 1)
        states = np.zeros((n_steps + 1, 15))
        forces = np.zeros((n_steps + 1, len(FORCE_NAMES), 3))

        t[0] = self.time
        states[0] = self.state.as_array()
        for i in range(1, n_steps + 1):
            forces[i - 1] = self.step(dt).as_array()
            t[i] = self.time
            states[i] = self.state.as_array()
        forces[n_steps] = self.physics.compute_forces(
            self.state, self.params, self.environment(), self.vehicle.wheels
        ).as_array()

        return t, states, forces

    def traction_limit_history(self, t: np.ndarray) -> np.ndarray:
        """Traction limit (N) at each recorded time; depends on time only, not on state"""
        return np.array([
            self.physics.traction_limit(
                self.params,
                self.environment_model.snapshot(self.params, self.environment_params, float(ti)),
            )
            for ti in t
        ])

    def reset(self) -> None:
        """Return to the initial state at time zero"""
        self.vehicle.update_state(self.initial_state)
        self.time = 0.0
