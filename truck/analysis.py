"""
Run analysis functions
"""

from typing import Any, Dict, Optional
import numpy as np
from scipy.integrate import cumulative_trapezoid, trapezoid

from truck.dynamics import FORCE_NAMES
from truck.params import TruckParams

# Column layout of VehicleState.as_array()
POSITION = slice(0, 3)
VELOCITY = slice(3, 6)
PITCH, YAW, ROLL = 9, 10, 11


class RunAnalyzer:
    """Summarises a recorded simulation run"""

    def __init__(self, params: TruckParams) -> None:
        """
        Initialize run analyzer

        Args:
            params: Truck physical parameters used for the run
        """
        self.params = params
        self.max_pitch_warning = 0.5  # rad, beyond this the body attitude is implausible

    def analyze(
        self,
        t: np.ndarray,
        state: np.ndarray,
        forces: np.ndarray,
        traction_limit: Optional[np.ndarray] = None
    ) -> Dict[str, Any]:
        """
        Analyze simulation results for speed, distance, work and attitude

        Args:
            t: Time array [N]
            state: State history [N x 15]
            forces: Force history [N x 6 x 3] in FORCE_NAMES order
            traction_limit: Traction limit at each sample [N] (N); enables
                the traction-limited fraction

        Returns:
            Dictionary with analysis results
        """
        velocity = state[:, VELOCITY]
        speed = np.linalg.norm(velocity, axis=1)
        planar_speed = np.linalg.norm(velocity[:, :2], axis=1)

        traction = forces[:, FORCE_NAMES.index("traction"), :]
        drag = forces[:, FORCE_NAMES.index("drag"), :]
        suspension = forces[:, FORCE_NAMES.index("suspension"), :]
        traction_magnitude = np.linalg.norm(traction, axis=1)

        has_interval = len(t) > 1
        distance = cumulative_trapezoid(planar_speed, t, initial=0.0) if has_interval else np.zeros(len(t))

        # Power = F · v; integrate to get work done by each force
        traction_power = np.einsum("ij,ij->i", traction, velocity)
        drag_power = np.einsum("ij,ij->i", drag, velocity)
        traction_work = float(trapezoid(traction_power, t)) if has_interval else 0.0
        drag_work = float(trapezoid(drag_power, t)) if has_interval else 0.0

        if traction_limit is not None and len(traction_limit) > 0:
            limited = traction_magnitude >= np.asarray(traction_limit) * (1 - 1e-9)
            traction_limited_fraction = float(np.mean(limited))
        else:
            traction_limited_fraction = float("nan")

        max_pitch = float(np.max(np.abs(state[:, PITCH]))) if len(state) else 0.0
        max_roll = float(np.max(np.abs(state[:, ROLL]))) if len(state) else 0.0
        displacement = state[-1, POSITION] - state[0, POSITION] if len(state) else np.zeros(3)

        return {
            "duration": float(t[-1] - t[0]) if has_interval else 0.0,
            "max_speed": float(np.max(speed)) if len(speed) else 0.0,
            "final_speed": float(speed[-1]) if len(speed) else 0.0,
            "mean_speed": float(np.mean(speed)) if len(speed) else 0.0,
            "distance_travelled": float(distance[-1]) if len(distance) else 0.0,
            "displacement": displacement,
            "traction_work": traction_work,
            "drag_work": drag_work,
            "max_traction": float(np.max(traction_magnitude)) if len(traction_magnitude) else 0.0,
            "traction_limited_fraction": traction_limited_fraction,
            "max_suspension_force": float(np.max(np.abs(suspension[:, 2]))) if len(suspension) else 0.0,
            "max_pitch": max_pitch,
            "max_roll": max_roll,
            "excessive_pitch": max_pitch > self.max_pitch_warning,
            "is_finite": bool(np.all(np.isfinite(state)) and np.all(np.isfinite(forces))),
        }
