"""
Road condition analysis functions
"""

import logging
from dataclasses import replace
from typing import Any, Dict, Iterable, Optional, Tuple

from truck.analysis import RunAnalyzer
from truck.params import EnvironmentParams, TruckParams
from truck.simulator import DEFAULT_DT, TruckSimulator
from truck.state import VehicleState

logger = logging.getLogger(__name__)

Condition = Tuple[str, str]  # (road_type, weather)


def run_condition_analysis(
    conditions: Iterable[Condition],
    duration: float = 10.0,
    dt: float = DEFAULT_DT,
    truck_params: Optional[TruckParams] = None,
    base_environment: Optional[EnvironmentParams] = None,
    seed: Optional[int] = 0,
    initial_state: Optional[VehicleState] = None
) -> Dict[Condition, Dict[str, Any]]:
    """
    Run simulation for multiple road surface / weather combinations

    Every run shares the same truck, terrain seed and remaining environment
    inputs, so differences come from road grip alone.

    Args:
        conditions: (road_type, weather) pairs
        duration: Simulation duration in seconds
        dt: Time step in seconds
        truck_params: Truck parameters (defaults if omitted)
        base_environment: Environment inputs other than road and weather
        seed: Terrain noise seed
        initial_state: Starting state for every run (at rest at the origin if omitted)

    Returns:
        Dictionary with results for each condition
    """
    params = truck_params if truck_params is not None else TruckParams()
    base = base_environment if base_environment is not None else EnvironmentParams()
    analyzer = RunAnalyzer(params)
    results: Dict[Condition, Dict[str, Any]] = {}

    for road_type, weather in conditions:
        environment = replace(base, road_type=road_type, weather=weather)
        simulator = TruckSimulator(params, environment, seed=seed, initial_state=initial_state)

        t, state, forces = simulator.simulate(duration=duration, dt=dt)
        traction_limit = simulator.traction_limit_history(t)
        analysis = analyzer.analyze(t, state, forces, traction_limit=traction_limit)
        logger.debug(
            "%s/%s: %.1f m in %.1f s", road_type, weather, analysis["distance_travelled"], duration
        )

        results[(road_type, weather)] = {
            "time": t,
            "state": state,
            "forces": forces,
            "traction_limit": traction_limit,
            "analysis": analysis,
            "simulator": simulator,
        }

    return results
