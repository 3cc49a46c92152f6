"""
Truck Dynamics Simulation

Entry point that runs the truck over the same terrain under different road
surfaces and weather, printing a summary for each condition.
"""

import logging

from truck import (
    EnvironmentModel,
    EnvironmentParams,
    PhysicsEngine,
    RunAnalyzer,
    TruckParams,
    TruckSimulator,
    Vehicle,
    VehicleState,
    degrees_to_radians,
    run_condition_analysis,
)

__all__ = [
    "EnvironmentModel",
    "EnvironmentParams",
    "PhysicsEngine",
    "RunAnalyzer",
    "TruckParams",
    "TruckSimulator",
    "Vehicle",
    "VehicleState",
    "degrees_to_radians",
    "run_condition_analysis",
]


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    conditions = [
        ("asphalt", "clear"),
        ("asphalt", "rainy"),
        ("concrete", "snowy"),
        ("gravel", "clear"),
        ("dirt", "icy"),
    ]
    environment = EnvironmentParams(latitude=degrees_to_radians(45.0))
    results = run_condition_analysis(conditions, duration=10.0, base_environment=environment)

    # Print results
    print("Road Condition Analysis Results:")
    print("-" * 80)
    for (road_type, weather), data in results.items():
        analysis = data["analysis"]
        print(f"\nRoad: {road_type}, weather: {weather}")
        print(f"  Final speed: {analysis['final_speed']:.2f} m/s")
        print(f"  Max speed: {analysis['max_speed']:.2f} m/s")
        print(f"  Distance travelled: {analysis['distance_travelled']:.1f} m")
        print(f"  Traction work: {analysis['traction_work']/1e6:.2f} MJ")
        print(f"  Drag work: {analysis['drag_work']/1e3:.2f} kJ")
        print(f"  Traction limited: {analysis['traction_limited_fraction']*100:.1f}% of steps")
        print(f"  Max suspension force: {analysis['max_suspension_force']/1000:.1f} kN")
        print(f"  Max pitch: {analysis['max_pitch']:.3f} rad")
        print(f"  Finite: {analysis['is_finite']}")
