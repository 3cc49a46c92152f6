"""
Test suite for the truck dynamics simulation.

This package contains unit tests organized by component:
- test_truck_params.py: Tests for TruckParams and EnvironmentParams
- test_noise.py: Tests for Perlin terrain noise
- test_environment.py: Tests for gravity, air density, wind, road and terrain
- test_geometry.py: Tests for vectors, rotation and wheel layout
- test_suspension.py: Tests for wheel spring-damper forces
- test_vehicle.py: Tests for engine force and vehicle parameter updates
- test_dynamics.py: Tests for force computation and integration
- test_simulation.py: Tests for simulation execution
- test_run_analysis.py: Tests for run analysis
- test_integration.py: Integration tests for full workflow
"""
