"""
Truck and environment parameters
"""

import math
from dataclasses import dataclass
from typing import Dict, Tuple


# Base friction coefficient per road surface
ROAD_FRICTION: Dict[str, float] = {
    "asphalt": 0.8,
    "concrete": 0.7,
    "gravel": 0.6,
    "dirt": 0.5,
}

# Friction multiplier per weather condition
WEATHER_FACTORS: Dict[str, float] = {
    "clear": 1.0,
    "cloudy": 0.95,
    "rainy": 0.7,
    "snowy": 0.3,
    "icy": 0.1,
}

# (base_height m, amplitude m, frequency 1/m) per terrain type
TERRAIN_TYPES: Dict[str, Tuple[float, float, float]] = {
    "flat": (0.0, 0.1, 0.01),
    "hilly": (0.0, 10.0, 0.005),
    "mountainous": (100.0, 500.0, 0.002),
}

DEFAULT_ROAD_TYPE = "asphalt"
DEFAULT_WEATHER = "clear"
DEFAULT_TERRAIN_TYPE = "flat"


def degrees_to_radians(degrees: float) -> float:
    """
    Convert an angle entered in degrees to radians

    Latitude must be passed to the environment model in radians; use this at
    the input boundary.

    Args:
        degrees: Angle in degrees

    Returns:
        Angle in radians
    """
    return degrees * math.pi / 180.0


@dataclass(frozen=True)
class TruckParams:
    """Physical parameters of the truck"""

    mass: float = 15000.0  # kg
    length: float = 16.0  # m
    width: float = 2.5  # m
    height: float = 4.0  # m
    engine_power: float = 400000.0  # W (400 kW)
    transmission_efficiency: float = 0.9  # 0-1
    drag_coefficient: float = 0.7
    rolling_resistance_coefficient: float = 0.01
    # Wheels (two per axle, axles evenly spaced along the length)
    axle_count: int = 3
    wheel_radius: float = 0.5  # m
    wheel_width: float = 0.3  # m

    @property
    def frontal_area(self) -> float:
        """Frontal area (m²)"""
        return self.width * self.height

    @property
    def moments_of_inertia(self) -> Tuple[float, float, float]:
        """
        Principal moments of inertia (roll, pitch, yaw) in kg·m²

        Approximated as a uniform rectangular box: I = m * (d1² + d2²) / 12
        using the two dimensions perpendicular to each axis.
        """
        m = self.mass
        i_roll = m * (self.width**2 + self.height**2) / 12
        i_pitch = m * (self.length**2 + self.height**2) / 12
        i_yaw = m * (self.length**2 + self.width**2) / 12
        return i_roll, i_pitch, i_yaw

    def geometry_key(self) -> Tuple[float, float, float, int, float, float]:
        """Fields that determine wheel layout; a change here requires a wheel rebuild"""
        return (
            self.length,
            self.width,
            self.height,
            self.axle_count,
            self.wheel_radius,
            self.wheel_width,
        )


@dataclass(frozen=True)
class EnvironmentParams:
    """Environmental inputs sampled by the environment model"""

    latitude: float = math.pi / 4  # rad (45°), callers convert degrees first
    altitude: float = 500.0  # m
    temperature: float = 20.0  # °C
    humidity: float = 0.5  # 0-1
    wind_speed: float = 10.0  # m/s
    wind_direction: float = 45.0  # degrees from +x toward +y
    road_type: str = DEFAULT_ROAD_TYPE
    weather: str = DEFAULT_WEATHER
    terrain_type: str = "hilly"
    road_radius: float = 100.0  # m
