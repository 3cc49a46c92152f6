"""
Environment model: gravity, atmosphere, wind, road surface and terrain
"""

import logging
import math
from dataclasses import dataclass
from typing import Mapping, Optional, Set, Tuple
import numpy as np

from truck.geometry import vector
from truck.noise import PerlinNoise
from truck.params import (
    DEFAULT_ROAD_TYPE,
    DEFAULT_TERRAIN_TYPE,
    DEFAULT_WEATHER,
    ROAD_FRICTION,
    TERRAIN_TYPES,
    WEATHER_FACTORS,
    EnvironmentParams,
    TruckParams,
)

logger = logging.getLogger(__name__)

STANDARD_GRAVITY = 9.80665  # m/s²
EARTH_RADIUS = 6371000.0  # m

# International Standard Atmosphere
SEA_LEVEL_PRESSURE = 101325.0  # Pa
SEA_LEVEL_TEMPERATURE = 288.15  # K
LAPSE_RATE = 0.0065  # K/m
MOLAR_MASS_DRY_AIR = 0.0289644  # kg/mol
MOLAR_MASS_VAPOR = 0.018016  # kg/mol
GAS_CONSTANT = 8.31447  # J/(mol·K)

TERRAIN_TIME_SCALE = 0.01



def _log_fallback(kind: str, key: str, fallback: str) -> None:
    logger.debug("Unknown %s %r, using %r", kind, key, fallback)


def calculate_gravity(latitude: float, altitude: float) -> float:
    """
    Gravitational acceleration corrected for latitude and altitude

    Args:
        latitude: Geodetic latitude in radians (convert degrees before calling)
        altitude: Height above sea level (m)

    Returns:
        Gravity (m/s²)
    """
    return (
        STANDARD_GRAVITY
        * (1 - 2 * altitude / EARTH_RADIUS)
        * (1 + 0.0053024 * math.sin(latitude) ** 2 - 0.0000058 * math.sin(2 * latitude) ** 2)
    )


def calculate_air_density(temperature: float, humidity: float, altitude: float) -> float:
    """
    Humid air density at altitude

    Pressure comes from the barometric formula with the standard lapse rate.
    Vapor partial pressure is the Magnus saturation pressure scaled by relative
    humidity; the rest is dry air.

    Args:
        temperature: Air temperature (°C)
        humidity: Relative humidity (0-1)
        altitude: Height above sea level (m)

    Returns:
        Density (kg/m³)
    """
    T = SEA_LEVEL_TEMPERATURE - LAPSE_RATE * altitude
    exponent = (STANDARD_GRAVITY * MOLAR_MASS_DRY_AIR) / (GAS_CONSTANT * LAPSE_RATE)
    p = SEA_LEVEL_PRESSURE * (1 - LAPSE_RATE * altitude / SEA_LEVEL_TEMPERATURE) ** exponent

    kelvin = temperature + 273.15
    pv = humidity * 611.2 * math.exp(17.67 * (kelvin - 273.15) / (kelvin - 29.65))
    pd = p - pv

    return (pd * MOLAR_MASS_DRY_AIR + pv * MOLAR_MASS_VAPOR) / (GAS_CONSTANT * T)


def calculate_wind(wind_speed: float, wind_direction: float, time: float) -> np.ndarray:
    """
    Wind vector with slow variation (±10% speed, ±5° direction)

    Args:
        wind_speed: Mean wind speed (m/s)
        wind_direction: Mean direction (degrees from +x toward +y)
        time: Simulation time (s)

    Returns:
        Wind velocity (m/s), z = 0
    """
    speed = wind_speed * (1 + 0.1 * math.sin(time / 10))
    direction = math.radians(wind_direction + 5 * math.sin(time / 20))
    return vector(speed * math.cos(direction), speed * math.sin(direction), 0.0)


@dataclass(frozen=True)
class RoadCondition:
    """Road grip available to the tires"""

    friction_coefficient: float


def calculate_road_condition(road_type: str, weather: str, time: float) -> RoadCondition:
    """
    Friction coefficient from road surface and weather, with ±5% slow variation

    Unknown road types fall back to asphalt and unknown weather to clear.
    """
    base = ROAD_FRICTION.get(road_type)
    if base is None:
        _log_fallback("road type", road_type, DEFAULT_ROAD_TYPE)
        base = ROAD_FRICTION[DEFAULT_ROAD_TYPE]
    factor = WEATHER_FACTORS.get(weather)
    if factor is None:
        _log_fallback("weather", weather, DEFAULT_WEATHER)
        factor = WEATHER_FACTORS[DEFAULT_WEATHER]
    return RoadCondition(friction_coefficient=base * factor * (1 + 0.05 * math.sin(time / 30)))


@dataclass(frozen=True, eq=False)
class Terrain:
    """Terrain height field sampled from noise at a fixed time"""

    noise: PerlinNoise
    base_height: float  # m
    amplitude: float  # m
    frequency: float  # 1/m
    time: float  # s

    @property
    def slope(self) -> float:
        """Nominal grade (rad), independent of the sampled height"""
        return math.atan(self.amplitude * self.frequency)

    def height_at(self, x: float, y: float) -> float:
        """Terrain elevation (m) at a ground-plane point"""
        n = self.noise.sample(x * self.frequency, y * self.frequency, self.time * TERRAIN_TIME_SCALE)
        return self.base_height + self.amplitude * n

    def heights(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """Vectorised elevation for a grid or list of points, e.g. a render mesh"""
        xs = np.asarray(xs, dtype=float)
        ys = np.asarray(ys, dtype=float)
        n = self.noise.sample(xs * self.frequency, ys * self.frequency, self.time * TERRAIN_TIME_SCALE)
        return self.base_height + self.amplitude * np.asarray(n)


@dataclass(frozen=True, eq=False)
class EnvironmentSnapshot:
    """Environment evaluated at one instant; never mutated"""

    gravity: float  # m/s²
    air_density: float  # kg/m³
    wind: np.ndarray  # m/s
    road: RoadCondition
    terrain: Terrain
    road_radius: float  # m
    altitude: float  # m
    time: float = 0.0  # s


class EnvironmentModel:
    """Produces environment snapshots from a fixed terrain noise table"""

    def __init__(self, seed: Optional[int] = None, noise: Optional[PerlinNoise] = None) -> None:
        """
        Initialize environment model

        Args:
            seed: Seed for the terrain permutation table
            noise: Pre-built noise generator to share between models
        """
        self.noise = noise if noise is not None else PerlinNoise(seed)
        self._reported_keys: Set[Tuple[str, str]] = set()

    def _report_unknown(self, kind: str, key: str, table: Mapping, fallback: str) -> None:
        """Warn once per model about an input key missing from its lookup table"""
        if key in table or (kind, key) in self._reported_keys:
            return
        self._reported_keys.add((kind, key))
        logger.warning("Unknown %s %r, using %r", kind, key, fallback)

    def generate_terrain(self, terrain_type: str, time: float) -> Terrain:
        self._report_unknown("terrain type", terrain_type, TERRAIN_TYPES, DEFAULT_TERRAIN_TYPE)
        profile = TERRAIN_TYPES.get(terrain_type, TERRAIN_TYPES[DEFAULT_TERRAIN_TYPE])
        base_height, amplitude, frequency = profile
        return Terrain(
            noise=self.noise,
            base_height=base_height,
            amplitude=amplitude,
            frequency=frequency,
            time=time,
        )

    def snapshot(
        self, truck_params: TruckParams, environment_params: EnvironmentParams, time: float
    ) -> EnvironmentSnapshot:
        """
        Evaluate the environment at a simulation time

        Args:
            truck_params: Truck parameters (accepted for interface symmetry with
                the physics engine; the environment does not depend on them)
            environment_params: Environmental inputs, latitude in radians
            time: Simulation time (s)

        Returns:
            Fresh environment snapshot
        """
        env = environment_params
        self._report_unknown("road type", env.road_type, ROAD_FRICTION, DEFAULT_ROAD_TYPE)
        self._report_unknown("weather", env.weather, WEATHER_FACTORS, DEFAULT_WEATHER)
        return EnvironmentSnapshot(
            gravity=calculate_gravity(env.latitude, env.altitude),
            air_density=calculate_air_density(env.temperature, env.humidity, env.altitude),
            wind=calculate_wind(env.wind_speed, env.wind_direction, time),
            road=calculate_road_condition(env.road_type, env.weather, time),
            terrain=self.generate_terrain(env.terrain_type, time),
            road_radius=env.road_radius,
            altitude=env.altitude,
            time=time,
        )
