from __future__ import annotations

import math
from enum import Enum
from typing import Iterable, Sequence

import numpy as np

EARTH_RADIUS_KM = 6371.0

Point = tuple[float, float]


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance between two coordinates in kilometres."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distances_km(lat: float, lon: float, points: Sequence[Point]) -> np.ndarray:
    """Vectorized haversine from one origin to every point in ``points``."""
    if len(points) == 0:
        return np.zeros(0)

    coords = np.radians(np.asarray(points, dtype=float))
    lat0, lon0 = math.radians(lat), math.radians(lon)
    d_lat = coords[:, 0] - lat0
    d_lon = coords[:, 1] - lon0

    a = np.sin(d_lat / 2) ** 2 + math.cos(lat0) * np.cos(coords[:, 0]) * np.sin(d_lon / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def min_distance_km(origin: Point, references: Sequence[Point]) -> float:
    if not references:
        return 0.0
    return float(distances_km(origin[0], origin[1], references).min())


def average_distance_km(origin: Point, references: Sequence[Point]) -> float:
    if not references:
        return 0.0
    return float(distances_km(origin[0], origin[1], references).mean())


def route_distance_km(points: Iterable[Point]) -> float:
    """Total length of a route visiting ``points`` in order."""
    stops = list(points)
    if len(stops) < 2:
        return 0.0
    return sum(
        distance_km(a[0], a[1], b[0], b[1]) for a, b in zip(stops, stops[1:])
    )


def travel_minutes(distance: float, speed_kmh: float) -> int:
    """Whole minutes needed to cover ``distance`` km at ``speed_kmh``."""
    if distance <= 0 or speed_kmh <= 0:
        return 0
    return math.ceil(distance / speed_kmh * 60)


class DistanceCategory(str, Enum):
    walkable = "walkable"
    near = "near"
    far = "far"


WALKABLE_MAX_KM = 2.0
NEAR_MAX_KM = 5.0


def categorize_distance(distance: float) -> DistanceCategory:
    if distance <= WALKABLE_MAX_KM:
        return DistanceCategory.walkable
    if distance <= NEAR_MAX_KM:
        return DistanceCategory.near
    return DistanceCategory.far
