from __future__ import annotations

from typing import Sequence

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from ..geo.distance import Point, distance_km, distances_km


class Cluster(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    display_name: str
    center_lat: float
    center_lng: float
    radius_m: int = Field(..., gt=0)
    styles: tuple[str, ...] = ()
    age_group: str | None = None
    budget: str | None = None
    characteristics: tuple[str, ...] = ()
    description: str = ""

    @property
    def radius_km(self) -> float:
        return self.radius_m / 1000.0

    def contains(self, lat: float | None, lon: float | None) -> bool:
        """Whether a coordinate lies inside the cluster radius."""
        if lat is None or lon is None:
            return False
        return distance_km(lat, lon, self.center_lat, self.center_lng) <= self.radius_km

    def contains_points(self, points: Sequence[Point]) -> np.ndarray:
        """Boolean mask over ``points`` marking those inside the cluster radius."""
        return distances_km(self.center_lat, self.center_lng, points) <= self.radius_km


class ClusterScoresRequest(BaseModel):
    style: str = Field(..., description="Free-text travel style, e.g. 'young trendy culture'")
    total_places: int = Field(default=30, ge=0)


class ClusterScoresResponse(BaseModel):
    scores: dict[str, float]
    distribution: dict[str, int]
