from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DedupConfig:
    """
    Thresholds and separators for the deduplication pass.
    """

    coordinate_threshold_km: float = 0.1
    name_distance_threshold: int = 3
    description_separator: str = " "
    source_separator: str = ", "


DEFAULT_DEDUP_CONFIG = DedupConfig()


@dataclass(frozen=True)
class RankingConfig:
    default_rating: float = 3.5
    max_rating: float = 5.0
    tag_saturation: int = 5
    default_category_popularity: float = 0.5
    # (trip days, max places); anything not listed uses default_max_places
    max_places_by_days: tuple[tuple[int, int], ...] = ((1, 8), (2, 15), (3, 20))
    default_max_places: int = 30


DEFAULT_RANKING_CONFIG = RankingConfig()
