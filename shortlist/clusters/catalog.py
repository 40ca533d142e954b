from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable

from .models import Cluster

logger = logging.getLogger(__name__)


class ClusterCatalog:
    """
    Read-only registry of clusters, keyed by name in insertion order.

    Built once at startup and shared by reference; nothing mutates it after
    construction, so concurrent readers need no locking.
    """

    def __init__(self, clusters: Iterable[Cluster]) -> None:
        registry: dict[str, Cluster] = {}
        for cluster in clusters:
            if cluster.name in registry:
                raise ValueError(f"Duplicate cluster name: {cluster.name}")
            registry[cluster.name] = cluster
        self._clusters = MappingProxyType(registry)

    def __len__(self) -> int:
        return len(self._clusters)

    def __contains__(self, name: object) -> bool:
        return name in self._clusters

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._clusters)

    def get_all_clusters(self) -> dict[str, Cluster]:
        """A fresh copy of the registry; changing it does not affect the catalog."""
        return dict(self._clusters)

    def get_cluster(self, name: str) -> Cluster | None:
        return self._clusters.get(name)


SEOUL_CLUSTERS: tuple[Cluster, ...] = (
    Cluster(
        name="hongdae",
        display_name="Hongdae",
        center_lat=37.5563,
        center_lng=126.9234,
        radius_m=2000,
        styles=("young", "active", "culture", "art"),
        age_group="20-30",
        budget="medium",
        characteristics=("indie culture", "street performance", "club", "cafe"),
        description="Youth culture, cafes and the indie scene",
    ),
    Cluster(
        name="gangnam",
        display_name="Gangnam",
        center_lat=37.5172,
        center_lng=127.0473,
        radius_m=2000,
        styles=("luxury", "shopping", "business"),
        age_group="30-40",
        budget="high",
        characteristics=("department store", "fine dining", "entertainment"),
        description="Shopping, luxury and business district",
    ),
    Cluster(
        name="sungsu",
        display_name="Seongsu",
        center_lat=37.5446,
        center_lng=127.0559,
        radius_m=2000,
        styles=("trendy", "hip", "creative"),
        age_group="20-30",
        budget="medium",
        characteristics=("cafe", "pop-up store", "gallery", "workshop"),
        description="Trendy cafes and pop-up stores",
    ),
    Cluster(
        name="jongno",
        display_name="Jongno",
        center_lat=37.5735,
        center_lng=126.9788,
        radius_m=2000,
        styles=("tradition", "history", "culture"),
        age_group="40-50",
        budget="medium",
        characteristics=("palace", "museum", "traditional market", "hanok"),
        description="Tradition, history and cultural heritage",
    ),
    Cluster(
        name="itaewon",
        display_name="Itaewon",
        center_lat=37.5347,
        center_lng=126.9947,
        radius_m=2000,
        styles=("international", "diversity", "nightlife"),
        age_group="20-40",
        budget="medium",
        characteristics=("international food", "club", "bar", "shopping"),
        description="International, diverse nightlife area",
    ),
    Cluster(
        name="bukchon",
        display_name="Bukchon/Samcheong-dong",
        center_lat=37.5838,
        center_lng=126.9822,
        radius_m=2000,
        styles=("tradition", "art", "healing"),
        age_group="30-50",
        budget="medium",
        characteristics=("hanok", "gallery", "cafe", "workshop"),
        description="Hanok village, tradition and galleries",
    ),
)


def build_seoul_catalog() -> ClusterCatalog:
    catalog = ClusterCatalog(SEOUL_CLUSTERS)
    logger.info("Initialized %d predefined clusters", len(catalog))
    return catalog
