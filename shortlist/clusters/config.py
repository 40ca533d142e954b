from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ClusterConfig:
    # Clusters scoring at or below this never receive places.
    min_cluster_score: float = 0.1


DEFAULT_CLUSTER_CONFIG = ClusterConfig()
