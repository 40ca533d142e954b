from __future__ import annotations

import logging
import math

from ..places.filtering import rank_places
from ..places.models import Place, RankedPlace, TravelStyle, UserPreferences
from ..places.scoring import score_place
from .catalog import ClusterCatalog
from .config import DEFAULT_CLUSTER_CONFIG, ClusterConfig

logger = logging.getLogger(__name__)

# Free-text descriptor matched against cluster style tags for each travel style.
STYLE_DESCRIPTORS: dict[TravelStyle, str] = {
    TravelStyle.RELAXATION: "healing relaxation",
    TravelStyle.ADVENTURE: "active adventure",
    TravelStyle.CULTURAL: "culture art",
    TravelStyle.FOODIE: "food gourmet",
    TravelStyle.SHOPPING: "shopping luxury",
    TravelStyle.NATURE: "nature healing",
}


def match_score(cluster_styles: tuple[str, ...] | list[str], style_descriptor: str) -> float:
    """Fraction of the cluster's style tags mentioned in the descriptor."""
    if not cluster_styles:
        return 0.0
    descriptor = style_descriptor.lower()
    matched = sum(1 for style in cluster_styles if style.lower() in descriptor)
    return matched / len(cluster_styles)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class ClusterMatcher:
    """Style matching and quota allocation over an injected catalog."""

    def __init__(self, catalog: ClusterCatalog) -> None:
        self.catalog = catalog

    def cluster_scores(self, style_descriptor: str) -> dict[str, float]:
        """
        Match score per cluster, best first. Equal scores keep registry order.
        """
        scores = [
            (name, match_score(cluster.styles, style_descriptor))
            for name, cluster in self.catalog.get_all_clusters().items()
        ]
        scores.sort(key=lambda item: item[1], reverse=True)
        return dict(scores)

    def place_distribution(self, scores: dict[str, float], total_places: int) -> dict[str, int]:
        """
        Integer quota per cluster proportional to its score.

        When every score is zero the total is split evenly, and the remainder
        goes one by one to clusters in registry order.
        """
        if not scores:
            return {}
        if total_places <= 0:
            return {name: 0 for name in scores}

        total_weight = sum(scores.values())
        if total_weight <= 0:
            return self._even_split(list(scores), total_places)

        return {
            name: _round_half_up(total_places * score / total_weight)
            for name, score in scores.items()
        }

    def _even_split(self, names: list[str], total_places: int) -> dict[str, int]:
        registry_order = {name: i for i, name in enumerate(self.catalog.names)}
        ordered = sorted(names, key=lambda n: registry_order.get(n, len(registry_order)))

        base, remainder = divmod(total_places, len(ordered))
        distribution = {name: base for name in ordered}
        for name in ordered[:remainder]:
            distribution[name] += 1

        logger.info(
            "All cluster scores are zero; split %d places evenly across %d clusters",
            total_places,
            len(ordered),
        )
        return distribution

    def locate(self, lat: float | None, lon: float | None) -> list[str]:
        """Names of the clusters whose radius contains the coordinate."""
        if lat is None or lon is None:
            return []
        return [
            name
            for name, cluster in self.catalog.get_all_clusters().items()
            if bool(cluster.contains_points([(lat, lon)])[0])
        ]

    def select_places(
        self,
        places: list[Place],
        quotas: dict[str, int],
        scores: dict[str, float] | None = None,
        config: ClusterConfig = DEFAULT_CLUSTER_CONFIG,
    ) -> list[Place]:
        """
        Fill each cluster's quota with its best scored places, then append the
        places no cluster picked, in input order.

        With ``scores`` given, clusters scoring at or below
        ``config.min_cluster_score`` are skipped.
        """
        located = [i for i, p in enumerate(places) if p.has_coordinates]
        points = [(places[i].latitude, places[i].longitude) for i in located]

        selected: list[Place] = []
        taken: set[int] = set()

        for name in self.catalog.names:
            quota = quotas.get(name, 0)
            cluster = self.catalog.get_cluster(name)
            if quota <= 0 or cluster is None:
                continue
            if scores is not None and scores.get(name, 0.0) <= config.min_cluster_score:
                logger.debug("Cluster %s skipped: score below %.2f", name, config.min_cluster_score)
                continue

            mask = cluster.contains_points(points)
            inside = [
                (i, places[i])
                for i, hit in zip(located, mask)
                if hit and i not in taken
            ]
            inside.sort(key=lambda item: score_place(item[1]), reverse=True)
            picked = inside[:quota]
            for i, p in picked:
                taken.add(i)
                selected.append(p)
            logger.debug("Cluster %s: picked %d of quota %d", name, len(picked), quota)

        selected.extend(p for i, p in enumerate(places) if i not in taken)
        return selected

    def rank_with_clusters(
        self,
        places: list[Place],
        preferences: UserPreferences,
        config: ClusterConfig = DEFAULT_CLUSTER_CONFIG,
    ) -> list[RankedPlace]:
        """
        Rank ``places`` by preferences, then reorder the shortlist so each
        cluster matching the travel style gets its share of the top slots.
        """
        ranked = rank_places(places, preferences)
        if not ranked:
            return []

        descriptor = STYLE_DESCRIPTORS.get(preferences.travel_style, "")
        scores = self.cluster_scores(descriptor)
        quotas = self.place_distribution(scores, len(ranked))
        logger.info("Cluster quotas for style %s: %s", preferences.travel_style, quotas)

        by_place = {id(r.place): r for r in ranked}
        ordered = self.select_places([r.place for r in ranked], quotas, scores, config)
        return [by_place[id(p)] for p in ordered]
