from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException

from .clusters.catalog import build_seoul_catalog
from .clusters.matcher import ClusterMatcher
from .clusters.models import Cluster, ClusterScoresRequest, ClusterScoresResponse
from .config import DEFAULT_APP_CONFIG
from .places.dedup import deduplicate
from .places.filtering import rank_places
from .places.models import (
    DeduplicateRequest,
    DeduplicateResponse,
    RankRequest,
    RankResponse,
    VisitTimeRequest,
    VisitTimeResponse,
)
from .places.visit_time import recommend_visit_time

logging.basicConfig(
    level=DEFAULT_APP_CONFIG.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Built once and shared read-only by every request.
CLUSTER_CATALOG = build_seoul_catalog()
CLUSTER_MATCHER = ClusterMatcher(CLUSTER_CATALOG)

app = FastAPI(title=DEFAULT_APP_CONFIG.title, version="1.0.0")


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Place endpoints ──────────────────────────────────────────────────────


@app.post("/places/deduplicate", response_model=DeduplicateResponse)
def deduplicate_places(body: DeduplicateRequest) -> DeduplicateResponse:
    merged = deduplicate(body.places)
    return DeduplicateResponse(
        places=merged,
        input_count=len(body.places),
        output_count=len(merged),
    )


@app.post("/places/rank", response_model=RankResponse)
def rank(body: RankRequest) -> RankResponse:
    candidates = deduplicate(body.places) if body.deduplicate else body.places
    if body.cluster:
        results = CLUSTER_MATCHER.rank_with_clusters(candidates, body.preferences)
    else:
        results = rank_places(candidates, body.preferences)
    return RankResponse(results=results, total_candidates=len(candidates))


@app.post("/places/visit-time", response_model=VisitTimeResponse)
def visit_time(body: VisitTimeRequest) -> VisitTimeResponse:
    window = recommend_visit_time(body.time_block, body.category, body.operating_hours)
    return VisitTimeResponse(time_block=body.time_block, recommended_time=window)


# ── Cluster endpoints ────────────────────────────────────────────────────


@app.get("/clusters", response_model=list[Cluster])
def list_clusters() -> list[Cluster]:
    return list(CLUSTER_CATALOG.get_all_clusters().values())


@app.get("/clusters/{name}", response_model=Cluster)
def get_cluster(name: str) -> Cluster:
    cluster = CLUSTER_CATALOG.get_cluster(name)
    if cluster is None:
        raise HTTPException(status_code=404, detail=f"Unknown cluster: {name}")
    return cluster


@app.post("/clusters/distribution", response_model=ClusterScoresResponse)
def cluster_distribution(body: ClusterScoresRequest) -> ClusterScoresResponse:
    scores = CLUSTER_MATCHER.cluster_scores(body.style)
    distribution = CLUSTER_MATCHER.place_distribution(scores, body.total_places)
    logger.info("Distributed %d places for style %r: %s", body.total_places, body.style, distribution)
    return ClusterScoresResponse(scores=scores, distribution=distribution)
