from __future__ import annotations

from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .models import Place

DEFAULT_WEIGHTS: dict[str, float] = {
    "rating": 0.4,
    "completeness": 0.3,
    "category": 0.2,
    "tags": 0.1,
}

# Checked in order; the first group with a keyword inside the category wins.
CATEGORY_POPULARITY: tuple[tuple[tuple[str, ...], float], ...] = (
    (("attraction", "landmark", "관광지", "명소"), 1.0),
    (("restaurant", "food", "맛집", "음식"), 0.9),
    (("cafe", "dessert", "카페", "디저트"), 0.8),
    (("culture", "museum", "문화", "박물관"), 0.8),
    (("shopping", "market", "쇼핑", "시장"), 0.7),
    (("nature", "park", "자연", "공원"), 0.7),
    (("activity", "experience", "체험", "액티비티"), 0.6),
)

COMPLETENESS_FIELDS = 8


def _filled(value: str | None) -> bool:
    return value is not None and bool(value.strip())


def completeness(place: Place) -> float:
    """Share of the eight descriptive fields that carry a value."""
    filled = sum(
        (
            _filled(place.name),
            _filled(place.address),
            place.has_coordinates,
            _filled(place.category),
            place.rating is not None,
            _filled(place.description),
            _filled(place.operating_hours),
            bool(place.tags),
        )
    )
    return filled / COMPLETENESS_FIELDS


def category_popularity(
    category: str | None,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> float:
    if not category:
        return config.default_category_popularity
    lowered = category.lower()
    for keywords, popularity in CATEGORY_POPULARITY:
        if any(keyword in lowered for keyword in keywords):
            return popularity
    return config.default_category_popularity


def tag_diversity(tags: list[str], config: RankingConfig = DEFAULT_RANKING_CONFIG) -> float:
    if not tags:
        return 0.0
    return min(len(tags) / config.tag_saturation, 1.0)


def normalized_rating(rating: float | None, config: RankingConfig = DEFAULT_RANKING_CONFIG) -> float:
    value = rating if rating is not None else config.default_rating
    return value / config.max_rating


def score_place(
    place: Place,
    weights: dict[str, float] | None = None,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> float:
    """Composite preference-independent quality score in [0, 1]."""
    w = weights or DEFAULT_WEIGHTS
    return (
        w["rating"] * normalized_rating(place.rating, config)
        + w["completeness"] * completeness(place)
        + w["category"] * category_popularity(place.category, config)
        + w["tags"] * tag_diversity(place.tags, config)
    )
