from __future__ import annotations

import logging

from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .models import Budget, DateRange, Place, RankedPlace, TravelStyle, UserPreferences
from .scoring import score_place

logger = logging.getLogger(__name__)

BUDGET_PRICE_TOKENS: dict[Budget, frozenset[str]] = {
    Budget.LOW: frozenset({"FREE", "$"}),
    Budget.MEDIUM: frozenset({"FREE", "$", "$$"}),
    Budget.HIGH: frozenset({"FREE", "$", "$$", "$$$"}),
    Budget.UNLIMITED: frozenset({"FREE", "$", "$$", "$$$", "$$$$"}),
}

# English keywords plus the Korean category words emitted by the tour board.
STYLE_KEYWORDS: dict[TravelStyle, frozenset[str]] = {
    TravelStyle.RELAXATION: frozenset({
        "cafe", "park", "spa", "beach", "hot-spring", "resort",
        "카페", "공원", "스파", "해변", "온천", "휴양지",
    }),
    TravelStyle.ADVENTURE: frozenset({
        "activity", "hiking", "experience", "sport", "outdoor",
        "액티비티", "등산", "체험", "스포츠", "모험", "아웃도어",
    }),
    TravelStyle.CULTURAL: frozenset({
        "museum", "gallery", "tradition", "history", "heritage", "temple", "palace",
        "박물관", "미술관", "전통", "역사", "문화재", "궁궐", "사찰",
    }),
    TravelStyle.FOODIE: frozenset({
        "restaurant", "market", "cafe", "bakery", "local-food",
        "맛집", "시장", "카페", "베이커리", "전통음식", "로컬푸드",
    }),
    TravelStyle.SHOPPING: frozenset({
        "mall", "market", "outlet", "duty-free", "brand",
        "쇼핑", "백화점", "아울렛", "시장", "면세점", "브랜드",
    }),
    TravelStyle.NATURE: frozenset({
        "mountain", "sea", "park", "forest", "valley", "waterfall", "beach",
        "산", "바다", "공원", "자연", "숲", "계곡", "폭포", "해변",
    }),
}

_ALWAYS_OPEN_MARKERS = ("24시간", "24 hours", "24h", "00:00-24:00")
_CLOSURE_MARKERS = ("closed", "휴무")
_MONDAY_MARKERS = ("monday", "월요일")


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def matches_budget(place: Place, budget: Budget | None) -> bool:
    """Places without a price token pass; otherwise the token must be affordable."""
    if budget is None or not place.price_range or not place.price_range.strip():
        return True
    return place.price_range.strip() in BUDGET_PRICE_TOKENS[budget]


def matches_style(place: Place, style: TravelStyle | None) -> bool:
    if style is None or place.category is None:
        return True
    category = place.category.lower()
    return any(keyword in category for keyword in STYLE_KEYWORDS[style])


def matches_categories(place: Place, preferred_categories: list[str] | None) -> bool:
    if not preferred_categories or place.category is None:
        return True
    category = place.category.lower()
    return any(preferred.lower() in category for preferred in preferred_categories)


def is_operating_during_trip(place: Place, dates: DateRange | None) -> bool:
    """
    Narrow closure heuristic: only a Monday closure on a trip spanning a
    Monday excludes a place. Every other schedule passes.
    """
    if dates is None or not place.operating_hours:
        return True

    hours = place.operating_hours.lower()
    if any(marker in hours for marker in _ALWAYS_OPEN_MARKERS):
        return True

    if any(marker in hours for marker in _CLOSURE_MARKERS) and any(
        marker in hours for marker in _MONDAY_MARKERS
    ):
        return not dates.contains_monday()

    return True


def max_places(trip_days: int, config: RankingConfig = DEFAULT_RANKING_CONFIG) -> int:
    """Shortlist size for a trip of ``trip_days`` days."""
    return dict(config.max_places_by_days).get(trip_days, config.default_max_places)


def passes_preferences(place: Place, preferences: UserPreferences) -> bool:
    return (
        matches_budget(place, preferences.budget)
        and matches_style(place, preferences.travel_style)
        and matches_categories(place, preferences.preferred_categories)
        and is_operating_during_trip(place, preferences.travel_dates)
    )


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def rank_places(
    places: list[Place],
    preferences: UserPreferences,
    weights: dict[str, float] | None = None,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> list[RankedPlace]:
    """
    Filter ``places`` by ``preferences`` and return the capped shortlist with
    scores, best first. Ties keep their input order.
    """
    if not places:
        return []

    logger.info(
        "Filtering %d places (style=%s, budget=%s, days=%d)",
        len(places),
        preferences.travel_style,
        preferences.budget,
        preferences.trip_days,
    )

    survivors = [p for p in places if passes_preferences(p, preferences)]
    scored = [
        RankedPlace(place=p, score=score_place(p, weights, config)) for p in survivors
    ]
    # sorted() is stable with reverse=True, so equal scores keep input order.
    scored = sorted(scored, key=lambda r: r.score, reverse=True)
    limit = max_places(preferences.trip_days, config)
    ranked = scored[:limit]

    logger.info(
        "Filtered %d -> %d places (%d passed predicates, cap %d)",
        len(places),
        len(ranked),
        len(survivors),
        limit,
    )
    return ranked


def filter_by_preferences(
    places: list[Place],
    preferences: UserPreferences,
    weights: dict[str, float] | None = None,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> list[Place]:
    """Same pipeline as ``rank_places`` without exposing scores."""
    return [r.place for r in rank_places(places, preferences, weights, config)]
