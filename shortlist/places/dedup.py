"""
Deduplication of point-of-interest candidates.

Candidates collected from independent providers (maps, tour board, web search)
frequently describe the same venue with slightly different names, addresses or
coordinates. ``deduplicate`` collapses them into one merged record per venue,
keeping the order in which venues first appeared.

Two records are the same place when, checked in this order:

1. both have coordinates within ``coordinate_threshold_km`` of each other;
2. their normalized names are within ``name_distance_threshold`` edits;
3. their normalized addresses are equal.

The first rule that holds decides; the scan is O(n^2) over accepted records, so
callers partition large catalogs (by region or category) before calling.
"""
from __future__ import annotations

import hashlib
import logging
import math
from typing import Callable, TypeVar

from ..geo.distance import distance_km
from ..geo.text import edit_distance, normalize_address, normalize_text
from .config import DEFAULT_DEDUP_CONFIG, DedupConfig
from .models import Place

logger = logging.getLogger(__name__)

T = TypeVar("T")


def deduplicate(
    places: list[Place],
    config: DedupConfig = DEFAULT_DEDUP_CONFIG,
) -> list[Place]:
    """Return unique, field-merged places in first-occurrence order."""
    if not places:
        return []

    accepted: list[Place] = []
    for candidate in places:
        if candidate is None or not candidate.has_name:
            continue

        for index in range(len(accepted)):
            existing = accepted[index]
            rule = is_same_place(existing, candidate, config)
            if rule is not None:
                logger.debug(
                    "Merging %r into %r (matched on %s)", candidate.name, existing.name, rule
                )
                merge_places(existing, candidate, config)
                break
        else:
            # Accepted entries are owned copies; merges never touch caller input.
            accepted.append(_with_id(candidate.model_copy(deep=True)))

    logger.info(
        "Deduplicated %d candidates into %d places (%d%% duplicates)",
        len(places),
        len(accepted),
        round((1.0 - len(accepted) / len(places)) * 100),
    )
    return accepted


def is_same_place(
    a: Place,
    b: Place,
    config: DedupConfig = DEFAULT_DEDUP_CONFIG,
) -> str | None:
    """
    Name of the first matching rule ("coordinates", "name", "address"),
    or None when the records describe different places.
    """
    if a.has_coordinates and b.has_coordinates:
        distance = distance_km(a.latitude, a.longitude, b.latitude, b.longitude)
        if distance <= config.coordinate_threshold_km:
            return "coordinates"

    name_a = normalize_text(a.name or "")
    name_b = normalize_text(b.name or "")
    if name_a and name_b:
        if edit_distance(name_a, name_b) <= config.name_distance_threshold:
            return "name"

    # Addresses that normalize to nothing ("", "  ", "()") count as missing.
    address_a = normalize_address(a.address)
    address_b = normalize_address(b.address)
    if address_a and address_b and address_a == address_b:
        return "address"

    return None


def merge_places(
    existing: Place,
    candidate: Place,
    config: DedupConfig = DEFAULT_DEDUP_CONFIG,
) -> Place:
    """Fold ``candidate`` into ``existing`` in place and return ``existing``."""
    existing.name = _choose_longer(existing.name, candidate.name)
    existing.address = _choose_longer(existing.address, candidate.address)
    existing.category = _choose_longer(existing.category, candidate.category)
    existing.operating_hours = _choose_longer(existing.operating_hours, candidate.operating_hours)
    existing.price_range = _choose_longer(existing.price_range, candidate.price_range)
    existing.recommended_time = _choose_longer(existing.recommended_time, candidate.recommended_time)

    existing.description = merge_descriptions(
        existing.description, candidate.description, config.description_separator
    )
    existing.rating = merge_ratings(existing.rating, candidate.rating)
    existing.tags = merge_tags(existing.tags, candidate.tags)
    existing.source = merge_sources(existing.source, candidate.source, config.source_separator)

    if _coordinate_precision(candidate) > _coordinate_precision(existing):
        existing.latitude = candidate.latitude
        existing.longitude = candidate.longitude

    # First non-null value wins for itinerary placement.
    if existing.travel_style is None:
        existing.travel_style = candidate.travel_style
    if existing.time_block is None:
        existing.time_block = candidate.time_block
    if existing.day is None:
        existing.day = candidate.day

    existing.id = place_id(existing.name, existing.address)
    return existing


def merge_descriptions(first: str | None, second: str | None, separator: str = " ") -> str | None:
    if first is None:
        return second
    if second is None:
        return first
    if second in first or first in second:
        return first if len(first) > len(second) else second
    return first + separator + second


def merge_ratings(first: float | None, second: float | None) -> float | None:
    """Mean of both ratings rounded half-up to one decimal place."""
    if first is None:
        return second
    if second is None:
        return first
    return math.floor((first + second) / 2.0 * 10.0 + 0.5) / 10.0


def merge_tags(first: list[str], second: list[str]) -> list[str]:
    return list(dict.fromkeys([*first, *second]))


def merge_sources(first: str | None, second: str | None, separator: str = ", ") -> str | None:
    if first is None:
        return second
    if second is None:
        return first
    if second == first or second in first.split(separator):
        return first
    return first + separator + second


def place_id(name: str | None, address: str | None) -> str:
    """Deterministic identifier derived from a place's name and address."""
    base = (name or "") + (address or "")
    return "place_" + hashlib.sha256(base.encode()).hexdigest()[:16]


def _with_id(place: Place) -> Place:
    if not place.id:
        place.id = place_id(place.name, place.address)
    return place


def _choose_longer(existing: str | None, candidate: str | None) -> str | None:
    return _choose_better(existing, candidate, len)


def _choose_better(existing: T | None, candidate: T | None, scorer: Callable[[T], int]) -> T | None:
    if existing is None:
        return candidate
    if candidate is None:
        return existing
    return candidate if scorer(candidate) > scorer(existing) else existing


def _decimal_digits(value: float | None) -> int:
    if value is None:
        return 0
    text = repr(float(value))
    if "e" in text or "." not in text:
        return 0
    return len(text.split(".", 1)[1].rstrip("0"))


def _coordinate_precision(place: Place) -> int:
    if not place.has_coordinates:
        return -1
    return _decimal_digits(place.latitude) + _decimal_digits(place.longitude)
