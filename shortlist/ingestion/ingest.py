"""
CSV import for point-of-interest candidates.

Provider exports disagree on column names ("title" vs "name", "lat" vs
"mapy", ...). The first present alias wins for every canonical field.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from ..places.models import PRICE_TOKENS, Place
from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

logger = logging.getLogger(__name__)

COLUMN_ALIASES: Dict[str, List[str]] = {
    "id": ["id", "place_id", "content_id", "contentid"],
    "name": ["name", "title", "place_name"],
    "address": ["address", "addr", "addr1", "road_address"],
    "latitude": ["latitude", "lat", "mapy", "y"],
    "longitude": ["longitude", "lng", "lon", "mapx", "x"],
    "category": ["category", "category_name", "type"],
    "rating": ["rating", "score", "avg_rating"],
    "description": ["description", "overview", "summary"],
    "operating_hours": ["operating_hours", "opening_hours", "hours", "usetime"],
    "price_range": ["price_range", "price", "price_level"],
    "tags": ["tags", "keywords"],
    "source": ["source", "provider"],
    "travel_style": ["travel_style", "style"],
    "time_block": ["time_block"],
    "day": ["day"],
    "recommended_time": ["recommended_time", "recommend_time"],
}

_NUMERIC_FIELDS = ("latitude", "longitude", "rating", "day")


def _first_present(df: pd.DataFrame, columns: List[str]) -> str | None:
    lowered = {str(c).lower(): c for c in df.columns}
    for col in columns:
        if col in lowered:
            return lowered[col]
    return None


def _normalize_rating(rating: Any) -> float | None:
    if rating is None or pd.isna(rating):
        return None
    raw = str(rating).strip()
    # Handle "X/5" format (e.g. "4.1/5")
    if "/" in raw:
        raw = raw.split("/")[0].strip()
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return max(0.0, min(5.0, value))


def _normalize_price(value: Any) -> str | None:
    if value is None or pd.isna(value):
        return None
    token = str(value).strip().upper()
    return token if token in PRICE_TOKENS else None


def _split_tags(value: Any, separators: str) -> list[str]:
    if value is None or pd.isna(value):
        return []
    parts = re.split(f"[{re.escape(separators)}]", str(value))
    return [p.strip() for p in parts if p.strip()]


def _text(value: Any) -> str | None:
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def load_places(path: Path | str, config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> list[Place]:
    """
    Load a provider CSV export as Place candidates.

    Rows without a name are dropped; unparseable numbers become None.
    """
    df = pd.read_csv(path, encoding=config.encoding)

    columns = {field: _first_present(df, aliases) for field, aliases in COLUMN_ALIASES.items()}
    canonical = pd.DataFrame(index=df.index)
    for field, col in columns.items():
        canonical[field] = df[col] if col else None

    for field in _NUMERIC_FIELDS:
        if field == "rating":
            canonical[field] = canonical[field].apply(_normalize_rating)
        else:
            canonical[field] = pd.to_numeric(canonical[field], errors="coerce")

    canonical = canonical[canonical["name"].apply(_text).notna()]

    places: list[Place] = []
    for _, row in canonical.iterrows():
        day = row["day"]
        places.append(
            Place(
                id=_text(row["id"]) or "",
                name=_text(row["name"]),
                address=_text(row["address"]),
                latitude=None if pd.isna(row["latitude"]) else float(row["latitude"]),
                longitude=None if pd.isna(row["longitude"]) else float(row["longitude"]),
                category=_text(row["category"]),
                rating=None if pd.isna(row["rating"]) else float(row["rating"]),
                description=_text(row["description"]),
                operating_hours=_text(row["operating_hours"]),
                price_range=_normalize_price(row["price_range"]),
                tags=_split_tags(row["tags"], config.tag_separators),
                source=_text(row["source"]) or config.default_source,
                travel_style=_text(row["travel_style"]),
                time_block=_text(row["time_block"]),
                day=None if pd.isna(day) else int(day),
                recommended_time=_text(row["recommended_time"]),
            )
        )

    logger.info("Loaded %d places from %s (%d rows)", len(places), path, len(df))
    return places
