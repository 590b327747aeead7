"""Utilities for transforming Google Places responses into scan records."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from rategenius.models import CompetitorRecord, Coordinate, PlaceCandidate, PlaceDetail, ScrapeResult

logger = logging.getLogger(__name__)


def _safe_float(value: Any) -> Optional[float]:
    try:
        if value is None:
            return None
        return float(value)
    except (TypeError, ValueError):
        return None


def _strip_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    value_str = str(value).strip()
    return value_str or None


def parse_location(geometry: Optional[Dict[str, Any]]) -> Optional[Coordinate]:
    location = (geometry or {}).get("location") or {}
    lat = _safe_float(location.get("lat"))
    lng = _safe_float(location.get("lng"))
    if lat is None or lng is None:
        return None
    return Coordinate(lat, lng)


def to_place_candidates(results: Iterable[Dict[str, Any]]) -> List[PlaceCandidate]:
    candidates: List[PlaceCandidate] = []
    for raw in results or []:
        if not isinstance(raw, dict):
            continue
        place_id = raw.get("place_id")
        if not place_id:
            logger.debug("Skipping result without place_id: %s", raw.get("name"))
            continue
        candidates.append(
            PlaceCandidate(
                place_id=place_id,
                name=(raw.get("name") or "").strip(),
                address=_strip_or_none(raw.get("vicinity")),
                location=parse_location(raw.get("geometry")),
                types=tuple(raw.get("types") or ()),
                rating=_safe_float(raw.get("rating")),
            )
        )
    return candidates


def to_place_detail(result: Dict[str, Any]) -> PlaceDetail:
    return PlaceDetail(
        name=_strip_or_none(result.get("name")),
        website=_strip_or_none(result.get("website")),
        phone=_strip_or_none(result.get("formatted_phone_number")),
        formatted_address=_strip_or_none(result.get("formatted_address")),
        maps_url=_strip_or_none(result.get("url")),
    )


def to_competitor_record(
    candidate: PlaceCandidate,
    detail: Optional[PlaceDetail],
    scraped: Optional[ScrapeResult] = None,
    error: Optional[str] = None,
) -> CompetitorRecord:
    website = detail.website if detail else None
    address = (detail.formatted_address if detail else None) or candidate.address
    return CompetitorRecord(
        name=candidate.name,
        address=address,
        place_id=candidate.place_id,
        website=website,
        unit=scraped.unit if scraped else None,
        price=scraped.price if scraped else None,
        source="website" if website else "places",
        error=error,
    )
