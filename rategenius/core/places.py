"""Nearby competitor discovery and per-place detail lookup, both cached."""

import logging
from typing import Any, Callable, Dict, List, Optional

from rategenius.core.cache import TTLCache
from rategenius.etl.transform import to_place_candidates, to_place_detail
from rategenius.models import Coordinate, PlaceCandidate, PlaceDetail
from rategenius.vendors import google_places

logger = logging.getLogger(__name__)

METERS_PER_MILE = 1609.34
MAX_RADIUS_METERS = 40000
NEARBY_TTL_SECONDS = 6 * 3600
DETAIL_TTL_SECONDS = 24 * 3600
DEFAULT_KEYWORD = "self storage"


def radius_to_meters(radius_miles: Any) -> float:
    """Convert miles to metres, capped at what nearby search accepts."""
    try:
        miles = float(radius_miles)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"radius must be numeric, got {radius_miles!r}") from exc
    if not miles > 0:
        raise ValueError("radius must be positive")
    return min(MAX_RADIUS_METERS, miles * METERS_PER_MILE)


class PlaceFinder:
    def __init__(
        self,
        api_key: str,
        cache: TTLCache,
        *,
        keyword: str = DEFAULT_KEYWORD,
        nearby: Optional[Callable[..., Dict[str, Any]]] = None,
    ) -> None:
        self.api_key = api_key
        self.cache = cache
        self.keyword = keyword
        self._nearby = nearby or google_places.nearby_search

    def find(self, coordinate: Coordinate, radius_miles: Any = 10) -> List[PlaceCandidate]:
        radius_m = radius_to_meters(radius_miles)
        cache_key = f"places:{coordinate.latitude}:{coordinate.longitude}:{radius_m}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Nearby search cache hit: %s", cache_key)
            return list(cached)

        logger.info(
            "Nearby search location=%s radius_m=%d keyword=%s",
            coordinate.as_param(),
            round(radius_m),
            self.keyword,
        )
        payload = self._nearby(
            location=coordinate.as_param(),
            radius_m=round(radius_m),
            keyword=self.keyword,
            api_key=self.api_key,
        )
        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            raise google_places.ProviderError("places API failed")

        candidates = to_place_candidates(results)
        logger.info("Nearby search returned %d candidates", len(candidates))
        self.cache.set(cache_key, tuple(candidates), NEARBY_TTL_SECONDS)
        return candidates


class DetailResolver:
    def __init__(
        self,
        api_key: str,
        cache: TTLCache,
        *,
        details: Optional[Callable[[str, str], Optional[Dict[str, Any]]]] = None,
    ) -> None:
        self.api_key = api_key
        self.cache = cache
        self._details = details or google_places.place_details

    def resolve(self, place_id: str) -> Optional[PlaceDetail]:
        """Return the place detail, or None when Places has no record for it."""
        cache_key = f"placedetail:{place_id}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        result = self._details(place_id, self.api_key)
        if not result:
            logger.info("No place details for %s", place_id)
            return None
        detail = to_place_detail(result)
        self.cache.set(cache_key, detail, DETAIL_TTL_SECONDS)
        return detail
