"""Turn a free-form address or a "lat,lng" string into a coordinate."""

import logging
import re
from typing import Any, Callable, Dict, Optional

from rategenius.etl.transform import parse_location
from rategenius.models import Coordinate
from rategenius.vendors import google_places

logger = logging.getLogger(__name__)

COORDINATE_PATTERN = re.compile(r"^-?\d+\.\d+,-?\d+\.\d+$")


class ResolutionError(RuntimeError):
    """Raised when an address cannot be turned into a coordinate."""


def parse_coordinate(text: str) -> Optional[Coordinate]:
    if not COORDINATE_PATTERN.match(text):
        return None
    lat, lng = text.split(",")
    return Coordinate(float(lat), float(lng))


class LocationResolver:
    def __init__(self, api_key: str, geocode: Optional[Callable[[str, str], Dict[str, Any]]] = None) -> None:
        self.api_key = api_key
        self._geocode = geocode or google_places.geocode

    def resolve(self, text: str) -> Coordinate:
        value = (text or "").strip()
        if not value:
            raise ResolutionError("address is empty")

        coordinate = parse_coordinate(value)
        if coordinate is not None:
            return coordinate

        logger.info("Geocoding address=%s", value)
        try:
            payload = self._geocode(value, self.api_key)
        except google_places.ProviderError as exc:
            raise ResolutionError(f"geocode failed: {exc}") from exc

        for result in payload.get("results") or []:
            coordinate = parse_location(result.get("geometry"))
            if coordinate is not None:
                return coordinate
        raise ResolutionError("geocode failed")
