"""Core data models shared by the competitor scan and pricing flows."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple


@dataclass(slots=True, frozen=True)
class Coordinate:
    latitude: float
    longitude: float

    def as_param(self) -> str:
        return f"{self.latitude},{self.longitude}"


@dataclass(slots=True, frozen=True)
class PlaceCandidate:
    """Lightweight nearby-search hit, in the order the provider returned it."""

    place_id: str
    name: str
    address: Optional[str] = None
    location: Optional[Coordinate] = None
    types: Tuple[str, ...] = ()
    rating: Optional[float] = None


@dataclass(slots=True)
class PlaceDetail:
    """Place details payload; a missing website is normal, not a failure."""

    name: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    formatted_address: Optional[str] = None
    maps_url: Optional[str] = None


@dataclass(slots=True)
class ScrapeResult:
    price: Optional[float]
    unit: Optional[str]
    source: str
    captured_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(slots=True)
class CompetitorRecord:
    """One row of the scan response, assembled independently per candidate."""

    name: Optional[str]
    address: Optional[str]
    place_id: Optional[str] = None
    website: Optional[str] = None
    unit: Optional[str] = None
    price: Optional[float] = None
    source: str = "places"
    availability: Optional[str] = None
    # Not computed; kept on the wire so clients can render the column.
    distance: Optional[float] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "address": self.address,
            "place_id": self.place_id,
            "website": self.website,
            "distance": self.distance,
            "unit": self.unit,
            "price": self.price,
            "source": self.source,
            "availability": self.availability,
        }
        if self.error is not None:
            payload["error"] = self.error
        return payload


@dataclass(slots=True)
class PriceSuggestion:
    recommended_price: float
    rationale: str
    confidence: float
    median: float
    sample_size: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recommendedPrice": self.recommended_price,
            "rationale": self.rationale,
            "confidence": self.confidence,
        }
