"""Median-based price recommendation from scraped competitor prices."""

import logging
import math
from typing import Any, Iterable, List, Mapping, Optional

from rategenius.models import CompetitorRecord, PriceSuggestion

logger = logging.getLogger(__name__)

UNDERCUT_FACTOR = 0.06
# Fixed for now; not derived from sample size or spread.
DEFAULT_CONFIDENCE = 0.6


class InsufficientDataError(RuntimeError):
    """Raised when no usable competitor price is available."""


def median(prices: Iterable[float]) -> Optional[float]:
    ordered = sorted(prices)
    if not ordered:
        return None
    middle = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[middle]
    return (ordered[middle - 1] + ordered[middle]) / 2


def _to_price(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price):
        return None
    return price


def coerce_prices(values: Iterable[Any]) -> List[float]:
    """Keep the numeric entries, accepting numeric strings such as "120"."""
    prices = []
    for value in values:
        price = _to_price(value)
        if price is not None:
            prices.append(price)
    return prices


def _format_number(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def suggest(
    prices: Iterable[Any],
    *,
    undercut: float = UNDERCUT_FACTOR,
    confidence: float = DEFAULT_CONFIDENCE,
) -> PriceSuggestion:
    valid = coerce_prices(prices)
    med = median(valid)
    if med is None:
        raise InsufficientDataError("no competitor prices available")

    recommended = round(med * (1 - undercut), 2)
    rationale = (
        f"Median competitor price is ${_format_number(med)}. "
        f"Undercutting by {_format_number(undercut * 100)}%"
    )
    logger.info("Suggested %.2f from %d competitor prices (median %.2f)", recommended, len(valid), med)
    return PriceSuggestion(
        recommended_price=recommended,
        rationale=rationale,
        confidence=confidence,
        median=med,
        sample_size=len(valid),
    )


def suggest_from_competitors(competitors: Iterable[Any], **kwargs: Any) -> PriceSuggestion:
    """Run :func:`suggest` over the ``price`` of each scan record or dict."""
    prices = []
    for competitor in competitors:
        if isinstance(competitor, CompetitorRecord):
            prices.append(competitor.price)
        elif isinstance(competitor, Mapping):
            prices.append(competitor.get("price"))
    return suggest(prices, **kwargs)
