"""Heuristic price and unit-size extraction from rendered pages."""

import re
from typing import Optional, Protocol, Tuple

from bs4 import BeautifulSoup

# "$75", "$ 1,200", "$89.99"
PRICE_REGEX = re.compile(r"\$\s?(\d{1,3}(?:,\d{3})+|\d+)(\.\d{1,2})?")
# "10x10", "5 X 15"
UNIT_REGEX = re.compile(r"(?<!\d)(\d{1,2}\s*x\s*\d{1,2})(?!\d)", re.IGNORECASE)
_NON_CONTENT_TAGS = ["script", "style", "noscript", "template"]


class PriceExtractor(Protocol):
    def extract(self, html: str) -> Tuple[Optional[float], Optional[str]]:
        """Return ``(price, unit)``; either may be None when nothing is found."""


def extract_price(text: str) -> Optional[float]:
    """First dollar amount in document order. No check that it is a unit price."""
    match = PRICE_REGEX.search(text or "")
    if not match:
        return None
    whole, cents = match.groups()
    return float(whole.replace(",", "") + (cents or ""))


def extract_unit(text: str) -> Optional[str]:
    match = UNIT_REGEX.search(text or "")
    if not match:
        return None
    return re.sub(r"\s+", "", match.group(1)).lower()


def visible_text(html: str) -> str:
    soup = BeautifulSoup(html or "", "html.parser")
    for tag in soup(_NON_CONTENT_TAGS):
        tag.decompose()
    return soup.get_text(" ", strip=True)


class RegexPriceExtractor:
    """Default strategy: pattern match over the page's visible text."""

    def extract(self, html: str) -> Tuple[Optional[float], Optional[str]]:
        text = visible_text(html)
        return extract_price(text), extract_unit(text)
