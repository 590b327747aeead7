import math

import pytest

from rategenius.models import CompetitorRecord
from rategenius.pricing.aggregator import (
    InsufficientDataError,
    coerce_prices,
    median,
    suggest,
    suggest_from_competitors,
)


def test_median():
    assert median([]) is None
    assert median([5]) == 5
    assert median([1, 3]) == 2
    assert median([3, 1, 2]) == 2
    assert median([4, 1, 3, 2]) == 2.5


def test_suggest_undercuts_median():
    suggestion = suggest([100, 120, 110])

    assert suggestion.median == 110
    assert suggestion.recommended_price == 103.4
    assert suggestion.confidence == 0.6
    assert suggestion.sample_size == 3
    assert suggestion.rationale == "Median competitor price is $110. Undercutting by 6%"


def test_suggest_rationale_keeps_cents():
    suggestion = suggest([90.5, 100])
    assert "$95.25" in suggestion.rationale
    assert suggestion.recommended_price == round(95.25 * (1 - 0.06), 2)


@pytest.mark.parametrize("prices", [[], [None, "n/a", math.nan], [True, ""]])
def test_suggest_without_numeric_prices_fails(prices):
    with pytest.raises(InsufficientDataError):
        suggest(prices)


def test_coerce_prices_filters_non_numeric():
    assert coerce_prices([1, "2.5", None, "abc", math.nan, math.inf, False, 3.0]) == [1.0, 2.5, 3.0]


def test_suggest_from_competitors_accepts_dicts_and_records():
    competitors = [
        {"name": "A", "price": 100},
        {"name": "B", "price": None},
        {"name": "C", "error": "scrape failed"},
        CompetitorRecord(name="D", address=None, price=120.0),
        {"name": "E", "price": "110"},
        "garbage",
    ]
    suggestion = suggest_from_competitors(competitors)

    assert suggestion.recommended_price == 103.4
    assert suggestion.sample_size == 3
