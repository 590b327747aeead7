"""Client utilities for the Google Geocoding and Places APIs."""

import logging
from typing import Any, Dict, Optional

import requests

from rategenius.core.retry import RetryPolicy

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://maps.googleapis.com/maps/api/place"
_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
_TIMEOUT = 10
_DETAIL_FIELDS = "name,website,formatted_phone_number,url,formatted_address"
_TRANSPORT_RETRY = RetryPolicy(retries=2, initial_delay=0.5, retry_on=(requests.ConnectionError, requests.Timeout))


class ProviderError(RuntimeError):
    """Raised when a Places/Geocoding response is malformed or unsuccessful."""


def _get_json(url: str, params: Dict[str, Any]) -> Dict[str, Any]:
    try:
        response = _TRANSPORT_RETRY.call(_SESSION.get, url, params=params, timeout=_TIMEOUT)
    except requests.RequestException as exc:
        raise ProviderError(f"Request to {url} failed: {exc}") from exc
    try:
        response.raise_for_status()
    except requests.HTTPError as exc:
        raise ProviderError(f"HTTP {response.status_code} from {url}") from exc
    try:
        payload = response.json()
    except ValueError as exc:
        raise ProviderError(f"Non-JSON response from {url}") from exc
    if not isinstance(payload, dict):
        raise ProviderError(f"Unexpected payload type from {url}: {type(payload).__name__}")
    return payload


def _check_status(name: str, payload: Dict[str, Any], accepted=frozenset({"OK", "ZERO_RESULTS"})) -> None:
    status = payload.get("status")
    if status is not None and status not in accepted:
        logger.error("%s failed: status=%s, error_message=%s", name, status, payload.get("error_message"))
        raise ProviderError(payload.get("error_message") or status)


def geocode(address: str, api_key: str) -> Dict[str, Any]:
    params = {"address": address, "key": api_key}
    payload = _get_json(_GEOCODE_URL, params)
    _check_status("geocode", payload)
    return payload


def nearby_search(location: str, radius_m: int, keyword: str, api_key: str) -> Dict[str, Any]:
    params = {"location": location, "radius": radius_m, "keyword": keyword, "key": api_key}
    payload = _get_json(f"{_BASE_URL}/nearbysearch/json", params)
    _check_status("nearby_search", payload)
    if not isinstance(payload.get("results"), list):
        raise ProviderError("nearby_search response is missing the results field")
    return payload


def place_details(place_id: str, api_key: str) -> Optional[Dict[str, Any]]:
    """Return the ``result`` object, or None when Places has no such record."""
    params = {"place_id": place_id, "key": api_key, "fields": _DETAIL_FIELDS}
    payload = _get_json(f"{_BASE_URL}/details/json", params)
    _check_status("place_details", payload, accepted=frozenset({"OK", "ZERO_RESULTS", "NOT_FOUND"}))
    result = payload.get("result")
    if not result:
        return None
    return result
