import pytest
import requests

from rategenius.vendors import google_places


class DummyResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload or {}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError("http error")

    def json(self):
        return self._payload


class DummySession:
    def __init__(self):
        self.calls = []
        self.response = None
        self.failures = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.failures:
            raise self.failures.pop(0)
        return self.response


@pytest.fixture(autouse=True)
def patch_session(monkeypatch):
    session = DummySession()
    monkeypatch.setattr(google_places, "_SESSION", session)
    monkeypatch.setattr(
        google_places,
        "_TRANSPORT_RETRY",
        google_places.RetryPolicy(
            retries=2, retry_on=(requests.ConnectionError, requests.Timeout), sleep=lambda _: None
        ),
    )
    return session


def test_geocode_success(patch_session):
    patch_session.response = DummyResponse(
        payload={"status": "OK", "results": [{"geometry": {"location": {"lat": 1.5, "lng": 2.5}}}]}
    )
    payload = google_places.geocode("1 Main St", "key")
    assert payload["results"][0]["geometry"]["location"]["lat"] == 1.5
    url, params, timeout = patch_session.calls[0]
    assert "geocode" in url
    assert params["address"] == "1 Main St"
    assert timeout == 10


def test_nearby_search_sends_keyword_and_radius(patch_session):
    patch_session.response = DummyResponse(payload={"status": "OK", "results": []})
    google_places.nearby_search("1.0,2.0", 16093, "self storage", "key")
    url, params, _ = patch_session.calls[0]
    assert "nearbysearch" in url
    assert params == {"location": "1.0,2.0", "radius": 16093, "keyword": "self storage", "key": "key"}


def test_nearby_search_missing_results_is_provider_error(patch_session):
    patch_session.response = DummyResponse(payload={"status": "OK"})
    with pytest.raises(google_places.ProviderError):
        google_places.nearby_search("1.0,2.0", 1000, "self storage", "key")


def test_nearby_search_error_status(patch_session):
    patch_session.response = DummyResponse(payload={"status": "REQUEST_DENIED", "error_message": "bad key"})
    with pytest.raises(google_places.ProviderError, match="bad key"):
        google_places.nearby_search("1.0,2.0", 1000, "self storage", "key")


def test_place_details_success(patch_session):
    patch_session.response = DummyResponse(payload={"status": "OK", "result": {"name": "Acme"}})
    result = google_places.place_details("pid", "key")
    assert result["name"] == "Acme"
    _, params, _ = patch_session.calls[0]
    assert "website" in params["fields"]


def test_place_details_not_found_returns_none(patch_session):
    patch_session.response = DummyResponse(payload={"status": "NOT_FOUND"})
    assert google_places.place_details("pid", "key") is None


def test_place_details_error(patch_session):
    patch_session.response = DummyResponse(payload={"status": "OVER_QUERY_LIMIT", "error_message": "limit"})
    with pytest.raises(google_places.ProviderError):
        google_places.place_details("pid", "key")


def test_http_error_is_provider_error(patch_session):
    patch_session.response = DummyResponse(status_code=503)
    with pytest.raises(google_places.ProviderError):
        google_places.geocode("somewhere", "key")


def test_transient_connection_errors_are_retried(patch_session):
    patch_session.failures = [requests.ConnectionError("reset")]
    patch_session.response = DummyResponse(payload={"status": "ZERO_RESULTS", "results": []})

    payload = google_places.geocode("somewhere", "key")

    assert payload["results"] == []
    assert len(patch_session.calls) == 2


def test_persistent_timeouts_become_provider_error(patch_session):
    patch_session.failures = [requests.Timeout("slow")] * 3
    with pytest.raises(google_places.ProviderError):
        google_places.geocode("somewhere", "key")
    assert len(patch_session.calls) == 3
