# ==============================================
# Tests for the breach search client and tracking
# ==============================================

import math

import pytest
import requests

from helpers import FakeResponse, FakeSession
from leakview.client import (
    SearchClient,
    SearchConfigError,
    SearchError,
    SearchTracker,
    clamp_limit,
    coerce_request,
    format_search_event,
    has_search_results,
)
from leakview.config import ApiConfig


@pytest.fixture
def api_config():
    return ApiConfig(base_url="https://api.test/", token="secret-token", timeout_seconds=5.0)


class TestRequestHelpers:
    @pytest.mark.parametrize("value, expected", [
        ("  john  ", "john"),
        ("   ", None),
        (42, "42"),
        (True, "true"),
        (False, "false"),
        (2.0, "2"),
        (2.5, "2.5"),
        ([" a ", "", 3, None, {"x": 1}], ["a", "3"]),
        (["a", True, 1.0], ["a", "true", "1"]),
        (["", " "], None),
        (None, None),
        ({"q": "x"}, None),
    ])
    def test_coerce_request(self, value, expected):
        assert coerce_request(value) == expected

    @pytest.mark.parametrize("value, expected", [
        (50, 50),
        ("250", 250),
        (12.9, 12),
        (0, 1),
        (-5, 1),
        (50000, 10000),
        ("abc", 100),
        (None, 100),
        (math.inf, 100),
    ])
    def test_clamp_limit(self, value, expected):
        assert clamp_limit(value, 100) == expected

    @pytest.mark.parametrize("value, expected", [
        ([1], True),
        ([], False),
        ({"a": 1}, True),
        ({}, False),
        ("found", True),
        ("   ", False),
        ("No results found", False),
        (0, False),
        (None, False),
    ])
    def test_has_search_results(self, value, expected):
        assert has_search_results(value) is expected


class TestSearchClient:
    def test_payload(self, api_config):
        client = SearchClient(api_config, session=FakeSession())
        assert client.build_payload("  john@example.com ") == {
            "token": "secret-token",
            "request": "john@example.com",
            "limit": 100,
            "lang": "en",
            "type": "json",
        }

    def test_empty_query_is_rejected(self, api_config):
        session = FakeSession()
        with pytest.raises(SearchError, match="cannot be empty"):
            SearchClient(api_config, session=session).search("   ")
        assert session.calls == []

    def test_missing_token(self):
        client = SearchClient(ApiConfig(token=None), session=FakeSession())
        with pytest.raises(SearchConfigError):
            client.search("john")

    def test_search_posts_json_and_parses_body(self, api_config):
        session = FakeSession(FakeResponse(body={"List": {"Adobe": {"Data": []}}}))
        response = SearchClient(api_config, session=session).search("john", limit=20000)

        assert response.data == {"List": {"Adobe": {"Data": []}}}
        assert response.has_results is True

        url, kwargs = session.calls[0]
        assert url == "https://api.test/"
        assert kwargs["json"]["limit"] == 10000
        assert kwargs["timeout"] == 5.0

    def test_text_body(self, api_config):
        session = FakeSession(FakeResponse(body="No results found", content_type="text/plain"))
        response = SearchClient(api_config, session=session).search("john")
        assert response.data == "No results found"
        assert response.has_results is False

    def test_invalid_json_body_falls_back_to_text(self, api_config):
        session = FakeSession(FakeResponse(body="{oops", content_type="application/json"))
        assert SearchClient(api_config, session=session).search("john").data == "{oops"

    def test_empty_bodies(self, api_config):
        json_session = FakeSession(FakeResponse(body=None, content_type="application/json"))
        text_session = FakeSession(FakeResponse(body=None, content_type="text/plain"))
        assert SearchClient(api_config, session=json_session).search("x").data == {}
        assert SearchClient(api_config, session=text_session).search("x").data == ""

    @pytest.mark.parametrize("response, message", [
        (FakeResponse(500, body="Upstream exploded", content_type="text/plain"), "Upstream exploded"),
        (FakeResponse(401, body={"error": "Bad token"}), "Bad token"),
        (FakeResponse(400, body={"message": " Invalid query "}), "Invalid query"),
        (FakeResponse(503, body={"detail": "x"}), "Search failed (503)."),
    ])
    def test_upstream_errors(self, api_config, response, message):
        client = SearchClient(api_config, session=FakeSession(response))
        with pytest.raises(SearchError) as excinfo:
            client.search("john")
        assert str(excinfo.value) == message
        assert excinfo.value.status_code == response.status_code

    def test_timeout(self, api_config):
        client = SearchClient(api_config, session=FakeSession(error=requests.Timeout()))
        with pytest.raises(SearchError, match="timed out"):
            client.search("john")

    def test_transport_error(self, api_config):
        client = SearchClient(api_config, session=FakeSession(error=requests.ConnectionError("refused")))
        with pytest.raises(SearchError, match="refused"):
            client.search("john")

    def test_search_normalized(self, api_config, breach_payload):
        session = FakeSession(FakeResponse(body=breach_payload))
        with SearchClient(api_config, session=session) as client:
            response, normalized = client.search_normalized("john")
        assert response.has_results is True
        assert normalized.record_count == 1
        assert session.closed is True


class TestSearchTracker:
    def test_event_format(self):
        assert format_search_event(None, "john", True, "2026-01-01T00:00:00Z") == (
            "Search event\n"
            "Email: unknown\n"
            "Query: john\n"
            "Time: 2026-01-01T00:00:00Z\n"
            "Status: ✓"
        )

    def test_posts_discord_content(self):
        session = FakeSession(FakeResponse(status_code=204))
        tracker = SearchTracker("https://discord.test/hook", session=session)
        assert tracker.track("a@x.com", "john", False, timestamp="t") is True

        url, kwargs = session.calls[0]
        assert url == "https://discord.test/hook"
        assert kwargs["json"]["content"].endswith("Status: ✗")

    def test_disabled_without_webhook(self):
        session = FakeSession()
        assert SearchTracker(None, session=session).track("a@x.com", "john", True) is False
        assert session.calls == []

    def test_empty_query_is_not_tracked(self):
        session = FakeSession()
        assert SearchTracker("https://discord.test/hook", session=session).track("a", "", True) is False
        assert session.calls == []

    def test_failures_are_swallowed(self):
        session = FakeSession(error=requests.ConnectionError("down"))
        tracker = SearchTracker("https://discord.test/hook", session=session)
        assert tracker.track("a@x.com", "john", True) is False

    def test_http_error_is_reported_as_false(self):
        session = FakeSession(FakeResponse(status_code=500))
        assert SearchTracker("https://discord.test/hook", session=session).track("a", "q", True) is False

    def test_context_manager_closes_session(self):
        session = FakeSession(FakeResponse(status_code=204))
        with SearchTracker("https://discord.test/hook", session=session) as tracker:
            tracker.track("a@x.com", "john", True)
        assert session.closed is True
