"""
==============================================
Breach Search Client
==============================================

Thin wrapper around the breach-lookup API. It only moves JSON
over HTTP; everything that makes the payload readable lives in
leakview.normalization.

USAGE:

    from leakview.client import SearchClient

    client = SearchClient()
    response, normalized = client.search_normalized("john@example.com")
    print(normalized.record_count)
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

import requests

from leakview.config import ApiConfig, get_config
from leakview.normalization import NormalizedSearchResults, normalize_search_results

log = logging.getLogger(__name__)

MAX_LIMIT = 10000
_NO_RESULTS = re.compile(r'no results', re.IGNORECASE)


class SearchError(RuntimeError):
    """A search could not be completed; the message is safe to show to a user."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SearchConfigError(SearchError):
    """The client is missing configuration (e.g. the API token)."""


@dataclass(frozen=True)
class SearchResponse:
    data: Any
    has_results: bool


def coerce_request(value: Any) -> Union[str, List[str], None]:
    """
    Reduce a user supplied query to what the API accepts.

    Returns:
        Stripped text for a scalar, a list of non-empty texts for a
        list of scalars, or None when nothing usable is left.
    """
    if isinstance(value, (list, tuple)):
        texts = [
            _query_text(item)
            for item in value
            if isinstance(item, (str, int, float, bool))
        ]
        texts = [text for text in texts if text]
        return texts or None

    if isinstance(value, (str, int, float, bool)):
        text = _query_text(value)
        return text or None

    return None


def _query_text(value) -> str:
    # JSON spelling: true/false, 1.0 -> "1"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def clamp_limit(value: Any, fallback: int) -> int:
    """Clamp a requested result limit to [1, 10000]; `fallback` when not a finite number."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(number):
        return fallback
    return min(max(int(math.floor(number)), 1), MAX_LIMIT)


def has_search_results(value: Any) -> bool:
    """Rough check that a raw API body is not empty / "no results"."""
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    if isinstance(value, dict):
        return len(value) > 0
    if isinstance(value, str):
        return bool(value.strip()) and not _NO_RESULTS.search(value)
    return bool(value)


class SearchClient:
    """
    Client for the breach-lookup API.

    A requests.Session is reused across calls; pass one in to
    share connection pools or to stub HTTP in tests.
    """

    def __init__(
        self,
        config: Optional[ApiConfig] = None,
        session: Optional[requests.Session] = None
    ):
        self._config = config or get_config().api
        self._session = session or requests.Session()

    def build_payload(self, query: Any, limit: Optional[int] = None) -> dict:
        """
        Build the JSON body for one search.

        Raises:
            SearchError: If the query is empty after trimming
            SearchConfigError: If no API token is configured
        """
        request = coerce_request(query)
        if request is None:
            raise SearchError("Search query cannot be empty.")

        if not self._config.token:
            raise SearchConfigError("Server not configured. Missing LEAKOSINT_API_KEY.")

        return {
            "token": self._config.token,
            "request": request,
            "limit": clamp_limit(limit if limit is not None else self._config.limit, 100),
            "lang": self._config.lang,
            "type": "json",
        }

    def search(self, query: Any, limit: Optional[int] = None) -> SearchResponse:
        """
        Run one search against the API.

        Returns:
            SearchResponse with the parsed body (JSON when the server
            says so and it parses, otherwise text)

        Raises:
            SearchError: On timeouts, transport errors and non-2xx replies
        """
        payload = self.build_payload(query, limit)
        log.debug("Searching %s (limit=%s)", self._config.base_url, payload["limit"])

        try:
            response = self._session.post(
                self._config.base_url,
                json=payload,
                headers={"Accept": "application/json"},
                timeout=self._config.timeout_seconds,
            )
        except requests.Timeout:
            log.warning("Search provider timed out after %ss", self._config.timeout_seconds)
            raise SearchError("Search provider timed out. Please retry.") from None
        except requests.RequestException as e:
            log.warning("Search request failed: %s", e)
            raise SearchError(str(e) or "Search failed") from e

        body = _read_body(response)

        if not response.ok:
            raise SearchError(_error_message(body, response.status_code), response.status_code)

        return SearchResponse(data=body, has_results=has_search_results(body))

    def search_normalized(
        self,
        query: Any,
        limit: Optional[int] = None
    ) -> Tuple[SearchResponse, NormalizedSearchResults]:
        response = self.search(query, limit)
        normalized = normalize_search_results(response.data)
        log.info(
            "Search returned %d record(s), %d field(s)",
            normalized.record_count, normalized.field_count
        )
        return response, normalized

    def close(self) -> None:
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def _read_body(response: requests.Response) -> Any:
    content_type = response.headers.get("content-type", "")
    raw = response.text

    if not raw:
        return {} if "application/json" in content_type else ""

    if "application/json" in content_type:
        try:
            return response.json()
        except ValueError:
            log.debug("Body declared JSON but did not parse; keeping text")
            return raw

    return raw


def _error_message(body: Any, status_code: int) -> str:
    if isinstance(body, str) and body.strip():
        return body.strip()
    if isinstance(body, dict):
        message = body.get("error")
        if message is None:
            message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return f"Search failed ({status_code})."
