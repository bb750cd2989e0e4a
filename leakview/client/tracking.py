import logging
from datetime import datetime, timezone
from typing import Optional

import requests

log = logging.getLogger(__name__)


def format_search_event(email: Optional[str], query: str, found: bool, timestamp: str) -> str:
    status = "✓" if found else "✗"
    return "\n".join([
        "Search event",
        f"Email: {email or 'unknown'}",
        f"Query: {query}",
        f"Time: {timestamp}",
        f"Status: {status}",
    ])


class SearchTracker:
    """
    Posts one message per search to a Discord webhook.

    Tracking is best effort: it never raises, and is a no-op when no
    webhook is configured.
    """

    def __init__(
        self,
        webhook_url: Optional[str],
        session: Optional[requests.Session] = None,
        timeout_seconds: float = 10.0
    ):
        self.webhook_url = webhook_url
        self._session = session or requests.Session()
        self._timeout = timeout_seconds

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)

    def track(
        self,
        email: Optional[str],
        query: str,
        found: bool,
        timestamp: Optional[str] = None
    ) -> bool:
        """
        Report a search.

        Returns:
            True if the webhook accepted the message
        """
        if not self.enabled or not query:
            return False

        content = format_search_event(
            email, query, found,
            timestamp or datetime.now(timezone.utc).isoformat()
        )

        try:
            response = self._session.post(
                self.webhook_url,
                json={"content": content},
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            log.warning("Track webhook failed: %s", e)
            return False

        return True

    def close(self) -> None:
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
