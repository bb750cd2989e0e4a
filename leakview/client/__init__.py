# ==============================================
# CLIENT (breach-lookup API)
# ==============================================
#
# HTTP collaborators that run strictly BEFORE normalization.
#
# Modules:
# --------
# - search_client.py → Query the breach API, parse the body
# - tracking.py      → Report search events to a webhook
#
# ==============================================

from .search_client import (
    SearchClient,
    SearchConfigError,
    SearchError,
    SearchResponse,
    clamp_limit,
    coerce_request,
    has_search_results,
)
from .tracking import SearchTracker, format_search_event

__all__ = [
    "SearchClient",
    "SearchConfigError",
    "SearchError",
    "SearchResponse",
    "clamp_limit",
    "coerce_request",
    "has_search_results",
    "SearchTracker",
    "format_search_event",
]
