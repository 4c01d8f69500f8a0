from __future__ import annotations

from prometheus_client import Histogram

SEARCH_QUERY_SECONDS = Histogram(
    "search_modal_query_seconds",
    "Time from issuing a creator search to its outcome.",
    labelnames=("status",),
)
