"""Monitoring configuration for wordbook."""
from prometheus_client import Counter, start_http_server

# Review metrics
reviews = Counter(
    "wordbook_reviews_total",
    "Total number of review outcomes applied",
    ["outcome"],
)

# Word management metrics
words_added = Counter(
    "wordbook_words_added_total",
    "Total number of words added to the wordbook",
)

# Error metrics
persistence_failures = Counter(
    "wordbook_persistence_failures_total",
    "Total number of writes rejected by the record store",
    ["operation"],
)


def start_monitoring(port: int = 9090) -> None:
    """Start the Prometheus metrics server."""
    start_http_server(port)
