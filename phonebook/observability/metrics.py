"""Prometheus metrics for Phonebook.

Tracks mutation outcomes, write conflicts and store latency.
"""

from prometheus_client import Counter, Histogram

# Mutation metrics
MUTATION_COUNT = Counter(
    "phonebook_mutation_count_total",
    "Total number of mutations processed",
    labelnames=["kind", "outcome"],
)

MUTATION_ATTEMPTS = Histogram(
    "phonebook_mutation_attempts",
    "Read-merge-write passes needed per mutation",
    labelnames=["kind"],
    buckets=(1, 2, 3, 5, 10, 20),
)

WRITE_CONFLICTS = Counter(
    "phonebook_write_conflicts_total",
    "Conditional writes rejected because the document version moved",
    labelnames=["kind"],
)

ITEMS_ADDED = Counter(
    "phonebook_items_added_total",
    "Phone numbers appended to documents",
    labelnames=["kind"],
)

# Store metrics
STORE_REQUEST_LATENCY = Histogram(
    "phonebook_store_request_latency_seconds",
    "Latency of document store calls in seconds",
    labelnames=["operation"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

STORE_ERRORS = Counter(
    "phonebook_store_errors_total",
    "Document store calls that failed with a non-conflict error",
    labelnames=["operation"],
)
