"""
Prometheus Metrics for the direct-message backend.

METRIC TYPES:
    - Gauge: Value goes up/down (live realtime connections)
    - Counter: Value only goes up (persisted messages, dropped sends, failed pushes)
"""

from prometheus_client import (
    Gauge,
    Counter,
    generate_latest,
    CONTENT_TYPE_LATEST,
)


# =============================================================================
# METRICS DEFINITIONS
# =============================================================================
ACTIVE_CONNECTIONS = Gauge(
    "dm_active_connections", "Number of authenticated realtime connections"
)

MESSAGES_PERSISTED_TOTAL = Counter(
    "dm_messages_persisted_total",
    "Total number of direct messages committed to the store",
)

SENDS_DROPPED_TOTAL = Counter(
    "dm_sends_dropped_total",
    "Total number of send events silently dropped",
    ["reason"],
)

PUSH_FAILURES_TOTAL = Counter(
    "dm_push_failures_total",
    "Total number of failed pushes to individual connections",
)

ERRORS_TOTAL = Counter(
    "dm_errors_total",
    "Total number of errors by type",
    ["error_type"],
)


# =============================================================================
# LABEL CONSTANTS
# =============================================================================
class DropReason:
    """Reason labels for dm_sends_dropped_total."""

    EMPTY_TEXT = "empty_text"
    INVALID_RECIPIENT = "invalid_recipient"
    UNKNOWN_RECIPIENT = "unknown_recipient"


class MetricsErrorType:
    """Error type labels for dm_errors_total."""

    STORAGE_FAILED = "storage_failed"
    AUTH_REJECTED = "auth_rejected"
    UNHANDLED = "unhandled"


# =============================================================================
# HELPERS
# =============================================================================
def connection_opened() -> None:
    ACTIVE_CONNECTIONS.inc()


def connection_closed() -> None:
    ACTIVE_CONNECTIONS.dec()


def increment_persisted() -> None:
    MESSAGES_PERSISTED_TOTAL.inc()


def increment_dropped(reason: str) -> None:
    SENDS_DROPPED_TOTAL.labels(reason=reason).inc()


def increment_push_failures(count: int = 1) -> None:
    PUSH_FAILURES_TOTAL.inc(count)


def increment_error(error_type: str) -> None:
    ERRORS_TOTAL.labels(error_type=error_type).inc()


def get_metrics_content() -> tuple[bytes, str]:
    """Return the Prometheus exposition payload and its content type."""
    return generate_latest(), CONTENT_TYPE_LATEST
