"""Observability package for the direct-message backend."""

from dmchat.observability.metrics import (
    connection_opened,
    connection_closed,
    increment_persisted,
    increment_dropped,
    increment_push_failures,
    increment_error,
    get_metrics_content,
    DropReason,
    MetricsErrorType,
)

__all__ = [
    "connection_opened",
    "connection_closed",
    "increment_persisted",
    "increment_dropped",
    "increment_push_failures",
    "increment_error",
    "get_metrics_content",
    "DropReason",
    "MetricsErrorType",
]
