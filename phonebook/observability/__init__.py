"""Observability: structured logging, Prometheus metrics and tracing."""

from phonebook.observability.logging import get_logger, setup_logging
from phonebook.observability.tracing import create_span, setup_tracing

__all__ = ["create_span", "get_logger", "setup_logging", "setup_tracing"]
