"""Observability components for logging."""

from apple_events.observability.logging import get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
]
