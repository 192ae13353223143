"""Monitoring infrastructure package."""

from gilgrimi.infrastructure.monitoring.sentry_integration import (
    before_send,
    init_sentry,
    capture_safety_event,
    capture_exception_with_context,
)

__all__ = [
    "before_send",
    "init_sentry",
    "capture_safety_event",
    "capture_exception_with_context",
]
