"""
Sentry Error Tracking Integration

Optional error tracking, enabled when GILGRIMI_SENTRY_DSN is set.

SECURITY: Message text, user names and credentials are stripped
before anything leaves the process.
"""

import re
from typing import Any, Optional

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
from sentry_sdk.integrations.asyncio import AsyncioIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from gilgrimi import __version__
from gilgrimi.config.settings import Settings
from gilgrimi.config.logging_config import get_logger

logger = get_logger(__name__)

REDACTED = "[REDACTED]"

SECRET_PATTERNS = [
    re.compile(r"subscription[_-]key=[^&\s\"']+", re.IGNORECASE),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
    re.compile(r"(password|secret|token)[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+", re.IGNORECASE),
]

# Substring match
SECRET_KEYS = frozenset({
    "password",
    "token",
    "secret",
    "api_key",
    "subscription_key",
    "authorization",
    "credential",
    "dsn",
})

# Exact match: fields that carry what the user typed
USER_CONTENT_KEYS = frozenset({"text", "utterance", "q", "name", "user_name", "frequency", "replies"})


def _scrub_string(value: str) -> str:
    for pattern in SECRET_PATTERNS:
        value = pattern.sub(REDACTED, value)
    return value


def _scrub(value: Any) -> Any:
    if isinstance(value, dict):
        return _scrub_dict(value)
    if isinstance(value, list):
        return [_scrub(item) for item in value]
    if isinstance(value, str):
        return _scrub_string(value)
    return value


def _scrub_dict(data: dict) -> dict:
    """Recursively scrub secrets and user content from a mapping."""
    result = {}
    for key, value in data.items():
        key_lower = str(key).lower().replace("-", "_")
        if key_lower in USER_CONTENT_KEYS or any(s in key_lower for s in SECRET_KEYS):
            result[key] = REDACTED
        else:
            result[key] = _scrub(value)
    return result


def before_send(event: dict, hint: dict) -> Optional[dict]:
    """Scrub request bodies, headers, query strings, breadcrumbs and extras."""
    request = event.get("request")
    if isinstance(request, dict):
        if "data" in request:
            # Activity bodies always contain user text
            request["data"] = REDACTED
        if isinstance(request.get("headers"), dict):
            request["headers"] = _scrub_dict(request["headers"])
        if isinstance(request.get("query_string"), str):
            request["query_string"] = _scrub_string(request["query_string"])

    for breadcrumb in (event.get("breadcrumbs") or {}).get("values", []):
        if isinstance(breadcrumb.get("data"), dict):
            breadcrumb["data"] = _scrub_dict(breadcrumb["data"])
        if isinstance(breadcrumb.get("message"), str):
            breadcrumb["message"] = _scrub_string(breadcrumb["message"])

    if isinstance(event.get("extra"), dict):
        event["extra"] = _scrub_dict(event["extra"])

    return event


def init_sentry(settings: Settings, traces_sample_rate: float = 0.1) -> bool:
    """
    Initialize Sentry error tracking.

    Returns:
        True if Sentry was initialized
    """
    dsn = settings.sentry_dsn.get_secret_value()
    if not dsn:
        logger.info("Sentry DSN not configured, error tracking disabled")
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=settings.env,
        release=f"gilgrimi@{__version__}",
        traces_sample_rate=traces_sample_rate,
        before_send=before_send,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
            AsyncioIntegration(),
            LoggingIntegration(level=None, event_level=None),
        ],
        send_default_pii=False,
        max_breadcrumbs=50,
    )

    logger.info("Sentry initialized", environment=settings.env)
    return True


def capture_safety_event(message: str, extra: Optional[dict] = None) -> None:
    """
    Record an escalation (priority danger, crisis referral, high risk).

    No-op when Sentry is not initialized.
    """
    with sentry_sdk.new_scope() as scope:
        scope.set_tag("category", "safety")
        for key, value in _scrub_dict(extra or {}).items():
            scope.set_extra(key, value)
        sentry_sdk.capture_message(message, level="warning")


def capture_exception_with_context(
    exception: BaseException,
    correlation_id: Optional[str] = None,
    extra: Optional[dict] = None,
) -> Optional[str]:
    """
    Capture exception with request context.

    Returns: Sentry event ID (None when disabled)
    """
    with sentry_sdk.new_scope() as scope:
        if correlation_id:
            scope.set_tag("correlation_id", correlation_id)
        for key, value in _scrub_dict(extra or {}).items():
            scope.set_extra(key, value)
        return sentry_sdk.capture_exception(exception)
