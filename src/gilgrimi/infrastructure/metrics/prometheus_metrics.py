"""
Prometheus Metrics

Counseling bot observability, exposed at /metrics for scraping.

ARCHITECTURE: Metrics are decoupled from dialog logic.
Only increment/observe; never block on metrics operations.
PRIVACY: Labels carry step names, intent labels and outcomes only.
"""

import time
from functools import wraps
from typing import Callable

from prometheus_client import (
    Counter,
    Histogram,
    Info,
    generate_latest,
    CONTENT_TYPE_LATEST,
    REGISTRY,
)
from fastapi import APIRouter, Response

from gilgrimi.config.logging_config import get_logger

logger = get_logger(__name__)

# =============================================================================
# TURN METRICS
# =============================================================================

TURNS_TOTAL = Counter(
    "gilgrimi_turns_total",
    "Total turns processed by activity type",
    ["activity_type", "status"],  # success, error
)

TURN_DURATION = Histogram(
    "gilgrimi_turn_duration_seconds",
    "Duration of a full turn including classification",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# =============================================================================
# DIALOG METRICS
# =============================================================================

DIALOGS_STARTED_TOTAL = Counter(
    "gilgrimi_dialogs_started_total",
    "Risk assessment dialogs started",
)

DIALOG_OUTCOMES_TOTAL = Counter(
    "gilgrimi_dialog_outcomes_total",
    "Risk assessment dialogs ended by outcome",
    ["outcome"],
)

REPROMPTS_TOTAL = Counter(
    "gilgrimi_reprompts_total",
    "Clarification re-prompts by dialog step",
    ["step"],
)

# =============================================================================
# SAFETY METRICS
# =============================================================================

PRIORITY_ESCALATIONS_TOTAL = Counter(
    "gilgrimi_priority_escalations_total",
    "Priority danger escalations fired",
)

# =============================================================================
# CLASSIFIER METRICS
# =============================================================================

CLASSIFIER_REQUESTS_TOTAL = Counter(
    "gilgrimi_classifier_requests_total",
    "Intent classifier requests",
    ["classifier", "status"],  # success, error
)

CLASSIFIER_LATENCY = Histogram(
    "gilgrimi_classifier_latency_seconds",
    "Intent classifier latency",
    ["classifier"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0],
)

INTENTS_CLASSIFIED_TOTAL = Counter(
    "gilgrimi_intents_classified_total",
    "Classified intents by top label",
    ["label"],
)

# =============================================================================
# SYSTEM INFO
# =============================================================================

SYSTEM_INFO = Info(
    "gilgrimi_system",
    "Gilgrimi system information",
)

SYSTEM_INFO.info({
    "version": "0.1.0",
    "environment": "development",  # Updated at runtime
})


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def track_classifier_request(classifier: str) -> Callable:
    """Decorator to track classifier request metrics."""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                result = await func(*args, **kwargs)
                CLASSIFIER_REQUESTS_TOTAL.labels(classifier=classifier, status="success").inc()
                return result
            except Exception:
                CLASSIFIER_REQUESTS_TOTAL.labels(classifier=classifier, status="error").inc()
                raise
            finally:
                CLASSIFIER_LATENCY.labels(classifier=classifier).observe(time.time() - start_time)
        return wrapper
    return decorator


def track_intent(label: str) -> None:
    """Record the top intent of a message."""
    INTENTS_CLASSIFIED_TOTAL.labels(label=label or "none").inc()


def track_turn(activity_type: str, status: str, duration_seconds: float) -> None:
    """Record a processed turn."""
    TURNS_TOTAL.labels(activity_type=activity_type, status=status).inc()
    TURN_DURATION.observe(duration_seconds)


def track_dialog_started() -> None:
    DIALOGS_STARTED_TOTAL.inc()


def track_dialog_outcome(outcome: str) -> None:
    """Record how a dialog ended."""
    DIALOG_OUTCOMES_TOTAL.labels(outcome=outcome).inc()


def track_reprompt(step: str) -> None:
    REPROMPTS_TOTAL.labels(step=step).inc()


def track_priority_escalation() -> None:
    PRIORITY_ESCALATIONS_TOTAL.inc()


# =============================================================================
# METRICS ENDPOINT
# =============================================================================

metrics_router = APIRouter(tags=["metrics"])


@metrics_router.get("/metrics")
async def metrics() -> Response:
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text format for scraping.
    """
    return Response(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST,
    )


def update_system_info(environment: str, version: str = "0.1.0") -> None:
    """Update system info metric with current environment."""
    SYSTEM_INFO.info({
        "version": version,
        "environment": environment,
    })
