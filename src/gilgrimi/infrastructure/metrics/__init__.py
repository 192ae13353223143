"""Metrics infrastructure package."""

from gilgrimi.infrastructure.metrics.prometheus_metrics import (
    # Turn metrics
    TURNS_TOTAL,
    TURN_DURATION,
    # Dialog metrics
    DIALOGS_STARTED_TOTAL,
    DIALOG_OUTCOMES_TOTAL,
    REPROMPTS_TOTAL,
    # Safety metrics
    PRIORITY_ESCALATIONS_TOTAL,
    # Classifier metrics
    CLASSIFIER_REQUESTS_TOTAL,
    CLASSIFIER_LATENCY,
    INTENTS_CLASSIFIED_TOTAL,
    # Helpers
    track_classifier_request,
    track_intent,
    track_turn,
    track_dialog_started,
    track_dialog_outcome,
    track_reprompt,
    track_priority_escalation,
    update_system_info,
    # Router
    metrics_router,
)

__all__ = [
    "TURNS_TOTAL",
    "TURN_DURATION",
    "DIALOGS_STARTED_TOTAL",
    "DIALOG_OUTCOMES_TOTAL",
    "REPROMPTS_TOTAL",
    "PRIORITY_ESCALATIONS_TOTAL",
    "CLASSIFIER_REQUESTS_TOTAL",
    "CLASSIFIER_LATENCY",
    "INTENTS_CLASSIFIED_TOTAL",
    "track_classifier_request",
    "track_intent",
    "track_turn",
    "track_dialog_started",
    "track_dialog_outcome",
    "track_reprompt",
    "track_priority_escalation",
    "update_system_info",
    "metrics_router",
]
