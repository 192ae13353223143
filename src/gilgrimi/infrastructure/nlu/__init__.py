"""
Intent classifier infrastructure.

Supports:
- LUIS v2 prediction API (LuisIntentClassifier)
"""

from gilgrimi.infrastructure.nlu.classifier import (
    ClassifierError,
    IntentClassifier,
    RetryableClassifierError,
)
from gilgrimi.infrastructure.nlu.luis_classifier import LuisIntentClassifier, parse_luis_response

__all__ = [
    "ClassifierError",
    "IntentClassifier",
    "RetryableClassifierError",
    "LuisIntentClassifier",
    "parse_luis_response",
]
