"""Domain enums package."""

from gilgrimi.domain.enums.dialog import DialogOutcome, DialogStep, FeelingTone, RiskLevel
from gilgrimi.domain.enums.intent import FREQUENCY_DELTAS, IntentLabel

__all__ = [
    "DialogOutcome",
    "DialogStep",
    "FeelingTone",
    "RiskLevel",
    "IntentLabel",
    "FREQUENCY_DELTAS",
]
