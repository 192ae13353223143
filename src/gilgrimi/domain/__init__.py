"""
Gilgrimi Domain Layer

Core entities and value objects of the risk assessment dialog.
These models are independent of the HTTP, NLU and storage layers.
"""

from gilgrimi.domain.enums.dialog import DialogOutcome, DialogStep, FeelingTone, RiskLevel
from gilgrimi.domain.models.user_profile import UserProfile
from gilgrimi.domain.models.classified_intent import ClassifiedIntent
from gilgrimi.domain.models.dialog_state import DialogState, StepResult

__all__ = [
    # Enums
    "DialogStep",
    "DialogOutcome",
    "FeelingTone",
    "RiskLevel",
    # Models
    "UserProfile",
    "ClassifiedIntent",
    "DialogState",
    "StepResult",
]
