"""
Domain Models Package

Exports the profile, intent, dialog state and activity models.
"""

from gilgrimi.domain.models.user_profile import UserProfile
from gilgrimi.domain.models.classified_intent import ClassifiedIntent
from gilgrimi.domain.models.dialog_state import (
    Advance,
    DialogAction,
    DialogState,
    End,
    Reprompt,
    StepResult,
)
from gilgrimi.domain.models.activity import Activity, ActivityType, ChannelAccount

__all__ = [
    # Profile
    "UserProfile",
    # Classifier output
    "ClassifiedIntent",
    # Dialog
    "DialogState",
    "DialogAction",
    "Reprompt",
    "Advance",
    "End",
    "StepResult",
    # Activity
    "Activity",
    "ActivityType",
    "ChannelAccount",
]
