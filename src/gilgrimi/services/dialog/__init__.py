"""Dialog services package - risk assessment waterfall."""

from gilgrimi.services.dialog.steps import (
    Decision,
    RiskAssessmentSteps,
    StepThresholds,
    TRANSITIONS,
    classify_risk,
)
from gilgrimi.services.dialog.risk_assessment_dialog import DialogTurn, RiskAssessmentDialog

__all__ = [
    # Steps
    "Decision",
    "RiskAssessmentSteps",
    "StepThresholds",
    "TRANSITIONS",
    "classify_risk",
    # State machine
    "RiskAssessmentDialog",
    "DialogTurn",
]
