"""
Dialog Enumerations

Closed identifiers for the risk assessment waterfall: the steps,
the ways a dialog can end, and the end-of-flow risk classification.

CLINICAL_REVIEW_REQUIRED: The question order and the outcomes
that trigger crisis referral need clinical validation.
"""

from enum import StrEnum


class DialogStep(StrEnum):
    """
    Position in the fixed risk assessment waterfall.

    Declaration order is the waterfall order.
    """

    GET_AGREEMENT = "get_agreement"
    """Consent to possible phone/text contact during counseling."""

    ASK_FEELING = "ask_feeling"
    """Name captured; asks how the user has been feeling."""

    SUICIDAL_THINKING = "suicidal_thinking"
    """Feeling classified; asks about recent thoughts of dying."""

    RELATIONSHIP = "relationship"
    """Suicidal thoughts answered; asks about relationships."""

    FREQUENCY_OF_FEELING = "frequency_of_feeling"
    """Loneliness answered; asks how often the thoughts come."""

    TRY_SUICIDE = "try_suicide"
    """Frequency captured; asks about attempts or plans."""

    PLAN_SUICIDE = "plan_suicide"
    """Attempt/plan answered; asks the final question."""

    BEFORE_RESULT = "before_result"
    """Final answer scored."""

    RESULT = "result"
    """Terminal classification. Consumes no input."""

    @property
    def awaits_input(self) -> bool:
        """Whether the step runs on a user reply rather than immediately."""
        return self is not DialogStep.RESULT

    @classmethod
    def first(cls) -> "DialogStep":
        return cls.GET_AGREEMENT


class DialogOutcome(StrEnum):
    """
    How a risk assessment dialog ended.

    SAFETY_NOTE: HIGH_RISK and CRISIS_REFERRAL always
    include crisis resources in the final message.
    """

    HIGH_RISK = "high_risk"
    LOW_RISK = "low_risk"
    CONSENT_DECLINED = "consent_declined"
    NO_HELP_NEEDED = "no_help_needed"
    CRISIS_REFERRAL = "crisis_referral"
    INVALID_STATE = "invalid_state"
    RETRY_LIMIT = "retry_limit"

    @property
    def is_escalation(self) -> bool:
        return self in (DialogOutcome.HIGH_RISK, DialogOutcome.CRISIS_REFERRAL)


class RiskLevel(StrEnum):
    """End-of-flow risk classification."""

    LOW = "low"
    HIGH = "high"


class FeelingTone(StrEnum):
    """
    Feeling reported at the suicidal-thinking step.

    Later branches key on this tag instead of the numeric score.
    """

    NEGATIVE = "negative"
    POSITIVE = "positive"
