"""Safety services package - crisis referral and resources."""

from gilgrimi.services.safety.crisis_resources import (
    CrisisResource,
    CrisisResourceResolver,
    CrisisResourceSet,
)
from gilgrimi.services.safety.priority_escalation import (
    PriorityEscalation,
    PriorityEscalationRule,
)

__all__ = [
    # Resources
    "CrisisResource",
    "CrisisResourceResolver",
    "CrisisResourceSet",
    # Priority rule
    "PriorityEscalation",
    "PriorityEscalationRule",
]
