"""
Priority Escalation Rule

Standing check applied to every incoming message, independent of
where the user is in the risk assessment dialog. A confident
"Priority_Danger" classification (the user typed '도와주세요' or
similar) triggers an immediate crisis referral.

SAFETY-CRITICAL: This rule runs before any dialog step so the
referral is the first thing the user sees in that turn.
"""

from dataclasses import dataclass, field
from typing import Optional

from gilgrimi.domain.enums.intent import IntentLabel
from gilgrimi.domain.models.classified_intent import ClassifiedIntent
from gilgrimi.services.dialog import messages
from gilgrimi.services.safety.crisis_resources import CrisisResourceResolver
from gilgrimi.config.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class PriorityEscalation:
    """
    A fired priority escalation.

    Attributes:
        confidence: Recognizer confidence that triggered the rule
        messages: Referral texts to send, in order
    """

    confidence: float
    messages: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "confidence": round(self.confidence, 3),
            "message_count": len(self.messages),
        }


class PriorityEscalationRule:
    """
    Immediate crisis referral on a confident danger intent.

    Usage:
        rule = PriorityEscalationRule(threshold=0.80)
        escalation = rule.check(intent)
        if escalation:
            for text in escalation.messages: ...
    """

    def __init__(
        self,
        threshold: float = 0.80,
        resource_resolver: Optional[CrisisResourceResolver] = None,
    ) -> None:
        """
        Initialize rule.

        Args:
            threshold: Confidence that must be strictly exceeded
            resource_resolver: Source of the crisis contact list
        """
        self.threshold = threshold
        self._resources = resource_resolver or CrisisResourceResolver()

    def check(self, intent: ClassifiedIntent) -> Optional[PriorityEscalation]:
        """
        Evaluate one classified message.

        Returns:
            PriorityEscalation when the rule fires, otherwise None
        """
        if not intent.matches(IntentLabel.PRIORITY_DANGER, self.threshold):
            return None

        logger.warning(
            "Priority danger escalation",
            confidence=round(intent.confidence, 3),
            threshold=self.threshold,
        )

        return PriorityEscalation(
            confidence=intent.confidence,
            messages=[
                messages.PRIORITY_DANGER_TEXT,
                self._resources.format_crisis_message(),
            ],
        )
