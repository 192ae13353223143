"""
Unit Tests for Priority Escalation Rule

SAFETY-CRITICAL: The rule must fire on every confident danger
intent, whatever the dialog is doing.
"""

import pytest

from conftest import make_intent
from gilgrimi.domain.models.classified_intent import ClassifiedIntent
from gilgrimi.services.dialog import messages
from gilgrimi.services.safety.priority_escalation import PriorityEscalationRule


class TestPriorityEscalationRule:
    """Test suite for PriorityEscalationRule."""

    @pytest.fixture
    def rule(self) -> PriorityEscalationRule:
        return PriorityEscalationRule(threshold=0.80)

    def test_fires_above_threshold(self, rule: PriorityEscalationRule) -> None:
        escalation = rule.check(make_intent("Priority_Danger", 0.81))

        assert escalation is not None
        assert escalation.messages[0] == messages.PRIORITY_DANGER_TEXT
        assert "1388" in escalation.messages[1]
        assert escalation.to_dict() == {"confidence": 0.81, "message_count": 2}

    def test_threshold_is_strict(self, rule: PriorityEscalationRule) -> None:
        assert rule.check(make_intent("Priority_Danger", 0.80)) is None

    @pytest.mark.parametrize("intent", [
        make_intent("Panswer", 0.99),
        make_intent("Nfeeling", 0.95),
        ClassifiedIntent.empty(),
    ])
    def test_other_intents_ignored(self, rule: PriorityEscalationRule, intent: ClassifiedIntent) -> None:
        assert rule.check(intent) is None
