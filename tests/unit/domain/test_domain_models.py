"""
Unit Tests for Domain Models

Tests profile, intent, dialog state and activity models.
"""

import pytest
from pydantic import ValidationError

from gilgrimi.domain.enums.dialog import DialogOutcome, DialogStep, FeelingTone
from gilgrimi.domain.models.activity import Activity
from gilgrimi.domain.models.classified_intent import ClassifiedIntent
from gilgrimi.domain.models.dialog_state import DialogState
from gilgrimi.domain.models.user_profile import UserProfile


class TestUserProfile:
    """Test suite for UserProfile."""

    def test_defaults(self) -> None:
        profile = UserProfile()

        assert profile.name is None
        assert profile.suicidal_risk == 0
        assert profile.frequency is None

    def test_risk_delta_returns_copy(self) -> None:
        profile = UserProfile(suicidal_risk=2)

        updated = profile.with_risk_delta(-3)

        assert updated.suicidal_risk == -1
        assert profile.suicidal_risk == 2

    def test_serialization(self) -> None:
        profile = UserProfile(
            name="민수",
            suicidal_risk=4,
            frequency="가끔",
            feeling_intent="Nfeeling",
            feeling_tone=FeelingTone.NEGATIVE,
        )

        data = profile.to_dict()

        assert data["feeling_tone"] == "negative"
        assert UserProfile.from_dict(data) == profile

    @pytest.mark.parametrize("data", [None, {}, {"name": "민수"}])
    def test_missing_fields_default(self, data) -> None:
        profile = UserProfile.from_dict(data)

        assert profile.suicidal_risk == 0
        assert profile.feeling_tone is None


class TestClassifiedIntent:
    """Test suite for ClassifiedIntent."""

    def test_empty_is_never_usable(self) -> None:
        intent = ClassifiedIntent.empty()

        assert intent.label == ""
        assert intent.confidence == 0.0
        assert not intent.is_usable(0.0)

    def test_threshold_is_strict(self) -> None:
        assert not ClassifiedIntent("Panswer", 0.70).is_usable(0.70)
        assert ClassifiedIntent("Panswer", 0.71).is_usable(0.70)

    def test_matches_requires_label(self) -> None:
        intent = ClassifiedIntent("Nanswer", 0.9)

        assert intent.matches("Nanswer", 0.7)
        assert not intent.matches("Panswer", 0.7)

    @pytest.mark.parametrize("confidence", [-0.1, 1.5])
    def test_confidence_range_validated(self, confidence: float) -> None:
        with pytest.raises(ValueError):
            ClassifiedIntent("Panswer", confidence)

    def test_entities(self) -> None:
        intent = ClassifiedIntent(
            "Frequency",
            0.9,
            entities={"빈도": ["가끔"], "기타": ["오늘", "내일"]},
        )

        assert intent.all_entity_values() == ["가끔", "오늘", "내일"]
        assert intent.to_dict()["entity_types"] == ["기타", "빈도"]


class TestDialogState:
    """Test suite for DialogState."""

    def test_begin_and_advance(self) -> None:
        state = DialogState()
        assert not state.is_active

        state.begin()
        assert state.current_step is DialogStep.GET_AGREEMENT

        state.replace_with_self()
        assert state.reprompt_count == 1

        state.advance(DialogStep.ASK_FEELING)
        assert state.current_step is DialogStep.ASK_FEELING
        assert state.reprompt_count == 0

    def test_end_records_outcome(self) -> None:
        state = DialogState(current_step=DialogStep.RESULT, reprompt_count=2)

        state.end(DialogOutcome.LOW_RISK)

        assert not state.is_active
        assert state.reprompt_count == 0
        assert state.last_outcome is DialogOutcome.LOW_RISK

    def test_replace_with_self_requires_active_dialog(self) -> None:
        with pytest.raises(RuntimeError):
            DialogState().replace_with_self()

    def test_serialization(self) -> None:
        state = DialogState(
            current_step=DialogStep.TRY_SUICIDE,
            reprompt_count=1,
            last_outcome=DialogOutcome.CONSENT_DECLINED,
        )

        assert DialogState.from_dict(state.to_dict()) == state
        assert DialogState.from_dict(None) == DialogState()

    def test_only_result_runs_without_input(self) -> None:
        assert [step for step in DialogStep if not step.awaits_input] == [DialogStep.RESULT]


class TestActivity:
    """Test suite for the inbound Activity model."""

    def test_channel_aliases(self) -> None:
        activity = Activity.model_validate({
            "type": "message",
            "conversation_id": "c1",
            "text": "안녕",
            "from": "user-1",
            "recipient": "gilgrimi",
            "channelData": {"ignored": True},
        })

        assert activity.is_message
        assert activity.from_id == "user-1"
        assert activity.recipient_id == "gilgrimi"

    def test_conversation_id_required(self) -> None:
        with pytest.raises(ValidationError):
            Activity.model_validate({"type": "message"})

    def test_text_length_limited(self) -> None:
        with pytest.raises(ValidationError):
            Activity(type="message", conversation_id="c1", text="가" * 4001)
