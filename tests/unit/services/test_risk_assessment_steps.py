"""
Unit Tests for Risk Assessment Steps

Tests per-step score deltas, branch conditions and the
transition table.
"""

import pytest

from conftest import make_intent
from gilgrimi.domain.enums.dialog import DialogOutcome, DialogStep, FeelingTone, RiskLevel
from gilgrimi.domain.models.classified_intent import ClassifiedIntent
from gilgrimi.domain.models.dialog_state import Advance, End, Reprompt
from gilgrimi.domain.models.user_profile import UserProfile
from gilgrimi.services.dialog import messages
from gilgrimi.services.dialog.steps import (
    Decision,
    RiskAssessmentSteps,
    StepThresholds,
    TRANSITIONS,
    classify_risk,
)


def negative_profile(score: int = 1) -> UserProfile:
    return UserProfile(
        name="민수",
        suicidal_risk=score,
        feeling_intent="Nfeeling",
        feeling_tone=FeelingTone.NEGATIVE,
    )


def positive_profile(score: int = -1) -> UserProfile:
    return UserProfile(
        name="민수",
        suicidal_risk=score,
        feeling_intent="Pfeeling",
        feeling_tone=FeelingTone.POSITIVE,
    )


class TestTransitionTable:
    """Test suite for the (step, decision) transition table."""

    def test_every_step_reprompts_on_unusable_input(self) -> None:
        for step in DialogStep:
            assert TRANSITIONS[(step, Decision.UNUSABLE)] == Reprompt()

    def test_continue_follows_waterfall_order(self) -> None:
        order = list(DialogStep)
        for current, following in zip(order, order[1:]):
            assert TRANSITIONS[(current, Decision.CONTINUE)] == Advance(following)

    def test_result_has_no_successor(self) -> None:
        assert (DialogStep.RESULT, Decision.CONTINUE) not in TRANSITIONS

    def test_terminal_transitions(self) -> None:
        assert TRANSITIONS[(DialogStep.GET_AGREEMENT, Decision.DECLINED)] == End(DialogOutcome.CONSENT_DECLINED)
        assert TRANSITIONS[(DialogStep.RELATIONSHIP, Decision.NO_HELP_NEEDED)] == End(DialogOutcome.NO_HELP_NEEDED)
        assert TRANSITIONS[(DialogStep.RELATIONSHIP, Decision.INVALID_STATE)] == End(DialogOutcome.INVALID_STATE)
        assert TRANSITIONS[(DialogStep.PLAN_SUICIDE, Decision.CRISIS)] == End(DialogOutcome.CRISIS_REFERRAL)
        assert TRANSITIONS[(DialogStep.RESULT, Decision.HIGH_RISK)] == End(DialogOutcome.HIGH_RISK)
        assert TRANSITIONS[(DialogStep.RESULT, Decision.LOW_RISK)] == End(DialogOutcome.LOW_RISK)


class TestStepThresholds:
    """Test suite for per-step thresholds."""

    def test_default_applies_to_all_steps(self) -> None:
        thresholds = StepThresholds()
        assert thresholds.for_step(DialogStep.PLAN_SUICIDE) == 0.70

    def test_override_from_settings_mapping(self) -> None:
        thresholds = StepThresholds.from_mapping(0.70, {"plan_suicide": 0.90})
        assert thresholds.for_step(DialogStep.PLAN_SUICIDE) == 0.90
        assert thresholds.for_step(DialogStep.TRY_SUICIDE) == 0.70

    def test_unknown_step_name_rejected(self) -> None:
        with pytest.raises(ValueError):
            StepThresholds.from_mapping(0.70, {"no_such_step": 0.9})

    def test_override_changes_usability(self) -> None:
        steps = RiskAssessmentSteps(thresholds=StepThresholds.from_mapping(0.70, {"plan_suicide": 0.90}))
        result = steps.run(
            DialogStep.PLAN_SUICIDE,
            make_intent("Panswer", 0.85),
            negative_profile(6),
        )
        assert isinstance(result.action, Reprompt)
        assert result.profile.suicidal_risk == 6


class TestClassifyRisk:
    """Test suite for the end-of-flow classification."""

    @pytest.mark.parametrize("score,expected", [
        (-2, RiskLevel.LOW),
        (0, RiskLevel.LOW),
        (5, RiskLevel.LOW),
        (6, RiskLevel.HIGH),
        (20, RiskLevel.HIGH),
    ])
    def test_boundary(self, score: int, expected: RiskLevel) -> None:
        assert classify_risk(score) is expected


class TestUnusableInput:
    """Low-confidence or empty classifications never change the profile."""

    @pytest.mark.parametrize("step", [
        DialogStep.SUICIDAL_THINKING,
        DialogStep.RELATIONSHIP,
        DialogStep.FREQUENCY_OF_FEELING,
        DialogStep.TRY_SUICIDE,
        DialogStep.PLAN_SUICIDE,
        DialogStep.BEFORE_RESULT,
    ])
    @pytest.mark.parametrize("intent", [
        ClassifiedIntent.empty(),
        make_intent("Panswer", 0.70),
        make_intent("Nfeeling", 0.70),
        make_intent("None", 0.99),
    ])
    def test_reprompt_without_mutation(
        self,
        steps: RiskAssessmentSteps,
        step: DialogStep,
        intent: ClassifiedIntent,
    ) -> None:
        profile = negative_profile(1)
        result = steps.run(step, intent, profile)

        assert isinstance(result.action, Reprompt)
        assert result.profile == profile
        assert len(result.messages) == 1


class TestGetAgreement:
    """Test suite for the consent step."""

    def test_yes_advances(self, steps: RiskAssessmentSteps) -> None:
        result = steps.run(DialogStep.GET_AGREEMENT, make_intent("Panswer", 0.71), UserProfile())

        assert result.action == Advance(DialogStep.ASK_FEELING)
        assert result.messages == [
            messages.AGREEMENT_THANKS,
            messages.WARNING_TEXT,
            messages.ASK_NAME_PROMPT,
        ]
        assert result.profile.suicidal_risk == 0

    @pytest.mark.parametrize("intent", [
        make_intent("Nanswer", 0.71),
        make_intent("Panswer", 0.70),
        ClassifiedIntent.empty(),
    ])
    def test_anything_else_ends(self, steps: RiskAssessmentSteps, intent: ClassifiedIntent) -> None:
        result = steps.run(DialogStep.GET_AGREEMENT, intent, UserProfile())

        assert result.action == End(DialogOutcome.CONSENT_DECLINED)
        assert result.messages == [messages.CONSENT_DECLINED_TEXT]


class TestAskFeeling:
    """Test suite for name capture."""

    def test_name_captured_verbatim(self, steps: RiskAssessmentSteps) -> None:
        result = steps.run(DialogStep.ASK_FEELING, ClassifiedIntent.empty(), UserProfile(), "  민수 ")

        assert result.profile.name == "민수"
        assert result.action == Advance(DialogStep.SUICIDAL_THINKING)
        assert result.messages[0] == messages.GREETING_TEMPLATE.format(name="민수")

    def test_blank_reply_reprompts(self, steps: RiskAssessmentSteps) -> None:
        result = steps.run(DialogStep.ASK_FEELING, ClassifiedIntent.empty(), UserProfile(), "   ")

        assert isinstance(result.action, Reprompt)
        assert result.profile.name is None


class TestSuicidalThinking:
    """Test suite for the feeling step."""

    def test_negative_feeling(self, steps: RiskAssessmentSteps) -> None:
        result = steps.run(DialogStep.SUICIDAL_THINKING, make_intent("Nfeeling"), UserProfile(name="민수"))

        assert result.profile.suicidal_risk == 1
        assert result.profile.feeling_tone is FeelingTone.NEGATIVE
        assert result.profile.feeling_intent == "Nfeeling"
        assert result.action == Advance(DialogStep.RELATIONSHIP)

    def test_positive_feeling(self, steps: RiskAssessmentSteps) -> None:
        result = steps.run(DialogStep.SUICIDAL_THINKING, make_intent("Pfeeling"), UserProfile(name="민수"))

        assert result.profile.suicidal_risk == -1
        assert result.profile.feeling_tone is FeelingTone.POSITIVE
        assert result.profile.name == "민수"


class TestRelationship:
    """Test suite for the branch on the recorded feeling."""

    def test_yes_after_negative_feeling(self, steps: RiskAssessmentSteps) -> None:
        result = steps.run(DialogStep.RELATIONSHIP, make_intent("Panswer"), negative_profile())

        assert result.profile.suicidal_risk == 4
        assert result.action == Advance(DialogStep.FREQUENCY_OF_FEELING)

    def test_yes_after_positive_feeling(self, steps: RiskAssessmentSteps) -> None:
        result = steps.run(DialogStep.RELATIONSHIP, make_intent("Panswer"), positive_profile())

        assert result.profile.suicidal_risk == 1
        assert result.action == Advance(DialogStep.FREQUENCY_OF_FEELING)

    def test_no_after_negative_feeling_continues(self, steps: RiskAssessmentSteps) -> None:
        result = steps.run(DialogStep.RELATIONSHIP, make_intent("Nanswer"), negative_profile())

        assert result.profile.suicidal_risk == 1
        assert result.action == Advance(DialogStep.FREQUENCY_OF_FEELING)

    def test_no_after_positive_feeling_ends(self, steps: RiskAssessmentSteps) -> None:
        result = steps.run(DialogStep.RELATIONSHIP, make_intent("Nanswer"), positive_profile())

        assert result.action == End(DialogOutcome.NO_HELP_NEEDED)
        assert result.messages == [messages.NO_HELP_NEEDED_TEXT]

    def test_missing_feeling_tag_is_invalid(self, steps: RiskAssessmentSteps) -> None:
        result = steps.run(DialogStep.RELATIONSHIP, make_intent("Panswer"), UserProfile(suicidal_risk=1))

        assert result.action == End(DialogOutcome.INVALID_STATE)
        assert result.messages == [messages.INVALID_STATE_TEXT]

    def test_score_inconsistent_with_tag_is_invalid(self, steps: RiskAssessmentSteps) -> None:
        result = steps.run(DialogStep.RELATIONSHIP, make_intent("Panswer"), negative_profile(score=3))

        assert result.action == End(DialogOutcome.INVALID_STATE)
        assert result.profile.suicidal_risk == 3


class TestFrequencyOfFeeling:
    """Test suite for the loneliness step."""

    def test_alone(self, steps: RiskAssessmentSteps) -> None:
        result = steps.run(DialogStep.FREQUENCY_OF_FEELING, make_intent("Alone"), negative_profile(4))

        assert result.profile.suicidal_risk == 6
        assert result.action == Advance(DialogStep.TRY_SUICIDE)

    def test_connected(self, steps: RiskAssessmentSteps) -> None:
        result = steps.run(DialogStep.FREQUENCY_OF_FEELING, make_intent("Pfeeling"), negative_profile(4))

        assert result.profile.suicidal_risk == 3


class TestTrySuicide:
    """Test suite for frequency capture."""

    @pytest.mark.parametrize("word,delta", [("전혀", 0), ("가끔", 1), ("자주", 2), ("항상", 3)])
    def test_frequency_words(self, steps: RiskAssessmentSteps, word: str, delta: int) -> None:
        result = steps.run(
            DialogStep.TRY_SUICIDE,
            make_intent("Frequency", 빈도=word),
            negative_profile(2),
        )

        assert result.profile.frequency == word
        assert result.profile.suicidal_risk == 2 + delta
        assert result.action == Advance(DialogStep.PLAN_SUICIDE)

    def test_unknown_frequency_word_reprompts(self, steps: RiskAssessmentSteps) -> None:
        result = steps.run(
            DialogStep.TRY_SUICIDE,
            make_intent("Frequency", 빈도="매일"),
            negative_profile(2),
        )

        assert isinstance(result.action, Reprompt)
        assert result.profile.frequency is None

    def test_frequency_without_entity_reprompts(self, steps: RiskAssessmentSteps) -> None:
        result = steps.run(DialogStep.TRY_SUICIDE, make_intent("Frequency"), negative_profile(2))

        assert isinstance(result.action, Reprompt)
        assert result.messages == [messages.FREQUENCY_REPROMPT]


class TestPlanSuicide:
    """Test suite for the plan question."""

    def test_yes_is_crisis_referral(self, steps: RiskAssessmentSteps) -> None:
        result = steps.run(DialogStep.PLAN_SUICIDE, make_intent("Panswer"), negative_profile(4))

        assert result.profile.suicidal_risk == 9
        assert result.action == End(DialogOutcome.CRISIS_REFERRAL)
        assert result.messages[0] == messages.PLAN_REFERRAL_TEXT
        assert "1388" in result.messages[1]

    def test_no_continues(self, steps: RiskAssessmentSteps) -> None:
        result = steps.run(DialogStep.PLAN_SUICIDE, make_intent("Nanswer"), negative_profile(4))

        assert result.profile.suicidal_risk == 4
        assert result.action == Advance(DialogStep.BEFORE_RESULT)


class TestBeforeResultAndResult:
    """Test suite for the final question and classification."""

    def test_yes_adds_three(self, steps: RiskAssessmentSteps) -> None:
        result = steps.run(DialogStep.BEFORE_RESULT, make_intent("Panswer"), negative_profile(2))

        assert result.profile.suicidal_risk == 5
        assert result.action == Advance(DialogStep.RESULT)
        assert result.messages == []

    def test_no_adds_nothing(self, steps: RiskAssessmentSteps) -> None:
        result = steps.run(DialogStep.BEFORE_RESULT, make_intent("Nanswer"), negative_profile(2))

        assert result.profile.suicidal_risk == 2

    def test_exactly_five_is_low_risk(self, steps: RiskAssessmentSteps) -> None:
        result = steps.run(DialogStep.RESULT, ClassifiedIntent.empty(), negative_profile(5))

        assert result.action == End(DialogOutcome.LOW_RISK)
        assert result.messages == [messages.LOW_RISK_TEXT]

    def test_above_five_is_high_risk(self, steps: RiskAssessmentSteps) -> None:
        result = steps.run(DialogStep.RESULT, ClassifiedIntent.empty(), negative_profile(6))

        assert result.action == End(DialogOutcome.HIGH_RISK)
        assert result.messages[0] == messages.HIGH_RISK_TEXT
        assert "109" in result.messages[1]

    def test_custom_cutoff(self) -> None:
        steps = RiskAssessmentSteps(high_risk_cutoff=8)
        result = steps.run(DialogStep.RESULT, ClassifiedIntent.empty(), negative_profile(8))

        assert result.action == End(DialogOutcome.LOW_RISK)
