"""
Risk Assessment Steps

One pure function per waterfall step. Each takes the classified
intent of the user's latest message, the current profile and the raw
utterance, and returns a StepDecision: the new profile, the messages
to send and a Decision. The transition table turns (step, decision)
into the next DialogAction.

SAFETY-CRITICAL: Score deltas and branch conditions decide who is
referred to crisis services. CLINICAL_VALIDATION_REQUIRED for any change.
"""

from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Callable, Optional

from gilgrimi.domain.enums.dialog import DialogOutcome, DialogStep, FeelingTone, RiskLevel
from gilgrimi.domain.enums.intent import FREQUENCY_DELTAS, IntentLabel
from gilgrimi.domain.models.classified_intent import ClassifiedIntent
from gilgrimi.domain.models.dialog_state import Advance, DialogAction, End, Reprompt, StepResult
from gilgrimi.domain.models.user_profile import UserProfile
from gilgrimi.services.dialog import messages
from gilgrimi.services.safety.crisis_resources import CrisisResourceResolver


class Decision(StrEnum):
    """What a step concluded about the user's answer."""

    CONTINUE = "continue"
    UNUSABLE = "unusable"
    DECLINED = "declined"
    NO_HELP_NEEDED = "no_help_needed"
    CRISIS = "crisis"
    INVALID_STATE = "invalid_state"
    HIGH_RISK = "high_risk"
    LOW_RISK = "low_risk"


WATERFALL: tuple[DialogStep, ...] = tuple(DialogStep)


def _build_transitions() -> dict[tuple[DialogStep, Decision], DialogAction]:
    transitions: dict[tuple[DialogStep, Decision], DialogAction] = {}

    for current, following in zip(WATERFALL, WATERFALL[1:]):
        transitions[(current, Decision.CONTINUE)] = Advance(following)

    for step in WATERFALL:
        transitions[(step, Decision.UNUSABLE)] = Reprompt()

    transitions.update({
        (DialogStep.GET_AGREEMENT, Decision.DECLINED): End(DialogOutcome.CONSENT_DECLINED),
        (DialogStep.RELATIONSHIP, Decision.NO_HELP_NEEDED): End(DialogOutcome.NO_HELP_NEEDED),
        (DialogStep.RELATIONSHIP, Decision.INVALID_STATE): End(DialogOutcome.INVALID_STATE),
        (DialogStep.PLAN_SUICIDE, Decision.CRISIS): End(DialogOutcome.CRISIS_REFERRAL),
        (DialogStep.RESULT, Decision.HIGH_RISK): End(DialogOutcome.HIGH_RISK),
        (DialogStep.RESULT, Decision.LOW_RISK): End(DialogOutcome.LOW_RISK),
    })
    return transitions


TRANSITIONS: dict[tuple[DialogStep, Decision], DialogAction] = _build_transitions()

# Score the feeling step leaves behind for each tone
TONE_SCORES: dict[FeelingTone, int] = {
    FeelingTone.NEGATIVE: 1,
    FeelingTone.POSITIVE: -1,
}


@dataclass
class StepThresholds:
    """
    Confidence thresholds for dialog steps.

    CLINICAL_VALIDATION_REQUIRED: All threshold values
    require clinical validation before production use.
    """

    default: float = 0.70
    overrides: dict[DialogStep, float] = field(default_factory=dict)

    def for_step(self, step: DialogStep) -> float:
        return self.overrides.get(step, self.default)

    @classmethod
    def from_mapping(cls, default: float, overrides: dict[str, float]) -> "StepThresholds":
        """Build from settings, where overrides are keyed by step value."""
        return cls(
            default=default,
            overrides={DialogStep(step): threshold for step, threshold in overrides.items()},
        )


@dataclass
class StepDecision:
    """Raw outcome of a step before the transition table is applied."""

    decision: Decision
    profile: UserProfile
    messages: list[str] = field(default_factory=list)


def classify_risk(score: int, cutoff: int = 5) -> RiskLevel:
    """Scores strictly above the cut-off are high risk."""
    return RiskLevel.HIGH if score > cutoff else RiskLevel.LOW


class RiskAssessmentSteps:
    """
    Step functions of the risk assessment waterfall.

    Every step is a pure function of its inputs; none of them
    touches storage, the classifier or the channel.

    Usage:
        steps = RiskAssessmentSteps()
        result = steps.run(DialogStep.SUICIDAL_THINKING, intent, profile, text)
    """

    def __init__(
        self,
        thresholds: Optional[StepThresholds] = None,
        high_risk_cutoff: int = 5,
        resource_resolver: Optional[CrisisResourceResolver] = None,
    ) -> None:
        """
        Initialize steps.

        Args:
            thresholds: Per-step confidence thresholds
            high_risk_cutoff: Final scores above this are high risk
            resource_resolver: Crisis contacts appended to referrals
        """
        self.thresholds = thresholds or StepThresholds()
        self.high_risk_cutoff = high_risk_cutoff
        self._resources = resource_resolver or CrisisResourceResolver()

        self._handlers: dict[
            DialogStep,
            Callable[[ClassifiedIntent, UserProfile, str, float], StepDecision],
        ] = {
            DialogStep.GET_AGREEMENT: self.get_agreement,
            DialogStep.ASK_FEELING: self.ask_feeling,
            DialogStep.SUICIDAL_THINKING: self.suicidal_thinking,
            DialogStep.RELATIONSHIP: self.relationship,
            DialogStep.FREQUENCY_OF_FEELING: self.frequency_of_feeling,
            DialogStep.TRY_SUICIDE: self.try_suicide,
            DialogStep.PLAN_SUICIDE: self.plan_suicide,
            DialogStep.BEFORE_RESULT: self.before_result,
            DialogStep.RESULT: self.result,
        }

    def run(
        self,
        step: DialogStep,
        intent: ClassifiedIntent,
        profile: UserProfile,
        utterance: str = "",
    ) -> StepResult:
        """
        Run one step and resolve its transition.

        Returns:
            StepResult with the new profile, action and messages
        """
        handler = self._handlers[step]
        outcome = handler(intent, profile, utterance, self.thresholds.for_step(step))
        return StepResult(
            profile=outcome.profile,
            action=TRANSITIONS[(step, outcome.decision)],
            messages=outcome.messages,
        )

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def get_agreement(
        self,
        intent: ClassifiedIntent,
        profile: UserProfile,
        utterance: str,
        threshold: float,
    ) -> StepDecision:
        """Consent to phone or text contact. Anything but a clear yes ends the dialog."""
        if intent.matches(IntentLabel.POSITIVE_ANSWER, threshold):
            return StepDecision(
                Decision.CONTINUE,
                profile,
                [messages.AGREEMENT_THANKS, messages.WARNING_TEXT, messages.ASK_NAME_PROMPT],
            )
        return StepDecision(Decision.DECLINED, profile, [messages.CONSENT_DECLINED_TEXT])

    def ask_feeling(
        self,
        intent: ClassifiedIntent,
        profile: UserProfile,
        utterance: str,
        threshold: float,
    ) -> StepDecision:
        """The reply is the user's name, taken verbatim."""
        name = (utterance or "").strip()[:50]
        if not name:
            return StepDecision(Decision.UNUSABLE, profile, [messages.ASK_NAME_REPROMPT])

        return StepDecision(
            Decision.CONTINUE,
            replace(profile, name=name),
            [messages.GREETING_TEMPLATE.format(name=name), messages.ASK_FEELING_PROMPT],
        )

    def suicidal_thinking(
        self,
        intent: ClassifiedIntent,
        profile: UserProfile,
        utterance: str,
        threshold: float,
    ) -> StepDecision:
        if intent.matches(IntentLabel.NEGATIVE_FEELING, threshold):
            updated = replace(
                profile.with_risk_delta(1),
                feeling_intent=intent.label,
                feeling_tone=FeelingTone.NEGATIVE,
            )
            return StepDecision(
                Decision.CONTINUE,
                updated,
                [messages.NEGATIVE_FEELING_TEXT, messages.NEGATIVE_FEELING_PROMPT],
            )

        if intent.matches(IntentLabel.POSITIVE_FEELING, threshold):
            updated = replace(
                profile.with_risk_delta(-1),
                feeling_intent=intent.label,
                feeling_tone=FeelingTone.POSITIVE,
            )
            return StepDecision(
                Decision.CONTINUE,
                updated,
                [messages.POSITIVE_FEELING_TEXT, messages.POSITIVE_FEELING_PROMPT],
            )

        return StepDecision(Decision.UNUSABLE, profile, [messages.FEELING_REPROMPT])

    def relationship(
        self,
        intent: ClassifiedIntent,
        profile: UserProfile,
        utterance: str,
        threshold: float,
    ) -> StepDecision:
        """
        Answer to "have you wanted to die recently?".

        Branches on the feeling tag. A missing tag, or a score the
        tag could not have produced, is an invalid state.
        """
        tone = profile.feeling_tone
        if tone is None or profile.suicidal_risk != TONE_SCORES[tone]:
            return StepDecision(Decision.INVALID_STATE, profile, [messages.INVALID_STATE_TEXT])

        if intent.matches(IntentLabel.POSITIVE_ANSWER, threshold):
            delta = 2 if tone is FeelingTone.POSITIVE else 3
            return StepDecision(
                Decision.CONTINUE,
                profile.with_risk_delta(delta),
                [messages.SUICIDAL_THOUGHTS_TEXT, messages.RELATIONSHIP_PROMPT],
            )

        if intent.matches(IntentLabel.NEGATIVE_ANSWER, threshold):
            if tone is FeelingTone.POSITIVE:
                return StepDecision(Decision.NO_HELP_NEEDED, profile, [messages.NO_HELP_NEEDED_TEXT])
            return StepDecision(
                Decision.CONTINUE,
                profile,
                [messages.NO_SUICIDAL_THOUGHTS_TEXT, messages.RELATIONSHIP_PROMPT],
            )

        return StepDecision(Decision.UNUSABLE, profile, [messages.YES_NO_REPROMPT])

    def frequency_of_feeling(
        self,
        intent: ClassifiedIntent,
        profile: UserProfile,
        utterance: str,
        threshold: float,
    ) -> StepDecision:
        if intent.matches(IntentLabel.ALONE, threshold):
            return StepDecision(
                Decision.CONTINUE,
                profile.with_risk_delta(2),
                [messages.ALONE_TEXT, messages.FREQUENCY_PROMPT],
            )

        if intent.matches(IntentLabel.POSITIVE_FEELING, threshold):
            return StepDecision(
                Decision.CONTINUE,
                profile.with_risk_delta(-1),
                [messages.CONNECTED_TEXT, messages.FREQUENCY_PROMPT],
            )

        return StepDecision(Decision.UNUSABLE, profile, [messages.RELATIONSHIP_REPROMPT])

    def try_suicide(
        self,
        intent: ClassifiedIntent,
        profile: UserProfile,
        utterance: str,
        threshold: float,
    ) -> StepDecision:
        """Captures the frequency word and scores it."""
        if intent.matches(IntentLabel.FREQUENCY, threshold):
            word = next(
                (value for value in intent.all_entity_values() if value in FREQUENCY_DELTAS),
                None,
            )
            if word is not None:
                updated = replace(profile.with_risk_delta(FREQUENCY_DELTAS[word]), frequency=word)
                return StepDecision(
                    Decision.CONTINUE,
                    updated,
                    [messages.FREQUENCY_ACK_TEXT, messages.TRY_SUICIDE_PROMPT],
                )

        return StepDecision(Decision.UNUSABLE, profile, [messages.FREQUENCY_REPROMPT])

    def plan_suicide(
        self,
        intent: ClassifiedIntent,
        profile: UserProfile,
        utterance: str,
        threshold: float,
    ) -> StepDecision:
        """SAFETY_CRITICAL: A yes here ends the dialog with a crisis referral."""
        if intent.matches(IntentLabel.POSITIVE_ANSWER, threshold):
            return StepDecision(
                Decision.CRISIS,
                profile.with_risk_delta(5),
                [messages.PLAN_REFERRAL_TEXT, self._resources.format_crisis_message()],
            )

        if intent.matches(IntentLabel.NEGATIVE_ANSWER, threshold):
            return StepDecision(
                Decision.CONTINUE,
                profile,
                [messages.NO_PLAN_TEXT, messages.BEFORE_RESULT_PROMPT],
            )

        return StepDecision(Decision.UNUSABLE, profile, [messages.YES_NO_REPROMPT])

    def before_result(
        self,
        intent: ClassifiedIntent,
        profile: UserProfile,
        utterance: str,
        threshold: float,
    ) -> StepDecision:
        if intent.matches(IntentLabel.POSITIVE_ANSWER, threshold):
            return StepDecision(Decision.CONTINUE, profile.with_risk_delta(3))

        if intent.matches(IntentLabel.NEGATIVE_ANSWER, threshold):
            return StepDecision(Decision.CONTINUE, profile)

        return StepDecision(Decision.UNUSABLE, profile, [messages.YES_NO_REPROMPT])

    def result(
        self,
        intent: ClassifiedIntent,
        profile: UserProfile,
        utterance: str,
        threshold: float,
    ) -> StepDecision:
        """Terminal classification of the accumulated score."""
        if classify_risk(profile.suicidal_risk, self.high_risk_cutoff) is RiskLevel.HIGH:
            return StepDecision(
                Decision.HIGH_RISK,
                profile,
                [messages.HIGH_RISK_TEXT, self._resources.format_crisis_message()],
            )
        return StepDecision(Decision.LOW_RISK, profile, [messages.LOW_RISK_TEXT])
