"""
Risk Assessment Dialog

Explicit state machine over the waterfall steps. Carries a
(DialogState, UserProfile) pair through one user message: begins a
dialog when none is active, runs the current step, applies its action
and keeps running steps that need no input (the terminal result).

ARCHITECTURE: No I/O happens here. The caller classifies the
message, loads state before and persists it after.
"""

from dataclasses import dataclass, field
from typing import Optional

from gilgrimi.domain.enums.dialog import DialogOutcome, DialogStep
from gilgrimi.domain.models.classified_intent import ClassifiedIntent
from gilgrimi.domain.models.dialog_state import Advance, DialogState, End, Reprompt
from gilgrimi.domain.models.user_profile import UserProfile
from gilgrimi.services.dialog import messages
from gilgrimi.services.dialog.steps import RiskAssessmentSteps
from gilgrimi.infrastructure.metrics import (
    track_dialog_outcome,
    track_dialog_started,
    track_reprompt,
)
from gilgrimi.config.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class DialogTurn:
    """
    Result of feeding one message to the dialog.

    Attributes:
        profile: Profile after the turn
        state: Dialog state after the turn
        messages: Outbound texts, in order
        started: Whether this message began a new dialog
        steps_run: Steps executed this turn, in order
        reprompted: Whether the turn ended by re-entering a step
        outcome: How the dialog ended, if it ended this turn
    """

    profile: UserProfile
    state: DialogState
    messages: list[str] = field(default_factory=list)
    started: bool = False
    steps_run: list[DialogStep] = field(default_factory=list)
    reprompted: bool = False
    outcome: Optional[DialogOutcome] = None

    def to_dict(self) -> dict:
        return {
            "started": self.started,
            "steps_run": [s.value for s in self.steps_run],
            "reprompted": self.reprompted,
            "current_step": self.state.current_step.value if self.state.current_step else None,
            "outcome": self.outcome.value if self.outcome else None,
            "suicidal_risk": self.profile.suicidal_risk,
        }


class RiskAssessmentDialog:
    """
    Drives the risk assessment waterfall one message at a time.

    Usage:
        dialog = RiskAssessmentDialog(RiskAssessmentSteps(), max_reprompts=5)
        turn = dialog.continue_dialog(state, profile, intent, text)
    """

    def __init__(
        self,
        steps: Optional[RiskAssessmentSteps] = None,
        max_reprompts: Optional[int] = None,
    ) -> None:
        """
        Initialize dialog.

        Args:
            steps: Step functions and their configuration
            max_reprompts: Clarifications allowed per step (None = no limit)
        """
        self.steps = steps or RiskAssessmentSteps()
        self.max_reprompts = max_reprompts

    def continue_dialog(
        self,
        state: DialogState,
        profile: UserProfile,
        intent: ClassifiedIntent,
        utterance: str = "",
    ) -> DialogTurn:
        """
        Feed one classified message to the dialog.

        The passed state is mutated and returned in the DialogTurn.
        """
        turn = DialogTurn(profile=profile, state=state)

        if not state.is_active:
            state.begin()
            turn.profile = profile.reset_assessment()
            turn.started = True
            track_dialog_started()
            logger.info("Risk assessment dialog started")

        while state.current_step is not None:
            step = state.current_step
            result = self.steps.run(step, intent, turn.profile, utterance)
            turn.steps_run.append(step)
            action = result.action

            if isinstance(action, Reprompt):
                if self._retry_limit_reached(state):
                    turn.messages.append(messages.RETRY_LIMIT_TEXT)
                    self._end(turn, DialogOutcome.RETRY_LIMIT)
                    break

                # Unusable input never changes the profile
                turn.messages.extend(result.messages)
                state.replace_with_self()
                turn.reprompted = True
                track_reprompt(step.value)
                logger.info(
                    "Step re-prompted",
                    step=step.value,
                    intent=intent.label or "none",
                    confidence=round(intent.confidence, 3),
                    reprompt_count=state.reprompt_count,
                )
                break

            turn.profile = result.profile
            turn.messages.extend(result.messages)

            if isinstance(action, Advance):
                state.advance(action.next_step)
                logger.info(
                    "Step advanced",
                    step=step.value,
                    next_step=action.next_step.value,
                    suicidal_risk=turn.profile.suicidal_risk,
                )
                if action.next_step.awaits_input:
                    break
                continue

            if isinstance(action, End):
                self._end(turn, action.outcome)
                break

        return turn

    def _retry_limit_reached(self, state: DialogState) -> bool:
        return self.max_reprompts is not None and state.reprompt_count >= self.max_reprompts

    def _end(self, turn: DialogTurn, outcome: DialogOutcome) -> None:
        turn.state.end(outcome)
        turn.outcome = outcome
        track_dialog_outcome(outcome.value)

        log = logger.warning if outcome.is_escalation or outcome is DialogOutcome.INVALID_STATE else logger.info
        log(
            "Risk assessment dialog ended",
            outcome=outcome.value,
            suicidal_risk=turn.profile.suicidal_risk,
        )
