"""
Dialog State and Step Actions

DialogState is the persisted position of a conversation in the
risk assessment waterfall. Step functions report what should happen
next with one of the DialogAction variants.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from gilgrimi.domain.enums.dialog import DialogOutcome, DialogStep
from gilgrimi.domain.models.user_profile import UserProfile


@dataclass(frozen=True)
class Reprompt:
    """Input was not usable; run the same step again on the next message."""


@dataclass(frozen=True)
class Advance:
    """Move to the next step."""

    next_step: DialogStep


@dataclass(frozen=True)
class End:
    """Finish the dialog."""

    outcome: DialogOutcome


DialogAction = Union[Reprompt, Advance, End]


@dataclass
class StepResult:
    """
    Output of a single step function.

    Attributes:
        profile: Profile after the step's effect
        action: What the dialog should do next
        messages: Outbound texts, in delivery order
    """

    profile: UserProfile
    action: DialogAction
    messages: list[str] = field(default_factory=list)


@dataclass
class DialogState:
    """
    Persisted dialog position for one conversation.

    Attributes:
        current_step: Step that will handle the next message (None = idle)
        reprompt_count: Consecutive clarifications at the current step
        last_outcome: How the previous dialog ended
    """

    current_step: Optional[DialogStep] = None
    reprompt_count: int = 0
    last_outcome: Optional[DialogOutcome] = None

    @property
    def is_active(self) -> bool:
        return self.current_step is not None

    def begin(self) -> None:
        """Start a new dialog at the first step."""
        self.current_step = DialogStep.first()
        self.reprompt_count = 0

    def advance(self, next_step: DialogStep) -> None:
        self.current_step = next_step
        self.reprompt_count = 0

    def replace_with_self(self) -> None:
        """Re-enter the current step."""
        if self.current_step is None:
            raise RuntimeError("No active dialog to re-enter")
        self.reprompt_count += 1

    def end(self, outcome: DialogOutcome) -> None:
        self.current_step = None
        self.reprompt_count = 0
        self.last_outcome = outcome

    def to_dict(self) -> dict:
        return {
            "current_step": self.current_step.value if self.current_step else None,
            "reprompt_count": self.reprompt_count,
            "last_outcome": self.last_outcome.value if self.last_outcome else None,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "DialogState":
        data = data or {}
        step = data.get("current_step")
        outcome = data.get("last_outcome")
        return cls(
            current_step=DialogStep(step) if step else None,
            reprompt_count=int(data.get("reprompt_count") or 0),
            last_outcome=DialogOutcome(outcome) if outcome else None,
        )
