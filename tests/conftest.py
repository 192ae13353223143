"""Tests configuration and fixtures."""

from typing import Optional

import pytest

from gilgrimi.config import Settings
from gilgrimi.domain.models.classified_intent import ClassifiedIntent
from gilgrimi.infrastructure.nlu.classifier import ClassifierError, IntentClassifier
from gilgrimi.infrastructure.state.state_store import InMemoryStateStore
from gilgrimi.services.bot.counseling_bot import CounselingBot
from gilgrimi.services.bot.message_sink import BufferedMessageSink
from gilgrimi.services.dialog.risk_assessment_dialog import RiskAssessmentDialog
from gilgrimi.services.dialog.steps import RiskAssessmentSteps
from gilgrimi.services.safety.crisis_resources import CrisisResourceResolver
from gilgrimi.services.safety.priority_escalation import PriorityEscalationRule


def make_intent(label: str, confidence: float = 0.9, **entities: str) -> ClassifiedIntent:
    """Intent with one recognized text per entity type."""
    return ClassifiedIntent(
        label=label,
        confidence=confidence,
        entities={entity_type: [value] for entity_type, value in entities.items()},
    )


# What the fake recognizer returns for each scripted utterance
SCRIPTED_INTENTS: dict[str, ClassifiedIntent] = {
    "네": make_intent("Panswer"),
    "아니요": make_intent("Nanswer"),
    "우울해요": make_intent("Nfeeling"),
    "좋아요": make_intent("Pfeeling"),
    "외로워요": make_intent("Alone"),
    "전혀요": make_intent("Frequency", 빈도="전혀"),
    "가끔요": make_intent("Frequency", 빈도="가끔"),
    "자주요": make_intent("Frequency", 빈도="자주"),
    "항상요": make_intent("Frequency", 빈도="항상"),
    "도와주세요": make_intent("Priority_Danger", 0.95),
    "글쎄요": make_intent("None", 0.4),
    "아마도요": make_intent("Panswer", 0.7),
}


class FakeClassifier(IntentClassifier):
    """Recognizer answering from a fixed table; unknown text is unrecognized."""

    def __init__(
        self,
        intents: Optional[dict[str, ClassifiedIntent]] = None,
        fail: bool = False,
    ) -> None:
        self.intents = dict(SCRIPTED_INTENTS if intents is None else intents)
        self.fail = fail
        self.calls: list[str] = []

    @property
    def classifier_name(self) -> str:
        return "fake"

    def is_configured(self) -> bool:
        return True

    async def recognize(self, utterance: str) -> ClassifiedIntent:
        self.calls.append(utterance)
        if self.fail:
            raise ClassifierError("recognizer down", classifier=self.classifier_name, status_code=503)
        return self.intents.get(utterance, ClassifiedIntent.empty())


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with in-memory state."""
    return Settings(
        env="development",
        debug=False,
        state_backend="memory",
    )


@pytest.fixture
def resolver() -> CrisisResourceResolver:
    return CrisisResourceResolver()


@pytest.fixture
def steps(resolver: CrisisResourceResolver) -> RiskAssessmentSteps:
    return RiskAssessmentSteps(resource_resolver=resolver)


@pytest.fixture
def dialog(steps: RiskAssessmentSteps) -> RiskAssessmentDialog:
    return RiskAssessmentDialog(steps, max_reprompts=5)


@pytest.fixture
def classifier() -> FakeClassifier:
    return FakeClassifier()


@pytest.fixture
def store() -> InMemoryStateStore:
    return InMemoryStateStore()


@pytest.fixture
def sink() -> BufferedMessageSink:
    return BufferedMessageSink()


@pytest.fixture
def bot(
    classifier: FakeClassifier,
    store: InMemoryStateStore,
    dialog: RiskAssessmentDialog,
    resolver: CrisisResourceResolver,
) -> CounselingBot:
    return CounselingBot(
        classifier=classifier,
        state_store=store,
        dialog=dialog,
        priority_rule=PriorityEscalationRule(threshold=0.80, resource_resolver=resolver),
        bot_id="gilgrimi",
    )
