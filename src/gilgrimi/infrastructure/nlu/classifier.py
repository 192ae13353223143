"""
Intent Classifier Interface

Contract for the external natural-language intent recognizer.
The dialog only consumes its output: top intent, confidence and
recognized entities.

ARCHITECTURE: Recognizer failures never reach the dialog. Transport
errors and "no intent returned" both collapse to the empty intent,
which every step treats as unusable input.
"""

from abc import ABC, abstractmethod
from typing import Optional

from gilgrimi.domain.models.classified_intent import ClassifiedIntent
from gilgrimi.config.logging_config import get_logger

logger = get_logger(__name__)


class ClassifierError(Exception):
    """Base exception for intent classifier errors."""

    def __init__(
        self,
        message: str,
        classifier: str,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.classifier = classifier
        self.status_code = status_code
        self.original_error = original_error


class RetryableClassifierError(ClassifierError):
    """Transient failure (timeout, 429, 5xx) worth another attempt."""


class IntentClassifier(ABC):
    """
    Abstract intent classifier.

    Implementations override recognize(); callers use classify(),
    which never raises for recognizer failures.
    """

    @property
    @abstractmethod
    def classifier_name(self) -> str:
        """Classifier name for logging/metrics."""
        pass

    @abstractmethod
    async def recognize(self, utterance: str) -> ClassifiedIntent:
        """
        Recognize the top intent of an utterance.

        Raises:
            ClassifierError: On recognizer or transport errors
        """
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        """Whether credentials and endpoint are configured."""
        pass

    async def health_check(self) -> bool:
        return self.is_configured()

    async def close(self) -> None:
        """Release network resources."""
        return None

    async def classify(self, utterance: Optional[str]) -> ClassifiedIntent:
        """
        Classify a user message for the dialog.

        Returns:
            The recognized intent, or ClassifiedIntent.empty() when there is
            no text or the recognizer failed
        """
        if not utterance or not utterance.strip():
            return ClassifiedIntent.empty()

        try:
            return await self.recognize(utterance)
        except ClassifierError as e:
            logger.error(
                "Intent classification failed",
                classifier=e.classifier,
                status_code=e.status_code,
                error=str(e),
            )
            return ClassifiedIntent.empty()
