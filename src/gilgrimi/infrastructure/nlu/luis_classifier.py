"""
LUIS Intent Classifier

Implementation of the intent classifier interface for the LUIS v2
prediction REST API. Includes timeouts, retries with exponential
backoff and response parsing.
"""

from typing import Any, Optional

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from gilgrimi.config import get_settings
from gilgrimi.config.settings import LuisSettings
from gilgrimi.config.logging_config import get_logger
from gilgrimi.domain.models.classified_intent import ClassifiedIntent
from gilgrimi.infrastructure.metrics import track_classifier_request, track_intent
from gilgrimi.infrastructure.nlu.classifier import (
    ClassifierError,
    IntentClassifier,
    RetryableClassifierError,
)

logger = get_logger(__name__)


def parse_luis_response(payload: Any) -> ClassifiedIntent:
    """
    Parse a LUIS v2 prediction response.

    Missing topScoringIntent yields the empty intent. Entities are
    grouped by type; scores are clamped into [0, 1].

    Raises:
        ClassifierError: When the body is not a prediction object
    """
    if not isinstance(payload, dict):
        raise ClassifierError("LUIS returned malformed prediction", classifier="luis")

    top = payload.get("topScoringIntent") or {}
    if not isinstance(top, dict):
        raise ClassifierError("LUIS returned malformed prediction", classifier="luis")

    label = top.get("intent") or ""
    if not label:
        return ClassifiedIntent.empty()
    if not isinstance(label, str):
        raise ClassifierError("LUIS returned malformed prediction", classifier="luis")

    try:
        score = float(top.get("score") or 0.0)
    except (TypeError, ValueError) as e:
        raise ClassifierError(
            "LUIS returned malformed prediction",
            classifier="luis",
            original_error=e,
        ) from e
    confidence = min(1.0, max(0.0, score))

    entities: dict[str, list[str]] = {}
    raw_entities = payload.get("entities") or []
    if not isinstance(raw_entities, list):
        raw_entities = []
    for entity in raw_entities:
        if not isinstance(entity, dict):
            continue
        entity_type = entity.get("type")
        value = entity.get("entity")
        if isinstance(entity_type, str) and isinstance(value, str) and value:
            entities.setdefault(entity_type, []).append(value)

    return ClassifiedIntent(label=label, confidence=confidence, entities=entities)


class LuisIntentClassifier(IntentClassifier):
    """
    LUIS prediction API client.

    Usage:
        classifier = LuisIntentClassifier()
        intent = await classifier.classify("요즘 너무 우울해")
    """

    def __init__(
        self,
        settings: Optional[LuisSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize LUIS classifier.

        Args:
            settings: LUIS settings (defaults to application settings)
            transport: Optional httpx transport (used by tests)
        """
        self._settings = settings or get_settings().luis
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def classifier_name(self) -> str:
        return "luis"

    def is_configured(self) -> bool:
        return self._settings.is_configured

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client (lazy initialization)."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._settings.endpoint.rstrip("/"),
                timeout=self._settings.timeout_seconds,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @track_classifier_request("luis")
    async def recognize(self, utterance: str) -> ClassifiedIntent:
        """
        Recognize the top intent of an utterance.

        Raises:
            ClassifierError: When the recognizer is unavailable or misconfigured
        """
        if not self.is_configured():
            raise ClassifierError("LUIS app id or key not configured", classifier=self.classifier_name)

        payload = await self._predict(utterance)
        intent = parse_luis_response(payload)
        track_intent(intent.label)

        logger.debug(
            "Intent recognized",
            intent=intent.label or "none",
            confidence=round(intent.confidence, 3),
            entity_types=sorted(intent.entities),
        )
        return intent

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        retry=retry_if_exception_type(RetryableClassifierError),
        reraise=True,
    )
    async def _predict(self, utterance: str) -> dict[str, Any]:
        """Call the prediction endpoint once."""
        try:
            response = await self.client.get(
                f"/luis/v2.0/apps/{self._settings.app_id}",
                params={
                    "subscription-key": self._settings.subscription_key.get_secret_value(),
                    "q": utterance,
                    "verbose": "false",
                    "timezoneOffset": "0",
                },
            )
        except httpx.TransportError as e:
            raise RetryableClassifierError(
                f"LUIS transport error: {type(e).__name__}",
                classifier=self.classifier_name,
                original_error=e,
            ) from e

        if response.status_code == 429 or response.status_code >= 500:
            logger.warning("LUIS transient error", status_code=response.status_code)
            raise RetryableClassifierError(
                f"LUIS returned {response.status_code}",
                classifier=self.classifier_name,
                status_code=response.status_code,
            )

        if response.status_code >= 400:
            raise ClassifierError(
                f"LUIS returned {response.status_code}",
                classifier=self.classifier_name,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ClassifierError(
                "LUIS returned invalid JSON",
                classifier=self.classifier_name,
                status_code=response.status_code,
                original_error=e,
            ) from e

    async def health_check(self) -> bool:
        """A configured recognizer that answers a probe query is healthy."""
        if not self.is_configured():
            return False

        try:
            await self._predict("안녕")
            return True
        except ClassifierError as e:
            logger.warning("LUIS health check failed", error=str(e))
            return False
