"""
Unit Tests for Log Redaction and Error Event Scrubbing

PRIVACY: User messages and credentials must never leave the
process through logs or error reports.
"""

from gilgrimi.config.logging_config import _redact_sensitive_data
from gilgrimi.infrastructure.monitoring.sentry_integration import before_send


class TestLogRedaction:
    """Test suite for the structlog redaction processor."""

    def test_user_content_redacted(self) -> None:
        event = _redact_sensitive_data(None, "info", {
            "event": "Message turn processed",
            "utterance": "죽고 싶어요",
            "text": "죽고 싶어요",
            "frequency": "항상",
        })

        assert event["event"] == "Message turn processed"
        assert event["utterance"] == "[REDACTED]"
        assert event["text"] == "[REDACTED]"
        assert event["frequency"] == "[REDACTED]"

    def test_secrets_redacted(self) -> None:
        event = _redact_sensitive_data(None, "info", {
            "subscription_key": "abc",
            "headers": {"Authorization": "Bearer x", "Accept": "json"},
        })

        assert event["subscription_key"] == "[REDACTED]"
        assert event["headers"]["Authorization"] == "[REDACTED]"
        assert event["headers"]["Accept"] == "json"

    def test_labels_and_scores_kept(self) -> None:
        event = _redact_sensitive_data(None, "info", {
            "intent": "Nfeeling",
            "confidence": 0.91,
            "context": "dialog",
            "steps_run": ["relationship"],
        })

        assert event == {
            "intent": "Nfeeling",
            "confidence": 0.91,
            "context": "dialog",
            "steps_run": ["relationship"],
        }


class TestSentryScrubbing:
    """Test suite for the Sentry before_send hook."""

    def test_request_body_and_secrets_scrubbed(self) -> None:
        event = {
            "request": {
                "data": {"text": "도와주세요", "conversation_id": "c1"},
                "headers": {"Authorization": "Bearer abc.def", "X-Correlation-ID": "id-1"},
                "query_string": "subscription-key=abc123&q=hello",
            },
            "extra": {"utterance": "우울해요", "step": "relationship"},
            "breadcrumbs": {"values": [
                {"message": "GET /luis?subscription-key=abc123", "data": {"name": "민수"}},
            ]},
        }

        scrubbed = before_send(event, {})

        assert scrubbed["request"]["data"] == "[REDACTED]"
        assert scrubbed["request"]["headers"]["Authorization"] == "[REDACTED]"
        assert scrubbed["request"]["headers"]["X-Correlation-ID"] == "id-1"
        assert "abc123" not in scrubbed["request"]["query_string"]
        assert scrubbed["extra"] == {"utterance": "[REDACTED]", "step": "relationship"}
        breadcrumb = scrubbed["breadcrumbs"]["values"][0]
        assert "abc123" not in breadcrumb["message"]
        assert breadcrumb["data"]["name"] == "[REDACTED]"

    def test_event_without_request(self) -> None:
        event = {"message": "Priority danger escalation", "level": "warning"}

        assert before_send(event, {}) == event
