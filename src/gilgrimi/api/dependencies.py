"""
API Dependencies

FastAPI dependencies resolving the services built at startup.
"""

from fastapi import HTTPException, Request, status

from gilgrimi.infrastructure.nlu.classifier import IntentClassifier
from gilgrimi.infrastructure.state.state_store import ConversationStateStore
from gilgrimi.services.bot.counseling_bot import CounselingBot


def get_bot(request: Request) -> CounselingBot:
    """Counseling bot stored on the application state."""
    bot = getattr(request.app.state, "bot", None)
    if bot is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Bot not initialized",
        )
    return bot


def get_state_store(request: Request) -> ConversationStateStore:
    return get_bot(request).state_store


def get_classifier(request: Request) -> IntentClassifier:
    return get_bot(request).classifier
