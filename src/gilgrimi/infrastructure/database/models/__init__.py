"""
Database ORM models package.
"""

from gilgrimi.infrastructure.database.models.conversation_state_model import ConversationStateModel

__all__ = ["ConversationStateModel"]
