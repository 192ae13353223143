"""Conversation state storage package."""

from gilgrimi.infrastructure.state.state_store import (
    ConversationState,
    ConversationStateStore,
    InMemoryStateStore,
    StateStoreError,
)
from gilgrimi.infrastructure.state.sql_state_store import SqlAlchemyStateStore

__all__ = [
    "ConversationState",
    "ConversationStateStore",
    "InMemoryStateStore",
    "StateStoreError",
    "SqlAlchemyStateStore",
]
