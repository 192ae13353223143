"""
SQLAlchemy Conversation State Store

Persists conversation state in the conversation_states table,
one JSON document per conversation.
"""

from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError

from gilgrimi.infrastructure.database.connection import DatabaseManager
from gilgrimi.infrastructure.database.models.conversation_state_model import ConversationStateModel
from gilgrimi.infrastructure.state.state_store import ConversationStateStore, StateStoreError
from gilgrimi.config.logging_config import get_logger

logger = get_logger(__name__)


class SqlAlchemyStateStore(ConversationStateStore):
    """
    Database-backed store.

    Usage:
        db = DatabaseManager()
        await db.initialize()
        store = SqlAlchemyStateStore(db)
    """

    def __init__(self, db: DatabaseManager) -> None:
        super().__init__()
        self._db = db

    async def _load(self, conversation_id: str) -> Optional[dict[str, Any]]:
        try:
            async with self._db.session() as session:
                row = await session.get(ConversationStateModel, conversation_id)
                return dict(row.state) if row is not None else None
        except SQLAlchemyError as e:
            logger.error("Failed to load conversation state", error=type(e).__name__)
            raise StateStoreError(
                "Failed to load conversation state",
                conversation_id=conversation_id,
                original_error=e,
            ) from e

    async def _commit(self, conversation_id: str, record: dict[str, Any]) -> None:
        current_step = (record.get("dialog") or {}).get("current_step")
        try:
            async with self._db.session() as session:
                row = await session.get(ConversationStateModel, conversation_id)
                if row is None:
                    session.add(
                        ConversationStateModel(
                            conversation_id=conversation_id,
                            state=record,
                            current_step=current_step,
                        )
                    )
                else:
                    row.state = record
                    row.current_step = current_step
        except SQLAlchemyError as e:
            logger.error("Failed to commit conversation state", error=type(e).__name__)
            raise StateStoreError(
                "Failed to commit conversation state",
                conversation_id=conversation_id,
                original_error=e,
            ) from e

    async def health_check(self) -> bool:
        return await self._db.health_check()

    async def close(self) -> None:
        await self._db.close()
