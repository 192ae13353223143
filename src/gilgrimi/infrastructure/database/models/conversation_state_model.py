"""
Conversation State Database Model

One row per conversation. Profile and dialog position are stored
together as a JSON document so a turn commits atomically.

PRIVACY: The state document contains the user's name and answers
and should be encrypted at rest.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, DateTime, String, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from gilgrimi.infrastructure.database.connection import Base


class ConversationStateModel(Base):
    """
    Conversation state table ORM model.

    Table: conversation_states
    """

    __tablename__ = "conversation_states"

    conversation_id: Mapped[str] = mapped_column(
        String(256),
        primary_key=True,
        doc="Channel conversation identifier"
    )

    # JSONB on PostgreSQL, plain JSON elsewhere
    state: Mapped[dict] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        default=dict,
        doc="Serialized profile and dialog state"
    )

    current_step: Mapped[Optional[str]] = mapped_column(
        String(32),
        nullable=True,
        index=True,
        doc="Denormalized dialog step for operational queries"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<ConversationStateModel(step={self.current_step})>"
