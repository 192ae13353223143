"""
Conversation State Store

Per-conversation storage for the user profile and dialog position.

Reads go through a staging area: the first read of a conversation
loads its committed record, later reads and writes in the same turn
see the staged copy. Nothing reaches the backend until save_changes().
A turn that fails or is cancelled calls discard() instead, so the next
turn sees the previous committed state.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from gilgrimi.domain.models.dialog_state import DialogState
from gilgrimi.domain.models.user_profile import UserProfile
from gilgrimi.config.logging_config import get_logger

logger = get_logger(__name__)


class StateStoreError(Exception):
    """Persistence failure while loading or committing conversation state."""

    def __init__(
        self,
        message: str,
        conversation_id: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.conversation_id = conversation_id
        self.original_error = original_error


@dataclass
class ConversationState:
    """Everything persisted for one conversation."""

    profile: UserProfile = field(default_factory=UserProfile)
    dialog: DialogState = field(default_factory=DialogState)

    def to_dict(self) -> dict[str, Any]:
        return {"profile": self.profile.to_dict(), "dialog": self.dialog.to_dict()}

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "ConversationState":
        data = data or {}
        return cls(
            profile=UserProfile.from_dict(data.get("profile")),
            dialog=DialogState.from_dict(data.get("dialog")),
        )


class ConversationStateStore(ABC):
    """
    Abstract conversation state store.

    Backends implement _load() and _commit(); the staging logic
    lives here.

    Usage:
        profile = await store.get_profile(cid)
        await store.set_profile(cid, profile.with_risk_delta(1))
        await store.save_changes(cid)
    """

    def __init__(self) -> None:
        self._staged: dict[str, ConversationState] = {}

    @abstractmethod
    async def _load(self, conversation_id: str) -> Optional[dict[str, Any]]:
        """Load the committed record, or None for an unknown conversation."""
        pass

    @abstractmethod
    async def _commit(self, conversation_id: str, record: dict[str, Any]) -> None:
        """Replace the committed record."""
        pass

    async def _staged_state(self, conversation_id: str) -> ConversationState:
        state = self._staged.get(conversation_id)
        if state is None:
            state = ConversationState.from_dict(await self._load(conversation_id))
            self._staged[conversation_id] = state
        return state

    async def get_profile(self, conversation_id: str) -> UserProfile:
        """Profile for the conversation, default-constructed if absent."""
        return (await self._staged_state(conversation_id)).profile

    async def set_profile(self, conversation_id: str, profile: UserProfile) -> None:
        (await self._staged_state(conversation_id)).profile = profile

    async def get_dialog_state(self, conversation_id: str) -> DialogState:
        return (await self._staged_state(conversation_id)).dialog

    async def set_dialog_state(self, conversation_id: str, state: DialogState) -> None:
        (await self._staged_state(conversation_id)).dialog = state

    async def save_changes(self, conversation_id: str) -> None:
        """
        Commit staged writes for the conversation.

        Raises:
            StateStoreError: If the backend rejects the write. Staged
                changes are dropped either way.
        """
        state = self._staged.pop(conversation_id, None)
        if state is None:
            return
        await self._commit(conversation_id, state.to_dict())
        logger.debug(
            "Conversation state committed",
            current_step=state.dialog.current_step.value if state.dialog.current_step else None,
        )

    def discard(self, conversation_id: str) -> None:
        """Drop staged writes without committing them."""
        if self._staged.pop(conversation_id, None) is not None:
            logger.info("Staged conversation state discarded")

    async def load(self, conversation_id: str) -> Optional[ConversationState]:
        """
        Read the committed state, bypassing the staging area.

        Returns:
            ConversationState, or None for an unknown conversation
        """
        record = await self._load(conversation_id)
        if record is None:
            return None
        return ConversationState.from_dict(record)

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        return None


class InMemoryStateStore(ConversationStateStore):
    """
    Process-local store.

    Records are kept in serialized form so a committed state cannot be
    changed by mutating objects handed out during a turn.
    """

    def __init__(self) -> None:
        super().__init__()
        self._records: dict[str, dict[str, Any]] = {}

    async def _load(self, conversation_id: str) -> Optional[dict[str, Any]]:
        record = self._records.get(conversation_id)
        if record is None:
            return None
        return {key: dict(value) for key, value in record.items()}

    async def _commit(self, conversation_id: str, record: dict[str, Any]) -> None:
        self._records[conversation_id] = record

    def __len__(self) -> int:
        return len(self._records)
