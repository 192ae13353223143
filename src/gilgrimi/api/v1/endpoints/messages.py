"""
Message Endpoints

Inbound channel activities and committed conversation state.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from gilgrimi.api.dependencies import get_bot, get_state_store
from gilgrimi.domain.models.activity import Activity
from gilgrimi.infrastructure.state.state_store import ConversationStateStore
from gilgrimi.services.bot.counseling_bot import CounselingBot
from gilgrimi.services.bot.message_sink import BufferedMessageSink

router = APIRouter()


class MessageResponse(BaseModel):
    """Replies produced by one activity."""

    conversation_id: str
    replies: list[str]
    current_step: Optional[str] = None
    outcome: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "conversation_id": "conv-1",
                "replies": ["고마워요. 그럼 이제부터 상담을 진행할게요."],
                "current_step": "ask_feeling",
                "outcome": None,
            }
        }
    }


class ConversationResponse(BaseModel):
    """Committed state of a conversation."""

    conversation_id: str
    profile: dict[str, Any]
    dialog: dict[str, Any]


@router.post(
    "/messages",
    response_model=MessageResponse,
    summary="Process an inbound activity",
)
async def post_activity(
    activity: Activity,
    bot: CounselingBot = Depends(get_bot),
) -> MessageResponse:
    """
    Run one bot turn for the activity.

    Replies are returned in the order the bot sent them.
    """
    sink = BufferedMessageSink()
    result = await bot.on_turn(activity, sink)

    return MessageResponse(
        conversation_id=result.conversation_id,
        replies=sink.replies_for(activity.conversation_id),
        current_step=result.current_step.value if result.current_step else None,
        outcome=result.outcome.value if result.outcome else None,
    )


@router.get(
    "/conversations/{conversation_id}",
    response_model=ConversationResponse,
    summary="Get committed conversation state",
)
async def get_conversation(
    conversation_id: str,
    store: ConversationStateStore = Depends(get_state_store),
) -> ConversationResponse:
    state = await store.load(conversation_id)
    if state is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Conversation {conversation_id} not found",
        )

    return ConversationResponse(
        conversation_id=conversation_id,
        profile=state.profile.to_dict(),
        dialog=state.dialog.to_dict(),
    )
