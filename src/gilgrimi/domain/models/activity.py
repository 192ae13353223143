"""
Activity Model

Incoming channel activity, as posted to the messages endpoint.
"""

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ActivityType(StrEnum):
    """Activity types the bot distinguishes."""

    MESSAGE = "message"
    CONVERSATION_UPDATE = "conversationUpdate"


class ChannelAccount(BaseModel):
    """A participant in the conversation."""

    id: str = Field(..., min_length=1)
    name: Optional[str] = None


class Activity(BaseModel):
    """
    A single inbound activity.

    Only the fields the bot reads are modelled; unknown
    fields are ignored.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    type: str = Field(..., min_length=1, description="Activity type")
    conversation_id: str = Field(..., min_length=1, max_length=256)
    text: Optional[str] = Field(default=None, max_length=4000)
    from_id: Optional[str] = Field(default=None, alias="from")
    recipient_id: Optional[str] = Field(default=None, alias="recipient")
    members_added: list[ChannelAccount] = Field(default_factory=list)

    @property
    def is_message(self) -> bool:
        return self.type == ActivityType.MESSAGE

    @property
    def is_conversation_update(self) -> bool:
        return self.type == ActivityType.CONVERSATION_UPDATE
