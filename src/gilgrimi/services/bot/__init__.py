"""Bot services package - turn handling and reply delivery."""

from gilgrimi.services.bot.message_sink import BufferedMessageSink, MessageSink
from gilgrimi.services.bot.counseling_bot import CounselingBot, TurnResult

__all__ = [
    "BufferedMessageSink",
    "MessageSink",
    "CounselingBot",
    "TurnResult",
]
