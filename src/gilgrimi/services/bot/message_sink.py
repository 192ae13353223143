"""
Message Sink

Outbound side of a turn. The bot never returns replies directly;
it sends them, in order, to a sink supplied by the caller.
"""

from abc import ABC, abstractmethod


class MessageSink(ABC):
    """Delivers bot replies to a conversation."""

    @abstractmethod
    async def send(self, conversation_id: str, text: str) -> None:
        pass


class BufferedMessageSink(MessageSink):
    """
    Collects replies for a synchronous HTTP response.

    Usage:
        sink = BufferedMessageSink()
        await bot.on_turn(activity, sink)
        return sink.replies_for(activity.conversation_id)
    """

    def __init__(self) -> None:
        self._sent: list[tuple[str, str]] = []

    async def send(self, conversation_id: str, text: str) -> None:
        self._sent.append((conversation_id, text))

    @property
    def replies(self) -> list[str]:
        return [text for _, text in self._sent]

    def replies_for(self, conversation_id: str) -> list[str]:
        return [text for cid, text in self._sent if cid == conversation_id]

    def clear(self) -> None:
        self._sent.clear()
