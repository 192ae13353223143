"""
Counseling Bot

Turn handler for the Gilgrimi counseling bot. One call to on_turn()
processes one inbound activity:

- conversationUpdate: welcome each member who joined (except the bot)
- message: classify, apply the priority escalation rule, then feed
  the message to the risk assessment dialog and persist its state
- anything else: acknowledge the activity type

ARCHITECTURE: Turns for the same conversation are serialized with a
per-conversation lock. State is staged in the store and committed only
after the whole turn succeeded; a failed or cancelled turn leaves the
previously committed state untouched.
"""

import asyncio
import time
import weakref
from dataclasses import dataclass
from typing import Optional

from gilgrimi.domain.enums.dialog import DialogOutcome, DialogStep
from gilgrimi.domain.models.activity import Activity
from gilgrimi.infrastructure.metrics import track_priority_escalation, track_turn
from gilgrimi.infrastructure.monitoring import capture_safety_event
from gilgrimi.infrastructure.nlu.classifier import IntentClassifier
from gilgrimi.infrastructure.state.state_store import ConversationStateStore
from gilgrimi.services.bot.message_sink import MessageSink
from gilgrimi.services.dialog import messages
from gilgrimi.services.dialog.risk_assessment_dialog import RiskAssessmentDialog
from gilgrimi.services.safety.priority_escalation import PriorityEscalationRule
from gilgrimi.config.logging_config import bind_conversation_id, get_logger

logger = get_logger(__name__)


@dataclass
class TurnResult:
    """
    Summary of a processed activity.

    Attributes:
        conversation_id: Conversation the activity belonged to
        activity_type: Inbound activity type
        reply_count: Number of replies sent
        current_step: Step awaiting the next message (None = idle)
        outcome: Dialog outcome, if the dialog ended this turn
        priority_escalated: Whether the priority rule fired
    """

    conversation_id: str
    activity_type: str
    reply_count: int = 0
    current_step: Optional[DialogStep] = None
    outcome: Optional[DialogOutcome] = None
    priority_escalated: bool = False


class CounselingBot:
    """
    Counseling bot turn handler.

    Usage:
        bot = CounselingBot(classifier, store, dialog, priority_rule)
        sink = BufferedMessageSink()
        result = await bot.on_turn(activity, sink)
    """

    def __init__(
        self,
        classifier: IntentClassifier,
        state_store: ConversationStateStore,
        dialog: Optional[RiskAssessmentDialog] = None,
        priority_rule: Optional[PriorityEscalationRule] = None,
        bot_id: str = "gilgrimi",
    ) -> None:
        """
        Initialize bot.

        Args:
            classifier: Intent recognizer for user messages
            state_store: Conversation state storage
            dialog: Risk assessment dialog
            priority_rule: Standing crisis referral rule
            bot_id: Channel account id of the bot itself
        """
        self.classifier = classifier
        self.state_store = state_store
        self.dialog = dialog or RiskAssessmentDialog()
        self.priority_rule = priority_rule or PriorityEscalationRule()
        self.bot_id = bot_id
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    def _lock_for(self, conversation_id: str) -> asyncio.Lock:
        lock = self._locks.get(conversation_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[conversation_id] = lock
        return lock

    async def on_turn(self, activity: Activity, sink: MessageSink) -> TurnResult:
        """
        Process one inbound activity.

        Raises:
            StateStoreError: If conversation state cannot be loaded or saved
        """
        start_time = time.perf_counter()
        status = "error"
        bind_conversation_id(activity.conversation_id)

        try:
            if activity.is_message:
                lock = self._lock_for(activity.conversation_id)
                async with lock:
                    result = await self._on_message(activity, sink)
            elif activity.is_conversation_update:
                result = await self._on_members_added(activity, sink)
            else:
                result = await self._on_other_activity(activity, sink)
            status = "success"
            return result
        finally:
            track_turn(activity.type, status, time.perf_counter() - start_time)

    async def _on_members_added(self, activity: Activity, sink: MessageSink) -> TurnResult:
        result = TurnResult(conversation_id=activity.conversation_id, activity_type=activity.type)
        own_ids = {self.bot_id, activity.recipient_id}

        for member in activity.members_added:
            if member.id in own_ids:
                continue
            await sink.send(activity.conversation_id, messages.WELCOME_TEXT)
            result.reply_count += 1

        logger.info("Members added", welcomed=result.reply_count)
        return result

    async def _on_other_activity(self, activity: Activity, sink: MessageSink) -> TurnResult:
        await sink.send(
            activity.conversation_id,
            messages.ACTIVITY_DETECTED_TEMPLATE.format(activity_type=activity.type),
        )
        return TurnResult(
            conversation_id=activity.conversation_id,
            activity_type=activity.type,
            reply_count=1,
        )

    async def _on_message(self, activity: Activity, sink: MessageSink) -> TurnResult:
        cid = activity.conversation_id
        utterance = activity.text or ""
        result = TurnResult(conversation_id=cid, activity_type=activity.type)

        intent = await self.classifier.classify(utterance)

        # Runs on every message, before the dialog step
        escalation = self.priority_rule.check(intent)
        if escalation is not None:
            track_priority_escalation()
            capture_safety_event(
                "Priority danger escalation",
                extra={"confidence": round(escalation.confidence, 3)},
            )
            for text in escalation.messages:
                await sink.send(cid, text)
            result.priority_escalated = True
            result.reply_count += len(escalation.messages)

        try:
            profile = await self.state_store.get_profile(cid)
            state = await self.state_store.get_dialog_state(cid)

            turn = self.dialog.continue_dialog(state, profile, intent, utterance)

            for text in turn.messages:
                await sink.send(cid, text)

            await self.state_store.set_profile(cid, turn.profile)
            await self.state_store.set_dialog_state(cid, turn.state)
            await self.state_store.save_changes(cid)
        except BaseException:
            # Includes cancellation
            self.state_store.discard(cid)
            raise

        if turn.outcome is not None and turn.outcome.is_escalation:
            capture_safety_event(
                "Risk assessment escalated",
                extra={"outcome": turn.outcome.value, "suicidal_risk": turn.profile.suicidal_risk},
            )

        result.reply_count += len(turn.messages)
        result.current_step = turn.state.current_step
        result.outcome = turn.outcome

        logger.info(
            "Message turn processed",
            intent=intent.label or "none",
            confidence=round(intent.confidence, 3),
            **turn.to_dict(),
        )
        return result
