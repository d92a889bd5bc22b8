"""
swipe_engine/messaging.py - one conversation per match, plain text messages.

The conversation is created by the store together with its match and goes
away with it, so unmatching (or deleting either user) drops the history.
Only the two participants can read or write; a block between them closes
the conversation for sending while the match row still exists.
"""
import logging
from typing import Dict, List

from . import database
from .errors import NotFound, ValidationError
from .matches import get_match
from .models import Conversation, Message

log = logging.getLogger(__name__)

MAX_CONTENT_LENGTH = 2000
HISTORY_LIMIT = 50


async def get_conversation(user_id: int, match_id: int) -> Conversation:
    await get_match(user_id, match_id)
    row = await database.get_conversation(match_id)
    if row is None:
        raise NotFound(f"conversation for match {match_id} not found")
    return Conversation(**row)


async def send_message(sender_id: int, match_id: int, content: str) -> Message:
    text = (content or "").strip()
    if not text:
        raise ValidationError("message is empty")
    if len(text) > MAX_CONTENT_LENGTH:
        raise ValidationError(f"message is longer than {MAX_CONTENT_LENGTH} characters")
    match = await get_match(sender_id, match_id)
    if await database.is_blocked_between(sender_id, match.other(sender_id)):
        raise ValidationError("conversation is closed")
    conv = await get_conversation(sender_id, match_id)
    row = await database.insert_message(conv.id, sender_id, text)
    log.debug("message %s in match %s from %s", row["id"], match_id, sender_id)
    return Message(**row)


async def list_messages(user_id: int, match_id: int, limit: int = HISTORY_LIMIT) -> List[Message]:
    """Latest `limit` messages, oldest first."""
    conv = await get_conversation(user_id, match_id)
    return [Message(**r) for r in await database.list_messages(conv.id, limit)]


async def mark_read(user_id: int, match_id: int) -> int:
    """Mark the partner's messages read; returns how many changed."""
    conv = await get_conversation(user_id, match_id)
    return await database.mark_read(conv.id, user_id)


async def unread_counts(user_id: int) -> Dict[int, int]:
    """match_id -> unread messages from the partner."""
    return await database.unread_counts(user_id)
