# swipe_engine/blocks.py - one-way blocks; discovery hides the pair in both directions
import logging
from typing import List

from . import database
from .errors import NotFound, ValidationError
from .models import Block

log = logging.getLogger(__name__)


async def block_user(blocker_id: int, blocked_id: int) -> Block:
    if blocker_id == blocked_id:
        raise ValidationError("cannot block yourself")
    if not await database.user_exists(blocked_id):
        raise NotFound(f"user {blocked_id} not found")
    row = await database.insert_block(blocker_id, blocked_id)
    log.info("user %s blocked %s", blocker_id, blocked_id)
    return Block(**row)


async def unblock_user(blocker_id: int, blocked_id: int) -> bool:
    removed = await database.delete_block(blocker_id, blocked_id)
    if removed:
        log.info("user %s unblocked %s", blocker_id, blocked_id)
    return removed


async def list_blocked(blocker_id: int) -> List[int]:
    return await database.list_blocked(blocker_id)


async def is_blocked_between(a: int, b: int) -> bool:
    return await database.is_blocked_between(a, b)
