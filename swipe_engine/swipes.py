"""
swipe_engine/swipes.py - the swipe ledger.

One decision per (actor, target), never updated, never deleted except by the
user cascade. A second decision comes back as DuplicateSwipe, which callers
treat as "already decided, move on".
"""
import logging
from typing import Optional, Set, Union

from . import database
from .errors import DuplicateSwipe, NotFound, ValidationError
from .models import Action, Profile, Swipe, User

log = logging.getLogger(__name__)


def parse_action(action: Union[Action, str]) -> Action:
    try:
        return Action(action)
    except ValueError:
        raise ValidationError(f"action must be 'like' or 'pass', got {action!r}") from None


def _actor_id(actor: Union[User, Profile, int]) -> int:
    if isinstance(actor, User):
        return actor.id
    if isinstance(actor, Profile):
        return actor.user_id
    return int(actor)


async def create_swipe(actor: Union[User, Profile, int], target_id: int, action: Union[Action, str]) -> Swipe:
    """Record actor's decision about target_id durably and return it.

    Raises ValidationError (self-swipe, unknown action), NotFound (target
    missing) or DuplicateSwipe when a decision already exists.
    """
    actor_id = _actor_id(actor)
    act = parse_action(action)
    if actor_id == target_id:
        raise ValidationError("cannot swipe on yourself")
    if not await database.user_exists(target_id):
        raise NotFound(f"user {target_id} not found")
    try:
        row = await database.insert_swipe(actor_id, target_id, act.value)
    except DuplicateSwipe as e:
        log.info("duplicate swipe %s -> %s ignored", actor_id, target_id)
        if isinstance(e.swipe, dict):
            e.swipe = Swipe(**e.swipe)
        raise
    log.info("swipe %s -> %s: %s", actor_id, target_id, act.value)
    return Swipe(**row)


async def check_for_match(actor_id: int, target_id: int) -> bool:
    """True iff target_id already liked actor_id.

    Call only after the actor's own like is stored.
    """
    return await database.has_liked(target_id, actor_id)


async def get_swipe(actor_id: int, target_id: int) -> Optional[Swipe]:
    row = await database.get_swipe(actor_id, target_id)
    return Swipe(**row) if row else None


async def has_swiped(actor_id: int, target_id: int) -> bool:
    return await database.get_swipe(actor_id, target_id) is not None


async def liked_by(user_id: int) -> Set[int]:
    return await database.liked_by(user_id)
