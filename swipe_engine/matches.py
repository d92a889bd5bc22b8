# swipe_engine/matches.py - match resolver: one row per unordered pair, idempotent under races
import logging
from typing import List

from . import database
from .errors import AlreadyExists, NotFound, ValidationError
from .models import Match

log = logging.getLogger(__name__)


async def create_match(user_a_id: int, user_b_id: int) -> Match:
    """Store the match for the pair; AlreadyExists on the second attempt."""
    if user_a_id == user_b_id:
        raise ValidationError("cannot match a user with themselves")
    a, b = Match.canonical_pair(user_a_id, user_b_id)
    try:
        row = await database.insert_match(a, b)
    except AlreadyExists as e:
        if isinstance(e.match, dict):
            e.match = Match(**e.match)
        raise
    log.info("match created %s <-> %s", a, b)
    return Match(**row)


async def resolve_match(user_a_id: int, user_b_id: int) -> Match:
    """create_match that treats a concurrent/earlier insert as success."""
    try:
        return await create_match(user_a_id, user_b_id)
    except AlreadyExists as e:
        log.info("match %s <-> %s already existed", e.user_a_id, e.user_b_id)
        if e.match is not None:
            return e.match
        row = await database.get_match_between(e.user_a_id, e.user_b_id)
        if row is None:
            # unmatched between the failed insert and the lookup
            raise NotFound(f"match {e.user_a_id}<->{e.user_b_id} vanished") from e
        return Match(**row)


async def list_matches(user_id: int) -> List[Match]:
    return [Match(**r) for r in await database.list_matches(user_id)]


async def get_match(user_id: int, match_id: int) -> Match:
    row = await database.get_match(match_id)
    if row is None or user_id not in (row["user_a_id"], row["user_b_id"]):
        raise NotFound(f"match {match_id} not found")
    return Match(**row)


async def unmatch(user_id: int, match_id: int) -> None:
    match = await get_match(user_id, match_id)
    await database.delete_match(match.id)
    log.info("match %s removed by %s", match.id, user_id)
