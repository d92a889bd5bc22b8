"""Shared helpers for the engine tests."""
import asyncio
from datetime import date

from swipe_engine.profiles import save_profile

COMPLETE_PROFILE = dict(
    birthdate=date(1995, 5, 5),
    gender="female",
    preferred_gender="any",
    photo="https://example.org/p.jpg",
)


def run(coro):
    """Drive one engine coroutine to completion."""
    return asyncio.run(coro)


async def make_profile(user_id: int, **overrides):
    """Helper to create a complete profile (override any field, None to blank it)."""
    fields = dict(COMPLETE_PROFILE, first_name=f"User{user_id}")
    fields.update(overrides)
    return await save_profile(user_id, **fields)


def make_profiles(*user_ids: int, **overrides):
    async def _all():
        return [await make_profile(uid, **overrides) for uid in user_ids]
    return run(_all())
