from datetime import date

from aiogram import Router, types
from aiogram.filters import Command

from config import ADMIN_ID, DEBUG_DISCOVERY
from swipe_engine import Action, DuplicateSwipe, NotFound, Profile, create_swipe, get_profile, save_profile

router_dev = Router(name="dev-router")

DEMO_OFFSET = 999_000
DEMO_PROFILES = [
    dict(first_name="Alice", gender="female", birthdate=date(1996, 4, 2), city="Lisbon", country="pt",
         interests="hiking,jazz", languages="en,pt"),
    dict(first_name="Bob", gender="male", birthdate=date(1993, 9, 17), city="Berlin", country="de",
         interests="climbing,coffee", languages="en,de"),
    dict(first_name="Chloe", gender="female", birthdate=date(1999, 1, 25), city="Paris", country="fr",
         interests="jazz,cinema", languages="fr,en"),
    dict(first_name="Dmitri", gender="male", birthdate=date(1990, 12, 8), city="Riga", country="lv",
         interests="chess,cinema", languages="ru,en"),
    dict(first_name="Eve", gender="other", birthdate=date(1995, 6, 30), city="Oslo", country="no",
         interests="coffee,hiking", languages="en,no"),
]


# defaults for whatever the admin's own profile still lacks
ADMIN_DEFAULTS = dict(first_name="Admin", birthdate=date(1994, 3, 14), gender="other", preferred_gender="any")


def is_dev(message: types.Message) -> bool:
    return DEBUG_DISCOVERY and message.from_user.id == ADMIN_ID


def demo_ids(base: int) -> list[int]:
    return [base + DEMO_OFFSET + i for i in range(1, len(DEMO_PROFILES) + 1)]


async def complete_admin(admin_id: int) -> Profile:
    """Fill only the admin's blank fields so /discover works right after /start."""
    try:
        me = await get_profile(admin_id)
    except NotFound:
        me = Profile(user_id=admin_id)
    fields = {k: v for k, v in ADMIN_DEFAULTS.items() if not getattr(me, k)}
    if not me.photo:
        fields["photo"] = f"https://picsum.photos/seed/{admin_id}/400"
    return await save_profile(admin_id, **fields)


async def seed_demo(admin_id: int) -> list[int]:
    """Create the demo profiles; every other one has already liked the admin."""
    ids = demo_ids(admin_id)
    await complete_admin(admin_id)
    for i, (uid, fields) in enumerate(zip(ids, DEMO_PROFILES)):
        await save_profile(uid, photo=f"https://picsum.photos/seed/{uid}/400", **fields)
        if i % 2 == 0:
            try:
                await create_swipe(uid, admin_id, Action.LIKE)
            except DuplicateSwipe:
                pass
    return ids


@router_dev.message(Command("dev_seed"))
async def dev_seed(message: types.Message):
    if not is_dev(message): return
    ids = await seed_demo(message.from_user.id)
    await message.answer(f"🌱 Seeded {len(ids)} demo profiles (DEV). /discover")
