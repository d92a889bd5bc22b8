# swipe_engine/profiles.py - read side of the profile store (+ upsert seam for the profile owner)
import logging
from datetime import date
from typing import Any, Dict, Optional

from . import database
from .errors import NotFound, ValidationError
from .models import GENDER_OPTIONS, PREFERRED_GENDER_OPTIONS, Profile, User, csv_list

log = logging.getLogger(__name__)

AGE_BOUNDS = (18, 100)

# names accepted after /set -> store column ("age" sets both bounds)
EDITABLE_FIELDS = {
    "name": "first_name",
    "last_name": "last_name",
    "birthdate": "birthdate",
    "gender": "gender",
    "looking_for": "preferred_gender",
    "age": "preferred_age",
    "bio": "bio",
    "city": "city",
    "country": "country",
    "religion": "religion",
    "interests": "interests",
    "languages": "languages",
}


def _birthdate(v: Any) -> Optional[str]:
    if v is None:
        return None
    if not isinstance(v, date):
        raw = str(v).strip()
        if not raw:
            return None
        try:
            v = date.fromisoformat(raw)
        except ValueError:
            raise ValidationError(f"birthdate must be YYYY-MM-DD, got {raw!r}") from None
    if v > date.today():
        raise ValidationError("birthdate is in the future")
    return v.isoformat()


def _age_bound(name: str, v: Any) -> Optional[int]:
    if v is None or (isinstance(v, str) and not v.strip()):
        return None
    if isinstance(v, bool):
        raise ValidationError(f"{name} must be a whole number")
    try:
        n = int(v)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a whole number, got {v!r}") from None
    lo, hi = AGE_BOUNDS
    if not lo <= n <= hi:
        raise ValidationError(f"{name} must be between {lo} and {hi}")
    return n


def _to_store(fields: Dict[str, Any]) -> Dict[str, Any]:
    # every value leaves here in the exact shape Profile.from_row reads back
    out = {}
    for k, v in fields.items():
        if k in ("interests", "languages"):
            v = ",".join(csv_list(v))
        elif k == "birthdate":
            v = _birthdate(v)
        elif k in ("preferred_age_min", "preferred_age_max"):
            v = _age_bound(k, v)
        elif isinstance(v, str):
            v = v.strip() or None
        elif v is not None:
            raise ValidationError(f"{k} must be text")
        if k in ("gender", "preferred_gender") and v:
            v = v.lower()
        out[k] = v
    gender = out.get("gender")
    if gender and gender not in GENDER_OPTIONS:
        raise ValidationError(f"gender must be one of {', '.join(GENDER_OPTIONS)}")
    pref = out.get("preferred_gender")
    if pref and pref not in PREFERRED_GENDER_OPTIONS:
        raise ValidationError(f"preferred_gender must be one of {', '.join(PREFERRED_GENDER_OPTIONS)}")
    lo, hi = out.get("preferred_age_min"), out.get("preferred_age_max")
    if lo is not None and hi is not None and lo > hi:
        raise ValidationError("preferred_age_min must not exceed preferred_age_max")
    return out


def parse_profile_edit(args: Optional[str]) -> Dict[str, Any]:
    """Turn '<field> <value>' as typed after /set into save_profile kwargs.

    'age 25-35' sets both bounds; a field with no value clears it.
    Values are only split here, save_profile does the checking.
    """
    name, _, value = (args or "").strip().partition(" ")
    column = EDITABLE_FIELDS.get(name.lower())
    if column is None:
        raise ValidationError(f"unknown field {name!r}")
    value = value.strip()
    if column == "preferred_age":
        if not value:
            return {"preferred_age_min": None, "preferred_age_max": None}
        lo, sep, hi = value.partition("-")
        if not sep:
            raise ValidationError("age range must look like 25-35")
        return {"preferred_age_min": lo.strip(), "preferred_age_max": hi.strip()}
    return {column: value or None}


async def save_profile(user_id: int, **fields) -> Profile:
    """Insert or update a profile; only the given attributes change.

    Values are checked and converted before the store is touched, so a bad
    birthdate or age bound raises ValidationError and writes nothing.
    """
    await database.save_user(user_id, **_to_store(fields))
    return await get_profile(user_id)


async def get_user(user_id: int) -> User:
    row = await database.get_user(user_id)
    if row is None:
        raise NotFound(f"user {user_id} not found")
    return User.from_row(row)


async def get_profile(user_id: int) -> Profile:
    row = await database.get_user(user_id)
    if row is None:
        raise NotFound(f"profile {user_id} not found")
    return Profile.from_row(row)


async def delete_user(user_id: int) -> None:
    """Remove the user; swipes, blocks, matches and their conversations go with it."""
    if not await database.delete_user(user_id):
        raise NotFound(f"user {user_id} not found")
    log.info("user %s deleted", user_id)
