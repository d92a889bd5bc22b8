"""
swipe_engine/models.py - records exchanged between the store and the engine.

Store rows come back as dicts; every public engine call hands out these
pydantic models instead. List attributes (interests, languages) live in the
store as lower-cased comma separated text and are split on the way in.
"""
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator


class Action(str, Enum):
    LIKE = "like"
    PASS = "pass"


GENDER_OPTIONS = ("male", "female", "other")
PREFERRED_GENDER_OPTIONS = GENDER_OPTIONS + ("any",)

# (attribute, label) pairs a profile needs before it can discover or be shown
REQUIRED_PROFILE_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("photo", "Photo"),
    ("first_name", "First name"),
    ("birthdate", "Birthdate"),
    ("gender", "Gender"),
)


def csv_list(raw: Any) -> List[str]:
    if not raw:
        return []
    if isinstance(raw, str):
        items = [x.strip().lower() for x in raw.split(",")]
    else:
        items = [str(x).strip().lower() for x in raw]
    return [x for x in items if x]


def age_on(birthdate: date, today: Optional[date] = None) -> int:
    today = today or datetime.now(timezone.utc).date()
    years = today.year - birthdate.year
    if (today.month, today.day) < (birthdate.month, birthdate.day):
        years -= 1
    return years


class Profile(BaseModel):
    user_id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    birthdate: Optional[date] = None
    gender: Optional[str] = None
    preferred_gender: str = "any"
    preferred_age_min: Optional[int] = None
    preferred_age_max: Optional[int] = None
    photo: Optional[str] = None
    bio: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    religion: Optional[str] = None
    interests: List[str] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=list)
    updated_at: Optional[datetime] = None

    @field_validator("interests", "languages", mode="before")
    @classmethod
    def _split_csv(cls, v):
        return csv_list(v)

    @field_validator("gender", "preferred_gender", mode="before")
    @classmethod
    def _lower(cls, v):
        return v.strip().lower() if isinstance(v, str) and v.strip() else v

    @field_validator("preferred_gender", mode="before")
    @classmethod
    def _default_any(cls, v):
        return v or "any"

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Profile":
        return cls(**{k: v for k, v in row.items() if k in cls.model_fields})

    def missing_fields(self) -> List[str]:
        return [label for attr, label in REQUIRED_PROFILE_FIELDS if not getattr(self, attr)]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    @property
    def age(self) -> Optional[int]:
        return age_on(self.birthdate) if self.birthdate else None


class User(BaseModel):
    id: int
    created_at: datetime
    profile_complete: bool = False

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "User":
        return cls(
            id=row["user_id"],
            created_at=row["created_at"],
            profile_complete=Profile.from_row(row).is_complete,
        )


class Swipe(BaseModel):
    id: int
    actor_id: int
    target_id: int
    action: Action
    created_at: datetime


class Match(BaseModel):
    id: int
    user_a_id: int
    user_b_id: int
    created_at: datetime

    @staticmethod
    def canonical_pair(a: int, b: int) -> Tuple[int, int]:
        return (a, b) if a < b else (b, a)

    def involves(self, user_id: int) -> bool:
        return user_id in (self.user_a_id, self.user_b_id)

    def other(self, user_id: int) -> int:
        return self.user_b_id if user_id == self.user_a_id else self.user_a_id


class Block(BaseModel):
    id: int
    blocker_id: int
    blocked_id: int
    created_at: datetime


class Conversation(BaseModel):
    id: int
    match_id: int
    created_at: datetime


class Message(BaseModel):
    id: int
    conversation_id: int
    sender_id: int
    content: str
    read_at: Optional[datetime] = None
    created_at: datetime

    @property
    def is_read(self) -> bool:
        return self.read_at is not None
