# swipe_engine/discovery.py
# Candidate selection: store-side hard filters, in-process filters, pluggable ordering

import logging
import os
import random
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence, Set, Union

from pydantic import ValidationError as PydanticValidationError

from . import database
from .models import Profile, age_on
from .profiles import get_profile

log = logging.getLogger(__name__)

DISCOVERY_LIMIT = int(os.getenv("DISCOVERY_LIMIT", "20"))
DISCOVERY_ORDERING = os.getenv("DISCOVERY_ORDERING", "id")

Filter = Callable[[Profile, Profile], bool]
Ordering = Callable[[Profile, List[Profile], Set[int]], List[Profile]]


# ---------- filters ----------
def mutual_gender_filter() -> Filter:
    def _f(me: Profile, cand: Profile) -> bool:
        wants = me.preferred_gender or "any"
        if wants != "any" and cand.gender != wants:
            return False
        theirs = cand.preferred_gender or "any"
        return theirs == "any" or theirs == me.gender
    return _f


def age_range_filter() -> Filter:
    # strict variant of score_age; not in DEFAULT_FILTERS
    def _f(me: Profile, cand: Profile) -> bool:
        if cand.age is None:
            return False
        lo = me.preferred_age_min or 18
        hi = me.preferred_age_max or 100
        return lo <= cand.age <= hi
    return _f


DEFAULT_FILTERS: List[Filter] = [
    mutual_gender_filter(),
]


# ---------- soft scoring ----------
WEIGHTS: Dict[str, float] = {
    "age": 0.30,
    "country": 0.20,
    "interests": 0.20,
    "languages": 0.10,
    "religion": 0.10,
    "freshness": 0.05,
    "liked_you": 0.05,
}
RANDOM_VARIANCE = 0.10


def score_age(birthdate, age_min: Optional[int], age_max: Optional[int], today=None) -> float:
    if birthdate is None:
        return 0.0
    age = age_on(birthdate, today)
    lo = age_min or 18
    hi = age_max or 100
    if lo <= age <= hi:
        return 1.0
    diff = lo - age if age < lo else age - hi
    return max(0.0, 1.0 - diff * 0.1)


def score_country(mine: Optional[str], theirs: Optional[str]) -> float:
    if not mine or not theirs:
        return 0.5
    return 1.0 if mine == theirs else 0.0


def score_interests(mine: Sequence[str], theirs: Sequence[str]) -> float:
    a, b = set(mine or []), set(theirs or [])
    if not a or not b:
        return 0.5
    return len(a & b) / len(a | b)


def score_languages(mine: Sequence[str], theirs: Sequence[str]) -> float:
    a, b = set(mine or []), set(theirs or [])
    if not a or not b:
        return 0.5
    shared = len(a & b)
    if shared >= 2:
        return 1.0
    return 0.75 if shared == 1 else 0.0


def score_religion(mine: Optional[str], theirs: Optional[str]) -> float:
    if not mine or not theirs or "prefer_not_to_say" in (mine, theirs):
        return 0.5
    return 1.0 if mine == theirs else 0.0


def score_freshness(updated_at: Optional[datetime], now: Optional[datetime] = None) -> float:
    if updated_at is None:
        return 0.5
    now = now or datetime.now(timezone.utc)
    days_old = (now - updated_at).days
    if days_old <= 1:
        return 1.0
    if days_old >= 30:
        return 0.0
    return 1.0 - days_old / 30.0


def calculate_score(me: Profile, cand: Profile, liked_you: bool = False,
                    rng: Optional[random.Random] = None, variance: float = RANDOM_VARIANCE) -> float:
    parts = {
        "age": score_age(cand.birthdate, me.preferred_age_min, me.preferred_age_max),
        "country": score_country(me.country, cand.country),
        "interests": score_interests(me.interests, cand.interests),
        "languages": score_languages(me.languages, cand.languages),
        "religion": score_religion(me.religion, cand.religion),
        "freshness": score_freshness(cand.updated_at),
        "liked_you": 1.0 if liked_you else 0.0,
    }
    base = sum(WEIGHTS[k] * v for k, v in parts.items())
    if rng is not None and variance:
        base += (rng.random() - 0.5) * 2 * variance
    return min(1.0, max(0.0, base))


# ---------- ordering strategies ----------
def by_id(me: Profile, candidates: List[Profile], liked_me: Set[int]) -> List[Profile]:
    return sorted(candidates, key=lambda c: c.user_id)


class ScoredOrdering:
    """Compatibility ranking; a fixed seed makes the variance reproducible."""

    def __init__(self, seed=None, variance: float = RANDOM_VARIANCE):
        self.seed = seed
        self.variance = variance

    def __call__(self, me: Profile, candidates: List[Profile], liked_me: Set[int]) -> List[Profile]:
        rng = random.Random(self.seed)
        scored = [
            (calculate_score(me, c, c.user_id in liked_me, rng, self.variance), c)
            for c in sorted(candidates, key=lambda c: c.user_id)
        ]
        scored.sort(key=lambda sc: (-sc[0], sc[1].user_id))
        return [c for _, c in scored]


ORDERINGS: Dict[str, Callable[[], Ordering]] = {
    "id": lambda: by_id,
    "score": ScoredOrdering,
}


def get_ordering(name: Optional[str] = None) -> Ordering:
    name = (name or DISCOVERY_ORDERING).strip().lower()
    try:
        return ORDERINGS[name]()
    except KeyError:
        raise ValueError(f"unknown discovery ordering: {name}") from None


# ---------- selector ----------
async def get_candidates(user: Union[Profile, int], *, filters: Optional[List[Filter]] = None,
                         ordering: Optional[Ordering] = None, limit: Optional[int] = None,
                         exclude_ids: Sequence[int] = ()) -> List[Profile]:
    """Ordered, eligible candidate profiles for `user`.

    Never contains the user, anyone they already swiped, anyone blocked in
    either direction or an incomplete profile.
    """
    me = user if isinstance(user, Profile) else await get_profile(user)
    filters = DEFAULT_FILTERS if filters is None else filters
    ordering = ordering or get_ordering()
    limit = DISCOVERY_LIMIT if limit is None else limit

    rows = await database.list_eligible(me.user_id, exclude_ids)
    pool = []
    for r in rows:
        try:
            pool.append(Profile.from_row(r))
        except PydanticValidationError as e:
            log.warning("discovery: skipping unreadable profile %s: %s", r.get("user_id"), e)
    pool = [c for c in pool if c.user_id != me.user_id and all(f(me, c) for f in filters)]
    liked_me = await database.liked_by(me.user_id)
    ordered = ordering(me, pool, liked_me)
    log.debug("discovery for %s: %d eligible, %d returned", me.user_id, len(pool), min(len(ordered), limit))
    return ordered[:limit]
