"""
swipe_engine/session.py - per-user discovery session (interaction controller).

States:
  idle         no current candidate
  presenting   a candidate is shown and a swipe is accepted
  swiping      a swipe is in flight; further swipes are dropped
  match_modal  a match notification is shown; dismiss before swiping again

The candidate queue is computed once at session start and drained one
element per resolved swipe; it is never re-queried mid-session.
A store failure leaves the session exactly where it was so the same action
can be retried.
"""
import logging
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from . import discovery, matches, swipes
from .errors import AlreadyExists, DuplicateSwipe, NotFound, ProfileIncomplete
from .models import Action, Match, Profile
from .profiles import get_profile

log = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    PRESENTING = "presenting"
    SWIPING = "swiping"
    MATCH_MODAL = "match_modal"


class SwipeOutcome(str, Enum):
    DROPPED = "dropped"      # guard rejected the request, nothing stored
    ADVANCED = "advanced"    # swipe stored, no match
    MATCHED = "matched"      # swipe stored and a match surfaced
    SKIPPED = "skipped"      # already decided or target gone; advanced anyway


class CandidateQueue:
    """Immutable snapshot of candidates plus a read offset."""

    def __init__(self, candidates: Sequence[Profile]):
        self._items: Tuple[Profile, ...] = tuple(candidates)
        self._offset = 0

    @property
    def head(self) -> Optional[Profile]:
        if self._offset < len(self._items):
            return self._items[self._offset]
        return None

    def advance(self) -> Optional[Profile]:
        if self._offset < len(self._items):
            self._offset += 1
        return self.head

    def remaining(self) -> List[Profile]:
        return list(self._items[self._offset:])

    def __len__(self) -> int:
        return len(self._items) - self._offset


class MatchNotification:
    __slots__ = ("match", "profile")

    def __init__(self, match: Match, profile: Profile):
        self.match = match
        self.profile = profile

    def __repr__(self):
        return f"MatchNotification(match_id={self.match.id}, user_id={self.profile.user_id})"


class DiscoverySession:
    def __init__(self, user: Profile, candidates: Sequence[Profile]):
        self.user = user
        self.queue = CandidateQueue(candidates)
        self._swiping = False
        self._match: Optional[MatchNotification] = None
        self._expanded = False

    @classmethod
    async def begin(cls, user_id: int, *, filters=None, ordering=None, limit=None) -> "DiscoverySession":
        me = await get_profile(user_id)
        if not me.is_complete:
            raise ProfileIncomplete(user_id, me.missing_fields())
        candidates = await discovery.get_candidates(me, filters=filters, ordering=ordering, limit=limit)
        session = cls(me, candidates)
        log.debug("session %s started with %d candidates", user_id, len(candidates))
        return session

    # --- exposed state ---
    @property
    def state(self) -> SessionState:
        if self._swiping:
            return SessionState.SWIPING
        if self._match is not None:
            return SessionState.MATCH_MODAL
        if self.queue.head is not None:
            return SessionState.PRESENTING
        return SessionState.IDLE

    @property
    def current_candidate(self) -> Optional[Profile]:
        return self.queue.head

    @property
    def is_swipe_pending(self) -> bool:
        return self._swiping

    @property
    def match_notification(self) -> Optional[MatchNotification]:
        return self._match

    @property
    def detail_expanded(self) -> bool:
        return self._expanded

    # --- commands ---
    async def submit_swipe(self, action: Union[Action, str]) -> SwipeOutcome:
        act = swipes.parse_action(action)
        if self.state is not SessionState.PRESENTING:
            log.debug("swipe dropped for %s in state %s", self.user.user_id, self.state.value)
            return SwipeOutcome.DROPPED
        candidate = self.queue.head
        self._swiping = True
        try:
            outcome = await self._resolve(candidate, act)
        finally:
            self._swiping = False
        self._advance()
        return outcome

    def dismiss_match_notification(self) -> None:
        self._match = None

    def toggle_detail_view(self) -> bool:
        if self.queue.head is not None:
            self._expanded = not self._expanded
        return self._expanded

    # --- internals ---
    async def _resolve(self, candidate: Profile, act: Action) -> SwipeOutcome:
        me = self.user.user_id
        try:
            await swipes.create_swipe(me, candidate.user_id, act)
        except DuplicateSwipe as e:
            stored = e.swipe
            if stored is not None and stored.action is Action.LIKE and await self._finish_pending_match(candidate):
                return SwipeOutcome.MATCHED
            return SwipeOutcome.SKIPPED
        except NotFound:
            log.info("candidate %s vanished, skipping", candidate.user_id)
            return SwipeOutcome.SKIPPED

        if act is Action.LIKE and await swipes.check_for_match(me, candidate.user_id):
            match = await matches.resolve_match(me, candidate.user_id)
            self._match = MatchNotification(match, candidate)
            return SwipeOutcome.MATCHED
        return SwipeOutcome.ADVANCED

    async def _finish_pending_match(self, candidate: Profile) -> bool:
        # an earlier like may have been stored without its match (store failed in between)
        me = self.user.user_id
        if not await swipes.check_for_match(me, candidate.user_id):
            return False
        try:
            match = await matches.create_match(me, candidate.user_id)
        except AlreadyExists:
            return False
        self._match = MatchNotification(match, candidate)
        return True

    def _advance(self) -> None:
        self.queue.advance()
        self._expanded = False


async def begin_session(user_id: int, **kwargs) -> DiscoverySession:
    return await DiscoverySession.begin(user_id, **kwargs)
