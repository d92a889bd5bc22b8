# swipe_engine - discovery, swipe ledger, match resolver, match chat and per-user sessions
from .database import init_db, close_db, get_stats
from .errors import (
    EngineError, ValidationError, ProfileIncomplete,
    Conflict, DuplicateSwipe, AlreadyExists, DuplicateBlock,
    NotFound, StoreUnavailable,
)
from .models import Action, Profile, User, Swipe, Match, Block, Conversation, Message
from .profiles import save_profile, get_user, get_profile, delete_user, parse_profile_edit
from .swipes import create_swipe, check_for_match, get_swipe, has_swiped, liked_by
from .matches import create_match, resolve_match, list_matches, get_match, unmatch
from .blocks import block_user, unblock_user, list_blocked, is_blocked_between
from .messaging import get_conversation, send_message, list_messages, mark_read, unread_counts
from .discovery import get_candidates, get_ordering, by_id, ScoredOrdering, DEFAULT_FILTERS
from .session import (
    DiscoverySession, SessionState, SwipeOutcome, CandidateQueue,
    MatchNotification, begin_session,
)

__all__ = [
    "init_db", "close_db", "get_stats",
    "EngineError", "ValidationError", "ProfileIncomplete",
    "Conflict", "DuplicateSwipe", "AlreadyExists", "DuplicateBlock",
    "NotFound", "StoreUnavailable",
    "Action", "Profile", "User", "Swipe", "Match", "Block", "Conversation", "Message",
    "save_profile", "get_user", "get_profile", "delete_user", "parse_profile_edit",
    "create_swipe", "check_for_match", "get_swipe", "has_swiped", "liked_by",
    "create_match", "resolve_match", "list_matches", "get_match", "unmatch",
    "block_user", "unblock_user", "list_blocked", "is_blocked_between",
    "get_conversation", "send_message", "list_messages", "mark_read", "unread_counts",
    "get_candidates", "get_ordering", "by_id", "ScoredOrdering", "DEFAULT_FILTERS",
    "DiscoverySession", "SessionState", "SwipeOutcome", "CandidateQueue",
    "MatchNotification", "begin_session",
]
