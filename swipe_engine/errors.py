# swipe_engine/errors.py - typed failures raised by the engine
from typing import List, Optional


class EngineError(Exception):
    """Base for every failure the engine surfaces to callers."""


class ValidationError(EngineError):
    pass


class ProfileIncomplete(ValidationError):
    def __init__(self, user_id: int, missing: List[str]):
        self.user_id = user_id
        self.missing = list(missing)
        super().__init__(f"profile {user_id} is incomplete: {', '.join(self.missing)}")


class Conflict(EngineError):
    """Expected outcome: the decision or record already exists."""


class DuplicateSwipe(Conflict):
    def __init__(self, actor_id: int, target_id: int, swipe=None):
        self.actor_id = actor_id
        self.target_id = target_id
        self.swipe = swipe
        super().__init__(f"user {actor_id} already swiped on {target_id}")


class AlreadyExists(Conflict):
    def __init__(self, user_a_id: int, user_b_id: int, match=None):
        self.user_a_id = user_a_id
        self.user_b_id = user_b_id
        self.match = match
        super().__init__(f"match {user_a_id}<->{user_b_id} already exists")


class DuplicateBlock(Conflict):
    pass


class NotFound(EngineError):
    pass


class StoreUnavailable(EngineError):
    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)
