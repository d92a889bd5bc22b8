"""
Match resolver tests: one row per unordered pair, idempotence under races,
participant-only access.
"""
import asyncio

import pytest

from swipe_engine import matches, swipes
from swipe_engine.errors import AlreadyExists, NotFound, ValidationError
from tests.helpers import make_profiles, run


async def like_both_ways(first: int, second: int):
    await swipes.create_swipe(first, second, "like")
    await swipes.create_swipe(second, first, "like")
    assert await swipes.check_for_match(second, first)
    return await matches.resolve_match(second, first)


# ============================================================================
# create / resolve
# ============================================================================

class TestCreateMatch:

    @pytest.mark.parametrize("first,second", [(1, 2), (2, 1)])
    def test_mutual_like_yields_one_canonical_row(self, db, first, second):
        make_profiles(1, 2)
        m = run(like_both_ways(first, second))
        assert (m.user_a_id, m.user_b_id) == (1, 2)
        assert [x.id for x in run(matches.list_matches(1))] == [m.id]
        assert [x.id for x in run(matches.list_matches(2))] == [m.id]

    def test_one_sided_like_creates_nothing(self, db):
        make_profiles(1, 2)
        run(swipes.create_swipe(1, 2, "like"))
        assert run(matches.list_matches(1)) == []
        assert run(matches.list_matches(2)) == []

    def test_second_create_is_already_exists(self, db):
        make_profiles(1, 2)
        first = run(matches.create_match(2, 1))
        with pytest.raises(AlreadyExists) as exc:
            run(matches.create_match(1, 2))
        assert exc.value.match.id == first.id

    def test_self_match_rejected(self, db):
        make_profiles(1)
        with pytest.raises(ValidationError):
            run(matches.create_match(1, 1))

    def test_resolve_is_idempotent(self, db):
        make_profiles(1, 2)
        a = run(matches.resolve_match(1, 2))
        b = run(matches.resolve_match(2, 1))
        assert a.id == b.id

    def test_concurrent_resolves_store_one_row(self, db):
        make_profiles(1, 2)

        async def race():
            return await asyncio.gather(
                matches.resolve_match(1, 2),
                matches.resolve_match(2, 1),
                matches.resolve_match(1, 2),
            )

        results = run(race())
        assert len({m.id for m in results}) == 1
        assert len(run(matches.list_matches(1))) == 1


# ============================================================================
# list / get / unmatch
# ============================================================================

class TestMatchAccess:

    def test_list_newest_first(self, db):
        make_profiles(1, 2, 3)
        older = run(matches.create_match(1, 2))
        newer = run(matches.create_match(1, 3))
        assert [m.id for m in run(matches.list_matches(1))] == [newer.id, older.id]

    def test_get_match_only_for_participants(self, db):
        make_profiles(1, 2, 3)
        m = run(matches.create_match(1, 2))
        assert run(matches.get_match(2, m.id)).id == m.id
        with pytest.raises(NotFound):
            run(matches.get_match(3, m.id))

    def test_unmatch(self, db):
        make_profiles(1, 2, 3)
        m = run(matches.create_match(1, 2))
        with pytest.raises(NotFound):
            run(matches.unmatch(3, m.id))
        run(matches.unmatch(2, m.id))
        assert run(matches.list_matches(1)) == []
        with pytest.raises(NotFound):
            run(matches.unmatch(1, m.id))
