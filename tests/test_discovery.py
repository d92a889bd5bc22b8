"""
Candidate selector tests.

Tests validate:
- Hard exclusions (self, swiped, blocked either way, incomplete)
- Mutual gender preference
- Deterministic ordering strategies
- Soft score factors
"""
import random
from datetime import date, datetime, timedelta, timezone

import pytest

from swipe_engine import blocks, database, discovery, swipes
from swipe_engine.discovery import (
    ScoredOrdering, by_id, calculate_score, get_candidates, get_ordering,
    score_age, score_freshness, score_interests, score_languages, score_religion,
)
from swipe_engine.models import Profile
from tests.helpers import make_profile, make_profiles, run


def ids(profiles):
    return [p.user_id for p in profiles]


# ============================================================================
# Exclusions
# ============================================================================

class TestExclusions:

    def test_never_includes_requester(self, db):
        make_profiles(1, 2, 3)
        for uid in (1, 2, 3):
            assert uid not in ids(run(get_candidates(uid)))

    def test_excludes_any_prior_swipe(self, db):
        make_profiles(1, 2, 3, 4)
        run(swipes.create_swipe(1, 2, "like"))
        run(swipes.create_swipe(1, 3, "pass"))
        assert ids(run(get_candidates(1))) == [4]
        # being swiped on does not hide you from the swiper's target
        assert 1 in ids(run(get_candidates(2)))

    def test_block_hides_both_directions(self, db):
        make_profiles(1, 2, 3)
        run(blocks.block_user(2, 1))
        assert ids(run(get_candidates(1))) == [3]
        assert ids(run(get_candidates(2))) == [3]

    def test_incomplete_profiles_never_shown(self, db):
        make_profiles(1, 2)
        run(make_profile(3, photo=None))
        run(make_profile(4, birthdate=None))
        assert ids(run(get_candidates(1))) == [2]

    def test_explicit_exclude_ids_and_limit(self, db):
        make_profiles(1, 2, 3, 4, 5)
        assert ids(run(get_candidates(1, exclude_ids=[3]))) == [2, 4, 5]
        assert ids(run(get_candidates(1, limit=2))) == [2, 3]


# ============================================================================
# Gender preference
# ============================================================================

class TestGenderPreference:

    def test_mutual_preference(self, db):
        run(make_profile(1, gender="male", preferred_gender="female"))
        run(make_profile(2, gender="female", preferred_gender="male"))
        run(make_profile(3, gender="female", preferred_gender="female"))
        run(make_profile(4, gender="male", preferred_gender="any"))
        run(make_profile(5, gender="other", preferred_gender="any"))
        assert ids(run(get_candidates(1))) == [2]

    def test_any_sees_everyone_who_accepts_them(self, db):
        run(make_profile(1, gender="other", preferred_gender="any"))
        run(make_profile(2, gender="female", preferred_gender="male"))
        run(make_profile(3, gender="male", preferred_gender="any"))
        assert ids(run(get_candidates(1))) == [3]

    def test_custom_filters_replace_defaults(self, db):
        run(make_profile(1, gender="male", preferred_gender="female"))
        run(make_profile(2, gender="male", preferred_gender="female"))
        assert ids(run(get_candidates(1, filters=[]))) == [2]

    def test_strict_age_range(self, db):
        year = date.today().year
        run(make_profile(1, preferred_age_min=25, preferred_age_max=35))
        run(make_profile(2, birthdate=date(year - 30, 1, 1)))
        run(make_profile(3, birthdate=date(year - 50, 1, 1)))
        filters = discovery.DEFAULT_FILTERS + [discovery.age_range_filter()]
        assert ids(run(get_candidates(1, filters=filters))) == [2]


# ============================================================================
# Ordering
# ============================================================================

class TestOrdering:

    def test_default_is_ascending_id(self, db):
        make_profiles(5, 3, 9, 1)
        assert ids(run(get_candidates(5))) == [1, 3, 9]

    def test_get_ordering(self):
        assert get_ordering("id") is by_id
        assert isinstance(get_ordering("SCORE"), ScoredOrdering)
        with pytest.raises(ValueError):
            get_ordering("distance")

    def test_scored_prefers_closer_profiles(self, db):
        run(make_profile(1, country="pt", interests="jazz,hiking", languages="en,pt"))
        run(make_profile(2, country="de", interests="chess", languages="de"))
        run(make_profile(3, country="pt", interests="jazz,hiking", languages="en,pt"))
        order = ScoredOrdering(variance=0)
        assert ids(run(get_candidates(1, ordering=order))) == [3, 2]

    def test_scored_is_reproducible_with_seed(self, db):
        make_profiles(*range(1, 12))
        first = ids(run(get_candidates(1, ordering=ScoredOrdering(seed=42))))
        second = ids(run(get_candidates(1, ordering=ScoredOrdering(seed=42))))
        assert first == second
        assert sorted(first) == list(range(2, 12))

    def test_liked_you_boost_breaks_ties(self, db):
        make_profiles(1, 2, 3)
        run(swipes.create_swipe(3, 1, "like"))
        assert ids(run(get_candidates(1, ordering=ScoredOrdering(variance=0)))) == [3, 2]


# ============================================================================
# Score factors
# ============================================================================

class TestScoreFactors:

    def test_age(self):
        today = date(2024, 1, 1)
        assert score_age(date(1994, 1, 1), 25, 35, today) == 1.0
        assert score_age(date(1984, 1, 1), 25, 35, today) == pytest.approx(0.5)
        assert score_age(None, 25, 35, today) == 0.0

    def test_interests_jaccard(self):
        assert score_interests(["a", "b"], ["b", "c"]) == pytest.approx(1 / 3)
        assert score_interests([], ["b"]) == 0.5

    def test_languages(self):
        assert score_languages(["en", "pt"], ["pt", "en"]) == 1.0
        assert score_languages(["en"], ["en", "de"]) == 0.75
        assert score_languages(["en"], ["de"]) == 0.0

    def test_religion(self):
        assert score_religion("x", "x") == 1.0
        assert score_religion("x", "prefer_not_to_say") == 0.5
        assert score_religion("x", "y") == 0.0

    def test_freshness(self):
        now = datetime(2024, 1, 31, tzinfo=timezone.utc)
        assert score_freshness(now - timedelta(hours=3), now) == 1.0
        assert score_freshness(now - timedelta(days=15), now) == pytest.approx(0.5)
        assert score_freshness(now - timedelta(days=45), now) == 0.0

    def test_score_is_clamped(self):
        me = Profile(user_id=1)
        them = Profile(user_id=2)
        rng = random.Random(0)
        for _ in range(50):
            assert 0.0 <= calculate_score(me, them, True, rng, variance=0.9) <= 1.0

    def test_weights_sum_to_one(self):
        assert sum(discovery.WEIGHTS.values()) == pytest.approx(1.0)


# ============================================================================
# Unreadable rows
# ============================================================================

class TestUnreadableRows:

    def test_row_with_bad_birthdate_is_skipped(self, db):
        make_profiles(1, 3)
        # written straight to the store, bypassing profile checks
        run(database.save_user(2, first_name="Broken", birthdate="not-a-date", gender="female",
                               preferred_gender="any", photo="https://example.org/b.jpg"))
        assert ids(run(get_candidates(1))) == [3]

    def test_row_with_text_age_bound_is_skipped(self, db):
        make_profiles(1, 2)
        run(database.save_user(3, first_name="Broken", birthdate="1990-01-01", gender="male",
                               photo="https://example.org/c.jpg", preferred_age_min="old"))
        assert ids(run(get_candidates(1))) == [2]
