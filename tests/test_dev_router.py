"""
Dev seeding produces a usable discovery queue with pending likes.
"""
from dev_router import DEMO_PROFILES, demo_ids, seed_demo
from swipe_engine import SwipeOutcome, begin_session, get_profile, liked_by, save_profile
from tests.helpers import make_profiles, run


class TestSeed:

    def test_seeded_profiles_are_discoverable(self, db):
        make_profiles(1)
        ids = run(seed_demo(1))
        assert ids == demo_ids(1)
        assert len(ids) == len(DEMO_PROFILES)
        assert run(liked_by(1)) == set(ids[::2])

        s = run(begin_session(1))
        assert [p.user_id for p in s.queue.remaining()] == ids
        assert run(s.submit_swipe("like")) is SwipeOutcome.MATCHED

    def test_seeding_twice_is_harmless(self, db):
        make_profiles(1)
        run(seed_demo(1))
        run(seed_demo(1))
        assert run(liked_by(1)) == set(demo_ids(1)[::2])

    def test_seed_completes_a_fresh_admin(self, db):
        # what /start leaves behind: only a first name
        run(save_profile(1, first_name="Nadia"))
        ids = run(seed_demo(1))
        me = run(get_profile(1))
        assert me.is_complete
        assert me.first_name == "Nadia"
        s = run(begin_session(1))
        assert [p.user_id for p in s.queue.remaining()] == ids

    def test_seed_without_any_admin_profile(self, db):
        run(seed_demo(7))
        assert run(get_profile(7)).is_complete

    def test_seed_keeps_admin_choices(self, db):
        run(save_profile(1, first_name="Nadia", gender="female", preferred_gender="male"))
        run(seed_demo(1))
        me = run(get_profile(1))
        assert (me.gender, me.preferred_gender) == ("female", "male")
        s = run(begin_session(1))
        assert {p.first_name for p in s.queue.remaining()} == {"Bob", "Dmitri"}
