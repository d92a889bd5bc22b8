"""
Model tests: row conversion, profile completeness, pair canonicalisation.
"""
from datetime import date, datetime, timezone

from swipe_engine.models import Action, Match, Profile, Swipe, User, age_on, csv_list


# ============================================================================
# Profile
# ============================================================================

class TestProfile:

    def test_from_row_splits_lists_and_ignores_unknown_columns(self):
        p = Profile.from_row({
            "user_id": 7, "created_at": 0, "first_name": "Ann",
            "interests": "Jazz, hiking,,", "languages": "EN",
            "preferred_gender": None,
        })
        assert p.interests == ["jazz", "hiking"]
        assert p.languages == ["en"]
        assert p.preferred_gender == "any"

    def test_missing_fields_uses_labels(self):
        p = Profile(user_id=1, first_name="Ann")
        assert p.missing_fields() == ["Photo", "Birthdate", "Gender"]
        assert not p.is_complete

    def test_complete_profile(self):
        p = Profile(user_id=1, first_name="Ann", photo="x", birthdate=date(1990, 1, 1), gender="Female")
        assert p.is_complete
        assert p.gender == "female"

    def test_age_before_and_after_birthday(self):
        assert age_on(date(1990, 6, 15), date(2020, 6, 14)) == 29
        assert age_on(date(1990, 6, 15), date(2020, 6, 15)) == 30

    def test_csv_list_accepts_sequences(self):
        assert csv_list(["A", " b ", ""]) == ["a", "b"]
        assert csv_list(None) == []


# ============================================================================
# Records
# ============================================================================

class TestRecords:

    def test_epoch_timestamps_become_utc_datetimes(self):
        s = Swipe(id=1, actor_id=1, target_id=2, action="like", created_at=1_700_000_000)
        assert s.action is Action.LIKE
        assert s.created_at == datetime.fromtimestamp(1_700_000_000, tz=timezone.utc)

    def test_canonical_pair_orders_smaller_first(self):
        assert Match.canonical_pair(9, 3) == (3, 9)
        assert Match.canonical_pair(3, 9) == (3, 9)

    def test_match_other_side(self):
        m = Match(id=1, user_a_id=3, user_b_id=9, created_at=0)
        assert m.other(3) == 9
        assert m.other(9) == 3
        assert m.involves(9) and not m.involves(4)

    def test_user_from_row_reports_completeness(self):
        row = {"user_id": 5, "created_at": 0, "first_name": "Bo", "photo": "p",
               "birthdate": "1991-02-03", "gender": "male"}
        assert User.from_row(row).profile_complete
        assert not User.from_row(dict(row, photo=None)).profile_complete
