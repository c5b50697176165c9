from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from factories import add_blocked, add_reservation, add_rule


def test_reservation_end_must_follow_start(db):
    with pytest.raises(IntegrityError):
        add_reservation(db, date(2025, 7, 10), date(2025, 7, 1))


def test_single_day_reservation_is_rejected(db):
    with pytest.raises(IntegrityError):
        add_reservation(db, date(2025, 7, 10), date(2025, 7, 10))


def test_blocked_period_end_must_follow_start(db):
    with pytest.raises(IntegrityError):
        add_blocked(db, date(2025, 4, 3), date(2025, 4, 1))


@pytest.mark.parametrize("overrides", [
    {"high_season_start_month": 6},
    {"high_season_end_month": 8},
    {"minimum_stay_days": 0},
])
def test_rule_rows_are_checked(db, overrides):
    with pytest.raises(IntegrityError):
        add_rule(db, name="broken", is_high_season=True, **overrides)


def test_valid_rows_are_stored(db):
    add_reservation(db, date(2025, 7, 1), date(2025, 7, 2))
    add_blocked(db, date(2025, 4, 1), date(2025, 4, 2))
    rule = add_rule(db, is_high_season=True, high_season_start_month=11, high_season_end_month=2)
    assert rule.to_season_rule().months.months() == [1, 2, 11, 12]
