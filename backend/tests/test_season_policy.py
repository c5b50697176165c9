from datetime import date, datetime

import pytest

from staybook.domain.booking import (
    DEFAULT_SEASON_RULES,
    InvalidDateRangeError,
    MonthRange,
    SeasonPolicy,
    SeasonRule,
    StayPeriod,
    gap_days,
    stay_length_days,
)


def high_rule(start=7, end=9, minimum_stay=7, gap=7, enforce=True, **kw):
    return SeasonRule(
        id=kw.pop("id", f"high-{start}-{end}"),
        name="High season",
        is_high_season=True,
        months=MonthRange(start, end),
        minimum_stay_days=minimum_stay,
        enforce_gap_between_bookings=enforce,
        minimum_gap_days=gap,
        **kw,
    )


def low_rule(minimum_stay=1, **kw):
    return SeasonRule(
        id=kw.pop("id", "low"),
        name="Low season",
        is_high_season=False,
        minimum_stay_days=minimum_stay,
        **kw,
    )


@pytest.fixture
def policy():
    return SeasonPolicy(DEFAULT_SEASON_RULES)


def existing(start, end, id_="r1"):
    return StayPeriod(id=id_, start_date=start, end_date=end)


# ─────────────────────────────────────────────────────────────
# 성수기 판정
# ─────────────────────────────────────────────────────────────

@pytest.mark.parametrize("year", [2024, 2025, 2031])
def test_high_season_matches_exactly_the_configured_months(year):
    policy = SeasonPolicy([high_rule(4, 6)])
    for month in range(1, 13):
        assert policy.is_high_season(date(year, month, 15)) == (4 <= month <= 6)


def test_wrapping_high_season_rule():
    policy = SeasonPolicy([high_rule(11, 2)])
    high = {m for m in range(1, 13) if policy.is_high_season(date(2025, m, 1))}
    assert high == {11, 12, 1, 2}


def test_rule_without_months_never_matches():
    rule = SeasonRule(id="x", name="no months", is_high_season=True, minimum_stay_days=5)
    policy = SeasonPolicy([rule])
    assert not any(policy.is_high_season(date(2025, m, 1)) for m in range(1, 13))


def test_inactive_rules_are_ignored():
    policy = SeasonPolicy([high_rule(active=False)])
    assert not policy.is_high_season(date(2025, 8, 1))
    assert policy.rules == ()


def test_overlapping_rules_union_their_months():
    policy = SeasonPolicy([high_rule(6, 7, id="a"), high_rule(12, 1, id="b")])
    high = {m for m in range(1, 13) if policy.is_high_season(date(2025, m, 10))}
    assert high == {6, 7, 12, 1}


def test_range_passing_through_high_season_month(policy):
    # 5월 ~ 10월: 시작/종료 모두 비수기지만 7~9월을 통과
    assert not policy.is_high_season(date(2025, 5, 20))
    assert not policy.is_high_season(date(2025, 10, 10))
    assert policy.range_overlaps_high_season(date(2025, 5, 20), date(2025, 10, 10))


def test_range_touching_single_short_high_month():
    policy = SeasonPolicy([high_rule(2, 2)])
    assert policy.range_overlaps_high_season(date(2025, 1, 20), date(2025, 3, 5))
    assert not policy.range_overlaps_high_season(date(2025, 3, 1), date(2025, 12, 31))


def test_low_season_range_does_not_overlap(policy):
    assert not policy.range_overlaps_high_season(date(2025, 1, 1), date(2025, 6, 30))


# ─────────────────────────────────────────────────────────────
# 최소 숙박일
# ─────────────────────────────────────────────────────────────

def test_minimum_stay_uses_strictest_rule_of_the_season():
    policy = SeasonPolicy([
        high_rule(minimum_stay=5, id="a"),
        high_rule(minimum_stay=10, id="b"),
        low_rule(minimum_stay=2, id="c"),
        low_rule(minimum_stay=3, id="d"),
    ])
    assert policy.minimum_stay_days(date(2025, 8, 1)) == 10
    assert policy.minimum_stay_days(date(2025, 2, 1)) == 3


def test_minimum_stay_defaults_to_one_without_rules():
    policy = SeasonPolicy([])
    assert policy.minimum_stay_days(date(2025, 8, 1)) == 1
    assert policy.minimum_stay_for_range(date(2025, 8, 1), date(2025, 8, 2)) == 1
    assert policy.required_gap_days() is None


def test_stay_length_counts_both_ends():
    assert stay_length_days(date(2025, 7, 1), date(2025, 7, 7)) == 7


def test_minimum_stay_boundary(policy):
    assert policy.validate_booking(date(2025, 7, 1), date(2025, 7, 7)).valid

    verdict = policy.validate_booking(date(2025, 7, 1), date(2025, 7, 6))
    assert not verdict.valid
    assert "7" in verdict.reason


def test_low_season_booking_of_two_days_is_valid(policy):
    assert policy.validate_booking(date(2025, 3, 1), date(2025, 3, 2)).valid


def test_time_of_day_is_ignored(policy):
    verdict = policy.validate_booking(datetime(2025, 7, 1, 23, 30), datetime(2025, 7, 7, 0, 15))
    assert verdict.valid


def test_end_not_after_start_is_an_input_error(policy):
    with pytest.raises(InvalidDateRangeError):
        policy.validate_booking(date(2025, 7, 7), date(2025, 7, 7))
    with pytest.raises(InvalidDateRangeError):
        policy.validate_booking(date(2025, 7, 7), date(2025, 7, 1))


# ─────────────────────────────────────────────────────────────
# 예약 간격
# ─────────────────────────────────────────────────────────────

def test_gap_days_counts_empty_days_between():
    assert gap_days(date(2025, 7, 10), date(2025, 7, 11)) == 0
    assert gap_days(date(2025, 7, 10), date(2025, 7, 13)) == 2
    assert gap_days(date(2025, 7, 10), date(2025, 7, 18)) == 7


@pytest.mark.parametrize("start_day,allowed", [
    (11, True),   # 연속 예약 (0일)
    (12, False),  # 1일
    (13, False),  # 2일
    (17, False),  # 6일
    (18, True),   # 7일
    (25, True),
])
def test_gap_after_existing_reservation(policy, start_day, allowed):
    reservations = [existing(date(2025, 7, 1), date(2025, 7, 10))]
    start = date(2025, 7, start_day)
    end = date(2025, 7, start_day + 6)

    verdict = policy.validate_booking(start, end, reservations)

    assert verdict.valid is allowed
    if not allowed:
        assert "7 days" in verdict.reason
        assert "before" in verdict.reason


def test_gap_before_next_reservation(policy):
    reservations = [existing(date(2025, 8, 20), date(2025, 8, 30))]

    # 8/10~8/16 이후 8/20 시작: 빈 날 3일
    check = policy.is_gap_between_bookings_allowed(date(2025, 8, 10), date(2025, 8, 16), reservations)
    assert not check.allowed
    assert check.days_after == 3
    assert "after" in check.reason

    # 8/13~8/19: 바로 이어짐
    assert policy.is_gap_between_bookings_allowed(
        date(2025, 8, 13), date(2025, 8, 19), reservations
    ).allowed


def test_nearest_reservations_are_used_for_gap(policy):
    reservations = [
        existing(date(2025, 6, 1), date(2025, 6, 10), "far"),
        existing(date(2025, 7, 1), date(2025, 7, 10), "near"),
        existing(date(2025, 9, 1), date(2025, 9, 10), "later"),
    ]
    check = policy.is_gap_between_bookings_allowed(date(2025, 7, 11), date(2025, 7, 20), reservations)
    assert check.allowed
    assert check.days_before == 0
    assert check.days_after == 42


def test_gap_rule_does_not_apply_outside_high_season(policy):
    reservations = [existing(date(2025, 3, 1), date(2025, 3, 10))]
    assert policy.validate_booking(date(2025, 3, 12), date(2025, 3, 14), reservations).valid


def test_gap_rule_requires_enforcement_flag():
    policy = SeasonPolicy([high_rule(enforce=False), low_rule()])
    reservations = [existing(date(2025, 7, 1), date(2025, 7, 10))]
    assert policy.validate_booking(date(2025, 7, 12), date(2025, 7, 20), reservations).valid


def test_largest_gap_wins():
    policy = SeasonPolicy([high_rule(gap=3, id="a"), high_rule(gap=10, id="b")])
    assert policy.required_gap_days() == 10
    reservations = [existing(date(2025, 7, 1), date(2025, 7, 10))]
    check = policy.is_gap_between_bookings_allowed(date(2025, 7, 16), date(2025, 7, 25), reservations)
    assert not check.allowed
    assert check.required_gap_days == 10


def test_no_rules_accepts_any_range():
    policy = SeasonPolicy([])
    reservations = [existing(date(2025, 7, 1), date(2025, 7, 10))]
    assert policy.validate_booking(date(2025, 7, 12), date(2025, 7, 13), reservations).valid


def test_validate_booking_is_idempotent(policy):
    reservations = [existing(date(2025, 7, 1), date(2025, 7, 10))]
    first = policy.validate_booking(date(2025, 7, 13), date(2025, 7, 20), reservations)
    second = policy.validate_booking(date(2025, 7, 13), date(2025, 7, 20), reservations)
    assert first == second


def test_range_ending_on_last_representable_day(policy):
    assert not policy.range_overlaps_high_season(date(9999, 11, 1), date.max)
    assert policy.range_overlaps_high_season(date(9999, 6, 1), date.max)
