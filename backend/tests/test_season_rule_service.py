import pytest

from staybook.domain.booking import DEFAULT_SEASON_RULES, SeasonRuleNotFoundError
from staybook.services.season_rule_cache import SeasonRuleCache, SqlSeasonRuleStore
from staybook.services.season_rule_service import SeasonRuleService, rule_to_row_data


@pytest.fixture
def long_lived_cache(session_factory, clock):
    return SeasonRuleCache(SqlSeasonRuleStore(session_factory), ttl_seconds=3600, clock=clock)


@pytest.fixture
def service(db, long_lived_cache):
    return SeasonRuleService(db, long_lived_cache)


def high_season_data(**overrides):
    data = {
        "name": "Summer",
        "is_active": True,
        "is_high_season": True,
        "high_season_start_month": 6,
        "high_season_end_month": 8,
        "minimum_stay_days": 5,
        "enforce_gap_between_bookings": True,
        "minimum_gap_days": 3,
    }
    data.update(overrides)
    return data


def test_seed_defaults_only_on_empty_store(service):
    assert service.seed_defaults() == len(DEFAULT_SEASON_RULES)
    assert service.seed_defaults() == 0

    active = service.active_rules()
    assert sorted(r.minimum_stay_days for r in active) == [1, 7]


def test_row_data_keeps_month_range():
    data = rule_to_row_data(DEFAULT_SEASON_RULES[0])
    assert (data["high_season_start_month"], data["high_season_end_month"]) == (7, 9)


def test_create_is_visible_despite_ttl(service):
    assert service.active_rules() == []

    created = service.create(high_season_data())

    active = service.active_rules()
    assert [r.id for r in active] == [created.id]
    assert active[0].months.months() == [6, 7, 8]


def test_update_is_visible_immediately(service):
    created = service.create(high_season_data())
    service.active_rules()

    service.update(created.id, high_season_data(minimum_stay_days=9))

    assert service.active_rules()[0].minimum_stay_days == 9


def test_deactivated_rule_leaves_active_set(service):
    created = service.create(high_season_data())
    service.update(created.id, high_season_data(is_active=False))
    assert service.active_rules() == []
    assert len(service.list_all()) == 1


def test_delete_is_visible_immediately(service):
    created = service.create(high_season_data())
    service.active_rules()

    service.delete(created.id)

    assert service.active_rules() == []
    with pytest.raises(SeasonRuleNotFoundError):
        service.get(created.id)


def test_unknown_rule(service):
    with pytest.raises(SeasonRuleNotFoundError):
        service.update("missing", high_season_data())
    with pytest.raises(SeasonRuleNotFoundError):
        service.delete("missing")
