from datetime import date

import pytest
from fastapi.testclient import TestClient

from staybook.db.session import get_db
from staybook.main import create_app

from factories import add_blocked, add_default_rules, add_reservation


@pytest.fixture
def client(db, session_factory, rule_cache):
    app = create_app()
    app.state.rule_cache = rule_cache

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    add_default_rules(db)
    return TestClient(app)


def reservation_payload(start, end, **overrides):
    payload = {
        "start_date": start,
        "end_date": end,
        "first_name": "Grace",
        "last_name": "Hopper",
        "email": "grace@example.com",
        "phone": "0611111111",
        "number_of_people": 2,
    }
    payload.update(overrides)
    return payload


# ─────────────────────────────────────────────────────────────
# 예약
# ─────────────────────────────────────────────────────────────

def test_create_and_approve_reservation(client):
    res = client.post(
        "/api/v1/reservations", json=reservation_payload("2025-07-01", "2025-07-07")
    )
    assert res.status_code == 201
    created = res.json()
    assert created["status"] == "pending"

    res = client.patch(f"/api/v1/reservations/{created['id']}", json={"status": "approved"})
    assert res.status_code == 200
    assert res.json()["status"] == "approved"

    res = client.get("/api/v1/reservations", params={"status": "approved"})
    assert [r["id"] for r in res.json()] == [created["id"]]


def test_reservation_rule_violation_returns_400(client):
    res = client.post(
        "/api/v1/reservations", json=reservation_payload("2025-07-01", "2025-07-06")
    )
    assert res.status_code == 400
    assert "7 days" in res.json()["detail"]


def test_reservation_with_reversed_dates_returns_400(client):
    res = client.post(
        "/api/v1/reservations", json=reservation_payload("2025-07-07", "2025-07-01")
    )
    assert res.status_code == 400


def test_approve_conflict_returns_409(client):
    ids = []
    for start, end in [("2025-03-01", "2025-03-05"), ("2025-03-03", "2025-03-06")]:
        ids.append(client.post("/api/v1/reservations", json=reservation_payload(start, end)).json()["id"])

    assert client.patch(f"/api/v1/reservations/{ids[0]}", json={"status": "approved"}).status_code == 200
    res = client.patch(f"/api/v1/reservations/{ids[1]}", json={"status": "approved"})
    assert res.status_code == 409


def test_unknown_reservation_returns_404(client):
    assert client.get("/api/v1/reservations/missing").status_code == 404
    assert client.delete("/api/v1/reservations/missing").status_code == 404


def test_delete_reservation(client):
    created = client.post(
        "/api/v1/reservations", json=reservation_payload("2025-03-01", "2025-03-02")
    ).json()
    assert client.delete(f"/api/v1/reservations/{created['id']}").status_code == 204
    assert client.get("/api/v1/reservations/history").json() == []


# ─────────────────────────────────────────────────────────────
# 가용성 / 달력
# ─────────────────────────────────────────────────────────────

def test_availability_check_for_guest_and_admin(db, client):
    add_reservation(db, date(2025, 7, 1), date(2025, 7, 10))
    body = {"start_date": "2025-07-13", "end_date": "2025-07-20"}

    guest = client.post("/api/v1/availability/check", json=body).json()
    admin = client.post("/api/v1/availability/check", json={**body, "is_admin": True}).json()

    assert guest["available"] is False
    assert admin["available"] is True


def test_availability_reports_conflicts(db, client):
    booked = add_reservation(db, date(2025, 7, 1), date(2025, 7, 10))

    res = client.post(
        "/api/v1/availability/check",
        json={"start_date": "2025-07-05", "end_date": "2025-07-06"},
    ).json()

    assert res["available"] is False
    assert [c["id"] for c in res["conflicts"]] == [booked.id]


def test_validate_endpoint(client):
    res = client.post(
        "/api/v1/availability/validate",
        json={"start_date": "2025-08-01", "end_date": "2025-08-03"},
    ).json()
    assert res["valid"] is False
    assert "minimum stay" in res["reason"]


def test_calendar_endpoint(db, client):
    add_reservation(db, date(2025, 7, 10), date(2025, 7, 12))
    add_blocked(db, date(2025, 7, 20), date(2025, 7, 22), reason="painting")

    res = client.get("/api/v1/calendar", params={"year": 2025, "month": 7})

    assert res.status_code == 200
    body = res.json()
    assert len(body["available_dates"]) == 25
    assert body["blocked_dates"][0]["reason"] == "painting"
    assert len(body["reservations"]) == 1


def test_calendar_invalid_month(client):
    res = client.get("/api/v1/calendar", params={"year": 2025, "month": 13})
    assert res.status_code == 400
    assert res.json()["detail"] == "Invalid year or month"


# ─────────────────────────────────────────────────────────────
# 규칙 / 차단 기간 관리
# ─────────────────────────────────────────────────────────────

def test_rule_crud_updates_active_rules(client):
    active = client.get("/api/v1/booking-rules/active").json()
    assert len(active) == 2

    res = client.post(
        "/api/v1/booking-rules",
        json={
            "name": "Winter",
            "is_high_season": True,
            "high_season_start_month": 12,
            "high_season_end_month": 1,
            "minimum_stay_days": 4,
        },
    )
    assert res.status_code == 201
    rule_id = res.json()["id"]
    assert len(client.get("/api/v1/booking-rules/active").json()) == 3

    assert client.delete(f"/api/v1/booking-rules/{rule_id}").status_code == 204
    assert client.get(f"/api/v1/booking-rules/{rule_id}").status_code == 404


def test_rule_months_must_be_set_together(client):
    res = client.post(
        "/api/v1/booking-rules",
        json={"name": "Broken", "is_high_season": True, "high_season_start_month": 6},
    )
    assert res.status_code == 422


def test_blocked_dates_lifecycle(client):
    res = client.post(
        "/api/v1/blocked-dates",
        json={"start_date": "2025-04-01", "end_date": "2025-04-03", "reason": "repairs"},
    )
    assert res.status_code == 201
    blocked_id = res.json()["id"]

    check = client.post(
        "/api/v1/availability/check",
        json={"start_date": "2025-04-02", "end_date": "2025-04-05", "is_admin": True},
    ).json()
    assert check["available"] is False

    assert client.delete(f"/api/v1/blocked-dates/{blocked_id}").status_code == 204
    assert client.get("/api/v1/blocked-dates").json() == []
    assert client.delete(f"/api/v1/blocked-dates/{blocked_id}").status_code == 404


def test_blocked_dates_reject_reversed_range(client):
    res = client.post(
        "/api/v1/blocked-dates",
        json={"start_date": "2025-04-03", "end_date": "2025-04-01"},
    )
    assert res.status_code == 400


def test_calendar_last_supported_month(client):
    res = client.get("/api/v1/calendar", params={"year": 9999, "month": 12})
    assert res.status_code == 200
    assert len(res.json()["available_dates"]) == 31
