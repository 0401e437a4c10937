import logging
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient
from jose import jwt

from slotboard.config import settings
from slotboard.main import app
from slotboard.models.slot import TimeSlot
from slotboard.services import slots as slot_store

SUNDAY = "2024-06-09"


def test_week_of_empty_store_is_initialized(api):
    r = api.get(f"/api/slots/week/{SUNDAY}")
    assert r.status_code == 200
    slots = r.json()

    assert len(slots) == 32
    assert {s["hour"] for s in slots} == set(range(10, 18))
    for hour in range(10, 18):
        assert [s["slotNumber"] for s in slots if s["hour"] == hour] == [0, 1, 2, 3]
    assert all(s["isAvailable"] is True for s in slots)
    assert [(s["hour"], s["slotNumber"]) for s in slots] == sorted((s["hour"], s["slotNumber"]) for s in slots)
    assert slots[0]["date"] == "2024-06-09T10:00:00Z"
    assert slots[-1]["date"] == "2024-06-09T17:45:00Z"
    assert set(slots[0]) == {"id", "date", "hour", "slotNumber", "isAvailable"}


def test_any_day_of_the_week_returns_the_same_slots(api, db):
    base = api.get(f"/api/slots/week/{SUNDAY}").json()
    for day in ("2024-06-10", "2024-06-12", "2024-06-15"):
        assert api.get(f"/api/slots/week/{day}").json() == base
    assert db.query(TimeSlot).count() == 32


def test_invalid_week_date(api):
    r = api.get("/api/slots/week/not-a-date")
    assert r.status_code == 400


def test_day_slots_requires_date(api):
    assert api.get("/api/slots").status_code == 400

    api.get(f"/api/slots/week/{SUNDAY}")
    assert len(api.get("/api/slots", params={"date": SUNDAY}).json()) == 32
    assert api.get("/api/slots", params={"date": "2024-06-10"}).json() == []


def test_admin_toggles_twice(api, admin_headers):
    slot = api.get(f"/api/slots/week/{SUNDAY}").json()[0]

    r = api.patch(f"/api/slots/{slot['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["isAvailable"] is False

    r = api.patch(f"/api/slots/{slot['id']}", headers=admin_headers)
    assert r.json()["isAvailable"] is True

    # la lettura pubblica vede lo stato aggiornato
    assert api.get(f"/api/slots/week/{SUNDAY}").json()[0]["isAvailable"] is True


def test_toggle_unknown_slot(api, admin_headers):
    assert api.patch("/api/slots/4242", headers=admin_headers).status_code == 404


def test_toggle_requires_token(api):
    slot = api.get(f"/api/slots/week/{SUNDAY}").json()[0]
    assert api.patch(f"/api/slots/{slot['id']}").status_code == 401
    assert api.patch(f"/api/slots/{slot['id']}", headers={"Authorization": "Bearer garbage"}).status_code == 401
    assert api.get(f"/api/slots/week/{SUNDAY}").json()[0]["isAvailable"] is True


def test_toggle_rejects_expired_token(api, admin):
    slot = api.get(f"/api/slots/week/{SUNDAY}").json()[0]
    expired = jwt.encode(
        {"sub": str(admin.id), "is_admin": True, "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        settings.SECRET_KEY,
        algorithm="HS256",
    )
    r = api.patch(f"/api/slots/{slot['id']}", headers={"Authorization": f"Bearer {expired}"})
    assert r.status_code == 401


def test_toggle_forbidden_for_non_admin(api, member_headers):
    slot = api.get(f"/api/slots/week/{SUNDAY}").json()[0]
    assert api.patch(f"/api/slots/{slot['id']}", headers=member_headers).status_code == 403


def test_explicit_initialize_reports_counts(api, admin_headers):
    r = api.post("/api/slots/initialize", json={"startDate": "2024-06-12"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == {"ok": True, "week": SUNDAY, "created": 32, "skipped": 0}

    r = api.post("/api/slots/initialize", json={"startDate": SUNDAY}, headers=admin_headers)
    assert r.json()["created"] == 0
    assert r.json()["skipped"] == 32


def test_initialize_is_admin_only(api, member_headers):
    assert api.post("/api/slots/initialize", json={"startDate": SUNDAY}).status_code == 401
    assert api.post("/api/slots/initialize", json={"startDate": SUNDAY}, headers=member_headers).status_code == 403


def test_unexpected_error_is_a_generic_500(db, monkeypatch, caplog):
    def broken(db, day):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(slot_store, "get_week_slots", broken)
    caplog.set_level(logging.ERROR, logger="slotboard.main")

    r = TestClient(app, raise_server_exceptions=False).get(f"/api/slots/week/{SUNDAY}")

    assert r.status_code == 500
    assert r.json() == {"detail": "Server error"}
    assert "disk on fire" not in r.text

    records = [rec for rec in caplog.records if rec.name == "slotboard.main"]
    assert records and "/api/slots/week/" in records[0].getMessage()
    assert isinstance(records[0].exc_info[1], RuntimeError)
