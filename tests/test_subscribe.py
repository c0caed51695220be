import json

import pytest
from sqlalchemy import func

from app.api.v1.endpoints import subscribe as subscribe_endpoint
from app.core.config import settings
from app.core.exceptions import ConflictError
from app.models.subscriber import Subscriber
from app.services.subscription_service import SubscriptionService
from app.utils import rate_limiter


def _count(db, waitlist_id):
    db.expire_all()
    return db.query(func.count(Subscriber.id)).filter(Subscriber.waitlist_id == waitlist_id).scalar()


async def test_positions_follow_arrival_and_duplicates_are_rejected(client, make_waitlist, db_session):
    waitlist = make_waitlist(slug="launch")
    wid = str(waitlist.id)

    r = await client.post("/api/subscribe", json={"waitlistId": wid, "email": "a@x.com"})
    assert r.status_code == 201
    assert r.json() == {"message": "Inscription réussie", "position": 1}

    r = await client.post("/api/subscribe", json={"waitlistId": wid, "email": "b@x.com"})
    assert r.json()["position"] == 2

    r = await client.post("/api/subscribe", json={"waitlistId": wid, "email": "a@x.com"})
    assert r.status_code == 400
    assert r.json() == {"error": "Cet email est déjà inscrit à cette waitlist"}
    assert _count(db_session, waitlist.id) == 2


async def test_email_is_normalized_before_duplicate_check(client, make_waitlist):
    waitlist = make_waitlist(slug="launch")
    wid = str(waitlist.id)
    assert (await client.post("/api/subscribe", json={"waitlistId": wid, "email": "Ana@X.com "})).status_code == 201
    r = await client.post("/api/subscribe", json={"waitlistId": wid, "email": "ana@x.com"})
    assert r.status_code == 400


async def test_positions_are_scoped_per_waitlist(client, make_waitlist):
    first = make_waitlist(slug="first")
    second = make_waitlist(slug="second")
    await client.post("/api/subscribe", json={"waitlistId": str(first.id), "email": "a@x.com"})
    await client.post("/api/subscribe", json={"waitlistId": str(first.id), "email": "b@x.com"})

    r = await client.post("/api/subscribe", json={"waitlistId": str(second.id), "email": "a@x.com"})
    assert r.status_code == 201
    assert r.json()["position"] == 1


@pytest.mark.parametrize("payload", [
    {},
    {"email": "a@x.com"},
    {"waitlistId": "00000000-0000-0000-0000-000000000000"},
    {"waitlistId": "00000000-0000-0000-0000-000000000000", "email": "   "},
])
async def test_missing_fields(client, db_session, payload):
    r = await client.post("/api/subscribe", json=payload)
    assert r.status_code == 400
    assert r.json() == {"error": "ID de waitlist et email requis"}


async def test_invalid_email(client, make_waitlist):
    waitlist = make_waitlist(slug="launch")
    r = await client.post("/api/subscribe", json={"waitlistId": str(waitlist.id), "email": "not-an-email"})
    assert r.status_code == 400
    assert r.json() == {"error": "Adresse email invalide"}


@pytest.mark.parametrize("waitlist_id", ["00000000-0000-0000-0000-000000000000", "nope"])
async def test_unknown_waitlist(client, db_session, waitlist_id):
    r = await client.post("/api/subscribe", json={"waitlistId": waitlist_id, "email": "a@x.com"})
    assert r.status_code == 404
    assert r.json() == {"error": "Waitlist non trouvée"}


async def test_optional_fields_and_custom_data_round_trip(client, auth_headers, make_waitlist, db_session):
    waitlist = make_waitlist(slug="launch", collect_company=True)
    r = await client.post(
        "/api/subscribe",
        json={
            "waitlistId": str(waitlist.id),
            "email": "c@x.com",
            "name": "Chloé",
            "company": "Acme",
            "customData": {"role": "cto", "seats": 12},
        },
    )
    assert r.status_code == 201

    stored = db_session.query(Subscriber).filter(Subscriber.email == "c@x.com").one()
    assert json.loads(stored.custom_data) == {"role": "cto", "seats": 12}

    listed = (await client.get(f"/api/waitlists/{waitlist.id}/subscribers", headers=auth_headers)).json()
    assert listed[0]["name"] == "Chloé"
    assert listed[0]["company"] == "Acme"
    assert listed[0]["customData"] == {"role": "cto", "seats": 12}


def test_service_serial_positions_are_contiguous(db_session, make_waitlist):
    waitlist = make_waitlist(slug="serial")
    service = SubscriptionService(db_session)
    positions = [service.subscribe(str(waitlist.id), f"user{i}@x.com").position for i in range(5)]
    assert positions == [1, 2, 3, 4, 5]

    with pytest.raises(ConflictError):
        service.subscribe(str(waitlist.id), "user0@x.com")
    assert service.count(waitlist.id) == 5


async def test_rate_limited_subscription_gets_429(client, make_waitlist, monkeypatch):
    waitlist = make_waitlist(slug="busy")
    monkeypatch.setattr(subscribe_endpoint, "allow_for_ip", lambda *args, **kwargs: False)
    r = await client.post("/api/subscribe", json={"waitlistId": str(waitlist.id), "email": "a@x.com"})
    assert r.status_code == 429
    assert r.json() == {"error": "Trop de requêtes. Réessayez plus tard."}


def test_rate_limiter_is_bypassed_when_disabled(monkeypatch):
    monkeypatch.setattr(settings, "RATE_LIMIT_ENABLED", False)

    def fail(*args, **kwargs):
        raise AssertionError("redis should not be reached")

    monkeypatch.setattr(rate_limiter, "allow", fail)
    assert rate_limiter.allow_for_ip("subscribe", "1.2.3.4", 1) is True


def test_rate_limiter_keys_by_action_and_ip(monkeypatch):
    monkeypatch.setattr(settings, "RATE_LIMIT_ENABLED", True)
    calls = []

    def fake_allow(key, limit, window_seconds):
        calls.append((key, limit, window_seconds))
        return False

    monkeypatch.setattr(rate_limiter, "allow", fake_allow)
    assert rate_limiter.allow_for_ip("subscribe", "1.2.3.4", 5) is False
    assert calls == [("ratelimit:subscribe:1.2.3.4", 5, 60)]


def test_lost_email_race_reports_duplicate(db_session, make_waitlist, monkeypatch):
    waitlist = make_waitlist(slug="racy")
    service = SubscriptionService(db_session)
    service.subscribe(str(waitlist.id), "same@x.com")

    real_find = SubscriptionService._find
    calls = []

    def miss_first_lookup(self, waitlist_id, email):
        # The concurrent insert is not yet visible to the pre-check
        calls.append(email)
        if len(calls) == 1:
            return None
        return real_find(self, waitlist_id, email)

    monkeypatch.setattr(SubscriptionService, "_find", miss_first_lookup)
    with pytest.raises(ConflictError) as exc:
        service.subscribe(str(waitlist.id), "same@x.com")
    assert exc.value.message == "Cet email est déjà inscrit à cette waitlist"
    assert _count(db_session, waitlist.id) == 1


async def test_unknown_waitlist_is_reported_before_bad_email(client, db_session):
    r = await client.post(
        "/api/subscribe",
        json={"waitlistId": "00000000-0000-0000-0000-000000000000", "email": "not-an-email"},
    )
    assert r.status_code == 404
    assert r.json() == {"error": "Waitlist non trouvée"}


async def test_dotless_domain_is_accepted(client, make_waitlist):
    waitlist = make_waitlist(slug="intranet")
    r = await client.post("/api/subscribe", json={"waitlistId": str(waitlist.id), "email": "user@localhost"})
    assert r.status_code == 201
    assert r.json()["position"] == 1
