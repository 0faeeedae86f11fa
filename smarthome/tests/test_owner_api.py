from __future__ import annotations

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from smarthome.app import create_app
from smarthome.config import DEFAULT_APP_CONFIG
from smarthome.storage.client import BackendClient
from smarthome.storage.seed import DEMO_OWNER, DEMO_TENANT, seed_demo_data
from smarthome.storage.stores import StoreError

NEW_LISTING = {
    "title": "Lake view 3BHK",
    "description": "Top floor, three balconies.",
    "city": "Hyderabad",
    "property_type": "3BHK",
    "furnished_type": "Semi Furnished",
    "rating": 4.6,
    "rent": 30000,
    "latitude": 17.43,
    "longitude": 78.41,
}


def _login(c, account=DEMO_OWNER):
    c.post("/auth/login", json={"email": account["email"], "password": account["password"]})


@pytest.fixture
def setup() -> tuple[TestClient, BackendClient]:
    backend = BackendClient(bcrypt_rounds=4)
    seed_demo_data(backend, DEFAULT_APP_CONFIG.seed_path)
    c = TestClient(create_app(backend))
    _login(c)
    return c, backend


def _second_owner(c) -> TestClient:
    other = TestClient(c.app)
    other.post("/auth/register", json={
        "email": "other.owner@smarthome.test", "password": "secret1", "role": "OWNER",
    })
    return other


# ── Listing management ───────────────────────────────────────────────────


def test_my_listings(setup):
    c, _ = setup
    listings = c.get("/owner/listings").json()
    assert len(listings) == 8
    assert all(listing["owner_email"] == DEMO_OWNER["email"] for listing in listings)


def test_create_listing(setup):
    c, backend = setup
    resp = c.post("/owner/listings", json=NEW_LISTING)
    assert resp.status_code == 201
    created = resp.json()
    assert created["title"] == "Lake view 3BHK"
    assert created["owner_email"] == DEMO_OWNER["email"]
    assert created["video_url"] is None
    assert c.get("/owner/listings").json()[0]["id"] == created["id"]
    assert backend.listings.get(created["id"]) is not None


def test_create_listing_defaults(setup):
    c, _ = setup
    created = c.post("/owner/listings", json={"title": "Minimal", "rent": 5000}).json()
    assert created["rating"] == 4.0
    assert created["property_type"] == "2BHK"
    assert created["furnished_type"] == "Fully Furnished"
    assert created["image_url"] == "https://picsum.photos/800/600"


@pytest.mark.parametrize("override", [
    {"title": "   "},
    {"rent": -1},
    {"rating": 5.5},
    {"property_type": "Castle"},
])
def test_create_listing_validation(setup, override):
    c, _ = setup
    resp = c.post("/owner/listings", json={**NEW_LISTING, **override})
    assert resp.status_code == 422


def test_create_listing_requires_rent(setup):
    c, _ = setup
    payload = {k: v for k, v in NEW_LISTING.items() if k != "rent"}
    assert c.post("/owner/listings", json=payload).status_code == 422


def test_update_listing(setup):
    c, _ = setup
    created = c.post("/owner/listings", json=NEW_LISTING).json()
    resp = c.put(f"/owner/listings/{created['id']}", json={**NEW_LISTING, "rent": 28000, "video_url": "https://v.example/tour"})
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["id"] == created["id"]
    assert updated["created_at"] == created["created_at"]
    assert updated["rent"] == 28000
    assert updated["video_url"] == "https://v.example/tour"


def test_delete_listing(setup):
    c, _ = setup
    created = c.post("/owner/listings", json=NEW_LISTING).json()
    resp = c.delete(f"/owner/listings/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"status": "deleted", "id": created["id"]}
    assert all(listing["id"] != created["id"] for listing in c.get("/owner/listings").json())


def test_missing_listing(setup):
    c, _ = setup
    assert c.put("/owner/listings/nope", json=NEW_LISTING).status_code == 404
    assert c.delete("/owner/listings/nope").status_code == 404


def test_cannot_touch_another_owners_listing(setup):
    c, backend = setup
    listing_id = c.get("/owner/listings").json()[0]["id"]
    other = _second_owner(c)

    assert other.get("/owner/listings").json() == []
    assert other.put(f"/owner/listings/{listing_id}", json=NEW_LISTING).status_code == 403
    assert other.delete(f"/owner/listings/{listing_id}").status_code == 403
    assert backend.listings.get(listing_id) is not None


# ── Persistence failures ─────────────────────────────────────────────────


def test_insert_failure_is_reported_and_not_applied(setup):
    c, backend = setup
    with patch.object(backend.listings, "insert", side_effect=StoreError("connection reset")):
        resp = c.post("/owner/listings", json=NEW_LISTING)
    assert resp.status_code == 502
    assert resp.json()["detail"] == "Insert failed: connection reset"
    assert len(c.get("/owner/listings").json()) == 8


def test_update_failure_leaves_listing_unchanged(setup):
    c, backend = setup
    listing = c.get("/owner/listings").json()[0]
    with patch.object(backend.listings, "update", side_effect=StoreError("timeout")):
        resp = c.put(f"/owner/listings/{listing['id']}", json={**NEW_LISTING, "rent": 1})
    assert resp.status_code == 502
    assert resp.json()["detail"] == "Update failed: timeout"
    assert backend.listings.get(listing["id"]).rent == listing["rent"]


def test_delete_failure(setup):
    c, backend = setup
    listing_id = c.get("/owner/listings").json()[0]["id"]
    with patch.object(backend.listings, "delete", side_effect=StoreError("timeout")):
        resp = c.delete(f"/owner/listings/{listing_id}")
    assert resp.status_code == 502
    assert resp.json()["detail"] == "Error deleting property"
    assert backend.listings.get(listing_id) is not None


# ── Notifications and insights ───────────────────────────────────────────


def _tenant_likes(c, *titles: str) -> None:
    tenant = TestClient(c.app)
    _login(tenant, DEMO_TENANT)
    by_title = {listing["title"]: listing["id"] for listing in tenant.get("/listings").json()["listings"]}
    for title in titles:
        tenant.post(f"/favorites/{by_title[title]}/toggle")


def test_notifications_and_acknowledge(setup):
    c, _ = setup
    assert c.get("/owner/notifications").json() == {"notifications": [], "unread": 0}

    _tenant_likes(c, "Whitefield 2BHK", "Indiranagar studio")
    body = c.get("/owner/notifications").json()
    assert body["unread"] == 2
    newest = body["notifications"][0]
    assert "Indiranagar studio" in newest["message"]

    resp = c.post(f"/owner/notifications/{newest['id']}/read")
    assert resp.status_code == 200
    assert resp.json()["is_read"] is True
    assert c.get("/owner/notifications").json()["unread"] == 1


def test_acknowledge_unknown_notification(setup):
    c, _ = setup
    assert c.post("/owner/notifications/nope/read").status_code == 404


def test_notifications_are_private_to_owner(setup):
    c, _ = setup
    _tenant_likes(c, "Whitefield 2BHK")
    other = _second_owner(c)
    assert other.get("/owner/notifications").json()["unread"] == 0
    notification_id = c.get("/owner/notifications").json()["notifications"][0]["id"]
    assert other.post(f"/owner/notifications/{notification_id}/read").status_code == 404


def test_insights(setup):
    c, _ = setup
    _tenant_likes(c, "Whitefield 2BHK")
    body = c.get("/owner/insights").json()
    assert body["total_likes"] == 1
    assert body["listings"][0]["title"] == "Whitefield 2BHK"
    assert body["listings"][0]["likes"] == 1
    assert len(body["listings"]) == 8
    assert body["most_liked"] == body["listings"][0]["listing_id"]


def test_insights_without_likes(setup):
    c, _ = setup
    body = c.get("/owner/insights").json()
    assert body["total_likes"] == 0
    assert body["most_liked"] is None


def test_deleted_listing_drops_out_of_tenant_favorites(setup):
    c, _ = setup
    _tenant_likes(c, "Whitefield 2BHK")
    tenant = TestClient(c.app)
    _login(tenant, DEMO_TENANT)
    listing_id = tenant.get("/favorites").json()[0]["id"]

    c.delete(f"/owner/listings/{listing_id}")

    assert tenant.get("/favorites").json() == []
    assert tenant.get("/listings").json()["favorite_ids"] == []
