from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from lawncare_api.app.main import create_app
from lawncare_api.app.storage import MemoryStorage


ADMIN_ROUTES = [
    ("get", "/api/admin/bookings", None),
    ("get", "/api/admin/bookings/status/pending", None),
    ("patch", "/api/admin/bookings/1/status", {"status": "approved"}),
    ("get", "/api/admin/dashboard/stats", None),
]


def _call(client, method, path, body, headers=None):
    if body is None:
        return getattr(client, method)(path, headers=headers)
    return getattr(client, method)(path, json=body, headers=headers)


def _create(client, payload):
    response = client.post("/api/bookings", json=payload)
    assert response.status_code == 201
    return response.json()


@pytest.mark.parametrize("method, path, body", ADMIN_ROUTES)
def test_admin_routes_require_authentication(client, method, path, body):
    response = _call(client, method, path, body)
    assert response.status_code == 401


@pytest.mark.parametrize("method, path, body", ADMIN_ROUTES)
def test_admin_routes_reject_invalid_token(client, method, path, body):
    response = _call(client, method, path, body, headers={"Authorization": "Bearer forged.token.value"})
    assert response.status_code == 401


@pytest.mark.parametrize("method, path, body", ADMIN_ROUTES)
def test_admin_routes_forbid_regular_users(client, user_headers, method, path, body):
    response = _call(client, method, path, body, headers=user_headers)
    assert response.status_code == 403


def test_list_bookings_newest_first(client, admin_headers, booking_payload):
    created = [_create(client, booking_payload(firstName=name)) for name in ("Ann", "Bob", "Cid")]
    response = client.get("/api/admin/bookings", headers=admin_headers)
    assert response.status_code == 200
    assert [b["id"] for b in response.json()] == [c["id"] for c in reversed(created)]


def test_list_bookings_by_status(client, admin_headers, booking_payload):
    later = _create(client, booking_payload(serviceDate=(date.today() + timedelta(days=20)).isoformat()))
    sooner = _create(client, booking_payload(serviceDate=(date.today() + timedelta(days=3)).isoformat()))
    moved = _create(client, booking_payload())
    client.patch(f"/api/admin/bookings/{moved['id']}/status", json={"status": "approved"}, headers=admin_headers)

    response = client.get("/api/admin/bookings/status/pending", headers=admin_headers)
    assert response.status_code == 200
    assert [b["id"] for b in response.json()] == [sooner["id"], later["id"]]

    response = client.get("/api/admin/bookings/status/completed", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == []


def test_list_bookings_by_invalid_status(client, admin_headers):
    response = client.get("/api/admin/bookings/status/archived", headers=admin_headers)
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid booking status"}


def test_update_booking_status(client, admin_headers, booking_payload):
    created = _create(client, booking_payload())
    response = client.patch(
        f"/api/admin/bookings/{created['id']}/status",
        json={"status": "approved"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["status"] == "approved"
    assert response.json()["price"] == created["price"]
    assert client.get(f"/api/bookings/{created['id']}").json()["status"] == "approved"


def test_any_status_can_follow_any_other_by_default(client, admin_headers, booking_payload):
    created = _create(client, booking_payload())
    url = f"/api/admin/bookings/{created['id']}/status"
    for new_status in ("completed", "pending", "cancelled", "approved"):
        response = client.patch(url, json={"status": new_status}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["status"] == new_status


@pytest.mark.parametrize("body", [{"status": "paid"}, {"status": None}, {}])
def test_update_booking_status_invalid_status(client, admin_headers, booking_payload, body):
    created = _create(client, booking_payload())
    response = client.patch(f"/api/admin/bookings/{created['id']}/status", json=body, headers=admin_headers)
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid booking status"}


def test_update_booking_status_invalid_id(client, admin_headers):
    response = client.patch("/api/admin/bookings/abc/status", json={"status": "approved"}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid booking ID"}


def test_update_unknown_booking_status(client, admin_headers):
    response = client.patch("/api/admin/bookings/31/status", json={"status": "approved"}, headers=admin_headers)
    assert response.status_code == 404
    assert client.get("/api/admin/bookings", headers=admin_headers).json() == []


def test_update_status_of_id_beyond_integer_range(client, admin_headers):
    response = client.patch(
        "/api/admin/bookings/99999999999999999999/status",
        json={"status": "approved"},
        headers=admin_headers,
    )
    assert response.status_code == 404


def test_dashboard_stats(client, admin_headers, booking_payload):
    standard = _create(client, booking_payload(serviceType="standard", lawnSize=1000))
    premium = _create(client, booking_payload(serviceType="premium", lawnSize=2000))
    complete = _create(client, booking_payload(serviceType="complete", lawnSize=500))
    _create(client, booking_payload())

    for booking, new_status in ((standard, "approved"), (premium, "completed"), (complete, "cancelled")):
        client.patch(f"/api/admin/bookings/{booking['id']}/status", json={"status": new_status}, headers=admin_headers)

    response = client.get("/api/admin/dashboard/stats", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {
        "totalBookings": 4,
        "pendingBookings": 1,
        "completedBookings": 1,
        "totalRevenue": 165.0,
    }


def test_enforced_transitions_return_conflict(settings, booking_payload):
    settings.enforce_status_transitions = True
    with TestClient(create_app(settings)) as client:
        login = client.post("/api/login", json={"username": settings.admin_username, "password": settings.admin_password})
        headers = {"Authorization": f"Bearer {login.json()['accessToken']}"}
        created = _create(client, booking_payload())
        url = f"/api/admin/bookings/{created['id']}/status"

        response = client.patch(url, json={"status": "completed"}, headers=headers)
        assert response.status_code == 409
        assert "pending" in response.json()["message"]

        assert client.patch(url, json={"status": "approved"}, headers=headers).status_code == 200
        assert client.patch(url, json={"status": "completed"}, headers=headers).status_code == 200


class BrokenStorage(MemoryStorage):
    async def get_all_bookings(self):
        raise RuntimeError("database is on fire")


def test_unexpected_errors_become_generic_500(settings):
    app = create_app(settings, storage=BrokenStorage())
    with TestClient(app, raise_server_exceptions=False) as client:
        login = client.post("/api/login", json={"username": settings.admin_username, "password": settings.admin_password})
        headers = {"Authorization": f"Bearer {login.json()['accessToken']}"}
        response = client.get("/api/admin/bookings", headers=headers)
    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}
    assert "fire" not in response.text
