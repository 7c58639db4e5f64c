from datetime import date, timedelta

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from lawncare_api.app.core.config import Settings
from lawncare_api.app.main import create_app
from lawncare_api.app.storage import MemoryStorage, SQLiteStorage


ADMIN_USERNAME = "admin@lawncare.test"
ADMIN_PASSWORD = "correct horse battery staple"


def make_booking_payload(**overrides):
    payload = {
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "jane@example.com",
        "phone": "555-0100",
        "address": "12 Elm Street",
        "city": "Springfield",
        "zipCode": "12345",
        "serviceType": "standard",
        "lawnSize": 1000,
        "lawnCondition": "good",
        "obstacles": "Trampoline in the back yard",
        "serviceDate": (date.today() + timedelta(days=7)).isoformat(),
        "serviceTime": "morning",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def booking_payload():
    return make_booking_payload


@pytest_asyncio.fixture(params=["memory", "sqlite"])
async def storage(request, tmp_path):
    if request.param == "memory":
        backend = MemoryStorage()
    else:
        backend = SQLiteStorage(str(tmp_path / "lawncare-test.db"))
    await backend.open()
    yield backend
    await backend.close()


@pytest.fixture(params=["memory", "sqlite"])
def settings(request, tmp_path):
    return Settings(
        secret_key="test-secret",
        storage_backend=request.param,
        database_url=str(tmp_path / "lawncare-app.db"),
        admin_username=ADMIN_USERNAME,
        admin_password=ADMIN_PASSWORD,
        enforce_status_transitions=False,
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def login_headers(test_client, username, password):
    response = test_client.post("/api/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['accessToken']}"}


@pytest.fixture
def admin_headers(client):
    return login_headers(client, ADMIN_USERNAME, ADMIN_PASSWORD)


@pytest.fixture
def user_headers(client):
    response = client.post("/api/register", json={"username": "customer", "password": "hunter22"})
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['accessToken']}"}
