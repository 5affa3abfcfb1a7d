import pytest
from fastapi.testclient import TestClient

from cafeops.core.config import Settings
from cafeops.main import create_app


@pytest.fixture
def settings(tmp_path):
    s = Settings()
    s.database_url = f"sqlite+aiosqlite:///{tmp_path / 'cafeops-test.db'}"
    s.database_echo = False
    s.environment = "test"
    s.frontend_url = "http://localhost:3000"
    s.minimum_staff_count = 3
    return s


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_item(client):
    def _make(**overrides):
        body = {"item_name": "House blend", "current_stock": 0, "minimum_stock": 0}
        body.update(overrides)
        res = client.post("/api/inventory", json=body)
        assert res.status_code == 201, res.text
        return res.json()

    return _make


@pytest.fixture
def make_shift(client):
    def _make(**overrides):
        body = {
            "employee_name": "Taro",
            "date": "2024-01-15",
            "start_time": "09:00",
            "end_time": "17:00",
        }
        body.update(overrides)
        res = client.post("/api/shifts", json=body)
        assert res.status_code == 201, res.text
        return res.json()

    return _make


@pytest.fixture
def make_notice(client):
    def _make(**overrides):
        body = {"title": "Staff meeting", "content": "Friday 18:00 in the back room."}
        body.update(overrides)
        res = client.post("/api/notices", json=body)
        assert res.status_code == 201, res.text
        return res.json()

    return _make
