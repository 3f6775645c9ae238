from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from babybook.config import Settings
from babybook.db.client import BackendClient
from babybook.db.errors import BackendError
from babybook.main import create_app

PASSWORD = "correct-horse-battery"


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'babybook.db'}",
        UPLOAD_FOLDER=str(tmp_path / "uploads"),
        SECRET_KEY="test-secret-key",
        STORAGE_BUCKET="aariv-media",
        STORAGE_PUBLIC_URL="/uploads",
        FIRST_ADMIN_EMAIL=None,
        FIRST_ADMIN_PASSWORD=None,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def backend(test_settings):
    backend = BackendClient.from_settings(test_settings)
    backend.create_all()
    yield backend
    backend.dispose()


@pytest.fixture
def client(test_settings, backend):
    app = create_app(test_settings, backend)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(backend):
    def _make_user(email, role=None):
        user = backend.auth.sign_up(email, PASSWORD)
        if role in ("admin", "both"):
            backend.table("admins").insert({"user_id": user.id, "email": email}).execute()
        if role in ("member", "both"):
            backend.table("members").insert({"user_id": user.id, "email": email}).execute()
        return user
    return _make_user


@pytest.fixture
def login(client):
    def _login(email):
        response = client.post("/login", data={"email": email, "password": PASSWORD}, follow_redirects=False)
        assert response.status_code == 303
        return response
    return _login


@pytest.fixture
def add_photos(backend):
    def _add_photos(count, visibility="public", caption="Photo"):
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        rows = [
            {
                "url": f"/uploads/aariv-media/gallery/{visibility}-{i}.jpg",
                "caption": f"{caption} {i}",
                "taken_at": start + timedelta(days=i),
                "tags": [],
                "visibility": visibility,
            }
            for i in range(count)
        ]
        return backend.table("photos").insert(rows).execute().data
    return _add_photos


class FailingQuery:
    """Stands in for a query whose every call ends in a backend error."""

    def __init__(self, error):
        self.error = error

    def __getattr__(self, name):
        return lambda *args, **kwargs: self

    def execute(self):
        raise self.error


class FailingBackend:
    def __init__(self, error):
        self.error = error
        self.tables = []

    def table(self, name):
        self.tables.append(name)
        return FailingQuery(self.error)


@pytest.fixture
def failing_backend():
    return FailingBackend(BackendError("permission denied for relation", code="42501"))
