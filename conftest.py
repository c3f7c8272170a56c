import pytest
from fastapi.testclient import TestClient

from academic_records.main import create_app
from academic_records.storage.memory import MemStorage


@pytest.fixture
def store():
    return MemStorage()


@pytest.fixture
def seeded_store():
    return MemStorage(seed=True)


@pytest.fixture
def client(seeded_store):
    with TestClient(create_app(seeded_store)) as test_client:
        yield test_client


@pytest.fixture
def login(client):
    def _login(username: str, password: str) -> dict:
        res = client.post("/api/auth/login", data={"username": username, "password": password})
        assert res.status_code == 200, res.text
        return {"Authorization": f"Bearer {res.json()['access_token']}"}

    return _login


@pytest.fixture
def admin_headers(login):
    return login("admin", "admin123")


@pytest.fixture
def faculty_headers(login):
    return login("professor.smith", "faculty123")


@pytest.fixture
def student_headers(login):
    return login("emma.wilson", "student123")


@pytest.fixture
def make_user(store):
    def _make_user(username, role="student", password="secret123", name=None):
        return store.create_user(
            {
                "username": username,
                "password": password,
                "email": f"{username}@college.edu",
                "role": role,
                "name": name or username.title(),
            }
        )

    return _make_user


@pytest.fixture
def make_course(store):
    def _make_course(code, status="active", title=None):
        return store.create_course(
            {
                "code": code,
                "title": title or f"Course {code}",
                "credits": 3,
                "department": "Science",
                "status": status,
            }
        )

    return _make_course
