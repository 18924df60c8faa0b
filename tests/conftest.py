"""
Pytest configuration and fixtures
"""
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlmodel import select

from codeclash.core.config import Settings
from codeclash.core.dependencies import get_judge_client
from codeclash.main import create_app

ACCEPTED_RESULT = {
    "stdout": "3\n",
    "time": "0.01",
    "memory": 3172,
    "stderr": None,
    "compile_output": None,
    "message": None,
    "status": {"id": 3, "description": "Accepted"},
}


class FakeJudge:
    """Stands in for Judge0Client; records every call"""

    def __init__(self, result: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
        self.result = result if result is not None else dict(ACCEPTED_RESULT)
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def submit(self, source_code: str, language_id: int, stdin: str = "", expected_output: str = ""):
        self.calls.append({
            "source_code": source_code,
            "language_id": language_id,
            "stdin": stdin,
            "expected_output": expected_output,
        })
        if self.error is not None:
            raise self.error
        return self.result

    async def close(self):
        pass


@pytest.fixture
def settings():
    return Settings(
        DATABASE_URL="sqlite+aiosqlite://",
        ENVIRONMENT="development",
        RATE_LIMIT_ENABLED=False,
        RATE_LIMIT_SIGNUP="1000/minute",
        RATE_LIMIT_LOGIN="1000/minute",
        JUDGE0_API_URL="http://judge0.test",
    )


@pytest.fixture
def fake_judge():
    return FakeJudge()


@pytest.fixture
def app(settings, fake_judge):
    application = create_app(settings)
    application.dependency_overrides[get_judge_client] = lambda: fake_judge
    return application


@pytest.fixture
def client(app):
    """Test client with lifespan running (fresh in-memory database per test)"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def fetch_all(app, client):
    """Read every row of a table through the app's own engine"""
    def _fetch(model):
        async def _query():
            async with app.state.session_factory() as session:
                result = await session.execute(select(model))
                return result.scalars().all()
        return client.portal.call(_query)
    return _fetch


@pytest.fixture
def register_user(client):
    """Register and log in a user; returns the user's id"""
    def _register(email: str, role: str = "student", full_name: str = "Test User", password: str = "secret123"):
        response = client.post("/api/register", json={
            "email": email,
            "password": password,
            "full_name": full_name,
            "role": role,
        })
        assert response.status_code == 201, response.text
        login = client.post("/api/login", json={"email": email, "password": password})
        assert login.status_code == 200, login.text
        return login.json()["user"]["id"]
    return _register


@pytest.fixture
def teacher_id(register_user):
    return register_user("teacher@example.com", role="teacher", full_name="Ada Teacher")


@pytest.fixture
def contest(client, teacher_id):
    response = client.post("/api/contests", json={
        "title": "Weekly Round 1",
        "description": "Warm-up problems",
        "teacher_id": teacher_id,
        "start_time": "2026-11-01T10:00:00",
        "end_time": "2026-11-01T12:00:00",
    })
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def question(client, contest):
    response = client.post("/api/questions", json={
        "contest_id": contest["id"],
        "title": "A + B",
        "description": "Print the sum of two integers.",
        "sample_input": "1 2",
        "sample_output": "3",
        "hidden_input": "40 2",
        "hidden_output": "42",
        "difficulty": "easy",
        "points": 100,
        "starter_code": "a, b = map(int, input().split())",
    })
    assert response.status_code == 201, response.text
    return response.json()
