from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from blogstudio import config
from blogstudio.generation import gateway as gateway_module
from blogstudio.main import app


#============================================
def make_stub_client(replies=None, error=None):
    """
    Build a chat-completions stand-in that returns `replies` in order
    (or raises `error`) and records every call's keyword arguments.
    """
    calls = []

    def create(**kwargs):
        calls.append(kwargs)
        if error is not None:
            raise error
        content = replies[len(calls) - 1]
        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    completions = SimpleNamespace(create=create)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions), calls=calls)


#============================================
@pytest.fixture
def client(tmp_path, monkeypatch):
    """
    TestClient bound to a fresh SQLite file and no generation backend.
    """
    monkeypatch.setattr(config, "SQLITE_DB_PATH", tmp_path / "test.db")
    monkeypatch.setattr(gateway_module, "GROQ_API_KEY", "")
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


#============================================
@pytest.fixture
def register(client):
    """
    Factory: register a user and return its Authorization headers.
    """
    def _register(username: str) -> dict:
        response = client.post(
            "/api/auth/register",
            json={"username": username, "password": "correct-horse"},
        )
        assert response.status_code == 201, response.text
        token = response.json()["accessToken"]
        return {"Authorization": f"Bearer {token}"}
    return _register


#============================================
@pytest.fixture
def alice(register):
    return register("alice")


#============================================
@pytest.fixture
def bob(register):
    return register("bob")
