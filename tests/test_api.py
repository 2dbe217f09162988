import logging
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

import app.main as main
from app.main import SessionStore, app, sessions
from app.prompts import CLARIFY_TEXT, EMERGENCY_TEXT, GREETING_TEXT


@pytest.fixture
def client():
    sessions.clear()
    with TestClient(app) as c:
        yield c
    sessions.clear()


@pytest.fixture
def session_id(client):
    return client.post("/sessions", json={}).json()["session_id"]


def test_healthz(client):
    assert client.get("/healthz").json() == {"ok": True}


def test_index_page(client):
    res = client.get("/")
    assert res.status_code == 200
    assert "AI Health Assistant" in res.text
    assert "Español" in res.text


def test_create_session_greets(client):
    res = client.post("/sessions", json={"language": "de"})
    assert res.status_code == 200
    body = res.json()
    assert body["language"] == "de"
    assert body["messages"] == [{"role": "assistant", "content": GREETING_TEXT}]


def test_create_session_rejects_unknown_language(client):
    assert client.post("/sessions", json={"language": "xx"}).status_code == 422


def test_chat_flow(client, session_id):
    res = client.post("/chat", json={"session_id": session_id, "message": "I have a fever and cough"})
    assert res.status_code == 200
    body = res.json()
    assert body["ok"] is True
    assert body["kind"] == "diagnosis"
    assert body["symptoms"] == ["fever", "cough"]
    assert body["emergency"] is False
    assert body["reply"].startswith("Based on your symptoms (fever, cough), You may have the flu.")
    assert [m["role"] for m in body["messages"]] == ["assistant", "user", "assistant"]

    res = client.post("/chat", json={"session_id": session_id, "message": "xyz123"})
    assert res.json()["reply"] == CLARIFY_TEXT
    assert len(client.get(f"/sessions/{session_id}").json()["messages"]) == 5


def test_chat_emergency_flag(client, session_id):
    body = client.post("/chat", json={"session_id": session_id, "message": "I have chest pain"}).json()
    assert body["emergency"] is True
    assert body["reply"] == EMERGENCY_TEXT


def test_chat_errors(client, session_id):
    assert client.post("/chat", json={"session_id": "nope", "message": "cough"}).status_code == 404
    assert client.post("/chat", json={"session_id": session_id, "message": "   "}).status_code == 400
    assert client.post("/chat", json={"session_id": session_id}).status_code == 422
    assert client.get("/sessions/nope").status_code == 404


def test_language_change(client, session_id):
    client.post("/chat", json={"session_id": session_id, "message": "cough"})
    res = client.post(f"/sessions/{session_id}/language", json={"language": "zh"})
    assert res.status_code == 200
    assert res.json()["language"] == "zh"
    assert len(res.json()["messages"]) == 1
    bad = client.post(f"/sessions/{session_id}/language", json={"language": "xx"})
    assert bad.status_code == 422


def test_stateless_respond(client):
    res = client.post("/respond", json={"message": "I have a fever", "history": []})
    assert res.json() == {"reply": GREETING_TEXT, "kind": "greeting"}
    history = [{"role": "assistant", "content": GREETING_TEXT}]
    res = client.post("/respond", json={"message": "xyz123", "history": history})
    assert res.json()["kind"] == "clarify"


def test_password_gate(client, fresh_settings):
    fresh_settings.setenv("DEMO_PASSWORD", "s3cret")
    assert client.post("/sessions", json={}).status_code == 401
    assert client.post("/sessions", json={"password": "wrong"}).status_code == 401
    res = client.post("/sessions", json={"password": "s3cret"})
    assert res.status_code == 200
    sid = res.json()["session_id"]
    assert client.post("/chat", json={"session_id": sid, "message": "cough"}).status_code == 401
    ok = client.post("/chat", json={"session_id": sid, "message": "cough", "password": "s3cret"})
    assert ok.status_code == 200
    assert client.get(f"/sessions/{sid}").status_code == 401
    assert client.get(f"/sessions/{sid}", params={"password": "wrong"}).status_code == 401
    snapshot = client.get(f"/sessions/{sid}", params={"password": "s3cret"})
    assert snapshot.status_code == 200
    assert len(snapshot.json()["messages"]) == 3


def test_session_store_evicts_oldest():
    store = SessionStore(max_sessions=2)
    first = store.create("en")
    second = store.create("en")
    third = store.create("es")
    assert len(store) == 2
    assert store.get(first) is None
    assert store.get(second) is not None
    assert store.get(third).language == "es"


def test_message_text_logged_redacted_when_allowed(client, session_id, fresh_settings, caplog):
    fresh_settings.setenv("ALLOW_LOGGING", "true")
    caplog.set_level(logging.INFO, logger="medassist")
    client.post("/chat", json={"session_id": session_id, "message": "write to jo@example.com about my cough"})
    assert "CHAT_REQUEST" in caplog.text
    assert "[REDACTED_EMAIL]" in caplog.text
    assert "jo@example.com" not in caplog.text


def test_message_text_not_logged_by_default(client, session_id, fresh_settings, caplog):
    fresh_settings.delenv("ALLOW_LOGGING", raising=False)
    caplog.set_level(logging.INFO, logger="medassist")
    res = client.post("/chat", json={"session_id": session_id, "message": "write to jo@example.com about my cough"})
    assert res.status_code == 200
    assert "CHAT_REQUEST" not in caplog.text
    assert "jo@example.com" not in caplog.text
    assert "about my cough" not in caplog.text


def test_thinking_delay_is_awaited(client, session_id, fresh_settings, monkeypatch):
    fresh_settings.setenv("RESPONSE_DELAY_MS", "250")
    waits = []

    async def fake_sleep(seconds):
        waits.append(seconds)

    monkeypatch.setattr(main, "asyncio", SimpleNamespace(sleep=fake_sleep))
    res = client.post("/chat", json={"session_id": session_id, "message": "xyz123"})
    assert res.status_code == 200
    assert res.json()["reply"] == CLARIFY_TEXT
    assert waits == [0.25]
