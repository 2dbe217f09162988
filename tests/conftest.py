import pytest

from app.config import get_settings
from app.responder import Turn


@pytest.fixture
def history():
    return [Turn(role="assistant", content="Hello!"), Turn(role="user", content="...")]


@pytest.fixture
def fresh_settings(monkeypatch):
    """Lets a test patch env vars; settings are re-read on next access."""
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()
