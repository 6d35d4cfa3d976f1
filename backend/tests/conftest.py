import base64
import json
import sys
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def _test_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ENV", "development")
    monkeypatch.setenv("ALLOW_UNVERIFIED_JWT_DEV", "true")
    monkeypatch.delenv("AUTH_JWT_SECRET", raising=False)
    monkeypatch.setenv("QA_MODE", "true")
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")
    monkeypatch.setenv("VAPI_WEB_TOKEN", "test-web-token")
    monkeypatch.setenv("VAPI_ASSISTANT_ID", "test-assistant")


@pytest.fixture
def store():
    """Fresh in-memory document store installed as the process default."""
    from mockinterview.db.store import JsonDocumentStore, set_store

    memory_store = JsonDocumentStore(None)
    set_store(memory_store)
    yield memory_store
    set_store(None)


@pytest.fixture
def dev_jwt_token() -> str:
    def _enc(obj: dict) -> str:
        raw = json.dumps(obj, separators=(",", ":")).encode("utf-8")
        return base64.urlsafe_b64encode(raw).decode("utf-8").rstrip("=")

    header = _enc({"alg": "none", "typ": "JWT"})
    payload = _enc({"sub": "pytest-user", "iat": 0})
    return f"{header}.{payload}."


@pytest.fixture
def auth_headers(dev_jwt_token: str) -> dict:
    return {"Authorization": f"Bearer {dev_jwt_token}"}
