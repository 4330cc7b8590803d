# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from folio.core.config import Settings, get_settings
from folio.core.services.reference_service import ReferenceText
from folio.dependencies import get_reference
from folio.main import app

CV_REFERENCE = ReferenceText(cv_text="Omar Alodwan. Python developer.", context_text="Open to remote work.", source="cvtxt.txt")


def answer_payload(text):
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakePost:
    """Stands in for requests.post and records every outbound call."""

    def __init__(self):
        self.calls = []
        self.response = FakeResponse(200, answer_payload("Omar is a **Python** developer."))

    def __call__(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


@pytest.fixture
def fake_post(monkeypatch):
    fake = FakePost()
    monkeypatch.setattr("requests.post", fake)
    return fake


@pytest.fixture
def make_client():
    def make(reference=None, **overrides):
        overrides.setdefault("gemini_api_key", "")
        overrides.setdefault("proxy_url", "")
        overrides.setdefault("reveal_interval", 0)
        app.dependency_overrides[get_settings] = lambda: Settings(**overrides)
        app.dependency_overrides[get_reference] = lambda: reference if reference is not None else ReferenceText()
        return TestClient(app)

    yield make
    app.dependency_overrides.clear()
