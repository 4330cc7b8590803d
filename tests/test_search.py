# tests/test_search.py
import json

import pytest
import requests

from conftest import CV_REFERENCE, FakeResponse, answer_payload
from folio.core.errors import ContentNotLoadedError, SearchServiceError, UnexpectedResponseError
from folio.core.services.generative_service import HttpProxy
from folio.core.services.reference_service import ReferenceText
from folio.core.services.search_service import SearchOrchestrator, extract_answer


class RecordingProxy:
    def __init__(self, response=None, error=None):
        self.calls = []
        self.response = response if response is not None else answer_payload("An answer")
        self.error = error

    def forward(self, query, cv_text="", context_text=""):
        self.calls.append((query, cv_text, context_text))
        if self.error is not None:
            raise self.error
        return self.response


def parse_events(body):
    return [json.loads(line[len("data: "):]) for line in body.split("\n\n") if line.startswith("data: ")]


@pytest.mark.parametrize("query", ["", "   ", "\n\t"])
def test_blank_query_clears_without_network(query):
    proxy = RecordingProxy()
    outcome = SearchOrchestrator(CV_REFERENCE, proxy).search(query)
    assert outcome.cleared
    assert proxy.calls == []


def test_missing_reference_text_fails_without_network():
    proxy = RecordingProxy()
    with pytest.raises(ContentNotLoadedError, match="content not loaded"):
        SearchOrchestrator(ReferenceText(), proxy).search("What languages?")
    assert proxy.calls == []


def test_context_text_alone_is_enough():
    proxy = RecordingProxy()
    reference = ReferenceText(context_text="Notes only")
    assert SearchOrchestrator(reference, proxy).search("Anything?").answer == "An answer"


def test_one_call_per_search_even_for_repeats():
    proxy = RecordingProxy()
    orchestrator = SearchOrchestrator(CV_REFERENCE, proxy)
    orchestrator.search("  Where does Omar work?  ")
    orchestrator.search("Where does Omar work?")
    assert proxy.calls == [
        ("Where does Omar work?", CV_REFERENCE.cv_text, CV_REFERENCE.context_text),
        ("Where does Omar work?", CV_REFERENCE.cv_text, CV_REFERENCE.context_text),
    ]


@pytest.mark.parametrize("payload", [
    {},
    {"candidates": []},
    {"candidates": [{"finishReason": "SAFETY"}]},
    {"candidates": [{"content": {"parts": []}}]},
    [],
])
def test_unexpected_response_shapes(payload):
    with pytest.raises(UnexpectedResponseError, match="Unexpected response format"):
        extract_answer(payload)


def test_transport_errors_become_search_errors():
    proxy = RecordingProxy(error=requests.ConnectionError("network down"))
    with pytest.raises(SearchServiceError, match="network down"):
        SearchOrchestrator(CV_REFERENCE, proxy).search("Skills?")


def test_http_proxy_reports_status(fake_post):
    fake_post.response = FakeResponse(500, {"error": "API key not configured"})
    with pytest.raises(SearchServiceError, match="Search service error: 500"):
        HttpProxy("https://example.test/.netlify/functions/search").forward("Skills?", "cv", "")
    url, kwargs = fake_post.calls[0]
    assert url == "https://example.test/.netlify/functions/search"
    assert kwargs["json"] == {"query": "Skills?", "cvText": "cv", "contextText": ""}


def test_search_endpoint_success(make_client, fake_post):
    client = make_client(reference=CV_REFERENCE, gemini_api_key="secret")
    response = client.post("/api/v1/search/", json={"query": "What does Omar do?"})
    assert response.status_code == 200
    body = response.json()
    assert body["answer"] == "Omar is a **Python** developer."
    assert body["html"] == "<p>Omar is a <strong>Python</strong> developer.</p>"
    assert len(fake_post.calls) == 1


def test_search_endpoint_blank_query(make_client, fake_post):
    client = make_client(reference=CV_REFERENCE, gemini_api_key="secret")
    response = client.post("/api/v1/search/", json={"query": "  "})
    assert response.json() == {"query": "", "cleared": True, "answer": "", "html": ""}
    assert fake_post.calls == []


def test_search_endpoint_content_not_loaded(make_client, fake_post):
    response = make_client(gemini_api_key="secret").post("/api/v1/search/", json={"query": "Skills?"})
    assert response.status_code == 503
    assert "CV content not loaded" in response.json()["error"]
    assert fake_post.calls == []


def test_search_endpoint_unexpected_format(make_client, fake_post):
    fake_post.response = FakeResponse(200, {"promptFeedback": {}})
    client = make_client(reference=CV_REFERENCE, gemini_api_key="secret")
    response = client.post("/api/v1/search/", json={"query": "Skills?"})
    assert response.status_code == 502
    assert response.json() == {"error": "Error: Unexpected response format from API. Please try again."}


def test_search_endpoint_without_credential(make_client, fake_post):
    response = make_client(reference=CV_REFERENCE).post("/api/v1/search/", json={"query": "Skills?"})
    assert response.status_code == 500
    assert "API key not configured" in response.json()["error"]
    assert fake_post.calls == []


def test_search_through_remote_proxy(make_client, fake_post):
    client = make_client(reference=CV_REFERENCE, proxy_url="https://example.test/proxy")
    response = client.post("/api/v1/search/", json={"query": "Skills?"})
    assert response.status_code == 200
    assert fake_post.calls[0][0] == "https://example.test/proxy"


def test_stream_reveals_chunks_then_html(make_client, fake_post):
    fake_post.response = FakeResponse(200, answer_payload("* one\n* two"))
    client = make_client(reference=CV_REFERENCE, gemini_api_key="secret", reveal_chunk_size=3)
    response = client.post("/api/v1/search/stream", json={"query": "List things"})

    assert response.headers["content-type"].startswith("text/event-stream")
    events = parse_events(response.text)
    chunks = [e["content"] for e in events if e["type"] == "chunk"]
    assert chunks == ["* o", "ne\n", "* t", "wo"]
    assert events[-1] == {"type": "html", "content": "<ul><li>one</li><li>two</li></ul>"}
    assert "folio_session" in response.cookies


def test_stream_reports_errors(make_client, fake_post):
    fake_post.response = FakeResponse(200, {})
    client = make_client(reference=CV_REFERENCE, gemini_api_key="secret")
    events = parse_events(client.post("/api/v1/search/stream", json={"query": "Skills?"}).text)
    assert events == [{"type": "error", "content": "Error: Unexpected response format from API. Please try again."}]


def test_stream_blank_query(make_client, fake_post):
    client = make_client(reference=CV_REFERENCE, gemini_api_key="secret")
    events = parse_events(client.post("/api/v1/search/stream", json={"query": ""}).text)
    assert events == [{"type": "cleared", "content": ""}]
    assert fake_post.calls == []
