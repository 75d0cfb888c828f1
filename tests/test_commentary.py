"""
Tests for the commentary client. The HTTP transport is faked.
"""
import json

import pytest
from google.auth.exceptions import TransportError

from handcricket.engine.commentary import (
    CommentaryService, FALLBACK_COMMENTARY, MatchSummary, build_prompt,
)


class FakeResponse:
    def __init__(self, status=200, data=b""):
        self.status = status
        self.data = data
        self.headers = {}


class FakeTransport:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def __call__(self, url, method="GET", body=None, headers=None, timeout=None, **kwargs):
        self.calls.append({"url": url, "method": method, "body": body, "headers": headers, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


def _ok(text):
    payload = {"candidates": [{"content": {"parts": [{"text": text}]}}]}
    return FakeResponse(200, json.dumps(payload).encode("utf-8"))


@pytest.fixture
def summary():
    return MatchSummary(player_score=42, computer_score=30, target=31, result_title="You Won! 🎉")


def _service(transport, api_key="test-key"):
    return CommentaryService(api_key=api_key, model="gemini-test", timeout=5, transport=transport)


class TestSummary:
    def test_summary_text(self, summary):
        text = summary.to_text()
        assert "Player Score: 42" in text
        assert "Computer Score: 30" in text
        assert "Target: 31" in text
        assert "Result: You Won! 🎉" in text

    def test_target_not_set(self):
        summary = MatchSummary(player_score=0, computer_score=0, target=0, result_title="")
        assert "Target: Not set" in summary.to_text()

    def test_prompt_embeds_summary(self, summary):
        prompt = build_prompt(summary)
        assert summary.to_text() in prompt
        assert "Hand Cricket" in prompt


class TestCommentate:
    def test_returns_generated_text(self, summary):
        transport = FakeTransport(_ok("  What a chase!  \n"))

        assert _service(transport).commentate(summary) == "What a chase!"

        call = transport.calls[0]
        assert call["method"] == "POST"
        assert call["url"].endswith("/gemini-test:generateContent")
        assert call["headers"]["x-goog-api-key"] == "test-key"
        assert call["timeout"] == 5
        body = json.loads(call["body"])
        assert "Player Score: 42" in body["contents"][0]["parts"][0]["text"]

    def test_no_api_key_skips_request(self, summary):
        transport = FakeTransport(_ok("unused"))

        assert _service(transport, api_key="").commentate(summary) == FALLBACK_COMMENTARY
        assert transport.calls == []

    def test_network_failure_falls_back(self, summary):
        transport = FakeTransport(error=TransportError("connection refused"))

        assert _service(transport).commentate(summary) == FALLBACK_COMMENTARY

    def test_http_error_falls_back(self, summary):
        transport = FakeTransport(FakeResponse(503, b'{"error": "unavailable"}'))

        assert _service(transport).commentate(summary) == FALLBACK_COMMENTARY

    @pytest.mark.parametrize("data", [
        b"<html>oops</html>",
        b"{}",
        b'{"candidates": []}',
        b'{"candidates": [{"content": {"parts": [{}]}}]}',
        b'{"candidates": [{"content": {"parts": [{"text": "   "}]}}]}',
        b'{"candidates": [{"content": {"parts": [{"text": 7}]}}]}',
    ])
    def test_malformed_response_falls_back(self, summary, data):
        transport = FakeTransport(FakeResponse(200, data))

        assert _service(transport).commentate(summary) == FALLBACK_COMMENTARY
