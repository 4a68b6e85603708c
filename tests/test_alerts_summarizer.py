"""
Tests for the Flyover Gemini summarizer.
"""

import json
from unittest.mock import Mock

import pytest
import requests

from flyover.alerts.summarizer import GeminiSummarizer, build_prompt, extract_text
from flyover.errors import SummarizerError
from flyover.tracking.models import Detection

API_URL = "https://generativelanguage.googleapis.com/v1beta/models/gemini:generateContent"


@pytest.fixture
def detection():
    return Detection(
        id="A1", callsign="TK123", aircraft="B77W", registration="TC-JJA",
        airline="TK", from_iata="IST", to_iata="JFK", from_country="Istanbul",
        to_country="New York", distance=4, altitude=3500, speed=210,
        direction="North",
    )


def _session(payload, status_code=200):
    session = Mock()
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        error = requests.exceptions.HTTPError(f"{status_code}")
        error.response = response
        response.raise_for_status.side_effect = error
    session.post.return_value = response
    return session


class TestBuildPrompt:
    """Tests for build_prompt function."""

    def test_contains_instruction_and_json(self, detection):
        prompt = build_prompt(detection, "Where from, where to?")

        instruction, payload = prompt.split("\n\n", 1)
        assert instruction == "Where from, where to?"
        assert json.loads(payload)["callsign"] == "TK123"

    def test_default_instruction(self, detection):
        assert "country" in build_prompt(detection).split("\n\n", 1)[0]


class TestExtractText:
    """Tests for extract_text function."""

    def test_nested_text(self):
        payload = {"candidates": [{"content": {"parts": [{"text": " Turkey to USA \n"}]}}]}
        assert extract_text(payload) == "Turkey to USA"

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"candidates": []},
            {"candidates": [{"content": {}}]},
            {"candidates": [{"content": {"parts": [{"text": "   "}]}}]},
            None,
        ],
    )
    def test_missing_text(self, payload):
        assert extract_text(payload) is None


class TestGeminiSummarizer:
    """Tests for GeminiSummarizer class."""

    def test_summarize(self, detection):
        session = _session({"candidates": [{"content": {"parts": [{"text": "Turkey to USA"}]}}]})
        summarizer = GeminiSummarizer(API_URL, "secret", session=session)

        assert summarizer.summarize(detection) == "Turkey to USA"

        args, kwargs = session.post.call_args
        assert args[0] == API_URL
        assert kwargs["params"] == {"key": "secret"}
        prompt = kwargs["json"]["contents"][0]["parts"][0]["text"]
        assert "TK123" in prompt

    def test_http_error(self, detection):
        summarizer = GeminiSummarizer(API_URL, "secret", session=_session({}, 429))

        with pytest.raises(SummarizerError, match="429"):
            summarizer.summarize(detection)

    def test_network_error(self, detection):
        session = Mock()
        session.post.side_effect = requests.exceptions.ConnectionError("offline")
        summarizer = GeminiSummarizer(API_URL, "secret", session=session)

        with pytest.raises(SummarizerError):
            summarizer.summarize(detection)

    def test_empty_response(self, detection):
        summarizer = GeminiSummarizer(API_URL, "secret", session=_session({"candidates": []}))

        with pytest.raises(SummarizerError, match="no text"):
            summarizer.summarize(detection)
