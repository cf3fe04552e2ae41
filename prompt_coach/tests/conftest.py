import json

import pytest


FEEDBACK = {"pros": ["Good point"], "cons": ["Bad point"], "improvedPrompt": "Improved version"}


class FakeProvider:
    """Records every generate() call and replies with a canned text."""

    def __init__(self, reply=None, error=None):
        self.reply = json.dumps(FEEDBACK) if reply is None else reply
        self.error = error
        self.calls = []
        self.api_keys = []

    def factory(self, api_key):
        self.api_keys.append(api_key)
        return self

    async def generate(self, model, segments):
        self.calls.append((model, list(segments)))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-api-key")
    monkeypatch.delenv("LLM_API_KEY", raising=False)
    return "test-api-key"


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("LLM_API_KEY", raising=False)


@pytest.fixture
def provider():
    return FakeProvider()
