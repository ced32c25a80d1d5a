import json
from types import SimpleNamespace

import pytest

from basket.api import api_ai


class FakeCompletions:
    """Stands in for client.chat.completions; records every request."""

    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    def __init__(self, content=None, error=None):
        if isinstance(content, dict):
            content = json.dumps(content)
        self.completions = FakeCompletions(content, error)
        self.chat = SimpleNamespace(completions=self.completions)

    @property
    def calls(self):
        return self.completions.calls

    def user_prompt(self, index=-1):
        return self.calls[index]["messages"][1]["content"]


@pytest.fixture
def fake_openai(monkeypatch):
    """Install a fake OpenAI client for the gateways; returns a factory."""
    def install(content=None, error=None):
        client = FakeOpenAI(content, error)
        monkeypatch.setattr(api_ai, "_get_openai_client", lambda: client)
        return client
    return install
