"""
Pytest fixtures: a stub completion client and an API client wired to it
"""
import pytest
from fastapi.testclient import TestClient

from quote_geometry.main import app
from quote_geometry.services.analyzer import QuoteAnalyzer
from quote_geometry.services.deps import get_analyzer
from quote_geometry.services.llm_client import CompletionError


class StubLLM:
    """Replays canned replies in order. An Exception instance is raised instead of returned."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    def complete(self, messages):
        self.calls.append(messages)
        reply = self.replies[(len(self.calls) - 1) % len(self.replies)]
        if isinstance(reply, Exception):
            raise reply
        return reply


GOOD_REPLY = '{"sentiment":0.8,"intensity":0.6,"complexity":0.4,"agency":0.7,"themes":["love","loss","hope"]}'
GOOD_ANALYSIS = {
    "sentiment": 0.8,
    "intensity": 0.6,
    "complexity": 0.4,
    "agency": 0.7,
    "themes": ["love", "loss", "hope"],
}
NETWORK_FAILURE = CompletionError("OpenAI request failed: APIConnectionError: Connection error.")


@pytest.fixture
def make_client():
    """Return a factory building a TestClient whose analyzer talks to a StubLLM."""

    def _make(*replies):
        llm = StubLLM(*replies)
        app.dependency_overrides[get_analyzer] = lambda: QuoteAnalyzer(llm)
        return TestClient(app), llm

    yield _make
    app.dependency_overrides.clear()
