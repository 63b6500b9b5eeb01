"""Shared fixtures: an in-process API client and a fake chat model."""

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.app import app
import src.llm.invoker as invoker


class FakeMessage:
    def __init__(self, content):
        self.content = content


class FakeLLM:
    """Stands in for ChatOpenAI. Replies are consumed in order; an
    Exception instance in the list is raised instead of returned."""

    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []
        self.temperatures = []

    async def ainvoke(self, messages):
        self.calls.append(messages)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        return FakeMessage(reply)


@pytest.fixture
def fake_llm(monkeypatch):
    """Install a FakeLLM; call the returned function with the replies."""

    def install(*replies):
        llm = FakeLLM(replies)

        def get_llm(temperature=None):
            llm.temperatures.append(temperature)
            return llm

        monkeypatch.setattr(invoker, "get_llm", get_llm)
        return llm

    return install


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
