"""Shared pytest fixtures.

Provides:
- ``FakeChatClient``: stands in for the DeepSeek client, returns canned replies or raises
- ``fake_llm``: a fresh FakeChatClient per test
- ``client``: httpx AsyncClient bound to the FastAPI app, with ``fake_llm`` injected
"""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from jiaowotong.api.deps import get_chat_client
from jiaowotong.main import app


class FakeChatClient:
    """Replays ``responses`` in order; an Exception item is raised instead of returned."""

    def __init__(self, responses=None, error: Exception | None = None):
        self.responses = list(responses or [])
        self.error = error
        self.calls: list[dict] = []

    async def call(self, messages, temperature=0.7):
        self.calls.append({"messages": messages, "temperature": temperature})
        if self.error is not None:
            raise self.error
        item = self.responses.pop(0) if self.responses else ""
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def fake_llm() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
async def client(fake_llm):
    app.dependency_overrides[get_chat_client] = lambda: fake_llm
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
