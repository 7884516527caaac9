import asyncio
from types import SimpleNamespace

import pytest
from conftest import FakeLLM

from exambuddy.core.config import Settings
from exambuddy.core.errors import ClientDisconnectedError, UpstreamError
from exambuddy.services.llm import build_openai_client, chat_completion, run_until_disconnected


class FakeRequest:
    def __init__(self, disconnect_after=0):
        self.polls = 0
        self.disconnect_after = disconnect_after
        self.url = SimpleNamespace(path="/api/generate-question")

    async def is_disconnected(self):
        self.polls += 1
        return self.polls > self.disconnect_after


async def test_returns_result_of_fast_call():
    async def fast():
        return "done"

    assert await run_until_disconnected(FakeRequest(), fast(), poll_seconds=0.5) == "done"


async def test_cancels_call_when_client_leaves():
    cancelled = asyncio.Event()

    async def slow():
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise

    request = FakeRequest(disconnect_after=2)
    with pytest.raises(ClientDisconnectedError):
        await run_until_disconnected(request, slow(), poll_seconds=0.01)
    await asyncio.sleep(0)
    assert cancelled.is_set()
    assert request.polls == 3


async def test_propagates_call_errors():
    async def failing():
        raise UpstreamError("boom")

    with pytest.raises(UpstreamError):
        await run_until_disconnected(FakeRequest(), failing(), poll_seconds=0.5)


async def test_chat_completion_returns_stripped_text():
    llm = FakeLLM("  hello \n")
    assert await chat_completion(llm, "m", [{"role": "user", "content": "hi"}], max_tokens=5) == "hello"
    assert llm.completions.calls[0]["max_tokens"] == 5


def test_client_requires_api_key():
    with pytest.raises(UpstreamError):
        build_openai_client(Settings(openai_api_key=None))


def test_client_has_timeout_and_no_retries():
    client = build_openai_client(Settings(openai_api_key="sk-test", llm_timeout_seconds=12))
    assert client.timeout == 12
    assert client.max_retries == 0
