"""Shared test fixtures for all tests."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from model_router.routing.adapter import DefaultModelApiAdapter


class FakeChatStream:
    """Async iterator over prepared chat.completions chunks."""

    def __init__(self, chunks):
        self._chunks = list(chunks)

    def __aiter__(self):
        return self

    async def __anext__(self):
        if not self._chunks:
            raise StopAsyncIteration
        return self._chunks.pop(0)


def chat_chunk(content=None, chunk_id="chatcmpl-1", usage=None):
    """Build an object shaped like openai's ChatCompletionChunk."""
    choices = []
    if content is not None:
        choices = [SimpleNamespace(index=0, delta=SimpleNamespace(content=content), finish_reason=None)]
    return SimpleNamespace(id=chunk_id, choices=choices, usage=usage)


@pytest.fixture
def fake_client():
    """
    Client double exposing responses.create and chat.completions.create.

    responses.create returns a sentinel dict; chat.completions.create returns
    a two-chunk stream followed by a usage chunk.
    """
    client = MagicMock()
    client.responses.create = AsyncMock(return_value={"id": "resp_1", "object": "response"})
    client.chat.completions.create = AsyncMock(
        side_effect=lambda **kwargs: FakeChatStream(
            [
                chat_chunk("Hello"),
                chat_chunk(", world"),
                chat_chunk(usage=SimpleNamespace(prompt_tokens=5, completion_tokens=3, total_tokens=8)),
            ]
        )
    )
    return client


@pytest.fixture
def recording_shim():
    """
    Compatibility shim double that records its calls and yields two events.
    """
    calls = []

    def shim(client, params):
        calls.append((client, params))

        async def events():
            yield {"type": "response.output_text.delta", "delta": "hi"}
            yield {"type": "response.completed"}

        return events()

    shim.calls = calls
    return shim


@pytest.fixture
def adapter(recording_shim):
    return DefaultModelApiAdapter(shim=recording_shim)


@pytest.fixture
def chat_stream_factory():
    """
    Build a chat.completions stream with one chunk per content value.

    None produces a chunk without choices, like the trailing usage chunk.
    """

    def make(*contents):
        return FakeChatStream([chat_chunk(content) for content in contents])

    return make
