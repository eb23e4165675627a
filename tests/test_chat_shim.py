"""
Compatibility shim tests.

Tests cover Responses -> chat/completions request mapping and the
Responses-style events produced from a chat/completions stream.
"""

import pytest

from model_router.routing.adapter import DefaultModelApiAdapter
from model_router.routing.chat_shim import build_chat_request, responses_create_via_chat_completions

TOOL_A = {"type": "function", "name": "lookup", "parameters": {"type": "object", "properties": {}}}


def test_build_chat_request_maps_instructions_and_string_input():
    request = build_chat_request(
        {"model": "gpt-4o-search-preview", "instructions": "Be brief.", "input": "Weather in Oslo?"}
    )

    assert request["model"] == "gpt-4o-search-preview"
    assert request["messages"] == [
        {"role": "system", "content": "Be brief."},
        {"role": "user", "content": "Weather in Oslo?"},
    ]
    assert request["stream"] is True
    assert request["stream_options"] == {"include_usage": True}


def test_build_chat_request_maps_message_items():
    request = build_chat_request(
        {
            "model": "m",
            "input": [
                {"role": "developer", "content": "Cite sources."},
                {"role": "user", "content": [{"type": "input_text", "text": "What happened "}, {"type": "input_text", "text": "today?"}]},
                {"role": "assistant", "content": [{"type": "output_text", "text": "Earlier answer"}]},
                {"type": "function_call_output", "call_id": "c1", "output": "{}"},
            ],
        }
    )

    assert request["messages"] == [
        {"role": "system", "content": "Cite sources."},
        {"role": "user", "content": "What happened today?"},
        {"role": "assistant", "content": "Earlier answer"},
    ]


def test_build_chat_request_renames_fields_and_drops_empty_tools():
    request = build_chat_request(
        {
            "model": "m",
            "input": "hi",
            "max_output_tokens": 256,
            "temperature": 0.3,
            "tools": [],
            "tool_choice": "none",
            "store": True,
        }
    )

    assert request["max_tokens"] == 256
    assert request["temperature"] == 0.3
    assert "tools" not in request
    assert "tool_choice" not in request
    assert "store" not in request


def test_build_chat_request_converts_function_tools():
    request = build_chat_request(
        {
            "model": "m",
            "input": "hi",
            "tools": [{"type": "function", "name": "lookup", "description": "Find", "parameters": {"type": "object"}}],
            "tool_choice": "auto",
        }
    )

    assert request["tools"] == [
        {"type": "function", "function": {"name": "lookup", "description": "Find", "parameters": {"type": "object"}}}
    ]
    assert request["tool_choice"] == "auto"


def test_build_chat_request_forwards_parallel_tool_calls_with_tools():
    request = build_chat_request(
        {"model": "m", "input": "hi", "tools": [TOOL_A], "parallel_tool_calls": False}
    )

    assert request["parallel_tool_calls"] is False


@pytest.mark.asyncio
async def test_search_preview_request_drops_parallel_tool_calls(recording_shim, fake_client):
    """Tools stripped for search-preview models take parallel_tool_calls with them."""
    adapter = DefaultModelApiAdapter(shim=recording_shim)
    await adapter.create_response(
        fake_client,
        {"model": "gpt-4o-search-preview", "input": "hi", "tools": [TOOL_A], "parallel_tool_calls": True},
    )
    _, shim_params = recording_shim.calls[0]

    request = build_chat_request(shim_params)

    assert "tools" not in request
    assert "tool_choice" not in request
    assert "parallel_tool_calls" not in request


@pytest.mark.asyncio
async def test_shim_emits_responses_events(fake_client):
    events = [
        event
        async for event in responses_create_via_chat_completions(
            fake_client, {"model": "gpt-4o-search-preview", "input": "hi", "tools": [], "tool_choice": "none"}
        )
    ]

    types = [event["type"] for event in events]
    assert types == [
        "response.created",
        "response.output_text.delta",
        "response.output_text.delta",
        "response.output_text.done",
        "response.completed",
    ]
    assert [e["delta"] for e in events if e["type"] == "response.output_text.delta"] == ["Hello", ", world"]
    assert events[3]["text"] == "Hello, world"

    completed = events[-1]["response"]
    assert completed["status"] == "completed"
    assert completed["model"] == "gpt-4o-search-preview"
    assert completed["output"][0]["content"][0]["text"] == "Hello, world"
    assert completed["usage"] == {"input_tokens": 5, "output_tokens": 3, "total_tokens": 8}


@pytest.mark.asyncio
async def test_shim_is_lazy(fake_client):
    """No upstream call happens until the stream is iterated."""
    stream = responses_create_via_chat_completions(fake_client, {"model": "m", "input": "hi"})

    fake_client.chat.completions.create.assert_not_called()

    await stream.__anext__()
    fake_client.chat.completions.create.assert_awaited_once()
    kwargs = fake_client.chat.completions.create.await_args.kwargs
    assert kwargs["stream"] is True
    assert kwargs["messages"] == [{"role": "user", "content": "hi"}]


@pytest.mark.asyncio
async def test_shim_handles_empty_stream(fake_client, chat_stream_factory):
    fake_client.chat.completions.create.side_effect = lambda **kwargs: chat_stream_factory()

    events = [event async for event in responses_create_via_chat_completions(fake_client, {"model": "m", "input": "hi"})]

    assert [e["type"] for e in events] == ["response.created", "response.output_text.done", "response.completed"]
    assert events[-1]["response"]["usage"] is None


@pytest.mark.asyncio
async def test_shim_propagates_upstream_errors(fake_client):
    fake_client.chat.completions.create.side_effect = RuntimeError("upstream failed")

    with pytest.raises(RuntimeError, match="upstream failed"):
        async for _ in responses_create_via_chat_completions(fake_client, {"model": "m", "input": "hi"}):
            pass


@pytest.mark.asyncio
async def test_shim_skips_empty_deltas(fake_client, chat_stream_factory):
    fake_client.chat.completions.create.side_effect = lambda **kwargs: chat_stream_factory("", "ok", None)

    events = [event async for event in responses_create_via_chat_completions(fake_client, {"model": "m", "input": "hi"})]

    deltas = [e["delta"] for e in events if e["type"] == "response.output_text.delta"]
    assert deltas == ["ok"]
