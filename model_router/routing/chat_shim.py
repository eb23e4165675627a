"""
Responses API compatibility shim over chat/completions.

Translates a Responses-style request into a streaming chat/completions call
and re-emits the chunks as Responses-style streaming events (plain dicts):

    response.created
    response.output_text.delta   (one per non-empty content delta)
    response.output_text.done
    response.completed
"""

import time
from typing import Any, AsyncIterator, Mapping

import structlog

logger = structlog.get_logger()

# Responses field -> chat/completions field
_PASSTHROUGH_FIELDS = {
    "temperature": "temperature",
    "top_p": "top_p",
    "user": "user",
    "max_output_tokens": "max_tokens",
}

_TEXT_PART_TYPES = {"input_text", "output_text", "text"}


def _content_to_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    if not content:
        return ""
    return "".join(
        part.get("text", "")
        for part in content
        if isinstance(part, Mapping) and part.get("type") in _TEXT_PART_TYPES
    )


def _input_to_messages(params: Mapping[str, Any]) -> list[dict[str, str]]:
    messages = []

    instructions = params.get("instructions")
    if instructions:
        messages.append({"role": "system", "content": instructions})

    input_value = params.get("input")
    if isinstance(input_value, str):
        messages.append({"role": "user", "content": input_value})
        return messages

    for item in input_value or []:
        # Items without a role (function_call_output etc.) have no chat equivalent
        if not isinstance(item, Mapping) or "role" not in item:
            continue
        role = "system" if item["role"] == "developer" else item["role"]
        messages.append({"role": role, "content": _content_to_text(item.get("content"))})

    return messages


def _convert_tool(tool: Mapping[str, Any]) -> dict[str, Any]:
    if tool.get("type") != "function" or "function" in tool:
        return dict(tool)
    function = {"name": tool["name"]}
    for key in ("description", "parameters", "strict"):
        if key in tool:
            function[key] = tool[key]
    return {"type": "function", "function": function}


def build_chat_request(params: Mapping[str, Any]) -> dict[str, Any]:
    """Map Responses request parameters onto chat/completions keyword arguments."""
    request = {
        "model": params["model"],
        "messages": _input_to_messages(params),
        "stream": True,
        "stream_options": {"include_usage": True},
    }

    for source, target in _PASSTHROUGH_FIELDS.items():
        if params.get(source) is not None:
            request[target] = params[source]

    # chat/completions rejects tool_choice and parallel_tool_calls without tools
    tools = params.get("tools") or []
    if tools:
        request["tools"] = [_convert_tool(tool) for tool in tools]
        for key in ("tool_choice", "parallel_tool_calls"):
            if params.get(key) is not None:
                request[key] = params[key]

    return request


def _response_body(
    response_id: str,
    model: str,
    created_at: int,
    status: str,
    text: str | None,
    usage: dict[str, int] | None,
) -> dict[str, Any]:
    body = {
        "id": response_id,
        "object": "response",
        "created_at": created_at,
        "model": model,
        "status": status,
        "output": [],
        "usage": usage,
    }
    if text is not None:
        body["output"] = [
            {
                "type": "message",
                "id": f"msg_{response_id}",
                "role": "assistant",
                "status": "completed",
                "content": [{"type": "output_text", "text": text, "annotations": []}],
            }
        ]
    return body


def _map_usage(usage: Any) -> dict[str, int] | None:
    if usage is None:
        return None
    return {
        "input_tokens": usage.prompt_tokens,
        "output_tokens": usage.completion_tokens,
        "total_tokens": usage.total_tokens,
    }


async def responses_create_via_chat_completions(client: Any, params: Mapping[str, Any]) -> AsyncIterator[dict]:
    """
    Serve a Responses request through ``client.chat.completions``.

    This is an async generator: the upstream call is made on first iteration,
    and upstream errors surface from the ``async for`` that drives it.

    Args:
        client: An AsyncOpenAI-compatible client
        params: Responses API request parameters

    Yields:
        dict: Responses-style streaming events
    """
    request = build_chat_request(params)
    model = request["model"]
    created_at = int(time.time())

    logger.debug("chat_completions_request", model=model, messages=len(request["messages"]))
    stream = await client.chat.completions.create(**request)

    response_id = None
    chunks: list[str] = []
    usage = None

    async for chunk in stream:
        if response_id is None:
            response_id = chunk.id
            yield {
                "type": "response.created",
                "response": _response_body(response_id, model, created_at, "in_progress", None, None),
            }

        if getattr(chunk, "usage", None) is not None:
            usage = _map_usage(chunk.usage)

        for choice in chunk.choices or []:
            delta = choice.delta.content if choice.delta else None
            if delta:
                chunks.append(delta)
                yield {
                    "type": "response.output_text.delta",
                    "item_id": f"msg_{response_id}",
                    "output_index": 0,
                    "content_index": 0,
                    "delta": delta,
                }

    if response_id is None:
        # Upstream closed the stream without sending a single chunk
        response_id = f"resp_{created_at}"
        yield {
            "type": "response.created",
            "response": _response_body(response_id, model, created_at, "in_progress", None, None),
        }

    text = "".join(chunks)
    yield {
        "type": "response.output_text.done",
        "item_id": f"msg_{response_id}",
        "output_index": 0,
        "content_index": 0,
        "text": text,
    }
    yield {
        "type": "response.completed",
        "response": _response_body(response_id, model, created_at, "completed", text, usage),
    }
