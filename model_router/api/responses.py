"""
Responses endpoint routes.
"""

import json
from typing import Any, AsyncIterator

from fastapi import APIRouter, Depends, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, StreamingResponse

from model_router.dependencies import get_router_service
from model_router.models import ResponseRequest
from model_router.routing.result import SingleResult, StreamResult
from model_router.services.router_service import RouterService

router = APIRouter(
    prefix="/v1",
    tags=["responses"],
    responses={
        400: {"description": "Bad Request - Unknown provider"},
        502: {"description": "Bad Gateway - Upstream unreachable"},
    },
)


def _sse_frame(event_type: str, payload: Any) -> str:
    return f"event: {event_type}\ndata: {json.dumps(jsonable_encoder(payload))}\n\n"


def _event_type(event: Any) -> str:
    if isinstance(event, dict):
        return event.get("type", "message")
    return getattr(event, "type", "message")


async def _event_stream(notices: list[str], first: Any, events: AsyncIterator[Any]) -> AsyncIterator[str]:
    for notice in notices:
        yield _sse_frame("routing.notice", {"type": "routing.notice", "message": notice})
    if first is not None:
        yield _sse_frame(_event_type(first), first)
    async for event in events:
        yield _sse_frame(_event_type(event), event)


@router.post(
    "/responses",
    summary="Create a model response",
    description="""
    Create a response with the endpoint the requested model requires.

    Most models are served by the Responses API and the upstream response is
    returned unchanged (as JSON, or as server-sent events when `stream` is true).

    **Search-preview models** cannot combine function calling with web search,
    so they are served through chat/completions on the fallback provider:
    - `tools` are dropped and `tool_choice` is forced to `"none"`
    - the result is always streamed as server-sent events
    - a `routing.notice` event announcing the fallback precedes the response events

    The provider that served the request is returned in the `X-Effective-Provider` header.
    """,
)
async def create_response(
    request: ResponseRequest,
    router_service: RouterService = Depends(get_router_service),
) -> Response:
    routed = await router_service.handle_request(request.to_params(), request.provider)
    headers = {"X-Effective-Provider": routed.provider}

    match routed.result:
        case SingleResult(response=response):
            return JSONResponse(content=jsonable_encoder(response), headers=headers)
        case StreamResult(events=events):
            # Pull the first event here so upstream errors still map to an HTTP status
            try:
                first = await events.__anext__()
            except StopAsyncIteration:
                first = None
            return StreamingResponse(
                _event_stream(routed.notices, first, events),
                media_type="text/event-stream",
                headers=headers,
            )
