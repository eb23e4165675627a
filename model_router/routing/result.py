"""
Return shapes of a routed request.

A dispatch yields either one complete response or a lazily produced stream of
response events. Callers branch on ``kind``:

    match result:
        case SingleResult(response=response):
            ...
        case StreamResult(events=events):
            async for event in events:
                ...
"""

from dataclasses import dataclass
from typing import Any, AsyncIterator, Literal, Union


@dataclass(frozen=True)
class SingleResult:
    response: Any
    kind: Literal["single"] = "single"


@dataclass(frozen=True)
class StreamResult:
    """Finite, non-restartable stream; nothing is fetched until it is iterated."""

    events: AsyncIterator[Any]
    kind: Literal["stream"] = "stream"


RouteResult = Union[SingleResult, StreamResult]
