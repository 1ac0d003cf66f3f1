"""HTTP and stream doubles shared by the adapter, runner and app tests."""

import json
from typing import Callable, Iterable, List

import httpx


def sse(*events) -> bytes:
    """Encode events as SSE ``data:`` records; strings are sent verbatim."""
    out = []
    for event in events:
        payload = event if isinstance(event, str) else json.dumps(event)
        out.append(f"data: {payload}\n\n")
    return "".join(out).encode("utf-8")


def openai_chunk(text: str) -> dict:
    return {"choices": [{"index": 0, "delta": {"content": text}}]}


def anthropic_delta(text: str) -> dict:
    return {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": text}}


def gemini_chunk(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


class ChunkStream(httpx.AsyncByteStream):
    """Response body delivered as the given chunks, boundaries preserved."""

    def __init__(self, chunks: Iterable[bytes]):
        self._chunks = list(chunks)

    async def __aiter__(self):
        for chunk in self._chunks:
            yield chunk


class FakeClock:
    """Returns the given readings in order, then repeats the last one."""

    def __init__(self, ticks: List[float]):
        self._ticks = list(ticks)
        self.calls = 0

    def __call__(self) -> float:
        tick = self._ticks[min(self.calls, len(self._ticks) - 1)]
        self.calls += 1
        return tick


class RecordingHandler:
    """MockTransport handler that records requests and replays a canned response."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]):
        self.respond = respond
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


def streaming_response(chunks: Iterable[bytes], status: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(status, stream=ChunkStream(chunks),
                                          headers={"content-type": "text/event-stream"})


def json_response(payload, status: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(status, json=payload)


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


