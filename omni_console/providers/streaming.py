"""Incremental SSE decoding and the timing fold shared by the generation adapters."""
import codecs
import json
import logging
import time
from typing import Any, AsyncIterable, AsyncIterator, Callable, List, Optional

from omni_console.const import SSE_DATA_PREFIX, SSE_DONE_MARKER
from .base import GenerationResult


logger = logging.getLogger(__name__)

Extractor = Callable[[Any], Optional[str]]


class SSEDecoder:
    """Turns raw byte chunks into ``data:`` payload strings.

    Partial lines are carried over to the next chunk and UTF-8 is decoded
    incrementally, so a record or a multibyte character split across network
    reads is reassembled before parsing.
    """

    def __init__(self):
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""

    def feed(self, chunk: bytes) -> List[str]:
        self._buffer += self._decoder.decode(chunk)
        *lines, self._buffer = self._buffer.split("\n")
        return self._payloads(lines)

    def flush(self) -> List[str]:
        tail = self._buffer + self._decoder.decode(b"", final=True)
        self._buffer = ""
        return self._payloads([tail])

    @staticmethod
    def _payloads(lines: List[str]) -> List[str]:
        payloads = []
        for line in lines:
            line = line.strip()
            if line.startswith(SSE_DATA_PREFIX):
                payloads.append(line[len(SSE_DATA_PREFIX):].strip())
        return payloads


class StreamTimer:
    """Measures TTFT and total latency against a monotonic clock."""

    def __init__(self, clock: Callable[[], float] = time.perf_counter):
        self._clock = clock
        self.started_at = clock()
        self.first_chunk_at: Optional[float] = None

    def mark_chunk(self) -> None:
        if self.first_chunk_at is None:
            self.first_chunk_at = self._clock()

    def ttft_ms(self) -> int:
        # 0 when no chunk ever arrived
        if self.first_chunk_at is None:
            return 0
        return _to_ms(self.first_chunk_at - self.started_at)

    def elapsed_ms(self) -> int:
        return _to_ms(self._clock() - self.started_at)


def _to_ms(seconds: float) -> int:
    return max(0, int(round(seconds * 1000)))


def parse_payload(payload: str, extract: Extractor) -> Optional[str]:
    """Decode one ``data:`` payload and pull its text fragment, skipping malformed JSON."""
    if not payload or payload == SSE_DONE_MARKER:
        return None
    try:
        event = json.loads(payload)
    except ValueError:
        logger.debug(f"Skipping malformed stream payload: {payload[:80]!r}")
        return None
    return extract(event)


async def iter_fragments(
    chunks: AsyncIterable[bytes],
    extract: Extractor,
    timer: StreamTimer,
) -> AsyncIterator[str]:
    """
    Lazily yield the text fragments carried by an SSE byte stream.

    Args:
        chunks: Raw response body chunks.
        extract: Provider specific ``event -> fragment`` function.
        timer: Timer whose first-chunk mark is set on the first non-empty chunk.

    Yields:
        Non-empty text fragments in stream order.
    """
    decoder = SSEDecoder()
    async for chunk in chunks:
        if not chunk:
            continue
        timer.mark_chunk()
        for payload in decoder.feed(chunk):
            fragment = parse_payload(payload, extract)
            if fragment:
                yield fragment

    for payload in decoder.flush():
        fragment = parse_payload(payload, extract)
        if fragment:
            yield fragment


async def accumulate(
    chunks: AsyncIterable[bytes],
    extract: Extractor,
    timer: StreamTimer,
) -> GenerationResult:
    """Fold a stream into full text plus latency and TTFT."""
    parts = []
    async for fragment in iter_fragments(chunks, extract, timer):
        parts.append(fragment)
    latency_ms = timer.elapsed_ms()
    return GenerationResult(text="".join(parts), latency_ms=latency_ms, ttft_ms=timer.ttft_ms())
