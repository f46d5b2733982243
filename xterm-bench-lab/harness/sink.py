"""
Terminal sinks: where benchmark bytes are delivered.

A sink accepts chunks in order and bounds every hand-off with a timeout.
Exceeding it raises SinkTimeout, the one failure the runner recognizes.
"""

import asyncio
from typing import BinaryIO, Iterable, Optional, Protocol, runtime_checkable


class SinkTimeout(TimeoutError):
    """A chunk could not be delivered within the feed timeout."""


@runtime_checkable
class TerminalSink(Protocol):
    """Byte sink in front of the render pipeline."""

    async def feed(self, chunks: Iterable[bytes], timeout: float) -> None:
        """Deliver chunks in order; raise SinkTimeout when a chunk stalls."""
        ...


class QueueSink:
    """In-process sink backed by a bounded asyncio queue.

    The consumer (usually HeadlessRenderPipeline) drains the queue with
    `get()` / `get_nowait()`; a None item marks end of stream.
    """

    def __init__(self, maxsize: int = 64):
        self.queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self.bytes_fed = 0
        self.chunks_fed = 0

    async def feed(self, chunks: Iterable[bytes], timeout: float) -> None:
        for chunk in chunks:
            try:
                await asyncio.wait_for(self.queue.put(chunk), timeout=timeout)
            except asyncio.TimeoutError:
                raise SinkTimeout(f"Sink feed timed out after {timeout}s") from None
            self.bytes_fed += len(chunk)
            self.chunks_fed += 1

    async def get(self) -> Optional[bytes]:
        """Wait for the next chunk."""
        return await self.queue.get()

    def get_nowait(self) -> Optional[bytes]:
        """Next chunk if one is queued; raises asyncio.QueueEmpty otherwise."""
        return self.queue.get_nowait()

    async def close(self) -> None:
        """Signal end of stream to the consumer."""
        await self.queue.put(None)


class StreamSink:
    """Sink writing straight to a binary stream, e.g. the real terminal.

    Each chunk is written and flushed in a worker thread so a stalled
    terminal cannot block the event loop past the feed timeout.
    """

    def __init__(self, stream: BinaryIO):
        self.stream = stream
        self.bytes_fed = 0

    def _write(self, chunk: bytes) -> None:
        self.stream.write(chunk)
        self.stream.flush()

    async def feed(self, chunks: Iterable[bytes], timeout: float) -> None:
        for chunk in chunks:
            try:
                await asyncio.wait_for(asyncio.to_thread(self._write, chunk), timeout=timeout)
            except asyncio.TimeoutError:
                raise SinkTimeout(f"Terminal write timed out after {timeout}s") from None
            self.bytes_fed += len(chunk)
