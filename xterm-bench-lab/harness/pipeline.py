"""
Render pipelines the benchmark drives.

A pipeline exposes the terminal geometry and scroll-buffer size for the
report and accepts a paint observer, called once per render cycle with the
cycle's duration in milliseconds.
"""

import asyncio
import shutil
import time
from typing import Callable, Optional, Protocol

import pyte

from .sink import QueueSink

PaintObserver = Callable[[float], None]


class RenderPipeline(Protocol):
    """Read-only view of a render pipeline plus paint-observer registration."""

    @property
    def terminal_width(self) -> int: ...

    @property
    def terminal_height(self) -> int: ...

    @property
    def buffer_size(self) -> int: ...

    def set_paint_observer(self, observer: Optional[PaintObserver]) -> None: ...


class HeadlessRenderPipeline:
    """In-process terminal emulator fed from a QueueSink.

    Chunks are parsed by pyte into a HistoryScreen whose scrollback holds
    `buffer_size` lines. Everything queued at the moment the consumer wakes
    up is rendered as one paint cycle: parse the bytes, then compose the
    dirty rows into the frame.
    """

    def __init__(
        self,
        sink: QueueSink,
        columns: int = 80,
        lines: int = 24,
        buffer_size: int = 1000,
    ):
        self.sink = sink
        self.screen = pyte.HistoryScreen(columns, lines, history=buffer_size)
        self.stream = pyte.ByteStream(self.screen)
        self.frame: list[str] = [""] * lines
        self.paint_count = 0
        self.bytes_rendered = 0
        self._buffer_size = buffer_size
        self._observer: Optional[PaintObserver] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def terminal_width(self) -> int:
        return self.screen.columns

    @property
    def terminal_height(self) -> int:
        return self.screen.lines

    @property
    def buffer_size(self) -> int:
        return self._buffer_size

    def set_paint_observer(self, observer: Optional[PaintObserver]) -> None:
        self._observer = observer

    def paint(self, data: bytes) -> float:
        """Render one batch of bytes and report the cycle's duration."""
        start = time.perf_counter()

        self.stream.feed(data)
        columns = self.screen.columns
        for y in sorted(self.screen.dirty):
            row = self.screen.buffer[y]
            self.frame[y] = "".join(row[x].data for x in range(columns))
        self.screen.dirty.clear()

        elapsed_ms = (time.perf_counter() - start) * 1000
        self.paint_count += 1
        self.bytes_rendered += len(data)

        observer = self._observer
        if observer is not None:
            observer(elapsed_ms)
        return elapsed_ms

    async def _consume(self) -> None:
        while True:
            chunk = await self.sink.get()
            if chunk is None:
                return

            batch = [chunk]
            finished = False
            while True:
                try:
                    item = self.sink.get_nowait()
                except asyncio.QueueEmpty:
                    break
                if item is None:
                    finished = True
                    break
                batch.append(item)

            self.paint(b"".join(batch))
            if finished:
                return

    def start(self) -> "HeadlessRenderPipeline":
        """Start draining the sink in a background task."""
        if self._task is None:
            self._task = asyncio.create_task(self._consume())
        return self

    async def stop(self) -> None:
        """Render whatever is still queued, then stop the consumer."""
        if self._task is None:
            return
        if not self._task.done():
            await self.sink.close()
        await self._task
        self._task = None


class ConsolePipeline:
    """The real terminal behind a StreamSink.

    A terminal on the other end of stdout does not report its paint
    cycles, so the observer is stored but never called.
    """

    def __init__(self, buffer_size: int = 1000, fallback: tuple[int, int] = (80, 24)):
        self._buffer_size = buffer_size
        self._fallback = fallback
        self._observer: Optional[PaintObserver] = None

    @property
    def terminal_width(self) -> int:
        return shutil.get_terminal_size(self._fallback).columns

    @property
    def terminal_height(self) -> int:
        return shutil.get_terminal_size(self._fallback).lines

    @property
    def buffer_size(self) -> int:
        return self._buffer_size

    def set_paint_observer(self, observer: Optional[PaintObserver]) -> None:
        self._observer = observer
