"""
Benchmark orchestrator for terminal rendering runs.

One orchestrator drives exactly one run through
IDLE -> WARMUP -> RUNNING -> FINALIZING -> DONE:

- WARMUP lets the render pipeline settle before anything is measured.
- RUNNING streams the selected pattern into the sink until the deadline
  while paint-cycle durations flow into a TimingStatistics aggregate.
- FINALIZING assembles the report and writes it through the same sink.

A SinkTimeout at any point after warmup ends the run immediately with no
report. That is the only failure the runner recognizes.
"""

import asyncio
import sys
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Iterable, Iterator, Optional

from instrumentation.memory import memory_snapshot
from instrumentation.timing import Timer, TimingStatistics
from instrumentation.traces import Tracer, get_tracer
from patterns.definitions import PatternVariant, build_pattern

from .pipeline import RenderPipeline
from .report import END_MARKER, RESET_LINE, START_MARKER, BenchmarkReport, encode_line
from .sink import SinkTimeout, TerminalSink
from .stream import circular_stream

WARMUP_SECONDS = 2.0
RUN_DURATION_SECONDS = 30.0
DATA_CHUNK_SIZE = 200
FEED_TIMEOUT_SECONDS = 5.0


class RunState(Enum):
    """Lifecycle of a single benchmark run."""

    IDLE = "idle"
    WARMUP = "warmup"
    RUNNING = "running"
    FINALIZING = "finalizing"
    DONE = "done"


@dataclass
class BenchmarkConfig:
    """Configuration for a benchmark run."""

    name: str = "xterm"
    warmup_seconds: float = WARMUP_SECONDS
    duration_seconds: float = RUN_DURATION_SECONDS
    chunk_size: int = DATA_CHUNK_SIZE
    feed_timeout_seconds: float = FEED_TIMEOUT_SECONDS
    metadata: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "name": self.name,
            "warmup_seconds": self.warmup_seconds,
            "duration_seconds": self.duration_seconds,
            "chunk_size": self.chunk_size,
            "feed_timeout_seconds": self.feed_timeout_seconds,
            "metadata": self.metadata,
        }


@dataclass
class BenchmarkSession:
    """Run context: the sink bytes go to and the pipeline rendering them."""

    sink: TerminalSink
    pipeline: RenderPipeline


def variant_name(variant: Any) -> str:
    if isinstance(variant, PatternVariant):
        return variant.value
    return str(variant)


@dataclass
class BenchmarkResult:
    """Outcome of one run, delivered through the run task."""

    config: BenchmarkConfig
    variant: Any
    state: RunState
    report: Optional[BenchmarkReport]
    bytes_streamed: int
    start_time: datetime
    end_time: datetime
    aborted: bool = False

    @property
    def name(self) -> str:
        return variant_name(self.variant)

    def to_dict(self) -> dict:
        """Convert result to dictionary for serialization."""
        return {
            "config": self.config.to_dict(),
            "variant": self.name,
            "state": self.state.value,
            "report": self.report.to_dict() if self.report else None,
            "bytes_streamed": self.bytes_streamed,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "duration_seconds": (self.end_time - self.start_time).total_seconds(),
            "aborted": self.aborted,
        }


class BenchmarkOrchestrator:
    """Runs one benchmark against one session."""

    def __init__(
        self,
        session: BenchmarkSession,
        variant: Any,
        config: Optional[BenchmarkConfig] = None,
        tracer: Optional[Tracer] = None,
        memory_probe: Callable[[], int] = memory_snapshot,
        clock: Callable[[], float] = time.monotonic,
        verbose: bool = False,
    ):
        self.session = session
        self.variant = variant
        self.config = config or BenchmarkConfig()
        self.tracer = tracer or get_tracer()
        self.memory_probe = memory_probe
        self.clock = clock
        self.verbose = verbose
        self.state = RunState.IDLE
        self.history: list[RunState] = [RunState.IDLE]
        self.bytes_streamed = 0

    def _enter(self, state: RunState) -> None:
        self.state = state
        self.history.append(state)
        if self.verbose:
            print(f"  [{variant_name(self.variant)}] {state.value}", file=sys.stderr)

    async def _feed(self, chunks: Iterable[bytes]) -> None:
        await self.session.sink.feed(chunks, self.config.feed_timeout_seconds)

    async def _write_line(self, text: str = "") -> None:
        await self._feed([encode_line(text)])

    def _counted(self, chunks: Iterable[bytes]) -> Iterator[bytes]:
        # Resumed only once the sink has taken the chunk.
        for chunk in chunks:
            yield chunk
            self.bytes_streamed += len(chunk)

    async def _stream(self) -> Timer:
        """Feed the selected pattern until the deadline; return the total timer."""
        deadline = self.clock() + self.config.duration_seconds
        source = build_pattern(self.variant)
        timer = Timer("total")

        if source is None:
            # Unhandled variant: an empty measurement, nothing streamed.
            timer.start()
            timer.stop()
            return timer

        timer.start()
        try:
            if source.preamble:
                await self._feed(self._counted([source.preamble]))
            await self._feed(self._counted(circular_stream(
                source.body,
                self.config.chunk_size,
                deadline,
                clock=self.clock,
            )))
        finally:
            timer.stop()
        return timer

    async def run(self) -> BenchmarkResult:
        """Execute the run and return its result; never raises SinkTimeout."""
        if self.state is not RunState.IDLE:
            raise RuntimeError("BenchmarkOrchestrator runs once; create a new one per run")

        name = variant_name(self.variant)
        pipeline = self.session.pipeline
        stats = TimingStatistics()
        report: Optional[BenchmarkReport] = None
        aborted = False
        start_time = datetime.now()

        if self.verbose:
            print(f"\nRunning XTerm benchmark: {name}", file=sys.stderr)
            print(f"  Warmup: {self.config.warmup_seconds}s", file=sys.stderr)
            print(f"  Duration: {self.config.duration_seconds}s", file=sys.stderr)
            print(f"  Chunk size: {self.config.chunk_size} bytes", file=sys.stderr)

        self._enter(RunState.WARMUP)
        with self.tracer.span("xterm.warmup", {"xterm.variant": name}):
            await asyncio.sleep(self.config.warmup_seconds)

        self._enter(RunState.RUNNING)
        try:
            memory_before = self.memory_probe()
            pipeline.set_paint_observer(stats.update)

            with self.tracer.span("xterm.stream", {"xterm.variant": name}) as span:
                await self._write_line(START_MARKER)
                timer = await self._stream()
                await self._write_line(RESET_LINE)
                await self._write_line(END_MARKER)
                span.set_attribute("xterm.bytes_streamed", self.bytes_streamed)

            self._enter(RunState.FINALIZING)
            pipeline.set_paint_observer(None)
            memory_after = self.memory_probe()

            report = BenchmarkReport(
                terminal_width=pipeline.terminal_width,
                terminal_height=pipeline.terminal_height,
                buffer_size=pipeline.buffer_size,
                paint=stats.summary(),
                elapsed_ms=timer.elapsed_whole_ms,
                memory_delta_bytes=memory_after - memory_before,
            )

            with self.tracer.span("xterm.report", {"xterm.variant": name}):
                for line in report.lines():
                    await self._write_line(line)
        except SinkTimeout:
            aborted = True
            report = None
        finally:
            pipeline.set_paint_observer(None)

        self._enter(RunState.DONE)
        return BenchmarkResult(
            config=self.config,
            variant=self.variant,
            state=self.state,
            report=report,
            bytes_streamed=self.bytes_streamed,
            start_time=start_time,
            end_time=datetime.now(),
            aborted=aborted,
        )


def start_benchmark(
    session: BenchmarkSession,
    variant: Any,
    config: Optional[BenchmarkConfig] = None,
    **kwargs,
) -> "asyncio.Task[BenchmarkResult]":
    """Spawn a run as its own task and hand the task back to the caller.

    Usage:
        task = start_benchmark(session, PatternVariant.ASCII_COLOR256)
        # ... caller keeps going
        result = await task
    """
    orchestrator = BenchmarkOrchestrator(session, variant, config, **kwargs)
    return asyncio.create_task(
        orchestrator.run(),
        name=f"xterm-benchmark-{variant_name(variant)}",
    )
