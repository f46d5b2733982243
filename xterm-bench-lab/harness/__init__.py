"""
Benchmark harness for terminal rendering experiments.

Provides the stream generator, sinks, render pipelines, the run
orchestrator and reporting.
"""

from .stream import circular_stream

from .sink import (
    QueueSink,
    SinkTimeout,
    StreamSink,
    TerminalSink,
)

from .pipeline import (
    ConsolePipeline,
    HeadlessRenderPipeline,
    PaintObserver,
    RenderPipeline,
)

from .report import BenchmarkReport

from .runner import (
    BenchmarkConfig,
    BenchmarkOrchestrator,
    BenchmarkResult,
    BenchmarkSession,
    RunState,
    start_benchmark,
)

from .reporter import ConsoleReporter

__all__ = [
    # Stream
    "circular_stream",
    # Sinks
    "QueueSink",
    "SinkTimeout",
    "StreamSink",
    "TerminalSink",
    # Pipelines
    "ConsolePipeline",
    "HeadlessRenderPipeline",
    "PaintObserver",
    "RenderPipeline",
    # Runner
    "BenchmarkConfig",
    "BenchmarkOrchestrator",
    "BenchmarkReport",
    "BenchmarkResult",
    "BenchmarkSession",
    "RunState",
    "start_benchmark",
    # Reporter
    "ConsoleReporter",
]
