"""
XTerm benchmarks - rendering throughput under escape-sequence-heavy input.

Streams one of twelve synthetic patterns into a terminal for a fixed
duration and reports how long the render pipeline's paint cycles take.

Two targets are supported:
- headless: an in-process pyte screen that times every paint cycle
- stdout: the real terminal this process is attached to
"""

import sys
from typing import Any, Optional

from harness.pipeline import ConsolePipeline, HeadlessRenderPipeline
from harness.reporter import ConsoleReporter
from harness.runner import (
    BenchmarkConfig,
    BenchmarkResult,
    BenchmarkSession,
    start_benchmark,
)
from harness.sink import QueueSink, StreamSink
from patterns.definitions import PatternVariant, get_variant_description

SINK_KINDS = ("headless", "stdout")


class XTermBenchmarkSuite:
    """Suite of XTerm rendering benchmarks."""

    def __init__(
        self,
        sink_kind: str = "headless",
        columns: int = 80,
        lines: int = 24,
        buffer_size: int = 1000,
        config: Optional[BenchmarkConfig] = None,
        verbose: bool = True,
        **orchestrator_kwargs,
    ):
        if sink_kind not in SINK_KINDS:
            raise ValueError(f"Unknown sink: {sink_kind} (expected one of {', '.join(SINK_KINDS)})")
        self.sink_kind = sink_kind
        self.columns = columns
        self.lines = lines
        self.buffer_size = buffer_size
        self.config = config or BenchmarkConfig()
        self.verbose = verbose
        self.orchestrator_kwargs = orchestrator_kwargs
        self.reporter = ConsoleReporter(use_color=sys.stderr.isatty())

    async def run_variant(self, variant: Any) -> BenchmarkResult:
        """Run a single variant against a freshly built session."""
        if self.verbose and isinstance(variant, PatternVariant):
            print(f"\n--- {variant.value}: {get_variant_description(variant)} ---", file=sys.stderr)

        if self.sink_kind == "stdout":
            session = BenchmarkSession(
                sink=StreamSink(sys.stdout.buffer),
                pipeline=ConsolePipeline(buffer_size=self.buffer_size),
            )
            task = start_benchmark(
                session, variant, self.config, verbose=self.verbose, **self.orchestrator_kwargs
            )
            result = await task
        else:
            sink = QueueSink()
            pipeline = HeadlessRenderPipeline(
                sink,
                columns=self.columns,
                lines=self.lines,
                buffer_size=self.buffer_size,
            ).start()
            session = BenchmarkSession(sink=sink, pipeline=pipeline)
            task = start_benchmark(
                session, variant, self.config, verbose=self.verbose, **self.orchestrator_kwargs
            )
            try:
                result = await task
            finally:
                await pipeline.stop()

        if self.verbose:
            print(self.reporter.single_result(result), file=sys.stderr)
        return result

    async def run_all(self, variants: Optional[list[PatternVariant]] = None) -> list[BenchmarkResult]:
        """Run variants one after another; runs never overlap."""
        results = []
        for variant in variants or list(PatternVariant):
            results.append(await self.run_variant(variant))

        if self.verbose:
            print(self.reporter.comparison_table(results), file=sys.stderr)
        return results
