"""
Instrumentation module for terminal rendering benchmarks.

Provides timing statistics, memory snapshots and tracing integration.
"""

from .timing import (
    Timer,
    TimingStatistics,
    TimingSummary,
    format_elapsed,
    timed,
)

from .memory import memory_snapshot

from .traces import (
    Tracer,
    TracingConfig,
    get_tracer,
    init_tracing,
    shutdown_tracing,
)

__all__ = [
    # Timing
    "Timer",
    "TimingStatistics",
    "TimingSummary",
    "format_elapsed",
    "timed",
    # Memory
    "memory_snapshot",
    # Tracing
    "Tracer",
    "TracingConfig",
    "get_tracer",
    "init_tracing",
    "shutdown_tracing",
]
