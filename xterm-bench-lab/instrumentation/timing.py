"""
Timing utilities for terminal rendering benchmarks.

Provides:
- Timer / timed for wall-clock measurement of a run phase
- TimingStatistics, a thread-safe count/min/max/average aggregate fed by
  paint-cycle callbacks
- TimingSummary, an immutable snapshot for reporting
"""

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class TimingSummary:
    """Snapshot of a TimingStatistics aggregate."""

    count: int = 0
    min_ms: float = 0.0
    max_ms: float = 0.0
    average_ms: float = 0.0

    @property
    def has_samples(self) -> bool:
        return self.count > 0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "count": self.count,
            "min_ms": self.min_ms,
            "max_ms": self.max_ms,
            "average_ms": self.average_ms,
        }


class TimingStatistics:
    """Running count/min/max/sum of latency samples in milliseconds.

    `update` may be called from the render pipeline's thread or task while
    the benchmark runner reads the aggregate, so every access holds a lock.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._count = 0
        self._min = 0.0
        self._max = 0.0
        self._sum = 0.0

    def update(self, sample_ms: float) -> None:
        """Record one sample."""
        with self._lock:
            if self._count == 0:
                self._min = sample_ms
                self._max = sample_ms
            else:
                if sample_ms < self._min:
                    self._min = sample_ms
                if sample_ms > self._max:
                    self._max = sample_ms
            self._sum += sample_ms
            self._count += 1

    def reset(self) -> None:
        """Discard all samples."""
        with self._lock:
            self._count = 0
            self._min = 0.0
            self._max = 0.0
            self._sum = 0.0

    @property
    def count(self) -> int:
        with self._lock:
            return self._count

    @property
    def min_ms(self) -> float:
        with self._lock:
            return self._min

    @property
    def max_ms(self) -> float:
        with self._lock:
            return self._max

    @property
    def average_ms(self) -> float:
        """Mean sample, or 0.0 when nothing was recorded."""
        with self._lock:
            if self._count == 0:
                return 0.0
            return self._sum / self._count

    def summary(self) -> TimingSummary:
        """Consistent snapshot of all four figures."""
        with self._lock:
            if self._count == 0:
                return TimingSummary()
            return TimingSummary(
                count=self._count,
                min_ms=self._min,
                max_ms=self._max,
                average_ms=self._sum / self._count,
            )


class Timer:
    """Simple timer for manual timing control."""

    def __init__(self, name: str = "timer"):
        self.name = name
        self.start_time: float = 0.0
        self.end_time: float = 0.0
        self._running = False

    def start(self) -> "Timer":
        """Start the timer."""
        self.start_time = time.perf_counter()
        self.end_time = self.start_time
        self._running = True
        return self

    def stop(self) -> "Timer":
        """Stop the timer."""
        self.end_time = time.perf_counter()
        self._running = False
        return self

    @property
    def elapsed_ms(self) -> float:
        """Elapsed time in milliseconds."""
        end = self.end_time if not self._running else time.perf_counter()
        return (end - self.start_time) * 1000

    @property
    def elapsed_whole_ms(self) -> int:
        return int(self.elapsed_ms)


@contextmanager
def timed(name: str = "operation") -> Iterator[Timer]:
    """Context manager for timing synchronous or awaited sections.

    Usage:
        with timed("stream") as timer:
            await sink.feed(chunks, timeout)
        print(f"Elapsed: {timer.elapsed_ms}ms")
    """
    timer = Timer(name).start()
    try:
        yield timer
    finally:
        timer.stop()


def format_elapsed(elapsed_ms: int) -> str:
    """Seconds and zero-padded milliseconds, e.g. 30012 -> '30.012'."""
    return f"{elapsed_ms // 1000}.{elapsed_ms % 1000:03d}"
