"""
XTerm benchmarks - paint latency under sustained escape-sequence traffic.
"""

from .benchmark import (
    SINK_KINDS,
    XTermBenchmarkSuite,
)

__all__ = [
    "SINK_KINDS",
    "XTermBenchmarkSuite",
]
