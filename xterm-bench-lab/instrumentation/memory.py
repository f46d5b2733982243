"""
Process memory accounting for benchmark runs.
"""

import gc

import psutil


def memory_snapshot() -> int:
    """Resident set size in bytes after a full garbage collection."""
    gc.collect()
    return psutil.Process().memory_info().rss
