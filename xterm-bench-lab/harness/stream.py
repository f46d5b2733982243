"""
Deadline-bounded circular stream of benchmark chunks.

Turns one cycle of a pattern into an unbounded, lazily produced byte stream
that repeats the source until a monotonic-clock deadline passes.
"""

import time
from typing import Callable, Iterator


def circular_stream(
    source: bytes,
    chunk_size: int,
    deadline: float,
    clock: Callable[[], float] = time.monotonic,
) -> Iterator[bytes]:
    """Yield `chunk_size` slices of `source` repeated end to end.

    The deadline is checked before every full chunk. Once it has passed, a
    stream stopped mid-cycle is closed with the remaining tail of the source
    so the consumer always sees whole cycles.

    Byte p of the stream always equals source[p % len(source)].
    """
    if not source:
        raise ValueError("source must contain at least one byte")
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    size = len(source)
    # Enough repetitions that any chunk_size window starting inside the
    # first cycle is a plain slice.
    window = source * (chunk_size // size + 2)
    offset = 0

    while clock() < deadline:
        yield window[offset:offset + chunk_size]
        offset = (offset + chunk_size) % size

    if offset > 0:
        yield source[offset:]
