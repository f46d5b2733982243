"""
Benchmark modules for terminal rendering tests.

Each submodule targets one terminal protocol family.
"""

from . import xterm

__all__ = [
    "xterm",
]
