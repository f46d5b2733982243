"""
Benchmark report record and its text rendering.

The report is written back through the terminal sink, so every line is
plain text and the layout is fixed.
"""

from dataclasses import dataclass, field

from instrumentation.timing import TimingSummary, format_elapsed

SEPARATOR = "-" * 39
START_MARKER = "Start XTerm Benchmark."
END_MARKER = "End XTerm Benchmark."
RESET_LINE = "\x1b[0m"
NEWLINE = "\r\n"
TOTAL_TITLE = "Total          "


@dataclass
class BenchmarkReport:
    """Figures collected during the finalizing phase of a run."""

    terminal_width: int
    terminal_height: int
    buffer_size: int
    paint: TimingSummary = field(default_factory=TimingSummary)
    elapsed_ms: int = 0
    memory_delta_bytes: int = 0

    def lines(self) -> list[str]:
        """Report body in emission order, without line terminators."""
        return [
            SEPARATOR,
            f"Terminal Size : {self.terminal_width} x {self.terminal_height}",
            f"Terminal Buffer Size : {self.buffer_size}",
            SEPARATOR,
            f"OnPaint {self.paint.count} samples",
            f"        Max  {self.paint.max_ms:.3f} msec",
            f"        Min  {self.paint.min_ms:.3f} msec",
            f"        Avg  {self.paint.average_ms:.3f} msec",
            SEPARATOR,
            f"{TOTAL_TITLE} : {format_elapsed(self.elapsed_ms)} sec",
            SEPARATOR,
            f"Increase of Process Memory : {self.memory_delta_bytes} bytes",
            SEPARATOR,
        ]

    def to_dict(self) -> dict:
        """Convert report to dictionary."""
        return {
            "terminal_width": self.terminal_width,
            "terminal_height": self.terminal_height,
            "buffer_size": self.buffer_size,
            "paint": self.paint.to_dict(),
            "elapsed_ms": self.elapsed_ms,
            "memory_delta_bytes": self.memory_delta_bytes,
        }


def encode_line(text: str) -> bytes:
    """One CRLF-terminated UTF-8 line as written to the sink."""
    return (text + NEWLINE).encode("utf-8")
