"""
Console summaries of benchmark results.

The in-terminal report is written by the runner itself; this module renders
the operator-facing view: a per-run summary and a comparison table across
variants.
"""

from typing import Optional

from instrumentation.timing import format_elapsed

from .runner import BenchmarkResult


class ConsoleReporter:
    """Generates console/CLI reports."""

    def __init__(self, use_color: bool = True):
        self.use_color = use_color

    def _color(self, text: str, color: str) -> str:
        """Apply ANSI color if enabled."""
        if not self.use_color:
            return text

        colors = {
            "green": "\033[92m",
            "red": "\033[91m",
            "yellow": "\033[93m",
            "blue": "\033[94m",
            "bold": "\033[1m",
            "reset": "\033[0m",
        }

        return f"{colors.get(color, '')}{text}{colors['reset']}"

    def format_duration(self, ms: float) -> str:
        """Format duration for display."""
        if ms < 1000:
            return f"{ms:.3f}ms"
        return f"{ms / 1000:.2f}s"

    def format_throughput(self, result: BenchmarkResult) -> Optional[str]:
        """Streamed megabytes per second, if the run produced a report."""
        if not result.report or result.report.elapsed_ms <= 0:
            return None
        mb_per_sec = result.bytes_streamed / (result.report.elapsed_ms / 1000) / 1024 / 1024
        return f"{mb_per_sec:.2f} MB/s"

    def single_result(self, result: BenchmarkResult) -> str:
        """Generate report for a single benchmark result."""
        lines = []
        lines.append(self._color(f"\n{'=' * 60}", "blue"))
        lines.append(self._color(f"XTerm Benchmark: {result.name}", "bold"))
        lines.append(self._color(f"{'=' * 60}", "blue"))

        if result.aborted or result.report is None:
            lines.append(f"\n{self._color('No report:', 'red')} the run ended before finalizing")
            lines.append(f"  Bytes streamed: {result.bytes_streamed}")
            return "\n".join(lines)

        report = result.report
        lines.append(f"\nTerminal:")
        lines.append(f"  Size: {report.terminal_width} x {report.terminal_height}")
        lines.append(f"  Buffer size: {report.buffer_size}")

        lines.append(f"\nOnPaint Statistics:")
        paint = report.paint
        if paint.has_samples:
            lines.append(f"  {'Samples:':<9} {paint.count}")
            lines.append(f"  {'Max:':<9} {self.format_duration(paint.max_ms)}")
            lines.append(f"  {'Min:':<9} {self.format_duration(paint.min_ms)}")
            lines.append(f"  {'Avg:':<9} {self.format_duration(paint.average_ms)}")
        else:
            lines.append(f"  {self._color('no samples', 'yellow')}")

        lines.append(f"\nStream:")
        lines.append(f"  Total: {format_elapsed(report.elapsed_ms)} sec")
        lines.append(f"  Bytes: {result.bytes_streamed}")
        throughput = self.format_throughput(result)
        if throughput:
            lines.append(f"  Throughput: {throughput}")

        lines.append(f"\nMemory:")
        lines.append(f"  Increase: {report.memory_delta_bytes} bytes")

        return "\n".join(lines)

    def comparison_table(self, results: list[BenchmarkResult]) -> str:
        """Generate a comparison table for multiple results."""
        if not results:
            return "No results to display"

        headers = ["Variant", "Samples", "Max", "Min", "Avg", "MB/s", "Memory"]
        col_widths = [18, 9, 12, 12, 12, 10, 14]

        lines = []
        lines.append(self._color(f"\n{'=' * sum(col_widths)}", "blue"))
        lines.append(self._color("XTerm Benchmark Comparison", "bold"))
        lines.append(self._color(f"{'=' * sum(col_widths)}", "blue"))

        header_row = ""
        for i, header in enumerate(headers):
            header_row += f"{header:<{col_widths[i]}}"
        lines.append(self._color(header_row, "bold"))
        lines.append("-" * sum(col_widths))

        for result in results:
            row = [f"{result.name:<{col_widths[0]}}"]
            report = result.report
            if report is None:
                row.append(self._color("aborted", "red"))
                lines.append("".join(row))
                continue

            paint = report.paint
            row.append(f"{paint.count:<{col_widths[1]}}")
            row.append(f"{self.format_duration(paint.max_ms):<{col_widths[2]}}")
            row.append(f"{self.format_duration(paint.min_ms):<{col_widths[3]}}")
            row.append(f"{self.format_duration(paint.average_ms):<{col_widths[4]}}")

            throughput = self.format_throughput(result)
            tput_str = throughput.split()[0] if throughput else "N/A"
            row.append(f"{tput_str:<{col_widths[5]}}")
            row.append(f"{report.memory_delta_bytes:<{col_widths[6]}}")

            lines.append("".join(row))

        return "\n".join(lines)
