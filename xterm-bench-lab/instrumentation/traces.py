"""
Tracing utilities for terminal rendering benchmarks.

Wraps OpenTelemetry so each benchmark phase (warmup, stream, report) shows up
as a span. Console export goes to stderr so it never lands in the byte stream
being benchmarked.
"""

import os
import sys
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor
from opentelemetry.trace import Status, StatusCode


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class TracingConfig:
    """Configuration for tracing setup."""

    def __init__(
        self,
        service_name: Optional[str] = None,
        enable_console_export: Optional[bool] = None,
    ):
        self.service_name = service_name or os.getenv("XTERM_BENCH_SERVICE_NAME", "xterm-bench-lab")
        if enable_console_export is None:
            enable_console_export = _env_flag("XTERM_BENCH_TRACE_CONSOLE")
        self.enable_console_export = enable_console_export


class Tracer:
    """OpenTelemetry tracer for benchmark phases."""

    def __init__(self, config: Optional[TracingConfig] = None):
        self.config = config or TracingConfig()
        self._provider: Optional[TracerProvider] = None
        self._otel_tracer = None
        self._initialized = False

    def initialize(self) -> "Tracer":
        """Initialize the tracer provider."""
        if self._initialized:
            return self

        resource = Resource.create({"service.name": self.config.service_name})
        self._provider = TracerProvider(resource=resource)

        if self.config.enable_console_export:
            processor = SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr))
            self._provider.add_span_processor(processor)

        self._otel_tracer = self._provider.get_tracer(self.config.service_name)
        self._initialized = True
        return self

    def shutdown(self) -> None:
        """Flush and shut down the tracer provider."""
        if self._provider:
            self._provider.shutdown()
        self._initialized = False

    @contextmanager
    def span(
        self,
        name: str,
        attributes: Optional[dict] = None,
    ) -> Iterator[Any]:
        """Create a traced span around a block.

        Usage:
            with tracer.span("xterm.stream", {"variant": "ascii"}) as span:
                # do work
                span.set_attribute("bytes", total)
        """
        if not self._initialized:
            self.initialize()

        span_obj = self._otel_tracer.start_span(name)
        if attributes:
            for key, value in attributes.items():
                span_obj.set_attribute(key, value)

        try:
            yield span_obj
        except Exception as e:
            span_obj.set_status(Status(StatusCode.ERROR, str(e)))
            span_obj.record_exception(e)
            raise
        finally:
            span_obj.end()


# Global tracer instance
_global_tracer: Optional[Tracer] = None


def get_tracer(config: Optional[TracingConfig] = None) -> Tracer:
    """Get or create the global tracer instance."""
    global _global_tracer
    if _global_tracer is None:
        _global_tracer = Tracer(config)
    return _global_tracer


def init_tracing(config: Optional[TracingConfig] = None) -> Tracer:
    """Initialize global tracing."""
    tracer = get_tracer(config)
    return tracer.initialize()


def shutdown_tracing() -> None:
    """Shutdown global tracing."""
    global _global_tracer
    if _global_tracer:
        _global_tracer.shutdown()
        _global_tracer = None
