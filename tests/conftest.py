import pytest

from instrumentation.traces import Tracer, TracingConfig


@pytest.fixture
def tracer():
    tracer = Tracer(TracingConfig(service_name="xterm-bench-lab-tests", enable_console_export=False))
    yield tracer.initialize()
    tracer.shutdown()
