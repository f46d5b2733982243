import asyncio

import pytest

from benchmarks.xterm import XTermBenchmarkSuite
from fakes import FakePipeline, RecordingSink, StepClock, sequence_probe
from harness.report import END_MARKER, RESET_LINE, SEPARATOR, START_MARKER, encode_line
from harness.runner import (
    DATA_CHUNK_SIZE,
    FEED_TIMEOUT_SECONDS,
    RUN_DURATION_SECONDS,
    WARMUP_SECONDS,
    BenchmarkConfig,
    BenchmarkOrchestrator,
    BenchmarkSession,
    RunState,
    start_benchmark,
)
from patterns import PatternVariant, build_pattern


def quick_config(full_chunks: int = 2, chunk_size: int = 47) -> BenchmarkConfig:
    # StepClock ticks once per deadline check, so duration n+1 lets n chunks through.
    return BenchmarkConfig(
        warmup_seconds=0,
        duration_seconds=full_chunks + 1,
        chunk_size=chunk_size,
        feed_timeout_seconds=0.25,
    )


def make_orchestrator(sink, pipeline, tracer, variant=PatternVariant.ASCII, config=None):
    return BenchmarkOrchestrator(
        BenchmarkSession(sink=sink, pipeline=pipeline),
        variant,
        config or quick_config(),
        tracer=tracer,
        memory_probe=sequence_probe(1000, 1500),
        clock=StepClock(),
    )


def test_default_config():
    config = BenchmarkConfig()
    assert config.warmup_seconds == WARMUP_SECONDS == 2.0
    assert config.duration_seconds == RUN_DURATION_SECONDS == 30.0
    assert config.chunk_size == DATA_CHUNK_SIZE == 200
    assert config.feed_timeout_seconds == FEED_TIMEOUT_SECONDS


@pytest.mark.asyncio
async def test_full_run_writes_markers_stream_and_report(tracer):
    pipeline = FakePipeline(80, 24, 1000)
    sink = RecordingSink(pipeline, paint_samples=[5, 2, 9, 3])
    orchestrator = make_orchestrator(sink, pipeline, tracer)

    result = await orchestrator.run()

    body = build_pattern(PatternVariant.ASCII).body
    assert sink.writes[0] == encode_line(START_MARKER)
    # 2 x 47 bytes is exactly one cycle, so no tail
    assert sink.writes[1:3] == [body[:47], body[47:]]
    assert sink.writes[3] == encode_line(RESET_LINE)
    assert sink.writes[4] == encode_line(END_MARKER)
    assert sink.writes[5:] == [encode_line(line) for line in result.report.lines()]

    assert orchestrator.history == [
        RunState.IDLE,
        RunState.WARMUP,
        RunState.RUNNING,
        RunState.FINALIZING,
        RunState.DONE,
    ]
    assert result.state is RunState.DONE
    assert not result.aborted
    assert result.bytes_streamed == len(body)
    assert set(sink.timeouts) == {0.25}


@pytest.mark.asyncio
async def test_report_figures(tracer):
    pipeline = FakePipeline(132, 43, 2000)
    sink = RecordingSink(pipeline, paint_samples=[5, 2, 9, 3])

    result = await make_orchestrator(sink, pipeline, tracer).run()
    report = result.report

    assert (report.terminal_width, report.terminal_height, report.buffer_size) == (132, 43, 2000)
    assert report.paint.count == 4
    assert report.paint.min_ms == 2
    assert report.paint.max_ms == 9
    assert report.paint.average_ms == pytest.approx(4.75)
    assert report.memory_delta_bytes == 500
    assert report.elapsed_ms >= 0

    text = sink.text_lines()
    assert "Terminal Size : 132 x 43\r\n" in text
    assert "Terminal Buffer Size : 2000\r\n" in text
    assert "OnPaint 4 samples\r\n" in text
    assert "        Avg  4.750 msec\r\n" in text
    assert "Increase of Process Memory : 500 bytes\r\n" in text


@pytest.mark.asyncio
async def test_observer_detached_after_run(tracer):
    pipeline = FakePipeline()
    sink = RecordingSink(pipeline)
    await make_orchestrator(sink, pipeline, tracer).run()

    assert pipeline.observer is None
    assert pipeline.observer_history[0] is not None


@pytest.mark.asyncio
async def test_paints_after_finalizing_are_not_counted(tracer):
    pipeline = FakePipeline()
    sink = RecordingSink(pipeline, paint_samples=[1.0] * 50)

    result = await make_orchestrator(sink, pipeline, tracer).run()

    # start, two body chunks, reset, end
    assert result.report.paint.count == 5


@pytest.mark.asyncio
async def test_timeout_while_streaming_aborts_silently(tracer):
    pipeline = FakePipeline()
    sink = RecordingSink(pipeline, stall_when=lambda chunk, delivered: delivered == 2)
    orchestrator = make_orchestrator(sink, pipeline, tracer)

    result = await orchestrator.run()

    assert result.report is None
    assert result.aborted
    assert orchestrator.history == [RunState.IDLE, RunState.WARMUP, RunState.RUNNING, RunState.DONE]
    assert len(sink.writes) == 2
    assert encode_line(END_MARKER) not in sink.writes
    assert encode_line(SEPARATOR) not in sink.writes
    # only the chunk the sink accepted counts
    assert result.bytes_streamed == 47
    assert pipeline.observer is None


@pytest.mark.asyncio
async def test_timeout_while_reporting_stops_output(tracer):
    pipeline = FakePipeline()
    sink = RecordingSink(pipeline, stall_when=lambda chunk, delivered: chunk.startswith(b"OnPaint"))
    orchestrator = make_orchestrator(sink, pipeline, tracer)

    result = await orchestrator.run()

    assert result.report is None
    assert result.state is RunState.DONE
    assert RunState.FINALIZING in orchestrator.history
    assert sink.writes[-1] == encode_line(SEPARATOR)
    assert sink.writes[-2] == encode_line("Terminal Buffer Size : 1000")
    assert not any(w.startswith(b"OnPaint") for w in sink.writes)


@pytest.mark.asyncio
async def test_palette_precedes_indexed_cells(tracer):
    pipeline = FakePipeline()
    sink = RecordingSink(pipeline)
    config = quick_config(full_chunks=1, chunk_size=DATA_CHUNK_SIZE)

    result = await make_orchestrator(sink, pipeline, tracer, PatternVariant.ASCII_COLOR256, config).run()

    source = build_pattern(PatternVariant.ASCII_COLOR256)
    assert sink.writes[1] == source.preamble
    assert sink.writes[2] == source.body[:DATA_CHUNK_SIZE]
    # tail finishes the interrupted cycle
    assert sink.writes[3] == source.body[DATA_CHUNK_SIZE:]
    assert result.bytes_streamed == len(source.preamble) + len(source.body)


@pytest.mark.asyncio
async def test_unknown_variant_streams_nothing_but_reports(tracer):
    pipeline = FakePipeline()
    sink = RecordingSink(pipeline)

    result = await make_orchestrator(sink, pipeline, tracer, variant="bogus").run()

    assert result.bytes_streamed == 0
    assert result.report is not None
    assert result.report.elapsed_ms == 0
    assert result.name == "bogus"
    assert sink.writes[:3] == [
        encode_line(START_MARKER),
        encode_line(RESET_LINE),
        encode_line(END_MARKER),
    ]
    assert len(sink.writes) == 3 + 13


@pytest.mark.asyncio
async def test_orchestrator_runs_once(tracer):
    pipeline = FakePipeline()
    orchestrator = make_orchestrator(RecordingSink(pipeline), pipeline, tracer)
    await orchestrator.run()
    with pytest.raises(RuntimeError):
        await orchestrator.run()


@pytest.mark.asyncio
async def test_start_benchmark_returns_pending_task(tracer):
    pipeline = FakePipeline()
    sink = RecordingSink(pipeline)
    task = start_benchmark(
        BenchmarkSession(sink=sink, pipeline=pipeline),
        PatternVariant.CJK,
        quick_config(),
        tracer=tracer,
        memory_probe=sequence_probe(0, 0),
        clock=StepClock(),
    )

    assert isinstance(task, asyncio.Task)
    assert not task.done()
    assert task.get_name() == "xterm-benchmark-cjk"
    assert sink.writes == []

    result = await task
    assert result.state is RunState.DONE
    assert result.variant is PatternVariant.CJK


@pytest.mark.asyncio
async def test_headless_suite_end_to_end(tracer):
    config = BenchmarkConfig(warmup_seconds=0, duration_seconds=0.2, feed_timeout_seconds=2.0)
    suite = XTermBenchmarkSuite(
        sink_kind="headless",
        columns=100,
        lines=30,
        buffer_size=200,
        config=config,
        verbose=False,
        tracer=tracer,
    )

    result = await suite.run_variant(PatternVariant.MIXED_COLOR24)

    assert not result.aborted
    assert result.report.terminal_width == 100
    assert result.report.terminal_height == 30
    assert result.report.buffer_size == 200
    assert result.report.paint.count >= 1
    assert result.bytes_streamed > 0


def test_suite_rejects_unknown_sink():
    with pytest.raises(ValueError):
        XTermBenchmarkSuite(sink_kind="serial")
