#!/usr/bin/env python3
"""
XTerm Bench Lab - Main entry point for running terminal rendering benchmarks.

Usage:
    python main.py [command] [options]

Commands:
    list    - List the benchmark pattern variants
    run     - Run one variant
    all     - Run every variant, one after another
"""

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Add xterm-bench-lab to path for package imports
sys.path.insert(0, str(Path(__file__).parent / "xterm-bench-lab"))


def list_variants(args):
    """Print every variant with its description."""
    from patterns import PatternVariant, get_variant_description

    for variant in PatternVariant:
        print(f"  {variant.value:<16} {get_variant_description(variant)}")


def build_suite(args):
    from benchmarks.xterm import XTermBenchmarkSuite

    return XTermBenchmarkSuite(
        sink_kind=args.sink,
        columns=args.columns,
        lines=args.lines,
        buffer_size=args.buffer_size,
    )


async def run_variant(args):
    """Run a single benchmark variant."""
    from instrumentation.traces import init_tracing, shutdown_tracing
    from patterns import resolve_variant

    init_tracing()
    suite = build_suite(args)
    try:
        await suite.run_variant(resolve_variant(args.variant))
    finally:
        shutdown_tracing()


async def run_all_variants(args):
    """Run all benchmark variants."""
    from instrumentation.traces import init_tracing, shutdown_tracing

    print("=" * 70, file=sys.stderr)
    print("XTERM BENCH LAB - FULL BENCHMARK SUITE", file=sys.stderr)
    print("=" * 70, file=sys.stderr)

    init_tracing()
    suite = build_suite(args)
    try:
        await suite.run_all()
    finally:
        shutdown_tracing()


def main():
    from patterns import list_variants as variant_names
    from benchmarks.xterm import SINK_KINDS

    parser = argparse.ArgumentParser(
        description="XTerm Bench Lab - Benchmark terminal rendering throughput",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py list
    python main.py run ascii_color256
    python main.py run mixed_color24 --sink stdout
    python main.py all --columns 132 --lines 43
        """,
    )

    parser.add_argument(
        "command",
        choices=["list", "run", "all"],
        help="What to do",
    )
    parser.add_argument(
        "variant",
        nargs="?",
        choices=variant_names(),
        help="Pattern variant for the run command",
    )
    parser.add_argument(
        "--sink",
        choices=SINK_KINDS,
        default="headless",
        help="Where to send the stream (default: headless)",
    )
    parser.add_argument(
        "--columns",
        type=int,
        default=80,
        help="Headless terminal width (default: 80)",
    )
    parser.add_argument(
        "--lines",
        type=int,
        default=24,
        help="Headless terminal height (default: 24)",
    )
    parser.add_argument(
        "--buffer-size",
        type=int,
        default=1000,
        help="Scroll-back buffer size in lines (default: 1000)",
    )

    args = parser.parse_args()

    if args.command == "list":
        list_variants(args)
        return

    if args.command == "run" and args.variant is None:
        parser.error("the run command needs a variant (see 'python main.py list')")

    commands = {
        "run": run_variant,
        "all": run_all_variants,
    }

    try:
        asyncio.run(commands[args.command](args))
    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
