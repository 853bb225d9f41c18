"""Command-line entry point for dynamit."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dynamit.shared.app.logging_setup import configure_logging
from dynamit.shared.app.runtime import RuntimeConfig
from dynamit.shared.core.debug_events import emit_debug_event


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dynamit",
        description="Interactive terminal explorer for DynamoDB tables.",
    )
    parser.add_argument("--region", help="AWS region (default: $AWS_REGION, then us-east-1)")
    parser.add_argument("--profile", help="AWS credentials profile")
    parser.add_argument("--endpoint-url", help="Custom endpoint, e.g. http://localhost:8000 for DynamoDB Local")
    parser.add_argument("--page-size", type=int, help="Items fetched per scan page (default: 100)")
    parser.add_argument("--tick-rate", type=float, help="Spinner ticks per second (default: 4)")
    parser.add_argument("--frame-rate", type=float, help="Response polls per second (default: 30)")
    parser.add_argument("--mock", action="store_true", help="Explore a seeded in-memory store instead of AWS")
    parser.add_argument("--demo-rows", type=int, help="Rows in the seeded tables with --mock (default: 250)")
    parser.add_argument("--debug", action="store_true", help="Write debug logs to .dynamit/debug.log")
    parser.add_argument("--log-file", type=Path, help="Write logs to this file")
    return parser


def _positive(name: str, value: float | None) -> None:
    if value is not None and value <= 0:
        raise SystemExit(f"dynamit: --{name} must be positive")


def runtime_from_args(args: argparse.Namespace) -> RuntimeConfig:
    """Environment configuration with the given flags applied on top."""
    for name in ("page_size", "tick_rate", "frame_rate", "demo_rows"):
        _positive(name.replace("_", "-"), getattr(args, name))

    runtime = RuntimeConfig.from_env()
    if args.region:
        runtime.region = args.region
    if args.profile:
        runtime.profile = args.profile
    if args.endpoint_url:
        runtime.endpoint_url = args.endpoint_url
    if args.page_size:
        runtime.page_size = args.page_size
    if args.tick_rate:
        runtime.tick_rate = args.tick_rate
    if args.frame_rate:
        runtime.frame_rate = args.frame_rate
    if args.mock:
        runtime.mock.enabled = True
    if args.demo_rows:
        runtime.mock.demo_rows = args.demo_rows
    if args.debug:
        runtime.debug_mode = True
    if args.log_file:
        runtime.log_file = args.log_file.expanduser()
    return runtime


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    runtime = runtime_from_args(args)
    log_path = configure_logging(runtime)
    emit_debug_event(
        "app.start",
        category="app",
        region=runtime.region,
        mock=runtime.mock.enabled,
        log_file=str(log_path) if log_path else None,
    )

    from dynamit.domains.shell.app.main import DynamitApp

    app = DynamitApp(runtime=runtime)
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
