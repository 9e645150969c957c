#!/usr/bin/env python3
"""
gqlbench CLI -- benchmark the graphql-go-gen code generator.

Usage:
  gqlbench [--test-set tiny|mid|large|all] [--output-dir DIR] [--keep-files]
           [--json] [--json-path FILE] [--no-verbose] [--no-build]
           [--root DIR] [--generator PATH] [--timeout SECONDS]
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from gqlbench.config import (
    DEFAULT_OUTPUT_DIR,
    LOG_FILE,
    Settings,
    load_settings,
    logs_dir,
    resolve_root,
)
from gqlbench.console import configure, console
from gqlbench.domain.models import Scenario
from gqlbench.errors import BuildError, HarnessError
from gqlbench.report.core import Reporter
from gqlbench.runner.core import Runner
from gqlbench.runner.signals import cancel_on_signals
from gqlbench.workloads.scenarios import select_scenarios

logger = logging.getLogger("gqlbench")

EXIT_INTERRUPTED = 130


def setup_logging(root: Path, verbose: bool) -> None:
    """File-based audit log at <root>/.gqlbench/gqlbench.log."""
    log_dir = logs_dir(root)
    log_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(log_dir / LOG_FILE),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        level=logging.DEBUG if verbose else logging.INFO,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gqlbench",
        description="Benchmark graphql-go-gen against synthetic TypeScript projects",
    )
    parser.add_argument(
        "--test-set",
        default="all",
        help="Test set to run: tiny, mid, large, or all (default: all = tiny + mid)",
    )
    parser.add_argument(
        "--output-dir",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Directory for generated test files (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--keep-files", action="store_true", help="Don't delete generated files afterwards"
    )
    parser.add_argument("--json", action="store_true", help="Output results as JSON")
    parser.add_argument(
        "--json-path", default="", help="Path to save JSON output (defaults to stdout)"
    )
    parser.add_argument(
        "--verbose",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Progress output and debug logging (default: on)",
    )
    parser.add_argument(
        "--build",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Build graphql-go-gen before running benchmarks (default: on)",
    )
    parser.add_argument(
        "--profile", action="store_true", help="Reserved for profiling (currently no effect)"
    )
    parser.add_argument(
        "--root", default=None, help="Repository root (default: $GQLBENCH_ROOT or cwd)"
    )
    parser.add_argument("--generator", default=None, help="Path to the graphql-go-gen binary")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-scenario generator timeout in seconds (default: none)",
    )
    return parser


async def run_benchmarks(
    args: argparse.Namespace, settings: Settings, scenarios: Sequence[Scenario]
) -> int:
    cancel = asyncio.Event()
    with cancel_on_signals(cancel):
        runner = Runner(
            args.output_dir,
            args.keep_files,
            args.verbose,
            settings=settings,
            timeout=args.timeout,
        )
        if args.build:
            try:
                await runner.build_generator(cancel)
            except BuildError:
                if cancel.is_set():
                    return EXIT_INTERRUPTED
                raise
        results = await runner.run_all(cancel, scenarios)

    Reporter(args.json, args.json_path or None).generate(results)

    if cancel.is_set():
        logger.warning("Run interrupted after %d scenario(s)", len(results))
        return EXIT_INTERRUPTED

    if not args.json:
        console.line()
        console.success("Benchmark completed successfully!")
        if args.keep_files:
            console.info(f"Test files kept in: {runner.output_dir.resolve()}")

    error_count = sum(len(r.errors) for r in results)
    if error_count:
        console.line()
        console.warning(f"Warning: {error_count} errors encountered during benchmarks")
        if not args.verbose:
            console.info("Run with --verbose for more details")
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # Keep stdout clean for a JSON report written there
    configure(backend="auto", stderr=args.json and not args.json_path)

    try:
        root = resolve_root(args.root)
        setup_logging(root, args.verbose)
        settings = load_settings(root)
        if args.generator:
            settings = dataclasses.replace(
                settings, generator=Path(args.generator).expanduser().absolute()
            )
        scenarios = select_scenarios(args.test_set, settings.schema)
        if args.profile:
            logger.debug("--profile is reserved and has no effect")
        logger.info(
            "Starting benchmarks: %s (root=%s)", ", ".join(s.name for s in scenarios), root
        )
        return asyncio.run(run_benchmarks(args, settings, scenarios))
    except HarnessError as exc:
        logger.error("%s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted, cleaning up...", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
