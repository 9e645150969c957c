"""gqlbench-parity -- compare Generator output with golden files per config variant."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections import Counter
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from gqlbench.cli import EXIT_INTERRUPTED, setup_logging
from gqlbench.config import load_settings, locate_generator, resolve_root
from gqlbench.console import configure, console
from gqlbench.domain.models import ParityOutcome, ParityResult
from gqlbench.errors import GeneratorNotFoundError, HarnessError
from gqlbench.parity.driver import ParityDriver
from gqlbench.parity.normalize import format_diff
from gqlbench.runner.signals import cancel_on_signals

logger = logging.getLogger("gqlbench.parity")

_ICONS = {
    ParityOutcome.MATCH: "✓",
    ParityOutcome.MISMATCH: "✗",
    ParityOutcome.GENERATED_ONLY: "•",
    ParityOutcome.NO_OUTPUT: "?",
    ParityOutcome.FAILED: "✗",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gqlbench-parity",
        description="Run graphql-go-gen for every parity config and diff against golden files",
    )
    parser.add_argument(
        "--root", default=None, help="Parity tree (default: <repo root>/parity)"
    )
    parser.add_argument("--generator", default=None, help="Path to the graphql-go-gen binary")
    parser.add_argument("--json", action="store_true", help="Output results as JSON")
    parser.add_argument(
        "--json-path", default="", help="Path to save JSON output (defaults to stdout)"
    )
    parser.add_argument(
        "--check-configs",
        action="store_true",
        help="Only check that every config file parses",
    )
    parser.add_argument(
        "--allow-mismatch",
        action="store_true",
        help="Treat golden mismatches as informational",
    )
    parser.add_argument(
        "--verbose",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Per-case progress and diffs (default: on)",
    )
    return parser


def find_generator(explicit: str | None, repo_root: Path, binary: str) -> Path:
    found = locate_generator(repo_root, binary, explicit)
    if found is None:
        raise GeneratorNotFoundError(
            f"{binary} not found in {repo_root}, the current directory or PATH"
        )
    return found


def result_to_json(result: ParityResult) -> dict[str, Any]:
    data: dict[str, Any] = {
        "plugin": result.case.plugin,
        "name": result.case.name,
        "config": str(result.case.config_path),
        "output": str(result.case.expected_output_path),
        "golden": str(result.case.golden_path),
        "outcome": result.outcome.value,
        "message": result.message,
    }
    if result.diff is not None:
        data["diff"] = {
            "expected_lines": result.diff.expected_lines,
            "actual_lines": result.diff.actual_lines,
            "truncated": result.diff.truncated,
            "differences": [
                {"line": d.line, "expected": d.expected, "actual": d.actual}
                for d in result.diff.differences
            ],
        }
    if result.outcome is ParityOutcome.FAILED:
        data["stdout"] = result.stdout
        data["stderr"] = result.stderr
    return data


def print_summary(results: Sequence[ParityResult], verbose: bool) -> None:
    console.banner("CODEGEN PARITY")
    for result in results:
        console.line(
            f"{_ICONS[result.outcome]} {result.case.label}: "
            f"{result.outcome.value} - {result.message}"
        )
        if not verbose:
            continue
        if result.diff is not None:
            for line in format_diff(result.diff).splitlines():
                console.line(f"    {line}")
        if result.outcome is ParityOutcome.FAILED:
            if result.stderr.strip():
                console.panel(result.stderr.strip(), title="Stderr", style="red")
            if result.stdout.strip():
                console.panel(result.stdout.strip(), title="Stdout")

    counts = Counter(r.outcome for r in results)
    console.kv(
        {outcome.value: str(counts.get(outcome, 0)) for outcome in ParityOutcome},
        title="Summary",
    )


def write_json(results: Sequence[ParityResult], json_path: str) -> None:
    counts = Counter(r.outcome.value for r in results)
    payload = {
        "cases": [result_to_json(r) for r in results],
        "summary": {outcome.value: counts.get(outcome.value, 0) for outcome in ParityOutcome},
    }
    text = json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
    if json_path:
        path = Path(json_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)


def exit_code(results: Sequence[ParityResult], allow_mismatch: bool) -> int:
    failing = {ParityOutcome.FAILED}
    if not allow_mismatch:
        failing.add(ParityOutcome.MISMATCH)
    return 1 if any(r.outcome in failing for r in results) else 0


async def run_parity(args: argparse.Namespace, parity_root: Path, generator: Path) -> int:
    cancel = asyncio.Event()
    with cancel_on_signals(cancel):
        driver = ParityDriver(parity_root, generator, cancel=cancel, verbose=args.verbose)
        cases = driver.discover()
        if not cases:
            console.warning(f"No parity configs found under {parity_root / 'configs'}")

        if args.check_configs:
            failures = 0
            for case in cases:
                ok, message = await driver.check_config(case)
                if ok:
                    console.success(f"{case.label}: config accepted")
                else:
                    failures += 1
                    console.error(f"{case.label}: {message}")
            return EXIT_INTERRUPTED if cancel.is_set() else int(failures > 0)

        results = await driver.run_all(cases)

    if args.json:
        write_json(results, args.json_path)
    if not args.json or args.json_path:
        print_summary(results, args.verbose)
    if cancel.is_set():
        return EXIT_INTERRUPTED
    return exit_code(results, args.allow_mismatch)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure(backend="auto", stderr=args.json and not args.json_path)

    try:
        repo_root = resolve_root()
        settings = load_settings(repo_root)
        parity_root = Path(args.root).resolve() if args.root else settings.parity_dir
        setup_logging(repo_root, args.verbose)
        generator = find_generator(
            args.generator or (str(settings.generator) if settings.generator else None),
            repo_root,
            settings.binary_name,
        )
        logger.info("Parity run: root=%s generator=%s", parity_root, generator)
        return asyncio.run(run_parity(args, parity_root, generator))
    except HarnessError as exc:
        logger.error("%s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted, cleaning up...", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
