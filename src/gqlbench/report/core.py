"""Benchmark report: a console table or a single JSON document."""

from __future__ import annotations

import json
import logging
import os
import platform
import sys
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, TextIO

from gqlbench.console import console as default_console
from gqlbench.domain.models import BenchmarkResult
from gqlbench.report.formatting import (
    format_bytes,
    format_duration,
    per_second,
    per_second_ms,
    to_ms,
)

if TYPE_CHECKING:
    from gqlbench.console._protocol import ConsoleProtocol

logger = logging.getLogger(__name__)

TABLE_HEADERS = [
    "Name",
    "Files",
    "Tags",
    "LOC",
    "Setup",
    "Generation",
    "Files/s",
    "Tags/s",
    "Memory",
    "Status",
]


def status_label(result: BenchmarkResult) -> str:
    if result.errors:
        return f"❌ {len(result.errors)} errors"
    return "✅ Success"


def system_info() -> dict[str, Any]:
    return {
        "os": platform.system().lower(),
        "architecture": platform.machine(),
        "cpu_count": os.cpu_count() or 0,
        "runtime_version": f"{platform.python_implementation()} {platform.python_version()}",
    }


def build_json_report(
    results: Sequence[BenchmarkResult], *, timestamp: datetime | None = None
) -> dict[str, Any]:
    """The structured report as plain data, ready for ``json.dumps``."""
    benchmarks: list[dict[str, Any]] = []
    total_files = total_tags = total_loc = total_ms = 0

    for res in results:
        gen_ms = to_ms(res.generation_duration)
        entry: dict[str, Any] = {
            "name": res.name,
            "file_count": res.stats.file_count,
            "tag_count": res.stats.tag_count,
            "total_loc": res.stats.total_loc,
            "setup_time_ms": to_ms(res.setup_duration),
            "generation_time_ms": gen_ms,
            "memory_used_bytes": res.memory_delta,
            "output_size_bytes": res.output_size,
            "child_max_rss_bytes": res.child_max_rss,
            "files_per_second": per_second_ms(res.stats.file_count, gen_ms),
            "tags_per_second": per_second_ms(res.stats.tag_count, gen_ms),
            "loc_per_second": per_second_ms(res.stats.total_loc, gen_ms),
            "error_count": len(res.errors),
        }
        if res.errors:
            entry["errors"] = list(res.errors)
        benchmarks.append(entry)

        total_files += res.stats.file_count
        total_tags += res.stats.tag_count
        total_loc += res.stats.total_loc
        total_ms += gen_ms

    return {
        "timestamp": (timestamp or datetime.now(timezone.utc)).isoformat(),
        "system": system_info(),
        "benchmarks": benchmarks,
        "summary": {
            "total_files": total_files,
            "total_tags": total_tags,
            "total_loc": total_loc,
            "total_generation_ms": total_ms,
            "average_files_per_second": per_second_ms(total_files, total_ms),
            "average_tags_per_second": per_second_ms(total_tags, total_ms),
        },
    }


class Reporter:
    """Renders benchmark results as a table (console) or JSON (stream or file)."""

    def __init__(
        self,
        json_output: bool = False,
        json_path: str | Path | None = None,
        *,
        console: ConsoleProtocol | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self.json_output = json_output
        self.json_path = Path(json_path) if json_path else None
        self._console = console or default_console
        self._stream = stream

    def generate(self, results: Sequence[BenchmarkResult]) -> None:
        if self.json_output:
            self.write_json(results)
        else:
            self.write_table(results)

    # -- JSON ---------------------------------------------------------------

    def write_json(self, results: Sequence[BenchmarkResult]) -> None:
        text = json.dumps(build_json_report(results), indent=2, ensure_ascii=False) + "\n"
        if self.json_path is not None:
            self.json_path.parent.mkdir(parents=True, exist_ok=True)
            self.json_path.write_text(text, encoding="utf-8")
            logger.info("Wrote JSON report to %s", self.json_path)
            return
        stream = self._stream or sys.stdout
        stream.write(text)
        stream.flush()

    # -- Table --------------------------------------------------------------

    def write_table(self, results: Sequence[BenchmarkResult]) -> None:
        con = self._console
        generated_at = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        con.banner("BENCHMARK RESULTS", subtitle=f"Generated at: {generated_at}")

        rows: list[list[str]] = []
        total_files = total_tags = total_loc = 0
        total_gen = 0.0
        for res in results:
            gen = res.generation_duration
            rows.append(
                [
                    res.name,
                    str(res.stats.file_count),
                    str(res.stats.tag_count),
                    str(res.stats.total_loc),
                    format_duration(res.setup_duration),
                    format_duration(gen),
                    f"{per_second(res.stats.file_count, gen):.1f}",
                    f"{per_second(res.stats.tag_count, gen):.1f}",
                    format_bytes(res.memory_delta),
                    status_label(res),
                ]
            )
            total_files += res.stats.file_count
            total_tags += res.stats.tag_count
            total_loc += res.stats.total_loc
            total_gen += gen

        avg_files = per_second(total_files, total_gen)
        avg_tags = per_second(total_tags, total_gen)
        footer = [
            "TOTAL",
            str(total_files),
            str(total_tags),
            str(total_loc),
            "",
            format_duration(total_gen),
            f"{avg_files:.1f}",
            f"{avg_tags:.1f}",
            "",
            "",
        ]
        con.table(TABLE_HEADERS, rows, footer=footer)

        for res in results:
            if not res.errors:
                continue
            con.line()
            con.warning(f"Errors for {res.name}:")
            for err in res.errors:
                con.line(f"  - {err}")

        con.banner("PERFORMANCE INSIGHTS")
        con.line("Average Processing Speed:")
        con.line(f"  - Files: {avg_files:.2f} files/second")
        con.line(f"  - Tags: {avg_tags:.2f} tags/second")
        con.line(f"  - LOC: {per_second(total_loc, total_gen):.0f} lines/second")

        clean = [r for r in results if not r.errors]
        if len(clean) > 1:
            fastest = min(clean, key=lambda r: r.generation_duration)
            slowest = max(clean, key=lambda r: r.generation_duration)
            if fastest.generation_duration != slowest.generation_duration:
                con.line()
                con.line(f"Fastest: {fastest.name} ({fastest.generation_duration:.2f}s)")
                con.line(f"Slowest: {slowest.name} ({slowest.generation_duration:.2f}s)")
                if fastest.generation_duration > 0:
                    ratio = slowest.generation_duration / fastest.generation_duration
                    con.line(f"Speed difference: {ratio:.2f}x")
        con.rule()
