"""Shared pytest fixtures for gqlbench tests.

Provides a fake Generator (an executable Python script written into
``tmp_path``), settings and result factories, and resets the global console
between tests.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from gqlbench.config import Settings
from gqlbench.console import configure
from gqlbench.domain.models import BenchmarkResult, WorkloadStats

GENERATED_TEXT = "export type Generated = true;\n"

# Writes every target named in the config's generates map, or the benchmark
# artifact when the config has none.
_FAKE_GENERATOR = """#!{python}
import pathlib
import re
import sys
import time

MODE = {mode!r}
CONTENT = {content!r}

args = sys.argv[1:]
if MODE == "sleep":
    time.sleep(30)
if MODE == "fail":
    print("generator output")
    print("boom", file=sys.stderr)
    sys.exit(2)
if MODE == "config-error":
    print("failed to parse config: invalid syntax", file=sys.stderr)
    sys.exit(1)
if MODE == "no-output":
    sys.exit(0)

flag = "-c" if "-c" in args else "--config"
config = pathlib.Path(args[args.index(flag) + 1])
targets = re.findall(r"'(__generated__/[^']*)'", config.read_text())
if not targets:
    targets = ["src/generated/graphql.ts"]
for target in targets:
    if target.endswith("/"):
        target += "fragment-masking.ts"
    out = pathlib.Path(target)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(CONTENT)
print("generated", len(targets), "file(s)")
"""

GeneratorFactory = Callable[..., Path]


@pytest.fixture(autouse=True)
def _reset_console() -> Iterator[None]:
    configure(backend="plain")
    yield
    configure(backend="plain")


@pytest.fixture()
def make_generator(tmp_path: Path) -> GeneratorFactory:
    """Factory for a fake graphql-go-gen.

    Modes: ``ok`` writes its outputs, ``fail`` exits 2 with output on both
    streams, ``config-error`` exits 1 with a parse error on stderr,
    ``no-output`` exits 0 without writing, ``sleep`` hangs for 30 s.
    """

    def _factory(mode: str = "ok", *, content: str = GENERATED_TEXT) -> Path:
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir(exist_ok=True)
        path = bin_dir / f"graphql-go-gen-{mode}"
        path.write_text(
            _FAKE_GENERATOR.format(python=sys.executable, mode=mode, content=content)
        )
        path.chmod(0o755)
        return path

    return _factory


@pytest.fixture()
def make_settings(tmp_path: Path) -> Callable[..., Settings]:
    def _factory(**overrides: Any) -> Settings:
        overrides.setdefault("root", tmp_path)
        return Settings(**overrides)

    return _factory


@pytest.fixture()
def make_result() -> Callable[..., BenchmarkResult]:
    """Factory for BenchmarkResult with sensible defaults."""

    def _factory(
        name: str = "tiny-ts",
        *,
        files: int = 53,
        tags: int = 66,
        loc: int = 1200,
        setup: float = 0.05,
        generation: float = 0.5,
        memory: int = 2048,
        errors: tuple[str, ...] = (),
    ) -> BenchmarkResult:
        return BenchmarkResult(
            name=name,
            stats=WorkloadStats(file_count=files, tag_count=tags, total_loc=loc),
            setup_duration=setup,
            generation_duration=generation,
            memory_delta=memory,
            errors=errors,
        )

    return _factory
