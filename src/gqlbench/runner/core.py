"""Benchmark runner: scenario directories, workload synthesis, Generator runs."""

from __future__ import annotations

import asyncio
import logging
import shutil
import sys
import time
import tracemalloc
from collections.abc import Sequence
from pathlib import Path

from gqlbench.config import (
    GENERATED_OUTPUT,
    GENERATOR_CONFIG_FILE,
    Settings,
    locate_generator,
    resolve_root,
)
from gqlbench.console import console
from gqlbench.domain.models import BenchmarkResult, ProcessResult, Scenario
from gqlbench.domain.protocols import Workload
from gqlbench.errors import (
    BuildError,
    GeneratorNotFoundError,
    HarnessError,
    SetupError,
    WorkloadError,
)
from gqlbench.runner.process import run_process
from gqlbench.workloads.scenarios import DEFAULT_SCENARIOS

logger = logging.getLogger(__name__)


def children_max_rss() -> int:
    """Peak RSS of reaped child processes in bytes, 0 where unsupported."""
    try:
        import resource
    except ImportError:
        return 0
    peak = resource.getrusage(resource.RUSAGE_CHILDREN).ru_maxrss
    # ru_maxrss is bytes on macOS and kilobytes on Linux
    return peak if sys.platform == "darwin" else peak * 1024


def process_errors(proc: ProcessResult, timeout: float | None) -> list[str]:
    """Translate a Generator run into recorded error strings."""
    if proc.cancelled:
        return ["generation cancelled"]
    if proc.timed_out:
        return [f"generation timed out after {timeout:g}s"]
    if proc.exit_code != 0:
        message = f"generation failed: exit status {proc.exit_code}"
        output = proc.output.strip()
        return [f"{message}\nOutput: {output}" if output else message]
    return []


class Runner:
    """Runs scenarios sequentially and measures the Generator against each."""

    def __init__(
        self,
        output_dir: str | Path,
        keep_files: bool = False,
        verbose: bool = True,
        *,
        settings: Settings | None = None,
        timeout: float | None = None,
    ) -> None:
        self.settings = settings or Settings(root=resolve_root())
        output = Path(output_dir)
        self.output_dir = output if output.is_absolute() else self.settings.root / output
        self.keep_files = keep_files
        self.verbose = verbose
        self.timeout = timeout if timeout is not None else self.settings.timeout
        self.generator = self.find_generator()

    def _log(self, message: str) -> None:
        logger.info(message)
        if self.verbose:
            console.info(message)

    # -- Generator discovery and build --------------------------------------

    def find_generator(self) -> Path | None:
        return locate_generator(
            self.settings.root, self.settings.binary_name, self.settings.generator
        )

    async def build_generator(self, cancel: asyncio.Event | None = None) -> Path:
        """Compile the Generator in the repository root."""
        root = self.settings.root
        command = self.settings.build_command
        self._log(f"Building {self.settings.binary_name}...")
        try:
            proc = await run_process(command, cwd=root, cancel=cancel)
        except OSError as exc:
            raise BuildError(f"building {self.settings.binary_name}: {exc}") from exc
        if proc.cancelled:
            raise BuildError("build cancelled")
        if not proc.ok:
            raise BuildError(
                f"building {self.settings.binary_name}: exit status {proc.exit_code}\n"
                f"Output: {proc.output.strip()}"
            )
        self.generator = root / self.settings.binary_name
        self._log(f"Successfully built {self.settings.binary_name} at: {self.generator}")
        return self.generator

    # -- Scenario execution -------------------------------------------------

    def _prepare(self, scenario_dir: Path) -> None:
        try:
            if scenario_dir.exists():
                shutil.rmtree(scenario_dir)
            scenario_dir.mkdir(parents=True)
        except OSError as exc:
            raise SetupError(f"preparing {scenario_dir}: {exc}") from exc

    def _cleanup(self, scenario_dir: Path) -> None:
        if self.keep_files:
            return
        try:
            shutil.rmtree(scenario_dir)
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Failed to clean up %s: %s", scenario_dir, exc)
            console.warning(f"Warning: failed to clean up test directory: {exc}")

    def _require_generator(self) -> Path:
        if self.generator is None:
            raise GeneratorNotFoundError(
                f"{self.settings.binary_name} not found in {self.settings.root}, "
                "the current directory or PATH (build it or pass --generator)"
            )
        return self.generator.absolute()

    async def run(
        self, name: str, workload: Workload, cancel: asyncio.Event | None = None
    ) -> BenchmarkResult:
        """Run one scenario. Subprocess failures are recorded on the result."""
        generator = self._require_generator()
        scenario_dir = self.output_dir / name
        self._prepare(scenario_dir)
        try:
            return await self._run_in(scenario_dir, name, workload, generator, cancel)
        finally:
            self._cleanup(scenario_dir)

    async def _run_in(
        self,
        scenario_dir: Path,
        name: str,
        workload: Workload,
        generator: Path,
        cancel: asyncio.Event | None,
    ) -> BenchmarkResult:
        self._log(f"Generating test files for {name}...")
        setup_start = time.perf_counter()
        try:
            workload.generate(scenario_dir)
        except HarnessError:
            raise
        except OSError as exc:
            raise WorkloadError(f"generating test files: {exc}") from exc
        setup_duration = time.perf_counter() - setup_start

        stats = workload.stats
        self._log(
            f"Generated {stats.file_count} files, {stats.tag_count} GraphQL tags, "
            f"{stats.total_loc} lines of code"
        )

        if not tracemalloc.is_tracing():
            tracemalloc.start()
        mem_before = tracemalloc.get_traced_memory()[0]

        self._log(f"Running {generator.name} for {name}...")
        errors: list[str] = []
        generation_duration = 0.0
        try:
            proc = await run_process(
                [str(generator), "generate", "--config", GENERATOR_CONFIG_FILE],
                cwd=scenario_dir,
                cancel=cancel,
                timeout=self.timeout,
            )
        except OSError as exc:
            logger.error("Cannot execute %s: %s", generator, exc)
            errors.append(f"generator not executable: {generator}")
        else:
            generation_duration = proc.duration
            errors += process_errors(proc, self.timeout)
            if errors and self.verbose and proc.output:
                console.step_detail(f"Generation output:\n{proc.output.rstrip()}")

        mem_after = tracemalloc.get_traced_memory()[0]
        memory_delta = max(0, mem_after - mem_before)
        self._log(f"Generation completed in {generation_duration:.3f}s")

        output_path = scenario_dir / GENERATED_OUTPUT
        output_size = 0
        if output_path.is_file():
            output_size = output_path.stat().st_size
            self._log(f"Generated output file: {output_size} bytes")
        else:
            errors.append(f"output file not created: {output_path}")

        for error in errors:
            logger.warning("%s: %s", name, error.splitlines()[0])

        return BenchmarkResult(
            name=name,
            stats=stats,
            setup_duration=setup_duration,
            generation_duration=generation_duration,
            memory_delta=memory_delta,
            output_size=output_size,
            child_max_rss=children_max_rss(),
            errors=tuple(errors),
        )

    async def run_all(
        self,
        cancel: asyncio.Event | None = None,
        scenarios: Sequence[Scenario] = DEFAULT_SCENARIOS,
    ) -> list[BenchmarkResult]:
        """Run *scenarios* in order. Stops starting new ones once cancelled."""
        self._require_generator()
        results: list[BenchmarkResult] = []
        for i, scenario in enumerate(scenarios, start=1):
            if cancel is not None and cancel.is_set():
                logger.info("Cancelled, skipping %s", scenario.name)
                break
            if self.verbose:
                console.step(i, len(scenarios), f"Running benchmark: {scenario.name}")
            logger.info("Running benchmark: %s", scenario.name)
            try:
                result = await self.run(scenario.name, scenario.factory(), cancel)
            except (SetupError, WorkloadError) as exc:
                logger.error("%s: %s", scenario.name, exc)
                console.error(f"ERROR: {exc}")
                result = BenchmarkResult(name=scenario.name, errors=(str(exc),))
            results.append(result)
        return results
