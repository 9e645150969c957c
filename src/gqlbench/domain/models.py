"""Core data types for gqlbench.

All records are frozen dataclasses. ``WorkloadStats`` grows by replacement:
``added`` returns a new value, so a stats object held by a result never changes.
This module has ZERO imports from outside the Python standard library.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gqlbench.domain.protocols import Workload


class ParityOutcome(Enum):
    """Outcome of a single parity case."""

    MATCH = "match"
    MISMATCH = "mismatch"
    GENERATED_ONLY = "generated_only"
    NO_OUTPUT = "no_output"
    FAILED = "failed"


# ---------------------------------------------------------------------------
# Workload types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WorkloadStats:
    """Totals for files written by a workload generator."""

    file_count: int = 0
    tag_count: int = 0
    total_loc: int = 0

    def added(self, tags: int, lines: int) -> WorkloadStats:
        """These totals plus one file with *tags* tags and *lines* lines."""
        return replace(
            self,
            file_count=self.file_count + 1,
            tag_count=self.tag_count + tags,
            total_loc=self.total_loc + lines,
        )


@dataclass(frozen=True)
class Scenario:
    """A named benchmark run. ``factory`` builds a fresh, freshly seeded workload."""

    name: str
    factory: Callable[[], Workload] = field(compare=False)


# ---------------------------------------------------------------------------
# Subprocess and benchmark results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of one child process run."""

    argv: tuple[str, ...]
    exit_code: int | None
    output: str
    stderr: str = ""
    duration: float = 0.0
    cancelled: bool = False
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.exit_code == 0 and not self.cancelled and not self.timed_out


@dataclass(frozen=True)
class BenchmarkResult:
    """Measurements of one scenario. Produced even when the scenario failed."""

    name: str
    stats: WorkloadStats = field(default_factory=WorkloadStats)
    setup_duration: float = 0.0
    generation_duration: float = 0.0
    memory_delta: int = 0
    output_size: int = 0
    child_max_rss: int = 0
    errors: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


# ---------------------------------------------------------------------------
# Parity types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParityCase:
    """One configuration variant discovered under ``configs/<plugin>/<name>.ts``."""

    plugin: str
    name: str
    config_path: Path
    expected_output_path: Path
    golden_path: Path

    @property
    def label(self) -> str:
        return f"{self.plugin}/{self.name}"


@dataclass(frozen=True)
class LineDiff:
    """One differing line; ``line`` is 1-based."""

    line: int
    expected: str
    actual: str


@dataclass(frozen=True)
class DiffReport:
    """First differing lines between golden and generated output."""

    differences: tuple[LineDiff, ...]
    expected_lines: int
    actual_lines: int
    truncated: bool = False

    @property
    def identical(self) -> bool:
        return not self.differences


@dataclass(frozen=True)
class ParityResult:
    """Outcome of running the Generator for one parity case."""

    case: ParityCase
    outcome: ParityOutcome
    message: str = ""
    diff: DiffReport | None = None
    stdout: str = ""
    stderr: str = ""
