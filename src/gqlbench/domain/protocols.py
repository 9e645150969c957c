"""Protocol interfaces for gqlbench components."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from gqlbench.domain.models import WorkloadStats


class Workload(Protocol):
    """Interface for a synthetic project generator."""

    name: str

    def generate(self, directory: Path) -> None:
        """Write the full project tree into *directory*."""
        ...

    @property
    def stats(self) -> WorkloadStats:
        """Snapshot of the files written so far."""
        ...
