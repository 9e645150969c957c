"""gqlbench.console._protocol -- ConsoleProtocol definition.

Pure standard-library typing.Protocol for the harness terminal output.
No external dependencies allowed in this file.
"""

from __future__ import annotations

from typing import Protocol


class ConsoleProtocol(Protocol):
    """Harness terminal output protocol.

    **General messages**::

        console.info("Generating tiny-ts workload...")
        console.success("Benchmark completed successfully!")
        console.warning("failed to remove benchmark-output/tiny-ts")
        console.error("generation failed: exit status 1")

    **Structured output** -- banners, tables, key-value displays::

        console.banner("BENCHMARK RESULTS")
        console.table(["Name", "Files"], [["tiny-ts", "52"]])
        console.kv({"Fastest": "tiny-ts (0.120s)"})

    **Progress** -- used by the runner and the parity driver::

        console.step(1, 2, "tiny-ts")
        console.step_detail("Files: 52, Tags: 83, LOC: 1204")
    """

    # -- General messages ---------------------------------------------------

    def info(self, message: str) -> None:
        """Informational message."""
        ...

    def success(self, message: str) -> None:
        """Success / positive-outcome message."""
        ...

    def warning(self, message: str) -> None:
        """Warning message."""
        ...

    def error(self, message: str) -> None:
        """Error message."""
        ...

    def line(self, text: str = "") -> None:
        """Unstyled text, printed as-is."""
        ...

    # -- Structured output --------------------------------------------------

    def banner(self, title: str, *, subtitle: str = "") -> None:
        """Display a full-width section banner."""
        ...

    def rule(self, title: str = "") -> None:
        """Display a horizontal separator."""
        ...

    def panel(self, content: str, *, title: str = "", style: str = "") -> None:
        """Display *content* in a bordered panel."""
        ...

    def table(
        self,
        headers: list[str],
        rows: list[list[str]],
        *,
        title: str = "",
        footer: list[str] | None = None,
    ) -> None:
        """Display a table with *headers*, *rows* and an optional *footer* row."""
        ...

    def kv(self, data: dict[str, str], *, title: str = "") -> None:
        """Display key-value pairs."""
        ...

    # -- Progress -----------------------------------------------------------

    def step(self, current: int, total: int, description: str) -> None:
        """Display a step indicator ``[current/total] description``."""
        ...

    def step_detail(self, message: str) -> None:
        """Display an indented detail line under the current step."""
        ...
