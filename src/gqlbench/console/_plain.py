"""gqlbench.console._plain -- Plain-text fallback backend.

Used when the target stream is not a TTY (CI logs, pipes, captured tests).
"""

from __future__ import annotations

import sys
from typing import TextIO

BANNER_WIDTH = 120


class PlainBackend:
    """ConsoleProtocol implementation using only built-in print()."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so pytest's capsys replacement is honoured
        return self._stream or sys.stdout

    def _print(self, text: str = "") -> None:
        print(text, file=self.stream)

    # -- General messages ---------------------------------------------------

    def info(self, message: str) -> None:
        self._print(message)

    def success(self, message: str) -> None:
        self._print(f"✅ {message}")

    def warning(self, message: str) -> None:
        self._print(f"⚠️  {message}")

    def error(self, message: str) -> None:
        self._print(f"❌ {message}")

    def line(self, text: str = "") -> None:
        self._print(text)

    # -- Structured output --------------------------------------------------

    def banner(self, title: str, *, subtitle: str = "") -> None:
        self._print()
        self._print("=" * BANNER_WIDTH)
        self._print(title)
        if subtitle:
            self._print(subtitle)
        self._print("=" * BANNER_WIDTH)

    def rule(self, title: str = "") -> None:
        self._print()
        if title:
            self._print(title)
        self._print("-" * BANNER_WIDTH)

    def panel(self, content: str, *, title: str = "", style: str = "") -> None:
        width = 60
        header = f" {title} " if title else ""
        self._print(f"\n{header.center(width, '=')}")
        for text in content.splitlines():
            self._print(f"  {text}")
        self._print("=" * width)

    def table(
        self,
        headers: list[str],
        rows: list[list[str]],
        *,
        title: str = "",
        footer: list[str] | None = None,
    ) -> None:
        if title:
            self._print(f"\n{title}:")

        if not headers:
            return

        all_rows = [headers, *rows, *([footer] if footer else [])]
        col_widths = [
            max(len(str(row[i])) if i < len(row) else 0 for row in all_rows)
            for i in range(len(headers))
        ]

        def render(row: list[str]) -> str:
            cells = [
                str(row[i]).ljust(col_widths[i]) if i < len(row) else " " * col_widths[i]
                for i in range(len(headers))
            ]
            return " ".join(cells).rstrip()

        separator = " ".join("-" * w for w in col_widths)
        self._print(render(headers))
        self._print(separator)
        for row in rows:
            self._print(render(row))
        if footer:
            self._print(separator)
            self._print(render(footer))

    def kv(self, data: dict[str, str], *, title: str = "") -> None:
        if title:
            self._print(f"\n{title}:")
        for k, v in data.items():
            self._print(f"  {k}: {v}")

    # -- Progress -----------------------------------------------------------

    def step(self, current: int, total: int, description: str) -> None:
        self._print(f"\n[{current}/{total}] {description}")

    def step_detail(self, message: str) -> None:
        self._print(f"  {message}")
