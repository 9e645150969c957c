"""gqlbench.console._rich -- Rich-based backend.

Provides coloured, structured terminal output using the Rich library.
"""

from __future__ import annotations

from typing import TextIO

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.theme import Theme

_THEME = Theme(
    {
        "info": "blue",
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "step.num": "bold cyan",
        "banner": "bold",
        "dim": "dim",
    }
)


class RichBackend:
    """ConsoleProtocol implementation backed by Rich."""

    def __init__(self, stream: TextIO | None = None, *, stderr: bool = False) -> None:
        self._con = Console(theme=_THEME, highlight=False, file=stream, stderr=stderr)

    # -- General messages ---------------------------------------------------

    def info(self, message: str) -> None:
        self._con.print(escape(message), style="info")

    def success(self, message: str) -> None:
        self._con.print(f"✅ {escape(message)}", style="success")

    def warning(self, message: str) -> None:
        self._con.print(f"⚠️  {escape(message)}", style="warning")

    def error(self, message: str) -> None:
        self._con.print(f"❌ {escape(message)}", style="error")

    def line(self, text: str = "") -> None:
        self._con.out(text, highlight=False)

    # -- Structured output --------------------------------------------------

    def banner(self, title: str, *, subtitle: str = "") -> None:
        self._con.print()
        self._con.print(Rule(f" {escape(title)} ", style="banner", characters="="))
        if subtitle:
            self._con.print(f"[dim]{escape(subtitle)}[/]", justify="center")

    def rule(self, title: str = "") -> None:
        self._con.print()
        self._con.print(Rule(escape(title), style="dim", align="left"))

    def panel(self, content: str, *, title: str = "", style: str = "") -> None:
        self._con.print(
            Panel(escape(content), title=title or None, border_style=style or "dim"),
        )

    def table(
        self,
        headers: list[str],
        rows: list[list[str]],
        *,
        title: str = "",
        footer: list[str] | None = None,
    ) -> None:
        t = Table(
            title=title or None,
            box=box.SIMPLE,
            show_edge=False,
            pad_edge=True,
            show_footer=footer is not None,
        )
        for i, h in enumerate(headers):
            foot = footer[i] if footer and i < len(footer) else ""
            t.add_column(h, footer=escape(foot), justify="left" if i == 0 else "right")
        for r in rows:
            t.add_row(*(escape(cell) for cell in r))
        self._con.print(t)

    def kv(self, data: dict[str, str], *, title: str = "") -> None:
        t = Table(
            title=title or None,
            box=box.SIMPLE,
            show_header=False,
            show_edge=False,
            pad_edge=True,
        )
        t.add_column("Key", style="bold", justify="right")
        t.add_column("Value")
        for k, v in data.items():
            t.add_row(escape(k), escape(v))
        self._con.print(t)

    # -- Progress -----------------------------------------------------------

    def step(self, current: int, total: int, description: str) -> None:
        self._con.print(f"\n[step.num]\\[{current}/{total}][/] {escape(description)}")

    def step_detail(self, message: str) -> None:
        self._con.print(f"  [dim]{escape(message)}[/]")
