"""gqlbench.console -- terminal output for the harness.

Usage (any module)::

    from gqlbench.console import console

    console.info("Generating workload...")
    console.step(1, 2, "tiny-ts")
    console.table(["Name", "Files"], [["tiny-ts", "52"]])

Configuration (call once in ``cli.py:main()``)::

    from gqlbench.console import configure

    configure(backend="auto")  # "rich" | "plain" | "auto"
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from gqlbench.console._plain import PlainBackend

if TYPE_CHECKING:
    from gqlbench.console._protocol import ConsoleProtocol

# ---------------------------------------------------------------------------
# Global singleton -- defaults to PlainBackend
# ---------------------------------------------------------------------------

_backend: ConsoleProtocol = PlainBackend()


def configure(*, backend: str = "auto", stderr: bool = False) -> None:
    """Select the console backend.

    Should be called **once** at startup (in ``cli.py:main()``).

    Args:
        backend: ``"rich"`` -- always use Rich.
                 ``"plain"`` -- always use plain text.
                 ``"auto"`` (default) -- Rich when the target stream is a
                 TTY; plain otherwise.
        stderr: Route all console output to stderr, keeping stdout free for
                a structured report.
    """
    global _backend  # noqa: PLW0603

    stream = sys.stderr if stderr else None

    if backend == "auto":
        target = sys.stderr if stderr else sys.stdout
        backend = "rich" if target.isatty() else "plain"

    if backend == "rich":
        from gqlbench.console._rich import RichBackend

        _backend = RichBackend(stderr=stderr)
    elif backend == "plain":
        _backend = PlainBackend(stream)
    else:
        raise ValueError(f"unknown console backend: {backend}")


def get_console() -> ConsoleProtocol:
    """Return the current backend instance."""
    return _backend


# ---------------------------------------------------------------------------
# Proxy object -- ``from gqlbench.console import console``
# ---------------------------------------------------------------------------


class _ConsoleProxy:
    """Transparent proxy that delegates to the current ``_backend``.

    This lets callers import ``console`` once at module level and
    automatically pick up any later ``configure()`` call.
    """

    def __getattr__(self, name: str) -> object:
        return getattr(_backend, name)


console: ConsoleProtocol = _ConsoleProxy()  # type: ignore[assignment]
