"""SIGINT/SIGTERM handling: set the shared cancellation event."""

from __future__ import annotations

import asyncio
import logging
import signal
from collections.abc import Iterator
from contextlib import contextmanager

from gqlbench.console import console

logger = logging.getLogger(__name__)

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


@contextmanager
def cancel_on_signals(cancel: asyncio.Event) -> Iterator[asyncio.Event]:
    """Set *cancel* when SIGINT or SIGTERM arrives while the block runs.

    Must be entered from inside the running event loop. Platforms without
    ``add_signal_handler`` keep the default behaviour.
    """
    loop = asyncio.get_running_loop()
    installed: list[signal.Signals] = []

    def _on_signal(sig: signal.Signals) -> None:
        if cancel.is_set():
            return
        logger.warning("Received %s, cancelling", sig.name)
        console.warning("Interrupted, cleaning up...")
        cancel.set()

    for sig in HANDLED_SIGNALS:
        try:
            loop.add_signal_handler(sig, _on_signal, sig)
        except (NotImplementedError, RuntimeError):
            logger.debug("Signal handlers unavailable for %s", sig.name)
            continue
        installed.append(sig)

    try:
        yield cancel
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)
