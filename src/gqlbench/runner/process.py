"""Child process execution with cancellation and an optional timeout."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from gqlbench.config import TERMINATE_GRACE_SECONDS
from gqlbench.domain.models import ProcessResult

logger = logging.getLogger(__name__)


async def terminate(proc: asyncio.subprocess.Process) -> None:
    """Terminate *proc*, escalating to kill after the grace period."""
    if proc.returncode is not None:
        return
    logger.info("Stopping process pid=%s", proc.pid)
    try:
        proc.terminate()
    except ProcessLookupError:
        return
    try:
        await asyncio.wait_for(proc.wait(), timeout=TERMINATE_GRACE_SECONDS)
    except TimeoutError:
        logger.warning("Process pid=%s ignored SIGTERM, killing", proc.pid)
        proc.kill()
        await proc.wait()


async def run_process(
    argv: Sequence[str],
    *,
    cwd: Path,
    cancel: asyncio.Event | None = None,
    timeout: float | None = None,
    merge_stderr: bool = True,
) -> ProcessResult:
    """Run *argv* in *cwd* and capture its output.

    With ``merge_stderr`` the child's stderr is folded into ``output``;
    otherwise it is captured separately. A non-zero exit, cancellation or a
    timeout is reported on the result, never raised. ``OSError`` from
    launching the executable propagates.
    """
    args = tuple(str(a) for a in argv)
    if cancel is not None and cancel.is_set():
        logger.info("Not starting %s: cancelled", args[0])
        return ProcessResult(argv=args, exit_code=None, output="", cancelled=True)

    logger.debug("Running %s in %s", " ".join(args), cwd)
    start = time.perf_counter()
    proc = await asyncio.create_subprocess_exec(
        *args,
        cwd=cwd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.STDOUT if merge_stderr else asyncio.subprocess.PIPE,
    )

    communicate = asyncio.ensure_future(proc.communicate())
    waiters: set[asyncio.Future[Any]] = {communicate}
    cancel_wait: asyncio.Future[Any] | None = None
    if cancel is not None:
        cancel_wait = asyncio.ensure_future(cancel.wait())
        waiters.add(cancel_wait)

    cancelled = timed_out = False
    try:
        done, _ = await asyncio.wait(
            waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
        )
        if communicate not in done:
            cancelled = cancel_wait is not None and cancel_wait in done
            timed_out = not cancelled
            await terminate(proc)
        stdout, stderr = await communicate
    finally:
        if cancel_wait is not None:
            cancel_wait.cancel()
        if not communicate.done():
            communicate.cancel()
            await terminate(proc)

    duration = time.perf_counter() - start
    result = ProcessResult(
        argv=args,
        exit_code=proc.returncode,
        output=(stdout or b"").decode("utf-8", errors="replace"),
        stderr=(stderr or b"").decode("utf-8", errors="replace"),
        duration=duration,
        cancelled=cancelled,
        timed_out=timed_out,
    )
    logger.debug(
        "%s exited with %s after %.3fs (cancelled=%s, timed_out=%s)",
        args[0],
        result.exit_code,
        duration,
        cancelled,
        timed_out,
    )
    return result
