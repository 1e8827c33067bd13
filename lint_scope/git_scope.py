from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path
import asyncio
import contextlib
import logging

logger = logging.getLogger(__name__)

QUEUE_SIZE = 256
# Per-line limit for the asyncio stream readers.
LINE_LIMIT = 1024 * 1024

_EOF = object()


class GitScopeError(RuntimeError):
    pass


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace").rstrip("\r\n")


async def _pump_stdout(
    proc: asyncio.subprocess.Process,
    stream: asyncio.StreamReader,
    queue: asyncio.Queue,
) -> None:
    try:
        async for raw in stream:
            await queue.put(_decode(raw))
    except ValueError as exc:
        logger.error("git stdout: stopped reading, %s", exc)
        # stop the child and discard the rest of its output
        if proc.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
        while await stream.read(1 << 16):
            pass
    await queue.put(_EOF)


async def _drain_stderr(stream: asyncio.StreamReader) -> None:
    while True:
        try:
            raw = await stream.readline()
        except ValueError as exc:
            # the overlong line is discarded, keep draining
            logger.error("git stderr: %s", exc)
            continue
        if not raw:
            break
        text = _decode(raw).strip()
        if text:
            logger.error("git stderr: %s", text)


async def _watchdog(proc: asyncio.subprocess.Process, timeout: float) -> None:
    await asyncio.sleep(timeout)
    if proc.returncode is None:
        logger.warning("git did not finish within %ss, terminating it", timeout)
        with contextlib.suppress(ProcessLookupError):
            proc.terminate()


async def stream_git_lines(
    cmd: list[str],
    cwd: Path,
    timeout: float | None = None,
) -> AsyncIterator[str]:
    """Run ``cmd`` and yield its stdout one line at a time.

    stderr is drained on its own task and logged. A non-zero exit status,
    including termination after ``timeout`` seconds, is logged rather than
    raised; lines produced before the failure are still yielded. Only a
    failure to start the process raises ``GitScopeError``.
    """
    logger.debug("Running: %s", " ".join(cmd))
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=str(cwd),
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            limit=LINE_LIMIT,
        )
    except FileNotFoundError as exc:
        raise GitScopeError(f"{cmd[0]} is not installed or not available in PATH") from exc
    except OSError as exc:
        raise GitScopeError(f"Failed to start {cmd[0]}: {exc}") from exc

    queue: asyncio.Queue = asyncio.Queue(maxsize=QUEUE_SIZE)
    reader = asyncio.create_task(_pump_stdout(proc, proc.stdout, queue))
    stderr_task = asyncio.create_task(_drain_stderr(proc.stderr))
    watchdog = asyncio.create_task(_watchdog(proc, timeout)) if timeout else None

    finished = False
    try:
        while True:
            line = await queue.get()
            if line is _EOF:
                finished = True
                break
            yield line
    finally:
        if not finished and proc.returncode is None:
            # consumer stopped early
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
        if watchdog is not None:
            watchdog.cancel()
        reader.cancel()
        await asyncio.gather(
            reader,
            stderr_task,
            *([watchdog] if watchdog is not None else []),
            return_exceptions=True,
        )
        code = await proc.wait()
        if code:
            logger.debug("git: %s", code)
            logger.error("git exited with %s", code)
