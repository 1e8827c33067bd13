from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from contextlib import aclosing
from pathlib import Path
from typing import Any
import asyncio
import logging

from lint_scope.config import ScopeSettings
from lint_scope.events import classify_event
from lint_scope.filters import PathFilter, classify_status_line, classify_tree_line
from lint_scope.git_scope import stream_git_lines
from lint_scope.models import ChangeSet, FullTreeListing, TriggerEvent
from lint_scope.strategy import build_git_command, select_strategy

logger = logging.getLogger(__name__)


async def resolve_changed_files(
    event: TriggerEvent,
    path_filter: PathFilter,
    root: Path,
    timeout: float | None = 5.0,
    full_tree_timeout: float | None = None,
) -> ChangeSet:
    """Collect the added and modified files for ``event`` that pass ``path_filter``.

    Never raises: failures are logged and whatever was accumulated (possibly
    nothing) is returned.
    """
    strategy = select_strategy(event)
    if strategy is None:
        return ChangeSet()

    full_tree = isinstance(strategy, FullTreeListing)
    classify = classify_tree_line if full_tree else classify_status_line
    if full_tree:
        logger.info("History was rewritten, checking every file at %s", strategy.head_ref)
    else:
        logger.debug("Base SHA: %s", strategy.base_ref)

    result = ChangeSet()
    try:
        lines = stream_git_lines(
            build_git_command(strategy),
            cwd=root,
            timeout=full_tree_timeout if full_tree else timeout,
        )
        async with aclosing(lines):
            async for line in lines:
                logger.debug("%s", line)
                entry = classify(line)
                if entry is not None and path_filter.accepts(entry.path, root):
                    result.record(entry)
    except Exception as exc:
        logger.error("%s", exc)
        return ChangeSet()

    return result


def get_changed_files(
    event_name: str,
    payload: dict[str, Any],
    settings: ScopeSettings,
    root: Path | None = None,
) -> ChangeSet:
    root = (root or Path.cwd()).resolve()
    path_filter = settings.path_filter
    logger.info("Filter patterns: %s", ",".join(path_filter.include))
    logger.info("Exclude patterns: %s", ",".join(path_filter.exclude))

    try:
        event = classify_event(event_name, payload)
    except Exception as exc:
        logger.error("%s", exc)
        return ChangeSet()

    def run() -> ChangeSet:
        return asyncio.run(
            resolve_changed_files(
                event,
                path_filter,
                root,
                timeout=settings.git_timeout_seconds,
                full_tree_timeout=settings.full_tree_timeout_seconds,
            )
        )

    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return run()

    # called from inside an event loop: give the pipeline a loop of its own
    with ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(run).result()
