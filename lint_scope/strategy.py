from __future__ import annotations

from lint_scope.models import (
    ZERO_SHA,
    DiffStrategy,
    FullTreeListing,
    IncrementalDiff,
    OtherEvent,
    PullRequestEvent,
    PushEvent,
    TriggerEvent,
)

GIT_BASE_ARGS = ["git", "-c", "core.quotePath=off", "--no-pager"]


def history_rewritten(event: PushEvent) -> bool:
    # An all-zero "before" means the branch was just created.
    return event.forced or event.before_sha == ZERO_SHA


def select_strategy(event: TriggerEvent) -> DiffStrategy | None:
    """Return how to list the files touched by ``event``; None for unsupported events."""
    if isinstance(event, PullRequestEvent):
        return IncrementalDiff(base_ref=event.base_sha)

    if isinstance(event, PushEvent):
        if history_rewritten(event):
            return FullTreeListing(head_ref=event.after_sha)
        return IncrementalDiff(base_ref=event.before_sha)

    if isinstance(event, OtherEvent):
        return None

    raise TypeError(f"Unsupported trigger event: {event!r}")


def build_git_command(strategy: DiffStrategy) -> list[str]:
    if isinstance(strategy, IncrementalDiff):
        return [
            *GIT_BASE_ARGS,
            "diff-tree",
            "--no-commit-id",
            "--name-status",
            "--diff-filter=d",
            # paths relative to cwd, as ls-tree prints them
            "--relative",
            "-r",
            f"{strategy.base_ref}..",
        ]

    if isinstance(strategy, FullTreeListing):
        return [
            *GIT_BASE_ARGS,
            "ls-tree",
            "-r",
            "--name-only",
            strategy.head_ref,
        ]

    raise TypeError(f"Unsupported diff strategy: {strategy!r}")
