from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Union


ZERO_SHA = "0" * 40

ADDED = "added"
MODIFIED = "modified"


@dataclass(frozen=True)
class PullRequestEvent:
    base_sha: str
    head_sha: str


@dataclass(frozen=True)
class PushEvent:
    before_sha: str
    after_sha: str
    forced: bool = False


@dataclass(frozen=True)
class OtherEvent:
    event_name: str


TriggerEvent = Union[PullRequestEvent, PushEvent, OtherEvent]


@dataclass(frozen=True)
class IncrementalDiff:
    base_ref: str


@dataclass(frozen=True)
class FullTreeListing:
    head_ref: str


DiffStrategy = Union[IncrementalDiff, FullTreeListing]


@dataclass(frozen=True)
class ClassifiedEntry:
    status: str  # added|modified
    path: str


@dataclass
class ChangeSet:
    added: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)
    _seen: set[str] = field(default_factory=set, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._seen.update(self.added)
        self._seen.update(self.modified)

    def record(self, entry: ClassifiedEntry) -> bool:
        """Append the entry unless its path was already recorded under either status."""
        if entry.path in self._seen:
            return False
        self._seen.add(entry.path)
        if entry.status == MODIFIED:
            self.modified.append(entry.path)
        else:
            self.added.append(entry.path)
        return True

    @property
    def all_files(self) -> list[str]:
        return [*self.added, *self.modified]

    def is_empty(self) -> bool:
        return not self.added and not self.modified

    def counts(self) -> dict[str, int]:
        return {
            ADDED: len(self.added),
            MODIFIED: len(self.modified),
            "total": len(self.added) + len(self.modified),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "counts": self.counts(),
            ADDED: list(self.added),
            MODIFIED: list(self.modified),
        }
