from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable
import fnmatch
import logging
import re

from lint_scope.models import ADDED, MODIFIED, ChangeSet, ClassifiedEntry

logger = logging.getLogger(__name__)

DEFAULT_INCLUDE = ("**.php",)

# diff-tree --name-status: "M\tpath", or "R100\told\tnew" for renames and copies.
# A single tab separates status and path; a run of spaces is tolerated.
STATUS_LINE = re.compile(r"^(?P<status>[ACMR])\d*(?:\t| +)(?P<path>[^\t].*)$")

STATUS_MAP = {
    "A": ADDED,
    "C": ADDED,
    "R": ADDED,
    "M": MODIFIED,
}


def parse_globs(value: str | Iterable[str] | None) -> tuple[str, ...]:
    if value is None:
        return ()
    items = value.split(",") if isinstance(value, str) else value
    return tuple(str(p).strip() for p in items if p is not None and str(p).strip())


def _matches_any(path: str, patterns: tuple[str, ...]) -> bool:
    for pattern in patterns:
        if fnmatch.fnmatchcase(path, pattern):
            return True
    return False


@dataclass(frozen=True)
class PathFilter:
    include: tuple[str, ...] = DEFAULT_INCLUDE
    exclude: tuple[str, ...] = ()

    @classmethod
    def from_strings(cls, files: str | None, exclude: str | None) -> "PathFilter":
        return cls(include=parse_globs(files) or DEFAULT_INCLUDE, exclude=parse_globs(exclude))

    def matches(self, path: str) -> bool:
        return _matches_any(path, self.include) and not _matches_any(path, self.exclude)

    def accepts(self, path: str, root: Path) -> bool:
        """Glob match plus an existence check against the working tree."""
        return self.matches(path) and (root / path).is_file()

    def apply(self, change_set: ChangeSet, root: Path) -> ChangeSet:
        out = ChangeSet()
        for path in change_set.added:
            if self.accepts(path, root):
                out.record(ClassifiedEntry(ADDED, path))
        for path in change_set.modified:
            if self.accepts(path, root):
                out.record(ClassifiedEntry(MODIFIED, path))
        return out


def classify_status_line(line: str) -> ClassifiedEntry | None:
    parsed = STATUS_LINE.match(line)
    if not parsed:
        return None
    status = parsed.group("status")
    path = parsed.group("path")
    if status in ("C", "R") and "\t" in path:
        # keep only the destination path
        path = path.rsplit("\t", 1)[1]
    return ClassifiedEntry(STATUS_MAP[status], path)


def classify_tree_line(line: str) -> ClassifiedEntry | None:
    if not line:
        return None
    return ClassifiedEntry(ADDED, line)
