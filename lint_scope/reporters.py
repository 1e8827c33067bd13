from __future__ import annotations

import json
from pathlib import Path

from lint_scope import __version__
from lint_scope.models import ChangeSet


def write_json_report(change_set: ChangeSet, path: Path) -> None:
    data = change_set.to_dict()
    data["tool"] = {"name": "lint-scope", "version": __version__}
    path.write_text(json.dumps(data, indent=2))


def build_step_outputs(change_set: ChangeSet) -> dict[str, str]:
    return {
        "added": json.dumps(change_set.added),
        "modified": json.dumps(change_set.modified),
        "files": json.dumps(change_set.all_files),
        "any_changed": "false" if change_set.is_empty() else "true",
    }


def write_github_output(change_set: ChangeSet, path: Path) -> None:
    with path.open("a", encoding="utf-8") as fh:
        for key, value in build_step_outputs(change_set).items():
            fh.write(f"{key}={value}\n")


def build_markdown_summary(change_set: ChangeSet) -> str:
    counts = change_set.counts()
    lines = [
        "# lint-scope changed files",
        "",
        f"- **Added:** {counts['added']}",
        f"- **Modified:** {counts['modified']}",
        f"- **Total:** {counts['total']}",
        "",
    ]

    if change_set.is_empty():
        lines.append("No files to lint.")
        return "\n".join(lines) + "\n"

    for title, paths in (("Added", change_set.added), ("Modified", change_set.modified)):
        if not paths:
            continue
        lines.extend([f"## {title}", ""])
        lines.extend([f"- `{p}`" for p in paths])
        lines.append("")

    return "\n".join(lines)


def write_markdown_summary(change_set: ChangeSet, path: Path) -> None:
    with path.open("a", encoding="utf-8") as fh:
        fh.write(build_markdown_summary(change_set))
