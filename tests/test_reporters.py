import json
from pathlib import Path

from lint_scope.models import ChangeSet
from lint_scope.reporters import (
    build_markdown_summary,
    build_step_outputs,
    write_github_output,
    write_json_report,
)


def _change_set() -> ChangeSet:
    return ChangeSet(added=["src/b.php"], modified=["src/a.php"])


def test_step_outputs_are_json_arrays():
    out = build_step_outputs(_change_set())
    assert json.loads(out["added"]) == ["src/b.php"]
    assert json.loads(out["modified"]) == ["src/a.php"]
    assert json.loads(out["files"]) == ["src/b.php", "src/a.php"]
    assert out["any_changed"] == "true"


def test_github_output_appends(tmp_path: Path):
    out_file = tmp_path / "output"
    out_file.write_text("previous=1\n")
    write_github_output(ChangeSet(), out_file)
    lines = out_file.read_text().splitlines()
    assert lines[0] == "previous=1"
    assert "added=[]" in lines
    assert "any_changed=false" in lines


def test_json_report_has_counts(tmp_path: Path):
    path = tmp_path / "scope.json"
    write_json_report(_change_set(), path)
    data = json.loads(path.read_text())
    assert data["counts"] == {"added": 1, "modified": 1, "total": 2}
    assert data["added"] == ["src/b.php"]
    assert data["tool"]["name"] == "lint-scope"


def test_markdown_summary_lists_sections():
    out = build_markdown_summary(_change_set())
    assert "**Added:** 1" in out
    assert "## Modified" in out
    assert "- `src/a.php`" in out


def test_markdown_summary_empty():
    assert "No files to lint." in build_markdown_summary(ChangeSet())
