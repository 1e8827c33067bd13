from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any
import os
import yaml

from lint_scope.filters import DEFAULT_INCLUDE, PathFilter, parse_globs


DEFAULT_CONFIG_FILE = ".lint-scope.yml"

DEFAULT_SETTINGS = {
    "files": list(DEFAULT_INCLUDE),
    "exclude": [],
    "git_timeout_seconds": 5.0,
    "full_tree_timeout_seconds": None,
}


@dataclass
class ScopeSettings:
    include: tuple[str, ...]
    exclude: tuple[str, ...]
    git_timeout_seconds: float | None
    full_tree_timeout_seconds: float | None = None

    @property
    def path_filter(self) -> PathFilter:
        return PathFilter(include=self.include or DEFAULT_INCLUDE, exclude=self.exclude)


def get_input(name: str) -> str:
    """Read a step input the way the Actions runner exposes it (INPUT_<NAME>)."""
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    return (os.getenv(key, "") or "").strip()


def _timeout(value: Any, key: str) -> float | None:
    if value is None or value == "":
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid {key} '{value}' (expected a number of seconds)") from exc
    if seconds <= 0:
        return None
    return seconds


def _globs(value: Any, key: str) -> Any:
    if value is None or isinstance(value, (str, list)):
        return value
    raise ValueError(f"Invalid {key} '{value}' (expected a comma-separated string or a list)")


def _read_config_file(path: str | None, root: Path) -> dict[str, Any]:
    if path:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
    else:
        config_path = root / DEFAULT_CONFIG_FILE
        if not config_path.exists():
            return {}

    data = yaml.safe_load(config_path.read_text()) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return data


def load_settings(
    root: Path,
    config_path: str | None = None,
    files: str | None = None,
    exclude: str | None = None,
    timeout: float | None = None,
) -> ScopeSettings:
    data = DEFAULT_SETTINGS.copy()
    data.update(_read_config_file(config_path, root))

    file_include = parse_globs(_globs(data.get("files"), "files"))
    file_exclude = parse_globs(_globs(data.get("exclude"), "exclude"))

    include = parse_globs(files) or parse_globs(get_input("files")) or file_include
    excludes = parse_globs(exclude) or parse_globs(get_input("exclude")) or file_exclude

    git_timeout: Any = data.get("git_timeout_seconds")
    if get_input("git timeout"):
        git_timeout = get_input("git timeout")
    if timeout is not None:
        git_timeout = timeout

    return ScopeSettings(
        include=include or DEFAULT_INCLUDE,
        exclude=excludes,
        git_timeout_seconds=_timeout(git_timeout, "git_timeout_seconds"),
        full_tree_timeout_seconds=_timeout(data.get("full_tree_timeout_seconds"), "full_tree_timeout_seconds"),
    )
