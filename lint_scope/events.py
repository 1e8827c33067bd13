from __future__ import annotations

from pathlib import Path
from typing import Any
import json
import logging
import os

from lint_scope.models import OtherEvent, PullRequestEvent, PushEvent, TriggerEvent

logger = logging.getLogger(__name__)


class EventPayloadError(ValueError):
    pass


def _require_sha(payload: dict[str, Any], *keys: str) -> str:
    node: Any = payload
    for key in keys:
        if not isinstance(node, dict) or key not in node:
            raise EventPayloadError(f"Event payload is missing '{'.'.join(keys)}'")
        node = node[key]
    if not isinstance(node, str) or not node:
        raise EventPayloadError(f"Event payload field '{'.'.join(keys)}' is not a commit SHA")
    return node


def classify_event(event_name: str, payload: dict[str, Any]) -> TriggerEvent:
    """Decode the CI event once into one of the trigger variants.

    Unknown event names are not fatal: they are logged and returned as
    ``OtherEvent`` so the caller can short-circuit to an empty result.
    A known event whose payload lacks the commit fields raises
    ``EventPayloadError``.
    """
    if event_name == "pull_request":
        return PullRequestEvent(
            base_sha=_require_sha(payload, "pull_request", "base", "sha"),
            head_sha=_require_sha(payload, "pull_request", "head", "sha"),
        )

    if event_name == "push":
        return PushEvent(
            before_sha=_require_sha(payload, "before"),
            after_sha=_require_sha(payload, "after"),
            forced=bool(payload.get("forced") or False),
        )

    logger.error("Unknown event type %s", event_name)
    return OtherEvent(event_name=event_name)


def load_event_payload(path: str | Path | None) -> dict[str, Any]:
    if not path:
        return {}

    event_path = Path(path)
    if not event_path.exists():
        logger.warning("Event payload file not found: %s", event_path)
        return {}

    data = json.loads(event_path.read_text(encoding="utf-8") or "{}")
    if not isinstance(data, dict):
        raise EventPayloadError(f"Event payload in {event_path} is not a JSON object")
    return data


def load_event_context(
    event_name: str | None = None,
    event_path: str | None = None,
) -> tuple[str, dict[str, Any]]:
    """Resolve the event name and payload, falling back to the runner environment."""
    name = (event_name or os.getenv("GITHUB_EVENT_NAME", "") or "").strip()
    payload = load_event_payload(event_path or os.getenv("GITHUB_EVENT_PATH"))
    return name, payload
