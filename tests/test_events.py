import json
import logging
from pathlib import Path

import pytest

from lint_scope.events import EventPayloadError, classify_event, load_event_context
from lint_scope.models import OtherEvent, PullRequestEvent, PushEvent


def test_pull_request_uses_base_and_head_sha():
    payload = {"pull_request": {"base": {"sha": "base1"}, "head": {"sha": "head1"}}, "forced": True}
    assert classify_event("pull_request", payload) == PullRequestEvent(base_sha="base1", head_sha="head1")


def test_push_reads_before_after_and_forced():
    event = classify_event("push", {"before": "abc123", "after": "def456", "forced": True})
    assert event == PushEvent(before_sha="abc123", after_sha="def456", forced=True)


def test_push_without_forced_flag_defaults_to_false():
    event = classify_event("push", {"before": "abc123", "after": "def456"})
    assert event.forced is False


def test_unknown_event_is_logged_and_terminal(caplog):
    with caplog.at_level(logging.ERROR):
        event = classify_event("issue_comment", {"comment": {}})
    assert event == OtherEvent(event_name="issue_comment")
    assert "Unknown event type issue_comment" in caplog.text


def test_pull_request_missing_head_is_rejected():
    with pytest.raises(EventPayloadError):
        classify_event("pull_request", {"pull_request": {"base": {"sha": "base1"}}})


def test_push_with_null_after_is_rejected():
    with pytest.raises(EventPayloadError):
        classify_event("push", {"before": "abc123", "after": None})


def test_load_event_context_from_runner_env(tmp_path: Path, monkeypatch):
    event_file = tmp_path / "event.json"
    event_file.write_text(json.dumps({"before": "a", "after": "b"}))
    monkeypatch.setenv("GITHUB_EVENT_NAME", "push")
    monkeypatch.setenv("GITHUB_EVENT_PATH", str(event_file))

    name, payload = load_event_context()
    assert name == "push"
    assert payload == {"before": "a", "after": "b"}


def test_load_event_context_prefers_explicit_values(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("GITHUB_EVENT_NAME", "push")
    monkeypatch.delenv("GITHUB_EVENT_PATH", raising=False)

    name, payload = load_event_context("pull_request", str(tmp_path / "missing.json"))
    assert name == "pull_request"
    assert payload == {}


def test_load_event_context_rejects_non_object_payload(tmp_path: Path):
    event_file = tmp_path / "event.json"
    event_file.write_text("[1, 2]")
    with pytest.raises(EventPayloadError):
        load_event_context("push", str(event_file))
