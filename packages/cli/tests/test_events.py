"""Tests for reading the GitHub Actions event."""

import json

import pytest

from prscribe_cli.events import load_event, parse_event
from prscribe_core.errors import EventError


class TestParseEvent:
    def test_pull_request(self):
        event = parse_event("pull_request", {"pull_request": {"number": 12}, "repository": {"full_name": "o/r"}})
        assert (event.kind, event.repo, event.pr_number) == ("pull_request", "o/r", 12)

    def test_pull_request_target_falls_back_to_top_level_number(self):
        event = parse_event("pull_request_target", {"number": 3}, default_repo="o/r")
        assert event.pr_number == 3
        assert event.repo == "o/r"

    def test_release(self):
        event = parse_event("release", {"release": {"tag_name": "v1.0.0"}}, default_repo="o/r")
        assert (event.kind, event.tag) == ("release", "v1.0.0")

    def test_unsupported_event(self):
        with pytest.raises(EventError, match="Unsupported event"):
            parse_event("push", {}, default_repo="o/r")

    def test_missing_repository(self):
        with pytest.raises(EventError):
            parse_event("pull_request", {"number": 1})

    def test_missing_pr_number(self):
        with pytest.raises(EventError):
            parse_event("pull_request", {}, default_repo="o/r")

    def test_release_without_tag(self):
        with pytest.raises(EventError):
            parse_event("release", {"release": {}}, default_repo="o/r")


class TestLoadEvent:
    def test_reads_payload_file(self, tmp_path):
        path = tmp_path / "event.json"
        path.write_text(json.dumps({"number": 8}))
        env = {"GITHUB_EVENT_NAME": "pull_request", "GITHUB_EVENT_PATH": str(path), "GITHUB_REPOSITORY": "o/r"}
        assert load_event(env).pr_number == 8

    def test_outside_actions(self):
        with pytest.raises(EventError, match="GitHub Actions"):
            load_event({})

    def test_unreadable_payload(self, tmp_path):
        env = {"GITHUB_EVENT_NAME": "pull_request", "GITHUB_EVENT_PATH": str(tmp_path / "missing.json")}
        with pytest.raises(EventError, match="Could not read"):
            load_event(env)
