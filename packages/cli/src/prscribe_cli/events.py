"""Mapping a GitHub Actions event onto a pull request or a release."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass

from prscribe_core.errors import EventError

PULL_REQUEST_EVENTS = ("pull_request", "pull_request_target")
RELEASE_EVENTS = ("release",)


@dataclass
class CIEvent:
    kind: str  # "pull_request" | "release"
    repo: str  # owner/name
    pr_number: int | None = None
    tag: str | None = None


def parse_event(name: str, payload: dict, default_repo: str | None = None) -> CIEvent:
    repo = (payload.get("repository") or {}).get("full_name") or default_repo
    if not repo:
        raise EventError("Could not determine the repository from the event payload or GITHUB_REPOSITORY.")

    if name in PULL_REQUEST_EVENTS:
        number = (payload.get("pull_request") or {}).get("number") or payload.get("number")
        if not number:
            raise EventError(f"{name} event payload has no pull request number.")
        return CIEvent(kind="pull_request", repo=repo, pr_number=int(number))

    if name in RELEASE_EVENTS:
        tag = (payload.get("release") or {}).get("tag_name")
        if not tag:
            raise EventError("release event payload has no tag_name.")
        return CIEvent(kind="release", repo=repo, tag=tag)

    raise EventError(f"Unsupported event {name!r}. Run on pull_request or release events.")


def load_event(environ: Mapping[str, str] = os.environ) -> CIEvent:
    """Read the event GitHub Actions describes in GITHUB_EVENT_NAME / GITHUB_EVENT_PATH."""
    name = environ.get("GITHUB_EVENT_NAME")
    path = environ.get("GITHUB_EVENT_PATH")
    if not name or not path:
        raise EventError("GITHUB_EVENT_NAME and GITHUB_EVENT_PATH must be set. Is this running in GitHub Actions?")
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise EventError(f"Could not read event payload {path}: {e}") from e
    return parse_event(name, payload, environ.get("GITHUB_REPOSITORY"))
