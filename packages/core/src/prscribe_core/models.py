"""Plain data carried between the host adapter and the summarizers.

The host adapter converts PyGithub objects into these dataclasses so the
summarizers never touch the SDK directly and tests can build them by hand.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# Stands in for the pre-change blob id of a file that did not exist at the base.
NEW_FILE_SHA = "None"


@dataclass
class ChangeUnit:
    """A single file's modification within a commit or a PR-wide diff."""

    filename: str
    content_sha: str
    patch: str = ""  # empty for binary files
    origin_sha: str = NEW_FILE_SHA
    first_changed_line: int = 0  # 0 when the patch adds no lines
    status: str = "modified"

    @property
    def is_binary(self) -> bool:
        return self.patch == ""

    @property
    def is_new(self) -> bool:
        return self.origin_sha == NEW_FILE_SHA


@dataclass
class CommitRecord:
    sha: str
    parents: list[str] = field(default_factory=list)
    # None when the platform omitted the file list.
    files: list[ChangeUnit] | None = None

    @property
    def is_linear(self) -> bool:
        """True for a normal commit with exactly one parent."""
        return len(self.parents) == 1


@dataclass
class PlatformComment:
    """A comment as fetched from the host; decoded by comment_codec."""

    id: int
    body: str


@dataclass
class PullRequestInfo:
    number: int
    base_sha: str
    head_sha: str
    body: str = ""


@dataclass
class ReleaseInfo:
    id: int
    tag_name: str
    name: str = ""
    body: str = ""


class CommitState(Enum):
    REUSED = "reused"  # a tagged comment already existed
    MERGE = "merge"  # not a linear commit, generation skipped
    SUMMARIZED = "summarized"
    ERRORED = "errored"  # generation failed or prompt too big


@dataclass
class CommitSummary:
    sha: str
    text: str
    state: CommitState
    # True for the head commit, whose summary goes out with the rollup.
    deferred: bool = False

    @property
    def is_fresh(self) -> bool:
        return self.state is not CommitState.REUSED
