"""GitHub adapter used by every summarizer.

Wraps a PyGithub Repository and converts what it returns into the plain
dataclasses in prscribe_core.models. The summarizers receive a GitHubHost
instance rather than reaching for a module-level client, so tests hand them
a MagicMock or a small fake instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import islice

from github import Github

from prscribe_core.models import ChangeUnit, CommitRecord, PlatformComment, PullRequestInfo, ReleaseInfo
from prscribe_core.utils.diff import first_added_line
from prscribe_core.utils.links import LinkBase

logger = logging.getLogger(__name__)


@dataclass
class Comparison:
    commits: list[str] = field(default_factory=list)  # oldest first
    files: list[ChangeUnit] = field(default_factory=list)


def _change_unit(filename: str, sha: str | None, patch: str | None, status: str | None) -> ChangeUnit:
    patch = patch or ""
    return ChangeUnit(
        filename=filename,
        content_sha=sha or "",
        patch=patch,
        first_changed_line=first_added_line(patch),
        status=status or "modified",
    )


def _from_file(f) -> ChangeUnit:
    return _change_unit(f.filename, f.sha, f.patch, f.status)


def _from_raw_file(raw: dict) -> ChangeUnit:
    return _change_unit(raw["filename"], raw.get("sha"), raw.get("patch"), raw.get("status"))


class GitHubHost:
    def __init__(self, repo, server_url: str = "https://github.com"):
        self._repo = repo
        self._server_url = server_url
        self._pulls: dict[int, object] = {}

    @property
    def owner(self) -> str:
        return self._repo.owner.login

    @property
    def name(self) -> str:
        return self._repo.name

    @property
    def server_url(self) -> str:
        return self._server_url

    @property
    def link_base(self) -> LinkBase:
        return LinkBase(self._server_url, self.owner, self.name)

    def _pull(self, number: int):
        if number not in self._pulls:
            self._pulls[number] = self._repo.get_pull(number)
        return self._pulls[number]

    # -- pull requests ------------------------------------------------- #

    def get_pull(self, number: int) -> PullRequestInfo:
        pr = self._pull(number)
        return PullRequestInfo(number=number, base_sha=pr.base.sha, head_sha=pr.head.sha, body=pr.body or "")

    def list_pull_commits(self, number: int) -> list[str]:
        return [c.sha for c in self._pull(number).get_commits()]

    def list_pull_files(self, number: int) -> list[ChangeUnit]:
        return [_from_file(f) for f in self._pull(number).get_files()]

    def list_issue_comments(self, number: int) -> list[PlatformComment]:
        return [PlatformComment(id=c.id, body=c.body or "") for c in self._pull(number).get_issue_comments()]

    def list_review_comments(self, number: int) -> list[PlatformComment]:
        return [PlatformComment(id=c.id, body=c.body or "") for c in self._pull(number).get_review_comments()]

    def delete_review_comment(self, number: int, comment_id: int) -> None:
        logger.debug("Deleting review comment %d on PR #%d", comment_id, number)
        self._pull(number).get_review_comment(comment_id).delete()

    def create_issue_comment(self, number: int, body: str) -> int:
        return self._pull(number).create_issue_comment(body).id

    def create_review_comment(self, number: int, body: str, commit_sha: str, path: str, line: int, side: str) -> int:
        commit = self._repo.get_commit(commit_sha)
        return self._pull(number).create_review_comment(body, commit, path, line=line, side=side).id

    def update_pull_body(self, number: int, body: str) -> None:
        self._pull(number).edit(body=body)

    # -- commits and trees --------------------------------------------- #

    def get_commit(self, sha: str) -> CommitRecord:
        commit = self._repo.get_commit(sha)
        raw_files = commit.raw_data.get("files")
        return CommitRecord(
            sha=commit.sha,
            parents=[p.sha for p in commit.parents],
            files=None if raw_files is None else [_from_raw_file(f) for f in raw_files],
        )

    def list_commits(self, ref: str, limit: int) -> list[str]:
        """Newest ``limit`` commits reachable from ref, oldest first."""
        shas = [c.sha for c in islice(self._repo.get_commits(sha=ref), limit)]
        return list(reversed(shas))

    def compare(self, base: str, head: str) -> Comparison:
        comparison = self._repo.compare(base, head)
        return Comparison(
            commits=[c.sha for c in comparison.commits],
            files=[_from_file(f) for f in comparison.files],
        )

    def get_tree_shas(self, sha: str) -> dict[str, str]:
        """Map every blob path in the tree at sha to its blob sha."""
        tree = self._repo.get_git_tree(sha, recursive=True)
        return {element.path: element.sha for element in tree.tree if element.type == "blob"}

    # -- releases ------------------------------------------------------ #

    def get_release(self, tag: str) -> ReleaseInfo:
        release = self._repo.get_release(tag)
        return ReleaseInfo(id=release.id, tag_name=release.tag_name, name=release.title or "", body=release.body or "")

    def get_previous_release_tag(self, tag: str) -> str | None:
        """Tag of the release published before ``tag``, skipping drafts."""
        found = False
        for release in self._repo.get_releases():
            if found and not release.draft:
                return release.tag_name
            if release.tag_name == tag:
                found = True
        return None

    def update_release_body(self, tag: str, body: str) -> None:
        release = self._repo.get_release(tag)
        release.update_release(
            name=release.title or tag,
            message=body,
            draft=release.draft,
            prerelease=release.prerelease,
        )


def get_host(
    repo_name: str,
    token: str,
    server_url: str = "https://github.com",
    api_url: str | None = None,
) -> GitHubHost:
    gh = Github(token, base_url=api_url) if api_url else Github(token)
    return GitHubHost(gh.get_repo(repo_name), server_url=server_url)
