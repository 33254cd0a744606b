"""Per-commit summaries for a pull request, posted as issue comments.

Every commit gets one ``GPT summary of <sha>:`` comment. Commits that already
have one are reused, so re-running the tool on an unchanged PR posts nothing.
The head commit is the exception: its summary is held back and posted
together with the PR rollup once the head is freshly summarized.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from rich.console import Console

from prscribe_core import comment_codec
from prscribe_core.errors import MissingPlatformDataError
from prscribe_core.files_summary import FilesSummary
from prscribe_core.models import CommitState, CommitSummary, PullRequestInfo
from prscribe_core.prompts import (
    COMMIT_SYSTEM_PROMPT,
    DIFF_TOO_BIG_SUMMARY,
    ERROR_SUMMARY,
    MERGE_COMMIT_SUMMARY,
    commit_user_prompt,
)
from prscribe_core.summarize_pr import summarize_pr
from prscribe_core.utils.diff import format_git_diff
from prscribe_core.utils.filters import should_summarize
from prscribe_core.utils.links import postprocess_summary
from prscribe_core.utils.sections import extract_section, upsert_section

console = Console()
logger = logging.getLogger(__name__)


@dataclass
class CommitsResult:
    summaries: list[CommitSummary] = field(default_factory=list)
    rollup: str | None = None  # set only when the head commit was freshly summarized
    posted_comment_ids: list[int] = field(default_factory=list)


class CommitSummarizer:
    def __init__(self, host, generator, config: dict):
        self.host = host
        self.generator = generator
        self.config = config

    def summarize_commit(self, sha: str) -> tuple[str, CommitState]:
        """Summarize one commit against its parent.

        Raises MissingPlatformDataError when the platform returns the commit
        without a file list.
        """
        record = self.host.get_commit(sha)
        if record.files is None:
            raise MissingPlatformDataError(f"Commit {sha} was returned without a file list")
        if not record.is_linear:
            logger.info("Commit %s has %d parents, not summarizing", sha, len(record.parents))
            return MERGE_COMMIT_SUMMARY, CommitState.MERGE

        comparison = self.host.compare(record.parents[0], sha)
        files = [
            f
            for f in comparison.files
            if should_summarize(f.filename, self.config["ignore_files"], self.config["include_files"])
        ]
        raw_git_diff = "\n".join(format_git_diff(f.filename, f.patch) for f in files)
        prompt = commit_user_prompt(raw_git_diff)
        logger.debug("User prompt for commit %s:\n%s", sha, prompt)

        if len(prompt) > self.config["max_query_length"]:
            logger.warning("Prompt for commit %s is %d chars, too big to summarize", sha, len(prompt))
            return DIFF_TOO_BIG_SUMMARY, CommitState.ERRORED

        text = self.generator.generate(COMMIT_SYSTEM_PROMPT, prompt)
        if text is None:
            return ERROR_SUMMARY, CommitState.ERRORED
        linked = postprocess_summary([f.filename for f in files], text, self.host.link_base, ref=sha)
        return linked, CommitState.SUMMARIZED

    def _existing_summaries(self, pull: PullRequestInfo) -> list[comment_codec.DecodedComment]:
        server_url = self.host.server_url
        existing = comment_codec.decode_all(self.host.list_issue_comments(pull.number), server_url)
        # The head summary lives in the PR description when output_as_comment is off.
        section = comment_codec.decode(extract_section(pull.body), server_url)
        if section is not None:
            existing.append(section)
        return existing

    def summarize(self, pull: PullRequestInfo, files_summary: FilesSummary) -> CommitsResult:
        result = CommitsResult()
        existing = self._existing_summaries(pull)
        commits = self.host.list_pull_commits(pull.number)
        max_commits = self.config["max_commits"]
        processed = 0

        for sha in commits:
            previous = comment_codec.find_summary(existing, sha)
            if previous is not None:
                result.summaries.append(CommitSummary(sha, previous.summary, CommitState.REUSED))
                if previous.comment_id is None and sha != pull.head_sha:
                    # Only in the description, which the new head is about to replace.
                    logger.info("Moving summary of former head %s from the PR description to a comment", sha)
                    comment_id = self.host.create_issue_comment(pull.number, comment_codec.encode(sha, previous.summary))
                    result.posted_comment_ids.append(comment_id)
                continue

            console.print(f"  Summarizing commit: {sha[:7]}")
            is_head = sha == pull.head_sha
            text, state = self.summarize_commit(sha)
            result.summaries.append(CommitSummary(sha, text, state, deferred=is_head))

            if not is_head:
                comment_id = self.host.create_issue_comment(pull.number, comment_codec.encode(sha, text))
                result.posted_comment_ids.append(comment_id)

            processed += 1
            if processed >= max_commits:
                console.print(
                    f"[yellow]Summarized {max_commits} commit(s), the maximum for one run. "
                    "Rerun to summarize the rest. This protects the PR from comment spam.[/yellow]"
                )
                break

        self._publish_head(pull, files_summary, result)
        return result

    def _publish_head(self, pull: PullRequestInfo, files_summary: FilesSummary, result: CommitsResult) -> None:
        """Post the head commit summary together with the PR rollup."""
        head = next((s for s in result.summaries if s.sha == pull.head_sha), None)
        if head is None or not head.is_fresh:
            logger.info("Head commit already summarized, no new PR summary")
            return

        rollup = summarize_pr(
            self.generator,
            files_summary.summaries,
            [(s.sha, s.text) for s in result.summaries],
            self.config,
        )
        rollup = postprocess_summary(
            list(files_summary.summaries),
            rollup,
            self.host.link_base,
            ref=pull.head_sha,
            pull_number=pull.number,
            comment_ids=files_summary.comment_ids,
        )
        result.rollup = rollup
        body = comment_codec.encode(head.sha, head.text, rollup=rollup)

        if self.config["output_as_comment"]:
            result.posted_comment_ids.append(self.host.create_issue_comment(pull.number, body))
        else:
            self.host.update_pull_body(pull.number, upsert_section(pull.body, body))
