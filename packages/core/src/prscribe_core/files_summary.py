"""Per-file summaries for a pull request, reconciled against review comments.

Each changed file is keyed by ``<origin sha> - <new sha>``: the blob at the
PR base and the blob at the head. A file whose key already has a summary
comment is not sent to the generator again; a summary comment whose key no
longer matches any changed file (the file changed again, or was reverted) is
deleted before new comments are posted.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field

from rich.console import Console

from prscribe_core import comment_codec
from prscribe_core.models import NEW_FILE_SHA, ChangeUnit, PullRequestInfo
from prscribe_core.prompts import (
    DIFF_TOO_BIG_SUMMARY,
    ERROR_SUMMARY,
    FILE_SYSTEM_PROMPT,
    file_user_prompt,
)
from prscribe_core.utils.diff import first_removed_line, format_git_diff
from prscribe_core.utils.filters import should_summarize

console = Console()
logger = logging.getLogger(__name__)


@dataclass
class FilesSummary:
    summaries: dict[str, str] = field(default_factory=dict)
    # Review comment holding each file's summary, for linking from the rollup.
    comment_ids: dict[str, int] = field(default_factory=dict)
    deleted_comment_ids: list[int] = field(default_factory=list)
    generated: int = 0


def comment_anchor(unit: ChangeUnit) -> tuple[int, str]:
    """Return the (line, side) a file's summary comment is attached to.

    The first added line on the new side when there is one. A new file is
    always anchored on the new side. A pre-existing file whose patch only
    removes lines is anchored at the first removed line on the old side.
    """
    if unit.first_changed_line > 0:
        return unit.first_changed_line, "RIGHT"
    if unit.is_new:
        return 1, "RIGHT"
    return first_removed_line(unit.patch) or 1, "LEFT"


def generate_file_summary(generator, unit: ChangeUnit, max_query_length: int) -> str:
    """Summarize one file's diff; placeholders on oversized prompts and failures."""
    prompt = file_user_prompt(unit.filename, format_git_diff(unit.filename, unit.patch))
    logger.debug("File summary prompt for %s:\n%s", unit.filename, prompt)
    if len(prompt) > max_query_length:
        logger.warning("Prompt for %s is %d chars, over the %d limit", unit.filename, len(prompt), max_query_length)
        return DIFF_TOO_BIG_SUMMARY
    return generator.generate(FILE_SYSTEM_PROMPT, prompt) or ERROR_SUMMARY


class FilesSummarizer:
    def __init__(self, host, generator, config: dict):
        self.host = host
        self.generator = generator
        self.config = config

    def collect_changes(self, pull: PullRequestInfo) -> list[ChangeUnit]:
        """Changed files that pass the filters, with origin shas resolved from the base tree."""
        base_tree = self.host.get_tree_shas(pull.base_sha)
        changes = []
        for unit in self.host.list_pull_files(pull.number):
            if not should_summarize(unit.filename, self.config["ignore_files"], self.config["include_files"]):
                continue
            changes.append(dataclasses.replace(unit, origin_sha=base_tree.get(unit.filename, NEW_FILE_SHA)))
        return changes

    def _existing_summaries(self, pull: PullRequestInfo, changes: list[ChangeUnit], result: FilesSummary):
        """Decode existing summary comments and delete the stale or duplicated ones."""
        server_url = self.host.server_url
        decoded = comment_codec.decode_all(self.host.list_review_comments(pull.number), server_url)
        current_keys = {comment_codec.file_key(u.origin_sha, u.content_sha) for u in changes}

        kept: list[comment_codec.DecodedComment] = []
        seen: set[str] = set()
        for comment in decoded:
            if comment.key in current_keys and comment.key not in seen:
                seen.add(comment.key)
                kept.append(comment)
                continue
            logger.info("Deleting stale file summary comment %s (%s)", comment.comment_id, comment.key)
            self.host.delete_review_comment(pull.number, comment.comment_id)
            result.deleted_comment_ids.append(comment.comment_id)
        return kept

    def _post(self, pull: PullRequestInfo, unit: ChangeUnit, key: str, summary: str) -> int:
        label = comment_codec.file_key_label(
            self.host.link_base,
            unit.filename,
            unit.origin_sha,
            unit.content_sha,
            base_ref=pull.base_sha,
            head_ref=pull.head_sha,
        )
        line, side = comment_anchor(unit)
        return self.host.create_review_comment(
            pull.number,
            comment_codec.encode(key, summary, label=label),
            commit_sha=pull.head_sha,
            path=unit.filename,
            line=line,
            side=side,
        )

    def summarize(self, pull: PullRequestInfo) -> FilesSummary:
        manage_comments = self.config["create_file_comments"]
        max_files = self.config["max_files"]
        result = FilesSummary()

        changes = self.collect_changes(pull)
        existing = self._existing_summaries(pull, changes, result) if manage_comments else []

        for unit in changes:
            if unit.is_binary:
                logger.debug("Skipping %s: no patch (binary file)", unit.filename)
                continue

            key = comment_codec.file_key(unit.origin_sha, unit.content_sha)
            previous = comment_codec.find_summary(existing, key)
            if previous is not None:
                result.summaries[unit.filename] = previous.summary
                result.comment_ids[unit.filename] = previous.comment_id
                continue

            console.print(f"  Summarizing file: {unit.filename}")
            summary = generate_file_summary(self.generator, unit, self.config["max_query_length"])
            result.summaries[unit.filename] = summary
            if manage_comments:
                result.comment_ids[unit.filename] = self._post(pull, unit, key, summary)

            result.generated += 1
            if result.generated >= max_files:
                console.print(
                    f"[yellow]Summarized {max_files} file(s), the maximum for one run. "
                    "Rerun to summarize the rest.[/yellow]"
                )
                break
        return result
