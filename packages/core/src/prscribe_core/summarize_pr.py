"""Rollup of file and commit summaries into one pull request or release summary."""

from __future__ import annotations

import logging

from prscribe_core.prompts import ERROR_SUMMARY, PR_TOO_BIG_SUMMARY, ROLLUP_SYSTEM_PROMPT, rollup_user_prompt
from prscribe_core.utils.links import strip_file_links

logger = logging.getLogger(__name__)


def build_rollup_prompt(
    file_summaries: dict[str, str],
    commit_summaries: list[tuple[str, str]],
    server_url: str,
    kind: str = "pull request",
) -> str:
    """List every commit and file summary, with embedded file links folded back to ``[path]``."""
    commits = "\n".join(
        f"Commit #{idx}:\n{strip_file_links(summary, server_url)}"
        for idx, (_, summary) in enumerate(commit_summaries, 1)
    )
    files = "\n".join(f"File {filename}:\n{summary}" for filename, summary in file_summaries.items())
    return rollup_user_prompt(commits, files, kind)


def summarize_pr(
    generator,
    file_summaries: dict[str, str],
    commit_summaries: list[tuple[str, str]],
    config: dict,
    kind: str = "pull request",
) -> str:
    """Generate the rollup text with a single generation call.

    Returns PR_TOO_BIG_SUMMARY without calling the generator when the prompt
    is over ``max_query_length``, and ERROR_SUMMARY when generation fails.
    """
    system_prompt = ROLLUP_SYSTEM_PROMPT.format(kind=kind)
    prompt = build_rollup_prompt(file_summaries, commit_summaries, config["server_url"], kind)
    logger.debug("System prompt for %s summary:\n%s", kind, system_prompt)
    logger.debug("User prompt for %s summary:\n%s", kind, prompt)

    if len(prompt) > config["max_query_length"]:
        logger.warning(
            "%s summary prompt is %d chars, over the %d limit",
            kind.capitalize(),
            len(prompt),
            config["max_query_length"],
        )
        return PR_TOO_BIG_SUMMARY

    return generator.generate(system_prompt, prompt) or ERROR_SUMMARY
