"""Release summarization: roll up the commits since the previous release.

Nothing is posted per commit or per file for a release. Commit and file
summaries are generated in memory, rolled up once, and the rollup is
written into a marked section of the release body. A release whose body
already carries that section is left alone unless ``force`` is set. With
``release_images`` on, an illustration generated from the rollup is appended
to the section.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from rich.console import Console

from prscribe_core.commit_summary import CommitSummarizer
from prscribe_core.files_summary import generate_file_summary
from prscribe_core.models import CommitState, CommitSummary
from prscribe_core.prompts import ERROR_SUMMARY, PR_TOO_BIG_SUMMARY, release_image_prompt
from prscribe_core.summarize_pr import summarize_pr
from prscribe_core.utils.filters import should_summarize
from prscribe_core.utils.links import postprocess_summary
from prscribe_core.utils.sections import extract_section, upsert_section

console = Console()
logger = logging.getLogger(__name__)

RELEASE_SECTION_HEADER = "## Summary of changes"


@dataclass
class ReleaseResult:
    tag: str
    previous_tag: str | None = None
    rollup: str = ""
    commit_summaries: list[CommitSummary] = field(default_factory=list)
    file_summaries: dict[str, str] = field(default_factory=dict)
    image_url: str | None = None
    reused: bool = False  # the release body already had a summary
    updated: bool = False


def _release_range(host, tag: str, previous_tag: str | None, max_commits: int):
    """Return (commit shas oldest first, changed files) for the release."""
    if previous_tag is None:
        logger.info("No release before %s, summarizing its latest %d commit(s)", tag, max_commits)
        return host.list_commits(tag, max_commits), []
    comparison = host.compare(previous_tag, tag)
    commits = comparison.commits
    if len(commits) > max_commits:
        console.print(
            f"[yellow]{len(commits)} commits since {previous_tag}; summarizing the latest {max_commits}.[/yellow]"
        )
        commits = commits[-max_commits:]
    return commits, comparison.files


def summarize_release(host, generator, config: dict, tag: str, force: bool = False) -> ReleaseResult:
    release = host.get_release(tag)
    result = ReleaseResult(tag=release.tag_name)

    existing = extract_section(release.body)
    if existing is not None and not force:
        console.print(f"[yellow]Release {tag} already has a summary. Use --force to regenerate it.[/yellow]")
        result.rollup = existing.removeprefix(RELEASE_SECTION_HEADER).strip("\n")
        result.reused = True
        return result

    result.previous_tag = host.get_previous_release_tag(release.tag_name)
    commits, files = _release_range(host, release.tag_name, result.previous_tag, config["max_commits"])
    console.print(f"[cyan]Summarizing release {tag}: {len(commits)} commit(s) since {result.previous_tag}[/cyan]")

    commit_summarizer = CommitSummarizer(host, generator, config)
    for sha in commits:
        console.print(f"  Summarizing commit: {sha[:7]}")
        text, state = commit_summarizer.summarize_commit(sha)
        result.commit_summaries.append(CommitSummary(sha, text, state))

    generated = 0
    for unit in files:
        if unit.is_binary:
            continue
        if not should_summarize(unit.filename, config["ignore_files"], config["include_files"]):
            continue
        if generated >= config["max_files"]:
            logger.info("Reached %d file summaries for release %s", generated, tag)
            break
        console.print(f"  Summarizing file: {unit.filename}")
        result.file_summaries[unit.filename] = generate_file_summary(generator, unit, config["max_query_length"])
        generated += 1

    rollup = summarize_pr(
        generator,
        result.file_summaries,
        [(s.sha, s.text) for s in result.commit_summaries],
        config,
        kind="release",
    )
    result.rollup = postprocess_summary(list(result.file_summaries), rollup, host.link_base, ref=release.tag_name)

    errored = sum(1 for s in result.commit_summaries if s.state is CommitState.ERRORED)
    if errored:
        logger.warning("%d commit summary(ies) for release %s could not be generated", errored, tag)

    section = f"{RELEASE_SECTION_HEADER}\n\n{result.rollup}"
    if config.get("release_images") and rollup not in (ERROR_SUMMARY, PR_TOO_BIG_SUMMARY):
        console.print(f"  Generating release image for {tag}")
        result.image_url = generator.generate_image(release_image_prompt(rollup))
        if result.image_url:
            section += f"\n\n![{release.tag_name}]({result.image_url})"

    if config["update_release"]:
        body = upsert_section(release.body, section)
        host.update_release_body(release.tag_name, body)
        result.updated = True
    return result
