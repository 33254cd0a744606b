"""Pull request summarization pipeline: files first, then commits and the rollup."""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.console import Console

from prscribe_core.commit_summary import CommitsResult, CommitSummarizer
from prscribe_core.files_summary import FilesSummarizer, FilesSummary
from prscribe_core.providers.anthropic import AnthropicGenerator
from prscribe_core.providers.openai import OpenAIGenerator

console = Console()


@dataclass
class PullRequestResult:
    """What one run did to a pull request, for the CLI to report."""

    pr_number: int
    head_sha: str
    files: FilesSummary = field(default_factory=FilesSummary)
    commits: CommitsResult = field(default_factory=CommitsResult)

    @property
    def rollup(self) -> str | None:
        return self.commits.rollup


def get_generator(config: dict):
    model = config["model"]
    model_name = config.get("model_name")
    if model == "anthropic":
        return AnthropicGenerator(api_key=config["anthropic_api_key"], model=model_name)
    if model == "openai":
        return OpenAIGenerator(api_key=config["openai_api_key"], model=model_name)
    raise ValueError(f"Unknown model provider: {model!r}. Choose 'anthropic' or 'openai'.")


def summarize_pull_request(host, generator, config: dict, pr_number: int) -> PullRequestResult:
    pull = host.get_pull(pr_number)
    console.print(f"[cyan]Summarizing PR #{pr_number} at {pull.head_sha[:7]}[/cyan]")

    files = FilesSummarizer(host, generator, config).summarize(pull)
    console.print(
        f"  {len(files.summaries)} file summary(ies), {files.generated} new, "
        f"{len(files.deleted_comment_ids)} stale comment(s) deleted."
    )

    commits = CommitSummarizer(host, generator, config).summarize(pull, files)
    fresh = sum(1 for s in commits.summaries if s.is_fresh)
    console.print(f"  {len(commits.summaries)} commit summary(ies), {fresh} new.")

    return PullRequestResult(pr_number=pr_number, head_sha=pull.head_sha, files=files, commits=commits)
