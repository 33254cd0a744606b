"""Summarize the commits and files of a pull request."""

from __future__ import annotations

import click
from rich.console import Console

from prscribe_cli.runtime import prepare, run_or_exit
from prscribe_core.pipeline import PullRequestResult, summarize_pull_request

console = Console()


def pr_overrides(
    model: str | None = None,
    ignore: str | None = None,
    include: str | None = None,
    file_comments: bool | None = None,
    as_comment: bool | None = None,
) -> dict:
    return {
        "model": model,
        "ignore_files": ignore,
        "include_files": include,
        "create_file_comments": file_comments,
        "output_as_comment": as_comment,
    }


def run_pull_request(config_path: str, overrides: dict, repo: str, pr_number: int) -> PullRequestResult:
    config, host, generator = run_or_exit(lambda: prepare(config_path, overrides, repo), "connecting to GitHub")
    result = run_or_exit(
        lambda: summarize_pull_request(host, generator, config, pr_number),
        f"summarizing PR #{pr_number}",
    )
    if result.rollup is not None:
        console.print("\n[bold]PR summary[/bold]")
        console.print(result.rollup)
    else:
        console.print("[green]PR summary is up to date.[/green]")
    return result


@click.command("pr")
@click.option("--repo", required=True, help="GitHub repository in owner/name format.")
@click.option("--pr", "pr_number", type=int, required=True, help="Pull request number.")
@click.option(
    "--model",
    type=click.Choice(["anthropic", "openai"]),
    default=None,
    help="AI model provider. Overrides config file.",
)
@click.option("--ignore", default=None, help="Comma-separated globs of files to leave out.")
@click.option("--include", default=None, help="Comma-separated globs; only matching files are summarized.")
@click.option(
    "--file-comments/--no-file-comments",
    "file_comments",
    default=None,
    help="Post (and reconcile) per-file review comments.",
)
@click.option(
    "--comment/--description",
    "as_comment",
    default=None,
    help="Post the PR summary as a comment, or write it into the PR description.",
)
@click.pass_context
def pr_cmd(
    ctx,
    repo: str,
    pr_number: int,
    model: str | None,
    ignore: str | None,
    include: str | None,
    file_comments: bool | None,
    as_comment: bool | None,
):
    """Summarize a pull request's commits and changed files.

    Posts one comment per commit, one review comment per changed file and a
    combined head-commit + PR summary. Re-running only summarizes what is
    new since the last run.

    \b
    Required environment variables:
      GITHUB_TOKEN         GitHub token (or use gh CLI)
      OPENAI_API_KEY       Required when using --model openai
      ANTHROPIC_API_KEY    Required when using --model anthropic
    """
    overrides = pr_overrides(model, ignore, include, file_comments, as_comment)
    run_pull_request(ctx.obj["config_path"], overrides, repo, pr_number)
