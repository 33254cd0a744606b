"""Summarize a release and write the summary into its body."""

from __future__ import annotations

import click
from rich.console import Console

from prscribe_cli.runtime import prepare, run_or_exit
from prscribe_core.summarize_release import ReleaseResult, summarize_release

console = Console()


def run_release(config_path: str, overrides: dict, repo: str, tag: str, force: bool = False) -> ReleaseResult:
    config, host, generator = run_or_exit(lambda: prepare(config_path, overrides, repo), "connecting to GitHub")
    result = run_or_exit(
        lambda: summarize_release(host, generator, config, tag, force=force),
        f"summarizing release {tag}",
    )
    console.print(f"\n[bold]Release {result.tag} summary[/bold]")
    console.print(result.rollup)
    if result.updated:
        console.print("[green]Release body updated.[/green]")
    return result


@click.command("release")
@click.option("--repo", required=True, help="GitHub repository in owner/name format.")
@click.option("--tag", required=True, help="Tag of the release to summarize.")
@click.option(
    "--model",
    type=click.Choice(["anthropic", "openai"]),
    default=None,
    help="AI model provider. Overrides config file.",
)
@click.option("--ignore", default=None, help="Comma-separated globs of files to leave out.")
@click.option("--no-update", "no_update", is_flag=True, help="Print the summary without editing the release.")
@click.option("--force", is_flag=True, help="Regenerate even if the release already has a summary.")
@click.option(
    "--images/--no-images",
    "images",
    default=None,
    help="Append a generated illustration to the summary (OpenAI only, billed per image).",
)
@click.pass_context
def release_cmd(
    ctx,
    repo: str,
    tag: str,
    model: str | None,
    ignore: str | None,
    no_update: bool,
    force: bool,
    images: bool | None,
):
    """Summarize the changes since the previous release."""
    overrides = {
        "model": model,
        "ignore_files": ignore,
        "update_release": False if no_update else None,
        "release_images": images,
    }
    run_release(ctx.obj["config_path"], overrides, repo, tag, force=force)
