"""CLI entry point for prscribe.

Commands:
  pr       summarize a pull request's commits and files
  release  summarize a release and write the summary into its body
  action   detect the GitHub Actions event and run one of the above
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from prscribe_cli.commands.action import action_cmd
from prscribe_cli.commands.pr import pr_cmd
from prscribe_cli.commands.release import release_cmd

console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    # Keep SDK request logs out of the run output unless asked for.
    for noisy in ("github", "httpx", "openai", "anthropic", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.group()
@click.version_option(
    version=importlib.metadata.version("prscribe"),
    prog_name="prscribe",
)
@click.option(
    "--config",
    "config_path",
    default=".prscribe.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRSCRIBE_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Log prompts and API details.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """AI-generated commit, file and pull request summaries for GitHub."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(pr_cmd)
main.add_command(release_cmd)
main.add_command(action_cmd)
