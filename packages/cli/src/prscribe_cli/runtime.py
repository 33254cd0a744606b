"""Shared setup and top-level error handling for the CLI commands."""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

import click
from github import GithubException
from rich.console import Console

from prscribe_core.errors import PrscribeError

console = Console()
logger = logging.getLogger(__name__)

T = TypeVar("T")


def prepare(config_path: str, cli_overrides: dict, repo: str):
    """Load config, check credentials and build the host and generator.

    Returns (config, host, generator). Raises click.UsageError when a
    credential is missing.
    """
    from prscribe_cli.auth import resolve_github_token
    from prscribe_core.config import load_config
    from prscribe_core.gh.host import get_host
    from prscribe_core.pipeline import get_generator

    config = load_config(config_path, cli_overrides=cli_overrides)

    token = resolve_github_token(config["server_url"])
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN or GH_TOKEN, or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )
    config["github_token"] = token

    if config["model"] == "anthropic" and not config.get("anthropic_api_key"):
        raise click.UsageError("ANTHROPIC_API_KEY environment variable is not set.")
    if config["model"] == "openai" and not config.get("openai_api_key"):
        raise click.UsageError("OPENAI_API_KEY environment variable is not set.")

    try:
        generator = get_generator(config)
    except ValueError as e:
        raise click.UsageError(str(e))

    host = get_host(repo, token=token, server_url=config["server_url"], api_url=config.get("api_url"))
    return config, host, generator


def run_or_exit(action: Callable[[], T], description: str) -> T:
    """Run action; log any failure and exit non-zero.

    A failed run leaves only the comments it already posted behind, and
    those are reused on the next run, so it is safe to simply re-trigger.
    """
    try:
        return action()
    except click.ClickException:
        raise
    except GithubException as e:
        logger.error("GitHub API error while %s: %s %s", description, e.status, e.data)
        console.print(f"[red]GitHub API error while {description} (HTTP {e.status}).[/red]")
        raise SystemExit(1)
    except PrscribeError as e:
        logger.error("Failed while %s: %s", description, e)
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)
    except Exception:
        logger.exception("Unexpected error while %s", description)
        raise SystemExit(1)
