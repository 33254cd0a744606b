"""Entry point for GitHub Actions.

Reads the triggering event and dispatches to the pr or release flow. All
options come from the workflow's `with:` inputs (INPUT_* variables), which
load_config picks up.
"""

from __future__ import annotations

import logging

import click
from rich.console import Console

from prscribe_cli.commands.pr import run_pull_request
from prscribe_cli.commands.release import run_release
from prscribe_cli.events import load_event
from prscribe_core.errors import EventError

console = Console()
logger = logging.getLogger(__name__)


@click.command("action")
@click.pass_context
def action_cmd(ctx):
    """Summarize the pull request or release that triggered the workflow."""
    try:
        event = load_event()
    except EventError as e:
        logger.error("%s", e)
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)

    config_path = ctx.obj["config_path"]
    if event.kind == "pull_request":
        run_pull_request(config_path, {}, event.repo, event.pr_number)
    else:
        run_release(config_path, {}, event.repo, event.tag)
