"""GitHub token lookup for the CLI.

Sources, first hit wins:
  1. GITHUB_TOKEN (injected by GitHub Actions)
  2. GH_TOKEN (the variable the gh CLI itself honours)
  3. `gh auth token --hostname <host>` for a local `gh auth login` session
"""

from __future__ import annotations

import logging
import os
import subprocess
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

_TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")


def _gh_cli_token(hostname: str) -> str | None:
    try:
        result = subprocess.run(
            ["gh", "auth", "token", "--hostname", hostname],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        logger.debug("gh CLI token lookup unavailable: %s", e)
        return None
    if result.returncode != 0:
        logger.debug("gh auth token failed for %s: %s", hostname, result.stderr.strip())
        return None
    return result.stdout.strip() or None


def resolve_github_token(server_url: str = "https://github.com") -> str | None:
    """Return a token for server_url, or None when no source has one."""
    for name in _TOKEN_ENV_VARS:
        token = os.environ.get(name)
        if token:
            logger.debug("Using GitHub token from %s", name)
            return token

    hostname = urlparse(server_url).hostname or "github.com"
    token = _gh_cli_token(hostname)
    if token:
        logger.debug("Resolved GitHub token via gh CLI session for %s", hostname)
    return token
