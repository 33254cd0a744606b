from __future__ import annotations

import fnmatch
import logging

logger = logging.getLogger(__name__)


def parse_patterns(value) -> list[str]:
    """Normalize a pattern setting into a list.

    Accepts a YAML list or the comma-separated string GitHub Action inputs
    arrive as. Blank entries are dropped.
    """
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [p.strip() for p in value if p and p.strip()]


def matches_any(filename: str, patterns: list[str]) -> str | None:
    """Return the first pattern that matches filename, or None.

    Supports:
    - fnmatch globs on the full path: "lib/**", "src/generated/*.py"
    - fnmatch globs on the basename: "*.lock", "*.min.js"
    - Directory names/prefixes: "dist/", "vendor" (matches any file within that tree)
    """
    for pattern in patterns:
        if fnmatch.fnmatch(filename, pattern):
            return pattern
        if fnmatch.fnmatch(filename.rsplit("/", 1)[-1], pattern):
            return pattern
        prefix = pattern.rstrip("/") + "/"
        if filename.startswith(prefix) or ("/" + prefix) in filename:
            return pattern
    return None


def should_summarize(filename: str, ignore: list[str], include: list[str]) -> bool:
    """Ignore patterns win; an empty include list includes everything."""
    ignored_by = matches_any(filename, ignore)
    if ignored_by is not None:
        logger.info("Ignoring file %s because it matched %s", filename, ignored_by)
        return False
    if include and matches_any(filename, include) is None:
        logger.info("Ignoring file %s because it matched no include pattern", filename)
        return False
    return True
