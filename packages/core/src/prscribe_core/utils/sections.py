"""A marked, replaceable section inside a PR description or release body.

The section is wrapped in HTML comments, which GitHub does not render, so a
later run can find and replace it instead of appending a second copy.
"""

from __future__ import annotations

import re

_START = "<!-- prscribe-summary -->"
_END = "<!-- /prscribe-summary -->"
_SECTION_RE = re.compile(re.escape(_START) + r"\n?(.*?)\n?" + re.escape(_END), re.DOTALL)


def extract_section(body: str | None) -> str | None:
    match = _SECTION_RE.search(body or "")
    return match.group(1) if match else None


def upsert_section(body: str | None, content: str) -> str:
    """Replace the marked section in body, or append one if there is none."""
    section = f"{_START}\n{content}\n{_END}"
    body = body or ""
    if _SECTION_RE.search(body):
        return _SECTION_RE.sub(lambda _: section, body, count=1)
    if not body.strip():
        return section
    return f"{body.rstrip()}\n\n{section}"
