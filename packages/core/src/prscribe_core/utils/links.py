"""Rewriting between bracketed file references and markdown links.

The prompts ask the model to cite files as ``[path/to/file.py]``. Before a
summary is posted those tokens become links to the blob (or to the file's own
summary comment); before a posted summary is fed back into a rollup prompt the
links are folded back into plain brackets so the model sees short, uniform
references.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import quote, unquote


@dataclass(frozen=True)
class LinkBase:
    """Where links for one repository point to."""

    server_url: str
    owner: str
    repo: str

    @property
    def repo_url(self) -> str:
        return f"{self.server_url.rstrip('/')}/{self.owner}/{self.repo}"

    def blob_url(self, ref: str, path: str) -> str:
        # Percent-encoded so a path with ")" cannot end the markdown link early.
        return f"{self.repo_url}/blob/{ref}/{quote(path)}"

    def discussion_url(self, pull_number: int, comment_id: int) -> str:
        return f"{self.repo_url}/pull/{pull_number}#discussion_r{comment_id}"


def postprocess_summary(
    filenames: list[str],
    summary: str,
    link_base: LinkBase,
    ref: str | None = None,
    pull_number: int | None = None,
    comment_ids: dict[str, int] | None = None,
) -> str:
    """Replace every ``[filename]`` token with a ``[basename](url)`` link.

    A file with a known summary comment links to that comment's discussion
    anchor; any other file links to its blob at ``ref``. Filenames that do not
    appear as a literal bracketed token leave the text untouched.
    """
    comment_ids = comment_ids or {}
    for filename in filenames:
        token = f"[{filename}]"
        if token not in summary:
            continue
        short_name = filename.rsplit("/", 1)[-1]
        if pull_number is not None and filename in comment_ids:
            url = link_base.discussion_url(pull_number, comment_ids[filename])
        elif ref is not None:
            url = link_base.blob_url(ref, filename)
        else:
            continue
        summary = summary.replace(token, f"[{short_name}]({url})")
    return summary


def _file_link_re(server_url: str) -> re.Pattern:
    return re.compile(r"\[[^\]]*?\]\(" + re.escape(server_url.rstrip("/")) + r"/[^)]*?[0-9a-f]{40}/([^)]*?)\)")


def _sha_link_re(server_url: str) -> re.Pattern:
    return re.compile(
        r"\[(?:[0-9a-f]{6}|None)\]\(" + re.escape(server_url.rstrip("/")) + r"/[^)]*?#([0-9a-f]{40}|None)\)"
    )


def strip_file_links(text: str, server_url: str) -> str:
    """Fold ``[name](.../blob/<sha>/<path>)`` links back into ``[path]``."""
    return _file_link_re(server_url).sub(lambda m: f"[{unquote(m.group(1))}]", text)


def strip_sha_links(text: str, server_url: str) -> str:
    """Fold ``[abc123](...#<full sha>)`` links back into the full sha."""
    return _sha_link_re(server_url).sub(lambda m: m.group(1), text)
