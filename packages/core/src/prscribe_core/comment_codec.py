"""Serialization of summaries into comment bodies and back.

Every comment prscribe posts starts with a tag line identifying what it
summarizes::

    GPT summary of <key>:

    <summary>

    PR summary so far:

    <rollup>

``<key>`` is a commit sha, or ``<origin sha> - <new sha>`` for a per-file
review comment. File keys are rendered as two short-sha links; decoding folds
them back into full shas so keys compare exactly across runs. The rollup part
only appears on the head-commit comment.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from prscribe_core.models import PlatformComment
from prscribe_core.utils.links import LinkBase, strip_sha_links

TAG_PREFIX = "GPT summary of "
ROLLUP_DELIMITER = "PR summary so far:"

_HEADER_RE = re.compile(r"^" + re.escape(TAG_PREFIX) + r"(.+?):[ \t]*$", re.MULTILINE)


@dataclass
class DecodedComment:
    key: str
    summary: str
    rollup: str | None = None
    comment_id: int | None = None


def file_key(origin_sha: str, sha: str) -> str:
    return f"{origin_sha} - {sha}"


def file_key_label(
    link_base: LinkBase,
    filename: str,
    origin_sha: str,
    sha: str,
    base_ref: str,
    head_ref: str,
) -> str:
    """Render a file key as links to the file before and after the change."""
    before = f"[{origin_sha[:6]}]({link_base.blob_url(base_ref, filename)}#{origin_sha})"
    after = f"[{sha[:6]}]({link_base.blob_url(head_ref, filename)}#{sha})"
    return f"{before} - {after}"


def encode(key: str, summary: str, rollup: str | None = None, label: str | None = None) -> str:
    body = f"{TAG_PREFIX}{label or key}:\n\n{summary}"
    if rollup is not None:
        body += f"\n\n{ROLLUP_DELIMITER}\n\n{rollup}"
    return body


def decode(body: str | None, server_url: str) -> DecodedComment | None:
    """Parse a comment body; None if it is not a prscribe summary."""
    if not body or not body.startswith(TAG_PREFIX):
        return None
    header, _, rest = strip_sha_links(body, server_url).partition("\n")
    match = _HEADER_RE.match(header)
    if match is None:
        return None
    summary, delimiter, rollup = rest.partition(ROLLUP_DELIMITER)
    return DecodedComment(
        key=match.group(1),
        summary=summary.strip("\n"),
        rollup=rollup.strip("\n") if delimiter else None,
    )


def decode_all(comments: Iterable[PlatformComment], server_url: str) -> list[DecodedComment]:
    decoded = []
    for comment in comments:
        result = decode(comment.body, server_url)
        if result is not None:
            result.comment_id = comment.id
            decoded.append(result)
    return decoded


def find_summary(decoded: list[DecodedComment], key: str) -> DecodedComment | None:
    for comment in decoded:
        if comment.key == key:
            return comment
    return None
