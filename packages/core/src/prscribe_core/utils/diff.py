from __future__ import annotations


def format_git_diff(filename: str, patch: str | None) -> str:
    """Render a file's patch as a unified diff block with path headers.

    GitHub returns per-file patches without the ``---``/``+++`` lines, so the
    model would otherwise not know which file a hunk belongs to when several
    diffs are concatenated into one prompt.
    """
    lines = [f"--- a/{filename}", f"+++ b/{filename}"]
    lines.extend((patch or "").split("\n"))
    lines.append("")
    return "\n".join(lines)


def _hunk_starts(header: str) -> tuple[int, int] | None:
    """Return (old_start, new_start) from an ``@@ -a,b +c,d @@`` header."""
    try:
        old_range, new_range = header.split(" ")[1:3]
        return int(old_range.lstrip("-").split(",")[0]), int(new_range.lstrip("+").split(",")[0])
    except (ValueError, IndexError):
        return None


def first_added_line(patch: str | None) -> int:
    """New-file line number of the first added line, or 0 if the patch adds nothing."""
    new_line: int | None = None
    for line in (patch or "").splitlines():
        if line.startswith("@@"):
            starts = _hunk_starts(line)
            new_line = starts[1] if starts else None
            continue
        if new_line is None or line.startswith("\\"):
            continue
        if line.startswith("+"):
            return new_line
        if line.startswith("-"):
            continue  # removed line, new-file counter stays put
        new_line += 1
    return 0


def first_removed_line(patch: str | None) -> int:
    """Old-file line number of the first removed line, or 0 if nothing is removed."""
    old_line: int | None = None
    for line in (patch or "").splitlines():
        if line.startswith("@@"):
            starts = _hunk_starts(line)
            old_line = starts[0] if starts else None
            continue
        if old_line is None or line.startswith("\\"):
            continue
        if line.startswith("-"):
            return old_line
        if line.startswith("+"):
            continue
        old_line += 1
    return 0
