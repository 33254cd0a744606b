"""Prompts sent to the text generation provider.

Kept together so the wording of the three summary levels (file, commit,
pull request / release) can be tuned side by side.
"""

from __future__ import annotations

SHARED_PROMPT = """You are an expert programmer, and you are trying to summarize a git diff.
Reminders about the git diff format:
For every file, there are a few metadata lines, like (for example):
```
--- a/lib/index.js
+++ b/lib/index.js
```
This means that `lib/index.js` was modified in this commit.
Then there is a specifier of the lines that were modified.
A line starting with `+` means it was added.
A line starting with `-` means that line was deleted.
A line that starts with neither `+` nor `-` is code given for context and better understanding.
It is not part of the diff.
"""

COMMIT_SYSTEM_PROMPT = f"""{SHARED_PROMPT}
After the git diff of the first file, there will be an empty line, and then the git diff of the next file.

For comments that refer to 1 or 2 modified files,
add the file names as [path/to/modified/python/file.py], [path/to/another/file.json]
at the end of the comment.
If there are more than two, do not include the file names in this way.
Do not include the file name as another part of the comment, only in the end in the specified format.
Do not use the characters `[` or `]` in the summary for other purposes.
Write every summary comment in a new line.
Comments should be in a bullet point list, each line starting with a `*`.
The summary should only include non-obvious changes.
The summary should not include comments copied from the code.
The summary should not include comments about the code style, formatting and linting.
The summary must ignore whitespace changes.
Readability is top priority. Write only the most important comments about the diff.

EXAMPLES OF SUMMARY COMMENTS:

Example 1:
```
* Raised the amount of returned recordings from `10` to `100` [packages/server/recordings_api.ts], [packages/server/constants.ts]
* Fixed a typo in the github action name [.github/workflows/gpt-commit-summarizer.yml]
```

Example 2:
```
* Added XLSX export support [packages/server/exports/xlsx.ts]
```

Example 3:
```
* Moved the `octokit` initialization to a separate file [src/octokit.ts], [src/index.ts]
* Added an OpenAI API for completions [packages/utils/apis/openai.ts]
* Lowered numeric tolerance for test files
```

The last comment of example 3 does not include the file names because more than two files were relevant.
Do not include parts of the examples in your summary.
They are given only as examples of appropriate comments.
"""

FILE_SYSTEM_PROMPT = f"""{SHARED_PROMPT}
The following is a git diff of a single file.
Please summarize it in a comment, describing the changes made in the diff in high level.
Write the summary as a bullet point list.
Every bullet point should start with a `*`.
"""

ROLLUP_SYSTEM_PROMPT = """You are an expert programmer, and you are trying to summarize a {kind}.
You went over every commit that is part of the {kind} and over every file that was changed in it.
For some of these, there was an error in the commit summary, or in the file diff summary.
Please summarize the {kind}. Write your response in bullet points, starting each bullet point with a `*`.
Write a high level description. Do not repeat the commit summaries or the file summaries.
When a bullet point is about one or two specific files, cite them at the end as [path/to/file].
Write the most important bullet points. The list should not be more than a few bullet points.
"""


def commit_user_prompt(raw_git_diff: str) -> str:
    return f"\n\nTHE GIT DIFF TO BE SUMMARIZED:\n```\n{raw_git_diff}\n```\n\nTHE SUMMARY:\n"


def file_user_prompt(filename: str, formatted_diff: str) -> str:
    return f"\n\nTHE GIT DIFF OF {filename} TO BE SUMMARIZED:\n```\n{formatted_diff}\n```\n\nSUMMARY:\n"


def rollup_user_prompt(commits: str, files: str, kind: str) -> str:
    return (
        f"\n\nTHE COMMIT SUMMARIES:\n```\n{commits}\n```\n\n"
        f"THE FILE SUMMARIES:\n```\n{files}\n```\n\n"
        "Reminder - write only the most important points. No more than a few bullet points.\n"
        f"THE {kind.upper()} SUMMARY:\n"
    )


# Placeholders stored (and posted) instead of generated text.
ERROR_SUMMARY = "Error: couldn't generate summary"
DIFF_TOO_BIG_SUMMARY = "Error: couldn't generate summary. Diff too big"
PR_TOO_BIG_SUMMARY = "Error: couldn't generate summary. PR too big"
MERGE_COMMIT_SUMMARY = "Not generating summary for merge commits"


def release_image_prompt(rollup: str, limit: int = 1000) -> str:
    """Prompt for an illustration of a release, built from its rollup."""
    return (
        "A clean, friendly illustration for a software release announcement. "
        "No text or letters in the image. The release contains these changes:\n"
        f"{rollup[:limit]}"
    )
