"""diffcount: counts the significant lines of a unified diff.

Lines in ignored files (lockfiles, snapshots, images, config) do not count,
and added lines cancel against removed lines with the same normalized content,
so moved or reformatted code does not count either.

Usage:
    python -m diffcount <command> [options]
    diffcount <command> [options]

Structure:
    diffcount/
    ├── __main__.py          # Entry point dispatcher
    ├── domain/              # Domain models (parse-once pattern)
    │   ├── diff.py          # PatchSet, FileDiff, Hunk, DiffLine
    │   ├── statistics.py    # FileStatistics, AggregateStatistics
    │   ├── config.py        # CountingConfig
    │   └── github.py        # PullRequest
    ├── services/            # Business logic services
    │   ├── significance.py  # Build, merge, reduce, count
    │   ├── ignore_filter.py
    │   ├── normalizer.py
    │   ├── github_comment.py
    │   └── git_operations.py
    ├── infrastructure/      # External system interactions
    │   └── github/          # REST client, Actions outputs
    └── commands/            # Thin command orchestrators
        ├── count.py
        └── check_pr.py
"""

from diffcount.services.significance import (
    SignificanceCounter,
    count_significant_lines,
    merge_statistics,
    reduce_statistics,
)

__version__ = "0.1.0"

__all__ = [
    "SignificanceCounter",
    "count_significant_lines",
    "merge_statistics",
    "reduce_statistics",
]
