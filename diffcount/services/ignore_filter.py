"""Ignore filter for noise files (lockfiles, snapshots, images, config)."""

from __future__ import annotations

from dataclasses import dataclass

from diffcount.domain.config import DEFAULT_IGNORE_PATTERNS
from diffcount.domain.diff import FileDiff


@dataclass(frozen=True)
class IgnoreFilter:
    """Decides whether a file record is excluded from counting.

    Patterns are literal substrings, not globs or regexes: "Pods/" matches
    any path containing that text.
    """

    patterns: tuple[str, ...] = DEFAULT_IGNORE_PATTERNS

    def should_ignore(self, path: str) -> bool:
        return any(pattern in path for pattern in self.patterns)

    def should_ignore_file(self, old_path: str | None, new_path: str | None) -> bool:
        """Check both sides of a file record; absent paths never match."""
        return (old_path is not None and self.should_ignore(old_path)) or (
            new_path is not None and self.should_ignore(new_path)
        )

    def should_ignore_diff(self, file_diff: FileDiff) -> bool:
        return self.should_ignore_file(file_diff.old_path, file_diff.new_path)
