"""Domain models for unified diff parsing.

Parse-once pattern: Raw patch text is parsed into type-safe models at the boundary.
Provides DiffLine, Hunk, FileDiff and PatchSet models with factory methods for
deterministic parsing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

NULL_DEVICE = "/dev/null"

_HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")
_GIT_HEADER_RE = re.compile(r'^diff --git "?a/([^"]*)"? "?b/([^"]*)"?$')

_C_ESCAPES = {
    "a": 0x07,
    "b": 0x08,
    "t": 0x09,
    "n": 0x0A,
    "v": 0x0B,
    "f": 0x0C,
    "r": 0x0D,
    '"': 0x22,
    "\\": 0x5C,
}


class PatchParseError(ValueError):
    """Raised when patch text contains a hunk header that cannot be parsed."""

    pass


# ============================================================
# Domain Models
# ============================================================


class DiffLineType(Enum):
    """Type of line in a hunk body."""

    ADDED = "added"
    REMOVED = "removed"
    CONTEXT = "context"
    OTHER = "other"

    @classmethod
    def from_marker(cls, line: str) -> DiffLineType:
        """Classify a hunk body line by its leading marker character."""
        if line.startswith("+"):
            return cls.ADDED
        if line.startswith("-"):
            return cls.REMOVED
        if line.startswith(" ") or line == "":
            return cls.CONTEXT
        return cls.OTHER


@dataclass(frozen=True)
class DiffLine:
    """A single line from a hunk body.

    Attributes:
        content: The line content (without the marker)
        raw_line: The original line including the marker
        line_type: Whether this is an added, removed, context or other line
    """

    content: str
    raw_line: str
    line_type: DiffLineType

    @classmethod
    def from_raw(cls, raw_line: str) -> DiffLine:
        return cls(
            content=raw_line[1:],
            raw_line=raw_line,
            line_type=DiffLineType.from_marker(raw_line),
        )


@dataclass
class Hunk:
    """A contiguous section of changes within one file, opened by an @@ header."""

    header: str
    old_start: int = 0
    old_length: int = 0
    new_start: int = 0
    new_length: int = 0
    lines: list[DiffLine] = field(default_factory=list)

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_header(cls, header: str) -> Hunk:
        """Create an empty hunk from its @@ header line.

        Args:
            header: The raw header, e.g. "@@ -33,7 +33,8 @@ class Foo:"

        Returns:
            Hunk with line ranges filled in and no body lines

        Raises:
            PatchParseError: If the header does not carry line ranges
        """
        match = _HUNK_HEADER_RE.match(header)
        if not match:
            raise PatchParseError(f"Malformed hunk header: {header!r}")

        return cls(
            header=header,
            old_start=int(match.group(1)),
            old_length=int(match.group(2)) if match.group(2) is not None else 1,
            new_start=int(match.group(3)),
            new_length=int(match.group(4)) if match.group(4) is not None else 1,
        )

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def get_added_lines(self) -> list[DiffLine]:
        return [line for line in self.lines if line.line_type == DiffLineType.ADDED]

    def get_removed_lines(self) -> list[DiffLine]:
        return [line for line in self.lines if line.line_type == DiffLineType.REMOVED]


@dataclass
class FileDiff:
    """All hunks touching one file.

    Either path may be None when the patch omits the ---/+++ lines (for
    example binary or mode-only changes). Deleted files carry NULL_DEVICE
    as their new path, created files carry it as their old path.
    """

    old_path: str | None = None
    new_path: str | None = None
    hunks: list[Hunk] = field(default_factory=list)

    @property
    def is_deleted(self) -> bool:
        """True for a removed file, or a record with no new path to review."""
        return self.new_path is None or self.new_path == NULL_DEVICE

    @property
    def display_path(self) -> str:
        """Best path to show a reader: the new path unless the file was deleted."""
        if self.new_path and self.new_path != NULL_DEVICE:
            return self.new_path
        return self.old_path or NULL_DEVICE

    def get_added_lines(self) -> list[DiffLine]:
        return [line for hunk in self.hunks for line in hunk.get_added_lines()]

    def get_removed_lines(self) -> list[DiffLine]:
        return [line for hunk in self.hunks for line in hunk.get_removed_lines()]


@dataclass
class PatchSet:
    """A complete multi-file patch.

    Use from_diff_content() to parse raw patch text into FileDiff records.
    """

    raw_content: str
    files: list[FileDiff] = field(default_factory=list)

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_diff_content(cls, diff_content: str) -> PatchSet:
        """Parse raw patch text into per-file records.

        Accepts `git diff` output as well as plain `diff -u` output without a
        `diff --git` line. Text before the first file header (commit messages,
        mail headers) is skipped.

        Args:
            diff_content: Raw output from git diff, gh pr diff or the GitHub API

        Returns:
            PatchSet instance with files in patch order

        Raises:
            PatchParseError: If a hunk header inside a file record is malformed
        """
        lines = diff_content.split("\n")
        if lines and lines[-1] == "":
            lines.pop()

        files: list[FileDiff] = []
        current_file: FileDiff | None = None
        is_git_record = False

        i = 0
        while i < len(lines):
            line = lines[i].rstrip("\r")

            if line.startswith("diff --git "):
                # Example: diff --git a/src/diff.ts b/src/diff.ts
                current_file = FileDiff()
                files.append(current_file)
                is_git_record = True
                match = _GIT_HEADER_RE.match(line)
                if match:
                    # Paths from this line are only placeholders; ---/+++ win.
                    current_file.old_path = _unquote_git_path(match.group(1))
                    current_file.new_path = _unquote_git_path(match.group(2))

            elif line.startswith("--- ") and i + 1 < len(lines) and lines[i + 1].startswith("+++ "):
                # Example: --- a/src/diff.ts
                #          +++ b/src/diff.ts
                if current_file is None or current_file.hunks or not is_git_record:
                    current_file = FileDiff()
                    files.append(current_file)
                current_file.old_path = _parse_file_path(line[4:], "a/" if is_git_record else None)
                current_file.new_path = _parse_file_path(
                    lines[i + 1].rstrip("\r")[4:], "b/" if is_git_record else None
                )
                is_git_record = False
                i += 1

            elif line.startswith("@@") and current_file is not None:
                # Example: @@ -33,7 +33,8 @@ class AnalysisRequestSource:
                hunk = Hunk.from_header(line)
                i = _read_hunk_body(lines, i + 1, hunk)
                current_file.hunks.append(hunk)
                continue

            elif line.startswith("deleted file mode") and current_file is not None:
                # Binary deletions never get a "+++ /dev/null" line.
                current_file.new_path = NULL_DEVICE

            elif line.startswith("new file mode") and current_file is not None:
                current_file.old_path = NULL_DEVICE

            i += 1

        return cls(raw_content=diff_content, files=files)


# ============================================================
# Private Helpers
# ============================================================


def _parse_file_path(raw: str, prefix: str | None) -> str:
    """Extract a path from the text after `--- ` or `+++ `.

    Drops a trailing tab-separated timestamp and the git a/ or b/ prefix,
    and decodes a quoted path.
    """
    path = raw.split("\t", 1)[0].strip()
    if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
        path = _unquote_git_path(path[1:-1])
    if path == NULL_DEVICE:
        return path
    if prefix and path.startswith(prefix):
        path = path[len(prefix):]
    return path


def _unquote_git_path(path: str) -> str:
    """Decode the C-style escapes git uses inside quoted paths.

    Non-ASCII names arrive as octal UTF-8 bytes, e.g. caf\\303\\251.py.
    """
    if "\\" not in path:
        return path

    decoded = bytearray()
    i = 0
    while i < len(path):
        char = path[i]
        if char == "\\" and i + 1 < len(path):
            octal = path[i + 1:i + 4]
            if len(octal) == 3 and all(c in "01234567" for c in octal):
                decoded.append(int(octal, 8) & 0xFF)
                i += 4
                continue
            if path[i + 1] in _C_ESCAPES:
                decoded.append(_C_ESCAPES[path[i + 1]])
                i += 2
                continue
        decoded.extend(char.encode("utf-8"))
        i += 1
    return decoded.decode("utf-8", errors="replace")


def _read_hunk_body(lines: list[str], start: int, hunk: Hunk) -> int:
    """Append body lines to hunk until its header counts are exhausted.

    Returns:
        Index of the first line after the hunk body
    """
    old_remaining = hunk.old_length
    new_remaining = hunk.new_length
    i = start

    while i < len(lines):
        line = lines[i].rstrip("\r")

        if line.startswith("\\"):
            # "\ No newline at end of file" can follow the last counted line.
            hunk.lines.append(DiffLine.from_raw(line))
            i += 1
            continue

        if old_remaining <= 0 and new_remaining <= 0:
            break

        line_type = DiffLineType.from_marker(line)
        if line_type == DiffLineType.OTHER or line.startswith("diff --git "):
            # Truncated hunk; let the caller see this line.
            break

        if line_type == DiffLineType.ADDED:
            new_remaining -= 1
        elif line_type == DiffLineType.REMOVED:
            old_remaining -= 1
        else:
            old_remaining -= 1
            new_remaining -= 1

        hunk.lines.append(DiffLine.from_raw(line))
        i += 1

    return i
