"""Significant line counting.

Counts how many lines of a patch are meaningful change. Lines in ignored
files do not count, and an added line cancels against a removed line with the
same normalized content, so moved, reordered or reformatted code does not
count either.

Cancellation runs twice: once per file while building its statistics (a line
moved within a file) and once over the merged statistics of all files (a line
moved between files).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Protocol

from diffcount.domain.config import CountingConfig
from diffcount.domain.diff import NULL_DEVICE, FileDiff, PatchSet
from diffcount.domain.statistics import (
    AggregateStatistics,
    FileStatistics,
    FrequencyTable,
    count_occurrences,
)
from diffcount.services.ignore_filter import IgnoreFilter
from diffcount.services.normalizer import LineNormalizer

Logger = Callable[[str], None]


class StatisticsPair(Protocol):
    add_table: FrequencyTable
    delete_table: FrequencyTable


def _no_log(message: str) -> None:
    pass


# ============================================================
# Core Operations
# ============================================================


def reduce_statistics(
    add_table: FrequencyTable,
    delete_table: FrequencyTable,
) -> tuple[FrequencyTable, FrequencyTable]:
    """Cancel matching added/deleted counts.

    For each added line, the smaller of its added and deleted counts is
    removed from both sides. Keys only on one side pass through. Surviving
    keys keep the order of their source table. Inputs are not modified.

    After reduction no key is present in both tables, so reducing the result
    again returns it unchanged.

    Returns:
        (reduced_add_table, reduced_delete_table)
    """
    reduced_add: FrequencyTable = {}
    reduced_delete: FrequencyTable = dict(delete_table)

    for line, add_count in add_table.items():
        delete_count = reduced_delete.get(line)
        if delete_count is None:
            reduced_add[line] = add_count
        elif add_count == delete_count:
            del reduced_delete[line]
        elif add_count > delete_count:
            reduced_add[line] = add_count - delete_count
            del reduced_delete[line]
        else:
            reduced_delete[line] = delete_count - add_count

    return reduced_add, reduced_delete


def merge_statistics(statistics_list: Iterable[StatisticsPair]) -> AggregateStatistics:
    """Sum per-file tables into one pair of global tables.

    Keys are ordered by first appearance across files, in input order.
    """
    merged = AggregateStatistics()
    for statistics in statistics_list:
        for line, count in statistics.add_table.items():
            merged.add_table[line] = merged.add_table.get(line, 0) + count
        for line, count in statistics.delete_table.items():
            merged.delete_table[line] = merged.delete_table.get(line, 0) + count
    return merged


def count_lines(add_table: FrequencyTable, delete_table: FrequencyTable) -> int:
    """Total of all counts in both tables."""
    return sum(add_table.values()) + sum(delete_table.values())


def build_file_statistics(
    file_diff: FileDiff,
    normalizer: LineNormalizer | None = None,
) -> FileStatistics:
    """Build self-cancelled added/deleted frequency tables for one file.

    A deleted file yields empty tables: nothing remains to review.
    """
    normalizer = normalizer or LineNormalizer()
    old_path = file_diff.old_path if file_diff.old_path is not None else NULL_DEVICE
    new_path = file_diff.new_path if file_diff.new_path is not None else NULL_DEVICE

    if file_diff.is_deleted:
        return FileStatistics(old_path=old_path, new_path=new_path)

    added = [normalizer.normalize(line.raw_line) for line in file_diff.get_added_lines()]
    deleted = [normalizer.normalize(line.raw_line) for line in file_diff.get_removed_lines()]

    add_table, delete_table = reduce_statistics(
        count_occurrences(added), count_occurrences(deleted)
    )
    return FileStatistics(
        old_path=old_path,
        new_path=new_path,
        add_table=add_table,
        delete_table=delete_table,
    )


# ============================================================
# Report and Counter Service
# ============================================================


@dataclass
class SignificanceReport:
    """Every intermediate result of one count, for diagnostics and JSON output."""

    file_statistics: list[FileStatistics] = field(default_factory=list)
    ignored_files: list[FileDiff] = field(default_factory=list)
    merged: AggregateStatistics = field(default_factory=AggregateStatistics)
    reduced: AggregateStatistics = field(default_factory=AggregateStatistics)

    @property
    def significant_lines(self) -> int:
        return count_lines(self.reduced.add_table, self.reduced.delete_table)

    def to_dict(self) -> dict:
        return {
            "significant_lines": self.significant_lines,
            "including_moved": {
                "added": self.merged.added_count,
                "deleted": self.merged.deleted_count,
            },
            "excluding_moved": {
                "added": self.reduced.added_count,
                "deleted": self.reduced.deleted_count,
            },
            "files": [s.to_dict() for s in self.file_statistics],
            "ignored_files": [f.display_path for f in self.ignored_files],
        }


class SignificanceCounter:
    """Counts significant lines in patch text.

    Stateless between calls; one instance can be reused for many patches.
    Diagnostics go to the injected log callable, which defaults to a no-op.
    """

    def __init__(self, config: CountingConfig | None = None, log: Logger | None = None):
        self.config = config or CountingConfig()
        self.ignore_filter = IgnoreFilter(patterns=self.config.ignore_patterns)
        self.normalizer = LineNormalizer(punctuation=self.config.punctuation)
        self.log = log or _no_log

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    def analyze(self, patch_text: str) -> SignificanceReport:
        """Run the full pipeline and keep the intermediate statistics.

        Raises:
            PatchParseError: If the patch contains a malformed hunk header
        """
        return self.analyze_patch(PatchSet.from_diff_content(patch_text))

    def analyze_patch(self, patch: PatchSet) -> SignificanceReport:
        report = SignificanceReport()

        for file_diff in patch.files:
            if self.ignore_filter.should_ignore_diff(file_diff):
                report.ignored_files.append(file_diff)
                self.log(f"Ignored {file_diff.old_path} => {file_diff.new_path}.")
                continue
            statistics = build_file_statistics(file_diff, self.normalizer)
            self.log(
                f"Change {statistics.old_path} => {statistics.new_path} "
                f"has {statistics.total_count} lines diff."
            )
            report.file_statistics.append(statistics)

        report.merged = merge_statistics(report.file_statistics)
        self.log(
            f"[including-moved] total added: {report.merged.added_count}, "
            f"total deleted: {report.merged.deleted_count}."
        )

        add_table, delete_table = reduce_statistics(
            report.merged.add_table, report.merged.delete_table
        )
        report.reduced = AggregateStatistics(add_table=add_table, delete_table=delete_table)
        self.log(
            f"[excluding-moved] total added: {report.reduced.added_count}, "
            f"total deleted: {report.reduced.deleted_count}."
        )
        return report

    def count(self, patch_text: str) -> int:
        return self.analyze(patch_text).significant_lines


def count_significant_lines(
    patch_text: str,
    config: CountingConfig | None = None,
    log: Logger | None = None,
) -> int:
    """Count significant changed lines in a unified multi-file patch.

    Args:
        patch_text: Raw patch, e.g. `git diff` output
        config: Ignore list and punctuation policy (defaults if None)
        log: Optional callable receiving diagnostic messages

    Returns:
        Non-negative number of significant added plus deleted lines
    """
    return SignificanceCounter(config=config, log=log).count(patch_text)
