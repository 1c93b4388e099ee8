"""Domain models for line frequency statistics.

A frequency table maps normalized line content to how many times it occurs.
Plain dicts are used: their iteration order is first-insertion order, which
the merge and reduce operations rely on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

FrequencyTable = dict[str, int]


def count_occurrences(lines: Iterable[str]) -> FrequencyTable:
    """Fold lines into a frequency table, keeping first-seen key order."""
    table: FrequencyTable = {}
    for line in lines:
        table[line] = table.get(line, 0) + 1
    return table


@dataclass
class FileStatistics:
    """Added/deleted line frequencies for a single file of a patch."""

    old_path: str
    new_path: str
    add_table: FrequencyTable = field(default_factory=dict)
    delete_table: FrequencyTable = field(default_factory=dict)

    @property
    def added_count(self) -> int:
        return sum(self.add_table.values())

    @property
    def deleted_count(self) -> int:
        return sum(self.delete_table.values())

    @property
    def total_count(self) -> int:
        return self.added_count + self.deleted_count

    def to_dict(self) -> dict:
        return {
            "old_path": self.old_path,
            "new_path": self.new_path,
            "added": self.added_count,
            "deleted": self.deleted_count,
        }


@dataclass
class AggregateStatistics:
    """File-agnostic added/deleted line frequencies for a whole patch."""

    add_table: FrequencyTable = field(default_factory=dict)
    delete_table: FrequencyTable = field(default_factory=dict)

    @property
    def added_count(self) -> int:
        return sum(self.add_table.values())

    @property
    def deleted_count(self) -> int:
        return sum(self.delete_table.values())
