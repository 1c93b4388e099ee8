"""Domain models for diffcount."""

from diffcount.domain.config import ConfigError, CountingConfig
from diffcount.domain.diff import (
    NULL_DEVICE,
    DiffLine,
    DiffLineType,
    FileDiff,
    Hunk,
    PatchParseError,
    PatchSet,
)
from diffcount.domain.github import PullRequest
from diffcount.domain.statistics import (
    AggregateStatistics,
    FileStatistics,
    FrequencyTable,
    count_occurrences,
)

__all__ = [
    "AggregateStatistics",
    "ConfigError",
    "CountingConfig",
    "DiffLine",
    "DiffLineType",
    "FileDiff",
    "FileStatistics",
    "FrequencyTable",
    "Hunk",
    "NULL_DEVICE",
    "PatchParseError",
    "PatchSet",
    "PullRequest",
    "count_occurrences",
]
