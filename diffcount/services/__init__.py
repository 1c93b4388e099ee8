"""Services for diffcount.

Services encapsulate business logic and orchestrate domain models.
They receive dependencies via constructor injection.
"""

from diffcount.services.git_operations import (
    GitDiffError,
    GitOperationsService,
    GitRepositoryError,
)
from diffcount.services.github_comment import GitHubCommentService
from diffcount.services.ignore_filter import IgnoreFilter
from diffcount.services.normalizer import LineNormalizer, normalize
from diffcount.services.significance import (
    SignificanceCounter,
    SignificanceReport,
    build_file_statistics,
    count_lines,
    count_significant_lines,
    merge_statistics,
    reduce_statistics,
)

__all__ = [
    "GitDiffError",
    "GitHubCommentService",
    "GitOperationsService",
    "GitRepositoryError",
    "IgnoreFilter",
    "LineNormalizer",
    "SignificanceCounter",
    "SignificanceReport",
    "build_file_statistics",
    "count_lines",
    "count_significant_lines",
    "merge_statistics",
    "normalize",
    "reduce_statistics",
]
