"""GitHub API and GitHub Actions integration."""

from .client import GitHubApiError, GitHubClient, IssueComment
from .output import write_count_outputs, write_count_summary

__all__ = [
    "GitHubApiError",
    "GitHubClient",
    "IssueComment",
    "write_count_outputs",
    "write_count_summary",
]
