"""Infrastructure components for diffcount.

This layer handles external system interactions:
- GitHub REST API via requests
- GitHub Actions outputs

Organized into subdirectories:
- github/ - GitHub API client and Actions output helpers
"""

from .github import (
    GitHubApiError,
    GitHubClient,
    IssueComment,
    write_count_outputs,
    write_count_summary,
)

__all__ = [
    "GitHubApiError",
    "GitHubClient",
    "IssueComment",
    "write_count_outputs",
    "write_count_summary",
]
