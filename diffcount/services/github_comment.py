"""GitHub comment service.

Core service that keeps a single tagged summary comment up to date on a pull
request and requests reviewers for oversized diffs.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass

from diffcount.domain.github import PullRequest
from diffcount.infrastructure.github.client import GitHubApiError, GitHubClient, IssueComment


@dataclass
class GitHubCommentService:
    """Service for pull request comments and review requests.

    Uses GitHubClient for actual API calls (dependency injection).
    """

    client: GitHubClient
    bot_login: str | None = None

    # ============================================================
    # Public API - Comment Operations
    # ============================================================

    def upsert_tagged_comment(self, pr: PullRequest, tag: str, message: str) -> IssueComment:
        """Create or replace the comment whose body starts with tag.

        When bot_login is set, only that user's comments are candidates for
        replacement.

        Args:
            pr: Pull request to comment on
            tag: Prefix that identifies the comment, e.g. "[diff-counting]"
            message: Text following the tag

        Returns:
            The created or updated comment

        Raises:
            GitHubApiError: If listing, creating or updating fails
        """
        body = f"{tag} {message}"
        existing = self.find_tagged_comment(pr, tag)

        if existing is None:
            comment = self.client.create_issue_comment(pr.number, body)
            print(f"Posted comment to PR #{pr.number}")
            return comment

        comment = self.client.update_issue_comment(existing.id, body)
        print(f"Replaced comment {existing.id}")
        return comment

    def find_tagged_comment(self, pr: PullRequest, tag: str) -> IssueComment | None:
        for comment in self.client.list_issue_comments(pr.number):
            if self.bot_login is not None and comment.author_login != self.bot_login:
                continue
            if comment.body.startswith(tag):
                return comment
        return None

    # ============================================================
    # Public API - Review Requests
    # ============================================================

    def request_reviews(self, pr: PullRequest, reviewers: list[str]) -> list[str]:
        """Request a review from each reviewer other than the PR author.

        One request per reviewer so a single invalid login does not block
        the rest; failures are reported as warnings.

        Returns:
            Logins whose review request succeeded
        """
        requested: list[str] = []
        for reviewer in reviewers:
            if reviewer == pr.author_login:
                continue
            try:
                self.client.request_reviewers(pr.number, [reviewer])
            except GitHubApiError as e:
                print(f"Warning: could not request review from {reviewer}: {e}", file=sys.stderr)
                continue
            requested.append(reviewer)

        if requested:
            print(f"Requested review from {', '.join(requested)} on PR #{pr.number}")
        return requested
