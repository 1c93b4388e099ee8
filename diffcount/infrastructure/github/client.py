"""GitHub REST API client.

Infrastructure component that wraps the HTTP calls diffcount needs: reading a
pull request diff, managing issue comments and requesting reviewers. Services
receive it by injection so they can be tested without network access.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import requests

API_URL = "https://api.github.com"
USER_AGENT = "diffcount"

_JSON_ACCEPT = "application/vnd.github.v3+json"
_DIFF_ACCEPT = "application/vnd.github.v3.diff"


class GitHubApiError(Exception):
    """Raised when a GitHub API request fails."""

    pass


@dataclass(frozen=True)
class IssueComment:
    """An issue (conversation) comment on a pull request."""

    id: int
    body: str
    author_login: str

    @classmethod
    def from_dict(cls, data: dict) -> IssueComment:
        user = data.get("user") or {}
        return cls(
            id=int(data["id"]),
            body=data.get("body") or "",
            author_login=user.get("login", ""),
        )


@dataclass
class GitHubClient:
    """Client for one repository.

    Without a token requests go out unauthenticated, which is enough to read
    public pull requests.
    """

    token: str | None
    owner: str
    repo: str
    api_url: str = API_URL
    timeout: float = 30.0
    session: requests.Session = field(default_factory=requests.Session)

    def __post_init__(self):
        self.session.headers.update({"Accept": _JSON_ACCEPT, "User-Agent": USER_AGENT})
        if self.token:
            self.session.headers["Authorization"] = f"token {self.token}"

    # --------------------------------------------------------
    # Public API - Pull Requests
    # --------------------------------------------------------

    def get_pull_request_diff(self, pr_number: int) -> str:
        """Fetch the unified diff of a pull request.

        Raises:
            GitHubApiError: If the request fails
        """
        response = self._request(
            "GET",
            f"pulls/{pr_number}",
            headers={"Accept": _DIFF_ACCEPT},
        )
        return response.text

    def request_reviewers(self, pr_number: int, reviewers: list[str]) -> None:
        """Request reviews from the given logins.

        Raises:
            GitHubApiError: If the request fails
        """
        self._request(
            "POST",
            f"pulls/{pr_number}/requested_reviewers",
            json={"reviewers": reviewers},
        )

    # --------------------------------------------------------
    # Public API - Issue Comments
    # --------------------------------------------------------

    def list_issue_comments(self, pr_number: int) -> list[IssueComment]:
        """List all conversation comments on a pull request, following pagination."""
        comments: list[IssueComment] = []
        page = 1
        per_page = 100

        while True:
            response = self._request(
                "GET",
                f"issues/{pr_number}/comments",
                params={"page": page, "per_page": per_page},
            )
            data = response.json()
            comments.extend(IssueComment.from_dict(item) for item in data)
            if len(data) < per_page:
                break
            page += 1

        return comments

    def create_issue_comment(self, pr_number: int, body: str) -> IssueComment:
        response = self._request("POST", f"issues/{pr_number}/comments", json={"body": body})
        return IssueComment.from_dict(response.json())

    def update_issue_comment(self, comment_id: int, body: str) -> IssueComment:
        response = self._request("PATCH", f"issues/comments/{comment_id}", json={"body": body})
        return IssueComment.from_dict(response.json())

    # --------------------------------------------------------
    # Private Helpers
    # --------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.api_url}/repos/{self.owner}/{self.repo}/{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.RequestException as e:
            raise GitHubApiError(f"{method} {url} failed: {e}") from e
        return response
