"""GitHub domain models.

Parse-once pattern: the GitHub Actions event payload is parsed into a typed
model at the boundary.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class PullRequest:
    """The pull request a workflow run was triggered for."""

    number: int
    owner: str
    repo: str
    author_login: str

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_event_payload(cls, payload: dict) -> PullRequest:
        """Parse from a GitHub webhook event payload.

        Args:
            payload: Decoded event JSON (contents of GITHUB_EVENT_PATH)

        Returns:
            PullRequest for the payload's pull_request object

        The repository is the base repository the pull request was opened
        against. For a pull request from a fork the head repository is the
        fork, which has no such pull request number.

        Raises:
            ValueError: If the event was not triggered by a pull request
        """
        pull_request = payload.get("pull_request")
        if not pull_request:
            raise ValueError("The action must be used in a PR context!")

        base_repo = pull_request["base"]["repo"]
        return cls(
            number=int(pull_request["number"]),
            owner=base_repo["owner"]["login"],
            repo=base_repo["name"],
            author_login=pull_request["user"]["login"],
        )

    @classmethod
    def from_event_file(cls, path: str | Path) -> PullRequest:
        """Parse from the event JSON file GitHub Actions writes to disk."""
        return cls.from_event_payload(json.loads(Path(path).read_text()))

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"
