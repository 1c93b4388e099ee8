"""Git operations service.

Core service for git command operations. Encapsulates the subprocess calls
used to produce a patch from a local repository.
"""

import subprocess
from pathlib import Path


class GitDiffError(Exception):
    """Raised when git diff command fails."""

    pass


class GitRepositoryError(Exception):
    """Raised when directory is not a git repository."""

    pass


class GitOperationsService:
    """Core service for git command operations."""

    def __init__(self, repo_path: str = "."):
        """Initialize with repository path.

        Args:
            repo_path: Path to git repository (default: current directory)
        """
        self.repo_path = Path(repo_path)

    def get_diff(self, base: str, head: str | None = None) -> str:
        """Get the diff between two commits, or between base and the working tree.

        Args:
            base: Base commit, branch or tag
            head: Head commit, branch or tag (None diffs against the working tree)

        Returns:
            Raw unified diff text

        Raises:
            GitDiffError: If diff command fails
            GitRepositoryError: If not in a git repository
        """
        if not self.is_git_repository():
            raise GitRepositoryError(
                f"Not a git repository: {self.repo_path}\n"
                "Make sure you're running from within a git repository."
            )

        cmd = ["git", "diff", base]
        if head:
            cmd.append(head)

        try:
            result = subprocess.run(
                cmd,
                cwd=self.repo_path,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                check=True,
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitDiffError(f"Failed to compute diff: {e.stderr}")

    def is_git_repository(self) -> bool:
        """Check if repo_path is inside a git repository.

        Returns:
            True if valid git repo, False otherwise
        """
        try:
            subprocess.run(
                ["git", "rev-parse", "--git-dir"],
                cwd=self.repo_path,
                capture_output=True,
                check=True,
            )
            return True
        except (subprocess.CalledProcessError, FileNotFoundError):
            return False
