"""Tests for the check-pr command.

Tests cover:
- Missing token aborting quietly, except for a dry run
- Comment text below and above the threshold
- Review requests only above the threshold
- Dry run never touching the GitHub API for writes
- Actions outputs
- Error exit codes for bad events and API failures
"""

from __future__ import annotations

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

from diffcount.commands.check_pr import TOO_BIG_MESSAGE, cmd_check_pr, format_comment
from diffcount.infrastructure.github.client import GitHubApiError

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"

EVENT_PAYLOAD = {
    "pull_request": {
        "number": 5,
        "user": {"login": "alice"},
        "head": {"repo": {"name": "repo", "owner": {"login": "org"}}},
        "base": {"repo": {"name": "repo", "owner": {"login": "org"}}},
    },
}


class TestFormatComment(unittest.TestCase):

    def test_small_diff(self):
        self.assertEqual(format_comment(15, too_big=False), "Significant lines: 15.")

    def test_big_diff(self):
        self.assertEqual(
            format_comment(1500, too_big=True),
            f"Significant lines: 1500. {TOO_BIG_MESSAGE}",
        )


class TestCheckPrCommand(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.dir = Path(self.tmp.name)
        self.event_path = self.dir / "event.json"
        self.event_path.write_text(json.dumps(EVENT_PAYLOAD))
        self.output_path = self.dir / "output"

        env = patch.dict(os.environ, {"GITHUB_OUTPUT": str(self.output_path)}, clear=True)
        env.start()
        self.addCleanup(env.stop)

        client_patcher = patch("diffcount.commands.check_pr.GitHubClient")
        self.mock_client_cls = client_patcher.start()
        self.addCleanup(client_patcher.stop)
        self.client = self.mock_client_cls.return_value
        self.client.get_pull_request_diff.return_value = (
            FIXTURES_DIR / "moved_function.diff"
        ).read_text()
        self.client.list_issue_comments.return_value = []

    def _run(self, **kwargs) -> int:
        kwargs.setdefault("event_path", str(self.event_path))
        kwargs.setdefault("token", "secret")
        with redirect_stdout(io.StringIO()), redirect_stderr(io.StringIO()):
            return cmd_check_pr(**kwargs)

    def test_missing_token_aborts_quietly(self):
        code = self._run(token=None)
        self.assertEqual(code, 0)
        self.mock_client_cls.assert_not_called()

    def test_token_from_environment(self):
        with patch.dict(os.environ, {"BOT_TOKEN": "from-env"}):
            self._run(token=None)
        self.mock_client_cls.assert_called_once_with(token="from-env", owner="org", repo="repo")

    def test_small_diff_comments_without_review_request(self):
        code = self._run()

        self.assertEqual(code, 0)
        self.client.get_pull_request_diff.assert_called_once_with(5)
        self.client.create_issue_comment.assert_called_once_with(
            5, "[diff-counting] Significant lines: 2."
        )
        self.client.request_reviewers.assert_not_called()
        self.assertEqual(
            self.output_path.read_text(),
            "significant-lines=2\ntoo-big=false\n",
        )

    def test_big_diff_requests_reviews(self):
        config = self.dir / "diffcount.yml"
        config.write_text("reviewers: [alice, bob]\n")

        code = self._run(config_file=str(config), threshold=1)

        self.assertEqual(code, 0)
        self.client.request_reviewers.assert_called_once_with(5, ["bob"])
        body = self.client.create_issue_comment.call_args[0][1]
        self.assertTrue(body.endswith(TOO_BIG_MESSAGE))
        self.assertIn("too-big=true", self.output_path.read_text())

    def test_dry_run_does_not_write(self):
        code = self._run(dry_run=True, threshold=0)

        self.assertEqual(code, 0)
        self.client.create_issue_comment.assert_not_called()
        self.client.update_issue_comment.assert_not_called()
        self.client.request_reviewers.assert_not_called()

    def test_dry_run_without_token_still_counts(self):
        code = self._run(token=None, dry_run=True)

        self.assertEqual(code, 0)
        self.mock_client_cls.assert_called_once_with(token=None, owner="org", repo="repo")
        self.client.get_pull_request_diff.assert_called_once_with(5)
        self.client.create_issue_comment.assert_not_called()
        self.assertIn("significant-lines=2", self.output_path.read_text())

    def test_job_summary(self):
        summary = self.dir / "summary.md"
        with patch.dict(os.environ, {"GITHUB_STEP_SUMMARY": str(summary)}):
            self._run(write_job_summary=True, threshold=50)
        content = summary.read_text()
        self.assertIn("Significant lines: 2.", content)
        self.assertIn("| 2 | 50 |", content)

    def test_missing_event_path(self):
        self.assertEqual(self._run(event_path=None), 1)

    def test_event_without_pull_request(self):
        self.event_path.write_text(json.dumps({"action": "push"}))
        self.assertEqual(self._run(), 1)

    def test_diff_fetch_failure(self):
        self.client.get_pull_request_diff.side_effect = GitHubApiError("403")
        self.assertEqual(self._run(), 1)
        self.client.create_issue_comment.assert_not_called()

    def test_comment_failure(self):
        self.client.list_issue_comments.side_effect = GitHubApiError("500")
        self.assertEqual(self._run(), 1)


if __name__ == "__main__":
    unittest.main()
