"""Tests for the count command.

Tests cover:
- Reading a patch from a file, stdin and git
- Text and JSON output
- Verbose diagnostics on stderr
- Config loading and ignore overrides
- Non-UTF-8 patches from files and stdin
- Error exit codes for unreadable input, bad options and bad config
"""

from __future__ import annotations

import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

from diffcount.commands.count import cmd_count, load_config
from diffcount.services.git_operations import GitRepositoryError

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"
MOVED_FUNCTION = str(FIXTURES_DIR / "moved_function.diff")


def _run(**kwargs) -> tuple[int, str, str]:
    stdout = io.StringIO()
    stderr = io.StringIO()
    with redirect_stdout(stdout), redirect_stderr(stderr):
        code = cmd_count(**kwargs)
    return code, stdout.getvalue(), stderr.getvalue()


class TestCountCommand(unittest.TestCase):

    def test_counts_input_file(self):
        code, out, _ = _run(input_file=MOVED_FUNCTION)
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "2")

    def test_reads_stdin(self):
        diff = "--- a/x.py\n+++ b/x.py\n@@ -1 +1 @@\n-a\n+b\n"
        with patch("sys.stdin", io.StringIO(diff)):
            code, out, _ = _run()
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "2")

    def test_json_output(self):
        code, out, _ = _run(input_file=MOVED_FUNCTION, output_format="json")
        data = json.loads(out)
        self.assertEqual(code, 0)
        self.assertEqual(data["significant_lines"], 2)
        self.assertEqual(data["ignored_files"], ["yarn.lock"])

    def test_verbose_logs_to_stderr(self):
        _, out, err = _run(input_file=MOVED_FUNCTION, verbose=True)
        self.assertEqual(out.strip(), "2")
        self.assertIn("[excluding-moved] total added: 1, total deleted: 1.", err)
        self.assertIn("Change src/utils.ts => src/utils.ts has 5 lines diff.", err)

    def test_extra_ignore(self):
        code, out, _ = _run(input_file=MOVED_FUNCTION, extra_ignore=["helpers.ts"])
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "5")

    def test_config_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            config = Path(tmp) / "diffcount.yml"
            config.write_text("ignore: []\n")
            code, out, _ = _run(input_file=MOVED_FUNCTION, config_file=str(config))
        self.assertEqual(code, 0)
        # yarn.lock now counts: one version line removed, one added.
        self.assertEqual(out.strip(), "4")

    @patch("diffcount.commands.count.GitOperationsService")
    def test_reads_git_range(self, mock_service_cls):
        mock_service_cls.return_value.get_diff.return_value = Path(MOVED_FUNCTION).read_text()

        code, out, _ = _run(base="v1", head="v2", repo_path="/repo")

        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "2")
        mock_service_cls.assert_called_once_with("/repo")
        mock_service_cls.return_value.get_diff.assert_called_once_with("v1", "v2")

    @patch("diffcount.commands.count.GitOperationsService")
    def test_git_errors_exit_nonzero(self, mock_service_cls):
        mock_service_cls.return_value.get_diff.side_effect = GitRepositoryError("not a repo")
        code, _, err = _run(base="v1")
        self.assertEqual(code, 1)
        self.assertIn("not a repo", err)

    def test_missing_input_file(self):
        code, _, err = _run(input_file="/nonexistent/patch.diff")
        self.assertEqual(code, 1)
        self.assertIn("Patch file not found", err)

    def test_non_utf8_patch_file_is_counted(self):
        code, out, err = _run(input_file=str(FIXTURES_DIR / "latin1_menu.diff"))
        self.assertEqual(code, 0, err)
        self.assertEqual(out.strip(), "2")

    def test_non_utf8_stdin_is_counted(self):
        raw = (FIXTURES_DIR / "latin1_menu.diff").read_bytes()
        with patch("sys.stdin", io.TextIOWrapper(io.BytesIO(raw), encoding="utf-8")):
            code, out, _ = _run()
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "2")

    def test_directory_as_input_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            code, _, err = _run(input_file=tmp)
        self.assertEqual(code, 1)
        self.assertIn("Failed to read patch", err)

    def test_head_without_base(self):
        with patch("sys.stdin", io.StringIO("")):
            code, _, err = _run(head="v2")
        self.assertEqual(code, 1)
        self.assertIn("--head requires --base", err)

    def test_negative_threshold_override_is_rejected(self):
        with redirect_stderr(io.StringIO()) as stderr:
            self.assertIsNone(load_config(None, threshold=-1))
        self.assertIn("Invalid config", stderr.getvalue())

    def test_missing_config_file(self):
        code, _, err = _run(input_file=MOVED_FUNCTION, config_file="/nonexistent.yml")
        self.assertEqual(code, 1)
        self.assertIn("Config file not found", err)

    def test_malformed_patch(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bad.diff"
            path.write_text("--- a/x\n+++ b/x\n@@ what @@\n")
            code, _, err = _run(input_file=str(path))
        self.assertEqual(code, 1)
        self.assertIn("Failed to parse patch", err)


if __name__ == "__main__":
    unittest.main()
