"""Count significant lines command.

Thin command that reads a patch, runs the counter and prints the result.
No business logic - just wiring and coordination.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

from diffcount.domain.config import ConfigError, CountingConfig
from diffcount.domain.diff import PatchParseError
from diffcount.services import (
    GitDiffError,
    GitOperationsService,
    GitRepositoryError,
    SignificanceCounter,
)


def cmd_count(
    input_file: str | None = None,
    base: str | None = None,
    head: str | None = None,
    repo_path: str = ".",
    config_file: str | None = None,
    extra_ignore: list[str] | None = None,
    output_format: str = "text",
    verbose: bool = False,
) -> int:
    """Count significant lines in a patch.

    The patch comes from input_file, from `git diff base head` when base is
    given, or from stdin.

    Args:
        input_file: Path to a patch file
        base: Base revision for git diff
        head: Head revision for git diff (working tree if None)
        repo_path: Repository to run git in
        config_file: Optional YAML configuration file
        extra_ignore: Additional ignore substrings
        output_format: "text" prints the integer, "json" prints a report
        verbose: Print per-file diagnostics to stderr

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    if head and not base:
        print("--head requires --base", file=sys.stderr)
        return 1

    config = load_config(config_file, extra_ignore=extra_ignore)
    if config is None:
        return 1

    try:
        patch_text = _read_patch(input_file, base, head, repo_path)
    except FileNotFoundError:
        print(f"Patch file not found: {input_file}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Failed to read patch: {e}", file=sys.stderr)
        return 1
    except (GitDiffError, GitRepositoryError) as e:
        print(str(e), file=sys.stderr)
        return 1

    counter = SignificanceCounter(config=config, log=_stderr_log if verbose else None)
    try:
        report = counter.analyze(patch_text)
    except PatchParseError as e:
        print(f"Failed to parse patch: {e}", file=sys.stderr)
        return 1

    if output_format == "json":
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print(report.significant_lines)
    return 0


def load_config(
    config_file: str | None,
    extra_ignore: list[str] | None = None,
    threshold: int | None = None,
) -> CountingConfig | None:
    """Load configuration and apply overrides, reporting errors to stderr.

    Returns:
        The configuration, or None if it could not be loaded
    """
    try:
        config = CountingConfig.from_yaml_file(config_file) if config_file else CountingConfig()
        return config.with_overrides(extra_ignore=extra_ignore, threshold=threshold)
    except FileNotFoundError:
        print(f"Config file not found: {config_file}", file=sys.stderr)
        return None
    except ConfigError as e:
        print(f"Invalid config: {e}", file=sys.stderr)
        return None


def _read_patch(
    input_file: str | None,
    base: str | None,
    head: str | None,
    repo_path: str,
) -> str:
    if input_file:
        return _decode(Path(input_file).read_bytes())
    if base:
        return GitOperationsService(repo_path).get_diff(base, head)
    stdin_bytes = getattr(sys.stdin, "buffer", None)
    if stdin_bytes is None:
        # A replaced text-only stream has no byte buffer.
        return sys.stdin.read()
    return _decode(stdin_bytes.read())


def _decode(data: bytes) -> str:
    # Patches can mix encodings file by file.
    return data.decode("utf-8", errors="replace")


def _stderr_log(message: str) -> None:
    print(message, file=sys.stderr)
