"""Check pull request command.

Counts the significant lines of a GitHub pull request, keeps a summary
comment up to date and asks for reviewers when the diff is too big.
"""

from __future__ import annotations

import os
import sys

from diffcount.commands.count import load_config
from diffcount.domain.diff import PatchParseError
from diffcount.domain.github import PullRequest
from diffcount.infrastructure import (
    GitHubApiError,
    GitHubClient,
    write_count_outputs,
    write_count_summary,
)
from diffcount.services import GitHubCommentService, SignificanceCounter

TOO_BIG_MESSAGE = "This diff might be too big! Developer leads are invited to review the code."


def cmd_check_pr(
    event_path: str | None = None,
    token: str | None = None,
    config_file: str | None = None,
    extra_ignore: list[str] | None = None,
    threshold: int | None = None,
    write_job_summary: bool = False,
    dry_run: bool = False,
) -> int:
    """Count a pull request's significant lines and report on it.

    Thin command that:
    1. Loads configuration and the pull request from the event payload
    2. Fetches and counts the diff
    3. Upserts the summary comment and requests reviews past the threshold
    4. Writes GitHub Actions outputs

    Args:
        event_path: GitHub event JSON (defaults to GITHUB_EVENT_PATH)
        token: GitHub token (defaults to BOT_TOKEN, then GITHUB_TOKEN). Only
            a dry run may go without one.
        config_file: Optional YAML configuration file
        extra_ignore: Additional ignore substrings
        threshold: Override for the review threshold
        write_job_summary: Also write the result to GITHUB_STEP_SUMMARY
        dry_run: Print the comment instead of posting it

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    # --------------------------------------------------------
    # 1. Load configuration and pull request
    # --------------------------------------------------------
    token = token or os.environ.get("BOT_TOKEN") or os.environ.get("GITHUB_TOKEN")
    if not token:
        if not dry_run:
            print("Warning: BOT_TOKEN is not set! The job will be aborted.", file=sys.stderr)
            return 0
        print("No token set, fetching the diff unauthenticated.", file=sys.stderr)

    config = load_config(config_file, extra_ignore=extra_ignore, threshold=threshold)
    if config is None:
        return 1

    event_path = event_path or os.environ.get("GITHUB_EVENT_PATH")
    if not event_path:
        print("GITHUB_EVENT_PATH not set and no --event-path given", file=sys.stderr)
        return 1
    try:
        pr = PullRequest.from_event_file(event_path)
    except (OSError, ValueError, KeyError) as e:
        print(f"Failed to read pull request from event: {e}", file=sys.stderr)
        return 1

    # --------------------------------------------------------
    # 2. Fetch and count the diff
    # --------------------------------------------------------
    client = GitHubClient(token=token, owner=pr.owner, repo=pr.repo)
    print(f"Fetching diff for {pr.full_name}#{pr.number}...")
    try:
        patch_text = client.get_pull_request_diff(pr.number)
    except GitHubApiError as e:
        print(f"Error fetching diff: {e}", file=sys.stderr)
        return 1

    counter = SignificanceCounter(config=config, log=print)
    try:
        significant_lines = counter.count(patch_text)
    except PatchParseError as e:
        print(f"Failed to parse diff: {e}", file=sys.stderr)
        return 1

    too_big = significant_lines > config.threshold
    message = format_comment(significant_lines, too_big)

    # --------------------------------------------------------
    # 3. Comment and request reviews
    # --------------------------------------------------------
    if dry_run:
        print(f"[DRY RUN] Would comment: {config.comment_tag} {message}")
        if too_big:
            print(f"[DRY RUN] Would request review from: {', '.join(config.reviewers)}")
    else:
        service = GitHubCommentService(client=client, bot_login=config.bot_login)
        try:
            if too_big:
                service.request_reviews(pr, list(config.reviewers))
            service.upsert_tagged_comment(pr, config.comment_tag, message)
        except GitHubApiError as e:
            print(f"Error updating pull request: {e}", file=sys.stderr)
            return 1

    # --------------------------------------------------------
    # 4. Actions outputs
    # --------------------------------------------------------
    write_count_outputs(significant_lines, too_big)
    if write_job_summary:
        write_count_summary(significant_lines, config.threshold, message)

    return 0


def format_comment(significant_lines: int, too_big: bool) -> str:
    message = f"Significant lines: {significant_lines}."
    if too_big:
        message += f" {TOO_BIG_MESSAGE}"
    return message
