"""CLI entry point for diffcount.

Usage:
    python -m diffcount <command> [options]

Commands:
    count       Count significant lines in a patch
    check-pr    Count a GitHub pull request and comment on it
"""

from __future__ import annotations

import argparse
import sys

from diffcount.commands import cmd_check_pr, cmd_count


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diffcount",
        description="Count significant changed lines in a unified diff",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  count       Count significant lines in a patch (file, git range or stdin)
  check-pr    Count a GitHub pull request, comment, and request reviews if too big

Examples:
  git diff main | diffcount count
  diffcount count --base v1.0 --head v1.1 --verbose
  diffcount count --input-file change.diff --format json
  diffcount check-pr --config .github/diffcount.yml
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # count command
    parser_count = subparsers.add_parser(
        "count",
        help="Count significant lines in a patch",
    )
    parser_count.add_argument(
        "--input-file",
        help="Path to patch file. If not provided, uses --base or reads from stdin",
    )
    parser_count.add_argument(
        "--base",
        help="Base revision; runs git diff BASE [HEAD] in --repo-path",
    )
    parser_count.add_argument(
        "--head",
        help="Head revision (default: working tree)",
    )
    parser_count.add_argument(
        "--repo-path",
        default=".",
        help="Path to the git repository (default: current directory)",
    )
    parser_count.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser_count.add_argument(
        "--verbose",
        action="store_true",
        help="Print per-file counts to stderr",
    )
    _add_config_arguments(parser_count)

    # check-pr command
    parser_check_pr = subparsers.add_parser(
        "check-pr",
        help="Count a GitHub pull request and comment on it",
    )
    parser_check_pr.add_argument(
        "--event-path",
        help="GitHub event JSON file (default: $GITHUB_EVENT_PATH)",
    )
    parser_check_pr.add_argument(
        "--token",
        help="GitHub token (default: $BOT_TOKEN, then $GITHUB_TOKEN)",
    )
    parser_check_pr.add_argument(
        "--threshold",
        type=int,
        help="Request reviews above this many significant lines (default: 1000)",
    )
    parser_check_pr.add_argument(
        "--write-job-summary",
        action="store_true",
        help="Write the result to GITHUB_STEP_SUMMARY",
    )
    parser_check_pr.add_argument(
        "--dry-run",
        action="store_true",
        help="Print what would be posted without actually posting",
    )
    _add_config_arguments(parser_check_pr)

    return parser


def _add_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        help="YAML configuration file",
    )
    parser.add_argument(
        "--ignore",
        action="append",
        default=[],
        metavar="SUBSTRING",
        help="Also ignore files whose path contains SUBSTRING (repeatable)",
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Route to command implementations with explicit parameters
    if args.command == "count":
        return cmd_count(
            input_file=args.input_file,
            base=args.base,
            head=args.head,
            repo_path=args.repo_path,
            config_file=args.config,
            extra_ignore=args.ignore,
            output_format=args.format,
            verbose=args.verbose,
        )

    elif args.command == "check-pr":
        return cmd_check_pr(
            event_path=args.event_path,
            token=args.token,
            config_file=args.config,
            extra_ignore=args.ignore,
            threshold=args.threshold,
            write_job_summary=args.write_job_summary,
            dry_run=args.dry_run,
        )

    else:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
