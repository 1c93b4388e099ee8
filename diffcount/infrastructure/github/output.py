"""GitHub Actions reporting for a finished count.

Later workflow steps read `significant-lines` and `too-big` from the step
outputs. The job summary repeats the comment with the threshold it was
checked against.
"""

from __future__ import annotations

import os
import sys


def write_count_outputs(significant_lines: int, too_big: bool) -> bool:
    """Publish the count as step outputs in GITHUB_OUTPUT.

    Returns:
        True if written, False when GITHUB_OUTPUT is not set
    """
    outputs = {
        "significant-lines": str(significant_lines),
        "too-big": "true" if too_big else "false",
    }
    output_file = os.environ.get("GITHUB_OUTPUT")
    if not output_file:
        rendered = " ".join(f"{key}={value}" for key, value in outputs.items())
        print(f"GITHUB_OUTPUT not set, would output: {rendered}", file=sys.stderr)
        return False
    with open(output_file, "a") as f:
        f.writelines(f"{key}={value}\n" for key, value in outputs.items())
    return True


def write_count_summary(significant_lines: int, threshold: int, message: str) -> bool:
    """Append a markdown section to GITHUB_STEP_SUMMARY.

    Returns:
        True if written successfully, False otherwise
    """
    summary_path = os.environ.get("GITHUB_STEP_SUMMARY")
    if not summary_path:
        print("GITHUB_STEP_SUMMARY not set, skipping job summary", file=sys.stderr)
        return False

    content = (
        "## Diff size\n\n"
        f"{message}\n\n"
        "| Significant lines | Review threshold |\n"
        "|---|---|\n"
        f"| {significant_lines} | {threshold} |\n"
    )
    try:
        with open(summary_path, "a") as f:
            f.write(content)
        return True
    except OSError as e:
        print(f"Failed to write job summary: {e}", file=sys.stderr)
        return False
