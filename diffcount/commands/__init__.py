"""CLI command implementations."""

from diffcount.commands.check_pr import cmd_check_pr
from diffcount.commands.count import cmd_count

__all__ = ["cmd_check_pr", "cmd_count"]
