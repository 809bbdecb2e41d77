"""VCS fact collection: command execution and git-derived build facts."""

from .git_facts import collect_vcs_facts, contribution_percentage, parse_remote_url
from .runner import CommandRunner

__all__ = [
    "CommandRunner",
    "collect_vcs_facts",
    "contribution_percentage",
    "parse_remote_url",
]
