"""Command execution for fact collection.

Stability: stable
Dependencies: stdlib-only
Tags: subprocess, git, runner

``CommandRunner`` is the only place the collector starts processes. It never
raises. A command that exits non-zero still yields whatever it printed;
a missing or timed-out command produces ``""`` so every fact derived from
it degrades to an empty string.

Usage::

    runner = CommandRunner(cwd=Path("."))
    branch = runner.run(["git", "rev-parse", "--abbrev-ref", "HEAD"])
    count = runner.run("git log --oneline | wc -l")
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from ortelius_cli.core.logging import get_logger

logger = get_logger(__name__)


class CommandRunner:
    """Run commands in a working directory and return their trimmed output.

    Args:
        cwd: Directory commands run in (default: current directory).
        timeout: Seconds before a command is abandoned. ``None`` waits
            forever, matching how CI shells run git.
    """

    def __init__(self, cwd: Path | None = None, timeout: float | None = None):
        self.cwd = cwd
        self.timeout = timeout

    def run(self, command: str | Sequence[str], *, merge_stderr: bool = True) -> str:
        """Run ``command`` and return its output minus one trailing newline.

        A ``str`` is run through the shell, a sequence is executed directly.
        stderr is folded into the output unless ``merge_stderr`` is False.
        """
        shell = isinstance(command, str)
        argv = command if shell else list(command)
        try:
            result = subprocess.run(
                argv,
                shell=shell,
                cwd=str(self.cwd) if self.cwd else None,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT if merge_stderr else subprocess.DEVNULL,
                timeout=self.timeout,
                check=False,
            )
        except (subprocess.TimeoutExpired, OSError) as exc:
            logger.debug("command_error", command=_display(command), error=str(exc))
            return ""

        if result.returncode != 0:
            logger.debug("command_failed", command=_display(command), returncode=result.returncode)

        output = result.stdout.decode("utf-8", errors="replace")
        return output.removesuffix("\n")


def _display(command: str | Sequence[str]) -> str:
    if isinstance(command, str):
        return command
    return " ".join(command)
