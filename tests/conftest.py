"""
Shared pytest fixtures for ortelius-cli tests.

This module provides:
- ``ScriptedRunner``: a ``CommandRunner`` stand-in that answers commands
  from a fixed script and records what was asked
- A git script describing a small feature-branch checkout
- Settings pointing at a temporary checkout

Usage:
    def test_branch(scripted_runner):
        facts = collect_vcs_facts(scripted_runner)
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path

import pytest

from ortelius_cli.core.settings import CollectorSettings
from ortelius_cli.resolve.variables import ResolutionContext


class ScriptedRunner:
    """Answers commands from ``script``; anything unscripted yields ``""``."""

    def __init__(self, script: dict[tuple[str, ...], str] | None = None):
        self.script = dict(script or {})
        self.calls: list[tuple[str, ...]] = []

    def run(self, command: str | Sequence[str], *, merge_stderr: bool = True) -> str:
        key = (command,) if isinstance(command, str) else tuple(command)
        self.calls.append(key)
        return self.script.get(key, "")

    def called(self, *prefix: str) -> bool:
        return any(call[: len(prefix)] == prefix for call in self.calls)


FIXED_NOW = datetime(2026, 3, 1, 12, 30, 0, tzinfo=timezone.utc)

COMMIT_DATE = "Thu, 26 Feb 2026 10:00:00 +0000"
BRANCH_DATE = "Mon, 23 Feb 2026 09:00:00 +0000"

GIT_SCRIPT: dict[tuple[str, ...], str] = {
    ("git", "rev-parse", "--short", "HEAD"): "abc1234",
    ("git", "rev-parse", "HEAD"): "abc1234def5678abc1234def5678abc1234def56",
    ("git", "verify-commit", "abc1234def5678abc1234def5678abc1234def56"): (
        "gpg: Signature made Thu Feb 26 10:00:00 2026 UTC\n"
        "gpg: Good signature from \"Jane Doe <jane@example.com>\""
    ),
    ("git", "log", "-1", "abc1234def5678abc1234def5678abc1234def56"): (
        "commit abc1234def5678abc1234def5678abc1234def56\n"
        "Author: Jane Doe <jane@example.com>\n"
        "\n"
        "    Add payments endpoint\n"
        "\n"
        "    Signed-off-by: Jane Doe <jane@example.com>"
    ),
    ("git", "rev-list", "--count", "HEAD"): "42",
    ("git", "config", "--get", "remote.origin.url"): "https://github.com/acme/payments.git",
    ("git", "rev-parse", "--abbrev-ref", "HEAD"): "feature/refunds",
    ("git", "log", "-1", "--pretty=format:%cd", "--date=rfc", "abc1234"): COMMIT_DATE,
    ("git", "show-branch", "-a"): (
        "! [feature/refunds] Add payments endpoint\n"
        " * [main] Initial commit\n"
        "--\n"
        "+  [feature/refunds] Add payments endpoint\n"
        "+* [main^] Initial commit"
    ),
    ("git", "log", "--oneline", "--reverse", "main..feature/refunds"): (
        "f00dfee Start refunds\nabc1234 Add payments endpoint"
    ),
    ("git", "log", "-1", "--pretty=format:%cd", "--date=rfc", "f00dfee"): BRANCH_DATE,
    ("git", "log", "--format=%an <%ae>"): (
        "Jane Doe <jane@example.com>\n"
        "Bob Roe <bob@example.com>\n"
        "dependabot[bot] <support@github.com>\n"
        "Jane Doe <jane@example.com>\n"
        "Ann Poe <ann@example.com>"
    ),
    (
        "git",
        "log",
        "--remotes",
        f"--since={BRANCH_DATE}",
        f"--until={COMMIT_DATE}",
        "--format=%an <%ae>",
    ): "Jane Doe <jane@example.com>",
    ("git", "grep", "-I", "-c", ""): "README.md:10\nsrc/app.py:90",
    ("git", "diff", "--shortstat", "prev999", "abc1234"): (
        " 3 files changed, 25 insertions(+), 4 deletions(-)"
    ),
}


@pytest.fixture
def git_script() -> dict[tuple[str, ...], str]:
    return dict(GIT_SCRIPT)


@pytest.fixture
def scripted_runner(git_script) -> ScriptedRunner:
    return ScriptedRunner(git_script)


@pytest.fixture
def empty_context() -> ResolutionContext:
    return ResolutionContext({})


@pytest.fixture
def checkout(tmp_path: Path) -> Path:
    root = tmp_path / "payments"
    root.mkdir()
    return root


@pytest.fixture
def settings(checkout: Path) -> CollectorSettings:
    return CollectorSettings(
        url="https://registry.example.com",
        user="acme.ci-bot",
        password="s3cret",
        workdir=checkout,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def make_runner():
    """Build a ``ScriptedRunner`` from a custom script."""
    return ScriptedRunner
