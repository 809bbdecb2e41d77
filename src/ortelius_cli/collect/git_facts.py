"""Derive build facts from the git checkout.

Stability: stable
Dependencies: stdlib-only
Doc-Types: API_REFERENCE, TECHNICAL_DESIGN
Tags: git, facts, collector

Runs a fixed sequence of git commands through ``CommandRunner`` and
returns the facts as an ordered ``{NAME: value}`` mapping (the raw fact
map). Later steps take the values computed by earlier ones as arguments::

    GIT_BRANCH ──► GIT_BRANCH_PARENT ──► GIT_BRANCH_CREATE_COMMIT
                                                │
    SHORT_SHA ──► GIT_COMMIT_TIMESTAMP          ▼
                        │               GIT_BRANCH_CREATE_TIMESTAMP
                        └──────────┬────────────┘
                                   ▼
                          GIT_COMMIT_AUTHORS ──► GIT_COMMITTERS_CNT
                                                 GIT_CONTRIB_PERCENTAGE

A failing command leaves its fact as ``""``; nothing here raises.

Usage::

    from ortelius_cli.collect import CommandRunner, collect_vcs_facts

    facts = collect_vcs_facts(CommandRunner(cwd=Path(".")), workdir=Path("."))
    facts["GIT_BRANCH"]
"""

from __future__ import annotations

import html
import os
import re
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import NamedTuple

from ortelius_cli.core import attributes as names
from ortelius_cli.core.logging import get_logger
from ortelius_cli.core.timestamps import format_utc, normalize_timestamp, utc_now

from .runner import CommandRunner

logger = get_logger(__name__)

_DEFAULT_BRANCH = "main"
_INSERTIONS_RE = re.compile(r"(\d+) insertions?\(\+\)")
_DELETIONS_RE = re.compile(r"(\d+) deletions?\(-\)")


class RemoteInfo(NamedTuple):
    url: str
    repo: str
    project: str
    org: str


def collect_vcs_facts(
    runner: CommandRunner,
    *,
    workdir: Path | None = None,
    environ: Mapping[str, str] | None = None,
    now: datetime | None = None,
) -> dict[str, str]:
    """Collect the raw fact map for the checkout ``runner`` points at.

    Args:
        runner: Command runner whose ``cwd`` is the checkout.
        workdir: Checkout directory, used for ``BASENAME`` (default: cwd).
        environ: Variables consulted for ``GIT_PREVIOUS_COMPONENT_COMMIT``
            and ``COMPNAME`` (default: the process environment).
        now: Build timestamp (default: current UTC time).

    Returns:
        Ordered mapping of fact name to string value.
    """
    env = os.environ if environ is None else environ
    facts: dict[str, str] = {}

    # History may be shallow on CI; result ignored
    runner.run(["git", "fetch", "--unshallow"], merge_stderr=False)

    facts[names.BUILD_DATE] = format_utc(now or utc_now())

    short_sha = _short_sha(runner)
    commit = _full_sha(runner)
    facts[names.SHORT_SHA] = short_sha
    facts[names.GIT_COMMIT] = commit
    facts[names.GIT_VERIFY_COMMIT] = _verify_commit(runner, commit)
    facts[names.GIT_SIGNED_OFF_BY] = _signed_off_by(runner, commit)
    facts[names.BUILD_NUM] = runner.run(["git", "rev-list", "--count", "HEAD"], merge_stderr=False)

    remote = parse_remote_url(
        runner.run(["git", "config", "--get", "remote.origin.url"], merge_stderr=False)
    )
    facts[names.GIT_URL] = remote.url
    facts[names.GIT_REPO] = remote.repo
    facts[names.GIT_REPO_PROJECT] = remote.project
    facts[names.GIT_ORG] = remote.org

    branch = runner.run(["git", "rev-parse", "--abbrev-ref", "HEAD"], merge_stderr=False)
    facts[names.GIT_BRANCH] = branch

    commit_ts = _commit_timestamp(runner, short_sha or "HEAD")
    parent = _branch_parent(runner, branch)
    create_commit = _branch_create_commit(runner, parent, branch)
    create_ts = _commit_timestamp(runner, create_commit or "HEAD")
    facts[names.GIT_COMMIT_TIMESTAMP] = commit_ts
    facts[names.GIT_BRANCH_PARENT] = parent
    facts[names.GIT_BRANCH_CREATE_COMMIT] = create_commit
    facts[names.GIT_BRANCH_CREATE_TIMESTAMP] = create_ts

    all_authors = _authors(runner, ["git", "log"])
    authors = _authors_since_branch(runner, since=create_ts, until=commit_ts) or all_authors
    facts[names.GIT_COMMIT_AUTHORS] = ",".join(authors)
    facts[names.GIT_COMMITTERS_CNT] = str(len(authors))
    facts[names.GIT_TOTAL_COMMITTERS_CNT] = str(len(all_authors))
    facts[names.GIT_CONTRIB_PERCENTAGE] = contribution_percentage(len(authors), len(all_authors))

    facts[names.GIT_LINES_TOTAL] = _lines_total(runner)

    previous = env.get(names.GIT_PREVIOUS_COMPONENT_COMMIT, "")
    facts[names.GIT_PREVIOUS_COMPONENT_COMMIT] = previous
    if previous:
        added, deleted = _lines_changed(runner, previous, short_sha or "HEAD")
    else:
        added, deleted = "0", "0"
    facts[names.GIT_LINES_ADDED] = added
    facts[names.GIT_LINES_DELETED] = deleted

    if commit_ts:
        facts[names.GIT_COMMIT_TIMESTAMP] = normalize_timestamp(commit_ts)
    if create_ts:
        facts[names.GIT_BRANCH_CREATE_TIMESTAMP] = normalize_timestamp(create_ts)

    facts[names.BASENAME] = (workdir or Path.cwd()).resolve().name
    facts[names.COMPNAME] = env.get(names.COMPNAME) or remote.project

    logger.info("vcs_facts_collected", count=len(facts), branch=branch, commit=short_sha)
    return facts


# ── Steps ───────────────────────────────────────────────────────────────


def _short_sha(runner: CommandRunner) -> str:
    return runner.run(["git", "rev-parse", "--short", "HEAD"], merge_stderr=False)


def _full_sha(runner: CommandRunner) -> str:
    return runner.run(["git", "rev-parse", "HEAD"], merge_stderr=False)


def _verify_commit(runner: CommandRunner, commit: str) -> str:
    """Number of ``Signature made`` lines reported for ``commit``."""
    if not commit:
        return "0"
    output = runner.run(["git", "verify-commit", commit])
    count = sum(1 for line in output.splitlines() if "signature made" in line.lower())
    return str(count)


def _signed_off_by(runner: CommandRunner, commit: str) -> str:
    if not commit:
        return ""
    output = runner.run(["git", "log", "-1", commit], merge_stderr=False)
    signers = [
        line.split(":", 1)[1].strip()
        for line in output.splitlines()
        if "Signed-off-by:" in line
    ]
    return "\n".join(html.escape(signer, quote=False) for signer in signers)


def parse_remote_url(url: str) -> RemoteInfo:
    """Split a remote URL into ``org/project``, project and org.

    Handles both ``https://host/org/project.git`` and the scp-like
    ``git@host:org/project.git`` form.
    """
    url = url.strip()
    if not url:
        return RemoteInfo("", "", "", "")
    parts = url.rstrip("/").replace(":", "/", 1).split("/")
    project = parts[-1].removesuffix(".git")
    org = parts[-2] if len(parts) > 1 else ""
    repo = f"{org}/{project}" if org else project
    return RemoteInfo(url, repo, project, org)


def _commit_timestamp(runner: CommandRunner, ref: str) -> str:
    return runner.run(
        ["git", "log", "-1", "--pretty=format:%cd", "--date=rfc", ref],
        merge_stderr=False,
    )


def _branch_parent(runner: CommandRunner, branch: str) -> str:
    """Nearest other branch whose history contains the current one.

    Reads ``git show-branch -a``: the first marker line flagged with ``*``
    that does not mention ``branch`` names the parent.
    """
    if not branch:
        return ""
    output = runner.run(["git", "show-branch", "-a"], merge_stderr=False)
    for line in output.splitlines():
        head = line.split("]", 1)[0]
        if "*" not in head or "[" not in head or branch in head:
            continue
        name = head.rsplit("[", 1)[1]
        return re.split(r"[\^~]", name, maxsplit=1)[0]
    return ""


def _branch_create_commit(runner: CommandRunner, parent: str, branch: str) -> str:
    """First commit on ``branch`` that is not on ``parent``."""
    span = f"{parent or _DEFAULT_BRANCH}..{branch or _DEFAULT_BRANCH}"
    output = runner.run(
        ["git", "log", "--oneline", "--reverse", span],
        merge_stderr=False,
    )
    first = output.splitlines()[0] if output else ""
    return first.split(" ", 1)[0]


def _authors(runner: CommandRunner, command: list[str]) -> list[str]:
    """Unique, sorted author names from ``command``, bots excluded."""
    output = runner.run([*command, "--format=%an <%ae>"], merge_stderr=False)
    found: set[str] = set()
    for line in output.splitlines():
        if not line.strip() or "dependabot" in line.lower():
            continue
        name = line.split("<", 1)[0].strip()
        if name:
            found.add(name)
    return sorted(found)


def _authors_since_branch(runner: CommandRunner, *, since: str, until: str) -> list[str]:
    command = ["git", "log", "--remotes"]
    if since:
        command.append(f"--since={since}")
    if until:
        command.append(f"--until={until}")
    return _authors(runner, command)


def contribution_percentage(committers: int, total: int) -> str:
    """Share of all-time committers active since the branch was created."""
    if total <= 0:
        return "0"
    return str(int(committers * 100 / total))


def _lines_total(runner: CommandRunner) -> str:
    """Total line count over tracked text files."""
    output = runner.run(["git", "grep", "-I", "-c", ""], merge_stderr=False)
    total = 0
    for line in output.splitlines():
        _, _, count = line.rpartition(":")
        if count.isdigit():
            total += int(count)
    return str(total) if output else ""


def _lines_changed(runner: CommandRunner, previous: str, current: str) -> tuple[str, str]:
    output = runner.run(["git", "diff", "--shortstat", previous, current], merge_stderr=False)
    added = _INSERTIONS_RE.search(output)
    deleted = _DELETIONS_RE.search(output)
    return (added.group(1) if added else "0", deleted.group(1) if deleted else "0")
