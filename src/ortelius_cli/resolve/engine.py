"""
Attribute resolution.

Reconciles the three sources of component attributes into one ``CompAttrs``
record plus the leftover extra attributes.

Manifesto:
    Every recognised name has exactly one destination field, declared once
    in ``ATTRIBUTE_FIELDS``. Historical aliases point at the same
    ``FieldSpec``; nothing else in the codebase knows which names exist.

Precedence (applied in this order, later layers overwrite):

    ┌───────────────────────────────────────────────────────────────┐
    │ 1. raw VCS facts      copied as-is, seeded into the context   │
    │ 2. top-level config   resolve_vars(value) → field             │
    │ 3. grouped config     resolve_vars(value) → field             │
    │ 4. unknown config key resolve_vars(value) → extra[KEY.upper()]│
    └───────────────────────────────────────────────────────────────┘

Seeding never replaces a variable the environment already defines, but the
fact still sets its field. Recognised names are matched after upper-casing
and never appear in ``extra``.

Aliases:
    commit id   ← SHORT_SHA, GIT_COMMIT, GITCOMMIT
    remote URL  ← GIT_URL, GITURL
    tag         ← GIT_TAG, GITTAG
    repo        ← GIT_REPO, GITREPO
    build date  ← BLDDATE, BUILDDATE

    No alias outranks another. When several aliases of one field occur in
    the same layer, the one met last in that layer's order wins.

Field kinds:
    text      value stored as given
    date      parsed with dateutil, None when empty or unparseable
    flag      True only for the exact value "1"
    identity  dotted name split into name + domain

Tags:
    resolution, attributes, precedence, component-config, ortelius-cli

Doc-Types:
    - API Reference
    - Technical Design
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ortelius_cli.core import attributes as names
from ortelius_cli.core.logging import get_logger
from ortelius_cli.core.models import CompAttrs, User, make_name
from ortelius_cli.core.timestamps import parse_timestamp

from .config_file import CONFIG_FILENAME, ConfigDocument, iter_flat, iter_grouped, load_config_document
from .variables import ResolutionContext, build_lookup, substitute

logger = get_logger(__name__)


class FieldKind(str, Enum):
    TEXT = "text"
    DATE = "date"
    FLAG = "flag"
    IDENTITY = "identity"


@dataclass(frozen=True)
class FieldSpec:
    """Destination of a recognised attribute name."""

    field: str
    kind: FieldKind = FieldKind.TEXT

    def apply(self, attrs: CompAttrs, value: str) -> None:
        if self.kind is FieldKind.DATE:
            setattr(attrs, self.field, parse_timestamp(value))
        elif self.kind is FieldKind.FLAG:
            setattr(attrs, self.field, value == "1")
        elif self.kind is FieldKind.IDENTITY:
            name, domain = make_name(value)
            setattr(attrs, self.field, User(name=name, domain=domain))
        else:
            setattr(attrs, self.field, value)


_COMMIT = FieldSpec("git_commit")
_REPO = FieldSpec("git_repo")
_TAG = FieldSpec("git_tag")
_URL = FieldSpec("git_url")
_BUILD_DATE = FieldSpec("build_date", FieldKind.DATE)

ATTRIBUTE_FIELDS: dict[str, FieldSpec] = {
    names.BASENAME: FieldSpec("basename"),
    names.BUILD_DATE: _BUILD_DATE,
    names.BUILD_DATE_LONG: _BUILD_DATE,
    names.BUILD_ID: FieldSpec("build_id"),
    names.BUILD_NUM: FieldSpec("build_num"),
    names.BUILD_URL: FieldSpec("build_url"),
    names.CHART: FieldSpec("chart"),
    names.CHART_NAMESPACE: FieldSpec("chart_namespace"),
    names.CHART_REPO: FieldSpec("chart_repo"),
    names.CHART_REPO_URL: FieldSpec("chart_repo_url"),
    names.CHART_VERSION: FieldSpec("chart_version"),
    names.DISCORD_CHANNEL: FieldSpec("discord_channel"),
    names.DOCKER_REPO: FieldSpec("docker_repo"),
    names.DOCKER_SHA: FieldSpec("docker_sha"),
    names.DOCKER_TAG: FieldSpec("docker_tag"),
    names.SHORT_SHA: _COMMIT,
    names.GIT_COMMIT: _COMMIT,
    names.GIT_COMMIT_LEGACY: _COMMIT,
    names.GIT_BRANCH: FieldSpec("git_branch"),
    names.GIT_BRANCH_CREATE_COMMIT: FieldSpec("git_branch_create_commit"),
    names.GIT_BRANCH_CREATE_TIMESTAMP: FieldSpec("git_branch_create_timestamp", FieldKind.DATE),
    names.GIT_BRANCH_PARENT: FieldSpec("git_branch_parent"),
    names.GIT_COMMIT_AUTHORS: FieldSpec("git_commit_authors"),
    names.GIT_COMMIT_TIMESTAMP: FieldSpec("git_commit_timestamp", FieldKind.DATE),
    names.GIT_COMMITTERS_CNT: FieldSpec("git_committers_cnt"),
    names.GIT_CONTRIB_PERCENTAGE: FieldSpec("git_contrib_percentage"),
    names.GIT_LINES_ADDED: FieldSpec("git_lines_added"),
    names.GIT_LINES_DELETED: FieldSpec("git_lines_deleted"),
    names.GIT_LINES_TOTAL: FieldSpec("git_lines_total"),
    names.GIT_ORG: FieldSpec("git_org"),
    names.GIT_PREVIOUS_COMPONENT_COMMIT: FieldSpec("git_prev_comp_commit"),
    names.GIT_REPO: _REPO,
    names.GIT_REPO_LEGACY: _REPO,
    names.GIT_REPO_PROJECT: FieldSpec("git_repo_project"),
    names.GIT_SIGNED_OFF_BY: FieldSpec("git_signed_off_by"),
    names.GIT_TAG: _TAG,
    names.GIT_TAG_LEGACY: _TAG,
    names.GIT_TOTAL_COMMITTERS_CNT: FieldSpec("git_total_committers_cnt"),
    names.GIT_URL: _URL,
    names.GIT_URL_LEGACY: _URL,
    names.GIT_VERIFY_COMMIT: FieldSpec("git_verify_commit", FieldKind.FLAG),
    names.HIPCHAT_CHANNEL: FieldSpec("hipchat_channel"),
    names.PAGERDUTY_BUSINESS_URL: FieldSpec("pagerduty_business_url"),
    names.PAGERDUTY_URL: FieldSpec("pagerduty_url"),
    names.REPOSITORY: FieldSpec("repository"),
    names.SERVICE_OWNER: FieldSpec("service_owner", FieldKind.IDENTITY),
    names.SLACK_CHANNEL: FieldSpec("slack_channel"),
}


def lookup_field(name: str) -> FieldSpec | None:
    """``FieldSpec`` for ``name`` (any case), or None if it is not recognised."""
    return ATTRIBUTE_FIELDS.get(name.upper())


@dataclass
class Resolution:
    """Outcome of attribute resolution."""

    attrs: CompAttrs = field(default_factory=CompAttrs)
    extra: dict[str, str] = field(default_factory=dict)

    def extra_value(self, name: str, default: str = "") -> str:
        return self.extra.get(name.upper(), default)


def resolve_attributes(
    raw_facts: Mapping[str, str],
    document: ConfigDocument | None = None,
    context: ResolutionContext | None = None,
) -> Resolution:
    """Merge VCS facts, the environment and the config document.

    Args:
        raw_facts: Fact map from ``collect_vcs_facts`` (or any ``{NAME: value}``).
        document: Decoded ``component.toml``; None or empty means facts and
            environment only.
        context: Substitution environment. Facts are seeded into it.
            Defaults to a snapshot of the process environment.

    Returns:
        ``Resolution`` with the attribute record and extra attributes.
    """
    if context is None:
        context = ResolutionContext.from_process()
    document = document or {}
    resolution = Resolution()

    for key, value in raw_facts.items():
        name = key.upper()
        context.seed(name, value)
        spec = ATTRIBUTE_FIELDS.get(name)
        if spec is not None:
            spec.apply(resolution.attrs, value)

    lookup = build_lookup(document, context)
    for key, value in iter_flat(document):
        _apply_config_value(resolution, key, substitute(value, lookup))
    for key, value in iter_grouped(document):
        _apply_config_value(resolution, key, substitute(value, lookup))

    logger.debug(
        "attributes_resolved",
        facts=len(raw_facts),
        config_keys=len(document),
        extra=sorted(resolution.extra),
    )
    return resolution


def _apply_config_value(resolution: Resolution, key: str, value: str) -> None:
    name = key.upper()
    spec = ATTRIBUTE_FIELDS.get(name)
    if spec is None:
        resolution.extra[name] = value
    else:
        spec.apply(resolution.attrs, value)


def load_and_resolve(
    raw_facts: Mapping[str, str],
    *,
    workdir: Path | None = None,
    filename: str = CONFIG_FILENAME,
    context: ResolutionContext | None = None,
) -> Resolution:
    """Read the config file from ``workdir`` and resolve against ``raw_facts``."""
    document = load_config_document(workdir, filename)
    return resolve_attributes(raw_facts, document, context)
