"""
Registry data models.

Pydantic models for everything the collector builds and submits: the
resolved attribute record (``CompAttrs``), identities, the text bundles and
the component-version envelope. On the wire every field name is the Python
name with the underscores removed (``git_branch_parent`` →
``gitbranchparent``) and unset optional values are omitted.

Identity derivation::

    make_name("acme.platform.payments")  →  ("payments", Domain(name="acme.platform"))
    make_name("payments")                →  ("payments", Domain(name=""))

Tags:
    models, pydantic, registry, component-version, ortelius-cli

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def _wire_name(field_name: str) -> str:
    return field_name.replace("_", "")


class RegistryModel(BaseModel):
    """Base for models serialised to the registry."""

    model_config = ConfigDict(alias_generator=_wire_name, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict using wire names, unset values dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ── Identity ────────────────────────────────────────────────────────────


class Domain(RegistryModel):
    """Dotted domain path a component or user belongs to."""

    name: str = ""


class User(RegistryModel):
    name: str = ""
    domain: Domain = Field(default_factory=Domain)


def make_name(dotted: str) -> tuple[str, Domain]:
    """Split ``dotted`` into a name and the domain holding it.

    With more than one ``.``-separated segment the last segment is the name
    and the remainder is the domain; otherwise the domain is empty.
    """
    domain = Domain()
    parts = dotted.split(".")
    if len(parts) > 1:
        domain.name = ".".join(parts[:-1])
        return parts[-1], domain
    return dotted, domain


def make_user(dotted: str) -> User:
    name, domain = make_name(dotted)
    return User(name=name, domain=domain)


# ── Attribute record ────────────────────────────────────────────────────


class CompAttrs(RegistryModel):
    """Resolved attributes of one component build.

    Every field is either set from a recognised attribute name or left at
    its zero value (``""``, ``None`` for dates, ``False`` for the flag).
    """

    basename: str = ""
    build_date: datetime | None = None
    build_id: str = ""
    build_num: str = ""
    build_url: str = ""
    chart: str = ""
    chart_namespace: str = ""
    chart_repo: str = ""
    chart_repo_url: str = ""
    chart_version: str = ""
    discord_channel: str = ""
    docker_repo: str = ""
    docker_sha: str = ""
    docker_tag: str = ""
    git_branch: str = ""
    git_branch_create_commit: str = ""
    git_branch_create_timestamp: datetime | None = None
    git_branch_parent: str = ""
    git_commit: str = ""
    git_commit_authors: str = ""
    git_commit_timestamp: datetime | None = None
    git_committers_cnt: str = ""
    git_contrib_percentage: str = ""
    git_lines_added: str = ""
    git_lines_deleted: str = ""
    git_lines_total: str = ""
    git_org: str = ""
    git_prev_comp_commit: str = ""
    git_repo: str = ""
    git_repo_project: str = ""
    git_signed_off_by: str = ""
    git_tag: str = ""
    git_total_committers_cnt: str = ""
    git_url: str = ""
    git_verify_commit: bool = False
    hipchat_channel: str = ""
    pagerduty_business_url: str = ""
    pagerduty_url: str = ""
    repository: str = ""
    service_owner: User = Field(default_factory=User)
    slack_channel: str = ""


# ── Evidence documents ──────────────────────────────────────────────────


class License(RegistryModel):
    key: str = Field(default="", alias="_key")
    content: list[str] = Field(default_factory=list)


class Readme(RegistryModel):
    key: str = Field(default="", alias="_key")
    content: list[str] = Field(default_factory=list)


class Swagger(RegistryModel):
    key: str = Field(default="", alias="_key")
    content: Any = Field(default_factory=dict)


class SBOM(RegistryModel):
    key: str = Field(default="", alias="_key")
    content: Any = Field(default_factory=dict)


class Provenance(RegistryModel):
    key: str = Field(default="", alias="_key")
    content: Any = Field(default_factory=dict)


class ResponseKey(RegistryModel):
    """Registry response body; only the assigned key is used."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    key: str = Field(default="", alias="_key")


class ComponentVersionDetails(RegistryModel):
    """The component-version record submitted to ``/msapi/compver``."""

    key: str = Field(default="", alias="_key")
    obj_type: str = "ComponentVersionDetails"
    name: str = ""
    domain: Domain = Field(default_factory=Domain)
    variant: str = ""
    version: str = ""
    comp_type: str = "docker"
    created: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    creator: User = Field(default_factory=User)
    owner: User = Field(default_factory=User)
    attrs: CompAttrs = Field(default_factory=CompAttrs)
    license: License = Field(default_factory=License)
    readme: Readme = Field(default_factory=Readme)
    swagger: Swagger = Field(default_factory=Swagger)
    sbom_key: str = ""
    provenance_key: str = ""


__all__ = [
    "CompAttrs",
    "ComponentVersionDetails",
    "Domain",
    "License",
    "Provenance",
    "Readme",
    "RegistryModel",
    "ResponseKey",
    "SBOM",
    "Swagger",
    "User",
    "make_name",
    "make_user",
]
