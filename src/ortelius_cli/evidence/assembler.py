"""
Evidence assembly and submission.

One ``EvidenceAssembler.run()`` is one collector invocation: gather what
the checkout and the built image can tell about this component version and
submit it to the registry.

Pipeline:
    ::

        ┌──────────────┐   ┌──────────────┐   ┌──────────────────────┐
        │ license,     │   │ git facts    │   │ component.toml       │
        │ readme, API  │   │ (collect)    │──▶│ + environment        │
        │ spec (files) │   └──────────────┘   │ (resolve)            │
        └──────┬───────┘                      └──────────┬───────────┘
               │                                         │ CompAttrs + extra
               ▼                                         ▼
        ┌────────────────────────────────────────────────────────────┐
        │ ComponentVersionDetails (NAME → name/domain, VARIANT,      │
        │ VERSION, creator/owner = submitting user)                  │
        └──────┬─────────────────────────────────────────────────────┘
               │
               ├── --sbom file ─────────────▶ POST /msapi/sbom        (best effort)
               ├── image SBOM (buildx+syft) ▶ POST /msapi/sbom        (best effort)
               ├── image provenance ────────▶ POST /msapi/provenance  (best effort)
               └── details + keys ──────────▶ POST /msapi/compver     (must succeed)

An image SBOM, when one is submitted, replaces the key of the ``--sbom``
file on the component version.

Tags:
    evidence, submission, sbom, provenance, component-version, ortelius-cli

Doc-Types:
    - API Reference
    - Technical Design
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from ortelius_cli.collect.git_facts import collect_vcs_facts
from ortelius_cli.collect.runner import CommandRunner
from ortelius_cli.core import attributes as names
from ortelius_cli.core.errors import ParseError, RegistryError
from ortelius_cli.core.logging import bind_context, clear_context, get_logger
from ortelius_cli.core.models import (
    SBOM,
    ComponentVersionDetails,
    License,
    Provenance,
    Readme,
    Swagger,
    make_name,
    make_user,
)
from ortelius_cli.core.settings import CollectorSettings
from ortelius_cli.core.timestamps import utc_now
from ortelius_cli.resolve.engine import Resolution, load_and_resolve
from ortelius_cli.resolve.variables import ResolutionContext

from .client import RegistryClient
from .files import FileKind, gather_api_spec, gather_file
from .image import SbomExtractor, image_reference

logger = get_logger(__name__)


@dataclass
class SubmissionReport:
    """What one run submitted.

    ``keys`` lists every registry key received, in submission order.
    ``success`` is False only when the component version was not accepted.
    """

    keys: list[str] = field(default_factory=list)
    sbom_key: str = ""
    provenance_key: str = ""
    compver_key: str = ""
    success: bool = False
    error: RegistryError | None = None


class EvidenceAssembler:
    """Collect, resolve and submit the evidence for one component version.

    Collaborators default to real implementations built from ``settings``;
    tests pass scripted ones.
    """

    def __init__(
        self,
        settings: CollectorSettings,
        *,
        runner: CommandRunner | None = None,
        client: RegistryClient | None = None,
        extractor: SbomExtractor | None = None,
        context: ResolutionContext | None = None,
        now: datetime | None = None,
    ):
        self.settings = settings
        self.runner = runner or CommandRunner(cwd=settings.workdir)
        self.client = client
        self.extractor = extractor or SbomExtractor(self.runner)
        self.context = context or ResolutionContext.from_process()
        self.now = now

    def run(self) -> SubmissionReport:
        """Execute the full pipeline and return what was submitted.

        Log context bound during the run is cleared when it ends.
        """
        try:
            if self.client is not None:
                return self._run(self.client)
            with RegistryClient(
                self.settings.url,
                self.settings.user,
                self.settings.password.get_secret_value(),
                timeout=self.settings.http_timeout,
            ) as client:
                return self._run(client)
        finally:
            clear_context()

    def build_details(self, resolution: Resolution) -> ComponentVersionDetails:
        """Component-version envelope for ``resolution`` (no keys yet)."""
        workdir = self.settings.workdir
        user = make_user(self.settings.user)
        name, domain = make_name(resolution.extra_value(names.NAME))
        return ComponentVersionDetails(
            name=name,
            domain=domain,
            variant=resolution.extra_value(names.VARIANT),
            version=resolution.extra_value(names.VERSION),
            created=self.now or utc_now(),
            creator=user,
            owner=user,
            attrs=resolution.attrs,
            license=License(content=gather_file(FileKind.LICENSE, workdir)),
            readme=Readme(content=gather_file(FileKind.README, workdir)),
            swagger=Swagger(content=gather_api_spec(workdir)),
        )

    def resolve(self) -> Resolution:
        """Collect VCS facts and resolve them against the config file."""
        facts = collect_vcs_facts(
            self.runner,
            workdir=self.settings.workdir,
            environ=self.context.environ,
            now=self.now,
        )
        return load_and_resolve(
            facts,
            workdir=self.settings.workdir,
            filename=self.settings.config_file,
            context=self.context,
        )

    def _run(self, client: RegistryClient) -> SubmissionReport:
        report = SubmissionReport()
        resolution = self.resolve()
        details = self.build_details(resolution)
        bind_context(component=details.name, version=details.version)

        sbom_file = self._read_sbom_file()
        if sbom_file is not None:
            key = self._submit(report, client.post_sbom, SBOM(content=sbom_file), "sbom_file")
            if key:
                report.sbom_key = key

        ref = image_reference(resolution.attrs)
        if ref:
            bind_context(image_ref=ref)
            image_sbom = self.extractor.sbom_from_image(ref)
            if image_sbom is not None:
                key = self._submit(report, client.post_sbom, SBOM(content=image_sbom), "image_sbom")
                if key:
                    report.sbom_key = key

            provenance = self.extractor.provenance_from_image(ref)
            if provenance is not None:
                key = self._submit(
                    report, client.post_provenance, Provenance(content=provenance), "provenance"
                )
                if key:
                    report.provenance_key = key
        else:
            logger.info("image_reference_missing")

        details.sbom_key = report.sbom_key
        details.provenance_key = report.provenance_key

        try:
            report.compver_key = client.post_compver(details)
        except RegistryError as exc:
            logger.error("compver_submission_failed", **exc.to_dict())
            report.error = exc
            return report

        if report.compver_key:
            report.keys.append(report.compver_key)
        report.success = True
        logger.info(
            "compver_submitted",
            key=report.compver_key,
            sbom_key=report.sbom_key,
            provenance_key=report.provenance_key,
        )
        return report

    def _submit(self, report: SubmissionReport, post: Any, document: Any, what: str) -> str:
        try:
            key = post(document)
        except RegistryError as exc:
            logger.warning("evidence_submission_failed", what=what, **exc.to_dict())
            return ""
        if key:
            report.keys.append(key)
        return key

    def _read_sbom_file(self) -> Any | None:
        path = self.settings.sbom
        if path is None:
            return None
        if not path.is_absolute():
            path = self.settings.workdir / path
        if not path.is_file():
            logger.warning("sbom_file_missing", path=str(path))
            return None
        try:
            return _load_json(path)
        except ParseError as exc:
            logger.warning("sbom_file_undecodable", **exc.to_dict())
            return None


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ParseError(f"Could not decode SBOM file {path.name}", cause=exc).with_context(
            path=str(path)
        ) from exc
