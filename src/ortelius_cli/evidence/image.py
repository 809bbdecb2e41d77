"""SBOM and provenance extraction from a container image.

Stability: stable
Dependencies: docker buildx, syft (external executables)
Tags: sbom, provenance, docker, cyclonedx

BuildKit attaches an SPDX SBOM and a SLSA provenance attestation to images
it builds. ``docker buildx imagetools inspect`` reads them back from the
registry; ``syft convert`` turns the SPDX document into CycloneDX JSON,
which is the one SBOM format the registry stores.

Both tools run through ``CommandRunner``. Any failure is logged and reported
as ``None``; the caller simply skips that submission.
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any

from ortelius_cli.collect.runner import CommandRunner
from ortelius_cli.core.errors import SbomError
from ortelius_cli.core.logging import get_logger
from ortelius_cli.core.models import CompAttrs

logger = get_logger(__name__)

SBOM_TEMPLATE = "{{ json .SBOM.SPDX }}"
PROVENANCE_TEMPLATE = "{{ json .Provenance }}"


def image_reference(attrs: CompAttrs) -> str:
    """``repo@sha256:<sha>`` if a digest is known, else ``repo:<tag>``, else ``""``."""
    if not attrs.docker_repo:
        return ""
    if attrs.docker_sha:
        digest = attrs.docker_sha.removeprefix("sha256:")
        return f"{attrs.docker_repo}@sha256:{digest}"
    if attrs.docker_tag:
        return f"{attrs.docker_repo}:{attrs.docker_tag}"
    return ""


class SbomExtractor:
    """Read attestations attached to an image."""

    def __init__(self, runner: CommandRunner, *, docker: str = "docker", syft: str = "syft"):
        self.runner = runner
        self.docker = docker
        self.syft = syft

    def sbom_from_image(self, image_ref: str) -> Any | None:
        """CycloneDX JSON document for ``image_ref``, or None."""
        try:
            spdx = self._inspect(image_ref, SBOM_TEMPLATE)
            cyclonedx = self._convert_to_cyclonedx(spdx)
        except SbomError as exc:
            logger.warning("image_sbom_unavailable", **exc.with_context(image_ref=image_ref).to_dict())
            return None
        logger.info("image_sbom_converted", image_ref=image_ref, format="cyclonedx-json")
        return cyclonedx

    def provenance_from_image(self, image_ref: str) -> Any | None:
        """Provenance attestation for ``image_ref``, or None."""
        try:
            return self._inspect(image_ref, PROVENANCE_TEMPLATE)
        except SbomError as exc:
            logger.warning("image_provenance_unavailable", **exc.with_context(image_ref=image_ref).to_dict())
            return None

    def _inspect(self, image_ref: str, template: str) -> Any:
        command = [self.docker, "buildx", "imagetools", "inspect", image_ref, "--format", template]
        output = self.runner.run(command, merge_stderr=False)
        return _decode(output, what=template, command=" ".join(command))

    def _convert_to_cyclonedx(self, spdx: Any) -> Any:
        with tempfile.TemporaryDirectory(prefix="ortelius-sbom-") as tmp:
            source = Path(tmp) / "image.spdx.json"
            source.write_text(json.dumps(spdx), encoding="utf-8")
            command = [self.syft, "convert", str(source), "-o", "cyclonedx-json"]
            output = self.runner.run(command, merge_stderr=False)
        return _decode(output, what="cyclonedx-json", command=" ".join(command))


def _decode(output: str, *, what: str, command: str) -> Any:
    if not output.strip():
        raise SbomError(f"No output for {what}").with_context(command=command)
    try:
        data = json.loads(output)
    except json.JSONDecodeError as exc:
        raise SbomError(f"Output for {what} is not JSON", cause=exc).with_context(command=command) from exc
    if data in (None, {}, []):
        raise SbomError(f"Image has no {what} attestation").with_context(command=command)
    return data
