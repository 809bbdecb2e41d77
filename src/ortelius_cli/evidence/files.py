"""Conventional text files submitted with a component version.

License and readme are sent as their lines. The API spec (swagger/OpenAPI)
is sent as a JSON object, so YAML specs are converted with PyYAML first.
A missing file yields empty content.
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from ortelius_cli.core.errors import ParseError
from ortelius_cli.core.logging import get_logger

logger = get_logger(__name__)


class FileKind(str, Enum):
    LICENSE = "license"
    SWAGGER = "swagger"
    README = "readme"


CANDIDATES: dict[FileKind, tuple[str, ...]] = {
    FileKind.LICENSE: ("LICENSE", "LICENSE.md", "license", "license.md"),
    FileKind.SWAGGER: (
        "swagger.yaml",
        "swagger.yml",
        "swagger.json",
        "openapi.json",
        "openapi.yaml",
        "openapi.yml",
    ),
    FileKind.README: ("README", "README.md", "readme", "readme.md"),
}


def find_existing_file(filenames: tuple[str, ...], workdir: Path | None = None) -> Path | None:
    """First of ``filenames`` that exists in ``workdir``."""
    root = workdir or Path.cwd()
    for filename in filenames:
        path = root / filename
        if path.is_file():
            return path
    return None


def gather_file(kind: FileKind, workdir: Path | None = None) -> list[str]:
    """Lines of the conventional file for ``kind``; empty if there is none."""
    path = find_existing_file(CANDIDATES[kind], workdir)
    if path is None:
        logger.debug("evidence_file_missing", kind=kind.value)
        return []
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.warning("evidence_file_unreadable", path=str(path), error=str(exc))
        return []
    return text.split("\n")


def gather_api_spec(workdir: Path | None = None) -> Any:
    """The swagger/OpenAPI document as a JSON-compatible object ({} if absent)."""
    path = find_existing_file(CANDIDATES[FileKind.SWAGGER], workdir)
    if path is None:
        return {}
    try:
        return decode_api_spec(path)
    except ParseError as exc:
        logger.warning("api_spec_undecodable", **exc.to_dict())
        return {}


def decode_api_spec(path: Path) -> Any:
    """Parse a JSON or YAML API spec.

    Raises:
        ParseError: If the file cannot be read or decoded.
    """
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ParseError(f"Could not decode API spec {path.name}", cause=exc).with_context(
            path=str(path)
        ) from exc
    # YAML dates and the like are not JSON types
    return json.loads(json.dumps(data, default=str)) if data is not None else {}
