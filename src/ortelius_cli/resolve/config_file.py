"""
Component config file loading.

``component.toml`` sits at the root of the checkout and declares component
attributes either at the top level or inside one table, conventionally
``[Attributes]``::

    NAME = "acme.platform.payments"
    VERSION = "1.4.${BUILDNUM}"

    [Attributes]
    DockerRepo = "ghcr.io/acme/payments"
    ServiceOwner = "acme.jane"

Each top-level key decodes to a tagged value: ``FlatValue`` for a scalar,
``GroupValue`` for a table of scalars. Non-string scalars are rendered as
text. Arrays and tables nested deeper than one level carry no attribute
meaning and are skipped.

A missing or undecodable file is not an error for a run: the loader logs it
and returns an empty document, so resolution falls back to VCS facts and
the environment.

Tags:
    configuration, toml, component-config, ortelius-cli

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

import tomllib
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

from ortelius_cli.core.errors import ConfigDecodeError
from ortelius_cli.core.logging import get_logger

logger = get_logger(__name__)

CONFIG_FILENAME = "component.toml"


@dataclass(frozen=True)
class FlatValue:
    """A top-level ``KEY = "value"`` entry."""

    value: str


@dataclass(frozen=True)
class GroupValue:
    """A ``[Table]`` of string entries."""

    values: dict[str, str] = field(default_factory=dict)


ConfigValue = FlatValue | GroupValue
ConfigDocument = dict[str, ConfigValue]


def load_config_document(
    workdir: Path | None = None,
    filename: str = CONFIG_FILENAME,
) -> ConfigDocument:
    """Read and decode ``filename`` from ``workdir``.

    Returns an empty document when the file is absent, unreadable or not
    valid TOML.
    """
    path = (workdir or Path.cwd()) / filename
    if not path.is_file():
        logger.info("config_file_missing", path=str(path))
        return {}

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("config_file_unreadable", path=str(path), error=str(exc))
        return {}

    try:
        document = parse_config_text(text, source=str(path))
    except ConfigDecodeError as exc:
        logger.warning("config_file_undecodable", **exc.to_dict())
        return {}

    logger.debug("config_file_loaded", path=str(path), keys=len(document))
    return document


def parse_config_text(text: str, *, source: str = "<string>") -> ConfigDocument:
    """Decode TOML text into a ``ConfigDocument``.

    Raises:
        ConfigDecodeError: If ``text`` is not valid TOML.
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigDecodeError(source, cause=exc) from exc
    return decode_document(data)


def decode_document(data: Mapping[str, Any]) -> ConfigDocument:
    """Convert decoded TOML data into tagged config values."""
    document: ConfigDocument = {}
    for key, value in data.items():
        if isinstance(value, Mapping):
            group: dict[str, str] = {}
            for sub_key, sub_value in value.items():
                text = _scalar_text(sub_value)
                if text is None:
                    logger.debug("config_value_skipped", key=f"{key}.{sub_key}")
                    continue
                group[sub_key] = text
            document[key] = GroupValue(group)
            continue

        text = _scalar_text(value)
        if text is None:
            logger.debug("config_value_skipped", key=key)
            continue
        document[key] = FlatValue(text)
    return document


def iter_flat(document: ConfigDocument) -> Iterator[tuple[str, str]]:
    """Top-level string entries in document order."""
    for key, value in document.items():
        if isinstance(value, FlatValue):
            yield key, value.value


def iter_grouped(document: ConfigDocument) -> Iterator[tuple[str, str]]:
    """Entries of every group, in document order."""
    for value in document.values():
        if isinstance(value, GroupValue):
            yield from value.values.items()


def _scalar_text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return str(value)
    if isinstance(value, datetime | date | time):
        return value.isoformat()
    return None
