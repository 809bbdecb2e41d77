"""Attribute resolution: config file, ``${NAME}`` substitution and precedence."""

from .config_file import (
    CONFIG_FILENAME,
    ConfigDocument,
    FlatValue,
    GroupValue,
    load_config_document,
    parse_config_text,
)
from .engine import ATTRIBUTE_FIELDS, Resolution, load_and_resolve, lookup_field, resolve_attributes
from .variables import ResolutionContext, resolve_vars

__all__ = [
    "ATTRIBUTE_FIELDS",
    "CONFIG_FILENAME",
    "ConfigDocument",
    "FlatValue",
    "GroupValue",
    "Resolution",
    "ResolutionContext",
    "load_and_resolve",
    "load_config_document",
    "lookup_field",
    "parse_config_text",
    "resolve_attributes",
    "resolve_vars",
]
