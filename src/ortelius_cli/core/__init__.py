"""Shared primitives: errors, logging, settings, models and timestamps."""

from .errors import (
    ConfigDecodeError,
    ConfigError,
    ErrorCategory,
    ErrorContext,
    OrteliusError,
    ParseError,
    RegistryError,
    SbomError,
    SourceError,
)
from .logging import bind_context, clear_context, configure_logging, get_logger
from .settings import CollectorSettings

__all__ = [
    "CollectorSettings",
    "ConfigDecodeError",
    "ConfigError",
    "ErrorCategory",
    "ErrorContext",
    "OrteliusError",
    "ParseError",
    "RegistryError",
    "SbomError",
    "SourceError",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
]
