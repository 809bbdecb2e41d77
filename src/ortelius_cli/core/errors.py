"""
Structured error types for the evidence collector.

Every failure the collector can run into is typed, carries a category for
log routing, and keeps the underlying exception as its cause. None of these
errors is fatal for a run on its own: callers log ``to_dict()`` and degrade
to a documented default, except for the final component-version submission.

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                     OrteliusError                         │
        │           (category, context, cause)                      │
        ├──────────────────────────────────────────────────────────┤
        │  ConfigError        SourceError        RegistryError      │
        │  (CONFIG)           (SOURCE)           (REGISTRY)         │
        │       │                  │                                │
        │  ConfigDecodeError  ParseError         SbomError          │
        │                     (PARSE)            (SBOM)             │
        └──────────────────────────────────────────────────────────┘

Error taxonomy:
    - **Missing input** (config file, license/readme/API spec, image
      reference): never raised, callers fall back to defaults
    - **Unparseable value** (dates, booleans): zero value substituted
    - **External tool failure** (git, docker, syft): ``SbomError`` or an
      empty fact, logged
    - **Registry failure**: ``RegistryError``, logged with URL and status

Examples:
    >>> error = RegistryError("POST failed").with_context(url="http://x/msapi/sbom", http_status=500)
    >>> error.to_dict()["context"]["http_status"]
    500

Tags:
    error-handling, exception-hierarchy, error-context, ortelius-cli

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories used to classify collector failures in logs."""

    CONFIG = "CONFIG"             # component.toml missing fields, bad TOML
    SOURCE = "SOURCE"             # VCS checkout, conventional files
    PARSE = "PARSE"               # dates, JSON/YAML payloads
    REGISTRY = "REGISTRY"         # HTTP submission to the registry
    SBOM = "SBOM"                 # image SBOM/provenance extraction
    INTERNAL = "INTERNAL"         # bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error for logging.

    Attributes:
        path: File the error relates to (config file, SBOM file)
        command: External command line that failed
        url: Registry URL that was being called
        http_status: HTTP status code if a response was received
        image_ref: Container image reference being inspected
        metadata: Additional key-value pairs
    """

    path: str | None = None
    command: str | None = None
    url: str | None = None
    http_status: int | None = None
    image_ref: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["path", "command", "url", "http_status", "image_ref"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class OrteliusError(Exception):
    """
    Base exception for all collector errors.

    Subclasses set ``default_category``. The original exception, when there
    is one, is kept both as ``cause`` and as ``__cause__`` so tracebacks stay
    chained.

    Examples:
        >>> try:
        ...     raise ConnectionError("refused")
        ... except ConnectionError as e:
        ...     error = OrteliusError("Registry unreachable", cause=e)
        >>> error.cause
        ConnectionError('refused')
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> OrteliusError:
        """
        Add context to this error (fluent API).

        Usage:
            raise RegistryError("POST failed").with_context(
                url="https://registry/msapi/compver",
                http_status=502,
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(OrteliusError):
    """Configuration error (component.toml, settings)."""

    default_category = ErrorCategory.CONFIG


class ConfigDecodeError(ConfigError):
    """The config file exists but is not valid TOML."""

    def __init__(self, path: str, cause: Exception | None = None):
        self.path = path
        super().__init__(
            f"Could not decode config file: {path}",
            context=ErrorContext(path=path),
            cause=cause,
        )


# =============================================================================
# SOURCE ERRORS
# =============================================================================


class SourceError(OrteliusError):
    """Error reading an input the collector depends on."""

    default_category = ErrorCategory.SOURCE


class ParseError(SourceError):
    """Content could not be parsed (JSON, YAML, dates)."""

    default_category = ErrorCategory.PARSE


# =============================================================================
# EXTERNAL SERVICES
# =============================================================================


class RegistryError(OrteliusError):
    """A registry submission failed (transport error or non-2xx response)."""

    default_category = ErrorCategory.REGISTRY


class SbomError(OrteliusError):
    """SBOM or provenance extraction from a container image failed."""

    default_category = ErrorCategory.SBOM


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "OrteliusError",
    "ConfigError",
    "ConfigDecodeError",
    "SourceError",
    "ParseError",
    "RegistryError",
    "SbomError",
]
