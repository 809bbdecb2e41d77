"""Runtime settings for the evidence collector.

``CollectorSettings`` holds every knob a run needs. Values come from
``ORTELIUS_*`` environment variables or a ``.env`` file; the CLI passes its
flags as init arguments, which take precedence over both.

Examples:
    >>> settings = CollectorSettings(url="https://registry", user="ci.bot", password="x")
    >>> settings.config_file
    'component.toml'

Tags:
    settings, configuration, pydantic, environment, ortelius-cli

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CollectorSettings(BaseSettings):
    """Settings for one collector run.

    Fields
    ──────
    url          : Registry base URL (``/msapi/...`` is appended)
    user         : Submitting user id, dotted ``domain.name`` form allowed
    password     : Submitting user password
    sbom         : Optional pre-built CycloneDX JSON file to submit
    config_file  : Component config file name looked up in ``workdir``
    workdir      : Checkout directory (git commands run here)
    log_level    : Structlog log level
    log_format   : ``auto``, ``json`` or ``console``
    http_timeout : Seconds before a registry call gives up (None = never)
    """

    model_config = SettingsConfigDict(
        env_prefix="ORTELIUS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Registry ─────────────────────────────────────────────────
    url: str = ""
    user: str = ""
    password: SecretStr = SecretStr("")
    sbom: Path | None = None

    # ── Checkout ─────────────────────────────────────────────────
    config_file: str = "component.toml"
    workdir: Path = Field(default_factory=Path.cwd)

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    log_format: str = "auto"

    # ── HTTP ─────────────────────────────────────────────────────
    http_timeout: float | None = None

    @field_validator("url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("auto", "json", "console"):
            raise ValueError(f"log_format must be auto, json or console, got {value!r}")
        return value

    def json_logs(self) -> bool | None:
        """Map ``log_format`` to the ``json_format`` flag of ``configure_logging``."""
        if self.log_format == "auto":
            return None
        return self.log_format == "json"
