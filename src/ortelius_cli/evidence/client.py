"""Registry HTTP client.

Stability: stable
Dependencies: httpx
Tags: registry, http, httpx, submission

Three endpoints, all ``POST`` with a JSON body and a JSON reply holding the
key the registry assigned::

    {URL}/msapi/sbom        SBOM document        → {"_key": "..."}
    {URL}/msapi/provenance  provenance document  → {"_key": "..."}
    {URL}/msapi/compver     component version    → {"_key": "..."}

Requests authenticate with HTTP basic auth using the submitting user id and
password. Any transport error, non-2xx status or non-JSON reply raises
``RegistryError`` with the URL and status attached.

Usage::

    with RegistryClient("https://registry.example.com", "ci.bot", "secret") as client:
        key = client.post_compver(details)
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from ortelius_cli.core.errors import RegistryError
from ortelius_cli.core.logging import get_logger
from ortelius_cli.core.models import SBOM, ComponentVersionDetails, Provenance, RegistryModel, ResponseKey

logger = get_logger(__name__)

SBOM_PATH = "/msapi/sbom"
PROVENANCE_PATH = "/msapi/provenance"
COMPVER_PATH = "/msapi/compver"


class RegistryClient:
    """Submit evidence documents to the registry.

    Args:
        url: Registry base URL, without a trailing ``/``.
        user: User id for basic auth.
        password: Password for basic auth.
        timeout: Seconds per request; None waits forever.
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``).
    """

    def __init__(
        self,
        url: str,
        user: str = "",
        password: str = "",
        *,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.url = url.rstrip("/")
        auth = httpx.BasicAuth(user, password) if user else None
        self._client = httpx.Client(
            auth=auth,
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> RegistryClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def post_sbom(self, sbom: SBOM) -> str:
        """Submit an SBOM and return its key."""
        return self._post(SBOM_PATH, sbom)

    def post_provenance(self, provenance: Provenance) -> str:
        """Submit a provenance attestation and return its key."""
        return self._post(PROVENANCE_PATH, provenance)

    def post_compver(self, details: ComponentVersionDetails) -> str:
        """Submit the component version and return its key."""
        return self._post(COMPVER_PATH, details)

    def _post(self, path: str, document: RegistryModel) -> str:
        endpoint = f"{self.url}{path}"
        try:
            response = self._client.post(endpoint, json=document.to_payload())
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise RegistryError(
                f"Registry rejected POST {path}", cause=exc
            ).with_context(url=endpoint, http_status=exc.response.status_code) from exc
        except httpx.HTTPError as exc:
            raise RegistryError(f"POST {path} failed", cause=exc).with_context(url=endpoint) from exc

        try:
            reply = ResponseKey.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise RegistryError(
                f"Registry reply to POST {path} is not a JSON object", cause=exc
            ).with_context(url=endpoint, http_status=response.status_code) from exc

        logger.info("registry_submitted", url=endpoint, status=response.status_code, key=reply.key)
        return reply.key
