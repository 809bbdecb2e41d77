"""Tests for ortelius_cli.core.models — identities and wire payloads."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from ortelius_cli.core.models import (
    SBOM,
    CompAttrs,
    ComponentVersionDetails,
    Domain,
    License,
    ResponseKey,
    User,
    make_name,
    make_user,
)


class TestMakeName:
    @pytest.mark.parametrize(
        ("dotted", "name", "domain"),
        [
            ("acme.platform.payments", "payments", "acme.platform"),
            ("acme.payments", "payments", "acme"),
            ("payments", "payments", ""),
            ("", "", ""),
        ],
    )
    def test_split(self, dotted, name, domain):
        result_name, result_domain = make_name(dotted)
        assert result_name == name
        assert result_domain == Domain(name=domain)

    def test_trailing_dot_gives_empty_name(self):
        name, domain = make_name("acme.")
        assert name == ""
        assert domain.name == "acme"

    def test_make_user(self):
        assert make_user("acme.jane") == User(name="jane", domain=Domain(name="acme"))


class TestPayload:
    def test_field_names_lose_underscores(self):
        payload = CompAttrs(git_branch_parent="main", docker_repo="ghcr.io/acme/app").to_payload()
        assert payload["gitbranchparent"] == "main"
        assert payload["dockerrepo"] == "ghcr.io/acme/app"
        assert "git_branch_parent" not in payload

    def test_unset_dates_are_omitted(self):
        payload = CompAttrs().to_payload()
        assert "builddate" not in payload
        assert "gitcommittimestamp" not in payload
        assert payload["gitverifycommit"] is False

    def test_dates_are_iso8601(self):
        attrs = CompAttrs(build_date=datetime(2026, 3, 1, 12, 30, tzinfo=UTC))
        assert attrs.to_payload()["builddate"] == "2026-03-01T12:30:00Z"

    def test_key_uses_underscore_alias(self):
        assert License(key="k1", content=["MIT"]).to_payload() == {"_key": "k1", "content": ["MIT"]}

    def test_sbom_content_is_passed_through(self):
        doc = {"bomFormat": "CycloneDX", "components": []}
        assert SBOM(content=doc).to_payload()["content"] == doc

    def test_component_version_envelope(self):
        user = make_user("acme.ci-bot")
        details = ComponentVersionDetails(
            name="payments",
            domain=Domain(name="acme"),
            version="1.4.42",
            creator=user,
            owner=user,
            sbom_key="s1",
            provenance_key="p1",
        )
        payload = details.to_payload()
        assert payload["objtype"] == "ComponentVersionDetails"
        assert payload["comptype"] == "docker"
        assert payload["domain"] == {"name": "acme"}
        assert payload["creator"] == {"name": "ci-bot", "domain": {"name": "acme"}}
        assert payload["sbomkey"] == "s1"
        assert payload["provenancekey"] == "p1"
        assert payload["created"].endswith("Z")


class TestResponseKey:
    def test_reads_underscore_key(self):
        assert ResponseKey.model_validate({"_key": "abc", "other": 1}).key == "abc"

    def test_missing_key_is_empty(self):
        assert ResponseKey.model_validate({}).key == ""
