"""Tests for ortelius_cli.resolve.config_file — component.toml decoding."""

from __future__ import annotations

import pytest

from ortelius_cli.core.errors import ConfigDecodeError
from ortelius_cli.resolve.config_file import (
    FlatValue,
    GroupValue,
    iter_flat,
    iter_grouped,
    load_config_document,
    parse_config_text,
)

SAMPLE = """
NAME = "acme.platform.payments"
VERSION = "1.4.${BUILDNUM}"

[Attributes]
DockerRepo = "ghcr.io/acme/payments"
ServiceOwner = "acme.jane"
"""


class TestParseConfigText:
    def test_flat_and_grouped_values(self):
        document = parse_config_text(SAMPLE)
        assert document["NAME"] == FlatValue("acme.platform.payments")
        assert document["VERSION"] == FlatValue("1.4.${BUILDNUM}")
        assert document["Attributes"] == GroupValue(
            {"DockerRepo": "ghcr.io/acme/payments", "ServiceOwner": "acme.jane"}
        )

    def test_document_order_is_preserved(self):
        assert list(parse_config_text(SAMPLE)) == ["NAME", "VERSION", "Attributes"]

    def test_non_string_scalars_become_text(self):
        document = parse_config_text(
            'BUILDNUM = 42\nRATIO = 0.5\nSIGNED = true\nBLDDATE = 2026-02-26T10:00:00Z\n'
        )
        assert document["BUILDNUM"] == FlatValue("42")
        assert document["RATIO"] == FlatValue("0.5")
        assert document["SIGNED"] == FlatValue("true")
        assert document["BLDDATE"].value.startswith("2026-02-26T10:00:00")

    def test_arrays_and_deep_tables_are_skipped(self):
        document = parse_config_text(
            'TAGS = ["a", "b"]\n[Attributes]\nNAME = "svc"\n[Attributes.Nested]\nX = "y"\n'
        )
        assert "TAGS" not in document
        assert document["Attributes"] == GroupValue({"NAME": "svc"})

    def test_invalid_toml_raises(self):
        with pytest.raises(ConfigDecodeError) as exc_info:
            parse_config_text("NAME = ", source="component.toml")
        assert exc_info.value.path == "component.toml"


class TestIterators:
    def test_flat_then_grouped(self):
        document = parse_config_text('A = "1"\n[G1]\nB = "2"\n[G2]\nC = "3"\n')
        assert list(iter_flat(document)) == [("A", "1")]
        assert list(iter_grouped(document)) == [("B", "2"), ("C", "3")]


class TestLoadConfigDocument:
    def test_missing_file_gives_empty_document(self, tmp_path):
        assert load_config_document(tmp_path) == {}

    def test_undecodable_file_gives_empty_document(self, tmp_path):
        (tmp_path / "component.toml").write_text("this is = = not toml")
        assert load_config_document(tmp_path) == {}

    def test_reads_file(self, tmp_path):
        (tmp_path / "component.toml").write_text(SAMPLE)
        document = load_config_document(tmp_path)
        assert document["NAME"] == FlatValue("acme.platform.payments")

    def test_custom_filename(self, tmp_path):
        (tmp_path / "ortelius.toml").write_text('NAME = "svc"\n')
        assert load_config_document(tmp_path, "ortelius.toml") == {"NAME": FlatValue("svc")}

    def test_defaults_to_current_directory(self, tmp_path, monkeypatch):
        (tmp_path / "component.toml").write_text('NAME = "svc"\n')
        monkeypatch.chdir(tmp_path)
        assert load_config_document() == {"NAME": FlatValue("svc")}
