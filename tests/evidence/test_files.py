"""Tests for ortelius_cli.evidence.files."""

from __future__ import annotations

import pytest

from ortelius_cli.core.errors import ParseError
from ortelius_cli.evidence.files import FileKind, decode_api_spec, find_existing_file, gather_api_spec, gather_file


class TestGatherFile:
    def test_missing_file_gives_empty_content(self, tmp_path):
        assert gather_file(FileKind.LICENSE, tmp_path) == []

    def test_license_lines(self, tmp_path):
        (tmp_path / "LICENSE").write_text("MIT License\n\nCopyright")
        assert gather_file(FileKind.LICENSE, tmp_path) == ["MIT License", "", "Copyright"]

    def test_first_candidate_wins(self, tmp_path):
        (tmp_path / "README.md").write_text("markdown")
        (tmp_path / "readme").write_text("plain")
        assert gather_file(FileKind.README, tmp_path) == ["markdown"]

    def test_lowercase_candidate(self, tmp_path):
        (tmp_path / "license.md").write_text("Apache-2.0")
        assert gather_file(FileKind.LICENSE, tmp_path) == ["Apache-2.0"]

    def test_directories_are_ignored(self, tmp_path):
        (tmp_path / "README").mkdir()
        assert find_existing_file(("README",), tmp_path) is None


class TestApiSpec:
    def test_absent_gives_empty_object(self, tmp_path):
        assert gather_api_spec(tmp_path) == {}

    def test_json_spec(self, tmp_path):
        (tmp_path / "openapi.json").write_text('{"openapi": "3.0.0", "paths": {}}')
        assert gather_api_spec(tmp_path) == {"openapi": "3.0.0", "paths": {}}

    def test_yaml_spec_is_converted(self, tmp_path):
        (tmp_path / "swagger.yaml").write_text("swagger: '2.0'\ninfo:\n  title: Payments\n  version: 1.0.0\n")
        assert gather_api_spec(tmp_path) == {
            "swagger": "2.0",
            "info": {"title": "Payments", "version": "1.0.0"},
        }

    def test_yaml_dates_become_strings(self, tmp_path):
        (tmp_path / "openapi.yml").write_text("released: 2026-02-26\n")
        assert gather_api_spec(tmp_path) == {"released": "2026-02-26"}

    def test_undecodable_spec_gives_empty_object(self, tmp_path):
        (tmp_path / "swagger.json").write_text("{not json")
        assert gather_api_spec(tmp_path) == {}

    def test_decode_raises_parse_error(self, tmp_path):
        path = tmp_path / "swagger.yaml"
        path.write_text("key: [unclosed")
        with pytest.raises(ParseError) as exc_info:
            decode_api_spec(path)
        assert exc_info.value.context.path == str(path)

    def test_empty_yaml_is_empty_object(self, tmp_path):
        path = tmp_path / "openapi.yaml"
        path.write_text("")
        assert decode_api_spec(path) == {}
