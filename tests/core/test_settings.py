"""Tests for ortelius_cli.core.settings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from ortelius_cli.core.settings import CollectorSettings


class TestCollectorSettings:
    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        settings = CollectorSettings()
        assert settings.config_file == "component.toml"
        assert settings.log_level == "INFO"
        assert settings.sbom is None
        assert settings.http_timeout is None

    def test_reads_prefixed_environment(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("ORTELIUS_URL", "https://registry.example.com/")
        monkeypatch.setenv("ORTELIUS_USER", "acme.ci-bot")
        monkeypatch.setenv("ORTELIUS_PASSWORD", "s3cret")
        monkeypatch.setenv("ORTELIUS_SBOM", "cyclonedx.json")

        settings = CollectorSettings()
        assert settings.url == "https://registry.example.com"
        assert settings.user == "acme.ci-bot"
        assert settings.password.get_secret_value() == "s3cret"
        assert settings.sbom == Path("cyclonedx.json")

    def test_init_arguments_win_over_environment(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("ORTELIUS_URL", "https://from-env")
        assert CollectorSettings(url="https://from-flag").url == "https://from-flag"

    def test_password_is_not_rendered(self, tmp_path):
        settings = CollectorSettings(password="s3cret", workdir=tmp_path)
        assert "s3cret" not in repr(settings)

    @pytest.mark.parametrize(
        ("log_format", "expected"),
        [("auto", None), ("json", True), ("CONSOLE", False)],
    )
    def test_json_logs(self, log_format, expected, tmp_path):
        assert CollectorSettings(log_format=log_format, workdir=tmp_path).json_logs() is expected

    def test_rejects_unknown_log_format(self, tmp_path):
        with pytest.raises(ValidationError):
            CollectorSettings(log_format="xml", workdir=tmp_path)
