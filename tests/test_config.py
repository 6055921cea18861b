"""Tests for apiclientkit.config -- option precedence and creation-config loading."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from apiclientkit.config import load_creation_config, resolve_options
from apiclientkit.exceptions import ConfigError
from apiclientkit.models import FactoryOptions


class TestResolveOptions:
    """Precedence: explicit > environment > defaults."""

    def test_defaults(self) -> None:
        assert resolve_options() == FactoryOptions()

    def test_environment_overrides_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APICLIENTKIT_CONCURRENT_HOOKS", "0")
        monkeypatch.setenv("APICLIENTKIT_LOG_LEVEL", "debug")
        options = resolve_options()
        assert options.concurrent_hook_resolution is False
        assert options.log_level == "DEBUG"

    def test_explicit_overrides_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APICLIENTKIT_LOG_LEVEL", "DEBUG")
        assert resolve_options(log_level="error").log_level == "ERROR"

    def test_none_override_is_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APICLIENTKIT_LOG_LEVEL", "INFO")
        assert resolve_options(log_level=None).log_level == "INFO"

    def test_invalid_environment_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APICLIENTKIT_CONCURRENT_HOOKS", "sometimes")
        with pytest.raises(ConfigError):
            resolve_options()

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ConfigError, match="log level"):
            resolve_options(log_level="LOUD")

    def test_unknown_option(self) -> None:
        with pytest.raises(ConfigError, match="retries"):
            resolve_options(retries=3)


class TestLoadCreationConfig:
    """JSON/YAML creation config files."""

    def test_json_file(self, tmp_path: Path) -> None:
        path = tmp_path / "client.json"
        path.write_text(json.dumps({"base_url": "https://shop", "locale": "de"}))
        assert load_creation_config(str(path)) == {"base_url": "https://shop", "locale": "de"}

    def test_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "client.yaml"
        path.write_text("base_url: https://shop\nheaders:\n  X-Tenant: acme\n")
        assert load_creation_config(str(path)) == {
            "base_url": "https://shop",
            "headers": {"X-Tenant": "acme"},
        }

    def test_unknown_suffix_falls_back_to_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "client.conf"
        path.write_text("locale: de\n")
        assert load_creation_config(str(path)) == {"locale": "de"}

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "client.json"
        path.write_text("  \n")
        assert load_creation_config(str(path)) == {}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_creation_config(str(tmp_path / "absent.json"))

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "client.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_creation_config(str(path))

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "client.yml"
        path.write_text("a: [unclosed\n")
        with pytest.raises(ConfigError):
            load_creation_config(str(path))

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        path = tmp_path / "client.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError, match="list"):
            load_creation_config(str(path))

    def test_stdin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO('{"locale": "fr"}'))
        assert load_creation_config("-") == {"locale": "fr"}
