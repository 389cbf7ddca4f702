"""Tests for configuration sources."""

import logging
from pathlib import Path
from textwrap import dedent

import pytest

from depreport.config import (
    DEFAULT_ENDPOINT,
    ConfigFile,
    EnvVars,
    collect_api_options,
    load_config_file,
    resolve_config_file,
)
from depreport.errors import ConfigFileError, MissingApiCredentials
from depreport.precedence import first_present, non_empty


class TestFirstPresent:
    """Tests for the first_present combinator."""

    def test_returns_first_non_none(self):
        assert first_present(None, "b", "c") == "b"

    def test_highest_precedence_wins(self):
        assert first_present("a", "b") == "a"

    def test_falsy_values_count_as_present(self):
        assert first_present(None, 0, 5) == 0
        assert first_present(None, "", "x") == ""

    def test_all_missing(self):
        assert first_present(None, None) is None
        assert first_present() is None


class TestNonEmpty:
    """Tests for non_empty."""

    def test_empty_string_is_absent(self):
        assert non_empty("") is None
        assert non_empty(None) is None
        assert non_empty("key") == "key"


class TestEnvVars:
    """Tests for EnvVars."""

    def test_from_environ(self):
        env = EnvVars.from_environ(
            {"DEPREPORT_API_KEY": "key", "DEPREPORT_ENDPOINT": "https://example.com"}
        )
        assert env.api_key == "key"
        assert env.endpoint == "https://example.com"

    def test_empty_values_are_unset(self):
        env = EnvVars.from_environ({"DEPREPORT_API_KEY": ""})
        assert env.api_key is None
        assert env.endpoint is None

    def test_defaults_to_os_environ(self, monkeypatch):
        monkeypatch.setenv("DEPREPORT_API_KEY", "from-os")
        monkeypatch.delenv("DEPREPORT_ENDPOINT", raising=False)
        assert EnvVars.from_environ().api_key == "from-os"


class TestLoadConfigFile:
    """Tests for config file parsing."""

    def test_full_config(self, tmp_path: Path):
        path = tmp_path / ".depreport.yml"
        path.write_text(
            dedent("""
            version: 1
            server: https://reports.example.com
            apiKey: file-key
            project:
              name: my-project
            revision:
              commit: 1a2b3c
              branch: develop
        """)
        )

        config = load_config_file(path)

        assert config.path == path
        assert config.version == 1
        assert config.server == "https://reports.example.com"
        assert config.api_key == "file-key"
        assert config.project_name == "my-project"
        assert config.revision == "1a2b3c"
        assert config.branch == "develop"

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / ".depreport.yml"
        path.write_text("")

        assert load_config_file(path) == ConfigFile(path=path)

    def test_quoted_commit_keeps_leading_zero(self, tmp_path: Path):
        path = tmp_path / ".depreport.yml"
        path.write_text("revision:\n  commit: '0123'\n")

        assert load_config_file(path).revision == "0123"

    @pytest.mark.parametrize("value", ["0123", "1234567", "1.5"])
    def test_unquoted_numeric_commit_rejected(self, tmp_path: Path, value):
        """Unquoted 0123 would be read as octal 83."""
        path = tmp_path / ".depreport.yml"
        path.write_text(f"revision:\n  commit: {value}\n")

        with pytest.raises(ConfigFileError) as exc_info:
            load_config_file(path)
        assert "'revision.commit' must be a string" in str(exc_info.value)
        assert "quot" in exc_info.value.hint

    def test_numeric_branch_rejected(self, tmp_path: Path):
        path = tmp_path / ".depreport.yml"
        path.write_text("revision:\n  branch: 2024\n")

        with pytest.raises(ConfigFileError):
            load_config_file(path)

    def test_not_utf8(self, tmp_path: Path):
        path = tmp_path / ".depreport.yml"
        path.write_bytes(b"apiKey: \xff\xfe")

        with pytest.raises(ConfigFileError) as exc_info:
            load_config_file(path)
        assert exc_info.value.path == str(path)
        assert "--config" in exc_info.value.hint

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / ".depreport.yml"
        path.write_text("apiKey: [unclosed\n")

        with pytest.raises(ConfigFileError) as exc_info:
            load_config_file(path)
        assert "invalid YAML" in str(exc_info.value)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / ".depreport.yml"
        path.write_text("- one\n- two\n")

        with pytest.raises(ConfigFileError) as exc_info:
            load_config_file(path)
        assert "expected a mapping" in str(exc_info.value)

    def test_section_must_be_mapping(self, tmp_path: Path):
        path = tmp_path / ".depreport.yml"
        path.write_text("project: my-project\n")

        with pytest.raises(ConfigFileError):
            load_config_file(path)

    def test_api_key_must_be_string(self, tmp_path: Path):
        path = tmp_path / ".depreport.yml"
        path.write_text("apiKey:\n  - a\n")

        with pytest.raises(ConfigFileError) as exc_info:
            load_config_file(path)
        assert "'apiKey' must be a string" in str(exc_info.value)

    def test_unknown_key_warns_with_suggestion(self, tmp_path: Path, caplog):
        path = tmp_path / ".depreport.yml"
        path.write_text("apikey: abc\n")

        with caplog.at_level(logging.WARNING, logger="depreport.config.file"):
            config = load_config_file(path)

        assert config.api_key is None
        assert "Unknown key 'apikey'" in caplog.text
        assert "did you mean 'apiKey'" in caplog.text

    def test_error_carries_hint(self, tmp_path: Path):
        path = tmp_path / ".depreport.yml"
        path.write_text("42\n")

        with pytest.raises(ConfigFileError) as exc_info:
            load_config_file(path)
        assert "--config" in exc_info.value.hint


class TestResolveConfigFile:
    """Tests for config file discovery."""

    def test_finds_default_name(self, tmp_path: Path):
        (tmp_path / ".depreport.yml").write_text("apiKey: found\n")

        config = resolve_config_file(search_dir=tmp_path)

        assert config is not None
        assert config.api_key == "found"

    def test_finds_yaml_extension(self, tmp_path: Path):
        (tmp_path / ".depreport.yaml").write_text("apiKey: found\n")

        config = resolve_config_file(search_dir=tmp_path)

        assert config is not None
        assert config.path.name == ".depreport.yaml"

    def test_missing_default_is_none(self, tmp_path: Path):
        assert resolve_config_file(search_dir=tmp_path) is None

    def test_uses_cwd_by_default(self, tmp_path: Path, monkeypatch):
        (tmp_path / ".depreport.yml").write_text("server: https://cwd.example.com\n")
        monkeypatch.chdir(tmp_path)

        config = resolve_config_file()

        assert config is not None
        assert config.server == "https://cwd.example.com"

    def test_explicit_path(self, tmp_path: Path):
        path = tmp_path / "custom.yml"
        path.write_text("apiKey: custom\n")

        config = resolve_config_file(path, search_dir=tmp_path)

        assert config is not None
        assert config.api_key == "custom"

    def test_explicit_path_must_exist(self, tmp_path: Path):
        with pytest.raises(ConfigFileError) as exc_info:
            resolve_config_file(tmp_path / "missing.yml")
        assert "file not found" in str(exc_info.value)


class TestCollectApiOptions:
    """Tests for API option layering."""

    @pytest.fixture
    def config_file(self, tmp_path: Path):
        return ConfigFile(
            path=tmp_path / ".depreport.yml",
            server="https://file.example.com",
            api_key="file-key",
        )

    @pytest.fixture
    def env(self):
        return EnvVars(api_key="env-key", endpoint="https://env.example.com")

    def test_cli_wins(self, config_file, env):
        options = collect_api_options("cli-key", "https://cli.example.com", config_file, env)
        assert options.api_key == "cli-key"
        assert options.endpoint == "https://cli.example.com"

    def test_config_file_wins_over_env(self, config_file, env):
        options = collect_api_options(None, None, config_file, env)
        assert options.api_key == "file-key"
        assert options.endpoint == "https://file.example.com"

    def test_env_used_last(self, env):
        options = collect_api_options(None, None, None, env)
        assert options.api_key == "env-key"
        assert options.endpoint == "https://env.example.com"

    def test_fields_layered_independently(self, tmp_path: Path, env):
        config_file = ConfigFile(path=tmp_path / ".depreport.yml", api_key="file-key")

        options = collect_api_options(None, "https://cli.example.com", config_file, env)

        assert options.api_key == "file-key"
        assert options.endpoint == "https://cli.example.com"

    def test_default_endpoint(self):
        options = collect_api_options("key", None, None, EnvVars())
        assert options.endpoint == DEFAULT_ENDPOINT

    def test_empty_cli_key_falls_through_to_env(self, env):
        options = collect_api_options("", "", None, env)
        assert options.api_key == "env-key"
        assert options.endpoint == "https://env.example.com"

    def test_empty_config_file_key_falls_through_to_env(self, tmp_path: Path, env):
        config_file = ConfigFile(path=tmp_path / ".depreport.yml", api_key="", server="")

        options = collect_api_options(None, None, config_file, env)

        assert options.api_key == "env-key"
        assert options.endpoint == "https://env.example.com"

    def test_empty_everywhere(self):
        with pytest.raises(MissingApiCredentials):
            collect_api_options("", None, None, EnvVars())

    def test_missing_key(self):
        with pytest.raises(MissingApiCredentials) as exc_info:
            collect_api_options(None, "https://cli.example.com", None, EnvVars())
        assert "DEPREPORT_API_KEY" in exc_info.value.hint
