"""
Tests for crossplan.yaml parsing.
"""

import pytest

from crossplan.config.parser import (
    ProjectConfig,
    load_project_config,
    parse_config,
    parse_config_data,
)
from crossplan.core.exceptions import ConfigError
from crossplan.cross.store import DEFAULT_STORE_ROOT


FULL_CONFIG = """
version: 1
project: standing_bot
target: armv7
dependencies: [openssl, glibc]
store: /opt/store
toolchain:
  revision: 1.80.1
host:
  enabled: true
  target: x86_64
targets:
  armv7-gnu:
    link_mode: dynamic
dependencies_overrides:
  openssl:
    static: false
env:
  CFLAGS: "-flto=false"
  JOBS: 4
build:
  command: cargo build --release --bin standing_bot
"""


class TestParseConfig:
    def test_full_config(self, tmp_path):
        path = tmp_path / "crossplan.yaml"
        path.write_text(FULL_CONFIG)

        config = parse_config(path)

        assert config.project == "standing_bot"
        assert config.target == "armv7"
        assert config.dependencies == ["openssl", "glibc"]
        assert config.store == "/opt/store"
        assert config.revision == "1.80.1"
        assert config.host.enabled is True
        assert config.host.target == "x86_64"
        assert config.target_overrides == {"armv7-gnu": {"link_mode": "dynamic"}}
        assert config.dependency_overrides == {"openssl": {"static": False}}
        assert config.env == {"CFLAGS": "-flto=false", "JOBS": "4"}
        assert config.build.command == ["cargo", "build", "--release", "--bin", "standing_bot"]

    def test_minimal_config_defaults(self):
        config = parse_config_data({"version": 1})

        assert config.target is None
        assert config.dependencies == []
        assert config.store == DEFAULT_STORE_ROOT
        assert config.revision == "latest"
        assert config.host.enabled is False
        assert config.build.command == ["cargo", "build", "--release"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            parse_config(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "crossplan.yaml"
        path.write_text("")

        with pytest.raises(ConfigError, match="empty"):
            parse_config(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "crossplan.yaml"
        path.write_text("invalid: yaml: : :")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            parse_config(path)


class TestValidation:
    def test_missing_version(self):
        with pytest.raises(ConfigError, match="version"):
            parse_config_data({"target": "armv7"})

    def test_unsupported_version(self):
        with pytest.raises(ConfigError, match="Unsupported version"):
            parse_config_data({"version": 2})

    def test_not_a_mapping(self):
        with pytest.raises(ConfigError, match="mapping"):
            parse_config_data(["version", 1])

    def test_dependencies_must_be_list(self):
        with pytest.raises(ConfigError, match="dependencies"):
            parse_config_data({"version": 1, "dependencies": "openssl"})

    def test_relative_store(self):
        with pytest.raises(ConfigError, match="absolute"):
            parse_config_data({"version": 1, "store": "store"})

    def test_invalid_link_mode(self):
        with pytest.raises(ConfigError, match="Invalid link mode"):
            parse_config_data({"version": 1, "targets": {"armv7": {"link_mode": "shared"}}})

    def test_unknown_target_override_key(self):
        with pytest.raises(ConfigError, match="unsupported override"):
            parse_config_data({"version": 1, "targets": {"armv7": {"triple": "a-b-c-d"}}})

    def test_target_override_must_be_mapping(self):
        with pytest.raises(ConfigError, match="targets.armv7"):
            parse_config_data({"version": 1, "targets": {"armv7": "dynamic"}})

    def test_dependency_override_static_bool(self):
        with pytest.raises(ConfigError, match="boolean"):
            parse_config_data(
                {"version": 1, "dependencies_overrides": {"openssl": {"static": "no"}}}
            )

    def test_env_values_must_be_strings(self):
        with pytest.raises(ConfigError, match="env.FLAGS"):
            parse_config_data({"version": 1, "env": {"FLAGS": ["-O2"]}})

    def test_env_rejects_booleans(self):
        with pytest.raises(ConfigError, match="env.STATIC"):
            parse_config_data({"version": 1, "env": {"STATIC": True}})

    def test_host_enabled_bool(self):
        with pytest.raises(ConfigError, match="host.enabled"):
            parse_config_data({"version": 1, "host": {"enabled": "yes"}})

    def test_section_must_be_mapping(self):
        with pytest.raises(ConfigError, match="env must be a mapping"):
            parse_config_data({"version": 1, "env": ["A=1"]})

    def test_empty_build_command(self):
        with pytest.raises(ConfigError, match="build.command"):
            parse_config_data({"version": 1, "build": {"command": []}})


class TestLoadProjectConfig:
    def test_defaults_without_file(self, tmp_path):
        assert load_project_config(tmp_path) == ProjectConfig()

    def test_project_root_file(self, tmp_path):
        (tmp_path / "crossplan.yaml").write_text("version: 1\ntarget: aarch64\n")

        assert load_project_config(tmp_path).target == "aarch64"

    def test_explicit_path_must_exist(self, tmp_path):
        with pytest.raises(ConfigError):
            load_project_config(tmp_path, tmp_path / "other.yaml")
