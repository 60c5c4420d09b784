"""YAML configuration parser for crossplan.

This module provides parsing and validation for crossplan.yaml project files.
The file names the default target and dependencies of a project and carries
per-target and per-dependency overrides.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from crossplan.core.exceptions import ConfigError
from crossplan.cross.store import DEFAULT_STORE_ROOT
from crossplan.cross.targets import LinkMode
from crossplan.toolchain.metadata_registry import LATEST

CONFIG_FILENAME = "crossplan.yaml"

TARGET_OVERRIDE_KEYS = ("link_mode", "cross_package_key", "cc_prefix")
DEPENDENCY_OVERRIDE_KEYS = ("static", "include_subpath", "lib_subpath")


@dataclass
class HostConfig:
    """Host-target emission (static dependencies for build-time host code)."""

    enabled: bool = False
    target: str = "x86_64"


@dataclass
class BuildCommandConfig:
    """External build invocation."""

    command: List[str] = field(default_factory=lambda: ["cargo", "build", "--release"])


@dataclass
class ProjectConfig:
    """Complete crossplan project configuration."""

    version: int = 1
    project: Optional[str] = None
    target: Optional[str] = None
    dependencies: List[str] = field(default_factory=list)
    store: str = DEFAULT_STORE_ROOT
    revision: str = LATEST
    host: HostConfig = field(default_factory=HostConfig)
    target_overrides: Dict[str, Dict[str, str]] = field(default_factory=dict)
    dependency_overrides: Dict[str, Dict[str, object]] = field(default_factory=dict)
    env: Dict[str, str] = field(default_factory=dict)
    build: BuildCommandConfig = field(default_factory=BuildCommandConfig)


def parse_config(config_path: Path) -> ProjectConfig:
    """
    Parse crossplan.yaml configuration file.

    Args:
        config_path: Path to crossplan.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is missing or invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        raise ConfigError("Configuration file is empty")

    return parse_config_data(data)


def load_project_config(project_root: Path, config_path: Optional[Path] = None) -> ProjectConfig:
    """
    Load project configuration, falling back to defaults.

    An explicit config_path must exist. Without one, ./crossplan.yaml under
    project_root is used when present, and defaults otherwise.
    """
    if config_path is not None:
        return parse_config(config_path)

    default_path = project_root / CONFIG_FILENAME
    if default_path.exists():
        return parse_config(default_path)
    return ProjectConfig()


def parse_config_data(data: dict) -> ProjectConfig:
    """Parse and validate configuration data."""
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    if "version" not in data:
        raise ConfigError("Missing required field: version")

    if data["version"] != 1:
        raise ConfigError(f"Unsupported version: {data['version']} (expected 1)")

    dependencies = data.get("dependencies", [])
    if not isinstance(dependencies, list) or not all(
        isinstance(d, str) for d in dependencies
    ):
        raise ConfigError("dependencies must be a list of names")

    store = str(data.get("store", DEFAULT_STORE_ROOT))
    if not store.startswith("/"):
        raise ConfigError(f"store must be an absolute path: {store}")

    toolchain = _mapping(data, "toolchain")

    return ProjectConfig(
        version=data["version"],
        project=data.get("project"),
        target=data.get("target"),
        dependencies=list(dependencies),
        store=store,
        revision=str(toolchain.get("revision", LATEST)),
        host=_parse_host(_mapping(data, "host")),
        target_overrides=_parse_target_overrides(_mapping(data, "targets")),
        dependency_overrides=_parse_dependency_overrides(
            _mapping(data, "dependencies_overrides")
        ),
        env=_parse_env(_mapping(data, "env")),
        build=_parse_build(_mapping(data, "build")),
    )


def _mapping(data: dict, key: str) -> dict:
    """Optional mapping section."""
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key} must be a mapping")
    return value


def _parse_host(data: dict) -> HostConfig:
    enabled = data.get("enabled", False)
    if not isinstance(enabled, bool):
        raise ConfigError("host.enabled must be a boolean")
    return HostConfig(enabled=enabled, target=str(data.get("target", "x86_64")))


def _parse_target_overrides(data: dict) -> Dict[str, Dict[str, str]]:
    """Parse per-target overrides."""
    overrides = {}
    for target_id, fields in data.items():
        if not isinstance(fields, dict):
            raise ConfigError(f"targets.{target_id} must be a mapping")
        for key in fields:
            if key not in TARGET_OVERRIDE_KEYS:
                raise ConfigError(
                    f"targets.{target_id}: unsupported override '{key}' "
                    f"(expected one of {list(TARGET_OVERRIDE_KEYS)})"
                )
        if "link_mode" in fields:
            LinkMode.parse(fields["link_mode"])
        overrides[str(target_id)] = {k: str(v) for k, v in fields.items()}
    return overrides


def _parse_dependency_overrides(data: dict) -> Dict[str, Dict[str, object]]:
    """Parse per-dependency overrides."""
    overrides = {}
    for name, fields in data.items():
        if not isinstance(fields, dict):
            raise ConfigError(f"dependencies_overrides.{name} must be a mapping")
        for key, value in fields.items():
            if key not in DEPENDENCY_OVERRIDE_KEYS:
                raise ConfigError(
                    f"dependencies_overrides.{name}: unsupported override '{key}' "
                    f"(expected one of {list(DEPENDENCY_OVERRIDE_KEYS)})"
                )
            if key == "static" and not isinstance(value, bool):
                raise ConfigError(f"dependencies_overrides.{name}.static must be a boolean")
        overrides[str(name)] = dict(fields)
    return overrides


def _parse_env(data: dict) -> Dict[str, str]:
    env = {}
    for key, value in data.items():
        if not isinstance(value, (str, int)) or isinstance(value, bool):
            raise ConfigError(f"env.{key} must be a string")
        env[str(key)] = str(value)
    return env


def _parse_build(data: dict) -> BuildCommandConfig:
    command = data.get("command")
    if command is None:
        return BuildCommandConfig()
    if isinstance(command, str):
        command = command.split()
    if not isinstance(command, list) or not command:
        raise ConfigError("build.command must be a non-empty list or string")
    return BuildCommandConfig(command=[str(part) for part in command])
