"""Configuration module for crossplan.

This module provides YAML parsing and validation for crossplan.yaml.
"""

from crossplan.config.parser import (
    CONFIG_FILENAME,
    BuildCommandConfig,
    HostConfig,
    ProjectConfig,
    load_project_config,
    parse_config,
    parse_config_data,
)

__all__ = [
    "CONFIG_FILENAME",
    "BuildCommandConfig",
    "HostConfig",
    "ProjectConfig",
    "load_project_config",
    "parse_config",
    "parse_config_data",
]
