"""Installer configuration.

Settings live in ~/.tower/config.yaml and can be overridden with
environment variables. Nothing here is required; the defaults deploy the
stock tower stack.
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml

from .shared.logging import get_logger
from .shared.paths import CONFIG_FILE

logger = get_logger(__name__)

# Default values
DEFAULT_PROJECT_NAME = "tower"
DEFAULT_IMAGE_TAG = "0.2.3"
DEFAULT_MIGRATION_PORT = 8811
MAX_PORT = 65535

# Environment variable mappings
ENV_VARS = {
    "project_name": "TOWER_PROJECT_NAME",
    "image_tag": "TOWER_IMAGE_TAG",
    "runtime_command": "TOWER_RUNTIME_COMMAND",
    "compose_command": "TOWER_COMPOSE_COMMAND",
    "package_command": "TOWER_PACKAGE_COMMAND",
    "script_command": "TOWER_SCRIPT_COMMAND",
    "migration_port": "TOWER_MIGRATION_PORT",
}


@dataclass
class InstallerConfig:
    """Installer configuration."""

    project_name: str = DEFAULT_PROJECT_NAME
    image_tag: str = DEFAULT_IMAGE_TAG
    runtime_command: str = "docker"
    compose_command: str = "docker-compose"
    package_command: str = "yarn"
    script_command: str = "node"
    migration_port: int = DEFAULT_MIGRATION_PORT

    # Track where each value came from
    _sources: dict[str, str] = field(default_factory=dict, repr=False, compare=False)

    def get_source(self, key: str) -> str:
        """Get the source of a config value."""
        return self._sources.get(key, "default")


def get_config_path() -> Path:
    """Get the config file path.

    Returns:
        Path to ~/.tower/config.yaml
    """
    return CONFIG_FILE


def _settable_fields() -> list[str]:
    return [f.name for f in fields(InstallerConfig) if not f.name.startswith("_")]


def _coerce(key: str, value: object) -> object:
    if value is None:
        raise TypeError(f"{key} has no value")
    if key == "migration_port":
        port = int(value)
        if not 1 <= port <= MAX_PORT:
            raise ValueError(f"{key} out of range: {port}")
        return port
    return str(value)


def _read_config_file(config_path: Path) -> dict:
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("config_file_unreadable", path=str(config_path), error=str(e))
        return {}

    if not isinstance(data, dict):
        logger.warning("config_file_invalid", path=str(config_path))
        return {}
    return data


def load_config(config_path: Path | None = None) -> InstallerConfig:
    """Load installer configuration.

    Precedence (highest to lowest):
    1. Environment variables
    2. Config file (~/.tower/config.yaml)
    3. Defaults

    Args:
        config_path: Alternate config file location.

    Returns:
        InstallerConfig with values and sources
    """
    config = InstallerConfig()
    sources = {key: "default" for key in _settable_fields()}

    config_path = config_path or get_config_path()
    if config_path.exists():
        file_config = _read_config_file(config_path)
        for key in sources:
            if key not in file_config:
                continue
            try:
                setattr(config, key, _coerce(key, file_config[key]))
            except (TypeError, ValueError):
                logger.warning("config_value_invalid", key=key, source="config file")
                continue
            sources[key] = "config file"

    for key, env_var in ENV_VARS.items():
        value = os.environ.get(env_var)
        if not value:
            continue
        try:
            setattr(config, key, _coerce(key, value))
        except ValueError:
            logger.warning("config_value_invalid", key=key, source="environment")
            continue
        sources[key] = "environment"

    config._sources = sources
    return config
