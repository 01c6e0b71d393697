"""Configuration Manager for the cluster.

Holds the configuration of every component and reads/writes the aggregated
configuration file. Each component lives under its section and key:

{
    "api": {
        "ipfsproxy": {...}
    },
    "informer": {
        "numpin": {...}
    }
}
"""

import json
import logging
from pathlib import Path
from typing import Any

from .component import ComponentConfig, default_json_marshal
from .errors import ConfigError, DecodeError
from .registry import component_keys, new_component


logger = logging.getLogger(__name__)


# Default config file locations (in order of priority)
CONFIG_FILE_LOCATIONS = [
    Path.cwd() / "service.json",                     # Current working directory
    Path.home() / ".ipfs-cluster" / "service.json",  # User home directory
    Path("/etc/ipfs-cluster/service.json"),          # System-wide config
]


class ConfigManager:
    """Manages component configurations and the file holding them."""

    def __init__(self, keys: list[str] | None = None):
        self._components: dict[str, ComponentConfig] = {}
        for key in keys if keys is not None else component_keys():
            self._components[key] = new_component(key)
        self._config_path: Path | None = None

    @property
    def config_path(self) -> Path | None:
        """File the configuration was last loaded from or saved to."""
        return self._config_path

    def components(self) -> list[ComponentConfig]:
        return list(self._components.values())

    def get(self, key: str) -> ComponentConfig:
        """Get the configuration object of a component."""
        try:
            return self._components[key]
        except KeyError:
            raise ConfigError(f"component '{key}' is not managed", component=key) from None

    def default(self) -> None:
        """Set every component to its default values."""
        for cfg in self._components.values():
            cfg.default()

    def validate(self) -> None:
        """Validate every component, raising the first error found."""
        for cfg in self._components.values():
            cfg.validate()

    def apply_env_vars(self) -> None:
        for cfg in self._components.values():
            cfg.apply_env_vars()

    def load_json(self, raw: bytes | str) -> None:
        """Load every component from an aggregated JSON document.

        Components missing from the document get their default values.
        """
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("Error unmarshaling cluster configuration")
            raise DecodeError("error decoding cluster configuration", details=str(e)) from e

        if not isinstance(data, dict):
            raise DecodeError(
                "error decoding cluster configuration: expected a JSON object",
                details=type(data).__name__,
            )

        for key, cfg in self._components.items():
            section = data.get(cfg.SECTION, {})
            if not isinstance(section, dict):
                raise DecodeError(
                    f"error decoding cluster configuration: section '{cfg.SECTION}' is not an object",
                    component=key,
                )
            if key not in section:
                logger.warning(
                    f"The {cfg.SECTION}.{key} section is missing from the configuration. "
                    f"Using defaults."
                )
                cfg.default()
                continue
            cfg.load_json(default_json_marshal(section[key]))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for key, cfg in self._components.items():
            data.setdefault(cfg.SECTION, {})[key] = cfg.to_dict()
        return data

    def to_json(self) -> bytes:
        """Generate the aggregated JSON document for every component."""
        return default_json_marshal(self.to_dict())

    def find_config_file(self) -> Path | None:
        """Find the first existing config file."""
        for path in CONFIG_FILE_LOCATIONS:
            if path.exists() and path.is_file():
                return path
        return None

    def load(self, config_path: Path | None = None) -> None:
        """Load configuration from file, then apply environment overrides.

        Priority:
        1. Explicitly specified config_path
        2. Config file in standard locations
        """
        if config_path is not None:
            if not config_path.is_file():
                raise ConfigError(f"configuration file {config_path} does not exist")
            self._config_path = config_path
        else:
            self._config_path = self.find_config_file()
            if self._config_path is None:
                raise ConfigError(
                    "no configuration file found in: "
                    + ", ".join(str(p) for p in CONFIG_FILE_LOCATIONS)
                )

        self.load_json(self._config_path.read_bytes())
        self.apply_env_vars()
        logger.info(f"Loaded configuration from {self._config_path}")

    def save(self, path: Path | None = None) -> Path:
        """Save configuration to file."""
        if path:
            self._config_path = path

        if self._config_path is None:
            self._config_path = Path.cwd() / "service.json"

        raw = self.to_json()

        # Ensure parent directory exists
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        self._config_path.write_bytes(raw)

        logger.info(f"Saved configuration to {self._config_path}")
        return self._config_path

    def create_default_config_file(self, path: Path | None = None) -> Path:
        """Write a configuration file holding default values."""
        self.default()
        return self.save(path)


# Module-level convenience functions
_manager: ConfigManager | None = None


def get_manager() -> ConfigManager:
    """Get the process-wide configuration manager."""
    global _manager
    if _manager is None:
        _manager = ConfigManager()
    return _manager


def load_config(path: Path | None = None) -> ConfigManager:
    """Load configuration from file."""
    manager = get_manager()
    manager.load(path)
    return manager


def save_config(path: Path | None = None) -> Path:
    """Save configuration to file."""
    return get_manager().save(path)
