"""Cluster component configuration.

Each component (the IPFS proxy, the numpin informer...) owns a configuration
object that can be defaulted, validated, loaded from JSON and written back.
The ConfigManager aggregates them into a single configuration file.
"""

from clusterconf.config.manager import ConfigManager, get_manager, load_config, save_config
from clusterconf.config.registry import COMPONENTS, component_keys, new_component


__all__ = [
    "COMPONENTS",
    "ConfigManager",
    "component_keys",
    "get_manager",
    "load_config",
    "new_component",
    "save_config",
]
