"""Known component configurations, indexed by configuration key."""

from clusterconf.api.ipfsproxy.config import ProxyConfig
from clusterconf.informer.numpin.config import InformerConfig

from .component import ComponentConfig
from .errors import ConfigError


COMPONENTS: dict[str, type[ComponentConfig]] = {
    ProxyConfig.CONFIG_KEY: ProxyConfig,
    InformerConfig.CONFIG_KEY: InformerConfig,
}


def component_keys() -> list[str]:
    """Keys of every known component, in registry order."""
    return list(COMPONENTS)


def new_component(key: str) -> ComponentConfig:
    """Create an empty configuration object for the given key."""
    try:
        cls = COMPONENTS[key]
    except KeyError:
        raise ConfigError(
            f"unknown component '{key}', expected one of: {', '.join(COMPONENTS)}",
            component=key,
        ) from None
    return cls()
