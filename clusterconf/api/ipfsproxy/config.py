"""Configuration for the IPFS proxy.

The proxy listens on ``proxy_addr`` and forwards requests to the IPFS daemon
found at ``node_addr``. Example section of the cluster configuration file:

{
    "api": {
        "ipfsproxy": {
            "proxy_listen_multiaddress": "/ip4/127.0.0.1/tcp/9095",
            "node_multiaddress": "/ip4/127.0.0.1/tcp/5001",
            "proxy_read_timeout": "0s",
            "proxy_read_header_timeout": "5s",
            "proxy_write_timeout": "0s",
            "proxy_idle_timeout": "1m0s"
        }
    }
}

Empty addresses are rejected when loading. Empty timeouts keep their default.
"""

from datetime import timedelta

from multiaddr import Multiaddr

from clusterconf.config.component import ComponentConfig, JSONSchema
from clusterconf.config.durations import (
    DurationOpt,
    duration_in_range,
    format_duration,
    parse_durations,
)
from clusterconf.config.errors import ValidationError


CONFIG_KEY = "ipfsproxy"

# Default values
DEFAULT_PROXY_ADDR = "/ip4/127.0.0.1/tcp/9095"
DEFAULT_NODE_ADDR = "/ip4/127.0.0.1/tcp/5001"
DEFAULT_PROXY_READ_TIMEOUT = timedelta(0)
DEFAULT_PROXY_READ_HEADER_TIMEOUT = timedelta(seconds=5)
DEFAULT_PROXY_WRITE_TIMEOUT = timedelta(0)
DEFAULT_PROXY_IDLE_TIMEOUT = timedelta(seconds=60)


class ProxyJSONConfig(JSONSchema):
    proxy_listen_multiaddress: str = ""
    node_multiaddress: str = ""
    proxy_read_timeout: str = ""
    proxy_read_header_timeout: str = ""
    proxy_write_timeout: str = ""
    proxy_idle_timeout: str = ""


class ProxyConfig(ComponentConfig):
    """Configuration for the IPFS proxy.

    A zero timeout means no timeout.
    """

    CONFIG_KEY = CONFIG_KEY
    SECTION = "api"
    SCHEMA = ProxyJSONConfig

    def __init__(self) -> None:
        # Listen address of the proxy
        self.proxy_addr: Multiaddr | None = None

        # Address of the IPFS daemon
        self.node_addr: Multiaddr | None = None

        # Maximum duration before timing out reading a full request
        self.proxy_read_timeout = timedelta(0)

        # Maximum duration before timing out reading the headers of a request
        self.proxy_read_header_timeout = timedelta(0)

        # Maximum duration before timing out write of the response
        self.proxy_write_timeout = timedelta(0)

        # How long a keep-alive connection is kept idle before being reused
        self.proxy_idle_timeout = timedelta(0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProxyConfig):
            return NotImplemented
        return (
            self.proxy_addr == other.proxy_addr
            and self.node_addr == other.node_addr
            and self.proxy_read_timeout == other.proxy_read_timeout
            and self.proxy_read_header_timeout == other.proxy_read_header_timeout
            and self.proxy_write_timeout == other.proxy_write_timeout
            and self.proxy_idle_timeout == other.proxy_idle_timeout
        )

    def default(self) -> None:
        """Set the fields of this config to sensible default values."""
        self.proxy_addr = Multiaddr(DEFAULT_PROXY_ADDR)
        self.node_addr = Multiaddr(DEFAULT_NODE_ADDR)
        self.proxy_read_timeout = DEFAULT_PROXY_READ_TIMEOUT
        self.proxy_read_header_timeout = DEFAULT_PROXY_READ_HEADER_TIMEOUT
        self.proxy_write_timeout = DEFAULT_PROXY_WRITE_TIMEOUT
        self.proxy_idle_timeout = DEFAULT_PROXY_IDLE_TIMEOUT

    def validate(self) -> None:
        """Check that the fields of this config have sensible values."""
        if self.proxy_addr is None:
            raise ValidationError(
                "ipfsproxy.proxy_listen_multiaddress not set",
                component=CONFIG_KEY,
                field="proxy_listen_multiaddress",
            )
        if self.node_addr is None:
            raise ValidationError(
                "ipfsproxy.node_multiaddress not set",
                component=CONFIG_KEY,
                field="node_multiaddress",
            )

        timeouts = [
            ("proxy_read_timeout", self.proxy_read_timeout),
            ("proxy_read_header_timeout", self.proxy_read_header_timeout),
            ("proxy_write_timeout", self.proxy_write_timeout),
            ("proxy_idle_timeout", self.proxy_idle_timeout),
        ]
        for name, value in timeouts:
            if value < timedelta(0) or not duration_in_range(value):
                raise ValidationError(
                    f"ipfsproxy.{name} is invalid", component=CONFIG_KEY, field=name
                )

    def load_json(self, raw: bytes | str) -> None:
        """Parse a JSON representation of this config as generated by to_json()."""
        jcfg = self._decode(raw)

        self.default()

        self.proxy_addr = self._parse_multiaddr(
            "proxy_listen_multiaddress", jcfg.proxy_listen_multiaddress
        )
        self.node_addr = self._parse_multiaddr("node_multiaddress", jcfg.node_multiaddress)

        parse_durations(
            CONFIG_KEY,
            self,
            DurationOpt(jcfg.proxy_read_timeout, "proxy_read_timeout", "proxy_read_timeout"),
            DurationOpt(
                jcfg.proxy_read_header_timeout,
                "proxy_read_header_timeout",
                "proxy_read_header_timeout",
            ),
            DurationOpt(jcfg.proxy_write_timeout, "proxy_write_timeout", "proxy_write_timeout"),
            DurationOpt(jcfg.proxy_idle_timeout, "proxy_idle_timeout", "proxy_idle_timeout"),
        )

        self.validate()

    def to_schema(self) -> ProxyJSONConfig:
        return ProxyJSONConfig(
            proxy_listen_multiaddress=self._multiaddr_to_string(
                "proxy_listen_multiaddress", self.proxy_addr
            ),
            node_multiaddress=self._multiaddr_to_string("node_multiaddress", self.node_addr),
            proxy_read_timeout=format_duration(self.proxy_read_timeout),
            proxy_read_header_timeout=format_duration(self.proxy_read_header_timeout),
            proxy_write_timeout=format_duration(self.proxy_write_timeout),
            proxy_idle_timeout=format_duration(self.proxy_idle_timeout),
        )
