"""Base contract shared by every component configuration.

A component configuration has a fixed key naming its section in the cluster
configuration file, and follows the same lifecycle:

- default() fills every field with a built-in value
- load_json() reads the serialized form, on top of the defaults
- validate() checks that the values make sense
- to_json() writes the human-readable serialized form back
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from multiaddr import Multiaddr
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from .errors import DecodeError, EncodeError, ParseError


logger = logging.getLogger(__name__)


# Prefix for environment variables overriding configuration fields
ENV_PREFIX = "CLUSTER"


def default_json_marshal(obj: Any) -> bytes:
    """Encode obj as indented JSON, keeping key order."""
    return json.dumps(obj, indent=2).encode("utf-8")


class JSONSchema(BaseModel):
    """Serialized shape of a component configuration.

    Every field is a string. Unknown keys are ignored.
    """

    model_config = ConfigDict(strict=True, extra="ignore")


class ComponentConfig(ABC):
    """Configuration object for a pluggable cluster component."""

    # Identifier of the component inside the cluster configuration file
    CONFIG_KEY: ClassVar[str]

    # Top-level section holding the component ("api", "informer"...)
    SECTION: ClassVar[str]

    # Pydantic model describing the serialized form
    SCHEMA: ClassVar[type[JSONSchema]]

    def config_key(self) -> str:
        """Human-friendly identifier for this type of configuration."""
        return self.CONFIG_KEY

    @abstractmethod
    def default(self) -> None:
        """Set every field to a sensible default value."""

    @abstractmethod
    def validate(self) -> None:
        """Raise ValidationError for the first field holding a bad value."""

    @abstractmethod
    def load_json(self, raw: bytes | str) -> None:
        """Load the configuration from the JSON generated by to_json()."""

    @abstractmethod
    def to_schema(self) -> JSONSchema:
        """Convert the current values into the serialized record."""

    def to_dict(self) -> dict[str, str]:
        """Serialized record as a plain dictionary."""
        return self.to_schema().model_dump()

    def to_json(self) -> bytes:
        """Generate a human-friendly JSON representation of this configuration."""
        return default_json_marshal(self.to_dict())

    def env_var_name(self, field: str) -> str:
        """Environment variable overriding a serialized field."""
        return f"{ENV_PREFIX}_{self.CONFIG_KEY}_{field.replace('_', '')}".upper()

    def apply_env_vars(self) -> None:
        """Override fields with values set in the environment.

        Overrides go through load_json(), so they are parsed and validated
        like values read from a file. Variables set to an empty string are
        ignored.
        """
        overrides = {}
        for field in self.SCHEMA.model_fields:
            value = os.getenv(self.env_var_name(field))
            if value:
                overrides[field] = value

        if not overrides:
            return

        logger.debug(f"Applying environment overrides to {self.CONFIG_KEY}: {sorted(overrides)}")
        current = self.to_dict()
        current.update(overrides)
        self.load_json(default_json_marshal(current))

    def _decode(self, raw: bytes | str) -> Any:
        """Decode raw into this component's schema record."""
        try:
            return self.SCHEMA.model_validate_json(raw)
        except PydanticValidationError as e:
            logger.error(f"Error unmarshaling {self.CONFIG_KEY} config")
            raise DecodeError(
                f"error decoding {self.CONFIG_KEY} configuration",
                component=self.CONFIG_KEY,
                details=str(e),
            ) from e

    def _parse_multiaddr(self, field: str, value: str) -> Multiaddr:
        """Parse an address field, raising ParseError on failure."""
        if not value:
            raise ParseError(
                f"error parsing {self.CONFIG_KEY}.{field}: empty multiaddress",
                component=self.CONFIG_KEY,
                field=field,
            )
        # Protocol codecs raise their own error types on bad values
        try:
            return Multiaddr(value)
        except Exception as e:
            raise ParseError(
                f"error parsing {self.CONFIG_KEY}.{field}: {e}",
                component=self.CONFIG_KEY,
                field=field,
                cause=e,
            ) from e

    def _multiaddr_to_string(self, field: str, addr: Any) -> str:
        """Canonical string form of an address field.

        Raises EncodeError when the field does not hold a usable address.
        """
        if not isinstance(addr, Multiaddr):
            raise EncodeError(
                f"{self.CONFIG_KEY}.{field} is not a multiaddress: {addr!r}",
                component=self.CONFIG_KEY,
            )
        # String conversion walks the binary form and may fail on corrupt addresses
        try:
            return str(addr)
        except Exception as e:
            raise EncodeError(
                f"error encoding {self.CONFIG_KEY}.{field}: {e}",
                component=self.CONFIG_KEY,
                details=str(e),
            ) from e
