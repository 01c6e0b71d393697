"""Component configuration for the cluster.

This module provides:
- the ComponentConfig contract every component configuration follows
- the human-readable duration grammar used in configuration files
- the configuration error types
"""

from .component import ComponentConfig, JSONSchema, default_json_marshal
from .durations import (
    MAX_DURATION,
    DurationOpt,
    duration_in_range,
    format_duration,
    parse_duration,
    parse_durations,
)
from .errors import (
    ConfigError,
    DecodeError,
    DurationParseError,
    EncodeError,
    ParseError,
    ValidationError,
)


__all__ = [
    "ComponentConfig",
    "ConfigError",
    "DecodeError",
    "DurationOpt",
    "MAX_DURATION",
    "DurationParseError",
    "EncodeError",
    "JSONSchema",
    "ParseError",
    "ValidationError",
    "default_json_marshal",
    "duration_in_range",
    "format_duration",
    "parse_duration",
    "parse_durations",
]
