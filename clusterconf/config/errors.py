"""Errors raised while loading, validating and saving component configurations."""


class ConfigError(Exception):
    """Base exception for configuration errors."""
    def __init__(
        self,
        message: str,
        component: str | None = None,
        details: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.component = component
        self.details = details


class DecodeError(ConfigError):
    """The serialized configuration is not well-formed."""
    pass


class ParseError(ConfigError):
    """A field value does not follow its grammar."""
    def __init__(
        self,
        message: str,
        component: str | None = None,
        field: str | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message, component=component, details=str(cause) if cause else None)
        self.field = field
        self.cause = cause


class DurationParseError(ParseError):
    """A duration string could not be parsed."""
    pass


class ValidationError(ConfigError):
    """A loaded configuration holds a value that makes no sense."""
    def __init__(self, message: str, component: str | None = None, field: str | None = None):
        super().__init__(message, component=component)
        self.field = field


class EncodeError(ConfigError):
    """A field could not be turned into its serialized form."""
    pass
