"""Configuration for the numpin informer, which reports the number of pins."""

from datetime import timedelta

from clusterconf.config.component import ComponentConfig, JSONSchema
from clusterconf.config.durations import (
    DurationOpt,
    duration_in_range,
    format_duration,
    parse_durations,
)
from clusterconf.config.errors import ValidationError


CONFIG_KEY = "numpin"

DEFAULT_METRIC_TTL = timedelta(seconds=10)


class NumpinJSONConfig(JSONSchema):
    metric_ttl: str = ""


class InformerConfig(ComponentConfig):
    """Configuration for the numpin informer.

    ``metric_ttl`` is how long a reported metric stays valid. It must be
    strictly positive.
    """

    CONFIG_KEY = CONFIG_KEY
    SECTION = "informer"
    SCHEMA = NumpinJSONConfig

    def __init__(self) -> None:
        self.metric_ttl = timedelta(0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InformerConfig):
            return NotImplemented
        return self.metric_ttl == other.metric_ttl

    def default(self) -> None:
        self.metric_ttl = DEFAULT_METRIC_TTL

    def validate(self) -> None:
        if self.metric_ttl <= timedelta(0) or not duration_in_range(self.metric_ttl):
            raise ValidationError(
                "numpin.metric_ttl is invalid", component=CONFIG_KEY, field="metric_ttl"
            )

    def load_json(self, raw: bytes | str) -> None:
        jcfg = self._decode(raw)

        self.default()

        parse_durations(
            CONFIG_KEY,
            self,
            DurationOpt(jcfg.metric_ttl, "metric_ttl", "metric_ttl"),
        )

        self.validate()

    def to_schema(self) -> NumpinJSONConfig:
        return NumpinJSONConfig(metric_ttl=format_duration(self.metric_ttl))
