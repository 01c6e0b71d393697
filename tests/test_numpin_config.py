"""
Test suite for the numpin informer configuration.
"""

import json
from datetime import timedelta

import pytest

from clusterconf.config.errors import ConfigError, DecodeError, ValidationError
from clusterconf.informer.numpin.config import InformerConfig


CFG_JSON = b"""
{
      "metric_ttl": "1s"
}
"""


class TestInformerConfig:
    """Tests for the numpin configuration lifecycle."""

    def test_config_key(self):
        """Test the configuration key and section."""
        config = InformerConfig()
        assert config.config_key() == "numpin"
        assert config.SECTION == "informer"

    def test_load_json(self):
        """Test loading a valid document, then a bad TTL."""
        config = InformerConfig()
        config.load_json(CFG_JSON)
        assert config.metric_ttl == timedelta(seconds=1)
        config.validate()

        data = json.loads(CFG_JSON)
        data["metric_ttl"] = "-10"
        with pytest.raises(ConfigError):
            config.load_json(json.dumps(data))

    def test_negative_ttl_with_unit(self):
        """Test that a negative TTL fails validation."""
        config = InformerConfig()
        with pytest.raises(ValidationError):
            config.load_json(b'{"metric_ttl": "-10s"}')

    def test_empty_document_uses_default(self):
        """Test that a missing TTL keeps the default."""
        config = InformerConfig()
        config.load_json(b"{}")
        assert config.metric_ttl == timedelta(seconds=10)

    def test_malformed_document(self):
        """Test that broken JSON raises DecodeError."""
        config = InformerConfig()
        with pytest.raises(DecodeError):
            config.load_json(b"metric_ttl: 1s")

    def test_to_json(self):
        """Test serialization after loading."""
        config = InformerConfig()
        config.load_json(CFG_JSON)
        raw = config.to_json()
        assert json.loads(raw) == {"metric_ttl": "1s"}

    def test_round_trip(self):
        """Test that the serialized form loads back to an equal config."""
        config = InformerConfig()
        config.default()
        config.metric_ttl = timedelta(minutes=2, milliseconds=500)

        other = InformerConfig()
        other.load_json(config.to_json())
        assert other == config

    def test_default(self):
        """Test that defaults validate and that a zero TTL does not."""
        config = InformerConfig()
        config.default()
        config.validate()

        config.metric_ttl = timedelta(0)
        with pytest.raises(ValidationError) as exc_info:
            config.validate()
        assert exc_info.value.field == "metric_ttl"

    def test_oversized_ttl(self):
        """Test that a TTL too long to be written back fails validation."""
        config = InformerConfig()
        config.default()
        config.metric_ttl = timedelta(days=200000)
        with pytest.raises(ValidationError) as exc_info:
            config.validate()
        assert exc_info.value.field == "metric_ttl"

    def test_apply_env_vars(self, monkeypatch):
        """Test overriding the TTL from the environment."""
        monkeypatch.setenv("CLUSTER_NUMPIN_METRICTTL", "30s")
        config = InformerConfig()
        config.default()
        config.apply_env_vars()
        assert config.metric_ttl == timedelta(seconds=30)
