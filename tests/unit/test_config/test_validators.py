"""
Unit tests for configuration validation functionality.

Tests the validation of the `[cluster]` and `[metrics.graphite]` tables,
including defaults, duration parsing and pattern checks.
"""

import pytest

from graphite_reporter.config import validate_cluster_name, validate_graphite_config
from graphite_reporter.models import GraphiteConfig
from graphite_reporter.validation import ConfigurationError, ValidationError


@pytest.mark.unit
class TestClusterNameValidation:
    """Test cases for the `[cluster]` table."""

    def test_cluster_name(self):
        assert validate_cluster_name({"name": "mycluster"}) == "mycluster"

    def test_missing_cluster_name_uses_default(self):
        assert validate_cluster_name({}) == "elasticsearch"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_cluster_name_is_rejected(self, name):
        with pytest.raises(ValidationError) as exc_info:
            validate_cluster_name({"name": name})

        assert exc_info.value.field_name == "cluster.name"

    def test_non_string_cluster_name_is_rejected(self):
        with pytest.raises(ValidationError):
            validate_cluster_name({"name": 42})


@pytest.mark.unit
class TestGraphiteConfigValidation:
    """Test cases for the `[metrics.graphite]` table."""

    def test_validate_graphite_config_success(self, sample_graphite_data):
        """Test successful validation of a complete table."""
        config = validate_graphite_config(sample_graphite_data, cluster_name="mycluster")

        assert isinstance(config, GraphiteConfig)
        assert config.host == "graphite.local"
        assert config.port == 2004
        assert config.interval_seconds == 30.0
        assert config.include_pattern == "^node1\\."
        assert config.exclude_pattern == "heap"
        assert config.prefix == "elasticsearch.mycluster"
        assert config.enabled is True

    def test_defaults(self, caplog):
        """Test that an empty table yields defaults and a disabled reporter."""
        config = validate_graphite_config({}, cluster_name="c1")

        assert config.host == ""
        assert config.enabled is False
        assert config.port == 2003
        assert config.interval_seconds == 60.0
        assert config.timeout_seconds == 10.0
        assert config.shutdown_timeout_seconds == 5.0
        assert config.include_pattern is None
        assert config.exclude_pattern is None
        assert config.prefix == "elasticsearch.c1"
        assert "Graphite reporting will be disabled" in caplog.text

    def test_explicit_prefix_is_stripped_of_dots(self):
        config = validate_graphite_config({"host": "h", "prefix": ".es.prod."})

        assert config.prefix == "es.prod"

    @pytest.mark.parametrize("prefix", ["", "...", "es prod"])
    def test_invalid_prefix(self, prefix):
        with pytest.raises(ValidationError) as exc_info:
            validate_graphite_config({"host": "h", "prefix": prefix})

        assert exc_info.value.field_name == "metrics.graphite.prefix"

    @pytest.mark.parametrize("port", [0, 65536, "abc", True])
    def test_invalid_port(self, port):
        with pytest.raises(ValidationError) as exc_info:
            validate_graphite_config({"host": "h", "port": port})

        assert exc_info.value.field_name == "metrics.graphite.port"

    @pytest.mark.parametrize("every,seconds", [("1m", 60.0), ("500ms", 0.5), (15, 15.0)])
    def test_interval_formats(self, every, seconds):
        assert validate_graphite_config({"every": every}).interval_seconds == pytest.approx(seconds)

    def test_invalid_interval(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_graphite_config({"every": "soon"})

        assert exc_info.value.field_name == "metrics.graphite.every"

    def test_zero_interval_is_rejected(self):
        with pytest.raises(ValidationError):
            validate_graphite_config({"every": 0})

    def test_malformed_include_pattern(self):
        """Test that a malformed regex is a ConfigurationError naming the field."""
        with pytest.raises(ConfigurationError) as exc_info:
            validate_graphite_config({"host": "h", "include": "(unclosed"})

        assert exc_info.value.field_name == "metrics.graphite.include"

    def test_malformed_exclude_pattern(self):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_graphite_config({"host": "h", "exclude": "[bad"})

        assert exc_info.value.field_name == "metrics.graphite.exclude"

    def test_empty_patterns_are_unset(self):
        config = validate_graphite_config({"host": "h", "include": "", "exclude": "  "})

        assert config.include_pattern is None
        assert config.exclude_pattern is None

    def test_validation_failure_is_logged(self, caplog):
        with pytest.raises(ValidationError):
            validate_graphite_config({"port": -1})

        assert "Graphite configuration validation failed" in caplog.text
