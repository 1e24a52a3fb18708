"""
Unit tests for configuration loading and the cached configuration singleton.
"""

import pytest

from graphite_reporter.config import (
    build_app_config,
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    load_config,
    load_toml_file,
    set_config_path,
)
from graphite_reporter.validation import ValidationError


@pytest.mark.unit
class TestLoadConfig:
    """Test cases for load_config."""

    def test_load_from_file(self, config_file):
        config = load_config(config_file)

        assert config.cluster_name == "mycluster"
        assert config.graphite.host == "graphite.local"
        assert config.graphite.port == 2004
        assert config.graphite.interval_seconds == 30.0
        assert config.graphite.prefix == "elasticsearch.mycluster"

    def test_load_without_file_uses_defaults(self):
        config = load_config(None)

        assert config.cluster_name == "elasticsearch"
        assert config.graphite.enabled is False
        assert config.graphite.prefix == "elasticsearch.elasticsearch"

    def test_overrides_replace_file_values(self, config_file):
        config = load_config(config_file, graphite_overrides={"host": "other", "every": "5s", "port": None})

        assert config.graphite.host == "other"
        assert config.graphite.interval_seconds == 5.0
        assert config.graphite.port == 2004

    def test_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            load_config(temp_dir / "missing.toml")

    def test_invalid_value_in_file(self, temp_dir):
        config_path = temp_dir / "config.toml"
        config_path.write_text('[metrics.graphite]\nhost = "h"\nport = 70000\n')

        with pytest.raises(ValidationError):
            load_config(config_path)

    def test_malformed_toml(self, temp_dir):
        import tomllib

        config_path = temp_dir / "config.toml"
        config_path.write_text("[metrics.graphite\nhost = ")

        with pytest.raises(tomllib.TOMLDecodeError):
            load_toml_file(config_path)

    def test_build_app_config_from_dict(self):
        config = build_app_config({
            "cluster": {"name": "prod"},
            "metrics": {"graphite": {"host": "g", "prefix": "es.prod"}},
        })

        assert config.cluster_name == "prod"
        assert config.graphite.cluster_name == "prod"
        assert config.graphite.prefix == "es.prod"


@pytest.mark.unit
class TestConfigSingleton:
    """Test cases for the cached configuration."""

    def test_get_config_is_cached(self, config_file):
        set_config_path(config_file)

        first = get_config()
        second = get_config()

        assert first is second
        assert is_config_loaded()

    def test_clear_config_cache_forces_reload(self, config_file):
        set_config_path(config_file)
        first = get_config()

        clear_config_cache()

        assert not is_config_loaded()
        assert get_config() is not first

    def test_set_config_path_drops_cache(self, config_file, temp_dir):
        set_config_path(config_file)
        get_config()

        other = temp_dir / "other.toml"
        other.write_text('[cluster]\nname = "second"\n')
        set_config_path(other)

        assert get_config().cluster_name == "second"

    def test_get_config_info(self, config_file):
        clear_config_cache()
        assert get_config_info()["config_loaded"] is False

        set_config_path(config_file)
        get_config()
        info = get_config_info()

        assert info == {
            "config_loaded": True,
            "config_path": str(config_file),
            "cluster_name": "mycluster",
            "graphite_enabled": True,
        }
