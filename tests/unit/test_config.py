"""Unit tests for configuration management."""

from pathlib import Path

from labadmin.core.config import (
    Config,
    StoreConfig,
    WebConfig,
    load_config,
    save_config,
)


class TestStoreConfig:
    """Tests for StoreConfig dataclass."""

    def test_default_values(self):
        """Test default store configuration."""
        config = StoreConfig()
        assert config.backend == "sqlite"
        assert config.url == ""
        assert config.table == "labs"
        assert config.timeout == 10.0


class TestWebConfig:
    """Tests for WebConfig dataclass."""

    def test_default_values(self):
        """Test default web configuration."""
        config = WebConfig()
        assert config.host == "127.0.0.1"
        assert config.port == 5000


class TestConfig:
    """Tests for main Config class."""

    def test_default_values(self):
        """Test default configuration values."""
        config = Config()
        assert isinstance(config.store, StoreConfig)
        assert isinstance(config.web, WebConfig)
        assert config.log_level == "INFO"
        assert config.database_path.name == "labadmin.db"

    def test_from_dict_empty(self):
        """Test creating config from empty dict uses defaults."""
        config = Config.from_dict({})
        assert config.store.backend == "sqlite"
        assert config.web.port == 5000

    def test_from_dict_custom_values(self):
        """Test creating config from dict with custom values."""
        data = {
            "store": {
                "backend": "rest",
                "url": "https://project.example.co",
                "api_key": "anon-key",
                "table": "rooms",
                "timeout": 5,
            },
            "web": {
                "host": "0.0.0.0",
                "port": 8080,
                "secret_key": "s3cret",
            },
            "database_path": "/custom/db.sqlite",
            "log_level": "DEBUG",
        }
        config = Config.from_dict(data)

        assert config.store.backend == "rest"
        assert config.store.url == "https://project.example.co"
        assert config.store.api_key == "anon-key"
        assert config.store.table == "rooms"
        assert config.store.timeout == 5.0
        assert config.web.host == "0.0.0.0"
        assert config.web.port == 8080
        assert config.web.secret_key == "s3cret"
        assert config.database_path == Path("/custom/db.sqlite")
        assert config.log_level == "DEBUG"

    def test_from_dict_quoted_port(self, tmp_path):
        """Test a quoted port in YAML loads as an int."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text('web:\n  port: "8081"\n')

        config = load_config(config_file)
        assert config.web.port == 8081
        assert isinstance(config.web.port, int)

    def test_to_dict(self):
        """Test converting config to dict."""
        data = Config().to_dict()

        assert data["store"]["backend"] == "sqlite"
        assert data["web"]["port"] == 5000
        assert "database_path" in data
        assert "log_level" in data


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_default_config(self):
        """Test loading config with no file returns defaults."""
        config = load_config()
        assert isinstance(config, Config)

    def test_load_from_explicit_path(self, tmp_path):
        """Test loading config from explicit path."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            """
store:
  backend: rest
  url: https://project.example.co
log_level: WARNING
"""
        )
        config = load_config(config_file)
        assert config.store.backend == "rest"
        assert config.store.url == "https://project.example.co"
        assert config.store.table == "labs"
        assert config.log_level == "WARNING"

    def test_load_from_env_path(self, tmp_path, monkeypatch):
        """Test LABADMIN_CONFIG points at the config file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("web:\n  port: 9000\n")
        monkeypatch.setenv("LABADMIN_CONFIG", str(config_file))

        assert load_config().web.port == 9000

    def test_env_override_store(self, monkeypatch):
        """Test store environment overrides."""
        monkeypatch.setenv("LABADMIN_STORE_BACKEND", "rest")
        monkeypatch.setenv("LABADMIN_STORE_URL", "https://x.example.co")
        monkeypatch.setenv("LABADMIN_STORE_API_KEY", "k")
        config = load_config()
        assert config.store.backend == "rest"
        assert config.store.url == "https://x.example.co"
        assert config.store.api_key == "k"

    def test_env_override_database_path(self, monkeypatch, tmp_path):
        """Test LABADMIN_DATABASE_PATH environment override."""
        monkeypatch.setenv("LABADMIN_DATABASE_PATH", str(tmp_path / "x.db"))
        assert load_config().database_path == tmp_path / "x.db"

    def test_env_override_log_level(self, monkeypatch):
        """Test LABADMIN_LOG_LEVEL environment override."""
        monkeypatch.setenv("LABADMIN_LOG_LEVEL", "DEBUG")
        assert load_config().log_level == "DEBUG"

    def test_env_override_invalid_port(self, monkeypatch, tmp_path):
        """Test invalid LABADMIN_WEB_PORT is ignored."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("log_level: INFO\n")
        monkeypatch.setenv("LABADMIN_WEB_PORT", "not-a-number")
        config = load_config(config_file)
        assert config.web.port == 5000  # Default

    def test_invalid_yaml_falls_back(self, tmp_path):
        """Test an unreadable file yields defaults."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("store: [unclosed\n")
        config = load_config(config_file)
        assert config.store.backend == "sqlite"


class TestSaveConfig:
    """Tests for save_config function."""

    def test_save_config(self, tmp_path):
        """Test saving config to file."""
        config_file = tmp_path / "subdir" / "config.yaml"

        save_config(Config(), config_file)

        assert config_file.exists()
        content = config_file.read_text()
        assert "store:" in content
        assert "backend: sqlite" in content

    def test_save_and_load(self, tmp_path):
        """Test saved values are loaded back."""
        original = Config()
        original.store.table = "rooms"
        original.log_level = "ERROR"

        config_file = tmp_path / "config.yaml"
        save_config(original, config_file)
        loaded = load_config(config_file)

        assert loaded.store.table == "rooms"
        assert loaded.log_level == "ERROR"
