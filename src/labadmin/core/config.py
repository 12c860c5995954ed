"""
Configuration management for lab administration.

Loads configuration from YAML files with environment variable overrides.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml


# Default configuration paths
DEFAULT_CONFIG_DIR = Path.home() / ".config" / "labadmin"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
SYSTEM_CONFIG_FILE = Path("/etc/labadmin/config.yaml")


@dataclass
class StoreConfig:
    """Lab store backend configuration."""

    backend: str = "sqlite"
    url: str = ""
    api_key: str = ""
    table: str = "labs"
    timeout: float = 10.0


@dataclass
class WebConfig:
    """Web interface configuration."""

    host: str = "127.0.0.1"
    port: int = 5000
    secret_key: str = "labadmin-dev-key"


@dataclass
class Config:
    """Main configuration for lab administration."""

    store: StoreConfig = field(default_factory=StoreConfig)
    web: WebConfig = field(default_factory=WebConfig)
    database_path: Path = field(
        default_factory=lambda: DEFAULT_CONFIG_DIR / "labadmin.db"
    )
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        store_data = data.get("store", {})
        web_data = data.get("web", {})

        store = StoreConfig(
            backend=store_data.get("backend", "sqlite"),
            url=store_data.get("url", ""),
            api_key=store_data.get("api_key", ""),
            table=store_data.get("table", "labs"),
            timeout=float(store_data.get("timeout", 10.0)),
        )

        web = WebConfig(
            host=web_data.get("host", "127.0.0.1"),
            port=int(web_data.get("port", 5000)),
            secret_key=web_data.get("secret_key", "labadmin-dev-key"),
        )

        return cls(
            store=store,
            web=web,
            database_path=Path(
                data.get("database_path", str(DEFAULT_CONFIG_DIR / "labadmin.db"))
            ).expanduser(),
            log_level=data.get("log_level", "INFO"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert Config to dictionary."""
        return {
            "store": {
                "backend": self.store.backend,
                "url": self.store.url,
                "api_key": self.store.api_key,
                "table": self.store.table,
                "timeout": self.store.timeout,
            },
            "web": {
                "host": self.web.host,
                "port": self.web.port,
                "secret_key": self.web.secret_key,
            },
            "database_path": str(self.database_path),
            "log_level": self.log_level,
        }


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Search order:
    1. Explicit path if provided
    2. LABADMIN_CONFIG environment variable
    3. ~/.config/labadmin/config.yaml
    4. /etc/labadmin/config.yaml
    5. Default values

    Environment variable overrides:
    - LABADMIN_STORE_BACKEND: Override store.backend
    - LABADMIN_STORE_URL: Override store.url
    - LABADMIN_STORE_API_KEY: Override store.api_key
    - LABADMIN_DATABASE_PATH: Override database_path
    - LABADMIN_LOG_LEVEL: Override log_level
    - LABADMIN_WEB_PORT: Override web.port
    - LABADMIN_SECRET_KEY: Override web.secret_key

    Args:
        config_path: Optional explicit path to config file

    Returns:
        Loaded configuration
    """
    # Determine config file path
    if config_path:
        paths_to_try = [config_path]
    else:
        env_path = os.environ.get("LABADMIN_CONFIG")
        paths_to_try = []
        if env_path:
            paths_to_try.append(Path(env_path))
        paths_to_try.extend([DEFAULT_CONFIG_FILE, SYSTEM_CONFIG_FILE])

    # Try to load from file
    config_data = {}
    for path in paths_to_try:
        if path.exists():
            try:
                with open(path) as f:
                    config_data = yaml.safe_load(f) or {}
                break
            except (OSError, yaml.YAMLError):
                continue

    config = Config.from_dict(config_data)
    return _apply_env_overrides(config)


def _apply_env_overrides(config: Config) -> Config:
    """Apply environment variable overrides to config."""
    if "LABADMIN_STORE_BACKEND" in os.environ:
        config.store.backend = os.environ["LABADMIN_STORE_BACKEND"]

    if "LABADMIN_STORE_URL" in os.environ:
        config.store.url = os.environ["LABADMIN_STORE_URL"]

    if "LABADMIN_STORE_API_KEY" in os.environ:
        config.store.api_key = os.environ["LABADMIN_STORE_API_KEY"]

    if "LABADMIN_DATABASE_PATH" in os.environ:
        config.database_path = Path(os.environ["LABADMIN_DATABASE_PATH"])

    if "LABADMIN_LOG_LEVEL" in os.environ:
        config.log_level = os.environ["LABADMIN_LOG_LEVEL"]

    if "LABADMIN_WEB_PORT" in os.environ:
        try:
            config.web.port = int(os.environ["LABADMIN_WEB_PORT"])
        except ValueError:
            pass

    if "LABADMIN_SECRET_KEY" in os.environ:
        config.web.secret_key = os.environ["LABADMIN_SECRET_KEY"]

    return config


def save_config(config: Config, path: Path) -> None:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration to save
        path: Path to save to
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        f.write("# Lab Administration Configuration\n")
        f.write("# store.backend is 'sqlite' (local file) or 'rest' (hosted backend)\n\n")
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
