"""
Configuration loader for Orderdesk.
Reads an optional YAML file and overlays environment variables on top.
"""

import yaml
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional
import logging

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "2025-02-01"

# (section, key) -> environment variable
ENV_OVERRIDES = {
    ('general', 'log_level'): 'ORDERDESK_LOG_LEVEL',
    ('general', 'log_file'): 'ORDERDESK_LOG_FILE',
    ('sanity', 'project_id'): 'SANITY_PROJECT_ID',
    ('sanity', 'dataset'): 'SANITY_DATASET',
    ('sanity', 'api_version'): 'SANITY_API_VERSION',
    ('sanity', 'token'): 'SANITY_API_TOKEN',
    ('sanity', 'timeout'): 'SANITY_TIMEOUT',
    ('auth', 'admin_token'): 'ORDERDESK_ADMIN_TOKEN',
    ('api', 'cors_origins'): 'ORDERDESK_CORS_ORIGINS',
    ('dashboard', 'api_base_url'): 'ORDERDESK_API_URL',
}


class ConfigError(ValueError):
    """Raised when a required configuration value is missing or invalid."""


@dataclass(frozen=True)
class StoreSettings:
    """Connection settings for the hosted content store."""
    project_id: str
    dataset: str
    api_version: str
    token: str
    timeout: int = 30


class Config:
    """Singleton configuration manager."""

    _instance: Optional['Config'] = None
    _data: dict = {}
    _project_root: Path = None

    def __new__(cls, config_path: Optional[str] = None) -> 'Config':
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._project_root = Path(__file__).resolve().parent.parent.parent
            instance._load(config_path)
            cls._instance = instance
        return cls._instance

    def _load(self, config_path: Optional[str] = None) -> None:
        """Load configuration from YAML (if present) and the environment."""
        if config_path:
            path = Path(config_path)
        elif os.getenv('ORDERDESK_CONFIG'):
            path = Path(os.environ['ORDERDESK_CONFIG'])
        else:
            path = self._project_root / "config.yaml"

        data = {}
        if path.exists():
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ConfigError(f"Configuration file must contain a mapping: {path}")
            logger.info(f"Configuration loaded from {path}")
        elif config_path:
            raise FileNotFoundError(f"Configuration file not found: {path}")

        for (section, key), env_name in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value is not None and value != '':
                data.setdefault(section, {})[key] = value

        self._data = data

    def get(self, *keys: str, default: Any = None) -> Any:
        """
        Get a nested config value.
        Example: config.get('sanity', 'dataset') -> config['sanity']['dataset']
        """
        value = self._data
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def get_int(self, *keys: str, default: int = 0) -> int:
        """Get integer value."""
        value = self.get(*keys, default=default)
        try:
            return int(value) if value is not None else default
        except (TypeError, ValueError):
            raise ConfigError(f"Expected an integer for {'.'.join(keys)}, got {value!r}")

    @property
    def store_settings(self) -> StoreSettings:
        """
        Validated content store settings.

        Raises:
            ConfigError: if the dataset, project id or token is missing
        """
        required = {
            'project_id': 'SANITY_PROJECT_ID',
            'dataset': 'SANITY_DATASET',
            'token': 'SANITY_API_TOKEN',
        }
        missing = [env for key, env in required.items() if not self.get('sanity', key)]
        if missing:
            raise ConfigError(f"Missing environment variable: {', '.join(missing)}")

        return StoreSettings(
            project_id=str(self.get('sanity', 'project_id')),
            dataset=str(self.get('sanity', 'dataset')),
            api_version=str(self.get('sanity', 'api_version', default=DEFAULT_API_VERSION)),
            token=str(self.get('sanity', 'token')),
            timeout=self.get_int('sanity', 'timeout', default=30),
        )

    @property
    def admin_token(self) -> str:
        """Bearer token required by the admin API."""
        token = self.get('auth', 'admin_token')
        if not token:
            raise ConfigError("Missing environment variable: ORDERDESK_ADMIN_TOKEN")
        return str(token)

    @property
    def cors_origins(self) -> List[str]:
        """Browser origins allowed to call the admin API; none by default."""
        value = self.get('api', 'cors_origins', default=[])
        if isinstance(value, str):
            value = value.split(',')
        return [str(origin).strip() for origin in value or [] if str(origin).strip()]

    @property
    def api_base_url(self) -> str:
        """Admin API base URL used by the dashboard."""
        return str(self.get('dashboard', 'api_base_url', default='http://localhost:8000/api')).rstrip('/')

    @property
    def project_root(self) -> Path:
        """Get project root directory."""
        return self._project_root

    @property
    def log_path(self) -> Path:
        """Get log file path."""
        log_name = self.get('general', 'log_file', default='orderdesk.log')
        return self._project_root / log_name


# Global config instance (initialized on first use)
def get_config() -> Config:
    """Get the global config instance."""
    return Config()


def reset_config() -> None:
    """Drop the global config so the next get_config() reloads it."""
    Config._instance = None
