"""
ConfigLoader module for loading and validating TOML configuration files
"""

import os
import tomllib
import uuid
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, Any

DEFAULT_BASE_URL = 'https://api.twitch.tv/kraken/'
DEFAULT_API_VERSION = 2
DEFAULT_TIMEOUT_SECONDS = 30.0

DEFAULT_PAGINATION = {
    'max_page_size': 100,
    'max_pages': 10000,
}

DEFAULT_RATE_LIMITS = {
    'enabled': True,
    'min_interval_seconds': 1.0,
}


class ConfigurationError(Exception):
    """Raised when configuration is invalid or incomplete"""
    pass


class EnvironmentError(Exception):
    """Raised when required environment variables are missing"""
    pass


def generate_client_id() -> str:
    """Random client identifier used when none is configured"""
    return f"Kappa-{uuid.uuid4()}"


@dataclass
class APIConfig:
    """Configuration data class for the Twitch API adapter"""
    name: str
    base_url: str = DEFAULT_BASE_URL
    client_id: str = field(default_factory=generate_client_id)
    api_version: int = DEFAULT_API_VERSION
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    pagination: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_PAGINATION))
    rate_limits: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_RATE_LIMITS))
    logging: Dict[str, Any] = field(default_factory=dict)

    @property
    def max_page_size(self) -> int:
        return int(self.pagination.get('max_page_size', DEFAULT_PAGINATION['max_page_size']))

    @property
    def max_pages(self) -> int:
        return int(self.pagination.get('max_pages', DEFAULT_PAGINATION['max_pages']))

    @property
    def accept_header(self) -> str:
        return f"application/vnd.twitchtv.v{self.api_version}+json"


class ConfigLoader:
    """Loads and validates TOML configuration files"""

    # Required configuration sections and their mandatory keys
    REQUIRED_SECTIONS = {
        'api': ['name'],
    }

    # Optional sections merged over their defaults
    OPTIONAL_SECTIONS = {
        'pagination': DEFAULT_PAGINATION,
        'rate_limits': DEFAULT_RATE_LIMITS,
        'logging': {},
    }

    @staticmethod
    def load_toml_config(config_path: Path) -> APIConfig:
        """
        Load API configuration from TOML file

        Args:
            config_path: Path to the TOML configuration file

        Returns:
            APIConfig object with all configuration data

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If required configuration is missing or TOML is invalid
            EnvironmentError: If the client id environment variable is not set
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'rb') as f:
                config_data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML syntax in {config_path}: {e}")

        ConfigLoader._validate_required_sections(config_data)

        api_section = config_data['api']
        sections = {
            name: {**defaults, **config_data.get(name, {})}
            for name, defaults in ConfigLoader.OPTIONAL_SECTIONS.items()
        }

        return APIConfig(
            name=api_section['name'],
            base_url=api_section.get('base_url', DEFAULT_BASE_URL),
            client_id=ConfigLoader._resolve_client_id(api_section),
            api_version=int(api_section.get('api_version', DEFAULT_API_VERSION)),
            timeout_seconds=float(api_section.get('timeout_seconds', DEFAULT_TIMEOUT_SECONDS)),
            pagination=sections['pagination'],
            rate_limits=sections['rate_limits'],
            logging=sections['logging'],
        )

    @staticmethod
    def default_config() -> APIConfig:
        """Build a configuration using defaults for every setting"""
        return APIConfig(name='twitch')

    @staticmethod
    def _validate_required_sections(config_data: Dict[str, Any]) -> None:
        """
        Validate that all required configuration sections and keys are present

        Raises:
            ConfigurationError: If any required section or key is missing
        """
        missing_items = []

        for section_name, required_keys in ConfigLoader.REQUIRED_SECTIONS.items():
            if section_name not in config_data:
                missing_items.append(f"Section [{section_name}]")
            else:
                section_data = config_data[section_name]
                for key in required_keys:
                    if key not in section_data:
                        missing_items.append(f"Key '{key}' in section [{section_name}]")

        if missing_items:
            raise ConfigurationError(
                f"Missing required configuration items: {', '.join(missing_items)}"
            )

    @staticmethod
    def _resolve_client_id(api_section: Dict[str, Any]) -> str:
        if api_section.get('client_id'):
            return api_section['client_id']

        env_var_name = api_section.get('client_id_env')
        if env_var_name:
            return ConfigLoader.get_environment_value(env_var_name)

        return generate_client_id()

    @staticmethod
    def get_environment_value(env_var_name: str) -> str:
        """
        Get environment variable value with proper error handling

        Raises:
            EnvironmentError: If environment variable is not set
        """
        value = os.getenv(env_var_name)
        if value is None:
            raise EnvironmentError(f"Environment variable '{env_var_name}' is not set")
        return value
