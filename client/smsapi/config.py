"""
Client configuration

SmsApiConfig holds the credential triple (API key, API secret, base URL) used
by one client instance. It is immutable once built, so clients with different
credentials can coexist in the same process.
"""

import json
import os
from dataclasses import dataclass, asdict, field
from typing import Dict, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30.0


def default_config_path() -> str:
    """Resolve the config file path (SMSAPI_CONFIG, then XDG locations)"""
    config_path = os.environ.get("SMSAPI_CONFIG")
    if config_path:
        return config_path

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        return os.path.join(xdg_config_home, "smsapi", "config.json")

    home = os.environ.get("HOME")
    if home:
        return os.path.join(home, ".config", "smsapi", "config.json")

    return os.path.join(os.getcwd(), ".config", "smsapi", "config.json")


@dataclass(frozen=True)
class SmsApiConfig:
    """Credentials and settings for one SMS API client"""

    api_key: str
    api_secret: str = field(repr=False)
    base_url: str
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        missing = [
            name
            for name, value in [
                ("api_key", self.api_key),
                ("api_secret", self.api_secret),
                ("base_url", self.base_url),
            ]
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Missing required config field(s): {', '.join(missing)}")

        try:
            timeout = float(self.timeout)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid timeout: {self.timeout!r}")
        if timeout <= 0:
            raise ConfigurationError(f"Timeout must be positive, got {self.timeout!r}")

        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "timeout", timeout)
        if not self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", self.base_url + "/")

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "SmsApiConfig":
        """
        Build a config from environment variables

        Args:
            env_file: Optional path to a .env file loaded before reading the
                environment. Variables already set in the process win.

        Returns:
            SmsApiConfig: Configuration object
        """
        if env_file is not None:
            if not os.path.exists(env_file):
                raise ConfigurationError(f"Env file not found: {env_file}")
            load_dotenv(env_file, override=False)

        timeout = os.environ.get("SMSAPI_TIMEOUT") or DEFAULT_TIMEOUT
        return cls(
            api_key=os.environ.get("API_KEY", ""),
            api_secret=os.environ.get("API_SECRET", ""),
            base_url=os.environ.get("URL", ""),
            timeout=timeout,
        )

    @classmethod
    def from_file(cls, config_path: Optional[str] = None) -> "SmsApiConfig":
        """
        Build a config from a JSON file

        Args:
            config_path: Path to the configuration file. Defaults to
                SMSAPI_CONFIG or the XDG config location.

        Returns:
            SmsApiConfig: Configuration object
        """
        if config_path is None:
            config_path = default_config_path()

        if not os.path.exists(config_path):
            raise ConfigurationError(f"Config file not found: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Config file is not valid JSON: {config_path}: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Config file must contain a JSON object: {config_path}")

        required_fields = ['api_key', 'api_secret', 'base_url']
        for name in required_fields:
            if name not in config_data:
                raise ConfigurationError(f"Missing required config field: {name}")

        logger.debug(f"Loaded config from {config_path}")
        return cls(
            api_key=config_data['api_key'],
            api_secret=config_data['api_secret'],
            base_url=config_data['base_url'],
            timeout=config_data.get('timeout', DEFAULT_TIMEOUT),
        )

    def to_dict(self, include_secret: bool = False) -> Dict:
        """Serializable view of the config; the secret is masked by default"""
        data = asdict(self)
        if not include_secret:
            data["api_secret"] = "***"
        return data
