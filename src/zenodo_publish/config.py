import logging
import os
from typing import Any, Optional

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

ZENODO_TOKEN_SANDBOX = "zenodo_token_sandbox"
ZENODO_TOKEN_PRODUCTION = "zenodo_token_production"
ZENODO_TIMEOUT = "zenodo_timeout"


class ConfigService:
    """Read application values from the environment or a YAML file.

    Environment variables win over the file; a key ``zenodo_token_sandbox``
    is looked up as ``ZENODO_TOKEN_SANDBOX``.
    """

    def __init__(self, config_file: Optional[str] = None):
        self.config_file = config_file or os.getenv("ZENODO_CONFIG")
        self.values: dict[str, Any] = {}

        if self.config_file:
            try:
                with open(self.config_file, encoding="utf-8") as f:
                    self.values = yaml.safe_load(f) or {}
                logger.info("Loaded configuration from %s", self.config_file)

            except (OSError, yaml.YAMLError) as e:
                raise ConfigError(f"Could not read configuration file {self.config_file}: {e}") from e

            if not isinstance(self.values, dict):
                raise ConfigError(f"Configuration file {self.config_file} must contain a mapping")

    def get_app_value(self, key: str, default: str = "") -> str:
        """Return the value stored under ``key`` as a stripped string."""
        value = os.getenv(key.upper())
        if value is None:
            value = self.values.get(key)
        if value is None:
            return default
        return str(value).strip()
