"""
Configuration manager for dexscout.

Combines the base, chain, protocol and scanner configuration classes behind
a single object, with a lazily created process-wide instance.
"""

import logging
from typing import Any, Dict, Optional

from .base import BaseConfig, ConfigError
from .chains import ChainConfig, ChainDeployment
from .protocols import ProtocolConfig, ScannerConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """Centralized access to every dexscout configuration section."""

    def __init__(self, environment: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            environment: Override the environment (local, dev, test, staging, production)
        """
        self._environment = environment
        self._base_config = None
        self._chain_config = None
        self._protocol_config = None
        self._scanner_config = None
        self._initialize_configs()

    def _initialize_configs(self):
        """Initialize all configuration objects."""
        try:
            self._base_config = BaseConfig()
            if self._environment:
                self._base_config.ENVIRONMENT = self._environment
                self._base_config._validate_config()
            self._base_config.setup_logging()

            self._chain_config = ChainConfig()
            self._protocol_config = ProtocolConfig()
            self._scanner_config = ScannerConfig()

            logger.debug(f"Configuration initialized for environment: {self.environment}")

        except ConfigError:
            raise
        except Exception as e:
            logger.error(f"Failed to initialize configuration: {e}")
            raise ConfigError(f"Configuration initialization failed: {e}")

    @property
    def environment(self) -> str:
        return self._base_config.ENVIRONMENT

    @property
    def base(self) -> BaseConfig:
        return self._base_config

    @property
    def chains(self) -> ChainConfig:
        return self._chain_config

    @property
    def protocols(self) -> ProtocolConfig:
        return self._protocol_config

    @property
    def scanner(self) -> ScannerConfig:
        return self._scanner_config

    def get_deployment(self, chain_id: int) -> ChainDeployment:
        """Shortcut for chains.get_deployment; raises ConfigurationError."""
        return self.chains.get_deployment(chain_id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert all configurations to dictionary format."""
        return {
            "environment": self.environment,
            "base": self.base.to_dict(),
            "chains": {
                "default_chain": self.chains.DEFAULT_CHAIN,
                "chain_ids": self.chains.registry.chain_ids,
            },
            "protocols": self.protocols.to_dict(),
            "scanner": self.scanner.to_dict(),
        }

    def __repr__(self) -> str:
        return f"ConfigManager(environment={self.environment})"


# Global configuration manager instance
_config_manager = None


def get_config(environment: Optional[str] = None, force_reload: bool = False) -> ConfigManager:
    """
    Get the global configuration manager instance.

    Args:
        environment: Override environment
        force_reload: Force reload of configuration

    Returns:
        ConfigManager instance
    """
    global _config_manager

    if _config_manager is None or force_reload:
        _config_manager = ConfigManager(environment=environment)

    return _config_manager


def reload_config(environment: Optional[str] = None) -> ConfigManager:
    """Reload the global configuration manager."""
    return get_config(environment=environment, force_reload=True)
