"""
Configuration management for dexscout.

Use get_config() to access all configuration settings.

Example:
    from dexscout.config import get_config

    config = get_config()

    # Contract addresses for a chain id (ConfigurationError if unsupported)
    deployment = config.get_deployment(1)
    weth = deployment.quote_asset

    # RPC endpoint
    rpc_url = config.chains.get_rpc_url("ethereum")

    # Scanner tuning
    step = config.scanner.SCAN_INITIAL_STEP
"""

from .base import BaseConfig, ConfigError, ConfigurationError
from .chains import (
    ETHEREUM,
    MULTICALL3_ADDRESS,
    SEPOLIA,
    ChainConfig,
    ChainDeployment,
    DeploymentRegistry,
)
from .manager import ConfigManager, get_config, reload_config
from .protocols import V3_FEE_TIERS, ProtocolConfig, ScannerConfig

__all__ = [
    "BaseConfig",
    "ConfigError",
    "ConfigurationError",
    "ChainConfig",
    "ChainDeployment",
    "DeploymentRegistry",
    "ETHEREUM",
    "SEPOLIA",
    "MULTICALL3_ADDRESS",
    "ProtocolConfig",
    "ScannerConfig",
    "V3_FEE_TIERS",
    "ConfigManager",
    "get_config",
    "reload_config",
]
