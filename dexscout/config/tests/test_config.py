"""
Test suite for the configuration system.

Tests deployment lookup, event hashes and scanner tuning validation.
"""
from unittest.mock import patch

import pytest
from web3 import Web3

from dexscout.config import (
    ETHEREUM,
    MULTICALL3_ADDRESS,
    SEPOLIA,
    ChainConfig,
    ChainDeployment,
    ConfigError,
    ConfigManager,
    ConfigurationError,
    DeploymentRegistry,
    ProtocolConfig,
    ScannerConfig,
    V3_FEE_TIERS,
    get_config,
    reload_config,
)


class TestConfigurationSystem:
    """Test suite for the configuration manager."""

    @pytest.fixture(scope="class")
    def config(self):
        """Provide configuration instance for tests."""
        return get_config()

    def test_config_loads_successfully(self, config):
        """Test that configuration loads without errors."""
        assert config is not None
        assert config.environment in ["local", "dev", "test", "staging", "production"]

    def test_reload_config_replaces_instance(self, config):
        reloaded = reload_config(environment="test")
        assert reloaded is not config
        assert reloaded.environment == "test"
        assert get_config() is reloaded

    def test_get_deployment_shortcut(self, config):
        assert config.get_deployment(1) is config.chains.registry.get(1)

    def test_rpc_urls_for_supported_chains(self, config):
        for chain_name in ["ethereum", "sepolia"]:
            assert config.chains.get_rpc_url(chain_name).startswith("http")

    def test_unknown_rpc_chain_raises(self, config):
        with pytest.raises(ConfigurationError):
            config.chains.get_rpc_url("solana")

    def test_to_dict_lists_chain_ids(self, config):
        summary = config.to_dict()
        assert summary["chains"]["chain_ids"] == [1, 11155111]
        assert "SCAN_INITIAL_STEP" in summary["scanner"]


class TestDeploymentRegistry:
    """Chain id lookups."""

    def test_known_chains(self):
        registry = DeploymentRegistry()
        assert registry.get(1) is ETHEREUM
        assert registry.get(11155111) is SEPOLIA
        assert registry.chain_ids == [1, 11155111]

    def test_mainnet_addresses(self):
        assert ETHEREUM.quote_asset == "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
        assert ETHEREUM.v2_factory == "0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f"
        assert ETHEREUM.v3_factory == "0x1F98431c8aD98523631AE4a59f267346ea31F984"
        assert ETHEREUM.multicall == MULTICALL3_ADDRESS

    def test_unsupported_chain_raises(self):
        registry = DeploymentRegistry()
        with pytest.raises(ConfigurationError) as exc_info:
            registry.get(56)
        assert exc_info.value.chain_id == 56
        assert "Unsupported chain id: 56" in str(exc_info.value)

    def test_register_new_chain(self):
        registry = DeploymentRegistry(deployments=())
        deployment = ChainDeployment(
            chain_id=31337,
            name="anvil",
            quote_asset="0x" + "11" * 20,
            v2_factory="0x" + "22" * 20,
            v2_router="0x" + "33" * 20,
            v3_factory="0x" + "44" * 20,
        )
        registry.register(deployment)

        assert registry.get(31337) is deployment
        assert registry.by_name("ANVIL") is deployment
        # Addresses are normalised to checksum form
        assert deployment.quote_asset == Web3.to_checksum_address("0x" + "11" * 20)

    def test_unknown_name_raises(self):
        with pytest.raises(ConfigurationError):
            DeploymentRegistry().by_name("polygon")


class TestProtocolConfig:
    """Event hashes and fee tiers."""

    def test_event_hashes_match_signatures(self):
        protocols = ProtocolConfig()
        v2 = Web3.keccak(text=protocols.UNISWAP_V2_PAIR_CREATED_SIGNATURE).hex()
        v3 = Web3.keccak(text=protocols.UNISWAP_V3_POOL_CREATED_SIGNATURE).hex()

        assert v2.removeprefix("0x") == protocols.get_event_hash("uniswap_v2_pair_created")[2:]
        assert v3.removeprefix("0x") == protocols.get_event_hash("uniswap_v3_pool_created")[2:]

    def test_unknown_event_type(self):
        with pytest.raises(ValueError, match="Unknown event type"):
            ProtocolConfig().get_event_hash("uniswap_v4_initialize")

    def test_fee_tiers(self):
        assert ProtocolConfig().fee_tiers == V3_FEE_TIERS == (500, 3000, 10000)


class TestScannerConfig:
    """Scanner tuning validation."""

    def test_defaults(self):
        config = ScannerConfig(
            SCAN_INITIAL_STEP=1_000_000,
            SCAN_GROWTH_FACTOR=2,
            SCAN_SHRINK_FACTOR=10,
        )
        assert config.SCAN_MIN_STEP >= 1
        assert config.SCAN_MAX_CONSECUTIVE_FAILURES >= 1

    @pytest.mark.parametrize(
        "overrides",
        [
            {"SCAN_INITIAL_STEP": 0},
            {"SCAN_GROWTH_FACTOR": 0},
            {"SCAN_SHRINK_FACTOR": 1},
            {"SCAN_MIN_STEP": 0},
            {"SCAN_MAX_CONSECUTIVE_FAILURES": 0},
            {"MULTICALL_BATCH_SIZE": 0},
        ],
    )
    def test_invalid_values_rejected(self, overrides):
        with pytest.raises(ConfigError):
            ScannerConfig(**overrides)

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ConfigError, match="Invalid log level"):
            ScannerConfig(LOG_LEVEL="LOUD")


class TestLoggingSetup:
    """Root logging is configured by the manager, never by config sections."""

    def test_config_sections_leave_logging_alone(self):
        with patch("dexscout.config.base.logging.basicConfig") as basic_config:
            ScannerConfig()
            ProtocolConfig()
            ChainConfig()
        basic_config.assert_not_called()

    def test_config_manager_applies_log_level(self):
        with patch("dexscout.config.base.logging.basicConfig") as basic_config:
            ConfigManager()
        basic_config.assert_called_once()
        assert isinstance(basic_config.call_args.kwargs["level"], int)
