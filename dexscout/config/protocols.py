"""
Protocol-specific configuration for dexscout.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from .base import BaseConfig, ConfigError

# Uniswap V3 fee tiers queried per token, in this order: 0.05%, 0.3%, 1%
V3_FEE_TIERS: Tuple[int, ...] = (500, 3000, 10000)


@dataclass
class ProtocolConfig(BaseConfig):
    """Event signatures and fee tiers for Uniswap V2/V3."""

    # Event Hashes (these are standard across chains)
    UNISWAP_V2_PAIR_CREATED_SIGNATURE: str = "PairCreated(address,address,address,uint256)"
    UNISWAP_V2_PAIR_CREATED_EVENT: str = (
        "0x0d3648bd0f6ba80134a33ba9275ac585d9d315f0ad8355cddefde31afa28d0e9"
    )
    UNISWAP_V3_POOL_CREATED_SIGNATURE: str = "PoolCreated(address,address,uint24,int24,address)"
    UNISWAP_V3_POOL_CREATED_EVENT: str = (
        "0x783cca1c0412dd0d695e784568c96da2e9c22ff989357a2e8b1d9b2b4e6b7118"
    )

    @property
    def fee_tiers(self) -> Tuple[int, ...]:
        return V3_FEE_TIERS

    def get_event_hash(self, event_type: str) -> str:
        """Get event hash for a specific event type."""
        event_map: Dict[str, str] = {
            "uniswap_v2_pair_created": self.UNISWAP_V2_PAIR_CREATED_EVENT,
            "uniswap_v3_pool_created": self.UNISWAP_V3_POOL_CREATED_EVENT,
        }
        if event_type not in event_map:
            raise ValueError(f"Unknown event type: {event_type}")
        return event_map[event_type]


@dataclass
class ScannerConfig(BaseConfig):
    """Tuning knobs for the adaptive log scanner and the multicall batcher."""

    SCAN_INITIAL_STEP: int = BaseConfig.get_env_int("SCAN_INITIAL_STEP", 1_000_000)
    SCAN_GROWTH_FACTOR: int = BaseConfig.get_env_int("SCAN_GROWTH_FACTOR", 2)
    SCAN_SHRINK_FACTOR: int = BaseConfig.get_env_int("SCAN_SHRINK_FACTOR", 10)
    SCAN_MIN_STEP: int = BaseConfig.get_env_int("SCAN_MIN_STEP", 1)
    SCAN_MAX_CONSECUTIVE_FAILURES: int = BaseConfig.get_env_int(
        "SCAN_MAX_CONSECUTIVE_FAILURES", 20
    )
    SCAN_RATE_LIMIT_BACKOFF: bool = BaseConfig.get_env_bool("SCAN_RATE_LIMIT_BACKOFF", True)

    MULTICALL_BATCH_SIZE: int = BaseConfig.get_env_int("MULTICALL_BATCH_SIZE", 500)

    def _validate_config(self):
        super()._validate_config()
        if self.SCAN_INITIAL_STEP < 1:
            raise ConfigError(f"SCAN_INITIAL_STEP must be >= 1, got: {self.SCAN_INITIAL_STEP}")
        if self.SCAN_GROWTH_FACTOR < 1:
            raise ConfigError(f"SCAN_GROWTH_FACTOR must be >= 1, got: {self.SCAN_GROWTH_FACTOR}")
        if self.SCAN_SHRINK_FACTOR < 2:
            raise ConfigError(f"SCAN_SHRINK_FACTOR must be >= 2, got: {self.SCAN_SHRINK_FACTOR}")
        if self.SCAN_MIN_STEP < 1:
            raise ConfigError(f"SCAN_MIN_STEP must be >= 1, got: {self.SCAN_MIN_STEP}")
        if self.SCAN_MAX_CONSECUTIVE_FAILURES < 1:
            raise ConfigError(
                "SCAN_MAX_CONSECUTIVE_FAILURES must be >= 1, "
                f"got: {self.SCAN_MAX_CONSECUTIVE_FAILURES}"
            )
        if self.MULTICALL_BATCH_SIZE < 1:
            raise ConfigError(f"MULTICALL_BATCH_SIZE must be >= 1, got: {self.MULTICALL_BATCH_SIZE}")
