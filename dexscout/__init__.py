"""
dexscout: Uniswap V2/V3 pair discovery and batched reserve/price reads.
"""

from .types import (
    ZERO_ADDRESS,
    PairRecord,
    PoolRecord,
    Reserves,
    Slot0,
    is_zero_address,
    unique_pairs,
)

__version__ = "0.1.0"

__all__ = [
    "ZERO_ADDRESS",
    "PairRecord",
    "PoolRecord",
    "Reserves",
    "Slot0",
    "is_zero_address",
    "unique_pairs",
]
