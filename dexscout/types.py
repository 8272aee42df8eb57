"""
Core types shared across dexscout.

Addresses are EIP-55 checksum strings. Ordering between addresses is numeric,
which is the same as the byte-wise ordering Uniswap uses to sort pair tokens.
"""

from typing import Iterable, List, NamedTuple, Optional

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def address_to_int(address: str) -> int:
    return int(address, 16)


def is_zero_address(address: Optional[str]) -> bool:
    """True for None and for the all-zero 'no pair/pool' sentinel."""
    return address is None or address_to_int(address) == 0


def address_lt(a: str, b: str) -> bool:
    """Numeric address ordering, a < b."""
    return address_to_int(a) < address_to_int(b)


class PairRecord(NamedTuple):
    """A V2 PairCreated log: (token0, token1, pair)."""

    token0: str
    token1: str
    pair: str


class PoolRecord(NamedTuple):
    """A V3 PoolCreated log: (token0, token1, fee, pool)."""

    token0: str
    token1: str
    fee: int
    pool: str


class Reserves(NamedTuple):
    """Raw getReserves() output in pair order (token0, token1)."""

    reserve0: int
    reserve1: int

    @property
    def is_empty(self) -> bool:
        return self.reserve0 == 0 or self.reserve1 == 0


EMPTY_RESERVES = Reserves(0, 0)


class Slot0(NamedTuple):
    """Uniswap V3 pool slot0() state."""

    sqrt_price_x96: int
    tick: int
    observation_index: int
    observation_cardinality: int
    observation_cardinality_next: int
    fee_protocol: int
    unlocked: bool


def unique_pairs(records: Iterable[PairRecord]) -> List[PairRecord]:
    """
    Drop repeated pair addresses, keeping first-seen order.

    The scanner queries both topic positions and never dedupes; callers that
    want one record per pair use this.
    """
    seen = set()
    unique = []
    for record in records:
        key = record.pair.lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)
    return unique
