"""
Uniswap V3 pool resolution and slot state.

Each token is checked against the quote asset at every fee tier in
V3_FEE_TIERS, giving one fixed-size group of pool addresses per token.
Only the raw slot0() state is read here; turning it into a quote-asset price
is left to callers.
"""

from typing import List, Optional, Sequence

from web3 import Web3

from ..batchers.abis import GET_POOL, SLOT0
from ..batchers.base import MulticallBatcher
from ..config.protocols import V3_FEE_TIERS
from ..types import ZERO_ADDRESS, Slot0, is_zero_address
from .base import BaseDexClient


class UniswapV3Client(BaseDexClient):
    """Reads Uniswap V3 factory and pool state for a list of tokens."""

    fee_tiers = V3_FEE_TIERS

    async def get_quote_pools(
        self, tokens: Sequence[str], batcher: Optional[MulticallBatcher] = None
    ) -> List[List[str]]:
        """
        Token/quote pools at every fee tier.

        Returns:
            One list per token; slot j holds the pool for fee_tiers[j], or
            ZERO_ADDRESS if that pool was never created
        """
        deployment = await self.get_deployment()
        batcher = self.stage_batcher(deployment, batcher)

        for token in tokens:
            token = Web3.to_checksum_address(token)
            for fee in self.fee_tiers:
                batcher.add_call(deployment.v3_factory, GET_POOL, (token, deployment.quote_asset, fee))

        pools = [
            ZERO_ADDRESS if is_zero_address(pool) else Web3.to_checksum_address(pool)
            for pool in await batcher.flush()
        ]

        group_size = len(self.fee_tiers)
        groups = [pools[i : i + group_size] for i in range(0, len(pools), group_size)]
        for token, group in zip(tokens, groups):
            self.logger.debug(f"Fee-tier pools for {token}: {group}")
        return groups

    async def get_slot0(
        self, pool_groups: Sequence[Sequence[str]], batcher: Optional[MulticallBatcher] = None
    ) -> List[List[Optional[Slot0]]]:
        """
        slot0() for every non-zero pool, shaped like pool_groups.

        Zero-address pools and pools whose call reverts are None.
        """
        deployment = await self.get_deployment()
        batcher = self.stage_batcher(deployment, batcher)

        for group in pool_groups:
            for pool in group:
                if not is_zero_address(pool):
                    batcher.add_call(pool, SLOT0)

        results = iter(await batcher.flush())

        states: List[List[Optional[Slot0]]] = []
        for group in pool_groups:
            group_states: List[Optional[Slot0]] = []
            for pool in group:
                if is_zero_address(pool):
                    group_states.append(None)
                    continue
                result = next(results)
                group_states.append(None if result is None else Slot0(*result))
            states.append(group_states)
        return states
