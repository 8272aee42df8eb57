"""
ERC-20 balance reads.
"""

from typing import List, Optional, Sequence

from web3 import Web3

from ..batchers.abis import BALANCE_OF
from ..batchers.base import MulticallBatcher
from ..types import is_zero_address
from .base import BaseDexClient


class ERC20Client(BaseDexClient):
    """Batched balanceOf() reads."""

    async def get_balances(
        self,
        token: str,
        holders: Sequence[str],
        batcher: Optional[MulticallBatcher] = None,
    ) -> List[int]:
        """
        token.balanceOf(holder) for each holder.

        Zero-address holders (unresolved pairs) are skipped and report 0, as
        do holders whose call reverts.
        """
        deployment = await self.get_deployment()
        batcher = self.stage_batcher(deployment, batcher)
        token = Web3.to_checksum_address(token)

        for holder in holders:
            if not is_zero_address(holder):
                batcher.add_call(token, BALANCE_OF, (Web3.to_checksum_address(holder),))

        results = iter(await batcher.flush())
        return [
            0 if is_zero_address(holder) else (next(results) or 0)
            for holder in holders
        ]

    async def get_quote_balances(self, holders: Sequence[str]) -> List[int]:
        """Quote-asset balance of each holder, e.g. the WETH held by each pair."""
        deployment = await self.get_deployment()
        return await self.get_balances(deployment.quote_asset, holders)
