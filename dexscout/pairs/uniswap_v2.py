"""
Uniswap V2 pair resolution, reserves and quote-asset pricing.

Every stage queues its reads on a MulticallBatcher and flushes once. Pairs
that do not exist (the zero address) are never sent to the node; their
positions are filled with zero placeholders so outputs always line up with
the caller's token list.
"""

from typing import List, NamedTuple, Optional, Sequence, Tuple

from web3 import Web3

from ..batchers.abis import GET_AMOUNT_OUT, GET_PAIR, GET_RESERVES
from ..batchers.base import MulticallBatcher
from ..batchers.errors import ValidationError
from ..types import EMPTY_RESERVES, ZERO_ADDRESS, Reserves, address_lt, is_zero_address
from .base import BaseDexClient


class V2Quote(NamedTuple):
    """Result of pricing one token against the quote asset."""

    token: str
    pair: str
    reserves: Reserves
    amount_out: int


def order_reserves(reserves: Reserves, token: str, quote_asset: str) -> Tuple[int, int]:
    """
    (quote reserve, token reserve) for a token/quote pair.

    Uniswap stores reserves sorted by token address, so the quote asset holds
    reserve0 exactly when its address is the smaller one.
    """
    reserves = Reserves(*reserves)
    if address_lt(quote_asset, token):
        return reserves.reserve0, reserves.reserve1
    return reserves.reserve1, reserves.reserve0


def quote_reserves(reserves: Sequence[Reserves], tokens: Sequence[str], quote_asset: str) -> List[int]:
    """The quote-asset side of each pair's reserves, aligned with tokens."""
    if len(reserves) != len(tokens):
        raise ValidationError(f"Got {len(reserves)} reserves for {len(tokens)} tokens")
    return [order_reserves(reserve, token, quote_asset)[0] for reserve, token in zip(reserves, tokens)]


class UniswapV2Client(BaseDexClient):
    """Reads Uniswap V2 factory, pair and router state for a list of tokens."""

    async def get_quote_pairs(
        self, tokens: Sequence[str], batcher: Optional[MulticallBatcher] = None
    ) -> List[str]:
        """
        The token/quote pair address for each token.

        Args:
            tokens: Token addresses
            batcher: Optional empty batcher; a fresh one is used otherwise

        Returns:
            One pair address per token, ZERO_ADDRESS where no pair exists
        """
        deployment = await self.get_deployment()
        batcher = self.stage_batcher(deployment, batcher)

        for token in tokens:
            batcher.add_call(
                deployment.v2_factory,
                GET_PAIR,
                (Web3.to_checksum_address(token), deployment.quote_asset),
            )

        pairs = await batcher.flush()
        resolved = [ZERO_ADDRESS if is_zero_address(pair) else Web3.to_checksum_address(pair) for pair in pairs]

        self.logger.debug(
            f"Resolved {sum(not is_zero_address(p) for p in resolved)}/{len(tokens)} V2 pairs"
        )
        return resolved

    async def get_reserves(
        self, pairs: Sequence[str], batcher: Optional[MulticallBatcher] = None
    ) -> List[Reserves]:
        """
        getReserves() for each pair, in raw (reserve0, reserve1) order.

        Zero-address pairs are skipped and come back as Reserves(0, 0). A pair
        whose call reverts is reported the same way.
        """
        deployment = await self.get_deployment()
        batcher = self.stage_batcher(deployment, batcher)

        for pair in pairs:
            if not is_zero_address(pair):
                batcher.add_call(pair, GET_RESERVES)

        results = iter(await batcher.flush())

        pair_reserves: List[Reserves] = []
        for pair in pairs:
            if is_zero_address(pair):
                pair_reserves.append(EMPTY_RESERVES)
                continue
            result = next(results)
            if result is None:
                self.logger.warning(f"getReserves() failed for pair {pair}")
                pair_reserves.append(EMPTY_RESERVES)
                continue
            reserve0, reserve1, _block_timestamp_last = result
            pair_reserves.append(Reserves(reserve0, reserve1))

        return pair_reserves

    async def get_quote_reserves(self, reserves: Sequence[Reserves], tokens: Sequence[str]) -> List[int]:
        """Quote-asset side of each pair's reserves for this chain's quote asset."""
        deployment = await self.get_deployment()
        return quote_reserves(reserves, tokens, deployment.quote_asset)

    async def get_prices_in_quote(
        self,
        reserves: Sequence[Reserves],
        tokens: Sequence[str],
        amount_in: int,
        batcher: Optional[MulticallBatcher] = None,
    ) -> List[int]:
        """
        Token amount received for amount_in of the quote asset, per pair.

        Uses the router's constant-product getAmountOut(amount_in, reserve_in,
        reserve_out) with the quote reserve as reserve_in. Pairs with empty
        reserves are not queried and price at 0.

        Args:
            reserves: Raw (reserve0, reserve1) pairs aligned with tokens (see get_reserves)
            tokens: Token addresses
            amount_in: Quote-asset amount in base units
            batcher: Optional empty batcher

        Returns:
            One amount per token, 0 where the token has no priced pair
        """
        if len(reserves) != len(tokens):
            raise ValidationError(f"Got {len(reserves)} reserves for {len(tokens)} tokens")
        if amount_in < 0:
            raise ValidationError(f"amount_in must be non-negative, got {amount_in}")
        reserves = [Reserves(*reserve) for reserve in reserves]

        deployment = await self.get_deployment()
        batcher = self.stage_batcher(deployment, batcher)

        for reserve, token in zip(reserves, tokens):
            if reserve.is_empty:
                continue
            reserve_in, reserve_out = order_reserves(reserve, token, deployment.quote_asset)
            self.logger.debug(
                f"Pricing {token}: (amount_in, reserve_in, reserve_out) = "
                f"({amount_in}, {reserve_in}, {reserve_out})"
            )
            batcher.add_call(deployment.v2_router, GET_AMOUNT_OUT, (amount_in, reserve_in, reserve_out))

        amounts_out = iter(await batcher.flush())

        # account for skipped calls
        prices: List[int] = []
        for reserve in reserves:
            if reserve.is_empty:
                prices.append(0)
                continue
            amount = next(amounts_out)
            prices.append(0 if amount is None else amount)

        return prices

    async def price_tokens(self, tokens: Sequence[str], amount_in: int) -> List[V2Quote]:
        """Resolve pairs, fetch reserves and price every token in three round trips."""
        pairs = await self.get_quote_pairs(tokens)
        reserves = await self.get_reserves(pairs)
        amounts = await self.get_prices_in_quote(reserves, tokens, amount_in)
        return [
            V2Quote(token=Web3.to_checksum_address(token), pair=pair, reserves=reserve, amount_out=amount)
            for token, pair, reserve, amount in zip(tokens, pairs, reserves, amounts)
        ]
